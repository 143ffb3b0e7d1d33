"""Dashboard order endpoints."""
import asyncio
import logging
from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Any, Dict, List, Optional
from fastapi import APIRouter, Depends, HTTPException, Request
from pydantic import BaseModel, ConfigDict

from app.api.auth import require_restaurant
from app.core.config import settings
from app.core.dependencies import get_order_persistence
from app.db.models import Restaurant
from app.services.persistence.orders import OrderPersistenceService


router = APIRouter()
logger = logging.getLogger(__name__)


class OrderStatus(str, Enum):
    """Order lifecycle status."""

    NEW = "NEW"
    ACCEPTED = "ACCEPTED"
    PREPARING = "PREPARING"
    READY = "READY"
    OUT_FOR_DELIVERY = "OUT_FOR_DELIVERY"
    COMPLETED = "COMPLETED"
    CANCELLED = "CANCELLED"


class OrderResponse(BaseModel):
    """Order response model."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    phone: str
    items: List[Dict[str, Any]]
    status: str
    delivery_type: str
    address_text: Optional[str] = None
    item_count: int
    subtotal: Decimal
    tax: Decimal
    total: Decimal
    created_at: datetime


class StatusUpdateRequest(BaseModel):
    """Status update request model."""

    status: OrderStatus


@router.get("/api/dashboard/orders", response_model=List[OrderResponse])
async def list_orders(
    request: Request,
    status: Optional[OrderStatus] = None,
    limit: int = 100,
    restaurant: Restaurant = Depends(require_restaurant),
    order_persistence: OrderPersistenceService = Depends(get_order_persistence),
):
    """Get the authenticated restaurant's orders."""
    logger.info(
        f"[DASHBOARD] Orders requested - Restaurant: {restaurant.id}, "
        f"Status: {status.value if status else 'any'}, limit: {limit}, "
        f"Client: {request.client.host if request.client else 'unknown'}"
    )

    try:
        orders = await asyncio.wait_for(
            order_persistence.list_orders(
                restaurant.id, status.value if status else None, limit=limit
            ),
            timeout=settings.storage_timeout_seconds,
        )
    except Exception as e:
        logger.error(
            f"[DASHBOARD] Error fetching orders - Restaurant: {restaurant.id}, "
            f"Error: {type(e).__name__}: {str(e)}",
            exc_info=True,
        )
        raise HTTPException(status_code=503, detail="Could not load orders, please retry")

    logger.info(f"[DASHBOARD] Found {len(orders)} orders - Restaurant: {restaurant.id}")
    return [OrderResponse.model_validate(order) for order in orders]


@router.patch("/api/dashboard/orders/{order_id}/status")
async def update_order_status(
    order_id: int,
    update: StatusUpdateRequest,
    restaurant: Restaurant = Depends(require_restaurant),
    order_persistence: OrderPersistenceService = Depends(get_order_persistence),
):
    """Change the status of one of the authenticated restaurant's orders."""
    try:
        rows_affected = await asyncio.wait_for(
            order_persistence.update_order_status(
                order_id, restaurant.id, update.status.value
            ),
            timeout=settings.storage_timeout_seconds,
        )
    except Exception as e:
        logger.error(
            f"[DASHBOARD] Error updating order {order_id} - Restaurant: {restaurant.id}, "
            f"Error: {type(e).__name__}: {str(e)}",
            exc_info=True,
        )
        raise HTTPException(status_code=503, detail="Could not update order, please retry")

    if rows_affected == 0:
        raise HTTPException(status_code=404, detail=f"Order {order_id} not found")

    logger.info(
        f"[DASHBOARD] Order {order_id} -> {update.status.value} - Restaurant: {restaurant.id}"
    )
    return {"success": True, "order_id": order_id, "status": update.status.value}
