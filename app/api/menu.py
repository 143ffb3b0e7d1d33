"""Dashboard menu endpoint."""
import logging
from decimal import Decimal
from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel
from typing import List

from app.api.auth import require_restaurant
from app.core.dependencies import get_menu_repository
from app.core.errors import StorageError
from app.db.models import Restaurant
from app.services.menu.repository import MenuRepository


router = APIRouter()
logger = logging.getLogger(__name__)


class MenuItemResponse(BaseModel):
    """Menu item response model."""
    item_no: int
    item_name: str
    price: Decimal


class MenuResponse(BaseModel):
    """Menu response model."""
    restaurant_id: int
    items: List[MenuItemResponse]


@router.get("/api/dashboard/menu", response_model=MenuResponse)
async def get_menu(
    restaurant: Restaurant = Depends(require_restaurant),
    menu_repository: MenuRepository = Depends(get_menu_repository),
):
    """Get the authenticated restaurant's active menu."""
    try:
        items = await menu_repository.get_active_menu(restaurant.id)
    except StorageError:
        raise HTTPException(status_code=503, detail="Could not load menu, please retry")

    logger.info(f"[DASHBOARD] Menu loaded - {len(items)} items, Restaurant: {restaurant.id}")
    return MenuResponse(
        restaurant_id=restaurant.id,
        items=[
            MenuItemResponse(item_no=item.item_no, item_name=item.item_name, price=item.price)
            for item in items
        ],
    )
