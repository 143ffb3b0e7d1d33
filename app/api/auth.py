"""Dashboard token authentication."""
import asyncio
import logging
from typing import Optional
from fastapi import APIRouter, Depends, Header, HTTPException
from pydantic import BaseModel, ConfigDict

from app.core.config import settings
from app.core.dependencies import get_restaurant_persistence
from app.core.errors import AuthError
from app.db.models import Restaurant
from app.services.persistence.restaurants import RestaurantPersistenceService

router = APIRouter()
logger = logging.getLogger(__name__)

TOKEN_MISSING = "Dashboard token missing"
TOKEN_INVALID = "Invalid dashboard token"


class RestaurantResponse(BaseModel):
    """Authenticated restaurant response model."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    plan: str
    is_cloud_kitchen: bool


async def authenticate(
    token: Optional[str], restaurants: RestaurantPersistenceService
) -> Restaurant:
    """Resolve a dashboard token to its restaurant.

    Raises:
        AuthError: token missing or unknown
    """
    if not token:
        raise AuthError(TOKEN_MISSING)
    restaurant = await asyncio.wait_for(
        restaurants.authenticate_dashboard_token(token),
        timeout=settings.storage_timeout_seconds,
    )
    if restaurant is None:
        raise AuthError(TOKEN_INVALID)
    return restaurant


async def require_restaurant(
    x_dashboard_token: Optional[str] = Header(None),
    restaurants: RestaurantPersistenceService = Depends(get_restaurant_persistence),
) -> Restaurant:
    """Dependency resolving the dashboard caller to a restaurant."""
    try:
        return await authenticate(x_dashboard_token, restaurants)
    except AuthError as e:
        status_code = 401 if str(e) == TOKEN_MISSING else 403
        logger.warning(f"[DASHBOARD] Rejected request - {e}")
        raise HTTPException(status_code=status_code, detail=str(e))
    except Exception as e:
        logger.error(
            f"[DASHBOARD] Token lookup failed - Error: {type(e).__name__}: {str(e)}",
            exc_info=True,
        )
        raise HTTPException(status_code=503, detail="Storage unavailable, please retry")


@router.get("/api/dashboard/me", response_model=RestaurantResponse)
async def get_current_restaurant(restaurant: Restaurant = Depends(require_restaurant)):
    """Get the restaurant the token belongs to."""
    return RestaurantResponse.model_validate(restaurant)
