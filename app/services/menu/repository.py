"""Menu repository."""
import asyncio
import logging
from typing import Awaitable, List, Optional, TypeVar

from app.core.errors import NotFound, StorageError
from app.services.menu.base import MenuItem, MenuProvider, RestaurantInfo

logger = logging.getLogger(__name__)

T = TypeVar("T")


class MenuRepository:
    """Repository for menu operations.

    Every provider call runs under ``timeout`` seconds. Provider failures and
    timeouts surface as ``StorageError``; missing rows surface as ``NotFound``.
    """

    def __init__(self, provider: MenuProvider, timeout: Optional[float] = None):
        self.provider = provider
        self.timeout = timeout

    async def _call(self, operation: str, call: Awaitable[T]) -> T:
        try:
            return await asyncio.wait_for(call, timeout=self.timeout)
        except asyncio.TimeoutError as e:
            logger.error(f"[MENU] {operation} timed out after {self.timeout}s")
            raise StorageError(f"{operation} timed out") from e
        except Exception as e:
            logger.error(
                f"[MENU] {operation} failed - Error: {type(e).__name__}: {str(e)}",
                exc_info=True,
            )
            raise StorageError(f"{operation} failed") from e

    async def resolve_restaurant(self, destination: str) -> RestaurantInfo:
        """Get the restaurant linked to a destination number."""
        restaurant = await self._call(
            "resolve_restaurant", self.provider.resolve_restaurant(destination)
        )
        if restaurant is None:
            raise NotFound(f"No restaurant linked to {destination}")
        return restaurant

    async def get_active_menu(self, restaurant_id: int) -> List[MenuItem]:
        """Get the active menu, ordered by item number."""
        return await self._call(
            "list_active_menu", self.provider.list_active_menu(restaurant_id)
        )

    async def get_item(self, restaurant_id: int, item_no: int) -> MenuItem:
        """Get an active item by number."""
        item = await self._call(
            "lookup_menu_item", self.provider.lookup_menu_item(restaurant_id, item_no)
        )
        if item is None:
            raise NotFound(f"Item {item_no} not on menu of restaurant {restaurant_id}")
        return item

    @staticmethod
    def render_menu(items: List[MenuItem], currency_symbol: str = "") -> str:
        """Get menu as numbered text lines."""
        return "\n".join(
            f"{item.item_no}. {item.item_name} - {currency_symbol}{item.price:.2f}"
            for item in items
        )
