"""Menu provider interface."""
from abc import ABC, abstractmethod
from decimal import Decimal
from typing import List, Optional
from pydantic import BaseModel


class RestaurantInfo(BaseModel):
    """Restaurant a destination number resolves to."""

    id: int
    name: str
    whatsapp_number: str


class MenuItem(BaseModel):
    """Menu item model."""

    item_no: int
    item_name: str
    price: Decimal
    is_active: bool = True


class MenuProvider(ABC):
    """Abstract base class for menu providers."""

    @abstractmethod
    async def resolve_restaurant(self, destination: str) -> Optional[RestaurantInfo]:
        """Find the restaurant linked to a destination number."""
        pass

    @abstractmethod
    async def list_active_menu(self, restaurant_id: int) -> List[MenuItem]:
        """Get active items ordered by item number."""
        pass

    @abstractmethod
    async def lookup_menu_item(self, restaurant_id: int, item_no: int) -> Optional[MenuItem]:
        """Get an active item by its number."""
        pass
