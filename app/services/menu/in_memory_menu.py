"""In-memory menu provider."""
import yaml
from pathlib import Path
from typing import Any, Dict, List, Optional
from app.services.menu.base import MenuItem, MenuProvider, RestaurantInfo


class InMemoryMenuProvider(MenuProvider):
    """In-memory menu provider using YAML configuration."""

    def __init__(self, menu_file: Optional[str] = None):
        """Initialize with optional menu file path."""
        if menu_file is None:
            menu_file = Path(__file__).parent / "data" / "menu.yaml"
        self.menu_file = Path(menu_file)
        self._restaurants: Optional[List[Dict[str, Any]]] = None

    def _load(self) -> List[Dict[str, Any]]:
        """Load restaurants and their menus from YAML file."""
        if self._restaurants is None:
            if not self.menu_file.exists():
                # Default catalog if file doesn't exist
                self._restaurants = [
                    {
                        "id": 1,
                        "name": "SwaadX",
                        "whatsapp_number": "+14155238886",
                        "items": [
                            {"item_no": 1, "item_name": "Margherita Pizza", "price": 200},
                            {"item_no": 2, "item_name": "Veg Burger", "price": 120},
                        ],
                    }
                ]
            else:
                with open(self.menu_file, "r") as f:
                    data = yaml.safe_load(f) or {}
                    self._restaurants = data.get("restaurants", [])
        return self._restaurants

    def _find_restaurant(self, restaurant_id: int) -> Optional[Dict[str, Any]]:
        for restaurant in self._load():
            if restaurant.get("id") == restaurant_id:
                return restaurant
        return None

    async def resolve_restaurant(self, destination: str) -> Optional[RestaurantInfo]:
        for restaurant in self._load():
            if str(restaurant.get("whatsapp_number")) == destination:
                return RestaurantInfo(
                    id=restaurant["id"],
                    name=restaurant["name"],
                    whatsapp_number=str(restaurant["whatsapp_number"]),
                )
        return None

    async def list_active_menu(self, restaurant_id: int) -> List[MenuItem]:
        restaurant = self._find_restaurant(restaurant_id)
        if restaurant is None:
            return []
        items = [MenuItem(**item) for item in restaurant.get("items", [])]
        return sorted(
            (item for item in items if item.is_active),
            key=lambda item: item.item_no,
        )

    async def lookup_menu_item(self, restaurant_id: int, item_no: int) -> Optional[MenuItem]:
        for item in await self.list_active_menu(restaurant_id):
            if item.item_no == item_no:
                return item
        return None
