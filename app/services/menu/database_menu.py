"""Menu provider backed by the SQL database."""
from typing import List, Optional
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.db import models
from app.services.menu.base import MenuItem, MenuProvider, RestaurantInfo


class DatabaseMenuProvider(MenuProvider):
    """Reads restaurants and menu items with the request's database session."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def resolve_restaurant(self, destination: str) -> Optional[RestaurantInfo]:
        result = await self.db.execute(
            select(models.Restaurant).where(models.Restaurant.whatsapp_number == destination)
        )
        restaurant = result.scalar_one_or_none()
        if restaurant is None:
            return None
        return RestaurantInfo(
            id=restaurant.id,
            name=restaurant.name,
            whatsapp_number=restaurant.whatsapp_number,
        )

    async def list_active_menu(self, restaurant_id: int) -> List[MenuItem]:
        result = await self.db.execute(
            select(models.MenuItem)
            .where(
                models.MenuItem.restaurant_id == restaurant_id,
                models.MenuItem.is_active.is_(True),
            )
            .order_by(models.MenuItem.item_no)
        )
        return [self._to_item(row) for row in result.scalars().all()]

    async def lookup_menu_item(self, restaurant_id: int, item_no: int) -> Optional[MenuItem]:
        result = await self.db.execute(
            select(models.MenuItem).where(
                models.MenuItem.restaurant_id == restaurant_id,
                models.MenuItem.item_no == item_no,
                models.MenuItem.is_active.is_(True),
            )
        )
        row = result.scalar_one_or_none()
        return self._to_item(row) if row else None

    @staticmethod
    def _to_item(row: models.MenuItem) -> MenuItem:
        return MenuItem(
            item_no=row.item_no,
            item_name=row.item_name,
            price=row.price,
            is_active=row.is_active,
        )
