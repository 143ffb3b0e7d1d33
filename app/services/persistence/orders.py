"""Order persistence service."""
from decimal import Decimal
from typing import Any, Dict, List, Optional
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, update, desc

from app.db.models import Order


class OrderPersistenceService:
    """Service for persisting order data.

    Every query is scoped by ``restaurant_id`` so one restaurant can never
    read or change another restaurant's orders.
    """

    def __init__(self, db: AsyncSession):
        self.db = db

    async def insert_order(
        self,
        restaurant_id: int,
        phone: str,
        items: List[Dict[str, Any]],
        status: str,
        delivery_type: str,
        address_text: Optional[str],
        item_count: int,
        subtotal: Decimal,
        tax: Decimal,
        total: Decimal,
    ) -> Order:
        """Create a new order."""
        order = Order(
            restaurant_id=restaurant_id,
            phone=phone,
            items=items,
            status=status,
            delivery_type=delivery_type,
            address_text=address_text,
            item_count=item_count,
            subtotal=subtotal,
            tax=tax,
            total=total,
        )
        self.db.add(order)
        try:
            await self.db.commit()
        except Exception:
            await self.db.rollback()
            raise
        await self.db.refresh(order)
        return order

    async def list_orders(
        self,
        restaurant_id: int,
        status_filter: Optional[str] = None,
        limit: int = 100,
    ) -> List[Order]:
        """Get a restaurant's orders, newest first."""
        query = select(Order).where(Order.restaurant_id == restaurant_id)
        if status_filter:
            query = query.where(Order.status == status_filter)
        result = await self.db.execute(
            query.order_by(desc(Order.created_at), desc(Order.id)).limit(limit)
        )
        return list(result.scalars().all())

    async def update_order_status(
        self, order_id: int, restaurant_id: int, new_status: str
    ) -> int:
        """Update order status.

        Returns:
            Number of rows affected (0 when the order belongs to another restaurant)
        """
        result = await self.db.execute(
            update(Order)
            .where(Order.id == order_id, Order.restaurant_id == restaurant_id)
            .values(status=new_status)
        )
        await self.db.commit()
        return result.rowcount
