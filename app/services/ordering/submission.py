"""Order submission service."""
import asyncio
import logging
from decimal import Decimal
from typing import Optional

from app.core.errors import SubmissionFailed
from app.services.ordering.cart import Cart, CartTotals, serialize_cart, totals
from app.services.persistence.orders import OrderPersistenceService
from app.services.session.models import DeliveryType

logger = logging.getLogger(__name__)

NEW_ORDER_STATUS = "NEW"


class OrderSubmitter:
    """Turns a finalized cart into a persisted order."""

    def __init__(
        self,
        order_persistence: OrderPersistenceService,
        tax_rate: Decimal,
        timeout: Optional[float] = None,
    ):
        self.order_persistence = order_persistence
        self.tax_rate = tax_rate
        self.timeout = timeout

    async def submit(
        self,
        restaurant_id: int,
        customer_identity: str,
        cart: Cart,
        delivery_type: DeliveryType,
        address_text: Optional[str],
    ) -> CartTotals:
        """
        Persist an order for the cart.

        Returns:
            Totals the order was stored with

        Raises:
            SubmissionFailed: storage raised or timed out
        """
        order_totals = totals(cart, self.tax_rate)
        try:
            order = await asyncio.wait_for(
                self.order_persistence.insert_order(
                    restaurant_id=restaurant_id,
                    phone=customer_identity,
                    items=serialize_cart(cart),
                    status=NEW_ORDER_STATUS,
                    delivery_type=delivery_type.value,
                    address_text=address_text,
                    item_count=order_totals.item_count,
                    subtotal=order_totals.subtotal,
                    tax=order_totals.tax,
                    total=order_totals.total,
                ),
                timeout=self.timeout,
            )
        except asyncio.TimeoutError as e:
            logger.error(
                f"[ORDER SUBMIT] Insert timed out after {self.timeout}s - "
                f"Restaurant: {restaurant_id}, Phone: {customer_identity}"
            )
            raise SubmissionFailed("Order insert timed out") from e
        except Exception as e:
            logger.error(
                f"[ORDER SUBMIT] Insert failed - Restaurant: {restaurant_id}, "
                f"Phone: {customer_identity}, Error: {type(e).__name__}: {str(e)}",
                exc_info=True,
            )
            raise SubmissionFailed("Order insert failed") from e

        logger.info(
            f"[ORDER SUBMIT] Order {order.id} stored - Restaurant: {restaurant_id}, "
            f"Items: {order_totals.item_count}, Total: {order_totals.total}"
        )
        return order_totals
