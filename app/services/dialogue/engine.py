"""Ordering dialogue engine."""
import logging
from decimal import Decimal

from app.core.errors import (
    IndexOutOfRange,
    InvalidQuantity,
    InvalidUserInput,
    NotFound,
    StorageError,
    SubmissionFailed,
)
from app.services.dialogue import messages
from app.services.menu.base import RestaurantInfo
from app.services.menu.repository import MenuRepository
from app.services.ordering.cart import (
    add_line,
    format_money,
    remove_line,
    render_cart,
    totals,
)
from app.services.ordering.parser import (
    is_remove_command,
    normalize,
    parse_item_token,
    parse_remove_index,
)
from app.services.ordering.submission import OrderSubmitter
from app.services.session.models import DeliveryType, DialogueStage, Session
from app.services.session.store import SessionStore

logger = logging.getLogger(__name__)


class DialogueEngine:
    """Maps one inbound message plus the sender's session to one reply.

    Each call to ``handle_message`` is a dialogue turn. The turn holds the
    sender's session lock from session lookup to reply, including the menu
    and order storage round-trips made along the way.
    """

    def __init__(
        self,
        session_store: SessionStore,
        menu_repository: MenuRepository,
        order_submitter: OrderSubmitter,
        currency_symbol: str = "",
        tax_rate: Decimal = Decimal("0.05"),
    ):
        self.session_store = session_store
        self.menu_repository = menu_repository
        self.order_submitter = order_submitter
        self.currency_symbol = currency_symbol
        self.tax_rate = tax_rate

    async def handle_message(self, sender: str, destination: str, text: str) -> str:
        """
        Process one inbound message.

        Args:
            sender: Customer messaging identity
            destination: Number the customer wrote to
            text: Raw message text

        Returns:
            Reply text
        """
        try:
            restaurant = await self.menu_repository.resolve_restaurant(destination)
        except NotFound:
            logger.warning(
                f"[DIALOGUE] Destination not linked to any restaurant - "
                f"To: {destination}, From: {sender}"
            )
            return messages.RESTAURANT_NOT_LINKED
        except StorageError:
            return messages.TRY_AGAIN

        async with self.session_store.lock(sender):
            session = self.session_store.get_or_create(sender)
            if session.restaurant_id is None:
                session.restaurant_id = restaurant.id
            elif session.restaurant_id != restaurant.id:
                logger.info(
                    f"[DIALOGUE] Sender switched restaurant {session.restaurant_id} -> "
                    f"{restaurant.id}, starting fresh session - From: {sender}"
                )
                session = self.session_store.reset(sender, restaurant.id)
            self.session_store.touch(sender)

            old_stage = session.stage
            reply = await self._run_turn(session, restaurant, text or "")
            if session.stage != old_stage:
                logger.info(
                    f"[DIALOGUE] Stage changed: {old_stage.value} -> {session.stage.value} "
                    f"- From: {sender}"
                )
            return reply

    async def _run_turn(self, session: Session, restaurant: RestaurantInfo, text: str) -> str:
        command = normalize(text)
        logger.debug(
            f"[DIALOGUE] Turn - From: {session.identity}, Stage: {session.stage.value}, "
            f"Input: '{text[:100]}'"
        )

        # Global commands take precedence over every stage
        if command in messages.RESET_COMMANDS:
            self.session_store.delete(session.identity)
            return messages.SESSION_CLEARED
        if command == messages.CART_COMMAND:
            return self._show_cart(session)
        if is_remove_command(command):
            return self._remove_item(session, text)
        if command == messages.CONFIRM_COMMAND:
            return await self._confirm(session, restaurant)

        # Pending prompts
        if session.stage == DialogueStage.AWAITING_DELIVERY_TYPE:
            return self._capture_delivery_type(session, command)
        if session.stage == DialogueStage.AWAITING_ADDRESS:
            return self._capture_address(session, text)

        if session.stage == DialogueStage.START:
            return await self._greet(session, restaurant, command)
        return await self._add_item(session, restaurant, command)

    def _money(self, amount: Decimal) -> str:
        return format_money(amount, self.currency_symbol)

    def _show_cart(self, session: Session) -> str:
        if session.cart.is_empty():
            return messages.CART_EMPTY
        cart_totals = totals(session.cart, self.tax_rate)
        return messages.CART_TEMPLATE.format(
            lines=render_cart(session.cart, self.currency_symbol),
            subtotal=self._money(cart_totals.subtotal),
        )

    def _remove_item(self, session: Session, text: str) -> str:
        try:
            index = parse_remove_index(text)
            line = remove_line(session.cart, index)
        except IndexOutOfRange as e:
            return messages.REMOVE_OUT_OF_RANGE.format(index=e.index)
        except InvalidUserInput:
            return messages.REMOVE_USAGE
        logger.info(
            f"[DIALOGUE] Removed line {index} ({line.item_name}) - From: {session.identity}"
        )
        return messages.ITEM_REMOVED.format(item_name=line.item_name)

    async def _confirm(self, session: Session, restaurant: RestaurantInfo) -> str:
        if session.cart.is_empty():
            return messages.CART_EMPTY
        if session.delivery_type == DeliveryType.UNSET:
            session.stage = DialogueStage.AWAITING_DELIVERY_TYPE
            return messages.DELIVERY_PROMPT
        if session.delivery_type == DeliveryType.DELIVERY and not session.address_text:
            session.stage = DialogueStage.AWAITING_ADDRESS
            return messages.ADDRESS_PROMPT

        try:
            order_totals = await self.order_submitter.submit(
                restaurant_id=restaurant.id,
                customer_identity=session.identity,
                cart=session.cart,
                delivery_type=session.delivery_type,
                address_text=session.address_text,
            )
        except SubmissionFailed:
            # Session left as is so the customer can confirm again
            return messages.TRY_AGAIN

        if session.delivery_type == DeliveryType.DELIVERY:
            fulfilment = messages.FULFILMENT_DELIVERY.format(address=session.address_text)
        else:
            fulfilment = messages.FULFILMENT_PICKUP
        reply = messages.ORDER_CONFIRMED.format(
            restaurant_name=restaurant.name,
            lines=render_cart(session.cart, self.currency_symbol),
            subtotal=self._money(order_totals.subtotal),
            tax=self._money(order_totals.tax),
            total=self._money(order_totals.total),
            fulfilment=fulfilment,
        )
        self.session_store.delete(session.identity)
        return reply

    def _capture_delivery_type(self, session: Session, command: str) -> str:
        if command == messages.DELIVERY_CHOICE:
            session.delivery_type = DeliveryType.DELIVERY
            session.stage = DialogueStage.AWAITING_ADDRESS
            return messages.ADDRESS_PROMPT
        if command == messages.PICKUP_CHOICE:
            session.delivery_type = DeliveryType.PICKUP
            session.stage = DialogueStage.MENU
            return messages.PICKUP_SELECTED
        return messages.DELIVERY_PROMPT

    def _capture_address(self, session: Session, text: str) -> str:
        if len(text.strip()) < messages.MIN_ADDRESS_LENGTH:
            return messages.ADDRESS_TOO_SHORT
        session.address_text = text
        session.stage = DialogueStage.MENU
        return messages.ADDRESS_SAVED

    async def _greet(self, session: Session, restaurant: RestaurantInfo, command: str) -> str:
        if command not in messages.GREETING_WORDS:
            return messages.START_HINT
        try:
            menu = await self.menu_repository.get_active_menu(restaurant.id)
        except StorageError:
            return messages.TRY_AGAIN
        if not menu:
            logger.warning(f"[DIALOGUE] Restaurant {restaurant.id} has no active menu items")
            return messages.NO_MENU_ITEMS

        session.menu_shown = True
        session.stage = DialogueStage.MENU
        return messages.MENU_TEMPLATE.format(
            restaurant_name=restaurant.name,
            menu=self.menu_repository.render_menu(menu, self.currency_symbol),
            hint=messages.ORDER_FORMAT_HINT,
        )

    async def _add_item(self, session: Session, restaurant: RestaurantInfo, command: str) -> str:
        token = parse_item_token(command)
        if token is None:
            return messages.FORMAT_HINT
        item_no, quantity = token
        if not 1 <= quantity <= messages.MAX_QUANTITY:
            return messages.INVALID_QUANTITY
        if not 1 <= item_no <= messages.MAX_ITEM_NO:
            return messages.INVALID_ITEM

        try:
            item = await self.menu_repository.get_item(restaurant.id, item_no)
        except NotFound:
            return messages.INVALID_ITEM
        except StorageError:
            return messages.TRY_AGAIN

        try:
            line = add_line(session.cart, item.item_no, item.item_name, item.price, quantity)
        except InvalidQuantity:
            return messages.INVALID_QUANTITY
        logger.info(
            f"[DIALOGUE] Added {line.item_name} × {line.quantity} - From: {session.identity}, "
            f"Cart lines: {len(session.cart)}"
        )
        return messages.ITEM_ADDED.format(
            item_name=line.item_name,
            quantity=line.quantity,
            subtotal=self._money(line.subtotal),
        )
