"""Customer session models."""
from datetime import datetime
from enum import Enum
from typing import Optional
from pydantic import BaseModel, Field

from app.services.ordering.cart import Cart


class DialogueStage(str, Enum):
    """Where the customer is in the ordering dialogue.

    The two ``AWAITING_*`` stages mean the next message answers a pending
    prompt and bypasses normal stage dispatch.
    """

    START = "start"  # No menu shown yet
    MENU = "menu"  # Menu shown, accepting item-quantity tokens
    AWAITING_DELIVERY_TYPE = "awaiting_delivery_type"
    AWAITING_ADDRESS = "awaiting_address"

    def __str__(self) -> str:
        """Return the string value of the stage."""
        return self.value


class DeliveryType(str, Enum):
    """How the order reaches the customer."""

    UNSET = "unset"
    DELIVERY = "delivery"
    PICKUP = "pickup"


class Session(BaseModel):
    """Per-customer conversational state."""

    identity: str
    restaurant_id: Optional[int] = None
    stage: DialogueStage = DialogueStage.START
    cart: Cart = Field(default_factory=Cart)
    menu_shown: bool = False
    delivery_type: DeliveryType = DeliveryType.UNSET
    address_text: Optional[str] = None
    created_at: datetime
    last_active_at: datetime

    def is_expired(self, now: datetime, expiry_seconds: float) -> bool:
        """Check if the session has been idle longer than the window."""
        return (now - self.last_active_at).total_seconds() > expiry_seconds
