"""Cart and pricing model."""
from decimal import Decimal, ROUND_HALF_UP
from typing import Any, Dict, List, Union

from pydantic import BaseModel, ConfigDict, Field

from app.core.errors import IndexOutOfRange, InvalidQuantity

CENTS = Decimal("0.01")

Number = Union[Decimal, int, float, str]


def round_money(value: Decimal) -> Decimal:
    """Round half-up to two decimal places."""
    return value.quantize(CENTS, rounding=ROUND_HALF_UP)


def to_decimal(value: Number) -> Decimal:
    """Convert a price to Decimal without float artifacts."""
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


class CartLine(BaseModel):
    """One ordered item with its resolved price."""

    model_config = ConfigDict(frozen=True)

    item_no: int = Field(ge=1)
    item_name: str
    unit_price: Decimal = Field(ge=0)
    quantity: int = Field(ge=1)
    subtotal: Decimal


class Cart(BaseModel):
    """Ordered sequence of cart lines. Display order is insertion order."""

    lines: List[CartLine] = []

    def __len__(self) -> int:
        return len(self.lines)

    def is_empty(self) -> bool:
        return not self.lines


class CartTotals(BaseModel):
    """Totals for a cart."""

    subtotal: Decimal
    tax: Decimal
    total: Decimal
    item_count: int


def add_line(
    cart: Cart,
    item_no: int,
    item_name: str,
    unit_price: Number,
    quantity: int,
) -> CartLine:
    """Append a line to the cart. Repeated item numbers get their own line."""
    if quantity < 1:
        raise InvalidQuantity(f"Quantity must be at least 1, got {quantity}")
    price = to_decimal(unit_price)
    line = CartLine(
        item_no=item_no,
        item_name=item_name,
        unit_price=price,
        quantity=quantity,
        subtotal=round_money(price * quantity),
    )
    cart.lines.append(line)
    return line


def remove_line(cart: Cart, one_based_index: int) -> CartLine:
    """Remove and return the line at a 1-based position."""
    if not 1 <= one_based_index <= len(cart.lines):
        raise IndexOutOfRange(one_based_index, len(cart.lines))
    return cart.lines.pop(one_based_index - 1)


def totals(cart: Cart, tax_rate: Number) -> CartTotals:
    """Compute subtotal, tax, total and item count."""
    subtotal = round_money(sum((line.subtotal for line in cart.lines), Decimal("0")))
    tax = round_money(subtotal * to_decimal(tax_rate))
    return CartTotals(
        subtotal=subtotal,
        tax=tax,
        total=round_money(subtotal + tax),
        item_count=sum(line.quantity for line in cart.lines),
    )


def format_money(amount: Decimal, currency_symbol: str = "") -> str:
    return f"{currency_symbol}{round_money(amount)}"


def render_cart(cart: Cart, currency_symbol: str = "") -> str:
    """Human-readable cart listing, one numbered line per entry."""
    return "\n".join(
        f"{idx}. {line.item_name} × {line.quantity} = "
        f"{format_money(line.subtotal, currency_symbol)}"
        for idx, line in enumerate(cart.lines, start=1)
    )


def serialize_cart(cart: Cart) -> List[Dict[str, Any]]:
    """JSON-safe cart payload for the order record."""
    return [
        {
            "item_no": line.item_no,
            "item_name": line.item_name,
            "unit_price": str(line.unit_price),
            "quantity": line.quantity,
            "subtotal": str(line.subtotal),
        }
        for line in cart.lines
    ]
