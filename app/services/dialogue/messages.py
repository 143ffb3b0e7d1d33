"""Reply texts and command words for the ordering dialogue."""

# Greeting words that open the menu from START
GREETING_WORDS = ["hi", "hello"]

# Global commands, matched case-insensitively in every stage
RESET_COMMANDS = ["restart", "cancel"]
CART_COMMAND = "cart"
CONFIRM_COMMAND = "confirm"

# Delivery-type answers
DELIVERY_CHOICE = "1"
PICKUP_CHOICE = "2"

MIN_ADDRESS_LENGTH = 10

# Upper bounds for item-quantity tokens; larger numbers never reach storage
MAX_ITEM_NO = 9999
MAX_QUANTITY = 99

ORDER_FORMAT_HINT = "To order, reply with item number and quantity like *1-2*"

MENU_TEMPLATE = """Welcome to {restaurant_name} 🍽️
Here is our menu:
{menu}

{hint}
Type *cart* to view your cart or *confirm* to place the order."""

NO_MENU_ITEMS = "Sorry, there are no items available right now. Please try again later."

START_HINT = "Sorry, I didn't understand that 🤔\nType *hi* to start ordering"

SESSION_CLEARED = "Your session cleared 🧹 Type *hi* to start again."

CART_EMPTY = "Your cart is empty 🛒 " + ORDER_FORMAT_HINT

CART_TEMPLATE = """🛒 Your cart:
{lines}

Subtotal: {subtotal}
Type *confirm* to place the order or *remove <n>* to remove an item."""

ITEM_REMOVED = "Removed {item_name} from your cart."

REMOVE_OUT_OF_RANGE = "There is no item {index} in your cart. Type *cart* to see item numbers."

REMOVE_USAGE = "To remove an item, reply *remove <n>* using the number shown in your cart."

FORMAT_HINT = "Please use the format *item-quantity*, for example *1-2*."

INVALID_QUANTITY = f"Quantity must be between 1 and {MAX_QUANTITY}. " + FORMAT_HINT

INVALID_ITEM = "That is an invalid item number. Please pick a number from the menu."

ITEM_ADDED = """Added {item_name} × {quantity} = {subtotal} ✅
Add more items like *2-1*, type *cart* to review or *confirm* to place the order."""

DELIVERY_PROMPT = """How would you like to receive your order?
1️⃣ Delivery
2️⃣ Pickup

Reply with 1 or 2"""

ADDRESS_PROMPT = "Please share your complete delivery address 📍"

ADDRESS_TOO_SHORT = "That address looks too short. Please send your complete address with street and area."

ADDRESS_SAVED = "Address saved 📍 Type *confirm* to place the order."

PICKUP_SELECTED = "Pickup selected 🏃 Type *confirm* to place the order."

ORDER_CONFIRMED = """✅ Order placed with {restaurant_name}!
{lines}

Subtotal: {subtotal}
Tax: {tax}
Total: {total}
{fulfilment}

Thank you! Type *hi* to order again."""

FULFILMENT_DELIVERY = "Delivering to: {address}"

FULFILMENT_PICKUP = "Pickup from the restaurant"

RESTAURANT_NOT_LINKED = "Sorry, this number is not linked to any restaurant."

TRY_AGAIN = "Sorry, something went wrong on our side. Please try again in a moment."
