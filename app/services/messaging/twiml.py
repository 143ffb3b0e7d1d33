"""TwiML rendering for messaging replies."""


def escape_xml(text: str) -> str:
    """Escape XML special characters."""
    return (
        text.replace("&", "&amp;")
        .replace("<", "&lt;")
        .replace(">", "&gt;")
        .replace('"', "&quot;")
        .replace("'", "&apos;")
    )


def generate_message_twiml(text: str) -> str:
    """
    Generate TwiML XML for Twilio to send one reply message.

    Args:
        text: Reply text

    Returns:
        TwiML XML string
    """
    return f"""<?xml version="1.0" encoding="UTF-8"?>
<Response>
    <Message>{escape_xml(text)}</Message>
</Response>"""


def strip_channel_prefix(address: str) -> str:
    """Turn ``whatsapp:+14155238886`` into ``+14155238886``."""
    address = (address or "").strip()
    if ":" in address:
        address = address.split(":", 1)[1]
    return address.strip()
