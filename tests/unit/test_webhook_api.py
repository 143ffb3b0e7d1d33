"""Tests for the WhatsApp webhook and service routes."""
import pytest
import xml.etree.ElementTree as ET

from app.api.webhooks.whatsapp import get_dialogue_engine
from app.main import app
from app.services.dialogue import messages
from app.services.persistence.orders import OrderPersistenceService

CUSTOMER = "whatsapp:+919800000001"
RESTAURANT = "whatsapp:+14155238886"


async def send(client, body, sender=CUSTOMER, to=RESTAURANT):
    response = await client.post(
        "/webhooks/whatsapp",
        data={"From": sender, "To": to, "Body": body},
    )
    assert response.status_code == 200
    assert response.headers["content-type"].startswith("application/xml")
    return response


def reply_text(response) -> str:
    root = ET.fromstring(response.content)
    nodes = root.findall("Message")
    assert len(nodes) == 1
    return nodes[0].text


class TestWhatsAppWebhook:
    """Test inbound message handling end to end."""

    @pytest.mark.asyncio
    async def test_greeting_returns_menu(self, api_client, session_store):
        response = await send(api_client, "hi")

        text = reply_text(response)
        assert "Welcome to SwaadX Test Kitchen" in text
        assert "1. Margherita Pizza - ₹200.00" in text
        assert "Old Special" not in text
        # Session keyed by the bare number
        assert "+919800000001" in session_store

    @pytest.mark.asyncio
    async def test_full_pickup_order(self, api_client, seeded_db, session_store):
        """Test a complete order is stored for the right restaurant."""
        await send(api_client, "hi")
        await send(api_client, "1-2")
        assert reply_text(await send(api_client, "confirm")) == messages.DELIVERY_PROMPT
        assert reply_text(await send(api_client, "2")) == messages.PICKUP_SELECTED

        text = reply_text(await send(api_client, "confirm"))

        assert "Order placed with SwaadX Test Kitchen" in text
        assert "Total: ₹420.00" in text
        assert "+919800000001" not in session_store

        orders = await OrderPersistenceService(seeded_db).list_orders(1)
        assert len(orders) == 1
        assert orders[0].phone == "+919800000001"
        assert orders[0].status == "NEW"

    @pytest.mark.asyncio
    async def test_unlinked_number(self, api_client):
        response = await send(api_client, "hi", to="whatsapp:+10000000000")
        assert reply_text(response) == messages.RESTAURANT_NOT_LINKED

    @pytest.mark.asyncio
    async def test_reply_is_escaped(self, api_client):
        """Test special characters in replies are XML-escaped."""
        await send(api_client, "hi")
        await send(api_client, "1-1")

        response = await send(api_client, "cart")

        assert "*remove &lt;n&gt;*" in response.text
        assert "*remove <n>*" in reply_text(response)

    @pytest.mark.asyncio
    async def test_missing_body(self, api_client):
        """Test media-only messages get the start hint."""
        response = await api_client.post(
            "/webhooks/whatsapp", data={"From": CUSTOMER, "To": RESTAURANT}
        )

        assert response.status_code == 200
        assert reply_text(response) == messages.START_HINT

    @pytest.mark.asyncio
    async def test_engine_failure_returns_apology(self, api_client):
        class BrokenEngine:
            async def handle_message(self, sender, destination, text):
                raise RuntimeError("boom")

        app.dependency_overrides[get_dialogue_engine] = lambda: BrokenEngine()

        response = await send(api_client, "hi")

        assert reply_text(response) == messages.TRY_AGAIN


class TestServiceRoutes:
    """Test banner and health routes."""

    @pytest.mark.asyncio
    async def test_root(self, api_client):
        response = await api_client.get("/")

        assert response.status_code == 200
        assert response.json()["message"] == "SwaadX backend running"

    @pytest.mark.asyncio
    async def test_health(self, api_client):
        await send(api_client, "hi")

        response = await api_client.get("/health")

        assert response.status_code == 200
        assert response.json() == {"status": "healthy", "active_sessions": 1}
