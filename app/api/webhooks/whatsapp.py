"""Twilio WhatsApp webhook endpoints."""
import logging
from fastapi import APIRouter, Request, Form, Depends
from fastapi.responses import Response

from app.core.config import settings
from app.core.dependencies import (
    get_menu_repository,
    get_order_submitter,
    get_session_store,
)
from app.services.dialogue import messages
from app.services.dialogue.engine import DialogueEngine
from app.services.menu.repository import MenuRepository
from app.services.messaging.twiml import generate_message_twiml, strip_channel_prefix
from app.services.ordering.submission import OrderSubmitter
from app.services.session.store import SessionStore

router = APIRouter()
logger = logging.getLogger(__name__)


def get_dialogue_engine(
    session_store: SessionStore = Depends(get_session_store),
    menu_repository: MenuRepository = Depends(get_menu_repository),
    order_submitter: OrderSubmitter = Depends(get_order_submitter),
) -> DialogueEngine:
    """Get dialogue engine."""
    return DialogueEngine(
        session_store=session_store,
        menu_repository=menu_repository,
        order_submitter=order_submitter,
        currency_symbol=settings.currency_symbol,
        tax_rate=settings.tax_rate,
    )


@router.post("/whatsapp")
async def handle_incoming_message(
    request: Request,
    From: str = Form(...),
    To: str = Form(...),
    Body: str = Form(""),
    engine: DialogueEngine = Depends(get_dialogue_engine),
):
    """
    Handle an inbound WhatsApp message from Twilio.

    Replies with exactly one TwiML message.
    """
    sender = strip_channel_prefix(From)
    destination = strip_channel_prefix(To)
    logger.info(
        f"[WHATSAPP] Message received - From: {sender}, To: {destination}, "
        f"Body length: {len(Body)}, "
        f"Client: {request.client.host if request.client else 'unknown'}"
    )

    try:
        reply = await engine.handle_message(sender, destination, Body)
    except Exception as e:
        logger.error(
            f"[WHATSAPP] Error processing message - From: {sender}, To: {destination}, "
            f"Error: {type(e).__name__}: {str(e)}",
            exc_info=True,
        )
        # Return a graceful error reply to Twilio
        reply = messages.TRY_AGAIN

    logger.debug(f"[WHATSAPP] Reply to {sender}: '{reply[:200]}'")
    return Response(content=generate_message_twiml(reply), media_type="application/xml")
