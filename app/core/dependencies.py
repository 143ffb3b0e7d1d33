"""FastAPI dependencies."""
from datetime import timedelta
from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import settings
from app.db.database import get_db
from app.services.menu.base import MenuProvider
from app.services.menu.database_menu import DatabaseMenuProvider
from app.services.menu.in_memory_menu import InMemoryMenuProvider
from app.services.menu.repository import MenuRepository
from app.services.ordering.submission import OrderSubmitter
from app.services.persistence.orders import OrderPersistenceService
from app.services.persistence.restaurants import RestaurantPersistenceService
from app.services.session.store import SessionStore

# Process-wide session store, started and stopped by the app lifespan
_session_store = SessionStore(
    expiry=timedelta(minutes=settings.session_expiry_minutes),
    sweep_interval=settings.session_sweep_interval_seconds,
)


def get_session_store() -> SessionStore:
    """Get the process-wide session store."""
    return _session_store


def get_menu_repository(db: AsyncSession = Depends(get_db)) -> MenuRepository:
    """Get menu repository instance."""
    provider: MenuProvider
    if settings.menu_source == "yaml":
        provider = InMemoryMenuProvider(menu_file=settings.menu_file)
    else:
        provider = DatabaseMenuProvider(db)
    return MenuRepository(provider=provider, timeout=settings.storage_timeout_seconds)


def get_order_persistence(db: AsyncSession = Depends(get_db)) -> OrderPersistenceService:
    """Get order persistence service."""
    return OrderPersistenceService(db)


def get_restaurant_persistence(
    db: AsyncSession = Depends(get_db),
) -> RestaurantPersistenceService:
    """Get restaurant persistence service."""
    return RestaurantPersistenceService(db)


def get_order_submitter(
    order_persistence: OrderPersistenceService = Depends(get_order_persistence),
) -> OrderSubmitter:
    """Get order submitter."""
    return OrderSubmitter(
        order_persistence,
        tax_rate=settings.tax_rate,
        timeout=settings.storage_timeout_seconds,
    )
