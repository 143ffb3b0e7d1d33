"""Shared test fixtures and configuration."""
import pytest
import os
from datetime import datetime, timedelta, timezone
from decimal import Decimal
from pathlib import Path
from unittest.mock import AsyncMock, Mock

import httpx
from sqlalchemy.ext.asyncio import create_async_engine, AsyncSession, async_sessionmaker
from sqlalchemy.pool import StaticPool

# Set test environment variables before importing app
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("APP_NAME", "SwaadX")

from app.main import app
from app.db.database import Base, get_db
from app.db.models import MenuItem, Restaurant
from app.core.config import Settings
from app.core.dependencies import get_session_store
from app.services.dialogue.engine import DialogueEngine
from app.services.menu.repository import MenuRepository
from app.services.menu.in_memory_menu import InMemoryMenuProvider
from app.services.ordering.submission import OrderSubmitter
from app.services.persistence.restaurants import hash_dashboard_token
from app.services.session.store import SessionStore


# Test database URL (in-memory SQLite)
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"

TAX_RATE = Decimal("0.05")

RESTAURANT_NUMBER = "+14155238886"
OTHER_RESTAURANT_NUMBER = "+14155550000"
CUSTOMER = "+919800000001"


class FakeClock:
    """Controllable clock for session expiry tests."""

    def __init__(self):
        self.now = datetime(2026, 1, 1, 12, 0, tzinfo=timezone.utc)

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> None:
        self.now += timedelta(**kwargs)


@pytest.fixture
def test_settings():
    """Override settings for testing."""
    return Settings(
        database_url=TEST_DATABASE_URL,
        tax_rate=TAX_RATE,
        session_expiry_minutes=30,
        session_sweep_interval_seconds=300,
        storage_timeout_seconds=1.0,
    )


@pytest.fixture
async def test_db_engine():
    """Create test database engine."""
    engine = create_async_engine(
        TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    # Create all tables
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    # Drop all tables
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)

    await engine.dispose()


@pytest.fixture
async def test_db(test_db_engine):
    """Create test database session."""
    async_session = async_sessionmaker(
        test_db_engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )

    async with async_session() as session:
        yield session


@pytest.fixture
async def seeded_db(test_db):
    """Two restaurants with dashboard tokens and a small menu each."""
    test_db.add_all(
        [
            Restaurant(
                id=1,
                name="SwaadX Test Kitchen",
                whatsapp_number=RESTAURANT_NUMBER,
                dashboard_token_hash=hash_dashboard_token("token-one"),
                plan="pro",
                is_cloud_kitchen=False,
            ),
            Restaurant(
                id=2,
                name="Other Kitchen",
                whatsapp_number=OTHER_RESTAURANT_NUMBER,
                dashboard_token_hash=hash_dashboard_token("token-two"),
                plan="basic",
                is_cloud_kitchen=True,
            ),
        ]
    )
    await test_db.flush()
    test_db.add_all(
        [
            MenuItem(restaurant_id=1, item_no=2, item_name="Veg Burger", price=Decimal("120")),
            MenuItem(restaurant_id=1, item_no=1, item_name="Margherita Pizza", price=Decimal("200")),
            MenuItem(restaurant_id=1, item_no=3, item_name="Paneer Wrap", price=Decimal("99.99")),
            MenuItem(
                restaurant_id=1,
                item_no=4,
                item_name="Old Special",
                price=Decimal("150"),
                is_active=False,
            ),
            MenuItem(restaurant_id=2, item_no=1, item_name="Idli", price=Decimal("40")),
        ]
    )
    await test_db.commit()
    return test_db


@pytest.fixture
def test_menu_path():
    """Return path to test menu YAML file."""
    return Path(__file__).parent / "fixtures" / "test_menu.yaml"


@pytest.fixture
def test_menu_repository(test_menu_path):
    """Create menu repository with test data."""
    provider = InMemoryMenuProvider(menu_file=str(test_menu_path))
    return MenuRepository(provider, timeout=1.0)


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def session_store(clock):
    """Fresh session store driven by the fake clock."""
    return SessionStore(
        expiry=timedelta(minutes=30),
        sweep_interval=300,
        clock=clock,
    )


@pytest.fixture
def order_persistence():
    """Order persistence double whose inserts succeed."""
    persistence = Mock()
    persistence.insert_order = AsyncMock(return_value=Mock(id=1))
    return persistence


@pytest.fixture
def order_submitter(order_persistence):
    return OrderSubmitter(order_persistence, tax_rate=TAX_RATE, timeout=1.0)


@pytest.fixture
def dialogue_engine(session_store, test_menu_repository, order_submitter):
    """Dialogue engine over the YAML test menu and a mocked order store."""
    return DialogueEngine(
        session_store=session_store,
        menu_repository=test_menu_repository,
        order_submitter=order_submitter,
        currency_symbol="₹",
        tax_rate=TAX_RATE,
    )


@pytest.fixture
async def api_client(seeded_db, session_store):
    """HTTP client against the app with the test database and session store."""
    async def _override_get_db():
        yield seeded_db

    app.dependency_overrides[get_db] = _override_get_db
    app.dependency_overrides[get_session_store] = lambda: session_store

    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as client:
        yield client

    # Clear overrides
    app.dependency_overrides.clear()


# Pytest configuration
def pytest_configure(config):
    """Configure pytest."""
    config.addinivalue_line(
        "markers", "asyncio: mark test as an asyncio test"
    )
