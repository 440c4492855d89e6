"""Pytest configuration and fixtures for integration tests."""

from decimal import Decimal
from typing import AsyncGenerator, List

import httpx
import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from api import dependencies
from api.main import app
from core.application.services import OrderApplicationService
from core.data.models import Base, CategoryModel, ProductModel, StoreModel
from core.domain.events import DomainEvent
from core.infrastructure.event_bus import InMemoryEventBus


# Use in-memory SQLite for testing
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"

# Catalog seeded for every test
DOWNTOWN, UPTOWN = 1, 2
BLEACH, SPONGE, MOP = 1, 2, 3


@pytest_asyncio.fixture(scope="function")
async def test_engine():
    """Create test database engine."""
    engine = create_async_engine(
        TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
        echo=False,
    )

    # Create all tables
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    # Cleanup
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest_asyncio.fixture
async def test_session_factory(test_engine):
    """Create test session factory with a seeded catalog."""
    session_factory = async_sessionmaker(
        test_engine, class_=AsyncSession, expire_on_commit=False
    )

    async with session_factory() as session:
        session.add_all([
            StoreModel(id=DOWNTOWN, name="Downtown"),
            StoreModel(id=UPTOWN, name="Uptown"),
            CategoryModel(id=1, name="Cleaning"),
        ])
        await session.flush()
        session.add_all([
            ProductModel(id=BLEACH, name="Bleach", sku="BL-001", price=Decimal("9.99"),
                         category_id=1, bin_location="A-01", unit_type=1, stock_quantity=10),
            ProductModel(id=SPONGE, name="Sponge", sku="SP-002", price=Decimal("5.00"),
                         category_id=1, bin_location="B-07", unit_type=2, stock_quantity=1),
            ProductModel(id=MOP, name="Mop", sku="MP-003", price=Decimal("12.50"),
                         category_id=1, bin_location="C-02", unit_type=1, stock_quantity=0,
                         in_stock=False),
        ])
        await session.commit()

    yield session_factory


@pytest_asyncio.fixture
async def test_session(test_session_factory) -> AsyncGenerator[AsyncSession, None]:
    """Create test database session."""
    async with test_session_factory() as session:
        yield session


@pytest.fixture
def published_events() -> List[DomainEvent]:
    return []


@pytest.fixture
def event_bus(published_events) -> InMemoryEventBus:
    bus = InMemoryEventBus()
    bus.subscribe(published_events.append)
    return bus


@pytest.fixture
def order_service(test_session_factory, event_bus, order_settings) -> OrderApplicationService:
    return OrderApplicationService(
        session_factory=test_session_factory,
        event_bus=event_bus,
        settings=order_settings,
    )


@pytest_asyncio.fixture
async def test_client(order_service, codec, identity_provider) -> AsyncGenerator[httpx.AsyncClient, None]:
    """HTTP client against the app with the test database and settings."""
    app.dependency_overrides[dependencies.get_order_service] = lambda: order_service
    app.dependency_overrides[dependencies.get_id_codec] = lambda: codec
    app.dependency_overrides[dependencies.get_identity_provider] = lambda: identity_provider

    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as client:
        yield client

    # Cleanup
    app.dependency_overrides.clear()
    dependencies.reset_dependencies()


@pytest.fixture
def bearer(make_token):
    """Authorization header for a role (and store)."""

    def _bearer(role: str, store_id=None, user_id: int = 10) -> dict:
        return {"Authorization": f"Bearer {make_token(user_id, role, store_id=store_id)}"}

    return _bearer
