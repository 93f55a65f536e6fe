"""
Test configuration and shared fixtures for the product transactions test suite.
"""
import pytest
import pytest_asyncio
import os
from datetime import datetime
from typing import AsyncGenerator, Any, Callable, Dict, List
import httpx
from httpx import AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine
from sqlalchemy.pool import StaticPool
from faker import Faker

# Set test environment before importing app modules
os.environ.setdefault("ENVIRONMENT", "test")
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"

from app.main import create_application
from app.core.config import Settings
from app.core.database import create_session_factory, init_db
from app.db.models import ProductTransaction


SEED_URL = "https://seed.example.test/product_transaction.json"

# Configure Faker for consistent test data
fake = Faker()
fake.seed_instance(42)  # For reproducible test data

CATEGORIES = ["electronics", "jewelery", "men's clothing", "women's clothing"]


@pytest.fixture
def test_settings() -> Settings:
    """Settings pointing at in-memory SQLite and a fake seed source."""
    return Settings(
        ENVIRONMENT="test",
        DATABASE_URL="sqlite+aiosqlite:///:memory:",
        SEED_DATA_URL=SEED_URL,
        LOG_FORMAT="console",
    )


@pytest_asyncio.fixture
async def test_engine(test_settings):
    """Fresh in-memory database with all tables created."""
    # One shared connection so the app and the test see the same in-memory database
    engine = create_async_engine(
        test_settings.DATABASE_URL,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    await init_db(engine)

    yield engine

    await engine.dispose()


@pytest_asyncio.fixture
async def db_session(test_engine) -> AsyncGenerator[AsyncSession, None]:
    """Session on the test engine."""
    async with create_session_factory(test_engine)() as session:
        yield session


# ============================================================================
# Seed source
# ============================================================================

@pytest.fixture
def seed_payload() -> List[Dict[str, Any]]:
    """Seed records in the shape served by the remote source."""
    return [
        {
            "id": 1,
            "title": "Fjallraven Backpack",
            "price": 329.85,
            "description": "Your perfect pack for everyday use",
            "category": "men's clothing",
            "image": "https://example.test/images/1.jpg",
            "sold": False,
            "dateOfSale": "2021-11-27T20:29:54+05:30",
        },
        {
            "id": 2,
            "title": "Slim Fit T-Shirt",
            "price": 44.6,
            "description": "Slim-fitting style",
            "category": "men's clothing",
            "image": "https://example.test/images/2.jpg",
            "sold": True,
            "dateOfSale": "2021-10-27T20:29:54+05:30",
        },
        {
            "id": 3,
            "title": "Gold Bracelet",
            "price": 6950,
            "description": "Classic bracelet",
            "category": "jewelery",
            "image": "https://example.test/images/3.jpg",
            "sold": True,
            "dateOfSale": "2022-11-03T10:00:00Z",
        },
    ]


@pytest.fixture
def seed_responder(seed_payload) -> Dict[str, Any]:
    """Mutable description of what the fake seed source answers with."""
    return {"status_code": 200, "json": seed_payload, "content": None, "error": None, "calls": 0}


@pytest_asyncio.fixture
async def seed_http_client(seed_responder) -> AsyncGenerator[httpx.AsyncClient, None]:
    """HTTP client whose transport serves the fake seed source."""

    def handler(request: httpx.Request) -> httpx.Response:
        seed_responder["calls"] += 1
        if seed_responder["error"] is not None:
            raise seed_responder["error"]
        if seed_responder["content"] is not None:
            return httpx.Response(seed_responder["status_code"], content=seed_responder["content"])
        return httpx.Response(seed_responder["status_code"], json=seed_responder["json"])

    async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
        yield client


@pytest.fixture
def test_app(test_settings, test_engine, seed_http_client):
    """Application with the test engine and seed client injected."""
    app = create_application(test_settings, engine=test_engine, http_client=seed_http_client)
    yield app
    app.dependency_overrides.clear()


@pytest_asyncio.fixture
async def client(test_app) -> AsyncGenerator[AsyncClient, None]:
    """Create test client for the test application."""
    async with AsyncClient(transport=httpx.ASGITransport(app=test_app), base_url="http://testserver") as test_client:
        yield test_client


# ============================================================================
# Data Generator Fixtures
# ============================================================================

@pytest.fixture
def transaction_data_generator() -> Callable[..., Dict[str, Any]]:
    """Generate synthetic product transaction data."""
    def generate_transaction(**overrides):
        defaults = {
            "id": fake.random_int(min=1, max=100),
            "title": fake.catch_phrase(),
            "price": float(fake.random_int(min=0, max=1500)),
            "description": fake.text(max_nb_chars=120),
            "category": fake.random_element(CATEGORIES),
            "image": fake.image_url(),
            "sold": fake.boolean(),
            "date_of_sale": fake.date_time_between(
                start_date=datetime(2021, 1, 1), end_date=datetime(2023, 12, 31)
            ),
        }
        defaults.update(overrides)
        return defaults

    return generate_transaction


@pytest.fixture
def insert_transactions(db_session: AsyncSession):
    """Insert product transactions built from keyword dicts."""
    async def insert(records: List[Dict[str, Any]]) -> List[ProductTransaction]:
        rows = [ProductTransaction(**record) for record in records]
        db_session.add_all(rows)
        await db_session.commit()
        return rows

    return insert


@pytest_asyncio.fixture
async def scenario_transactions(insert_transactions, transaction_data_generator):
    """Two March records: one sold at 50, one unsold at 150."""
    return await insert_transactions([
        transaction_data_generator(
            price=50.0, sold=True, category="electronics", date_of_sale=datetime(2023, 3, 5)
        ),
        transaction_data_generator(
            price=150.0, sold=False, category="jewelery", date_of_sale=datetime(2023, 3, 10)
        ),
    ])


@pytest_asyncio.fixture
async def random_transactions(insert_transactions, transaction_data_generator):
    """A few hundred synthetic records spread across all months."""
    return await insert_transactions([transaction_data_generator() for _ in range(300)])
