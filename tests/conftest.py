"""Pytest configuration and fixtures."""

import os
from datetime import UTC, datetime

import pytest

# Keep favorites profiles and the admin password out of the real environment
os.environ.setdefault("ADMIN_PASSWORD", "test-admin-password")
os.environ.setdefault("FAVORITES_DIR", "./test_favorites")

from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy import create_engine  # noqa: E402
from sqlalchemy.orm import sessionmaker  # noqa: E402

from src.config import get_settings  # noqa: E402
from src.database import Base, get_db  # noqa: E402
from src.main import app  # noqa: E402
from src.models.flavor import Flavor as FlavorRow  # noqa: E402

ADMIN_PASSWORD = os.environ["ADMIN_PASSWORD"]

# Use test database - PostgreSQL in Docker, SQLite locally
if os.getenv("DATABASE_URL"):
    # Running in Docker - use PostgreSQL test database
    SQLALCHEMY_DATABASE_URL = os.getenv("DATABASE_URL").replace("/flavor_catalog", "/flavor_catalog_test")
else:
    # Running locally - use SQLite
    SQLALCHEMY_DATABASE_URL = "sqlite:///./test.db"

connect_args = {"check_same_thread": False} if "sqlite" in SQLALCHEMY_DATABASE_URL else {}
engine = create_engine(SQLALCHEMY_DATABASE_URL, connect_args=connect_args)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture(scope="session", autouse=True)
def setup_test_database():
    """Create test database schema once at the start of the test session."""
    if "postgresql" in SQLALCHEMY_DATABASE_URL:
        # For PostgreSQL, create the test database
        from sqlalchemy_utils import create_database, database_exists

        # Create test database if it doesn't exist
        if not database_exists(SQLALCHEMY_DATABASE_URL):
            create_database(SQLALCHEMY_DATABASE_URL)

    Base.metadata.create_all(bind=engine)
    yield
    # Don't drop database - just leave it for next run (each test cleans up after itself)


@pytest.fixture(scope="function", autouse=True)
def db():
    """Create a fresh database session for each test with cleanup."""
    session = TestingSessionLocal()

    yield session

    # Clean up all data after test
    session.rollback()
    for table in reversed(Base.metadata.sorted_tables):
        session.execute(table.delete())
    session.commit()
    session.close()


@pytest.fixture(scope="function")
def favorites_dir(tmp_path, monkeypatch):
    """Point favorites profiles at a per-test directory."""
    monkeypatch.setattr(get_settings(), "favorites_dir", str(tmp_path))
    return tmp_path


@pytest.fixture(scope="function")
def client(db, favorites_dir):
    """Create a test client with database override."""

    def override_get_db():
        try:
            yield db
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def admin_headers(client):
    """Log in as admin and return auth headers."""
    response = client.post("/api/v1/admin/login", json={"password": ADMIN_PASSWORD})
    assert response.status_code == 200
    token = response.json()["access_token"]
    return {"Authorization": f"Bearer {token}"}


def make_flavor_row(**overrides) -> FlavorRow:
    """Build an unsaved flavor row with sensible defaults."""
    values = {
        "flavor_name": "Mango Ice",
        "manufacturer": "Cloud Co",
        "description": "Ripe mango with a cool finish.",
        "short_description": "Mango and menthol",
        "type": "E-Liquid",
        "categories": ["Fruit", "Menthol"],
        "variants": [{"size": "60ml", "price": 19.99, "type": "E-Liquid", "nic_levels": [0, 3, 6]}],
        "vg_pg_ratio": "70/30",
        "image_url": None,
        "date_added": datetime(2024, 1, 1, tzinfo=UTC),
    }
    values.update(overrides)
    return FlavorRow(**values)


@pytest.fixture
def sample_catalog(db):
    """Seed a small catalog covering both variant types."""
    rows = {
        "mango": make_flavor_row(),
        "custard": make_flavor_row(
            flavor_name="Vanilla Custard",
            manufacturer="Bakehouse",
            description="Creamy vanilla custard.",
            short_description="",
            type="Both",
            categories=["Dessert"],
            variants=[
                {"size": "100ml", "price": 24.5, "type": "E-Liquid", "nic_levels": [3, 6]},
                {"size": "30ml", "price": 15, "type": "Salt Nic", "nic_levels": [35, 50]},
            ],
            vg_pg_ratio="80/20",
            date_added=datetime(2024, 3, 1, tzinfo=UTC),
        ),
        "berry": make_flavor_row(
            flavor_name="Berry Salt",
            manufacturer="Cloud Co",
            description="Mixed berries.",
            type="Salt Nic",
            categories=["Fruit"],
            variants=[{"size": "30ml", "price": 12, "type": "Salt Nic", "nic_levels": [20, 35]}],
            vg_pg_ratio="50/50",
            date_added=datetime(2024, 2, 1, tzinfo=UTC),
        ),
    }
    db.add_all(rows.values())
    db.commit()
    return {key: row.id for key, row in rows.items()}


def valid_form(**overrides) -> dict:
    """A flavor form submission that passes validation."""
    form = {
        "flavor_name": "Strawberry Milk",
        "manufacturer": "Dairy Dreams",
        "description": "Strawberries blended into cold milk.",
        "short_description": "",
        "categories": ["Drinks", "Fruit"],
        "vg_pg_ratio": "70/30",
        "image_url": "",
        "variants": [
            {"size": "60", "price": "21.50", "type": "E-Liquid", "nic_levels": [3, 0]},
        ],
    }
    form.update(overrides)
    return form


@pytest.fixture
def flavor_form():
    """Factory for valid admin form submissions."""
    return valid_form


@pytest.fixture
def flavor_row():
    """Factory for unsaved flavor rows."""
    return make_flavor_row
