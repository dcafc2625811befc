from decimal import Decimal

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.pool import StaticPool

from storefront.config import Settings
from storefront.database import Database
from storefront.main import create_app
from storefront.models.product import Product


TEST_SECRET = "test-secret-key-long-enough-for-hs256-signing"


def make_settings(**overrides) -> Settings:
    """Settings for tests: in-memory SQLite, no seeding, cheap bcrypt."""
    values = {
        "DATABASE_URL": "sqlite://",
        "JWT_SECRET_KEY": TEST_SECRET,
        "BCRYPT_ROUNDS": 4,
        "SEED_DEMO_PRODUCTS": False,
    }
    values.update(overrides)
    return Settings(**values)


@pytest.fixture(scope="function")
def settings():
    return make_settings()


@pytest.fixture(scope="function")
def database(settings):
    """Fresh in-memory database shared by the app and the test session."""
    database = Database(settings.DATABASE_URL, poolclass=StaticPool)
    database.create_tables()

    yield database

    database.drop_tables()
    database.dispose()


@pytest.fixture(scope="function")
def client(settings, database):
    """Create test client with fresh database for each test."""
    app = create_app(settings, database)

    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture(scope="function")
def db_session(database):
    """Create database session for direct database access in tests."""
    with database.session() as session:
        yield session


@pytest.fixture
def make_product(db_session):
    """Insert a product straight into the database and return its ID."""
    def _make(name="Wireless Headphones", price="99.99", stock=50, image_url=None):
        product = Product(
            product_name=name,
            description=f"{name} description",
            price=Decimal(price),
            image_url=image_url or f"https://example.com/{name.replace(' ', '-')}.png",
            stock_quantity=stock,
        )
        db_session.add(product)
        db_session.commit()
        return product.product_id
    return _make


@pytest.fixture
def register_user(client):
    def _register(username="alice", password="secret1"):
        response = client.post(
            "/api/auth/register",
            json={"username": username, "password": password}
        )
        assert response.status_code == 201
        return response.json()["userId"]
    return _register


@pytest.fixture
def login(client):
    def _login(username="alice", password="secret1"):
        response = client.post(
            "/api/auth/login",
            json={"username": username, "password": password}
        )
        assert response.status_code == 200
        return {"Authorization": f"Bearer {response.json()['token']}"}
    return _login


@pytest.fixture
def auth_headers(register_user, login):
    """Authorization headers for a freshly registered 'alice'."""
    register_user("alice", "secret1")
    return login("alice", "secret1")


@pytest.fixture
def file_database(tmp_path):
    """File-backed SQLite database whose sessions use separate connections."""
    database = Database(f"sqlite:///{tmp_path / 'storefront.db'}")
    database.create_tables()

    yield database

    database.dispose()
