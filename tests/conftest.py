import pytest
from fastapi.testclient import TestClient
from sqlalchemy.pool import StaticPool
from sqlmodel import Session, SQLModel

from store_inventory.core.config import Settings
from store_inventory.database import build_engine
from store_inventory.main import create_app
from store_inventory.models import Inventory, Product, Store


@pytest.fixture()
def engine():
    """Fresh in-memory database shared by every connection of one test."""
    engine = build_engine("sqlite://", poolclass=StaticPool)
    SQLModel.metadata.create_all(engine)
    yield engine
    SQLModel.metadata.drop_all(engine)
    engine.dispose()


@pytest.fixture()
def session(engine):
    with Session(engine) as session:
        yield session


@pytest.fixture()
def app_settings():
    return Settings(
        DATABASE_URL="sqlite://",
        RATE_LIMIT_ENABLED=False,
        SEED_ON_STARTUP=False,
        CORS_ORIGINS="http://localhost:3000",
    )


@pytest.fixture()
def app(app_settings, engine):
    return create_app(app_settings, engine=engine)


@pytest.fixture()
def client(app):
    return TestClient(app)


@pytest.fixture()
def make_store(session):
    def _make_store(name="Test Store", slug=None):
        store = Store(name=name, slug=slug or name.lower().replace(" ", "-"))
        session.add(store)
        session.commit()
        session.refresh(store)
        return store

    return _make_store


@pytest.fixture()
def make_product(session):
    def _make_product(sku="TEST-001", name="Test Product", category="Electronics", price=99.99):
        product = Product(sku=sku, name=name, category=category, price=price)
        session.add(product)
        session.commit()
        session.refresh(product)
        return product

    return _make_product


@pytest.fixture()
def make_inventory(session):
    def _make_inventory(store, product, quantity=10, low_stock_threshold=5):
        inventory = Inventory(
            store_id=store.id,
            product_id=product.id,
            quantity=quantity,
            low_stock_threshold=low_stock_threshold,
        )
        session.add(inventory)
        session.commit()
        session.refresh(inventory)
        return inventory

    return _make_inventory
