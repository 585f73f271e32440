from decimal import Decimal

import pytest
from fastapi.testclient import TestClient

from storefront.core.config import Settings
from storefront.core.session import Brand, SessionManager
from storefront.database import MemoryStorage
from storefront.main import create_app
from storefront.models import CartLine, Destination, Item

TACOMA = Destination(country="US", state="WA", city="Tacoma", postal_code="98402")
CALIFORNIA = Destination(country="US", state="CA", city="Los Angeles", postal_code="90012")


@pytest.fixture
def make_item():
    def _make_item(item_id="a", price="38", stock=10, payment_link=None, **fields):
        values = {
            "id": item_id,
            "name": f"Item {item_id}",
            "subtitle": "",
            "price": Decimal(price),
            "category": "Aroids",
            "type": "Cutting",
            "stock": stock,
            "payment_link": payment_link,
        }
        values.update(fields)
        return Item(**values)

    return _make_item


@pytest.fixture
def make_line():
    def _make_line(item_id="a", price="38", quantity=1, name=None):
        return CartLine(
            item_id=item_id,
            name=name or f"Item {item_id}",
            price=Decimal(price),
            quantity=quantity,
        )

    return _make_line


@pytest.fixture
def storage():
    return MemoryStorage()


@pytest.fixture
def brand():
    return Brand(name="T&T Botanica", email="hello@ttbotanica.com")


@pytest.fixture
def sessions(storage, brand):
    return SessionManager(brand=brand, default_destination=TACOMA, storage=storage)


@pytest.fixture
def app(storage):
    settings = Settings(data_dir=None, default_postal_code="98402")
    return create_app(settings=settings, storage=storage)


@pytest.fixture
def client(app):
    with TestClient(app) as test_client:
        yield test_client
