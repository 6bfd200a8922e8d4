from decimal import Decimal

import pytest
from django.contrib.auth import get_user_model
from django.core.cache import cache
from rest_framework.test import APIClient

from modules.accounts.identity import Actor
from modules.accounts.models import UserRole
from modules.products.models import Product
from modules.products.repositories.django_repository import ProductDjangoRepository
from modules.reservations.repositories.django_repository import (
    ReservationDjangoRepository,
)
from modules.reservations.services import ReservationService

User = get_user_model()


@pytest.fixture(autouse=True)
def _use_db(db):
    """Automatically use the test database for all tests."""


@pytest.fixture(autouse=True)
def _clear_cache():
    """Throttle counters live in the cache; start every test from zero."""
    cache.clear()
    yield
    cache.clear()


@pytest.fixture()
def api_client():
    """DRF APIClient for testing API endpoints."""
    return APIClient()


@pytest.fixture()
def api_client_with_correlation(api_client):
    """APIClient pre-configured with a known correlation ID header."""
    cid = "test-correlation-id-fixture"
    api_client.defaults["HTTP_X_REQUEST_ID"] = cid
    return api_client, cid


# ---------------------------------------------------------------------------
# Users
# ---------------------------------------------------------------------------


@pytest.fixture()
def seller():
    return User.objects.create_user(
        username="seller",
        password="testpass123",
        email="seller@example.com",
        role=UserRole.SELLER,
        store_name="Brechó Teste",
        whatsapp_link="https://wa.me/5511999999999",
    )


@pytest.fixture()
def other_seller():
    return User.objects.create_user(
        username="other_seller",
        password="testpass123",
        email="other@example.com",
        role=UserRole.SELLER,
    )


@pytest.fixture()
def buyer():
    return User.objects.create_user(
        username="buyer",
        password="testpass123",
        email="buyer@example.com",
        first_name="Carla",
        role=UserRole.BUYER,
    )


@pytest.fixture()
def second_buyer():
    return User.objects.create_user(
        username="second_buyer",
        password="testpass123",
        email="second@example.com",
        role=UserRole.BUYER,
    )


@pytest.fixture()
def admin_account():
    return User.objects.create_user(
        username="staff_admin",
        password="testpass123",
        email="admin@example.com",
        role=UserRole.ADMIN,
    )


# ---------------------------------------------------------------------------
# Catalogue / services
# ---------------------------------------------------------------------------


@pytest.fixture()
def make_product(seller):
    def _make(quantity: int = 5, owner=None, **extra) -> Product:
        return Product.objects.create(
            seller=owner or seller,
            name=extra.pop("name", "Jaqueta Jeans"),
            price=extra.pop("price", Decimal("89.90")),
            quantity=quantity,
            **extra,
        )

    return _make


@pytest.fixture()
def product(make_product):
    return make_product(quantity=5)


@pytest.fixture()
def reservation_service():
    return ReservationService(
        reservation_repository=ReservationDjangoRepository(),
        product_repository=ProductDjangoRepository(),
    )


@pytest.fixture()
def actor_for():
    return Actor.from_user


# ---------------------------------------------------------------------------
# Authenticated clients
# ---------------------------------------------------------------------------


def _client_for(user) -> APIClient:
    client = APIClient()
    client.force_authenticate(user=user)
    return client


@pytest.fixture()
def seller_client(seller):
    return _client_for(seller)


@pytest.fixture()
def other_seller_client(other_seller):
    return _client_for(other_seller)


@pytest.fixture()
def buyer_client(buyer):
    return _client_for(buyer)


@pytest.fixture()
def admin_api_client(admin_account):
    return _client_for(admin_account)
