"""Integration test for the ``seed_data`` management command."""

from io import StringIO

import pytest
from django.contrib.auth import get_user_model
from django.core.management import call_command

from modules.products.models import Product
from modules.reservations.constants import ReservationStatus
from modules.reservations.models import Reservation

pytestmark = pytest.mark.integration


def _seed(reservations: int = 12) -> str:
    out = StringIO()
    call_command("seed_data", reservations=reservations, stdout=out)
    return out.getvalue()


def test_seed_creates_consistent_data():
    output = _seed()

    assert "Seed completed: sellers=2, buyers=3, products=8" in output
    assert get_user_model().objects.filter(username="admin", is_superuser=True).exists()
    assert Product.objects.count() == 8

    for product in Product.objects.all():
        assert product.quantity >= 0
        assert product.is_sold == (product.quantity == 0)
    assert Reservation.objects.filter(status=ReservationStatus.SOLD, review_token=None).count() == 0


def test_seed_is_rerunnable():
    _seed(reservations=0)
    _seed(reservations=0)

    assert Product.objects.count() == 8
    assert get_user_model().objects.count() == 6
