"""HTTP-level tests for the reservation endpoints."""

from __future__ import annotations

import uuid

import pytest

from modules.reservations.models import Reservation

pytestmark = pytest.mark.integration

URL = "/api/v1/reservations/"


def _detail(reservation_id) -> str:
    return f"{URL}{reservation_id}/"


@pytest.fixture()
def reservation(buyer_client, product):
    response = buyer_client.post(URL, {"product_id": str(product.id), "quantity": 3}, format="json")
    assert response.status_code == 201
    return Reservation.objects.get(pk=response.data["id"])


class TestCreate:
    def test_created(self, buyer_client, product, buyer):
        response = buyer_client.post(URL, {"product_id": str(product.id)}, format="json")

        assert response.status_code == 201
        assert response.data["status"] == "PENDING"
        assert response.data["quantity"] == 1
        assert response.data["buyer_id"] == buyer.pk
        assert response.data["product_name"] == product.name
        assert response.data["buyer_contact"] == "buyer@example.com"
        assert len(response.data["status_history"]) == 1

    def test_insufficient_stock(self, buyer_client, product):
        response = buyer_client.post(
            URL, {"product_id": str(product.id), "quantity": 6}, format="json"
        )
        assert response.status_code == 400

    def test_zero_quantity(self, buyer_client, product):
        response = buyer_client.post(
            URL, {"product_id": str(product.id), "quantity": 0}, format="json"
        )
        assert response.status_code == 400

    def test_unknown_product(self, buyer_client):
        response = buyer_client.post(URL, {"product_id": str(uuid.uuid4())}, format="json")
        assert response.status_code == 404

    def test_own_product(self, seller_client, product):
        response = seller_client.post(URL, {"product_id": str(product.id)}, format="json")
        assert response.status_code == 403

    def test_requires_authentication(self, api_client, product):
        response = api_client.post(URL, {"product_id": str(product.id)}, format="json")
        assert response.status_code == 401


class TestTransition:
    def test_seller_marks_sold(self, seller_client, reservation, product):
        response = seller_client.patch(_detail(reservation.id), {"status": "SOLD"}, format="json")

        assert response.status_code == 200
        assert response.data["status"] == "SOLD"
        product.refresh_from_db()
        assert product.quantity == 2

    def test_review_token_never_exposed(self, seller_client, buyer_client, reservation):
        response = seller_client.patch(_detail(reservation.id), {"status": "SOLD"}, format="json")
        assert "review_token" not in response.data

        as_buyer = buyer_client.get(_detail(reservation.id))
        assert "review_token" not in as_buyer.data
        assert all("review_token" not in row for row in buyer_client.get(URL).data["results"])

    def test_lowercase_status_accepted(self, seller_client, reservation):
        response = seller_client.patch(
            _detail(reservation.id), {"status": "confirmed"}, format="json"
        )
        assert response.status_code == 200
        assert response.data["status"] == "CONFIRMED"

    def test_unknown_status(self, seller_client, reservation):
        response = seller_client.patch(
            _detail(reservation.id), {"status": "SHIPPED"}, format="json"
        )
        assert response.status_code == 400

    def test_missing_status(self, seller_client, reservation):
        response = seller_client.patch(_detail(reservation.id), {}, format="json")
        assert response.status_code == 400

    def test_oversell(self, seller_client, reservation, product):
        product.quantity = 2
        product.save(update_fields=["quantity"])

        response = seller_client.patch(_detail(reservation.id), {"status": "SOLD"}, format="json")

        assert response.status_code == 400
        reservation.refresh_from_db()
        assert reservation.status == "PENDING"

    def test_terminal_status(self, seller_client, reservation):
        seller_client.patch(_detail(reservation.id), {"status": "CANCELED"}, format="json")
        response = seller_client.patch(
            _detail(reservation.id), {"status": "PENDING"}, format="json"
        )
        assert response.status_code == 400

    def test_other_seller_forbidden(self, other_seller_client, reservation):
        response = other_seller_client.patch(
            _detail(reservation.id), {"status": "SOLD"}, format="json"
        )
        assert response.status_code == 403

    def test_other_seller_forbidden_for_unknown_status(self, other_seller_client, reservation):
        response = other_seller_client.patch(
            _detail(reservation.id), {"status": "SHIPPED"}, format="json"
        )
        assert response.status_code == 403

    def test_buyer_forbidden(self, buyer_client, reservation):
        response = buyer_client.patch(_detail(reservation.id), {"status": "SOLD"}, format="json")
        assert response.status_code == 403

    def test_not_found(self, seller_client):
        response = seller_client.patch(_detail(uuid.uuid4()), {"status": "SOLD"}, format="json")
        assert response.status_code == 404

    def test_garbage_id_is_not_found(self, seller_client):
        response = seller_client.patch(_detail("not-a-uuid"), {"status": "SOLD"}, format="json")
        assert response.status_code == 404


class TestReadEndpoints:
    def test_buyer_lists_own_reservations(self, buyer_client, reservation, api_client, second_buyer):
        response = buyer_client.get(URL)
        assert response.status_code == 200
        assert response.data["count"] == 1
        assert response.data["results"][0]["id"] == str(reservation.id)

        api_client.force_authenticate(user=second_buyer)
        assert api_client.get(URL).data["count"] == 0

    def test_retrieve_by_stranger(self, api_client, second_buyer, reservation):
        api_client.force_authenticate(user=second_buyer)
        assert api_client.get(_detail(reservation.id)).status_code == 403

    def test_sales_dashboard(self, seller_client, other_seller_client, reservation):
        response = seller_client.get(f"{URL}sales/")
        assert response.status_code == 200
        assert [row["id"] for row in response.data["results"]] == [str(reservation.id)]

        assert other_seller_client.get(f"{URL}sales/").data["count"] == 0

    def test_sales_dashboard_filters_by_status(self, seller_client, reservation):
        assert seller_client.get(f"{URL}sales/", {"status": "pending"}).data["count"] == 1
        assert seller_client.get(f"{URL}sales/", {"status": "SOLD"}).data["count"] == 0

    def test_sales_dashboard_forbidden_for_buyers(self, buyer_client):
        assert buyer_client.get(f"{URL}sales/").status_code == 403

    def test_pending_count(self, seller_client, reservation):
        response = seller_client.get(f"{URL}sales/pending-count/")
        assert response.status_code == 200
        assert response.data == {"count": 1}


class TestArchiveEndpoint:
    def test_archive(self, seller_client, reservation, product):
        response = seller_client.delete(_detail(reservation.id))

        assert response.status_code == 204
        reservation.refresh_from_db()
        assert reservation.is_archived is True
        assert seller_client.get(f"{URL}sales/").data["count"] == 0
        product.refresh_from_db()
        assert product.quantity == 5

    def test_archive_twice(self, seller_client, reservation):
        seller_client.delete(_detail(reservation.id))
        assert seller_client.delete(_detail(reservation.id)).status_code == 204

    def test_archived_cannot_transition(self, seller_client, reservation):
        seller_client.delete(_detail(reservation.id))
        response = seller_client.patch(_detail(reservation.id), {"status": "SOLD"}, format="json")
        assert response.status_code == 400

    def test_other_seller_forbidden(self, other_seller_client, reservation):
        assert other_seller_client.delete(_detail(reservation.id)).status_code == 403


class TestMarkAsRead:
    def test_admin(self, admin_api_client, reservation):
        response = admin_api_client.patch(f"{_detail(reservation.id)}mark-as-read/")
        assert response.status_code == 200
        assert response.data["read_by_admin"] is True

    def test_seller_forbidden(self, seller_client, reservation):
        response = seller_client.patch(f"{_detail(reservation.id)}mark-as-read/")
        assert response.status_code == 403
