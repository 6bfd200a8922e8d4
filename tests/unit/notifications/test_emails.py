"""Unit tests for e-mail rendering and delivery."""

from __future__ import annotations

import pytest
from django.core import mail

from modules.notifications.emails import (
    RESERVATION_CREATED,
    REVIEW_REQUEST,
    render,
    send_templated_email,
    site_link,
)

pytestmark = pytest.mark.unit


@pytest.fixture()
def created_context():
    return {
        "seller_name": "Brechó Teste",
        "buyer_name": "Carla & Cia",
        "buyer_contact": "buyer@example.com",
        "product_name": 'Jaqueta "Vintage"',
        "quantity": 2,
        "reservations_url": "https://marketplace.test/dashboard/reservations",
    }


class TestSiteLink:
    def test_joins_without_double_slash(self, settings):
        settings.SITE_URL = "https://loja.example/"
        assert site_link("/review/abc") == "https://loja.example/review/abc"


class TestRendering:
    def test_text_body_is_not_escaped(self, created_context):
        body = render(RESERVATION_CREATED.text_body, created_context)
        assert "Carla & Cia reservou 2 unidade(s)" in body
        assert '"Jaqueta "Vintage""' in body

    def test_html_body_is_escaped(self, created_context):
        html = render(RESERVATION_CREATED.html_body, created_context)
        assert "Carla &amp; Cia" in html

    def test_review_request_contains_link(self):
        body = render(
            REVIEW_REQUEST.text_body,
            {
                "buyer_name": "Carla",
                "seller_name": "Brechó Teste",
                "product_name": "Bolsa",
                "review_url": "https://marketplace.test/review/tok",
                "site_name": "Marketplace",
            },
        )
        assert "Avalie agora: https://marketplace.test/review/tok" in body


class TestSend:
    def test_sends_multipart_message(self, created_context, settings):
        settings.SITE_NAME = "Brechó Online"

        sent = send_templated_email(RESERVATION_CREATED, "seller@example.com", created_context)

        assert sent == 1
        message = mail.outbox[0]
        assert message.subject == 'Nova reserva no Brechó Online: 2x Jaqueta "Vintage"'
        assert message.from_email == "no-reply@marketplace.test"
        assert message.to == ["seller@example.com"]
        content, mimetype = message.alternatives[0]
        assert mimetype == "text/html"
        assert "<h2>Nova reserva!</h2>" in content
