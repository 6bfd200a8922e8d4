"""Outbound e-mail rendering.

Templates are plain Django template strings so they travel with the code;
every message carries a plain-text body and an HTML alternative.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict

import structlog
from django.conf import settings
from django.core.mail import EmailMultiAlternatives
from django.template import Context, Template

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class EmailTemplate:
    name: str
    subject: str
    text_body: str
    html_body: str


RESERVATION_CREATED = EmailTemplate(
    name="reservation_created",
    subject=(
        "{% autoescape off %}Nova reserva no {{ site_name }}: "
        "{{ quantity }}x {{ product_name }}{% endautoescape %}"
    ),
    text_body="""{% autoescape off %}Olá, {{ seller_name }}!

{{ buyer_name }} reservou {{ quantity }} unidade(s) de "{{ product_name }}".
Contato do comprador: {{ buyer_contact }}

Gerencie suas reservas em {{ reservations_url }}
{% endautoescape %}""",
    html_body="""<html><body>
<h2>Nova reserva!</h2>
<p>Olá, <strong>{{ seller_name }}</strong>!</p>
<p><strong>{{ buyer_name }}</strong> reservou {{ quantity }} unidade(s) de
<strong>"{{ product_name }}"</strong>.</p>
<p>Contato do comprador: {{ buyer_contact }}</p>
<p><a href="{{ reservations_url }}">Ver minhas reservas</a></p>
</body></html>""",
)

REVIEW_REQUEST = EmailTemplate(
    name="review_request",
    subject=(
        "{% autoescape off %}Avalie sua compra de "
        '"{{ product_name }}"{% endautoescape %}'
    ),
    text_body="""{% autoescape off %}Olá, {{ buyer_name }}!

Esperamos que você esteja gostando de "{{ product_name }}", vendido por {{ seller_name }}.
Sua opinião ajuda outros compradores do {{ site_name }}.

Avalie agora: {{ review_url }}
{% endautoescape %}""",
    html_body="""<html><body>
<h2>Gostou da sua compra?</h2>
<p>Olá, <strong>{{ buyer_name }}</strong>!</p>
<p>Esperamos que você esteja gostando de <strong>"{{ product_name }}"</strong>,
vendido por {{ seller_name }}.</p>
<p><a href="{{ review_url }}">Avaliar agora</a></p>
</body></html>""",
)


def render(template_string: str, context: Dict[str, Any]) -> str:
    return Template(template_string).render(Context(context))


def site_link(path: str) -> str:
    return f"{settings.SITE_URL.rstrip('/')}/{path.lstrip('/')}"


def send_templated_email(template: EmailTemplate, to: str, context: Dict[str, Any]) -> int:
    """Render *template* with *context* and send it to *to*.

    Delivery errors propagate so the calling task can retry.
    """
    full_context = {"site_name": settings.SITE_NAME, **context}
    msg = EmailMultiAlternatives(
        subject=render(template.subject, full_context).strip(),
        body=render(template.text_body, full_context),
        from_email=settings.DEFAULT_FROM_EMAIL,
        to=[to],
    )
    msg.attach_alternative(render(template.html_body, full_context), "text/html")
    sent = msg.send(fail_silently=False)
    logger.info("email.sent", template=template.name, recipients=1)
    return sent
