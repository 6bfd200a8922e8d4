"""Reservation API views.

Exposes ``ReservationService`` via HTTP using a DRF ViewSet.  Domain
exceptions are caught and translated into HTTP status codes:

- 400: invalid payload, unknown status, disallowed transition,
  insufficient stock at creation, oversell when marking as sold.
- 403: the actor does not own the product (or is not an admin).
- 404: reservation or product not found.
"""

from __future__ import annotations

from django_filters.rest_framework import DjangoFilterBackend
from pydantic import ValidationError as PydanticValidationError
from rest_framework import status
from rest_framework.decorators import action
from rest_framework.filters import OrderingFilter
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.throttling import BaseThrottle
from rest_framework.viewsets import GenericViewSet

from modules.accounts.exceptions import NotAuthorized
from modules.accounts.identity import Actor
from modules.products.exceptions import ProductNotFound
from modules.products.repositories.django_repository import ProductDjangoRepository
from modules.reservations.dtos import CreateReservationDTO, TransitionReservationDTO
from modules.reservations.exceptions import (
    InsufficientStock,
    InvalidTransition,
    OversellError,
    ReservationNotFound,
)
from modules.reservations.filters import ReservationFilter
from modules.reservations.models import Reservation
from modules.reservations.repositories.django_repository import (
    ReservationDjangoRepository,
)
from modules.reservations.serializers import (
    CreateReservationSerializer,
    ReservationListSerializer,
    ReservationSerializer,
    TransitionReservationSerializer,
)
from modules.reservations.services import ReservationService

_ERROR_STATUS = {
    InsufficientStock: status.HTTP_400_BAD_REQUEST,
    InvalidTransition: status.HTTP_400_BAD_REQUEST,
    OversellError: status.HTTP_400_BAD_REQUEST,
    NotAuthorized: status.HTTP_403_FORBIDDEN,
    ProductNotFound: status.HTTP_404_NOT_FOUND,
    ReservationNotFound: status.HTTP_404_NOT_FOUND,
}
DOMAIN_ERRORS = tuple(_ERROR_STATUS)


def _error_response(exc: Exception) -> Response:
    return Response({"detail": str(exc)}, status=_ERROR_STATUS[type(exc)])


class ReservationViewSet(GenericViewSet):
    """ViewSet for Reservation operations.

    Uses ``ReservationService`` with injected repositories (DIP).
    """

    queryset = Reservation.objects.all()
    serializer_class = ReservationSerializer
    filterset_class = ReservationFilter
    ordering_fields = ["created_at", "status", "quantity"]
    ordering = ["-created_at", "-id"]
    filter_backends = [DjangoFilterBackend, OrderingFilter]

    def __init__(self, **kwargs) -> None:
        super().__init__(**kwargs)
        self._service = ReservationService(
            reservation_repository=ReservationDjangoRepository(),
            product_repository=ProductDjangoRepository(),
        )

    def get_throttles(self) -> list[BaseThrottle]:
        """Define escopos de throttling por ação."""
        throttle_scope: str | None
        if self.action == "create":
            throttle_scope = "reservation_creation"
        elif self.action in {"list", "retrieve", "sales"}:
            throttle_scope = "reservation_listing"
        else:
            throttle_scope = None
        self.throttle_scope = throttle_scope
        return super().get_throttles()

    def _actor(self, request: Request) -> Actor:
        return Actor.from_user(request.user)

    def _paginated(self, queryset) -> Response:
        page = self.paginate_queryset(self.filter_queryset(queryset))
        serializer = ReservationListSerializer(page, many=True)
        return self.get_paginated_response(serializer.data)

    # ------------------------------------------------------------------
    # Create
    # ------------------------------------------------------------------

    def create(self, request: Request) -> Response:
        """POST /api/v1/reservations/"""
        create_serializer = CreateReservationSerializer(data=request.data)
        create_serializer.is_valid(raise_exception=True)
        data = create_serializer.validated_data

        try:
            dto = CreateReservationDTO(
                product_id=data["product_id"], quantity=data["quantity"]
            )
        except (PydanticValidationError, ValueError) as exc:
            return Response(
                {"detail": str(exc)},
                status=status.HTTP_400_BAD_REQUEST,
            )

        try:
            reservation = self._service.create_reservation(self._actor(request), dto)
        except DOMAIN_ERRORS as exc:
            return _error_response(exc)

        reservation = self._service.get_reservation(
            self._actor(request), str(reservation.id)
        )
        return Response(
            ReservationSerializer(reservation).data, status=status.HTTP_201_CREATED
        )

    # ------------------------------------------------------------------
    # List / Retrieve
    # ------------------------------------------------------------------

    def list(self, request: Request) -> Response:
        """GET /api/v1/reservations/  (the buyer's own reservations)"""
        return self._paginated(self._service.list_buyer_reservations(self._actor(request)))

    def retrieve(self, request: Request, pk: str | None = None) -> Response:
        """GET /api/v1/reservations/{pk}/"""
        try:
            reservation = self._service.get_reservation(self._actor(request), str(pk))
        except DOMAIN_ERRORS as exc:
            return _error_response(exc)
        return Response(ReservationSerializer(reservation).data)

    @action(detail=False, methods=["get"], url_path="sales")
    def sales(self, request: Request) -> Response:
        """GET /api/v1/reservations/sales/  (seller dashboard)"""
        try:
            queryset = self._service.list_seller_reservations(self._actor(request))
        except DOMAIN_ERRORS as exc:
            return _error_response(exc)
        return self._paginated(queryset)

    @action(detail=False, methods=["get"], url_path="sales/pending-count")
    def pending_count(self, request: Request) -> Response:
        """GET /api/v1/reservations/sales/pending-count/"""
        return Response({"count": self._service.pending_count(self._actor(request))})

    # ------------------------------------------------------------------
    # Status transition / archival
    # ------------------------------------------------------------------

    def partial_update(self, request: Request, pk: str | None = None) -> Response:
        """PATCH /api/v1/reservations/{pk}/

        Body: ``{"status": "SOLD", "notes": "..."}``.
        """
        transition_serializer = TransitionReservationSerializer(data=request.data)
        transition_serializer.is_valid(raise_exception=True)

        try:
            dto = TransitionReservationDTO(**transition_serializer.validated_data)
        except (PydanticValidationError, ValueError) as exc:
            return Response(
                {"detail": str(exc)},
                status=status.HTTP_400_BAD_REQUEST,
            )

        actor = self._actor(request)
        try:
            self._service.transition_reservation(
                actor, str(pk), dto.status, notes=dto.notes
            )
            reservation = self._service.get_reservation(actor, str(pk))
        except DOMAIN_ERRORS as exc:
            return _error_response(exc)
        return Response(ReservationSerializer(reservation).data)

    def destroy(self, request: Request, pk: str | None = None) -> Response:
        """DELETE /api/v1/reservations/{pk}/  (archival, not deletion)"""
        try:
            self._service.archive_reservation(self._actor(request), str(pk))
        except DOMAIN_ERRORS as exc:
            return _error_response(exc)
        return Response(status=status.HTTP_204_NO_CONTENT)

    @action(detail=True, methods=["patch"], url_path="mark-as-read")
    def mark_as_read(self, request: Request, pk: str | None = None) -> Response:
        """PATCH /api/v1/reservations/{pk}/mark-as-read/  (admin only)"""
        try:
            self._service.mark_as_read(self._actor(request), str(pk))
            reservation = self._service.get_reservation(self._actor(request), str(pk))
        except DOMAIN_ERRORS as exc:
            return _error_response(exc)
        return Response(ReservationSerializer(reservation).data)
