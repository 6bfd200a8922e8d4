"""Reservation service layer (Use Cases).

Orchestrates reservation creation, status transitions, archival and the
seller/buyer/admin queries.  Write operations define the unit-of-work
boundary with ``transaction.atomic``.

Business rules enforced:
- Stock is checked at creation (advisory) and enforced when entering SOLD.
- Rows are locked in a fixed order, product first and reservation second,
  so concurrent creations and transitions on one product serialize.
- Authorization uses the product's seller, which never changes, and runs
  before any row lock is taken.
- Side effects are dispatched from the outbox after commit only.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Dict, Optional
from uuid import UUID

import structlog
from django.db import transaction

from modules.accounts.exceptions import NotAuthorized
from modules.core.tasks import schedule_outbox_relay
from modules.products.exceptions import ProductNotFound
from modules.reservations.constants import ReservationStatus
from modules.reservations.events import (
    ReservationCreated,
    ReservationSold,
    ReservationStatusChanged,
)
from modules.reservations.exceptions import (
    InsufficientStock,
    InvalidTransition,
    OversellError,
    ReservationNotFound,
)
from modules.reservations.models import Reservation
from modules.reservations.state_machine import parse_status, transition

if TYPE_CHECKING:
    from django.db.models import QuerySet

    from modules.accounts.identity import Actor
    from modules.products.repositories.interfaces import IProductRepository
    from modules.reservations.dtos import CreateReservationDTO
    from modules.reservations.repositories.interfaces import IReservationRepository

logger = structlog.get_logger(__name__)


class ReservationService:
    """Application service for Reservation use-cases.

    Receives repositories via constructor injection (DIP).
    """

    def __init__(
        self,
        reservation_repository: IReservationRepository,
        product_repository: IProductRepository,
    ) -> None:
        self._reservation_repo = reservation_repository
        self._product_repo = product_repository

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    @transaction.atomic
    def create_reservation(self, actor: Actor, dto: CreateReservationDTO) -> Reservation:
        """Place a PENDING reservation (soft hold, stock is not decremented).

        Raises:
            ProductNotFound: product does not exist or was deleted.
            NotAuthorized: the actor is the product's seller.
            InsufficientStock: fewer units available than requested.
        """
        log = logger.bind(buyer_id=actor.user_id, product_id=str(dto.product_id))

        product = self._product_repo.get_for_update(str(dto.product_id))
        if not product:
            raise ProductNotFound(f"Product {dto.product_id} not found.")
        if product.seller_id == actor.user_id:
            raise NotAuthorized("You cannot reserve your own product.")
        if not product.state.can_fulfil(dto.quantity):
            log.warning(
                "reservation.insufficient_stock",
                requested=dto.quantity,
                available=product.quantity,
            )
            raise InsufficientStock(
                f"Requested {dto.quantity}, available {product.quantity}."
            )

        reservation = Reservation(
            buyer_id=actor.user_id,
            product_id=product.id,
            quantity=dto.quantity,
            status=ReservationStatus.PENDING,
        )
        reservation.add_domain_event(
            ReservationCreated(
                aggregate_id=reservation.id,
                seller_id=product.seller_id,
                buyer_id=actor.user_id,
                product_id=str(product.id),
                quantity=dto.quantity,
            )
        )
        self._reservation_repo.save(reservation)
        self._reservation_repo.add_history(
            reservation_id=reservation.id,
            status=ReservationStatus.PENDING,
            notes="Reservation created",
            user_id=actor.user_id,
        )

        if not product.is_reserved:
            product.apply_state(product.state.with_hold(True))
            self._product_repo.save_stock(product)

        transaction.on_commit(schedule_outbox_relay)
        log.info("reservation.created", reservation_id=str(reservation.id))
        return reservation

    def transition_reservation(
        self,
        actor: Actor,
        reservation_id: str,
        new_status: str,
        notes: str = "",
    ) -> Reservation:
        """Move a reservation to *new_status* and adjust the product ledger.

        The actor is authorized and then the status parsed before the
        transaction starts, so a stranger is refused whatever status they
        send. The read-compute-write cycle runs in ``_apply_transition``.

        A product soft-deleted after the reservation was made only accepts
        CANCELED, which releases the hold.

        Raises:
            InvalidTransition: unknown status, disallowed edge, or archived
                reservation.
            ReservationNotFound: reservation does not exist.
            NotAuthorized: actor is neither the product's seller nor an admin.
            OversellError: not enough stock to mark the reservation as sold.
        """
        reservation = self._reservation_repo.get_by_id(reservation_id)
        if not reservation:
            raise ReservationNotFound(f"Reservation {reservation_id} not found.")
        if not actor.can_manage(reservation.product.seller_id):
            logger.warning(
                "reservation.transition_forbidden",
                reservation_id=str(reservation_id),
                actor_id=actor.user_id,
            )
            raise NotAuthorized("Only the product's seller can update this reservation.")

        requested = parse_status(new_status)

        return self._apply_transition(
            actor, reservation.id, reservation.product_id, requested, notes
        )

    @transaction.atomic
    def _apply_transition(
        self,
        actor: Actor,
        reservation_id: UUID,
        product_id: UUID,
        requested: ReservationStatus,
        notes: str,
    ) -> Reservation:
        log = logger.bind(
            reservation_id=str(reservation_id),
            product_id=str(product_id),
            new_status=requested,
        )

        product = self._product_repo.get_for_update(
            str(product_id),
            include_deleted=requested == ReservationStatus.CANCELED,
        )
        if not product:
            raise ProductNotFound(f"Product {product_id} not found.")
        reservation = self._reservation_repo.get_for_update(str(reservation_id))
        if not reservation:
            raise ReservationNotFound(f"Reservation {reservation_id} not found.")
        if reservation.is_archived:
            raise InvalidTransition("Archived reservations cannot change status.")

        old_status = reservation.status
        has_other_holds = (
            self._reservation_repo.count_other_holds(product.id, reservation.id) > 0
        )
        try:
            result = transition(
                old_status,
                requested,
                product.state,
                reservation.state,
                has_other_holds=has_other_holds,
            )
        except (InvalidTransition, OversellError):
            log.warning("reservation.transition_rejected", old_status=old_status)
            raise

        if not result.changed:
            log.info("reservation.transition_noop", old_status=old_status)
            return reservation

        product.apply_state(result.product)
        self._product_repo.save_stock(product)

        reservation.status = result.status
        reservation.review_token = result.review_token
        reservation.add_domain_event(
            ReservationStatusChanged(
                aggregate_id=reservation.id,
                old_status=old_status,
                new_status=result.status,
                actor_id=actor.user_id,
                product_id=str(product.id),
                quantity_delta=result.quantity_delta,
            )
        )
        if result.token_issued:
            reservation.add_domain_event(
                ReservationSold(
                    aggregate_id=reservation.id,
                    buyer_id=reservation.buyer_id,
                    product_id=str(product.id),
                )
            )
        self._reservation_repo.save(reservation)
        self._reservation_repo.add_history(
            reservation_id=reservation.id,
            status=result.status,
            notes=notes,
            old_status=old_status,
            user_id=actor.user_id,
        )

        transaction.on_commit(schedule_outbox_relay)
        log.info(
            "reservation.transitioned",
            old_status=old_status,
            quantity_delta=result.quantity_delta,
            product_quantity=product.quantity,
            is_sold=product.is_sold,
            is_reserved=product.is_reserved,
        )
        return reservation

    def archive_reservation(self, actor: Actor, reservation_id: str) -> None:
        """Hide a reservation from the seller's view.  Idempotent.

        The product is never touched.

        Raises:
            ReservationNotFound: reservation does not exist.
            NotAuthorized: actor is neither the product's seller nor an admin.
        """
        reservation = self._reservation_repo.get_by_id(reservation_id)
        if not reservation:
            raise ReservationNotFound(f"Reservation {reservation_id} not found.")
        if not actor.can_manage(reservation.product.seller_id):
            raise NotAuthorized("Only the product's seller can archive this reservation.")

        if not self._reservation_repo.delete(str(reservation.id)):
            logger.info("reservation.archive_noop", reservation_id=str(reservation_id))

    @transaction.atomic
    def mark_as_read(self, actor: Actor, reservation_id: str) -> Reservation:
        """Flag a reservation as seen by the back-office.

        Raises:
            NotAuthorized: actor is not an administrator.
            ReservationNotFound: reservation does not exist.
        """
        if not actor.is_admin:
            raise NotAuthorized("Only administrators can mark reservations as read.")
        reservation = self._reservation_repo.get_for_update(reservation_id)
        if not reservation:
            raise ReservationNotFound(f"Reservation {reservation_id} not found.")
        reservation.mark_as_read()
        return reservation

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def get_reservation(self, actor: Actor, reservation_id: str) -> Reservation:
        """Visible to the buyer, the product's seller and administrators.

        Raises:
            ReservationNotFound: reservation does not exist.
            NotAuthorized: actor has no relation to the reservation.
        """
        reservation = self._reservation_repo.get_by_id(reservation_id)
        if not reservation:
            raise ReservationNotFound(f"Reservation {reservation_id} not found.")
        if reservation.buyer_id != actor.user_id and not actor.can_manage(
            reservation.product.seller_id
        ):
            raise NotAuthorized("You cannot view this reservation.")
        return reservation

    def list_buyer_reservations(self, actor: Actor) -> QuerySet[Reservation]:
        return self._reservation_repo.list_for_buyer(actor.user_id)

    def list_seller_reservations(
        self, actor: Actor, filters: Optional[Dict[str, Any]] = None
    ) -> QuerySet[Reservation]:
        """Sales dashboard: sellers see their products, admins see everything."""
        if actor.is_admin:
            return self._reservation_repo.list_for_seller(None, filters)
        if actor.is_seller:
            return self._reservation_repo.list_for_seller(actor.user_id, filters)
        raise NotAuthorized("Only sellers can list sales.")

    def pending_count(self, actor: Actor) -> int:
        if not actor.is_seller:
            return 0
        return self._reservation_repo.count_pending_for_seller(actor.user_id)
