from django.apps import AppConfig


class ReservationsConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "modules.reservations"
    label = "reservations"

    def ready(self) -> None:
        from modules.reservations.events import (
            ReservationCreated,
            ReservationSold,
            ReservationStatusChanged,
        )
        from modules.reservations.handlers import (
            reservation_created_handler,
            reservation_sold_handler,
            reservation_status_changed_handler,
        )
        from shared.infrastructure.bus import event_bus

        event_bus.subscribe(ReservationCreated, reservation_created_handler)
        event_bus.subscribe(ReservationSold, reservation_sold_handler)
        event_bus.subscribe(ReservationStatusChanged, reservation_status_changed_handler)
