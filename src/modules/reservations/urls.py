"""Reservation URL configuration."""

from __future__ import annotations

from rest_framework.routers import DefaultRouter

from modules.reservations.views import ReservationViewSet

router = DefaultRouter(trailing_slash=True)
router.register("reservations", ReservationViewSet, basename="reservation")

urlpatterns = router.urls
