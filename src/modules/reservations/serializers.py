"""Reservation DRF serializers for API input/output.

``review_token`` is a credential for the review flow and is never part of
any output serializer.
"""

from __future__ import annotations

from rest_framework import serializers

from modules.reservations.models import Reservation, ReservationStatusHistory

# ---------------------------------------------------------------------------
# Input Serializers
# ---------------------------------------------------------------------------


class CreateReservationSerializer(serializers.Serializer):
    product_id = serializers.UUIDField()
    quantity = serializers.IntegerField(min_value=1, default=1)


class TransitionReservationSerializer(serializers.Serializer):
    status = serializers.CharField()
    notes = serializers.CharField(required=False, default="", allow_blank=True)


# ---------------------------------------------------------------------------
# Output Serializers (Read)
# ---------------------------------------------------------------------------


class StatusHistorySerializer(serializers.ModelSerializer):
    class Meta:
        model = ReservationStatusHistory
        fields = [
            "id",
            "old_status",
            "new_status",
            "user_id",
            "notes",
            "created_at",
        ]
        read_only_fields = fields


class ReservationListSerializer(serializers.ModelSerializer):
    """Lightweight serializer for listings (no nested history)."""

    product_name = serializers.CharField(source="product.name", read_only=True)
    seller_id = serializers.IntegerField(source="product.seller_id", read_only=True)
    buyer_name = serializers.CharField(source="buyer.display_name", read_only=True)

    class Meta:
        model = Reservation
        fields = [
            "id",
            "product_id",
            "product_name",
            "seller_id",
            "buyer_id",
            "buyer_name",
            "quantity",
            "status",
            "is_archived",
            "read_by_admin",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields


class ReservationSerializer(ReservationListSerializer):
    status_history = StatusHistorySerializer(many=True, read_only=True)
    buyer_contact = serializers.EmailField(source="buyer.email", read_only=True)

    class Meta(ReservationListSerializer.Meta):
        fields = ReservationListSerializer.Meta.fields + [
            "buyer_contact",
            "status_history",
        ]
        read_only_fields = fields
