from __future__ import annotations

from rest_framework import serializers

from modules.notifications.models import AdminNotification


class AdminNotificationSerializer(serializers.ModelSerializer):
    seller_name = serializers.CharField(source="seller.display_name", read_only=True)

    class Meta:
        model = AdminNotification
        fields = [
            "id",
            "seller_id",
            "seller_name",
            "reservation_id",
            "message",
            "contact_channel",
            "is_read",
            "created_at",
        ]
        read_only_fields = fields
