import django_filters

from modules.notifications.models import AdminNotification


class AdminNotificationFilter(django_filters.FilterSet):
    seller = django_filters.NumberFilter(field_name="seller_id")

    class Meta:
        model = AdminNotification
        fields = ["seller", "is_read"]
