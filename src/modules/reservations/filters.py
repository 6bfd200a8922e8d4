import django_filters

from modules.reservations.models import Reservation


class ReservationFilter(django_filters.FilterSet):
    status = django_filters.CharFilter(field_name="status", lookup_expr="iexact")
    product = django_filters.UUIDFilter(field_name="product_id")
    buyer = django_filters.NumberFilter(field_name="buyer_id")
    start_date = django_filters.DateFilter(field_name="created_at", lookup_expr="gte")
    end_date = django_filters.DateFilter(field_name="created_at", lookup_expr="lte")

    class Meta:
        model = Reservation
        fields = ["status", "product", "buyer", "start_date", "end_date", "read_by_admin"]
