import django_filters

from modules.products.models import Product


class ProductFilter(django_filters.FilterSet):
    seller = django_filters.NumberFilter(field_name="seller_id")
    name = django_filters.CharFilter(field_name="name", lookup_expr="icontains")
    min_price = django_filters.NumberFilter(field_name="price", lookup_expr="gte")
    max_price = django_filters.NumberFilter(field_name="price", lookup_expr="lte")
    available = django_filters.BooleanFilter(method="filter_available")

    class Meta:
        model = Product
        fields = ["seller", "name", "min_price", "max_price", "available", "is_sold"]

    def filter_available(self, queryset, name, value):
        if value:
            return queryset.filter(quantity__gt=0)
        return queryset.filter(quantity=0)
