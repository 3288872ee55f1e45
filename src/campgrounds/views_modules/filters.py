from django.db.models import Q
from django_filters import rest_framework as df

from ..models import Campground


class CampgroundFilter(df.FilterSet):
    price_min  = df.NumberFilter(field_name='price', lookup_expr='gte', label='Price min')
    price_max  = df.NumberFilter(field_name='price', lookup_expr='lte', label='Price max')
    rating_min = df.NumberFilter(field_name='average_rating', lookup_expr='gte', label='Min average rating')
    region     = df.CharFilter(field_name='region', lookup_expr='iexact', label='Region (exact)')
    province   = df.CharFilter(field_name='province', lookup_expr='icontains', label='Province (contains)')
    district   = df.CharFilter(field_name='district', lookup_expr='icontains', label='District (contains)')

    q = df.CharFilter(method='filter_q', label='Search')

    def filter_q(self, queryset, name, value):
        terms = [t.strip() for t in (value or "").split() if t.strip()]
        for term in terms:
            queryset = queryset.filter(
                Q(name__icontains=term) |
                Q(description__icontains=term) |
                Q(district__icontains=term) |
                Q(province__icontains=term)
            )
        return queryset

    class Meta:
        model = Campground
        fields = []
