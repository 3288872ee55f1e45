from django.contrib import admin

from .models import Campground, Booking, Review
from .services import RatingAggregator


@admin.action(description="Recompute rating aggregate")
def recompute_ratings(modeladmin, request, qs):
    aggregator = RatingAggregator()
    for campground_id in qs.values_list('id', flat=True):
        aggregator.recompute(campground_id)


@admin.register(Campground)
class CampgroundAdmin(admin.ModelAdmin):
    list_display = (
        'id', 'name', 'district', 'province', 'region',
        'price', 'average_rating', 'reviews_count', 'created_at'
    )
    list_filter = (
        'region',
        'province',
        'created_at',
    )
    date_hierarchy = 'created_at'
    search_fields = ('id', 'name', 'address', 'district', 'province', 'description')
    # maintained from reviews
    readonly_fields = ('average_rating', 'reviews_count', 'created_at')
    ordering = ('-created_at',)
    actions = (recompute_ratings,)


@admin.register(Booking)
class BookingAdmin(admin.ModelAdmin):
    list_display = (
        'id', 'campground', 'user_email',
        'booking_date', 'payment_status', 'created_at'
    )
    list_filter = (
        'payment_status',
        'campground',
        'booking_date',
        'created_at',
    )
    date_hierarchy = 'booking_date'
    search_fields = ('campground__name', 'user__email')
    autocomplete_fields = ('campground', 'user')
    ordering = ('-created_at',)
    list_select_related = ('campground', 'user')

    @admin.display(ordering='user__email', description='User')
    def user_email(self, obj):
        user = getattr(obj, 'user', None)
        return getattr(user, 'email', None)


@admin.register(Review)
class ReviewAdmin(admin.ModelAdmin):
    list_display = ('id', 'campground', 'user', 'rating', 'created_at')
    list_filter = ('rating', 'campground', 'created_at')
    date_hierarchy = 'created_at'
    search_fields = ('campground__name', 'user__email', 'comment')
    autocomplete_fields = ('campground', 'user')
    readonly_fields = ('created_at', 'updated_at')
    list_select_related = ('campground', 'user')

    def save_model(self, request, obj, form, change):
        previous_campground_id = None
        if change:
            previous_campground_id = (
                Review.objects.filter(pk=obj.pk).values_list('campground_id', flat=True).first()
            )
        super().save_model(request, obj, form, change)
        _recompute(previous_campground_id, obj.campground_id)

    def delete_model(self, request, obj):
        campground_id = obj.campground_id
        super().delete_model(request, obj)
        _recompute(campground_id)

    def delete_queryset(self, request, queryset):
        campground_ids = set(queryset.values_list('campground_id', flat=True))
        super().delete_queryset(request, queryset)
        _recompute(*campground_ids)


def _recompute(*campground_ids):
    aggregator = RatingAggregator()
    for campground_id in {pk for pk in campground_ids if pk}:
        aggregator.recompute(campground_id)
