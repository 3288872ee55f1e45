from rest_framework import serializers
from drf_spectacular.utils import extend_schema_field

from src.campgrounds.models import Booking
from src.campgrounds.serializers.common import CampgroundSummarySerializer, PublicUserTinySerializer

DATE_ERRORS = {
    "invalid": "Invalid date or format. Expected YYYY-MM-DD and a real calendar date."
}


class BookingSerializer(serializers.ModelSerializer):
    """Read projection: campground populated, user as {id, name}."""
    campground = CampgroundSummarySerializer(read_only=True)
    user = serializers.SerializerMethodField(read_only=True)
    bookingDate = serializers.DateField(source="booking_date", read_only=True)
    paymentStatus = serializers.CharField(source="payment_status", read_only=True)
    createdAt = serializers.DateTimeField(source="created_at", read_only=True)

    class Meta:
        model = Booking
        fields = ("id", "campground", "user", "bookingDate", "paymentStatus", "createdAt")
        read_only_fields = fields

    @extend_schema_field(PublicUserTinySerializer)
    def get_user(self, obj):
        u = getattr(obj, "user", None)
        if not u:
            return None
        return {"id": u.id, "name": u.name}


class BookingCreateSerializer(serializers.Serializer):
    # `campground` comes from the URL on /campgrounds/{id}/bookings/
    campground = serializers.IntegerField(required=False)
    bookingDate = serializers.DateField(error_messages=DATE_ERRORS)


class BookingUpdateSerializer(serializers.Serializer):
    bookingDate = serializers.DateField(error_messages=DATE_ERRORS)
