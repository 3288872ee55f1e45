from rest_framework import serializers

from src.campgrounds.models import Campground


class PublicUserTinySerializer(serializers.Serializer):
    """Public projection for nested user references."""
    id = serializers.IntegerField()
    name = serializers.CharField(allow_blank=True, required=False)


class CampgroundSummarySerializer(serializers.ModelSerializer):
    """Campground fields embedded into bookings."""
    price = serializers.DecimalField(max_digits=10, decimal_places=2, coerce_to_string=False, read_only=True)

    class Meta:
        model = Campground
        fields = ("id", "name", "address", "district", "province", "postalcode", "region", "tel", "image", "price")
        read_only_fields = fields
