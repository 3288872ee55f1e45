from rest_framework import serializers

from src.campgrounds.models import Campground


class CampgroundSerializer(serializers.ModelSerializer):
    price = serializers.DecimalField(
        max_digits=10, decimal_places=2, coerce_to_string=False,
        min_value=0, required=False, allow_null=True,
    )
    # Aggregate is maintained from reviews, never written through the API
    averageRating = serializers.DecimalField(
        source="average_rating", max_digits=3, decimal_places=2, coerce_to_string=False, read_only=True,
    )
    reviewsCount = serializers.IntegerField(source="reviews_count", read_only=True)
    createdAt = serializers.DateTimeField(source="created_at", read_only=True)

    class Meta:
        model = Campground
        fields = (
            "id", "name", "address", "district", "province", "postalcode",
            "tel", "region", "image", "description", "price",
            "averageRating", "reviewsCount", "createdAt",
        )
        read_only_fields = ("id", "averageRating", "reviewsCount", "createdAt")
