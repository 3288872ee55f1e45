from drf_spectacular.utils import extend_schema_field
from rest_framework import serializers

from src.campgrounds.models import Review
from src.campgrounds.models.review import COMMENT_MAX_LENGTH
from src.campgrounds.serializers.common import PublicUserTinySerializer


class ReviewSerializer(serializers.ModelSerializer):
    campground = serializers.IntegerField(source="campground_id", read_only=True)
    user = serializers.SerializerMethodField(read_only=True)
    createdAt = serializers.DateTimeField(source="created_at", read_only=True)
    updatedAt = serializers.DateTimeField(source="updated_at", read_only=True)

    class Meta:
        model = Review
        fields = ("id", "rating", "comment", "campground", "user", "createdAt", "updatedAt")
        read_only_fields = fields

    @extend_schema_field(PublicUserTinySerializer)
    def get_user(self, obj):
        u = getattr(obj, "user", None)
        if not u:
            return None
        return {"id": u.id, "name": u.name}


class ReviewWriteSerializer(serializers.Serializer):
    """Input for create (both fields required) and update (partial=True)."""
    rating = serializers.IntegerField(
        min_value=1, max_value=5,
        error_messages={
            "min_value": "Rating must be at least 1",
            "max_value": "Rating can not be more than 5",
        },
    )
    comment = serializers.CharField(
        max_length=COMMENT_MAX_LENGTH,
        error_messages={"blank": "Please add a review comment"},
    )
