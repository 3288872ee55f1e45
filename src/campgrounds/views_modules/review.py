import logging

from rest_framework import viewsets, permissions
from rest_framework.response import Response
from drf_spectacular.utils import (
    extend_schema_view, extend_schema, OpenApiParameter, OpenApiTypes, OpenApiResponse
)

from ..serializers import ReviewSerializer, ReviewWriteSerializer
from ..services import ReviewService

logger = logging.getLogger(__name__)


@extend_schema_view(
    list=extend_schema(
        summary="List reviews",
        description="All reviews, newest first",
        parameters=[
            OpenApiParameter("campground", OpenApiTypes.INT, description="Filter by campground ID"),
        ],
        responses={200: ReviewSerializer(many=True)},
    ),
    retrieve=extend_schema(
        summary="Get review details",
        responses={200: ReviewSerializer, 404: OpenApiResponse(description="Review not found")},
    ),
    update=extend_schema(
        summary="Update review",
        description="Author or admin only",
        request=ReviewWriteSerializer,
        responses={
            200: ReviewSerializer,
            400: OpenApiResponse(description="Validation error"),
            403: OpenApiResponse(description="Permission denied"),
            404: OpenApiResponse(description="Review not found"),
        },
    ),
    partial_update=extend_schema(summary="Partial update review", request=ReviewWriteSerializer),
    destroy=extend_schema(
        summary="Delete review",
        description="Author or admin only",
        responses={
            200: OpenApiResponse(description="Review deleted"),
            403: OpenApiResponse(description="Permission denied"),
            404: OpenApiResponse(description="Review not found"),
        },
    ),
)
class ReviewViewSet(viewsets.ViewSet):
    """
    Reviews. Creation lives on /campgrounds/{id}/reviews/; every mutation
    goes through ReviewService, which refreshes the campground aggregate.
    """
    permission_classes = (permissions.IsAuthenticatedOrReadOnly,)
    throttle_scope = 'reviews'
    lookup_value_regex = r'\d+'

    def get_service(self):
        return ReviewService()

    def list(self, request):
        campground_id = request.query_params.get('campground')
        if campground_id:
            try:
                campground_id = int(campground_id)
            except (ValueError, TypeError):
                logger.warning(f"Invalid campground ID: {campground_id}")
                return Response({"success": True, "count": 0, "data": []})
        else:
            campground_id = None

        data = ReviewSerializer(self.get_service().list_reviews(campground_id), many=True).data
        return Response({"success": True, "count": len(data), "data": data})

    def retrieve(self, request, pk=None):
        review = self.get_service().get_review(pk)
        return Response({"success": True, "data": ReviewSerializer(review).data})

    def update(self, request, pk=None, partial=False):
        serializer = ReviewWriteSerializer(data=request.data, partial=partial)
        serializer.is_valid(raise_exception=True)
        review = self.get_service().update_review(
            request.user, pk,
            rating=serializer.validated_data.get("rating"),
            comment=serializer.validated_data.get("comment"),
        )
        return Response({"success": True, "data": ReviewSerializer(review).data})

    def partial_update(self, request, pk=None):
        return self.update(request, pk=pk, partial=True)

    def destroy(self, request, pk=None):
        self.get_service().delete_review(request.user, pk)
        return Response({"success": True, "data": {}})
