import logging

from rest_framework import viewsets, permissions, filters, status
from rest_framework.decorators import action
from rest_framework.response import Response
from drf_spectacular.utils import (
    extend_schema_view, extend_schema, OpenApiParameter, OpenApiTypes, OpenApiResponse
)
from django_filters import rest_framework as df

from ..models import Campground
from ..serializers import (
    BookingCreateSerializer, BookingSerializer, CampgroundSerializer,
    ReviewSerializer, ReviewWriteSerializer,
)
from ..permissions import IsAdminRole, is_admin
from ..pagination import CampgroundPagination
from ..services import BookingLifecycleManager, ReviewService
from ..exceptions import ForbiddenError, NotFoundError
from ..throttling import ScopedRateThrottleIsolated
from .filters import CampgroundFilter

logger = logging.getLogger(__name__)


@extend_schema_view(
    list=extend_schema(
        summary="List campgrounds",
        description="Paginated list of campgrounds with filtering, search and ordering",
        parameters=[
            OpenApiParameter("page", OpenApiTypes.INT, description="Page number"),
            OpenApiParameter("limit", OpenApiTypes.INT, description="Items per page"),
        ],
    ),
    create=extend_schema(summary="Create campground", description="Admin only"),
    retrieve=extend_schema(
        summary="Get campground details",
        responses={200: CampgroundSerializer, 404: OpenApiResponse(description="Campground not found")},
    ),
    update=extend_schema(summary="Update campground", description="Admin only"),
    partial_update=extend_schema(summary="Partial update campground", description="Admin only"),
    destroy=extend_schema(summary="Delete campground", description="Admin only; removes its bookings and reviews"),
)
class CampgroundViewSet(viewsets.ModelViewSet):
    """
    Campground resources.

    Reads are public, writes are admin only. Nested routes create/list
    bookings and reviews for one campground.
    """
    queryset = Campground.objects.all()
    serializer_class = CampgroundSerializer
    pagination_class = CampgroundPagination
    filter_backends = (df.DjangoFilterBackend, filters.SearchFilter, filters.OrderingFilter)
    filterset_class = CampgroundFilter
    search_fields = ['name', 'description', 'district', 'province']
    ordering_fields = ['name', 'price', 'created_at', 'average_rating']
    ordering = ['-created_at']
    throttle_classes = [ScopedRateThrottleIsolated]
    throttle_scope = 'campgrounds'
    lookup_value_regex = r'\d+'

    def get_permissions(self):
        if self.action in ("list", "retrieve"):
            return [permissions.AllowAny()]
        if self.action == "reviews" and self.request.method in permissions.SAFE_METHODS:
            return [permissions.AllowAny()]
        if self.action in ("bookings", "reviews"):
            return [permissions.IsAuthenticated()]
        return [permissions.IsAuthenticated(), IsAdminRole()]

    def retrieve(self, request, *args, **kwargs):
        response = super().retrieve(request, *args, **kwargs)
        return Response({"success": True, "data": response.data})

    def create(self, request, *args, **kwargs):
        response = super().create(request, *args, **kwargs)
        logger.info("Campground %s created by %s", response.data.get("id"), request.user.pk)
        return Response({"success": True, "data": response.data}, status=status.HTTP_201_CREATED)

    def update(self, request, *args, **kwargs):
        response = super().update(request, *args, **kwargs)
        return Response({"success": True, "data": response.data})

    def destroy(self, request, *args, **kwargs):
        super().destroy(request, *args, **kwargs)
        return Response({"success": True, "data": {}})

    @extend_schema(
        summary="Campground bookings",
        description="GET: all bookings of the campground (admin only). POST: book it for one day.",
        request=BookingCreateSerializer,
        responses={
            200: BookingSerializer(many=True),
            201: BookingSerializer,
            400: OpenApiResponse(description="Invalid date or booking limit reached"),
            404: OpenApiResponse(description="Campground not found"),
        },
    )
    @action(detail=True, methods=["get", "post"])
    def bookings(self, request, pk=None):
        manager = BookingLifecycleManager()

        if request.method == "GET":
            if not is_admin(request.user):
                raise ForbiddenError("Only admins can list bookings of a campground")
            if not Campground.objects.filter(pk=pk).exists():
                raise NotFoundError(f"No campground with the id of {pk}")
            bookings = manager.list_bookings(request.user, campground_id=pk)
            data = BookingSerializer(bookings, many=True).data
            return Response({"success": True, "count": len(data), "data": data})

        serializer = BookingCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        booking = manager.create_booking(request.user, pk, serializer.validated_data["bookingDate"])
        return Response(
            {"success": True, "data": BookingSerializer(booking).data},
            status=status.HTTP_201_CREATED,
        )

    @extend_schema(
        summary="Campground reviews",
        description="GET: reviews with rating aggregate (public). POST: review the campground.",
        request=ReviewWriteSerializer,
        responses={
            200: ReviewSerializer(many=True),
            201: ReviewSerializer,
            400: OpenApiResponse(description="Validation error or duplicate review"),
            403: OpenApiResponse(description="Booking required"),
            404: OpenApiResponse(description="Campground not found"),
        },
    )
    @action(detail=True, methods=["get", "post"])
    def reviews(self, request, pk=None):
        service = ReviewService()

        if request.method == "GET":
            campground = Campground.objects.filter(pk=pk).first()
            if campground is None:
                raise NotFoundError(f"No campground with the id of {pk}")
            data = ReviewSerializer(service.list_reviews(campground.pk), many=True).data
            return Response({
                "success": True,
                "count": len(data),
                "data": data,
                "meta": {
                    "campgroundId": campground.pk,
                    "averageRating": float(campground.average_rating or 0),
                    "reviewsCount": campground.reviews_count or 0,
                },
            })

        serializer = ReviewWriteSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        review = service.create_review(
            request.user, pk,
            rating=serializer.validated_data["rating"],
            comment=serializer.validated_data["comment"],
        )
        return Response({"success": True, "data": ReviewSerializer(review).data}, status=status.HTTP_201_CREATED)
