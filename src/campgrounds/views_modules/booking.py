import logging

from rest_framework import viewsets, permissions, status
from rest_framework.response import Response
from drf_spectacular.utils import (
    extend_schema_view, extend_schema, OpenApiParameter, OpenApiTypes, OpenApiResponse
)

from ..serializers import BookingCreateSerializer, BookingSerializer, BookingUpdateSerializer
from ..services import BookingLifecycleManager
from ..exceptions import InvalidRequestError

logger = logging.getLogger(__name__)


@extend_schema_view(
    list=extend_schema(
        summary="List bookings",
        description="Own bookings for users; every booking for admins",
        parameters=[
            OpenApiParameter("campground", OpenApiTypes.INT, description="Filter by campground (admin only)"),
        ],
        responses={200: BookingSerializer(many=True)},
    ),
    create=extend_schema(
        summary="Create booking",
        description="Book a campground for one day (max 3 bookings for non-admin users)",
        request=BookingCreateSerializer,
        responses={
            201: BookingSerializer,
            400: OpenApiResponse(description="Invalid date or booking limit reached"),
            404: OpenApiResponse(description="Campground not found"),
        },
    ),
    retrieve=extend_schema(
        summary="Get booking details",
        responses={
            200: BookingSerializer,
            403: OpenApiResponse(description="Permission denied"),
            404: OpenApiResponse(description="Booking not found"),
        },
    ),
    update=extend_schema(
        summary="Change booking date",
        request=BookingUpdateSerializer,
        responses={
            200: BookingSerializer,
            400: OpenApiResponse(description="Invalid date"),
            403: OpenApiResponse(description="Permission denied"),
            404: OpenApiResponse(description="Booking not found"),
        },
    ),
    partial_update=extend_schema(summary="Change booking date", request=BookingUpdateSerializer),
    destroy=extend_schema(
        summary="Delete booking",
        description="Owner or admin only",
        responses={
            200: OpenApiResponse(description="Booking deleted"),
            403: OpenApiResponse(description="Permission denied"),
            404: OpenApiResponse(description="Booking not found"),
        },
    ),
)
class BookingViewSet(viewsets.ViewSet):
    """
    Bookings of the current user (all bookings for admins).

    Authorization (owner or admin) is decided by BookingLifecycleManager,
    so a foreign booking answers 403 rather than 404.
    """
    permission_classes = (permissions.IsAuthenticated,)
    throttle_scope = 'bookings'
    lookup_value_regex = r'\d+'

    def get_manager(self):
        return BookingLifecycleManager()

    def list(self, request):
        campground_id = request.query_params.get('campground')
        if campground_id:
            try:
                campground_id = int(campground_id)
            except (ValueError, TypeError):
                logger.warning(f"Invalid campground ID: {campground_id}")
                raise InvalidRequestError("Invalid campground id")
        else:
            campground_id = None

        bookings = self.get_manager().list_bookings(request.user, campground_id=campground_id)
        data = BookingSerializer(bookings, many=True).data
        return Response({"success": True, "count": len(data), "data": data})

    def create(self, request):
        serializer = BookingCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        campground_id = serializer.validated_data.get("campground")
        if campground_id is None:
            raise InvalidRequestError("campground is required")

        booking = self.get_manager().create_booking(
            request.user, campground_id, serializer.validated_data["bookingDate"]
        )
        return Response({"success": True, "data": BookingSerializer(booking).data}, status=status.HTTP_201_CREATED)

    def retrieve(self, request, pk=None):
        booking = self.get_manager().get_booking(request.user, pk)
        return Response({"success": True, "data": BookingSerializer(booking).data})

    def update(self, request, pk=None):
        serializer = BookingUpdateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        booking = self.get_manager().update_booking(request.user, pk, serializer.validated_data["bookingDate"])
        return Response({"success": True, "data": BookingSerializer(booking).data})

    def partial_update(self, request, pk=None):
        return self.update(request, pk=pk)

    def destroy(self, request, pk=None):
        self.get_manager().delete_booking(request.user, pk)
        return Response({"success": True, "data": {}})
