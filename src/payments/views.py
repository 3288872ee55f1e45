import logging

from rest_framework import permissions
from rest_framework.response import Response
from rest_framework.views import APIView
from drf_spectacular.utils import extend_schema, OpenApiResponse

from src.campgrounds.exceptions import InternalError
from src.campgrounds.serializers import BookingSerializer
from src.campgrounds.services import BookingLifecycleManager
from src.campgrounds.throttling import ScopedRateThrottleIsolated

from .gateway import PaymentGatewayError, get_checkout_gateway
from .serializers import (
    CheckoutSessionRequestSerializer,
    CheckoutSessionSerializer,
    FinalizeBookingSerializer,
)

logger = logging.getLogger(__name__)


def get_booking_manager():
    try:
        gateway = get_checkout_gateway()
    except PaymentGatewayError:
        logger.exception("Payment gateway is not available")
        raise InternalError("Payment gateway is not configured")
    return BookingLifecycleManager(gateway)


class PaymentsAPIView(APIView):
    permission_classes = (permissions.IsAuthenticated,)
    throttle_classes = [ScopedRateThrottleIsolated]
    throttle_scope = 'payments'


@extend_schema(
    summary="Create checkout session",
    description="Starts a hosted checkout for one campground day. No booking is written yet.",
    request=CheckoutSessionRequestSerializer,
    responses={
        200: CheckoutSessionSerializer,
        400: OpenApiResponse(description="Missing fields, invalid date or price not configured"),
        404: OpenApiResponse(description="Campground not found"),
        500: OpenApiResponse(description="Payment processor failure"),
    },
    tags=["payments"],
)
class CreateCheckoutSessionView(PaymentsAPIView):

    def post(self, request):
        serializer = CheckoutSessionRequestSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        session = get_booking_manager().initiate_checkout(
            request.user,
            data.get("campgroundId"),
            data.get("bookingDate"),
            customer_email=data.get("customerEmail"),
        )
        logger.info("Checkout session %s created for user %s", session.id, request.user.pk)
        return Response({"success": True, "data": {"url": session.url, "sessionId": session.id}})


@extend_schema(
    summary="Finalize booking",
    description=(
        "Turns a paid checkout session into a paid booking. "
        "Safe to call repeatedly; alreadyExists tells whether the booking was there before."
    ),
    request=FinalizeBookingSerializer,
    responses={
        200: BookingSerializer,
        400: OpenApiResponse(description="Session invalid, unpaid or with incomplete metadata"),
        403: OpenApiResponse(description="Session belongs to another user"),
        404: OpenApiResponse(description="Campground not found"),
    },
    tags=["payments"],
)
class FinalizeBookingView(PaymentsAPIView):

    def post(self, request):
        serializer = FinalizeBookingSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        result = get_booking_manager().finalize_booking(request.user, serializer.validated_data.get("sessionId"))
        return Response({
            "success": True,
            "alreadyExists": result.already_exists,
            "data": BookingSerializer(result.booking).data,
        })
