from rest_framework import serializers


class CheckoutSessionRequestSerializer(serializers.Serializer):
    # presence is checked by BookingLifecycleManager so the error kind stays invalid_request
    campgroundId = serializers.IntegerField(required=False, allow_null=True)
    bookingDate = serializers.CharField(required=False, allow_blank=True, allow_null=True)
    customerEmail = serializers.EmailField(required=False, allow_blank=True, allow_null=True)


class CheckoutSessionSerializer(serializers.Serializer):
    url = serializers.URLField()
    sessionId = serializers.CharField()


class FinalizeBookingSerializer(serializers.Serializer):
    sessionId = serializers.CharField(required=False, allow_blank=True, allow_null=True)
