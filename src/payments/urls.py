from django.urls import path

from .views import CreateCheckoutSessionView, FinalizeBookingView

app_name = "payments"

urlpatterns = [
    path("create-checkout-session/", CreateCheckoutSessionView.as_view(), name="create-checkout-session"),
    path("finalize-booking/", FinalizeBookingView.as_view(), name="finalize-booking"),
]
