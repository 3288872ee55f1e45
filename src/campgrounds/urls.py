from django.urls import path, include
from rest_framework.routers import DefaultRouter

from .views_modules import CampgroundViewSet, BookingViewSet, ReviewViewSet

app_name = "campgrounds"

router = DefaultRouter()
router.register(r"campgrounds", CampgroundViewSet, basename="campground")
router.register(r"bookings", BookingViewSet, basename="booking")
router.register(r"reviews", ReviewViewSet, basename="review")

urlpatterns = [
    path("", include(router.urls)),
]
