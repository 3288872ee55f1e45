from .campground import CampgroundSerializer
from .booking import BookingSerializer, BookingCreateSerializer, BookingUpdateSerializer
from .review import ReviewSerializer, ReviewWriteSerializer
from .common import PublicUserTinySerializer, CampgroundSummarySerializer

__all__ = [
    "PublicUserTinySerializer",
    "CampgroundSummarySerializer",
    "CampgroundSerializer",
    "BookingSerializer",
    "BookingCreateSerializer",
    "BookingUpdateSerializer",
    "ReviewSerializer",
    "ReviewWriteSerializer",
]
