from .campground import CampgroundViewSet
from .booking import BookingViewSet
from .review import ReviewViewSet
from .filters import CampgroundFilter

__all__ = [
    "CampgroundViewSet",
    "BookingViewSet",
    "ReviewViewSet",
    "CampgroundFilter",
]
