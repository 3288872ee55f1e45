from .campground import Campground
from .booking import Booking
from .review import Review

__all__ = [
    "Campground",
    "Booking",
    "Review",
]
