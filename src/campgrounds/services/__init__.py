from .bookings import BookingLifecycleManager, FinalizedBooking, normalize_booking_date, to_minor_units
from .reviews import RatingAggregator, ReviewService

__all__ = [
    "BookingLifecycleManager",
    "FinalizedBooking",
    "RatingAggregator",
    "ReviewService",
    "normalize_booking_date",
    "to_minor_units",
]
