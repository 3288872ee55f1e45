from django.db import models
from django.conf import settings

from .campground import Campground


class Booking(models.Model):
    """A single-day stay at a campground"""
    PENDING = 'pending'
    PAID = 'paid'
    PAYMENT_STATUS_CHOICES = [
        (PENDING, 'Pending'),
        (PAID, 'Paid'),
    ]

    campground = models.ForeignKey(Campground, on_delete=models.CASCADE, related_name='bookings')
    user = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name='bookings')
    booking_date = models.DateField()
    payment_status = models.CharField(max_length=10, choices=PAYMENT_STATUS_CHOICES, default=PENDING)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ['-created_at']
        indexes = [
            models.Index(
                fields=['user', 'campground', 'booking_date'],
                name='booking_lookup_idx',
            ),
        ]

    @property
    def is_paid(self):
        return self.payment_status == self.PAID

    def __str__(self):
        return f"{self.user} → {self.campground} on {self.booking_date} [{self.payment_status}]"
