from django.db import models


class Campground(models.Model):
    name = models.CharField(max_length=50, unique=True)
    address = models.CharField(max_length=255)
    district = models.CharField(max_length=100)
    province = models.CharField(max_length=100)
    postalcode = models.CharField(max_length=5)
    tel = models.CharField(max_length=20, blank=True, default='')
    region = models.CharField(max_length=100, db_index=True)
    image = models.URLField(max_length=500, blank=True, default='')
    description = models.TextField(blank=True, default='')
    # Nightly price; null means checkout is not configured for this campground
    price = models.DecimalField(max_digits=10, decimal_places=2, null=True, blank=True, db_index=True)

    # Derived from reviews, written only by RatingAggregator
    average_rating = models.DecimalField(max_digits=3, decimal_places=2, default=0)
    reviews_count = models.PositiveIntegerField(default=0)

    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ['-created_at']
        indexes = [
            models.Index(fields=['province', 'district'], name='campground_location_idx'),
        ]

    def __str__(self):
        return self.name
