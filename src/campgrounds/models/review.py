from django.core.validators import MaxValueValidator, MinValueValidator
from django.db import models
from django.conf import settings
from django.utils.translation import gettext_lazy as _

COMMENT_MAX_LENGTH = 1000


class Review(models.Model):
    campground = models.ForeignKey('Campground', on_delete=models.CASCADE, related_name='reviews')
    user = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name='reviews')

    rating = models.PositiveSmallIntegerField(
        validators=[MinValueValidator(1), MaxValueValidator(5)],
    )
    comment = models.CharField(max_length=COMMENT_MAX_LENGTH)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['-created_at']
        constraints = [
            models.UniqueConstraint(fields=['campground', 'user'], name='unique_review_per_user_campground'),
        ]
        indexes = [
            models.Index(fields=['campground', 'rating'], name='review_campground_rating_idx'),
        ]

    def __str__(self):
        return f"Review {self.id} on campground {self.campground_id} by {self.user_id}"

    def clean(self):
        """
        Validate record invariants:
        - rating is a whole number 1..5
        - comment is non-empty once trimmed
        """
        from django.core.exceptions import ValidationError

        errors = {}
        if not isinstance(self.rating, int) or isinstance(self.rating, bool) or not (1 <= self.rating <= 5):
            errors['rating'] = _('Rating must be a whole number between 1 and 5')

        self.comment = (self.comment or '').strip()
        if not self.comment:
            errors['comment'] = _('Please add a review comment')

        if errors:
            raise ValidationError(errors)
