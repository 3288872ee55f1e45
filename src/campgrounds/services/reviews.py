"""
Review mutations and the campground rating aggregate they keep up to date.

Every create/update/delete calls RatingAggregator.recompute() explicitly
once the review write has committed.
"""
import logging
from decimal import Decimal, ROUND_HALF_UP

from django.conf import settings
from django.core.exceptions import ValidationError as DjangoValidationError
from django.db import DatabaseError, IntegrityError, transaction
from django.db.models import Avg, Count

from ..exceptions import (
    DuplicateReviewError,
    ForbiddenError,
    InvalidRequestError,
    NotFoundError,
)
from ..models import Booking, Campground, Review

logger = logging.getLogger(__name__)

TWO_PLACES = Decimal("0.01")


class RatingAggregator:
    """Writes average_rating / reviews_count onto a campground."""

    def compute(self, campground_id):
        stats = Review.objects.filter(campground_id=campground_id).aggregate(
            avg_rating=Avg("rating"),
            count=Count("id"),
        )
        if not stats["count"]:
            return Decimal("0.00"), 0
        average = Decimal(str(stats["avg_rating"])).quantize(TWO_PLACES, rounding=ROUND_HALF_UP)
        return average, stats["count"]

    def recompute(self, campground_id):
        """
        Best effort: a failure is logged and swallowed, the review write that
        triggered it has already committed.
        """
        if not campground_id:
            return None
        try:
            with transaction.atomic():
                average, count = self.compute(campground_id)
                Campground.objects.filter(pk=campground_id).update(
                    average_rating=average,
                    reviews_count=count,
                )
        except DatabaseError:
            logger.exception("Failed to update aggregate rating for campground %s", campground_id)
            return None
        return average, count


class ReviewService:

    def __init__(self, aggregator=None, *, require_booking=None):
        self.aggregator = aggregator or RatingAggregator()
        self.require_booking = settings.REVIEWS_REQUIRE_BOOKING if require_booking is None else require_booking

    def list_reviews(self, campground_id=None):
        qs = Review.objects.select_related("user", "campground")
        if campground_id is not None:
            qs = qs.filter(campground_id=campground_id)
        return qs.order_by("-created_at")

    def create_review(self, user, campground_id, rating, comment) -> Review:
        try:
            campground = Campground.objects.filter(pk=campground_id).first()
        except (ValueError, TypeError):
            campground = None
        if campground is None:
            raise NotFoundError(f"No campground with the id of {campground_id}")

        is_admin = getattr(user, "is_admin", False)
        if self.require_booking and not is_admin:
            if not Booking.objects.filter(user=user, campground=campground).exists():
                raise ForbiddenError("You can only review campgrounds you have booked")

        if Review.objects.filter(user=user, campground=campground).exists():
            raise DuplicateReviewError()

        review = Review(user=user, campground=campground, rating=rating, comment=comment)
        self._validate(review)
        try:
            with transaction.atomic():
                review.save()
        except IntegrityError:
            # concurrent create slipped past the check above
            raise DuplicateReviewError()

        self.aggregator.recompute(campground.pk)
        return review

    def update_review(self, user, review_id, rating=None, comment=None) -> Review:
        review = self.get_review(review_id)
        self._check_author_or_admin(user, review, "update")

        if rating is not None:
            review.rating = rating
        if comment is not None:
            review.comment = comment
        self._validate(review)
        review.save(update_fields=["rating", "comment", "updated_at"])

        self.aggregator.recompute(review.campground_id)
        return review

    def delete_review(self, user, review_id) -> None:
        review = self.get_review(review_id)
        self._check_author_or_admin(user, review, "delete")
        campground_id = review.campground_id
        review.delete()

        self.aggregator.recompute(campground_id)

    @staticmethod
    def get_review(review_id) -> Review:
        try:
            review = Review.objects.select_related("user", "campground").filter(pk=review_id).first()
        except (ValueError, TypeError):
            review = None
        if review is None:
            raise NotFoundError(f"No review with the id of {review_id}")
        return review

    @staticmethod
    def _check_author_or_admin(user, review, verb):
        if review.user_id != user.pk and not getattr(user, "is_admin", False):
            raise ForbiddenError(f"Not authorized to {verb} this review")

    @staticmethod
    def _validate(review):
        try:
            review.full_clean(validate_unique=False, validate_constraints=False)
        except DjangoValidationError as exc:
            errors = exc.message_dict
            first = next(iter(errors.values()))[0] if errors else "Invalid review"
            raise InvalidRequestError(first)
