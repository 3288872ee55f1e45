"""
Booking lifecycle: eligibility (per-user cap), CRUD with owner/admin
authorization, and reconciliation of hosted-checkout payments onto bookings.
"""
import logging
import random
import time
from collections import namedtuple
from datetime import date, datetime
from decimal import Decimal, ROUND_HALF_UP, InvalidOperation

from django.conf import settings
from django.contrib.auth import get_user_model
from django.db import OperationalError, transaction
from django.utils import timezone
from django.utils.dateparse import parse_date, parse_datetime

from src.payments.gateway import CheckoutLineItem, PaymentGatewayError
from src.payments.redirects import CheckoutRedirects

from ..exceptions import (
    ConfigurationError,
    ForbiddenError,
    IncompleteMetadataError,
    InternalError,
    InvalidDateError,
    InvalidRequestError,
    InvalidSessionError,
    LimitExceededError,
    NotFoundError,
    PaymentIncompleteError,
)
from ..models import Booking, Campground

logger = logging.getLogger(__name__)

LIMIT_SCOPE_ALL = "all"
LIMIT_SCOPE_ACTIVE = "active"

FinalizedBooking = namedtuple("FinalizedBooking", ["booking", "already_exists"])

# SQLite reports a concurrent writer as "database (table) is locked" instead of waiting
LOCK_RETRIES = 5
LOCK_RETRY_DELAY = 0.05


def to_minor_units(price) -> int:
    """Price in major units -> integer minor units, half-up, never negative."""
    try:
        amount = Decimal(str(price)) * 100
    except (InvalidOperation, ValueError):
        raise ConfigurationError()
    return max(0, int(amount.quantize(Decimal("1"), rounding=ROUND_HALF_UP)))


def normalize_booking_date(value) -> date:
    """Accept a date, a datetime, or an ISO date/datetime string."""
    if isinstance(value, datetime):
        return timezone.localtime(value).date() if timezone.is_aware(value) else value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str) or not value.strip():
        raise InvalidDateError()

    text = value.strip()
    try:
        parsed = parse_date(text)
        if parsed is not None:
            return parsed
        parsed_dt = parse_datetime(text)
    except ValueError:
        raise InvalidDateError()
    if parsed_dt is None:
        raise InvalidDateError()
    return normalize_booking_date(parsed_dt)


def _is_admin(user):
    return bool(getattr(user, "is_admin", False))


def _get_campground(campground_id) -> Campground:
    try:
        campground = Campground.objects.filter(pk=campground_id).first()
    except (ValueError, TypeError):
        campground = None
    if campground is None:
        raise NotFoundError(f"No campground with the id of {campground_id}")
    return campground


def _lock_user(user):
    """Row lock on the user for the rest of the transaction (no-op on SQLite)."""
    get_user_model().objects.select_for_update().filter(pk=user.pk).first()


def _is_lock_conflict(exc):
    message = str(exc).lower()
    return "locked" in message or "deadlock" in message


def _run_under_user_lock(user, func):
    """
    Run func() in a transaction holding the user's row lock. A lock conflict
    rolls the attempt back and retries it with backoff.
    """
    for attempt in range(1, LOCK_RETRIES + 1):
        try:
            with transaction.atomic():
                _lock_user(user)
                return func()
        except OperationalError as exc:
            if attempt == LOCK_RETRIES or not _is_lock_conflict(exc):
                raise
            logger.warning("Lock conflict for user %s (attempt %s): %s", user.pk, attempt, exc)
            time.sleep(LOCK_RETRY_DELAY * attempt + random.uniform(0, LOCK_RETRY_DELAY))


class BookingLifecycleManager:
    """
    Creates, updates and deletes bookings and reconciles paid checkout
    sessions onto them. The checkout gateway is injected; everything else
    defaults to settings.
    """

    def __init__(self, gateway=None, *, booking_limit=None, limit_scope=None, redirects=None):
        self.gateway = gateway
        self.booking_limit = settings.BOOKING_LIMIT_PER_USER if booking_limit is None else booking_limit
        self.limit_scope = limit_scope or settings.BOOKING_LIMIT_SCOPE
        if self.limit_scope not in (LIMIT_SCOPE_ALL, LIMIT_SCOPE_ACTIVE):
            raise ValueError(f"Unknown booking limit scope: {self.limit_scope!r}")
        self.redirects = redirects or CheckoutRedirects.from_settings()

    # -------------------------
    # Queries
    # -------------------------
    def counted_bookings(self, user):
        qs = Booking.objects.filter(user=user)
        if self.limit_scope == LIMIT_SCOPE_ACTIVE:
            qs = qs.filter(booking_date__gte=timezone.localdate())
        return qs

    def list_bookings(self, user, campground_id=None):
        qs = Booking.objects.select_related("campground", "user")
        if not _is_admin(user):
            return qs.filter(user=user)
        if campground_id is not None:
            qs = qs.filter(campground_id=campground_id)
        return qs

    def get_booking(self, user, booking_id) -> Booking:
        booking = self._get_booking(booking_id)
        self._check_owner_or_admin(user, booking, "view")
        return booking

    # -------------------------
    # Direct bookings
    # -------------------------
    def create_booking(self, user, campground_id, booking_date) -> Booking:
        campground = _get_campground(campground_id)
        booking_date = self._validate_future_date(booking_date)

        def check_and_create():
            if not _is_admin(user):
                count = self.counted_bookings(user).count()
                if count >= self.booking_limit:
                    raise LimitExceededError(
                        f"The user with ID {user.pk} has already made {self.booking_limit} bookings"
                    )
            return Booking.objects.create(
                user=user,
                campground=campground,
                booking_date=booking_date,
                payment_status=Booking.PENDING,
            )

        booking = _run_under_user_lock(user, check_and_create)
        logger.info("Booking %s created for user %s at campground %s", booking.pk, user.pk, campground.pk)
        return booking

    def update_booking(self, user, booking_id, booking_date) -> Booking:
        booking = self._get_booking(booking_id)
        self._check_owner_or_admin(user, booking, "update")
        booking.booking_date = self._validate_future_date(booking_date)
        booking.save(update_fields=["booking_date"])
        return booking

    def delete_booking(self, user, booking_id) -> None:
        booking = self._get_booking(booking_id)
        self._check_owner_or_admin(user, booking, "delete")
        booking.delete()
        logger.info("Booking %s deleted by user %s", booking_id, user.pk)

    # -------------------------
    # Hosted checkout
    # -------------------------
    def initiate_checkout(self, user, campground_id, booking_date, customer_email=None):
        if not campground_id or not booking_date:
            raise InvalidRequestError("campgroundId and bookingDate are required")
        booking_date = normalize_booking_date(booking_date)
        campground = _get_campground(campground_id)

        if campground.price is None:
            raise ConfigurationError()
        unit_amount = to_minor_units(campground.price)

        success_url, cancel_url = self.redirects.build(campground.pk)
        metadata = {
            "campgroundId": str(campground.pk),
            "bookingDate": booking_date.isoformat(),
            "campgroundName": campground.name,
            "userId": str(user.pk),
        }
        line_item = CheckoutLineItem(
            name=f"{campground.name} booking",
            description=f"{campground.district}, {campground.province} - {booking_date:%a %b %d %Y}",
            unit_amount=unit_amount,
            image=campground.image or None,
        )

        try:
            session = self._require_gateway().create_checkout_session(
                line_item=line_item,
                success_url=success_url,
                cancel_url=cancel_url,
                metadata=metadata,
                customer_email=getattr(user, "email", None) or customer_email or None,
            )
        except PaymentGatewayError:
            logger.exception("Checkout session creation failed for campground %s", campground.pk)
            raise InternalError("Unable to create checkout session")
        return session

    def finalize_booking(self, user, session_id) -> FinalizedBooking:
        if not session_id:
            raise InvalidRequestError("sessionId is required")

        try:
            session = self._require_gateway().retrieve_checkout_session(session_id)
        except PaymentGatewayError:
            logger.warning("Checkout session retrieval failed for %s", session_id, exc_info=True)
            raise InvalidSessionError()

        if not session.is_paid:
            raise PaymentIncompleteError()

        metadata = session.metadata or {}
        campground_id = metadata.get("campgroundId")
        raw_date = metadata.get("bookingDate")
        owner_id = metadata.get("userId")
        if not campground_id or not raw_date or not owner_id:
            raise IncompleteMetadataError()

        if str(owner_id) != str(user.pk):
            logger.warning("User %s tried to finalize session %s owned by %s", user.pk, session_id, owner_id)
            raise ForbiddenError("Checkout session does not belong to this user")

        booking_date = normalize_booking_date(raw_date)
        campground = _get_campground(campground_id)

        def reconcile():
            booking = (
                Booking.objects.select_for_update()
                .filter(user=user, campground=campground, booking_date=booking_date)
                .order_by("created_at")
                .first()
            )
            already_exists = booking is not None
            if booking is None:
                booking = Booking.objects.create(
                    user=user,
                    campground=campground,
                    booking_date=booking_date,
                    payment_status=Booking.PAID,
                )
            elif booking.payment_status != Booking.PAID:
                booking.payment_status = Booking.PAID
                booking.save(update_fields=["payment_status"])
            return booking, already_exists

        booking, already_exists = _run_under_user_lock(user, reconcile)

        logger.info(
            "Checkout session %s finalized as booking %s (existing=%s)", session_id, booking.pk, already_exists
        )
        return FinalizedBooking(booking, already_exists)

    # -------------------------
    # Helpers
    # -------------------------
    def _require_gateway(self):
        if self.gateway is None:
            raise InternalError("Payment gateway is not configured")
        return self.gateway

    @staticmethod
    def _get_booking(booking_id) -> Booking:
        try:
            booking = Booking.objects.select_related("campground", "user").filter(pk=booking_id).first()
        except (ValueError, TypeError):
            booking = None
        if booking is None:
            raise NotFoundError(f"No booking with the id of {booking_id}")
        return booking

    @staticmethod
    def _check_owner_or_admin(user, booking, verb):
        if booking.user_id != user.pk and not _is_admin(user):
            raise ForbiddenError(f"User {user.pk} is not authorized to {verb} this booking")

    @staticmethod
    def _validate_future_date(value) -> date:
        booking_date = normalize_booking_date(value)
        if booking_date < timezone.localdate():
            raise InvalidDateError("Booking date cannot be in the past.")
        return booking_date
