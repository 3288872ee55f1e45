from datetime import timedelta

import pytest
from django.test import override_settings
from django.urls import reverse
from django.utils import timezone
from rest_framework.test import APIClient

from src.campgrounds.exceptions import LimitExceededError
from src.campgrounds.factories import AdminFactory, BookingFactory, CampgroundFactory, UserFactory
from src.campgrounds.models import Booking
from src.campgrounds.services import BookingLifecycleManager


@pytest.mark.django_db
class TestBookingLimit:
    def setup_method(self):
        self.client = APIClient()
        self.user = UserFactory()
        self.admin = AdminFactory()
        self.campground = CampgroundFactory()
        self.day = timezone.localdate() + timedelta(days=7)

    def _book(self, user, day=None):
        self.client.force_authenticate(user=user)
        url = reverse("campgrounds:campground-bookings", args=[self.campground.id])
        return self.client.post(url, {"bookingDate": str(day or self.day)}, format="json")

    def test_third_booking_allowed_fourth_rejected(self):
        for offset in range(3):
            resp = self._book(self.user, self.day + timedelta(days=offset))
            assert resp.status_code == 201, resp.data

        resp = self._book(self.user, self.day + timedelta(days=3))
        assert resp.status_code == 400
        assert resp.data["success"] is False
        assert resp.data["code"] == "limit_exceeded"
        assert resp.data["message"] == f"The user with ID {self.user.id} has already made 3 bookings"
        assert Booking.objects.filter(user=self.user).count() == 3

    def test_admin_is_exempt(self):
        for offset in range(5):
            resp = self._book(self.admin, self.day + timedelta(days=offset))
            assert resp.status_code == 201
        assert Booking.objects.filter(user=self.admin).count() == 5

    def test_limit_counts_bookings_across_campgrounds(self):
        BookingFactory.create_batch(3, user=self.user)
        resp = self._book(self.user)
        assert resp.status_code == 400
        assert resp.data["code"] == "limit_exceeded"

    def test_other_users_bookings_do_not_count(self):
        BookingFactory.create_batch(3, user=UserFactory())
        assert self._book(self.user).status_code == 201

    def test_deleting_a_booking_frees_a_slot(self):
        bookings = BookingFactory.create_batch(3, user=self.user)
        assert self._book(self.user).status_code == 400

        bookings[0].delete()
        assert self._book(self.user).status_code == 201

    @override_settings(BOOKING_LIMIT_PER_USER=1)
    def test_limit_comes_from_settings(self):
        assert self._book(self.user).status_code == 201
        resp = self._book(self.user)
        assert resp.status_code == 400
        assert "already made 1 bookings" in resp.data["message"]


@pytest.mark.django_db
class TestBookingLimitScope:
    def setup_method(self):
        self.user = UserFactory()
        self.campground = CampgroundFactory()
        self.day = timezone.localdate() + timedelta(days=3)

    def test_all_scope_counts_past_bookings(self):
        BookingFactory.create_batch(3, user=self.user, past=True)
        manager = BookingLifecycleManager(limit_scope="all")
        with pytest.raises(LimitExceededError):
            manager.create_booking(self.user, self.campground.id, self.day)

    def test_active_scope_ignores_past_bookings(self):
        BookingFactory.create_batch(3, user=self.user, past=True)
        manager = BookingLifecycleManager(limit_scope="active")

        booking = manager.create_booking(self.user, self.campground.id, self.day)
        assert booking.payment_status == Booking.PENDING
        assert manager.counted_bookings(self.user).count() == 1

    def test_active_scope_counts_todays_booking(self):
        BookingFactory.create_batch(3, user=self.user, booking_date=timezone.localdate())
        manager = BookingLifecycleManager(limit_scope="active")
        with pytest.raises(LimitExceededError):
            manager.create_booking(self.user, self.campground.id, self.day)

    def test_unknown_scope_rejected(self):
        with pytest.raises(ValueError):
            BookingLifecycleManager(limit_scope="weekly")
