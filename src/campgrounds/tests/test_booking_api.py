from datetime import timedelta

import pytest
from django.urls import reverse
from django.utils import timezone
from rest_framework.test import APIClient

from src.campgrounds.factories import AdminFactory, BookingFactory, CampgroundFactory, UserFactory
from src.campgrounds.models import Booking


@pytest.mark.django_db
class TestBookingAPI:
    def setup_method(self):
        # Test client without JWT; we'll use force_authenticate for simplicity
        self.client = APIClient()

        self.user = UserFactory()
        self.other = UserFactory()
        self.admin = AdminFactory()
        self.campground = CampgroundFactory()

        self.today = timezone.localdate()
        self.next_week = self.today + timedelta(days=7)

    # ---------- helpers ----------
    def _auth(self, user):
        """Authenticate client as given user (no JWT required in tests)."""
        self.client.force_authenticate(user=user)

    # ---------- creation ----------
    def test_create_via_campground_route(self):
        self._auth(self.user)
        url = reverse("campgrounds:campground-bookings", args=[self.campground.id])
        resp = self.client.post(url, {"bookingDate": str(self.next_week)}, format="json")

        assert resp.status_code == 201
        assert resp.data["success"] is True
        data = resp.data["data"]
        assert data["paymentStatus"] == Booking.PENDING
        assert data["bookingDate"] == str(self.next_week)
        assert data["campground"]["id"] == self.campground.id
        assert data["user"] == {"id": self.user.id, "name": self.user.name}

    def test_create_via_bookings_route(self):
        self._auth(self.user)
        resp = self.client.post(
            reverse("campgrounds:booking-list"),
            {"campground": self.campground.id, "bookingDate": str(self.next_week)},
            format="json",
        )
        assert resp.status_code == 201
        assert Booking.objects.filter(user=self.user, campground=self.campground).count() == 1

    def test_bookings_route_requires_campground(self):
        self._auth(self.user)
        resp = self.client.post(reverse("campgrounds:booking-list"), {"bookingDate": str(self.next_week)}, format="json")
        assert resp.status_code == 400
        assert resp.data["code"] == "invalid_request"

    def test_today_is_bookable(self):
        self._auth(self.user)
        url = reverse("campgrounds:campground-bookings", args=[self.campground.id])
        resp = self.client.post(url, {"bookingDate": str(self.today)}, format="json")
        assert resp.status_code == 201

    def test_past_date_rejected(self):
        self._auth(self.user)
        url = reverse("campgrounds:campground-bookings", args=[self.campground.id])
        resp = self.client.post(url, {"bookingDate": str(self.today - timedelta(days=1))}, format="json")
        assert resp.status_code == 400
        assert resp.data["code"] == "invalid_date"
        assert not Booking.objects.exists()

    def test_malformed_date_rejected(self):
        self._auth(self.user)
        url = reverse("campgrounds:campground-bookings", args=[self.campground.id])
        resp = self.client.post(url, {"bookingDate": "2025-02-30"}, format="json")
        assert resp.status_code == 400
        assert resp.data["code"] == "invalid_date"

    def test_unknown_campground(self):
        self._auth(self.user)
        url = reverse("campgrounds:campground-bookings", args=[self.campground.id + 999])
        resp = self.client.post(url, {"bookingDate": str(self.next_week)}, format="json")
        assert resp.status_code == 404
        assert resp.data["code"] == "not_found"

    def test_anonymous_cannot_book(self):
        url = reverse("campgrounds:campground-bookings", args=[self.campground.id])
        resp = self.client.post(url, {"bookingDate": str(self.next_week)}, format="json")
        assert resp.status_code == 401
        assert resp.data["success"] is False

    # ---------- listing ----------
    def test_user_lists_only_own_bookings(self):
        mine = BookingFactory(user=self.user)
        BookingFactory(user=self.other)
        self._auth(self.user)

        resp = self.client.get(reverse("campgrounds:booking-list"))
        assert resp.status_code == 200
        assert resp.data["count"] == 1
        assert [b["id"] for b in resp.data["data"]] == [mine.id]

    def test_admin_lists_all_and_filters_by_campground(self):
        BookingFactory(user=self.user, campground=self.campground)
        BookingFactory(user=self.other)
        self._auth(self.admin)

        resp = self.client.get(reverse("campgrounds:booking-list"))
        assert resp.data["count"] == 2

        resp = self.client.get(reverse("campgrounds:booking-list"), {"campground": self.campground.id})
        assert resp.data["count"] == 1

    def test_campground_bookings_list_is_admin_only(self):
        BookingFactory(campground=self.campground)
        url = reverse("campgrounds:campground-bookings", args=[self.campground.id])

        self._auth(self.user)
        assert self.client.get(url).status_code == 403

        self._auth(self.admin)
        resp = self.client.get(url)
        assert resp.status_code == 200
        assert resp.data["count"] == 1

    # ---------- update / delete ----------
    def test_owner_can_change_date(self):
        booking = BookingFactory(user=self.user)
        self._auth(self.user)
        resp = self.client.put(
            reverse("campgrounds:booking-detail", args=[booking.id]),
            {"bookingDate": str(self.next_week)},
            format="json",
        )
        assert resp.status_code == 200
        booking.refresh_from_db()
        assert booking.booking_date == self.next_week

    def test_cannot_move_booking_into_the_past(self):
        booking = BookingFactory(user=self.user)
        self._auth(self.user)
        resp = self.client.patch(
            reverse("campgrounds:booking-detail", args=[booking.id]),
            {"bookingDate": str(self.today - timedelta(days=2))},
            format="json",
        )
        assert resp.status_code == 400
        assert resp.data["code"] == "invalid_date"

    def test_owner_can_delete(self):
        booking = BookingFactory(user=self.user)
        self._auth(self.user)
        resp = self.client.delete(reverse("campgrounds:booking-detail", args=[booking.id]))
        assert resp.status_code == 200
        assert resp.data == {"success": True, "data": {}}
        assert not Booking.objects.filter(pk=booking.id).exists()

    def test_missing_booking(self):
        self._auth(self.user)
        resp = self.client.get(reverse("campgrounds:booking-detail", args=[12345]))
        assert resp.status_code == 404
        assert resp.data["code"] == "not_found"
