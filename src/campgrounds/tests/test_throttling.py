from unittest import mock

from django.conf import settings
from django.urls import reverse
from rest_framework.test import APITestCase
from rest_framework.throttling import SimpleRateThrottle
from django.contrib.auth import get_user_model

from src.campgrounds.models import Campground

# For tests we only *lower the rates* for the specific scopes we hit.
# Throttles read their rates once at import, so patch the class attribute
# instead of overriding REST_FRAMEWORK.
TEST_RATES = {
    **settings.REST_FRAMEWORK.get("DEFAULT_THROTTLE_RATES", {}),
    "campgrounds": "2/min",
    "bookings": "2/min",
    "auth_login": "2/min",
}


@mock.patch.object(SimpleRateThrottle, "THROTTLE_RATES", TEST_RATES)
class CampgroundsThrottleTests(APITestCase):

    def test_campground_list_throttling(self):
        """Third anonymous GET to campground-list should be throttled (429)."""
        url = reverse("campgrounds:campground-list")
        r1 = self.client.get(url)
        self.assertEqual(r1.status_code, 200)
        r2 = self.client.get(url)
        self.assertEqual(r2.status_code, 200)
        r3 = self.client.get(url)
        self.assertEqual(r3.status_code, 429)
        self.assertFalse(r3.data["success"])
        self.assertEqual(r3.data["code"], "throttled")

    def test_bookings_throttling(self):
        """Third GET to booking-list by the same user should be throttled (429)."""
        User = get_user_model()
        user = User.objects.create_user(email="camper@example.com", password="x", name="Camper")
        Campground.objects.create(
            name="Camp", address="1 Road", district="Mae Rim", province="Chiang Mai",
            postalcode="50180", region="Northern", price=500,
        )
        self.client.force_authenticate(user)

        url = reverse("campgrounds:booking-list")
        self.assertEqual(self.client.get(url).status_code, 200)
        self.assertEqual(self.client.get(url).status_code, 200)
        self.assertEqual(self.client.get(url).status_code, 429)

    def test_login_throttling(self):
        """Third POST to token endpoint should be throttled (429) even with bad credentials."""
        url = reverse("token_obtain_pair")
        payload = {"email": "nobody@example.com", "password": "wrong"}
        self.assertEqual(self.client.post(url, payload, format="json").status_code, 401)
        self.assertEqual(self.client.post(url, payload, format="json").status_code, 401)
        self.assertEqual(self.client.post(url, payload, format="json").status_code, 429)
