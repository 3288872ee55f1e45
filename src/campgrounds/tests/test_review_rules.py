from django.contrib.auth import get_user_model
from django.test import TestCase, override_settings
from django.utils import timezone
from rest_framework.test import APIClient

from src.campgrounds.models import Booking, Campground, Review


class ReviewRulesTests(TestCase):
    def setUp(self):
        User = get_user_model()
        self.camper = User.objects.create_user(email="camper@example.com", password="x", name="Camper")
        self.other  = User.objects.create_user(email="other@example.com",  password="x", name="Other")
        self.admin  = User.objects.create_user(email="admin@example.com",  password="x", name="Admin", role="admin")

        self.campground = Campground.objects.create(
            name="Hilltop",
            address="3 Hill Rd",
            district="Phu Ruea",
            province="Loei",
            postalcode="42160",
            region="Northeastern",
            price=400,
        )

        self.client = APIClient()

    def _login(self, who):
        self.client.force_authenticate(who)

    def _post_review(self, rating=5, comment="Great views"):
        return self.client.post(f"/api/v1/campgrounds/{self.campground.id}/reviews/", {
            "rating": rating,
            "comment": comment,
        }, format="json")

    def test_create_review(self):
        self._login(self.camper)
        r = self._post_review(rating=4, comment="  Quiet and clean  ")
        self.assertEqual(r.status_code, 201)
        self.assertEqual(r.data["data"]["rating"], 4)
        self.assertEqual(r.data["data"]["comment"], "Quiet and clean")
        self.assertEqual(r.data["data"]["campground"], self.campground.id)

    def test_second_review_is_duplicate(self):
        self._login(self.camper)
        self.assertEqual(self._post_review().status_code, 201)
        r = self._post_review(rating=1, comment="Changed my mind")
        self.assertEqual(r.status_code, 400)
        self.assertEqual(r.data["code"], "duplicate_review")
        self.assertEqual(Review.objects.filter(user=self.camper).count(), 1)

    def test_rating_bounds(self):
        self._login(self.camper)
        for rating in (0, 6):
            r = self._post_review(rating=rating)
            self.assertEqual(r.status_code, 400)
            self.assertEqual(r.data["code"], "invalid_request")
            self.assertIn("rating", r.data["errors"])
        self.assertFalse(Review.objects.exists())

    def test_fractional_rating_rejected(self):
        self._login(self.camper)
        r = self._post_review(rating=4.5)
        self.assertEqual(r.status_code, 400)

    def test_blank_comment_rejected(self):
        self._login(self.camper)
        r = self._post_review(comment="   ")
        self.assertEqual(r.status_code, 400)
        self.assertEqual(r.data["message"], "Please add a review comment")

    def test_comment_too_long(self):
        self._login(self.camper)
        r = self._post_review(comment="x" * 1001)
        self.assertEqual(r.status_code, 400)
        self.assertIn("comment", r.data["errors"])

    def test_unknown_campground(self):
        self._login(self.camper)
        r = self.client.post(
            f"/api/v1/campgrounds/{self.campground.id + 100}/reviews/",
            {"rating": 5, "comment": "?"},
            format="json",
        )
        self.assertEqual(r.status_code, 404)

    def test_anonymous_cannot_review_but_can_read(self):
        r = self._post_review()
        self.assertEqual(r.status_code, 401)
        r = self.client.get(f"/api/v1/campgrounds/{self.campground.id}/reviews/")
        self.assertEqual(r.status_code, 200)
        self.assertEqual(r.data["meta"], {"campgroundId": self.campground.id, "averageRating": 0.0, "reviewsCount": 0})

    def test_only_author_or_admin_can_edit(self):
        self._login(self.camper)
        review_id = self._post_review(rating=5).data["data"]["id"]
        url = f"/api/v1/reviews/{review_id}/"

        self._login(self.other)
        r = self.client.patch(url, {"rating": 1}, format="json")
        self.assertEqual(r.status_code, 403)
        self.assertEqual(r.data["code"], "forbidden")
        self.assertEqual(self.client.delete(url).status_code, 403)

        self._login(self.camper)
        r = self.client.patch(url, {"rating": 3}, format="json")
        self.assertEqual(r.status_code, 200)
        self.assertEqual(r.data["data"]["rating"], 3)
        self.assertEqual(r.data["data"]["comment"], "Great views")

        self._login(self.admin)
        self.assertEqual(self.client.delete(url).status_code, 200)
        self.assertFalse(Review.objects.filter(pk=review_id).exists())

    def test_reviews_list_filter(self):
        other_camp = Campground.objects.create(
            name="Riverside", address="5 River Rd", district="Khlung", province="Chanthaburi",
            postalcode="22110", region="Eastern", price=300,
        )
        Review.objects.create(campground=self.campground, user=self.camper, rating=5, comment="a")
        Review.objects.create(campground=other_camp, user=self.camper, rating=2, comment="b")

        r = self.client.get("/api/v1/reviews/")
        self.assertEqual(r.data["count"], 2)
        r = self.client.get("/api/v1/reviews/", {"campground": other_camp.id})
        self.assertEqual(r.data["count"], 1)
        self.assertEqual(r.data["data"][0]["rating"], 2)


@override_settings(REVIEWS_REQUIRE_BOOKING=True)
class ReviewBookingGateTests(TestCase):
    def setUp(self):
        User = get_user_model()
        self.camper = User.objects.create_user(email="camper@example.com", password="x", name="Camper")
        self.admin = User.objects.create_user(email="admin@example.com", password="x", name="Admin", role="admin")
        self.campground = Campground.objects.create(
            name="Hilltop", address="3 Hill Rd", district="Phu Ruea", province="Loei",
            postalcode="42160", region="Northeastern", price=400,
        )
        self.client = APIClient()
        self.url = f"/api/v1/campgrounds/{self.campground.id}/reviews/"

    def test_review_without_booking_forbidden(self):
        self.client.force_authenticate(self.camper)
        r = self.client.post(self.url, {"rating": 5, "comment": "Nice"}, format="json")
        self.assertEqual(r.status_code, 403)
        self.assertEqual(r.data["code"], "forbidden")

    def test_review_with_booking_allowed(self):
        Booking.objects.create(campground=self.campground, user=self.camper, booking_date=timezone.localdate())
        self.client.force_authenticate(self.camper)
        r = self.client.post(self.url, {"rating": 5, "comment": "Nice"}, format="json")
        self.assertEqual(r.status_code, 201)

    def test_admin_bypasses_gate(self):
        self.client.force_authenticate(self.admin)
        r = self.client.post(self.url, {"rating": 4, "comment": "Checked"}, format="json")
        self.assertEqual(r.status_code, 201)
