import pytest
from django.contrib.auth import get_user_model
from django.urls import reverse
from rest_framework.test import APIClient

User = get_user_model()


@pytest.mark.django_db
class TestAuthAPI:
    def setup_method(self):
        self.client = APIClient()

    def test_register_returns_tokens_and_user(self):
        resp = self.client.post(reverse("users:register"), {
            "email": "new@example.com",
            "password": "Sup3r-secret-pass",
            "name": "New Camper",
            "telephone": "0812345678",
        }, format="json")

        assert resp.status_code == 201
        assert resp.data["success"] is True
        assert resp.data["token"]
        assert resp.data["refresh"]
        assert resp.data["data"]["email"] == "new@example.com"
        assert resp.data["data"]["role"] == "user"

    def test_register_ignores_role(self):
        resp = self.client.post(reverse("users:register"), {
            "email": "sneaky@example.com",
            "password": "Sup3r-secret-pass",
            "name": "Sneaky",
            "role": "admin",
        }, format="json")
        assert resp.status_code == 201
        assert User.objects.get(email="sneaky@example.com").role == "user"

    def test_register_duplicate_email(self):
        User.objects.create_user(email="taken@example.com", password="x", name="Taken")
        resp = self.client.post(reverse("users:register"), {
            "email": "taken@example.com",
            "password": "Sup3r-secret-pass",
            "name": "Again",
        }, format="json")
        assert resp.status_code == 400
        assert resp.data["success"] is False
        assert "email" in resp.data["errors"]

    def test_token_and_me(self):
        User.objects.create_user(email="me@example.com", password="Sup3r-secret-pass", name="Me")
        resp = self.client.post(reverse("token_obtain_pair"), {
            "email": "me@example.com",
            "password": "Sup3r-secret-pass",
        }, format="json")
        assert resp.status_code == 200
        access = resp.data["access"]

        self.client.credentials(HTTP_AUTHORIZATION=f"Bearer {access}")
        resp = self.client.get(reverse("users:me"))
        assert resp.status_code == 200
        assert resp.data["data"]["name"] == "Me"

    def test_me_requires_auth(self):
        resp = self.client.get(reverse("users:me"))
        assert resp.status_code == 401
        assert resp.data["code"] == "not_authenticated"


@pytest.mark.django_db
def test_superuser_gets_admin_role():
    admin = User.objects.create_superuser(email="root@example.com", password="x")
    assert admin.role == "admin"
    assert admin.is_admin
