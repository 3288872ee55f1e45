import random
from decimal import Decimal
from datetime import timedelta

import factory
from django.contrib.auth import get_user_model
from django.utils import timezone
from factory import Faker, LazyFunction, post_generation
from factory.django import DjangoModelFactory

from .models import Campground, Booking, Review

# (province, district, region)
LOCATIONS = (
    ("Chiang Mai", "Mae Rim", "Northern"),
    ("Chiang Rai", "Mae Sai", "Northern"),
    ("Kanchanaburi", "Sai Yok", "Western"),
    ("Nakhon Ratchasima", "Pak Chong", "Northeastern"),
    ("Loei", "Phu Ruea", "Northeastern"),
    ("Prachuap Khiri Khan", "Hua Hin", "Central"),
    ("Krabi", "Ao Nang", "Southern"),
    ("Chanthaburi", "Khlung", "Eastern"),
)


def rand_location():
    return random.choice(LOCATIONS)

# ---------------------------------------------------------------------------

class UserFactory(DjangoModelFactory):
    """
    Regular user. CustomUser has no 'username' field, so we only set email & name.
    Password is hashed in @post_generation.
    """
    class Meta:
        model = get_user_model()
        django_get_or_create = ("email",)

    email = factory.Sequence(lambda n: f"user{n}@example.com")
    name = Faker("name")
    telephone = factory.Sequence(lambda n: f"08{n:08d}")

    @post_generation
    def password(self, create, extracted, **kwargs):
        pwd = extracted or "Passw0rd!"
        self.set_password(pwd)
        if create:
            self.save()


class AdminFactory(UserFactory):
    """Admin role user; exempt from the booking cap."""
    email = factory.Sequence(lambda n: f"admin{n}@example.com")
    role = "admin"

# ---------------------------------------------------------------------------

class CampgroundFactory(DjangoModelFactory):
    class Meta:
        model = Campground

    # service param used across fields (NOT passed to the model)
    class Params:
        location = factory.LazyFunction(rand_location)

    name = factory.Sequence(lambda n: f"Campground {n}")
    address = Faker("street_address")
    province = factory.LazyAttribute(lambda o: o.location[0])
    district = factory.LazyAttribute(lambda o: o.location[1])
    region = factory.LazyAttribute(lambda o: o.location[2])
    postalcode = factory.LazyFunction(lambda: f"{random.randint(10000, 99999)}")
    tel = factory.Sequence(lambda n: f"02{n:07d}")
    image = factory.LazyAttribute(lambda o: f"https://example.com/img/{o.name.replace(' ', '-').lower()}.jpg")
    description = Faker("paragraph", nb_sentences=3)
    price = factory.LazyFunction(lambda: Decimal(random.randrange(200, 2500)))


class BookingFactory(DjangoModelFactory):
    """Booking (pending by default) a few days ahead."""
    class Meta:
        model = Booking

    campground = factory.SubFactory(CampgroundFactory)
    user = factory.SubFactory(UserFactory)
    booking_date = LazyFunction(lambda: timezone.localdate() + timedelta(days=random.randint(5, 30)))
    payment_status = Booking.PENDING

    class Params:
        paid = factory.Trait(payment_status=Booking.PAID)
        past = factory.Trait(
            booking_date=LazyFunction(lambda: timezone.localdate() - timedelta(days=random.randint(5, 30))),
        )


class ReviewFactory(DjangoModelFactory):
    """Created straight through the ORM, so the campground aggregate is not refreshed."""
    class Meta:
        model = Review

    campground = factory.SubFactory(CampgroundFactory)
    user = factory.SubFactory(UserFactory)
    rating = factory.LazyFunction(lambda: random.randint(4, 5))
    comment = Faker("sentence", nb_words=12)
