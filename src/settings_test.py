# Test settings override: isolate caches, keep throttling exactly as in base settings.
from .settings import *  # noqa

DATABASES = {
    "default": {
        "ENGINE": "django.db.backends.sqlite3",
        "NAME": ":memory:",
    }
}
# No IMMEDIATE transaction mode here: threads share one in-memory cache and
# see lock conflicts right away, which the booking service retries.

# In-memory cache to avoid cross-test pollution (throttle history, etc.)
CACHES = {
    "default": {
        "BACKEND": "django.core.cache.backends.locmem.LocMemCache",
        "LOCATION": "test-cache",
        "TIMEOUT": 0,
        "KEY_PREFIX": "tests",
    }
}

# Speed up tests
PASSWORD_HASHERS = ["django.contrib.auth.hashers.MD5PasswordHasher"]
EMAIL_BACKEND = "django.core.mail.backends.locmem.EmailBackend"

# Policies pinned so env on the test machine cannot change them
BOOKING_LIMIT_PER_USER = 3
BOOKING_LIMIT_SCOPE = "all"
REVIEWS_REQUIRE_BOOKING = False
STRIPE_SECRET_KEY = "sk_test_dummy"
STRIPE_SUCCESS_URL = ""
STRIPE_CANCEL_URL = ""

# IMPORTANT:
# Do NOT override REST_FRAMEWORK here.
# Throttling classes/rates stay exactly as in base settings.
