"""Success/cancel redirect URLs handed to the hosted checkout page."""
import logging
from dataclasses import dataclass
from urllib.parse import parse_qs, urlencode, urlsplit, urlunsplit

from django.conf import settings

from .gateway import SESSION_ID_PLACEHOLDER

logger = logging.getLogger(__name__)


def _is_well_formed(url):
    if not url:
        return False
    try:
        parts = urlsplit(url)
    except ValueError:
        return False
    return parts.scheme in ("http", "https") and bool(parts.netloc)


def ensure_url(raw_url, fallback_url):
    """Return raw_url when it is an absolute http(s) URL, else the fallback."""
    if _is_well_formed(raw_url):
        return raw_url
    if raw_url:
        logger.warning("Invalid checkout redirect URL %r, using fallback %s", raw_url, fallback_url)
    return fallback_url


def ensure_query_param(url, name, value):
    """Add name=value unless the URL already carries that parameter."""
    parts = urlsplit(url)
    if name in parse_qs(parts.query, keep_blank_values=True):
        return url
    extra = urlencode({name: value})
    query = f"{parts.query}&{extra}" if parts.query else extra
    return urlunsplit((parts.scheme, parts.netloc, parts.path, query, parts.fragment))


def ensure_session_placeholder(url):
    """
    Append session_id={CHECKOUT_SESSION_ID} before any fragment.
    The braces must reach the processor unescaped, so no urlencode here.
    """
    parts = urlsplit(url)
    if "session_id" in parse_qs(parts.query, keep_blank_values=True):
        return url
    base, sep, fragment = url.partition("#")
    joiner = "&" if "?" in base else "?"
    return f"{base}{joiner}session_id={SESSION_ID_PLACEHOLDER}" + (f"#{fragment}" if sep else "")


@dataclass(frozen=True)
class CheckoutRedirects:
    success_url: str = ""
    cancel_url: str = ""
    default_success_url: str = "http://localhost:8080/my-bookings"
    default_cancel_url: str = "http://localhost:8080/book/{campground_id}"

    @classmethod
    def from_settings(cls):
        return cls(
            success_url=settings.STRIPE_SUCCESS_URL,
            cancel_url=settings.STRIPE_CANCEL_URL,
            default_success_url=settings.STRIPE_DEFAULT_SUCCESS_URL,
            default_cancel_url=settings.STRIPE_DEFAULT_CANCEL_URL,
        )

    def build(self, campground_id):
        """Return (success_url, cancel_url) for a checkout of the given campground."""
        success = ensure_url(self.success_url, self.default_success_url)
        success = ensure_session_placeholder(ensure_query_param(success, "status", "success"))

        cancel_fallback = self.default_cancel_url.format(campground_id=campground_id)
        cancel = ensure_url(self.cancel_url, cancel_fallback)
        cancel = ensure_query_param(cancel, "status", "cancelled")
        return success, cancel
