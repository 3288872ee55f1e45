"""
Hosted checkout gateway.

Thin adapter over the Stripe SDK exposing the two calls the booking
lifecycle needs: create a checkout session and retrieve one by id.
Services receive a gateway instance at construction, so tests pass a fake.
"""
import logging
from dataclasses import dataclass, field
from typing import Optional

import stripe
from django.conf import settings

logger = logging.getLogger(__name__)

# Stripe replaces this token in success_url with the real session id
SESSION_ID_PLACEHOLDER = "{CHECKOUT_SESSION_ID}"


class PaymentGatewayError(Exception):
    """Raised when the payment processor call fails for any reason."""


@dataclass
class CheckoutSession:
    id: str
    url: Optional[str] = None
    status: Optional[str] = None
    payment_status: Optional[str] = None
    metadata: dict = field(default_factory=dict)

    @property
    def is_paid(self) -> bool:
        return self.payment_status == "paid" or self.status == "complete"


@dataclass
class CheckoutLineItem:
    name: str
    description: str
    unit_amount: int
    image: Optional[str] = None


class StripeCheckoutGateway:
    """Stripe-backed implementation; one long-lived instance per process is fine."""

    def __init__(self, api_key, *, currency="thb", timeout=15, api_version=None, client=None):
        if not api_key:
            raise PaymentGatewayError("Stripe secret key is not configured")
        self.api_key = api_key
        self.currency = currency
        self.api_version = api_version
        # bounded network round-trips, no SDK-level retries
        self.client = client or stripe.StripeClient(
            api_key,
            stripe_version=api_version,
            http_client=stripe.RequestsClient(timeout=timeout),
            max_network_retries=0,
        )

    def create_checkout_session(
        self,
        *,
        line_item: CheckoutLineItem,
        success_url: str,
        cancel_url: str,
        metadata: dict,
        customer_email: Optional[str] = None,
    ) -> CheckoutSession:
        product_data = {"name": line_item.name, "description": line_item.description}
        if line_item.image:
            product_data["images"] = [line_item.image]

        params = {
            "submit_type": "book",
            "mode": "payment",
            "payment_method_types": ["card"],
            "line_items": [
                {
                    "price_data": {
                        "currency": self.currency,
                        "product_data": product_data,
                        "unit_amount": line_item.unit_amount,
                    },
                    "quantity": 1,
                }
            ],
            "success_url": success_url,
            "cancel_url": cancel_url,
            "metadata": metadata,
        }
        if customer_email:
            params["customer_email"] = customer_email

        try:
            session = self.client.v1.checkout.sessions.create(params=params)
        except stripe.StripeError as exc:
            raise PaymentGatewayError(str(exc) or "Stripe checkout session creation failed") from exc
        return self._to_checkout_session(session)

    def retrieve_checkout_session(self, session_id: str) -> CheckoutSession:
        try:
            session = self.client.v1.checkout.sessions.retrieve(session_id)
        except stripe.StripeError as exc:
            raise PaymentGatewayError(str(exc) or "Stripe checkout session retrieval failed") from exc
        return self._to_checkout_session(session)

    @staticmethod
    def _to_checkout_session(session) -> CheckoutSession:
        metadata = getattr(session, "metadata", None) or {}
        return CheckoutSession(
            id=session.id,
            url=getattr(session, "url", None),
            status=getattr(session, "status", None),
            payment_status=getattr(session, "payment_status", None),
            metadata={key: metadata[key] for key in metadata.keys()},
        )


_gateway = None


def get_checkout_gateway():
    """Process-wide gateway built from settings on first use."""
    global _gateway
    if _gateway is None:
        _gateway = StripeCheckoutGateway(
            settings.STRIPE_SECRET_KEY,
            currency=settings.STRIPE_CURRENCY,
            timeout=settings.STRIPE_TIMEOUT,
            api_version=settings.STRIPE_API_VERSION,
        )
    return _gateway
