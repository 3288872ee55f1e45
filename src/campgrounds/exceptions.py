"""
Error kinds raised by the booking and review services, and the DRF
exception handler that renders every failure as a ``{success, message}``
envelope.
"""
import logging

from django.core.exceptions import PermissionDenied
from django.http import Http404
from rest_framework import status
from rest_framework.exceptions import APIException, ValidationError
from rest_framework.response import Response
from rest_framework.views import exception_handler

logger = logging.getLogger(__name__)


class CampgroundServiceError(APIException):
    """Base for business-rule failures; ``default_code`` is the error kind."""
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = "Request could not be processed."
    default_code = "error"

    @property
    def kind(self):
        return self.default_code


class NotFoundError(CampgroundServiceError):
    status_code = status.HTTP_404_NOT_FOUND
    default_detail = "Not found."
    default_code = "not_found"


class ForbiddenError(CampgroundServiceError):
    status_code = status.HTTP_403_FORBIDDEN
    default_detail = "Not authorized to perform this action."
    default_code = "forbidden"


class LimitExceededError(CampgroundServiceError):
    default_detail = "Booking limit reached."
    default_code = "limit_exceeded"


class DuplicateReviewError(CampgroundServiceError):
    default_detail = "You have already submitted a review for this campground."
    default_code = "duplicate_review"


class InvalidRequestError(CampgroundServiceError):
    default_detail = "Invalid request."
    default_code = "invalid_request"


class InvalidDateError(CampgroundServiceError):
    default_detail = "Invalid booking date."
    default_code = "invalid_date"


class PaymentIncompleteError(CampgroundServiceError):
    default_detail = "Checkout session not paid."
    default_code = "payment_incomplete"


class InvalidSessionError(CampgroundServiceError):
    default_detail = "Invalid checkout session."
    default_code = "invalid_session"


class IncompleteMetadataError(CampgroundServiceError):
    default_detail = "Session metadata incomplete for booking."
    default_code = "incomplete_metadata"


class ConfigurationError(CampgroundServiceError):
    default_detail = "Campground price is not configured."
    default_code = "configuration_error"


class InternalError(CampgroundServiceError):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_detail = "Internal server error."
    default_code = "internal"


def _first_message(detail):
    if isinstance(detail, dict):
        for value in detail.values():
            return _first_message(value)
        return ""
    if isinstance(detail, (list, tuple)):
        return _first_message(detail[0]) if detail else ""
    return str(detail)


def envelope_exception_handler(exc, context):
    """
    Wrap DRF's default handler:
    - known API errors -> {success: false, message, code[, errors]}
    - anything else    -> logged with traceback, generic 500
    """
    response = exception_handler(exc, context)

    if response is None:
        view = context.get("view")
        logger.exception(
            "Unhandled error in %s", view.__class__.__name__ if view else "unknown view",
            exc_info=exc,
        )
        return Response(
            {"success": False, "message": "Internal server error", "code": InternalError.default_code},
            status=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )

    if isinstance(exc, CampgroundServiceError):
        code = exc.kind
    elif isinstance(exc, ValidationError):
        # payload errors are one kind; a malformed booking date gets its own
        is_date_error = isinstance(response.data, dict) and "bookingDate" in response.data
        code = InvalidDateError.default_code if is_date_error else InvalidRequestError.default_code
    elif isinstance(exc, APIException):
        code = exc.default_code
    elif isinstance(exc, Http404):
        code = "not_found"
    elif isinstance(exc, PermissionDenied):
        code = "permission_denied"
    else:
        code = "error"

    payload = {"success": False, "code": code}
    if isinstance(exc, ValidationError):
        payload["message"] = _first_message(response.data) or "Validation error"
        payload["errors"] = response.data
    else:
        payload["message"] = _first_message(response.data)
    response.data = payload
    return response
