import logging

from rest_framework import status
from rest_framework.exceptions import APIException
from rest_framework.views import exception_handler

logger = logging.getLogger(__name__)


class MessError(APIException):
    """Base error: every failure carries a short title and a descriptive detail."""
    status_code = status.HTTP_400_BAD_REQUEST
    default_title = "Request Failed"
    default_detail = "The request could not be completed."

    def __init__(self, detail=None, title=None):
        super().__init__(detail=detail)
        self.title = title or self.default_title


class BookingValidationError(MessError):
    default_title = "Invalid Booking"


class BookingConflictError(MessError):
    status_code = status.HTTP_409_CONFLICT
    default_title = "Already Booked"

    def __init__(self, meal_types, title=None):
        self.meal_types = list(meal_types)
        names = ", ".join(meal.capitalize() for meal in self.meal_types)
        super().__init__(
            detail=f"You have already booked {names} for this day.",
            title=title,
        )


class StoreError(MessError):
    status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    default_title = "Database Error"


def mess_exception_handler(exc, context):
    response = exception_handler(exc, context)
    if response is None:
        return None

    if isinstance(exc, MessError):
        response.data = {"title": exc.title, "detail": exc.detail}
    elif isinstance(response.data, dict) and "detail" in response.data:
        response.data = {"title": response.status_text, "detail": response.data["detail"]}
    else:
        # field-level serializer errors keep their shape under "errors"
        response.data = {"title": "Invalid Input", "detail": "Please check the submitted fields.",
                         "errors": response.data}

    if response.status_code >= 500:
        logger.warning("%s: %s", response.data["title"], response.data["detail"])
    return response
