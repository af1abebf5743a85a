"""
Meal slot booking for one resident and one day.

A BookingDesk holds the resident's day state (meal types already booked,
slots picked but not yet submitted) and turns the picks into reservation
rows. The duplicate check works off the day state read by
``load_day_state`` and is not repeated inside the insert, so two desks that
loaded before either submitted can both write the same meal type.
"""
import logging
from typing import Literal, Optional

from django.conf import settings
from django.core.cache import cache
from django.db import DatabaseError, transaction
from pydantic import BaseModel

from .exceptions import BookingConflictError, BookingValidationError, StoreError
from .models import MEAL_ORDER, SLOT_CATALOG, MealBooking, slot_label

logger = logging.getLogger(__name__)

DESK_TIMEOUT = getattr(settings, "MESS_DESK_TIMEOUT", 600)


class SubmitOptions(BaseModel):
    meal_preference: Literal["veg", "non-veg"] = "veg"
    note: Optional[str] = None


def slot_catalog():
    return {
        meal: [{"id": slot_id, "time": label} for slot_id, label in SLOT_CATALOG[meal]]
        for meal in MEAL_ORDER
    }


def booking_history(user):
    """All reservations of ``user``, newest first."""
    try:
        return list(
            MealBooking.objects.filter(user=user).order_by("-booking_date", "-created_at")
        )
    except DatabaseError as exc:
        logger.warning("Could not load bookings for user %s: %s", user.pk, exc)
        raise StoreError(str(exc), title="Error Loading Bookings")


class BookingDesk:

    def __init__(self, session, booking_date=None, selections=None, booked=None, loaded=False):
        self.session = session
        self.booking_date = booking_date
        self.selections = dict(selections or {})
        self.booked = set(booked or ())
        self.loaded = loaded
        self.history = []

    # ------------------------
    # Cache persistence between requests
    # ------------------------
    @staticmethod
    def cache_key(session, booking_date):
        day = booking_date.isoformat() if booking_date else "none"
        return f"booking_desk_{session.key}_{day}"

    @classmethod
    def restore(cls, session, booking_date):
        state = cache.get(cls.cache_key(session, booking_date)) or {}
        return cls(
            session,
            booking_date,
            selections=state.get("selections"),
            booked=state.get("booked"),
            loaded=state.get("loaded", False),
        )

    def save(self):
        cache.set(
            self.cache_key(self.session, self.booking_date),
            {
                "selections": dict(self.selections),
                "booked": sorted(self.booked),
                "loaded": self.loaded,
            },
            timeout=DESK_TIMEOUT,
        )

    # ------------------------
    # Operations
    # ------------------------
    def _require_owner(self):
        if not self.session.is_authenticated:
            raise BookingValidationError(
                "Please log in to book meal slots.", title="Authentication Required"
            )

    def load_history(self):
        self._require_owner()
        self.history = booking_history(self.session.user)
        return self.history

    def load_day_state(self):
        """
        Read the owner's reservations and mark the meal types already booked
        on ``booking_date``. A failed read leaves the previous state in place.
        """
        self._require_owner()
        reservations = booking_history(self.session.user)
        self.history = reservations
        self.booked = {
            booking.meal_type for booking in reservations
            if booking.booking_date == self.booking_date
        }
        self.loaded = True
        return set(self.booked)

    def select_slot(self, meal_type, slot_id):
        if meal_type not in SLOT_CATALOG:
            raise BookingValidationError(f"Unknown meal type '{meal_type}'.", title="Invalid Meal Type")
        if slot_label(meal_type, slot_id) is None:
            raise BookingValidationError(
                f"'{slot_id}' is not a {meal_type} time slot.", title="Invalid Time Slot"
            )
        if meal_type in self.booked:
            raise BookingConflictError([meal_type])

        self.selections[meal_type] = slot_id
        return dict(self.selections)

    def clear_selection(self, meal_type=None):
        if meal_type is None:
            self.selections.clear()
        else:
            self.selections.pop(meal_type, None)
        return dict(self.selections)

    def submit(self, options=None):
        """
        Insert one reservation per selected meal type, all or nothing.

        Checks run before any write, in order: owner, date, selection, then
        the meal types already booked for the day.
        """
        options = options or SubmitOptions()

        self._require_owner()
        if self.booking_date is None:
            raise BookingValidationError("Please select a date for your booking.", title="Date Required")
        if not self.selections:
            raise BookingValidationError(
                "Please select at least one meal time slot.", title="No Slots Selected"
            )

        conflicts = [meal for meal in MEAL_ORDER if meal in self.selections and meal in self.booked]
        if conflicts:
            logger.info(
                "Rejected booking for user %s on %s: %s already booked",
                self.session.owner_id, self.booking_date, ", ".join(conflicts),
            )
            raise BookingConflictError(conflicts)

        rows = []
        for meal in MEAL_ORDER:
            if meal not in self.selections:
                continue
            label = slot_label(meal, self.selections[meal])
            if label is None:
                raise BookingValidationError(
                    f"'{self.selections[meal]}' is not a {meal} time slot.", title="Invalid Time Slot"
                )
            rows.append(MealBooking(
                user=self.session.user,
                booking_date=self.booking_date,
                meal_type=meal,
                time_slot=label,
                meal_preference=options.meal_preference,
                note=options.note,
            ))

        try:
            with transaction.atomic():
                created = MealBooking.objects.bulk_create(rows)
        except DatabaseError as exc:
            logger.warning("Booking insert failed for user %s: %s", self.session.owner_id, exc)
            raise StoreError(str(exc), title="Booking Failed")

        logger.info(
            "User %s booked %s on %s",
            self.session.owner_id, ", ".join(row.meal_type for row in rows), self.booking_date,
        )
        self.selections.clear()
        self.load_day_state()
        self.load_history()
        return created

    def snapshot(self):
        catalog = slot_catalog()
        return {
            "date": self.booking_date.isoformat() if self.booking_date else None,
            "booked_meal_types": [meal for meal in MEAL_ORDER if meal in self.booked],
            "selections": dict(self.selections),
            "meals": [
                {
                    "meal_type": meal,
                    "disabled": meal in self.booked,
                    "selected_slot": self.selections.get(meal),
                    "slots": catalog[meal],
                }
                for meal in MEAL_ORDER
            ],
        }
