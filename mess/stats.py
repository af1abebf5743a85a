import calendar

from django.db import DatabaseError

from .exceptions import StoreError
from .models import MEAL_ORDER, MealBooking


def preference_key(value):
    # anything that is not explicitly non-veg counts as veg
    return "nonveg" if (value or "").lower() == "non-veg" else "veg"


def summarize_bookings(bookings):
    by_meal = {meal: 0 for meal in MEAL_ORDER}
    by_preference = {"veg": 0, "nonveg": 0}
    by_meal_and_preference = {meal: {"veg": 0, "nonveg": 0} for meal in MEAL_ORDER}

    for booking in bookings:
        meal = (booking.meal_type or "").lower()
        pref = preference_key(booking.meal_preference)
        by_preference[pref] += 1
        if meal in by_meal:
            by_meal[meal] += 1
            by_meal_and_preference[meal][pref] += 1

    return {
        "total": len(bookings),
        "by_meal_type": by_meal,
        "by_preference": by_preference,
        "by_meal_type_and_preference": by_meal_and_preference,
    }


def monthly_meal_stats(user, today):
    """Booking counts for ``user`` over the calendar month containing ``today``."""
    month_start = today.replace(day=1)
    month_end = today.replace(day=calendar.monthrange(today.year, today.month)[1])
    try:
        bookings = list(MealBooking.objects.filter(
            user=user,
            booking_date__gte=month_start,
            booking_date__lte=month_end,
        ))
    except DatabaseError as exc:
        raise StoreError(str(exc), title="Error Loading Meal Statistics")

    stats = summarize_bookings(bookings)
    stats["month"] = today.strftime("%B %Y")
    stats["start"] = month_start.isoformat()
    stats["end"] = month_end.isoformat()
    return stats
