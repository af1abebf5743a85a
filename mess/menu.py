from django.db import DatabaseError

from .exceptions import StoreError
from .models import MEAL_ORDER, DailyMenu, ScheduledMenu

WEEKDAYS = ["monday", "tuesday", "wednesday", "thursday", "friday", "saturday", "sunday"]

# Served whenever nothing else is scheduled; every cell is filled.
FALLBACK_WEEKLY_MENU = {
    "monday": {
        "breakfast": "Idli, Vada, Sambar, Coconut Chutney, Coffee/Tea",
        "lunch": "Rice, Dal, Aloo Gobi, Chapati, Curd, Pickle",
        "snacks": "Biscuits, Coffee/Tea",
        "dinner": "Chapati, Paneer Butter Masala, Jeera Rice, Salad",
    },
    "tuesday": {
        "breakfast": "Poha, Boiled Eggs, Bread, Jam, Coffee/Tea",
        "lunch": "Rice, Rajma, Mixed Vegetable, Chapati, Raita",
        "snacks": "Samosa, Coffee/Tea",
        "dinner": "Chapati, Chicken Curry, Rice, Salad, Ice Cream",
    },
    "wednesday": {
        "breakfast": "Dosa, Coconut Chutney, Upma, Coffee/Tea",
        "lunch": "Rice, Dal Makhani, Bhindi Fry, Chapati, Curd",
        "snacks": "Vada Pav, Coffee/Tea",
        "dinner": "Chapati, Egg Curry, Veg Pulao, Raita",
    },
    "thursday": {
        "breakfast": "Paratha, Curd, Fruits, Coffee/Tea",
        "lunch": "Rice, Kadhi, Aloo Matar, Chapati, Pickle",
        "snacks": "Kachori, Coffee/Tea",
        "dinner": "Chapati, Dal Tadka, Veg Biryani, Salad",
    },
    "friday": {
        "breakfast": "Bread Omelette, Cornflakes, Milk, Coffee/Tea",
        "lunch": "Rice, Chole, Aloo Jeera, Chapati, Raita",
        "snacks": "Pav Bhaji, Coffee/Tea",
        "dinner": "Chapati, Mix Veg Curry, Fried Rice, Gulab Jamun",
    },
    "saturday": {
        "breakfast": "Puri, Bhaji, Sprouts, Coffee/Tea",
        "lunch": "Rice, Dal Fry, Gobi Matar, Chapati, Curd",
        "snacks": "Bread Pakora, Coffee/Tea",
        "dinner": "Chapati, Fish Curry, Jeera Rice, Salad",
    },
    "sunday": {
        "breakfast": "Chole Bhature, Fruits, Coffee/Tea",
        "lunch": "Rice, Sambar, Rasam, Chapati, Papad, Sweet",
        "snacks": "French Fries, Coffee/Tea",
        "dinner": "Chapati, Mutton/Paneer Curry, Pulao, Raita, Ice Cream",
    },
}


def weekday_key(day):
    return WEEKDAYS[day.weekday()]


def resolve_week_menu(today, scheduled=(), daily=None):
    """
    Build the monday..sunday grid for the week seen from ``today``.

    Tiers, later ones silently win:
      1. FALLBACK_WEEKLY_MENU
      2. scheduled menus dated today or later, matched by weekday; the
         nearest date wins when several fall on the same weekday
      3. ``daily``, the override row for ``today``, non-empty fields only,
         applied to today's column
    """
    grid = {day: dict(meals) for day, meals in FALLBACK_WEEKLY_MENU.items()}

    upcoming = [entry for entry in scheduled if entry.date >= today]
    for entry in sorted(upcoming, key=lambda e: e.date, reverse=True):
        if entry.meal_type in grid[weekday_key(entry.date)]:
            grid[weekday_key(entry.date)][entry.meal_type] = entry.display_items()

    if daily is not None and daily.date == today:
        column = grid[weekday_key(today)]
        for meal in MEAL_ORDER:
            value = getattr(daily, meal, None)
            if value:
                column[meal] = value

    return grid


def load_week_menu(today, include_unpublished=False):
    try:
        scheduled = ScheduledMenu.objects.filter(date__gte=today)
        if not include_unpublished:
            scheduled = scheduled.filter(published=True)
        scheduled = list(scheduled)
        daily = DailyMenu.objects.filter(date=today).first()
    except DatabaseError as exc:
        raise StoreError(str(exc), title="Error Loading Menu")

    return {
        "active_day": weekday_key(today),
        "date": today.isoformat(),
        "menu": resolve_week_menu(today, scheduled, daily),
    }
