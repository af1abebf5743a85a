from datetime import date, timedelta

from django.test import TestCase

from mess.menu import FALLBACK_WEEKLY_MENU, WEEKDAYS, load_week_menu, resolve_week_menu
from mess.models import DailyMenu, ScheduledMenu


# 2025-04-10 is a Thursday
THURSDAY = date(2025, 4, 10)


class ResolveWeekMenuTest(TestCase):

    def test_fallback_when_nothing_is_scheduled(self):
        menu = resolve_week_menu(THURSDAY)
        self.assertEqual(menu, FALLBACK_WEEKLY_MENU)
        self.assertEqual(list(menu), WEEKDAYS)

    def test_every_cell_is_filled(self):
        menu = resolve_week_menu(THURSDAY)
        for day in WEEKDAYS:
            for meal in ("breakfast", "lunch", "snacks", "dinner"):
                self.assertTrue(menu[day][meal])

    def test_upcoming_scheduled_menu_replaces_its_weekday_cell(self):
        saturday = ScheduledMenu(date=THURSDAY + timedelta(days=2), meal_type="dinner",
                                 items=["Chapati", "Paneer Tikka", "Kheer"])
        menu = resolve_week_menu(THURSDAY, [saturday])
        self.assertEqual(menu["saturday"]["dinner"], "Chapati, Paneer Tikka, Kheer")
        self.assertEqual(menu["saturday"]["lunch"], FALLBACK_WEEKLY_MENU["saturday"]["lunch"])

    def test_past_scheduled_menu_is_ignored(self):
        last_week = ScheduledMenu(date=THURSDAY - timedelta(days=1), meal_type="lunch", items=["Khichdi"])
        menu = resolve_week_menu(THURSDAY, [last_week])
        self.assertEqual(menu["wednesday"]["lunch"], FALLBACK_WEEKLY_MENU["wednesday"]["lunch"])

    def test_nearest_date_wins_for_the_same_weekday(self):
        near = ScheduledMenu(date=THURSDAY + timedelta(days=1), meal_type="snacks", items=["Samosa"])
        far = ScheduledMenu(date=THURSDAY + timedelta(days=8), meal_type="snacks", items=["Dhokla"])
        self.assertEqual(resolve_week_menu(THURSDAY, [far, near])["friday"]["snacks"], "Samosa")
        self.assertEqual(resolve_week_menu(THURSDAY, [near, far])["friday"]["snacks"], "Samosa")

    def test_daily_override_wins_for_todays_lunch_only(self):
        scheduled = ScheduledMenu(date=THURSDAY, meal_type="lunch", items=["Rice", "Dal"])
        daily = DailyMenu(date=THURSDAY, lunch="Veg Biryani, Raita", dinner=None, breakfast="")
        menu = resolve_week_menu(THURSDAY, [scheduled], daily)

        self.assertEqual(menu["thursday"]["lunch"], "Veg Biryani, Raita")
        self.assertEqual(menu["thursday"]["breakfast"], FALLBACK_WEEKLY_MENU["thursday"]["breakfast"])
        self.assertEqual(menu["thursday"]["dinner"], FALLBACK_WEEKLY_MENU["thursday"]["dinner"])

    def test_daily_row_for_another_date_is_ignored(self):
        daily = DailyMenu(date=THURSDAY - timedelta(days=7), lunch="Old lunch")
        menu = resolve_week_menu(THURSDAY, daily=daily)
        self.assertEqual(menu["thursday"]["lunch"], FALLBACK_WEEKLY_MENU["thursday"]["lunch"])

    def test_resolution_leaves_fallback_untouched(self):
        daily = DailyMenu(date=THURSDAY, lunch="Special")
        resolve_week_menu(THURSDAY, daily=daily)
        self.assertEqual(FALLBACK_WEEKLY_MENU["thursday"]["lunch"], "Rice, Kadhi, Aloo Matar, Chapati, Pickle")


class LoadWeekMenuTest(TestCase):
    def setUp(self):
        ScheduledMenu.objects.create(date=THURSDAY + timedelta(days=1), meal_type="lunch",
                                     items=["Pulao", "Dal"], published=True)
        ScheduledMenu.objects.create(date=THURSDAY + timedelta(days=1), meal_type="dinner",
                                     items=["Draft dinner"], published=False)
        DailyMenu.objects.create(date=THURSDAY, dinner="Pizza night")

    def test_published_scheduled_and_daily_rows_are_applied(self):
        result = load_week_menu(THURSDAY)
        self.assertEqual(result["active_day"], "thursday")
        self.assertEqual(result["date"], "2025-04-10")
        self.assertEqual(result["menu"]["friday"]["lunch"], "Pulao, Dal")
        self.assertEqual(result["menu"]["friday"]["dinner"], FALLBACK_WEEKLY_MENU["friday"]["dinner"])
        self.assertEqual(result["menu"]["thursday"]["dinner"], "Pizza night")

    def test_drafts_only_when_asked(self):
        result = load_week_menu(THURSDAY, include_unpublished=True)
        self.assertEqual(result["menu"]["friday"]["dinner"], "Draft dinner")
