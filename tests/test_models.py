from datetime import date

from django.contrib.auth.models import User
from django.test import TestCase

from mess.models import SLOT_CATALOG, DailyMenu, MealBooking, Profile, ScheduledMenu, slot_label, today


class SlotCatalogTest(TestCase):
    def test_slot_labels(self):
        self.assertEqual(slot_label('breakfast', 'b1'), '7:30 AM - 8:00 AM')
        self.assertEqual(slot_label('snacks', 's2'), '5:00 PM - 5:30 PM')
        self.assertEqual(slot_label('dinner', 'd3'), '8:30 PM - 9:00 PM')

    def test_unknown_slot(self):
        self.assertIsNone(slot_label('lunch', 'b1'))
        self.assertIsNone(slot_label('supper', 'd1'))

    def test_catalog_shape(self):
        self.assertEqual(list(SLOT_CATALOG), ['breakfast', 'lunch', 'snacks', 'dinner'])
        self.assertEqual([len(slots) for slots in SLOT_CATALOG.values()], [3, 3, 2, 3])


class MessModelTest(TestCase):
    def setUp(self):
        self.user = User.objects.create_user(username='resident', password='testpassword')

    def test_booking_defaults_to_veg(self):
        booking = MealBooking.objects.create(user=self.user, booking_date=date(2025, 4, 10),
                                             meal_type='lunch', time_slot='1:00 PM - 1:30 PM')
        self.assertEqual(booking.meal_preference, 'veg')
        self.assertEqual(str(booking), '2025-04-10 lunch at 1:00 PM - 1:30 PM')

    def test_profile_defaults(self):
        profile = Profile.objects.create(user=self.user, name='Asha', reg_number='21BCE1001', room_number='A-204')
        self.assertEqual(profile.theme, 'light')
        self.assertEqual(str(profile), 'Asha (A-204)')

    def test_daily_menu_defaults_to_today(self):
        menu = DailyMenu.objects.create(lunch='Rice, Dal')
        self.assertEqual(menu.date, today())
        self.assertIsNone(menu.dinner)

    def test_scheduled_menu_items_display(self):
        menu = ScheduledMenu(date=date(2025, 4, 11), meal_type='lunch', items=['Rice', 'Sambar'])
        self.assertEqual(menu.display_items(), 'Rice, Sambar')
        self.assertTrue(menu.published)
