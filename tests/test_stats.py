from datetime import date

from django.contrib.auth.models import User
from django.test import TestCase

from mess.models import MealBooking
from mess.stats import monthly_meal_stats, preference_key


class MonthlyMealStatsTest(TestCase):
    def setUp(self):
        self.user = User.objects.create_user(username='resident', password='testpassword')
        other = User.objects.create_user(username='neighbour', password='testpassword')

        def book(user, day, meal, pref='veg'):
            MealBooking.objects.create(user=user, booking_date=day, meal_type=meal,
                                       time_slot='slot', meal_preference=pref)

        book(self.user, date(2025, 4, 1), 'breakfast')
        book(self.user, date(2025, 4, 10), 'lunch', 'non-veg')
        book(self.user, date(2025, 4, 10), 'dinner', 'non-veg')
        book(self.user, date(2025, 4, 30), 'dinner')
        book(self.user, date(2025, 3, 31), 'lunch')      # previous month
        book(self.user, date(2025, 5, 1), 'snacks')      # next month
        book(other, date(2025, 4, 10), 'lunch')

    def test_counts_for_the_month(self):
        stats = monthly_meal_stats(self.user, date(2025, 4, 15))

        self.assertEqual(stats['total'], 4)
        self.assertEqual(stats['by_meal_type'], {'breakfast': 1, 'lunch': 1, 'snacks': 0, 'dinner': 2})
        self.assertEqual(stats['by_preference'], {'veg': 2, 'nonveg': 2})
        self.assertEqual(stats['by_meal_type_and_preference']['dinner'], {'veg': 1, 'nonveg': 1})
        self.assertEqual(stats['month'], 'April 2025')
        self.assertEqual((stats['start'], stats['end']), ('2025-04-01', '2025-04-30'))

    def test_empty_month(self):
        stats = monthly_meal_stats(self.user, date(2025, 2, 3))
        self.assertEqual(stats['total'], 0)
        self.assertEqual(stats['end'], '2025-02-28')

    def test_preference_key(self):
        self.assertEqual(preference_key('Non-Veg'), 'nonveg')
        self.assertEqual(preference_key(None), 'veg')
