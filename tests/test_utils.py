from datetime import date, timedelta

from django.test import SimpleTestCase

from mess.utils import friendly_date_string, mess_today, resolve_date_keyword


class ResolveDateKeywordTest(SimpleTestCase):

    def test_keywords(self):
        self.assertEqual(resolve_date_keyword("today"), mess_today())
        self.assertEqual(resolve_date_keyword(" Tomorrow "), mess_today() + timedelta(days=1))

    def test_iso_and_fuzzy(self):
        self.assertEqual(resolve_date_keyword("2025-04-10"), date(2025, 4, 10))
        self.assertEqual(resolve_date_keyword("10 Apr 2025"), date(2025, 4, 10))

    def test_empty_input_returns_default(self):
        self.assertIsNone(resolve_date_keyword(""))
        self.assertEqual(resolve_date_keyword(None, default=date(2025, 1, 1)), date(2025, 1, 1))

    def test_date_passes_through(self):
        self.assertEqual(resolve_date_keyword(date(2025, 4, 10)), date(2025, 4, 10))

    def test_garbage_raises(self):
        with self.assertRaises(ValueError):
            resolve_date_keyword("not a date at all")


class FriendlyDateStringTest(SimpleTestCase):

    def test_suffixes(self):
        self.assertEqual(friendly_date_string(date(2025, 7, 1)), "1st July, 2025")
        self.assertEqual(friendly_date_string(date(2025, 7, 12)), "12th July, 2025")
        self.assertEqual(friendly_date_string(date(2025, 7, 23)), "23rd July, 2025")
