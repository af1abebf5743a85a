from datetime import datetime, timedelta, timezone as dt_timezone

from django.core.cache import cache
from django.db import transaction
from django.test import TestCase, TransactionTestCase

from mess import realtime
from mess.models import Announcement, DailyMenu
from mess.realtime import ChangeEvent, Subscription, merge_rows, read_feed
from mess.utils import mess_today
from mess.views import CHANGE_FEEDS


T0 = datetime(2025, 4, 10, 9, 0, tzinfo=dt_timezone.utc)


def change(seq, event, row, committed_at=T0):
    return ChangeEvent(seq=seq, table="announcements", event=event, row=row, committed_at=committed_at)


class MergeRowsTest(TestCase):
    def setUp(self):
        self.rows = [
            {"id": 1, "title": "Mess closed Sunday", "updated_at": "2025-04-10T08:00:00+00:00"},
            {"id": 2, "title": "New menu", "updated_at": "2025-04-10T08:30:00+00:00"},
        ]

    def test_insert_goes_first(self):
        merged = merge_rows(self.rows, [change(1, "INSERT", {"id": 3, "title": "Holi dinner"})])
        self.assertEqual([row["id"] for row in merged], [3, 1, 2])

    def test_newer_update_replaces_row_in_place(self):
        newer = {"id": 2, "title": "New menu (revised)", "updated_at": "2025-04-10T09:30:00+00:00"}
        merged = merge_rows(self.rows, [change(1, "UPDATE", newer)])
        self.assertEqual([row["id"] for row in merged], [1, 2])
        self.assertEqual(merged[1]["title"], "New menu (revised)")

    def test_older_update_is_dropped(self):
        stale = {"id": 1, "title": "stale", "updated_at": "2025-04-10T07:00:00+00:00"}
        merged = merge_rows(self.rows, [change(1, "UPDATE", stale)])
        self.assertEqual(merged[0]["title"], "Mess closed Sunday")

    def test_delete_removes_row(self):
        merged = merge_rows(self.rows, [change(1, "DELETE", {"id": 1})])
        self.assertEqual([row["id"] for row in merged], [2])

    def test_delete_of_unknown_row_is_harmless(self):
        merged = merge_rows(self.rows, [change(1, "DELETE", {"id": 99})])
        self.assertEqual(merged, self.rows)

    def test_replaying_events_is_idempotent(self):
        events = [
            change(1, "INSERT", {"id": 3, "title": "Holi dinner", "updated_at": "2025-04-10T10:00:00+00:00"}),
            change(2, "DELETE", {"id": 1}),
        ]
        once = merge_rows(self.rows, events)
        twice = merge_rows(once, events)
        self.assertEqual(once, twice)

    def test_input_rows_are_not_mutated(self):
        newer = {"id": 1, "title": "changed", "updated_at": "2025-04-10T11:00:00+00:00"}
        merge_rows(self.rows, [change(1, "UPDATE", newer)])
        self.assertEqual(self.rows[0]["title"], "Mess closed Sunday")


class ChangeFeedTest(TestCase):
    def setUp(self):
        cache.clear()

    def test_announcement_writes_are_published(self):
        subscription = Subscription("announcements", predicate=CHANGE_FEEDS["announcements"])
        with self.captureOnCommitCallbacks(execute=True):
            notice = Announcement.objects.create(title="Water cut", content="No water 2-4 PM")
        with self.captureOnCommitCallbacks(execute=True):
            notice.content = "No water 2-5 PM"
            notice.save()
        notice_id = notice.pk
        with self.captureOnCommitCallbacks(execute=True):
            notice.delete()

        events = subscription.drain()
        self.assertEqual([e.event for e in events], ["INSERT", "UPDATE", "DELETE"])
        self.assertEqual(events[0].row["title"], "Water cut")
        self.assertEqual(events[2].row, {"id": notice_id})
        self.assertEqual(subscription.cursor, events[-1].seq)
        self.assertEqual(subscription.drain(), [])

    def test_nothing_published_before_commit(self):
        with self.captureOnCommitCallbacks(execute=False) as callbacks:
            Announcement.objects.create(title="Pending", content="...")
        self.assertEqual(len(callbacks), 1)
        self.assertEqual(read_feed("announcements"), [])

    def test_inactive_announcements_are_filtered(self):
        subscription = Subscription("announcements", predicate=CHANGE_FEEDS["announcements"])
        with self.captureOnCommitCallbacks(execute=True):
            Announcement.objects.create(title="Draft", content="...", is_active=False)
            Announcement.objects.create(title="Live", content="...")

        events = subscription.drain()
        self.assertEqual([e.row["title"] for e in events], ["Live"])
        # the cursor still moves past filtered events
        self.assertEqual(subscription.cursor, realtime.latest_seq("announcements"))

    def test_only_todays_daily_menu_passes(self):
        subscription = Subscription("daily_menus", predicate=CHANGE_FEEDS["daily_menus"])
        with self.captureOnCommitCallbacks(execute=True):
            DailyMenu.objects.create(date=mess_today() - timedelta(days=1), lunch="Yesterday")
            DailyMenu.objects.create(date=mess_today(), lunch="Today")

        events = subscription.drain()
        self.assertEqual([e.row["lunch"] for e in events], ["Today"])

    def test_events_fold_into_client_rows(self):
        subscription = Subscription("announcements", predicate=CHANGE_FEEDS["announcements"])
        with self.captureOnCommitCallbacks(execute=True):
            first = Announcement.objects.create(title="First", content="...")
            Announcement.objects.create(title="Second", content="...")
        with self.captureOnCommitCallbacks(execute=True):
            first.delete()

        rows = merge_rows([], subscription.drain())
        self.assertEqual([row["title"] for row in rows], ["Second"])

    def test_log_is_bounded(self):
        for i in range(realtime.FEED_SIZE + 5):
            realtime.publish("announcements", "INSERT", {"id": i})
        feed = read_feed("announcements")
        self.assertEqual(len(feed), realtime.FEED_SIZE)
        self.assertEqual(feed[0].seq, 6)
        self.assertEqual(feed[-1].seq, realtime.FEED_SIZE + 5)
        self.assertIsNone(cache.get("change_feed_announcements_5"))

    def test_each_event_keeps_its_own_entry(self):
        # a publish landing between another writer's seq allocation and its
        # write must not replace that writer's event
        first_seq = realtime._next_seq("announcements")
        realtime.publish("announcements", "INSERT", {"id": 2})
        cache.set(f"change_feed_announcements_{first_seq}", ChangeEvent(
            seq=first_seq, table="announcements", event="INSERT", row={"id": 1}, committed_at=T0,
        ).model_dump(mode="json"))

        self.assertEqual([e.row["id"] for e in read_feed("announcements")], [1, 2])

    def test_stale_cursor_asks_for_resync(self):
        for i in range(realtime.FEED_SIZE + 5):
            realtime.publish("announcements", "INSERT", {"id": i})

        stale = Subscription("announcements", cursor=2)
        events = stale.drain()
        self.assertTrue(stale.resync)
        self.assertEqual(events[0].seq, 6)

        fresh = Subscription("announcements", cursor=5)
        fresh.drain()
        self.assertFalse(fresh.resync)
        self.assertEqual(stale.drain(), [])
        self.assertFalse(stale.resync)


class ChangeFeedCommitTest(TransactionTestCase):
    def setUp(self):
        cache.clear()

    def test_rolled_back_write_is_not_published(self):
        with self.assertRaises(RuntimeError):
            with transaction.atomic():
                Announcement.objects.create(title="ghost", content="...")
                raise RuntimeError("abort")

        self.assertEqual(Announcement.objects.count(), 0)
        self.assertEqual(read_feed("announcements"), [])

    def test_committed_write_is_published(self):
        with transaction.atomic():
            notice = Announcement.objects.create(title="Mess open late", content="...")
        self.assertEqual([e.row["id"] for e in read_feed("announcements")], [notice.pk])
