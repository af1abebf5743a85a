"""
Change feed for tables clients watch live (announcements, daily menus).

Committed writes publish ChangeEvents into a bounded per-table window kept in
the Django cache, one key per event. Clients never get callbacks: they hold a
cursor, drain on their own schedule and fold the events into their rows with
merge_rows. A cursor older than the window gets ``resync`` and reloads.
"""
import logging
from datetime import datetime
from typing import Any, Dict, Literal

from django.conf import settings
from django.core.cache import cache
from django.utils import timezone
from pydantic import BaseModel

logger = logging.getLogger(__name__)

FEED_SIZE = getattr(settings, "MESS_CHANGE_FEED_SIZE", 100)
FEED_TIMEOUT = None  # keep until evicted


class ChangeEvent(BaseModel):
    seq: int
    table: str
    event: Literal["INSERT", "UPDATE", "DELETE"]
    row: Dict[str, Any]
    committed_at: datetime


def _event_key(table, seq):
    return f"change_feed_{table}_{seq}"


def _seq_key(table):
    return f"change_feed_seq_{table}"


def _next_seq(table):
    key = _seq_key(table)
    cache.add(key, 0, timeout=FEED_TIMEOUT)
    try:
        return cache.incr(key)
    except ValueError:
        # evicted between add and incr
        cache.set(key, 1, timeout=FEED_TIMEOUT)
        return 1


def publish(table, event, row):
    change = ChangeEvent(
        seq=_next_seq(table),
        table=table,
        event=event,
        row=row,
        committed_at=timezone.now(),
    )
    # one key per event, seq is allocated by cache.incr
    cache.set(_event_key(table, change.seq), change.model_dump(mode="json"), timeout=FEED_TIMEOUT)
    if change.seq > FEED_SIZE:
        cache.delete(_event_key(table, change.seq - FEED_SIZE))
    logger.info("Published %s on %s (seq %s)", event, table, change.seq)
    return change


def latest_seq(table):
    return cache.get(_seq_key(table), 0)


def oldest_seq(table):
    """First seq still inside the retained window."""
    return max(latest_seq(table) - FEED_SIZE + 1, 1)


def read_feed(table, since=0):
    """Events after ``since`` within the window, ordered by seq."""
    start = max(since + 1, oldest_seq(table))
    keys = [_event_key(table, seq) for seq in range(start, latest_seq(table) + 1)]
    found = cache.get_many(keys)
    return [ChangeEvent(**found[key]) for key in keys if key in found]


class Subscription:
    """A cursor over one table's feed, filtered by a row predicate."""

    def __init__(self, table, predicate=None, cursor=0):
        self.table = table
        self.predicate = predicate
        self.cursor = cursor
        self.resync = False

    def drain(self):
        # events between the cursor and the window were trimmed away
        self.resync = self.cursor < oldest_seq(self.table) - 1
        events = read_feed(self.table, since=self.cursor)
        if events:
            self.cursor = events[-1].seq
        if self.predicate is None:
            return events
        # deletes carry only the key, so they always pass
        return [e for e in events if e.event == "DELETE" or self.predicate(e.row)]


def _stamp(row, fallback):
    value = row.get("updated_at")
    if isinstance(value, str):
        try:
            return datetime.fromisoformat(value.replace("Z", "+00:00"))
        except ValueError:
            return fallback
    return value or fallback


def merge_rows(rows, events, key="id"):
    """
    Fold change events into ``rows`` (a list of dicts), last write wins.

    A row is replaced only by a version whose timestamp is not older than the
    one held, so an event echoing a local write merges as a no-op. Deletes
    drop the row. Result is ordered like ``rows`` with new rows first.
    """
    merged = {row[key]: dict(row) for row in rows}
    order = [row[key] for row in rows]

    for change in events:
        row_id = change.row.get(key)
        if row_id is None:
            continue
        if change.event == "DELETE":
            merged.pop(row_id, None)
            if row_id in order:
                order.remove(row_id)
            continue

        incoming = _stamp(change.row, change.committed_at)
        current = merged.get(row_id)
        if current is not None:
            held = _stamp(current, None)
            if held is not None and incoming is not None and held > incoming:
                continue
        else:
            order.insert(0, row_id)
        merged[row_id] = dict(change.row)

    return [merged[row_id] for row_id in order if row_id in merged]
