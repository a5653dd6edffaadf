"""
Recency window classification for books.

A book is "new" while fewer than ``window`` minutes have elapsed since its
upload, and "old" once more than ``window`` minutes have elapsed. A book at
exactly the boundary is neither, and a book without an upload date is never
classified. The window defaults to ``Settings.recency_window_minutes``.
"""

from __future__ import annotations

import math
from datetime import datetime
from enum import Enum
from typing import Iterable, TypeVar

from bookshare.config import get_settings
from bookshare.core.utils import as_utc

T = TypeVar("T")


class Recency(str, Enum):
    NEW = "new"
    OLD = "old"


def minutes_elapsed(upload_date: datetime, now: datetime) -> float:
    """Minutes since upload, counted from whole elapsed seconds."""
    seconds = (as_utc(now) - as_utc(upload_date)).total_seconds()
    return math.floor(seconds) / 60


def classify(
    upload_date: datetime | None,
    now: datetime,
    window: int | None = None,
) -> Recency | None:
    if upload_date is None:
        return None
    if window is None:
        window = get_settings().recency_window_minutes
    elapsed = minutes_elapsed(upload_date, now)
    if elapsed < window:
        return Recency.NEW
    if elapsed > window:
        return Recency.OLD
    return None


def filter_by_recency(
    items: Iterable[T],
    recency: Recency | None,
    now: datetime,
    window: int | None = None,
    date_of=lambda item: item.upload_date,
) -> list[T]:
    """
    Keep the items in the requested class, preserving order.

    With ``recency=None`` every item is returned unfiltered.
    """
    if recency is None:
        return list(items)
    if window is None:
        window = get_settings().recency_window_minutes
    return [item for item in items if classify(date_of(item), now, window) == recency]
