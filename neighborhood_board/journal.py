"""
Journal day bucketing.

Journal posts are grouped by day number: day 1 is the epoch date
(JOURNAL_EPOCH), day 2 the day after, and so on. Anything written before
the epoch is counted as day 1. Days without posts produce no bucket.
"""
import datetime
import logging

from django.utils import dateformat
from django.utils.dateparse import parse_date, parse_datetime

from .conf import board_settings
from .projections import DayBucket

logger = logging.getLogger(__name__)

ONE_DAY = datetime.timedelta(days=1)


def get_epoch(value=None):
    """Return the journal epoch as a date (defaults to JOURNAL_EPOCH)."""
    if value is None:
        value = board_settings.JOURNAL_EPOCH
    if isinstance(value, datetime.datetime):
        return value.date()
    if isinstance(value, datetime.date):
        return value
    epoch = parse_date(value)
    if epoch is None:
        raise ValueError(f"Invalid journal epoch: {value!r}")
    return epoch


def parse_timestamp(value):
    """
    Return `value` as an aware UTC datetime.

    Accepts datetimes as stored by the model, and strings in
    "YYYY-MM-DD HH:MM:SS" or ISO 8601 form, falling back to the bare date
    in the first ten characters. Naive values are taken to be UTC.

    Raises:
        ValueError: if the value cannot be read as a timestamp.
    """
    if isinstance(value, datetime.datetime):
        parsed = value
    elif isinstance(value, str):
        text = value.strip()
        parsed = parse_datetime(text)
        if parsed is None:
            day = parse_date(text[:10])
            if day is None:
                raise ValueError(f"Unrecognised timestamp: {value!r}")
            parsed = datetime.datetime.combine(day, datetime.time())
    else:
        raise ValueError(f"Unrecognised timestamp: {value!r}")

    if parsed.tzinfo is None or parsed.utcoffset() is None:
        return parsed.replace(tzinfo=datetime.timezone.utc)
    return parsed.astimezone(datetime.timezone.utc)


def day_number(timestamp, epoch=None):
    """1-based day count from the epoch, clamped to 1 for earlier timestamps."""
    epoch = get_epoch(epoch)
    start = datetime.datetime.combine(epoch, datetime.time(), tzinfo=datetime.timezone.utc)
    elapsed = parse_timestamp(timestamp) - start
    return max(elapsed // ONE_DAY + 1, 1)


def day_label(number, epoch=None):
    """Human readable date of a day number, e.g. "June 2, 2025"."""
    day = get_epoch(epoch) + datetime.timedelta(days=number - 1)
    return dateformat.format(day, board_settings.JOURNAL_DATE_FORMAT)


def bucket_by_day(posts, epoch=None):
    """
    Group journal posts into DayBuckets, most recent day first.

    Posts keep their incoming order within a bucket. A post whose
    created_at cannot be read is logged and left out; the remaining
    posts are still bucketed.

    Args:
        posts: iterable of objects with `id` and `created_at`
        epoch: date, datetime or "YYYY-MM-DD" string; JOURNAL_EPOCH if None

    Returns:
        List of DayBucket
    """
    epoch = get_epoch(epoch)
    days = {}

    for post in posts:
        try:
            number = day_number(post.created_at, epoch)
        except ValueError as exc:
            logger.error(
                "Dropping journal post %s: created_at %r is not a valid timestamp (%s)",
                post.id,
                post.created_at,
                exc,
            )
            continue
        days.setdefault(number, []).append(post)

    return [
        DayBucket(
            day_number=number,
            date_label=day_label(number, epoch),
            posts=tuple(days[number]),
        )
        for number in sorted(days, reverse=True)
    ]
