"""Relative time phrases such as "3 days ago"."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone


def _pluralize(amount: int, unit: str) -> str:
    return f"{amount} {unit}" if amount == 1 else f"{amount} {unit}s"


def time_ago(delta: timedelta) -> str:
    """Format an elapsed duration as a human phrase.

    Months are counted as 30 days and years as 365 days.
    Negative durations (clock skew) are treated as zero.
    """
    seconds = max(delta.total_seconds(), 0.0)
    minutes = int(seconds // 60)
    hours = int(seconds // 3600)
    days = int(seconds // 86400)

    if minutes < 1:
        return "less than a minute ago"
    if hours < 1:
        return f"{_pluralize(minutes, 'minute')} ago"
    if days < 1:
        return f"{_pluralize(hours, 'hour')} ago"
    if days < 30:
        return f"{_pluralize(days, 'day')} ago"
    if days < 365:
        return f"{_pluralize(days // 30, 'month')} ago"
    return f"{_pluralize(days // 365, 'year')} ago"


def time_since(moment: datetime, now: datetime | None = None) -> str:
    """Format the time elapsed between ``moment`` and ``now``."""
    if now is None:
        now = datetime.now(timezone.utc)
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    return time_ago(now - moment)
