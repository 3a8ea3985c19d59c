"""Reset schedule for game modes."""

from datetime import datetime, timedelta, timezone
from typing import Optional

from .models import GameMode, TimeRemaining


def _utc(now: Optional[datetime]) -> datetime:
    if now is None:
        return datetime.now(timezone.utc)
    if now.tzinfo is None:
        return now.replace(tzinfo=timezone.utc)
    return now.astimezone(timezone.utc)


def next_reset_time(mode: GameMode, now: Optional[datetime] = None) -> datetime:
    """
    Get the next reset instant for a game mode, in UTC.

    Daily resets at midnight, weekly on Monday at midnight, monthly on the
    first of the month and yearly on January 1st.

    Args:
        mode: Game mode
        now: Reference time (defaults to the current time; naive is UTC)

    Returns:
        Timezone-aware UTC datetime strictly after now
    """
    now = _utc(now)
    midnight = now.replace(hour=0, minute=0, second=0, microsecond=0)

    if mode is GameMode.DAILY:
        return midnight + timedelta(days=1)
    if mode is GameMode.WEEKLY:
        days_until_monday = (7 - now.weekday()) % 7 or 7
        return midnight + timedelta(days=days_until_monday)
    if mode is GameMode.MONTHLY:
        if now.month == 12:
            return midnight.replace(year=now.year + 1, month=1, day=1)
        return midnight.replace(month=now.month + 1, day=1)
    if mode is GameMode.YEARLY:
        return midnight.replace(year=now.year + 1, month=1, day=1)
    raise ValueError(f"Unknown game mode: {mode!r}")


def time_remaining(mode: GameMode, now: Optional[datetime] = None) -> TimeRemaining:
    """Countdown from now to the next reset of a game mode."""
    now = _utc(now)
    total_seconds = max(0, int((next_reset_time(mode, now) - now).total_seconds()))

    return TimeRemaining(
        days=total_seconds // 86400,
        hours=(total_seconds % 86400) // 3600,
        minutes=(total_seconds % 3600) // 60,
        seconds=total_seconds % 60,
        total_seconds=total_seconds,
    )
