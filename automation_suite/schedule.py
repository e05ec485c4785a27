from __future__ import annotations

from datetime import date, datetime, time, timedelta
from typing import Union

from .errors import SlotUnavailableError

SLOT_MINUTES = 30
EARLIEST_SLOT = time(7, 0)
LATEST_SLOT = time(20, 30)
FUTURE_DATE_OFFSET_DAYS = 3


def _as_time(now: Union[time, datetime, str]) -> time:
    if isinstance(now, datetime):
        return now.time()
    if isinstance(now, time):
        return now
    try:
        return datetime.strptime(now.strip(), "%H:%M").time()
    except ValueError as e:
        raise ValueError(f"Expected a HH:MM time, got {now!r}") from e


def _minutes(value: time) -> int:
    return value.hour * 60 + value.minute


def next_available_slot(now: Union[time, datetime, str]) -> str:
    """
    Next bookable half-hour slot strictly after `now`, as "HH:MM".

    Slots before 07:00 move to 07:00. Anything after 20:30 (including a slot
    that would roll past midnight) raises SlotUnavailableError.
    """
    current = _as_time(now)
    minutes = _minutes(current)
    slot = (minutes // SLOT_MINUTES + 1) * SLOT_MINUTES
    slot = max(slot, _minutes(EARLIEST_SLOT))
    label = f"{slot // 60:02d}:{slot % 60:02d}"
    if slot > _minutes(LATEST_SLOT):
        raise SlotUnavailableError(f"Request not available at this time: {label}")
    return label


def calendar_path(today: date, *, future: bool) -> list[str]:
    """Year, month and day labels to click through a mat-calendar, e.g. ['2026', 'OCT', '20']."""
    target = today + timedelta(days=FUTURE_DATE_OFFSET_DAYS) if future else today
    return [str(target.year), target.strftime("%b").upper(), str(target.day)]
