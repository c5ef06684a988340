from __future__ import annotations

from datetime import date

DAYS_OF_WEEK = (
    "Sunday",
    "Monday",
    "Tuesday",
    "Wednesday",
    "Thursday",
    "Friday",
    "Saturday",
)


def weekday_of(day: date) -> int:
    """Day of week with Sunday = 0 ... Saturday = 6, matching ``classes.day_of_week``."""
    return day.isoweekday() % 7


def is_scheduled_on(class_def, day: date) -> bool:
    """A class runs on ``day`` iff the weekday matches its ``day_of_week``.

    This is the single definition of schedule matching; roster reads and
    check-in commands both go through it.
    """
    return weekday_of(day) == class_def.day_of_week
