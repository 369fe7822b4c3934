"""Parsing of weekly heating schedules."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

from pyhiveomnia.const import WEEKDAYS


if TYPE_CHECKING:
    from collections.abc import Iterable

    from pyhiveomnia.models import WeeklySchedule

_LOGGER = logging.getLogger(__name__)


def parse_schedule(setpoints: Iterable[Mapping[str, Any]]) -> WeeklySchedule:
    """Group schedule set points by weekday.

    Set points are kept in the order they are given, duplicates included;
    they are not sorted by time.

    Args:
        setpoints: Set points in format
            ``{"dayIndex": 1, "time": "06:30", "actions": [{"attribute": ..., "value": 21}]}``
            where dayIndex 1 is Monday and 7 is Sunday.

    Returns:
        Mapping of weekday ("Mon" to "Sun") to a list of (time, value) pairs.
        The value is None if the set point has no action value.
    """
    schedule: WeeklySchedule = {day: [] for day in WEEKDAYS.values()}

    for point in setpoints:
        if not isinstance(point, Mapping):
            _LOGGER.debug("Dropping malformed set point: %s", point)
            continue

        day_index = point.get("dayIndex")
        day = None if isinstance(day_index, bool) or not isinstance(day_index, int) else WEEKDAYS.get(day_index)
        if day is None:
            _LOGGER.debug("Dropping set point with invalid day index: %s", point)
            continue

        schedule[day].append((point.get("time"), _action_value(point.get("actions"))))

    return schedule


def _action_value(actions: Any) -> Any:
    """Get the value of the first action of a set point, if any."""
    if not isinstance(actions, list) or not actions or not isinstance(actions[0], Mapping):
        return None
    return actions[0].get("value")
