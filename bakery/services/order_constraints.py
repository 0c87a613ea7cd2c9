"""Weekday constraints for pick-up, delivery and reservation orders."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum


class Day(IntEnum):
    """Weekdays indexed from Sunday, matching ``bakery.utils.time.day_index``."""

    SUNDAY = 0
    MONDAY = 1
    TUESDAY = 2
    WEDNESDAY = 3
    THURSDAY = 4
    FRIDAY = 5
    SATURDAY = 6


NUMBER_OF_DAYS_IN_A_WEEK: int = 7

CLOSING_DAYS: frozenset[Day] = frozenset({Day.SUNDAY, Day.MONDAY})

DELIVERY_DAY: Day = Day.THURSDAY
MAXIMUM_DAY_FOR_DELIVERY_SAME_WEEK: Day = Day.TUESDAY


@dataclass(frozen=True)
class AvailableDayForAPickUpOrder:
    """Earliest pick-up weekday for an order placed on a given weekday."""

    when_order_is_placed_on: Day
    first_available_day: Day


AVAILABLE_DAYS_FOR_A_PICK_UP_ORDER: tuple[AvailableDayForAPickUpOrder, ...] = (
    AvailableDayForAPickUpOrder(when_order_is_placed_on=Day.SUNDAY, first_available_day=Day.TUESDAY),
    AvailableDayForAPickUpOrder(when_order_is_placed_on=Day.MONDAY, first_available_day=Day.THURSDAY),
    AvailableDayForAPickUpOrder(when_order_is_placed_on=Day.TUESDAY, first_available_day=Day.THURSDAY),
    AvailableDayForAPickUpOrder(when_order_is_placed_on=Day.WEDNESDAY, first_available_day=Day.SATURDAY),
    AvailableDayForAPickUpOrder(when_order_is_placed_on=Day.THURSDAY, first_available_day=Day.TUESDAY),
    AvailableDayForAPickUpOrder(when_order_is_placed_on=Day.FRIDAY, first_available_day=Day.TUESDAY),
    AvailableDayForAPickUpOrder(when_order_is_placed_on=Day.SATURDAY, first_available_day=Day.TUESDAY),
)


def first_available_pick_up_day(placed_on: Day) -> Day:
    """Return the earliest pick-up weekday for an order placed on ``placed_on``."""
    for available_day in AVAILABLE_DAYS_FOR_A_PICK_UP_ORDER:
        if available_day.when_order_is_placed_on == placed_on:
            return available_day.first_available_day
    raise KeyError(placed_on)
