"""Closing periods: validated date ranges during which the shop fulfills no order."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime

from sqlalchemy.orm import Session

from bakery.models.closing_period import ClosingPeriodRecord
from bakery.services.errors import ClosingPeriodNotFound, InvalidClosingPeriod
from bakery.utils.time import is_before_ignoring_hours, is_within, to_business_time

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ClosingPeriod:
    start_date: datetime
    end_date: datetime
    id: int | None = None

    @classmethod
    def create(cls, start_date: datetime | None, end_date: datetime | None, now: datetime) -> ClosingPeriod:
        """Validate a new closing period against ``now``.

        Both bounds must fall today or later (hours are ignored) and the end
        must not precede the start.
        """
        if start_date is None:
            raise InvalidClosingPeriod("start date has to be defined")
        if is_before_ignoring_hours(start_date, now):
            raise InvalidClosingPeriod("start date has to be in the future")

        if end_date is None:
            raise InvalidClosingPeriod("end date has to be defined")
        if is_before_ignoring_hours(end_date, now):
            raise InvalidClosingPeriod("end date has to be in the future")
        if to_business_time(end_date) < to_business_time(start_date):
            raise InvalidClosingPeriod("end date has to be greater than start date")

        return cls(start_date=start_date, end_date=end_date)

    def contains(self, value: datetime) -> bool:
        """Return True when ``value`` is inside the period, bounds included."""
        return is_within(value, self.start_date, self.end_date)


def to_closing_period(record: ClosingPeriodRecord) -> ClosingPeriod:
    return ClosingPeriod(id=record.id, start_date=record.start_date, end_date=record.end_date)


def get_closing_periods(db: Session) -> list[ClosingPeriod]:
    records: list[ClosingPeriodRecord] = (
        db.query(ClosingPeriodRecord).order_by(ClosingPeriodRecord.start_date.asc()).all()
    )
    return [to_closing_period(record) for record in records]


def add_closing_period(db: Session, *, start_date: datetime | None, end_date: datetime | None, now: datetime) -> int:
    """Validate and persist a closing period, returning its id."""
    closing_period: ClosingPeriod = ClosingPeriod.create(start_date, end_date, now)
    record = ClosingPeriodRecord(
        start_date=to_business_time(closing_period.start_date),
        end_date=to_business_time(closing_period.end_date),
    )
    db.add(record)
    db.commit()
    db.refresh(record)
    logger.info("Closing period %s added (%s -> %s)", record.id, record.start_date, record.end_date)
    return record.id


def delete_closing_period(db: Session, closing_period_id: int) -> None:
    record: ClosingPeriodRecord | None = db.get(ClosingPeriodRecord, closing_period_id)
    if record is None:
        raise ClosingPeriodNotFound(f'Closing period not found with id "{closing_period_id}"')
    db.delete(record)
    db.commit()
    logger.info("Closing period %s deleted", closing_period_id)
