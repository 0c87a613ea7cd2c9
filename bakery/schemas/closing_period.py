"""Closing period API schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict


class ClosingPeriodCreate(BaseModel):
    # Left optional so that the domain reports missing bounds itself.
    start_date: datetime | None = None
    end_date: datetime | None = None


class ClosingPeriodCreatedResponse(BaseModel):
    id: int


class ClosingPeriodResponse(BaseModel):
    id: int
    start_date: datetime
    end_date: datetime

    model_config = ConfigDict(from_attributes=True)
