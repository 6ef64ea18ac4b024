"""
Application state model for the period tracker.
"""
from datetime import date
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from src.models.date_range import DateRange, DateRangeList
from src.models.stats import UserStats
from src.services.constants import (
    DEFAULT_TYPICAL_PERIOD_LENGTH,
    MAX_TYPICAL_PERIOD_LENGTH,
    MIN_TYPICAL_PERIOD_LENGTH
)


class TrackerState(BaseModel):
    """
    Logged period history plus the predictions derived from it.

    period_ranges is the only authoritative history. The remaining derived
    fields are rebuilt by src.services.tracker.recompute and may be None
    until then.
    """
    model_config = ConfigDict(frozen=True)

    period_ranges: DateRangeList = DateRangeList()
    typical_period_length: int = Field(
        DEFAULT_TYPICAL_PERIOD_LENGTH,
        ge=MIN_TYPICAL_PERIOD_LENGTH,
        le=MAX_TYPICAL_PERIOD_LENGTH
    )
    user_stats: Optional[UserStats] = None
    predicted_ovulation_day: Optional[date] = None
    predicted_fertile_window: DateRange = DateRange()
    predicted_periods: DateRangeList = DateRangeList()
