"""
Derived cycle statistics and fertility prediction models.
"""
from datetime import date
from typing import List, Optional

from pydantic import BaseModel

from src.models.date_range import DateRange


class UserStats(BaseModel):
    """
    Cycle and period length statistics derived from a period history.

    The raw length sequences are kept in history order so callers can show
    spread as well as the averages.
    """
    average_cycle_length: int
    min_cycle_length: int
    max_cycle_length: int
    cycle_lengths: List[int] = []
    average_period_length: int
    min_period_length: int
    max_period_length: int
    period_lengths: List[int] = []

    def to_json(self) -> dict:
        return {
            "averageCycleLength": self.average_cycle_length,
            "minCycleLength": self.min_cycle_length,
            "maxCycleLength": self.max_cycle_length,
            "cycleLengths": list(self.cycle_lengths),
            "averagePeriodLength": self.average_period_length,
            "minPeriodLength": self.min_period_length,
            "maxPeriodLength": self.max_period_length,
            "periodLengths": list(self.period_lengths),
        }


class FertilityPrediction(BaseModel):
    """Predicted ovulation day and the fertile window ending on it."""
    ovulation_day: Optional[date] = None
    fertile_window: DateRange = DateRange()
