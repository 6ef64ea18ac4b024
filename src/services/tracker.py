"""
State transitions for the period tracker.

Every function takes a TrackerState and returns a new one with the derived
statistics and predictions recomputed. Nothing here performs I/O; callers
hand the result to a persistence layer such as TrackerStateStore.

Typical usage:
    state = state_from_json(persisted)
    state = log_period_day(state, date.today())
    persisted = state_to_json(state)
"""
from datetime import date
from typing import Any, Dict

from aws_lambda_powertools import Logger

from src.models.date_range import DateRange, DateRangeList
from src.models.tracker_state import TrackerState
from src.services.constants import (
    DEFAULT_TYPICAL_PERIOD_LENGTH,
    DEMO_PERIOD_RANGES,
    MAX_TYPICAL_PERIOD_LENGTH,
    MIN_TYPICAL_PERIOD_LENGTH
)
from src.services.cycle import (
    calculate_fertile_window,
    clamp_typical_period_length,
    get_all_predicted_periods
)
from src.services.statistics import compute_user_stats

logger = Logger()


def recompute(state: TrackerState) -> TrackerState:
    """
    Rebuild statistics and predictions from the logged history.

    Args:
        state: Current tracker state

    Returns:
        Copy of the state with every derived field refreshed
    """
    stats = compute_user_stats(state.period_ranges)
    fertility = calculate_fertile_window(state.period_ranges)
    predicted_periods = get_all_predicted_periods(
        state.period_ranges,
        state.typical_period_length,
        stats.average_cycle_length
    )
    return state.model_copy(update={
        "user_stats": stats,
        "predicted_ovulation_day": fertility.ovulation_day,
        "predicted_fertile_window": fertility.fertile_window,
        "predicted_periods": predicted_periods
    })


def log_period_day(state: TrackerState, day: date) -> TrackerState:
    """Mark a single day as a period day."""
    return recompute(state.model_copy(update={
        "period_ranges": state.period_ranges.add_date(day)
    }))


def log_period_range(state: TrackerState, date_range: DateRange) -> TrackerState:
    """Mark every day of a range as period days."""
    return recompute(state.model_copy(update={
        "period_ranges": state.period_ranges.add_range(date_range)
    }))


def set_typical_period_length(state: TrackerState, length: int) -> TrackerState:
    """Change the forecast period length, clamped to the supported range."""
    return recompute(state.model_copy(update={
        "typical_period_length": clamp_typical_period_length(length)
    }))


def delete_all_data() -> TrackerState:
    """Return a fresh state with no history and default settings."""
    return recompute(TrackerState())


def demo_state() -> TrackerState:
    """Return a state preloaded with a three-period sample history."""
    return recompute(TrackerState(period_ranges=DateRangeList.from_json(DEMO_PERIOD_RANGES)))


def state_to_json(state: TrackerState) -> Dict[str, Any]:
    """
    Convert state to the persisted record.

    Returns:
        Dictionary of JSON-friendly values keyed as the stored app state
    """
    return {
        "periodRanges": state.period_ranges.to_json(),
        "typicalPeriodLength": state.typical_period_length,
        "predictedOvulationDay": (
            state.predicted_ovulation_day.isoformat() if state.predicted_ovulation_day else None
        ),
        "predictedFertileWindow": state.predicted_fertile_window.to_json(),
        "predictedPeriods": state.predicted_periods.to_json(),
        "userStats": state.user_stats.to_json() if state.user_stats else None,
    }


def state_from_json(record: Any) -> TrackerState:
    """
    Rebuild state from a persisted record.

    Only the period history and the typical period length are read; every
    prediction is recomputed. Malformed values fall back to defaults.

    Args:
        record: Persisted dictionary, possibly partial or malformed

    Returns:
        Recomputed TrackerState
    """
    if not isinstance(record, dict):
        logger.warning("Persisted state is not a mapping, using defaults", extra={
            "value_type": type(record).__name__
        })
        return delete_all_data()

    typical_period_length = record.get("typicalPeriodLength", DEFAULT_TYPICAL_PERIOD_LENGTH)
    # JSON numbers may come back as floats
    if isinstance(typical_period_length, float) and typical_period_length.is_integer():
        typical_period_length = int(typical_period_length)
    if (
        isinstance(typical_period_length, bool)
        or not isinstance(typical_period_length, int)
        or not MIN_TYPICAL_PERIOD_LENGTH <= typical_period_length <= MAX_TYPICAL_PERIOD_LENGTH
    ):
        logger.warning("Ignoring invalid typical period length", extra={
            "value": str(typical_period_length)
        })
        typical_period_length = DEFAULT_TYPICAL_PERIOD_LENGTH

    return recompute(TrackerState(
        period_ranges=DateRangeList.from_json(record.get("periodRanges")),
        typical_period_length=typical_period_length
    ))

