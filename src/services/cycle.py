"""
Service module for cycle predictions.

This module projects future events from a logged period history: the next
ovulation day with its fertile window, and a run of upcoming periods.
Predictions are always built fresh and never merged into the history.

Typical usage:
    stats = compute_user_stats(history)
    fertility = calculate_fertile_window(history)
    upcoming = get_all_predicted_periods(history, typical_period_length, stats.average_cycle_length)
"""
from datetime import timedelta
from typing import Optional

from aws_lambda_powertools import Logger

from src.models.date_range import DateRange, DateRangeList
from src.models.stats import FertilityPrediction
from src.services.constants import (
    DEFAULT_CYCLE_LENGTH,
    DEFAULT_TYPICAL_PERIOD_LENGTH,
    FERTILE_WINDOW_DAYS,
    LUTEAL_PHASE_DAYS,
    MAX_TYPICAL_PERIOD_LENGTH,
    MIN_TYPICAL_PERIOD_LENGTH,
    PREDICTION_HORIZON_CYCLES
)
from src.services.statistics import compute_user_stats

logger = Logger()


def clamp_typical_period_length(length: Optional[int]) -> int:
    """
    Bound a user-configured period length to the supported range.

    Args:
        length: Requested length in days, None for the default

    Returns:
        Length between MIN_TYPICAL_PERIOD_LENGTH and MAX_TYPICAL_PERIOD_LENGTH
    """
    if length is None:
        return DEFAULT_TYPICAL_PERIOD_LENGTH
    return max(MIN_TYPICAL_PERIOD_LENGTH, min(MAX_TYPICAL_PERIOD_LENGTH, int(length)))


def calculate_fertile_window(period_ranges: DateRangeList) -> FertilityPrediction:
    """
    Predict ovulation and the fertile window from the latest completed period.

    Ovulation is placed LUTEAL_PHASE_DAYS before the expected end of the
    cycle that began with the anchor period, so with the default 28-day cycle
    it falls 14 days after the anchor start.

    Args:
        period_ranges: Normalized period history

    Returns:
        FertilityPrediction; without a completed period both the ovulation
        day and the window are empty

    Example:
        >>> prediction = calculate_fertile_window(history)
        >>> print(f"Ovulation expected on {prediction.ovulation_day}")
    """
    anchor = period_ranges.most_recent_completed()
    if anchor is None:
        return FertilityPrediction()

    cycle_length = compute_user_stats(period_ranges).average_cycle_length
    try:
        ovulation_day = anchor.start + timedelta(days=cycle_length - LUTEAL_PHASE_DAYS)
        fertile_window = DateRange(
            start=ovulation_day - timedelta(days=FERTILE_WINDOW_DAYS - 1),
            end=ovulation_day
        )
    except OverflowError:
        logger.warning("Fertile window falls outside the supported calendar", extra={
            "anchor_start": str(anchor.start),
            "cycle_length": cycle_length
        })
        return FertilityPrediction()

    logger.debug("Calculated fertile window", extra={
        "anchor_start": str(anchor.start),
        "cycle_length": cycle_length,
        "ovulation_day": str(ovulation_day)
    })

    return FertilityPrediction(ovulation_day=ovulation_day, fertile_window=fertile_window)


def get_all_predicted_periods(
    period_ranges: DateRangeList,
    typical_period_length: int,
    average_cycle_length: int,
    horizon: int = PREDICTION_HORIZON_CYCLES
) -> DateRangeList:
    """
    Project upcoming periods from the start of the latest logged period.

    Args:
        period_ranges: Normalized period history
        typical_period_length: Days each projected period spans, clamped to 1-14
        average_cycle_length: Days between projected starts
        horizon: Number of periods to project

    Returns:
        New DateRangeList of projected periods, empty when there is no history

    Example:
        >>> upcoming = get_all_predicted_periods(history, 5, 28)
        >>> upcoming.contains_date(date(2026, 1, 5))
        True
    """
    anchor = period_ranges.most_recent()
    if anchor is None:
        return DateRangeList()

    period_length = clamp_typical_period_length(typical_period_length)
    if average_cycle_length < 1:
        logger.warning("Invalid average cycle length, using default", extra={
            "average_cycle_length": average_cycle_length,
            "default": DEFAULT_CYCLE_LENGTH
        })
        average_cycle_length = DEFAULT_CYCLE_LENGTH

    predicted = []
    for cycle in range(1, horizon + 1):
        try:
            start = anchor.start + timedelta(days=cycle * average_cycle_length)
            end = start + timedelta(days=period_length - 1)
        except OverflowError:
            logger.warning("Stopping projection at the end of the supported calendar", extra={
                "anchor_start": str(anchor.start),
                "projected": len(predicted)
            })
            break
        predicted.append(DateRange(start=start, end=end))

    return DateRangeList.from_ranges(predicted)
