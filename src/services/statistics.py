"""
Statistics calculation service for period history.

This module derives cycle lengths (start to start of consecutive periods) and
period lengths (inclusive day count of each completed period) from a
DateRangeList, and summarizes them for display.

Typical usage:
    history = DateRangeList.from_json(persisted["periodRanges"])
    stats = compute_user_stats(history)
    print(f"Average cycle: {stats.average_cycle_length} days")
"""
import math
from statistics import mean
from typing import List, Tuple

from aws_lambda_powertools import Logger

from src.models.date_range import DateRangeList
from src.models.stats import UserStats
from src.services.constants import DEFAULT_CYCLE_LENGTH, DEFAULT_PERIOD_LENGTH

logger = Logger()


def round_half_up(value: float) -> int:
    """Round to the nearest whole number, with halves rounding up."""
    return int(math.floor(value + 0.5))


def calculate_cycle_lengths(period_ranges: DateRangeList) -> List[int]:
    """
    Calculate days between the starts of consecutive periods.

    Open (still ongoing) periods count here since only their start is needed.

    Args:
        period_ranges: Normalized period history

    Returns:
        One cycle length per consecutive pair of periods, in history order
    """
    starts = [r.start for r in period_ranges.ranges if r.start is not None]
    return [(later - earlier).days for earlier, later in zip(starts, starts[1:])]


def calculate_period_lengths(period_ranges: DateRangeList) -> List[int]:
    """
    Calculate the inclusive day count of every completed period.

    Args:
        period_ranges: Normalized period history

    Returns:
        Period lengths in history order, open periods excluded
    """
    return [r.length_days for r in period_ranges.ranges if r.is_closed]


def summarize_lengths(lengths: List[int], default: int) -> Tuple[int, int, int]:
    """
    Summarize a length sequence as (average, minimum, maximum).

    Falls back to the default for all three values when the sequence is empty.
    """
    if not lengths:
        return default, default, default
    return round_half_up(mean(lengths)), min(lengths), max(lengths)


def compute_user_stats(period_ranges: DateRangeList) -> UserStats:
    """
    Compute cycle and period statistics from a period history.

    Args:
        period_ranges: Normalized period history

    Returns:
        UserStats with averages, extrema and the raw length sequences. With
        fewer than two periods the cycle fields use DEFAULT_CYCLE_LENGTH, with
        no completed period the period fields use DEFAULT_PERIOD_LENGTH.

    Example:
        >>> stats = compute_user_stats(DateRangeList.from_json([
        ...     {"start": "2025-10-11", "end": "2025-10-16"},
        ...     {"start": "2025-11-08", "end": "2025-11-13"},
        ... ]))
        >>> stats.cycle_lengths
        [28]
    """
    cycle_lengths = calculate_cycle_lengths(period_ranges)
    period_lengths = calculate_period_lengths(period_ranges)

    average_cycle, min_cycle, max_cycle = summarize_lengths(cycle_lengths, DEFAULT_CYCLE_LENGTH)
    average_period, min_period, max_period = summarize_lengths(period_lengths, DEFAULT_PERIOD_LENGTH)

    logger.debug("Computed user stats", extra={
        "periods": len(period_ranges),
        "cycle_lengths": cycle_lengths,
        "period_lengths": period_lengths
    })

    return UserStats(
        average_cycle_length=average_cycle,
        min_cycle_length=min_cycle,
        max_cycle_length=max_cycle,
        cycle_lengths=cycle_lengths,
        average_period_length=average_period,
        min_period_length=min_period,
        max_period_length=max_period,
        period_lengths=period_lengths
    )
