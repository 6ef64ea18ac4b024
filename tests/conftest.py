"""
Pytest configuration and shared fixtures.
"""
import pytest
from datetime import date

from src.models.date_range import DateRange, DateRangeList


@pytest.fixture
def empty_history() -> DateRangeList:
    """Create a period history with nothing logged."""
    return DateRangeList()


@pytest.fixture
def regular_history() -> DateRangeList:
    """Create three six-day periods, 28 days apart."""
    return DateRangeList.from_ranges([
        DateRange(start=date(2025, 10, 11), end=date(2025, 10, 16)),
        DateRange(start=date(2025, 11, 8), end=date(2025, 11, 13)),
        DateRange(start=date(2025, 12, 6), end=date(2025, 12, 11)),
    ])


@pytest.fixture
def irregular_history() -> DateRangeList:
    """Create periods with varying cycle and period lengths."""
    return DateRangeList.from_ranges([
        DateRange(start=date(2024, 1, 1), end=date(2024, 1, 4)),    # 4 days
        DateRange(start=date(2024, 1, 25), end=date(2024, 1, 30)),  # 24 day cycle, 6 days
        DateRange(start=date(2024, 2, 25), end=date(2024, 2, 29)),  # 31 day cycle, 5 days
        DateRange(start=date(2024, 3, 22), end=date(2024, 3, 26)),  # 26 day cycle, 5 days
    ])
