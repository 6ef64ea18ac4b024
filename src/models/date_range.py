"""
Date range models for logged period history.

A DateRange is a closed interval of calendar days. A DateRangeList keeps a set
of them sorted by start date, with no two ranges overlapping or touching, and
every update returns a new normalized list.

Typical usage:
    history = DateRangeList.from_json(persisted["periodRanges"])
    history = history.add_date(date.today())
    persisted["periodRanges"] = history.to_json()
"""
from bisect import bisect_right
from datetime import date, datetime, timedelta
from typing import Any, Dict, Iterable, Iterator, List, Optional

from aws_lambda_powertools import Logger
from pydantic import BaseModel, ConfigDict, field_validator, model_validator

logger = Logger()

ONE_DAY = timedelta(days=1)


def as_day(value: date) -> date:
    """Truncate a datetime to its calendar day."""
    if isinstance(value, datetime):
        return value.date()
    return value


def parse_iso_day(value: Any) -> Optional[date]:
    """
    Parse an ISO-8601 date string into a calendar day.

    Full timestamps are accepted and truncated to the day. Anything that does
    not parse yields None.
    """
    if isinstance(value, date):
        return as_day(value)
    if not isinstance(value, str) or not value:
        return None
    try:
        return date.fromisoformat(value[:10])
    except ValueError:
        return None


class DateRange(BaseModel):
    """
    Closed interval of calendar days, both ends inclusive.

    A range without a start is empty. A range with a start but no end is open,
    an ongoing period that contains no dates until it is closed.
    """
    model_config = ConfigDict(frozen=True)

    start: Optional[date] = None
    end: Optional[date] = None

    @field_validator("start", "end", mode="before")
    @classmethod
    def _truncate_time(cls, value: Any) -> Any:
        return as_day(value) if isinstance(value, date) else value

    @model_validator(mode="before")
    @classmethod
    def _order_bounds(cls, data: Any) -> Any:
        if isinstance(data, dict):
            start, end = parse_iso_day(data.get("start")), parse_iso_day(data.get("end"))
            if start is not None and end is not None and start > end:
                data = {**data, "start": end, "end": start}
        return data

    @property
    def is_empty(self) -> bool:
        return self.start is None

    @property
    def is_open(self) -> bool:
        return self.start is not None and self.end is None

    @property
    def is_closed(self) -> bool:
        return self.start is not None and self.end is not None

    @property
    def length_days(self) -> Optional[int]:
        """Inclusive day count, or None unless the range is closed."""
        if not self.is_closed:
            return None
        return (self.end - self.start).days + 1

    def contains(self, day: date) -> bool:
        if not self.is_closed:
            return False
        return self.start <= as_day(day) <= self.end

    def days(self) -> Iterator[date]:
        """Iterate every day of a closed range in order."""
        if not self.is_closed:
            return
        current = self.start
        while True:
            yield current
            if current >= self.end:
                return
            current += ONE_DAY

    def to_json(self) -> Dict[str, Optional[str]]:
        return {
            "start": self.start.isoformat() if self.start else None,
            "end": self.end.isoformat() if self.end else None,
        }

    @classmethod
    def from_json(cls, obj: Any) -> "DateRange":
        """Build a range from a {start, end} record; unparsable bounds become None."""
        if not isinstance(obj, dict):
            return cls()
        return cls(start=parse_iso_day(obj.get("start")), end=parse_iso_day(obj.get("end")))


def _last_day(date_range: DateRange) -> date:
    # An open range only occupies its start day for merging purposes
    return date_range.end if date_range.end is not None else date_range.start


def _days_after(earlier: date, later: date) -> int:
    # Stays valid at date.min and date.max
    return (later - earlier).days


def _touches(earlier: DateRange, later: DateRange) -> bool:
    return _days_after(_last_day(earlier), later.start) <= 1


def _union(earlier: DateRange, later: DateRange) -> DateRange:
    start = min(earlier.start, later.start)
    if earlier.is_open or later.is_open:
        return DateRange(start=start, end=None)
    return DateRange(start=start, end=max(earlier.end, later.end))


def normalize_ranges(ranges: Iterable[DateRange]) -> List[DateRange]:
    """
    Sort ranges by start and merge every overlapping or adjacent pair.

    Empty ranges are dropped.
    """
    ordered = sorted((r for r in ranges if not r.is_empty), key=lambda r: r.start)
    merged: List[DateRange] = []
    for date_range in ordered:
        if merged and _touches(merged[-1], date_range):
            merged[-1] = _union(merged[-1], date_range)
        else:
            merged.append(date_range)
    return merged


class DateRangeList(BaseModel):
    """
    Sorted, pairwise disjoint and non-adjacent set of date ranges.

    Instances are immutable; add_date and add_range return a new list.
    """
    model_config = ConfigDict(frozen=True)

    ranges: List[DateRange] = []

    @field_validator("ranges")
    @classmethod
    def _normalize(cls, value: List[DateRange]) -> List[DateRange]:
        return normalize_ranges(value)

    @classmethod
    def from_ranges(cls, ranges: Iterable[DateRange]) -> "DateRangeList":
        return cls(ranges=list(ranges))

    def __len__(self) -> int:
        return len(self.ranges)

    @property
    def is_empty(self) -> bool:
        return not self.ranges

    def add_date(self, day: date) -> "DateRangeList":
        """
        Return a new list with a single day added.

        A day inside or next to an existing range extends that range. When
        the extension closes the one-day gap to the neighbouring range, both
        are merged. Otherwise the day becomes a new range in sorted position.
        """
        day = as_day(day)
        ranges = list(self.ranges)
        index = bisect_right([r.start for r in ranges], day)

        previous = ranges[index - 1] if index > 0 else None
        following = ranges[index] if index < len(ranges) else None

        if previous is not None and _days_after(_last_day(previous), day) <= 1:
            if previous.is_open or day <= previous.end:
                return self
            previous = DateRange(start=previous.start, end=day)
            if following is not None and _days_after(day, following.start) == 1:
                ranges[index - 1:index + 1] = [_union(previous, following)]
            else:
                ranges[index - 1] = previous
        elif following is not None and _days_after(day, following.start) == 1:
            ranges[index] = DateRange(start=day, end=following.end)
        else:
            ranges.insert(index, DateRange(start=day, end=day))

        return DateRangeList(ranges=ranges)

    def add_range(self, date_range: DateRange) -> "DateRangeList":
        """Return a new list with a range unioned into every range it overlaps or touches."""
        if date_range.is_empty:
            return self
        return DateRangeList.from_ranges([*self.ranges, date_range])

    def contains_date(self, day: date) -> bool:
        return any(r.contains(day) for r in self.ranges)

    def most_recent(self) -> Optional[DateRange]:
        return self.ranges[-1] if self.ranges else None

    def most_recent_completed(self) -> Optional[DateRange]:
        for date_range in reversed(self.ranges):
            if date_range.is_closed:
                return date_range
        return None

    def to_json(self) -> List[Dict[str, Optional[str]]]:
        return [r.to_json() for r in self.ranges]

    @classmethod
    def from_json(cls, array: Any) -> "DateRangeList":
        """
        Rebuild a list from persisted {start, end} records.

        Records that are not mappings or whose start does not parse are
        skipped. The result is normalized, so overlapping persisted entries
        are merged.
        """
        if not isinstance(array, list):
            if array is not None:
                logger.warning("Ignoring persisted period ranges that are not a list", extra={
                    "value_type": type(array).__name__
                })
            return cls()

        parsed = []
        for position, record in enumerate(array):
            date_range = DateRange.from_json(record)
            if date_range.is_empty:
                logger.warning("Skipping unparsable period range", extra={
                    "position": position,
                    "record": str(record)
                })
                continue
            parsed.append(date_range)
        return cls.from_ranges(parsed)
