"""
CSV export of daily tracker logs.

Every day that is a logged period day or carries any other log gets one row.
Log dictionaries are keyed by ISO date strings, as the app stores them.
"""
import csv
import io
from typing import Dict, List, Optional, Any

from src.models.date_range import DateRangeList, parse_iso_day
from src.services.constants import CSV_EXPORT_HEADER


def collect_export_days(
    period_ranges: DateRangeList,
    *logs: Dict[str, Any]
) -> List[str]:
    """
    Collect the sorted, unique ISO days that appear in the history or any log.
    """
    days = set()
    for date_range in period_ranges.ranges:
        days.update(day.isoformat() for day in date_range.days())
    for log in logs:
        days.update(log.keys())
    return sorted(days)


def export_logs_to_csv(
    period_ranges: DateRangeList,
    symptom_logs: Optional[Dict[str, List[str]]] = None,
    weight_logs: Optional[Dict[str, Dict[str, Any]]] = None,
    text_logs: Optional[Dict[str, str]] = None,
    mood_logs: Optional[Dict[str, Dict[str, int]]] = None
) -> str:
    """
    Export period history and daily logs as CSV text.

    Args:
        period_ranges: Logged period history
        symptom_logs: Symptom names per day
        weight_logs: {"value", "unit"} weight entries per day
        text_logs: Free text notes per day
        mood_logs: {"mood", "anxiety", "depression"} scores per day

    Returns:
        CSV with a header row, every cell quoted and rows separated by newlines

    Example:
        >>> csv_text = export_logs_to_csv(history, symptom_logs={"2025-10-11": ["Cramps"]})
        >>> csv_text.splitlines()[1]
        '"2025-10-11","Yes","Cramps","","","","",""'
    """
    symptom_logs = symptom_logs or {}
    weight_logs = weight_logs or {}
    text_logs = text_logs or {}
    mood_logs = mood_logs or {}

    output = io.StringIO()
    writer = csv.writer(output, quoting=csv.QUOTE_ALL, lineterminator='\n')
    writer.writerow(CSV_EXPORT_HEADER)

    for day in collect_export_days(period_ranges, symptom_logs, weight_logs, text_logs, mood_logs):
        parsed_day = parse_iso_day(day)
        is_period = parsed_day is not None and period_ranges.contains_date(parsed_day)
        mood = mood_logs.get(day) or {}
        weight = weight_logs.get(day) or {}
        writer.writerow([
            day,
            'Yes' if is_period else '',
            '; '.join(symptom_logs.get(day) or []),
            weight.get('value', ''),
            mood.get('mood', ''),
            mood.get('anxiety', ''),
            mood.get('depression', ''),
            text_logs.get(day) or ''
        ])

    return output.getvalue().rstrip('\n')
