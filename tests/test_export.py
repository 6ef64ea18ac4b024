"""Tests for CSV export."""
import csv
import io

from src.models.date_range import DateRangeList
from src.services.constants import CSV_EXPORT_HEADER
from src.services.export import collect_export_days, export_logs_to_csv


def parse_csv(text):
    return list(csv.reader(io.StringIO(text)))


def test_export_header_only(empty_history):
    """Test an empty export is just the header."""
    assert export_logs_to_csv(empty_history) == (
        '"Date","Period","Symptoms","Weight (kg)","Mood","Anxiety","Depression","Notes"'
    )


def test_export_period_days_and_logs():
    """Test every period day and log day gets a row."""
    history = DateRangeList.from_json([{"start": "2025-10-11", "end": "2025-10-13"}])

    text = export_logs_to_csv(
        history,
        symptom_logs={"2025-10-11": ["Cramps", "Bloating"]},
        weight_logs={"2025-10-20": {"value": 59.8, "unit": "kg"}},
        text_logs={"2025-10-12": 'Used a "heating pad"'},
        mood_logs={"2025-10-13": {"mood": 2, "anxiety": 3, "depression": 1}}
    )
    rows = parse_csv(text)

    assert rows[0] == CSV_EXPORT_HEADER
    assert rows[1] == ["2025-10-11", "Yes", "Cramps; Bloating", "", "", "", "", ""]
    assert rows[2] == ["2025-10-12", "Yes", "", "", "", "", "", 'Used a "heating pad"']
    assert rows[3] == ["2025-10-13", "Yes", "", "", "2", "3", "1", ""]
    assert rows[4] == ["2025-10-20", "", "", "59.8", "", "", "", ""]
    assert len(rows) == 5


def test_export_quotes_every_cell():
    """Test quoting and escaping of embedded quotes."""
    text = export_logs_to_csv(DateRangeList(), text_logs={"2025-01-01": 'say "hi"'})

    assert text.splitlines()[1] == '"2025-01-01","","","","","","","say ""hi"""'


def test_export_skips_open_period_days():
    """Test an ongoing period adds no rows of its own."""
    history = DateRangeList.from_json([{"start": "2025-01-01", "end": None}])

    assert collect_export_days(history) == []
