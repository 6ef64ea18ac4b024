"""
Tests for tracker state persistence.
"""
import json
import pytest
from datetime import date
from unittest.mock import Mock, patch

from src.services.exceptions import StateStoreError
from src.services.state_store import TrackerStateStore
from src.services.tracker import demo_state, log_period_day
from src.utils.dynamo import create_state_key

@pytest.fixture
def store():
    """Create TrackerStateStore instance with mocked DynamoDB."""
    with patch('src.services.state_store.get_dynamo') as mock_get_dynamo:
        mock_dynamo = Mock()
        mock_get_dynamo.return_value = mock_dynamo
        yield TrackerStateStore(), mock_dynamo

def test_state_key():
    """Test one state item per user."""
    assert create_state_key("123") == {"PK": "USER#123", "SK": "STATE"}

def test_load_missing_state(store):
    """Test a user without stored state gets a fresh state."""
    state_store, mock_dynamo = store
    mock_dynamo.get_item.return_value = None

    state = state_store.load("123")

    assert state.period_ranges.is_empty
    assert state.user_stats.average_cycle_length == 28
    mock_dynamo.get_item.assert_called_once_with({"PK": "USER#123", "SK": "STATE"})

def test_save_then_load(store):
    """Test a saved state loads back equal."""
    state_store, mock_dynamo = store
    state = log_period_day(demo_state(), date(2026, 1, 3))

    state_store.save("123", state)

    saved_item = mock_dynamo.put_item.call_args[0][0]
    assert saved_item["PK"] == "USER#123"
    assert saved_item["SK"] == "STATE"
    assert json.loads(saved_item["state"])["periodRanges"][-1] == {
        "start": "2026-01-03", "end": "2026-01-03"
    }
    assert "updated_at" in saved_item

    mock_dynamo.get_item.return_value = saved_item
    assert state_store.load("123") == state

def test_load_corrupt_state(store):
    """Test an unreadable stored document falls back to a fresh state."""
    state_store, mock_dynamo = store
    mock_dynamo.get_item.return_value = {"PK": "USER#123", "SK": "STATE", "state": "{not json"}

    state = state_store.load("123")

    assert state.period_ranges.is_empty

def test_load_partially_corrupt_state(store):
    """Test well-formed periods survive next to corrupt ones."""
    state_store, mock_dynamo = store
    mock_dynamo.get_item.return_value = {
        "state": json.dumps({
            "periodRanges": [
                {"start": "2025-10-11", "end": "2025-10-16"},
                {"start": "oops", "end": "2025-11-13"},
            ],
            "typicalPeriodLength": 6
        })
    }

    state = state_store.load("123")

    assert state.period_ranges.to_json() == [{"start": "2025-10-11", "end": "2025-10-16"}]
    assert state.typical_period_length == 6

def test_load_error(store):
    """Test DynamoDB read failures raise StateStoreError."""
    state_store, mock_dynamo = store
    mock_dynamo.get_item.side_effect = Exception("DynamoDB error")

    with pytest.raises(StateStoreError, match="Failed to load tracker state"):
        state_store.load("123")

def test_save_error(store):
    """Test DynamoDB write failures raise StateStoreError."""
    state_store, mock_dynamo = store
    mock_dynamo.put_item.side_effect = Exception("DynamoDB error")

    with pytest.raises(StateStoreError, match="Failed to save tracker state"):
        state_store.save("123", demo_state())

def test_delete(store):
    """Test deleting a user's state."""
    state_store, mock_dynamo = store

    state_store.delete("123")

    mock_dynamo.delete_item.assert_called_once_with({"PK": "USER#123", "SK": "STATE"})

def test_delete_error(store):
    """Test DynamoDB delete failures raise StateStoreError."""
    state_store, mock_dynamo = store
    mock_dynamo.delete_item.side_effect = Exception("DynamoDB error")

    with pytest.raises(StateStoreError):
        state_store.delete("123")

def test_get_dynamo_requires_table_name(monkeypatch):
    """Test a missing table name is reported clearly."""
    monkeypatch.delenv("TRACKER_TABLE_NAME", raising=False)
    monkeypatch.setattr("src.utils.dynamo._dynamo_instance", None)

    from src.utils.dynamo import get_dynamo
    with pytest.raises(EnvironmentError, match="TRACKER_TABLE_NAME"):
        get_dynamo()
