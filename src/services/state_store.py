"""
Tracker state persistence service.

This module stores each user's tracker state as a single DynamoDB item. Only
the period history and settings matter on load; predictions are recomputed
from them every time.

Typical usage:
    store = TrackerStateStore()
    state = store.load(user_id)
    state = log_period_day(state, date.today())
    store.save(user_id, state)
"""
import json
from datetime import datetime

from src.models.tracker_state import TrackerState
from src.services.exceptions import StateStoreError
from src.services.tracker import delete_all_data, state_from_json, state_to_json
from src.utils.dynamo import get_dynamo, create_state_key
from src.utils.logging import logger, log_exception

class TrackerStateStore:
    """Service for loading and saving tracker state."""

    def __init__(self):
        """Initialize tracker state store."""
        self.dynamo = get_dynamo()

    def load(self, user_id: str) -> TrackerState:
        """
        Load a user's tracker state.

        Args:
            user_id: User identifier

        Returns:
            Stored state with predictions recomputed, or a fresh state when
            nothing is stored or the stored document is not valid JSON

        Raises:
            StateStoreError: If DynamoDB cannot be read
        """
        try:
            item = self.dynamo.get_item(create_state_key(user_id))
        except Exception as e:
            log_exception(logger, "Error loading tracker state", extra={
                "user_id": user_id,
                "error_type": e.__class__.__name__
            })
            raise StateStoreError(f"Failed to load tracker state: {str(e)}") from e

        if not item:
            logger.info("No stored tracker state", extra={"user_id": user_id})
            return delete_all_data()

        try:
            record = json.loads(item.get('state') or 'null')
        except (TypeError, ValueError) as e:
            logger.warning("Stored tracker state is not valid JSON, using defaults", extra={
                "user_id": user_id,
                "error": str(e)
            })
            return delete_all_data()

        state = state_from_json(record)
        logger.info("Loaded tracker state", extra={
            "user_id": user_id,
            "periods": len(state.period_ranges)
        })
        return state

    def save(self, user_id: str, state: TrackerState) -> None:
        """
        Save a user's tracker state.

        Args:
            user_id: User identifier
            state: State to persist

        Raises:
            StateStoreError: If DynamoDB cannot be written
        """
        try:
            self.dynamo.put_item({
                **create_state_key(user_id),
                "state": json.dumps(state_to_json(state)),
                "updated_at": datetime.now().isoformat()
            })
        except Exception as e:
            log_exception(logger, "Error saving tracker state", extra={
                "user_id": user_id,
                "error_type": e.__class__.__name__
            })
            raise StateStoreError(f"Failed to save tracker state: {str(e)}") from e

        logger.info("Saved tracker state", extra={
            "user_id": user_id,
            "periods": len(state.period_ranges)
        })

    def delete(self, user_id: str) -> None:
        """
        Delete a user's stored tracker state.

        Raises:
            StateStoreError: If DynamoDB cannot be written
        """
        try:
            self.dynamo.delete_item(create_state_key(user_id))
        except Exception as e:
            log_exception(logger, "Error deleting tracker state", extra={
                "user_id": user_id,
                "error_type": e.__class__.__name__
            })
            raise StateStoreError(f"Failed to delete tracker state: {str(e)}") from e

        logger.info("Deleted tracker state", extra={"user_id": user_id})
