"""
Constants and defaults for cycle statistics and predictions.

The defaults are what users see until they have logged enough history, so
changing them changes visible predictions.
"""
from typing import Dict, List

# Used while fewer than two periods are logged
DEFAULT_CYCLE_LENGTH = 28

# Used while no completed period is logged
DEFAULT_PERIOD_LENGTH = 5

# Days from ovulation to the next period
LUTEAL_PHASE_DAYS = 14

# Five days before ovulation plus ovulation day itself
FERTILE_WINDOW_DAYS = 6

# Number of future periods projected ahead of the latest logged period
PREDICTION_HORIZON_CYCLES = 6

MIN_TYPICAL_PERIOD_LENGTH = 1
MAX_TYPICAL_PERIOD_LENGTH = 14
DEFAULT_TYPICAL_PERIOD_LENGTH = 5

# Sample history loaded by the demo state
DEMO_PERIOD_RANGES: List[Dict[str, str]] = [
    {"start": "2025-10-11", "end": "2025-10-16"},
    {"start": "2025-11-08", "end": "2025-11-13"},
    {"start": "2025-12-06", "end": "2025-12-11"},
]

CSV_EXPORT_HEADER = [
    "Date",
    "Period",
    "Symptoms",
    "Weight (kg)",
    "Mood",
    "Anxiety",
    "Depression",
    "Notes",
]
