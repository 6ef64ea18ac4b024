"""Configure test suite environment"""
import os
import sys

# Make the src package importable when running pytest from the repository root
project_root = os.path.abspath(os.path.dirname(__file__))
sys.path.insert(0, project_root)

os.environ.setdefault("POWERTOOLS_SERVICE_NAME", "period_tracker")
os.environ.setdefault("LOG_LEVEL", "INFO")
