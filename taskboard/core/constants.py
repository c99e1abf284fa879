"""
FILE: taskboard/core/constants.py
PURPOSE: Constants used throughout the application
EXPORTS:
  - ALL_COLUMN_ID: Reserved id of the synthetic "all tasks" column
  - COMPLETED_COLUMN_ID: Column that represents completion
  - VALID_PRIORITIES: All valid priority values
  - Title/description length limits
DEPENDENCIES:
  - None (stdlib only)
NOTES:
  - Centralized constants to avoid magic strings
  - Completion is fixed by convention, not configuration
"""

# Column constants
ALL_COLUMN_ID = "all-jobs"
COMPLETED_COLUMN_ID = "completed"
COLUMN_TITLE_MIN = 2
COLUMN_TITLE_MAX = 50

# Task priority constants
PRIORITY_HIGH = "High"
PRIORITY_MEDIUM = "Medium"
PRIORITY_LOW = "Low"
VALID_PRIORITIES = (PRIORITY_HIGH, PRIORITY_MEDIUM, PRIORITY_LOW)
DEFAULT_PRIORITY = PRIORITY_MEDIUM

# Task field limits
TASK_TITLE_MIN = 3
TASK_DESCRIPTION_MIN = 10

# Analytics window
COMPLETED_WINDOW_DAYS = 7

# Id prefixes
TASK_ID_PREFIX = "task"
COLUMN_ID_PREFIX = "column"
