# strided/config.py
"""
Centralized configuration for the strided matrix library.
This module provides a single source of truth for all configurable parameters.
"""

import numpy as np

# Storage defaults
DEFAULT_DTYPE = np.float64  # Element type used when a Matrix is built without one
DEFAULT_ORDER = "row_major"  # Layout used by the generic Matrix constructor

# Logging
LOGGER_NAME = "strided"  # Root logger for the package

# Borrow tracking
TRACK_BORROW_EVENTS = True  # Keep an in-memory log of ACQUIRE/RELEASE/REJECT events
BORROW_EVENT_LOG_SIZE = 1024  # Most recent events kept per buffer
