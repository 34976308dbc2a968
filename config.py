"""Centralized configuration read from environment variables.

This module is the single source of truth for configuration used across the
fuel log. Import constants from here rather than calling os.getenv directly
in multiple places.
"""

from __future__ import annotations

import os
from typing import Final

from dotenv import load_dotenv

# Load environment variables from .env if present
load_dotenv()


# --- Logging ---
LOG_LEVEL: Final[str] = os.getenv("FILLUP_LOG_LEVEL", "INFO").upper()


# --- Interchange files ---
CSV_ENCODING: Final[str] = os.getenv("FILLUP_CSV_ENCODING", "utf-8")

# Decimal places used when rendering the advisory mileage column
ADVISORY_DECIMAL_PLACES: Final[int] = int(os.getenv("FILLUP_ADVISORY_PLACES", "2"))


__all__ = [
    "ADVISORY_DECIMAL_PLACES",
    "CSV_ENCODING",
    "LOG_LEVEL",
]
