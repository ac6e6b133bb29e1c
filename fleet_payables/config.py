"""Configuration management for the owner payable engine.

This module centralizes all configuration values including paths,
formula constants, and environment variable overrides.
"""

from __future__ import annotations

import os
from pathlib import Path

# Base project root - assumes this file is in fleet_payables/
_PROJECT_ROOT = Path(__file__).parent.parent.resolve()

# Data directories
DATA_DIR = Path(os.getenv("FLEET_PAYABLES_DATA_DIR", _PROJECT_ROOT / "data"))

# Database holding ledger snapshots keyed by (car, year)
DB_PATH = Path(
    os.getenv("FLEET_PAYABLES_DB_PATH", DATA_DIR / "ledgers.db")
).resolve()

LOG_LEVEL = os.getenv("FLEET_PAYABLES_LOG_LEVEL", "WARNING").upper()

# Formula regimes
LEGACY_REGIME_START_YEAR = 2019
CURRENT_REGIME_START_YEAR = 2026

# Share of smoking fines passed through to the owner
SMOKING_FINES_OWNER_RATE = 0.1

DEFAULT_MODE = 50
DEFAULT_SKI_RACKS_OWNER = "GLA"

# Management / owner percentages applied when a month is switched to a mode
MODE_SPLIT_PERCENTAGES = {
    50: (50, 50),
    70: (70, 30),
}

# How January's carry-over treats the prior year's December.
#   "zero": December contributes nothing (current contract)
#   "prior_december_income": December income and owner percent are read from
#       the prior-year snapshot; its expenses and carry-over count as 0
JANUARY_POLICIES = ("zero", "prior_december_income")
JANUARY_CARRY_OVER = os.getenv("FLEET_PAYABLES_JANUARY_CARRY_OVER", "zero")


def ensure_data_directories() -> None:
    """Create the data directory if it doesn't exist."""
    DATA_DIR.mkdir(parents=True, exist_ok=True)


def get_db_path() -> str:
    """Get the database path as a string."""
    return str(DB_PATH)


def january_policy() -> str:
    """Return the active January carry-over policy, falling back to ``zero``."""
    policy = str(JANUARY_CARRY_OVER).strip().lower()
    return policy if policy in JANUARY_POLICIES else "zero"
