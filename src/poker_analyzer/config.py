"""Configuration loading from environment variables and defaults."""

import os
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

# Load .env file if it exists
env_path = Path(__file__).parent.parent.parent / ".env"
if env_path.exists():
    load_dotenv(dotenv_path=env_path)


def _optional_int(name: str) -> Optional[int]:
    raw = os.getenv(name, "").strip()
    return int(raw) if raw else None


# Equity simulation
DEFAULT_ITERATIONS = int(os.getenv("POKER_SIM_ITERATIONS", "50000"))
ANALYSIS_ITERATIONS = int(os.getenv("POKER_ANALYSIS_ITERATIONS", "10000"))
# Iterations run between two cancellation checks
BATCH_SIZE = int(os.getenv("POKER_SIM_BATCH_SIZE", "1000"))
SEED = _optional_int("POKER_SIM_SEED")

# Call size as a fraction of pot when the caller does not supply one
ASSUMED_BET_FRACTION = float(os.getenv("POKER_ASSUMED_BET_FRACTION", "0.5"))

# Defaults for the analyze command
DEFAULT_FOLD_EQUITY = float(os.getenv("POKER_DEFAULT_FOLD_EQUITY", "0.3"))
DEFAULT_SIZINGS = [
    float(s) for s in os.getenv("POKER_DEFAULT_SIZINGS", "0.33,0.5,0.75,1.0").split(",") if s.strip()
]
