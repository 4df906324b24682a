import os
from pathlib import Path

from dotenv import load_dotenv

# Load .env from repo root
load_dotenv()

PRICES_DIR = Path(os.environ.get("PRICES_DIR", "src/data/prices/series"))

# Sharpe annualisation; 252 assumes daily bars
PERIODS_PER_YEAR = float(os.environ.get("PERIODS_PER_YEAR", "252"))

LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO").upper()

DEFAULT_STRATEGY = os.environ.get("DEFAULT_STRATEGY", "ma_crossover_rsi")
