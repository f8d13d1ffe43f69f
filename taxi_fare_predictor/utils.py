# file: taxi_fare_predictor/utils.py
from __future__ import annotations

import logging
from pathlib import Path
from typing import List

import pandas as pd

# Default file locations, relative to the working directory
DATA_DIR = Path("data")
TRAIN_DATA_PATH = DATA_DIR / "taxi-fare-train.csv"
TEST_DATA_PATH = DATA_DIR / "taxi-fare-test.csv"
MODELS_DIR = Path("models")
MODEL_PATH = MODELS_DIR / "TaxiFareModel.joblib"

LABEL: str = "fare_amount"

CATEGORICAL_COLS: List[str] = ["vendor_id", "rate_code", "payment_type"]
NUMERIC_COLS: List[str] = ["passenger_count", "trip_time_in_secs", "trip_distance"]

# CSV column order
COLUMNS: List[str] = [
    "vendor_id",
    "rate_code",
    "passenger_count",
    "trip_time_in_secs",
    "trip_distance",
    "payment_type",
    LABEL,
]

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(message)s"


def configure_logging(level: str = "INFO") -> None:
    """Console logging for CLI and script entry points."""
    numeric = logging.getLevelName(level.upper())
    if not isinstance(numeric, int):
        raise ValueError(f"Unknown log level: {level!r}")
    logging.basicConfig(level=numeric, format=LOG_FORMAT, datefmt="%H:%M:%S")


def ensure_columns(df: pd.DataFrame, cols: List[str], name: str) -> None:
    """Raise with a clear message if required columns are missing."""
    missing = [c for c in cols if c not in df.columns]
    if missing:
        raise ValueError(f"{name} missing columns: {missing}")


def model_card_path(model_path: Path) -> Path:
    """<model>.card.json next to the serialized model, one card per model file."""
    return model_path.with_suffix(".card.json")
