# tests/conftest.py
from __future__ import annotations

from pathlib import Path

import numpy as np
import pandas as pd
import pytest

from taxi_fare_predictor.data_models import TrainConfig
from taxi_fare_predictor.train import train_model
from taxi_fare_predictor.utils import COLUMNS

# Rows appended to the training file that the [1, 150] fare window drops
OUTLIER_FARES = [0.0, 0.5, 0.99, 150.01, 420.0]
# Rows exactly on the window edges, which are kept
EDGE_FARES = [1.0, 150.0]


def make_trips(n: int, seed: int) -> pd.DataFrame:
    """Synthetic trips whose fare is close to linear in distance and time."""
    rng = np.random.default_rng(seed)
    rate = rng.choice(["1", "2", "5"], n, p=[0.9, 0.05, 0.05])
    time = rng.uniform(120, 2400, n).round()
    dist = rng.uniform(0.3, 10.0, n).round(2)
    fare = 2.5 + 2.0 * dist + 0.003 * time + np.where(rate == "2", 5.0, 0.0) + rng.normal(0, 0.5, n)
    return pd.DataFrame(
        {
            "vendor_id": rng.choice(["CMT", "VTS"], n),
            "rate_code": rate,
            "passenger_count": rng.integers(1, 5, n).astype(float),
            "trip_time_in_secs": time,
            "trip_distance": dist,
            "payment_type": rng.choice(["CRD", "CSH"], n),
            "fare_amount": fare.clip(1.5, 140.0).round(2),
        },
        columns=COLUMNS,
    )


def with_fares(df: pd.DataFrame, fares) -> pd.DataFrame:
    extra = df.head(len(fares)).copy()
    extra["fare_amount"] = fares
    return pd.concat([df, extra], ignore_index=True)


@pytest.fixture
def write_csv(tmp_path: Path):
    def _write(df: pd.DataFrame, name: str = "trips.csv") -> Path:
        path = tmp_path / name
        df.to_csv(path, index=False)
        return path

    return _write


@pytest.fixture
def small_trips_csv(write_csv) -> Path:
    return write_csv(make_trips(10, seed=7), "small.csv")


@pytest.fixture(scope="session")
def dataset_dir(tmp_path_factory) -> Path:
    """
    data/
        taxi-fare-train.csv  (clean rows + outliers + edge rows)
        taxi-fare-test.csv
    """
    base = tmp_path_factory.mktemp("data")
    train = with_fares(make_trips(300, seed=1), OUTLIER_FARES + EDGE_FARES)
    train.to_csv(base / "taxi-fare-train.csv", index=False)
    make_trips(60, seed=2).to_csv(base / "taxi-fare-test.csv", index=False)
    return base


@pytest.fixture(scope="session")
def train_csv(dataset_dir) -> Path:
    return dataset_dir / "taxi-fare-train.csv"


@pytest.fixture(scope="session")
def eval_csv(dataset_dir) -> Path:
    return dataset_dir / "taxi-fare-test.csv"


@pytest.fixture(scope="session")
def trained(tmp_path_factory, train_csv, eval_csv):
    """Train once per session; returns the TrainingSummary."""
    model_path = tmp_path_factory.mktemp("models") / "TaxiFareModel.joblib"
    return train_model(train_csv, eval_csv, model_path, TrainConfig())


@pytest.fixture(scope="session")
def model_path(trained) -> Path:
    return Path(trained.model_path)
