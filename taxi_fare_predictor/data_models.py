# file: taxi_fare_predictor/data_models.py
from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, model_validator


class TaxiTrip(BaseModel):
    """One trip row; field names follow the CSV header."""
    model_config = ConfigDict(frozen=True)

    vendor_id: str
    rate_code: str
    passenger_count: float
    trip_time_in_secs: float
    trip_distance: float
    payment_type: str
    fare_amount: float = 0.0


class TaxiTripFarePrediction(BaseModel):
    model_config = ConfigDict(frozen=True)

    fare_amount: float


class TrainConfig(BaseModel):
    """Training hyperparameters and data preparation knobs."""
    fare_lower_bound: float = 1.0
    fare_upper_bound: float = 150.0
    random_state: int = 0
    alpha: float = 1e-4
    max_iter: int = 1000
    tol: float = 1e-3
    peek_rows: int = 5

    @model_validator(mode="after")
    def _check_bounds(self) -> "TrainConfig":
        if self.fare_lower_bound > self.fare_upper_bound:
            raise ValueError(
                f"fare_lower_bound ({self.fare_lower_bound}) > fare_upper_bound ({self.fare_upper_bound})"
            )
        return self


class RegressionMetrics(BaseModel):
    r2: float
    mae: float
    mse: float
    rmse: float
    loss_fn: float
    rows: int


class ModelCard(BaseModel):
    """Metadata persisted with the trained model."""
    trainer: str
    version: str = "1.0"
    label: str
    features: List[str]
    fare_lower_bound: float
    fare_upper_bound: float
    train_rows_raw: int
    train_rows: int
    test_rows: int
    metrics: RegressionMetrics
    notes: Optional[str] = None


class TrainingSummary(BaseModel):
    model_config = ConfigDict(protected_namespaces=())

    trainer: str
    model_path: str
    card_path: str
    train_rows_raw: int
    train_rows: int
    test_rows: int
    metrics: RegressionMetrics
