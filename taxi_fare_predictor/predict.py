# file: taxi_fare_predictor/predict.py
from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable, List, Optional, Union

import pandas as pd
from joblib import load
from sklearn.pipeline import Pipeline

from .data_models import TaxiTrip, TaxiTripFarePrediction
from .features import feature_targets, load_trips, trips_to_frame
from .utils import MODEL_PATH

log = logging.getLogger(__name__)

# vendor_id,rate_code,passenger_count,trip_time_in_secs,trip_distance,payment_type,fare_amount
# VTS,1,1,1140,3.75,CRD,15.5
SAMPLE_TRIP = TaxiTrip(
    vendor_id="VTS",
    rate_code="1",
    passenger_count=1,
    trip_time_in_secs=1140,
    trip_distance=3.75,
    payment_type="CRD",
    fare_amount=0,
)
SAMPLE_OBSERVED_FARE = 15.5


def load_model(model_path: Union[str, Path] = MODEL_PATH) -> Pipeline:
    """Load a pipeline saved by `train_model`."""
    path = Path(model_path)
    if not path.exists():
        raise FileNotFoundError(f"Model file not found: {path}")
    return load(path)


def predict_trips(model: Pipeline, trips: Iterable[TaxiTrip]) -> List[TaxiTripFarePrediction]:
    X, _ = feature_targets(trips_to_frame(trips))
    if X.empty:
        return []
    return [TaxiTripFarePrediction(fare_amount=float(v)) for v in model.predict(X)]


def predict_trip(model: Pipeline, trip: TaxiTrip) -> TaxiTripFarePrediction:
    return predict_trips(model, [trip])[0]


def predict_csv(
    model_path: Union[str, Path],
    csv_path: Union[str, Path],
    output_path: Optional[Union[str, Path]] = None,
) -> pd.DataFrame:
    """
    Predict every row of a trips CSV; the fare column may be absent.
    Returns the input rows with a `predicted_fare_amount` column
    (and optionally writes CSV).
    """
    model = load_model(model_path)
    df = load_trips(csv_path, require_label=False)
    X, _ = feature_targets(df)
    out = df.copy()
    out["predicted_fare_amount"] = model.predict(X)

    if output_path:
        Path(output_path).parent.mkdir(parents=True, exist_ok=True)
        out.to_csv(output_path, index=False)
        log.info("Wrote %d predictions to %s", len(out), output_path)

    return out


def run_sample_prediction(model_path: Union[str, Path] = MODEL_PATH) -> TaxiTripFarePrediction:
    """Predict the fare of SAMPLE_TRIP with a freshly loaded model."""
    model = load_model(model_path)
    result = predict_trip(model, SAMPLE_TRIP)
    log.info("*" * 60)
    log.info("Predicted fare: %.4f, actual fare: %s", result.fare_amount, SAMPLE_OBSERVED_FARE)
    log.info("*" * 60)
    return result
