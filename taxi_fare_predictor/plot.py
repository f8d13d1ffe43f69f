# file: taxi_fare_predictor/plot.py
from __future__ import annotations

import logging
from pathlib import Path
from typing import Sequence, Tuple, Union

import matplotlib

matplotlib.use("Agg")
import matplotlib.pyplot as plt  # noqa: E402
import numpy as np  # noqa: E402

from .csv_reader import read_trips  # noqa: E402
from .predict import load_model, predict_trips  # noqa: E402
from .utils import MODEL_PATH, TEST_DATA_PATH  # noqa: E402

log = logging.getLogger(__name__)

CHART_BASENAME = "TaxiRegressionDistribution"
CHART_FORMATS = ("png", "svg")

# Rides above $35 fall outside the chart
AXIS_MIN = 0
AXIS_MAX = 35
LINE_X = (1.0, 39.0)


def regression_line(actual: Sequence[float], predicted: Sequence[float]) -> Tuple[float, float]:
    """
    Least-squares slope and intercept of predicted (y) on actual (x):
    m = (mean(x)*mean(y) - mean(xy)) / (mean(x)^2 - mean(x^2)), b = mean(y) - m*mean(x).
    """
    x = np.asarray(actual, dtype=float)
    y = np.asarray(predicted, dtype=float)
    if x.shape != y.shape:
        raise ValueError(f"actual and predicted differ in length: {x.size} vs {y.size}")
    if x.size == 0:
        raise ValueError("regression line needs at least one point")
    if np.ptp(x) == 0:
        raise ValueError("regression line is undefined when all actual values are equal")

    mean_x = x.mean()
    mean_y = y.mean()
    mean_xy = (x * y).mean()
    mean_x2 = (x * x).mean()

    m = (mean_x * mean_y - mean_xy) / (mean_x * mean_x - mean_x2)
    b = mean_y - m * mean_x
    return float(m), float(b)


def plot_regression_chart(
    model_path: Union[str, Path] = MODEL_PATH,
    test_path: Union[str, Path] = TEST_DATA_PATH,
    n_records: int = 100,
    fmt: str = "png",
    output_dir: Union[str, Path] = ".",
) -> Path:
    """Scatter measured vs predicted fares for the first `n_records` test trips plus a trend line."""
    if fmt not in CHART_FORMATS:
        raise ValueError(f"Unsupported chart format '{fmt}', expected one of {CHART_FORMATS}")

    model = load_model(model_path)
    trips = list(read_trips(test_path, n_records))
    preds = predict_trips(model, trips)

    actual = [t.fare_amount for t in trips]
    predicted = [p.fare_amount for p in preds]
    for a, p in zip(actual, predicted):
        log.debug("Predicted: %.4f | Actual: %.4f", p, a)

    m, b = regression_line(actual, predicted)
    log.info("Regression line: y = %.4f * x + %.4f (%d points)", m, b, len(actual))

    out_dir = Path(output_dir)
    out_dir.mkdir(parents=True, exist_ok=True)
    out_path = out_dir / f"{CHART_BASENAME}.{fmt}"

    fig, ax = plt.subplots(figsize=(7, 7))
    try:
        ax.scatter(actual, predicted, s=12, c="tab:blue", marker="o")
        xs = np.array(LINE_X)
        ax.plot(xs, m * xs + b, c="tab:red")
        ax.set_xlim(AXIS_MIN, AXIS_MAX)
        ax.set_ylim(AXIS_MIN, AXIS_MAX)
        ax.set_xlabel("Measured")
        ax.set_ylabel("Predicted")
        ax.set_title("Distribution of Taxi Fare Prediction", fontsize="large")
        fig.tight_layout()
        fig.savefig(out_path, format=fmt)
    finally:
        plt.close(fig)

    log.info("Chart written to %s", out_path)
    return out_path
