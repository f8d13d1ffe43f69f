# file: taxi_fare_predictor/cli.py
from __future__ import annotations

import typer

from .data_models import TaxiTrip, TrainConfig
from .plot import plot_regression_chart
from .predict import SAMPLE_TRIP, load_model, predict_csv, predict_trip, run_sample_prediction
from .train import format_metrics, train_model
from .utils import MODEL_PATH, TEST_DATA_PATH, TRAIN_DATA_PATH, configure_logging

app = typer.Typer(add_completion=False, help="Taxi Fare Predictor CLI")


@app.callback()
def main(log_level: str = typer.Option("INFO", help="Logging level (DEBUG, INFO, WARNING, ...)")):
    try:
        configure_logging(log_level)
    except ValueError as e:
        raise typer.BadParameter(str(e), param_hint="--log-level") from e


@app.command()
def train(
    train_path: str = typer.Option(str(TRAIN_DATA_PATH), help="Training CSV"),
    test_path: str = typer.Option(str(TEST_DATA_PATH), help="Evaluation CSV"),
    model_path: str = typer.Option(str(MODEL_PATH), help="Output model file"),
    fare_lower_bound: float = 1.0,
    fare_upper_bound: float = 150.0,
    random_state: int = 0,
    alpha: float = typer.Option(1e-4, help="L2 regularization strength"),
    max_iter: int = 1000,
    tol: float = 1e-3,
    peek_rows: int = typer.Option(5, help="Transformed rows logged at DEBUG"),
):
    cfg = TrainConfig(
        fare_lower_bound=fare_lower_bound,
        fare_upper_bound=fare_upper_bound,
        random_state=random_state,
        alpha=alpha,
        max_iter=max_iter,
        tol=tol,
        peek_rows=peek_rows,
    )
    summary = train_model(train_path, test_path, model_path, cfg)
    typer.echo(f"Rows before/after outlier filter: {summary.train_rows_raw}/{summary.train_rows}")
    typer.echo(format_metrics(summary.trainer, summary.metrics))
    typer.echo(f"Model saved to {summary.model_path}")


@app.command()
def predict(
    model_path: str = typer.Option(str(MODEL_PATH)),
    vendor_id: str = typer.Option(SAMPLE_TRIP.vendor_id),
    rate_code: str = typer.Option(SAMPLE_TRIP.rate_code),
    passenger_count: float = typer.Option(SAMPLE_TRIP.passenger_count),
    trip_time_in_secs: float = typer.Option(SAMPLE_TRIP.trip_time_in_secs),
    trip_distance: float = typer.Option(SAMPLE_TRIP.trip_distance),
    payment_type: str = typer.Option(SAMPLE_TRIP.payment_type),
):
    trip = TaxiTrip(
        vendor_id=vendor_id,
        rate_code=rate_code,
        passenger_count=passenger_count,
        trip_time_in_secs=trip_time_in_secs,
        trip_distance=trip_distance,
        payment_type=payment_type,
    )
    result = predict_trip(load_model(model_path), trip)
    typer.echo(f"Predicted fare: {result.fare_amount:.4f}")


@app.command("predict-csv")
def predict_csv_cmd(
    model_path: str = typer.Option(str(MODEL_PATH)),
    csv_path: str = typer.Option(...),
    out: str = typer.Option(None),
):
    df = predict_csv(model_path, csv_path, out)
    typer.echo(f"Wrote {len(df)} predictions" if out else df.head().to_string(index=False))


@app.command()
def plot(
    model_path: str = typer.Option(str(MODEL_PATH)),
    test_path: str = typer.Option(str(TEST_DATA_PATH)),
    records: int = typer.Option(100, help="Number of test rows to plot"),
    chart_format: str = typer.Option("png", "--format", help="png or svg"),
    output_dir: str = typer.Option("."),
):
    path = plot_regression_chart(model_path, test_path, records, chart_format, output_dir)
    typer.echo(f"Chart written to {path}")


@app.command()
def run(
    train_path: str = typer.Option(str(TRAIN_DATA_PATH)),
    test_path: str = typer.Option(str(TEST_DATA_PATH)),
    model_path: str = typer.Option(str(MODEL_PATH)),
    records: int = 100,
    chart_format: str = typer.Option("png", "--format", help="png or svg"),
    output_dir: str = typer.Option("."),
):
    """Train, predict the sample trip, then chart predictions on the test data."""
    summary = train_model(train_path, test_path, model_path, TrainConfig())
    sample = run_sample_prediction(summary.model_path)
    path = plot_regression_chart(summary.model_path, test_path, records, chart_format, output_dir)
    typer.echo(f"Sample prediction: {sample.fare_amount:.4f}")
    typer.echo(f"Chart written to {path}")


if __name__ == "__main__":
    app()
