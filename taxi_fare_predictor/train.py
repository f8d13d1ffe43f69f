# file: taxi_fare_predictor/train.py
from __future__ import annotations

import logging
from pathlib import Path
from typing import Union

import pandas as pd
from joblib import dump
from sklearn.linear_model import SGDRegressor
from sklearn.metrics import mean_absolute_error, mean_squared_error, r2_score, root_mean_squared_error
from sklearn.pipeline import Pipeline

from .data_models import ModelCard, RegressionMetrics, TrainConfig, TrainingSummary
from .features import build_preprocessor, feature_targets, filter_outliers, load_trips, peek_transformed
from .utils import LABEL, MODEL_PATH, TEST_DATA_PATH, TRAIN_DATA_PATH, model_card_path

log = logging.getLogger(__name__)


def build_pipeline(config: TrainConfig = TrainConfig()) -> Pipeline:
    """Preprocessing followed by a stochastic L2-regularized least-squares regressor."""
    trainer = SGDRegressor(
        loss="squared_error",
        penalty="l2",
        alpha=config.alpha,
        max_iter=config.max_iter,
        tol=config.tol,
        random_state=config.random_state,
    )
    return Pipeline([("features", build_preprocessor()), ("regressor", trainer)])


def evaluate(model: Pipeline, df: pd.DataFrame) -> RegressionMetrics:
    """Score a fitted pipeline against labelled rows."""
    X, y = feature_targets(df)
    pred = model.predict(X)
    mse = float(mean_squared_error(y, pred))
    return RegressionMetrics(
        r2=float(r2_score(y, pred)),
        mae=float(mean_absolute_error(y, pred)),
        mse=mse,
        rmse=float(root_mean_squared_error(y, pred)),
        loss_fn=mse,  # squared loss is the trainer's objective
        rows=int(len(y)),
    )


def format_metrics(name: str, metrics: RegressionMetrics) -> str:
    bar = "*" * 60
    return "\n".join(
        [
            bar,
            f"*       Metrics for {name} regression model",
            "*" + "-" * 59,
            f"*       LossFn:        {metrics.loss_fn:.2f}",
            f"*       R2 Score:      {metrics.r2:.2f}",
            f"*       Absolute loss: {metrics.mae:.2f}",
            f"*       Squared loss:  {metrics.mse:.2f}",
            f"*       RMS loss:      {metrics.rmse:.2f}",
            bar,
        ]
    )


def train_model(
    train_path: Union[str, Path] = TRAIN_DATA_PATH,
    test_path: Union[str, Path] = TEST_DATA_PATH,
    model_path: Union[str, Path] = MODEL_PATH,
    config: TrainConfig = TrainConfig(),
) -> TrainingSummary:
    """Load, filter, fit, evaluate and persist the fare model with its model card."""
    model_path = Path(model_path)

    base_train = load_trips(train_path)
    test_df = load_trips(test_path)

    log.info("Training rows before removing outliers: %d", len(base_train))
    train_df = filter_outliers(base_train, config.fare_lower_bound, config.fare_upper_bound)
    log.info("Training rows after removing outliers: %d", len(train_df))
    if train_df.empty:
        raise ValueError(
            f"No training rows with {LABEL} in [{config.fare_lower_bound}, {config.fare_upper_bound}]"
        )

    model = build_pipeline(config)
    X_tr, y_tr = feature_targets(train_df)
    if log.isEnabledFor(logging.DEBUG):
        peek_transformed(model.named_steps["features"], X_tr, config.peek_rows)

    log.info("=============== Training the model ===============")
    model.fit(X_tr, y_tr)

    log.info("===== Evaluating model accuracy with test data =====")
    metrics = evaluate(model, test_df)
    trainer_name = type(model.named_steps["regressor"]).__name__
    log.info("\n%s", format_metrics(trainer_name, metrics))

    # Persist artifacts
    model_path.parent.mkdir(parents=True, exist_ok=True)
    dump(model, model_path)
    card_path = model_card_path(model_path)
    card_path.write_text(
        ModelCard(
            trainer=trainer_name,
            label=LABEL,
            features=list(model.named_steps["features"].get_feature_names_out()),
            fare_lower_bound=config.fare_lower_bound,
            fare_upper_bound=config.fare_upper_bound,
            train_rows_raw=int(len(base_train)),
            train_rows=int(len(train_df)),
            test_rows=int(len(test_df)),
            metrics=metrics,
            notes=f"RMSE={metrics.rmse:.2f}, R2={metrics.r2:.3f}",
        ).model_dump_json(indent=2)
    )
    log.info("Model saved to %s", model_path)

    return TrainingSummary(
        trainer=trainer_name,
        model_path=str(model_path),
        card_path=str(card_path),
        train_rows_raw=int(len(base_train)),
        train_rows=int(len(train_df)),
        test_rows=int(len(test_df)),
        metrics=metrics,
    )


# Optional: allow `python -m taxi_fare_predictor.train --train-path ... --test-path ...`
if __name__ == "__main__":
    import argparse

    from .utils import configure_logging

    parser = argparse.ArgumentParser()
    parser.add_argument("--train-path", default=str(TRAIN_DATA_PATH))
    parser.add_argument("--test-path", default=str(TEST_DATA_PATH))
    parser.add_argument("--model-path", default=str(MODEL_PATH))
    parser.add_argument("--random-state", type=int, default=0)
    args = parser.parse_args()

    configure_logging()
    cfg = TrainConfig(random_state=args.random_state)
    out = train_model(args.train_path, args.test_path, args.model_path, cfg)
    print(out.model_dump_json(indent=2))
