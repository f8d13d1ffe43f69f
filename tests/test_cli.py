from joblib import load
from typer.testing import CliRunner

from taxi_fare_predictor.cli import app

runner = CliRunner()


def test_cli_train_then_predict(tmp_path, train_csv, eval_csv):
    model = tmp_path / "models" / "TaxiFareModel.joblib"
    result = runner.invoke(
        app,
        ["train", "--train-path", str(train_csv), "--test-path", str(eval_csv), "--model-path", str(model)],
    )
    assert result.exit_code == 0, result.output
    assert "Rows before/after outlier filter: 307/302" in result.output
    assert "Metrics for SGDRegressor regression model" in result.output
    assert model.exists()

    result = runner.invoke(app, ["predict", "--model-path", str(model), "--trip-distance", "5.0"])
    assert result.exit_code == 0, result.output
    assert "Predicted fare: " in result.output


def test_cli_predict_csv(tmp_path, model_path, eval_csv):
    out = tmp_path / "preds.csv"
    result = runner.invoke(
        app, ["predict-csv", "--model-path", str(model_path), "--csv-path", str(eval_csv), "--out", str(out)]
    )
    assert result.exit_code == 0, result.output
    assert "Wrote 60 predictions" in result.output
    assert out.exists()


def test_cli_plot_svg(tmp_path, model_path, eval_csv):
    result = runner.invoke(
        app,
        [
            "plot",
            "--model-path", str(model_path),
            "--test-path", str(eval_csv),
            "--records", "30",
            "--format", "svg",
            "--output-dir", str(tmp_path),
        ],
    )
    assert result.exit_code == 0, result.output
    assert (tmp_path / "TaxiRegressionDistribution.svg").exists()


def test_cli_run_full_flow(tmp_path, train_csv, eval_csv):
    result = runner.invoke(
        app,
        [
            "--log-level", "DEBUG",
            "run",
            "--train-path", str(train_csv),
            "--test-path", str(eval_csv),
            "--model-path", str(tmp_path / "m.joblib"),
            "--output-dir", str(tmp_path),
        ],
    )
    assert result.exit_code == 0, result.output
    assert "Sample prediction: " in result.output
    assert (tmp_path / "TaxiRegressionDistribution.png").exists()


def test_cli_missing_model_fails(tmp_path):
    result = runner.invoke(app, ["predict", "--model-path", str(tmp_path / "none.joblib")])
    assert result.exit_code != 0
    assert isinstance(result.exception, FileNotFoundError)


def test_cli_rejects_unknown_log_level():
    result = runner.invoke(app, ["--log-level", "LOUD", "predict"])
    assert result.exit_code == 2
    assert "Unknown log level" in result.output


def test_cli_train_passes_trainer_options(tmp_path, train_csv, eval_csv):
    model = tmp_path / "tuned.joblib"
    result = runner.invoke(
        app,
        [
            "train",
            "--train-path", str(train_csv),
            "--test-path", str(eval_csv),
            "--model-path", str(model),
            "--alpha", "0.001",
            "--max-iter", "50",
            "--tol", "0.01",
            "--peek-rows", "2",
        ],
    )
    assert result.exit_code == 0, result.output
    regressor = load(model).named_steps["regressor"]
    assert regressor.alpha == 0.001
    assert regressor.max_iter == 50
    assert regressor.tol == 0.01
