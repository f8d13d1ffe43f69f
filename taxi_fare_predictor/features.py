# file: taxi_fare_predictor/features.py
from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable, Tuple, Union

import numpy as np
import pandas as pd
from sklearn.base import clone
from sklearn.compose import ColumnTransformer
from sklearn.preprocessing import OneHotEncoder, StandardScaler

from .data_models import TaxiTrip
from .utils import CATEGORICAL_COLS, COLUMNS, LABEL, NUMERIC_COLS, ensure_columns

log = logging.getLogger(__name__)


def load_trips(path: Union[str, Path], require_label: bool = True) -> pd.DataFrame:
    """
    Read a trips CSV; numeric parse failures propagate.
    With require_label=False a missing fare column is filled with NaN.
    """
    df = pd.read_csv(path, sep=",", dtype={c: str for c in CATEGORICAL_COLS})
    required = COLUMNS if require_label else CATEGORICAL_COLS + NUMERIC_COLS
    ensure_columns(df, required, Path(path).name)
    if LABEL not in df.columns:
        df[LABEL] = np.nan
    for c in NUMERIC_COLS + [LABEL]:
        df[c] = pd.to_numeric(df[c], errors="raise").astype(float)
    return df[COLUMNS]


def filter_outliers(df: pd.DataFrame, lower: float, upper: float) -> pd.DataFrame:
    """Keep rows whose fare lies in [lower, upper]."""
    mask = df[LABEL].between(lower, upper, inclusive="both")
    return df[mask].reset_index(drop=True)


def build_preprocessor() -> ColumnTransformer:
    """One-hot categoricals, (x - mean) / std numerics, concatenated in that order."""
    return ColumnTransformer(
        transformers=[
            ("onehot", OneHotEncoder(handle_unknown="ignore", sparse_output=False), CATEGORICAL_COLS),
            ("normalize", StandardScaler(), NUMERIC_COLS),
        ],
        remainder="drop",
    )


def feature_targets(df: pd.DataFrame) -> Tuple[pd.DataFrame, pd.Series]:
    """Return feature frame X and label y."""
    X = df.reindex(columns=CATEGORICAL_COLS + NUMERIC_COLS)
    y = df[LABEL].astype(float)
    return X, y


def trips_to_frame(trips: Iterable[TaxiTrip]) -> pd.DataFrame:
    """Frame in CSV column order, ready for a fitted pipeline."""
    rows = [t.model_dump() for t in trips]
    return pd.DataFrame(rows, columns=COLUMNS)


def peek_transformed(preprocessor: ColumnTransformer, df: pd.DataFrame, n: int = 5) -> np.ndarray:
    """Log the first n input rows and their concatenated feature vectors."""
    fitted = clone(preprocessor).fit(df)
    head = df.head(n)
    features = fitted.transform(head)
    log.debug("Peek of %d input rows:\n%s", len(head), head.to_string(index=False))
    names = list(fitted.get_feature_names_out())
    for i, vec in enumerate(features):
        log.debug("Features row %d: %s", i, ", ".join(f"{nm}={v:.4f}" for nm, v in zip(names, vec)))
    return features
