# file: taxi_fare_predictor/csv_reader.py
from __future__ import annotations

from pathlib import Path
from typing import Iterator, List, Optional, Union

from .data_models import TaxiTrip
from .utils import COLUMNS


def _parse_line(fields: List[str], lineno: int) -> TaxiTrip:
    if len(fields) < len(COLUMNS):
        raise ValueError(f"line {lineno}: expected {len(COLUMNS)} fields, got {len(fields)}")
    try:
        return TaxiTrip(
            vendor_id=fields[0],
            rate_code=fields[1],
            passenger_count=float(fields[2]),
            trip_time_in_secs=float(fields[3]),
            trip_distance=float(fields[4]),
            payment_type=fields[5],
            fare_amount=float(fields[6]),
        )
    except ValueError as e:
        raise ValueError(f"line {lineno}: {e}") from e


def read_trips(path: Union[str, Path], max_records: Optional[int] = None) -> Iterator[TaxiTrip]:
    """
    Yield trips from a headed, comma-separated file by plain line splitting.
    Stops after `max_records` trips when given.
    """
    if max_records is not None and max_records <= 0:
        return
    count = 0
    with open(path, encoding="utf-8") as fh:
        next(fh, None)  # header
        for lineno, line in enumerate(fh, start=2):
            line = line.strip()
            if not line:
                continue
            yield _parse_line(line.split(","), lineno)
            count += 1
            if max_records is not None and count >= max_records:
                break
