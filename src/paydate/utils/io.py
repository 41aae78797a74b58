"""I/O utilities: load holiday sets and funding records, save results."""
from __future__ import annotations

import logging
from datetime import date
from pathlib import Path

import pandas as pd
import pyarrow as pa
import pyarrow.parquet as pq
import yaml

from paydate.utils.calendar import to_holiday_set, to_instant
from paydate.utils.errors import InvalidInstantError, RecordValidationError

logger = logging.getLogger(__name__)

RECORDS_REQUIRED = {"fund_day", "pay_span", "pay_day", "direct_deposit"}
HOLIDAYS_COLUMN = "date"

_TRUE = {"1", "true", "t", "yes", "y"}
_FALSE = {"0", "false", "f", "no", "n", ""}


def _read_frame(path: Path) -> pd.DataFrame:
    if path.suffix.lower() == ".parquet":
        return pd.read_parquet(path)
    return pd.read_csv(path, dtype=str, keep_default_na=False)


def load_holidays(path: str | Path) -> frozenset[date]:
    """Load a holiday set from CSV / Parquet (column 'date') or a YAML list."""
    path = Path(path)
    suffix = path.suffix.lower()
    if suffix in (".yaml", ".yml"):
        with open(path) as f:
            data = yaml.safe_load(f) or []
        if isinstance(data, dict):
            data = data.get("holidays", []) or []
        holidays = to_holiday_set(data)
    else:
        df = _read_frame(path)
        if HOLIDAYS_COLUMN not in df.columns:
            raise RecordValidationError(f"holidays missing required column: {HOLIDAYS_COLUMN!r}")
        holidays = to_holiday_set(df[HOLIDAYS_COLUMN])
    logger.info("Loaded %d holiday(s) from %s", len(holidays), path)
    return holidays


def parse_bool(value: object) -> bool:
    """Parse a direct-deposit flag from bool, number or common string forms."""
    if isinstance(value, bool):
        return value
    text = str(value).strip().lower()
    if text in _TRUE:
        return True
    if text in _FALSE:
        return False
    raise RecordValidationError(f"Cannot interpret {value!r} as a boolean")


def load_funding_records(path: str | Path) -> pd.DataFrame:
    """Load funding records from CSV or Parquet, validate and parse columns."""
    path = Path(path)
    df = _read_frame(path)

    missing = RECORDS_REQUIRED - set(df.columns)
    if missing:
        raise RecordValidationError(f"records missing required columns: {sorted(missing)}")

    try:
        df["fund_day"] = [to_instant(v) for v in df["fund_day"]]
        df["pay_day"] = [to_instant(v) for v in df["pay_day"]]
    except InvalidInstantError as exc:
        raise InvalidInstantError(f"{path}: {exc}") from exc
    df["pay_span"] = df["pay_span"].astype(str)
    df["direct_deposit"] = [parse_bool(v) for v in df["direct_deposit"]]
    return df


def save_results(df: pd.DataFrame, path: str | Path) -> None:
    """Save results as Parquet (pyarrow, no index) or CSV, chosen by suffix."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    if path.suffix.lower() == ".parquet":
        table = pa.Table.from_pandas(df, preserve_index=False)
        pq.write_table(table, path)
    else:
        df.to_csv(path, index=False)
