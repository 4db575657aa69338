from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

import pandas as pd

logger = logging.getLogger(__name__)

SUPPORTED_SUFFIXES = (".csv", ".json")


def _frame_to_records(df: pd.DataFrame) -> list[dict[str, Any]]:
    # object dtype turns numpy scalars into Python values; NaN/NaT become None.
    clean = df.astype(object).where(pd.notna(df), None)
    return [{str(k): v for k, v in rec.items()} for rec in clean.to_dict(orient="records")]


def load_rows(path: Path) -> list[dict[str, Any]]:
    """
    Load a CSV or JSON file into plain records.

    JSON may hold an array of objects or a single object. Records are kept as
    parsed (no column union/fill), so absent keys stay absent.
    """
    suffix = path.suffix.lower()
    if suffix not in SUPPORTED_SUFFIXES:
        raise ValueError(f"Unsupported data file type '{suffix}'. Expected one of {list(SUPPORTED_SUFFIXES)}.")

    if suffix == ".csv":
        df = pd.read_csv(path)
        rows = _frame_to_records(df)
    else:
        obj = json.loads(path.read_text(encoding="utf-8"))
        items = obj if isinstance(obj, list) else [obj]
        rows = [dict(item) for item in items if isinstance(item, dict)]

    logger.info("Loaded %d rows from %s", len(rows), path)
    return rows
