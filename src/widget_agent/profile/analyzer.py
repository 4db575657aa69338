from __future__ import annotations

import json
import logging
import math
import numbers
import warnings
from typing import Any, Iterable, Mapping, Sequence

import pandas as pd

from ..models import ColumnProfile, ColumnType, DataAnalysis
from .categorize import categorize_columns, suggest_buckets, suggest_metrics

logger = logging.getLogger(__name__)

MAX_SAMPLE_VALUES = 5


def is_null(value: Any) -> bool:
    """Missing markers: None and float NaN (what pandas leaves in empty cells)."""
    if value is None:
        return True
    return isinstance(value, float) and math.isnan(value)


def _is_numeric_literal(value: Any) -> bool:
    # bool is an int subclass; booleans are classified separately.
    return isinstance(value, numbers.Number) and not isinstance(value, bool)


def _parses_as_date(value: str) -> bool:
    # Bare words such as month names or "now" stay strings.
    if not any(ch.isdigit() for ch in value):
        return False
    try:
        with warnings.catch_warnings():
            warnings.simplefilter("ignore")
            ts = pd.to_datetime(value)
    except (ValueError, TypeError, OverflowError):
        return False
    return ts is not pd.NaT


def detect_column_type(value: Any) -> ColumnType:
    """Classify a single value: number, then boolean, then date string, else string."""
    if _is_numeric_literal(value):
        return ColumnType.NUMBER
    if isinstance(value, bool):
        return ColumnType.BOOLEAN
    if isinstance(value, str) and _parses_as_date(value):
        return ColumnType.DATE
    return ColumnType.STRING


def _distinct_key(value: Any) -> str:
    # Equal numbers share a key (1 == 1.0); True stays apart from 1.
    # Dicts and lists compare by content.
    if isinstance(value, numbers.Real) and not isinstance(value, bool):
        return f"num:{float(value)!r}"
    return json.dumps(value, sort_keys=True, default=str)


def analyze_column(name: str, rows: Sequence[Mapping[str, Any]]) -> ColumnProfile:
    """Profile one column.

    The type comes from the first non-null value only; later values never
    change it.
    """
    values = [row.get(name) for row in rows]
    non_null = [v for v in values if not is_null(v)]

    col_type = detect_column_type(non_null[0]) if non_null else ColumnType.STRING
    unique = {_distinct_key(v) for v in non_null}

    return ColumnProfile(
        name=name,
        type=col_type,
        unique_values=len(unique),
        sample_values=non_null[:MAX_SAMPLE_VALUES],
        has_nulls=len(non_null) < len(values),
    )


def _column_names(rows: Iterable[Mapping[str, Any]]) -> list[str]:
    seen: dict[str, None] = {}
    for row in rows:
        for key in row.keys():
            seen.setdefault(str(key), None)
    return list(seen)


def analyze(rows: Sequence[Mapping[str, Any]]) -> DataAnalysis:
    """Build a DataAnalysis profile from raw records.

    Columns are the union of keys across all rows, in first-seen order.
    """
    if not rows:
        return DataAnalysis(row_count=0)

    names = _column_names(rows)
    columns = [analyze_column(name, rows) for name in names]
    numeric, categorical, dates = categorize_columns(columns)

    logger.debug(
        "Analyzed %d rows x %d columns (numeric=%s categorical=%s date=%s)",
        len(rows),
        len(columns),
        numeric,
        categorical,
        dates,
    )

    return DataAnalysis(
        columns=columns,
        row_count=len(rows),
        numeric_columns=numeric,
        categorical_columns=categorical,
        date_columns=dates,
        suggested_metrics=suggest_metrics(numeric),
        suggested_buckets=suggest_buckets(categorical, dates),
    )
