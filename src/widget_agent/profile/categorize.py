from __future__ import annotations

from typing import Iterable

from ..models import ColumnProfile, ColumnType, SuggestedMetric

# String columns at or above this many distinct values are left out of every bucket.
CATEGORICAL_MAX_UNIQUE = 50


def categorize_columns(columns: Iterable[ColumnProfile]) -> tuple[list[str], list[str], list[str]]:
    """Split profiled columns into (numeric, categorical, date) name lists, keeping column order."""
    numeric: list[str] = []
    categorical: list[str] = []
    dates: list[str] = []
    for col in columns:
        if col.type == ColumnType.NUMBER:
            numeric.append(col.name)
        elif col.type == ColumnType.STRING and col.unique_values < CATEGORICAL_MAX_UNIQUE:
            categorical.append(col.name)
        elif col.type == ColumnType.DATE:
            dates.append(col.name)
    return numeric, categorical, dates


def suggest_metrics(numeric_columns: Iterable[str]) -> list[SuggestedMetric]:
    return [
        SuggestedMetric(field=field, aggregation="sum", reasoning=f"Total sum of {field}")
        for field in numeric_columns
    ]


def suggest_buckets(categorical_columns: Iterable[str], date_columns: Iterable[str]) -> list[str]:
    return [*categorical_columns, *date_columns]
