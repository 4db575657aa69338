from __future__ import annotations

from widget_agent.models import ColumnProfile, ColumnType
from widget_agent.profile import (
    CATEGORICAL_MAX_UNIQUE,
    analyze,
    categorize_columns,
    suggest_buckets,
    suggest_metrics,
)


def _profile(name: str, col_type: ColumnType, unique: int) -> ColumnProfile:
    return ColumnProfile(name=name, type=col_type, unique_values=unique, sample_values=[], has_nulls=False)


def test_high_cardinality_strings_are_left_out_of_every_bucket() -> None:
    cols = [
        _profile("region", ColumnType.STRING, 4),
        _profile("customer", ColumnType.STRING, CATEGORICAL_MAX_UNIQUE),
        _profile("email", ColumnType.STRING, 900),
        _profile("sales", ColumnType.NUMBER, 900),
        _profile("day", ColumnType.DATE, 31),
        _profile("active", ColumnType.BOOLEAN, 2),
    ]
    numeric, categorical, dates = categorize_columns(cols)
    assert numeric == ["sales"]
    assert categorical == ["region"]
    assert dates == ["day"]


def test_boundary_just_below_threshold_is_categorical() -> None:
    _, categorical, _ = categorize_columns([_profile("c", ColumnType.STRING, CATEGORICAL_MAX_UNIQUE - 1)])
    assert categorical == ["c"]


def test_suggested_metrics_are_always_sums() -> None:
    metrics = suggest_metrics(["sales", "units"])
    assert [(m.field, m.aggregation, m.reasoning) for m in metrics] == [
        ("sales", "sum", "Total sum of sales"),
        ("units", "sum", "Total sum of units"),
    ]


def test_suggested_buckets_are_categorical_then_dates() -> None:
    assert suggest_buckets(["region", "segment"], ["day"]) == ["region", "segment", "day"]


def test_buckets_are_disjoint_subsets_of_columns() -> None:
    rows = [
        {"sales": 10.5, "units": 3, "region": "north", "day": "2024-01-01", "active": True, "tags": ["a"]},
        {"sales": 4.0, "units": 1, "region": "south", "day": "2024-01-02", "active": False, "tags": ["b"]},
        {"sales": None, "units": 7, "region": "east", "day": None, "active": True, "tags": None},
    ]
    res = analyze(rows)
    names = set(res.column_names())
    buckets = [set(res.numeric_columns), set(res.categorical_columns), set(res.date_columns)]

    for b in buckets:
        assert b <= names
    assert not (buckets[0] & buckets[1])
    assert not (buckets[0] & buckets[2])
    assert not (buckets[1] & buckets[2])

    assert res.numeric_columns == ["sales", "units"]
    assert res.date_columns == ["day"]
    assert len(res.suggested_metrics) == len(res.numeric_columns)
    assert all(m.aggregation == "sum" for m in res.suggested_metrics)
    assert res.suggested_buckets == [*res.categorical_columns, *res.date_columns]
