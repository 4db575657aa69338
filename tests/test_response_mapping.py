from __future__ import annotations

import itertools

import pytest

from widget_agent.errors import UpstreamFormatError
from widget_agent.llm import (
    build_widget_config,
    extract_suggestions,
    parse_json_payload,
    summarize_source,
    to_widgets,
    validate_widget_config,
)
from widget_agent.profile import analyze


def _ids():
    counter = itertools.count(1)
    return lambda: f"new{next(counter)}"


def test_non_json_is_rejected() -> None:
    with pytest.raises(UpstreamFormatError):
        parse_json_payload("Sure! Here are your widgets:")


def test_json_must_be_an_object() -> None:
    with pytest.raises(UpstreamFormatError):
        parse_json_payload("[1, 2, 3]")


def test_root_level_fields_become_config() -> None:
    raw = {"metrics": [{"field": "sales", "agg": "sum"}], "widgetParams": {"title": "T"}}
    config = build_widget_config(raw)
    assert config == {
        "metrics": [{"field": "sales", "agg": "sum"}],
        "buckets": [],
        "globalFilters": [],
        "metricStyles": [],
        "widgetParams": {"title": "T"},
    }
    assert validate_widget_config(config)


def test_explicit_config_object_is_used_as_is() -> None:
    config = {"metrics": [], "buckets": [], "globalFilters": [], "metricStyles": [], "widgetParams": {}}
    assert build_widget_config({"config": config, "metrics": [{"field": "ignored"}]}) == config


def test_widgets_mapping_defaults() -> None:
    payload = {
        "widgets": [
            {"name": "Total", "type": "kpi", "metrics": [{"field": "sales", "agg": "sum"}]},
            {"name": "Mix", "type": "pie", "reasoning": "Shows shares", "confidence": 1.7},
            {"name": "Zero", "type": "table", "confidence": 0},
        ]
    }
    widgets = to_widgets(payload, "src-1", id_factory=_ids())

    assert [w.id for w in widgets] == ["new1", "new2", "new3"]
    assert all(w.data_source_id == "src-1" for w in widgets)
    assert widgets[0].reasoning == "Generated automatically"
    assert widgets[0].confidence == 0.8
    assert widgets[1].reasoning == "Shows shares"
    assert widgets[1].confidence == 1.0
    assert widgets[2].confidence == 0.0


def test_only_known_ids_are_kept() -> None:
    payload = {
        "widgets": [
            {"id": "keep-me", "name": "A", "type": "bar"},
            {"id": "invented", "name": "B", "type": "line"},
            {"name": "C", "type": "kpi"},
        ]
    }
    widgets = to_widgets(payload, "src", known_ids={"keep-me"}, id_factory=_ids())
    assert [w.id for w in widgets] == ["keep-me", "new1", "new2"]


@pytest.mark.parametrize(
    "payload",
    [
        {},
        {"widgets": "none"},
        {"widgets": ["not an object"]},
        {"widgets": [{"type": "bar"}]},
        {"widgets": [{"name": "A", "type": ""}]},
        {"widgets": [{"name": "A", "type": "bar", "metrics": "sales"}]},
        {"widgets": [{"name": "A", "type": "bar", "config": {"metrics": []}}]},
    ],
)
def test_shape_violations_reject_the_whole_response(payload) -> None:
    with pytest.raises(UpstreamFormatError):
        to_widgets(payload, "src")


def test_extract_suggestions() -> None:
    assert extract_suggestions({"suggestions": ["Add a filter?", 3, None]}) == ["Add a filter?"]
    assert extract_suggestions({"suggestions": "nope"}) == []
    assert extract_suggestions({}) == []


def test_summary_comes_from_profile() -> None:
    analysis = analyze([{"a": 1, "b": "x"}, {"a": 2, "b": "y"}])
    summary = summarize_source("Orders", "csv", analysis)
    assert summary.to_json_obj() == {
        "name": "Orders",
        "type": "csv",
        "rowCount": 2,
        "columns": [
            {"name": "a", "type": "number", "uniqueValues": 2, "sampleValues": [1, 2]},
            {"name": "b", "type": "string", "uniqueValues": 2, "sampleValues": ["x", "y"]},
        ],
    }
