from __future__ import annotations

import json
import logging
import math
import numbers
from typing import Any, Callable, Collection, Mapping

from ..errors import UpstreamFormatError
from ..models import DataAnalysis, DataSourceSummary, GeneratedWidget, SummaryColumn
from ..utils import new_widget_id

logger = logging.getLogger(__name__)

CONFIG_LIST_KEYS = ("metrics", "buckets", "globalFilters", "metricStyles")
DEFAULT_REASONING = "Generated automatically"
DEFAULT_CONFIDENCE = 0.8


def parse_json_payload(text: str) -> dict[str, Any]:
    """Decode the generator's text; anything but a JSON object is an upstream format error."""
    try:
        obj = json.loads(text)
    except (json.JSONDecodeError, TypeError) as e:
        raise UpstreamFormatError(f"Generator response is not valid JSON: {e}") from e
    if not isinstance(obj, dict):
        raise UpstreamFormatError("Generator response must be a JSON object.")
    return obj


def build_widget_config(raw: Mapping[str, Any]) -> dict[str, Any]:
    """Use the widget's own `config` object, or assemble one from root-level fields."""
    config = raw.get("config")
    if isinstance(config, Mapping):
        return dict(config)
    out: dict[str, Any] = {key: raw.get(key) or [] for key in CONFIG_LIST_KEYS}
    out["widgetParams"] = raw.get("widgetParams") or {}
    return out


def validate_widget_config(config: Mapping[str, Any]) -> bool:
    return all(isinstance(config.get(k), list) for k in CONFIG_LIST_KEYS) and isinstance(
        config.get("widgetParams"), Mapping
    )


def _confidence(value: Any) -> float:
    if not isinstance(value, numbers.Real) or isinstance(value, bool):
        return DEFAULT_CONFIDENCE
    v = float(value)
    if not math.isfinite(v):
        return DEFAULT_CONFIDENCE
    return min(1.0, max(0.0, v))


def to_widgets(
    payload: Mapping[str, Any],
    data_source_id: str,
    *,
    known_ids: Collection[str] = (),
    id_factory: Callable[[], str] = new_widget_id,
) -> list[GeneratedWidget]:
    """
    Map the `widgets` array of a response to GeneratedWidget objects.

    An `id` returned by the model is kept only if it is one of `known_ids`;
    otherwise a fresh ephemeral id is minted. Any shape violation rejects the
    whole response.
    """
    raw_widgets = payload.get("widgets")
    if not isinstance(raw_widgets, list):
        raise UpstreamFormatError("Generator response is missing a 'widgets' array.")

    widgets: list[GeneratedWidget] = []
    for i, raw in enumerate(raw_widgets):
        if not isinstance(raw, Mapping):
            raise UpstreamFormatError(f"widgets[{i}] must be an object.")
        name, wtype = raw.get("name"), raw.get("type")
        if not isinstance(name, str) or not isinstance(wtype, str) or not wtype.strip():
            raise UpstreamFormatError(f"widgets[{i}] needs string 'name' and 'type'.")

        config = build_widget_config(raw)
        if not validate_widget_config(config):
            raise UpstreamFormatError(f"widgets[{i}] has a malformed configuration.")
        if not config["metrics"]:
            logger.warning("Widget %d (%s) has no metrics", i + 1, name)

        raw_id = raw.get("id")
        widget_id = raw_id if isinstance(raw_id, str) and raw_id in known_ids else id_factory()
        description = raw.get("description")
        reasoning = raw.get("reasoning")

        widgets.append(
            GeneratedWidget(
                id=widget_id,
                name=name,
                description=description if isinstance(description, str) else None,
                type=wtype,
                config=config,
                data_source_id=data_source_id,
                reasoning=reasoning if isinstance(reasoning, str) and reasoning else DEFAULT_REASONING,
                confidence=_confidence(raw.get("confidence")),
            )
        )
    return widgets


def extract_suggestions(payload: Mapping[str, Any]) -> list[str]:
    suggestions = payload.get("suggestions")
    if not isinstance(suggestions, list):
        return []
    return [s for s in suggestions if isinstance(s, str)]


def optional_text(payload: Mapping[str, Any], key: str) -> str | None:
    value = payload.get(key)
    return value if isinstance(value, str) and value.strip() else None


def summarize_source(name: str, source_type: str, analysis: DataAnalysis) -> DataSourceSummary:
    """Summary built from the profile only, never from the model's description of the data."""
    return DataSourceSummary(
        name=name,
        type=source_type,
        row_count=analysis.row_count,
        columns=[
            SummaryColumn(
                name=c.name,
                type=c.type,
                unique_values=c.unique_values,
                sample_values=list(c.sample_values),
            )
            for c in analysis.columns
        ],
    )
