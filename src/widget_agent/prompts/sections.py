from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any, Iterable, Mapping, Sequence

from ..models import DataAnalysis, GeneratedWidget, PersistedWidget

SEPARATOR = "═" * 63
NONE_AVAILABLE = "(none available)"

# Config keys shown for in-memory widgets; persisted widgets show their whole config.
EPHEMERAL_CONFIG_KEYS = ("metrics", "buckets", "metricStyles", "widgetParams")


@dataclass(frozen=True)
class Section:
    title: str
    body: str


def render_section(section: Section) -> str:
    return f"{SEPARATOR}\n{section.title}\n{SEPARATOR}\n\n{section.body}"


def render_document(sections: Iterable[Section]) -> str:
    """Render titled sections in order, separated by one blank line."""
    return "\n\n".join(render_section(s) for s in sections)


def _json_block(obj: Any) -> str:
    return json.dumps(obj, indent=2, ensure_ascii=False, default=str)


def format_source_info(source_name: str, source_type: str, row_count: int) -> str:
    return (
        f"**Source name:** {source_name}\n"
        f"**Source type:** {source_type}\n"
        f"**Total rows:** {row_count}"
    )


def format_column_bucket(title: str, columns: Sequence[str]) -> str:
    header = f"**{title} ({len(columns)}):**"
    if not columns:
        return f"{header}\n  {NONE_AVAILABLE}"
    return header + "\n" + "\n".join(f"  - {c}" for c in columns)


def format_column_buckets(analysis: DataAnalysis) -> str:
    blocks = [
        format_column_bucket("Available numeric columns", analysis.numeric_columns),
        format_column_bucket("Available categorical columns", analysis.categorical_columns),
        format_column_bucket("Available date columns", analysis.date_columns),
    ]
    return "\n\n".join(blocks)


def format_dataset_context(source_name: str, source_type: str, analysis: DataAnalysis) -> str:
    info = format_source_info(source_name, source_type, analysis.row_count)
    return f"{info}\n\n{format_column_buckets(analysis)}"


def _pick(config: Mapping[str, Any], keys: Sequence[str]) -> dict[str, Any]:
    return {k: config[k] for k in keys if k in config}


def format_widget(widget: GeneratedWidget, index: int) -> str:
    return (
        f"**Widget {index + 1}: {widget.name}**\n"
        f"Type: {widget.type}\n"
        f"Description: {widget.description or 'No description'}\n"
        "Current configuration:\n"
        f"{_json_block(_pick(widget.config, EPHEMERAL_CONFIG_KEYS))}"
    )


def format_persisted_widget(widget: PersistedWidget, index: int) -> str:
    return (
        f"**Widget {index + 1} (ID: {widget.id})**\n"
        f"Name: {widget.name}\n"
        f"Type: {widget.type}\n"
        f"Description: {widget.description or 'No description'}\n"
        "Current configuration:\n"
        f"{_json_block(widget.config)}"
    )


def format_widgets(widgets: Sequence[GeneratedWidget]) -> str:
    return "\n\n".join(format_widget(w, i) for i, w in enumerate(widgets))


def format_persisted_widgets(widgets: Sequence[PersistedWidget]) -> str:
    return "\n\n".join(format_persisted_widget(w, i) for i, w in enumerate(widgets))
