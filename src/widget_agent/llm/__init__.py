"""External text-generation boundary: settings, the single call, response mapping."""

from .client import ChatRequest, build_client, request_completion
from .response import (
    build_widget_config,
    extract_suggestions,
    parse_json_payload,
    summarize_source,
    to_widgets,
    validate_widget_config,
)
from .settings import DEFAULT_MODEL, LlmSettings

__all__ = [
    "ChatRequest",
    "DEFAULT_MODEL",
    "LlmSettings",
    "build_client",
    "build_widget_config",
    "extract_suggestions",
    "parse_json_payload",
    "request_completion",
    "summarize_source",
    "to_widgets",
    "validate_widget_config",
]
