"""Dataset profiling and model-driven dashboard widget generation."""

from .errors import ConfigurationError, NetworkError, NotFoundError, UpstreamFormatError, WidgetAgentError
from .orchestrator import RunState, WidgetOrchestrator, lookup_from_sources

__all__ = [
    "ConfigurationError",
    "NetworkError",
    "NotFoundError",
    "RunState",
    "UpstreamFormatError",
    "WidgetAgentError",
    "WidgetOrchestrator",
    "lookup_from_sources",
]
