"""Error taxonomy surfaced to callers.

None of these are recovered internally; the caller translates them into a
user-facing response.
"""

from __future__ import annotations


class WidgetAgentError(Exception):
    """Base class for all widget_agent failures."""


class ConfigurationError(WidgetAgentError):
    """Raised before any network call when no model credential is configured."""


class NotFoundError(WidgetAgentError):
    """Raised when a data source cannot be resolved or a widget set is empty."""


class UpstreamFormatError(WidgetAgentError):
    """Raised when the generator's response is not JSON or has the wrong shape."""


class NetworkError(WidgetAgentError):
    """Raised when the external generator cannot be reached."""
