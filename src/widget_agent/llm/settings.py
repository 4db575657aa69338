from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional

DEFAULT_MODEL = "gpt-4o-mini"
DEFAULT_TEMPERATURE = 0.7
DEFAULT_MAX_TOKENS = 4000
DEFAULT_TIMEOUT_SECONDS = 60.0


def _env_str(name: str) -> Optional[str]:
    raw = os.environ.get(name)
    if raw is None or raw.strip() == "":
        return None
    return raw.strip()


def _env_float(name: str, default: float) -> float:
    raw = _env_str(name)
    if raw is None:
        return default
    try:
        return float(raw)
    except ValueError:
        return default


def _env_int(name: str, default: int) -> int:
    raw = _env_str(name)
    if raw is None:
        return default
    try:
        v = int(raw)
        return v if v > 0 else default
    except ValueError:
        return default


@dataclass(frozen=True)
class LlmSettings:
    """Model credential and call parameters.

    api_key: None means "not configured"; calls then fail before any network I/O.
    timeout: handed to the transport; the orchestrator never times calls itself.
    """

    api_key: Optional[str] = None
    model: str = DEFAULT_MODEL
    base_url: Optional[str] = None
    temperature: float = DEFAULT_TEMPERATURE
    max_tokens: int = DEFAULT_MAX_TOKENS
    timeout: float = DEFAULT_TIMEOUT_SECONDS

    @property
    def has_credential(self) -> bool:
        return bool(self.api_key)

    @classmethod
    def from_env(cls) -> "LlmSettings":
        return cls(
            api_key=_env_str("OPENAI_API_KEY"),
            model=_env_str("WIDGET_AGENT_LLM_MODEL") or DEFAULT_MODEL,
            base_url=_env_str("OPENAI_BASE_URL"),
            temperature=_env_float("WIDGET_AGENT_TEMPERATURE", DEFAULT_TEMPERATURE),
            max_tokens=_env_int("WIDGET_AGENT_MAX_TOKENS", DEFAULT_MAX_TOKENS),
            timeout=_env_float("WIDGET_AGENT_TIMEOUT", DEFAULT_TIMEOUT_SECONDS),
        )
