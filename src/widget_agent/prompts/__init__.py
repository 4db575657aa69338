"""Prompt composition.

Deterministic instruction text for widget generation, refinement of
in-memory widgets, and refinement of persisted widgets.
"""

from .compose import (
    DEFAULT_MAX_WIDGETS,
    DatabaseRefinementPrompt,
    GenerationPrompt,
    PromptKind,
    PromptRequest,
    RefinementPrompt,
    compose_prompt,
)
from .sections import NONE_AVAILABLE, SEPARATOR, Section, render_document, render_section
from .system import WIDGET_GENERATION_SYSTEM_PROMPT, WIDGET_REFINEMENT_SYSTEM_PROMPT

__all__ = [
    "DEFAULT_MAX_WIDGETS",
    "DatabaseRefinementPrompt",
    "GenerationPrompt",
    "NONE_AVAILABLE",
    "PromptKind",
    "PromptRequest",
    "RefinementPrompt",
    "SEPARATOR",
    "Section",
    "WIDGET_GENERATION_SYSTEM_PROMPT",
    "WIDGET_REFINEMENT_SYSTEM_PROMPT",
    "compose_prompt",
    "render_document",
    "render_section",
]
