"""Instruction text for the three request kinds.

Each request is a small frozen dataclass tagged with its :class:`PromptKind`;
:func:`compose_prompt` picks the matching render function. Rendering is a pure
function of the request, so identical requests give byte-identical text.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Optional, Sequence, Union

from ..models import DataAnalysis, GeneratedWidget, PersistedWidget
from .sections import (
    Section,
    format_dataset_context,
    format_persisted_widgets,
    format_widgets,
    render_document,
)

DEFAULT_MAX_WIDGETS = 5


class PromptKind(str, Enum):
    GENERATION = "generation"
    REFINEMENT = "refinement"
    DATABASE_REFINEMENT = "database_refinement"


@dataclass(frozen=True)
class GenerationPrompt:
    source_name: str
    source_type: str
    analysis: DataAnalysis
    user_prompt: Optional[str] = None
    max_widgets: int = DEFAULT_MAX_WIDGETS
    kind: PromptKind = field(default=PromptKind.GENERATION, init=False)


@dataclass(frozen=True)
class RefinementPrompt:
    source_name: str
    source_type: str
    analysis: DataAnalysis
    current_widgets: Sequence[GeneratedWidget]
    refinement_prompt: str
    kind: PromptKind = field(default=PromptKind.REFINEMENT, init=False)


@dataclass(frozen=True)
class DatabaseRefinementPrompt:
    source_name: str
    source_type: str
    analysis: DataAnalysis
    widgets: Sequence[PersistedWidget]
    refinement_prompt: str
    kind: PromptKind = field(default=PromptKind.DATABASE_REFINEMENT, init=False)


PromptRequest = Union[GenerationPrompt, RefinementPrompt, DatabaseRefinementPrompt]


USER_REQUEST_DIRECTIVES = """🎯 Read this request carefully and:
1. Identify the visualization types asked for, explicitly or implicitly
2. Decide which columns answer the request best
3. Create widgets that match the request exactly
4. If the request is vague, propose visualizations that explore different aspects of the data
5. Explain in "reasoning" how each widget answers the request"""

AUTOMATIC_DIRECTIVES = """No specific instruction was provided.

🎯 Automatically generate relevant visualizations that:
1. Explore the most interesting aspects of the data
2. Use different widget types to offer varied perspectives
3. Highlight important trends, comparisons and distributions
4. Are ready to use without further configuration"""

QUALITY_CHECKLIST = """**Quality criteria:**
✓ Each widget has a clear, distinct purpose
✓ Use ONLY the columns listed above
✓ Vary the widget types (KPI, charts, tables)
✓ Make sure configurations are valid and complete
✓ Give a detailed "reasoning" for every choice
✓ Add suggestions for follow-up analyses

**IMPORTANT:** Follow STRICTLY the output format defined in the system message.
Every configuration must be complete and ready to use."""

REFINEMENT_INSTRUCTIONS = """1. Read the user's request carefully
2. Identify which widgets are affected (all, some, or new ones)
3. Apply the requested changes consistently
4. If the request is ambiguous, make a reasonable interpretation and explain it in "reasoning"
5. Return ALL widgets (modified + unmodified) to keep the set consistent
6. Add relevant suggestions based on the changes made

Improve the widgets according to the instructions. Keep the exact format defined in the system message."""

DATABASE_REFINEMENT_INSTRUCTIONS = """1. These widgets ALREADY EXIST in the database
2. KEEP their existing IDs so the right widgets can be updated
3. Apply the requested changes consistently
4. If the request is ambiguous, make a reasonable interpretation and explain it in "reasoning"
5. Return ALL widgets (modified + unmodified)
6. Add relevant suggestions to continue the conversation

Improve the configurations according to the instructions. Keep the exact format."""


def _has_text(value: Optional[str]) -> bool:
    return bool(value and value.strip())


def _user_section(user_prompt: Optional[str]) -> Section:
    if _has_text(user_prompt):
        body = f'The user has specific needs:\n\n"{user_prompt}"\n\n{USER_REQUEST_DIRECTIVES}'
        return Section("💬 USER REQUEST", body)
    return Section("💬 AUTOMATIC GENERATION", AUTOMATIC_DIRECTIVES)


def _objectives_body(max_widgets: int) -> str:
    return f"**Number of widgets to generate:** {max_widgets} visualizations\n\n{QUALITY_CHECKLIST}"


def _render_generation(req: GenerationPrompt) -> str:
    return render_document(
        [
            Section("📊 DATA SOURCE CONTEXT", format_dataset_context(req.source_name, req.source_type, req.analysis)),
            _user_section(req.user_prompt),
            Section("📈 GENERATION OBJECTIVES", _objectives_body(req.max_widgets)),
        ]
    )


def _render_refinement(req: RefinementPrompt) -> str:
    n = len(req.current_widgets)
    return render_document(
        [
            Section("📊 CONVERSATION CONTEXT", format_dataset_context(req.source_name, req.source_type, req.analysis)),
            Section(f"🎨 CURRENT WIDGETS ({n} widget{'s' if n > 1 else ''})", format_widgets(req.current_widgets)),
            Section("💬 USER REQUEST", req.refinement_prompt),
            Section("🎯 INSTRUCTIONS", REFINEMENT_INSTRUCTIONS),
        ]
    )


def _render_database_refinement(req: DatabaseRefinementPrompt) -> str:
    return render_document(
        [
            Section("📊 CONVERSATION CONTEXT", format_dataset_context(req.source_name, req.source_type, req.analysis)),
            Section("🎨 CURRENT WIDGETS (saved in the database)", format_persisted_widgets(req.widgets)),
            Section("💬 USER REQUEST", req.refinement_prompt),
            Section("🎯 IMPORTANT INSTRUCTIONS", DATABASE_REFINEMENT_INSTRUCTIONS),
        ]
    )


_RENDERERS: dict[PromptKind, Callable[..., str]] = {
    PromptKind.GENERATION: _render_generation,
    PromptKind.REFINEMENT: _render_refinement,
    PromptKind.DATABASE_REFINEMENT: _render_database_refinement,
}


def compose_prompt(request: PromptRequest) -> str:
    """Render the user message for any prompt kind."""
    return _RENDERERS[request.kind](request)
