"""Request orchestration: preconditions, one generator call, response mapping.

A :class:`WidgetOrchestrator` walks ``IDLE -> VALIDATING -> CALLING -> PARSING
-> DONE``; any failure in the middle three states ends in ``FAILED`` and the
error propagates unchanged. The call is issued at most once per request and
never retried. Instances hold per-request state only; use one instance per
concurrent request.
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from enum import Enum
from typing import Any, Callable, Iterator, Optional, Sequence

from .errors import ConfigurationError, NotFoundError
from .llm.client import ChatRequest, build_client, request_completion
from .llm.response import (
    extract_suggestions,
    optional_text,
    parse_json_payload,
    summarize_source,
    to_widgets,
)
from .llm.settings import LlmSettings
from .models import (
    DataAnalysis,
    DatabaseRefinementRequest,
    GenerationRequest,
    GenerationResult,
    RefinementRequest,
    RefinementResult,
    SourceRecord,
)
from .profile import analyze
from .prompts import (
    DatabaseRefinementPrompt,
    GenerationPrompt,
    PromptRequest,
    RefinementPrompt,
    WIDGET_GENERATION_SYSTEM_PROMPT,
    WIDGET_REFINEMENT_SYSTEM_PROMPT,
    compose_prompt,
)

SourceLookup = Callable[[str], Optional[SourceRecord]]


class RunState(str, Enum):
    IDLE = "idle"
    VALIDATING = "validating"
    CALLING = "calling"
    PARSING = "parsing"
    DONE = "done"
    FAILED = "failed"


class WidgetOrchestrator:
    """Drive generation and refinement of dashboard widgets.

    lookup: resolves a data source id to a SourceRecord (None when unknown)
    client: OpenAI-compatible client; built from settings on first call when omitted
    logger: explicit logging capability; defaults to this module's logger
    """

    def __init__(
        self,
        settings: LlmSettings,
        lookup: SourceLookup,
        *,
        client: Any = None,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self.settings = settings
        self.lookup = lookup
        self._client = client
        self.log = logger or logging.getLogger(__name__)
        self.state = RunState.IDLE
        self.transitions: list[RunState] = [RunState.IDLE]

    # ---- state handling ----

    def _enter(self, state: RunState) -> None:
        self.state = state
        self.transitions.append(state)

    def _reset(self) -> None:
        self.state = RunState.IDLE
        self.transitions = [RunState.IDLE]

    @contextmanager
    def _stage(self, state: RunState) -> Iterator[None]:
        self._enter(state)
        try:
            yield
        except Exception:
            self._enter(RunState.FAILED)
            raise

    # ---- preconditions ----

    def _require_credential(self) -> None:
        if not self.settings.has_credential:
            self.log.error("No model credential configured (OPENAI_API_KEY)")
            raise ConfigurationError(
                "Model API key is not configured. Set OPENAI_API_KEY in the environment."
            )

    def _resolve_source(self, data_source_id: str) -> SourceRecord:
        source = self.lookup(data_source_id)
        if source is None:
            self.log.error("Data source not found: %s", data_source_id)
            raise NotFoundError(f"Data source not found: {data_source_id}")
        return source

    def _profile(self, source: SourceRecord) -> DataAnalysis:
        if not source.rows:
            self.log.warning("Data source %s has no rows", source.id)
        analysis = analyze(source.rows)
        self.log.info(
            "Profiled source %s: %d rows, %d columns", source.name, analysis.row_count, len(analysis.columns)
        )
        return analysis

    # ---- external call ----

    def _client_or_build(self) -> Any:
        if self._client is None:
            self._client = build_client(self.settings)
        return self._client

    def _call(self, system_prompt: str, prompt: PromptRequest) -> str:
        request = ChatRequest(
            system_prompt=system_prompt,
            user_prompt=compose_prompt(prompt),
            temperature=self.settings.temperature,
            max_tokens=self.settings.max_tokens,
        )
        self.log.info("Requesting %s from model %s", prompt.kind.value, self.settings.model)
        return request_completion(self._client_or_build(), model=self.settings.model, request=request)

    # ---- operations ----

    def analyze_source(self, data_source_id: str) -> DataAnalysis:
        """Profile a data source without calling the generator."""
        return self._profile(self._resolve_source(data_source_id))

    def generate(self, request: GenerationRequest) -> GenerationResult:
        self._reset()
        with self._stage(RunState.VALIDATING):
            self._require_credential()
            source = self._resolve_source(request.data_source_id)
            analysis = self._profile(source)

        with self._stage(RunState.CALLING):
            text = self._call(
                WIDGET_GENERATION_SYSTEM_PROMPT,
                GenerationPrompt(
                    source_name=source.name,
                    source_type=source.type,
                    analysis=analysis,
                    user_prompt=request.user_prompt,
                    max_widgets=request.max_widgets,
                ),
            )

        with self._stage(RunState.PARSING):
            payload = parse_json_payload(text)
            widgets = to_widgets(payload, source.id)
            result = GenerationResult(
                widgets=widgets,
                total_generated=len(widgets),
                data_source_summary=summarize_source(source.name, source.type, analysis),
                suggestions=extract_suggestions(payload),
                conversation_title=optional_text(payload, "conversationTitle") or f"Analysis of {source.name}",
                ai_message=optional_text(payload, "aiMessage"),
            )

        self._enter(RunState.DONE)
        self.log.info("Generated %d widgets for %s", result.total_generated, source.name)
        return result

    def refine(self, request: RefinementRequest) -> RefinementResult:
        """Refine widgets that only exist in the caller's memory.

        The prompt shows these widgets without ids, so every returned widget gets a fresh id.
        """
        self._reset()
        with self._stage(RunState.VALIDATING):
            self._require_credential()
            self._require_widgets(request.current_widgets)
            source = self._resolve_source(request.data_source_id)
            analysis = self._profile(source)

        with self._stage(RunState.CALLING):
            text = self._call(
                WIDGET_REFINEMENT_SYSTEM_PROMPT,
                RefinementPrompt(
                    source_name=source.name,
                    source_type=source.type,
                    analysis=analysis,
                    current_widgets=request.current_widgets,
                    refinement_prompt=request.refinement_prompt,
                ),
            )

        return self._finish_refinement(text, source, analysis, ())

    def refine_persisted(self, request: DatabaseRefinementRequest) -> RefinementResult:
        """Refine already-saved widgets; returned widgets keep their persisted ids."""
        self._reset()
        with self._stage(RunState.VALIDATING):
            self._require_credential()
            self._require_widgets(request.widgets)
            source = self._resolve_source(request.data_source_id)
            analysis = self._profile(source)

        with self._stage(RunState.CALLING):
            text = self._call(
                WIDGET_REFINEMENT_SYSTEM_PROMPT,
                DatabaseRefinementPrompt(
                    source_name=source.name,
                    source_type=source.type,
                    analysis=analysis,
                    widgets=request.widgets,
                    refinement_prompt=request.refinement_prompt,
                ),
            )

        return self._finish_refinement(text, source, analysis, [w.id for w in request.widgets])

    def _require_widgets(self, widgets: Sequence[Any]) -> None:
        if not widgets:
            self.log.error("Refinement requested with no widgets")
            raise NotFoundError("No widgets to refine.")

    def _finish_refinement(
        self, text: str, source: SourceRecord, analysis: DataAnalysis, known_ids: Sequence[str]
    ) -> RefinementResult:
        with self._stage(RunState.PARSING):
            payload = parse_json_payload(text)
            widgets = to_widgets(payload, source.id, known_ids=set(known_ids))
            result = RefinementResult(
                widgets=widgets,
                total_generated=len(widgets),
                data_source_summary=summarize_source(source.name, source.type, analysis),
                suggestions=extract_suggestions(payload),
                conversation_title=optional_text(payload, "conversationTitle"),
                ai_message=optional_text(payload, "aiMessage"),
            )

        self._enter(RunState.DONE)
        self.log.info("Refined %d widgets for %s", result.total_generated, source.name)
        return result


def lookup_from_sources(sources: Sequence[SourceRecord]) -> SourceLookup:
    """Build a lookup over an in-memory list of sources."""
    by_id = {s.id: s for s in sources}
    return by_id.get
