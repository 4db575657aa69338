from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Optional

import typer

from .errors import WidgetAgentError
from .llm.settings import LlmSettings
from .logging_setup import configure_logging
from .models import (
    DatabaseRefinementRequest,
    GeneratedWidget,
    GenerationRequest,
    PersistedWidget,
    RefinementRequest,
    SourceRecord,
)
from .orchestrator import WidgetOrchestrator, lookup_from_sources
from .profile import analyze, load_rows
from .prompts import GenerationPrompt, compose_prompt
from .utils import read_json

app = typer.Typer(add_completion=False, help="Widget Agent (profile a dataset, generate dashboard widgets)")


@app.callback()
def main(verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging")) -> None:
    configure_logging(logging.DEBUG if verbose else logging.WARNING)


def _load_source(data: Path, name: Optional[str], source_type: Optional[str]) -> SourceRecord:
    rows = load_rows(data)
    return SourceRecord(
        id=data.stem,
        name=name or data.name,
        type=source_type or data.suffix.lstrip(".").lower(),
        rows=rows,
    )


def _echo_json(obj: Any) -> None:
    typer.echo(json.dumps(obj, indent=2, ensure_ascii=False, default=str))


def _widget_items(path: Path) -> list[dict[str, Any]]:
    obj = read_json(path)
    items = obj.get("widgets") if isinstance(obj, dict) else obj
    if not isinstance(items, list):
        raise ValueError(f"{path} must hold a JSON array of widgets (or an object with a 'widgets' array).")
    return [w for w in items if isinstance(w, dict)]


@app.command("analyze")
def analyze_cmd(
    data: Path = typer.Option(..., "--data", exists=True, help="Path to a CSV or JSON file"),
):
    """
    Print the DataAnalysis profile of a dataset as JSON.
    """
    try:
        analysis = analyze(load_rows(data))
    except (ValueError, OSError) as e:
        typer.echo(f"ERROR: {e}", err=True)
        raise typer.Exit(code=1)
    _echo_json(analysis.to_json_obj())


@app.command("prompt")
def prompt_cmd(
    data: Path = typer.Option(..., "--data", exists=True, help="Path to a CSV or JSON file"),
    prompt: Optional[str] = typer.Option(None, "--prompt", help="Free-text user instruction"),
    max_widgets: int = typer.Option(5, "--max-widgets", min=1, max=10, help="Number of widgets to ask for"),
    name: Optional[str] = typer.Option(None, "--name", help="Source name (default: file name)"),
    source_type: Optional[str] = typer.Option(None, "--source-type", help="Source type (default: file suffix)"),
):
    """
    Print the generation prompt that would be sent to the model (no network call).
    """
    try:
        source = _load_source(data, name, source_type)
    except (ValueError, OSError) as e:
        typer.echo(f"ERROR: {e}", err=True)
        raise typer.Exit(code=1)
    text = compose_prompt(
        GenerationPrompt(
            source_name=source.name,
            source_type=source.type,
            analysis=analyze(source.rows),
            user_prompt=prompt,
            max_widgets=max_widgets,
        )
    )
    typer.echo(text)


@app.command()
def generate(
    data: Path = typer.Option(..., "--data", exists=True, help="Path to a CSV or JSON file"),
    prompt: Optional[str] = typer.Option(None, "--prompt", help="Free-text user instruction"),
    max_widgets: int = typer.Option(5, "--max-widgets", min=1, max=10, help="Number of widgets to ask for"),
    name: Optional[str] = typer.Option(None, "--name", help="Source name (default: file name)"),
    source_type: Optional[str] = typer.Option(None, "--source-type", help="Source type (default: file suffix)"),
):
    """
    Profile the dataset, ask the model for widgets and print the result as JSON.

    Requires OPENAI_API_KEY. Model: WIDGET_AGENT_LLM_MODEL (default gpt-4o-mini).
    """
    try:
        source = _load_source(data, name, source_type)
        orch = WidgetOrchestrator(LlmSettings.from_env(), lookup_from_sources([source]))
        result = orch.generate(
            GenerationRequest(data_source_id=source.id, user_prompt=prompt, max_widgets=max_widgets)
        )
    except (WidgetAgentError, ValueError, OSError) as e:
        typer.echo(f"ERROR: {e}", err=True)
        raise typer.Exit(code=1)
    _echo_json(result.to_json_obj())


@app.command()
def refine(
    data: Path = typer.Option(..., "--data", exists=True, help="Path to a CSV or JSON file"),
    widgets: Path = typer.Option(..., "--widgets", exists=True, help="JSON file with the current widgets"),
    prompt: str = typer.Option(..., "--prompt", help="Refinement instruction"),
    persisted: bool = typer.Option(False, "--persisted", help="Widgets are already saved; keep their ids"),
    name: Optional[str] = typer.Option(None, "--name", help="Source name (default: file name)"),
    source_type: Optional[str] = typer.Option(None, "--source-type", help="Source type (default: file suffix)"),
):
    """
    Refine existing widgets according to an instruction and print the full widget set as JSON.
    """
    try:
        source = _load_source(data, name, source_type)
        items = _widget_items(widgets)
        orch = WidgetOrchestrator(LlmSettings.from_env(), lookup_from_sources([source]))
        if persisted:
            result = orch.refine_persisted(
                DatabaseRefinementRequest(
                    data_source_id=source.id,
                    widgets=[PersistedWidget.model_validate(w) for w in items],
                    refinement_prompt=prompt,
                )
            )
        else:
            current = [GeneratedWidget.model_validate({"dataSourceId": source.id, **w}) for w in items]
            result = orch.refine(
                RefinementRequest(data_source_id=source.id, current_widgets=current, refinement_prompt=prompt)
            )
    except (WidgetAgentError, ValueError, OSError) as e:
        typer.echo(f"ERROR: {e}", err=True)
        raise typer.Exit(code=1)
    _echo_json(result.to_json_obj())
