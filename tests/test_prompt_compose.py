from __future__ import annotations

from widget_agent.models import GeneratedWidget, PersistedWidget
from widget_agent.profile import analyze
from widget_agent.prompts import (
    NONE_AVAILABLE,
    SEPARATOR,
    DatabaseRefinementPrompt,
    GenerationPrompt,
    PromptKind,
    RefinementPrompt,
    Section,
    compose_prompt,
    render_document,
)

ROWS = [
    {"sales": 120.0, "region": "north", "day": "2024-01-01"},
    {"sales": 80.5, "region": "south", "day": "2024-01-02"},
    {"sales": 42.0, "region": "north", "day": "2024-01-03"},
]


def _widget(**overrides) -> GeneratedWidget:
    base = {
        "id": "a1b2c3d4",
        "name": "Sales by region",
        "type": "bar",
        "description": "Compare regions",
        "data_source_id": "src-1",
        "config": {
            "metrics": [{"field": "sales", "agg": "sum", "label": "Sales"}],
            "buckets": [{"field": "region", "type": "terms"}],
            "globalFilters": [{"field": "region", "value": "north"}],
            "metricStyles": [{"color": "#6366f1"}],
            "widgetParams": {"title": "Sales by region"},
        },
    }
    base.update(overrides)
    return GeneratedWidget(**base)


def test_render_document_layout() -> None:
    text = render_document([Section("ONE", "body 1"), Section("TWO", "body 2")])
    assert text == (
        f"{SEPARATOR}\nONE\n{SEPARATOR}\n\nbody 1"
        "\n\n"
        f"{SEPARATOR}\nTWO\n{SEPARATOR}\n\nbody 2"
    )


def test_generation_prompt_is_deterministic() -> None:
    req = GenerationPrompt("Sales 2024", "csv", analyze(ROWS), user_prompt="Show sales trends", max_widgets=3)
    assert req.kind is PromptKind.GENERATION
    assert compose_prompt(req) == compose_prompt(req)
    same = GenerationPrompt("Sales 2024", "csv", analyze(ROWS), user_prompt="Show sales trends", max_widgets=3)
    assert compose_prompt(same) == compose_prompt(req)


def test_generation_prompt_sections() -> None:
    text = compose_prompt(GenerationPrompt("Sales 2024", "csv", analyze(ROWS), user_prompt="Show sales trends"))

    assert text.startswith(f"{SEPARATOR}\n📊 DATA SOURCE CONTEXT\n{SEPARATOR}\n\n**Source name:** Sales 2024\n")
    assert "**Source type:** csv" in text
    assert "**Total rows:** 3" in text
    assert "**Available numeric columns (1):**\n  - sales" in text
    assert "**Available categorical columns (1):**\n  - region" in text
    assert "**Available date columns (1):**\n  - day" in text
    assert "💬 USER REQUEST" in text
    assert '"Show sales trends"' in text
    assert "AUTOMATIC GENERATION" not in text
    assert "**Number of widgets to generate:** 5 visualizations" in text
    assert "Use ONLY the columns listed above" in text


def test_generation_without_instruction_uses_automatic_section() -> None:
    for user_prompt in (None, "", "   "):
        text = compose_prompt(GenerationPrompt("s", "json", analyze(ROWS), user_prompt=user_prompt, max_widgets=7))
        assert "💬 AUTOMATIC GENERATION" in text
        assert "USER REQUEST" not in text
        assert "**Number of widgets to generate:** 7 visualizations" in text


def test_empty_buckets_show_placeholder() -> None:
    text = compose_prompt(GenerationPrompt("empty", "csv", analyze([])))
    assert text.count(f"\n  {NONE_AVAILABLE}") == 3
    assert "**Available numeric columns (0):**" in text


def test_refinement_prompt_limits_config_fields() -> None:
    req = RefinementPrompt("Sales 2024", "csv", analyze(ROWS), [_widget()], "Make it a pie chart")
    text = compose_prompt(req)

    assert "🎨 CURRENT WIDGETS (1 widget)\n" in text
    assert "**Widget 1: Sales by region**\nType: bar\nDescription: Compare regions\n" in text
    assert '"metricStyles"' in text
    assert '"widgetParams"' in text
    assert "globalFilters" not in text
    assert f"{SEPARATOR}\n💬 USER REQUEST\n{SEPARATOR}\n\nMake it a pie chart\n\n" in text
    assert "Return ALL widgets (modified + unmodified)" in text
    assert "explain it in \"reasoning\"" in text
    assert compose_prompt(req) == text


def test_refinement_prompt_counts_widgets() -> None:
    widgets = [_widget(), _widget(id="e5f6a7b8", name="Total sales", type="kpi", description=None)]
    text = compose_prompt(RefinementPrompt("s", "csv", analyze(ROWS), widgets, "Use green"))
    assert "CURRENT WIDGETS (2 widgets)" in text
    assert "**Widget 2: Total sales**\nType: kpi\nDescription: No description" in text


def test_database_refinement_prompt_keeps_ids() -> None:
    persisted = [
        PersistedWidget(
            id="65f0c0ffee",
            name="Sales by region",
            type="bar",
            config={"metrics": [], "globalFilters": []},
        )
    ]
    req = DatabaseRefinementPrompt("Sales 2024", "csv", analyze(ROWS), persisted, "Stack the bars")
    text = compose_prompt(req)

    assert req.kind is PromptKind.DATABASE_REFINEMENT
    assert "CURRENT WIDGETS (saved in the database)" in text
    assert "**Widget 1 (ID: 65f0c0ffee)**\nName: Sales by region\nType: bar\n" in text
    assert '"globalFilters": []' in text
    assert "KEEP their existing IDs" in text
    assert "🎯 IMPORTANT INSTRUCTIONS" in text
    assert compose_prompt(req) == text
