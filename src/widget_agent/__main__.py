"""Run the widget agent CLI as a module.

    python -m widget_agent analyze --data sales.csv
    python -m widget_agent prompt --data sales.csv --prompt "Revenue by region"
    python -m widget_agent generate --data sales.csv --max-widgets 3
    python -m widget_agent refine --data sales.csv --widgets widgets.json --prompt "Use a pie chart"

`analyze` and `prompt` work offline. `generate` and `refine` need OPENAI_API_KEY.
"""

from __future__ import annotations

from .cli import app


def main() -> None:
    app()


if __name__ == "__main__":
    main()
