"""Profile stage.

Turns raw records into a DataAnalysis: per-column type/cardinality/null
presence, the numeric/categorical/date buckets and default metrics.
"""

from .analyzer import analyze, analyze_column, detect_column_type
from .categorize import CATEGORICAL_MAX_UNIQUE, categorize_columns, suggest_buckets, suggest_metrics
from .loader import load_rows

__all__ = [
    "CATEGORICAL_MAX_UNIQUE",
    "analyze",
    "analyze_column",
    "categorize_columns",
    "detect_column_type",
    "load_rows",
    "suggest_buckets",
    "suggest_metrics",
]
