from __future__ import annotations

from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class _WireModel(BaseModel):
    """Base for models exchanged with callers and the generator.

    Python attributes are snake_case; the JSON form uses the camelCase names
    of the payload contract (``rowCount``, ``dataSourceId`` ...).
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def to_json_obj(self) -> dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True)


class ColumnType(str, Enum):
    STRING = "string"
    NUMBER = "number"
    DATE = "date"
    BOOLEAN = "boolean"


class ColumnProfile(_WireModel):
    """Inferred type, cardinality, samples and null presence of one column."""

    name: str
    type: ColumnType
    unique_values: int = Field(ge=0)
    sample_values: list[Any] = Field(default_factory=list, max_length=5)
    has_nulls: bool = False


class SuggestedMetric(_WireModel):
    field: str
    aggregation: str = "sum"
    reasoning: str


class DataAnalysis(_WireModel):
    """
    Statistical profile of a dataset.

    numeric_columns / categorical_columns / date_columns are pairwise disjoint
    and name columns present in `columns`. There is one suggested metric per
    numeric column.
    """

    columns: list[ColumnProfile] = Field(default_factory=list)
    row_count: int = Field(default=0, ge=0)
    numeric_columns: list[str] = Field(default_factory=list)
    categorical_columns: list[str] = Field(default_factory=list)
    date_columns: list[str] = Field(default_factory=list)
    suggested_metrics: list[SuggestedMetric] = Field(default_factory=list)
    suggested_buckets: list[str] = Field(default_factory=list)

    def column_names(self) -> list[str]:
        return [c.name for c in self.columns]


class GeneratedWidget(_WireModel):
    """
    A proposed dashboard widget.

    id: ephemeral, client-scoped identifier (or the persisted id on database refinement)
    config: opaque map holding metrics/buckets/globalFilters/metricStyles/widgetParams
    """

    id: str
    name: str
    description: Optional[str] = None
    type: str
    config: dict[str, Any] = Field(default_factory=dict)
    data_source_id: str
    reasoning: str = "Generated automatically"
    confidence: float = Field(default=0.8, ge=0.0, le=1.0)


class PersistedWidget(_WireModel):
    """A widget that already exists in the caller's store."""

    id: str
    name: str
    type: str
    description: Optional[str] = None
    config: dict[str, Any] = Field(default_factory=dict)


class SummaryColumn(_WireModel):
    name: str
    type: ColumnType
    unique_values: int
    sample_values: list[Any] = Field(default_factory=list)


class DataSourceSummary(_WireModel):
    name: str
    type: str
    row_count: int
    columns: list[SummaryColumn] = Field(default_factory=list)


class SourceRecord(_WireModel):
    """What the caller-supplied lookup resolves a data source id to."""

    id: str
    name: str
    type: str
    rows: list[dict[str, Any]] = Field(default_factory=list)


class GenerationRequest(_WireModel):
    data_source_id: str
    user_prompt: Optional[str] = None
    max_widgets: int = Field(default=5, ge=1, le=10)


class RefinementRequest(_WireModel):
    data_source_id: str
    current_widgets: list[GeneratedWidget] = Field(default_factory=list)
    refinement_prompt: str


class DatabaseRefinementRequest(_WireModel):
    data_source_id: str
    widgets: list[PersistedWidget] = Field(default_factory=list)
    refinement_prompt: str


class GenerationResult(_WireModel):
    widgets: list[GeneratedWidget] = Field(default_factory=list)
    total_generated: int = 0
    data_source_summary: DataSourceSummary
    suggestions: list[str] = Field(default_factory=list)
    conversation_title: Optional[str] = None
    ai_message: Optional[str] = None


class RefinementResult(GenerationResult):
    """Refinement returns the full widget set, modified and unmodified."""
