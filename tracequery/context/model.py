from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field


class SpanRow(BaseModel):
    """One span of the detail (timeline) view.

    Aliases are the field names the trace view binds to.
    """
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    trace_id: str = Field(alias="traceID")
    span_id: str = Field(alias="spanID")
    parent_span_id: str = Field(alias="parentSpanID")
    service_name: str = Field(alias="serviceName")
    operation_name: str = Field(alias="operationName")
    service_tags: str = Field(default="[]", alias="serviceTags")  # JSON array
    span_tags: str = Field(default="[]", alias="tags")  # JSON array
    start_time: datetime = Field(alias="startTime")
    duration_millis: float = Field(alias="duration")

    def to_dict(self) -> dict:
        return self.model_dump(by_alias=True)


class TraceSummaryRow(BaseModel):
    """One trace of the summary table, derived from its root span."""
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    trace_id: str = Field(alias="Trace ID")
    trace_name: str = Field(alias="Trace name")
    start_time: datetime = Field(alias="Start time")
    latency_millis: int = Field(alias="Latency")

    def to_dict(self) -> dict:
        return self.model_dump(by_alias=True)


class Frame(BaseModel):
    name: str
    preferred_visualization: Literal["trace", "table"]
    rows: list[SpanRow | TraceSummaryRow] = Field(default_factory=list)
    field_units: dict[str, str] = Field(default_factory=dict)

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "preferred_visualization": self.preferred_visualization,
            "field_units": dict(self.field_units),
            "rows": [row.to_dict() for row in self.rows],
        }
