import re
from datetime import datetime, timedelta, timezone

from pydantic import BaseModel, ConfigDict, Field, field_validator

EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)

# Cloud Trace reports nanoseconds; datetime only holds microseconds
_EXTRA_FRACTION = re.compile(r"(\.\d{6})\d+")


def _coerce_timestamp(value):
    if isinstance(value, str):
        return _EXTRA_FRACTION.sub(r"\1", value)
    return value


def _as_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def epoch_micros(value: datetime) -> int:
    return (value - EPOCH) // timedelta(microseconds=1)


def epoch_millis(value: datetime) -> int:
    return epoch_micros(value) // 1000


class Span(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    span_id: str = Field(default="0", alias="spanId")
    # The API reports a zero parent for root spans
    parent_span_id: str = Field(default="0", alias="parentSpanId")
    kind: str = "SPAN_KIND_UNSPECIFIED"
    name: str = ""
    start_time: datetime = Field(default=EPOCH, alias="startTime")
    end_time: datetime = Field(default=EPOCH, alias="endTime")
    labels: dict[str, str] = Field(default_factory=dict)

    @field_validator("span_id", "parent_span_id", mode="before")
    @classmethod
    def _id_to_str(cls, value):
        return str(value) if value is not None else "0"

    @field_validator("start_time", "end_time", mode="before")
    @classmethod
    def _trim_fraction(cls, value):
        return _coerce_timestamp(value)

    @field_validator("start_time", "end_time")
    @classmethod
    def _utc(cls, value: datetime) -> datetime:
        return _as_utc(value)

    @property
    def duration_micros(self) -> int:
        # end >= start is not enforced, so this can be negative
        return epoch_micros(self.end_time) - epoch_micros(self.start_time)


class Trace(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    trace_id: str = Field(alias="traceId")
    project_id: str = Field(default="", alias="projectId")
    spans: list[Span] = Field(default_factory=list)

    @property
    def root_span(self) -> Span | None:
        """First span in fetch order, used as the trace's entry point."""
        return self.spans[0] if self.spans else None
