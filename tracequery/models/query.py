from datetime import datetime, timezone

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


class TimeRange(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    from_: datetime = Field(alias="from")
    to: datetime

    @field_validator("from_", "to")
    @classmethod
    def _utc(cls, value: datetime) -> datetime:
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value

    @model_validator(mode="after")
    def _ordered(self) -> "TimeRange":
        if self.from_ > self.to:
            raise ValueError("time range start must not be after its end")
        return self


class TracesQuery(BaseModel):
    """Bounded listing request: everything needed to ask for traces."""
    model_config = ConfigDict(frozen=True)

    project_id: str
    filter: str = ""
    limit: int = Field(gt=0)
    time_range: TimeRange


class TraceQuery(BaseModel):
    """Request for exactly one trace."""
    model_config = ConfigDict(frozen=True)

    project_id: str
    trace_id: str
