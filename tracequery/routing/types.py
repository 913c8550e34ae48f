from enum import Enum
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field

from tracequery.context.model import Frame
from tracequery.models.query import TimeRange

QUERY_TYPE_FILTER = ""       # list traces matching query_text → table
QUERY_TYPE_TRACE_ID = "traceID"  # one trace by ID → span timeline

DEFAULT_MAX_DATA_POINTS = 100


class HealthStatus(str, Enum):
    OK = 'ok'
    ERROR = 'error'


#Request Models
class QueryModel(BaseModel):
    """One query from the presentation layer.

    Accepts the JSON field names the front end sends (refId, queryText, ...).
    """
    model_config = ConfigDict(populate_by_name=True)

    ref_id: str = Field(default="", alias="refId")
    query_type: str = Field(default=QUERY_TYPE_FILTER, alias="queryType")
    trace_id: str = Field(default="", alias="traceId")
    query_text: str = Field(default="", alias="queryText")
    project_id: str = Field(default="", alias="projectId")
    max_data_points: int = Field(default=DEFAULT_MAX_DATA_POINTS, alias="MaxDataPoints")
    time_range: Optional[TimeRange] = Field(default=None, alias="timeRange")


#Response Models
class DataResponse(BaseModel):
    frames: list[Frame] = Field(default_factory=list)
    error: Optional[str] = None
    # Soft failures, e.g. a page that failed after earlier pages succeeded
    warnings: list[str] = Field(default_factory=list)


class HealthResult(BaseModel):
    status: HealthStatus
    message: str
