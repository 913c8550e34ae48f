"""
Trace Datasource - wires a query through the core.

    QueryModel
      ├── traceID query → TraceClient.get_trace → create_trace_span_frame
      └── filter query  → get_list_traces_filter → TraceClient.list_traces
                          → create_traces_table_frame

Errors come back on the DataResponse, prefixed with the kind of query that
failed ("trace query: ...", "filter query: ..."), so the presentation layer
can show the text as is.

Usage:
    from tracequery.service.provider import ObservabilityProvider
    from tracequery.routing.datasource import TraceDatasource

    provider = ObservabilityProvider.create_cloud_trace_provider(session)
    datasource = TraceDatasource(provider.trace_client, default_project="my-project")
    responses = datasource.query_data([{"refId": "A", "queryText": "MinLatency:100ms"}])
    datasource.dispose()
"""

import logging
from datetime import datetime, timedelta, timezone

from pydantic import ValidationError

from tracequery.context.frame_builder import create_trace_span_frame, create_traces_table_frame
from tracequery.context.model import Frame
from tracequery.errors import TraceQueryError
from tracequery.filter import get_list_traces_filter
from tracequery.models.query import TimeRange, TraceQuery, TracesQuery
from tracequery.routing.types import (
    QUERY_TYPE_FILTER,
    QUERY_TYPE_TRACE_ID,
    DataResponse,
    HealthResult,
    HealthStatus,
    QueryModel,
)
from tracequery.service.trace.trace_client import TraceClient

# Window used when a filter query arrives without a time range
DEFAULT_LOOKBACK = timedelta(hours=1)


class TraceDatasource:
    """Runs queries against one trace client.

    The default project is a plain value owned by the caller; it is used
    whenever a query does not name a project.
    """

    def __init__(self, client: TraceClient, default_project: str = "", logger: logging.Logger | None = None):
        self.client = client
        self.default_project = default_project
        self.logger = logger or logging.getLogger(__name__)

    # ═══════════════════════════════════════════════════════════════════════
    # QUERIES
    # ═══════════════════════════════════════════════════════════════════════

    def query_data(self, queries: list[QueryModel | dict]) -> dict[str, DataResponse]:
        """Run each query on its own; one failing query never affects another."""
        responses: dict[str, DataResponse] = {}
        for raw in queries:
            if isinstance(raw, QueryModel):
                responses[raw.ref_id] = self.query(raw)
                continue

            try:
                q = QueryModel.model_validate(raw)
            except ValidationError as e:
                ref_id = str(raw.get("refId", "")) if isinstance(raw, dict) else ""
                responses[ref_id] = DataResponse(error=f"invalid query: {e}")
                continue
            responses[q.ref_id] = self.query(q)

        return responses

    def query(self, q: QueryModel) -> DataResponse:
        if q.query_type == QUERY_TYPE_TRACE_ID and q.trace_id.strip():
            try:
                frame = self._get_trace_span_frame(q)
            except TraceQueryError as e:
                return DataResponse(error=f"trace query: {e}")
            return DataResponse(frames=[frame])

        if q.query_type == QUERY_TYPE_FILTER:
            warnings: list[str] = []
            try:
                frame = self._get_traces_table_frame(q, warnings)
            except (TraceQueryError, ValueError) as e:
                return DataResponse(error=f"filter query: {e}")
            return DataResponse(frames=[frame], warnings=warnings)

        return DataResponse()

    def _project(self, q: QueryModel) -> str:
        return q.project_id or self.default_project

    def _get_trace_span_frame(self, q: QueryModel) -> Frame:
        trace = self.client.get_trace(TraceQuery(project_id=self._project(q), trace_id=q.trace_id.strip()))
        return create_trace_span_frame(trace, self.logger)

    def _get_traces_table_frame(self, q: QueryModel, warnings: list[str]) -> Frame:
        # Malformed filters fail here, before any remote call
        native_filter = get_list_traces_filter(q.query_text)

        time_range = q.time_range
        if time_range is None:
            now = datetime.now(timezone.utc)
            time_range = TimeRange(from_=now - DEFAULT_LOOKBACK, to=now)

        traces = self.client.list_traces(
            TracesQuery(
                project_id=self._project(q),
                filter=native_filter,
                limit=q.max_data_points,
                time_range=time_range,
            ),
            warnings=warnings,
        )
        return create_traces_table_frame(traces, self.logger)

    # ═══════════════════════════════════════════════════════════════════════
    # RESOURCES / HEALTH
    # ═══════════════════════════════════════════════════════════════════════

    def list_projects(self) -> list[str]:
        """Project IDs for the project picker; failures give an empty list."""
        try:
            return self.client.list_projects()
        except TraceQueryError as e:
            self.logger.warning("problem listing projects: %s", e)
            return []

    def check_health(self, project_id: str | None = None) -> HealthResult:
        project = project_id or self.default_project
        try:
            self.client.test_connection(project)
        except TraceQueryError as e:
            return HealthResult(status=HealthStatus.ERROR, message=f"failed to run test query: {e}")

        return HealthResult(
            status=HealthStatus.OK,
            message=f"Successfully queried traces from GCP project {project}",
        )

    def dispose(self) -> None:
        """Release the client connection; called once when the datasource is torn down."""
        try:
            self.client.close()
        except Exception as e:
            self.logger.error("failed closing client: %s", e)
