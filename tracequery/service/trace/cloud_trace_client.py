import logging
import time
from datetime import datetime, timedelta, timezone

import requests

from tracequery.config import (
    CLOUD_TRACE_API_URL,
    REQUEST_TIMEOUT_SECONDS,
    RESOURCE_MANAGER_API_URL,
    USER_AGENT,
)
from tracequery.errors import ConnectionTimeoutError, NoEntriesError, TraceClientError
from tracequery.models.query import TraceQuery, TracesQuery
from tracequery.models.trace import Trace
from tracequery.service.trace.trace_client import TraceClient

logger = logging.getLogger(__name__)

# Largest page the Cloud Trace API will serve
MAX_PAGE_SIZE = 1000

TEST_CONNECTION_WINDOW = timedelta(days=30)
TEST_CONNECTION_TIMEOUT_SECONDS = 60.0

DELETION_STATES = frozenset({"DELETE_REQUESTED", "DELETE_IN_PROGRESS"})

# requests/pydantic failures that mean "the remote call did not give us data"
REMOTE_ERRORS = (requests.RequestException, ValueError)


def _list_field(page: dict, key: str) -> list:
    """A list-valued field of a response page; missing or null is empty."""
    value = page.get(key) or []
    if not isinstance(value, list):
        raise ValueError(f"unexpected {key!r} in response: {type(value).__name__}")
    return value


def to_rfc3339(value: datetime) -> str:
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc).isoformat().replace("+00:00", "Z")


class CloudTraceClient(TraceClient):
    """Cloud Trace v1 REST client.

    The session is the one long-lived resource: it is shared by every call
    and released by close(). Authentication is the session's business; pass
    an already authorised one (e.g. google.auth's AuthorizedSession).
    """

    def __init__(
        self,
        session: requests.Session | None = None,
        api_url: str = CLOUD_TRACE_API_URL,
        resource_manager_url: str = RESOURCE_MANAGER_API_URL,
        timeout: float = REQUEST_TIMEOUT_SECONDS,
        log: logging.Logger | None = None,
    ):
        if session is None:
            session = requests.Session()
            session.headers["User-Agent"] = USER_AGENT
        self.session = session
        self.api_url = api_url.rstrip("/")
        self.resource_manager_url = resource_manager_url.rstrip("/")
        self.timeout = timeout
        self.logger = log or logger
        self._closed = False

    def _get(self, url: str, params: dict | None = None, timeout: float | None = None) -> dict:
        response = self.session.get(url, params=dict(params or {}), timeout=timeout or self.timeout)
        response.raise_for_status()
        data = response.json() or {}
        if not isinstance(data, dict):
            raise ValueError(f"unexpected response body: {type(data).__name__}")
        return data

    def _traces_url(self, project_id: str) -> str:
        return f"{self.api_url}/projects/{project_id}/traces"

    def list_traces(
        self,
        query: TracesQuery,
        timeout: float | None = None,
        warnings: list[str] | None = None,
    ) -> list[Trace]:
        """Page through matching traces, newest first, stopping at query.limit.

        A failure on the first page raises. A failure on a later page ends
        pagination and the traces gathered so far are returned; the error is
        only logged and, if given, appended to `warnings`.
        """
        params = {
            "startTime": to_rfc3339(query.time_range.from_),
            "endTime": to_rfc3339(query.time_range.to),
            "orderBy": "start desc",
            "pageSize": min(query.limit, MAX_PAGE_SIZE),
            "view": "ROOTSPAN",
        }
        if query.filter:
            params["filter"] = query.filter

        url = self._traces_url(query.project_id)
        entries: list[Trace] = []
        pages = 0
        start = time.monotonic()
        try:
            while True:
                try:
                    page = self._get(url, params, timeout)
                    traces = [Trace.model_validate(t) for t in _list_field(page, "traces")]
                except REMOTE_ERRORS as e:
                    if pages == 0:
                        raise TraceClientError(f"list traces: {e}") from e
                    self.logger.error("error getting page %d: %s", pages + 1, e)
                    if warnings is not None:
                        warnings.append(f"list traces: page {pages + 1}: {e}")
                    break

                pages += 1
                entries.extend(traces[:query.limit - len(entries)])

                page_token = page.get("nextPageToken")
                if len(entries) >= query.limit or not page_token:
                    break
                params["pageToken"] = page_token
        finally:
            self.logger.info(
                "Finished listing traces: pages=%d traces=%d duration=%.3fs",
                pages, len(entries), time.monotonic() - start,
            )

        return entries

    def get_trace(self, query: TraceQuery, timeout: float | None = None) -> Trace:
        start = time.monotonic()
        try:
            data = self._get(f"{self._traces_url(query.project_id)}/{query.trace_id}", timeout=timeout)
            if not data:
                raise TraceClientError(f"get trace {query.trace_id}: empty response")
            return Trace.model_validate(data)
        except REMOTE_ERRORS as e:
            raise TraceClientError(f"get trace {query.trace_id}: {e}") from e
        finally:
            self.logger.info(
                "Finished getting trace: %s duration=%.3fs",
                query.trace_id, time.monotonic() - start,
            )

    def list_projects(self, timeout: float | None = None) -> list[str]:
        project_ids: list[str] = []
        params: dict = {}
        while True:
            try:
                page = self._get(f"{self.resource_manager_url}/projects", params, timeout)
                projects = _list_field(page, "projects")
                for project in projects:
                    if not isinstance(project, dict) or not project.get("projectId"):
                        raise ValueError(f"malformed project entry: {project!r}")
            except REMOTE_ERRORS as e:
                raise TraceClientError(f"list projects: {e}") from e

            for project in projects:
                if project.get("lifecycleState") in DELETION_STATES:
                    continue
                project_ids.append(project["projectId"])

            page_token = page.get("nextPageToken")
            if not page_token:
                return project_ids
            params["pageToken"] = page_token

    def test_connection(self, project_id: str) -> None:
        """Ask for one trace from the last 30 days.

        Runs under its own one-minute bound whatever deadline the caller has.

        Raises:
            ConnectionTimeoutError: the request timed out
            NoEntriesError:         the project has no recent traces
            TraceClientError:       any other failure
        """
        params = {
            "pageSize": 1,
            "startTime": to_rfc3339(datetime.now(timezone.utc) - TEST_CONNECTION_WINDOW),
        }
        start = time.monotonic()
        try:
            page = self._get(self._traces_url(project_id), params, TEST_CONNECTION_TIMEOUT_SECONDS)
        except requests.Timeout as e:
            raise ConnectionTimeoutError("list entries: timeout") from e
        except REMOTE_ERRORS as e:
            raise TraceClientError(f"list entries: {e}") from e
        finally:
            self.logger.info("Finished testConnection duration=%.3fs", time.monotonic() - start)

        if not page.get("traces"):
            raise NoEntriesError("no entries")

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        self.session.close()
