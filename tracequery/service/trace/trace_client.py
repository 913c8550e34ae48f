from abc import ABC, abstractmethod
from tracequery.models.query import TraceQuery, TracesQuery
from tracequery.models.trace import Trace


class TraceClient(ABC):
    @abstractmethod
    def list_traces(
        self,
        query: TracesQuery,
        timeout: float | None = None,
        warnings: list[str] | None = None,
    ) -> list[Trace]:
        """Fetch traces matching the query filter, up to query.limit."""
        pass

    @abstractmethod
    def get_trace(self, query: TraceQuery, timeout: float | None = None) -> Trace:
        """Fetch a single trace with all spans."""
        pass

    @abstractmethod
    def list_projects(self, timeout: float | None = None) -> list[str]:
        """Return the IDs of all visible projects that are not being deleted."""
        pass

    @abstractmethod
    def test_connection(self, project_id: str) -> None:
        """Query for any recent trace in the project; raise if none can be read."""
        pass

    @abstractmethod
    def close(self) -> None:
        """Release the underlying connection."""
        pass

    def __enter__(self):
        return self

    def __exit__(self, *exc_info):
        self.close()
