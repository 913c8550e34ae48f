import logging

import requests

from tracequery.config import CLOUD_TRACE_API_URL, RESOURCE_MANAGER_API_URL
from tracequery.service.trace.cloud_trace_client import CloudTraceClient
from tracequery.service.trace.trace_client import TraceClient


class ObservabilityProvider:
    def __init__(self, trace_client: TraceClient):
        self.trace_client = trace_client

    @classmethod
    def create_cloud_trace_provider(
        cls,
        session: requests.Session | None = None,
        api_url: str = CLOUD_TRACE_API_URL,
        resource_manager_url: str = RESOURCE_MANAGER_API_URL,
        log: logging.Logger | None = None,
    ):
        return cls(
            trace_client=CloudTraceClient(
                session=session,
                api_url=api_url,
                resource_manager_url=resource_manager_url,
                log=log,
            )
        )

    def close(self) -> None:
        self.trace_client.close()
