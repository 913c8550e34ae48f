"""Pytest configuration and fixtures."""

import logging
from unittest.mock import Mock

import pytest
import requests


@pytest.fixture
def make_response():
    """Factory for fake requests.Response objects carrying a JSON payload."""

    def _make(payload=None, status_error: Exception | None = None):
        response = Mock()
        response.json.return_value = payload
        if status_error is not None:
            response.raise_for_status.side_effect = status_error
        else:
            response.raise_for_status.return_value = None
        return response

    return _make


@pytest.fixture
def session():
    """Mock HTTP session standing in for an authorised requests.Session."""
    return Mock(spec=requests.Session)


@pytest.fixture
def client(session):
    """CloudTraceClient over the mock session."""
    from tracequery.service.trace.cloud_trace_client import CloudTraceClient

    return CloudTraceClient(session=session, api_url="https://trace.test/v1",
                            resource_manager_url="https://rm.test/v1")


@pytest.fixture
def trace_payload():
    """Factory for Cloud Trace JSON traces."""

    def _make(trace_id: str, spans: list[dict] | None = None, project_id: str = "testProject"):
        return {"projectId": project_id, "traceId": trace_id, "spans": spans or []}

    return _make


@pytest.fixture
def test_logger():
    """Logger handed to components under test."""
    logger = logging.getLogger("tracequery.test")
    logger.setLevel(logging.DEBUG)
    return logger
