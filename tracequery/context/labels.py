# tracequery/context/labels.py
"""Label lookups that turn a raw span into display names and tags."""

import json

from tracequery.models.trace import Span

SERVICE_PREFIX = "service."
GAE_SERVICE_PREFIX = "g.co/gae/app/"
OTEL_SERVICE_KEY = "service.name"
GAE_SERVICE_KEY = "g.co/gae/app/module"
GAE_SERVICE_VERSION_KEY = "g.co/gae/app/version"
OTEL_METHOD_KEY = "http.method"
CLOUD_TRACE_METHOD_KEY = "/http/method"
HTTP_STATUS_CODE_KEY = "/http/status_code"


def _first_label(span: Span, *keys: str) -> str:
    # Missing and empty values are treated the same
    for key in keys:
        value = span.labels.get(key)
        if value:
            return value
    return ""


def get_service_name(span: Span) -> str:
    return _first_label(span, OTEL_SERVICE_KEY, GAE_SERVICE_KEY)


def get_http_method(span: Span) -> str:
    return _first_label(span, OTEL_METHOD_KEY, CLOUD_TRACE_METHOD_KEY)


def get_span_operation_name(span: Span) -> str:
    """Span name, prefixed with "HTTP <method> " when the span has a method."""
    method = get_http_method(span)
    if method:
        return f"HTTP {method} {span.name}"
    return span.name


def get_trace_name(span: Span) -> str:
    """Descriptive name for a trace: "<service>: HTTP <method> <name>".

    Service and method parts are left out when the span lacks them.
    """
    service = get_service_name(span)
    operation = get_span_operation_name(span)
    if service:
        return f"{service}: {operation}"
    return operation


def is_service_tag(key: str) -> bool:
    return key.startswith(SERVICE_PREFIX) or key.startswith(GAE_SERVICE_PREFIX)


def get_tags(span: Span) -> tuple[str, str]:
    """Split span labels into service tags and span tags.

    Returns:
        (service_tags, span_tags), each a JSON array of {"key", "value"}
        objects. An empty set is "[]".
    """
    service_tags = []
    span_tags = []
    for key, value in span.labels.items():
        tag = {"key": key, "value": value}
        if is_service_tag(key):
            service_tags.append(tag)
        else:
            span_tags.append(tag)

    return json.dumps(service_tags), json.dumps(span_tags)
