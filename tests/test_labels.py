"""Tests for span label helpers."""

import json

import pytest

from tracequery.context.labels import (
    get_service_name,
    get_span_operation_name,
    get_tags,
    get_trace_name,
)
from tracequery.models.trace import Span


class TestGetTraceName:
    """Tests for the summary-table trace name."""

    @pytest.mark.parametrize(
        "span, expected",
        [
            (Span(), ""),
            (Span(name="spanname"), "spanname"),
            (Span(name="spanname", labels={"service": "servicename", "method": "method name"}), "spanname"),
            (Span(name="spanname", labels={"/http/method": "GET"}), "HTTP GET spanname"),
            (Span(name="spanname", labels={"g.co/gae/app/module": "servicename"}), "servicename: spanname"),
            (Span(name="spanname", labels={"http.method": "DELETE"}), "HTTP DELETE spanname"),
            (
                Span(name="spanname", labels={"g.co/gae/app/module": "servicename", "/http/method": "GET"}),
                "servicename: HTTP GET spanname",
            ),
        ],
    )
    def test_trace_name(self, span, expected):
        assert get_trace_name(span) == expected


class TestGetSpanOperationName:
    """Tests for the detail-view operation name."""

    def test_no_labels(self):
        assert get_span_operation_name(Span(name="spanname")) == "spanname"

    def test_unrelated_labels(self):
        span = Span(name="spanname", labels={"service": "servicename", "method": "method name"})
        assert get_span_operation_name(span) == "spanname"

    def test_otel_method_label(self):
        assert get_span_operation_name(Span(name="spanname", labels={"http.method": "GET"})) == "HTTP GET spanname"

    def test_cloud_trace_method_label(self):
        assert get_span_operation_name(Span(name="spanname", labels={"/http/method": "GET"})) == "HTTP GET spanname"

    def test_empty_otel_method_falls_back(self):
        span = Span(name="spanname", labels={"http.method": "", "/http/method": "POST"})
        assert get_span_operation_name(span) == "HTTP POST spanname"

    def test_service_not_included(self):
        span = Span(name="spanname", labels={"service.name": "svc", "http.method": "GET"})
        assert get_span_operation_name(span) == "HTTP GET spanname"


class TestGetServiceName:
    """Tests for service name lookup."""

    def test_prefers_otel_key(self):
        span = Span(labels={"service.name": "otel", "g.co/gae/app/module": "gae"})
        assert get_service_name(span) == "otel"

    def test_empty_otel_key_falls_back_to_gae(self):
        span = Span(labels={"service.name": "", "g.co/gae/app/module": "gae"})
        assert get_service_name(span) == "gae"

    def test_missing(self):
        assert get_service_name(Span()) == ""


class TestGetTags:
    """Tests for splitting labels into service and span tags."""

    def test_no_labels_gives_empty_arrays(self):
        service_tags, span_tags = get_tags(Span())
        assert service_tags == "[]"
        assert span_tags == "[]"

    def test_all_labels(self):
        span = Span(labels={
            "key1": "value1",
            "key2": "value2",
            "service.name": "servicename",
            "service.version": "100",
            "g.co/gae/app/module": "servicename",
            "g.co/gae/app/version": "100",
        })

        service_tags, span_tags = get_tags(span)

        assert json.loads(service_tags) == [
            {"key": "service.name", "value": "servicename"},
            {"key": "service.version", "value": "100"},
            {"key": "g.co/gae/app/module", "value": "servicename"},
            {"key": "g.co/gae/app/version", "value": "100"},
        ]
        assert json.loads(span_tags) == [
            {"key": "key1", "value": "value1"},
            {"key": "key2", "value": "value2"},
        ]

    def test_prefix_must_be_at_start(self):
        service_tags, span_tags = get_tags(Span(labels={"my.service.name": "x"}))
        assert json.loads(service_tags) == []
        assert json.loads(span_tags) == [{"key": "my.service.name", "value": "x"}]
