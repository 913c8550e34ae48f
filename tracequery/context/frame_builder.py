"""
Result Shaper - raw traces to display rows.

Two independent, stateless views:
  - shape_spans():       one SpanRow per span of a single trace (timeline)
  - shape_trace_table(): one TraceSummaryRow per trace, from its root span

Bad input never fails the batch: a span whose tags cannot be extracted and a
trace without spans are logged and skipped.
"""

import logging

from tracequery.context.labels import (
    get_service_name,
    get_span_operation_name,
    get_tags,
    get_trace_name,
)
from tracequery.context.model import Frame, SpanRow, TraceSummaryRow
from tracequery.models.trace import Trace, epoch_millis

TRACE_TABLE_FRAME = "traceTable"


def shape_spans(trace: Trace, logger: logging.Logger | None = None) -> list[SpanRow]:
    """Build the detail rows for every span of a trace, in input order."""
    log = logger or logging.getLogger(__name__)
    rows: list[SpanRow] = []

    for span in trace.spans:
        # Guard only: labels are validated str->str, so encoding should not fail
        try:
            service_tags, span_tags = get_tags(span)
        except (TypeError, ValueError) as e:
            log.warning("failed getting span tags for span %s: %s", span.span_id, e)
            continue

        rows.append(SpanRow(
            trace_id=trace.trace_id,
            span_id=span.span_id,
            parent_span_id=span.parent_span_id,
            service_name=get_service_name(span),
            operation_name=get_span_operation_name(span),
            service_tags=service_tags,
            span_tags=span_tags,
            start_time=span.start_time,
            duration_millis=span.duration_micros / 1000,
        ))

    return rows


def shape_trace_table(traces: list[Trace], logger: logging.Logger | None = None) -> list[TraceSummaryRow]:
    """Build one summary row per trace, using the first span as the root."""
    log = logger or logging.getLogger(__name__)
    rows: list[TraceSummaryRow] = []

    for trace in traces:
        root = trace.root_span
        if root is None:
            log.warning("failed getting trace spans for trace %s", trace.trace_id)
            continue

        rows.append(TraceSummaryRow(
            trace_id=trace.trace_id,
            trace_name=get_trace_name(root),
            start_time=root.start_time,
            latency_millis=epoch_millis(root.end_time) - epoch_millis(root.start_time),
        ))

    return rows


def create_trace_span_frame(trace: Trace, logger: logging.Logger | None = None) -> Frame:
    return Frame(
        name=trace.trace_id,
        preferred_visualization="trace",
        rows=shape_spans(trace, logger),
    )


def create_traces_table_frame(traces: list[Trace], logger: logging.Logger | None = None) -> Frame:
    return Frame(
        name=TRACE_TABLE_FRAME,
        preferred_visualization="table",
        rows=shape_trace_table(traces, logger),
        field_units={"Latency": "ms"},
    )
