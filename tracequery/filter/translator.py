"""
Filter Translator - turns operator query text into a Cloud Trace filter.

WHAT THIS DOES:
Operators type friendly filters such as

    Service:checkout MinLatency:250ms LABEL:region:"us east"

and the Cloud Trace API expects its own syntax:

    g.co/gae/app/module:checkout latency:250ms region:"us east"

Each whitespace-separated token is a key:value pair. Quoted values may hold
spaces and \\" escapes. A leading + (exact match) or ^ (prefix match) on the
value belongs to the key in the native syntax, so it is moved there.

Any malformed token aborts the whole translation.
"""

import re

from tracequery.context.labels import (
    GAE_SERVICE_KEY,
    GAE_SERVICE_VERSION_KEY,
    HTTP_STATUS_CODE_KEY,
)
from tracequery.errors import FilterError

# Individual filters within query text; quoted spans stay whole
TOKEN_PATTERN = re.compile(r'(?:[^\s"]+|"(?:\\"|[^"])*")+')

LABEL_KEY = "label"

# Friendly key → Cloud Trace key. Keys not listed pass through unchanged.
KEY_ALIASES: dict[str, str] = {
    "RootSpan": "root",
    "SpanName": "span",
    "HasLabel": "label",
    "MinLatency": "latency",
    "URL": "url",
    "Method": "method",
    # Matches the Cloud Trace UI filter, which ignores "service.version"
    "Version": GAE_SERVICE_VERSION_KEY,
    # Matches the Cloud Trace UI filter, which ignores "service.name"
    "Service": GAE_SERVICE_KEY,
    "Status": HTTP_STATUS_CODE_KEY,
}

EXACT_MATCH = "+"
PREFIX_MATCH = "^"


def tokenize(query_text: str) -> list[str]:
    """Split query text into filter tokens."""
    return TOKEN_PATTERN.findall(query_text)


def get_filter_key_value(token: str) -> tuple[str, str]:
    """Convert one user filter token into a native (key, value) pair.

    Raises:
        FilterError: token is not key:value, or LABEL:key:value is incomplete
    """
    key, sep, value = token.partition(":")
    if not sep:
        raise FilterError(f"bad filter [{token}]. Must be in form [key]:[value]")

    # Generic label filters come in as LABEL:[key]:[value]
    if key.lower() == LABEL_KEY:
        key, sep, value = value.partition(":")
        if not sep:
            raise FilterError(f"bad filter [{token}]. Must be in form LABEL:[key]:[value]")

    key = KEY_ALIASES.get(key, key)

    # A lone "+" or "^" is kept as the value itself
    if len(value) < 2:
        return key, value

    if value[:2] in (EXACT_MATCH + PREFIX_MATCH, PREFIX_MATCH + EXACT_MATCH):
        return EXACT_MATCH + PREFIX_MATCH + key, value[2:]
    if value[0] in (EXACT_MATCH, PREFIX_MATCH):
        return value[0] + key, value[1:]

    return key, value


def get_list_traces_filter(query_text: str) -> str:
    """Translate raw query text into the filter string Cloud Trace expects.

    Whitespace-only input gives an empty filter.
    """
    filters = []
    for token in tokenize(query_text):
        key, value = get_filter_key_value(token)
        filters.append(f"{key}:{value}")

    return " ".join(filters)
