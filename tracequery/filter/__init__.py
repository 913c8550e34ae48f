from tracequery.filter.translator import (
    KEY_ALIASES,
    get_filter_key_value,
    get_list_traces_filter,
    tokenize,
)

__all__ = [
    "KEY_ALIASES",
    "get_filter_key_value",
    "get_list_traces_filter",
    "tokenize",
]
