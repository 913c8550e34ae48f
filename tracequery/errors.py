"""
Error taxonomy for trace queries.

    TraceQueryError
    ├── FilterError             malformed user filter, raised before any remote call
    └── TraceClientError        remote call failed; message carries the operation
        ├── ConnectionTimeoutError
        └── NoEntriesError
"""


class TraceQueryError(Exception):
    """Base class for every error surfaced to the query caller."""


class FilterError(TraceQueryError):
    """A filter token is not in key:value (or LABEL:key:value) form."""


class TraceClientError(TraceQueryError):
    """The trace service could not be queried."""


class ConnectionTimeoutError(TraceClientError):
    pass


class NoEntriesError(TraceClientError):
    pass
