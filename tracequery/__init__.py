"""Cloud Trace query core: filter translation, trace retrieval and result shaping."""

__version__ = "0.1.0"
