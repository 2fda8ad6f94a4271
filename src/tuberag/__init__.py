"""tube-rag — hybrid transcript retrieval for video and channel chat."""

__version__ = "0.1.0"
