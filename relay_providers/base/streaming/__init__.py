"""Streaming package for provider layer.

Exposes the stream pipe (reader/writer pair with fan-out copies), the
background producer that feeds it from a native SDK stream, and the metrics
collected along the way.
"""

from .stream_errors import EndOfStream, NoValue
from .stream_reader import StreamReader, pipe
from .stream_writer import StreamWriter
from .streaming_metrics import StreamMetrics, apply_token_usage, build_token_usage
from .producer_helpers import finalize_stream, register_stream_cleanup, stream_prefix
from .stream_producer import Converter, StreamProducer

__all__ = [
    "EndOfStream",
    "NoValue",
    "StreamReader",
    "StreamWriter",
    "pipe",
    "StreamMetrics",
    "apply_token_usage",
    "build_token_usage",
    "finalize_stream",
    "register_stream_cleanup",
    "stream_prefix",
    "Converter",
    "StreamProducer",
]
