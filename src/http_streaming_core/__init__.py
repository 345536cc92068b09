"""
http_streaming_core - HTTP/1.1 client for long-lived streaming responses

A minimal asyncio HTTP/1.1 client that reads chunked and gzip
compressed streams (firehose style APIs) straight off a byte stream,
and can be interrupted from another task or thread.
"""

__version__ = "0.1.0"


# Import main components for easy access
from .http_primitives import (
    Request,
    RequestOptions,
    ResponseHead,
    TransferMode,
    URLComponents,
    canonicalize_header_name,
)
from .client import StreamingClient, get, post, put, request
from .cancellation import CancellationToken
from .chunked import ChunkedDecoder, ChunkState
from .decoders import GzipStreamDecoder, decode_gzip_member
from .exceptions import (
    HTTPCoreError,
    TransportError,
    ProtocolError,
    InvalidContentType,
    HttpStatusError,
    DecodeError,
    StreamError,
)
from .streams import (
    ChunkSink,
    BufferSink,
    CallbackSink,
    Outcome,
    StreamResult,
)

__all__ = [
    "Request",
    "RequestOptions",
    "ResponseHead",
    "TransferMode",
    "URLComponents",
    "canonicalize_header_name",
    "StreamingClient",
    "get",
    "post",
    "put",
    "request",
    "CancellationToken",
    "ChunkedDecoder",
    "ChunkState",
    "GzipStreamDecoder",
    "decode_gzip_member",
    "HTTPCoreError",
    "TransportError",
    "ProtocolError",
    "InvalidContentType",
    "HttpStatusError",
    "DecodeError",
    "StreamError",
    "ChunkSink",
    "BufferSink",
    "CallbackSink",
    "Outcome",
    "StreamResult",
]
