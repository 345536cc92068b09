"""
Network components for http_streaming_core.

This module provides the transport abstractions the client reads
from and writes to, plus an asyncio backend and in-memory mocks.
"""

from .backend import NetworkBackend
from .stream import NetworkStream
from .reader import ByteStreamReader
from .asyncio_backend import AsyncioNetworkBackend, AsyncioNetworkStream
from .mock import MockNetworkBackend, MockNetworkStream
from .utils import create_ssl_context, default_port

__all__ = [
    "NetworkBackend",
    "NetworkStream",
    "ByteStreamReader",
    "AsyncioNetworkBackend",
    "AsyncioNetworkStream",
    "MockNetworkBackend",
    "MockNetworkStream",
    "create_ssl_context",
    "default_port",
]
