"""
Mock network implementations for testing.

This module provides mock implementations of NetworkStream and NetworkBackend
that can be used for unit testing without requiring actual network connections.
"""

import asyncio
import ssl
from typing import Any, Dict, List, Optional, Tuple

from .backend import NetworkBackend
from .stream import NetworkStream


class MockNetworkStream(NetworkStream):
    """
    Mock network stream for testing.

    This implementation simulates a network stream in memory. With
    ``eof=False`` a read on exhausted data blocks until more data is
    added, the EOF is fed, or the stream is aborted, which is how a
    long-lived streaming response behaves on a real socket.
    """

    def __init__(
        self,
        data: bytes = b"",
        chunk_size: Optional[int] = None,
        eof: bool = True,
    ):
        """
        Initialize the mock stream.

        Args:
            data: Initial data to be available for reading.
            chunk_size: If set, no read returns more than this many bytes.
            eof: Whether the end of data is the end of the stream.
        """
        self._data = data
        self._position = 0
        self._chunk_size = chunk_size
        self._eof = eof
        self._closed = False
        self._data_ready: Optional[asyncio.Event] = None
        self._extra_info: Dict[str, Any] = {}
        self._write_buffer: List[bytes] = []
        self.close_count = 0
        self.read_count = 0

    async def read(self, max_bytes: Optional[int] = None) -> bytes:
        """
        Read data from the mock stream.

        Raises:
            RuntimeError: If the stream is closed, including while waiting.
        """
        while True:
            if self._closed:
                raise RuntimeError("Stream is closed")
            if self._position < len(self._data) or self._eof:
                break
            self._wait_event().clear()
            await self._wait_event().wait()

        self.read_count += 1
        if self._position >= len(self._data):
            return b""

        limit = len(self._data) - self._position
        if max_bytes is not None:
            limit = min(limit, max_bytes)
        if self._chunk_size is not None:
            limit = min(limit, self._chunk_size)

        result = self._data[self._position:self._position + limit]
        self._position += limit
        return result

    async def write(self, data: bytes) -> None:
        """
        Write data to the mock stream.

        Raises:
            RuntimeError: If the stream is closed.
        """
        if self._closed:
            raise RuntimeError("Stream is closed")

        self._write_buffer.append(data)

    async def aclose(self) -> None:
        """Close the mock stream."""
        if not self._closed:
            self.close_count += 1
        self._closed = True
        self._wake()

    def abort(self) -> None:
        """Abort the mock stream, waking any blocked reader."""
        if not self._closed:
            self.close_count += 1
        self._closed = True
        self._wake()

    def get_extra_info(self, name: str) -> Optional[Any]:
        return self._extra_info.get(name)

    @property
    def is_closed(self) -> bool:
        """Check if the mock stream is closed."""
        return self._closed

    @property
    def written_data(self) -> bytes:
        """Get all data that was written to the stream."""
        return b"".join(self._write_buffer)

    @property
    def remaining(self) -> bytes:
        """Data that has not been read yet."""
        return self._data[self._position:]

    def set_extra_info(self, name: str, value: Any) -> None:
        self._extra_info[name] = value

    def add_data(self, data: bytes) -> None:
        """
        Add data to be available for reading.

        Args:
            data: The data to add.
        """
        self._data += data
        self._wake()

    def feed_eof(self) -> None:
        """Mark the end of the stream once the current data is read."""
        self._eof = True
        self._wake()

    def _wait_event(self) -> asyncio.Event:
        if self._data_ready is None:
            self._data_ready = asyncio.Event()
        return self._data_ready

    def _wake(self) -> None:
        if self._data_ready is not None:
            self._data_ready.set()


class MockNetworkBackend(NetworkBackend):
    """
    Mock network backend for testing.

    Responses are registered per (host, port) before the client
    connects; each connect hands out a fresh MockNetworkStream
    preloaded with that response.
    """

    def __init__(self):
        """Initialize the mock backend."""
        self._responses: Dict[Tuple[str, int], bytes] = {}
        self._connections: List[MockNetworkStream] = []
        self._tls_hosts: List[Tuple[str, int]] = []
        self._stream_options: Dict[str, Any] = {}

    def add_response(self, host: str, port: int, data: bytes) -> None:
        """
        Register the raw bytes a connection to host:port will receive.

        Args:
            host: The hostname.
            port: The port number.
            data: The full raw response.
        """
        self._responses[(host, port)] = data

    def set_stream_options(self, **options: Any) -> None:
        """Keyword arguments passed to every MockNetworkStream created."""
        self._stream_options = options

    async def connect_tcp(
        self,
        host: str,
        port: int,
        timeout: Optional[float] = None,
    ) -> MockNetworkStream:
        """
        Create a mock TCP connection.

        Args:
            host: The hostname to connect to.
            port: The port number to connect to.
            timeout: Ignored in mock implementation.

        Returns:
            A MockNetworkStream representing the connection.
        """
        stream = MockNetworkStream(self._responses.get((host, port), b""), **self._stream_options)
        stream.set_extra_info("peername", (host, port))
        stream.set_extra_info("sockname", ("127.0.0.1", 12345))
        self._connections.append(stream)
        return stream

    async def connect_tls(
        self,
        host: str,
        port: int,
        timeout: Optional[float] = None,
        ssl_context: Optional[ssl.SSLContext] = None,
    ) -> MockNetworkStream:
        """
        Create a mock TLS connection.

        The stream is flagged with "ssl_object" so tests can tell it
        apart from a plain TCP one.
        """
        stream = await self.connect_tcp(host, port, timeout)
        stream.set_extra_info("ssl_object", True)
        self._tls_hosts.append((host, port))
        return stream

    @property
    def connections(self) -> List[MockNetworkStream]:
        """All streams handed out, in connection order."""
        return list(self._connections)

    @property
    def tls_hosts(self) -> List[Tuple[str, int]]:
        return list(self._tls_hosts)

    def reset(self) -> None:
        """Reset all mock connections."""
        self._responses.clear()
        self._connections.clear()
        self._tls_hosts.clear()
