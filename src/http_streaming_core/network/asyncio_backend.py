"""
asyncio based network backend.

Streams here wrap the asyncio StreamReader/StreamWriter pair returned
by asyncio.open_connection, with TLS handled by the event loop.
"""

import asyncio
import logging
import ssl
from typing import Any, Optional

from ..exceptions import TransportError
from .backend import NetworkBackend
from .stream import NetworkStream
from .utils import create_ssl_context

logger = logging.getLogger(__name__)


class AsyncioNetworkStream(NetworkStream):
    """Network stream over an asyncio StreamReader/StreamWriter pair."""

    DEFAULT_READ_SIZE = 65536

    def __init__(self, reader: asyncio.StreamReader, writer: asyncio.StreamWriter) -> None:
        self._reader = reader
        self._writer = writer
        self._closed = False

    async def read(self, max_bytes: Optional[int] = None) -> bytes:
        if self._closed:
            raise RuntimeError("Stream is closed")
        return await self._reader.read(max_bytes or self.DEFAULT_READ_SIZE)

    async def write(self, data: bytes) -> None:
        if self._closed:
            raise RuntimeError("Stream is closed")
        self._writer.write(data)
        await self._writer.drain()

    async def aclose(self) -> None:
        if self._closed and self._writer.transport.is_closing():
            return
        self._closed = True
        self._writer.close()
        try:
            await self._writer.wait_closed()
        except OSError as e:
            # The peer may already be gone; the socket is released either way.
            logger.debug(f"Ignoring error while closing stream: {e}")

    def abort(self) -> None:
        if self._closed:
            return
        self._closed = True
        self._writer.transport.abort()

    def get_extra_info(self, name: str) -> Optional[Any]:
        return self._writer.get_extra_info(name)

    @property
    def is_closed(self) -> bool:
        return self._closed


class AsyncioNetworkBackend(NetworkBackend):
    """Network backend using asyncio.open_connection."""

    async def connect_tcp(
        self,
        host: str,
        port: int,
        timeout: Optional[float] = None,
    ) -> AsyncioNetworkStream:
        return await self._open(host, port, timeout)

    async def connect_tls(
        self,
        host: str,
        port: int,
        timeout: Optional[float] = None,
        ssl_context: Optional[ssl.SSLContext] = None,
    ) -> AsyncioNetworkStream:
        context = ssl_context or create_ssl_context(alpn_protocols=["http/1.1"])
        return await self._open(host, port, timeout, ssl=context, server_hostname=host)

    async def _open(
        self,
        host: str,
        port: int,
        timeout: Optional[float],
        **kwargs: Any,
    ) -> AsyncioNetworkStream:
        logger.debug(f"Connecting to {host}:{port} (tls={'ssl' in kwargs})")
        try:
            reader, writer = await asyncio.wait_for(
                asyncio.open_connection(host, port, **kwargs),
                timeout=timeout,
            )
        except asyncio.TimeoutError as e:
            raise TransportError(f"Connecting to {host}:{port} timed out", e) from e
        except OSError as e:
            raise TransportError(f"Could not connect to {host}:{port}: {e}", e) from e
        return AsyncioNetworkStream(reader, writer)
