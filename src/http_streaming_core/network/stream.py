"""
Network stream interface for http_streaming_core.

This module defines the NetworkStream interface that every transport
handed to the client must follow. Connection establishment and TLS
negotiation happen before a stream reaches the client.
"""

from abc import ABC, abstractmethod
from typing import Any, Optional


class NetworkStream(ABC):
    """
    Interface for bidirectional byte streams with async I/O operations.

    Implementations only need to provide raw reads and writes; line
    and exact-size reads are layered on top by ByteStreamReader.
    """

    @abstractmethod
    async def read(self, max_bytes: Optional[int] = None) -> bytes:
        """
        Read data from the stream.

        Args:
            max_bytes: Maximum number of bytes to read. If None, the
                      implementation picks a buffer size.

        Returns:
            The data read from the stream. An empty bytes object
            means the peer closed the stream (EOF).

        Raises:
            RuntimeError: If the stream is closed.
            OSError: If a network error occurs.
        """
        pass

    @abstractmethod
    async def write(self, data: bytes) -> None:
        """
        Write data to the stream.

        Args:
            data: The data to write to the stream.

        Raises:
            RuntimeError: If the stream is closed.
            OSError: If a network error occurs.
        """
        pass

    @abstractmethod
    async def aclose(self) -> None:
        """
        Close the stream and cleanup resources.

        Calling this on an already closed stream must be a no-op.
        """
        pass

    @abstractmethod
    def abort(self) -> None:
        """
        Close the stream immediately without waiting for pending I/O.

        Any read blocked on this stream must return or raise promptly.
        Must be idempotent and must not block.
        """
        pass

    @abstractmethod
    def get_extra_info(self, name: str) -> Optional[Any]:
        """
        Get extra information about the stream.

        Args:
            name: The name of the information to retrieve. Common values include:
                 - "peername": The remote endpoint address
                 - "sockname": The local endpoint address
                 - "ssl_object": The SSL object when the stream is TLS encrypted

        Returns:
            The requested information or None if not available.
        """
        pass

    @property
    @abstractmethod
    def is_closed(self) -> bool:
        """
        Check if the stream is closed.

        Returns:
            True if the stream is closed, False otherwise.
        """
        pass
