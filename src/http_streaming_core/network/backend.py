"""
Network backend interface for http_streaming_core.

This module defines the NetworkBackend interface the client uses to
open a transport lazily when the caller did not supply one.
"""

import ssl
from abc import ABC, abstractmethod
from typing import Optional

from .stream import NetworkStream


class NetworkBackend(ABC):
    """
    Interface for network backend implementations.

    A backend turns a host and port into a connected NetworkStream,
    optionally wrapped in TLS.
    """

    @abstractmethod
    async def connect_tcp(
        self,
        host: str,
        port: int,
        timeout: Optional[float] = None,
    ) -> NetworkStream:
        """
        Connect to a TCP endpoint.

        Args:
            host: The hostname or IP address to connect to.
            port: The port number to connect to.
            timeout: Optional timeout in seconds for the connection.

        Returns:
            A NetworkStream representing the TCP connection.

        Raises:
            TransportError: If the connection fails or times out.
        """
        pass

    @abstractmethod
    async def connect_tls(
        self,
        host: str,
        port: int,
        timeout: Optional[float] = None,
        ssl_context: Optional[ssl.SSLContext] = None,
    ) -> NetworkStream:
        """
        Connect to a TCP endpoint and negotiate TLS on it.

        Args:
            host: The hostname, also used for certificate verification.
            port: The port number to connect to.
            timeout: Optional timeout in seconds for connect and handshake.
            ssl_context: Optional context; a verifying default is used if None.

        Returns:
            A NetworkStream representing the TLS connection.

        Raises:
            TransportError: If the connection or the handshake fails.
        """
        pass
