"""
Buffered reader over a NetworkStream.

HTTP/1.1 framing needs three kinds of reads: whole lines for the
status line, headers and chunk sizes, exact byte counts for chunk
payloads and Content-Length bodies, and "whatever is available" for
EOF-terminated bodies. ByteStreamReader provides all three on top of
the raw NetworkStream.read() and turns stream failures into
TransportError.
"""

from typing import Optional

from ..exceptions import TransportError
from .stream import NetworkStream


class ByteStreamReader:
    """
    Line and exact-size reads over a NetworkStream.

    The reader owns the stream it wraps: closing the reader closes
    the stream, exactly once.
    """

    DEFAULT_READ_SIZE = 65536

    def __init__(self, stream: NetworkStream, read_size: Optional[int] = None) -> None:
        """
        Initialize the reader.

        Args:
            stream: The NetworkStream to read from and write to
            read_size: Size of each underlying read
        """
        self._stream = stream
        self._read_size = read_size or self.DEFAULT_READ_SIZE
        self._buffer = bytearray()
        self._eof = False
        self._closed = False

    async def _fill(self) -> bool:
        """Read once from the stream into the buffer. Returns False at EOF."""
        if self._eof:
            return False
        try:
            data = await self._stream.read(self._read_size)
        except (OSError, RuntimeError) as e:
            raise TransportError(f"Read failed: {e}", e) from e
        if not data:
            self._eof = True
            return False
        self._buffer.extend(data)
        return True

    def _take(self, size: int) -> bytes:
        data = bytes(self._buffer[:size])
        del self._buffer[:size]
        return data

    async def readline(self) -> bytes:
        """
        Read one line, including its trailing b"\\n".

        Returns:
            The line. At EOF the unterminated remainder is returned,
            and b"" once nothing is left.
        """
        while True:
            index = self._buffer.find(b"\n")
            if index >= 0:
                return self._take(index + 1)
            if not await self._fill():
                return self._take(len(self._buffer))

    async def readexactly(self, size: int) -> bytes:
        """
        Read exactly size bytes, looping over short reads.

        Raises:
            TransportError: If the stream ends before size bytes arrive.
        """
        while len(self._buffer) < size:
            if not await self._fill():
                raise TransportError(
                    f"Connection closed after {len(self._buffer)} of {size} bytes"
                )
        return self._take(size)

    async def read_some(self, max_bytes: int) -> bytes:
        """
        Return up to max_bytes without waiting for more than one read.

        Buffered data is returned first. Returns b"" at EOF.
        """
        if not self._buffer:
            await self._fill()
        return self._take(max_bytes)

    async def at_eof(self) -> bool:
        """Check whether the stream is exhausted, reading ahead if needed."""
        if self._buffer:
            return False
        return not await self._fill()

    async def write(self, data: bytes) -> None:
        try:
            await self._stream.write(data)
        except (OSError, RuntimeError) as e:
            raise TransportError(f"Write failed: {e}", e) from e

    async def aclose(self) -> None:
        """Close the underlying stream. Later calls are no-ops."""
        if self._closed:
            return
        self._closed = True
        await self._stream.aclose()

    def abort(self) -> None:
        """Abort the underlying stream so a blocked read returns."""
        self._stream.abort()

    @property
    def stream(self) -> NetworkStream:
        return self._stream

    @property
    def closed(self) -> bool:
        return self._closed
