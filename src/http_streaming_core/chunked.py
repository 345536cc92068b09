"""
Chunked transfer decoding for http_streaming_core.

ChunkedDecoder reads a chunked body from a ByteStreamReader and hands
out one payload per chunk. Chunk sizes are read as whole lines since
the line terminator delimits them; payloads are read by exact byte
count since they may themselves contain line breaks.
"""

import logging
from enum import Enum
from typing import Optional

from .cancellation import CancellationToken
from .exceptions import ProtocolError
from .network.reader import ByteStreamReader


class ChunkState(Enum):
    """States of the chunked decoder."""
    READ_SIZE = "read_size"        # Expecting a hex chunk size line
    READ_PAYLOAD = "read_payload"  # Expecting exactly chunk_size bytes
    DONE = "done"                  # Terminal chunk, EOF or cancellation


def parse_chunk_size(line: bytes) -> int:
    """
    Parse a chunk size line such as b"1a\\r\\n" or b"1a;name=value\\r\\n".

    Raises:
        ProtocolError: If the size is not a hexadecimal number.
    """
    size_field = line.split(b";", 1)[0].strip()
    try:
        size = int(size_field, 16)
    except ValueError as e:
        raise ProtocolError(f"Invalid chunk size line: {line!r}", e) from e
    if size < 0:
        raise ProtocolError(f"Invalid chunk size line: {line!r}")
    return size


class ChunkedDecoder:
    """
    State machine over a chunked response body.

    READ_SIZE -> READ_PAYLOAD -> (READ_SIZE | DONE). Trailer headers
    after the terminal chunk are never read.
    """

    def __init__(
        self,
        reader: ByteStreamReader,
        cancellation: Optional[CancellationToken] = None,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        """
        Initialize the decoder.

        Args:
            reader: Reader positioned right after the response headers
            cancellation: Checked after every payload; once cancelled no
                further chunk is read
            logger: Logger for chunk progress (module logger if None)
        """
        self._reader = reader
        self._cancellation = cancellation or CancellationToken()
        self._logger = logger or logging.getLogger(__name__)
        self._state = ChunkState.READ_SIZE
        self._chunk_size = 0
        self._chunks_read = 0
        self._bytes_read = 0

    async def _transition(self) -> Optional[bytes]:
        """
        Run one state transition.

        Returns:
            A payload when READ_PAYLOAD completes, None otherwise.
        """
        if self._state is ChunkState.READ_SIZE:
            line = await self._reader.readline()
            if not line:
                self._logger.debug("EOF before terminal chunk, treating as end of stream")
                self._state = ChunkState.DONE
                return None
            if not line.strip():
                return None
            size = parse_chunk_size(line)
            if size == 0:
                self._logger.debug("received zero length chunk, chunked encoding EOF")
                self._state = ChunkState.DONE
                return None
            self._logger.debug(f"chunk size:{size}")
            self._chunk_size = size
            self._state = ChunkState.READ_PAYLOAD
            return None

        if self._state is ChunkState.READ_PAYLOAD:
            payload = await self._reader.readexactly(self._chunk_size)
            self._chunks_read += 1
            self._bytes_read += len(payload)
            if self._cancellation.is_cancelled:
                self._logger.debug("cancelled, dropping chunk and halting streaming response")
                self._state = ChunkState.DONE
                return None
            self._state = ChunkState.READ_SIZE
            return payload

        return None

    async def next_chunk(self) -> Optional[bytes]:
        """
        Return the next chunk payload, or None once the body is done.

        Raises:
            ProtocolError: On a malformed chunk size line.
            TransportError: If the connection fails mid-chunk.
        """
        while self._state is not ChunkState.DONE:
            payload = await self._transition()
            if payload is not None:
                return payload
        return None

    def __aiter__(self) -> "ChunkedDecoder":
        return self

    async def __anext__(self) -> bytes:
        payload = await self.next_chunk()
        if payload is None:
            raise StopAsyncIteration
        return payload

    @property
    def state(self) -> ChunkState:
        return self._state

    @property
    def chunks_read(self) -> int:
        return self._chunks_read

    @property
    def bytes_read(self) -> int:
        return self._bytes_read
