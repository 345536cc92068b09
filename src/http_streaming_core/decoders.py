"""
gzip decoding for response bodies.

GzipStreamDecoder inflates a body that arrives in pieces of any size,
with no regard for chunk or gzip member boundaries. decode_gzip_member
handles a complete body that is already in memory.
"""

import inspect
import logging
import zlib
from typing import Any, Awaitable, Callable, Optional, Union

from .exceptions import DecodeError, StreamError

# 16 + MAX_WBITS makes zlib expect (and check) a gzip header and trailer
GZIP_WBITS = 16 + zlib.MAX_WBITS

DataCallback = Callable[[bytes], Union[None, Awaitable[None]]]


def decode_gzip_member(data: bytes) -> bytes:
    """
    Decompress a complete, single gzip member.

    Raises:
        DecodeError: If the data is not a complete, valid gzip member.
    """
    try:
        return zlib.decompress(data, GZIP_WBITS)
    except zlib.error as e:
        raise DecodeError(f"Invalid gzip body: {e}", e) from e


class GzipStreamDecoder:
    """
    Incremental gzip decoder.

    Every slice of output is passed to the registered callback as soon
    as zlib can produce it. Concatenated gzip members are decoded one
    after another. The decoder must be closed once the body ends; use
    it as an async context manager to guarantee that.
    """

    def __init__(
        self,
        callback: DataCallback,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        """
        Initialize the decoder.

        Args:
            callback: Called with each decompressed slice; may be a
                      plain function or a coroutine function
            logger: Logger for byte counts (module logger if None)
        """
        self._callback = callback
        self._logger = logger or logging.getLogger(__name__)
        self._decompressor: Optional[Any] = zlib.decompressobj(GZIP_WBITS)
        self._bytes_in = 0
        self._bytes_out = 0

    async def _emit(self, data: bytes) -> None:
        if not data:
            return
        self._bytes_out += len(data)
        self._logger.debug(f"read {len(data)} uncompressed bytes")
        result = self._callback(data)
        if inspect.isawaitable(result):
            await result

    async def feed(self, data: bytes) -> None:
        """
        Feed compressed bytes.

        Raises:
            DecodeError: If the data is not valid gzip.
            StreamError: If the decoder is already closed.
        """
        if self._decompressor is None:
            raise StreamError("Cannot feed a closed decoder")
        self._bytes_in += len(data)

        while data:
            if self._decompressor.eof:
                # Previous gzip member is complete, the rest belongs to the next
                self._decompressor = zlib.decompressobj(GZIP_WBITS)
            try:
                output = self._decompressor.decompress(data)
            except zlib.error as e:
                raise DecodeError(f"Invalid gzip stream: {e}", e) from e
            await self._emit(output)
            data = self._decompressor.unused_data

    async def aclose(self, strict: bool = True) -> None:
        """
        Flush any buffered output and release the zlib stream.

        Later calls are no-ops.

        Args:
            strict: Whether a gzip member cut short (no trailer yet) is
                    an error. Pass False when the body was abandoned.

        Raises:
            DecodeError: If strict and the last member is incomplete.
        """
        if self._decompressor is None:
            return
        decompressor, self._decompressor = self._decompressor, None
        try:
            output = decompressor.flush()
        except zlib.error as e:
            raise DecodeError(f"Invalid gzip stream: {e}", e) from e
        await self._emit(output)
        if strict and self._bytes_in > 0 and not decompressor.eof:
            raise DecodeError("Truncated gzip stream")
        self._logger.debug(
            f"gzip decoder closed: {self._bytes_in} bytes in, {self._bytes_out} bytes out"
        )

    async def __aenter__(self) -> "GzipStreamDecoder":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        if exc_type is None:
            await self.aclose()
            return
        # Already failing: release the engine without emitting more output
        self._decompressor = None

    @property
    def closed(self) -> bool:
        return self._decompressor is None

    @property
    def bytes_in(self) -> int:
        return self._bytes_in

    @property
    def bytes_out(self) -> int:
        return self._bytes_out
