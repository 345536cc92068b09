"""
Response body consumers for http_streaming_core.

A request hands every decoded piece of its body to a ChunkSink. The
caller picks the sink explicitly: BufferSink accumulates the body in
memory, CallbackSink passes each piece on as it arrives.
"""

import inspect
from dataclasses import dataclass
from enum import Enum
from typing import Awaitable, Callable, List, Optional, Union

from typing_extensions import Protocol, runtime_checkable

from .http_primitives import ResponseHead

ChunkCallback = Callable[[bytes], Union[None, Awaitable[None]]]


@runtime_checkable
class ChunkSink(Protocol):
    """Anything that accepts response body pieces."""

    async def write(self, chunk: bytes) -> None:
        ...


class BufferSink:
    """Sink that accumulates the whole body in memory."""

    def __init__(self) -> None:
        self._chunks: List[bytes] = []
        self._size = 0

    async def write(self, chunk: bytes) -> None:
        self._chunks.append(chunk)
        self._size += len(chunk)

    def getvalue(self) -> bytes:
        return b"".join(self._chunks)

    def __len__(self) -> int:
        return self._size


class CallbackSink:
    """
    Sink that forwards each piece to a callback.

    The callback may be a plain function or a coroutine function.
    """

    def __init__(self, callback: ChunkCallback) -> None:
        self._callback = callback
        self.chunks_delivered = 0

    async def write(self, chunk: bytes) -> None:
        result = self._callback(chunk)
        if inspect.isawaitable(result):
            await result
        self.chunks_delivered += 1


def create_sink(
    sink: Optional[ChunkSink] = None,
    callback: Optional[ChunkCallback] = None,
) -> ChunkSink:
    """
    Pick the sink for a request.

    Args:
        sink: An explicit sink
        callback: A per-chunk callback, wrapped in a CallbackSink

    Returns:
        The given sink, a CallbackSink, or a new BufferSink when
        neither is given

    Raises:
        TypeError: If both sink and callback are given.
    """
    if sink is not None and callback is not None:
        raise TypeError("Pass either sink or callback, not both")
    if sink is not None:
        return sink
    if callback is not None:
        return CallbackSink(callback)
    return BufferSink()


class Outcome(Enum):
    """How a request ended. Failures are raised, never returned."""
    COMPLETED = "completed"
    CANCELLED = "cancelled"


@dataclass(frozen=True)
class StreamResult:
    """
    Result of a request.

    ``body`` holds the accumulated body when the request used a
    BufferSink (or a Content-Length body, which is always returned
    directly), and None when the body went to a callback or sink.
    After a cancellation it holds whatever arrived before the stop.
    """

    head: Optional[ResponseHead]
    body: Optional[bytes]
    outcome: Outcome = Outcome.COMPLETED

    @property
    def cancelled(self) -> bool:
        return self.outcome is Outcome.CANCELLED

    @property
    def status_code(self) -> Optional[int]:
        return self.head.status_code if self.head is not None else None
