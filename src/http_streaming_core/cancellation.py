"""
Cancellation token shared between a request and whoever may stop it.
"""

import threading


class CancellationToken:
    """
    Thread-safe one-way cancellation flag.

    Set from any thread or task, read at the request's checkpoints.
    """

    def __init__(self) -> None:
        self._event = threading.Event()

    def cancel(self) -> None:
        self._event.set()

    def reset(self) -> None:
        self._event.clear()

    @property
    def is_cancelled(self) -> bool:
        return self._event.is_set()

    def __repr__(self) -> str:
        return f"CancellationToken(cancelled={self.is_cancelled})"
