"""Cooperative cancellation for long passes."""

from __future__ import annotations

import threading

from tidytree.core.errors import ScanCancelled


class CancelToken:
    """Flag checked before every traversal step and every file read.

    Backed by a ``threading.Event`` so a frontend thread can cancel a scan
    running in a worker thread.
    """

    def __init__(self) -> None:
        self._event = threading.Event()

    def cancel(self) -> None:
        self._event.set()

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()

    def raise_if_cancelled(self) -> None:
        if self._event.is_set():
            raise ScanCancelled("Scan cancelled")


def check(token: CancelToken | None) -> None:
    """Raise ``ScanCancelled`` if *token* is set. ``None`` never cancels."""
    if token is not None:
        token.raise_if_cancelled()
