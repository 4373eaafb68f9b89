from __future__ import annotations

import threading
import time
from typing import Optional

from ..core.exceptions import OperationCancelled


class CancellationToken:
    """Cooperative cancellation signal shared between a request and the store.

    A token is cancelled either explicitly through :meth:`cancel` or implicitly
    once its deadline (a ``time.monotonic()`` value) has passed.
    """

    def __init__(self, *, deadline: Optional[float] = None):
        self._event = threading.Event()
        self._deadline = deadline

    @classmethod
    def with_timeout(cls, seconds: Optional[float]) -> "CancellationToken":
        if not seconds or seconds <= 0:
            return cls()
        return cls(deadline=time.monotonic() + float(seconds))

    def cancel(self) -> None:
        self._event.set()

    @property
    def cancelled(self) -> bool:
        if self._event.is_set():
            return True
        if self._deadline is not None and time.monotonic() >= self._deadline:
            self._event.set()
            return True
        return False

    def raise_if_cancelled(self) -> None:
        if self.cancelled:
            raise OperationCancelled("Operation was cancelled")
