from __future__ import annotations

import datetime as dt
import logging
import threading
from collections import deque
from collections.abc import Callable
from dataclasses import dataclass

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class StatusMessage:
    kind: str
    message: str
    created_at: str


Listener = Callable[[StatusMessage], None]


class Notifier:
    """Transient status side channel.

    Kinds are "info", "success" and "error". Recent messages are kept for
    inspection; listeners get each message as it is emitted.
    """

    def __init__(self, *, history: int = 50) -> None:
        self._messages: deque[StatusMessage] = deque(maxlen=history)
        self._listeners: list[Listener] = []
        self._lock = threading.Lock()

    def subscribe(self, listener: Listener) -> None:
        with self._lock:
            self._listeners.append(listener)

    def emit(self, message: str, *, kind: str = "info") -> StatusMessage:
        status = StatusMessage(
            kind=kind, message=message, created_at=dt.datetime.now(dt.UTC).isoformat()
        )
        with self._lock:
            self._messages.append(status)
            listeners = list(self._listeners)
        logger.debug("status[%s]: %s", kind, message)
        for listener in listeners:
            try:
                listener(status)
            except Exception:
                logger.exception("status listener failed")
        return status

    def info(self, message: str) -> StatusMessage:
        return self.emit(message, kind="info")

    def success(self, message: str) -> StatusMessage:
        return self.emit(message, kind="success")

    def error(self, message: str) -> StatusMessage:
        return self.emit(message, kind="error")

    @property
    def messages(self) -> list[StatusMessage]:
        with self._lock:
            return list(self._messages)

    @property
    def last(self) -> StatusMessage | None:
        with self._lock:
            return self._messages[-1] if self._messages else None
