import logging
import threading
from collections import deque
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Callable, Deque, List, Optional

logger = logging.getLogger(__name__)


class Notifier:
    """Sink for transient user-visible messages"""

    def notify(self, message: str) -> None:
        raise NotImplementedError


@dataclass
class Toast:
    message: str
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    visible: bool = True


class ToastNotifier(Notifier):
    """
    Shows a toast and dismisses it after ``duration`` seconds.

    The dismiss timer is fire-and-forget: nothing waits on it and cart state
    never depends on it. Dismissed toasts leave the active list; only the
    last ``history_size`` toasts are remembered.
    """

    def __init__(
        self,
        duration: float = 2.0,
        timer_factory: Optional[Callable[..., threading.Timer]] = None,
        history_size: int = 50,
    ):
        self.duration = duration
        self.history: Deque[Toast] = deque(maxlen=history_size)
        self._active: List[Toast] = []
        self._timer_factory = timer_factory or threading.Timer
        self._lock = threading.Lock()

    @property
    def active(self) -> List[Toast]:
        with self._lock:
            return list(self._active)

    @property
    def messages(self) -> List[str]:
        with self._lock:
            return [toast.message for toast in self.history]

    def notify(self, message: str) -> None:
        toast = Toast(message)
        with self._lock:
            self.history.append(toast)
            self._active.append(toast)
        logger.debug(f"toast: {message}")

        timer = self._timer_factory(self.duration, self.dismiss, args=(toast,))
        timer.daemon = True
        timer.start()

    def dismiss(self, toast: Toast) -> None:
        with self._lock:
            toast.visible = False
            self._active = [t for t in self._active if t is not toast]
