"""생산자/소비자 신호 원시 객체./Producer-consumer signalling primitives."""

from __future__ import annotations

import threading
import time
from dataclasses import dataclass, field
from typing import Any, Protocol

from .exceptions import LatchSealedError, ScanCancelledError
from .models import ProgressCallback, ProgressEvent


class ProgressMonitor(Protocol):
    """항목별 진행 알림 수신자./Receives one notification per queued entry."""

    def notify(self, entry: Any) -> None: ...


@dataclass(slots=True)
class CancellationToken:
    """외부 취소 신호를 전달합니다./Carry cancellation signals across threads."""

    _event: threading.Event = field(default_factory=threading.Event, init=False)

    def cancel(self) -> None:
        """취소 상태로 설정합니다./Mark token as cancelled."""

        self._event.set()

    def is_cancelled(self) -> bool:
        """취소 여부를 반환합니다./Return cancellation flag."""

        return self._event.is_set()

    def raise_if_cancelled(self) -> None:
        """취소되었으면 예외를 발생./Raise ScanCancelledError once cancelled."""

        if self._event.is_set():
            raise ScanCancelledError("scan cancelled")


class SealableLatch:
    """봉인 가능한 카운팅 래치./Counting wake-up signal that can be sealed.

    Producers call :meth:`signal` once per item. The orchestrator calls
    :meth:`seal` once no producer will ever signal again. A consumer loops on
    :meth:`wait`: ``True`` means one signal was consumed, ``False`` means the
    timeout elapsed or the latch is sealed with no signals left. Check
    :attr:`exhausted` to tell the two apart.
    """

    def __init__(self) -> None:
        self._condition = threading.Condition()
        self._count = 0
        self._sealed = False

    def signal(self) -> None:
        """신호를 하나 추가합니다./Add one signal and wake a waiter."""

        with self._condition:
            if self._sealed:
                raise LatchSealedError("latch is sealed")
            self._count += 1
            self._condition.notify()

    def seal(self) -> None:
        """더 이상 신호가 없음을 표시./Mark that no more signals will arrive."""

        with self._condition:
            self._sealed = True
            self._condition.notify_all()

    def wait(self, timeout: float | None = None) -> bool:
        """신호를 기다려 소비합니다./Wait for and consume one signal."""

        with self._condition:
            ready = self._condition.wait_for(lambda: self._count > 0 or self._sealed, timeout)
            if not ready or self._count == 0:
                return False
            self._count -= 1
            return True

    @property
    def sealed(self) -> bool:
        with self._condition:
            return self._sealed

    @property
    def exhausted(self) -> bool:
        """봉인 후 신호 소진 여부./True once sealed and every signal consumed."""

        with self._condition:
            return self._sealed and self._count == 0

    @property
    def pending(self) -> int:
        with self._condition:
            return self._count


class ThrottledMonitor:
    """간격 제한 진행 모니터./Forward progress events at most once per interval."""

    def __init__(self, callback: ProgressCallback, interval: float = 0.2) -> None:
        self._callback = callback
        self._interval = interval
        self._lock = threading.Lock()
        self._queued = 0
        self._last_emit: float | None = None

    def notify(self, entry: Any) -> None:
        now = time.perf_counter()
        with self._lock:
            self._queued += 1
            if (
                self._last_emit is not None
                and self._interval > 0.0
                and now - self._last_emit < self._interval
            ):
                return
            self._last_emit = now
            event = ProgressEvent(queued=self._queued, current_path=_entry_path(entry))
        self._callback(event)

    @property
    def queued(self) -> int:
        with self._lock:
            return self._queued


def _entry_path(entry: Any) -> str | None:
    path = getattr(entry, "path", None)
    return None if path is None else str(path)


__all__ = ["CancellationToken", "ProgressMonitor", "SealableLatch", "ThrottledMonitor"]
