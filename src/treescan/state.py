"""스캔 상태 추적기./Track scan progress state."""

from __future__ import annotations

import threading
import time
from dataclasses import dataclass, field

from .models import ScanError, ScanStatistics


class QueuedCounter:
    """스캐너 수명 동안의 누적 카운터./Lifetime total of queued entries."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._value = 0

    def increment(self) -> int:
        with self._lock:
            self._value += 1
            return self._value

    @property
    def value(self) -> int:
        with self._lock:
            return self._value


@dataclass(slots=True)
class ScanState:
    """단일 작업의 진행 상황./Store statistics of one scan job.

    Mutated only by the worker thread running the job; read it from other
    threads once the job's handle is done.
    """

    root: str
    start_time: float | None = None
    end_time: float | None = None
    visited: int = 0
    queued: int = 0
    skipped: int = 0
    failed: int = 0
    current_path: str | None = None
    errors: list[ScanError] = field(default_factory=list)

    def start(self) -> None:
        """시작 시간을 기록./Record job start."""

        self.start_time = time.perf_counter()

    def finish(self) -> None:
        """종료 시간을 기록./Record job end."""

        self.end_time = time.perf_counter()
        self.current_path = None

    def record_error(self, path: str, error: BaseException) -> None:
        """경로별 오류를 기록./Record a per-path failure."""

        self.failed += 1
        self.errors.append(ScanError(path=path, message=str(error) or type(error).__name__))

    def elapsed(self, now: float | None = None) -> float:
        """경과 시간을 반환./Return elapsed seconds."""

        if self.start_time is None:
            return 0.0
        end = self.end_time if self.end_time is not None else now or time.perf_counter()
        return max(end - self.start_time, 0.0)

    def statistics(self) -> ScanStatistics:
        """최종 통계를 생성합니다./Produce aggregate statistics."""

        return ScanStatistics(
            root=self.root,
            visited=self.visited,
            queued=self.queued,
            skipped=self.skipped,
            failed=self.failed,
            duration_seconds=round(self.elapsed(), 2),
            errors=tuple(self.errors),
        )


__all__ = ["QueuedCounter", "ScanState"]
