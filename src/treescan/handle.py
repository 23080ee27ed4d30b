"""스캔 작업 핸들./Handle for one submitted scan job."""

from __future__ import annotations

from concurrent.futures import CancelledError, Future
from pathlib import Path
from typing import Callable

from .exceptions import ScanCancelledError
from .models import ScanStatistics
from .signals import CancellationToken
from .state import ScanState


class ScanHandle:
    """결과 대기 및 취소가 가능한 핸들./Awaitable, cancellable result of a scan job.

    The result is the root path. A job that was cancelled, either before it
    started or while it was walking, reports :meth:`cancelled` and its
    :meth:`result` raises :class:`concurrent.futures.CancelledError`.
    """

    def __init__(
        self,
        root: Path,
        future: Future[Path],
        token: CancellationToken,
        state: ScanState,
    ) -> None:
        self._root = root
        self._future = future
        self._token = token
        self._state = state

    @property
    def root(self) -> Path:
        return self._root

    @property
    def stats(self) -> ScanStatistics:
        """작업 통계./Job statistics; stable once the handle is done."""

        return self._state.statistics()

    def cancel(self) -> bool:
        """작업을 취소합니다./Cancel a pending job or interrupt a running one.

        Returns False only when the job has already finished.
        """

        if self._future.done():
            return self.cancelled()
        self._token.cancel()
        if self._future.cancel() or not self._future.done():
            return True
        return self.cancelled()

    def cancelled(self) -> bool:
        if self._future.cancelled():
            return True
        if not self._future.done():
            return False
        return isinstance(self._future.exception(), ScanCancelledError)

    def running(self) -> bool:
        return self._future.running()

    def done(self) -> bool:
        return self._future.done()

    def result(self, timeout: float | None = None) -> Path:
        """루트 경로를 기다립니다./Wait for the root path."""

        try:
            return self._future.result(timeout)
        except ScanCancelledError as exc:
            raise CancelledError() from exc

    def exception(self, timeout: float | None = None) -> BaseException | None:
        """작업 실패 원인./Return the failure cause, None on success."""

        error = self._future.exception(timeout)
        if isinstance(error, ScanCancelledError):
            raise CancelledError() from error
        return error

    def add_done_callback(self, callback: Callable[["ScanHandle"], None]) -> None:
        self._future.add_done_callback(lambda _future: callback(self))

    def __repr__(self) -> str:
        if self.cancelled():
            status = "cancelled"
        elif self._future.done():
            status = "failed" if self._future.exception() is not None else "completed"
        elif self._future.running():
            status = "running"
        else:
            status = "pending"
        return f"<ScanHandle root={str(self._root)!r} {status}>"


__all__ = ["ScanHandle"]
