"""직렬 스캔 스케줄러./Serial scan scheduler.

Each call to :meth:`Scanner.scan` puts a job in an unbounded work queue
drained by a single worker thread, so jobs run one at a time in submission
order. The filesystem is usually the bottleneck, not the CPU, so walking
several roots in parallel from one scanner does not help.

:meth:`Scanner.scan` does not block, which allows producer-consumer setups
where entries are processed while the tree is still being walked. Entries are
put on the target queue synchronously; with a bounded queue the walk waits
until space is available.
"""

from __future__ import annotations

import concurrent.futures
import logging
import os
import threading
from concurrent.futures import Future, ThreadPoolExecutor
from pathlib import Path
from types import TracebackType
from typing import Any, Iterable, Mapping, Optional, Type, Union, overload

from .config import ScannerConfig
from .exceptions import ScanConfigError, ScanSchedulerClosedError
from .factory import EntryFactory
from .handle import ScanHandle
from .matchers import (
    DosHiddenFileMatcher,
    GlobMatcher,
    PosixHiddenFileMatcher,
    SystemFileMatcher,
    supports_dos_attributes,
)
from .models import EntryQueue, FilterSet, PathMatcher
from .signals import CancellationToken, ProgressMonitor, SealableLatch
from .state import QueuedCounter
from .walker import TreeWalker

logger = logging.getLogger(__name__)

PathInput = Union[str, "os.PathLike[str]"]


class Scanner:
    """디렉터리 트리 스캐너./Scan directory trees into a shared queue.

    Args:
        factory: Builds one entry per accepted path.
        queue: Target queue, shared by every job of this scanner. Should be
            bounded so a slow consumer cannot make the scanner fill memory.
        latch: Signalled once per queued entry. The scanner never seals it.
        monitor: Notified once per queued entry.
        put_interval: Seconds between cancellation checks while blocked on a
            full queue.
    """

    def __init__(
        self,
        factory: EntryFactory[Any],
        queue: EntryQueue[Any],
        latch: SealableLatch | None = None,
        monitor: ProgressMonitor | None = None,
        *,
        put_interval: float = 0.1,
    ) -> None:
        self._factory = factory
        self._queue = queue
        self._latch = latch
        self._monitor = monitor
        self._put_interval = put_interval
        self._executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="treescan")
        self._lock = threading.Lock()
        self._include: list[GlobMatcher] = []
        self._exclude: list[GlobMatcher] = []
        self._ignore_hidden_files = True
        self._ignore_system_files = True
        self._follow_symlinks = False
        self._max_depth: int | None = None
        self._counter = QueuedCounter()
        self._handles: list[ScanHandle] = []
        self._futures: list[Future[Path]] = []
        self._closed = False

    def configure(self, options: ScannerConfig | Mapping[str, Any]) -> "Scanner":
        """옵션으로 스캐너를 설정./Apply options; unset options keep their values.

        Raises:
            ScanConfigError: If an option value or glob pattern is malformed.
        """

        config = (
            options if isinstance(options, ScannerConfig) else ScannerConfig.from_options(options)
        )
        given = config.explicit_options()
        include = [GlobMatcher(pattern) for pattern in config.include_pattern]
        exclude = [GlobMatcher(pattern) for pattern in config.exclude_pattern]
        with self._lock:
            if "include_hidden_files" in given:
                self._ignore_hidden_files = not config.include_hidden_files
            if "include_os_files" in given:
                self._ignore_system_files = not config.include_os_files
            if "follow_symlinks" in given:
                self._follow_symlinks = config.follow_symlinks
            if "max_depth" in given:
                self._max_depth = config.max_depth
            self._include.extend(include)
            self._exclude.extend(exclude)
        return self

    def include(self, pattern: str) -> None:
        """포함 글롭 추가./Add a glob; files not matching any include glob are ignored."""

        matcher = GlobMatcher(pattern)
        with self._lock:
            self._include.append(matcher)

    def exclude(self, pattern: str) -> None:
        """제외 글롭 추가./Add a glob for excluding files and pruning directories."""

        matcher = GlobMatcher(pattern)
        with self._lock:
            self._exclude.append(matcher)

    @property
    def follow_symlinks(self) -> bool:
        with self._lock:
            return self._follow_symlinks

    @follow_symlinks.setter
    def follow_symlinks(self, value: bool) -> None:
        with self._lock:
            self._follow_symlinks = bool(value)

    @property
    def ignore_hidden_files(self) -> bool:
        """숨김 파일 무시 여부./Whether hidden files are ignored.

        Names starting with a dot are always ignored when set; DOS hidden
        files only where the scanned filesystem supports that attribute.
        """

        with self._lock:
            return self._ignore_hidden_files

    @ignore_hidden_files.setter
    def ignore_hidden_files(self, value: bool) -> None:
        with self._lock:
            self._ignore_hidden_files = bool(value)

    @property
    def ignore_system_files(self) -> bool:
        with self._lock:
            return self._ignore_system_files

    @ignore_system_files.setter
    def ignore_system_files(self, value: bool) -> None:
        with self._lock:
            self._ignore_system_files = bool(value)

    @property
    def max_depth(self) -> int | None:
        with self._lock:
            return self._max_depth

    @max_depth.setter
    def max_depth(self, value: int | None) -> None:
        if value is not None and (isinstance(value, bool) or not isinstance(value, int)):
            raise ScanConfigError(f"expected an integer, got {value!r}", option="maxDepth")
        if value is not None and value < 0:
            raise ScanConfigError("must be zero or greater", option="maxDepth")
        with self._lock:
            self._max_depth = value

    def set_max_depth(self, max_depth: int | None) -> None:
        self.max_depth = max_depth

    def get_max_depth(self) -> int | None:
        return self.max_depth

    @property
    def latch(self) -> SealableLatch | None:
        return self._latch

    def queued(self) -> int:
        """수명 동안 큐에 넣은 항목 수./Total entries queued over this scanner's lifetime."""

        return self._counter.value

    def build_filter_set(self, path: PathInput) -> FilterSet:
        """현재 설정의 스냅샷을 생성./Snapshot the current settings for a job on ``path``."""

        root = Path(path)
        with self._lock:
            ignore_hidden = self._ignore_hidden_files
            ignore_system = self._ignore_system_files
            include = tuple(self._include)
            user_exclude = tuple(self._exclude)
            max_depth = self._max_depth
            follow = self._follow_symlinks

        exclude: list[PathMatcher] = []
        # Dotfiles are always ignored; DOS hidden files only where the filesystem supports it.
        if ignore_hidden:
            exclude.append(PosixHiddenFileMatcher())
            if supports_dos_attributes(root):
                exclude.append(DosHiddenFileMatcher())
        if ignore_system:
            exclude.append(SystemFileMatcher())
        exclude.extend(user_exclude)
        return FilterSet(
            exclude=tuple(exclude),
            include=include,
            max_depth=max_depth,
            follow_symlinks=follow,
        )

    def create_visitor(
        self, path: PathInput, token: CancellationToken | None = None
    ) -> TreeWalker:
        """루트 경로용 순회기 생성./Build the tree walker for a job on ``path``."""

        walker = TreeWalker(
            path,
            self._queue,
            self._factory,
            self.build_filter_set(path),
            counter=self._counter,
            latch=self._latch,
            monitor=self._monitor,
            token=token,
            put_interval=self._put_interval,
        )
        logger.info('Queuing scan of: "%s".', walker.root)
        return walker

    @overload
    def scan(self, path: PathInput) -> ScanHandle: ...

    @overload
    def scan(self, path: Iterable[PathInput]) -> list[ScanHandle]: ...

    def scan(self, path: Any) -> ScanHandle | list[ScanHandle]:
        """스캔 작업을 대기열에 넣습니다./Queue a scan job without blocking.

        Given an iterable of paths, queues one job per path in order and
        returns their handles. Call :meth:`await_termination` to block.
        """

        if isinstance(path, (str, os.PathLike)):
            return self._submit(path)
        return [self._submit(item) for item in path]

    def _submit(self, path: PathInput) -> ScanHandle:
        self._ensure_open()
        token = CancellationToken()
        walker = self.create_visitor(path, token)
        with self._lock:
            self._ensure_open()
            future = self._executor.submit(walker.run)
            handle = ScanHandle(walker.root, future, token, walker.state)
            self._handles = [item for item in self._handles if not item.done()]
            self._futures = [item for item in self._futures if not item.done()]
            self._handles.append(handle)
            self._futures.append(future)
        return handle

    def _ensure_open(self) -> None:
        if self._closed:
            raise ScanSchedulerClosedError("scanner has been shut down")

    def await_termination(self, timeout: float | None = None) -> bool:
        """모든 작업 완료를 기다립니다./Block until every submitted job is done.

        Returns False if the timeout elapsed first.
        """

        with self._lock:
            futures = list(self._futures)
        _done, not_done = concurrent.futures.wait(futures, timeout=timeout)
        return not not_done

    def shutdown(self, wait: bool = True, *, cancel_pending: bool = False) -> None:
        """스캐너를 종료합니다./Stop accepting jobs, optionally cancelling queued ones."""

        with self._lock:
            self._closed = True
        self._executor.shutdown(wait=wait, cancel_futures=cancel_pending)

    def shutdown_now(self) -> list[Path]:
        """실행 중 작업까지 중단./Cancel every job; return roots that never started."""

        with self._lock:
            self._closed = True
            handles = list(self._handles)
        never_started = [
            handle.root for handle in handles if not handle.running() and not handle.done()
        ]
        for handle in handles:
            handle.cancel()
        self._executor.shutdown(wait=False, cancel_futures=True)
        return never_started

    def close(self) -> None:
        self.shutdown(wait=True)

    def __enter__(self) -> "Scanner":
        return self

    def __exit__(
        self,
        exc_type: Optional[Type[BaseException]],
        exc: Optional[BaseException],
        tb: Optional[TracebackType],
    ) -> None:
        # A job blocked on a full queue never finishes once its consumer is gone.
        if exc_type is not None:
            self.shutdown_now()
        self.close()


__all__ = ["Scanner"]
