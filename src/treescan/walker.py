"""디렉터리 순회 엔진./Directory tree-walk engine."""

from __future__ import annotations

import logging
import os
import queue
import stat
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Iterator

from .exceptions import ScanCancelledError, ScanTraversalError
from .factory import EntryFactory
from .models import EntryQueue, FilterSet
from .signals import CancellationToken, ProgressMonitor, SealableLatch
from .state import QueuedCounter, ScanState

logger = logging.getLogger(__name__)

DirectoryKey = tuple[int, int]


@dataclass(slots=True)
class _Frame:
    path: Path
    relative: str
    depth: int
    entries: Iterator[os.DirEntry[str]]
    key: DirectoryKey | None = None


class TreeWalker:
    """필터를 적용해 트리를 순회하고 큐에 넣습니다./Walk one tree and queue accepted files.

    The walk is depth-first, visiting each directory's entries in name order.
    Entries listed directly in the root are at depth 0. Every accepted
    regular file becomes one entry which is put on the target queue,
    blocking while the queue is full. After each put the lifetime counter,
    the latch and the monitor are signalled, in that order.

    Matchers receive each entry's path together with its POSIX form relative
    to the root, so globs give the same result however the root is spelled.

    :meth:`run` returns the root path. It raises :class:`ScanTraversalError`
    when listing a directory or reading attributes fails and
    :class:`ScanCancelledError` when the token is cancelled. Entries queued
    before either stay in the queue.
    """

    def __init__(
        self,
        root: str | os.PathLike[str],
        target: EntryQueue[Any],
        factory: EntryFactory[Any],
        filters: FilterSet,
        *,
        counter: QueuedCounter | None = None,
        latch: SealableLatch | None = None,
        monitor: ProgressMonitor | None = None,
        token: CancellationToken | None = None,
        put_interval: float = 0.1,
    ) -> None:
        self._root = Path(root)
        self._queue = target
        self._factory = factory
        self._filters = filters
        self._counter = counter
        self._latch = latch
        self._monitor = monitor
        self._token = token if token is not None else CancellationToken()
        self._put_interval = put_interval
        self._ancestors: set[DirectoryKey] = set()
        self.state = ScanState(root=str(self._root))

    @property
    def root(self) -> Path:
        return self._root

    @property
    def filters(self) -> FilterSet:
        return self._filters

    @property
    def token(self) -> CancellationToken:
        return self._token

    def run(self) -> Path:
        """트리 전체를 순회합니다./Walk the whole tree and return the root."""

        self.state.start()
        logger.info('Starting scan of: "%s".', self._root)
        try:
            self._walk()
        except ScanCancelledError:
            logger.info(
                'Scan of "%s" cancelled after queuing %d entries.', self._root, self.state.queued
            )
            raise
        except OSError as exc:
            failed = str(exc.filename) if exc.filename is not None else str(self._root)
            logger.error('Scan of "%s" failed at "%s": %s', self._root, failed, exc)
            raise ScanTraversalError(exc.strerror or str(exc), path=failed) from exc
        finally:
            self.state.finish()
        logger.info(
            'Completed scan of "%s": %d queued, %d skipped, %d failed.',
            self._root,
            self.state.queued,
            self.state.skipped,
            self.state.failed,
        )
        return self._root

    def _walk(self) -> None:
        mode = os.stat(self._root).st_mode
        if stat.S_ISDIR(mode):
            self._walk_directory(self._root)
        elif stat.S_ISREG(mode):
            self._visit_root_file(self._root)

    def _visit_root_file(self, path: Path) -> None:
        self._token.raise_if_cancelled()
        self.state.visited += 1
        relative = path.name
        if self._filters.is_excluded(path, relative) or not self._filters.is_included(
            path, relative
        ):
            self.state.skipped += 1
            return
        self._queue_path(path)

    def _walk_directory(self, root: Path) -> None:
        first = self._open(root, "", 0)
        stack: list[_Frame] = [first] if first is not None else []
        try:
            while stack:
                frame = stack[-1]
                entry = next(frame.entries, None)
                if entry is None:
                    stack.pop()
                    if frame.key is not None:
                        self._ancestors.discard(frame.key)
                    continue
                relative = f"{frame.relative}/{entry.name}" if frame.relative else entry.name
                child = self._visit(entry, relative, frame.depth)
                if child is None:
                    continue
                opened = self._open(child, relative, frame.depth + 1)
                if opened is not None:
                    stack.append(opened)
        finally:
            self._ancestors.clear()

    def _open(self, path: Path, relative: str, depth: int) -> _Frame | None:
        key: DirectoryKey | None = None
        if self._filters.follow_symlinks:
            stat_result = os.stat(path)
            key = (stat_result.st_dev, stat_result.st_ino)
            if key in self._ancestors:
                logger.warning('Skipping symlink loop at "%s".', path)
                return None
            self._ancestors.add(key)
        with os.scandir(path) as iterator:
            entries = sorted(iterator, key=lambda item: item.name)
        return _Frame(path=path, relative=relative, depth=depth, entries=iter(entries), key=key)

    def _visit(self, entry: os.DirEntry[str], relative: str, depth: int) -> Path | None:
        """항목 하나를 평가합니다./Evaluate one entry; return a directory to descend into."""

        self._token.raise_if_cancelled()
        path = Path(entry.path)
        follow = self._filters.follow_symlinks
        self.state.visited += 1
        self.state.current_path = entry.path
        if self._filters.is_excluded(path, relative):
            self.state.skipped += 1
            logger.debug('Excluded "%s".', path)
            return None
        if entry.is_dir(follow_symlinks=follow):
            if not self._filters.allows_depth(depth + 1):
                return None
            return path
        if not entry.is_file(follow_symlinks=follow):
            return None
        if not self._filters.is_included(path, relative):
            self.state.skipped += 1
            return None
        self._queue_path(path)
        return None

    def _queue_path(self, path: Path) -> None:
        try:
            entry = self._factory.create(path)
        except Exception as exc:  # caller-supplied factory
            logger.warning('Could not create entry for "%s": %s', path, exc)
            self.state.record_error(str(path), exc)
            return
        self._put(entry)
        self.state.queued += 1
        if self._counter is not None:
            self._counter.increment()
        if self._latch is not None:
            self._latch.signal()
        if self._monitor is not None:
            self._notify(self._monitor, path, entry)

    def _put(self, entry: Any) -> None:
        while True:
            self._token.raise_if_cancelled()
            try:
                self._queue.put(entry, timeout=self._put_interval)
                return
            except queue.Full:
                continue

    def _notify(self, monitor: ProgressMonitor, path: Path, entry: Any) -> None:
        try:
            monitor.notify(entry)
        except Exception:
            logger.warning('Progress monitor failed for "%s".', path, exc_info=True)


__all__ = ["TreeWalker"]
