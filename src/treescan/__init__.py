"""비동기 디렉터리 트리 스캐너 API./Asynchronous directory tree scanner API."""

from __future__ import annotations

from .config import ScannerConfig
from .exceptions import (
    LatchSealedError,
    ScanCancelledError,
    ScanConfigError,
    ScanErrorBase,
    ScanSchedulerClosedError,
    ScanTraversalError,
)
from .factory import EntryFactory, FileEntryFactory
from .handle import ScanHandle
from .matchers import (
    DosHiddenFileMatcher,
    GlobMatcher,
    PosixHiddenFileMatcher,
    SystemFileMatcher,
    supports_dos_attributes,
)
from .models import FileEntry, FilterSet, ProgressEvent, ScanError, ScanStatistics
from .scheduler import Scanner
from .signals import CancellationToken, ProgressMonitor, SealableLatch, ThrottledMonitor
from .state import QueuedCounter, ScanState
from .walker import TreeWalker

__all__ = [
    "CancellationToken",
    "DosHiddenFileMatcher",
    "EntryFactory",
    "FileEntry",
    "FileEntryFactory",
    "FilterSet",
    "GlobMatcher",
    "LatchSealedError",
    "PosixHiddenFileMatcher",
    "ProgressEvent",
    "ProgressMonitor",
    "QueuedCounter",
    "ScanCancelledError",
    "ScanConfigError",
    "ScanError",
    "ScanErrorBase",
    "ScanHandle",
    "ScanSchedulerClosedError",
    "ScanState",
    "ScanStatistics",
    "ScanTraversalError",
    "Scanner",
    "ScannerConfig",
    "SealableLatch",
    "SystemFileMatcher",
    "ThrottledMonitor",
    "TreeWalker",
    "supports_dos_attributes",
]
