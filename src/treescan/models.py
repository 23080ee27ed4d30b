"""스캐너 데이터 모델 정의./Define scanner data models."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Protocol, Sequence, TypeVar

T_contra = TypeVar("T_contra", contravariant=True)

ProgressCallback = Callable[["ProgressEvent"], None]


class PathMatcher(Protocol):
    """경로 판별자 인터페이스./Predicate over a path and its POSIX form below the scan root."""

    def matches(self, path: Path, relative: str) -> bool: ...


class EntryQueue(Protocol[T_contra]):
    """차단형 대상 큐./Blocking target queue such as ``queue.Queue``."""

    def put(self, item: T_contra, block: bool = True, timeout: float | None = None) -> None: ...


@dataclass(frozen=True, slots=True)
class FilterSet:
    """작업별 필터 스냅샷./Immutable per-job filter snapshot.

    A path is accepted when it matches no ``exclude`` matcher and either
    ``include`` is empty or at least one ``include`` matcher accepts it.
    """

    exclude: tuple[PathMatcher, ...] = ()
    include: tuple[PathMatcher, ...] = ()
    max_depth: int | None = None
    follow_symlinks: bool = False

    def is_excluded(self, path: Path, relative: str) -> bool:
        """제외 규칙 일치 여부./Return True if any exclude matcher matches."""

        return any(matcher.matches(path, relative) for matcher in self.exclude)

    def is_included(self, path: Path, relative: str) -> bool:
        """포함 규칙 일치 여부./Return True if include rules accept the path."""

        if not self.include:
            return True
        return any(matcher.matches(path, relative) for matcher in self.include)

    def allows_depth(self, depth: int) -> bool:
        """깊이 제한 검사./Return True if ``depth`` is within the limit."""

        return self.max_depth is None or depth <= self.max_depth


@dataclass(slots=True)
class FileEntry:
    """스캔된 단일 파일 메타./Metadata for a queued file."""

    path: str
    safe_id: str
    name: str
    ext: str
    size: int
    mtime: int

    def to_payload(self) -> dict[str, object]:
        """JSON 직렬화용 딕트를 생성./Return dict for JSON serialisation."""

        return {
            "path": self.path,
            "safe_id": self.safe_id,
            "name": self.name,
            "ext": self.ext,
            "size": self.size,
            "mtime": self.mtime,
        }


@dataclass(slots=True)
class ScanError:
    """스캔 중 발생한 오류 정보를 표현./Represent an error during scanning."""

    path: str
    message: str


@dataclass(slots=True)
class ProgressEvent:
    """진행 콜백 이벤트./Event payload for progress callback."""

    queued: int
    current_path: str | None


@dataclass(slots=True)
class ScanStatistics:
    """단일 작업 요약 통계./Statistics for a single scan job."""

    root: str
    visited: int
    queued: int
    skipped: int
    failed: int
    duration_seconds: float
    errors: Sequence[ScanError] = ()

    def to_payload(self) -> dict[str, object]:
        """JSON 직렬화용 딕트./Return dict for JSON serialisation."""

        return {
            "root": self.root,
            "visited": self.visited,
            "queued": self.queued,
            "skipped": self.skipped,
            "failed": self.failed,
            "duration_seconds": self.duration_seconds,
            "errors": [{"path": error.path, "message": error.message} for error in self.errors],
        }


__all__ = [
    "EntryQueue",
    "FileEntry",
    "FilterSet",
    "PathMatcher",
    "ProgressCallback",
    "ProgressEvent",
    "ScanError",
    "ScanStatistics",
]
