"""경로에서 항목을 만드는 팩토리./Factories turning paths into queue entries."""

from __future__ import annotations

import hashlib
from pathlib import Path
from typing import Protocol, TypeVar

from .models import FileEntry

E_co = TypeVar("E_co", covariant=True)


class EntryFactory(Protocol[E_co]):
    """경로→항목 변환기./Build one entry per accepted path."""

    def create(self, path: Path) -> E_co: ...


def sha256_text(text: str) -> str:
    """문자열의 SHA-256 해시를 계산합니다./Compute SHA-256 for text."""

    digest = hashlib.sha256()
    digest.update(text.encode("utf-8", errors="ignore"))
    return digest.hexdigest()


class FileEntryFactory:
    """stat 기반 기본 팩토리./Default factory producing :class:`FileEntry`."""

    def __init__(self, *, follow_symlinks: bool = True) -> None:
        self._follow_symlinks = follow_symlinks

    def create(self, path: Path) -> FileEntry:
        stat_result = path.stat() if self._follow_symlinks else path.lstat()
        return FileEntry(
            path=str(path),
            safe_id=sha256_text(str(path)),
            name=path.name,
            ext=path.suffix.lower(),
            size=int(stat_result.st_size),
            mtime=int(stat_result.st_mtime),
        )


__all__ = ["EntryFactory", "FileEntryFactory", "sha256_text"]
