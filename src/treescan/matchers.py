"""경로 필터 판별자./Path filter matchers.

Built-in matchers classify hidden files (leading dot, or the DOS ``hidden``
attribute where the filesystem exposes it) and well-known OS artifacts.
``GlobMatcher`` compiles user include/exclude patterns.
"""

from __future__ import annotations

import os
import stat
from dataclasses import dataclass, field
from pathlib import Path

import pathspec

from .exceptions import ScanConfigError

SYSTEM_FILE_NAMES: frozenset[str] = frozenset(
    {
        # macOS
        ".DS_Store",
        "._.DS_Store",
        ".AppleDouble",
        ".Spotlight-V100",
        ".Trashes",
        ".fseventsd",
        ".TemporaryItems",
        ".DocumentRevisions-V100",
        ".VolumeIcon.icns",
        ".apdisk",
        # Windows
        "Thumbs.db",
        "ehthumbs.db",
        "ehthumbs_vista.db",
        "Desktop.ini",
        "desktop.ini",
        "$RECYCLE.BIN",
        "System Volume Information",
        # KDE
        ".directory",
    }
)


def read_dos_attributes(path: Path) -> int | None:
    """DOS 속성 비트를 읽습니다./Return DOS attribute bits, None if unsupported."""

    return getattr(os.lstat(path), "st_file_attributes", None)


def supports_dos_attributes(path: Path) -> bool:
    """파일 시스템의 DOS 속성 지원 여부./Check if ``path``'s filesystem exposes DOS attributes."""

    try:
        return read_dos_attributes(path) is not None
    except OSError:
        return False


@dataclass(frozen=True, slots=True)
class PosixHiddenFileMatcher:
    """점으로 시작하는 이름./Match names starting with a dot."""

    def matches(self, path: Path, relative: str) -> bool:
        return path.name.startswith(".")


@dataclass(frozen=True, slots=True)
class DosHiddenFileMatcher:
    """DOS hidden 속성./Match files carrying the DOS hidden attribute."""

    def matches(self, path: Path, relative: str) -> bool:
        attributes = read_dos_attributes(path)
        return attributes is not None and bool(attributes & stat.FILE_ATTRIBUTE_HIDDEN)


@dataclass(frozen=True, slots=True)
class SystemFileMatcher:
    """운영체제 생성 파일./Match OS-generated artifacts regardless of host OS."""

    names: frozenset[str] = SYSTEM_FILE_NAMES

    def matches(self, path: Path, relative: str) -> bool:
        return path.name in self.names


def _invalid(pattern: str, reason: str) -> ScanConfigError:
    return ScanConfigError(f"invalid glob {pattern!r}: {reason}", option="pattern")


def _split_alternatives(body: str) -> list[str]:
    alternatives: list[str] = []
    current: list[str] = []
    index = 0
    while index < len(body):
        char = body[index]
        if char == "\\" and index + 1 < len(body):
            current.append(body[index : index + 2])
            index += 2
            continue
        if char == ",":
            alternatives.append("".join(current))
            current = []
        else:
            current.append(char)
        index += 1
    alternatives.append("".join(current))
    return alternatives


def expand_braces(pattern: str) -> list[str]:
    """중괄호 대안을 펼칩니다./Expand ``{a,b}`` groups into separate patterns.

    Groups do not nest. A backslash escapes a brace or comma.
    """

    index = 0
    while index < len(pattern):
        char = pattern[index]
        if char == "\\":
            index += 2
            continue
        if char == "{":
            break
        index += 1
    else:
        return [pattern]

    end = index + 1
    while end < len(pattern):
        char = pattern[end]
        if char == "\\":
            end += 2
            continue
        if char == "{":
            raise _invalid(pattern, "cannot nest groups")
        if char == "}":
            break
        end += 1
    else:
        raise _invalid(pattern, "missing '}'")

    prefix, body, rest = pattern[:index], pattern[index + 1 : end], pattern[end + 1 :]
    tails = expand_braces(rest)
    return [prefix + choice + tail for choice in _split_alternatives(body) for tail in tails]


def _literal_lead(line: str) -> str:
    # Leading '!' and '#' are literal characters in a glob.
    if line.startswith(("!", "#")):
        return "\\" + line
    return line


@dataclass(frozen=True, slots=True)
class GlobMatcher:
    """사용자 글롭 판별자./Match paths below the scan root against a glob pattern.

    Patterns use gitignore wildcard syntax as implemented by ``pathspec``:
    ``*`` and ``?`` stay within one segment, ``**`` spans segments, ``[...]``
    and ``[!...]`` are character classes and a backslash escapes. A leading
    ``/`` anchors the pattern to the scan root; a pattern without any inner
    ``/`` matches at any depth. A pattern matching a directory also matches
    everything below it. ``{a,b}`` groups are expanded before compilation.
    """

    pattern: str
    _spec: pathspec.PathSpec = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        if not self.pattern.strip():
            raise _invalid(self.pattern, "empty pattern")
        lines = [_literal_lead(line) for line in expand_braces(self.pattern)]
        try:
            spec = pathspec.PathSpec.from_lines("gitignore", lines)
        except ValueError as exc:
            raise _invalid(self.pattern, str(exc)) from exc
        object.__setattr__(self, "_spec", spec)

    def matches(self, path: Path, relative: str) -> bool:
        return self._spec.match_file(relative)


__all__ = [
    "DosHiddenFileMatcher",
    "GlobMatcher",
    "PosixHiddenFileMatcher",
    "SYSTEM_FILE_NAMES",
    "SystemFileMatcher",
    "expand_braces",
    "read_dos_attributes",
    "supports_dos_attributes",
]
