"""필터 판별자를 검증합니다./Validate filter matchers."""

from __future__ import annotations

import stat
from pathlib import Path

import pytest

from treescan import matchers
from treescan.exceptions import ScanConfigError
from treescan.matchers import (
    DosHiddenFileMatcher,
    GlobMatcher,
    PosixHiddenFileMatcher,
    SystemFileMatcher,
    expand_braces,
    supports_dos_attributes,
)


@pytest.mark.parametrize(
    ("name", "expected"),
    [(".hidden.txt", True), (".git", True), ("a.txt", False), ("dot.", False)],
)
def test_posix_hidden_matcher_checks_final_segment(name: str, expected: bool) -> None:
    """마지막 구간의 점 접두어만 본다./Only the final segment's leading dot counts."""

    assert PosixHiddenFileMatcher().matches(Path("/data/.cache") / name, name) is expected


def test_system_matcher_is_independent_of_host() -> None:
    """OS 산출물 이름을 인식./Recognise OS artifacts from every platform."""

    matcher = SystemFileMatcher()
    for name in ("Thumbs.db", ".DS_Store", "desktop.ini", "$RECYCLE.BIN", ".Spotlight-V100"):
        assert matcher.matches(Path("/vol") / name, name)
    assert not matcher.matches(Path("/vol/thumbs.db.bak"), "thumbs.db.bak")
    assert not matcher.matches(Path("/Thumbs.db/report.pdf"), "report.pdf")


def test_dos_hidden_matcher_reads_attribute_bit(monkeypatch: pytest.MonkeyPatch) -> None:
    """hidden 속성 비트를 확인./Check the DOS hidden bit."""

    attributes = {
        "hidden.txt": stat.FILE_ATTRIBUTE_HIDDEN | stat.FILE_ATTRIBUTE_ARCHIVE,
        "plain.txt": stat.FILE_ATTRIBUTE_ARCHIVE,
    }
    monkeypatch.setattr(matchers, "read_dos_attributes", lambda path: attributes[path.name])
    matcher = DosHiddenFileMatcher()
    assert matcher.matches(Path("hidden.txt"), "hidden.txt")
    assert not matcher.matches(Path("plain.txt"), "plain.txt")


def test_dos_hidden_matcher_without_attribute_support(
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    """속성 미지원은 오류가 아님./Missing attribute support is not an error."""

    monkeypatch.setattr(matchers, "read_dos_attributes", lambda path: None)
    assert not DosHiddenFileMatcher().matches(Path("anything"), "anything")


def test_supports_dos_attributes_is_a_capability_query(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    """stat 결과로 지원 여부를 판단./Support follows the stat result, not the OS name."""

    monkeypatch.setattr(matchers, "read_dos_attributes", lambda path: 0)
    assert supports_dos_attributes(tmp_path)
    monkeypatch.setattr(matchers, "read_dos_attributes", lambda path: None)
    assert not supports_dos_attributes(tmp_path)


def test_supports_dos_attributes_missing_path() -> None:
    """없는 경로는 미지원으로 처리./A missing path reports no support."""

    assert not supports_dos_attributes(Path("/definitely/not/here"))


@pytest.mark.parametrize(
    ("pattern", "relative", "expected"),
    [
        ("**/*.pdf", "sub/b.pdf", True),
        ("**/*.pdf", "a.pdf", True),
        ("**/*.pdf", "a.txt", False),
        ("*.pdf", "sub/a.pdf", True),
        ("/*.pdf", "a.pdf", True),
        ("/*.pdf", "sub/a.pdf", False),
        ("data/*", "data/a.txt", True),
        ("data/*", "data/sub/b.pdf", False),
        ("data/**", "data/sub/b.pdf", True),
        ("data/**", "other/data/b.pdf", False),
        ("file?.txt", "x/file1.txt", True),
        ("file?.txt", "x/file10.txt", False),
        ("[abc].txt", "x/b.txt", True),
        ("[abc].txt", "d.txt", False),
        ("[!abc].txt", "d.txt", True),
        ("[!abc].txt", "a.txt", False),
        ("[a-c]*.log", "bravo.log", True),
        ("[]]x.txt", "]x.txt", True),
        ("[]]x.txt", "ax.txt", False),
        ("*.{tif,pdf}", "scans/page.tif", True),
        ("*.{tif,pdf}", "scans/page.pdf", True),
        ("*.{tif,pdf}", "scans/page.png", False),
        ("\\*.txt", "x/*.txt", True),
        ("\\*.txt", "x/a.txt", False),
        ("a+b(1).txt", "x/a+b(1).txt", True),
        ("node_modules", "repo/node_modules", True),
        ("node_modules", "repo/node_modules/pkg/index.js", True),
        ("!important.txt", "!important.txt", True),
        ("!important.txt", "other.txt", False),
        ("#draft.md", "#draft.md", True),
    ],
)
def test_glob_matcher_semantics(pattern: str, relative: str, expected: bool) -> None:
    """루트 기준 상대 경로로 판별./Globs match the POSIX path relative to the scan root."""

    path = Path("/data") / relative
    assert GlobMatcher(pattern).matches(path, relative) is expected


def test_glob_matcher_ignores_absolute_path() -> None:
    """루트 표기와 무관한 결과./The root's spelling does not change the result."""

    matcher = GlobMatcher("data/**")
    assert not matcher.matches(Path("/data/a.txt"), "a.txt")
    assert matcher.matches(Path("a.txt"), "data/a.txt")


@pytest.mark.parametrize(
    ("pattern", "expected"),
    [
        ("*.{tif,pdf}", ["*.tif", "*.pdf"]),
        ("{a,b}/{c,d}", ["a/c", "a/d", "b/c", "b/d"]),
        ("x{,y}.txt", ["x.txt", "xy.txt"]),
        ("{a\\,b,c}", ["a\\,b", "c"]),
        ("\\{a,b}", ["\\{a,b}"]),
        ("plain.txt", ["plain.txt"]),
    ],
)
def test_expand_braces(pattern: str, expected: list[str]) -> None:
    """중괄호 대안 전개./Brace groups expand left to right."""

    assert expand_braces(pattern) == expected


@pytest.mark.parametrize(
    "pattern",
    ["**/{a,{b,c}}", "**/{a,b", "trailing\\", "", "   "],
)
def test_glob_matcher_rejects_bad_syntax(pattern: str) -> None:
    """잘못된 글롭은 설정 오류./Bad globs raise configuration errors."""

    with pytest.raises(ScanConfigError) as excinfo:
        GlobMatcher(pattern)
    assert pattern in str(excinfo.value)
    assert excinfo.value.option == "pattern"
