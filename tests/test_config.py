"""스캐너 설정 모델 테스트(KR). Scanner configuration model tests (EN)."""

from __future__ import annotations

from pathlib import Path

import pytest

from treescan.config import ScannerConfig
from treescan.exceptions import ScanConfigError


def test_defaults_ignore_hidden_and_os_files() -> None:
    """기본값 확인 · Defaults ignore hidden and OS files."""

    config = ScannerConfig()
    assert not config.include_hidden_files
    assert not config.include_os_files
    assert not config.follow_symlinks
    assert config.max_depth is None
    assert config.explicit_options() == set()


def test_from_options_parses_raw_strings() -> None:
    """문자열 값을 변환 · Raw strings are coerced by option type."""

    config = ScannerConfig.from_options(
        {
            "includeHiddenFiles": "true",
            "includeOSFiles": "",
            "followSymlinks": "false",
            "maxDepth": "2",
            "includePattern": "**/*.pdf",
            "excludePattern": ["**/build", "**/dist"],
        }
    )
    assert config.include_hidden_files
    assert config.include_os_files
    assert not config.follow_symlinks
    assert config.max_depth == 2
    assert config.include_pattern == ("**/*.pdf",)
    assert config.exclude_pattern == ("**/build", "**/dist")
    assert config.explicit_options() == {
        "include_hidden_files",
        "include_os_files",
        "follow_symlinks",
        "max_depth",
        "include_pattern",
        "exclude_pattern",
    }


def test_field_names_are_accepted() -> None:
    """필드 이름으로도 생성 · Python field names work as well as aliases."""

    config = ScannerConfig(max_depth=1, follow_symlinks=True)
    assert config.max_depth == 1
    assert config.explicit_options() == {"max_depth", "follow_symlinks"}


def test_unknown_options_are_ignored() -> None:
    """알 수 없는 옵션 무시 · Unknown options are ignored."""

    config = ScannerConfig.from_options({"colour": "blue", "maxDepth": ""})
    assert config.max_depth is None
    assert config.explicit_options() == {"max_depth"}


@pytest.mark.parametrize(
    ("options", "option"),
    [
        ({"maxDepth": "two"}, "maxDepth"),
        ({"maxDepth": -3}, "maxDepth"),
        ({"followSymlinks": "perhaps"}, "followSymlinks"),
    ],
)
def test_malformed_values_raise_config_error(options: dict[str, object], option: str) -> None:
    """잘못된 값은 오류 · Malformed values raise ScanConfigError."""

    with pytest.raises(ScanConfigError) as excinfo:
        ScannerConfig.from_options(options)
    assert excinfo.value.option == option
    assert str(excinfo.value).startswith(f"[{option}]")


def test_from_file_reads_yaml(tmp_path: Path) -> None:
    """YAML 파일 로드 · Options load from a YAML file."""

    config_file = tmp_path / "scan.yaml"
    config_file.write_text(
        "includeHiddenFiles: yes\nmaxDepth: 1\nexcludePattern:\n  - '**/node_modules'\n",
        encoding="utf-8",
    )
    config = ScannerConfig.from_file(config_file)
    assert config.include_hidden_files
    assert config.max_depth == 1
    assert config.exclude_pattern == ("**/node_modules",)


def test_from_file_missing_or_empty_gives_defaults(tmp_path: Path) -> None:
    """없거나 빈 파일은 기본값 · Missing or empty files give defaults."""

    assert ScannerConfig.from_file(tmp_path / "absent.yaml") == ScannerConfig()
    empty = tmp_path / "empty.yaml"
    empty.write_text("", encoding="utf-8")
    assert ScannerConfig.from_file(empty).explicit_options() == set()


def test_from_file_rejects_non_mapping(tmp_path: Path) -> None:
    """매핑이 아니면 오류 · A non-mapping document is rejected."""

    config_file = tmp_path / "list.yaml"
    config_file.write_text("- maxDepth\n- 2\n", encoding="utf-8")
    with pytest.raises(ScanConfigError):
        ScannerConfig.from_file(config_file)

    broken = tmp_path / "broken.yaml"
    broken.write_text("maxDepth: [1\n", encoding="utf-8")
    with pytest.raises(ScanConfigError) as excinfo:
        ScannerConfig.from_file(broken)
    assert "cannot parse" in str(excinfo.value)
