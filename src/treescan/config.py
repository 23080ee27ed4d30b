"""스캐너 설정 모델./Scanner configuration model."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Mapping

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from .exceptions import ScanConfigError

_FLAG_FIELDS = ("include_hidden_files", "include_os_files", "follow_symlinks")
_PATTERN_FIELDS = ("include_pattern", "exclude_pattern")


class ScannerConfig(BaseModel):
    """스캐너 옵션 집합./Recognised scanner options.

    Option names use the camelCase aliases (``includeHiddenFiles``,
    ``includeOSFiles``, ``includePattern``, ``excludePattern``,
    ``followSymlinks``, ``maxDepth``); values may be raw strings.
    Unknown options are ignored.
    """

    model_config = ConfigDict(extra="ignore", populate_by_name=True, frozen=True)

    include_hidden_files: bool = Field(default=False, alias="includeHiddenFiles")
    include_os_files: bool = Field(default=False, alias="includeOSFiles")
    include_pattern: tuple[str, ...] = Field(default=(), alias="includePattern")
    exclude_pattern: tuple[str, ...] = Field(default=(), alias="excludePattern")
    follow_symlinks: bool = Field(default=False, alias="followSymlinks")
    max_depth: int | None = Field(default=None, ge=0, alias="maxDepth")

    @field_validator(*_FLAG_FIELDS, mode="before")
    @classmethod
    def _flag_without_value(cls, value: Any) -> Any:
        """값 없는 플래그는 참./A flag given without a value means true."""

        if isinstance(value, str) and not value.strip():
            return True
        return value

    @field_validator(*_PATTERN_FIELDS, mode="before")
    @classmethod
    def _wrap_single_pattern(cls, value: Any) -> Any:
        """단일 패턴을 튜플로./Wrap a single pattern string."""

        if value is None:
            return ()
        if isinstance(value, str):
            return (value,)
        return value

    @field_validator("max_depth", mode="before")
    @classmethod
    def _blank_depth(cls, value: Any) -> Any:
        if isinstance(value, str) and not value.strip():
            return None
        return value

    @classmethod
    def from_options(cls, options: Mapping[str, Any]) -> "ScannerConfig":
        """원시 옵션 매핑에서 생성./Build from a mapping of raw option values."""

        try:
            return cls.model_validate(dict(options))
        except ValidationError as exc:
            error = exc.errors()[0]
            location = ".".join(str(part) for part in error.get("loc", ()))
            raise ScanConfigError(error.get("msg", str(exc)), option=location or None) from exc

    @classmethod
    def from_file(cls, config_file: Path) -> "ScannerConfig":
        """YAML 설정 파일에서 로드./Load options from a YAML file."""

        if not config_file.exists():
            return cls()
        try:
            data = yaml.safe_load(config_file.read_text(encoding="utf-8"))
        except yaml.YAMLError as exc:
            raise ScanConfigError(f"cannot parse {config_file}: {exc}") from exc
        if data is None:
            return cls()
        if not isinstance(data, dict):
            raise ScanConfigError("configuration file must contain a mapping")
        return cls.from_options(data)

    def explicit_options(self) -> set[str]:
        """명시적으로 설정된 필드./Names of fields that were explicitly given."""

        return set(self.model_fields_set)


__all__ = ["ScannerConfig"]
