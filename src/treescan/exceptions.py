"""스캐너 전용 예외를 정의합니다./Define scanner specific exceptions."""

from __future__ import annotations

from dataclasses import dataclass


class ScanErrorBase(RuntimeError):
    """스캔 중 발생한 오류 기본 클래스./Base class for scan errors."""


class ScanCancelledError(ScanErrorBase):
    """취소 토큰으로 스캔이 중단됨./Scan stopped by cancellation token."""


class LatchSealedError(ScanErrorBase):
    """봉인된 래치에 신호를 보냄./Raised when signalling a sealed latch."""


class ScanSchedulerClosedError(ScanErrorBase):
    """종료된 스캐너에 작업을 제출함./Raised when submitting to a shut down scanner."""


@dataclass(slots=True, eq=False)
class ScanConfigError(ScanErrorBase):
    """잘못된 설정 값을 표현./Represent an invalid configuration value."""

    message: str
    option: str | None = None

    def __str__(self) -> str:
        """사람 친화적 메시지를 생성./Build human friendly message."""

        if self.option:
            return f"[{self.option}] {self.message}"
        return self.message


@dataclass(slots=True, eq=False)
class ScanTraversalError(ScanErrorBase):
    """디렉터리 순회 중 I/O 오류./I/O failure while walking a tree."""

    message: str
    path: str | None = None

    def __str__(self) -> str:
        """오류 경로를 포함한 메시지./Message including the failing path."""

        if self.path:
            return f"{self.message}: {self.path}"
        return self.message


__all__ = [
    "LatchSealedError",
    "ScanCancelledError",
    "ScanConfigError",
    "ScanErrorBase",
    "ScanSchedulerClosedError",
    "ScanTraversalError",
]
