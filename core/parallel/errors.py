"""
core/parallel/errors.py - 에러 수집 및 관리

호스트/리소스별 수집 작업에서 발생하는 에러를 일관되게 분류하고 수집합니다.
수집된 에러는 운영자용 경고로 로깅되며, 인벤토리 문서와 함께 반환됩니다.

주요 구성 요소:
- ErrorSeverity: 에러 심각도 분류
- CollectedError: 수집된 에러 상세 정보
- ErrorCollector: 스레드 세이프 에러 수집기
- categorize_error: 예외를 ErrorCategory로 분류
- describe_error: 호스트 이름 + 짧은 사유 메시지 생성
- try_or_default: 실패 시 기본값 반환 헬퍼

Example:
    collector = ErrorCollector("clients")

    try:
        record = collect_host("client1", runner, settings)
    except Exception as e:
        collector.collect(e, "client1", "niminfo")

    if collector.has_errors:
        print(collector.get_summary())
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import TypeVar

from core.exceptions import CommandExecutionError, RemoteExecutionError, is_timeout

from .types import ErrorCategory, TaskError

logger = logging.getLogger(__name__)

T = TypeVar("T")


class ErrorSeverity(Enum):
    """에러 심각도 분류

    로깅 레벨과 보고 여부를 결정합니다.
    """

    CRITICAL = "critical"  # 수집 단계 전체 실패
    WARNING = "warning"  # 호스트/리소스 단위 실패 - 보고하되 계속 진행
    INFO = "info"  # 정보성
    DEBUG = "debug"  # 디버그 - 개발 시에만 필요


def categorize_error(error: BaseException) -> ErrorCategory:
    """예외를 ErrorCategory로 분류

    Args:
        error: 분류할 예외

    Returns:
        분류된 에러 카테고리
    """
    if isinstance(error, Exception) and is_timeout(error):
        return ErrorCategory.TIMEOUT
    if isinstance(error, (RemoteExecutionError, CommandExecutionError)):
        if error.exit_code == 127:
            return ErrorCategory.NOT_FOUND
        return ErrorCategory.EXECUTION_ERROR
    if isinstance(error, FileNotFoundError):
        return ErrorCategory.NOT_FOUND
    if isinstance(error, (ValueError, UnicodeDecodeError)):
        return ErrorCategory.PARSE_ERROR
    return ErrorCategory.UNKNOWN


def get_error_code(error: BaseException) -> str:
    """예외에서 에러 코드 추출 (종료 코드가 있으면 포함)"""
    exit_code = getattr(error, "exit_code", None)
    if exit_code is not None:
        return f"{type(error).__name__}({exit_code})"
    return type(error).__name__


def describe_error(error: BaseException, identifier: str) -> str:
    """운영자용 한 줄 메시지 생성

    - 타임아웃: "<host> timed out"
    - 실행 실패: "<host>: <message>"
    - 그 외: "<host> error: <ExceptionClass>"
    """
    category = categorize_error(error)
    if category == ErrorCategory.TIMEOUT:
        return f"{identifier} timed out"
    if category in (ErrorCategory.EXECUTION_ERROR, ErrorCategory.NOT_FOUND):
        return f"{identifier}: {error}"
    return f"{identifier} error: {type(error).__name__}"


@dataclass
class CollectedError:
    """수집된 에러 상세 정보

    Attributes:
        timestamp: 에러 발생 시각
        identifier: 호스트 또는 리소스 이름
        phase: 수집 단계 (예: "clients", "spots")
        operation: 실패한 작업 (예: "niminfo", "oslevel", "lsnim")
        error_code: 에러 코드
        error_message: 운영자용 메시지
        severity: 에러 심각도
        category: 에러 카테고리
    """

    timestamp: datetime
    identifier: str
    phase: str
    operation: str
    error_code: str
    error_message: str
    severity: ErrorSeverity
    category: ErrorCategory

    def __str__(self) -> str:
        return f"[{self.severity.value.upper()}] {self.phase}.{self.operation} - {self.error_message}"

    def to_dict(self) -> dict[str, str]:
        """딕셔너리로 변환 (로깅/직렬화용)"""
        return {
            "timestamp": self.timestamp.isoformat(),
            "identifier": self.identifier,
            "phase": self.phase,
            "operation": self.operation,
            "error_code": self.error_code,
            "error_message": self.error_message,
            "severity": self.severity.value,
            "category": self.category.value,
        }


class ErrorCollector:
    """스레드 세이프 에러 수집기

    여러 워커 스레드에서 발생하는 에러를 안전하게 수집하고
    심각도별로 로깅합니다.
    """

    def __init__(self, phase: str):
        """초기화

        Args:
            phase: 수집 단계 이름 (수집된 에러에 공통 적용)
        """
        self.phase = phase
        self._errors: list[CollectedError] = []
        self._lock = threading.Lock()

    def collect(
        self,
        error: BaseException,
        identifier: str,
        operation: str,
        severity: ErrorSeverity = ErrorSeverity.WARNING,
    ) -> CollectedError:
        """예외를 분류하여 수집하고 로깅

        Args:
            error: 발생한 예외
            identifier: 호스트 또는 리소스 이름
            operation: 실패한 작업 이름
            severity: 에러 심각도 (기본: WARNING)

        Returns:
            수집된 CollectedError
        """
        return self.collect_generic(
            error_code=get_error_code(error),
            error_message=describe_error(error, identifier),
            identifier=identifier,
            operation=operation,
            severity=severity,
            category=categorize_error(error),
        )

    def collect_generic(
        self,
        error_code: str,
        error_message: str,
        identifier: str,
        operation: str,
        severity: ErrorSeverity = ErrorSeverity.WARNING,
        category: ErrorCategory = ErrorCategory.UNKNOWN,
    ) -> CollectedError:
        """예외 객체 없이 에러 수집 (TaskError 변환 등)"""
        collected = CollectedError(
            timestamp=datetime.now(),
            identifier=identifier,
            phase=self.phase,
            operation=operation,
            error_code=error_code,
            error_message=error_message,
            severity=severity,
            category=category,
        )

        with self._lock:
            self._errors.append(collected)

        log_msg = f"{collected}"
        if severity == ErrorSeverity.CRITICAL:
            logger.error(log_msg)
        elif severity == ErrorSeverity.WARNING:
            logger.warning(log_msg)
        elif severity == ErrorSeverity.INFO:
            logger.info(log_msg)
        else:
            logger.debug(log_msg)

        return collected

    def collect_task_error(self, error: TaskError, operation: str) -> CollectedError:
        """병렬 실행기에서 실패한 작업의 TaskError 기록"""
        if error.original_exception is not None:
            return self.collect(error.original_exception, error.identifier, operation)
        return self.collect_generic(
            error_code=error.error_code,
            error_message=f"{error.identifier}: {error.message}",
            identifier=error.identifier,
            operation=operation,
            category=error.category,
        )

    @property
    def errors(self) -> list[CollectedError]:
        """수집된 모든 에러의 복사본 반환"""
        with self._lock:
            return list(self._errors)

    @property
    def has_errors(self) -> bool:
        with self._lock:
            return len(self._errors) > 0

    @property
    def warning_errors(self) -> list[CollectedError]:
        """WARNING 심각도 에러만 반환"""
        with self._lock:
            return [e for e in self._errors if e.severity == ErrorSeverity.WARNING]

    def get_summary(self) -> str:
        """심각도별 에러 건수를 포함한 요약 문자열

        Returns:
            포맷팅된 요약 문자열 (예: "[clients] 에러 2건 (warning: 2건)")
        """
        with self._lock:
            if not self._errors:
                return f"[{self.phase}] 에러 없음"

            by_severity: dict[str, int] = {}
            for e in self._errors:
                by_severity[e.severity.value] = by_severity.get(e.severity.value, 0) + 1

            parts = [f"{k}: {v}건" for k, v in sorted(by_severity.items())]
            return f"[{self.phase}] 에러 {len(self._errors)}건 ({', '.join(parts)})"

    def get_by_identifier(self) -> dict[str, list[CollectedError]]:
        """호스트/리소스별로 에러를 그룹핑하여 반환"""
        with self._lock:
            result: dict[str, list[CollectedError]] = {}
            for e in self._errors:
                result.setdefault(e.identifier, []).append(e)
            return result


def try_or_default(
    func: Callable[[], T],
    default: T,
    collector: ErrorCollector | None = None,
    identifier: str = "",
    operation: str = "",
    severity: ErrorSeverity = ErrorSeverity.WARNING,
) -> T:
    """함수 실행, 실패 시 기본값 반환 + 에러 수집

    부수적인 조회(oslevel 등)에서 실패해도 전체 로직을 중단하지 않고
    기본값으로 대체합니다.

    Example:
        oslevel = try_or_default(
            lambda: query_oslevel(runner, settings),
            default="",
            collector=collector,
            identifier="master",
            operation="oslevel",
        )
    """
    try:
        return func()
    except Exception as e:
        if collector:
            collector.collect(e, identifier, operation, severity)
        else:
            logger.warning(describe_error(e, identifier))
        return default
