"""
core/parallel/types.py - 병렬 실행 결과 타입

병렬 작업의 개별 결과(TaskResult)와 전체 결과(ParallelExecutionResult)를
구조화합니다. 작업 단위 실패는 예외 대신 TaskError로 전달됩니다.
"""

from __future__ import annotations

from collections import defaultdict
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Generic, TypeVar

T = TypeVar("T")


class ErrorCategory(Enum):
    """작업 실패 분류"""

    TIMEOUT = "timeout"  # 원격 호출 제한 시간 초과
    EXECUTION_ERROR = "execution_error"  # 0이 아닌 종료 코드
    NOT_FOUND = "not_found"  # 명령/파일 없음
    PARSE_ERROR = "parse_error"  # 출력 해석 실패
    UNKNOWN = "unknown"  # 그 외 예상치 못한 에러


@dataclass
class TaskError:
    """개별 작업 에러 정보

    Attributes:
        identifier: 작업 대상 (호스트 이름 또는 리소스 이름)
        category: 에러 카테고리
        error_code: 에러 코드 (예: "RemoteTimeoutError", "exit 1")
        message: 에러 메시지
        timestamp: 발생 시각
        original_exception: 원본 예외 (선택사항)
    """

    identifier: str
    category: ErrorCategory
    error_code: str
    message: str
    timestamp: datetime = field(default_factory=datetime.now)
    original_exception: Exception | None = field(default=None, repr=False)

    def __str__(self) -> str:
        return f"[{self.identifier}] {self.error_code}: {self.message}"

    def to_dict(self) -> dict[str, Any]:
        """딕셔너리로 변환 (로깅/직렬화용)"""
        return {
            "identifier": self.identifier,
            "category": self.category.value,
            "error_code": self.error_code,
            "message": self.message,
            "timestamp": self.timestamp.isoformat(),
        }


@dataclass
class TaskResult(Generic[T]):
    """개별 작업 결과

    Attributes:
        identifier: 작업 대상
        success: 성공 여부
        data: 성공 시 반환 데이터
        error: 실패 시 에러 정보
        duration_ms: 실행 시간 (밀리초)
    """

    identifier: str
    success: bool
    data: T | None = None
    error: TaskError | None = None
    duration_ms: float = 0.0

    def __str__(self) -> str:
        status = "OK" if self.success else "FAIL"
        return f"[{self.identifier}] {status} ({self.duration_ms:.0f}ms)"


@dataclass
class ParallelExecutionResult(Generic[T]):
    """병렬 실행 전체 결과

    모든 작업이 끝난 뒤 생성되며 이후 변경되지 않습니다.
    """

    results: tuple[TaskResult[T], ...] | list[TaskResult[T]] = field(default_factory=tuple)

    @property
    def successful(self) -> list[TaskResult[T]]:
        """성공한 결과만 반환"""
        return [r for r in self.results if r.success]

    @property
    def failed(self) -> list[TaskResult[T]]:
        """실패한 결과만 반환"""
        return [r for r in self.results if not r.success]

    @property
    def total_count(self) -> int:
        return len(self.results)

    @property
    def success_count(self) -> int:
        return len(self.successful)

    @property
    def error_count(self) -> int:
        return len(self.failed)

    @property
    def total_duration_ms(self) -> float:
        return sum(r.duration_ms for r in self.results)

    def has_any_success(self) -> bool:
        return self.success_count > 0

    def has_any_failure(self) -> bool:
        return self.error_count > 0

    def get_data(self) -> list[T]:
        """성공한 작업의 데이터 목록 (None 제외)"""
        return [r.data for r in self.successful if r.data is not None]

    def get_errors(self) -> list[TaskError]:
        """실패한 작업의 에러 목록"""
        return [r.error for r in self.failed if r.error is not None]

    def get_errors_by_category(self) -> dict[ErrorCategory, list[TaskError]]:
        """카테고리별 에러 그룹화"""
        grouped: dict[ErrorCategory, list[TaskError]] = defaultdict(list)
        for error in self.get_errors():
            grouped[error.category].append(error)
        return dict(grouped)

    def get_error_summary(self, max_per_category: int = 3) -> str:
        """카테고리별 에러 요약 문자열

        Args:
            max_per_category: 카테고리당 표시할 최대 에러 수

        Returns:
            요약 문자열 (에러가 없으면 빈 문자열)
        """
        errors = self.get_errors()
        if not errors:
            return ""

        lines = [f"총 {len(errors)}개 작업 실패"]
        for category, items in self.get_errors_by_category().items():
            lines.append(f"  [{category.value}] {len(items)}건")
            for err in items[:max_per_category]:
                lines.append(f"    - {err.identifier}: {err.message}")
            if len(items) > max_per_category:
                lines.append(f"    ... 외 {len(items) - max_per_category}건")

        return "\n".join(lines)
