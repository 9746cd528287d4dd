"""
core/parallel - 병렬 처리 모듈

NIM 클라이언트/VIOS/리소스 수집 작업을 제한된 워커 풀에서 병렬로 처리합니다.

주요 구성 요소:
- ParallelExecutor: Map-Reduce 패턴 병렬 실행기
- parallel_collect: 간편한 병렬 수집 함수
- ErrorCollector: 스레드 세이프 에러 수집기

Example:
    from core.parallel import parallel_collect

    result = parallel_collect(hosts, collect_host, max_workers=20, operation="clients")

    print(f"성공: {result.success_count}, 실패: {result.error_count}")
    if result.error_count > 0:
        print(result.get_error_summary())
"""

from .errors import (
    CollectedError,
    ErrorCollector,
    ErrorSeverity,
    categorize_error,
    describe_error,
    try_or_default,
)
from .executor import ParallelConfig, ParallelExecutor, parallel_collect
from .quiet import inherit_quiet_state, is_quiet, quiet_mode, set_quiet
from .types import ErrorCategory, ParallelExecutionResult, TaskError, TaskResult

__all__: list[str] = [
    # Executor
    "ParallelConfig",
    "ParallelExecutor",
    "parallel_collect",
    # Types
    "ErrorCategory",
    "ParallelExecutionResult",
    "TaskError",
    "TaskResult",
    # Errors
    "CollectedError",
    "ErrorCollector",
    "ErrorSeverity",
    "categorize_error",
    "describe_error",
    "try_or_default",
    # Quiet
    "inherit_quiet_state",
    "is_quiet",
    "quiet_mode",
    "set_quiet",
]
