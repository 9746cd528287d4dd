"""
core/parallel/executor.py - 병렬 작업 실행기

Map-Reduce 패턴으로 호스트/리소스별 수집 작업을 병렬 처리합니다.
ThreadPoolExecutor 기반이며, 워커 수를 제한하여 대규모 NIM 환경에서도
스레드가 무한정 늘어나지 않습니다.

특징:
- 작업당 하나의 TaskResult (성공 데이터 또는 TaskError)
- 개별 작업 실패는 다른 작업이나 전체 실행을 중단시키지 않음
- 재시도/취소 없음 - 모든 작업이 끝나야 결과를 반환 (join 후 merge)

Example:
    from core.parallel import parallel_collect

    def collect_one(name):
        return {name: query_attributes(name)}

    result = parallel_collect(["client1", "client2"], collect_one, max_workers=10)
    for partial in result.get_data():
        merged.update(partial)
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable, Iterable
from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass
from typing import TypeVar

from .errors import categorize_error, get_error_code
from .quiet import inherit_quiet_state
from .types import ErrorCategory, ParallelExecutionResult, TaskError, TaskResult

logger = logging.getLogger(__name__)

T = TypeVar("T")


def _clear_exception_chain(e: BaseException) -> None:
    """traceback + chained exception 메모리 누수 방지"""
    e.__traceback__ = None
    if e.__context__ is not None:
        e.__context__.__traceback__ = None
    if e.__cause__ is not None:
        e.__cause__.__traceback__ = None


@dataclass
class ParallelConfig:
    """병렬 실행 설정

    Attributes:
        max_workers: 최대 동시 스레드 수 (1~100)
    """

    max_workers: int = 20

    def __post_init__(self) -> None:
        if self.max_workers < 1:
            raise ValueError(f"max_workers must be >= 1, got {self.max_workers}")
        if self.max_workers > 100:
            self.max_workers = 100


class ParallelExecutor:
    """병렬 작업 실행기

    Example:
        executor = ParallelExecutor(ParallelConfig(max_workers=20))
        result = executor.execute(collect_host, ["client1", "client2"], operation="clients")

        print(f"수집: {result.success_count}, 실패: {result.error_count}")
    """

    def __init__(self, config: ParallelConfig | None = None):
        self.config = config or ParallelConfig()

    def execute(
        self,
        func: Callable[[str], T],
        identifiers: Iterable[str],
        operation: str = "default",
    ) -> ParallelExecutionResult[T]:
        """작업 함수를 모든 대상에 병렬 실행

        Args:
            func: identifier -> T 함수
            identifiers: 작업 대상 (호스트 이름, 리소스 이름)
            operation: 작업 이름 (로깅용)

        Returns:
            ParallelExecutionResult[T]: 전체 실행 결과 (결과 순서는 완료 순서)
        """
        targets = list(identifiers)

        if not targets:
            logger.debug(f"[{operation}] 실행할 작업이 없습니다")
            return ParallelExecutionResult()

        workers = min(self.config.max_workers, len(targets))
        logger.info(f"병렬 실행 시작: {len(targets)}개 작업, max_workers={workers}, operation={operation}")

        results: list[TaskResult[T]] = []
        start_time = time.monotonic()

        with ThreadPoolExecutor(max_workers=workers, thread_name_prefix=f"nim-{operation}") as executor:
            futures = {
                executor.submit(inherit_quiet_state(self._execute_single), func, identifier): identifier
                for identifier in targets
            }

            for future in as_completed(futures):
                identifier = futures[future]
                try:
                    results.append(future.result())
                except Exception as e:
                    # _execute_single 밖에서 발생한 예상치 못한 executor 에러
                    logger.error(f"작업 실행 중 예외 [{identifier}]: {e}")
                    _clear_exception_chain(e)
                    results.append(
                        TaskResult(
                            identifier=identifier,
                            success=False,
                            error=TaskError(
                                identifier=identifier,
                                category=ErrorCategory.UNKNOWN,
                                error_code="ExecutorError",
                                message=str(e),
                                original_exception=e,
                            ),
                        )
                    )

        total_time = (time.monotonic() - start_time) * 1000
        exec_result = ParallelExecutionResult(results=tuple(results))

        logger.info(
            f"병렬 실행 완료 [{operation}]: 성공 {exec_result.success_count}, "
            f"실패 {exec_result.error_count}, 총 {total_time:.0f}ms"
        )

        return exec_result

    def _execute_single(self, func: Callable[[str], T], identifier: str) -> TaskResult[T]:
        """단일 작업 실행 (워커 스레드 내에서 호출)"""
        start_time = time.monotonic()

        try:
            data = func(identifier)
        except Exception as e:
            _clear_exception_chain(e)
            return TaskResult(
                identifier=identifier,
                success=False,
                error=TaskError(
                    identifier=identifier,
                    category=categorize_error(e),
                    error_code=get_error_code(e),
                    message=str(e),
                    original_exception=e,
                ),
                duration_ms=(time.monotonic() - start_time) * 1000,
            )

        return TaskResult(
            identifier=identifier,
            success=True,
            data=data,
            duration_ms=(time.monotonic() - start_time) * 1000,
        )


def parallel_collect(
    identifiers: Iterable[str],
    collector_func: Callable[[str], T],
    max_workers: int = 20,
    operation: str = "default",
) -> ParallelExecutionResult[T]:
    """병렬 수집 편의 함수

    ParallelExecutor를 간단하게 사용할 수 있는 래퍼입니다.

    Args:
        identifiers: 작업 대상 목록
        collector_func: identifier -> T
        max_workers: 최대 동시 스레드 수
        operation: 작업 이름 (로깅용)

    Returns:
        ParallelExecutionResult[T]
    """
    executor = ParallelExecutor(ParallelConfig(max_workers=max_workers))
    return executor.execute(collector_func, identifiers, operation=operation)
