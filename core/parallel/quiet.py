"""
core/parallel/quiet.py - 병렬 실행 시 콘솔 출력 억제

호스트별 워커 스레드가 동시에 경고를 출력하면 문서 출력과 섞입니다.
quiet 모드에서는 ERROR 미만 로그를 억제하고, 에러는 ErrorCollector로만
수집한 뒤 마지막에 요약합니다.

Example:
    from core.parallel.quiet import quiet_mode

    with quiet_mode():
        inventory = collect_nim_inventory()
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable, Generator
from contextlib import contextmanager
from functools import wraps
from typing import Any, TypeVar

F = TypeVar("F", bound=Callable[..., Any])

# 스레드-로컬 저장소로 quiet 상태 관리
_quiet_state = threading.local()

# filter 참조 카운팅 (중첩/동시 quiet_mode 안전성)
_filter_refcount = 0
_filter_lock = threading.Lock()


class _QuietFilter(logging.Filter):
    """quiet 스레드의 ERROR 미만 로그 레코드 차단"""

    def filter(self, record: logging.LogRecord) -> bool:
        return not (is_quiet() and record.levelno < logging.ERROR)


_quiet_filter = _QuietFilter()


def is_quiet() -> bool:
    """현재 스레드가 quiet 모드인지 확인"""
    return getattr(_quiet_state, "quiet", False)


def set_quiet(value: bool) -> None:
    """현재 스레드의 quiet 모드 설정"""
    _quiet_state.quiet = value


def inherit_quiet_state(func: F) -> F:
    """호출 시점 스레드의 quiet 상태를 워커 스레드로 전달하는 래퍼

    ThreadPoolExecutor.submit() 전에 감싸면 워커에서도 같은 quiet 상태로 실행됩니다.
    """
    parent_quiet = is_quiet()

    @wraps(func)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        previous = is_quiet()
        set_quiet(parent_quiet)
        try:
            return func(*args, **kwargs)
        finally:
            set_quiet(previous)

    return wrapper  # type: ignore[return-value]


@contextmanager
def quiet_mode() -> Generator[None, None, None]:
    """콘솔 출력을 억제하는 컨텍스트 매니저

    글로벌 로거 레벨 대신 루트 핸들러의 Filter를 사용하므로
    quiet가 아닌 다른 스레드의 로그는 그대로 출력됩니다.
    (logger Filter는 하위 logger에서 전파된 레코드에 적용되지 않음)
    """
    global _filter_refcount

    old_value = is_quiet()
    set_quiet(True)

    handlers = list(logging.getLogger().handlers)
    with _filter_lock:
        _filter_refcount += 1
        for handler in handlers:
            handler.addFilter(_quiet_filter)

    try:
        yield
    finally:
        set_quiet(old_value)
        with _filter_lock:
            _filter_refcount -= 1
            if _filter_refcount == 0:
                for handler in handlers:
                    handler.removeFilter(_quiet_filter)
