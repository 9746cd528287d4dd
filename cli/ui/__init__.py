# cli/ui - 콘솔 출력 컴포넌트 (rich)
"""
콘솔 출력 모듈

인벤토리 문서 트리 출력, 경고/에러 메시지, Rich 로깅 핸들러 설정
"""

from .console import (
    SYMBOL_ERROR,
    SYMBOL_SUCCESS,
    SYMBOL_WARNING,
    build_inventory_tree,
    console,
    err_console,
    get_console,
    print_error,
    print_inventory_tree,
    print_success,
    print_warning,
    setup_logging,
)

__all__: list[str] = [
    "SYMBOL_ERROR",
    "SYMBOL_SUCCESS",
    "SYMBOL_WARNING",
    "build_inventory_tree",
    "console",
    "err_console",
    "get_console",
    "print_error",
    "print_inventory_tree",
    "print_success",
    "print_warning",
    "setup_logging",
]
