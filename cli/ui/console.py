"""
cli/ui/console.py - Rich 콘솔 유틸리티

일관된 콘솔 출력을 위한 함수들.
인벤토리 문서는 stdout(console), 경고/진단은 stderr(err_console)로 출력합니다.
"""

from __future__ import annotations

import logging
import platform
from collections.abc import Mapping
from typing import Any

from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.tree import Tree

from core.config import LogConfig


def get_console(stderr: bool = False) -> Console:
    """Rich Console 인스턴스를 생성하고 반환합니다."""
    is_windows = platform.system().lower() == "windows"

    return Console(
        stderr=stderr,
        color_system="auto",
        highlight=False,
        soft_wrap=True,
        markup=True,
        emoji=not is_windows,
    )


# 전역 콘솔 인스턴스
console = get_console()
err_console = get_console(stderr=True)


def setup_logging(verbose: bool = False) -> logging.Logger:
    """루트 logger에 Rich 핸들러(stderr) 설정

    LOG_LEVEL, LOG_FORMAT 환경변수를 따르며, verbose이면 INFO로 낮춥니다.
    이미 Rich 핸들러가 있으면 레벨과 포맷만 갱신합니다.

    Returns:
        logging.Logger: 루트 logger
    """
    log_config = LogConfig.from_env()
    level = logging.INFO if verbose else logging.getLevelName(log_config.level)
    if not isinstance(level, int):
        level = logging.WARNING

    root = logging.getLogger()
    root.setLevel(level)

    handler = next((h for h in root.handlers if isinstance(h, RichHandler)), None)
    if handler is None:
        handler = RichHandler(console=err_console, show_path=False, rich_tracebacks=True)
        root.addHandler(handler)
    handler.setFormatter(logging.Formatter(log_config.format, datefmt=log_config.date_format))

    return root


# =============================================================================
# 표준 출력 스타일 (이모지 없이 Rich 스타일만 사용)
# =============================================================================

# 상태 심볼
SYMBOL_SUCCESS = "✓"  # 완료
SYMBOL_ERROR = "✗"  # 에러
SYMBOL_WARNING = "!"  # 경고


def print_success(message: str) -> None:
    """성공 메시지 출력 (초록색 체크마크, stderr)"""
    err_console.print(f"[green]{SYMBOL_SUCCESS} {escape(message)}[/green]")


def print_error(message: str) -> None:
    """에러 메시지 출력 (빨간색 X, stderr)"""
    err_console.print(f"[red]{SYMBOL_ERROR} {escape(message)}[/red]")


def print_warning(message: str) -> None:
    """경고 메시지 출력 (노란색 경고, stderr)"""
    err_console.print(f"[yellow]{SYMBOL_WARNING} {escape(message)}[/yellow]")


# =============================================================================
# 인벤토리 트리
# =============================================================================


def _add_branch(tree: Tree, data: Mapping[str, Any]) -> None:
    for key, value in data.items():
        label = escape(str(key))
        if isinstance(value, Mapping):
            branch = tree.add(f"[bold cyan]{label}[/bold cyan]" if value else f"[cyan]{label}[/cyan] [dim](없음)[/dim]")
            _add_branch(branch, value)
        elif isinstance(value, list):
            tree.add(f"{label} = [green]{escape(' '.join(value))}[/green]")
        else:
            tree.add(f"{label} = [green]{escape(str(value))}[/green]")


def build_inventory_tree(document: Mapping[str, Any], title: str = "nim") -> Tree:
    """인벤토리 문서를 Rich Tree로 변환

    Args:
        document: 중첩 dict 문서
        title: 루트 노드 이름

    Returns:
        Tree
    """
    tree = Tree(f"[bold]{escape(title)}[/bold]")
    _add_branch(tree, document)
    return tree


def print_inventory_tree(document: Mapping[str, Any], title: str = "nim") -> None:
    """인벤토리 문서를 트리 형식으로 stdout에 출력"""
    console.print(build_inventory_tree(document, title))
