"""
core/shell.py - 로컬 명령 실행

subprocess 기반의 명령 실행 기능을 제공합니다.
NIM 수집기는 CommandRunner 프로토콜에만 의존하므로 테스트에서는
가짜 runner로 쉽게 대체할 수 있습니다.

주요 구성 요소:
- CommandResult: 표준 출력 + 종료 코드
- CommandRunner: (argv, timeout) -> CommandResult 프로토콜
- run_command: subprocess.run 기반 기본 구현

Example:
    from core.shell import run_command

    result = run_command(["/usr/sbin/lsnim", "-t", "standalone"])
    for line in result.stdout.splitlines():
        print(line.split()[0])
"""

from __future__ import annotations

import logging
import subprocess
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Protocol

from core.exceptions import CommandExecutionError, CommandTimeoutError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CommandResult:
    """명령 실행 결과

    Attributes:
        stdout: 표준 출력 전체
        exit_code: 프로세스 종료 코드
    """

    stdout: str
    exit_code: int = 0


class CommandRunner(Protocol):
    """명령 실행 인터페이스

    0이 아닌 종료 코드는 CommandExecutionError,
    제한 시간 초과는 CommandTimeoutError로 알려야 합니다.
    """

    def __call__(self, argv: Sequence[str], timeout: float | None = None) -> CommandResult: ...


def run_command(argv: Sequence[str], timeout: float | None = None) -> CommandResult:
    """명령 실행 후 표준 출력 반환

    Args:
        argv: 실행할 명령과 인자
        timeout: 제한 시간 (초, None이면 무제한)

    Returns:
        CommandResult

    Raises:
        CommandTimeoutError: 제한 시간 초과
        CommandExecutionError: 0이 아닌 종료 코드 또는 실행 파일 없음
    """
    logger.debug(f"명령 실행: {' '.join(argv)} (timeout={timeout})")

    try:
        completed = subprocess.run(
            list(argv),
            capture_output=True,
            text=True,
            errors="replace",
            timeout=timeout,
            check=False,
        )
    except subprocess.TimeoutExpired as e:
        raise CommandTimeoutError(argv, timeout, cause=e) from e
    except OSError as e:
        # 실행 파일 없음 등은 셸 관례에 따라 127로 취급
        raise CommandExecutionError(argv, 127, stderr=str(e), cause=e) from e

    if completed.returncode != 0:
        raise CommandExecutionError(argv, completed.returncode, stderr=completed.stderr or "")

    return CommandResult(stdout=completed.stdout, exit_code=completed.returncode)
