"""
shared/nim/commands.py - NIM 명령 호출

lsnim, oslevel, c_rsh 호출을 감싸고 출력 해석까지 담당합니다.
실제 실행은 CommandRunner에 위임하므로 인증/전송은 c_rsh의 몫입니다.

원격 호출(c_rsh) 에러 매핑:
    - runner 타임아웃, 또는 c_rsh 종료 코드 2 -> RemoteTimeoutError
    - 그 외 0이 아닌 종료 코드 -> RemoteExecutionError
"""

from __future__ import annotations

import logging

from core.config import Settings
from core.exceptions import CommandExecutionError, CommandTimeoutError, RemoteExecutionError, RemoteTimeoutError
from core.shell import CommandRunner

from .attributes import purge_superfluous_attributes
from .parser import AttributeMap, nim_attributes_to_dict

logger = logging.getLogger(__name__)


def list_nim_objects(object_type: str, runner: CommandRunner, settings: Settings) -> list[str]:
    """lsnim -t <type> 출력에서 객체 이름 목록 추출

    각 줄의 첫 번째 공백 구분 토큰이 이름입니다. 빈 줄은 건너뜁니다.
    """
    result = runner([settings.LSNIM_PATH, "-t", object_type], timeout=settings.LOCAL_TIMEOUT)

    names = []
    for line in result.stdout.splitlines():
        tokens = line.split()
        if tokens:
            names.append(tokens[0])

    logger.debug(f"lsnim -t {object_type}: {len(names)}개")
    return names


def query_attributes(name: str, runner: CommandRunner, settings: Settings) -> AttributeMap:
    """lsnim -l <name> 속성을 조회하여 정규화된 AttributeMap 반환"""
    result = runner([settings.LSNIM_PATH, "-l", name], timeout=settings.LOCAL_TIMEOUT)
    return purge_superfluous_attributes(nim_attributes_to_dict(result.stdout))


def remote_command(host: str, command: str, runner: CommandRunner, settings: Settings) -> str:
    """c_rsh로 원격 명령 실행 후 표준 출력 반환

    Raises:
        RemoteTimeoutError: 제한 시간 초과 (c_rsh 종료 코드 2 포함)
        RemoteExecutionError: 그 외 원격 명령 실패
    """
    try:
        result = runner([settings.C_RSH_PATH, host, command], timeout=settings.REMOTE_TIMEOUT)
    except CommandTimeoutError as e:
        raise RemoteTimeoutError(host, cause=e) from e
    except CommandExecutionError as e:
        if e.exit_code == settings.C_RSH_TIMEOUT_EXIT_CODE:
            raise RemoteTimeoutError(host, exit_code=e.exit_code, cause=e) from e
        raise RemoteExecutionError(host, str(e), exit_code=e.exit_code, cause=e) from e

    return result.stdout


def query_oslevel(runner: CommandRunner, settings: Settings, host: str | None = None) -> str:
    """oslevel -s 결과 반환 (host가 None이면 로컬 실행)"""
    if host is None:
        stdout = runner(settings.OSLEVEL_COMMAND.split(), timeout=settings.LOCAL_TIMEOUT).stdout
    else:
        stdout = remote_command(host, settings.OSLEVEL_COMMAND, runner, settings)
    return stdout.rstrip("\r\n")
