"""
core/exceptions.py - 통합 예외 계층 구조

NIM 인벤토리 수집 전체에서 사용되는 예외 클래스들을 정의합니다.
일관된 예외 처리와 에러 메시지를 제공합니다.

예외 계층 구조:
    NimInventoryError (베이스)
    ├── FatalConfigError (로컬 niminfo 읽기 실패 - 전체 중단)
    ├── ConfigError (설정 값 오류)
    ├── CommandExecutionError (명령 실행 실패)
    │   └── CommandTimeoutError
    └── RemoteExecutionError (호스트별 원격 호출 실패)
        └── RemoteTimeoutError

전파 정책:
    FatalConfigError만 최상위 작업을 중단시킵니다.
    호스트/리소스 단위 에러는 작업 경계에서 잡혀 경고로 기록됩니다.

Usage:
    from core.exceptions import RemoteTimeoutError, is_timeout

    try:
        result = remote_run("client1", "cat /etc/niminfo")
    except RemoteExecutionError as e:
        if is_timeout(e):
            print(f"{e.host} timed out")
"""

from typing import Any, Dict, Optional, Sequence, Union

# =============================================================================
# 베이스 예외
# =============================================================================


class NimInventoryError(Exception):
    """NIM 인벤토리 기본 예외 클래스

    모든 커스텀 예외의 베이스 클래스입니다.

    Attributes:
        message: 에러 메시지
        cause: 원인 예외 (체이닝용)
        details: 추가 상세 정보
    """

    def __init__(
        self,
        message: str,
        cause: Optional[Exception] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.message = message
        self.cause = cause
        self.details = details or {}

        if cause:
            self.__cause__ = cause

    def __str__(self) -> str:
        return self.message

    def to_dict(self) -> Dict[str, Any]:
        """예외 정보를 딕셔너리로 반환"""
        return {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "cause": str(self.cause) if self.cause else None,
            "details": self.details,
        }


# =============================================================================
# 설정 관련 예외
# =============================================================================


class FatalConfigError(NimInventoryError):
    """로컬 niminfo 파일을 읽을 수 없는 경우

    복구 경로가 없으므로 인벤토리 수집 전체를 중단합니다.
    """

    def __init__(self, path: str, message: str, cause: Optional[Exception] = None):
        full_message = f"niminfo 읽기 실패 [{path}]: {message}"
        super().__init__(full_message, cause)
        self.path = path
        self.details["path"] = path


class ConfigError(NimInventoryError):
    """설정 관련 예외"""

    def __init__(
        self,
        key: str,
        message: str,
        cause: Optional[Exception] = None,
    ):
        full_message = f"설정 오류 [{key}]: {message}"
        super().__init__(full_message, cause)
        self.config_key = key
        self.details["config_key"] = key


# =============================================================================
# 명령 실행 관련 예외
# =============================================================================


def _format_command(command: Union[str, Sequence[str]]) -> str:
    if isinstance(command, str):
        return command
    return " ".join(command)


class CommandExecutionError(NimInventoryError):
    """명령이 0이 아닌 종료 코드로 끝났거나 실행할 수 없는 경우

    Attributes:
        command: 실행한 명령 문자열
        exit_code: 종료 코드 (타임아웃이면 None)
        stderr: 표준 에러 출력
    """

    def __init__(
        self,
        command: Union[str, Sequence[str]],
        exit_code: Optional[int],
        stderr: str = "",
        cause: Optional[Exception] = None,
    ):
        self.command = _format_command(command)
        self.exit_code = exit_code
        self.stderr = stderr.strip()
        super().__init__(self._build_message(), cause)
        self.details.update({"command": self.command, "exit_code": exit_code})

    def _build_message(self) -> str:
        message = f"'{self.command}' returned {self.exit_code}"
        if self.stderr:
            message = f"{message}: {self.stderr}"
        return message


class CommandTimeoutError(CommandExecutionError):
    """명령이 제한 시간을 초과한 경우"""

    def __init__(
        self,
        command: Union[str, Sequence[str]],
        timeout: Optional[float],
        cause: Optional[Exception] = None,
    ):
        self.timeout = timeout
        super().__init__(command, exit_code=None, cause=cause)
        self.details["timeout"] = timeout

    def _build_message(self) -> str:
        return f"'{self.command}' timed out after {self.timeout}s"


# =============================================================================
# 원격 호스트 관련 예외
# =============================================================================


class RemoteExecutionError(NimInventoryError):
    """원격 호스트 명령 실패 (0이 아닌 종료 코드, 타임아웃 아님)"""

    def __init__(
        self,
        host: str,
        message: str,
        exit_code: Optional[int] = None,
        cause: Optional[Exception] = None,
    ):
        super().__init__(message, cause)
        self.host = host
        self.exit_code = exit_code
        self.details.update({"host": host, "exit_code": exit_code})


class RemoteTimeoutError(RemoteExecutionError):
    """원격 호스트 명령이 제한 시간을 초과한 경우"""

    def __init__(
        self,
        host: str,
        exit_code: Optional[int] = None,
        cause: Optional[Exception] = None,
    ):
        super().__init__(host, f"{host} timed out", exit_code, cause)


# =============================================================================
# 예외 유틸리티 함수
# =============================================================================


def is_timeout(error: Exception) -> bool:
    """타임아웃 오류인지 확인

    Args:
        error: 확인할 예외

    Returns:
        타임아웃 오류이면 True
    """
    return isinstance(error, (RemoteTimeoutError, CommandTimeoutError))

