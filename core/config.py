"""
core/config.py - 중앙 설정 관리

NIM 명령 경로, 타임아웃, 병렬 처리 설정을 한 곳에서 관리합니다.
모든 값은 환경변수(NIM_INVENTORY_*)로 덮어쓸 수 있습니다.

Usage:
    from core.config import settings

    timeout = settings.REMOTE_TIMEOUT      # 30
    lsnim = settings.LSNIM_PATH           # "/usr/sbin/lsnim"

    # 환경변수 반영
    custom = Settings.from_env()
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from functools import lru_cache
from importlib import metadata

from core.exceptions import ConfigError

logger = logging.getLogger(__name__)

ENV_PREFIX = "NIM_INVENTORY_"

# =============================================================================
# 환경변수 헬퍼
# =============================================================================


def get_env_int(name: str, default: int) -> int:
    """환경변수를 int로 변환 (실패 시 기본값)"""
    value = os.environ.get(name)
    if value is None:
        return default

    try:
        return int(value)
    except ValueError:
        logger.warning(f"환경변수 {name}의 값이 정수가 아님: {value!r}")
        return default


def get_env_str(name: str, default: str) -> str:
    """환경변수 문자열 (빈 값이면 기본값)"""
    value = os.environ.get(name, "").strip()
    return value or default


# =============================================================================
# 설정
# =============================================================================


@dataclass(frozen=True)
class Settings:
    """NIM 인벤토리 설정 (불변)

    Attributes:
        NIMINFO_PATH: 로컬 niminfo 파일 경로
        C_RSH_PATH: NIM 원격 실행 메서드 경로
        LSNIM_PATH: lsnim 명령 경로
        OSLEVEL_COMMAND: OS 레벨 조회 명령 (로컬/원격 공통)
        REMOTE_NIMINFO_COMMAND: 원격 niminfo 조회 명령
        REMOTE_TIMEOUT: 원격 호출 1건당 제한 시간 (초)
        LOCAL_TIMEOUT: 로컬 lsnim 호출 제한 시간 (None이면 무제한)
        C_RSH_TIMEOUT_EXIT_CODE: c_rsh가 타임아웃 시 반환하는 종료 코드
        MAX_WORKERS: 수집 단계별 최대 동시 작업 수
    """

    NIMINFO_PATH: str = "/etc/niminfo"
    C_RSH_PATH: str = "/usr/lpp/bos.sysmgt/nim/methods/c_rsh"
    LSNIM_PATH: str = "/usr/sbin/lsnim"
    OSLEVEL_COMMAND: str = "/usr/bin/oslevel -s"
    REMOTE_NIMINFO_COMMAND: str = "cat /etc/niminfo"

    REMOTE_TIMEOUT: int = 30
    LOCAL_TIMEOUT: int | None = None
    C_RSH_TIMEOUT_EXIT_CODE: int = 2

    MAX_WORKERS: int = 20

    def __post_init__(self) -> None:
        if self.REMOTE_TIMEOUT <= 0:
            raise ConfigError("REMOTE_TIMEOUT", f"0보다 커야 함: {self.REMOTE_TIMEOUT}")
        if self.MAX_WORKERS < 1:
            raise ConfigError("MAX_WORKERS", f"1 이상이어야 함: {self.MAX_WORKERS}")

    @classmethod
    def from_env(cls, **overrides) -> Settings:
        """NIM_INVENTORY_* 환경변수를 반영한 설정 생성

        overrides는 환경변수보다 우선하며 검증 전에 적용됩니다.
        """
        defaults = cls()
        local_timeout = get_env_int(f"{ENV_PREFIX}LOCAL_TIMEOUT", 0)

        values = dict(
            NIMINFO_PATH=get_env_str(f"{ENV_PREFIX}NIMINFO_PATH", defaults.NIMINFO_PATH),
            C_RSH_PATH=get_env_str(f"{ENV_PREFIX}C_RSH_PATH", defaults.C_RSH_PATH),
            LSNIM_PATH=get_env_str(f"{ENV_PREFIX}LSNIM_PATH", defaults.LSNIM_PATH),
            REMOTE_TIMEOUT=get_env_int(f"{ENV_PREFIX}REMOTE_TIMEOUT", defaults.REMOTE_TIMEOUT),
            LOCAL_TIMEOUT=local_timeout if local_timeout > 0 else None,
            MAX_WORKERS=get_env_int(f"{ENV_PREFIX}MAX_WORKERS", defaults.MAX_WORKERS),
        )
        values.update(overrides)
        return cls(**values)


# 전역 설정 인스턴스
settings = Settings()


# =============================================================================
# 로깅 설정
# =============================================================================


@dataclass
class LogConfig:
    """로깅 설정

    Attributes:
        level: 로그 레벨 이름
        format: 로그 포맷 문자열
        date_format: 날짜 포맷
    """

    level: str = "WARNING"
    format: str = "%(message)s"
    date_format: str = "%Y-%m-%d %H:%M:%S"

    @classmethod
    def from_env(cls) -> LogConfig:
        """LOG_LEVEL, LOG_FORMAT 환경변수에서 로드"""
        defaults = cls()
        return cls(
            level=get_env_str("LOG_LEVEL", defaults.level).upper(),
            format=get_env_str("LOG_FORMAT", defaults.format),
        )


# =============================================================================
# 버전
# =============================================================================


@lru_cache(maxsize=1)
def get_version() -> str:
    """설치된 패키지 버전 반환 (미설치 시 기본값)"""
    try:
        return metadata.version("nim-inventory")
    except metadata.PackageNotFoundError:
        return "0.1.0"
