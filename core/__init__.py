# core/__init__.py
"""
core - NIM 인벤토리 인프라

도메인(shared.nim)과 CLI가 공통으로 사용하는 인프라 패키지입니다.

아키텍처:
    core/
    ├── parallel/       # 병렬 처리 (executor, 에러 수집, quiet 모드)
    ├── config.py       # 중앙 설정 관리
    ├── exceptions.py   # 통합 예외 계층
    └── shell.py        # 로컬 명령 실행 (subprocess)

Usage:
    from core.config import settings
    timeout = settings.REMOTE_TIMEOUT  # 30

    from core.exceptions import FatalConfigError
    from core.shell import run_command
"""

from core import config, exceptions, parallel, shell

__all__: list[str] = [
    # 서브패키지
    "parallel",
    # 모듈
    "config",
    "exceptions",
    "shell",
]
