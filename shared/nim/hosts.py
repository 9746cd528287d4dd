"""
shared/nim/hosts.py - NIM 클라이언트/VIOS 수집기

NIM 마스터에 등록된 standalone 클라이언트 또는 VIOS 목록을 조회한 뒤,
호스트마다 병렬로 다음을 순서대로 수집합니다.

    1. 원격 niminfo (c_rsh <host> "cat /etc/niminfo")
    2. 원격 oslevel (c_rsh <host> "/usr/bin/oslevel -s") -> "oslevel"
    3. 로컬 lsnim -l <host> 속성 (정규화) -> "lsnim"

부분 실패 정책:
    - 1단계 실패: 해당 호스트는 결과에서 제외 (경고만 기록)
    - 2/3단계 실패: 이미 채워진 필드만으로 호스트를 포함
    어느 경우든 다른 호스트의 작업이나 전체 수집은 중단되지 않습니다.

결과는 호스트 이름 사전순으로 정렬됩니다.

Example:
    from shared.nim.hosts import HostRole, collect_hosts

    clients = collect_hosts(HostRole.STANDALONE)
    print(clients["client1"]["oslevel"])
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Any

from core.config import Settings, settings as default_settings
from core.exceptions import CommandExecutionError
from core.parallel import ErrorCollector, ErrorSeverity, ParallelConfig, ParallelExecutor
from core.shell import CommandRunner, run_command

from .attributes import deep_merge, sort_by_name
from .commands import list_nim_objects, query_attributes, query_oslevel, remote_command
from .parser import niminfo_to_dict

logger = logging.getLogger(__name__)

HostRecord = dict[str, Any]


class HostRole(Enum):
    """lsnim -t 로 조회하는 원격 호스트 유형"""

    STANDALONE = "standalone"
    VIOS = "vios"

    @property
    def document_key(self) -> str:
        """인벤토리 문서에서 사용하는 키"""
        return "clients" if self is HostRole.STANDALONE else "vioses"


def collect_host(
    name: str,
    runner: CommandRunner,
    settings: Settings,
    collector: ErrorCollector | None = None,
) -> dict[str, HostRecord]:
    """단일 호스트 수집 (워커 스레드에서 실행)

    niminfo 조회 실패는 그대로 전파되어 호스트가 제외됩니다.
    이후 단계의 실패는 collector에 기록하고 부분 레코드를 반환합니다.

    Returns:
        {host 이름: HostRecord} 단일 항목 dict
    """
    niminfo = remote_command(name, settings.REMOTE_NIMINFO_COMMAND, runner, settings)
    record: HostRecord = dict(niminfo_to_dict(niminfo))

    operation = "oslevel"
    try:
        record["oslevel"] = query_oslevel(runner, settings, host=name)
        operation = "lsnim"
        record["lsnim"] = query_attributes(name, runner, settings)
    except Exception as e:
        if collector:
            collector.collect(e, name, operation)
        else:
            logger.warning(f"{name} {operation} 수집 실패: {e}")

    return {name: record}


def collect_hosts(
    role: HostRole,
    runner: CommandRunner | None = None,
    settings: Settings | None = None,
    collector: ErrorCollector | None = None,
) -> dict[str, HostRecord]:
    """역할별 원격 호스트 전체 수집

    Args:
        role: 수집할 호스트 유형
        runner: 명령 실행기 (기본: run_command)
        settings: 설정 (기본: 전역 settings)
        collector: 에러 수집기 (기본: 새로 생성)

    Returns:
        {host 이름: HostRecord}, 이름순 정렬
    """
    runner = runner or run_command
    settings = settings or default_settings
    collector = collector if collector is not None else ErrorCollector(role.document_key)

    try:
        names = list_nim_objects(role.value, runner, settings)
    except CommandExecutionError as e:
        collector.collect(e, role.value, "list", severity=ErrorSeverity.CRITICAL)
        return {}

    executor = ParallelExecutor(ParallelConfig(max_workers=settings.MAX_WORKERS))
    result = executor.execute(
        lambda name: collect_host(name, runner, settings, collector),
        names,
        operation=role.document_key,
    )

    for error in result.get_errors():
        collector.collect_task_error(error, "niminfo")

    merged: dict[str, HostRecord] = {}
    for partial in result.get_data():
        merged = deep_merge(merged, partial)

    return sort_by_name(merged)
