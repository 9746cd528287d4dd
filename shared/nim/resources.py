"""
shared/nim/resources.py - NIM 리소스 수집기

NIM 마스터의 설치 리소스(lpp_source, spot, mksysb) 목록을 조회하고
리소스마다 병렬로 lsnim -l 속성을 수집합니다.

호스트 수집기와 같은 이유로 결과를 이름순으로 정렬합니다.
속성 조회에 실패한 리소스는 결과에서 제외되고 경고로 기록됩니다.
"""

from __future__ import annotations

import logging
from enum import Enum

from core.config import Settings, settings as default_settings
from core.exceptions import CommandExecutionError
from core.parallel import ErrorCollector, ErrorSeverity, parallel_collect
from core.shell import CommandRunner, run_command

from .attributes import sort_by_name
from .commands import list_nim_objects, query_attributes
from .parser import AttributeMap

logger = logging.getLogger(__name__)

ResourceRecord = AttributeMap


class ResourceType(Enum):
    """인벤토리에 포함하는 NIM 리소스 유형"""

    LPP_SOURCE = "lpp_source"
    SPOT = "spot"
    MKSYSB = "mksysb"

    @property
    def document_key(self) -> str:
        """인벤토리 문서 키 (lpp_sources, spots, mksysbs)"""
        return f"{self.value}s"


def collect_resource(name: str, runner: CommandRunner, settings: Settings) -> ResourceRecord:
    """단일 리소스 속성 수집 (워커 스레드에서 실행)"""
    return query_attributes(name, runner, settings)


def collect_resources(
    res_type: ResourceType | str,
    runner: CommandRunner | None = None,
    settings: Settings | None = None,
    collector: ErrorCollector | None = None,
) -> dict[str, ResourceRecord]:
    """리소스 유형별 전체 수집

    Args:
        res_type: 리소스 유형 (ResourceType 또는 "spot" 같은 문자열)
        runner: 명령 실행기 (기본: run_command)
        settings: 설정 (기본: 전역 settings)
        collector: 에러 수집기 (기본: 새로 생성)

    Returns:
        {리소스 이름: ResourceRecord}, 이름순 정렬
    """
    res_type = ResourceType(res_type)
    runner = runner or run_command
    settings = settings or default_settings
    collector = collector if collector is not None else ErrorCollector(res_type.document_key)

    try:
        names = list_nim_objects(res_type.value, runner, settings)
    except CommandExecutionError as e:
        collector.collect(e, res_type.value, "list", severity=ErrorSeverity.CRITICAL)
        return {}

    result = parallel_collect(
        names,
        lambda name: {name: collect_resource(name, runner, settings)},
        max_workers=settings.MAX_WORKERS,
        operation=res_type.document_key,
    )

    for error in result.get_errors():
        collector.collect_task_error(error, "lsnim")

    resources: dict[str, ResourceRecord] = {}
    for partial in result.get_data():
        resources.update(partial)

    return sort_by_name(resources)
