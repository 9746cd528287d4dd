"""
shared/nim/inventory.py - NIM 인벤토리 빌더

로컬 niminfo를 읽어 NIM 역할을 판별하고, NIM 마스터인 경우에만
클라이언트/VIOS/리소스 수집기를 호출하여 하나의 문서로 조립합니다.

문서 구조:
    {
        "master": {...niminfo..., "oslevel": "7200-05-03-2148"},
        # 아래 키는 configuration == "master"일 때만 존재
        "clients": {host: HostRecord},
        "vioses": {host: HostRecord},
        "lpp_sources": {name: ResourceRecord},
        "spots": {name: ResourceRecord},
        "mksysbs": {name: ResourceRecord},
    }

에러 정책:
    로컬 niminfo 읽기 실패(FatalConfigError)만 전체 작업을 중단합니다.
    나머지 실패는 경고로 기록되고 NimInventory.errors에 남습니다.

Example:
    from shared.nim import collect_nim_inventory

    inventory = collect_nim_inventory("/etc/niminfo")
    document = {"nim": inventory.to_dict()}
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from core.config import Settings, settings as default_settings
from core.exceptions import FatalConfigError
from core.parallel import CollectedError, ErrorCollector, try_or_default
from core.shell import CommandRunner, run_command

from .commands import query_oslevel
from .hosts import HostRecord, HostRole, collect_hosts
from .parser import AttributeMap, niminfo_to_dict
from .resources import ResourceRecord, ResourceType, collect_resources

logger = logging.getLogger(__name__)

# 마스터에서만 채워지는 문서 키 (출력 순서)
MASTER_ONLY_KEYS: tuple[str, ...] = ("clients", "vioses", "lpp_sources", "spots", "mksysbs")


@dataclass(frozen=True)
class NimInventory:
    """한 시점의 NIM 환경 스냅샷

    Attributes:
        master: 로컬 niminfo + oslevel
        clients: standalone 클라이언트 (마스터가 아니면 None)
        vioses: VIOS (마스터가 아니면 None)
        lpp_sources: lpp_source 리소스 (마스터가 아니면 None)
        spots: spot 리소스 (마스터가 아니면 None)
        mksysbs: mksysb 리소스 (마스터가 아니면 None)
        errors: 수집 중 기록된 에러 (문서에는 포함되지 않음)
    """

    master: AttributeMap
    clients: dict[str, HostRecord] | None = None
    vioses: dict[str, HostRecord] | None = None
    lpp_sources: dict[str, ResourceRecord] | None = None
    spots: dict[str, ResourceRecord] | None = None
    mksysbs: dict[str, ResourceRecord] | None = None
    errors: tuple[CollectedError, ...] = ()

    @property
    def is_master(self) -> bool:
        return is_master(self.master)

    @property
    def error_count(self) -> int:
        return len(self.errors)

    def to_dict(self) -> dict[str, Any]:
        """인벤토리 문서 반환 (None 섹션 제외)"""
        document: dict[str, Any] = {"master": self.master}
        for key in MASTER_ONLY_KEYS:
            value = getattr(self, key)
            if value is not None:
                document[key] = value
        return document

    def get_error_summary(self) -> str:
        """수집 단계별 에러 요약 (에러가 없으면 빈 문자열)"""
        if not self.errors:
            return ""

        lines = [f"총 {len(self.errors)}건 경고"]
        for error in self.errors:
            lines.append(f"  - [{error.phase}] {error.error_message}")
        return "\n".join(lines)


def read_niminfo(path: str) -> AttributeMap:
    """로컬 niminfo 파일 파싱

    Raises:
        FatalConfigError: 파일이 없거나 읽을 수 없음
    """
    try:
        with open(path, encoding="utf-8", errors="replace") as info:
            return niminfo_to_dict(info)
    except OSError as e:
        raise FatalConfigError(path, e.strerror or str(e), cause=e) from e


def is_master(master: Mapping[str, Any]) -> bool:
    """niminfo 설정이 NIM 마스터인지 확인"""
    return master.get("configuration") == "master"


def collect_nim_inventory(
    config_path: str | None = None,
    runner: CommandRunner | None = None,
    settings: Settings | None = None,
) -> NimInventory:
    """NIM 인벤토리 수집 (진입점)

    Args:
        config_path: niminfo 경로 (기본: settings.NIMINFO_PATH = /etc/niminfo)
        runner: 명령 실행기 (기본: run_command)
        settings: 설정 (기본: 전역 settings)

    Returns:
        NimInventory

    Raises:
        FatalConfigError: 로컬 niminfo를 읽을 수 없음
    """
    runner = runner or run_command
    settings = settings or default_settings
    config_path = config_path or settings.NIMINFO_PATH

    master = read_niminfo(config_path)

    master_errors = ErrorCollector("master")
    master["oslevel"] = try_or_default(
        lambda: query_oslevel(runner, settings),
        default="",
        collector=master_errors,
        identifier=master.get("name", "master"),
        operation="oslevel",
    )

    if not is_master(master):
        logger.info(f"NIM 마스터가 아님 (configuration={master.get('configuration')!r}), 로컬 정보만 수집")
        return NimInventory(master=master, errors=tuple(master_errors.errors))

    collectors = [master_errors]
    sections: dict[str, Any] = {}

    for role in HostRole:
        collector = ErrorCollector(role.document_key)
        collectors.append(collector)
        sections[role.document_key] = collect_hosts(role, runner, settings, collector)

    for res_type in ResourceType:
        collector = ErrorCollector(res_type.document_key)
        collectors.append(collector)
        sections[res_type.document_key] = collect_resources(res_type, runner, settings, collector)

    errors = tuple(error for collector in collectors for error in collector.errors)
    logger.info(
        f"NIM 인벤토리 수집 완료: clients {len(sections['clients'])}, vioses {len(sections['vioses'])}, 경고 {len(errors)}건"
    )

    return NimInventory(master=master, errors=errors, **sections)
