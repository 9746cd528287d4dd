"""
shared/nim/attributes.py - 속성 정규화 및 병합

lsnim 속성에서 인벤토리에 불필요한 키를 제거하고,
병렬 작업의 부분 결과를 하나의 매핑으로 병합합니다.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from .parser import AttributeMap

# lsnim -l 출력 중 인벤토리에서 제외하는 키
SUPERFLUOUS_ATTRIBUTES: tuple[str, ...] = (
    "class",
    "type",
    "arch",
    "prev_state",
    "simages",
    "bos_license",
    "name",
)


def purge_superfluous_attributes(attributes: AttributeMap) -> AttributeMap:
    """불필요한 키를 제거한 새 AttributeMap 반환 (멱등)"""
    return {key: value for key, value in attributes.items() if key not in SUPERFLUOUS_ATTRIBUTES}


def deep_merge(first: Mapping[str, Any], second: Mapping[str, Any]) -> dict[str, Any]:
    """두 매핑을 재귀적으로 병합한 새 dict 반환

    같은 키의 값이 둘 다 매핑이면 재귀 병합하고, 그 외에는 second 값이 이깁니다.
    입력은 변경하지 않습니다.
    """
    merged: dict[str, Any] = dict(first)

    for key, value in second.items():
        current = merged.get(key)
        if isinstance(current, Mapping) and isinstance(value, Mapping):
            merged[key] = deep_merge(current, value)
        else:
            merged[key] = value

    return merged


def sort_by_name(mapping: Mapping[str, Any]) -> dict[str, Any]:
    """키(호스트/리소스 이름) 사전순으로 정렬된 새 dict 반환"""
    return {key: mapping[key] for key in sorted(mapping)}
