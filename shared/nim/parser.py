"""
shared/nim/parser.py - NIM 텍스트 출력 파서

두 가지 key/value 형식을 AttributeMap(dict)으로 변환합니다.

1. niminfo 형식 (/etc/niminfo):
    export NIM_NAME=client1
    export NIM_CONFIGURATION=standalone
    export NIM_MASTER_HOSTNAME=master.example.com
    export NIM_ROUTES="10.0.0.1 10.0.0.2"

2. lsnim -l 속성 형식 (헤더 + 들여쓰기된 key = value):
    client1:
       class          = machines
       type           = standalone
       platform       = chrp

형식에 맞지 않는 줄(주석, 빈 줄, 헤더)은 에러가 아니라 무시합니다.
이 모듈의 함수는 예외를 발생시키지 않습니다.
"""

from __future__ import annotations

import re
from collections.abc import Iterable

AttributeValue = str | list[str]
AttributeMap = dict[str, AttributeValue]

NIMINFO_LINE = re.compile(r"^export\s+([A-Z_]+)=(.+)")

# 이 문자열을 포함하는 키는 공백 구분 목록
LIST_KEY = re.compile(r"hosts|routes|mounts")


def _lines(source: str | Iterable[str]) -> Iterable[str]:
    if isinstance(source, str):
        return source.splitlines()
    return source


def is_list_key(key: str) -> bool:
    """값이 공백 구분 목록으로 해석되는 키인지 확인"""
    return LIST_KEY.search(key) is not None


def niminfo_to_dict(source: str | Iterable[str]) -> AttributeMap:
    """niminfo 텍스트(또는 줄 iterable)를 dict로 변환

    - 키: 모든 "NIM_" 제거 후 소문자화 (NIM_MASTER_HOSTNAME -> master_hostname)
    - 값: 큰따옴표 제거
    - hosts/routes/mounts를 포함하는 키는 공백 기준 리스트

    Args:
        source: niminfo 파일 내용 문자열, 또는 열린 파일 객체

    Returns:
        AttributeMap
    """
    result: AttributeMap = {}

    for line in _lines(source):
        match = NIMINFO_LINE.match(line.rstrip("\r\n"))
        if not match:
            continue

        key = match.group(1).replace("NIM_", "").lower()
        value = match.group(2).replace('"', "")

        if is_list_key(key):
            result[key] = value.split()
        else:
            result[key] = value

    return result


def nim_attributes_to_dict(source: str | Iterable[str]) -> AttributeMap:
    """lsnim -l 출력을 dict로 변환

    공백/탭으로 시작하는 줄만 첫 번째 "="을 기준으로 나눕니다.
    "="이 없는 줄은 빈 값으로 기록됩니다.

    Args:
        source: lsnim -l 출력 문자열, 또는 줄 iterable

    Returns:
        AttributeMap (값은 모두 문자열)
    """
    result: AttributeMap = {}

    for line in _lines(source):
        if not line.startswith((" ", "\t")):
            continue

        key, _, value = line.partition("=")
        result[key.strip()] = value.strip()

    return result


def niminfo_to_lines(attributes: AttributeMap) -> list[str]:
    """AttributeMap을 niminfo 형식의 줄 목록으로 직렬화

    niminfo_to_dict의 역변환입니다. 목록 값은 공백으로 이어 붙이고
    큰따옴표로 감쌉니다. 키 안의 "NIM_"은 "NNIM_IM_"으로 기록하여
    niminfo_to_dict의 "NIM_" 제거 후 원래 키가 되도록 합니다.
    """
    lines = []
    for key, value in attributes.items():
        if isinstance(value, list):
            text = f'"{" ".join(value)}"'
        else:
            text = value or '""'
        lines.append(f"export NIM_{key.upper().replace('NIM_', 'NNIM_IM_')}={text}")
    return lines
