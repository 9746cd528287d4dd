"""공유 도메인 로직 - CLI와 상위 인벤토리 프레임워크에서 공통 사용.

- nim: AIX NIM 인벤토리 수집 (niminfo/lsnim 파싱, 병렬 수집, 문서 조립)

의존성 구조:
    core (인프라)
       ↑
    shared (도메인)
       ↑
    cli
"""

from . import nim

__all__ = ["nim"]
