"""
cli/app.py - 메인 CLI 엔트리포인트

Click 기반의 NIM 인벤토리 수집 명령입니다.
수집한 문서를 "nim" 키 아래에 게시(JSON 또는 트리)하고,
호스트별 경고는 stderr로 요약합니다.

명령어 구조:
    nim-inventory                         # /etc/niminfo 기준 수집, JSON 출력
    nim-inventory -c ./niminfo            # 다른 niminfo 파일 사용
    nim-inventory -f tree                 # Rich 트리로 출력
    nim-inventory -o nim.json             # JSON 파일로 저장 (-f tree와 함께 사용 불가)
    nim-inventory --timeout 60 --max-workers 10

종료 코드:
    0: 수집 완료 (일부 호스트 경고가 있어도 0)
    1: 로컬 niminfo를 읽을 수 없음, 또는 잘못된 NIM_INVENTORY_* 설정
    2: 잘못된 명령행 옵션
"""

from __future__ import annotations

import contextlib
import json as json_module
import logging
from pathlib import Path

import click

from cli.ui import print_error, print_inventory_tree, print_success, print_warning, setup_logging
from core.config import Settings, get_version
from core.exceptions import ConfigError, FatalConfigError
from core.parallel import quiet_mode
from shared.nim import collect_nim_inventory

logger = logging.getLogger(__name__)

VERSION = get_version()

# 상위 인벤토리에서 이 문서를 게시하는 속성 이름
DOCUMENT_KEY = "nim"


def build_settings(timeout: int | None, max_workers: int | None) -> Settings:
    """환경변수 설정에 명령행 옵션을 덮어쓴 Settings 생성"""
    overrides: dict[str, int] = {}
    if timeout is not None:
        overrides["REMOTE_TIMEOUT"] = timeout
    if max_workers is not None:
        overrides["MAX_WORKERS"] = max_workers
    return Settings.from_env(**overrides)


@click.command("nim-inventory")
@click.version_option(VERSION, prog_name="nim-inventory")
@click.option("-c", "--config", "config_path", default=None, help="niminfo 파일 경로 (기본: /etc/niminfo)")
@click.option("-o", "--output", default=None, type=click.Path(dir_okay=False), help="JSON 출력 파일 경로")
@click.option(
    "-f",
    "--format",
    "output_format",
    type=click.Choice(["json", "tree"]),
    default="json",
    show_default=True,
    help="출력 형식",
)
@click.option("--timeout", type=click.IntRange(min=1), default=None, help="원격 호출 제한 시간 (초, 기본: 30)")
@click.option("--max-workers", type=click.IntRange(1, 100), default=None, help="최대 동시 작업 수 (기본: 20)")
@click.option("-q", "--quiet", is_flag=True, help="경고 출력 억제")
@click.option("-v", "--verbose", is_flag=True, help="진행 로그 출력")
def cli(
    config_path: str | None,
    output: str | None,
    output_format: str,
    timeout: int | None,
    max_workers: int | None,
    quiet: bool,
    verbose: bool,
) -> None:
    """AIX NIM 환경 인벤토리 수집"""
    setup_logging(verbose)

    if output and output_format == "tree":
        raise click.UsageError("-f tree는 화면 출력 전용이며 -o와 함께 사용할 수 없습니다")

    try:
        settings = build_settings(timeout, max_workers)
    except ConfigError as e:
        print_error(str(e))
        raise SystemExit(1) from e

    try:
        with quiet_mode() if quiet else contextlib.nullcontext():
            inventory = collect_nim_inventory(config_path, settings=settings)
    except FatalConfigError as e:
        print_error(str(e))
        raise SystemExit(1) from e

    document = {DOCUMENT_KEY: inventory.to_dict()}

    if output:
        Path(output).write_text(json_module.dumps(document, ensure_ascii=False, indent=2) + "\n", encoding="utf-8")
        if not quiet:
            print_success(f"저장 완료: {output}")
    elif output_format == "tree":
        print_inventory_tree(document[DOCUMENT_KEY], title=DOCUMENT_KEY)
    else:
        click.echo(json_module.dumps(document, ensure_ascii=False, indent=2))

    if inventory.errors and not quiet:
        print_warning(inventory.get_error_summary())


if __name__ == "__main__":
    cli()
