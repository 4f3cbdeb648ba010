"""
cli/app.py - 메인 CLI 엔트리포인트

Click 기반의 CLI 애플리케이션 진입점입니다.

명령어 구조:
    byovpc-check --vpc-id vpc-0123456789abcdef0 --cluster-id my-cluster
    byovpc-check --subnet subnet-aaa --subnet subnet-bbb      # VPC는 서브넷으로부터 추론
    byovpc-check --vpc-id vpc-... -f json -o report.json      # JSON 저장
    byovpc-check --version                                    # 버전 표시

아키텍처:
    1. get_version(): core.config에서 버전 정보 로드
    2. cli(): Click 명령 - 옵션 파싱, 로깅 설정
    3. HeadlessRunner: 실제 실행 및 종료 코드 결정 (cli/headless.py)

Usage:
    # 명령줄에서 직접 실행
    $ byovpc-check --vpc-id vpc-0123456789abcdef0

    # 모듈로 실행
    $ python -m cli.app --vpc-id vpc-0123456789abcdef0
"""

import logging
import sys
from pathlib import Path

# 프로젝트 루트를 sys.path에 추가 (소스 트리에서 직접 실행할 때)
_project_root = Path(__file__).resolve().parent.parent
if str(_project_root) not in sys.path:
    sys.path.insert(0, str(_project_root))

import click  # noqa: E402

from cli.headless import run_headless  # noqa: E402
from cli.ui.console import configure_logging  # noqa: E402

logger = logging.getLogger(__name__)


def get_version() -> str:
    """버전 문자열 반환

    version.txt 파일에서 버전을 읽어옴
    """
    from core.config import get_version as config_get_version

    return config_get_version()


VERSION = get_version()


@click.command(name="byovpc-check", context_settings={"help_option_names": ["-h", "--help"]})
@click.option("--vpc-id", "vpc_id", help="검사할 VPC ID (생략 시 --subnet으로부터 추론)")
@click.option("--cluster-id", "cluster_id", help="클러스터 ID (kubernetes.io/cluster/<ID> 태그 기준)")
@click.option("--required-tag", "required_tags", multiple=True, help="필수 태그 키 (다중 가능)")
@click.option("--subnet", "subnet_ids", multiple=True, help="클러스터 설치에 사용된 서브넷 ID (다중 가능)")
@click.option(
    "-c",
    "--config",
    "config_file",
    type=click.Path(exists=True, dir_okay=False),
    help="검사 설정 YAML 파일",
)
@click.option("-p", "--profile", "profile", help="AWS 프로파일")
@click.option("-r", "--region", "region", help="AWS 리전 (기본: 환경 변수, 없으면 us-east-1)")
@click.option(
    "--max-workers",
    "max_workers",
    type=click.IntRange(1, 16),
    default=4,
    show_default=True,
    help="동시 조회 수",
)
@click.option("--timeout", "timeout", type=click.FloatRange(min=0, min_open=True), help="수집 단계 전체 제한 시간 (초)")
@click.option("-f", "--format", "format", type=click.Choice(["console", "json"]), default="console", show_default=True)
@click.option("-o", "--output", "output", default=None, help="출력 파일 경로")
@click.option("-v", "--verbose", "verbose", count=True, help="로그 상세도 (-v: INFO, -vv: DEBUG)")
@click.option("-q", "--quiet", "quiet", is_flag=True, help="최소 출력 모드")
@click.version_option(VERSION, prog_name="byovpc-check")
def cli(
    vpc_id: str | None,
    cluster_id: str | None,
    required_tags: tuple[str, ...],
    subnet_ids: tuple[str, ...],
    config_file: str | None,
    profile: str | None,
    region: str | None,
    max_workers: int,
    timeout: float | None,
    format: str,
    output: str | None,
    verbose: int,
    quiet: bool,
) -> None:
    """기존 VPC가 클러스터 설치 요건을 충족하는지 검사합니다.

    \b
    종료 코드:
      0  Pass
      1  Fail
      3  Warn
      4  치명적 오류 (AWS 조회, 토폴로지 불일치, 설정)
      130 사용자 중단
    """
    if not vpc_id and not subnet_ids:
        raise click.UsageError("--vpc-id 또는 --subnet 중 하나는 필요합니다")
    if verbose and quiet:
        raise click.UsageError("--verbose와 --quiet는 함께 사용할 수 없습니다")

    configure_logging(verbose=verbose, quiet=quiet)

    exit_code = run_headless(
        vpc_id=vpc_id,
        subnet_ids=list(subnet_ids),
        config_file=config_file,
        cluster_id=cluster_id,
        required_tags=list(required_tags),
        profile=profile,
        region=region,
        max_workers=max_workers,
        timeout=timeout,
        format=format,
        output=output,
        quiet=quiet,
    )
    raise SystemExit(exit_code)


if __name__ == "__main__":
    cli()
