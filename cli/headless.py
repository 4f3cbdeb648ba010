"""
cli/headless.py - Headless Runner

CI/CD 파이프라인에서 사용하는 비대화형 실행 모드입니다.
설정 로드 -> 게이트웨이 생성 -> VPC 결정 -> 수집/검사 -> 리포트 출력 순으로
진행하고, 결과를 프로세스 종료 코드로 반환합니다.

종료 코드:
    0: Pass
    1: Fail
    3: Warn
    4: 치명적 오류 (게이트웨이/토폴로지/설정)
    130: 사용자 중단 (Ctrl+C)
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from analyzers.byovpc import CheckConfig, Report, run_report
from analyzers.byovpc.findings import EXIT_ERROR, EXIT_INTERRUPTED
from analyzers.byovpc.reporter import write_report
from cli.ui.console import console, err_console, print_error
from core.auth import AWSConfig
from core.data.network import AWSResourceGateway, resolve_vpc_id
from core.exceptions import CheckerError, format_error_for_user
from core.io.config import OutputConfig
from core.parallel import ParallelConfig

logger = logging.getLogger(__name__)


@dataclass
class HeadlessConfig:
    """Headless 실행 설정"""

    # 대상 (vpc_id가 없으면 subnet_ids로부터 추론)
    vpc_id: str | None = None
    subnet_ids: list[str] = field(default_factory=list)

    # 검사 설정 (config_file 값 위에 CLI 값을 덮어씀)
    config_file: str | None = None
    cluster_id: str | None = None
    required_tags: list[str] = field(default_factory=list)

    # 인증
    profile: str | None = None
    region: str | None = None

    # 수집
    max_workers: int = 4
    timeout: float | None = None

    # 출력
    format: str = "console"  # console, json
    output: str | None = None
    quiet: bool = False


class HeadlessRunner:
    """Headless CLI Runner

    치명적 오류는 stderr에 한 줄로만 출력하며, 부분 리포트는 출력하지 않습니다.
    """

    def __init__(self, config: HeadlessConfig):
        self.config = config

    def run(self) -> int:
        """Headless 실행

        Returns:
            프로세스 종료 코드
        """
        try:
            # 1. 검사 설정
            check_config = self._load_check_config()

            # 2. 게이트웨이
            aws_config = AWSConfig.from_environment(profile=self.config.profile, region=self.config.region)
            if self.config.timeout:
                aws_config = aws_config.with_deadline(self.config.timeout)
            logger.info(f"리전: {aws_config.region}, 프로파일: {aws_config.profile or 'default'}")
            gateway = AWSResourceGateway(aws_config)

            # 3. 대상 VPC
            vpc_id = self.config.vpc_id or resolve_vpc_id(gateway, self.config.subnet_ids)

            # 4. 수집 + 검사
            parallel_config = ParallelConfig(max_workers=self.config.max_workers, timeout=self.config.timeout)
            report = run_report(gateway, vpc_id, config=check_config, parallel_config=parallel_config)

            # 5. 출력
            self._output(report)
            return report.exit_code

        except KeyboardInterrupt:
            if not self.config.quiet:
                err_console.print("\n[dim]중단되었습니다[/dim]")
            return EXIT_INTERRUPTED
        except CheckerError as e:
            logger.debug("치명적 오류", exc_info=True)
            print_error(format_error_for_user(e))
            return EXIT_ERROR
        except Exception as e:
            # 리포트 파일 쓰기 실패 등
            logger.debug("예상치 못한 오류", exc_info=True)
            print_error(format_error_for_user(e))
            return EXIT_ERROR

    def _load_check_config(self) -> CheckConfig:
        if self.config.config_file:
            base = CheckConfig.from_file(self.config.config_file)
        else:
            base = CheckConfig()

        return base.merged(
            cluster_id=self.config.cluster_id,
            required_tag_keys=self.config.required_tags,
            configured_subnet_ids=self.config.subnet_ids,
        )

    def _output(self, report: Report) -> None:
        output = OutputConfig.from_string(self.config.format, output_file=self.config.output, quiet=self.config.quiet)
        write_report(report, output, console)


def run_headless(**kwargs) -> int:
    """HeadlessConfig 인자로 실행하고 종료 코드 반환"""
    return HeadlessRunner(HeadlessConfig(**kwargs)).run()
