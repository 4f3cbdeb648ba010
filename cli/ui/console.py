"""
cli/ui/console.py - Rich 콘솔 유틸리티

일관된 콘솔 출력과 로깅 설정을 위한 함수들
"""

import logging
import platform

from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

# botocore 노이즈 로그 제한
NOISY_LOGGERS = (
    "botocore",
    "botocore.httpchecksum",
    "botocore.credentials",
    "botocore.loaders",
    "botocore.session",
    "boto3",
    "urllib3",
)


def get_console(stderr: bool = False) -> Console:
    """Rich Console 인스턴스를 생성하고 반환합니다.

    Args:
        stderr: True면 표준 에러로 출력 (로그/에러 메시지용)
    """
    is_windows = platform.system().lower() == "windows"

    return Console(
        stderr=stderr,
        color_system="auto",
        highlight=False,
        soft_wrap=True,
        markup=True,
        emoji=not is_windows,
    )


# 전역 콘솔 인스턴스 (리포트는 stdout, 로그/에러는 stderr)
console = get_console()
err_console = get_console(stderr=True)


def verbosity_to_level(verbose: int, quiet: bool = False) -> int:
    """-v 횟수를 로그 레벨로 변환

    quiet면 ERROR, 0이면 WARNING, 1이면 INFO, 2 이상이면 DEBUG
    """
    if quiet:
        return logging.ERROR
    if verbose >= 2:
        return logging.DEBUG
    if verbose == 1:
        return logging.INFO
    return logging.WARNING


def configure_logging(verbose: int = 0, quiet: bool = False) -> int:
    """루트 logger에 RichHandler(stderr)를 한 번 설정합니다.

    Args:
        verbose: -v 횟수
        quiet: 최소 출력 모드

    Returns:
        설정된 로그 레벨
    """
    level = verbosity_to_level(verbose, quiet)

    root = logging.getLogger()
    for handler in list(root.handlers):
        if isinstance(handler, RichHandler):
            root.removeHandler(handler)

    handler = RichHandler(console=err_console, rich_tracebacks=True, show_path=False)
    handler.setFormatter(logging.Formatter("%(message)s", datefmt="[%X]"))
    root.addHandler(handler)
    root.setLevel(level)

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(max(level, logging.WARNING))

    return level


# =============================================================================
# 표준 출력 스타일 (이모지 없이 Rich 스타일만 사용)
# =============================================================================

SYMBOL_ERROR = "✗"


def print_error(message: str) -> None:
    """에러 메시지 출력 (빨간색 X, stderr)

    Args:
        message: 출력할 메시지
    """
    err_console.print(f"[red]{SYMBOL_ERROR} {message}[/red]", markup=True, highlight=False)


def create_table(title: str, columns: list[str]) -> Table:
    """공통 스타일 테이블 생성

    Args:
        title: 테이블 제목
        columns: 컬럼 헤더 리스트
    """
    table = Table(title=title, show_header=True, header_style="bold magenta")
    for column in columns:
        table.add_column(column)
    return table
