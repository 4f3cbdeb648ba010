"""
tests/cli/test_console_helpers.py - cli/ui/console.py 테스트
"""

import logging

import pytest
from rich.logging import RichHandler

import cli.ui
from cli.ui.console import NOISY_LOGGERS, configure_logging, create_table, print_error, verbosity_to_level


@pytest.fixture
def restore_root_logger():
    """루트 logger 상태 복원"""
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield root
    root.handlers = handlers
    root.setLevel(level)


class TestVerbosity:
    """verbosity_to_level 테스트"""

    @pytest.mark.parametrize(
        "verbose,quiet,level",
        [
            (0, False, logging.WARNING),
            (1, False, logging.INFO),
            (2, False, logging.DEBUG),
            (3, False, logging.DEBUG),
            (0, True, logging.ERROR),
        ],
    )
    def test_levels(self, verbose, quiet, level):
        """-v 횟수별 레벨"""
        assert verbosity_to_level(verbose, quiet) == level


class TestConfigureLogging:
    """configure_logging 테스트"""

    def test_single_rich_handler(self, restore_root_logger):
        """여러 번 호출해도 RichHandler는 하나"""
        configure_logging(verbose=1)
        configure_logging(verbose=2)

        rich_handlers = [h for h in restore_root_logger.handlers if isinstance(h, RichHandler)]
        assert len(rich_handlers) == 1
        assert restore_root_logger.level == logging.DEBUG

    def test_noisy_loggers_pinned(self, restore_root_logger):
        """botocore 등은 DEBUG에서도 WARNING 이상"""
        configure_logging(verbose=2)

        assert all(logging.getLogger(name).level == logging.WARNING for name in NOISY_LOGGERS)


class TestCreateTable:
    """create_table 테스트"""

    def test_columns(self):
        """컬럼 헤더"""
        table = create_table("title", ["Severity", "Check"])

        assert [c.header for c in table.columns] == ["Severity", "Check"]
        assert table.title == "title"


class TestPrintError:
    """print_error 테스트"""

    def test_writes_single_line_to_stderr(self, capsys):
        """stdout은 비우고 stderr에 한 줄만 출력"""
        print_error("subnets 조회 실패")

        captured = capsys.readouterr()
        assert captured.out == ""
        assert captured.err.strip().splitlines() == ["✗ subnets 조회 실패"]

    def test_public_helpers(self):
        """cli.ui는 실제로 쓰이는 출력 도구만 노출"""
        assert sorted(cli.ui.__all__) == [
            "SYMBOL_ERROR",
            "configure_logging",
            "console",
            "create_table",
            "err_console",
            "get_console",
            "print_error",
            "verbosity_to_level",
        ]
