# cli/ui - 콘솔 출력 (rich)
"""
콘솔 출력 모듈

리포트 출력, 에러 메시지, 로깅 설정
"""

from .console import (
    SYMBOL_ERROR,
    configure_logging,
    console,
    create_table,
    err_console,
    get_console,
    print_error,
    verbosity_to_level,
)

__all__ = [
    "SYMBOL_ERROR",
    "configure_logging",
    "console",
    "create_table",
    "err_console",
    "get_console",
    "print_error",
    "verbosity_to_level",
]
