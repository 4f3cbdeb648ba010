"""출력 설정 모듈

리포트 출력 형식 및 옵션 설정

Usage:
    from core.io.config import OutputConfig, OutputFormat

    config = OutputConfig.from_string("json", output_file="report.json")

    if config.should_output_json():
        # JSON 출력
        pass
"""

from dataclasses import dataclass, field
from enum import Flag, auto


class OutputFormat(Flag):
    """출력 형식 플래그

    Usage:
        fmt = OutputFormat.CONSOLE | OutputFormat.JSON

        if OutputFormat.JSON in fmt:
            ...
    """

    NONE = 0
    CONSOLE = auto()
    JSON = auto()


@dataclass
class OutputConfig:
    """출력 설정

    Attributes:
        formats: 출력 형식 플래그 (기본: 콘솔)
        output_file: 저장 경로 (None이면 표준 출력)
        quiet: 요약 이외의 출력 최소화
    """

    formats: OutputFormat = field(default=OutputFormat.CONSOLE)
    output_file: str | None = None
    quiet: bool = False

    def should_output_console(self) -> bool:
        """Console 출력 여부"""
        return OutputFormat.CONSOLE in self.formats

    def should_output_json(self) -> bool:
        """JSON 출력 여부"""
        return OutputFormat.JSON in self.formats

    @classmethod
    def from_string(cls, format_str: str, output_file: str | None = None, quiet: bool = False) -> "OutputConfig":
        """문자열에서 OutputConfig 생성

        Args:
            format_str: 형식 문자열 ("console", "json")
            output_file: 저장 경로
            quiet: 최소 출력 모드

        Returns:
            OutputConfig 인스턴스
        """
        format_map = {
            "console": OutputFormat.CONSOLE,
            "json": OutputFormat.JSON,
        }

        formats = format_map.get(format_str.lower(), OutputFormat.CONSOLE)
        return cls(formats=formats, output_file=output_file, quiet=quiet)
