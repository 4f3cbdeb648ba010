"""
core/io - 출력 설정
"""

from .config import OutputConfig, OutputFormat

__all__ = ["OutputConfig", "OutputFormat"]
