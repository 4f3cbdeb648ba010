"""
core/config.py - 중앙 설정 관리

- get_version(): 설치된 패키지 메타데이터(없으면 version.txt)에서 버전 문자열 로드
- load_yaml_config(): 검사 설정 YAML 파일 로드
"""

from __future__ import annotations

import logging
from importlib.metadata import PackageNotFoundError, version
from pathlib import Path
from typing import Any

import yaml  # type: ignore[import-untyped]

from core.exceptions import ConfigError

logger = logging.getLogger(__name__)

PROJECT_ROOT = Path(__file__).resolve().parent.parent
DIST_NAME = "byovpc-checker"
DEFAULT_VERSION = "0.0.1"


def get_version() -> str:
    """버전 문자열 반환

    설치된 배포판 메타데이터를 우선하고, 소스 체크아웃에서 실행하면 version.txt를 읽습니다.
    """
    try:
        return version(DIST_NAME)
    except PackageNotFoundError:
        logger.debug("Package metadata not found: %s", DIST_NAME)

    version_file = PROJECT_ROOT / "version.txt"
    try:
        with open(version_file, encoding="utf-8") as f:
            return f.read().strip() or DEFAULT_VERSION
    except OSError as e:
        logger.debug("Failed to read version file: %s", e)
    return DEFAULT_VERSION


def load_yaml_config(path: str | Path) -> dict[str, Any]:
    """YAML 설정 파일 로드

    Args:
        path: 설정 파일 경로

    Returns:
        설정 딕셔너리 (빈 파일이면 빈 딕셔너리)

    Raises:
        ConfigError: 파일을 읽을 수 없거나, YAML 문법 오류이거나, 최상위가 매핑이 아닌 경우
    """
    config_file = Path(path)
    try:
        with config_file.open(encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except OSError as e:
        raise ConfigError("config", f"설정 파일을 열 수 없습니다: {config_file}", cause=e) from e
    except yaml.YAMLError as e:
        raise ConfigError("config", f"YAML 형식 오류: {config_file}", cause=e) from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError("config", f"최상위 항목은 매핑이어야 합니다: {config_file}")

    logger.debug(f"설정 파일 로드: {config_file} ({len(data)}개 항목)")
    result: dict[str, Any] = data
    return result
