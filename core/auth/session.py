"""
core/auth/session.py - boto3 Session 생성

주요 구성 요소:
- AWSConfig: 프로파일/리전/프록시/재시도 설정 값
- resolve_proxy_url: HTTPS_PROXY 환경 변수 해석
- create_session: AWSConfig로부터 boto3 Session 생성
"""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from dataclasses import dataclass, replace

import boto3

logger = logging.getLogger(__name__)

# 환경에서 리전을 찾지 못했을 때 사용하는 기본 리전
FALLBACK_REGION = "us-east-1"


def resolve_proxy_url(environ: Mapping[str, str] | None = None) -> str | None:
    """HTTPS_PROXY (또는 https_proxy) 환경 변수에서 프록시 URL 결정

    스킴이 없는 값은 http:// 로 간주합니다.

    Args:
        environ: 환경 변수 매핑 (None이면 os.environ)

    Returns:
        프록시 URL 또는 None
    """
    env = os.environ if environ is None else environ
    proxy = env.get("HTTPS_PROXY") or env.get("https_proxy")
    if not proxy:
        return None

    if "://" not in proxy:
        logger.warning(f"프록시 URL에 스킴이 없어 HTTP로 간주합니다: {proxy}")
        proxy = f"http://{proxy}"

    return proxy


@dataclass(frozen=True)
class AWSConfig:
    """AWS 클라이언트 설정

    Resource Gateway 생성자에 명시적으로 전달되는 값입니다.

    Attributes:
        profile: AWS 프로파일 이름 (None이면 기본 자격 증명 체인)
        region: AWS 리전
        proxy_url: HTTPS 프록시 URL (None이면 직접 연결)
        max_attempts: 전송 계층 최대 시도 횟수 (botocore adaptive retry)
        connect_timeout: 연결 타임아웃 (초)
        read_timeout: 읽기 타임아웃 (초)
    """

    profile: str | None = None
    region: str = FALLBACK_REGION
    proxy_url: str | None = None
    max_attempts: int = 5
    connect_timeout: int = 10
    read_timeout: int = 30

    @classmethod
    def from_environment(
        cls,
        profile: str | None = None,
        region: str | None = None,
        environ: Mapping[str, str] | None = None,
    ) -> AWSConfig:
        """환경 변수를 반영한 AWSConfig 생성

        리전 우선순위: 인자 > AWS_REGION > AWS_DEFAULT_REGION > us-east-1
        """
        env = os.environ if environ is None else environ
        resolved_region = region or env.get("AWS_REGION") or env.get("AWS_DEFAULT_REGION") or FALLBACK_REGION
        return cls(
            profile=profile,
            region=resolved_region,
            proxy_url=resolve_proxy_url(env),
        )

    def with_deadline(self, seconds: float) -> AWSConfig:
        """전체 실행 기한에 맞춰 타임아웃과 재시도 횟수를 줄인 설정 반환

        기한을 넘긴 조회 스레드는 취소되지 않으므로, 단일 호출이 기한보다
        오래 걸리지 않도록 소켓 타임아웃을 기한 이하로 제한합니다.
        (최소 1초, 시도 횟수는 기한 안에 들어가는 만큼만 허용)
        """
        limit = max(1, int(seconds))
        read_timeout = min(self.read_timeout, limit)
        max_attempts = max(1, min(self.max_attempts, limit // read_timeout))
        return replace(
            self,
            connect_timeout=min(self.connect_timeout, limit),
            read_timeout=read_timeout,
            max_attempts=max_attempts,
        )


def create_session(config: AWSConfig) -> boto3.Session:
    """AWSConfig로 boto3 Session 생성

    Args:
        config: AWS 클라이언트 설정

    Returns:
        boto3 Session
    """
    logger.debug(f"세션 생성: profile={config.profile or 'default'}, region={config.region}")
    if config.profile:
        return boto3.Session(profile_name=config.profile, region_name=config.region)
    return boto3.Session(region_name=config.region)
