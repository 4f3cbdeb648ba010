"""
core/parallel/client.py - boto3 client 생성 헬퍼

Retry(adaptive 모드) + 타임아웃 + 연결 풀 + 프록시가 설정된
boto3 client를 생성합니다. 일시적 전송 오류의 재시도는 여기(botocore)서만
일어나며, 상위 로직은 재시도하지 않습니다.

Example:
    from core.auth import AWSConfig, create_session
    from core.parallel.client import get_client

    config = AWSConfig(region="ap-northeast-2")
    ec2 = get_client(create_session(config), "ec2", aws_config=config)
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Literal, cast

from botocore.config import Config

if TYPE_CHECKING:
    import boto3

    from core.auth import AWSConfig

# Retry mode 타입 (botocore TypedDict와 호환)
RetryMode = Literal["legacy", "standard", "adaptive"]

# 기본 retry 설정
DEFAULT_MAX_ATTEMPTS = 5
DEFAULT_RETRY_MODE: RetryMode = "adaptive"  # adaptive: 동적 조정, standard: 고정
DEFAULT_CONNECT_TIMEOUT = 10  # 초
DEFAULT_READ_TIMEOUT = 30  # 초
DEFAULT_MAX_POOL_CONNECTIONS = 10  # 동시 조회 수(4) 이상


def build_client_config(
    max_attempts: int = DEFAULT_MAX_ATTEMPTS,
    retry_mode: RetryMode = DEFAULT_RETRY_MODE,
    connect_timeout: int = DEFAULT_CONNECT_TIMEOUT,
    read_timeout: int = DEFAULT_READ_TIMEOUT,
    proxy_url: str | None = None,
) -> Config:
    """botocore Config 생성

    Args:
        max_attempts: 최대 시도 횟수
        retry_mode: 재시도 모드
        connect_timeout: 연결 타임아웃 (초)
        read_timeout: 읽기 타임아웃 (초)
        proxy_url: HTTPS 프록시 URL (None이면 직접 연결)

    Returns:
        botocore Config
    """
    options: dict[str, Any] = {
        "retries": {"max_attempts": max_attempts, "mode": retry_mode},
        "connect_timeout": connect_timeout,
        "read_timeout": read_timeout,
        "max_pool_connections": DEFAULT_MAX_POOL_CONNECTIONS,
    }
    if proxy_url:
        options["proxies"] = {"https": proxy_url}

    return Config(**options)


def get_client(
    session: boto3.Session,
    service_name: str,
    aws_config: AWSConfig | None = None,
    region_name: str | None = None,
    **kwargs: Any,
) -> Any:
    """Retry가 적용된 boto3 client 생성

    Args:
        session: boto3 Session
        service_name: AWS 서비스 이름 (ec2, elb, elbv2)
        aws_config: 재시도/타임아웃/프록시/리전 설정 (None이면 기본값)
        region_name: 리전 (None이면 aws_config 또는 세션 기본값)
        **kwargs: session.client()에 전달할 추가 인자

    Returns:
        boto3 client
    """
    if aws_config is not None:
        config = build_client_config(
            max_attempts=aws_config.max_attempts,
            connect_timeout=aws_config.connect_timeout,
            read_timeout=aws_config.read_timeout,
            proxy_url=aws_config.proxy_url,
        )
        region_name = region_name or aws_config.region
    else:
        config = build_client_config()

    # 기존 config가 있으면 병합
    if "config" in kwargs:
        existing = kwargs.pop("config")
        config = config.merge(existing)

    # cast to Any to bypass boto3-stubs Literal type requirements
    return session.client(  # pyright: ignore[reportCallIssue]
        cast(Any, service_name),
        region_name=region_name,
        config=config,
        **kwargs,
    )
