"""
core/parallel/errors.py - AWS 예외 분류

boto3/botocore 예외를 GatewayErrorKind로 분류하고 GatewayError로 변환합니다.
변환된 오류는 모두 치명적이며, 여기서 재시도하거나 무시하지 않습니다.

주요 구성 요소:
- categorize_error_code: 에러 코드 문자열 -> GatewayErrorKind
- get_error_code: 예외에서 에러 코드 추출
- to_gateway_error: 임의의 예외 -> GatewayError

Example:
    try:
        response = ec2.describe_subnets(Filters=filters)
    except Exception as e:
        raise to_gateway_error(e, "subnets", "describe_subnets") from e
"""

from __future__ import annotations

import logging

from botocore.exceptions import (
    ClientError,
    NoCredentialsError,
    PartialCredentialsError,
    ProfileNotFound,
)

from core.exceptions import GatewayError, GatewayErrorKind, ResourceNotFoundError

logger = logging.getLogger(__name__)

_UNAUTHORIZED_KEYWORDS = (
    "accessdenied",
    "unauthorized",
    "authfailure",
    "forbidden",
    "expiredtoken",
    "invalidclienttokenid",
    "signaturedoesnotmatch",
)
_NOT_FOUND_KEYWORDS = ("notfound", "nosuch", "doesnotexist")
_THROTTLED_KEYWORDS = ("throttl", "ratelimit", "requestlimitexceeded", "toomanyrequests", "rateexceeded")


def categorize_error_code(error_code: str) -> GatewayErrorKind:
    """에러 코드 문자열을 기반으로 GatewayErrorKind 분류

    에러 코드에 포함된 키워드를 분석하여 적절한 종류를 반환합니다.

    Args:
        error_code: AWS 에러 코드 문자열 (예: "UnauthorizedOperation", "InvalidVpcID.NotFound")

    Returns:
        분류된 오류 종류. 매칭되는 키워드가 없으면 TRANSPORT 반환.
    """
    code = error_code.lower()

    if any(x in code for x in _UNAUTHORIZED_KEYWORDS):
        return GatewayErrorKind.UNAUTHORIZED
    if any(x in code for x in _NOT_FOUND_KEYWORDS):
        return GatewayErrorKind.NOT_FOUND
    if any(x in code for x in _THROTTLED_KEYWORDS):
        return GatewayErrorKind.THROTTLED

    return GatewayErrorKind.TRANSPORT


def get_error_code(error: BaseException) -> str:
    """예외에서 에러 코드 추출

    Args:
        error: 예외

    Returns:
        ClientError면 AWS 에러 코드, 아니면 예외 클래스 이름
    """
    if isinstance(error, ClientError):
        return str(error.response.get("Error", {}).get("Code", "Unknown"))
    return type(error).__name__


def categorize_error(error: BaseException) -> GatewayErrorKind:
    """예외를 GatewayErrorKind로 분류

    Args:
        error: 예외

    Returns:
        오류 종류
    """
    if isinstance(error, GatewayError):
        return error.kind
    if isinstance(error, ClientError):
        return categorize_error_code(get_error_code(error))
    if isinstance(error, (NoCredentialsError, PartialCredentialsError, ProfileNotFound)):
        return GatewayErrorKind.UNAUTHORIZED
    # EndpointConnectionError, ConnectTimeoutError, ReadTimeoutError 및 그 외 예외
    return GatewayErrorKind.TRANSPORT


def to_gateway_error(
    error: BaseException,
    resource_kind: str,
    operation: str | None = None,
    resource_id: str | None = None,
) -> GatewayError:
    """임의의 예외를 GatewayError로 변환

    이미 GatewayError면 그대로 반환합니다. NOT_FOUND이고 resource_id가 주어지면
    ResourceNotFoundError를 반환합니다.

    Args:
        error: 원본 예외
        resource_kind: 조회 중이던 리소스 종류
        operation: API 작업 이름
        resource_id: 조회 대상 리소스 ID (있는 경우)

    Returns:
        GatewayError
    """
    if isinstance(error, GatewayError):
        return error

    kind = categorize_error(error)
    error_code = get_error_code(error)
    cause = error if isinstance(error, Exception) else None

    if kind == GatewayErrorKind.NOT_FOUND and resource_id:
        converted: GatewayError = ResourceNotFoundError(
            resource_kind=resource_kind,
            resource_id=resource_id,
            operation=operation,
            error_code=error_code,
            cause=cause,
        )
    else:
        if isinstance(error, ClientError):
            message = str(error.response.get("Error", {}).get("Message", error))
        else:
            message = str(error) or type(error).__name__
        converted = GatewayError(
            kind=kind,
            resource_kind=resource_kind,
            message=message,
            operation=operation,
            error_code=error_code,
            cause=cause,
        )

    logger.debug(f"[{resource_kind}] {operation or '-'}: {error_code} -> {kind.value}")
    return converted
