"""
core/exceptions.py - 통합 예외 계층 구조

애플리케이션 전체에서 사용되는 예외 클래스들을 정의합니다.
수집 단계(게이트웨이/토폴로지) 오류는 실행 전체를 중단시키고,
검사 단계 오류는 해당 검사의 Finding으로 변환됩니다.

예외 계층 구조:
    CheckerError (베이스)
    ├── GatewayError (AWS 조회 실패 - 항상 치명적)
    │   └── ResourceNotFoundError
    ├── InconsistentTopologyError (스냅샷 불변식 위반 - 치명적)
    ├── CheckExecutionError (개별 검사 내부 오류 - Finding으로 변환)
    └── ConfigError (설정 관련)

Usage:
    from core.exceptions import GatewayError, GatewayErrorKind

    try:
        subnets = gateway.list_subnets(vpc_id)
    except GatewayError as e:
        if e.kind == GatewayErrorKind.THROTTLED:
            ...
"""

from __future__ import annotations

from enum import Enum
from typing import Any


class CheckerError(Exception):
    """BYOVPC Checker 기본 예외 클래스

    모든 커스텀 예외의 베이스 클래스입니다.

    Attributes:
        message: 에러 메시지
        cause: 원인 예외 (체이닝용)
        details: 추가 상세 정보
    """

    def __init__(
        self,
        message: str,
        cause: Exception | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.cause = cause
        self.details = details or {}

    def __str__(self) -> str:
        if self.cause:
            return f"{self.message}: {self.cause}"
        return self.message

    def to_dict(self) -> dict[str, Any]:
        """예외 정보를 딕셔너리로 반환"""
        return {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "cause": str(self.cause) if self.cause else None,
            "details": self.details,
        }


# =============================================================================
# 게이트웨이 (AWS 조회) 관련 예외
# =============================================================================


class GatewayErrorKind(Enum):
    """게이트웨이 오류 종류

    어떤 종류든 현재 실행에는 치명적입니다 (무시되는 종류 없음).
    """

    UNAUTHORIZED = "unauthorized"  # 자격 증명 없음/만료, 권한 부족
    NOT_FOUND = "not_found"  # 대상 리소스 없음
    THROTTLED = "throttled"  # API 호출 한도 초과
    TRANSPORT = "transport"  # 네트워크/타임아웃/기타 서비스 오류


class GatewayError(CheckerError):
    """AWS 리소스 조회 실패

    boto3/botocore 예외를 래핑하며, 실패한 리소스 종류를 컨텍스트로 보존합니다.

    Attributes:
        kind: 오류 종류
        resource_kind: 조회 중이던 리소스 종류 (vpc, subnets, route_tables, load_balancers)
        operation: API 작업 이름
        error_code: AWS 에러 코드 (있는 경우)
    """

    def __init__(
        self,
        kind: GatewayErrorKind,
        resource_kind: str,
        message: str,
        operation: str | None = None,
        error_code: str | None = None,
        cause: Exception | None = None,
    ):
        full_message = f"{resource_kind} 조회 실패 ({kind.value})"
        if operation:
            full_message = f"{resource_kind} 조회 실패 ({kind.value}, {operation})"
        if error_code:
            full_message = f"{full_message} [{error_code}]"
        full_message = f"{full_message}: {message}"

        super().__init__(full_message, cause)
        self.kind = kind
        self.resource_kind = resource_kind
        self.operation = operation
        self.error_code = error_code
        self.details.update(
            {
                "kind": kind.value,
                "resource_kind": resource_kind,
                "operation": operation,
                "error_code": error_code,
            }
        )

    def __str__(self) -> str:
        # message에 원인이 이미 포함되어 있음
        return self.message


class ResourceNotFoundError(GatewayError):
    """대상 리소스(VPC, 서브넷)가 존재하지 않거나 자격 증명으로 조회되지 않음"""

    def __init__(
        self,
        resource_kind: str,
        resource_id: str,
        operation: str | None = None,
        error_code: str | None = None,
        cause: Exception | None = None,
    ):
        super().__init__(
            kind=GatewayErrorKind.NOT_FOUND,
            resource_kind=resource_kind,
            message=f"'{resource_id}'을(를) 찾을 수 없습니다",
            operation=operation,
            error_code=error_code,
            cause=cause,
        )
        self.resource_id = resource_id
        self.details["resource_id"] = resource_id


# =============================================================================
# 토폴로지 관련 예외
# =============================================================================


class InconsistentTopologyError(CheckerError):
    """수집된 스냅샷이 불변식을 위반함

    예: 로드밸런서가 VPC에 없는 서브넷을 참조, 서브넷에 라우트 테이블이 없음.
    위반된 불변식은 모든 파생 검사를 무효화하므로 실행 전체를 중단합니다.
    """

    def __init__(self, violations: list[str]):
        message = f"토폴로지 불일치 {len(violations)}건: {'; '.join(violations)}"
        super().__init__(message)
        self.violations = list(violations)
        self.details["violations"] = self.violations


# =============================================================================
# 검사 실행 관련 예외
# =============================================================================


class CheckExecutionError(CheckerError):
    """개별 검사 실행 중 예상치 못한 내부 오류

    검사 엔진 밖으로 전파되지 않고 해당 검사의 Fail Finding 증거로 사용됩니다.
    """

    def __init__(self, check_name: str, cause: Exception):
        message = f"검사 실행 오류 [{check_name}]: {type(cause).__name__}"
        super().__init__(message, cause)
        self.check_name = check_name
        self.details["check_name"] = check_name
        self.details["exception_type"] = type(cause).__name__


# =============================================================================
# 설정 관련 예외
# =============================================================================


class ConfigError(CheckerError):
    """설정 관련 예외"""

    def __init__(
        self,
        key: str,
        message: str,
        cause: Exception | None = None,
    ):
        full_message = f"설정 오류 [{key}]: {message}"
        super().__init__(full_message, cause)
        self.config_key = key
        self.details["config_key"] = key


# =============================================================================
# 예외 유틸리티 함수
# =============================================================================


def format_error_for_user(error: Exception) -> str:
    """사용자에게 표시할 에러 메시지 포맷팅

    Args:
        error: 예외

    Returns:
        사용자 친화적인 에러 메시지
    """
    if isinstance(error, GatewayError):
        hints = {
            GatewayErrorKind.UNAUTHORIZED: "자격 증명과 IAM 권한을 확인하세요.",
            GatewayErrorKind.THROTTLED: "요청이 너무 많습니다. 잠시 후 다시 시도하세요.",
            GatewayErrorKind.NOT_FOUND: "리전과 리소스 ID를 확인하세요.",
            GatewayErrorKind.TRANSPORT: "네트워크 또는 프록시 설정을 확인하세요.",
        }
        return f"{error} ({hints[error.kind]})"

    if isinstance(error, CheckerError):
        # 커스텀 예외는 이미 포맷팅됨
        return str(error)

    return f"{type(error).__name__}: {error}"
