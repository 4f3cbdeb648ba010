"""
tests/core/test_core_exceptions.py - core/exceptions.py 테스트
"""

from core.exceptions import (
    CheckerError,
    CheckExecutionError,
    ConfigError,
    GatewayError,
    GatewayErrorKind,
    InconsistentTopologyError,
    ResourceNotFoundError,
    format_error_for_user,
)


class TestCheckerError:
    """CheckerError 베이스 예외 테스트"""

    def test_message_and_cause(self):
        """원인 예외가 문자열에 포함됨"""
        error = CheckerError("실패", cause=ValueError("boom"))

        assert str(error) == "실패: boom"
        assert error.to_dict()["cause"] == "boom"

    def test_to_dict(self):
        """딕셔너리 변환"""
        result = CheckerError("실패", details={"a": 1}).to_dict()

        assert result["error_type"] == "CheckerError"
        assert result["message"] == "실패"
        assert result["cause"] is None
        assert result["details"] == {"a": 1}


class TestGatewayError:
    """GatewayError 테스트"""

    def test_message_contains_resource_kind(self):
        """실패한 리소스 종류가 메시지에 포함됨"""
        error = GatewayError(
            GatewayErrorKind.THROTTLED,
            "route_tables",
            "Rate exceeded",
            operation="describe_route_tables",
            error_code="RequestLimitExceeded",
        )

        assert "route_tables" in str(error)
        assert "throttled" in str(error)
        assert "RequestLimitExceeded" in str(error)
        assert error.kind == GatewayErrorKind.THROTTLED
        assert error.resource_kind == "route_tables"
        assert error.details["operation"] == "describe_route_tables"

    def test_resource_not_found_kind(self):
        """ResourceNotFoundError는 항상 NOT_FOUND"""
        error = ResourceNotFoundError("vpc", "vpc-123")

        assert isinstance(error, GatewayError)
        assert error.kind == GatewayErrorKind.NOT_FOUND
        assert error.resource_id == "vpc-123"
        assert "vpc-123" in str(error)


class TestOtherErrors:
    """토폴로지/검사/설정 예외 테스트"""

    def test_inconsistent_topology_keeps_violations(self):
        """위반 목록 보존"""
        error = InconsistentTopologyError(["a", "b"])

        assert error.violations == ["a", "b"]
        assert "2건" in str(error)

    def test_check_execution_error_details(self):
        """검사 이름과 예외 타입 기록"""
        error = CheckExecutionError("az-balance", KeyError("x"))

        assert error.check_name == "az-balance"
        assert error.details["exception_type"] == "KeyError"

    def test_config_error_key(self):
        """설정 키 기록"""
        error = ConfigError("max_subnets_per_az", "정수여야 합니다")

        assert error.config_key == "max_subnets_per_az"
        assert "max_subnets_per_az" in str(error)


class TestHelpers:
    """유틸리티 함수 테스트"""

    def test_format_gateway_error_has_hint(self):
        """게이트웨이 오류에는 조치 힌트 추가"""
        error = GatewayError(GatewayErrorKind.UNAUTHORIZED, "subnets", "denied")

        assert "IAM" in format_error_for_user(error)

    def test_format_plain_exception(self):
        """일반 예외 포맷"""
        assert format_error_for_user(ValueError("bad")) == "ValueError: bad"
