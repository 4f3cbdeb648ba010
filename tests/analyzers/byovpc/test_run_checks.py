"""
tests/analyzers/byovpc/test_run_checks.py - run_checks 통합 테스트

FakeGateway로 수집 -> 분류 -> 검사 -> 집계 전체 흐름을 확인합니다.
"""

import pytest

from analyzers.byovpc import CheckConfig, Severity, run_checks, run_report
from core.exceptions import GatewayError, GatewayErrorKind, InconsistentTopologyError

CLUSTER_TAG = "kubernetes.io/cluster/my-cluster"


class TestRunChecks:
    """run_checks 테스트"""

    def test_pass(self, fake_gateway, topology):
        """정상 토폴로지"""
        status, findings = run_checks(fake_gateway(), topology.vpc_id, [CLUSTER_TAG])

        assert status == Severity.PASS
        assert findings[0].check_name == "tag-compliance"

    def test_throttled_is_fatal(self, fake_gateway, topology, client_error):
        """라우트 테이블 조회 쓰로틀링은 Finding 없이 치명적 오류"""
        gateway = fake_gateway(errors={"route_tables": client_error("Throttling")})

        with pytest.raises(GatewayError) as exc_info:
            run_checks(gateway, topology.vpc_id, [CLUSTER_TAG])

        assert exc_info.value.kind == GatewayErrorKind.THROTTLED
        assert exc_info.value.resource_kind == "route_tables"

    def test_inconsistent_topology_is_fatal(self, fake_gateway, topology):
        """불변식 위반은 검사 전에 중단"""
        gateway = fake_gateway()
        gateway.load_balancers.append(topology.lb("stray", ("subnet-elsewhere",)))

        with pytest.raises(InconsistentTopologyError):
            run_checks(gateway, topology.vpc_id)

    def test_worst_severity(self, fake_gateway, topology):
        """전체 상태는 가장 심각한 Finding"""
        snapshot = topology.standard(subnet_tags={CLUSTER_TAG: ""})

        status, findings = run_checks(fake_gateway(snapshot), topology.vpc_id, [CLUSTER_TAG])

        assert status == Severity.WARN
        assert {f.severity for f in findings} == {Severity.PASS, Severity.WARN}

    def test_required_tags_override_config(self, fake_gateway, topology):
        """required_tag_keys 인자가 설정값보다 우선"""
        config = CheckConfig(required_tag_keys=["team"])

        status, findings = run_checks(fake_gateway(), topology.vpc_id, [CLUSTER_TAG], config=config)

        assert status == Severity.PASS
        tag_findings = [f for f in findings if f.check_name == "tag-compliance"]
        assert all(f.evidence["required_tag_keys"] == [CLUSTER_TAG] for f in tag_findings)

    def test_deterministic(self, fake_gateway, topology):
        """같은 입력이면 같은 결과"""
        first = run_checks(fake_gateway(), topology.vpc_id, [CLUSTER_TAG])
        second = run_checks(fake_gateway(), topology.vpc_id, [CLUSTER_TAG])

        assert first == second


class TestRunReport:
    """run_report 테스트"""

    def test_report(self, fake_gateway, topology):
        """Report 생성"""
        report = run_report(fake_gateway(), topology.vpc_id, config=CheckConfig(max_subnets_per_az=1))

        assert report.vpc_id == topology.vpc_id
        assert report.status == Severity.FAIL
        assert report.exit_code == 1
