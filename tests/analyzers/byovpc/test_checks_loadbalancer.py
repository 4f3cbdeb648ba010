"""
tests/analyzers/byovpc/test_checks_loadbalancer.py - 로드밸런서 검사 테스트
"""

from analyzers.byovpc.checks import check_load_balancer_scheme, check_load_balancer_subnets
from analyzers.byovpc.classifier import classify
from analyzers.byovpc.findings import Severity
from core.data.network.types import LoadBalancerScheme, LoadBalancerType


def _two_subnet_snapshot(topology, lb):
    return topology.snapshot(
        [topology.subnet("subnet-pub"), topology.subnet("subnet-prv")],
        [
            topology.public_rt("rtb-public", ("subnet-pub",)),
            topology.private_rt("rtb-private", ("subnet-prv",)),
        ],
        [lb],
    )


class TestLoadBalancerScheme:
    """load-balancer-scheme 테스트"""

    def test_internet_facing_on_private(self, topology):
        """internet-facing이 Private 서브넷에 연결되면 Fail 하나"""
        lb = topology.lb("router", ("subnet-pub", "subnet-prv"))
        snapshot = _two_subnet_snapshot(topology, lb)

        findings = check_load_balancer_scheme(snapshot, classify(snapshot))

        assert len(findings) == 1
        assert findings[0].severity == Severity.FAIL
        assert findings[0].subject_resource_id == lb.lb_id
        assert findings[0].evidence["subnet_id"] == "subnet-prv"
        assert findings[0].evidence["visibility"] == "private"

    def test_internal_on_public(self, topology):
        """internal이 Public 서브넷에 연결되면 Fail"""
        lb = topology.lb("api-int", ("subnet-pub",), scheme=LoadBalancerScheme.INTERNAL)
        snapshot = _two_subnet_snapshot(topology, lb)

        findings = check_load_balancer_scheme(snapshot, classify(snapshot))

        assert [f.severity for f in findings] == [Severity.FAIL]
        assert findings[0].evidence["scheme"] == "internal"

    def test_matching_is_single_pass(self, topology):
        """문제가 없으면 로드밸런서당 Pass 하나"""
        lb = topology.lb(
            "api-int", ("subnet-prv",), scheme=LoadBalancerScheme.INTERNAL, lb_type=LoadBalancerType.CLASSIC
        )
        snapshot = _two_subnet_snapshot(topology, lb)

        findings = check_load_balancer_scheme(snapshot, classify(snapshot))

        assert [f.severity for f in findings] == [Severity.PASS]

    def test_unknown_subnet_default_warn(self, topology):
        """Unknown 서브넷 연결은 기본 Warn"""
        snapshot = topology.snapshot(
            [topology.subnet("subnet-odd")],
            [topology.isolated_rt("rtb-main", is_main=True)],
            [topology.lb("router", ("subnet-odd",))],
        )

        findings = check_load_balancer_scheme(snapshot, classify(snapshot))

        assert [f.severity for f in findings] == [Severity.WARN]
        assert findings[0].evidence["visibility"] == "unknown"

    def test_unknown_subnet_configured_fail(self, topology):
        """Unknown 정책을 Fail로 설정"""
        snapshot = topology.snapshot(
            [topology.subnet("subnet-odd")],
            [topology.isolated_rt("rtb-main", is_main=True)],
            [topology.lb("router", ("subnet-odd",))],
        )

        findings = check_load_balancer_scheme(snapshot, classify(snapshot), unknown_severity=Severity.FAIL)

        assert [f.severity for f in findings] == [Severity.FAIL]

    def test_no_load_balancers(self, topology):
        """로드밸런서가 없으면 결과 없음"""
        snapshot = topology.snapshot([topology.subnet("subnet-a")], [topology.private_rt("rtb-main", is_main=True)])

        assert check_load_balancer_scheme(snapshot, classify(snapshot)) == []


class TestLoadBalancerSubnets:
    """load-balancer-subnets 테스트"""

    def test_outside_configured(self, topology):
        """설정 서브넷 밖 연결은 Fail"""
        snapshot = topology.standard()

        findings = check_load_balancer_subnets(snapshot, classify(snapshot), ["subnet-pub-a"])

        assert [f.severity for f in findings] == [Severity.FAIL]
        assert findings[0].evidence["subnet_id"] == "subnet-pub-c"

    def test_inside_configured(self, topology):
        """모두 설정 서브넷이면 Pass"""
        snapshot = topology.standard()

        findings = check_load_balancer_subnets(snapshot, classify(snapshot), ["subnet-pub-a", "subnet-pub-c"])

        assert [f.severity for f in findings] == [Severity.PASS]

    def test_skipped_without_configuration(self, topology):
        """설정 서브넷이 없으면 건너뜀"""
        snapshot = topology.standard()

        assert check_load_balancer_subnets(snapshot, classify(snapshot)) == []
