"""
analyzers/byovpc/checks/loadbalancer.py - 로드밸런서/서브넷 연결 검사

- load-balancer-scheme: internet-facing은 Public 서브넷에만, internal은 Private 서브넷에만
- load-balancer-subnets: 로드밸런서가 클러스터 설정 서브넷 밖에 연결되지 않았는지
"""

from __future__ import annotations

from collections.abc import Sequence

from core.data.network.types import DerivedFacts, LoadBalancer, LoadBalancerScheme, TopologySnapshot, Visibility

from ..findings import Finding, Severity

LOAD_BALANCER_SCHEME = "load-balancer-scheme"
LOAD_BALANCER_SUBNETS = "load-balancer-subnets"

_EXPECTED_VISIBILITY = {
    LoadBalancerScheme.INTERNET_FACING: Visibility.PUBLIC,
    LoadBalancerScheme.INTERNAL: Visibility.PRIVATE,
}


def _label(lb: LoadBalancer) -> str:
    return f"{lb.lb_type.value} {lb.name or lb.lb_id}"


def check_load_balancer_scheme(
    snapshot: TopologySnapshot,
    facts: DerivedFacts,
    unknown_severity: Severity = Severity.WARN,
) -> list[Finding]:
    """로드밸런서 scheme과 연결 서브넷 가시성 일치 검사

    불일치는 서브넷마다 Fail, Unknown 서브넷 연결은 unknown_severity (기본 Warn).
    문제가 없는 로드밸런서는 Pass 하나.
    """
    findings = []
    for lb in snapshot.load_balancers:
        expected = _EXPECTED_VISIBILITY[lb.scheme]
        lb_findings = []

        for subnet_id in lb.subnet_ids:
            actual = facts.visibility_of(subnet_id)
            evidence = {
                "subnet_id": subnet_id,
                "visibility": actual.value,
                "scheme": lb.scheme.value,
                "lb_type": lb.lb_type.value,
            }
            if actual == Visibility.UNKNOWN:
                lb_findings.append(
                    Finding(
                        check_name=LOAD_BALANCER_SCHEME,
                        severity=unknown_severity,
                        subject_resource_id=lb.lb_id,
                        message=(
                            f"{_label(lb)} ({lb.scheme.value})이(가) 분류할 수 없는 서브넷 {subnet_id}에 "
                            "연결되어 있습니다. 라우팅을 수동으로 검토하세요"
                        ),
                        evidence=evidence,
                    )
                )
            elif actual != expected:
                lb_findings.append(
                    Finding(
                        check_name=LOAD_BALANCER_SCHEME,
                        severity=Severity.FAIL,
                        subject_resource_id=lb.lb_id,
                        message=(
                            f"{_label(lb)} ({lb.scheme.value})이(가) {actual.value} 서브넷 {subnet_id}에 "
                            f"연결되어 있습니다 ({expected.value} 서브넷이어야 함)"
                        ),
                        evidence=evidence,
                    )
                )

        if not lb_findings:
            lb_findings.append(
                Finding(
                    check_name=LOAD_BALANCER_SCHEME,
                    severity=Severity.PASS,
                    subject_resource_id=lb.lb_id,
                    message=f"{_label(lb)} ({lb.scheme.value})의 서브넷이 모두 {expected.value}입니다",
                    evidence={"scheme": lb.scheme.value, "subnet_ids": list(lb.subnet_ids)},
                )
            )
        findings.extend(lb_findings)
    return findings


def check_load_balancer_subnets(
    snapshot: TopologySnapshot,
    facts: DerivedFacts,
    configured_subnet_ids: Sequence[str] = (),
) -> list[Finding]:
    """로드밸런서가 클러스터 설정 서브넷에만 연결되어 있는지 검사

    설정 서브넷이 없으면 건너뜁니다.
    """
    if not configured_subnet_ids:
        return []

    configured = set(configured_subnet_ids)
    findings = []
    for lb in snapshot.load_balancers:
        outside = [sid for sid in lb.subnet_ids if sid not in configured]
        for subnet_id in outside:
            findings.append(
                Finding(
                    check_name=LOAD_BALANCER_SUBNETS,
                    severity=Severity.FAIL,
                    subject_resource_id=lb.lb_id,
                    message=f"{_label(lb)}이(가) 클러스터 설정에 없는 서브넷 {subnet_id}에 연결되어 있습니다",
                    evidence={"subnet_id": subnet_id, "configured_subnet_ids": sorted(configured)},
                )
            )
        if not outside:
            findings.append(
                Finding(
                    check_name=LOAD_BALANCER_SUBNETS,
                    severity=Severity.PASS,
                    subject_resource_id=lb.lb_id,
                    message=f"{_label(lb)}의 서브넷이 모두 클러스터 설정 서브넷입니다",
                    evidence={"subnet_ids": list(lb.subnet_ids)},
                )
            )
    return findings
