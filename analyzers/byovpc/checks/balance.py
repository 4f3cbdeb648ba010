"""
analyzers/byovpc/checks/balance.py - 가용 영역 구성 검사

- az-balance: AZ마다 Public/Private 서브넷이 최소 하나씩 있는지
- subnets-per-az: AZ당 서브넷 수가 허용치를 넘지 않는지
- elb-role-tags: 로드밸런서 컨트롤러가 서브넷을 찾을 수 있도록 role 태그가 있는지
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from core.data.network.types import DerivedFacts, TopologySnapshot, Visibility

from ..config import INTERNAL_ELB_ROLE_TAG, PUBLIC_ELB_ROLE_TAG
from ..findings import Finding, Severity

AZ_BALANCE = "az-balance"
SUBNETS_PER_AZ = "subnets-per-az"
ELB_ROLE_TAGS = "elb-role-tags"


def _az_evidence(az: str, groups: Mapping[Visibility, tuple[str, ...]]) -> dict[str, Any]:
    return {
        "availability_zone": az,
        "public": list(groups[Visibility.PUBLIC]),
        "private": list(groups[Visibility.PRIVATE]),
        "unknown": list(groups[Visibility.UNKNOWN]),
    }


def check_az_balance(snapshot: TopologySnapshot, facts: DerivedFacts) -> list[Finding]:
    """AZ별 Public/Private 균형 검사

    - Unknown 서브넷이 있으면 Warn (수동 검토 권장)
    - Public 또는 Private가 없으면 AZ당 Fail 하나
    - 둘 다 해당하지 않으면 Pass
    """
    findings = []
    for az in sorted(facts.az_groups):
        groups = facts.az_groups[az]
        evidence = _az_evidence(az, groups)
        az_findings = []

        if groups[Visibility.UNKNOWN]:
            az_findings.append(
                Finding(
                    check_name=AZ_BALANCE,
                    severity=Severity.WARN,
                    subject_resource_id=az,
                    message=(
                        f"{az}: 기본 경로가 없어 분류할 수 없는 서브넷이 있습니다 "
                        f"({', '.join(groups[Visibility.UNKNOWN])}). 라우팅을 수동으로 검토하세요"
                    ),
                    evidence=evidence,
                )
            )

        missing = []
        if not groups[Visibility.PUBLIC]:
            missing.append("Public")
        if not groups[Visibility.PRIVATE]:
            missing.append("Private")
        if missing:
            az_findings.append(
                Finding(
                    check_name=AZ_BALANCE,
                    severity=Severity.FAIL,
                    subject_resource_id=az,
                    message=f"{az}: missing {' and '.join(missing)} subnet",
                    evidence={**evidence, "missing": [m.lower() for m in missing]},
                )
            )

        if not az_findings:
            az_findings.append(
                Finding(
                    check_name=AZ_BALANCE,
                    severity=Severity.PASS,
                    subject_resource_id=az,
                    message=f"{az}: Public/Private 서브넷이 모두 있습니다",
                    evidence=evidence,
                )
            )
        findings.extend(az_findings)
    return findings


def check_subnets_per_az(
    snapshot: TopologySnapshot,
    facts: DerivedFacts,
    max_subnets_per_az: int = 2,
) -> list[Finding]:
    """AZ당 서브넷 수 검사 (허용치 초과 시 Fail)"""
    counts: dict[str, list[str]] = {}
    for subnet in snapshot.subnets:
        counts.setdefault(subnet.availability_zone, []).append(subnet.subnet_id)

    findings = []
    for az in sorted(counts):
        subnet_ids = counts[az]
        evidence = {"availability_zone": az, "count": len(subnet_ids), "max": max_subnets_per_az, "subnets": subnet_ids}
        if len(subnet_ids) > max_subnets_per_az:
            findings.append(
                Finding(
                    check_name=SUBNETS_PER_AZ,
                    severity=Severity.FAIL,
                    subject_resource_id=az,
                    message=f"{az}: 서브넷이 {len(subnet_ids)}개로 허용치({max_subnets_per_az})를 넘습니다",
                    evidence=evidence,
                )
            )
        else:
            findings.append(
                Finding(
                    check_name=SUBNETS_PER_AZ,
                    severity=Severity.PASS,
                    subject_resource_id=az,
                    message=f"{az}: 서브넷 {len(subnet_ids)}개",
                    evidence=evidence,
                )
            )
    return findings


def check_elb_role_tags(snapshot: TopologySnapshot, facts: DerivedFacts) -> list[Finding]:
    """서브넷 role 태그 검사

    Public 서브넷은 kubernetes.io/role/elb, Private 서브넷은
    kubernetes.io/role/internal-elb 태그가 있어야 합니다 (값은 보지 않음).
    Unknown 서브넷은 판정하지 않습니다.
    """
    expected_tags = {
        Visibility.PUBLIC: PUBLIC_ELB_ROLE_TAG,
        Visibility.PRIVATE: INTERNAL_ELB_ROLE_TAG,
    }

    findings = []
    for subnet in snapshot.subnets:
        visibility = facts.visibility_of(subnet.subnet_id)
        tag_key = expected_tags.get(visibility)
        if tag_key is None:
            continue

        evidence = {"visibility": visibility.value, "expected_tag": tag_key}
        if tag_key in subnet.tags:
            findings.append(
                Finding(
                    check_name=ELB_ROLE_TAGS,
                    severity=Severity.PASS,
                    subject_resource_id=subnet.subnet_id,
                    message=f"{visibility.value} 서브넷 {subnet.subnet_id}에 '{tag_key}' 태그가 있습니다",
                    evidence=evidence,
                )
            )
        else:
            findings.append(
                Finding(
                    check_name=ELB_ROLE_TAGS,
                    severity=Severity.WARN,
                    subject_resource_id=subnet.subnet_id,
                    message=(
                        f"{visibility.value} 서브넷 {subnet.subnet_id}에 '{tag_key}' 태그가 없어 "
                        "로드밸런서 컨트롤러가 서브넷을 찾지 못할 수 있습니다"
                    ),
                    evidence=evidence,
                )
            )
    return findings
