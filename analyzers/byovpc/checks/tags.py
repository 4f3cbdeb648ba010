"""
analyzers/byovpc/checks/tags.py - 태그 검사

- tag-compliance: VPC와 모든 서브넷에 필수 태그 키가 비어 있지 않은 값으로 존재하는지
- cluster-ownership: 서브넷이 다른 클러스터 소유(owned)로 태깅되어 있지 않은지

태그는 대소문자를 구분하는 정확한 키/값이며, 키가 없는 것과 값이 빈 것은 구분합니다.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence

from core.data.network.types import DerivedFacts, TopologySnapshot

from ..config import CLUSTER_TAG_PREFIX, cluster_tag_key
from ..findings import Finding, Severity

TAG_COMPLIANCE = "tag-compliance"
CLUSTER_OWNERSHIP = "cluster-ownership"

OWNED_VALUE = "owned"


def _tag_findings(
    resource_type: str,
    resource_id: str,
    tags: Mapping[str, str],
    required_tag_keys: Sequence[str],
) -> list[Finding]:
    findings = []
    for key in required_tag_keys:
        if key not in tags:
            findings.append(
                Finding(
                    check_name=TAG_COMPLIANCE,
                    severity=Severity.FAIL,
                    subject_resource_id=resource_id,
                    message=f"{resource_type} {resource_id}에 필수 태그 '{key}'가 없습니다",
                    evidence={"resource_type": resource_type, "missing_key": key},
                )
            )
        elif tags[key] == "":
            findings.append(
                Finding(
                    check_name=TAG_COMPLIANCE,
                    severity=Severity.WARN,
                    subject_resource_id=resource_id,
                    message=f"{resource_type} {resource_id}의 태그 '{key}' 값이 비어 있습니다",
                    evidence={"resource_type": resource_type, "key": key, "value": ""},
                )
            )

    if not findings:
        findings.append(
            Finding(
                check_name=TAG_COMPLIANCE,
                severity=Severity.PASS,
                subject_resource_id=resource_id,
                message=f"{resource_type} {resource_id}에 필수 태그가 모두 있습니다",
                evidence={"resource_type": resource_type, "required_tag_keys": list(required_tag_keys)},
            )
        )
    return findings


def check_tag_compliance(
    snapshot: TopologySnapshot,
    facts: DerivedFacts,
    required_tag_keys: Sequence[str] = (),
) -> list[Finding]:
    """필수 태그 검사 (VPC 먼저, 이후 서브넷 순서대로)

    키 누락은 리소스별/키별 Fail, 빈 값은 Warn. 필수 키가 없으면 결과도 없습니다.
    """
    if not required_tag_keys:
        return []

    findings = _tag_findings("vpc", snapshot.vpc_id, snapshot.vpc.tags, required_tag_keys)
    for subnet in snapshot.subnets:
        findings.extend(_tag_findings("subnet", subnet.subnet_id, subnet.tags, required_tag_keys))
    return findings


def check_cluster_ownership(
    snapshot: TopologySnapshot,
    facts: DerivedFacts,
    cluster_id: str | None = None,
) -> list[Finding]:
    """다른 클러스터가 소유(owned)한 서브넷 검사

    kubernetes.io/cluster/<다른 ID> = owned 태그가 있으면 해당 서브넷은 다른
    클러스터의 수명 주기에 묶여 있으므로 Fail입니다. cluster_id가 없으면 건너뜁니다.
    """
    if not cluster_id:
        return []

    own_key = cluster_tag_key(cluster_id)
    findings = []
    for subnet in snapshot.subnets:
        foreign = sorted(
            key
            for key, value in subnet.tags.items()
            if key.startswith(CLUSTER_TAG_PREFIX) and key != own_key and value == OWNED_VALUE
        )
        if foreign:
            owners = [key[len(CLUSTER_TAG_PREFIX) :] for key in foreign]
            findings.append(
                Finding(
                    check_name=CLUSTER_OWNERSHIP,
                    severity=Severity.FAIL,
                    subject_resource_id=subnet.subnet_id,
                    message=f"서브넷 {subnet.subnet_id}은(는) 다른 클러스터 소유입니다: {', '.join(owners)}",
                    evidence={"tag_keys": foreign, "owner_clusters": owners, "cluster_id": cluster_id},
                )
            )
        else:
            findings.append(
                Finding(
                    check_name=CLUSTER_OWNERSHIP,
                    severity=Severity.PASS,
                    subject_resource_id=subnet.subnet_id,
                    message=f"서브넷 {subnet.subnet_id}은(는) 다른 클러스터 소유가 아닙니다",
                    evidence={"cluster_id": cluster_id},
                )
            )
    return findings
