"""
analyzers/byovpc - BYOVPC 네트워크 검사

기존 VPC(서브넷, 라우트 테이블, 로드밸런서)가 클러스터 설치에 맞게
구성되어 있는지 검사합니다.

흐름:
    ResourceGateway -> SnapshotBuilder -> TopologySnapshot
        -> classify() -> DerivedFacts
        -> CheckEngine -> Finding 목록 -> 전체 상태

Usage:
    from core.auth import AWSConfig
    from core.data.network import AWSResourceGateway
    from analyzers.byovpc import run_checks

    gateway = AWSResourceGateway(AWSConfig.from_environment())
    status, findings = run_checks(gateway, "vpc-0123456789abcdef0", ["kubernetes.io/cluster/my-cluster"])
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

from core.data.network import ResourceGateway, SnapshotBuilder
from core.parallel import ParallelConfig

from .classifier import classify
from .config import CheckConfig
from .engine import CheckEngine, build_default_registry
from .findings import Finding, Report, Severity, aggregate_findings

logger = logging.getLogger(__name__)

# 필요한 AWS 권한 목록
REQUIRED_PERMISSIONS = {
    "read": [
        "ec2:DescribeVpcs",
        "ec2:DescribeSubnets",
        "ec2:DescribeRouteTables",
        "elasticloadbalancing:DescribeLoadBalancers",
        "elasticloadbalancing:DescribeListeners",
        "elasticloadbalancing:DescribeTags",
    ],
}


def run_checks(
    gateway: ResourceGateway,
    vpc_id: str,
    required_tag_keys: Sequence[str] | None = None,
    config: CheckConfig | None = None,
    parallel_config: ParallelConfig | None = None,
) -> tuple[Severity, list[Finding]]:
    """VPC 수집 후 전체 검사 실행

    수집 단계 오류(GatewayError, InconsistentTopologyError)는 어떤 검사도
    실행되기 전에 그대로 전파됩니다. 부분 결과는 반환하지 않습니다.

    Args:
        gateway: Resource Gateway
        vpc_id: 대상 VPC ID
        required_tag_keys: 필수 태그 키 (주어지면 config 값을 덮어씀)
        config: 검사 설정
        parallel_config: 수집 단계 병렬 설정

    Returns:
        (전체 상태, 등록 순서대로 정렬된 Finding 목록)
    """
    config = config or CheckConfig()
    if required_tag_keys is not None:
        config = config.merged(required_tag_keys=list(required_tag_keys))

    snapshot = SnapshotBuilder(gateway, parallel_config).build(vpc_id)
    facts = classify(snapshot)

    findings = CheckEngine(build_default_registry(config)).run(snapshot, facts)
    status = aggregate_findings(findings)

    logger.info(f"검사 완료: {vpc_id} -> {status.value} ({len(findings)}건)")
    return status, findings


def run_report(
    gateway: ResourceGateway,
    vpc_id: str,
    config: CheckConfig | None = None,
    parallel_config: ParallelConfig | None = None,
) -> Report:
    """run_checks 결과를 Report로 반환"""
    _, findings = run_checks(gateway, vpc_id, config=config, parallel_config=parallel_config)
    return Report.from_findings(vpc_id, findings)


__all__ = [
    "run_checks",
    "run_report",
    "CheckConfig",
    "Finding",
    "Report",
    "Severity",
    "REQUIRED_PERMISSIONS",
]
