"""
core/data/network/builder.py - Topology Snapshot 생성

Resource Gateway로 VPC, 서브넷, 라우트 테이블, 로드밸런서를 병렬 조회한 뒤
모든 조회가 끝나면(join barrier) 하나의 TopologySnapshot으로 조립합니다.

보장 사항:
- 모든 서브넷은 라우트 테이블이 확정되어 있음 (명시적 연결, 없으면 main 라우트 테이블)
- 모든 로드밸런서 서브넷은 스냅샷의 서브넷 중 하나
- 어느 하나의 조회라도 실패하면 스냅샷 전체가 실패 (부분 스냅샷 없음)

재시도/쓰로틀링 처리는 하지 않습니다 (botocore client 설정의 역할).
"""

from __future__ import annotations

import logging
from concurrent.futures import CancelledError
from typing import Any

from core.exceptions import ConfigError, InconsistentTopologyError, ResourceNotFoundError
from core.parallel import ParallelConfig, ParallelQueryExecutor, to_gateway_error

from .gateway import ResourceGateway
from .types import LoadBalancer, RouteTable, RouteTableAssociation, Subnet, TopologySnapshot, Vpc

logger = logging.getLogger(__name__)


class SnapshotBuilder:
    """TopologySnapshot 빌더

    Example:
        builder = SnapshotBuilder(gateway, ParallelConfig(max_workers=4, timeout=120))
        snapshot = builder.build("vpc-0123456789abcdef0")
    """

    def __init__(self, gateway: ResourceGateway, parallel_config: ParallelConfig | None = None):
        self.gateway = gateway
        self.parallel_config = parallel_config or ParallelConfig()

    def build(self, vpc_id: str) -> TopologySnapshot:
        """VPC 스냅샷 생성

        Args:
            vpc_id: 대상 VPC ID

        Returns:
            불변식이 검증된 TopologySnapshot

        Raises:
            ResourceNotFoundError: VPC가 없거나 조회 권한 밖
            GatewayError: 어느 하나의 조회라도 실패 (시간 초과 포함)
            InconsistentTopologyError: 수집된 데이터가 불변식 위반
        """
        logger.info(f"토폴로지 수집 시작: {vpc_id}")

        tasks: dict[str, Any] = {
            "vpc": lambda: self.gateway.describe_vpc(vpc_id),
            "subnets": lambda: self.gateway.list_subnets(vpc_id),
            "route_tables": lambda: self.gateway.list_route_tables(vpc_id),
            "load_balancers": lambda: self.gateway.list_load_balancers(vpc_id),
        }
        result = ParallelQueryExecutor(self.parallel_config).execute(tasks)

        failures = [r for r in result.results if not r.success and not isinstance(r.error, CancelledError)]
        if failures:
            failed = failures[0]
            logger.debug(f"수집 실패: {result.get_error_summary()}")
            raise to_gateway_error(failed.error, failed.name, resource_id=vpc_id if failed.name == "vpc" else None)

        vpc: Vpc = result.get("vpc").data
        subnets: list[Subnet] = result.get("subnets").data or []
        route_tables: list[RouteTable] = result.get("route_tables").data or []
        load_balancers: list[LoadBalancer] = result.get("load_balancers").data or []

        snapshot = assemble_snapshot(vpc, subnets, route_tables, load_balancers)
        logger.info(
            f"토폴로지 수집 완료: {vpc_id} (서브넷 {len(snapshot.subnets)}, "
            f"라우트 테이블 {len(snapshot.route_tables)}, 로드밸런서 {len(snapshot.load_balancers)})"
        )
        return snapshot


def _resolve_associations(
    subnets: list[Subnet],
    route_tables: list[RouteTable],
    violations: list[str],
) -> list[Subnet]:
    """서브넷별 라우트 테이블 확정 (명시적 연결 -> main 라우트 테이블)"""
    explicit: dict[str, list[str]] = {}
    for rt in route_tables:
        for subnet_id in rt.subnet_ids:
            explicit.setdefault(subnet_id, []).append(rt.route_table_id)

    main_tables = [rt.route_table_id for rt in route_tables if rt.is_main]
    if len(main_tables) > 1:
        violations.append(f"main 라우트 테이블이 여러 개입니다: {', '.join(sorted(main_tables))}")
    main_table_id = main_tables[0] if len(main_tables) == 1 else None

    resolved = []
    for subnet in subnets:
        table_ids = explicit.get(subnet.subnet_id, [])
        if len(table_ids) > 1:
            violations.append(f"{subnet.subnet_id}: 명시적 라우트 테이블 연결이 여러 개입니다 ({', '.join(table_ids)})")
            continue
        if table_ids:
            route_table_id, association = table_ids[0], RouteTableAssociation.EXPLICIT
        elif main_table_id is not None:
            route_table_id, association = main_table_id, RouteTableAssociation.MAIN
        else:
            violations.append(f"{subnet.subnet_id}: 연결된 라우트 테이블과 main 라우트 테이블이 모두 없습니다")
            continue

        resolved.append(
            Subnet(
                subnet_id=subnet.subnet_id,
                vpc_id=subnet.vpc_id,
                cidr_block=subnet.cidr_block,
                availability_zone=subnet.availability_zone,
                tags=subnet.tags,
                route_table_id=route_table_id,
                route_table_association=association,
            )
        )
    return resolved


def assemble_snapshot(
    vpc: Vpc,
    subnets: list[Subnet],
    route_tables: list[RouteTable],
    load_balancers: list[LoadBalancer],
) -> TopologySnapshot:
    """조회 결과를 검증하여 TopologySnapshot으로 조립

    서브넷은 (가용 영역, ID), 로드밸런서는 ID 순으로 정렬되어 실행마다
    동일한 순서를 보장합니다.

    Raises:
        InconsistentTopologyError: 불변식 위반이 하나라도 있는 경우 (모두 모아서 보고)
    """
    violations: list[str] = []

    resolved = _resolve_associations(subnets, route_tables, violations)
    resolved.sort(key=lambda s: (s.availability_zone, s.subnet_id))

    subnet_ids = {s.subnet_id for s in subnets}
    for lb in load_balancers:
        for subnet_id in lb.subnet_ids:
            if subnet_id not in subnet_ids:
                violations.append(f"{lb.name or lb.lb_id}: VPC {vpc.vpc_id}에 없는 서브넷 {subnet_id}을(를) 참조합니다")

    if violations:
        logger.debug(f"토폴로지 불일치: {violations}")
        raise InconsistentTopologyError(violations)

    return TopologySnapshot(
        vpc=vpc,
        subnets=tuple(resolved),
        route_tables={rt.route_table_id: rt for rt in route_tables},
        load_balancers=tuple(sorted(load_balancers, key=lambda lb: lb.lb_id)),
    )


def resolve_vpc_id(gateway: Any, subnet_ids: list[str]) -> str:
    """클러스터 서브넷 ID들로부터 VPC ID 추론

    Args:
        gateway: list_subnets_by_id를 제공하는 게이트웨이
        subnet_ids: 클러스터 설치에 사용된 서브넷 ID 목록

    Returns:
        서브넷들이 속한 단일 VPC ID

    Raises:
        ConfigError: 서브넷 ID가 주어지지 않음
        ResourceNotFoundError: 일부 서브넷을 찾을 수 없음
        InconsistentTopologyError: 서브넷들이 둘 이상의 VPC에 걸쳐 있음
    """
    if not subnet_ids:
        raise ConfigError("subnet_ids", "VPC를 추론하려면 서브넷 ID가 하나 이상 필요합니다")

    subnets = gateway.list_subnets_by_id(list(subnet_ids))
    found = {s.subnet_id for s in subnets}
    missing = [sid for sid in subnet_ids if sid not in found]
    if missing:
        raise ResourceNotFoundError("subnets", ", ".join(missing), operation="describe_subnets")

    vpc_ids = sorted({s.vpc_id for s in subnets})
    if len(vpc_ids) > 1:
        by_vpc = {vpc_id: sorted(s.subnet_id for s in subnets if s.vpc_id == vpc_id) for vpc_id in vpc_ids}
        raise InconsistentTopologyError(
            [f"서브넷이 여러 VPC에 걸쳐 있습니다: {vpc_id} ({', '.join(ids)})" for vpc_id, ids in by_vpc.items()]
        )

    logger.info(f"서브넷으로부터 VPC 추론: {vpc_ids[0]}")
    return vpc_ids[0]
