"""
analyzers/byovpc/classifier.py - 서브넷 Public/Private 분류

서브넷의 가시성은 단일 API 필드로 알 수 없으므로, 확정된 라우트 테이블의
기본 경로(0.0.0.0/0, ::/0)로부터 추론합니다.

분류 규칙:
    1. 활성 기본 경로 중 하나라도 Internet Gateway로 향하면 PUBLIC
       (기본 경로가 여러 개여도 IGW 경로가 우선)
    2. 활성 기본 경로가 있으나 IGW가 아니면 (NAT, TGW 등) PRIVATE
    3. 활성 기본 경로가 없으면 UNKNOWN (사람이 검토해야 하는 모호한 토폴로지)

blackhole 경로는 경로로 치지 않습니다.
"""

from __future__ import annotations

from core.data.network.types import (
    DerivedFacts,
    RouteTable,
    RouteTargetKind,
    TopologySnapshot,
    Visibility,
)


def classify_route_table(route_table: RouteTable | None) -> Visibility:
    """라우트 테이블 하나의 가시성 판정"""
    if route_table is None:
        return Visibility.UNKNOWN

    default_routes = route_table.default_routes
    if not default_routes:
        return Visibility.UNKNOWN
    if any(r.target.kind == RouteTargetKind.INTERNET_GATEWAY for r in default_routes):
        return Visibility.PUBLIC
    return Visibility.PRIVATE


def classify(snapshot: TopologySnapshot) -> DerivedFacts:
    """스냅샷에서 DerivedFacts 계산

    부수 효과가 없는 순수 함수이며, 같은 스냅샷에 대해 항상 같은 결과를 반환합니다.

    Args:
        snapshot: 라우트 테이블 연결이 확정된 스냅샷

    Returns:
        서브넷별 가시성과 AZ별 그룹
    """
    visibility = {s.subnet_id: classify_route_table(snapshot.route_table_for(s)) for s in snapshot.subnets}

    grouped: dict[str, dict[Visibility, list[str]]] = {}
    for subnet in snapshot.subnets:
        groups = grouped.setdefault(subnet.availability_zone, {v: [] for v in Visibility})
        groups[visibility[subnet.subnet_id]].append(subnet.subnet_id)

    az_groups = {
        az: {v: tuple(sorted(ids)) for v, ids in groups.items()} for az, groups in sorted(grouped.items())
    }
    return DerivedFacts(subnet_visibility=visibility, az_groups=az_groups)
