"""
tests/conftest.py - pytest 공통 픽스처

AWS API 모킹과 토폴로지 테스트 헬퍼를 제공합니다.

Usage:
    def test_something(topology, fake_gateway):
        # topology: 손으로 만든 스냅샷/리소스 팩토리
        # fake_gateway: 네트워크 호출 없는 ResourceGateway 구현 팩토리
        pass
"""

import os
import sys
from pathlib import Path
from typing import Any
from unittest.mock import MagicMock, patch

import pytest

# 프로젝트 루트를 sys.path에 추가
project_root = Path(__file__).parent.parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))

from core.data.network.builder import assemble_snapshot  # noqa: E402
from core.data.network.types import (  # noqa: E402
    LoadBalancer,
    LoadBalancerScheme,
    LoadBalancerType,
    Route,
    RouteState,
    RouteTable,
    RouteTarget,
    RouteTargetKind,
    Subnet,
    TopologySnapshot,
    Vpc,
)

VPC_ID = "vpc-0123456789abcdef0"
IGW_ID = "igw-0123456789abcdef0"
NAT_ID = "nat-0123456789abcdef0"
CLUSTER_ID = "my-cluster"
CLUSTER_TAG = f"kubernetes.io/cluster/{CLUSTER_ID}"


# =============================================================================
# 환경 설정
# =============================================================================


@pytest.fixture(autouse=True)
def setup_test_environment(monkeypatch):
    """테스트 환경 설정"""
    # 테스트용 환경 변수 설정
    monkeypatch.setenv("AWS_DEFAULT_REGION", "ap-northeast-2")
    monkeypatch.setenv("AWS_ACCESS_KEY_ID", "testing")
    monkeypatch.setenv("AWS_SECRET_ACCESS_KEY", "testing")
    monkeypatch.setenv("AWS_SECURITY_TOKEN", "testing")
    monkeypatch.setenv("AWS_SESSION_TOKEN", "testing")
    monkeypatch.delenv("AWS_REGION", raising=False)
    monkeypatch.delenv("AWS_PROFILE", raising=False)
    monkeypatch.delenv("HTTPS_PROXY", raising=False)
    monkeypatch.delenv("https_proxy", raising=False)

    yield


# =============================================================================
# AWS 모킹 픽스처
# =============================================================================


@pytest.fixture
def mock_boto3_session():
    """boto3.Session 모킹"""
    with patch("boto3.Session") as mock_session_class:
        mock_session = MagicMock()
        mock_session_class.return_value = mock_session

        # 기본 클라이언트 설정
        mock_session.client.return_value = MagicMock()
        mock_session.region_name = "ap-northeast-2"

        yield mock_session


def create_mock_client_error(
    error_code: str,
    error_message: str = "Test error",
    operation_name: str = "TestOperation",
) -> Exception:
    """ClientError 생성 헬퍼"""
    from botocore.exceptions import ClientError

    return ClientError(
        {
            "Error": {
                "Code": error_code,
                "Message": error_message,
            }
        },
        operation_name,
    )


@pytest.fixture
def client_error():
    """ClientError 생성 헬퍼 픽스처"""
    return create_mock_client_error


def make_paginator(pages: list[dict[str, Any]]) -> MagicMock:
    """주어진 페이지들을 돌려주는 paginator 모킹"""
    paginator = MagicMock()
    paginator.paginate.return_value = pages
    return paginator


@pytest.fixture
def paginator():
    return make_paginator


# =============================================================================
# 토폴로지 팩토리
# =============================================================================


class TopologyFactory:
    """손으로 만든 토폴로지 구성 요소

    route table은 서브넷 명시적 연결을 담고, snapshot()은 실제 빌더의
    assemble_snapshot으로 연결을 확정합니다.
    """

    vpc_id = VPC_ID

    def vpc(self, tags: dict[str, str] | None = None) -> Vpc:
        return Vpc(vpc_id=VPC_ID, cidr_block="10.0.0.0/16", tags=tags or {})

    def subnet(
        self,
        subnet_id: str,
        az: str = "ap-northeast-2a",
        tags: dict[str, str] | None = None,
        cidr: str = "10.0.1.0/24",
    ) -> Subnet:
        return Subnet(subnet_id=subnet_id, vpc_id=VPC_ID, cidr_block=cidr, availability_zone=az, tags=tags or {})

    def route_table(
        self,
        route_table_id: str,
        routes: list[Route] | None = None,
        subnet_ids: tuple[str, ...] = (),
        is_main: bool = False,
    ) -> RouteTable:
        local = Route("10.0.0.0/16", RouteTarget(RouteTargetKind.LOCAL, "local"))
        return RouteTable(
            route_table_id=route_table_id,
            vpc_id=VPC_ID,
            routes=(local, *(routes or [])),
            subnet_ids=subnet_ids,
            is_main=is_main,
        )

    def public_rt(self, route_table_id: str, subnet_ids: tuple[str, ...] = (), is_main: bool = False) -> RouteTable:
        igw = Route("0.0.0.0/0", RouteTarget(RouteTargetKind.INTERNET_GATEWAY, IGW_ID))
        return self.route_table(route_table_id, [igw], subnet_ids, is_main)

    def private_rt(self, route_table_id: str, subnet_ids: tuple[str, ...] = (), is_main: bool = False) -> RouteTable:
        nat = Route("0.0.0.0/0", RouteTarget(RouteTargetKind.NAT_GATEWAY, NAT_ID))
        return self.route_table(route_table_id, [nat], subnet_ids, is_main)

    def isolated_rt(self, route_table_id: str, subnet_ids: tuple[str, ...] = (), is_main: bool = False) -> RouteTable:
        return self.route_table(route_table_id, [], subnet_ids, is_main)

    def blackhole_igw_rt(self, route_table_id: str, subnet_ids: tuple[str, ...] = ()) -> RouteTable:
        dead = Route("0.0.0.0/0", RouteTarget(RouteTargetKind.INTERNET_GATEWAY, IGW_ID), RouteState.BLACKHOLE)
        return self.route_table(route_table_id, [dead], subnet_ids)

    def lb(
        self,
        name: str,
        subnet_ids: tuple[str, ...],
        scheme: LoadBalancerScheme = LoadBalancerScheme.INTERNET_FACING,
        lb_type: LoadBalancerType = LoadBalancerType.NETWORK,
    ) -> LoadBalancer:
        arn = f"arn:aws:elasticloadbalancing:ap-northeast-2:123456789012:loadbalancer/net/{name}/0123456789abcdef"
        return LoadBalancer(
            lb_id=arn,
            name=name,
            lb_type=lb_type,
            scheme=scheme,
            vpc_id=VPC_ID,
            subnet_ids=subnet_ids,
            listener_ports=(443,),
        )

    def snapshot(
        self,
        subnets: list[Subnet],
        route_tables: list[RouteTable],
        load_balancers: list[LoadBalancer] | None = None,
        vpc_tags: dict[str, str] | None = None,
    ) -> TopologySnapshot:
        return assemble_snapshot(self.vpc(vpc_tags), subnets, route_tables, load_balancers or [])

    def standard(self, subnet_tags: dict[str, str] | None = None) -> TopologySnapshot:
        """2개 AZ, AZ마다 Public/Private 서브넷 하나씩 + internet-facing NLB"""
        tags = subnet_tags if subnet_tags is not None else {CLUSTER_TAG: "shared"}
        subnets = [
            self.subnet("subnet-pub-a", "ap-northeast-2a", {**tags, "kubernetes.io/role/elb": "1"}),
            self.subnet("subnet-prv-a", "ap-northeast-2a", {**tags, "kubernetes.io/role/internal-elb": "1"}),
            self.subnet("subnet-pub-c", "ap-northeast-2c", {**tags, "kubernetes.io/role/elb": "1"}),
            self.subnet("subnet-prv-c", "ap-northeast-2c", {**tags, "kubernetes.io/role/internal-elb": "1"}),
        ]
        route_tables = [
            self.public_rt("rtb-public", ("subnet-pub-a", "subnet-pub-c")),
            self.private_rt("rtb-private", ("subnet-prv-a", "subnet-prv-c")),
            self.isolated_rt("rtb-main", is_main=True),
        ]
        lbs = [self.lb("router", ("subnet-pub-a", "subnet-pub-c"))]
        return self.snapshot(subnets, route_tables, lbs, vpc_tags={CLUSTER_TAG: "shared"})


@pytest.fixture
def topology():
    """토폴로지 팩토리"""
    return TopologyFactory()


# =============================================================================
# Fake Gateway
# =============================================================================


class FakeGateway:
    """네트워크 호출 없는 ResourceGateway

    errors에 {"route_tables": 예외} 처럼 지정하면 해당 조회가 그 예외를 던집니다.
    """

    def __init__(
        self,
        vpc: Vpc,
        subnets: list[Subnet],
        route_tables: list[RouteTable],
        load_balancers: list[LoadBalancer] | None = None,
        errors: dict[str, Exception] | None = None,
    ):
        self.vpc = vpc
        self.subnets = subnets
        self.route_tables = route_tables
        self.load_balancers = load_balancers or []
        self.errors = errors or {}
        self.calls: list[str] = []

    def _maybe_raise(self, kind: str) -> None:
        self.calls.append(kind)
        if kind in self.errors:
            raise self.errors[kind]

    def describe_vpc(self, vpc_id):
        self._maybe_raise("vpc")
        return self.vpc

    def list_subnets(self, vpc_id):
        self._maybe_raise("subnets")
        return list(self.subnets)

    def list_subnets_by_id(self, subnet_ids):
        self._maybe_raise("subnets_by_id")
        return [s for s in self.subnets if s.subnet_id in subnet_ids]

    def list_route_tables(self, vpc_id):
        self._maybe_raise("route_tables")
        return list(self.route_tables)

    def list_load_balancers(self, vpc_id):
        self._maybe_raise("load_balancers")
        return list(self.load_balancers)


@pytest.fixture
def fake_gateway(topology):
    """FakeGateway 팩토리 - 인자 없이 호출하면 standard 토폴로지"""

    def _create(snapshot: TopologySnapshot | None = None, errors: dict[str, Exception] | None = None) -> FakeGateway:
        snapshot = snapshot or topology.standard()
        # 빌더가 다시 연결을 확정하도록 route table 정보는 원본 그대로 전달
        subnets = [
            Subnet(
                subnet_id=s.subnet_id,
                vpc_id=s.vpc_id,
                cidr_block=s.cidr_block,
                availability_zone=s.availability_zone,
                tags=dict(s.tags),
            )
            for s in snapshot.subnets
        ]
        return FakeGateway(
            vpc=snapshot.vpc,
            subnets=subnets,
            route_tables=list(snapshot.route_tables.values()),
            load_balancers=list(snapshot.load_balancers),
            errors=errors,
        )

    return _create
