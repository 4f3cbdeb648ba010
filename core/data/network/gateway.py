"""
core/data/network/gateway.py - Resource Gateway

Read-only query interface over EC2 and ELB. Returns strict network types,
never raw dicts, and never contains business logic. Every failure surfaces as
GatewayError carrying the resource kind that failed.

The client configuration (profile, region, proxy, retry) is passed in as an
explicit AWSConfig value so tests can swap the whole gateway for a fake that
satisfies the ResourceGateway protocol.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import TYPE_CHECKING, Protocol, TypeVar

from core.auth import AWSConfig, create_session
from core.parallel import get_client, to_gateway_error

from . import services
from .types import LoadBalancer, RouteTable, Subnet, Vpc

if TYPE_CHECKING:
    from boto3 import Session

logger = logging.getLogger(__name__)

T = TypeVar("T")


class ResourceGateway(Protocol):
    """Snapshot Builder가 의존하는 조회 인터페이스"""

    def describe_vpc(self, vpc_id: str) -> Vpc: ...

    def list_subnets(self, vpc_id: str) -> list[Subnet]: ...

    def list_route_tables(self, vpc_id: str) -> list[RouteTable]: ...

    def list_load_balancers(self, vpc_id: str) -> list[LoadBalancer]: ...


class AWSResourceGateway:
    """boto3 기반 ResourceGateway 구현

    Example:
        config = AWSConfig.from_environment(profile="dev")
        gateway = AWSResourceGateway(config)
        subnets = gateway.list_subnets("vpc-0123456789abcdef0")
    """

    def __init__(self, config: AWSConfig, session: Session | None = None):
        """초기화

        Args:
            config: 프로파일/리전/프록시/재시도 설정
            session: 이미 만든 boto3 Session (None이면 config로 생성)

        Raises:
            GatewayError: 세션 또는 client 생성 실패 (예: 프로파일 없음)
        """
        self.config = config
        try:
            self._session = session or create_session(config)
            self._ec2 = get_client(self._session, "ec2", aws_config=config)
            self._elb = get_client(self._session, "elb", aws_config=config)
            self._elbv2 = get_client(self._session, "elbv2", aws_config=config)
        except Exception as e:
            raise to_gateway_error(e, "session") from e

    def _query(
        self,
        resource_kind: str,
        operation: str,
        func: Callable[[], T],
        resource_id: str | None = None,
    ) -> T:
        try:
            return func()
        except Exception as e:
            raise to_gateway_error(e, resource_kind, operation, resource_id=resource_id) from e

    def describe_vpc(self, vpc_id: str) -> Vpc:
        logger.debug(f"vpc 조회: {vpc_id}")
        return self._query(
            "vpc",
            "describe_vpcs",
            lambda: services.describe_vpc(self._ec2, vpc_id),
            resource_id=vpc_id,
        )

    def list_subnets(self, vpc_id: str) -> list[Subnet]:
        return self._query("subnets", "describe_subnets", lambda: services.collect_subnets(self._ec2, vpc_id))

    def list_subnets_by_id(self, subnet_ids: list[str]) -> list[Subnet]:
        """서브넷 ID로 직접 조회 (VPC 추론용)"""
        return self._query(
            "subnets",
            "describe_subnets",
            lambda: services.collect_subnets_by_id(self._ec2, subnet_ids),
            resource_id=",".join(subnet_ids),
        )

    def list_route_tables(self, vpc_id: str) -> list[RouteTable]:
        return self._query(
            "route_tables",
            "describe_route_tables",
            lambda: services.collect_route_tables(self._ec2, vpc_id),
        )

    def list_load_balancers(self, vpc_id: str) -> list[LoadBalancer]:
        return self._query(
            "load_balancers",
            "describe_load_balancers",
            lambda: services.collect_load_balancers(self._elb, self._elbv2, vpc_id),
        )
