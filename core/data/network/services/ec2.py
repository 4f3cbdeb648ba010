"""
core/data/network/services/ec2.py - VPC, Subnet, Route Table collection

Queries EC2 and maps the raw response dicts into the strict network types.
All "is this field present" branching lives here. Exceptions from boto3
propagate unchanged; the gateway converts them into GatewayError.
"""

from __future__ import annotations

import logging
from typing import Any

from core.exceptions import ResourceNotFoundError

from ..types import Route, RouteState, RouteTable, RouteTarget, RouteTargetKind, Subnet, Vpc

logger = logging.getLogger(__name__)

# Route 응답에서 대상 ID를 담을 수 있는 키 (먼저 나온 키가 우선)
_TARGET_KEYS: tuple[tuple[str, RouteTargetKind], ...] = (
    ("NatGatewayId", RouteTargetKind.NAT_GATEWAY),
    ("EgressOnlyInternetGatewayId", RouteTargetKind.EGRESS_ONLY_INTERNET_GATEWAY),
    ("TransitGatewayId", RouteTargetKind.TRANSIT_GATEWAY),
    ("VpcPeeringConnectionId", RouteTargetKind.VPC_PEERING),
    ("NetworkInterfaceId", RouteTargetKind.NETWORK_INTERFACE),
    ("InstanceId", RouteTargetKind.NETWORK_INTERFACE),
    ("CarrierGatewayId", RouteTargetKind.OTHER),
    ("LocalGatewayId", RouteTargetKind.OTHER),
    ("CoreNetworkArn", RouteTargetKind.OTHER),
)


def parse_tags(tag_list: list[dict[str, Any]] | None) -> dict[str, str]:
    """Convert an AWS Tags list into a dict

    Keys are kept exactly as returned (case-sensitive, ``aws:`` included) and
    empty values are preserved, since a present-but-empty tag is distinct
    from a missing one.
    """
    tags: dict[str, str] = {}
    for tag in tag_list or []:
        key = tag.get("Key")
        if key is None:
            continue
        tags[key] = tag.get("Value", "")
    return tags


def vpc_filter(vpc_id: str) -> list[dict[str, Any]]:
    return [{"Name": "vpc-id", "Values": [vpc_id]}]


def parse_vpc(data: dict[str, Any]) -> Vpc:
    return Vpc(
        vpc_id=data["VpcId"],
        cidr_block=data.get("CidrBlock", ""),
        tags=parse_tags(data.get("Tags")),
    )


def parse_subnet(data: dict[str, Any]) -> Subnet:
    return Subnet(
        subnet_id=data["SubnetId"],
        vpc_id=data.get("VpcId", ""),
        cidr_block=data.get("CidrBlock", ""),
        availability_zone=data.get("AvailabilityZone", ""),
        tags=parse_tags(data.get("Tags")),
    )


def parse_route_target(data: dict[str, Any]) -> RouteTarget:
    """Determine the target of a single route entry

    GatewayId is shared by internet gateways, virtual private gateways and
    the implicit ``local`` route, so it is told apart by prefix.
    """
    gateway_id = data.get("GatewayId")
    if gateway_id:
        if gateway_id == "local":
            return RouteTarget(RouteTargetKind.LOCAL, gateway_id)
        if gateway_id.startswith("igw-"):
            return RouteTarget(RouteTargetKind.INTERNET_GATEWAY, gateway_id)
        if gateway_id.startswith("vgw-"):
            return RouteTarget(RouteTargetKind.VIRTUAL_PRIVATE_GATEWAY, gateway_id)

    for key, kind in _TARGET_KEYS:
        target_id = data.get(key)
        if target_id:
            return RouteTarget(kind, target_id)

    return RouteTarget(RouteTargetKind.OTHER, gateway_id or "")


def parse_route(data: dict[str, Any]) -> Route | None:
    """Map a route entry; returns None when it has no destination"""
    destination = (
        data.get("DestinationCidrBlock")
        or data.get("DestinationIpv6CidrBlock")
        or data.get("DestinationPrefixListId")
    )
    if not destination:
        return None

    state = RouteState.BLACKHOLE if data.get("State") == "blackhole" else RouteState.ACTIVE
    return Route(destination=destination, target=parse_route_target(data), state=state)


def parse_route_table(data: dict[str, Any]) -> RouteTable:
    """Map a route table, separating explicit subnet associations from the main flag"""
    associations = data.get("Associations", [])
    is_main = any(a.get("Main", False) for a in associations)
    subnet_ids = tuple(a["SubnetId"] for a in associations if a.get("SubnetId"))

    routes = []
    for route_data in data.get("Routes", []):
        route = parse_route(route_data)
        if route is not None:
            routes.append(route)

    return RouteTable(
        route_table_id=data["RouteTableId"],
        vpc_id=data.get("VpcId", ""),
        routes=tuple(routes),
        subnet_ids=subnet_ids,
        is_main=is_main,
        tags=parse_tags(data.get("Tags")),
    )


def describe_vpc(ec2: Any, vpc_id: str) -> Vpc:
    """Describe a single VPC

    Raises:
        ResourceNotFoundError: no VPC with that id is visible
    """
    response = ec2.describe_vpcs(VpcIds=[vpc_id])
    vpcs = response.get("Vpcs", [])
    if not vpcs:
        raise ResourceNotFoundError("vpc", vpc_id, operation="describe_vpcs")
    return parse_vpc(vpcs[0])


def collect_subnets(ec2: Any, vpc_id: str) -> list[Subnet]:
    subnets = []
    paginator = ec2.get_paginator("describe_subnets")
    for page in paginator.paginate(Filters=vpc_filter(vpc_id)):
        for data in page.get("Subnets", []):
            subnets.append(parse_subnet(data))

    logger.debug(f"subnets [{vpc_id}]: {len(subnets)}개")
    return subnets


def collect_subnets_by_id(ec2: Any, subnet_ids: list[str]) -> list[Subnet]:
    """Describe subnets by id, regardless of which VPC they belong to"""
    subnets = []
    paginator = ec2.get_paginator("describe_subnets")
    for page in paginator.paginate(SubnetIds=list(subnet_ids)):
        for data in page.get("Subnets", []):
            subnets.append(parse_subnet(data))

    logger.debug(f"subnets by id: 요청 {len(subnet_ids)}개, 조회 {len(subnets)}개")
    return subnets


def collect_route_tables(ec2: Any, vpc_id: str) -> list[RouteTable]:
    route_tables = []
    paginator = ec2.get_paginator("describe_route_tables")
    for page in paginator.paginate(Filters=vpc_filter(vpc_id)):
        for data in page.get("RouteTables", []):
            route_tables.append(parse_route_table(data))

    logger.debug(f"route tables [{vpc_id}]: {len(route_tables)}개")
    return route_tables
