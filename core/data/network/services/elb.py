"""
core/data/network/services/elb.py - Load Balancer collection

Lists ALB/NLB/GWLB (elbv2) and Classic (elb) load balancers in a VPC and
normalizes both into one LoadBalancer shape, including listener ports and
tags. Exceptions from boto3 propagate; the gateway converts them.
"""

from __future__ import annotations

import logging
from typing import Any

from ..types import LoadBalancer, LoadBalancerScheme, LoadBalancerType
from .ec2 import parse_tags

logger = logging.getLogger(__name__)

# describe_tags 한 번에 조회 가능한 최대 리소스 수 (elb, elbv2 공통)
TAG_BATCH_SIZE = 20

_V2_TYPES = {
    "application": LoadBalancerType.APPLICATION,
    "network": LoadBalancerType.NETWORK,
    "gateway": LoadBalancerType.GATEWAY,
}


def _chunks(items: list[str], size: int) -> list[list[str]]:
    return [items[i : i + size] for i in range(0, len(items), size)]


def parse_scheme(value: str | None) -> LoadBalancerScheme:
    """Scheme 문자열 매핑 (누락 시 internal)"""
    if value == LoadBalancerScheme.INTERNET_FACING.value:
        return LoadBalancerScheme.INTERNET_FACING
    return LoadBalancerScheme.INTERNAL


# =============================================================================
# ELBv2 (ALB / NLB / GWLB)
# =============================================================================


def _get_elbv2_tags(elbv2: Any, arns: list[str]) -> dict[str, dict[str, str]]:
    """Fetch tags for ELBv2 load balancers in batches"""
    tags_by_arn: dict[str, dict[str, str]] = {}
    for batch in _chunks(arns, TAG_BATCH_SIZE):
        response = elbv2.describe_tags(ResourceArns=batch)
        for desc in response.get("TagDescriptions", []):
            tags_by_arn[desc.get("ResourceArn", "")] = parse_tags(desc.get("Tags"))
    return tags_by_arn


def _get_elbv2_listener_ports(elbv2: Any, lb_arn: str) -> tuple[int, ...]:
    ports: list[int] = []
    paginator = elbv2.get_paginator("describe_listeners")
    for page in paginator.paginate(LoadBalancerArn=lb_arn):
        for listener in page.get("Listeners", []):
            port = listener.get("Port")
            if port is not None:
                ports.append(int(port))
    return tuple(sorted(set(ports)))


def collect_elbv2_load_balancers(elbv2: Any, vpc_id: str) -> list[LoadBalancer]:
    """Collect ALB/NLB/GWLB attached to a VPC"""
    raw: list[dict[str, Any]] = []
    paginator = elbv2.get_paginator("describe_load_balancers")
    for page in paginator.paginate():
        for data in page.get("LoadBalancers", []):
            if data.get("VpcId") == vpc_id:
                raw.append(data)

    if not raw:
        return []

    tags_by_arn = _get_elbv2_tags(elbv2, [d["LoadBalancerArn"] for d in raw])

    load_balancers = []
    for data in raw:
        lb_arn = data["LoadBalancerArn"]
        subnet_ids = tuple(az["SubnetId"] for az in data.get("AvailabilityZones", []) if az.get("SubnetId"))

        load_balancers.append(
            LoadBalancer(
                lb_id=lb_arn,
                name=data.get("LoadBalancerName", ""),
                lb_type=_V2_TYPES.get(data.get("Type", "application"), LoadBalancerType.APPLICATION),
                scheme=parse_scheme(data.get("Scheme")),
                vpc_id=data.get("VpcId", ""),
                subnet_ids=subnet_ids,
                listener_ports=_get_elbv2_listener_ports(elbv2, lb_arn),
                dns_name=data.get("DNSName", ""),
                tags=tags_by_arn.get(lb_arn, {}),
            )
        )

    return load_balancers


# =============================================================================
# Classic Load Balancer
# =============================================================================


def _get_classic_tags(elb: Any, names: list[str]) -> dict[str, dict[str, str]]:
    tags_by_name: dict[str, dict[str, str]] = {}
    for batch in _chunks(names, TAG_BATCH_SIZE):
        response = elb.describe_tags(LoadBalancerNames=batch)
        for desc in response.get("TagDescriptions", []):
            tags_by_name[desc.get("LoadBalancerName", "")] = parse_tags(desc.get("Tags"))
    return tags_by_name


def collect_classic_load_balancers(elb: Any, vpc_id: str) -> list[LoadBalancer]:
    """Collect Classic Load Balancers attached to a VPC

    CLB has no ARN, so the name doubles as the id.
    """
    raw: list[dict[str, Any]] = []
    paginator = elb.get_paginator("describe_load_balancers")
    for page in paginator.paginate():
        for data in page.get("LoadBalancerDescriptions", []):
            if data.get("VPCId") == vpc_id:
                raw.append(data)

    if not raw:
        return []

    tags_by_name = _get_classic_tags(elb, [d["LoadBalancerName"] for d in raw])

    load_balancers = []
    for data in raw:
        name = data["LoadBalancerName"]
        ports = sorted(
            {
                int(desc["Listener"]["LoadBalancerPort"])
                for desc in data.get("ListenerDescriptions", [])
                if desc.get("Listener", {}).get("LoadBalancerPort") is not None
            }
        )

        load_balancers.append(
            LoadBalancer(
                lb_id=name,
                name=name,
                lb_type=LoadBalancerType.CLASSIC,
                scheme=parse_scheme(data.get("Scheme")),
                vpc_id=data.get("VPCId", ""),
                subnet_ids=tuple(data.get("Subnets", [])),
                listener_ports=tuple(ports),
                dns_name=data.get("DNSName", ""),
                tags=tags_by_name.get(name, {}),
            )
        )

    return load_balancers


def collect_load_balancers(elb: Any, elbv2: Any, vpc_id: str) -> list[LoadBalancer]:
    """Collect all load balancers in a VPC: ELBv2 first, then Classic"""
    load_balancers = collect_elbv2_load_balancers(elbv2, vpc_id)
    load_balancers.extend(collect_classic_load_balancers(elb, vpc_id))

    logger.debug(f"load balancers [{vpc_id}]: {len(load_balancers)}개")
    return load_balancers
