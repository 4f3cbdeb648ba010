"""
core/data/network/services - AWS response mapping layer

- ec2: VPC, Subnet, Route Table
- elb: ALB/NLB/GWLB (elbv2) + Classic Load Balancer (elb)
"""

from .ec2 import (
    collect_route_tables,
    collect_subnets,
    collect_subnets_by_id,
    describe_vpc,
    parse_tags,
)
from .elb import collect_load_balancers

__all__ = [
    "describe_vpc",
    "collect_subnets",
    "collect_subnets_by_id",
    "collect_route_tables",
    "collect_load_balancers",
    "parse_tags",
]
