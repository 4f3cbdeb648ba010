"""
core/data/network - VPC topology collection

Resource Gateway (read-only AWS queries) and Snapshot Builder (joins the
queries into one immutable TopologySnapshot).

Usage:
    from core.auth import AWSConfig
    from core.data.network import AWSResourceGateway, SnapshotBuilder

    gateway = AWSResourceGateway(AWSConfig.from_environment())
    snapshot = SnapshotBuilder(gateway).build("vpc-0123456789abcdef0")
"""

from .builder import SnapshotBuilder, assemble_snapshot, resolve_vpc_id
from .gateway import AWSResourceGateway, ResourceGateway
from .types import (
    DerivedFacts,
    LoadBalancer,
    LoadBalancerScheme,
    LoadBalancerType,
    Route,
    RouteState,
    RouteTable,
    RouteTableAssociation,
    RouteTarget,
    RouteTargetKind,
    Subnet,
    TopologySnapshot,
    Visibility,
    Vpc,
)

__all__ = [
    # Gateway
    "ResourceGateway",
    "AWSResourceGateway",
    # Builder
    "SnapshotBuilder",
    "assemble_snapshot",
    "resolve_vpc_id",
    # Types
    "Vpc",
    "Subnet",
    "Route",
    "RouteState",
    "RouteTarget",
    "RouteTargetKind",
    "RouteTable",
    "RouteTableAssociation",
    "LoadBalancer",
    "LoadBalancerScheme",
    "LoadBalancerType",
    "TopologySnapshot",
    "Visibility",
    "DerivedFacts",
]
