"""
core/data/network/types.py - Network topology dataclasses

Strict, immutable shapes for the VPC resources the checker reasons about.
Raw API responses are mapped into these types by the services layer; nothing
downstream of the gateway ever looks at a boto3 dict.
"""

from __future__ import annotations

import ipaddress
from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType


class RouteTargetKind(Enum):
    """Where a route sends matching traffic"""

    INTERNET_GATEWAY = "internet-gateway"
    NAT_GATEWAY = "nat-gateway"
    LOCAL = "local"
    EGRESS_ONLY_INTERNET_GATEWAY = "egress-only-internet-gateway"
    TRANSIT_GATEWAY = "transit-gateway"
    VIRTUAL_PRIVATE_GATEWAY = "virtual-private-gateway"
    VPC_PEERING = "vpc-peering"
    NETWORK_INTERFACE = "network-interface"
    OTHER = "other"


class RouteState(Enum):
    ACTIVE = "active"
    BLACKHOLE = "blackhole"


class RouteTableAssociation(Enum):
    """How a subnet got its route table"""

    EXPLICIT = "explicit"
    MAIN = "main"


class LoadBalancerType(Enum):
    CLASSIC = "classic"
    NETWORK = "network"
    APPLICATION = "application"
    GATEWAY = "gateway"


class LoadBalancerScheme(Enum):
    INTERNET_FACING = "internet-facing"
    INTERNAL = "internal"


class Visibility(Enum):
    """Derived subnet visibility"""

    PUBLIC = "public"
    PRIVATE = "private"
    UNKNOWN = "unknown"


def _freeze(tags: Mapping[str, str] | None) -> Mapping[str, str]:
    return MappingProxyType(dict(tags or {}))


@dataclass(frozen=True)
class Vpc:
    """VPC information"""

    vpc_id: str
    cidr_block: str = ""
    tags: Mapping[str, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "tags", _freeze(self.tags))


@dataclass(frozen=True)
class Subnet:
    """Subnet information

    ``route_table_id`` and ``route_table_association`` are None as returned by
    the gateway; the snapshot builder fills both in.
    """

    subnet_id: str
    vpc_id: str
    cidr_block: str = ""
    availability_zone: str = ""
    tags: Mapping[str, str] = field(default_factory=dict)
    route_table_id: str | None = None
    route_table_association: RouteTableAssociation | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "tags", _freeze(self.tags))

    @property
    def name(self) -> str:
        return self.tags.get("Name", "")


@dataclass(frozen=True)
class RouteTarget:
    kind: RouteTargetKind
    target_id: str = ""

    def __str__(self) -> str:
        return self.target_id or self.kind.value


@dataclass(frozen=True)
class Route:
    """Single route table entry

    ``destination`` is an IPv4/IPv6 CIDR or a managed prefix list id.
    """

    destination: str
    target: RouteTarget
    state: RouteState = RouteState.ACTIVE

    @property
    def is_default(self) -> bool:
        """True when the destination matches every address (0.0.0.0/0, ::/0)"""
        try:
            return ipaddress.ip_network(self.destination, strict=False).prefixlen == 0
        except ValueError:
            # prefix list ids (pl-xxxx) are never default routes
            return False

    @property
    def is_active(self) -> bool:
        return self.state == RouteState.ACTIVE


@dataclass(frozen=True)
class RouteTable:
    """Route table information

    ``subnet_ids`` lists explicit associations only; subnets that fall back
    to the main route table are not listed here.
    """

    route_table_id: str
    vpc_id: str
    routes: tuple[Route, ...] = ()
    subnet_ids: tuple[str, ...] = ()
    is_main: bool = False
    tags: Mapping[str, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "routes", tuple(self.routes))
        object.__setattr__(self, "subnet_ids", tuple(self.subnet_ids))
        object.__setattr__(self, "tags", _freeze(self.tags))

    @property
    def default_routes(self) -> tuple[Route, ...]:
        """Active default routes, blackholes excluded"""
        return tuple(r for r in self.routes if r.is_default and r.is_active)


@dataclass(frozen=True)
class LoadBalancer:
    """Load balancer information (classic and ELBv2 normalized)

    ``lb_id`` is the ARN for ELBv2 and the name for classic load balancers.
    """

    lb_id: str
    name: str
    lb_type: LoadBalancerType
    scheme: LoadBalancerScheme
    vpc_id: str = ""
    subnet_ids: tuple[str, ...] = ()
    listener_ports: tuple[int, ...] = ()
    dns_name: str = ""
    tags: Mapping[str, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "subnet_ids", tuple(self.subnet_ids))
        object.__setattr__(self, "listener_ports", tuple(self.listener_ports))
        object.__setattr__(self, "tags", _freeze(self.tags))

    @property
    def is_internet_facing(self) -> bool:
        return self.scheme == LoadBalancerScheme.INTERNET_FACING


@dataclass(frozen=True)
class TopologySnapshot:
    """Point-in-time view of one VPC

    Built once by SnapshotBuilder and read-only afterwards. Every subnet has a
    resolved route table and every load balancer subnet is one of ``subnets``.
    """

    vpc: Vpc
    subnets: tuple[Subnet, ...] = ()
    route_tables: Mapping[str, RouteTable] = field(default_factory=dict)
    load_balancers: tuple[LoadBalancer, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "subnets", tuple(self.subnets))
        object.__setattr__(self, "route_tables", MappingProxyType(dict(self.route_tables)))
        object.__setattr__(self, "load_balancers", tuple(self.load_balancers))

    @property
    def vpc_id(self) -> str:
        return self.vpc.vpc_id

    @property
    def subnet_ids(self) -> tuple[str, ...]:
        return tuple(s.subnet_id for s in self.subnets)

    def get_subnet(self, subnet_id: str) -> Subnet | None:
        for subnet in self.subnets:
            if subnet.subnet_id == subnet_id:
                return subnet
        return None

    def route_table_for(self, subnet: Subnet) -> RouteTable | None:
        """Resolved route table of a subnet"""
        if subnet.route_table_id is None:
            return None
        return self.route_tables.get(subnet.route_table_id)


@dataclass(frozen=True)
class DerivedFacts:
    """Classifier output, attached alongside the snapshot

    Attributes:
        subnet_visibility: subnet id -> Visibility
        az_groups: availability zone -> {Visibility: subnet ids}; every
            Visibility key is present, possibly with an empty tuple
    """

    subnet_visibility: Mapping[str, Visibility] = field(default_factory=dict)
    az_groups: Mapping[str, Mapping[Visibility, tuple[str, ...]]] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "subnet_visibility", MappingProxyType(dict(self.subnet_visibility)))
        object.__setattr__(
            self,
            "az_groups",
            MappingProxyType({az: MappingProxyType(dict(groups)) for az, groups in self.az_groups.items()}),
        )

    def visibility_of(self, subnet_id: str) -> Visibility:
        return self.subnet_visibility.get(subnet_id, Visibility.UNKNOWN)
