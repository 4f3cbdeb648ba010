"""
core/data - Data Services Layer

Modules:
    - network: VPC topology gateway and snapshot builder

Design Principle:
    core/ = How (infrastructure) + Data (shared services)
    analyzers/ = What (checks over the collected data)
"""

from .network import AWSResourceGateway, SnapshotBuilder, TopologySnapshot

__all__ = [
    "AWSResourceGateway",
    "SnapshotBuilder",
    "TopologySnapshot",
]
