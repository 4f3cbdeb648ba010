"""
analyzers/byovpc/checks - 개별 검사 함수

모든 검사는 check(snapshot, facts, ...) -> list[Finding] 형태의 순수 함수입니다.
I/O를 하지 않고, 서로 호출하지 않으며, 공유 상태가 없습니다.
"""

from .balance import (
    AZ_BALANCE,
    ELB_ROLE_TAGS,
    SUBNETS_PER_AZ,
    check_az_balance,
    check_elb_role_tags,
    check_subnets_per_az,
)
from .loadbalancer import (
    LOAD_BALANCER_SCHEME,
    LOAD_BALANCER_SUBNETS,
    check_load_balancer_scheme,
    check_load_balancer_subnets,
)
from .tags import CLUSTER_OWNERSHIP, TAG_COMPLIANCE, check_cluster_ownership, check_tag_compliance

__all__ = [
    # 검사 이름
    "TAG_COMPLIANCE",
    "AZ_BALANCE",
    "LOAD_BALANCER_SCHEME",
    "CLUSTER_OWNERSHIP",
    "ELB_ROLE_TAGS",
    "SUBNETS_PER_AZ",
    "LOAD_BALANCER_SUBNETS",
    # 검사 함수
    "check_tag_compliance",
    "check_az_balance",
    "check_load_balancer_scheme",
    "check_cluster_ownership",
    "check_elb_role_tags",
    "check_subnets_per_az",
    "check_load_balancer_subnets",
]
