"""
analyzers/byovpc/engine.py - 검사 엔진

이름 -> 검사 함수의 순서 있는 레지스트리를 등록 순서대로 실행하고
Finding을 이어 붙입니다. 한 검사의 내부 오류는 그 검사의 Fail Finding으로
변환되며, 전체 실행은 중단되지 않습니다.

Example:
    registry = build_default_registry(CheckConfig(cluster_id="my-cluster"))
    findings = CheckEngine(registry).run(snapshot, facts)
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterator
from enum import Enum
from functools import partial

from core.data.network.types import DerivedFacts, TopologySnapshot
from core.exceptions import CheckExecutionError

from . import checks
from .config import CheckConfig
from .findings import Finding, Severity

logger = logging.getLogger(__name__)

CheckFunc = Callable[[TopologySnapshot, DerivedFacts], list[Finding]]


class CheckRegistry:
    """순서 있는 검사 레지스트리"""

    def __init__(self) -> None:
        self._checks: dict[str, CheckFunc] = {}

    def register(self, name: str, func: CheckFunc) -> None:
        """검사 등록

        Raises:
            ValueError: 이미 등록된 이름
        """
        if name in self._checks:
            raise ValueError(f"이미 등록된 검사입니다: {name}")
        self._checks[name] = func

    def unregister(self, name: str) -> None:
        self._checks.pop(name, None)

    @property
    def names(self) -> list[str]:
        return list(self._checks)

    def __contains__(self, name: object) -> bool:
        return name in self._checks

    def __iter__(self) -> Iterator[tuple[str, CheckFunc]]:
        return iter(list(self._checks.items()))

    def __len__(self) -> int:
        return len(self._checks)


def build_default_registry(config: CheckConfig | None = None) -> CheckRegistry:
    """기본 검사 레지스트리 생성

    등록 순서: tag-compliance, az-balance, load-balancer-scheme,
    cluster-ownership, elb-role-tags, subnets-per-az, load-balancer-subnets.
    disabled_checks에 있는 이름은 등록하지 않습니다.
    """
    config = config or CheckConfig()

    candidates: list[tuple[str, CheckFunc]] = [
        (
            checks.TAG_COMPLIANCE,
            partial(checks.check_tag_compliance, required_tag_keys=tuple(config.required_tag_keys)),
        ),
        (checks.AZ_BALANCE, checks.check_az_balance),
        (
            checks.LOAD_BALANCER_SCHEME,
            partial(checks.check_load_balancer_scheme, unknown_severity=config.unknown_subnet_lb_severity),
        ),
        (checks.CLUSTER_OWNERSHIP, partial(checks.check_cluster_ownership, cluster_id=config.cluster_id)),
        (checks.ELB_ROLE_TAGS, checks.check_elb_role_tags),
        (
            checks.SUBNETS_PER_AZ,
            partial(checks.check_subnets_per_az, max_subnets_per_az=config.max_subnets_per_az),
        ),
        (
            checks.LOAD_BALANCER_SUBNETS,
            partial(checks.check_load_balancer_subnets, configured_subnet_ids=tuple(config.configured_subnet_ids)),
        ),
    ]

    known = {name for name, _ in candidates}
    for name in config.disabled_checks:
        if name not in known:
            logger.warning(f"알 수 없는 검사 이름은 무시합니다: {name}")

    registry = CheckRegistry()
    for name, func in candidates:
        if name in config.disabled_checks:
            logger.debug(f"검사 비활성화: {name}")
            continue
        registry.register(name, func)
    return registry


class EngineState(Enum):
    IDLE = "idle"
    RUNNING = "running"


class CheckEngine:
    """검사 엔진

    상태: IDLE -> RUNNING (종료 상태). 엔진 하나는 한 번만 실행할 수 있습니다.
    """

    def __init__(self, registry: CheckRegistry):
        self.registry = registry
        self.state = EngineState.IDLE

    def run(self, snapshot: TopologySnapshot, facts: DerivedFacts) -> list[Finding]:
        """등록 순서대로 모든 검사 실행

        Args:
            snapshot: 불변 토폴로지 스냅샷
            facts: Classifier 결과

        Returns:
            모든 검사의 Finding (등록 순서대로 연결)

        Raises:
            RuntimeError: 이미 실행된 엔진을 다시 실행한 경우
        """
        if self.state != EngineState.IDLE:
            raise RuntimeError("CheckEngine은 한 번만 실행할 수 있습니다")
        self.state = EngineState.RUNNING

        findings: list[Finding] = []
        for name, func in self.registry:
            findings.extend(self._run_single(name, func, snapshot, facts))
        return findings

    def _run_single(
        self,
        name: str,
        func: CheckFunc,
        snapshot: TopologySnapshot,
        facts: DerivedFacts,
    ) -> list[Finding]:
        logger.info(f"검사 실행: {name}")
        try:
            results = list(func(snapshot, facts))
        except Exception as e:
            logger.error(f"검사 내부 오류 [{name}]: {type(e).__name__}: {e}", exc_info=True)
            error = CheckExecutionError(name, e)
            return [
                Finding(
                    check_name=name,
                    severity=Severity.FAIL,
                    subject_resource_id=snapshot.vpc_id,
                    message=f"검사를 완료하지 못했습니다: {type(e).__name__}: {e}",
                    evidence=error.to_dict(),
                )
            ]

        logger.debug(f"검사 완료: {name} ({len(results)}건)")
        return results
