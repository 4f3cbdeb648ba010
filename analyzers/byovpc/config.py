"""
analyzers/byovpc/config.py - 검사 설정

YAML 파일 또는 딕셔너리로부터 CheckConfig를 만듭니다. CLI 옵션은
파일 값 위에 덮어씁니다 (CheckConfig.merged).

설정 파일 예시:
    cluster_id: my-cluster
    required_tag_keys:
      - kubernetes.io/cluster/my-cluster
    unknown_subnet_lb_severity: warn
    max_subnets_per_az: 2
    configured_subnet_ids:
      - subnet-0123456789abcdef0
    disabled_checks:
      - elb-role-tags
"""

from __future__ import annotations

import dataclasses
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from core.config import load_yaml_config
from core.exceptions import ConfigError

from .findings import Severity

logger = logging.getLogger(__name__)

CLUSTER_TAG_PREFIX = "kubernetes.io/cluster/"
PUBLIC_ELB_ROLE_TAG = "kubernetes.io/role/elb"
INTERNAL_ELB_ROLE_TAG = "kubernetes.io/role/internal-elb"


def cluster_tag_key(cluster_id: str) -> str:
    """클러스터 소유 태그 키 (kubernetes.io/cluster/<id>)"""
    return f"{CLUSTER_TAG_PREFIX}{cluster_id}"


def _string_list(key: str, value: Any) -> list[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    if not isinstance(value, (list, tuple)) or not all(isinstance(v, str) for v in value):
        raise ConfigError(key, "문자열 목록이어야 합니다")
    return list(value)


@dataclass
class CheckConfig:
    """검사 설정

    Attributes:
        cluster_id: 클러스터 ID (소유권/기본 필수 태그 계산에 사용)
        required_tag_keys: 필수 태그 키. 비어 있고 cluster_id가 있으면
            kubernetes.io/cluster/<cluster_id> 하나로 채워짐
        unknown_subnet_lb_severity: Unknown 서브넷에 연결된 로드밸런서 판정 (warn | fail)
        max_subnets_per_az: AZ당 허용 서브넷 수
        configured_subnet_ids: 클러스터 설치에 사용된 서브넷
        disabled_checks: 실행하지 않을 검사 이름
    """

    cluster_id: str | None = None
    required_tag_keys: list[str] = field(default_factory=list)
    unknown_subnet_lb_severity: Severity = Severity.WARN
    max_subnets_per_az: int = 2
    configured_subnet_ids: list[str] = field(default_factory=list)
    disabled_checks: list[str] = field(default_factory=list)

    def __post_init__(self) -> None:
        if isinstance(self.unknown_subnet_lb_severity, str):
            try:
                self.unknown_subnet_lb_severity = Severity.from_string(self.unknown_subnet_lb_severity)
            except ValueError as e:
                raise ConfigError("unknown_subnet_lb_severity", str(e)) from e
        if self.unknown_subnet_lb_severity == Severity.PASS:
            raise ConfigError("unknown_subnet_lb_severity", "warn 또는 fail만 허용됩니다")

        if isinstance(self.max_subnets_per_az, bool) or not isinstance(self.max_subnets_per_az, int):
            raise ConfigError("max_subnets_per_az", "정수여야 합니다")
        if self.max_subnets_per_az < 1:
            raise ConfigError("max_subnets_per_az", f"1 이상이어야 합니다: {self.max_subnets_per_az}")

        if not self.required_tag_keys and self.cluster_id:
            self.required_tag_keys = [cluster_tag_key(self.cluster_id)]

    @classmethod
    def field_names(cls) -> set[str]:
        return {f.name for f in dataclasses.fields(cls)}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> CheckConfig:
        """딕셔너리에서 CheckConfig 생성

        Raises:
            ConfigError: 알 수 없는 키 또는 잘못된 값
        """
        unknown = sorted(set(data) - cls.field_names())
        if unknown:
            raise ConfigError(unknown[0], f"알 수 없는 설정 키입니다: {', '.join(unknown)}")

        cluster_id = data.get("cluster_id")
        if cluster_id is not None and not isinstance(cluster_id, str):
            raise ConfigError("cluster_id", "문자열이어야 합니다")

        return cls(
            cluster_id=cluster_id,
            required_tag_keys=_string_list("required_tag_keys", data.get("required_tag_keys")),
            unknown_subnet_lb_severity=str(data.get("unknown_subnet_lb_severity", Severity.WARN.value)),  # type: ignore[arg-type]
            max_subnets_per_az=data.get("max_subnets_per_az", 2),
            configured_subnet_ids=_string_list("configured_subnet_ids", data.get("configured_subnet_ids")),
            disabled_checks=_string_list("disabled_checks", data.get("disabled_checks")),
        )

    @classmethod
    def from_file(cls, path: str | Path) -> CheckConfig:
        """YAML 설정 파일에서 CheckConfig 생성"""
        config = cls.from_dict(load_yaml_config(path))
        logger.debug(f"검사 설정 로드: {path}")
        return config

    def merged(self, **overrides: Any) -> CheckConfig:
        """None/빈 값이 아닌 항목만 덮어쓴 새 설정

        cluster_id만 바뀌고 필수 태그가 지정되지 않았다면 필수 태그 기본값도 새
        cluster_id 기준으로 다시 계산됩니다.
        """
        values = {f.name: getattr(self, f.name) for f in dataclasses.fields(self)}
        applied = {k: v for k, v in overrides.items() if v is not None and v != [] and v != ()}

        unknown = sorted(set(applied) - self.field_names())
        if unknown:
            raise ConfigError(unknown[0], "알 수 없는 설정 키입니다")

        if "cluster_id" in applied and "required_tag_keys" not in applied:
            derived = [cluster_tag_key(self.cluster_id)] if self.cluster_id else []
            if values["required_tag_keys"] == derived:
                values["required_tag_keys"] = []

        for key, value in applied.items():
            values[key] = list(value) if isinstance(value, (list, tuple)) else value

        return CheckConfig(**values)
