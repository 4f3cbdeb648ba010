"""
analyzers/byovpc/findings.py - 검사 결과(Finding)와 최종 리포트

Finding은 하나의 검사가 하나의 리소스에 대해 내린 판정이며,
Report는 Finding 목록을 하나의 전체 상태와 종료 코드로 집계합니다.

집계 규칙: Fail > Warn > Pass (하나라도 Fail이면 Fail, 아니면 Warn 여부, 그 외 Pass)
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any

# CLI 종료 코드 (2는 click 사용법 오류로 예약)
EXIT_PASS = 0
EXIT_FAIL = 1
EXIT_WARN = 3
EXIT_ERROR = 4
EXIT_INTERRUPTED = 130


class Severity(Enum):
    """판정 심각도.

    Attributes:
        PASS: 기준 충족.
        WARN: 사람이 검토해야 하는 모호한 상태.
        FAIL: 클러스터 설치/운영을 깨뜨리는 설정 오류.
    """

    PASS = "pass"
    WARN = "warn"
    FAIL = "fail"

    @property
    def rank(self) -> int:
        return _SEVERITY_RANK[self]

    @classmethod
    def worst(cls, severities: Iterable[Severity]) -> Severity:
        """가장 심각한 값 (빈 입력이면 PASS)"""
        return max(severities, key=lambda s: s.rank, default=cls.PASS)

    @classmethod
    def from_string(cls, value: str) -> Severity:
        """문자열에서 Severity 변환 (대소문자 무시)

        Raises:
            ValueError: 알 수 없는 값
        """
        try:
            return cls(value.strip().lower())
        except ValueError:
            valid = ", ".join(s.value for s in cls)
            raise ValueError(f"알 수 없는 severity: {value!r} (허용: {valid})") from None


_SEVERITY_RANK = {Severity.PASS: 0, Severity.WARN: 1, Severity.FAIL: 2}


@dataclass(frozen=True)
class Finding:
    """개별 검사 결과.

    Attributes:
        check_name: 결과를 만든 검사 이름.
        severity: 판정.
        subject_resource_id: 판정 대상 리소스 ID (VPC, 서브넷, 로드밸런서, AZ).
        message: 사람이 읽을 설명.
        evidence: 판정 근거가 된 필드 값. 테스트와 재현에 사용.
    """

    check_name: str
    severity: Severity
    subject_resource_id: str
    message: str
    evidence: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "evidence", MappingProxyType(dict(self.evidence)))

    def to_dict(self) -> dict[str, Any]:
        return {
            "check": self.check_name,
            "severity": self.severity.value,
            "resource_id": self.subject_resource_id,
            "message": self.message,
            "evidence": dict(self.evidence),
        }


def aggregate_findings(findings: Iterable[Finding]) -> Severity:
    """Finding 목록의 전체 상태 (Fail > Warn > Pass)"""
    return Severity.worst(f.severity for f in findings)


def exit_code_for(status: Severity) -> int:
    """전체 상태 -> 프로세스 종료 코드"""
    return {
        Severity.PASS: EXIT_PASS,
        Severity.WARN: EXIT_WARN,
        Severity.FAIL: EXIT_FAIL,
    }[status]


@dataclass
class Report:
    """최종 리포트.

    Attributes:
        vpc_id: 검사 대상 VPC.
        status: 전체 상태.
        findings: 검사 등록 순서대로 정렬된 Finding 목록.
    """

    vpc_id: str
    status: Severity
    findings: list[Finding] = field(default_factory=list)

    @classmethod
    def from_findings(cls, vpc_id: str, findings: Iterable[Finding]) -> Report:
        items = list(findings)
        return cls(vpc_id=vpc_id, status=aggregate_findings(items), findings=items)

    @property
    def exit_code(self) -> int:
        return exit_code_for(self.status)

    def counts(self) -> dict[Severity, int]:
        """심각도별 Finding 수 (모든 키 포함)"""
        counts = {s: 0 for s in Severity}
        for finding in self.findings:
            counts[finding.severity] += 1
        return counts

    def by_severity(self, severity: Severity) -> list[Finding]:
        return [f for f in self.findings if f.severity == severity]

    def to_dict(self) -> dict[str, Any]:
        return {
            "vpc_id": self.vpc_id,
            "status": self.status.value,
            "exit_code": self.exit_code,
            "summary": {s.value: n for s, n in self.counts().items()},
            "findings": [f.to_dict() for f in self.findings],
        }
