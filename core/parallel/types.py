"""
core/parallel/types.py - 병렬 실행 결과 타입

주요 구성 요소:
- TaskResult: 개별 조회 작업 결과
- ParallelExecutionResult: 전체 실행 결과 (작업 등록 순서 유지)
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, TypeVar

T = TypeVar("T")


@dataclass(frozen=True)
class TaskResult(Generic[T]):
    """개별 작업 실행 결과

    Attributes:
        name: 작업 이름 (예: "subnets")
        success: 성공 여부
        data: 성공 시 반환 데이터
        error: 실패 시 예외
        duration_ms: 실행 시간 (밀리초)
    """

    name: str
    success: bool
    data: T | None = None
    error: BaseException | None = None
    duration_ms: float = 0.0


@dataclass(frozen=True)
class ParallelExecutionResult(Generic[T]):
    """병렬 실행 전체 결과

    results는 완료 순서가 아닌 작업 등록 순서로 정렬됩니다.
    """

    results: tuple[TaskResult[T], ...] = ()

    @property
    def success_count(self) -> int:
        return sum(1 for r in self.results if r.success)

    @property
    def error_count(self) -> int:
        return sum(1 for r in self.results if not r.success)

    @property
    def all_succeeded(self) -> bool:
        return self.error_count == 0

    def get(self, name: str) -> TaskResult[T]:
        """이름으로 작업 결과 조회

        Raises:
            KeyError: 해당 이름의 작업이 없는 경우
        """
        for result in self.results:
            if result.name == name:
                return result
        raise KeyError(name)

    def first_failure(self) -> TaskResult[T] | None:
        """등록 순서상 첫 번째 실패 결과 (없으면 None)"""
        for result in self.results:
            if not result.success:
                return result
        return None

    def get_error_summary(self) -> str:
        """실패한 작업 요약 문자열"""
        failed = [r for r in self.results if not r.success]
        if not failed:
            return "에러 없음"
        parts = [f"{r.name}: {type(r.error).__name__}" for r in failed]
        return f"에러 {len(failed)}건 ({', '.join(parts)})"
