"""
core/parallel/executor.py - 병렬 조회 실행기

서로 데이터 의존성이 없는 조회 작업(서브넷, 라우트 테이블, 로드밸런서 등)을
ThreadPoolExecutor로 동시에 실행하고, 모든 작업이 끝날 때까지 기다린 뒤
(join barrier) 결과를 한꺼번에 반환합니다.

재시도는 하지 않습니다. 일시적 전송 오류의 재시도는 botocore client 설정에서
처리됩니다 (core.parallel.client).

주요 구성 요소:
- ParallelConfig: 병렬 실행 설정 (워커 수, 전체 타임아웃)
- ParallelQueryExecutor: 이름이 붙은 작업 묶음 병렬 실행기

Example:
    from core.parallel import ParallelConfig, ParallelQueryExecutor

    executor = ParallelQueryExecutor(ParallelConfig(max_workers=4, timeout=60))
    result = executor.execute(
        {
            "subnets": lambda: gateway.list_subnets(vpc_id),
            "route_tables": lambda: gateway.list_route_tables(vpc_id),
        }
    )
    if not result.all_succeeded:
        raise result.first_failure().error
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable, Mapping
from concurrent.futures import ALL_COMPLETED, FIRST_COMPLETED, CancelledError, Future, ThreadPoolExecutor, wait
from dataclasses import dataclass
from typing import TypeVar

from .types import ParallelExecutionResult, TaskResult

logger = logging.getLogger(__name__)

T = TypeVar("T")

MAX_WORKERS_LIMIT = 16


@dataclass
class ParallelConfig:
    """병렬 실행 설정

    Attributes:
        max_workers: 최대 동시 스레드 수 (1~16)
        timeout: 전체 작업 대기 시간 (초, None이면 무제한)
        fail_fast: 첫 실패 시 아직 시작되지 않은 작업 취소
    """

    max_workers: int = 4
    timeout: float | None = None
    fail_fast: bool = True

    def __post_init__(self) -> None:
        if self.max_workers < 1:
            raise ValueError(f"max_workers must be >= 1, got {self.max_workers}")
        if self.max_workers > MAX_WORKERS_LIMIT:
            self.max_workers = MAX_WORKERS_LIMIT
        if self.timeout is not None and self.timeout <= 0:
            raise ValueError(f"timeout must be > 0, got {self.timeout}")


def _clear_exception_chain(e: BaseException) -> None:
    """chained exception의 traceback 참조 해제"""
    if e.__context__ is not None:
        e.__context__.__traceback__ = None
    if e.__cause__ is not None:
        e.__cause__.__traceback__ = None


class ParallelQueryExecutor:
    """병렬 조회 실행기

    특징:
    - ThreadPoolExecutor 기반 병렬 처리
    - 모든 작업 완료 후 결과 반환 (부분 결과를 관찰할 수 없음)
    - 결과는 작업 등록 순서로 정렬
    - 전체 타임아웃 초과 시 미완료 작업은 TimeoutError 실패로 기록

    Example:
        executor = ParallelQueryExecutor(ParallelConfig(max_workers=4, timeout=60))
        result = executor.execute({"vpc": lambda: gateway.describe_vpc(vpc_id)})
    """

    def __init__(self, config: ParallelConfig | None = None):
        """초기화

        Args:
            config: 병렬 실행 설정 (None이면 기본값)
        """
        self.config = config or ParallelConfig()

    def execute(self, tasks: Mapping[str, Callable[[], T]]) -> ParallelExecutionResult[T]:
        """작업들을 병렬 실행하고 모두 끝날 때까지 대기

        Args:
            tasks: {작업 이름: 인자 없는 callable}

        Returns:
            ParallelExecutionResult[T]: 전체 실행 결과
        """
        if not tasks:
            logger.debug("실행할 작업이 없습니다")
            return ParallelExecutionResult()

        names = list(tasks)
        logger.debug(f"병렬 실행 시작: {len(names)}개 작업, max_workers={self.config.max_workers}")
        start_time = time.monotonic()

        executor = ThreadPoolExecutor(
            max_workers=min(self.config.max_workers, len(names)),
            thread_name_prefix="gateway",
        )
        try:
            futures: dict[str, Future[TaskResult[T]]] = {
                name: executor.submit(self._execute_single, name, tasks[name]) for name in names
            }
            self._wait(futures, start_time)
        finally:
            # 타임아웃 시 실행 중인 스레드를 기다리지 않음
            executor.shutdown(wait=False, cancel_futures=True)

        results = tuple(self._collect(name, futures[name]) for name in names)
        exec_result = ParallelExecutionResult(results=results)

        total_time = (time.monotonic() - start_time) * 1000
        logger.debug(
            f"병렬 실행 완료: 성공 {exec_result.success_count}, 실패 {exec_result.error_count}, 총 {total_time:.0f}ms"
        )
        return exec_result

    def _wait(self, futures: Mapping[str, Future[TaskResult[T]]], start_time: float) -> None:
        """join barrier

        fail_fast면 첫 실패 이후 아직 시작되지 않은 작업을 취소한 뒤,
        실행 중인 작업이 끝나거나 타임아웃될 때까지 기다립니다.
        """
        pending = set(futures.values())
        deadline = None if self.config.timeout is None else start_time + self.config.timeout

        # 작업 예외는 TaskResult로 감싸지므로 FIRST_EXCEPTION 대신 완료마다 확인
        return_when = FIRST_COMPLETED if self.config.fail_fast else ALL_COMPLETED

        while pending:
            remaining = None if deadline is None else max(0.0, deadline - time.monotonic())
            done, pending = wait(pending, timeout=remaining, return_when=return_when)

            if self.config.fail_fast and any(not f.cancelled() and not f.result().success for f in done):
                for future in pending:
                    future.cancel()
                # 취소되지 않은(이미 실행 중인) 작업은 계속 기다림
                pending = {f for f in pending if not f.cancelled()}

            if deadline is not None and time.monotonic() >= deadline:
                break

    def _collect(self, name: str, future: Future[TaskResult[T]]) -> TaskResult[T]:
        """Future에서 TaskResult 추출 (미완료/취소는 실패로 기록)"""
        if future.cancelled():
            return TaskResult(name=name, success=False, error=CancelledError(f"작업 취소됨: {name}"))
        if not future.done():
            return TaskResult(
                name=name,
                success=False,
                error=TimeoutError(f"작업 시간 초과 ({self.config.timeout}초): {name}"),
            )
        return future.result()

    def _execute_single(self, name: str, func: Callable[[], T]) -> TaskResult[T]:
        """단일 작업 실행 (워커 스레드 내에서 호출)

        예외는 전파하지 않고 TaskResult에 담아 반환합니다.
        """
        start_time = time.monotonic()
        try:
            data = func()
            return TaskResult(
                name=name,
                success=True,
                data=data,
                duration_ms=(time.monotonic() - start_time) * 1000,
            )
        except Exception as e:
            logger.debug(f"작업 실패 [{name}]: {type(e).__name__}: {e}")
            _clear_exception_chain(e)
            return TaskResult(
                name=name,
                success=False,
                error=e,
                duration_ms=(time.monotonic() - start_time) * 1000,
            )
