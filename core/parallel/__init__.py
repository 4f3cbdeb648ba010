"""
core/parallel - 병렬 조회 모듈

서로 독립적인 AWS 조회 작업을 병렬로 실행하고, 재시도가 설정된
boto3 client를 제공하며, AWS 예외를 GatewayError로 분류합니다.

주요 구성 요소:
- ParallelQueryExecutor: 이름이 붙은 작업 묶음 병렬 실행기 (join barrier)
- get_client: adaptive retry가 적용된 boto3 client 생성
- to_gateway_error: boto3/botocore 예외 -> GatewayError

Example:
    from core.parallel import ParallelConfig, ParallelQueryExecutor

    executor = ParallelQueryExecutor(ParallelConfig(max_workers=4, timeout=60))
    result = executor.execute(
        {
            "vpc": lambda: gateway.describe_vpc(vpc_id),
            "subnets": lambda: gateway.list_subnets(vpc_id),
        }
    )
    if not result.all_succeeded:
        print(result.get_error_summary())
"""

from .client import build_client_config, get_client
from .errors import (
    categorize_error,
    categorize_error_code,
    get_error_code,
    to_gateway_error,
)
from .executor import ParallelConfig, ParallelQueryExecutor
from .types import ParallelExecutionResult, TaskResult

__all__: list[str] = [
    # Client
    "get_client",
    "build_client_config",
    # Executor
    "ParallelConfig",
    "ParallelQueryExecutor",
    # Types
    "TaskResult",
    "ParallelExecutionResult",
    # Errors
    "categorize_error",
    "categorize_error_code",
    "get_error_code",
    "to_gateway_error",
]
