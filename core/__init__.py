# core/__init__.py
"""
core - BYOVPC Checker 인프라

인증, 병렬 조회, 네트워크 데이터 수집, 설정, 예외를 포함하는 최상위 패키지입니다.

아키텍처:
    core/
    ├── auth/           # AWSConfig, boto3 Session 생성
    ├── parallel/       # 병렬 조회 (executor, client, 예외 분류)
    ├── data/network/   # Resource Gateway, Snapshot Builder, 토폴로지 타입
    ├── io/             # 출력 설정
    ├── config.py       # 버전, YAML 설정 로드
    └── exceptions.py   # 통합 예외 계층

Usage:
    # 게이트웨이 + 스냅샷
    from core.auth import AWSConfig
    from core.data.network import AWSResourceGateway, SnapshotBuilder

    gateway = AWSResourceGateway(AWSConfig.from_environment(profile="dev"))
    snapshot = SnapshotBuilder(gateway).build("vpc-0123456789abcdef0")

    # 예외 처리
    from core.exceptions import GatewayError, format_error_for_user
    try:
        snapshot = SnapshotBuilder(gateway).build(vpc_id)
    except GatewayError as e:
        print(format_error_for_user(e))
"""

from core import auth, config, exceptions, parallel

__all__: list[str] = [
    # 서브패키지
    "auth",
    "parallel",
    # 모듈
    "config",
    "exceptions",
]
