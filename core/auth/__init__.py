# core/auth/__init__.py
"""
AWS 인증/세션 모듈 (core/auth)

클라이언트 설정(프로파일, 리전, 프록시, 재시도/타임아웃)을 전역 상태가 아닌
값(AWSConfig)으로 표현하고, 이를 명시적으로 전달받아 boto3 Session을 생성합니다.

사용 예시:
    from core.auth import AWSConfig, create_session

    config = AWSConfig.from_environment(profile="my-profile", region="ap-northeast-2")
    session = create_session(config)
"""

from .session import AWSConfig, create_session, resolve_proxy_url

__all__ = [
    "AWSConfig",
    "create_session",
    "resolve_proxy_url",
]
