"""애플리케이션 설정 관리"""

from typing import Literal

from dotenv import load_dotenv
from pydantic import Field
from pydantic_settings import BaseSettings

# .env 파일 로드
load_dotenv()


class Settings(BaseSettings):
    """애플리케이션 설정"""

    # LLM 설정
    llm_provider: Literal["openai", "anthropic", "dummy"] = Field(
        default="openai", description="LLM 제공자 (openai | anthropic | dummy)"
    )
    openai_api_key: str | None = Field(default=None, description="OpenAI API 키")
    anthropic_api_key: str | None = Field(default=None, description="Anthropic API 키")

    # 역할별 모델 설정 (의도분류/검색어 추출 vs 응답 생성)
    classifier_model: str = Field(
        default="gpt-4o-mini", description="의도분류/검색어 추출용 모델명"
    )
    classifier_temperature: float = Field(
        default=0.0, description="의도분류용 temperature"
    )
    synthesis_model: str = Field(default="gpt-4o-mini", description="응답 생성용 모델명")
    synthesis_temperature: float = Field(default=0.7, description="응답 생성용 temperature")
    llm_max_tokens: int = Field(default=1024, description="LLM 호출당 최대 출력 토큰")
    llm_timeout_seconds: float = Field(default=60.0, description="LLM HTTP 타임아웃 (초)")

    # 세션 설정
    concurrent_turn_policy: Literal["queue", "reject"] = Field(
        default="queue",
        description="같은 세션에 동시 요청이 들어올 때 정책 (queue | reject)",
    )

    # 앱 설정
    log_level: str = Field(default="INFO", description="로그 레벨")

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = False


# 전역 설정 인스턴스
settings = Settings()

# 제공자별 모델명 접두어
MODEL_PREFIXES: dict[str, tuple[str, ...]] = {
    "openai": ("gpt", "o1", "o3", "o4", "chatgpt"),
    "anthropic": ("claude",),
}


def validate_settings(config: Settings | None = None) -> dict[str, str]:
    """설정 유효성 검사 및 경고 메시지 반환"""
    config = config or settings
    warnings = {}

    # LLM 설정 검증
    if config.llm_provider == "openai":
        if not config.openai_api_key:
            warnings["llm"] = "OpenAI API 사용을 위해서는 OPENAI_API_KEY가 필요합니다."
    elif config.llm_provider == "anthropic":
        if not config.anthropic_api_key:
            warnings["llm"] = (
                "Anthropic API 사용을 위해서는 ANTHROPIC_API_KEY가 필요합니다."
            )

    prefixes = MODEL_PREFIXES.get(config.llm_provider)
    if prefixes:
        mismatched = [
            model
            for model in (config.classifier_model, config.synthesis_model)
            if not model.lower().startswith(prefixes)
        ]
        if mismatched:
            warnings["model"] = (
                f"{config.llm_provider} 제공자와 맞지 않는 모델명일 수 있습니다: {mismatched}"
            )

    if config.classifier_temperature > config.synthesis_temperature:
        warnings["temperature"] = (
            "의도분류 temperature가 응답 생성보다 높습니다. "
            "분류 결과가 불안정할 수 있습니다."
        )

    return warnings
