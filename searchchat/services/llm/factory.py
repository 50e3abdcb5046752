"""LLM 서비스/바인딩 팩토리"""

from searchchat.settings import Settings, settings

from .anthropic_llm import AnthropicLLM
from .base import BaseLLMService
from .binding import ModelBinding, ModelConfig
from .dummy_llm import DummyLLM
from .openai_llm import OpenAILLM

CLASSIFIER_ROLE = "classifier"
SYNTHESIZER_ROLE = "synthesizer"


def get_llm_service(
    provider: str | None = None,
    api_key: str | None = None,
    timeout: float | None = None,
) -> BaseLLMService:
    """설정에 따라 적절한 LLM 서비스 반환

    Args:
        provider: LLM 제공자 (None이면 설정값 사용)
        api_key: API 키 (None이면 제공자별 설정값 사용)
        timeout: HTTP 타임아웃 (초, None이면 설정값 사용)

    Returns:
        BaseLLMService 인스턴스
    """
    provider = provider or settings.llm_provider
    if provider == "openai":
        return OpenAILLM(api_key=api_key, timeout=timeout)
    elif provider == "anthropic":
        return AnthropicLLM(api_key=api_key, timeout=timeout)
    elif provider == "dummy":
        return DummyLLM()
    else:
        raise ValueError(f"지원하지 않는 LLM 제공자: {provider}")


def _api_key_for(config: Settings) -> str | None:
    if config.llm_provider == "openai":
        return config.openai_api_key
    if config.llm_provider == "anthropic":
        return config.anthropic_api_key
    return None


def create_binding(
    role: str,
    model: str,
    temperature: float,
    config: Settings | None = None,
) -> ModelBinding:
    """역할 하나에 대한 ModelBinding 생성 (역할마다 독립된 클라이언트)"""
    config = config or settings
    api_key = _api_key_for(config)
    model_config = ModelConfig(
        model=model,
        temperature=temperature,
        api_key=api_key,
        max_tokens=config.llm_max_tokens,
    )
    return ModelBinding(
        role=role,
        config=model_config,
        llm_service=get_llm_service(
            config.llm_provider, api_key=api_key, timeout=config.llm_timeout_seconds
        ),
    )


def build_bindings(config: Settings | None = None) -> dict[str, ModelBinding]:
    """의도분류용/응답생성용 바인딩을 각각 생성

    Returns:
        {"classifier": ModelBinding, "synthesizer": ModelBinding}
    """
    config = config or settings
    return {
        CLASSIFIER_ROLE: create_binding(
            CLASSIFIER_ROLE, config.classifier_model, config.classifier_temperature, config
        ),
        SYNTHESIZER_ROLE: create_binding(
            SYNTHESIZER_ROLE, config.synthesis_model, config.synthesis_temperature, config
        ),
    }
