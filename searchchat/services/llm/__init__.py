"""LLM 호출 레이어

- BaseLLMService: 제공자(OpenAI/Anthropic/Dummy) 공통 비동기 인터페이스
- ChatAdapter: 스키마 ↔ 채팅 메시지 변환
- ModelBinding: 역할별 설정 + 호출 직렬화
"""

from .adapter import ChatAdapter
from .base import BaseLLMService, LLMResponse, Message
from .binding import ModelBinding, ModelConfig
from .dummy_llm import DummyLLM
from .factory import build_bindings, create_binding, get_llm_service

__all__ = [
    "BaseLLMService",
    "ChatAdapter",
    "DummyLLM",
    "LLMResponse",
    "Message",
    "ModelBinding",
    "ModelConfig",
    "build_bindings",
    "create_binding",
    "get_llm_service",
]
