"""Anthropic API LLM 구현"""

from anthropic import AsyncAnthropic

from searchchat.settings import settings

from .base import BaseLLMService, LLMResponse, Message


class AnthropicLLM(BaseLLMService):
    """Anthropic API를 사용한 LLM 서비스"""

    def __init__(self, api_key: str | None = None, timeout: float | None = None):
        """Anthropic 클라이언트 초기화

        Args:
            api_key: Anthropic API 키 (None이면 설정값 사용)
            timeout: HTTP 타임아웃 (초, None이면 설정값 사용)
        """
        self.api_key = api_key or settings.anthropic_api_key
        self.timeout = timeout or settings.llm_timeout_seconds
        self.client = AsyncAnthropic(
            api_key=self.api_key,
            timeout=self.timeout,
            max_retries=0,
        )

    async def generate(self, messages: list[Message], **kwargs) -> LLMResponse:
        """메시지를 기반으로 응답 생성

        Args:
            messages: 대화 메시지 리스트
            **kwargs: model (필수), temperature, max_tokens 등

        Returns:
            LLMResponse 객체
        """
        # system 메시지 분리
        system_parts = []
        conversation_messages = []

        for msg in messages:
            if msg.role == "system":
                system_parts.append(msg.content)
            else:
                conversation_messages.append({"role": msg.role, "content": msg.content})

        params = dict(kwargs)
        params.setdefault("max_tokens", 4096)
        if system_parts:
            params["system"] = "\n\n".join(system_parts)

        # API 호출
        response = await self.client.messages.create(
            messages=conversation_messages,
            **params,
        )

        # 응답 변환 (텍스트 블록만 이어붙임)
        content = "".join(
            block.text for block in response.content if getattr(block, "type", None) == "text"
        )
        return LLMResponse(
            content=content,
            model=response.model,
            usage={
                "input_tokens": response.usage.input_tokens,
                "output_tokens": response.usage.output_tokens,
            },
            metadata={"provider": "anthropic", "stop_reason": response.stop_reason},
        )
