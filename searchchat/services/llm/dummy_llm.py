"""더미 LLM 구현 (테스트/오프라인 데모용)"""

import asyncio
import re
from typing import Callable

from .base import BaseLLMService, LLMResponse, Message

# ChatAdapter가 요청하는 출력 필드 마커
_REQUESTED_FIELD = re.compile(r"`\[\[ ## (\w+) ## \]\]`")


class DummyLLM(BaseLLMService):
    """테스트용 더미 LLM 서비스

    응답 결정 순서:
    1. responses 큐에 남은 항목 (Exception이면 raise)
    2. responder 콜백
    3. 요청된 출력 필드를 더미 텍스트로 채운 기본 응답
    """

    def __init__(
        self,
        responses: list[str | Exception] | None = None,
        responder: Callable[[list[Message]], str] | None = None,
        delay: float = 0.0,
    ):
        """
        Args:
            responses: 순서대로 반환할 응답 (또는 발생시킬 예외)
            responder: 메시지 리스트를 받아 응답 텍스트를 만드는 콜백
            delay: 응답 시뮬레이션 지연 (초)
        """
        self.responses = list(responses or [])
        self.responder = responder
        self.delay = delay
        self.calls: list[list[Message]] = []

    async def generate(self, messages: list[Message], **kwargs) -> LLMResponse:
        """더미 응답 생성

        Args:
            messages: 대화 메시지 리스트
            **kwargs: 추가 파라미터 (model 외 무시됨)

        Returns:
            LLMResponse 객체
        """
        self.calls.append(list(messages))

        # 응답 시뮬레이션을 위한 지연 (취소 가능 지점)
        if self.delay:
            await asyncio.sleep(self.delay)

        if self.responses:
            item = self.responses.pop(0)
            if isinstance(item, Exception):
                raise item
            response_text = item
        elif self.responder is not None:
            response_text = self.responder(messages)
        else:
            response_text = self._default_response(messages)

        return LLMResponse(
            content=response_text,
            model=kwargs.get("model", "dummy-model"),
            usage={"prompt_tokens": 100, "completion_tokens": 50, "total_tokens": 150},
            metadata={"provider": "dummy"},
        )

    def _default_response(self, messages: list[Message]) -> str:
        # 마지막 사용자 메시지 추출
        user_message = ""
        for msg in reversed(messages):
            if msg.role == "user":
                user_message = msg.content
                break

        fields = [f for f in _REQUESTED_FIELD.findall(user_message) if f != "completed"]
        if not fields:
            return f"[더미 응답 모드] {user_message[:100]}"

        sections = [f"[[ ## {name} ## ]]\n[더미 응답 모드 - {name}]" for name in fields]
        sections.append("[[ ## completed ## ]]")
        return "\n\n".join(sections)
