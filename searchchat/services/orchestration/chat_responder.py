"""응답 생성기 (ResponseSynthesizer)

대화 히스토리, 현재 입력, (선택적) 검색 결과를 바탕으로 최종 응답을 생성합니다.
응답 품질이 중요한 단계이므로 의도분류와 분리된 바인딩을 사용합니다.
"""

from typing import TYPE_CHECKING

from searchchat.models.messages import InputField, OutputField, Signature

from .models import ConversationHistory
from .predictor import Predictor

if TYPE_CHECKING:
    from searchchat.services.llm.binding import ModelBinding


# 응답 생성용 스키마
RESPONSE_SIGNATURE = Signature(
    name="ResponseSynthesis",
    instructions=(
        "You are a helpful assistant. Reply to the user's latest message, "
        "taking the conversation so far into account. When context from a "
        "search is provided, ground your answer in it; when it is empty, "
        "answer from general knowledge and be clear about uncertainty."
    ),
    fields=(
        InputField("history", "previous turns, one 'Speaker: text' line each"),
        InputField("message", "the user's latest message"),
        InputField("context", "search results relevant to the message, may be empty"),
        OutputField("response", "the reply to show the user"),
    ),
)


class ResponseSynthesizer:
    """최종 응답 생성기"""

    def __init__(self, binding: "ModelBinding"):
        """
        Args:
            binding: 응답 생성 역할의 모델 바인딩
        """
        self.predictor = Predictor(RESPONSE_SIGNATURE, binding)

    @property
    def binding(self) -> "ModelBinding":
        return self.predictor.binding

    async def generate(
        self,
        history: ConversationHistory,
        message: str,
        context: str = "",
    ) -> str:
        """응답 생성

        Args:
            history: 대화 히스토리 (이 시점에서 텍스트로 직렬화)
            message: 현재 사용자 입력
            context: 검색 결과 (없으면 빈 문자열)

        Returns:
            응답 텍스트

        Raises:
            LLMCallError: LLM 호출 실패
        """
        output = await self.predictor(
            history=history.render(),
            message=message,
            context=context,
        )
        return output.get("response")
