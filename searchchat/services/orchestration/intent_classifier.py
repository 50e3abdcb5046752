"""의도 분류기 (IntentClassifier)

사용자 입력이 외부 검색이 필요한 질문인지 LLM으로 분류합니다.
빠른 응답을 위해 응답 생성과 분리된 경량 모델 바인딩을 사용합니다.
"""

from typing import TYPE_CHECKING

from searchchat.errors import ClassificationError, LLMCallError
from searchchat.models.messages import InputField, OutputField, Signature

from .models import Intent, IntentLabel
from .predictor import Predictor

if TYPE_CHECKING:
    from searchchat.services.llm.binding import ModelBinding


# 의도 분류용 스키마
INTENT_SIGNATURE = Signature(
    name="IntentClassification",
    instructions=(
        "Classify the user's message. Answer 'search' if answering it needs "
        "current or external information (news, facts that change over time, "
        "lookups). Answer 'chat' for greetings, small talk, opinions and "
        "anything answerable without looking something up."
    ),
    fields=(
        InputField("message", "the user's message"),
        OutputField("intent", "either 'search' or 'chat'"),
    ),
)


def normalize_intent(raw: str | None) -> IntentLabel:
    """분류기 출력 문자열을 IntentLabel로 정규화

    "search"가 (대소문자 무시) 포함되면 SEARCH, 그 외는 모두 CHAT.
    """
    if raw and "search" in raw.lower():
        return IntentLabel.SEARCH
    return IntentLabel.CHAT


class IntentClassifier:
    """LLM 기반 의도 분류기"""

    def __init__(self, binding: "ModelBinding"):
        """
        Args:
            binding: 의도분류 역할의 모델 바인딩
        """
        self.predictor = Predictor(INTENT_SIGNATURE, binding)

    @property
    def binding(self) -> "ModelBinding":
        return self.predictor.binding

    async def classify(self, message: str) -> Intent:
        """사용자 입력의 의도를 분류

        재시도나 폴백 없이 실패를 그대로 알립니다 (폴백 정책은 Orchestrator 몫).

        Args:
            message: 사용자 입력 텍스트

        Returns:
            Intent 객체

        Raises:
            ClassificationError: LLM 호출 실패
        """
        try:
            output = await self.predictor(message=message)
        except LLMCallError as e:
            raise ClassificationError(f"의도 분류 실패: {e}") from e

        raw = output.get("intent")
        return Intent(label=normalize_intent(raw), raw_response=raw)
