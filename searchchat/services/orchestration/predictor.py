"""예측기 (Predictor)

고정된 Signature와 ModelBinding을 묶는 얇은 어댑터.
스키마와 바인딩 참조 외의 상태는 갖지 않습니다.
"""

from typing import TYPE_CHECKING

from searchchat.errors import MissingInputFieldError
from searchchat.models.messages import Signature, StructuredMessage

if TYPE_CHECKING:
    from searchchat.services.llm.binding import ModelBinding


class Predictor:
    """스키마 기반 LLM 예측기"""

    def __init__(self, signature: Signature, binding: "ModelBinding"):
        """
        Args:
            signature: 입출력 스키마
            binding: 호출에 사용할 모델 바인딩 (명시적 주입, 기본값 없음)
        """
        if binding is None:
            raise ValueError(f"{signature.name}: ModelBinding이 필요합니다")
        self.signature = signature
        self.binding = binding

    async def forward(self, inputs: StructuredMessage) -> StructuredMessage:
        """바인딩에 위임하여 출력 필드 생성

        선언되지 않은 추가 필드는 무시합니다.

        Raises:
            MissingInputFieldError: 필수 입력 필드 누락 (호출자 버그)
            LLMCallError: LLM 호출 실패
        """
        missing = [name for name in self.signature.input_names if name not in inputs]
        if missing:
            raise MissingInputFieldError(self.signature.name, missing)

        declared = {name: inputs.get(name) for name in self.signature.input_names}
        return await self.binding.invoke(self.signature, StructuredMessage.from_inputs(**declared))

    async def __call__(self, **inputs: str) -> StructuredMessage:
        return await self.forward(StructuredMessage.from_inputs(**inputs))
