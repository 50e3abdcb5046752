"""모델 바인딩 (ModelBinding)

역할(role)별로 설정된 LLM 엔드포인트 핸들입니다.
같은 바인딩에 대한 호출은 asyncio.Lock으로 직렬화되며,
락은 제공자 호출 구간에만 잡습니다.
"""

import asyncio
import logging
from dataclasses import dataclass, field

from searchchat.errors import LLMCallError
from searchchat.models.messages import Signature, StructuredMessage

from .adapter import ChatAdapter
from .base import BaseLLMService

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ModelConfig:
    """엔드포인트 설정 (생성 후 불변)"""

    model: str
    temperature: float = 0.0
    api_key: str | None = field(default=None, repr=False)
    max_tokens: int | None = None

    def request_kwargs(self) -> dict:
        kwargs = {"model": self.model, "temperature": self.temperature}
        if self.max_tokens is not None:
            kwargs["max_tokens"] = self.max_tokens
        return kwargs


class ModelBinding:
    """역할별 LLM 바인딩

    프로세스 시작 시 역할마다 한 번 생성하고, 같은 역할의 Predictor들이
    참조로 공유합니다 (요청마다 복제하지 않음).
    """

    def __init__(
        self,
        role: str,
        config: ModelConfig,
        llm_service: BaseLLMService,
        adapter: ChatAdapter | None = None,
    ):
        """
        Args:
            role: 역할 이름 (예: "classifier", "synthesizer")
            config: 모델 설정
            llm_service: 실제 호출을 수행할 LLM 서비스
            adapter: 프롬프트 포맷터/파서 (None이면 ChatAdapter)
        """
        self._role = role
        self._config = config
        self._llm_service = llm_service
        self._adapter = adapter or ChatAdapter()
        self._lock = asyncio.Lock()

    @property
    def role(self) -> str:
        return self._role

    @property
    def config(self) -> ModelConfig:
        return self._config

    @property
    def model(self) -> str:
        return self._config.model

    @property
    def llm_service(self) -> BaseLLMService:
        return self._llm_service

    @property
    def in_flight(self) -> bool:
        """현재 호출이 진행 중인지 여부"""
        return self._lock.locked()

    async def invoke(self, signature: Signature, inputs: StructuredMessage) -> StructuredMessage:
        """LLM을 한 번 호출하고 출력 필드를 파싱

        Args:
            signature: 입출력 스키마
            inputs: 입력 필드 값

        Returns:
            출력 필드만 담은 StructuredMessage

        Raises:
            LLMCallError: 제공자 호출 실패 (재시도하지 않음)
            SchemaViolation: 입력 누락 또는 출력 파싱 실패
        """
        messages = self._adapter.format(signature, inputs)

        async with self._lock:
            logger.debug(f"[{self._role}] {signature.name} 호출 (model={self.model})")
            try:
                response = await self._llm_service.generate(
                    messages, **self._config.request_kwargs()
                )
            except Exception as e:
                raise LLMCallError(
                    f"[{self._role}] {signature.name} LLM 호출 실패: {e}", role=self._role
                ) from e

        return self._adapter.parse(signature, response.content)

    def __repr__(self) -> str:
        return f"ModelBinding(role={self._role!r}, config={self._config!r})"
