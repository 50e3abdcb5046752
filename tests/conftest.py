"""테스트 픽스처 및 설정"""

import pytest

from searchchat.services.llm.binding import ModelBinding, ModelConfig
from searchchat.services.llm.dummy_llm import DummyLLM
from searchchat.services.orchestration import Orchestrator
from searchchat.services.retrieval.base import BaseRetriever


class SpyRetriever(BaseRetriever):
    """호출 기록용 검색기"""

    def __init__(self, result: str = "search result", error: Exception | None = None):
        self.result = result
        self.error = error
        self.queries: list[str] = []

    async def retrieve(self, query: str) -> str:
        self.queries.append(query)
        if self.error is not None:
            raise self.error
        return self.result


def make_binding(role: str, llm=None, model: str = "dummy-model", temperature: float = 0.0):
    return ModelBinding(
        role=role,
        config=ModelConfig(model=model, temperature=temperature),
        llm_service=llm if llm is not None else DummyLLM(),
    )


def spy_on_synthesizer(orchestrator: Orchestrator) -> list[dict]:
    """응답 생성기 입력을 기록하도록 감쌈"""
    calls: list[dict] = []
    original = orchestrator.synthesizer.generate

    async def generate(history, message, context=""):
        calls.append({"history": history.render(), "message": message, "context": context})
        return await original(history, message, context)

    orchestrator.synthesizer.generate = generate
    return calls


@pytest.fixture
def dummy_llm_service():
    """더미 LLM 서비스 픽스처"""
    return DummyLLM()


@pytest.fixture
def binding_factory():
    """ModelBinding 생성 함수 픽스처"""
    return make_binding


@pytest.fixture
def spy_retriever():
    """검색기 스파이 픽스처"""
    return SpyRetriever(result="Trump is currently the president in 2025")


@pytest.fixture
def build_orchestrator_with():
    """(분류 응답, 생성 응답, 검색기) → (Orchestrator, 분류 LLM, 생성 LLM)"""

    def _build(classifier_responses, synthesis_responses, retriever, turn_policy="queue", synth_delay=0.0):
        classifier_llm = DummyLLM(responses=classifier_responses)
        synth_llm = DummyLLM(responses=synthesis_responses, delay=synth_delay)
        orchestrator = Orchestrator.from_bindings(
            classifier_binding=make_binding("classifier", classifier_llm),
            synthesis_binding=make_binding("synthesizer", synth_llm, temperature=0.7),
            retriever=retriever,
            turn_policy=turn_policy,
        )
        return orchestrator, classifier_llm, synth_llm

    return _build
