"""LLM 서비스/어댑터/팩토리 테스트"""

import asyncio
from unittest.mock import patch

import pytest

from searchchat.errors import OutputParseError
from searchchat.models.messages import InputField, OutputField, Signature, StructuredMessage
from searchchat.services.llm.adapter import ChatAdapter
from searchchat.services.llm.base import Message
from searchchat.services.llm.dummy_llm import DummyLLM
from searchchat.services.llm.factory import build_bindings, create_binding, get_llm_service
from searchchat.services.llm.openai_llm import OpenAILLM
from searchchat.settings import Settings

SENTIMENT = Signature(
    name="SentimentAnalyzer",
    instructions="Predict the sentiment of the given text 'Positive', 'Negative', or 'Neutral'.",
    fields=(InputField("text"), OutputField("sentiment")),
)

QA = Signature(
    name="QA",
    fields=(InputField("question"), OutputField("answer"), OutputField("confidence")),
)


def test_dummy_llm_generate(dummy_llm_service):
    """더미 LLM 응답 생성 테스트"""
    messages = [
        Message(role="system", content="You are a helpful assistant."),
        Message(role="user", content="Hello!"),
    ]

    response = asyncio.run(dummy_llm_service.generate(messages))

    assert "Hello!" in response.content
    assert response.model == "dummy-model"
    assert response.metadata["provider"] == "dummy"
    assert dummy_llm_service.calls == [messages]


def test_dummy_llm_chat(dummy_llm_service):
    """더미 LLM 간단한 채팅 테스트"""
    response = asyncio.run(dummy_llm_service.chat("Tell me about cats", system_message="Be brief."))

    assert isinstance(response, str)
    assert len(response) > 0
    assert dummy_llm_service.calls[0][0].role == "system"


def test_dummy_llm_scripted_responses_and_errors():
    """응답 큐 순서대로 반환, 예외 항목은 raise"""
    llm = DummyLLM(responses=["first", RuntimeError("boom")])
    messages = [Message(role="user", content="hi")]

    assert asyncio.run(llm.generate(messages)).content == "first"
    with pytest.raises(RuntimeError, match="boom"):
        asyncio.run(llm.generate(messages))


def test_dummy_llm_default_fills_requested_fields():
    """기본 응답은 어댑터가 요청한 출력 필드를 모두 채움"""
    adapter = ChatAdapter()
    messages = adapter.format(QA, StructuredMessage.from_inputs(question="why?"))

    response = asyncio.run(DummyLLM().generate(messages))
    parsed = adapter.parse(QA, response.content)

    assert parsed.keys() == ["answer", "confidence"]


class TestChatAdapter:
    """ChatAdapter 테스트"""

    def test_format_describes_fields_and_objective(self):
        messages = ChatAdapter().format(
            SENTIMENT, StructuredMessage.from_inputs(text="Acme is a great company.")
        )

        assert [m.role for m in messages] == ["system", "user"]
        assert "1. `text` (str)" in messages[0].content
        assert "1. `sentiment` (str)" in messages[0].content
        assert "your objective is: Predict the sentiment" in messages[0].content
        assert "[[ ## text ## ]]\nAcme is a great company." in messages[1].content
        assert messages[1].content.endswith("`[[ ## completed ## ]]`.")

    def test_parse_marked_sections(self):
        text = "[[ ## answer ## ]]\n4\n\n[[ ## confidence ## ]]\nhigh\n\n[[ ## completed ## ]]"

        parsed = ChatAdapter().parse(QA, text)

        assert parsed.get("answer") == "4"
        assert parsed.get("confidence") == "high"
        assert parsed.input_keys == ()

    def test_parse_single_field_without_markers(self):
        """마커 없는 응답은 단일 출력 필드 전체 값으로 사용"""
        parsed = ChatAdapter().parse(SENTIMENT, "  Positive \n")
        assert parsed.get("sentiment") == "Positive"

    def test_parse_single_field_strips_completed_marker(self):
        """종료 마커만 있는 응답은 마커 이전 텍스트만 값으로 사용"""
        parsed = ChatAdapter().parse(SENTIMENT, "Positive\n\n[[ ## completed ## ]]\ntrailing")
        assert parsed.get("sentiment") == "Positive"

    def test_parse_missing_field_raises(self):
        with pytest.raises(OutputParseError) as exc_info:
            ChatAdapter().parse(QA, "[[ ## answer ## ]]\n4")
        assert exc_info.value.missing == ["confidence"]

    def test_parse_multi_field_without_markers_raises(self):
        with pytest.raises(OutputParseError):
            ChatAdapter().parse(QA, "just some text")


class TestLLMFactory:
    """LLM 팩토리 테스트"""

    def test_get_dummy_service(self):
        assert isinstance(get_llm_service("dummy"), DummyLLM)

    def test_get_openai_service(self):
        service = get_llm_service("openai", api_key="sk-test")
        assert isinstance(service, OpenAILLM)
        assert service.api_key == "sk-test"

    def test_default_provider_from_settings(self):
        with patch("searchchat.services.llm.factory.settings") as mock_settings:
            mock_settings.llm_provider = "dummy"
            assert isinstance(get_llm_service(), DummyLLM)

    def test_invalid_provider(self):
        with pytest.raises(ValueError, match="지원하지 않는 LLM 제공자"):
            get_llm_service("invalid")

    def test_create_binding_uses_injected_timeout(self):
        """주입된 Settings의 타임아웃이 제공자 클라이언트까지 전달됨"""
        config = Settings(_env_file=None, llm_provider="openai", openai_api_key="sk-test", llm_timeout_seconds=7.5)

        binding = create_binding("classifier", "gpt-4o-mini", 0.0, config)

        assert isinstance(binding.llm_service, OpenAILLM)
        assert binding.llm_service.timeout == 7.5

    def test_build_bindings_creates_distinct_roles(self):
        config = Settings(
            llm_provider="dummy",
            classifier_model="small-model",
            classifier_temperature=0.0,
            synthesis_model="large-model",
            synthesis_temperature=0.9,
        )

        bindings = build_bindings(config)

        classifier, synthesizer = bindings["classifier"], bindings["synthesizer"]
        assert classifier is not synthesizer
        assert classifier.llm_service is not synthesizer.llm_service
        assert (classifier.model, classifier.config.temperature) == ("small-model", 0.0)
        assert (synthesizer.model, synthesizer.config.temperature) == ("large-model", 0.9)
        assert synthesizer.config.max_tokens == config.llm_max_tokens
