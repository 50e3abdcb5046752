"""오케스트레이터 (Orchestrator)

의도분류 → (검색) → 응답생성 파이프라인과 세션별 대화 히스토리를 관리합니다.

단계 흐름: Received → Classifying → {Searching | 생략} → Synthesizing → Done
- 분류 실패: 검색 없이 응답 생성으로 진행
- 검색 실패: 빈 컨텍스트로 응답 생성 진행 (경고 로그)
- 응답 생성 실패: 턴 전체 실패 (TurnError), 히스토리 변경 없음

한 턴의 단계는 항상 순차 실행되며, 세션당 동시에 하나의 턴만 처리합니다.
"""

import asyncio
import logging
import uuid
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Literal

from searchchat.errors import (
    ClassificationError,
    LLMCallError,
    RetrievalError,
    SessionBusyError,
    SessionNotFoundError,
    TurnError,
)
from searchchat.services.llm.factory import CLASSIFIER_ROLE, SYNTHESIZER_ROLE, build_bindings
from searchchat.settings import Settings, settings

from .chat_responder import ResponseSynthesizer
from .intent_classifier import IntentClassifier
from .models import ConversationHistory, ConversationTurn, IntentLabel, TurnResult
from .search_tool import SearchTool

if TYPE_CHECKING:
    from searchchat.services.llm.binding import ModelBinding
    from searchchat.services.retrieval.base import BaseRetriever

logger = logging.getLogger(__name__)

TurnPolicy = Literal["queue", "reject"]


@dataclass
class _Session:
    history: ConversationHistory = field(default_factory=ConversationHistory)
    lock: asyncio.Lock = field(default_factory=asyncio.Lock)


class Orchestrator:
    """대화 오케스트레이터"""

    def __init__(
        self,
        classifier: IntentClassifier,
        search_tool: SearchTool,
        synthesizer: ResponseSynthesizer,
        turn_policy: TurnPolicy = "queue",
    ):
        """
        Args:
            classifier: 의도 분류기
            search_tool: 검색 도구
            synthesizer: 응답 생성기
            turn_policy: 같은 세션 동시 요청 정책 ("queue" 대기 | "reject" 거부)
        """
        if classifier.binding is synthesizer.binding:
            raise ValueError("의도분류와 응답생성은 서로 다른 ModelBinding을 사용해야 합니다")
        if turn_policy not in ("queue", "reject"):
            raise ValueError(f"지원하지 않는 턴 정책: {turn_policy}")

        self.classifier = classifier
        self.search_tool = search_tool
        self.synthesizer = synthesizer
        self.turn_policy = turn_policy
        self._sessions: dict[str, _Session] = {}

    @classmethod
    def from_bindings(
        cls,
        classifier_binding: "ModelBinding",
        synthesis_binding: "ModelBinding",
        retriever: "BaseRetriever",
        turn_policy: TurnPolicy = "queue",
    ) -> "Orchestrator":
        """바인딩과 검색기로 전체 컴포넌트 구성

        검색어 추출은 의도분류 바인딩을 공유합니다.
        """
        return cls(
            classifier=IntentClassifier(classifier_binding),
            search_tool=SearchTool(classifier_binding, retriever),
            synthesizer=ResponseSynthesizer(synthesis_binding),
            turn_policy=turn_policy,
        )

    # ------------------------------------------------------------------
    # 파이프라인
    # ------------------------------------------------------------------

    async def respond(
        self,
        message: str,
        history: ConversationHistory | None = None,
        session_id: str | None = None,
    ) -> TurnResult:
        """한 턴의 파이프라인 실행 (히스토리는 읽기만 함)

        Args:
            message: 사용자 입력
            history: 이번 턴에 사용할 히스토리 스냅샷
            session_id: 로그/에러용 세션 ID

        Returns:
            TurnResult

        Raises:
            TurnError: 응답 생성 실패
        """
        if history is None:
            history = ConversationHistory()
        notes: list[str] = []

        # 1. 의도 분류
        logger.debug(f"[{session_id}] Classifying")
        label = None
        try:
            intent = await self.classifier.classify(message)
            label = intent.label
            logger.info(f"[{session_id}] 의도: {label.value} (raw={intent.raw_response!r})")
        except ClassificationError as e:
            logger.warning(f"[{session_id}] 의도 분류 실패, 검색 없이 진행: {e}")
            notes.append(f"의도 분류 실패: {e}")

        # 2. 검색 (SEARCH 의도일 때만)
        search_query = None
        context = ""
        if label == IntentLabel.SEARCH:
            logger.debug(f"[{session_id}] Searching")
            try:
                result = await self.search_tool.run(message)
                search_query = result.query
                context = result.content
            except RetrievalError as e:
                logger.warning(f"[{session_id}] 검색 실패 ({e.stage}), 빈 컨텍스트로 진행: {e}")
                notes.append(f"검색 실패 ({e.stage}): {e}")

        # 3. 응답 생성 (폴백 없음)
        logger.debug(f"[{session_id}] Synthesizing")
        try:
            response = await self.synthesizer.generate(history, message, context)
        except LLMCallError as e:
            logger.error(f"[{session_id}] 응답 생성 실패: {e}")
            raise TurnError(f"응답 생성 실패: {e}", session_id=session_id) from e

        logger.debug(f"[{session_id}] Done")
        return TurnResult(
            response=response,
            intent=label,
            search_query=search_query,
            retrieved_context=context,
            notes=notes,
        )

    # ------------------------------------------------------------------
    # 세션
    # ------------------------------------------------------------------

    def create_session(self) -> str:
        """새 대화 세션 생성

        Returns:
            세션 ID
        """
        session_id = uuid.uuid4().hex
        self._sessions[session_id] = _Session()
        logger.info(f"세션 생성: {session_id}")
        return session_id

    def end_session(self, session_id: str) -> None:
        """세션 종료 (히스토리 폐기)"""
        if self._sessions.pop(session_id, None) is None:
            raise SessionNotFoundError(f"세션을 찾을 수 없습니다: {session_id}")
        logger.info(f"세션 종료: {session_id}")

    @property
    def active_sessions(self) -> list[str]:
        return list(self._sessions)

    def get_history(self, session_id: str) -> tuple[ConversationTurn, ...]:
        """세션의 대화 히스토리 (읽기 전용)"""
        return self._get_session(session_id).history.turns

    def _get_session(self, session_id: str) -> _Session:
        session = self._sessions.get(session_id)
        if session is None:
            raise SessionNotFoundError(f"세션을 찾을 수 없습니다: {session_id}")
        return session

    async def run_turn(self, session_id: str, message: str) -> TurnResult:
        """세션에서 한 턴 처리 후 히스토리 갱신

        같은 세션의 턴은 직렬화되며, reject 정책이면 처리 중인 세션에
        들어온 요청을 즉시 거부합니다.

        Raises:
            SessionNotFoundError: 세션 없음
            SessionBusyError: reject 정책에서 세션이 처리 중
            TurnError: 응답 생성 실패 (히스토리 변경 없음)
        """
        session = self._get_session(session_id)
        if self.turn_policy == "reject" and session.lock.locked():
            raise SessionBusyError(f"세션에서 이미 턴을 처리 중입니다: {session_id}")

        async with session.lock:
            # 대기 중에 세션이 종료됐으면 실행하지 않음
            if self._sessions.get(session_id) is not session:
                raise SessionNotFoundError(f"대기 중 세션이 종료되었습니다: {session_id}")
            result = await self.respond(
                message, session.history.snapshot(), session_id=session_id
            )
            if self._sessions.get(session_id) is session:
                session.history.append_exchange(message, result.response)
            else:
                logger.info(f"[{session_id}] 처리 중 세션이 종료되어 히스토리를 기록하지 않습니다")

        logger.info(f"[{session_id}] 턴 완료 (history={len(session.history)})")
        return result

    async def process_turn(self, session_id: str, message: str) -> str:
        """세션에서 한 턴 처리 후 응답 텍스트 반환"""
        result = await self.run_turn(session_id, message)
        return result.response


def build_orchestrator(
    retriever: "BaseRetriever",
    config: Settings | None = None,
) -> Orchestrator:
    """설정에서 역할별 바인딩을 만들어 Orchestrator 구성"""
    config = config or settings
    bindings = build_bindings(config)
    return Orchestrator.from_bindings(
        classifier_binding=bindings[CLASSIFIER_ROLE],
        synthesis_binding=bindings[SYNTHESIZER_ROLE],
        retriever=retriever,
        turn_policy=config.concurrent_turn_policy,
    )
