"""오케스트레이션 데이터 모델"""

from dataclasses import dataclass, field
from enum import Enum


class IntentLabel(Enum):
    """사용자 의도 유형"""

    SEARCH = "search"  # 외부 검색이 필요한 질문
    CHAT = "chat"  # 일반 대화 (검색 불필요)


@dataclass
class Intent:
    """의도 분류 결과"""

    label: IntentLabel
    raw_response: str | None = None  # LLM 원본 응답 (디버깅용)

    @property
    def requires_search(self) -> bool:
        """검색이 필요한 의도인지 여부"""
        return self.label == IntentLabel.SEARCH


class Speaker(Enum):
    """발화자"""

    USER = "User"
    ASSISTANT = "Assistant"


@dataclass(frozen=True)
class ConversationTurn:
    """대화 한 줄 (발화자 + 텍스트)"""

    speaker: Speaker
    text: str

    def render(self) -> str:
        return f"{self.speaker.value}: {self.text}"


class ConversationHistory:
    """세션 하나의 대화 기록 (추가 전용)

    완료된 교환(User → Assistant)만 기록되며, 응답 생성기에 넘길 때만
    텍스트로 직렬화합니다.
    """

    def __init__(self):
        self._turns: list[ConversationTurn] = []

    @property
    def turns(self) -> tuple[ConversationTurn, ...]:
        return tuple(self._turns)

    def append_exchange(self, user_text: str, assistant_text: str) -> None:
        """완료된 교환 한 쌍을 추가"""
        self._turns.append(ConversationTurn(Speaker.USER, user_text))
        self._turns.append(ConversationTurn(Speaker.ASSISTANT, assistant_text))

    def snapshot(self) -> "ConversationHistory":
        """현재 시점의 복사본 (턴 처리 중 읽기 전용으로 사용)"""
        copy = ConversationHistory()
        copy._turns = list(self._turns)
        return copy

    def render(self) -> str:
        """한 줄에 한 턴씩 "Speaker: text" 형식으로 직렬화"""
        return "\n".join(turn.render() for turn in self._turns)

    def __len__(self) -> int:
        return len(self._turns)

    def __iter__(self):
        return iter(self._turns)


@dataclass
class SearchResult:
    """검색 도구 결과"""

    query: str  # 추출된 검색어
    content: str  # 검색 결과 텍스트


@dataclass
class TurnResult:
    """턴 처리 결과

    성능 저하(검색 생략/실패) 여부와 무관하게 항상 같은 형태입니다.
    """

    response: str
    intent: IntentLabel | None = None  # 분류 실패 시 None
    search_query: str | None = None
    retrieved_context: str = ""
    notes: list[str] = field(default_factory=list)  # 비치명적 실패 메모
