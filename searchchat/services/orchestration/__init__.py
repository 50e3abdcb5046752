"""오케스트레이션 레이어

의도분류 → (검색) → 응답생성 파이프라인을 관리합니다.

구성:
- IntentClassifier: 사용자 입력이 검색이 필요한지 분류 (경량 모델)
- SearchTool: 검색어 추출 + 외부 검색
- ResponseSynthesizer: 히스토리/검색 결과 기반 최종 응답 생성
- Orchestrator: 단계 실행, 실패 시 폴백, 세션별 히스토리 관리
"""

from .chat_responder import ResponseSynthesizer
from .intent_classifier import IntentClassifier, normalize_intent
from .models import (
    ConversationHistory,
    ConversationTurn,
    Intent,
    IntentLabel,
    SearchResult,
    Speaker,
    TurnResult,
)
from .orchestrator import Orchestrator, build_orchestrator
from .predictor import Predictor
from .search_tool import SearchTool

__all__ = [
    "ConversationHistory",
    "ConversationTurn",
    "Intent",
    "IntentClassifier",
    "IntentLabel",
    "Orchestrator",
    "Predictor",
    "ResponseSynthesizer",
    "SearchResult",
    "SearchTool",
    "Speaker",
    "TurnResult",
    "build_orchestrator",
    "normalize_intent",
]
