"""오케스트레이션 예외 계층

복구 가능한 단계 실패(ClassificationError, RetrievalError)와
턴 전체를 실패시키는 TurnError, 그리고 배선 버그를 뜻하는
SchemaViolation을 구분합니다.
"""


class SearchChatError(Exception):
    """searchchat 예외 기본 클래스"""


class LLMCallError(SearchChatError):
    """LLM 호출 실패 (전송/제공자 오류). 내부 재시도 없음."""

    def __init__(self, message: str, role: str | None = None):
        super().__init__(message)
        self.role = role


class SchemaViolation(SearchChatError):
    """스키마 계약 위반 (호출자 버그). 조용히 삼키지 말 것."""


class MissingInputFieldError(SchemaViolation):
    """필수 입력 필드 누락"""

    def __init__(self, signature: str, missing: list[str]):
        super().__init__(f"{signature}: 필수 입력 필드 누락 {missing}")
        self.signature = signature
        self.missing = missing


class OutputParseError(SchemaViolation):
    """모델 출력을 선언된 출력 필드로 파싱할 수 없음"""

    def __init__(self, signature: str, missing: list[str], raw: str = ""):
        super().__init__(f"{signature}: 출력 필드 파싱 실패 {missing}")
        self.signature = signature
        self.missing = missing
        self.raw = raw


class ClassificationError(SearchChatError):
    """의도 분류 실패"""


class RetrievalError(SearchChatError):
    """검색 도구 실패 (검색어 추출 또는 검색 함수)"""

    def __init__(self, message: str, stage: str):
        super().__init__(message)
        self.stage = stage


class TurnError(SearchChatError):
    """턴 처리 실패 (응답 생성 실패). 대화 히스토리는 갱신되지 않음."""

    def __init__(self, message: str, session_id: str | None = None):
        super().__init__(message)
        self.session_id = session_id


class SessionNotFoundError(SearchChatError):
    """존재하지 않거나 종료된 세션"""


class SessionBusyError(SearchChatError):
    """세션에서 이미 다른 턴이 처리 중 (reject 정책)"""
