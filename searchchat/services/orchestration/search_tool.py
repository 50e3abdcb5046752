"""검색 도구 (SearchTool)

1) 사용자 입력에서 간결한 검색어를 LLM으로 추출하고
2) 외부 검색 함수에 그 검색어를 넘겨 결과를 받아옵니다.

어느 단계가 실패하든 호출자에게는 RetrievalError 하나로 보고합니다.
"""

import logging
from typing import TYPE_CHECKING

from searchchat.errors import LLMCallError, RetrievalError
from searchchat.models.messages import InputField, OutputField, Signature

from .models import SearchResult
from .predictor import Predictor

if TYPE_CHECKING:
    from searchchat.services.llm.binding import ModelBinding
    from searchchat.services.retrieval.base import BaseRetriever

logger = logging.getLogger(__name__)


# 검색어 추출용 스키마
QUERY_EXTRACTION_SIGNATURE = Signature(
    name="SearchQueryExtraction",
    instructions=(
        "Rewrite the user's message as a short web search query. "
        "Keep only the key entities and terms, no punctuation or explanation."
    ),
    fields=(
        InputField("message", "the user's message"),
        OutputField("query", "a concise search query"),
    ),
)


class SearchTool:
    """검색어 추출 + 외부 검색 2단계 도구"""

    def __init__(self, binding: "ModelBinding", retriever: "BaseRetriever"):
        """
        Args:
            binding: 검색어 추출에 사용할 모델 바인딩 (보통 의도분류 역할과 공유)
            retriever: 외부 검색 기능
        """
        self.query_extractor = Predictor(QUERY_EXTRACTION_SIGNATURE, binding)
        self.retriever = retriever

    async def extract_query(self, message: str) -> str:
        """사용자 입력에서 검색어 추출

        Raises:
            RetrievalError: LLM 호출 실패 (stage="query_extraction")
        """
        try:
            output = await self.query_extractor(message=message)
        except LLMCallError as e:
            raise RetrievalError(f"검색어 추출 실패: {e}", stage="query_extraction") from e

        query = output.get("query").strip()
        if not query:
            # 추출 결과가 비면 원문으로 검색
            logger.debug("검색어 추출 결과가 비어 있어 원문을 사용합니다")
            return message
        return query

    async def run(self, message: str) -> SearchResult:
        """검색 실행

        Args:
            message: 사용자 입력 원문

        Returns:
            SearchResult (추출된 검색어, 검색 결과)

        Raises:
            RetrievalError: 검색어 추출 또는 검색 함수 실패
        """
        query = await self.extract_query(message)

        try:
            content = await self.retriever.retrieve(query)
        except Exception as e:
            raise RetrievalError(f"검색 실패 (query={query!r}): {e}", stage="retrieval") from e

        if not isinstance(content, str):
            raise RetrievalError(
                f"검색 결과 타입 오류: {type(content).__name__}", stage="retrieval"
            )

        return SearchResult(query=query, content=content)
