"""모의 검색기 (MockSearchRetriever)

실제 검색 API 대신 키워드 매칭된 고정 스니펫을 돌려주는 데모용 검색기.
"""

import logging

from .base import BaseRetriever

logger = logging.getLogger(__name__)


# 키워드 → 스니펫
DEFAULT_SNIPPETS: dict[str, str] = {
    "president": "Trump is currently the president in 2025",
    "weather": "Today's forecast: partly cloudy, high of 21°C, low of 12°C.",
    "python": "The latest stable Python release is Python 3.13.",
}

DEFAULT_FALLBACK = "No relevant results found."


class MockSearchRetriever(BaseRetriever):
    """키워드 기반 모의 검색"""

    def __init__(
        self,
        snippets: dict[str, str] | None = None,
        fallback: str = DEFAULT_FALLBACK,
    ):
        """
        Args:
            snippets: 키워드(소문자) → 결과 텍스트 매핑 (None이면 기본값)
            fallback: 매칭되는 키워드가 없을 때 결과
        """
        self.snippets = DEFAULT_SNIPPETS if snippets is None else snippets
        self.fallback = fallback

    async def retrieve(self, query: str) -> str:
        query_lower = query.lower()
        hits = [text for keyword, text in self.snippets.items() if keyword in query_lower]
        logger.debug(f"모의 검색: query={query!r}, hits={len(hits)}")
        if not hits:
            return self.fallback
        return "\n".join(hits)
