"""검색 기능 레이어"""

from .base import BaseRetriever, FunctionRetriever, RetrieveFunc
from .mock_search import MockSearchRetriever

__all__ = [
    "BaseRetriever",
    "FunctionRetriever",
    "MockSearchRetriever",
    "RetrieveFunc",
]
