"""검색 함수 기본 인터페이스

검색 도구가 호출하는 외부 검색 기능의 계약: 텍스트 질의 → 텍스트 결과.
느릴 수 있고 실패할 수 있습니다 (타임아웃은 호출자 책임).
"""

import asyncio
import functools
import inspect
from abc import ABC, abstractmethod
from typing import Awaitable, Callable, Union

RetrieveFunc = Callable[[str], Union[str, Awaitable[str]]]


class BaseRetriever(ABC):
    """검색 기능 기본 추상 클래스"""

    @abstractmethod
    async def retrieve(self, query: str) -> str:
        """질의에 대한 검색 결과 텍스트 반환

        Args:
            query: 검색어

        Returns:
            검색 결과 텍스트
        """
        pass


class FunctionRetriever(BaseRetriever):
    """일반 함수/코루틴 함수를 검색기로 감싸는 어댑터

    동기 함수는 이벤트 루프를 막지 않도록 기본 executor에서 실행합니다.
    """

    def __init__(self, func: RetrieveFunc):
        self.func = func

    async def retrieve(self, query: str) -> str:
        if inspect.iscoroutinefunction(self.func):
            return await self.func(query)

        loop = asyncio.get_running_loop()
        result = await loop.run_in_executor(None, functools.partial(self.func, query))
        if inspect.isawaitable(result):
            result = await result
        return result
