"""searchchat - 의도분류 기반 검색/대화 오케스트레이션"""

__version__ = "0.1.0"
