"""
문장 처리 모듈
문장 분리, 역토큰화
"""

from .sentence_splitter import KoreanSentenceSplitter
from .detokenizer import KoreanDetokenizer

__all__ = ["KoreanSentenceSplitter", "KoreanDetokenizer"]
