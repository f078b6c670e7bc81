"""
구 추출 모듈
"""

from .phrase_extractor import KoreanPhraseExtractor, PhraseState, build_phrase

__all__ = ["KoreanPhraseExtractor", "PhraseState", "build_phrase"]
