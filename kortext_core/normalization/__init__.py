"""
한국어 정규화 모듈
"""

from .korean_normalizer import (KoreanNormalizer, collapse_repeats,
                                collapse_elongation)

__all__ = ["KoreanNormalizer", "collapse_repeats", "collapse_elongation"]
