"""
한글 문자 처리 모듈
"""

from .char_classifier import (CharClass, classify, classify_text,
                              scan_structure, LETTER_CLASSES)
from .hangul_utils import (decompose_syllable, compose_syllable, has_coda,
                           replace_coda, replace_vowel, is_hangul_syllable)

__all__ = [
    "CharClass",
    "classify",
    "classify_text",
    "scan_structure",
    "LETTER_CLASSES",
    "decompose_syllable",
    "compose_syllable",
    "has_coda",
    "replace_coda",
    "replace_vowel",
    "is_hangul_syllable",
]
