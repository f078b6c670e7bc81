"""
한국어 사전 모듈
"""

from .korean_dictionary import (KoreanDictionary, DictionarySnapshot,
                                normalize_words)
from .conjugation import conjugate, conjugate_all, stem_kind
from .lexicon import LEXICON_FILES, load_spam_nouns

__all__ = [
    "KoreanDictionary",
    "DictionarySnapshot",
    "normalize_words",
    "conjugate",
    "conjugate_all",
    "stem_kind",
    "LEXICON_FILES",
    "load_spam_nouns",
]
