"""
KorText Core 라이브러리
한국어 정규화, 형태소 분절, 문장 분리, 구 추출, 역토큰화 핵심 기능 통합
"""

# 모델
from .models import (KoreanPos, KoreanToken, KoreanPhrase, Sentence,
                     NormalizedText, TokenizerConfig, PhraseExtractorConfig)

# 사전
from .dictionary import KoreanDictionary, DictionarySnapshot

# 처리 모듈
from .normalization import KoreanNormalizer
from .tokenizer import KoreanTokenizer
from .sentence import KoreanSentenceSplitter, KoreanDetokenizer
from .phrase import KoreanPhraseExtractor

# 에러
from .utils import (KorTextError, InvalidPosError, MalformedInputError,
                    ConfigurationError)

# 통합 처리기
from .processor import (KoreanTextProcessor, get_default_processor, normalize,
                        tokenize, split_sentences, extract_phrases,
                        detokenize, add_words, remove_words)

__version__ = "1.0.0"
__author__ = "KorText Team"

__all__ = [
    # 모델
    "KoreanPos",
    "KoreanToken",
    "KoreanPhrase",
    "Sentence",
    "NormalizedText",
    "TokenizerConfig",
    "PhraseExtractorConfig",

    # 사전
    "KoreanDictionary",
    "DictionarySnapshot",

    # 처리 모듈
    "KoreanNormalizer",
    "KoreanTokenizer",
    "KoreanSentenceSplitter",
    "KoreanDetokenizer",
    "KoreanPhraseExtractor",

    # 에러
    "KorTextError",
    "InvalidPosError",
    "MalformedInputError",
    "ConfigurationError",

    # 통합 처리기
    "KoreanTextProcessor",
    "get_default_processor",
    "normalize",
    "tokenize",
    "split_sentences",
    "extract_phrases",
    "detokenize",
    "add_words",
    "remove_words",
]

# 모듈 초기화 시 로깅
import logging

logger = logging.getLogger(__name__)
logger.debug("KorText Core 라이브러리 초기화 완료")
