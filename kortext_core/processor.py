"""
한국어 텍스트 처리기
정규화, 토큰화, 문장 분리, 구 추출, 역토큰화를 하나의 사전 위에서 제공하는 통합 인터페이스

    processor = KoreanTextProcessor()
    text = processor.normalize("그랰ㅋㅋㅋㅋ 한국어 공부했어요")
    tokens = processor.tokenize(text)
    phrases = processor.extract_phrases(tokens)
"""

import threading
from typing import Iterable, List, Optional, Union

from .models import (KoreanPos, KoreanToken, KoreanPhrase, Sentence,
                     NormalizedText, TokenizerConfig, PhraseExtractorConfig)
from .dictionary import KoreanDictionary
from .normalization import KoreanNormalizer
from .tokenizer import KoreanTokenizer
from .sentence import KoreanSentenceSplitter, KoreanDetokenizer
from .phrase import KoreanPhraseExtractor
from .utils import get_logger, handle_errors, MalformedInputError

logger = get_logger(__name__)

WordsArg = Union[str, Iterable[str]]


class KoreanTextProcessor:
    """통합 한국어 텍스트 처리기"""

    def __init__(self,
                 dictionary: Optional[KoreanDictionary] = None,
                 tokenizer_config: Optional[TokenizerConfig] = None,
                 phrase_config: Optional[PhraseExtractorConfig] = None,
                 split_on_newline: Optional[bool] = None):
        """
        초기화

        Args:
            dictionary: 공유 사전 (None이면 기본 어휘집 로드)
            tokenizer_config: 토크나이저 기본 옵션
            phrase_config: 구 추출 기본 옵션
            split_on_newline: 줄바꿈을 문장 경계로 사용할지 (None이면 설정값)
        """
        if dictionary is None:
            dictionary = KoreanDictionary.load_default()
        self.dictionary = dictionary
        self.tokenizer_config = tokenizer_config or TokenizerConfig()

        # 모든 컴포넌트가 같은 사전을 참조
        self.normalizer = KoreanNormalizer(self.dictionary)
        self.tokenizer = KoreanTokenizer(self.dictionary)
        self.sentence_splitter = KoreanSentenceSplitter(split_on_newline)
        self.phrase_extractor = KoreanPhraseExtractor(phrase_config)
        self.detokenizer = KoreanDetokenizer(self.tokenizer)

        logger.info(f"KoreanTextProcessor 초기화 완료: {self.dictionary}")

    # ========== 텍스트 처리 ==========

    @handle_errors(context="normalize")
    def normalize(self, text: str) -> str:
        """구어체 / 인터넷체 정규화"""
        return self.normalizer.normalize(text)

    @handle_errors(context="normalize_with_offsets")
    def normalize_with_offsets(self, text: str) -> NormalizedText:
        """정규화 (원문 위치 매핑 포함)"""
        return self.normalizer.normalize_with_offsets(text)

    @handle_errors(context="tokenize")
    def tokenize(self,
                 text: str,
                 keep_space: Optional[bool] = None,
                 stem: Optional[bool] = None) -> List[KoreanToken]:
        """
        형태소 분절 및 품사 태깅

        Args:
            text: 정규화된 텍스트
            keep_space: Space 토큰 포함 여부 (None이면 설정값)
            stem: 용언 기본형 부여 여부 (None이면 설정값)

        Returns:
            KoreanToken 리스트
        """
        if keep_space is None:
            keep_space = self.tokenizer_config.keep_space
        if stem is None:
            stem = self.tokenizer_config.stem
        return self.tokenizer.tokenize(text, keep_space=keep_space, stem=stem)

    @handle_errors(context="tokenize_top_n")
    def tokenize_top_n(self,
                       text: str,
                       n: int = 3,
                       keep_space: Optional[bool] = None
                       ) -> List[List[List[KoreanToken]]]:
        """청크별 상위 n개 분절 후보"""
        if keep_space is None:
            keep_space = self.tokenizer_config.keep_space
        return self.tokenizer.tokenize_top_n(text,
                                             n,
                                             keep_space=keep_space,
                                             stem=self.tokenizer_config.stem)

    @handle_errors(context="split_sentences")
    def split_sentences(self, text: str) -> List[Sentence]:
        """문장 분리 (원문 기준 offset)"""
        return self.sentence_splitter.split(text)

    @handle_errors(context="extract_phrases")
    def extract_phrases(self,
                        tokens: Iterable[KoreanToken],
                        filter_spam: Optional[bool] = None,
                        include_hashtags: Optional[bool] = None
                        ) -> List[KoreanPhrase]:
        """명사구 / 동사구 추출 (옵션이 None이면 phrase_config 값)"""
        return self.phrase_extractor.extract(tokens,
                                             filter_spam=filter_spam,
                                             include_hashtags=include_hashtags)

    @handle_errors(context="detokenize")
    def detokenize(self, words: Iterable[str]) -> str:
        """단어 목록을 자연스러운 띄어쓰기로 결합"""
        return self.detokenizer.detokenize(words)

    # ========== 사전 관리 ==========

    @handle_errors(context="add_words")
    def add_words(self, pos: Union[KoreanPos, str], words: WordsArg) -> int:
        """
        사전에 단어 추가 (이후 모든 정규화 / 토큰화에 반영)

        Returns:
            새로 추가된 단어 수
        """
        return self.dictionary.add(pos, words)

    @handle_errors(context="remove_words")
    def remove_words(self, pos: Union[KoreanPos, str], words: WordsArg) -> int:
        """
        사전에서 단어 삭제

        Returns:
            삭제된 단어 수
        """
        return self.dictionary.remove(pos, words)

    def add_nouns(self, words: WordsArg) -> int:
        """명사 추가"""
        return self.add_words(KoreanPos.NOUN, words)

    # ========== 변환 ==========

    @staticmethod
    def tokens_to_strings(tokens: Iterable[KoreanToken],
                          keep_space: bool = False) -> List[str]:
        """토큰 목록을 표면형 문자열 목록으로 변환"""
        if tokens is None:
            raise MalformedInputError("tokens", tokens)
        return [
            token.text for token in tokens
            if keep_space or token.pos is not KoreanPos.SPACE
        ]

    def __repr__(self) -> str:
        return f"KoreanTextProcessor(dictionary={self.dictionary!r})"


# ========== 모듈 수준 함수 ==========

_default_processor: Optional[KoreanTextProcessor] = None
_default_lock = threading.Lock()


def get_default_processor() -> KoreanTextProcessor:
    """기본 처리기 (처음 호출될 때 기본 어휘집으로 생성)"""
    global _default_processor
    if _default_processor is None:
        with _default_lock:
            if _default_processor is None:
                _default_processor = KoreanTextProcessor()
    return _default_processor


def normalize(text: str) -> str:
    return get_default_processor().normalize(text)


def tokenize(text: str, keep_space: bool = True) -> List[KoreanToken]:
    return get_default_processor().tokenize(text, keep_space=keep_space)


def split_sentences(text: str) -> List[Sentence]:
    return get_default_processor().split_sentences(text)


def extract_phrases(tokens: Iterable[KoreanToken],
                    filter_spam: Optional[bool] = None,
                    include_hashtags: Optional[bool] = None
                    ) -> List[KoreanPhrase]:
    return get_default_processor().extract_phrases(tokens, filter_spam,
                                                   include_hashtags)


def detokenize(words: Iterable[str]) -> str:
    return get_default_processor().detokenize(words)


def add_words(pos: Union[KoreanPos, str], words: WordsArg) -> int:
    return get_default_processor().add_words(pos, words)


def remove_words(pos: Union[KoreanPos, str], words: WordsArg) -> int:
    return get_default_processor().remove_words(pos, words)
