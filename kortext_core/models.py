"""
KorText 데이터 모델
시스템 전체에서 사용되는 데이터 구조 정의
"""
from dataclasses import dataclass, field, asdict
from typing import List, Dict, Any, Optional, Tuple
from enum import Enum
import json

from .config import settings
from .utils.error_handler import InvalidPosError

# ========== 열거형 정의 ==========


class KoreanPos(Enum):
    """품사 태그 (선언 순서가 동점 처리 순서)"""
    NOUN = "Noun"
    PROPER_NOUN = "ProperNoun"
    VERB = "Verb"
    ADJECTIVE = "Adjective"
    ADVERB = "Adverb"
    DETERMINER = "Determiner"
    EXCLAMATION = "Exclamation"
    JOSA = "Josa"
    EOMI = "Eomi"
    PRE_EOMI = "PreEomi"
    CONJUNCTION = "Conjunction"
    MODIFIER = "Modifier"
    VERB_PREFIX = "VerbPrefix"
    SUFFIX = "Suffix"
    UNKNOWN = "Unknown"

    # 문자 클래스 기반 품사
    KOREAN = "Korean"
    FOREIGN = "Foreign"
    NUMBER = "Number"
    KOREAN_PARTICLE = "KoreanParticle"
    ALPHA = "Alpha"
    PUNCTUATION = "Punctuation"
    HASHTAG = "Hashtag"
    SCREEN_NAME = "ScreenName"
    EMAIL = "Email"
    URL = "URL"
    CASH_TAG = "CashTag"
    SPACE = "Space"

    @classmethod
    def parse(cls, value: Any) -> 'KoreanPos':
        """
        경계에서 품사 값을 검증하여 변환

        Args:
            value: KoreanPos, 태그 값("Noun") 또는 이름("NOUN")

        Returns:
            KoreanPos

        Raises:
            InvalidPosError: 알 수 없는 품사
        """
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            text = value.strip()
            member = _POS_BY_VALUE.get(text) or _POS_BY_KEY.get(
                text.upper().replace("_", ""))
            if member is not None:
                return member
        raise InvalidPosError(value)

    @property
    def rank(self) -> int:
        """선언 순서"""
        return _POS_RANK[self]


_POS_BY_VALUE = {pos.value: pos for pos in KoreanPos}
_POS_BY_KEY = {}
for _pos in KoreanPos:
    _POS_BY_KEY[_pos.name.replace("_", "")] = _pos
    _POS_BY_KEY[_pos.value.upper()] = _pos
_POS_RANK = {pos: index for index, pos in enumerate(KoreanPos)}

# 체언 / 용언 분류
NOMINAL_POS = frozenset({
    KoreanPos.NOUN, KoreanPos.PROPER_NOUN, KoreanPos.ALPHA,
    KoreanPos.NUMBER, KoreanPos.FOREIGN
})
PREDICATE_POS = frozenset({KoreanPos.VERB, KoreanPos.ADJECTIVE})
ENDING_POS = frozenset({KoreanPos.EOMI, KoreanPos.PRE_EOMI})

# 고정 문법 스캐너로 결정되는 품사 (사전 판단 대상 아님)
STRUCTURAL_POS = frozenset({
    KoreanPos.SPACE, KoreanPos.NUMBER, KoreanPos.PUNCTUATION,
    KoreanPos.URL, KoreanPos.EMAIL, KoreanPos.HASHTAG,
    KoreanPos.SCREEN_NAME, KoreanPos.CASH_TAG, KoreanPos.KOREAN_PARTICLE
})

# ========== 토큰 ==========


@dataclass(frozen=True)
class KoreanToken:
    """형태소 토큰 (offset/length는 정규화된 텍스트 기준)"""
    text: str
    pos: KoreanPos
    offset: int
    length: int
    unknown: bool = False
    stem: Optional[str] = None

    @property
    def end(self) -> int:
        return self.offset + self.length

    def __str__(self) -> str:
        marker = "*" if self.unknown else ""
        if self.stem:
            return f"{self.text}{marker}({self.pos.value}: {self.stem})"
        return f"{self.text}{marker}({self.pos.value})"

    def to_dict(self) -> Dict[str, Any]:
        return {
            'text': self.text,
            'pos': self.pos.value,
            'offset': self.offset,
            'length': self.length,
            'unknown': self.unknown,
            'stem': self.stem
        }

    def to_json(self) -> str:
        return json.dumps(self.to_dict(), ensure_ascii=False)


# ========== 문장 ==========


@dataclass(frozen=True)
class Sentence:
    """문장 구간 (원문 기준, end 미포함)"""
    text: str
    start: int
    end: int

    @property
    def length(self) -> int:
        return self.end - self.start

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


# ========== 구 ==========


@dataclass(frozen=True)
class KoreanPhrase:
    """명사구 / 동사구"""
    text: str
    offset: int
    length: int
    pos: KoreanPos
    is_compound: bool = False
    tokens: Tuple[KoreanToken, ...] = field(default=(), compare=False)

    @property
    def end(self) -> int:
        return self.offset + self.length

    def __str__(self) -> str:
        return f"{self.text}({self.pos.value}: {self.offset}, {self.length})"

    def to_dict(self) -> Dict[str, Any]:
        return {
            'text': self.text,
            'offset': self.offset,
            'length': self.length,
            'pos': self.pos.value,
            'is_compound': self.is_compound,
            'tokens': [token.to_dict() for token in self.tokens]
        }

    def to_json(self) -> str:
        return json.dumps(self.to_dict(), ensure_ascii=False)


# ========== 정규화 결과 ==========


@dataclass
class NormalizedText:
    """정규화된 텍스트와 원문 위치 매핑"""
    text: str
    # offsets[i]: 정규화 문자 i의 원문 위치, offsets[len(text)] == len(원문)
    offsets: List[int] = field(default_factory=list)

    def __post_init__(self):
        if not self.offsets:
            self.offsets = list(range(len(self.text) + 1))

    def to_original(self, offset: int) -> int:
        """정규화 위치를 원문 위치로 변환"""
        if offset < 0 or offset > len(self.text):
            raise IndexError(f"offset 범위 초과: {offset}")
        return self.offsets[offset]

    def original_span(self, offset: int, length: int) -> Tuple[int, int]:
        """정규화 구간 [offset, offset+length)에 대응하는 원문 구간"""
        start = self.to_original(offset)
        if length <= 0:
            return start, start
        # 마지막 문자 바로 뒤까지 (삭제된 원문 문자는 다음 문자에 귀속)
        end = self.to_original(offset + length)
        return start, end

    def __str__(self) -> str:
        return self.text

    def to_dict(self) -> Dict[str, Any]:
        return {'text': self.text, 'offsets': list(self.offsets)}


# ========== 설정 ==========


@dataclass
class TokenizerConfig:
    """토크나이저 옵션"""
    keep_space: bool = True
    stem: bool = True


@dataclass
class PhraseExtractorConfig:
    """구 추출 옵션"""
    filter_spam: bool = False
    include_hashtags: bool = True
    max_tokens: int = settings.PHRASE_MAX_TOKENS
