"""
문자 분류기
코드 포인트를 문자 클래스로 분류하고 URL, 이메일, 해시태그 등 구조 토큰을 스캔
"""

import re
import unicodedata
from enum import Enum
from typing import List, Optional, Tuple
import logging

import jamo

from ..models import KoreanPos

logger = logging.getLogger(__name__)


class CharClass(Enum):
    """문자 클래스"""
    HANGUL_SYLLABLE = "HangulSyllable"
    HANGUL_JAMO = "HangulJamo"
    KOREAN_PARTICLE = "KoreanParticle"
    ALPHA = "Alpha"
    FOREIGN = "Foreign"
    NUMBER = "Number"
    SPACE = "Space"
    PUNCTUATION = "Punctuation"
    HASHTAG_MARKER = "HashtagMarker"
    SCREEN_NAME_MARKER = "ScreenNameMarker"
    CASHTAG_MARKER = "CashTagMarker"
    URL_FRAGMENT = "UrlFragment"
    EMAIL_FRAGMENT = "EmailFragment"
    OTHER = "Other"


MARKERS = {
    '#': CharClass.HASHTAG_MARKER,
    '@': CharClass.SCREEN_NAME_MARKER,
    '$': CharClass.CASHTAG_MARKER,
}

# 사전 분절 대상이 되는 문자 클래스
LETTER_CLASSES = frozenset(
    {CharClass.HANGUL_SYLLABLE, CharClass.ALPHA, CharClass.FOREIGN})


def classify(char: str) -> CharClass:
    """
    문자 하나를 분류

    Args:
        char: 길이 1 문자열

    Returns:
        CharClass
    """
    if char.isspace():
        return CharClass.SPACE
    if '가' <= char <= '힣':
        return CharClass.HANGUL_SYLLABLE
    if jamo.is_hcj(char):
        return CharClass.KOREAN_PARTICLE
    if jamo.is_jamo(char):
        return CharClass.HANGUL_JAMO
    if char in MARKERS:
        return MARKERS[char]
    if char.isdecimal():
        return CharClass.NUMBER
    if char.isalpha():
        # 라틴 문자 (기본 + 확장 라틴, 전각 영문 포함)
        if ord(char) < 0x0250 or 'Ａ' <= char <= 'ｚ':
            return CharClass.ALPHA
        return CharClass.FOREIGN

    category = unicodedata.category(char)
    if category[0] in ('P', 'S'):
        return CharClass.PUNCTUATION
    return CharClass.OTHER


# ========== 구조 토큰 스캐너 ==========

URL_RE = re.compile(
    r"(?:https?://|www\.)[A-Za-z0-9\-._~:/?#\[\]@!$&'*+,;=%]*[A-Za-z0-9\-_~/#=%&+]"
    r"|[A-Za-z0-9][A-Za-z0-9\-]*(?:\.[A-Za-z0-9\-]+)*\.(?:com|net|org|kr|io|me|ly)"
    r"(?![A-Za-z0-9])(?:/[A-Za-z0-9\-._~/?#=%&+]*[A-Za-z0-9\-_~/#=%&+])?")

EMAIL_RE = re.compile(
    r"[A-Za-z0-9][A-Za-z0-9._%+\-]*@[A-Za-z0-9\-]+(?:\.[A-Za-z0-9\-]+)*\.[A-Za-z]{2,}")

SCREEN_NAME_RE = re.compile(r"@[A-Za-z0-9_]{1,20}")

HASHTAG_RE = re.compile(r"#\w*[^\W\d_]\w*")

CASHTAG_RE = re.compile(r"\$[A-Za-z]{1,6}(?:[._][A-Za-z]{1,2})?(?![A-Za-z0-9])")

# 숫자 + 한국어 수 단위 / 단위 명사
NUMBER_RE = re.compile(
    r"\$?[0-9]+(?:,[0-9]{3})*(?:[.:/\-~][0-9]+)*"
    r"(?:[천만억조]+)?"
    r"(?:%|원|달러|위안|엔|유로|개월|년|월|일|시간|시|분|초|회|개|명|번|살|세|층|kg|km|cm|mm)?")

# (패턴, 품사, 바로 앞 문자가 영숫자이면 안 되는지)
_SCANNERS = (
    (EMAIL_RE, KoreanPos.EMAIL, True),
    (URL_RE, KoreanPos.URL, True),
    (SCREEN_NAME_RE, KoreanPos.SCREEN_NAME, True),
    (HASHTAG_RE, KoreanPos.HASHTAG, True),
    (CASHTAG_RE, KoreanPos.CASH_TAG, True),
    (NUMBER_RE, KoreanPos.NUMBER, False),
)

_SCAN_START = re.compile(r"[A-Za-z0-9#@$]")


def _word_char_before(text: str, offset: int) -> bool:
    if offset == 0:
        return False
    prev = text[offset - 1]
    return prev.isalnum() or prev in "._-"


def scan_structure(text: str, offset: int) -> Optional[Tuple[KoreanPos, int]]:
    """
    offset 위치에서 시작하는 구조 토큰 스캔

    Args:
        text: 대상 텍스트
        offset: 시작 위치

    Returns:
        (품사, 길이) 또는 None
    """
    if offset >= len(text) or not _SCAN_START.match(text, offset):
        return None

    inside_word = _word_char_before(text, offset)
    for pattern, pos, needs_boundary in _SCANNERS:
        if needs_boundary and inside_word:
            continue
        match = pattern.match(text, offset)
        if match:
            return pos, match.end() - offset

    return None


def classify_text(text: str) -> List[CharClass]:
    """
    문자별 클래스 목록 (URL / 이메일에 속한 문자는 FRAGMENT 클래스)

    Args:
        text: 대상 텍스트

    Returns:
        CharClass 리스트 (len(text)와 같은 길이)
    """
    classes = [classify(char) for char in text]

    offset = 0
    while offset < len(text):
        found = scan_structure(text, offset)
        if found is None:
            offset += 1
            continue
        pos, length = found
        if pos is KoreanPos.URL:
            classes[offset:offset + length] = [CharClass.URL_FRAGMENT] * length
        elif pos is KoreanPos.EMAIL:
            classes[offset:offset + length] = [CharClass.EMAIL_FRAGMENT] * length
        offset += length

    return classes
