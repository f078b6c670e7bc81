"""
한글 음절 분해 / 조합 유틸리티
"""

from functools import lru_cache
from typing import Tuple
import logging

import jamo

logger = logging.getLogger(__name__)

# 한국어 자모 (호환 자모, 유니코드 배열 순서)
INITIALS = [
    'ㄱ', 'ㄲ', 'ㄴ', 'ㄷ', 'ㄸ', 'ㄹ', 'ㅁ', 'ㅂ', 'ㅃ', 'ㅅ', 'ㅆ', 'ㅇ', 'ㅈ', 'ㅉ',
    'ㅊ', 'ㅋ', 'ㅌ', 'ㅍ', 'ㅎ'
]

MEDIALS = [
    'ㅏ', 'ㅐ', 'ㅑ', 'ㅒ', 'ㅓ', 'ㅔ', 'ㅕ', 'ㅖ', 'ㅗ', 'ㅘ', 'ㅙ', 'ㅚ', 'ㅛ', 'ㅜ',
    'ㅝ', 'ㅞ', 'ㅟ', 'ㅠ', 'ㅡ', 'ㅢ', 'ㅣ'
]

FINALS = [
    '', 'ㄱ', 'ㄲ', 'ㄳ', 'ㄴ', 'ㄵ', 'ㄶ', 'ㄷ', 'ㄹ', 'ㄺ', 'ㄻ', 'ㄼ', 'ㄽ', 'ㄾ',
    'ㄿ', 'ㅀ', 'ㅁ', 'ㅂ', 'ㅄ', 'ㅅ', 'ㅆ', 'ㅇ', 'ㅈ', 'ㅊ', 'ㅋ', 'ㅌ', 'ㅍ', 'ㅎ'
]

_INITIAL_INDEX = {c: i for i, c in enumerate(INITIALS)}
_MEDIAL_INDEX = {c: i for i, c in enumerate(MEDIALS)}
_FINAL_INDEX = {c: i for i, c in enumerate(FINALS)}

SYLLABLE_BASE = 0xAC00


def is_hangul_syllable(char: str) -> bool:
    """완성형 한글 음절 여부"""
    return len(char) == 1 and '가' <= char <= '힣'


@lru_cache(maxsize=4096)
def decompose_syllable(syllable: str) -> Tuple[str, str, str]:
    """
    한글 음절을 자모로 분해

    Args:
        syllable: 한글 음절

    Returns:
        (초성, 중성, 종성) 호환 자모, 한글 음절이 아니면 ('', '', '')
    """
    if not is_hangul_syllable(syllable):
        return '', '', ''

    jamos = jamo.j2hcj(jamo.h2j(syllable))
    initial = jamos[0] if len(jamos) > 0 else ''
    medial = jamos[1] if len(jamos) > 1 else ''
    final = jamos[2] if len(jamos) > 2 else ''

    return initial, medial, final


def compose_syllable(initial: str, medial: str, final: str = '') -> str:
    """
    자모를 한글 음절로 조합

    Args:
        initial: 초성
        medial: 중성
        final: 종성

    Returns:
        한글 음절 (조합할 수 없으면 빈 문자열)
    """
    try:
        initial_index = _INITIAL_INDEX[initial]
        medial_index = _MEDIAL_INDEX[medial]
        final_index = _FINAL_INDEX[final or '']
    except KeyError:
        return ''

    code = SYLLABLE_BASE + initial_index * 21 * 28 + medial_index * 28 + final_index
    return chr(code)


def coda_of(syllable: str) -> str:
    return decompose_syllable(syllable)[2]


def has_coda(syllable: str) -> bool:
    """받침 유무"""
    return bool(coda_of(syllable))


def replace_coda(syllable: str, coda: str = '') -> str:
    """받침 교체 (coda가 빈 문자열이면 받침 제거)"""
    initial, medial, _ = decompose_syllable(syllable)
    if not initial:
        return syllable
    return compose_syllable(initial, medial, coda) or syllable


def replace_vowel(syllable: str, vowel: str) -> str:
    """모음 교체"""
    initial, _, final = decompose_syllable(syllable)
    if not initial:
        return syllable
    return compose_syllable(initial, vowel, final) or syllable


def add_coda(syllable: str, coda: str) -> str:
    """받침 없는 음절에 받침 추가 (받침이 있으면 빈 문자열)"""
    initial, medial, final = decompose_syllable(syllable)
    if not initial or final:
        return ''
    return compose_syllable(initial, medial, coda)
