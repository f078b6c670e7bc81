"""
한국어 정규화기
구어체 / 인터넷체 표기를 토크나이저가 분절하기 쉬운 형태로 변환

    그랰ㅋㅋㅋㅋ -> 그래ㅋㅋ
    좋아아아아   -> 좋아
    하겟다       -> 하겠다
    됬어         -> 됐어

모든 단계는 (문자, 원문 위치) 목록 위에서 동작하므로 정규화 결과의 각 문자는
원문 위치로 되돌릴 수 있다.
"""

from typing import List, Optional, Tuple
import logging

from ..config import settings
from ..models import NormalizedText
from ..dictionary.korean_dictionary import KoreanDictionary, DictionarySnapshot
from ..hangul.char_classifier import CharClass, classify
from ..hangul.hangul_utils import (decompose_syllable, compose_syllable,
                                   replace_coda, replace_vowel,
                                   is_hangul_syllable)
from ..utils.error_handler import ensure_text
from ..utils.logger import log_execution_time

logger = logging.getLogger(__name__)

# (문자, 원문 위치)
Char = Tuple[str, int]

# 반복 축약 대상 웃음 음절
LAUGHTER_SYLLABLES = frozenset('하히호흐헤후크키캬켜푸')

# 발음이 비슷해 혼동되는 모음 (틀린 표기 -> 바른 표기 후보), 시도 순서대로
VOWEL_CONFUSIONS = (
    ('ㅚ', 'ㅙ'),
    ('ㅙ', 'ㅚ'),
    ('ㅞ', 'ㅙ'),
    ('ㅐ', 'ㅔ'),
    ('ㅔ', 'ㅐ'),
    ('ㅒ', 'ㅐ'),
    ('ㅖ', 'ㅔ'),
    ('ㅢ', 'ㅣ'),
)

# 받침 혼동 (빈 문자열은 받침 제거: 했어용 -> 했어요, 했당 -> 했다)
CODA_CONFUSIONS = (
    ('ㅅ', 'ㅆ'),
    ('ㅆ', 'ㅅ'),
    ('ㄶ', 'ㄴ'),
    ('ㄵ', 'ㄴ'),
    ('ㅀ', 'ㄹ'),
    ('ㄷ', 'ㅅ'),
    ('ㅇ', ''),
)

MAX_PASSES = 4


def _text_of(chars: List[Char]) -> str:
    return ''.join(char for char, _ in chars)


def _hangul_runs(chars: List[Char]) -> List[Tuple[int, int]]:
    """완성형 한글 음절이 연속된 구간 [start, end) 목록"""
    runs = []
    start = None
    for index, (char, _) in enumerate(chars):
        if is_hangul_syllable(char):
            if start is None:
                start = index
        elif start is not None:
            runs.append((start, index))
            start = None
    if start is not None:
        runs.append((start, len(chars)))
    return runs


def collapse_repeats(chars: List[Char]) -> List[Char]:
    """
    감정 표현 반복 축약 (ㅋㅋㅋㅋ -> ㅋㅋ, 하하하하 -> 하하)

    같은 한글 호환 자모나 웃음 음절이 세 번 이상 반복되면 앞의 두 개만 남긴다.
    """
    limit = settings.MAX_PARTICLE_REPEAT
    result: List[Char] = []
    index = 0
    while index < len(chars):
        char = chars[index][0]
        end = index + 1
        while end < len(chars) and chars[end][0] == char:
            end += 1

        repeatable = (classify(char) is CharClass.KOREAN_PARTICLE
                      or char in LAUGHTER_SYLLABLES)
        if repeatable and end - index > limit:
            result.extend(chars[index:index + limit])
        else:
            result.extend(chars[index:end])
        index = end
    return result


def collapse_elongation(chars: List[Char]) -> List[Char]:
    """
    늘여 쓴 모음 축약 (좋아아아아 -> 좋아, 좋아ㅏㅏ -> 좋아)

    받침 없는 음절 뒤에 같은 모음의 'ㅇ' 음절이 MIN_ELONGATION_RUN개 이상
    이어지면 모두 제거하고, 바로 뒤의 같은 호환 자모 모음도 제거한다.
    """
    result: List[Char] = []
    index = 0
    while index < len(chars):
        char = chars[index][0]
        result.append(chars[index])
        index += 1

        initial, vowel, coda = decompose_syllable(char)
        if not initial or coda:
            continue

        extension = compose_syllable('ㅇ', vowel)
        end = index
        while end < len(chars) and chars[end][0] == extension:
            end += 1
        if end - index >= settings.MIN_ELONGATION_RUN:
            index = end

        while index < len(chars) and chars[index][0] == vowel:
            index += 1
    return result


class KoreanNormalizer:
    """한국어 텍스트 정규화기"""

    def __init__(self, dictionary: KoreanDictionary):
        self.dictionary = dictionary

    @log_execution_time
    def normalize_with_offsets(self, text: str) -> NormalizedText:
        """
        텍스트 정규화 (원문 위치 매핑 포함)

        Args:
            text: 원문

        Returns:
            NormalizedText (offsets[i]는 정규화 문자 i의 원문 위치)
        """
        text = ensure_text(text)
        chars: List[Char] = [(char, index) for index, char in enumerate(text)]
        # 호출 하나는 사전 상태 하나만 본다
        snapshot = self.dictionary.snapshot

        for _ in range(MAX_PASSES):
            normalized = self._normalize_pass(chars, snapshot)
            if _text_of(normalized) == _text_of(chars):
                break
            chars = normalized

        result = NormalizedText(_text_of(chars),
                                [index for _, index in chars] + [len(text)])
        if result.text != text:
            logger.debug(f"정규화: {text!r} -> {result.text!r}")
        return result

    def normalize(self, text: str) -> str:
        """텍스트 정규화"""
        return self.normalize_with_offsets(text).text

    def _normalize_pass(self, chars: List[Char],
                        snapshot: DictionarySnapshot) -> List[Char]:
        chars = self._remove_emotive_codas(chars, snapshot)
        chars = collapse_repeats(chars)
        chars = collapse_elongation(chars)
        return self._correct_spelling(chars, snapshot)

    # ========== 감정 표현 받침 제거 ==========

    def _remove_emotive_codas(self, chars: List[Char],
                              snapshot: DictionarySnapshot) -> List[Char]:
        """그랰ㅋㅋ -> 그래ㅋㅋ (어절이 이미 사전으로 분절되면 그대로)"""
        chars = list(chars)
        for start, end in _hangul_runs(chars):
            if end >= len(chars):
                continue
            last, original_index = chars[end - 1]
            coda = decompose_syllable(last)[2]
            if coda not in settings.EMOTIVE_CODAS or chars[end][0] != coda:
                continue
            if self.dictionary.covers(_text_of(chars[start:end]), snapshot):
                continue
            chars[end - 1] = (replace_coda(last, ''), original_index)
        return chars

    # ========== 발음 혼동 교정 ==========

    def _correct_spelling(self, chars: List[Char],
                          snapshot: DictionarySnapshot) -> List[Char]:
        chars = list(chars)
        for start, end in _hangul_runs(chars):
            run = _text_of(chars[start:end])
            if self.dictionary.covers(run, snapshot):
                continue
            corrected = self.correct_run(run, snapshot)
            if corrected is None:
                continue
            logger.debug(f"발음 교정: {run} -> {corrected}")
            for offset, char in enumerate(corrected):
                chars[start + offset] = (char, chars[start + offset][1])
        return chars

    def correct_run(self,
                    run: str,
                    snapshot: Optional[DictionarySnapshot] = None
                    ) -> Optional[str]:
        """
        사전에 없는 어절을 한 음절 치환으로 교정

        마지막 음절부터 앞으로, 표 순서대로 시도하여 처음으로 사전 분절이
        가능해지는 후보를 반환한다.

        Args:
            run: 한글 음절 문자열
            snapshot: 사용할 스냅샷 (None이면 현재 스냅샷)

        Returns:
            교정된 문자열 또는 None
        """
        snapshot = snapshot or self.dictionary.snapshot
        for index in range(len(run) - 1, -1, -1):
            for candidate_char in self._substitutions(run[index]):
                candidate = run[:index] + candidate_char + run[index + 1:]
                if self._is_stable(candidate) and self.dictionary.covers(
                        candidate, snapshot):
                    return candidate
        return None

    @staticmethod
    def _substitutions(syllable: str) -> List[str]:
        _, vowel, coda = decompose_syllable(syllable)
        candidates = []
        for wrong, right in VOWEL_CONFUSIONS:
            if vowel == wrong:
                candidates.append(replace_vowel(syllable, right))
        for wrong, right in CODA_CONFUSIONS:
            if coda == wrong:
                candidates.append(replace_coda(syllable, right))
        return candidates

    @staticmethod
    def _is_stable(candidate: str) -> bool:
        """교정 결과가 반복 / 늘임 축약으로 다시 바뀌지 않는지 확인"""
        chars = [(char, index) for index, char in enumerate(candidate)]
        return _text_of(collapse_elongation(collapse_repeats(chars))) == candidate