"""
용언 활용형 생성
동사 / 형용사 기본형("먹다")에서 사전에 색인할 활용 표면형("먹었어요", "먹는" 등)을 생성

지원하는 활용 부류:
    - 규칙 활용 (먹다, 좋다, 가다, 보다 ...)
    - 하다 (해, 했다)
    - ㄹ 탈락 (살다 -> 사는, 삽니다)
    - 르 불규칙 (모르다 -> 몰라)
    - ㅡ 탈락 (쓰다 -> 써, 바쁘다 -> 바빠)
    - ㅂ 불규칙 (아름답다 -> 아름다워, 돕다 -> 도와)
    - ㄷ 불규칙 (듣다 -> 들어)
    - ㅅ 불규칙 (낫다 -> 나아)
    - ㅎ 불규칙 형용사 (그렇다 -> 그래, 그런)
"""

from functools import lru_cache
from typing import FrozenSet, Iterable, List, Set
import logging

from ..models import KoreanPos, PREDICATE_POS
from ..hangul.hangul_utils import (decompose_syllable, compose_syllable,
                                   has_coda, replace_coda, replace_vowel,
                                   add_coda, is_hangul_syllable)

logger = logging.getLogger(__name__)

# ========== 불규칙 어간 ==========

BRIGHT_VOWELS = ('ㅏ', 'ㅗ', 'ㅑ')

D_IRREGULAR_STEMS = ('듣', '걷', '묻', '싣', '깨닫', '붇', '긷', '일컫')
S_IRREGULAR_STEMS = ('낫', '짓', '붓', '젓', '긋', '잇')
B_IRREGULAR_VERB_STEMS = ('돕', '눕', '줍', '굽', '깁')
B_REGULAR_ADJECTIVE_STEMS = ('좁', '수줍')
B_WA_STEMS = ('돕', '곱')
H_REGULAR_ADJECTIVE_STEMS = ('좋', )
# 르로 끝나지만 ㅡ 탈락만 일어나는 어간
REU_REGULAR_STEMS = ('따르', '치르', '들르', '다다르', '우러르')
# 러 불규칙
LEO_IRREGULAR_STEMS = ('푸르', )

# ========== 어미 ==========

CONSONANT_ENDINGS = ('고', '고요', '지', '지만', '지요', '죠', '게', '기', '기에',
                     '기로', '다', '다가', '다고', '던', '도록', '거나', '거든',
                     '거든요', '겠다', '겠어', '겠어요', '겠네', '겠지', '겠습니다',
                     '잖아', '잖아요', '더라', '든지', '군요', '구나')
# ㄴ으로 시작 (ㄹ 탈락 대상)
N_ENDINGS = ('네', '네요', '니', '나요', '냐')
VERB_N_ENDINGS = ('는', '는데', '는데요', '는지', '는구나', '는군요')
VERB_CONSONANT_ENDINGS = ('자', '자마자', '고서')
FORMAL_ENDINGS = ('습니다', '습니까')
FORMAL_VOWEL_ENDINGS = ('니다', '니까')
# 매개모음 '으' 뒤에 붙는 어미 (ㄹ 어간은 ㄹ 유지)
EU_ENDINGS = ('면', '며', '면서', '려고', '려면', '려는')
VERB_EU_ENDINGS = ('러', )
# 매개모음 '으' 뒤에 붙는 어미 (ㄹ 어간은 ㄹ 탈락)
HONORIFIC_ENDINGS = ('니까', '세요', '셔요', '시고', '시면', '셔서', '셨어요', '셨다',
                     '십니다', '시는')
# (받침, 뒤에 붙는 어미)
CODA_ENDINGS = (('ㄴ', ''), ('ㄹ', ''), ('ㅁ', ''), ('ㄹ', '까'), ('ㄹ', '까요'),
                ('ㄹ', '게'), ('ㄹ', '게요'), ('ㄹ', '래'), ('ㄹ', '래요'))
ADJECTIVE_CODA_ENDINGS = (('ㄴ', '데'), ('ㄴ', '데요'), ('ㄴ', '가요'), ('ㄴ', '지'))
# 아/어 연결형 뒤
INFINITIVE_ENDINGS = ('', '요', '서', '도', '야', '야지', '라', '서요', '도요',
                      '주세요')
# 과거 선어말어미 았/었 뒤
PAST_ENDINGS = ('다', '어', '어요', '습니다', '습니까', '는데', '지만', '고', '던',
                '을', '으면', '으니까', '네', '네요', '지', '지요', '죠', '잖아',
                '잖아요', '는지', '거든', '거든요', '더라')

# ========== 어간 부류 ==========

HA = "ha"
REU = "reu"
LEO = "leo"
EU = "eu"
B_IRREGULAR = "b"
D_IRREGULAR = "d"
S_IRREGULAR = "s"
H_IRREGULAR = "h"
L_DROP = "l"
VOWEL = "vowel"
REGULAR = "regular"


def _matches(stem: str, candidates: Iterable[str]) -> bool:
    return any(stem == c or stem.endswith(c) for c in candidates)


def _bright(syllable: str) -> bool:
    return decompose_syllable(syllable)[1] in BRIGHT_VOWELS


def _a_eo(syllable: str) -> str:
    return '아' if _bright(syllable) else '어'


def _merge(prefix: str, coda: str) -> str:
    """마지막 음절에 받침 결합 (결합할 수 없으면 빈 문자열)"""
    if not prefix:
        return ''
    merged = add_coda(prefix[-1], coda)
    return prefix[:-1] + merged if merged else ''


def stem_kind(stem: str, pos: KoreanPos) -> str:
    """
    어간의 활용 부류 판별

    Args:
        stem: 어간 ("먹", "모르")
        pos: Verb 또는 Adjective

    Returns:
        활용 부류 상수
    """
    last = stem[-1]
    _, vowel, coda = decompose_syllable(last)

    if last == '하':
        return HA
    if last == '르' and len(stem) >= 2:
        if _matches(stem, LEO_IRREGULAR_STEMS):
            return LEO
        if not _matches(stem, REU_REGULAR_STEMS):
            return REU
    if not coda:
        return EU if vowel == 'ㅡ' else VOWEL
    if coda == 'ㄹ':
        return L_DROP
    if coda == 'ㅂ':
        if pos is KoreanPos.ADJECTIVE and not _matches(
                stem, B_REGULAR_ADJECTIVE_STEMS):
            return B_IRREGULAR
        if _matches(stem, B_IRREGULAR_VERB_STEMS):
            return B_IRREGULAR
    if coda == 'ㄷ' and _matches(stem, D_IRREGULAR_STEMS):
        return D_IRREGULAR
    if coda == 'ㅅ' and _matches(stem, S_IRREGULAR_STEMS):
        return S_IRREGULAR
    if (coda == 'ㅎ' and pos is KoreanPos.ADJECTIVE
            and not _matches(stem, H_REGULAR_ADJECTIVE_STEMS)):
        return H_IRREGULAR
    return REGULAR


def _n_stem(stem: str, kind: str) -> str:
    """ㄴ, ㅂ, ㅅ 앞 어간 (ㄹ 탈락 적용)"""
    if kind == L_DROP:
        return stem[:-1] + replace_coda(stem[-1], '')
    return stem


def _eu_stem(stem: str, kind: str) -> str:
    """매개모음 '으'를 포함한 어간 (마지막 음절은 항상 받침 없음)"""
    last = stem[-1]
    head = stem[:-1]
    if kind == L_DROP:
        return head + replace_coda(last, '')
    if kind == B_IRREGULAR:
        return head + replace_coda(last, '') + '우'
    if kind == D_IRREGULAR:
        return head + replace_coda(last, 'ㄹ') + '으'
    if kind == S_IRREGULAR:
        return head + replace_coda(last, '') + '으'
    if kind == H_IRREGULAR:
        return head + replace_coda(last, '')
    if kind == REGULAR:
        return stem + '으'
    return stem


def infinitives(stem: str, kind: str) -> List[str]:
    """
    아/어 연결형 목록 (먹 -> 먹어, 하 -> 해/하여, 보 -> 봐/보아)

    Args:
        stem: 어간
        kind: 활용 부류

    Returns:
        연결형 리스트 (마지막 음절은 항상 받침 없음)
    """
    last = stem[-1]
    head = stem[:-1]
    initial, vowel, _ = decompose_syllable(last)

    if kind == HA:
        return [head + '해', stem + '여']

    if kind == REU:
        prev = head[-1]
        prev_initial, prev_vowel, prev_coda = decompose_syllable(prev)
        new_prev = prev if prev_coda else add_coda(prev, 'ㄹ')
        tail = compose_syllable('ㄹ', 'ㅏ' if prev_vowel in BRIGHT_VOWELS else 'ㅓ')
        return [head[:-1] + new_prev + tail]

    if kind == LEO:
        return [stem + '러']

    if kind == EU:
        bright = len(stem) >= 2 and _bright(head[-1])
        return [head + replace_vowel(last, 'ㅏ' if bright else 'ㅓ')]

    if kind == B_IRREGULAR:
        base = head + replace_coda(last, '')
        return [base + ('와' if _matches(stem, B_WA_STEMS) else '워')]

    if kind == D_IRREGULAR:
        return [head + replace_coda(last, 'ㄹ') + _a_eo(last)]

    if kind == S_IRREGULAR:
        return [head + replace_coda(last, '') + _a_eo(last)]

    if kind == H_IRREGULAR:
        new_vowel = {'ㅑ': 'ㅒ', 'ㅕ': 'ㅖ'}.get(vowel, 'ㅐ')
        return [head + compose_syllable(initial, new_vowel)]

    if kind == VOWEL:
        if vowel in ('ㅏ', 'ㅓ', 'ㅕ', 'ㅒ', 'ㅖ', 'ㅘ', 'ㅝ', 'ㅙ', 'ㅞ'):
            return [stem]
        if vowel in ('ㅐ', 'ㅔ'):
            return [stem, stem + '어']
        contracted = {'ㅗ': 'ㅘ', 'ㅜ': 'ㅝ', 'ㅣ': 'ㅕ', 'ㅚ': 'ㅙ'}.get(vowel)
        if contracted:
            return [head + replace_vowel(last, contracted), stem + _a_eo(last)]
        return [stem + _a_eo(last)]

    # 규칙 / ㄹ 탈락 (연결형은 규칙과 같음)
    return [stem + _a_eo(last)]


@lru_cache(maxsize=8192)
def conjugate(base: str, pos: KoreanPos) -> FrozenSet[str]:
    """
    기본형의 활용 표면형 생성

    Args:
        base: 기본형 ("먹다")
        pos: Verb 또는 Adjective

    Returns:
        기본형을 포함한 표면형 집합 ('다'로 끝나지 않으면 기본형만)
    """
    if (pos not in PREDICATE_POS or len(base) < 2 or not base.endswith('다')
            or not is_hangul_syllable(base[-2])):
        return frozenset({base})

    stem = base[:-1]
    kind = stem_kind(stem, pos)
    is_verb = pos is KoreanPos.VERB
    takes_neun = is_verb or stem.endswith(('있', '없'))

    forms: Set[str] = {base}

    def extend(prefix: str, endings: Iterable[str]):
        if prefix:
            forms.update(prefix + ending for ending in endings)

    n_stem = _n_stem(stem, kind)
    eu_stem = _eu_stem(stem, kind)
    coda_stem = has_coda(stem[-1]) and kind != L_DROP

    extend(stem, CONSONANT_ENDINGS)
    extend(n_stem, N_ENDINGS)
    if takes_neun:
        extend(n_stem, VERB_N_ENDINGS)
    if is_verb:
        extend(stem, VERB_CONSONANT_ENDINGS)
        if coda_stem:
            forms.add(stem + '는다')
        else:
            extend(_merge(n_stem, 'ㄴ'), ('다', ))

    # 습니다 / ㅂ니다
    if coda_stem:
        extend(stem, FORMAL_ENDINGS)
    else:
        extend(_merge(n_stem, 'ㅂ'), FORMAL_VOWEL_ENDINGS)

    # 으 매개모음 어미
    eu_keep_l = stem if kind == L_DROP else eu_stem
    extend(eu_keep_l, EU_ENDINGS)
    if is_verb:
        extend(eu_keep_l, VERB_EU_ENDINGS)
    extend(eu_stem, HONORIFIC_ENDINGS)

    coda_endings = CODA_ENDINGS if is_verb else CODA_ENDINGS + ADJECTIVE_CODA_ENDINGS
    for coda, rest in coda_endings:
        if kind == L_DROP and coda == 'ㅁ':
            coda = 'ㄻ'
        extend(_merge(eu_stem, coda), (rest, ))

    # 아/어 연결형과 과거형
    for infinitive in infinitives(stem, kind):
        extend(infinitive, INFINITIVE_ENDINGS)
        extend(_merge(infinitive, 'ㅆ'), PAST_ENDINGS)

    return frozenset(form for form in forms if form)


def conjugate_all(base: str, pos: KoreanPos) -> List[str]:
    """정렬된 활용 표면형 리스트"""
    return sorted(conjugate(base, pos))
