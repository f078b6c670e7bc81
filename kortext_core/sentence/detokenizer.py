"""
역토큰화기
분절된 단어 목록을 자연스러운 띄어쓰기의 문자열로 다시 잇는다.

    ["한국", "어", "공부", "했어요"] -> "한국어 공부했어요"
    ["서울", "에서", "왔다", "."] -> "서울에서 왔다."

토큰화의 역함수가 아니라 사전 기반 휴리스틱이다.
"""

from typing import Iterable, List
import logging

from ..models import KoreanPos, KoreanToken, PREDICATE_POS, ENDING_POS
from ..tokenizer.korean_tokenizer import KoreanTokenizer
from ..utils.error_handler import MalformedInputError

logger = logging.getLogger(__name__)

# 앞 단어에 붙는 문장 부호
ATTACHING_PUNCTUATION = frozenset('.,!?…;:~%)]}”’」』》〉）。、！？')
# 뒤 단어에 붙는 문장 부호
OPENING_PUNCTUATION = frozenset('([{“‘「『《〈（')

# 조사 / 접미사가 붙을 수 있는 앞 품사
PARTICLE_HOSTS = frozenset({
    KoreanPos.NOUN, KoreanPos.PROPER_NOUN, KoreanPos.ALPHA,
    KoreanPos.NUMBER, KoreanPos.FOREIGN, KoreanPos.SUFFIX,
    KoreanPos.JOSA, KoreanPos.HASHTAG, KoreanPos.SCREEN_NAME,
    KoreanPos.URL, KoreanPos.EMAIL, KoreanPos.CASH_TAG
})
PARTICLE_POS = frozenset({KoreanPos.JOSA, KoreanPos.SUFFIX})

# 명사 뒤에 붙어 동사를 만드는 경동사
LIGHT_VERBS = ('하다', '되다')
LIGHT_VERB_HOSTS = frozenset({KoreanPos.NOUN, KoreanPos.PROPER_NOUN})


class KoreanDetokenizer:
    """역토큰화기"""

    def __init__(self, tokenizer: KoreanTokenizer):
        self.tokenizer = tokenizer

    def detokenize(self, words: Iterable[str]) -> str:
        """
        단어 목록을 문자열로 결합

        Args:
            words: 단어 목록 (빈 문자열은 무시)

        Returns:
            결합된 문자열
        """
        if words is None or isinstance(words, str):
            raise MalformedInputError("words", words)

        groups: List[str] = []
        attach_next = False
        for word in words:
            if not isinstance(word, str):
                raise MalformedInputError("words", word)
            word = word.strip()
            if not word:
                continue

            if groups and (attach_next
                           or self._attaches_to_previous(groups[-1], word)):
                groups[-1] += word
            else:
                groups.append(word)
            attach_next = self._attaches_to_next(word)

        return ' '.join(groups)

    # ========== 결합 규칙 ==========

    def _attaches_to_previous(self, previous: str, word: str) -> bool:
        if all(char in ATTACHING_PUNCTUATION for char in word):
            return True

        tokens = self.tokenizer.tokenize(previous + word,
                                         keep_space=False)
        boundary = len(previous)
        head = [t for t in tokens if t.end <= boundary]
        tail = [t for t in tokens if t.offset >= boundary]
        # 경계를 가로지르는 토큰이 있으면 붙이지 않음
        if not head or not tail or len(head) + len(tail) != len(tokens):
            return False
        if any(t.unknown for t in tail):
            return False

        host = head[-1].pos
        tail_pos = {t.pos for t in tail}
        if tail_pos <= PARTICLE_POS:
            return host in PARTICLE_HOSTS
        if tail_pos <= ENDING_POS:
            return host in PREDICATE_POS or host in ENDING_POS
        return self._is_light_verb(tail) and host in LIGHT_VERB_HOSTS

    @staticmethod
    def _is_light_verb(tokens: List[KoreanToken]) -> bool:
        """공부 + 했어요, 시작 + 됐다"""
        return (len(tokens) == 1 and tokens[0].pos is KoreanPos.VERB
                and tokens[0].stem in LIGHT_VERBS)

    def _attaches_to_next(self, word: str) -> bool:
        if all(char in OPENING_PUNCTUATION for char in word):
            return True
        # 처먹다, 휘감다 처럼 동사 앞에 붙는 접두사
        return self.tokenizer.dictionary.pos_of(word) == [KoreanPos.VERB_PREFIX]
