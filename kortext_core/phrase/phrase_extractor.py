"""
구 추출기
토큰 열에서 명사구 / 동사구를 추출

문법:
    명사구: 수식어* 명사+ ('의' 명사+)*      (수식어 = 형용사, 관형사, 수식어)
    동사구: (동사|형용사)+ (어미|선어말어미)*

    대한민국의 수도는 서울이다 -> [대한민국의 수도] [서울]
    아름다운 꽃이 피었다       -> [아름다운 꽃] [피었다]

공백 한 칸은 구를 끊지 않으며, 줄바꿈 / 문장 부호 / 그 밖의 품사는 구를 닫는다.
"""

from enum import Enum
import re
from typing import Iterable, List, Optional
import logging

from ..config import settings
from ..models import (KoreanPos, KoreanToken, KoreanPhrase,
                      PhraseExtractorConfig, PREDICATE_POS, ENDING_POS)
from ..dictionary.lexicon import load_spam_nouns
from ..utils.error_handler import MalformedInputError

logger = logging.getLogger(__name__)

NOUN_HEAD_POS = frozenset({
    KoreanPos.NOUN, KoreanPos.PROPER_NOUN, KoreanPos.ALPHA,
    KoreanPos.NUMBER, KoreanPos.FOREIGN
})
PRENOMINAL_POS = frozenset({KoreanPos.DETERMINER, KoreanPos.MODIFIER})
# 구의 크기를 세는 내용어
CONTENT_POS = NOUN_HEAD_POS | PREDICATE_POS

# "하하", "ㅋㅋ", "굿굿굿" 처럼 한 단위가 반복되는 구
REPEATED_UNIT_RE = re.compile(r'^(.+?)\1+$')


class PhraseState(Enum):
    """구 버퍼 상태"""
    START = "start"
    MODIFIER = "modifier"
    NOUN = "noun"
    CONNECT = "connect"
    VERB = "verb"


class _PhraseBuffer:
    """추출 중인 구 (확정 토큰 + 다음 내용어를 기다리는 공백 / 연결 조사)"""

    def __init__(self, max_tokens: int):
        self.max_tokens = max_tokens
        self.reset()

    def reset(self):
        self.state = PhraseState.START
        self.tokens: List[KoreanToken] = []
        self.pending: List[KoreanToken] = []
        self.spaced = False

    @property
    def content_count(self) -> int:
        return sum(1 for token in self.tokens if token.pos in CONTENT_POS)

    @property
    def last(self) -> Optional[KoreanToken]:
        return self.tokens[-1] if self.tokens else None

    @property
    def attached(self) -> bool:
        """마지막 확정 토큰에 공백 없이 바로 이어지는지"""
        return not self.pending and not self.spaced

    @property
    def full(self) -> bool:
        return self.content_count >= self.max_tokens

    def space(self, token: Optional[KoreanToken] = None):
        if self.state is PhraseState.START:
            return
        if token is not None:
            self.pending.append(token)
        self.spaced = True

    def append(self, token: KoreanToken, state: PhraseState):
        self.tokens.extend(self.pending)
        self.tokens.append(token)
        self.pending = []
        self.spaced = False
        self.state = state

    def connect(self, token: KoreanToken):
        self.pending.append(token)
        self.state = PhraseState.CONNECT

    def phrase(self) -> Optional[KoreanPhrase]:
        """현재 버퍼로 만들 수 있는 구 (없으면 None)"""
        state = self.state
        tokens = self.tokens
        if state is PhraseState.CONNECT:
            state = PhraseState.NOUN

        if state is PhraseState.MODIFIER:
            # 명사가 오지 않은 수식어: 형용사만 동사구로 남김
            adjectives = [i for i, t in enumerate(tokens)
                          if t.pos is KoreanPos.ADJECTIVE]
            if not adjectives:
                return None
            tokens = tokens[adjectives[0]:]
            state = PhraseState.VERB

        if state is PhraseState.NOUN:
            return build_phrase(tokens, KoreanPos.NOUN)
        if state is PhraseState.VERB:
            return build_phrase(tokens, KoreanPos.VERB)
        return None


def build_phrase(tokens: List[KoreanToken], pos: KoreanPos) -> KoreanPhrase:
    """
    토큰 구간으로 구 생성

    토큰 사이에 offset 차이가 있으면 그만큼 공백으로 채워 text 길이와
    length가 항상 같도록 한다.
    """
    parts = [tokens[0].text]
    for previous, token in zip(tokens, tokens[1:]):
        gap = token.offset - previous.end
        if gap > 0:
            parts.append(' ' * gap)
        parts.append(token.text)

    offset = tokens[0].offset
    content = sum(1 for token in tokens if token.pos in CONTENT_POS)
    return KoreanPhrase(text=''.join(parts),
                        offset=offset,
                        length=tokens[-1].end - offset,
                        pos=pos,
                        is_compound=content > 1,
                        tokens=tuple(tokens))


class KoreanPhraseExtractor:
    """명사구 / 동사구 추출기"""

    def __init__(self, config: Optional[PhraseExtractorConfig] = None):
        self.config = config or PhraseExtractorConfig()

    def extract(self,
                tokens: Iterable[KoreanToken],
                filter_spam: Optional[bool] = None,
                include_hashtags: Optional[bool] = None) -> List[KoreanPhrase]:
        """
        구 추출

        Args:
            tokens: 토큰 열 (tokenize 결과, Space 토큰은 없어도 됨)
            filter_spam: 스팸 / 저정보 구 제거 (None이면 설정값)
            include_hashtags: 해시태그를 명사구로 포함 (None이면 설정값)

        Returns:
            KoreanPhrase 리스트 (입력 순서, 서로 겹치지 않음)
        """
        if filter_spam is None:
            filter_spam = self.config.filter_spam
        if include_hashtags is None:
            include_hashtags = self.config.include_hashtags
        tokens = self._validate(tokens)

        phrases: List[KoreanPhrase] = []
        buffer = _PhraseBuffer(self.config.max_tokens)

        def flush():
            phrase = buffer.phrase()
            if phrase is not None:
                phrases.append(phrase)
            buffer.reset()

        previous_end = None
        for token in tokens:
            pos = token.pos
            if previous_end is not None and token.offset > previous_end:
                buffer.space()
            previous_end = token.end

            if pos is KoreanPos.SPACE:
                if '\n' in token.text or '\r' in token.text:
                    flush()
                else:
                    buffer.space(token)
                continue

            if pos is KoreanPos.HASHTAG:
                flush()
                if include_hashtags and token.length > 1:
                    phrases.append(self._hashtag_phrase(token))
                continue

            state = buffer.state
            if pos in NOUN_HEAD_POS:
                if (state in (PhraseState.MODIFIER, PhraseState.NOUN,
                              PhraseState.CONNECT) and not buffer.full):
                    buffer.append(token, PhraseState.NOUN)
                else:
                    flush()
                    buffer.append(token, PhraseState.NOUN)

            elif pos is KoreanPos.SUFFIX:
                if state is PhraseState.NOUN and buffer.attached:
                    buffer.append(token, PhraseState.NOUN)
                else:
                    flush()

            elif pos is KoreanPos.JOSA:
                if (state is PhraseState.NOUN and buffer.attached
                        and token.text in settings.CONNECTOR_JOSA):
                    buffer.connect(token)
                else:
                    flush()

            elif pos in PRENOMINAL_POS:
                last = buffer.last
                if (state is PhraseState.MODIFIER and last is not None
                        and last.pos in PRENOMINAL_POS):
                    buffer.append(token, PhraseState.MODIFIER)
                else:
                    flush()
                    buffer.append(token, PhraseState.MODIFIER)

            elif pos is KoreanPos.ADJECTIVE:
                if state is PhraseState.MODIFIER or self._extends_verb(buffer):
                    buffer.append(token, state)
                else:
                    flush()
                    buffer.append(token, PhraseState.MODIFIER)

            elif pos is KoreanPos.VERB:
                if self._extends_verb(buffer):
                    buffer.append(token, PhraseState.VERB)
                else:
                    flush()
                    buffer.append(token, PhraseState.VERB)

            elif pos in ENDING_POS:
                last = buffer.last
                if (buffer.attached and last is not None
                        and state in (PhraseState.VERB, PhraseState.MODIFIER)
                        and (last.pos in PREDICATE_POS
                             or last.pos in ENDING_POS)):
                    if state is PhraseState.MODIFIER:
                        self._drop_prenominals(buffer)
                    buffer.append(token, PhraseState.VERB)
                else:
                    flush()

            else:
                flush()

        flush()

        if filter_spam:
            phrases = [p for p in phrases if not self.is_spam(p)]
        logger.debug(f"구 추출: {len(phrases)}개")
        return phrases

    # ========== 보조 ==========

    @staticmethod
    def _validate(tokens: Iterable[KoreanToken]) -> List[KoreanToken]:
        if tokens is None or isinstance(tokens, str):
            raise MalformedInputError("tokens", tokens)
        try:
            tokens = list(tokens)
        except TypeError:
            raise MalformedInputError("tokens", tokens)
        for token in tokens:
            if not isinstance(token, KoreanToken):
                raise MalformedInputError("tokens", token)
        return tokens

    @staticmethod
    def _extends_verb(buffer: _PhraseBuffer) -> bool:
        """어미가 붙기 전의 동사구에 용언이 이어지는지"""
        last = buffer.last
        return (buffer.state is PhraseState.VERB and last is not None
                and last.pos in PREDICATE_POS and not buffer.full)

    @staticmethod
    def _drop_prenominals(buffer: _PhraseBuffer):
        """수식어 버퍼를 동사구로 바꿀 때 앞의 관형사를 제거"""
        for index, token in enumerate(buffer.tokens):
            if token.pos is KoreanPos.ADJECTIVE:
                buffer.tokens = buffer.tokens[index:]
                return

    @staticmethod
    def _hashtag_phrase(token: KoreanToken) -> KoreanPhrase:
        """#해시태그 -> 해시태그 (Noun)"""
        return KoreanPhrase(text=token.text[1:],
                            offset=token.offset + 1,
                            length=token.length - 1,
                            pos=KoreanPos.NOUN,
                            tokens=(token, ))

    @staticmethod
    def is_spam(phrase: KoreanPhrase) -> bool:
        """
        저정보 구 판별

        - 스팸 명사를 포함한 구
        - 한 단위가 반복되는 구 ("하하", "ㅋㅋ")
        - PHRASE_MIN_CHARS보다 짧은 구
        """
        compact = ''.join(phrase.text.split())
        if len(compact) < settings.PHRASE_MIN_CHARS:
            return True
        if REPEATED_UNIT_RE.match(compact):
            return True
        spam_nouns = load_spam_nouns()
        if compact in spam_nouns:
            return True
        return any(token.text in spam_nouns for token in phrase.tokens
                   if token.pos in NOUN_HEAD_POS)
