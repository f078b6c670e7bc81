"""
한국어 토크나이저
사전과 비용 함수를 이용한 최단 경로 분절 + 품사 태깅

비용 (정수):
    사전 단어 (길이 L)  : WORD_COST_SCALE // L (+ 품사 연결이 어색하면 TRANSITION_PENALTY)
    미등록 구간 (길이 L): UNKNOWN_PENALTY + UNKNOWN_CHAR_COST * L

동점 처리 순서:
    1. 총비용이 작은 경로
    2. 토큰 수가 적은 경로
    3. 선호 품사 연결(명사+조사, 동사+어미 ...)이 많은 경로
    4. 앞쪽 토큰이 더 긴 경로 (leftmost-longest)
    5. 품사 선언 순서
"""

from dataclasses import dataclass
from typing import Dict, Iterator, List, Optional, Tuple
import logging

from ..config import settings
from ..models import (KoreanPos, KoreanToken, NOMINAL_POS, PREDICATE_POS,
                      ENDING_POS)
from ..dictionary.korean_dictionary import KoreanDictionary, DictionarySnapshot
from ..hangul.char_classifier import CharClass
from ..utils.error_handler import ensure_text, MalformedInputError
from ..utils.logger import log_execution_time
from .chunker import Chunk, chunk_text, UNKNOWN_LETTER_POS

logger = logging.getLogger(__name__)

# 조사가 붙을 수 있는 앞 품사
JOSA_HOSTS = NOMINAL_POS | {
    KoreanPos.SUFFIX, KoreanPos.JOSA, KoreanPos.URL, KoreanPos.EMAIL,
    KoreanPos.HASHTAG, KoreanPos.SCREEN_NAME, KoreanPos.CASH_TAG
}
# 어미가 붙을 수 있는 앞 품사
EOMI_HOSTS = PREDICATE_POS | ENDING_POS
SUFFIX_HOSTS = frozenset({KoreanPos.NOUN, KoreanPos.PROPER_NOUN})
# 청크 중간에 오기 어려운 품사
CHUNK_INITIAL_POS = frozenset({
    KoreanPos.EXCLAMATION, KoreanPos.CONJUNCTION, KoreanPos.DETERMINER,
    KoreanPos.MODIFIER
})
# 다음 청크로 이어지는 품사 (공백 없이 붙은 경우)
CARRIED_POS = JOSA_HOSTS - {KoreanPos.JOSA, KoreanPos.SUFFIX}

PREFERRED_BIGRAMS = frozenset({
    (KoreanPos.NOUN, KoreanPos.JOSA),
    (KoreanPos.PROPER_NOUN, KoreanPos.JOSA),
    (KoreanPos.NOUN, KoreanPos.SUFFIX),
    (KoreanPos.PROPER_NOUN, KoreanPos.SUFFIX),
    (KoreanPos.SUFFIX, KoreanPos.JOSA),
    (KoreanPos.ALPHA, KoreanPos.JOSA),
    (KoreanPos.NUMBER, KoreanPos.JOSA),
    (KoreanPos.FOREIGN, KoreanPos.JOSA),
    (KoreanPos.VERB, KoreanPos.EOMI),
    (KoreanPos.ADJECTIVE, KoreanPos.EOMI),
    (KoreanPos.VERB, KoreanPos.PRE_EOMI),
    (KoreanPos.ADJECTIVE, KoreanPos.PRE_EOMI),
    (KoreanPos.PRE_EOMI, KoreanPos.EOMI),
    (KoreanPos.DETERMINER, KoreanPos.NOUN),
    (KoreanPos.MODIFIER, KoreanPos.NOUN),
    (KoreanPos.ADVERB, KoreanPos.VERB),
    (KoreanPos.ADVERB, KoreanPos.ADJECTIVE),
})

# (시작 위치, 길이, 품사, 미등록 여부)
Segment = Tuple[int, int, KoreanPos, bool]


@dataclass(eq=False)
class _PathNode:
    """
    분절 경로 (뒤쪽 경로를 가리키는 연결 리스트)

    cost / count / score는 이 노드부터 청크 끝까지의 값이다. 첫 토큰의 품사
    연결 비용은 앞 토큰이 정해질 때 더해진다.
    """
    cost: int
    count: int
    score: int
    child: Optional['_PathNode']
    start: int = 0
    length: int = 0
    pos: Optional[KoreanPos] = None
    unknown: bool = False
    # 같은 위치에서 시작하는 경로 중 길이열 순위 / (길이열, 품사열) 순위
    length_rank: int = 0
    full_rank: int = 0

    def segments(self) -> List[Segment]:
        result = []
        node = self
        while node.child is not None:
            result.append((node.start, node.length, node.pos, node.unknown))
            node = node.child
        return result


def _length_order(node: _PathNode) -> tuple:
    return (-node.length, node.child.length_rank)


def _full_order(node: _PathNode) -> tuple:
    return (-node.length, node.child.length_rank, node.pos.rank,
            node.child.full_rank)


def _state_order(node: _PathNode) -> tuple:
    return (node.cost, node.count, node.score) + _full_order(node)


def _assign_ranks(nodes: List[_PathNode]):
    """같은 위치에서 시작하는 경로들에 동점 처리 4, 5단계용 순위 부여"""
    for order, attribute in ((_length_order, 'length_rank'),
                             (_full_order, 'full_rank')):
        previous = None
        rank = -1
        for node in sorted(nodes, key=order):
            value = order(node)
            if value != previous:
                rank += 1
                previous = value
            setattr(node, attribute, rank)


def transition_penalty(prev: Optional[KoreanPos], pos: KoreanPos,
                       chunk_start: bool) -> int:
    """
    품사 연결 비용

    Args:
        prev: 앞 토큰 품사 (없으면 None)
        pos: 현재 토큰 품사
        chunk_start: 청크의 첫 토큰인지

    Returns:
        0 또는 TRANSITION_PENALTY
    """
    if pos is KoreanPos.JOSA:
        awkward = prev not in JOSA_HOSTS
    elif pos in ENDING_POS:
        awkward = prev not in EOMI_HOSTS
    elif pos is KoreanPos.SUFFIX:
        awkward = prev not in SUFFIX_HOSTS
    elif pos in CHUNK_INITIAL_POS:
        awkward = not chunk_start
    else:
        awkward = False
    return settings.TRANSITION_PENALTY if awkward else 0


class KoreanTokenizer:
    """한국어 토크나이저"""

    def __init__(self, dictionary: KoreanDictionary):
        self.dictionary = dictionary

    # ========== 공개 API ==========

    @log_execution_time
    def tokenize(self,
                 text: str,
                 keep_space: bool = True,
                 stem: bool = True) -> List[KoreanToken]:
        """
        텍스트를 토큰으로 분절

        Args:
            text: 정규화된 텍스트
            keep_space: Space 토큰 포함 여부
            stem: 용언 토큰에 기본형 부여 여부

        Returns:
            KoreanToken 리스트 (offset 순서, 겹치지 않음)
        """
        text = ensure_text(text)
        snapshot = self.dictionary.snapshot

        tokens: List[KoreanToken] = []
        prev_pos: Optional[KoreanPos] = None
        for chunk in chunk_text(text):
            candidates = self._tokenize_chunk(chunk, prev_pos, 1, stem,
                                              snapshot)
            chunk_tokens = candidates[0]
            tokens.extend(chunk_tokens)
            prev_pos = self._carried_pos(chunk_tokens)

        if not keep_space:
            tokens = [t for t in tokens if t.pos is not KoreanPos.SPACE]
        return tokens

    @log_execution_time
    def tokenize_top_n(self,
                       text: str,
                       n: int = 3,
                       keep_space: bool = True,
                       stem: bool = True) -> List[List[List[KoreanToken]]]:
        """
        청크별 상위 n개 분절 후보

        Args:
            text: 정규화된 텍스트
            n: 청크당 후보 수 (1 ~ MAX_TOP_N)
            keep_space: Space 청크 포함 여부
            stem: 용언 토큰에 기본형 부여 여부

        Returns:
            청크마다 후보 토큰 리스트의 리스트 (첫 후보가 tokenize 결과)
        """
        text = ensure_text(text)
        if isinstance(n, bool) or not isinstance(n, int) or n < 1:
            raise MalformedInputError("n", n)
        if n > settings.MAX_TOP_N:
            logger.warning(f"후보 수 제한: {n} -> {settings.MAX_TOP_N}")
            n = settings.MAX_TOP_N

        snapshot = self.dictionary.snapshot
        result: List[List[List[KoreanToken]]] = []
        prev_pos: Optional[KoreanPos] = None
        for chunk in chunk_text(text):
            candidates = self._tokenize_chunk(chunk, prev_pos, n, stem,
                                              snapshot)
            prev_pos = self._carried_pos(candidates[0])
            if not keep_space and chunk.pos is KoreanPos.SPACE:
                continue
            result.append(candidates)
        return result

    # ========== 청크 처리 ==========

    @staticmethod
    def _carried_pos(tokens: List[KoreanToken]) -> Optional[KoreanPos]:
        if not tokens:
            return None
        last = tokens[-1].pos
        return last if last in CARRIED_POS or last in EOMI_HOSTS else None

    def _tokenize_chunk(self, chunk: Chunk, prev_pos: Optional[KoreanPos],
                        n: int, stem: bool,
                        snapshot: DictionarySnapshot
                        ) -> List[List[KoreanToken]]:
        if not chunk.needs_segmentation:
            # 고정 품사 청크: OTHER는 문자 하나가 청크 하나
            return [[
                KoreanToken(chunk.text, chunk.pos, chunk.offset, chunk.length,
                            unknown=chunk.unknown)
            ]]

        candidates = []
        for segments in self._segment(chunk, prev_pos, n, snapshot):
            tokens = []
            for start, length, pos, unknown in segments:
                surface = chunk.text[start:start + length]
                token_stem = None
                if stem and not unknown and pos in PREDICATE_POS:
                    token_stem = self.dictionary.stem_of(
                        pos, surface, snapshot)
                tokens.append(
                    KoreanToken(surface, pos, chunk.offset + start, length,
                                unknown, token_stem))
            candidates.append(tokens)
        return candidates

    def _edges(self, text: str, start: int, char_class: CharClass,
               snapshot: DictionarySnapshot
               ) -> Iterator[Tuple[int, KoreanPos, bool, int]]:
        """start 위치에서 가능한 (길이, 품사, 미등록 여부, 기본 비용)"""
        for pos, length in self.dictionary.lookup_prefixes(
                text, start, snapshot):
            yield length, pos, False, settings.WORD_COST_SCALE // length

        unknown_pos = UNKNOWN_LETTER_POS[char_class]
        longest = min(settings.MAX_UNKNOWN_LENGTH, len(text) - start)
        for length in range(1, longest + 1):
            yield (length, unknown_pos, True,
                   settings.UNKNOWN_PENALTY + settings.UNKNOWN_CHAR_COST * length)

    def _segment(self, chunk: Chunk, prev_pos: Optional[KoreanPos], k: int,
                 snapshot: DictionarySnapshot) -> List[List[Segment]]:
        """
        글자 청크의 상위 k개 분절 (k-best 동적 계획법)

        청크 끝에서부터 거꾸로 진행한다. 상태는 (위치, 첫 토큰 품사, 미등록
        여부)이며 상태마다 정렬 키가 가장 작은 k개 경로만 유지한다. 뒤쪽
        경로의 길이열 / 품사열은 위치별 순위로 압축되므로 비교 비용이
        경로 길이와 무관하다.
        """
        text = chunk.text
        size = len(text)
        heads: List[List[_PathNode]] = [[] for _ in range(size)]
        heads.append([_PathNode(cost=0, count=0, score=0, child=None)])

        for start in range(size - 1, -1, -1):
            states: Dict[Tuple[KoreanPos, bool], List[_PathNode]] = {}
            for length, pos, unknown, base_cost in self._edges(
                    text, start, chunk.char_class, snapshot):
                for child in heads[start + length]:
                    cost = child.cost + base_cost
                    score = child.score
                    if child.pos is not None:
                        if not child.unknown:
                            cost += transition_penalty(pos, child.pos, False)
                        if (pos, child.pos) in PREFERRED_BIGRAMS:
                            score -= 1
                    states.setdefault((pos, unknown), []).append(
                        _PathNode(cost, child.count + 1, score, child, start,
                                  length, pos, unknown))

            nodes: List[_PathNode] = []
            for candidates in states.values():
                candidates.sort(key=_state_order)
                nodes.extend(candidates[:k])
            _assign_ranks(nodes)
            heads[start] = nodes

        finals = []
        for node in heads[0]:
            cost = node.cost
            if not node.unknown:
                cost += transition_penalty(prev_pos, node.pos, True)
            score = node.score
            if (prev_pos, node.pos) in PREFERRED_BIGRAMS:
                score -= 1
            finals.append(((cost, node.count, score, node.length_rank,
                            node.full_rank), node))
        finals.sort(key=lambda item: item[0])
        return [node.segments() for _, node in finals[:k]]
