"""
한국어 사전
품사별 단어 집합을 관리하고 토크나이저 / 정규화기에 접두어 검색을 제공

스레드 안전성:
    읽기는 호출마다 현재 스냅샷을 한 번만 가져와 사용한다. 쓰기는 락으로
    직렬화하고 새 스냅샷을 만든 뒤 참조 하나만 교체하므로, 읽는 쪽은 변경
    전 또는 변경 후 상태만 보게 된다.
"""

import threading
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, FrozenSet, Iterable, Iterator, List, Optional, Tuple, Union
import logging

from ..config import settings
from ..models import KoreanPos, PREDICATE_POS
from ..utils.error_handler import MalformedInputError, ConfigurationError
from ..utils.file_handler import FileHandler
from ..utils.logger import StructuredLogger, log_execution_time
from .conjugation import conjugate
from .lexicon import LEXICON_FILES

logger = logging.getLogger(__name__)
structured_logger = StructuredLogger(logger)

WordsArg = Union[str, Iterable[str]]


@dataclass(frozen=True)
class DictionarySnapshot:
    """사전의 불변 상태"""
    # 품사별 등록 단어 (용언은 기본형)
    entries: Dict[KoreanPos, FrozenSet[str]] = field(default_factory=dict)
    # 표면형 -> {품사: 기본형 집합}
    surfaces: Dict[str, Dict[KoreanPos, FrozenSet[str]]] = field(
        default_factory=dict)
    # 표면형 최대 길이 (상한값)
    max_length: int = 0

    @property
    def size(self) -> int:
        return sum(len(words) for words in self.entries.values())


def normalize_words(words: WordsArg) -> List[str]:
    """
    단어 인자 검증

    문자열 하나는 단어 하나로 취급한다. 공백을 포함한 단어와 빈 문자열은
    조용히 무시한다.

    Raises:
        MalformedInputError: None 또는 문자열이 아닌 원소
    """
    if words is None:
        raise MalformedInputError("words", words)
    if isinstance(words, str):
        words = [words]

    try:
        items = list(words)
    except TypeError:
        raise MalformedInputError("words", words)

    cleaned = []
    for word in items:
        if not isinstance(word, str):
            raise MalformedInputError("words", word)
        if not word or any(char.isspace() for char in word):
            logger.debug(f"공백 포함 또는 빈 단어 무시: {word!r}")
            continue
        cleaned.append(word)
    return cleaned


class KoreanDictionary:
    """
    품사별 단어 사전

    동사 / 형용사는 기본형("먹다")으로 등록하며, 등록 시 활용 표면형이
    기본형을 어간 정보로 함께 색인된다.
    """

    def __init__(self, snapshot: Optional[DictionarySnapshot] = None):
        self._lock = threading.Lock()
        self._snapshot = snapshot or DictionarySnapshot()

    # ========== 생성 ==========

    @classmethod
    @log_execution_time(level='INFO')
    def load_default(cls,
                     lexicon_dir: Union[str, Path, None] = None,
                     user_dictionary: Union[str, Path, None] = None
                     ) -> 'KoreanDictionary':
        """
        기본 어휘집으로 사전 생성

        Args:
            lexicon_dir: 어휘 파일 디렉토리 (None이면 설정값)
            user_dictionary: 사용자 사전 파일 (None이면 설정값)

        Returns:
            KoreanDictionary
        """
        dictionary = cls()

        for file_stem, pos in LEXICON_FILES.items():
            if lexicon_dir:
                path = Path(lexicon_dir) / f"{file_stem}.txt"
            else:
                path = settings.get_lexicon_path(file_stem)
            if not path.exists():
                raise ConfigurationError("기본 어휘 파일이 없습니다", path=path)
            dictionary.add(pos, FileHandler.read_word_list(path))

        user_path = user_dictionary or settings.get_user_dictionary_path()
        if user_path:
            dictionary.load_user_dictionary(user_path)

        logger.info(f"기본 사전 로드 완료: {dictionary.size}개 단어")
        return dictionary

    def copy(self) -> 'KoreanDictionary':
        """현재 상태를 공유하는 독립 사전 (이후 변경은 서로 영향 없음)"""
        return KoreanDictionary(self._snapshot)

    def load_user_dictionary(self, path: Union[str, Path]) -> int:
        """
        사용자 사전 파일 로드 (형식: 단어<TAB>품사)

        Returns:
            추가된 단어 수
        """
        grouped: Dict[KoreanPos, List[str]] = {}
        for word, pos_name in FileHandler.read_user_dictionary(path):
            grouped.setdefault(KoreanPos.parse(pos_name), []).append(word)

        return sum(self.add(pos, words) for pos, words in grouped.items())

    # ========== 변경 ==========

    def add(self, pos: Union[KoreanPos, str], words: WordsArg) -> int:
        """
        단어 추가

        Args:
            pos: 품사
            words: 단어 목록 (공백 포함 단어는 무시)

        Returns:
            새로 추가된 단어 수
        """
        pos = KoreanPos.parse(pos)
        words = normalize_words(words)

        with self._lock:
            snapshot = self._snapshot
            current = snapshot.entries.get(pos, frozenset())
            new_words = [w for w in dict.fromkeys(words) if w not in current]
            if not new_words:
                return 0

            surfaces = dict(snapshot.surfaces)
            max_length = snapshot.max_length
            for word in new_words:
                for surface in self._surface_forms(pos, word):
                    by_pos = dict(surfaces.get(surface, {}))
                    by_pos[pos] = by_pos.get(pos, frozenset()) | {word}
                    surfaces[surface] = by_pos
                    max_length = max(max_length, len(surface))

            entries = dict(snapshot.entries)
            entries[pos] = current | frozenset(new_words)
            self._snapshot = DictionarySnapshot(entries, surfaces, max_length)

        structured_logger.debug("사전 단어 추가",
                                pos=pos.value,
                                count=len(new_words))
        return len(new_words)

    def remove(self, pos: Union[KoreanPos, str], words: WordsArg) -> int:
        """
        단어 삭제 (없는 단어는 무시)

        Returns:
            실제로 삭제된 단어 수
        """
        pos = KoreanPos.parse(pos)
        words = normalize_words(words)

        with self._lock:
            snapshot = self._snapshot
            current = snapshot.entries.get(pos, frozenset())
            removed = [w for w in dict.fromkeys(words) if w in current]
            if not removed:
                return 0

            surfaces = dict(snapshot.surfaces)
            for word in removed:
                for surface in self._surface_forms(pos, word):
                    by_pos = dict(surfaces.get(surface, {}))
                    bases = by_pos.get(pos, frozenset()) - {word}
                    if bases:
                        by_pos[pos] = bases
                    else:
                        by_pos.pop(pos, None)

                    if by_pos:
                        surfaces[surface] = by_pos
                    else:
                        surfaces.pop(surface, None)

            entries = dict(snapshot.entries)
            entries[pos] = current - frozenset(removed)
            self._snapshot = DictionarySnapshot(entries, surfaces,
                                                snapshot.max_length)

        structured_logger.debug("사전 단어 삭제",
                                pos=pos.value,
                                count=len(removed))
        return len(removed)

    @staticmethod
    def _surface_forms(pos: KoreanPos, word: str) -> FrozenSet[str]:
        if pos in PREDICATE_POS:
            return conjugate(word, pos)
        return frozenset({word})

    # ========== 조회 ==========

    @property
    def snapshot(self) -> DictionarySnapshot:
        return self._snapshot

    @property
    def size(self) -> int:
        return self._snapshot.size

    @property
    def max_length(self) -> int:
        return self._snapshot.max_length

    def contains(self, pos: Union[KoreanPos, str], word: str) -> bool:
        """
        단어가 해당 품사로 인식되는지 확인

        등록 단어뿐 아니라 용언의 활용 표면형도 포함한다.
        """
        pos = KoreanPos.parse(pos)
        by_pos = self._snapshot.surfaces.get(word)
        return bool(by_pos) and pos in by_pos

    def has_word(self, word: str) -> bool:
        """품사와 관계없이 표면형 존재 여부"""
        return word in self._snapshot.surfaces

    def pos_of(self, word: str) -> List[KoreanPos]:
        """표면형의 품사 목록 (선언 순서)"""
        by_pos = self._snapshot.surfaces.get(word, {})
        return sorted(by_pos, key=lambda p: p.rank)

    def words(self, pos: Union[KoreanPos, str]) -> FrozenSet[str]:
        """품사별 등록 단어"""
        return self._snapshot.entries.get(KoreanPos.parse(pos), frozenset())

    def stem_of(self,
                pos: KoreanPos,
                surface: str,
                snapshot: Optional[DictionarySnapshot] = None) -> Optional[str]:
        """
        용언 표면형의 기본형

        Args:
            pos: 품사
            surface: 표면형
            snapshot: 사용할 스냅샷 (None이면 현재 스냅샷)

        Returns:
            기본형 (용언이 아니거나 사전에 없으면 None)
        """
        if pos not in PREDICATE_POS:
            return None
        snapshot = snapshot or self._snapshot
        bases = snapshot.surfaces.get(surface, {}).get(pos)
        if not bases:
            return None
        return min(bases)

    def lookup_prefixes(self,
                        text: str,
                        offset: int = 0,
                        snapshot: Optional[DictionarySnapshot] = None
                        ) -> Iterator[Tuple[KoreanPos, int]]:
        """
        text[offset:]의 접두어가 되는 모든 사전 단어

        Args:
            text: 대상 텍스트
            offset: 시작 위치
            snapshot: 사용할 스냅샷 (None이면 현재 스냅샷)

        Yields:
            (품사, 일치 길이), 긴 것부터
        """
        snapshot = snapshot or self._snapshot
        surfaces = snapshot.surfaces
        longest = min(snapshot.max_length, len(text) - offset)

        for length in range(longest, 0, -1):
            by_pos = surfaces.get(text[offset:offset + length])
            if by_pos:
                for pos in sorted(by_pos, key=lambda p: p.rank):
                    yield pos, length

    def covers(self,
               text: str,
               snapshot: Optional[DictionarySnapshot] = None) -> bool:
        """text 전체를 사전 표면형으로 빈틈없이 나눌 수 있는지 확인"""
        if not text:
            return True

        snapshot = snapshot or self._snapshot
        reachable = [False] * (len(text) + 1)
        reachable[0] = True
        for start in range(len(text)):
            if not reachable[start]:
                continue
            longest = min(snapshot.max_length, len(text) - start)
            for length in range(1, longest + 1):
                if text[start:start + length] in snapshot.surfaces:
                    reachable[start + length] = True
        return reachable[len(text)]

    def __contains__(self, word: str) -> bool:
        return self.has_word(word)

    def __len__(self) -> int:
        return self.size

    def __repr__(self) -> str:
        return f"KoreanDictionary(size={self.size})"
