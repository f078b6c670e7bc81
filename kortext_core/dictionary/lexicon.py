"""
기본 어휘 리소스 목록
resources/<파일>.txt 한 줄에 한 단어, '# '으로 시작하는 줄은 주석
"""

from functools import lru_cache
from pathlib import Path
from typing import FrozenSet, Union
import logging

from ..config import settings
from ..models import KoreanPos
from ..utils.file_handler import FileHandler

logger = logging.getLogger(__name__)

# 파일 이름 -> 품사
LEXICON_FILES = {
    "noun": KoreanPos.NOUN,
    "proper_noun": KoreanPos.PROPER_NOUN,
    "verb": KoreanPos.VERB,
    "adjective": KoreanPos.ADJECTIVE,
    "adverb": KoreanPos.ADVERB,
    "determiner": KoreanPos.DETERMINER,
    "exclamation": KoreanPos.EXCLAMATION,
    "josa": KoreanPos.JOSA,
    "eomi": KoreanPos.EOMI,
    "pre_eomi": KoreanPos.PRE_EOMI,
    "conjunction": KoreanPos.CONJUNCTION,
    "modifier": KoreanPos.MODIFIER,
    "verb_prefix": KoreanPos.VERB_PREFIX,
    "suffix": KoreanPos.SUFFIX,
}


@lru_cache(maxsize=4)
def _read_spam_nouns(path: Path) -> FrozenSet[str]:
    words = frozenset(FileHandler.read_word_list(path))
    logger.debug(f"스팸 명사 로드: {len(words)}개")
    return words


def load_spam_nouns(path: Union[str, Path, None] = None) -> FrozenSet[str]:
    """
    스팸 필터용 명사 목록

    Args:
        path: 파일 경로 (None이면 설정된 어휘 디렉토리의 spam_nouns.txt)

    Returns:
        명사 집합
    """
    path = Path(path) if path else settings.LEXICON_DIR / settings.SPAM_NOUNS_FILE
    return _read_spam_nouns(path)
