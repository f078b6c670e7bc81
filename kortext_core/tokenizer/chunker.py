"""
청크 분할기
문자 클래스가 바뀌는 위치와 구조 토큰(URL, 이메일, 해시태그 등)을 기준으로
텍스트를 청크로 나눈다. 글자 청크만 사전 기반 분절 대상이 된다.
"""

from dataclasses import dataclass
from typing import List, Optional

from ..models import KoreanPos
from ..hangul.char_classifier import (CharClass, LETTER_CLASSES, classify,
                                      scan_structure)

# 분절 없이 고정 품사가 되는 문자 클래스
FIXED_POS = {
    CharClass.SPACE: KoreanPos.SPACE,
    CharClass.PUNCTUATION: KoreanPos.PUNCTUATION,
    CharClass.KOREAN_PARTICLE: KoreanPos.KOREAN_PARTICLE,
    CharClass.NUMBER: KoreanPos.NUMBER,
    CharClass.HASHTAG_MARKER: KoreanPos.PUNCTUATION,
    CharClass.SCREEN_NAME_MARKER: KoreanPos.PUNCTUATION,
    CharClass.CASHTAG_MARKER: KoreanPos.PUNCTUATION,
    CharClass.HANGUL_JAMO: KoreanPos.KOREAN,
    CharClass.OTHER: KoreanPos.UNKNOWN,
}

# 사전 근거 없이 만들어지는 고정 품사 청크
UNKNOWN_CLASSES = frozenset({CharClass.HANGUL_JAMO, CharClass.OTHER})

# 미등록 글자 청크의 품사
UNKNOWN_LETTER_POS = {
    CharClass.HANGUL_SYLLABLE: KoreanPos.NOUN,
    CharClass.ALPHA: KoreanPos.ALPHA,
    CharClass.FOREIGN: KoreanPos.FOREIGN,
}


@dataclass(frozen=True)
class Chunk:
    """청크 (offset은 전체 텍스트 기준)"""
    text: str
    offset: int
    char_class: Optional[CharClass]
    pos: Optional[KoreanPos] = None

    @property
    def length(self) -> int:
        return len(self.text)

    @property
    def end(self) -> int:
        return self.offset + len(self.text)

    @property
    def needs_segmentation(self) -> bool:
        return self.pos is None and self.char_class in LETTER_CLASSES

    @property
    def unknown(self) -> bool:
        return self.char_class in UNKNOWN_CLASSES


def chunk_text(text: str) -> List[Chunk]:
    """
    텍스트를 청크로 분할

    구조 토큰 스캐너가 일치하면 우선 적용하고, 그 외에는 같은 문자 클래스가
    이어지는 최대 구간을 하나의 청크로 만든다. OTHER 클래스는 문자마다 청크.

    Args:
        text: 대상 텍스트

    Returns:
        Chunk 리스트 (이어 붙이면 원문과 같음)
    """
    chunks: List[Chunk] = []
    offset = 0
    length = len(text)

    while offset < length:
        structure = scan_structure(text, offset)
        if structure is not None:
            pos, size = structure
            chunks.append(Chunk(text[offset:offset + size], offset, None, pos))
            offset += size
            continue

        char_class = classify(text[offset])
        end = offset + 1
        if char_class is not CharClass.OTHER:
            while (end < length and classify(text[end]) is char_class
                   and scan_structure(text, end) is None):
                end += 1

        chunks.append(
            Chunk(text[offset:end], offset, char_class,
                  FIXED_POS.get(char_class)))
        offset = end

    return chunks
