"""
문장 분리기
원문(정규화 전)을 종결 부호와 따옴표 / 괄호 균형을 기준으로 문장 구간으로 분리

    안녕하세요. 반가워요!      -> [안녕하세요.] [반가워요!]
    그가 "정말? 왜." 물었다.   -> [그가 "정말? 왜." 물었다.]
    좋아ㅋㅋ 내일 봐~          -> [좋아ㅋㅋ] [내일 봐~]
"""

from typing import List, Optional
import logging

from ..config import settings
from ..models import Sentence
from ..hangul.char_classifier import CharClass, classify
from ..utils.error_handler import ensure_text

logger = logging.getLogger(__name__)

# 문장 종결 부호
TERMINALS = frozenset('.!?…。！？~～')

# 여는 괄호 -> 닫는 괄호
BRACKETS = {
    '(': ')',
    '[': ']',
    '{': '}',
    '“': '”',
    '‘': '’',
    '「': '」',
    '『': '』',
    '《': '》',
    '〈': '〉',
    '（': '）',
}
CLOSERS = frozenset(BRACKETS.values())

# 여닫는 기호가 같은 따옴표
TOGGLE_QUOTES = frozenset('"\'')


def _is_latin_letter(char: Optional[str]) -> bool:
    return char is not None and char.isascii() and char.isalpha()


class KoreanSentenceSplitter:
    """문장 분리기 (토큰화와 독립적으로 원문만 사용)"""

    def __init__(self, split_on_newline: Optional[bool] = None):
        if split_on_newline is None:
            split_on_newline = settings.SENTENCE_SPLIT_ON_NEWLINE
        self.split_on_newline = split_on_newline

    @staticmethod
    def is_terminal(char: str) -> bool:
        """종결 부호 또는 감정 표현 자모(ㅋ, ㅠ 등)인지"""
        return char in TERMINALS or classify(char) is CharClass.KOREAN_PARTICLE

    def split(self, text: str) -> List[Sentence]:
        """
        문장 분리

        종결 부호 뒤에 공백이나 텍스트 끝이 오고 열린 따옴표 / 괄호가 없을 때
        문장이 끝난다. 연속된 종결 부호와 닫는 괄호는 앞 문장에 포함된다.

        Args:
            text: 원문

        Returns:
            Sentence 리스트 (원문 기준 offset, 앞뒤 공백 제외)
        """
        text = ensure_text(text)
        sentences: List[Sentence] = []
        stack: List[str] = []
        start = 0
        index = 0
        length = len(text)

        while index < length:
            char = text[index]

            if char == '\n':
                # 줄이 바뀌면 닫히지 않은 따옴표는 무시
                stack.clear()
                if self.split_on_newline:
                    self._append(sentences, text, start, index)
                    start = index + 1
                index += 1
                continue

            if char in TOGGLE_QUOTES:
                previous = text[index - 1] if index > 0 else None
                following = text[index + 1] if index + 1 < length else None
                apostrophe = (char == "'" and _is_latin_letter(previous)
                              and _is_latin_letter(following))
                if not apostrophe:
                    if stack and stack[-1] == char:
                        stack.pop()
                    else:
                        stack.append(char)
            elif char in BRACKETS:
                stack.append(BRACKETS[char])
            elif char in CLOSERS:
                if stack and stack[-1] == char:
                    stack.pop()
            elif not stack and self.is_terminal(char):
                end = self._terminal_end(text, index + 1)
                if end == length or text[end].isspace():
                    self._append(sentences, text, start, end)
                    start = end
                    index = end
                    continue

            index += 1

        self._append(sentences, text, start, length)
        logger.debug(f"문장 분리: {len(sentences)}개")
        return sentences

    def _terminal_end(self, text: str, index: int) -> int:
        """종결 부호 뒤에 이어지는 종결 부호 / 닫는 괄호까지 포함한 끝 위치"""
        while index < len(text) and (self.is_terminal(text[index])
                                     or text[index] in CLOSERS):
            index += 1
        return index

    @staticmethod
    def _append(sentences: List[Sentence], text: str, start: int, end: int):
        while start < end and text[start].isspace():
            start += 1
        while end > start and text[end - 1].isspace():
            end -= 1
        if start < end:
            sentences.append(Sentence(text[start:end], start, end))
