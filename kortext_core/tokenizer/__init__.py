"""
토크나이저 모듈
"""

from .chunker import Chunk, chunk_text
from .korean_tokenizer import KoreanTokenizer, transition_penalty

__all__ = [
    "Chunk",
    "chunk_text",
    "KoreanTokenizer",
    "transition_penalty",
]
