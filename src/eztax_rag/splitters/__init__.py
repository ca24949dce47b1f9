from .base import BaseTextSplitter
from .sentence import (
    DEFAULT_CHUNK_OVERLAP,
    DEFAULT_CHUNK_SIZE,
    SentenceTextSplitter,
    split_sentences,
    split_text,
)

TextSplitter = SentenceTextSplitter

__all__ = [
    "BaseTextSplitter",
    "SentenceTextSplitter",
    "TextSplitter",
    "split_sentences",
    "split_text",
    "DEFAULT_CHUNK_SIZE",
    "DEFAULT_CHUNK_OVERLAP",
]
