import re

from .base import BaseTextSplitter

DEFAULT_CHUNK_SIZE = 1000
DEFAULT_CHUNK_OVERLAP = 200

# Average characters per word (including the separating space) used to turn
# the character overlap budget into a word count.
CHARS_PER_WORD = 6

SENTENCE_TERMINATORS = re.compile(r"[.!?]+")


def split_sentences(text: str) -> list[str]:
    """Split text on runs of '.', '!' and '?', dropping blank fragments."""
    return [s.strip() for s in SENTENCE_TERMINATORS.split(text) if s.strip()]


class SentenceTextSplitter(BaseTextSplitter):
    """Packs sentences into chunks of at most ``chunk_size`` characters.

    A chunk is closed when the next sentence would push it past
    ``chunk_size``; the following chunk starts with the last
    ``chunk_overlap // 6`` words of the closed one. A sentence longer than
    ``chunk_size`` still becomes a chunk of its own.
    """

    def __init__(
        self,
        chunk_size: int = DEFAULT_CHUNK_SIZE,
        chunk_overlap: int = DEFAULT_CHUNK_OVERLAP,
    ):
        if chunk_size <= 0:
            raise ValueError("chunk_size must be positive")
        if chunk_overlap < 0:
            raise ValueError("chunk_overlap must not be negative")
        self.chunk_size = chunk_size
        self.chunk_overlap = chunk_overlap

    @property
    def overlap_words(self) -> int:
        return self.chunk_overlap // CHARS_PER_WORD

    def split_text(self, text: str) -> list[str]:
        chunks: list[str] = []
        current = ""

        for sentence in split_sentences(text):
            if current and len(current) + len(sentence) > self.chunk_size:
                chunks.append(current.strip())
                current = self._overlap_seed(current) + sentence
            elif current:
                current += ". " + sentence
            else:
                current = sentence

        if current.strip():
            chunks.append(current.strip())

        return chunks

    def _overlap_seed(self, chunk: str) -> str:
        # Under one word of overlap, the next chunk starts empty.
        if self.overlap_words == 0:
            return ""
        words = chunk.split(" ")[-self.overlap_words :]
        return " ".join(words) + " "


def split_text(
    text: str,
    max_chunk_size: int = DEFAULT_CHUNK_SIZE,
    overlap: int = DEFAULT_CHUNK_OVERLAP,
) -> list[str]:
    return SentenceTextSplitter(max_chunk_size, overlap).split_text(text)
