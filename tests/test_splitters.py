import pytest

from eztax_rag.splitters import (
    SentenceTextSplitter,
    TextSplitter,
    split_sentences,
    split_text,
)


class TestSplitSentences:
    def test_splits_on_terminator_runs(self) -> None:
        assert split_sentences("One. Two!! Three?! Four") == [
            "One",
            "Two",
            "Three",
            "Four",
        ]

    def test_drops_blank_fragments(self) -> None:
        assert split_sentences("...  !  ?") == []
        assert split_sentences("") == []


class TestSentenceTextSplitter:
    def test_short_text_is_single_chunk(self) -> None:
        splitter = TextSplitter()
        chunks = splitter.split_text("First sentence. Second one! Third?")
        assert chunks == ["First sentence. Second one. Third"]

    def test_empty_text_has_no_chunks(self) -> None:
        assert TextSplitter().split_text("") == []
        assert TextSplitter().split_text("   ") == []

    def test_long_sentence_becomes_own_chunk(self) -> None:
        splitter = SentenceTextSplitter(chunk_size=10, chunk_overlap=0)
        chunks = splitter.split_text("Short. This is a much longer sentence. End")
        assert chunks == ["Short", "This is a much longer sentence", "End"]

    def test_overlap_carries_trailing_words(self) -> None:
        splitter = SentenceTextSplitter(chunk_size=20, chunk_overlap=12)
        assert splitter.overlap_words == 2

        chunks = splitter.split_text("alpha beta gamma delta. epsilon zeta")

        assert chunks == ["alpha beta gamma delta", "gamma delta epsilon zeta"]

    def test_overlap_below_one_word_carries_nothing(self) -> None:
        splitter = SentenceTextSplitter(chunk_size=20, chunk_overlap=5)
        assert splitter.overlap_words == 0

        chunks = splitter.split_text("alpha beta gamma delta. epsilon zeta")

        assert chunks == ["alpha beta gamma delta", "epsilon zeta"]

    def test_no_sentence_is_dropped(self) -> None:
        sentences = [f"Sentence number {i} talks about tax rule {i}" for i in range(40)]
        text = ". ".join(sentences) + "."
        splitter = SentenceTextSplitter(chunk_size=200, chunk_overlap=30)

        chunks = splitter.split_text(text)

        assert len(chunks) > 1
        for sentence in sentences:
            assert any(sentence in chunk for chunk in chunks)

    def test_chunks_respect_size_when_sentences_fit(self) -> None:
        text = "Tax rule. " * 200
        splitter = SentenceTextSplitter(chunk_size=100, chunk_overlap=0)

        chunks = splitter.split_text(text)

        assert all(len(chunk) <= 100 for chunk in chunks)
        assert all(chunk == chunk.strip() and chunk for chunk in chunks)

    def test_is_deterministic(self) -> None:
        text = "The standard deduction is $14,600. " * 50
        splitter = SentenceTextSplitter(chunk_size=120, chunk_overlap=24)
        assert splitter.split_text(text) == splitter.split_text(text)

    def test_rejects_invalid_sizes(self) -> None:
        with pytest.raises(ValueError):
            SentenceTextSplitter(chunk_size=0)
        with pytest.raises(ValueError):
            SentenceTextSplitter(chunk_size=100, chunk_overlap=-1)


class TestSplitText:
    def test_matches_splitter(self) -> None:
        text = "The standard deduction is $14,600. It is adjusted every year! " * 30
        assert split_text(text, 300, 60) == SentenceTextSplitter(300, 60).split_text(
            text
        )

    def test_defaults(self) -> None:
        assert split_text("One. Two") == ["One. Two"]
