from pathlib import Path
from typing import Any, Optional

import pytest

from eztax_rag.adapters.base import BaseEmbedder, BaseLLM
from eztax_rag.models import ChunkMetadata, ChunkRecord
from eztax_rag.stores import ChunkStoreCache, JSONChunkStore


class MockEmbedder(BaseEmbedder):
    """Mock embedder for testing.

    Texts listed in ``vectors`` get that vector, anything else a constant one.
    """

    def __init__(
        self,
        dimension: int = 2,
        vectors: Optional[dict[str, list[float]]] = None,
        **kwargs: Any,
    ):
        super().__init__("mock-embedder", **kwargs)
        self._dimension = dimension
        self.vectors = vectors or {}
        self.calls: list[str] = []

    def embed(self, text: str) -> list[float]:
        self.calls.append(text)
        if text in self.vectors:
            return list(self.vectors[text])
        return [0.1] * self._dimension


class FailingEmbedder(MockEmbedder):
    def __init__(self, fail_on_call: int = 1, **kwargs: Any):
        super().__init__(**kwargs)
        self.fail_on_call = fail_on_call

    def embed(self, text: str) -> list[float]:
        if len(self.calls) + 1 >= self.fail_on_call:
            self.calls.append(text)
            raise RuntimeError("embedding service unavailable")
        return super().embed(text)


class MockLLM(BaseLLM):
    """Mock LLM for testing.

    With ``echo=True`` the response is every message content joined together,
    which lets tests inspect the prompt through the answer.
    """

    def __init__(self, model: str = "mock-llm", echo: bool = False, **kwargs: Any):
        super().__init__(model, **kwargs)
        self.echo = echo
        self.calls: list[dict[str, Any]] = []

    def chat(self, messages: list[dict[str, str]], **kwargs: Any) -> str:
        self.calls.append({"messages": messages, **kwargs})
        if self.echo:
            return "\n".join(m["content"] for m in messages)
        return "Mock chat response"


class FailingLLM(MockLLM):
    def __init__(self, error: Exception, **kwargs: Any):
        super().__init__(**kwargs)
        self.error = error

    def chat(self, messages: list[dict[str, str]], **kwargs: Any) -> str:
        self.calls.append({"messages": messages, **kwargs})
        raise self.error


def make_record(
    source: str,
    content: str,
    embedding: list[float],
    index: int = 0,
    total: int = 1,
) -> ChunkRecord:
    return ChunkRecord(
        id=f"{source}_chunk_{index}",
        source=source,
        content=content,
        embedding=embedding,
        metadata=ChunkMetadata(file=source, chunk_index=index, total_chunks=total),
    )


@pytest.fixture
def mock_embedder() -> MockEmbedder:
    return MockEmbedder(dimension=2)


@pytest.fixture
def mock_llm() -> MockLLM:
    return MockLLM()


@pytest.fixture
def echo_llm() -> MockLLM:
    return MockLLM(echo=True)


@pytest.fixture
def temp_store(tmp_path: Path) -> JSONChunkStore:
    return JSONChunkStore(tmp_path / "storage" / "vector_store.json")


@pytest.fixture
def sample_records() -> list[ChunkRecord]:
    return [
        make_record(
            "standard_deduction.txt",
            "The standard deduction for single filers in 2024 is $14,600",
            [1.0, 0.0],
        ),
        make_record(
            "child_tax_credit.txt",
            "The Child Tax Credit is worth up to $2,000 per qualifying child",
            [0.0, 1.0],
        ),
        make_record(
            "retirement.txt",
            "The 2024 IRA contribution limit is $7,000",
            [0.6, 0.8],
        ),
    ]


@pytest.fixture
def sample_cache(
    temp_store: JSONChunkStore, sample_records: list[ChunkRecord]
) -> ChunkStoreCache:
    temp_store.save(sample_records)
    return ChunkStoreCache(temp_store)


@pytest.fixture
def kb_dir(tmp_path: Path) -> Path:
    directory = tmp_path / "kb"
    directory.mkdir()
    (directory / "b_credits.txt").write_text(
        "The Child Tax Credit is worth up to $2,000. It phases out above $200,000.",
        encoding="utf-8",
    )
    (directory / "a_deduction.txt").write_text(
        "The standard deduction for single filers in 2024 is $14,600! "
        "Married couples filing jointly get $29,200.",
        encoding="utf-8",
    )
    (directory / "notes.md").write_text("Not part of the knowledge base.")
    return directory


@pytest.fixture
def temp_config(tmp_path: Path, kb_dir: Path) -> Path:
    config_content = f"""
[embedding]
provider = "openai"
model = "text-embedding-3-small"

[llm]
provider = "openai"
model = "gpt-4o"

[storage]
path = "storage/vector_store.json"

[ingestion]
directory = "{kb_dir.name}"
chunk_size = 1000
chunk_overlap = 200
request_delay = 0

[retrieval]
top_k = 3
min_similarity = 0.1
"""
    config_path = tmp_path / "config.toml"
    config_path.write_text(config_content)
    return config_path
