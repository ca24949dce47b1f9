"""Data models for the knowledge-base store."""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class ChunkMetadata(BaseModel):
    """Provenance of a chunk within its source document.

    Serialized with camelCase keys (``chunkIndex``, ``totalChunks``) so the
    artifact keeps the same shape the web backend reads.
    """

    model_config = ConfigDict(populate_by_name=True)

    file: str
    chunk_index: int = Field(alias="chunkIndex", ge=0)
    total_chunks: int = Field(alias="totalChunks", ge=1)


class ChunkRecord(BaseModel):
    """Persisted unit of retrievable knowledge.

    Attributes:
        id: ``{source}_chunk_{index}``, unique within a store.
        source: The source file name (e.g., "standard_deduction.txt").
        content: The chunk text.
        embedding: Vector returned by the embedding service.
        metadata: Position of the chunk within its source.
    """

    id: str
    source: str
    content: str = Field(min_length=1)
    embedding: list[float] = Field(min_length=1)
    metadata: ChunkMetadata

    def to_json_dict(self) -> dict:
        return self.model_dump(by_alias=True)


class ScoredChunk(ChunkRecord):
    """A chunk record with its similarity to the current query."""

    similarity: float


class QueryResult(BaseModel):
    """Outcome of a full retrieve-and-answer run.

    Attributes:
        answer: Text shown to the user, always present.
        chunks: The chunks the answer was grounded on.
        error: ``None`` on success, otherwise "generation_failed" or
            "quota_exceeded".
    """

    answer: str
    chunks: list[ScoredChunk] = Field(default_factory=list)
    error: Optional[str] = None
