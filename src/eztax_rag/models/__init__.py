from .chat import ChatMessage, ChatRequest, ChatResponse, ChatSource
from .chunk import ChunkMetadata, ChunkRecord, QueryResult, ScoredChunk

__all__ = [
    "ChatMessage",
    "ChatRequest",
    "ChatResponse",
    "ChatSource",
    "ChunkMetadata",
    "ChunkRecord",
    "QueryResult",
    "ScoredChunk",
]
