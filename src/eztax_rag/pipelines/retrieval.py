import logging
from pathlib import Path
from typing import Any, Optional, Sequence

from ..adapters import BaseEmbedder, BaseLLM
from ..adapters.llm import DEFAULT_MAX_TOKENS, DEFAULT_TEMPERATURE
from ..adapters.utils import is_quota_error
from ..config import get_config_value, load_config
from ..messages import get_message
from ..models.chunk import QueryResult, ScoredChunk
from ..stores import ChunkStoreCache
from .base import (
    DEFAULT_LANGUAGE,
    DEFAULT_MIN_SIMILARITY,
    DEFAULT_TOP_K,
    create_embedder_from_config,
    create_llm_from_config,
    create_store_from_config,
)
from .prompts import build_system_prompt, build_user_prompt
from .similarity import cosine_similarities

logger = logging.getLogger(__name__)

HISTORY_TURNS = 4

_DEFAULT = object()


class RetrievalPipeline:
    """Retrieves knowledge-base chunks for a question and answers from them.

    Retrieval scores every stored chunk against the query embedding, keeps
    the ``top_k`` best and then drops those at or below ``min_similarity``
    (``None`` keeps everything). Neither retrieval nor answering raises on
    upstream failures: retrieval degrades to no chunks and answering to a
    fixed apology in ``language``.
    """

    def __init__(
        self,
        embedder: BaseEmbedder,
        llm: BaseLLM,
        cache: ChunkStoreCache,
        top_k: int = DEFAULT_TOP_K,
        min_similarity: Optional[float] = DEFAULT_MIN_SIMILARITY,
        language: str = DEFAULT_LANGUAGE,
        max_tokens: int = DEFAULT_MAX_TOKENS,
        temperature: float = DEFAULT_TEMPERATURE,
    ):
        self.embedder = embedder
        self.llm = llm
        self.cache = cache
        self.top_k = top_k
        self.min_similarity = min_similarity
        self.language = language
        self.max_tokens = max_tokens
        self.temperature = temperature

    @classmethod
    def from_config(
        cls,
        config: dict[str, Any],
        config_path: Path,
        cache: Optional[ChunkStoreCache] = None,
    ) -> "RetrievalPipeline":
        """Create pipeline from configuration dictionary."""
        embedder = create_embedder_from_config(config)
        llm = create_llm_from_config(config)

        if cache is None:
            cache = ChunkStoreCache(create_store_from_config(config, config_path))

        return cls(
            embedder=embedder,
            llm=llm,
            cache=cache,
            top_k=get_config_value(config, "retrieval.top_k", DEFAULT_TOP_K),
            min_similarity=get_config_value(
                config, "retrieval.min_similarity", DEFAULT_MIN_SIMILARITY
            ),
            language=get_config_value(config, "retrieval.language", DEFAULT_LANGUAGE),
            max_tokens=get_config_value(
                config, "retrieval.max_tokens", DEFAULT_MAX_TOKENS
            ),
            temperature=get_config_value(
                config, "retrieval.temperature", DEFAULT_TEMPERATURE
            ),
        )

    def retrieve(
        self,
        query: str,
        top_k: Optional[int] = None,
        min_similarity: Any = _DEFAULT,
    ) -> list[ScoredChunk]:
        """Return the chunks most similar to ``query``, best first.

        Args:
            query: The user's question.
            top_k: Maximum number of chunks, defaults to ``self.top_k``.
            min_similarity: Exclusive similarity floor; ``None`` disables it.
                Defaults to ``self.min_similarity``.
        """
        if not query or not query.strip():
            raise ValueError("Query must be a non-empty string")

        k = self.top_k if top_k is None else top_k
        if k < 0:
            raise ValueError(f"top_k must not be negative, got {k}")
        floor = self.min_similarity if min_similarity is _DEFAULT else min_similarity

        records = self.cache.get()
        if not records:
            return []

        logger.info(f"Embedding query: {query[:50]}...")
        try:
            query_embedding = self.embedder.embed(query)
        except Exception as e:
            logger.error(f"Query embedding failed: {e}")
            return []

        try:
            similarities = cosine_similarities(query_embedding, self.cache.matrix())
        except ValueError as e:
            logger.error(f"Cannot score query against the vector store: {e}")
            return []

        ranked = sorted(
            range(len(records)), key=lambda i: similarities[i], reverse=True
        )[:k]

        results = [
            ScoredChunk(
                id=records[i].id,
                source=records[i].source,
                content=records[i].content,
                embedding=records[i].embedding,
                metadata=records[i].metadata,
                similarity=float(similarities[i]),
            )
            for i in ranked
        ]
        if floor is not None:
            results = [r for r in results if r.similarity > floor]

        logger.info(f"Found {len(results)} results")
        return results

    def build_messages(
        self,
        query: str,
        chunks: Sequence[ScoredChunk],
        context: str = "",
        history: Optional[Sequence[dict[str, str]]] = None,
        language: Optional[str] = None,
    ) -> list[dict[str, str]]:
        language = language or self.language
        messages = [
            {"role": "system", "content": build_system_prompt(language, context)}
        ]
        if history:
            messages.extend(
                {"role": m["role"], "content": m["content"]}
                for m in history[-HISTORY_TURNS:]
            )
        messages.append(
            {"role": "user", "content": build_user_prompt(query, chunks, language)}
        )
        return messages

    def _answer(
        self,
        query: str,
        chunks: Sequence[ScoredChunk],
        context: str,
        history: Optional[Sequence[dict[str, str]]],
        language: str,
    ) -> tuple[str, Optional[str]]:
        if not chunks:
            return get_message("no_results", language), None

        messages = self.build_messages(query, chunks, context, history, language)

        logger.info("Generating response...")
        try:
            answer = self.llm.chat(
                messages,
                max_tokens=self.max_tokens,
                temperature=self.temperature,
            )
        except Exception as e:
            if is_quota_error(e):
                logger.error(f"Generation quota exceeded: {e}")
                return get_message("generation_failed", language), "quota_exceeded"
            logger.error(f"Answer generation failed: {e}")
            return get_message("generation_failed", language), "generation_failed"

        if not answer:
            return get_message("generation_failed", language), "generation_failed"
        return answer, None

    def answer(
        self,
        query: str,
        chunks: Sequence[ScoredChunk],
        context: str = "",
        history: Optional[Sequence[dict[str, str]]] = None,
        language: Optional[str] = None,
    ) -> str:
        """Generate an answer grounded in ``chunks``.

        Returns the "no relevant information" message without calling the
        LLM when ``chunks`` is empty, and an apology when generation fails.
        """
        text, _ = self._answer(
            query, chunks, context, history, language or self.language
        )
        return text

    def query(
        self,
        query: str,
        context: str = "",
        history: Optional[Sequence[dict[str, str]]] = None,
        language: Optional[str] = None,
    ) -> QueryResult:
        """Execute a full RAG query: retrieve and generate."""
        chunks = self.retrieve(query)
        text, error = self._answer(
            query, chunks, context, history, language or self.language
        )
        return QueryResult(answer=text, chunks=chunks, error=error)


def get_retrieval_pipeline(
    config_path: Path = Path("config.toml"),
) -> RetrievalPipeline:
    """Create a retrieval pipeline from config."""
    config = load_config(config_path)
    return RetrievalPipeline.from_config(config, config_path)
