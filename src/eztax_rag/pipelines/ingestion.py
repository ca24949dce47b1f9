import logging
import time
from concurrent.futures import ThreadPoolExecutor, as_completed
from pathlib import Path
from typing import Any, NamedTuple, Optional

from ..adapters import BaseEmbedder
from ..config import get_config_value, get_kb_dir, load_config
from ..loaders import DEFAULT_EXTENSIONS, BaseDocumentLoader, create_loader
from ..models.chunk import ChunkMetadata, ChunkRecord
from ..splitters import (
    DEFAULT_CHUNK_OVERLAP,
    DEFAULT_CHUNK_SIZE,
    BaseTextSplitter,
    TextSplitter,
)
from ..stores import BaseChunkStore
from .base import (
    DEFAULT_REQUEST_DELAY,
    create_embedder_from_config,
    create_store_from_config,
)

logger = logging.getLogger(__name__)


class PendingChunk(NamedTuple):
    source: str
    index: int
    total: int
    text: str


class IngestionPipeline:
    """Builds the chunk store from every document of the knowledge base.

    Chunks are embedded one request at a time with ``request_delay`` seconds
    between requests. With ``max_workers > 1`` a bounded thread pool embeds
    them instead; records are still written in file order, then chunk order.
    Any embedding failure aborts the build before the store is written.
    """

    def __init__(
        self,
        embedder: BaseEmbedder,
        splitter: BaseTextSplitter,
        loader: BaseDocumentLoader,
        store: BaseChunkStore,
        request_delay: float = DEFAULT_REQUEST_DELAY,
        max_workers: int = 1,
    ):
        self.embedder = embedder
        self.splitter = splitter
        self.loader = loader
        self.store = store
        self.request_delay = request_delay
        self.max_workers = max(1, max_workers)

    @classmethod
    def from_config(
        cls,
        config: dict[str, Any],
        config_path: Path,
        kb_dir: Optional[Path] = None,
        store: Optional[BaseChunkStore] = None,
    ) -> "IngestionPipeline":
        """Create pipeline from configuration dictionary."""
        embedder = create_embedder_from_config(config)

        chunk_size = get_config_value(
            config, "ingestion.chunk_size", DEFAULT_CHUNK_SIZE
        )
        chunk_overlap = get_config_value(
            config, "ingestion.chunk_overlap", DEFAULT_CHUNK_OVERLAP
        )
        splitter = TextSplitter(chunk_size=chunk_size, chunk_overlap=chunk_overlap)

        loader = create_loader(
            get_config_value(config, "ingestion.loader", "text"),
            kb_dir or get_kb_dir(config, config_path),
            extensions=get_config_value(
                config, "ingestion.extensions", list(DEFAULT_EXTENSIONS)
            ),
        )

        return cls(
            embedder=embedder,
            splitter=splitter,
            loader=loader,
            store=store or create_store_from_config(config, config_path),
            request_delay=get_config_value(
                config, "ingestion.request_delay", DEFAULT_REQUEST_DELAY
            ),
            max_workers=get_config_value(config, "ingestion.max_workers", 1),
        )

    def split_file(self, file_path: Path) -> list[PendingChunk]:
        """Read and chunk one document."""
        text = self.loader.load_file(file_path)
        chunks = self.splitter.split_text(text)
        return [
            PendingChunk(file_path.name, i, len(chunks), chunk)
            for i, chunk in enumerate(chunks)
        ]

    def _embed_sequential(self, pending: list[PendingChunk]) -> list[list[float]]:
        embeddings = []
        for n, chunk in enumerate(pending):
            logger.info(
                f"Embedding {chunk.source} chunk {chunk.index + 1}/{chunk.total}"
            )
            embeddings.append(self.embedder.embed(chunk.text))
            if self.request_delay and n < len(pending) - 1:
                time.sleep(self.request_delay)
        return embeddings

    def _embed_parallel(self, pending: list[PendingChunk]) -> list[list[float]]:
        results: list[Optional[list[float]]] = [None] * len(pending)
        errors: list[tuple[int, Exception]] = []

        def embed_with_index(idx: int) -> tuple[int, list[float]]:
            embedding = self.embedder.embed(pending[idx].text)
            if self.request_delay:
                time.sleep(self.request_delay)
            return idx, embedding

        with ThreadPoolExecutor(max_workers=self.max_workers) as executor:
            futures = {
                executor.submit(embed_with_index, i): i for i in range(len(pending))
            }

            for future in as_completed(futures):
                idx = futures[future]
                try:
                    _, embedding = future.result()
                    results[idx] = embedding
                except Exception as e:
                    errors.append((idx, e))

        if errors:
            errors.sort(key=lambda item: item[0])
            failed = [f"{pending[idx].source}#{pending[idx].index}" for idx, _ in errors]
            first_error = errors[0][1]
            raise RuntimeError(
                f"Embedding failed for {len(errors)}/{len(pending)} chunks "
                f"({', '.join(failed)}). First error: {first_error}"
            ) from first_error

        return results  # type: ignore

    def embed_chunks(self, pending: list[PendingChunk]) -> list[ChunkRecord]:
        if not pending:
            return []

        if self.max_workers > 1:
            embeddings = self._embed_parallel(pending)
        else:
            embeddings = self._embed_sequential(pending)

        dimensions = {len(e) for e in embeddings}
        if len(dimensions) != 1:
            raise ValueError(
                f"Embedding service returned mixed dimensions: {sorted(dimensions)}"
            )

        return [
            ChunkRecord(
                id=f"{chunk.source}_chunk_{chunk.index}",
                source=chunk.source,
                content=chunk.text,
                embedding=embedding,
                metadata=ChunkMetadata(
                    file=chunk.source,
                    chunk_index=chunk.index,
                    total_chunks=chunk.total,
                ),
            )
            for chunk, embedding in zip(pending, embeddings)
        ]

    def build(self) -> dict[str, Any]:
        """Rebuild the whole store from the knowledge-base directory."""
        files = self.loader.discover()
        logger.info(f"Building vector store from {len(files)} documents")

        pending: list[PendingChunk] = []
        for file_path in files:
            file_chunks = self.split_file(file_path)
            logger.info(f"Processing {file_path.name}: {len(file_chunks)} chunks")
            pending.extend(file_chunks)

        records = self.embed_chunks(pending)
        self.store.save(records)

        return {
            "documents": len(files),
            "chunks": len(pending),
            "embeddings": len(records),
            "total_vectors": len(records),
        }


def run_ingestion(
    config_path: Path = Path("config.toml"),
    kb_dir: Optional[Path] = None,
    store: Optional[BaseChunkStore] = None,
) -> dict[str, Any]:
    """Build the chunk store described by a configuration file.

    Args:
        config_path: Path to configuration file.
        kb_dir: Overrides the configured knowledge-base directory.
        store: Overrides the configured store.

    Returns:
        Dictionary with ingestion results.
    """
    config = load_config(config_path)
    pipeline = IngestionPipeline.from_config(
        config, config_path, kb_dir=kb_dir, store=store
    )
    return pipeline.build()
