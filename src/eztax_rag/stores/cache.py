import logging
from typing import Optional

import numpy as np

from ..models.chunk import ChunkRecord
from .base import BaseChunkStore, StoreLoadError

logger = logging.getLogger(__name__)


class ChunkStoreCache:
    """Read-through cache over a chunk store.

    The first ``get()`` loads the store; later calls return the same records
    until ``invalidate()`` is called. A missing or unreadable store reads as
    empty and is retried on the next call.
    Records passed to the constructor are checked the same way and raise
    ``StoreLoadError`` when their embedding dimensions differ.
    """

    def __init__(
        self,
        store: BaseChunkStore,
        records: Optional[list[ChunkRecord]] = None,
    ):
        self.store = store
        self._records: Optional[list[ChunkRecord]] = None
        self._matrix: Optional[np.ndarray] = None
        if records is not None:
            self._set(records)

    @property
    def loaded(self) -> bool:
        return self._records is not None

    def get(self) -> list[ChunkRecord]:
        if self._records is None:
            try:
                self._set(self.store.load())
            except FileNotFoundError as e:
                logger.warning(f"{e}. Build the store with eztax-seed first.")
                return []
            except StoreLoadError as e:
                logger.error(str(e))
                return []
            logger.info(f"Loaded vector store: {len(self._records)} chunks")
        return self._records

    def matrix(self) -> np.ndarray:
        """Embeddings of ``get()`` stacked row by row."""
        if not self.get():
            return np.zeros((0, 0), dtype=np.float64)
        return self._matrix

    def invalidate(self) -> None:
        self._records = None
        self._matrix = None

    def _set(self, records: list[ChunkRecord]) -> None:
        """Raises StoreLoadError when the records mix embedding dimensions."""
        dimensions = {len(r.embedding) for r in records}
        if len(dimensions) > 1:
            raise StoreLoadError(
                f"Vector store mixes embedding dimensions {sorted(dimensions)}; "
                "rebuild it with a single embedding model"
            )
        self._matrix = np.array([r.embedding for r in records], dtype=np.float64)
        self._records = records
