from abc import ABC, abstractmethod

from ..models.chunk import ChunkRecord


class StoreLoadError(Exception):
    """The persisted store exists but cannot be parsed."""


class BaseChunkStore(ABC):
    """Abstract base class for persisted chunk stores."""

    @abstractmethod
    def load(self) -> list[ChunkRecord]:
        """Load every record.

        Raises:
            FileNotFoundError: If the store has not been built.
            StoreLoadError: If the store cannot be parsed.
        """
        pass

    @abstractmethod
    def save(self, records: list[ChunkRecord]) -> None:
        """Replace the whole store with ``records``."""
        pass
