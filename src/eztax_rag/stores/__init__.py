from pathlib import Path
from typing import Any

from .base import BaseChunkStore, StoreLoadError
from .cache import ChunkStoreCache
from .json_store import JSONChunkStore


def create_chunk_store(
    provider: str,
    path: Path | str,
    **kwargs: Any,
) -> BaseChunkStore:
    """Create a chunk store instance based on provider.

    Args:
        provider: Provider name (currently only "json" supported)
        path: Location of the persisted store
        **kwargs: Additional provider-specific parameters

    Returns:
        BaseChunkStore instance
    """
    if provider == "json":
        return JSONChunkStore(path, **kwargs)
    else:
        raise ValueError(f"Unknown chunk store provider: {provider}")


__all__ = [
    "BaseChunkStore",
    "ChunkStoreCache",
    "JSONChunkStore",
    "StoreLoadError",
    "create_chunk_store",
]
