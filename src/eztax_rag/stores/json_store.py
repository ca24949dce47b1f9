import json
import logging
from pathlib import Path

from pydantic import TypeAdapter, ValidationError

from ..models.chunk import ChunkRecord
from .base import BaseChunkStore, StoreLoadError

logger = logging.getLogger(__name__)

_RECORDS = TypeAdapter(list[ChunkRecord])


class JSONChunkStore(BaseChunkStore):
    """Chunk store persisted as a single JSON array.

    Every record keeps its embedding inline, so the file alone is enough to
    answer queries. Saving rewrites the file in full.
    """

    def __init__(self, path: Path | str):
        self.path = Path(path)

    def load(self) -> list[ChunkRecord]:
        if not self.path.exists():
            raise FileNotFoundError(f"Vector store not found: {self.path}")

        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
            return _RECORDS.validate_python(data)
        except (json.JSONDecodeError, UnicodeDecodeError, ValidationError) as e:
            raise StoreLoadError(f"Failed to load vector store {self.path}: {e}") from e

    def save(self, records: list[ChunkRecord]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.path, "w", encoding="utf-8") as f:
            json.dump(
                [record.to_json_dict() for record in records],
                f,
                indent=2,
                ensure_ascii=False,
            )
        logger.info(f"Saved {len(records)} chunks to {self.path}")
