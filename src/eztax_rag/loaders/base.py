from abc import ABC, abstractmethod
from pathlib import Path


class BaseDocumentLoader(ABC):
    """Abstract base class for knowledge-base document loaders."""

    @abstractmethod
    def discover(self) -> list[Path]:
        """List the files to ingest, in a stable order."""
        pass

    @abstractmethod
    def load_file(self, file_path: Path | str) -> str:
        """Return the full text of a single file."""
        pass
