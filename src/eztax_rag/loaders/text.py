from pathlib import Path
from typing import Iterable, Optional

from .base import BaseDocumentLoader

DEFAULT_EXTENSIONS = (".txt",)


class TextDocumentLoader(BaseDocumentLoader):
    """Loads knowledge-base documents from a directory using llama-index.

    Only the top level of the directory is scanned. ``extensions`` limits
    which files are picked up; an empty sequence or ``None`` accepts every
    file.
    """

    def __init__(
        self,
        directory: Path | str,
        extensions: Optional[Iterable[str]] = DEFAULT_EXTENSIONS,
    ):
        self.directory = Path(directory)
        self.extensions = {e.lower() for e in extensions} if extensions else set()

    def discover(self) -> list[Path]:
        if not self.directory.exists():
            raise FileNotFoundError(f"Directory not found: {self.directory}")

        files = [
            path
            for path in self.directory.iterdir()
            if path.is_file() and not path.name.startswith(".")
        ]
        if self.extensions:
            files = [f for f in files if f.suffix.lower() in self.extensions]
        return sorted(files, key=lambda p: p.name)

    def load_file(self, file_path: Path | str) -> str:
        from llama_index.core import SimpleDirectoryReader

        reader = SimpleDirectoryReader(input_files=[str(file_path)])
        documents = reader.load_data()
        return "\n\n".join(doc.text for doc in documents)
