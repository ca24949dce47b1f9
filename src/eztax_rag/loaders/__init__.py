from pathlib import Path
from typing import Any

from .base import BaseDocumentLoader
from .text import DEFAULT_EXTENSIONS, TextDocumentLoader


def create_loader(
    provider: str,
    directory: Path | str,
    **kwargs: Any,
) -> BaseDocumentLoader:
    """Create a document loader based on provider.

    Args:
        provider: Provider name ("text" or "auto")
        directory: Directory to load documents from
        **kwargs: Additional provider-specific parameters

    Returns:
        BaseDocumentLoader instance
    """
    if provider in ("text", "auto"):
        return TextDocumentLoader(directory, **kwargs)
    else:
        raise ValueError(f"Unknown loader provider: {provider}")


__all__ = [
    "BaseDocumentLoader",
    "TextDocumentLoader",
    "DEFAULT_EXTENSIONS",
    "create_loader",
]
