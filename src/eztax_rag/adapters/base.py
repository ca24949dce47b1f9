from abc import ABC, abstractmethod
from typing import Any


class BaseEmbedder(ABC):
    """Turns a piece of text into an embedding vector."""

    def __init__(self, model: str, **kwargs: Any):
        self.model = model
        self.kwargs = kwargs

    @abstractmethod
    def embed(self, text: str) -> list[float]:
        pass


class BaseLLM(ABC):
    """Answers a chat conversation with a single completion."""

    def __init__(self, model: str, **kwargs: Any):
        self.model = model
        self.kwargs = kwargs

    @abstractmethod
    def chat(self, messages: list[dict[str, str]], **kwargs: Any) -> str:
        """Complete ``messages``; ``max_tokens`` and ``temperature`` override
        the adapter defaults for this call."""
        pass
