from typing import Any, Optional

from openai import OpenAI

from .base import BaseEmbedder
from .utils import create_session_with_pooling, require_openai_api_key


class OpenAIEmbedder(BaseEmbedder):
    """OpenAI embedding provider.

    ``dimensions`` asks the text-embedding-3 models for shortened vectors;
    leave it unset to keep the model's native size.
    """

    def __init__(self, model: str = "text-embedding-3-small", **kwargs: Any):
        api_key = require_openai_api_key(kwargs.pop("api_key", None))
        base_url = kwargs.pop("base_url", None)
        self.dimensions: Optional[int] = kwargs.pop("dimensions", None)
        super().__init__(model, **kwargs)

        self.client = OpenAI(api_key=api_key, base_url=base_url)

    def embed(self, text: str) -> list[float]:
        params: dict[str, Any] = {"model": self.model, "input": text}
        if self.dimensions is not None:
            params["dimensions"] = self.dimensions
        response = self.client.embeddings.create(**params)
        return response.data[0].embedding


class OllamaEmbedder(BaseEmbedder):
    """Ollama local embedding provider with connection pooling."""

    def __init__(
        self,
        model: str = "nomic-embed-text",
        base_url: str = "http://localhost:11434",
        timeout: float = 30,
        **kwargs: Any,
    ):
        super().__init__(model, **kwargs)
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = create_session_with_pooling()

    def embed(self, text: str) -> list[float]:
        response = self.session.post(
            f"{self.base_url}/api/embeddings",
            json={"model": self.model, "prompt": text},
            timeout=self.timeout,
        )
        response.raise_for_status()
        return response.json()["embedding"]
