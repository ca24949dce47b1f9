"""Embedding and chat-completion providers, looked up by name.

``config.toml`` names a provider per section (``[embedding] provider =
"ollama"``); the matching class is instantiated with the rest of the section
as keyword arguments.
"""

from typing import Any, Type, TypeVar

from .base import BaseEmbedder, BaseLLM
from .embedding import OllamaEmbedder, OpenAIEmbedder
from .llm import OllamaLLM, OpenAILLM

T = TypeVar("T")

EMBEDDERS: dict[str, Type[BaseEmbedder]] = {
    "openai": OpenAIEmbedder,
    "ollama": OllamaEmbedder,
}

LLMS: dict[str, Type[BaseLLM]] = {
    "openai": OpenAILLM,
    "ollama": OllamaLLM,
}


def _instantiate(
    registry: dict[str, Type[T]], kind: str, provider: str, **kwargs: Any
) -> T:
    try:
        cls = registry[provider]
    except KeyError:
        raise ValueError(
            f"Unknown {kind} provider: {provider}. Available: {sorted(registry)}"
        ) from None
    return cls(**kwargs)


def create_embedder(provider: str, **kwargs: Any) -> BaseEmbedder:
    """Instantiate the embedder registered under ``provider``.

    Raises:
        ValueError: If no embedder is registered under that name, or the
            provider is missing its credentials.
    """
    return _instantiate(EMBEDDERS, "embedder", provider, **kwargs)


def create_llm(provider: str, **kwargs: Any) -> BaseLLM:
    """Instantiate the LLM registered under ``provider``.

    Raises:
        ValueError: If no LLM is registered under that name, or the provider
            is missing its credentials.
    """
    return _instantiate(LLMS, "LLM", provider, **kwargs)


__all__ = [
    "BaseEmbedder",
    "BaseLLM",
    "OpenAIEmbedder",
    "OllamaEmbedder",
    "OpenAILLM",
    "OllamaLLM",
    "create_embedder",
    "create_llm",
]
