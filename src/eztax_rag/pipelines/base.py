from pathlib import Path
from typing import Any, Callable

from ..adapters import BaseEmbedder, BaseLLM, create_embedder, create_llm
from ..config import get_config_value, get_store_path
from ..stores import BaseChunkStore, create_chunk_store

DEFAULT_TOP_K = 3
DEFAULT_MIN_SIMILARITY = 0.1
DEFAULT_REQUEST_DELAY = 0.1
DEFAULT_LANGUAGE = "ko"


def _create_adapter_from_config(
    config: dict[str, Any],
    section: str,
    create_fn: Callable[..., Any],
    defaults: dict[str, str],
) -> Any:
    """Create an adapter (embedder or LLM) from configuration."""
    section_config = config.get(section, {})
    provider = section_config.get("provider", defaults["provider"])
    model = section_config.get("model", defaults["model"])

    extra_kwargs = {
        k: v for k, v in section_config.items() if k not in ("provider", "model")
    }

    return create_fn(provider, model=model, **extra_kwargs)


def create_embedder_from_config(config: dict[str, Any]) -> BaseEmbedder:
    defaults = {"provider": "openai", "model": "text-embedding-3-small"}
    return _create_adapter_from_config(config, "embedding", create_embedder, defaults)


def create_llm_from_config(config: dict[str, Any]) -> BaseLLM:
    defaults = {"provider": "openai", "model": "gpt-4o"}
    return _create_adapter_from_config(config, "llm", create_llm, defaults)


def create_store_from_config(
    config: dict[str, Any], config_path: Path
) -> BaseChunkStore:
    provider = get_config_value(config, "storage.provider", "json")
    return create_chunk_store(provider, get_store_path(config, config_path))
