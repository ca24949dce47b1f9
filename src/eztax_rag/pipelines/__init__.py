from .base import (
    DEFAULT_LANGUAGE,
    DEFAULT_MIN_SIMILARITY,
    DEFAULT_REQUEST_DELAY,
    DEFAULT_TOP_K,
    create_embedder_from_config,
    create_llm_from_config,
    create_store_from_config,
)
from .ingestion import IngestionPipeline, run_ingestion
from .retrieval import RetrievalPipeline, get_retrieval_pipeline
from .similarity import cosine_similarities, cosine_similarity

__all__ = [
    "IngestionPipeline",
    "run_ingestion",
    "RetrievalPipeline",
    "get_retrieval_pipeline",
    "cosine_similarity",
    "cosine_similarities",
    "create_embedder_from_config",
    "create_llm_from_config",
    "create_store_from_config",
    "DEFAULT_LANGUAGE",
    "DEFAULT_MIN_SIMILARITY",
    "DEFAULT_REQUEST_DELAY",
    "DEFAULT_TOP_K",
]
