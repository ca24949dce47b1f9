"""
FastAPI application serving the knowledge-base chat endpoint.

Run with ``eztax-serve``.
"""

import logging
import os
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Optional

import uvicorn
from fastapi import FastAPI

from ..config import find_config_path
from ..overrides import OverridePolicy
from ..pipelines import RetrievalPipeline, get_retrieval_pipeline
from .chat import router as chat_router

logger = logging.getLogger(__name__)


def create_app(
    pipeline: Optional[RetrievalPipeline] = None,
    overrides: Optional[OverridePolicy] = None,
    config_path: Optional[Path] = None,
) -> FastAPI:
    """Create the FastAPI application.

    When no pipeline is injected it is built from ``config.toml`` at startup
    and the vector store is loaded into its cache.
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if app.state.pipeline is None:
            path = find_config_path(config_path)
            logger.info(f"Loading retrieval pipeline from {path}")
            app.state.pipeline = get_retrieval_pipeline(path)
            app.state.pipeline.cache.get()
        yield

    app = FastAPI(title="EzTax RAG", lifespan=lifespan)
    app.state.pipeline = pipeline
    app.state.overrides = overrides or OverridePolicy()
    app.include_router(chat_router)
    return app


def main() -> None:
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    uvicorn.run(
        create_app(),
        host=os.environ.get("HOST", "0.0.0.0"),
        port=int(os.environ.get("PORT", "8000")),
    )


if __name__ == "__main__":
    main()
