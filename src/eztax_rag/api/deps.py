from fastapi import HTTPException, Request

from ..overrides import OverridePolicy
from ..pipelines import RetrievalPipeline


def get_pipeline(request: Request) -> RetrievalPipeline:
    pipeline = getattr(request.app.state, "pipeline", None)
    if pipeline is None:
        raise HTTPException(status_code=503, detail="Retrieval pipeline is not loaded")
    return pipeline


def get_overrides(request: Request) -> OverridePolicy:
    return request.app.state.overrides
