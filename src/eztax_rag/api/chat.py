"""Chat API endpoints.

Routes:
- POST /api/chat - Answer a question from the tax knowledge base
- GET /api/health - Liveness and number of loaded chunks
"""

import logging

from fastapi import APIRouter, Depends, HTTPException

from ..messages import get_message
from ..models.chat import ChatRequest, ChatResponse, ChatSource
from ..overrides import OverridePolicy
from ..pipelines import RetrievalPipeline
from .deps import get_overrides, get_pipeline

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["chat"])


@router.post("/chat", response_model=ChatResponse)
def chat(
    request: ChatRequest,
    pipeline: RetrievalPipeline = Depends(get_pipeline),
    overrides: OverridePolicy = Depends(get_overrides),
) -> ChatResponse:
    """Answer a chat message.

    Canned product answers take precedence; everything else goes through
    retrieval and generation. Upstream failures come back as a 200 with a
    fallback message so the chat widget stays usable.

    Raises:
        HTTPException(400): Blank message
    """
    if not request.message.strip():
        raise HTTPException(
            status_code=400, detail=get_message("empty_message", request.language)
        )

    logger.info(
        f"ChatBot request - Context: {request.context}, "
        f"Message: {request.message[:100]}..."
    )

    canned = overrides.respond(request.message, request.language)
    if canned is not None:
        return ChatResponse(message=canned)

    history = [m.model_dump() for m in request.messages]
    result = pipeline.query(
        request.message,
        context=request.context,
        history=history,
        language=request.language,
    )

    message = result.answer
    if result.error == "quota_exceeded":
        message = get_message("quota_exceeded", request.language)

    return ChatResponse(
        message=message,
        sources=[
            ChatSource(source=c.source, similarity=c.similarity) for c in result.chunks
        ],
    )


@router.get("/health")
def health(pipeline: RetrievalPipeline = Depends(get_pipeline)) -> dict:
    return {"status": "healthy", "chunks": len(pipeline.cache.get())}
