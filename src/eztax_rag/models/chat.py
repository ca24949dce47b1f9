from typing import Literal

from pydantic import BaseModel, Field


class ChatMessage(BaseModel):
    role: Literal["user", "assistant"]
    content: str


class ChatRequest(BaseModel):
    """Body of ``POST /api/chat``.

    Attributes:
        message: The user's question.
        context: Name of the page the user is working on (e.g. "Deductions").
        messages: Previous turns of the conversation, oldest first.
        language: Answer language, "ko" or "en".
    """

    message: str = ""
    context: str = ""
    messages: list[ChatMessage] = Field(default_factory=list)
    language: Literal["ko", "en"] = "ko"


class ChatSource(BaseModel):
    source: str
    similarity: float


class ChatResponse(BaseModel):
    message: str
    sources: list[ChatSource] = Field(default_factory=list)
