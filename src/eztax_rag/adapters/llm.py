from typing import Any, Optional

from openai import OpenAI

from .base import BaseLLM
from .utils import create_session_with_pooling, require_openai_api_key

DEFAULT_TEMPERATURE = 0.1
DEFAULT_MAX_TOKENS = 1000


class OpenAILLM(BaseLLM):
    """OpenAI chat-completion provider."""

    def __init__(
        self,
        model: str = "gpt-4o",
        temperature: float = DEFAULT_TEMPERATURE,
        max_tokens: Optional[int] = DEFAULT_MAX_TOKENS,
        **kwargs: Any,
    ):
        api_key = require_openai_api_key(kwargs.pop("api_key", None))
        base_url = kwargs.pop("base_url", None)
        super().__init__(model, **kwargs)

        self.client = OpenAI(api_key=api_key, base_url=base_url)
        self.temperature = temperature
        self.max_tokens = max_tokens

    def _get_completion_params(
        self, messages: list[dict[str, str]], **kwargs: Any
    ) -> dict[str, Any]:
        return {
            "model": self.model,
            "messages": messages,
            "temperature": kwargs.get("temperature", self.temperature),
            "max_tokens": kwargs.get("max_tokens", self.max_tokens),
        }

    def chat(self, messages: list[dict[str, str]], **kwargs: Any) -> str:
        params = self._get_completion_params(messages, **kwargs)
        response = self.client.chat.completions.create(**params)
        return response.choices[0].message.content or ""


class OllamaLLM(BaseLLM):
    """Ollama local LLM provider with connection pooling."""

    def __init__(
        self,
        model: str = "llama3",
        temperature: float = DEFAULT_TEMPERATURE,
        max_tokens: Optional[int] = DEFAULT_MAX_TOKENS,
        base_url: str = "http://localhost:11434",
        timeout: float = 120,
        **kwargs: Any,
    ):
        super().__init__(model, **kwargs)
        self.base_url = base_url.rstrip("/")
        self.temperature = temperature
        self.max_tokens = max_tokens
        self.timeout = timeout
        self.session = create_session_with_pooling()

    def _build_payload(self, **kwargs: Any) -> dict[str, Any]:
        options: dict[str, Any] = {
            "temperature": kwargs.get("temperature", self.temperature),
        }
        max_tokens = kwargs.get("max_tokens", self.max_tokens)
        if max_tokens:
            options["num_predict"] = max_tokens
        return {"model": self.model, "stream": False, "options": options}

    def chat(self, messages: list[dict[str, str]], **kwargs: Any) -> str:
        payload = self._build_payload(**kwargs)
        payload["messages"] = messages

        response = self.session.post(
            f"{self.base_url}/api/chat",
            json=payload,
            timeout=self.timeout,
        )
        response.raise_for_status()
        return response.json()["message"]["content"]
