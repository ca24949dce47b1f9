from unittest.mock import MagicMock, patch

import httpx
import openai
import pytest

from eztax_rag.adapters import OllamaLLM, OpenAILLM, create_llm
from eztax_rag.adapters.utils import is_quota_error


class TestOpenAILLM:
    def test_chat_returns_response(self) -> None:
        mock_client = MagicMock()
        mock_response = MagicMock()
        mock_response.choices = [MagicMock(message=MagicMock(content="Chat response"))]
        mock_client.chat.completions.create.return_value = mock_response

        llm = OpenAILLM(api_key="test-key")
        llm.client = mock_client

        messages = [
            {"role": "system", "content": "당신은 미국 세법 전문가입니다."},
            {"role": "user", "content": "표준 공제액은?"},
        ]
        result = llm.chat(messages)

        assert result == "Chat response"
        mock_client.chat.completions.create.assert_called_once_with(
            model="gpt-4o",
            messages=messages,
            temperature=0.1,
            max_tokens=1000,
        )

    def test_chat_overrides_sampling(self) -> None:
        mock_client = MagicMock()
        mock_client.chat.completions.create.return_value = MagicMock(
            choices=[MagicMock(message=MagicMock(content="ok"))]
        )

        llm = OpenAILLM(api_key="test-key")
        llm.client = mock_client
        llm.chat([{"role": "user", "content": "hi"}], temperature=0.5, max_tokens=50)

        params = mock_client.chat.completions.create.call_args[1]
        assert params["temperature"] == 0.5
        assert params["max_tokens"] == 50

    def test_empty_content_returns_empty_string(self) -> None:
        mock_client = MagicMock()
        mock_client.chat.completions.create.return_value = MagicMock(
            choices=[MagicMock(message=MagicMock(content=None))]
        )

        llm = OpenAILLM(api_key="test-key")
        llm.client = mock_client

        assert llm.chat([{"role": "user", "content": "hi"}]) == ""

    def test_missing_api_key_raises(self) -> None:
        with patch.dict("os.environ", {}, clear=True):
            with pytest.raises(ValueError, match="OPENAI_API_KEY"):
                OpenAILLM()


class TestOllamaLLM:
    def test_chat_returns_response(self) -> None:
        with patch("requests.Session.post") as mock_post:
            mock_response = MagicMock()
            mock_response.json.return_value = {
                "message": {"role": "assistant", "content": "Chat response"}
            }
            mock_response.raise_for_status = MagicMock()
            mock_post.return_value = mock_response

            llm = OllamaLLM(model="llama3")
            messages = [{"role": "user", "content": "Hello"}]
            result = llm.chat(messages, temperature=0.3, max_tokens=200)

            assert result == "Chat response"
            call_args = mock_post.call_args
            assert call_args[0][0] == "http://localhost:11434/api/chat"
            assert call_args[1]["json"]["messages"] == messages
            assert call_args[1]["json"]["options"] == {
                "temperature": 0.3,
                "num_predict": 200,
            }
            assert call_args[1]["timeout"] == 120

    def test_no_token_limit(self) -> None:
        llm = OllamaLLM(max_tokens=None)
        assert "num_predict" not in llm._build_payload()["options"]

    def test_create_llm_unknown_provider(self) -> None:
        with pytest.raises(ValueError, match="Unknown LLM provider"):
            create_llm("anthropic")


class TestIsQuotaError:
    def test_insufficient_quota_rate_limit(self) -> None:
        response = httpx.Response(
            429, request=httpx.Request("POST", "https://api.openai.com/v1/chat")
        )
        error = openai.RateLimitError(
            "Rate limited",
            response=response,
            body={"code": "insufficient_quota", "message": "Rate limited"},
        )
        assert is_quota_error(error)

    def test_quota_in_message(self) -> None:
        assert is_quota_error(RuntimeError("You exceeded your current quota"))

    def test_other_errors(self) -> None:
        assert not is_quota_error(RuntimeError("connection reset"))
        assert not is_quota_error(TimeoutError())
