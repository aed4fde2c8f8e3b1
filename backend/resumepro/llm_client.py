"""
OpenAI-compatible chat completions client.
Works against the hosted OpenAI API or any local server exposing /chat/completions.
"""
import os
import logging
from typing import Dict, List, Optional
from urllib.parse import urlparse
import httpx

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://api.openai.com/v1"
DEFAULT_MODEL = "gpt-4o"
LOCAL_HOSTS = {"localhost", "127.0.0.1", "host.docker.internal"}
DEFAULT_TIMEOUT = 60.0


def env_timeout() -> float:
    """LLM_TIMEOUT in seconds; unparsable or non-positive values fall back to the default."""
    raw = os.getenv("LLM_TIMEOUT")
    if not raw:
        return DEFAULT_TIMEOUT
    try:
        timeout = float(raw)
    except ValueError:
        logger.warning(f"Ignoring invalid LLM_TIMEOUT {raw!r}, using {DEFAULT_TIMEOUT}s")
        return DEFAULT_TIMEOUT
    return timeout if timeout > 0 else DEFAULT_TIMEOUT


class LLMError(Exception):
    """Raised when the completion endpoint cannot produce a usable answer."""


class ChatCompletionClient:
    def __init__(self, api_key: Optional[str] = None, base_url: Optional[str] = None,
                 model: Optional[str] = None, timeout: Optional[float] = None):
        self.api_key = api_key or os.getenv("OPENAI_API_KEY")
        self.base_url = (base_url or os.getenv("OPENAI_BASE_URL", DEFAULT_BASE_URL)).rstrip("/")
        self.model = model or os.getenv("ATS_MODEL", DEFAULT_MODEL)
        self.timeout = timeout or env_timeout()

    @property
    def is_local(self) -> bool:
        return urlparse(self.base_url).hostname in LOCAL_HOSTS

    async def complete(self, messages: List[Dict[str, str]], temperature: float = 0.7,
                       json_mode: bool = False, max_tokens: Optional[int] = None) -> str:
        """POST a chat completion and return the first choice's content ("" when empty)."""
        if not self.api_key and not self.is_local:
            raise LLMError("OPENAI_API_KEY not configured")

        headers = {"Content-Type": "application/json"}
        if self.api_key:
            headers["Authorization"] = f"Bearer {self.api_key}"

        payload = {
            "model": self.model,
            "messages": messages,
            "temperature": temperature,
        }
        if json_mode:
            payload["response_format"] = {"type": "json_object"}
        if max_tokens:
            payload["max_tokens"] = max_tokens

        try:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                response = await client.post(
                    f"{self.base_url}/chat/completions",
                    headers=headers,
                    json=payload
                )
        except httpx.HTTPError as e:
            logger.error(f"Completion request to {self.base_url} failed: {e}")
            raise LLMError(f"API request failed: {e}") from e

        if response.status_code != 200:
            raise LLMError(f"API call failed: {response.status_code} {response.text}")

        try:
            result = response.json()
            return result["choices"][0]["message"].get("content") or ""
        except (ValueError, KeyError, IndexError, TypeError) as e:
            raise LLMError(f"Unexpected completion payload: {e}") from e


def get_llm_client(model: Optional[str] = None) -> ChatCompletionClient:
    """Client configured from the environment"""
    return ChatCompletionClient(model=model)
