"""
MyKisah — OpenRouter Provider
Stateless chat-completion client for the OpenRouter API.
"""

import logging

import httpx

from config import Config
from kisah.personality import load_context
from kisah.types import ChatMessage, CompletionRequest, CompletionResponse

log = logging.getLogger("kisah.providers")

OPENROUTER_URL = "https://openrouter.ai/api/v1/chat/completions"
APP_REFERER = "https://github.com/fepfitra/mykisah"
APP_TITLE = "MyKisah"


class CompletionError(Exception):
    """A completion call failed (transport, HTTP status, or response parsing)."""

    def __init__(self, message: str, status_code: int | None = None, body: str = ""):
        super().__init__(message)
        self.status_code = status_code
        self.body = body


class OpenRouterClient:
    """
    OpenRouter chat-completion client.

    The persona context bundle is fixed at construction and prepended to
    every request; nothing else is remembered between calls. Each call is a
    single POST: no retries, no backoff, no caching.
    """

    def __init__(
        self,
        api_key: str,
        model: str,
        context: tuple[ChatMessage, ...] | list[ChatMessage] = (),
        *,
        temperature: float | None = None,
        max_tokens: int | None = None,
        timeout_sec: float = 120.0,
        url: str = OPENROUTER_URL,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.api_key = api_key
        self.model = model
        self.context = tuple(context)
        self.temperature = temperature
        self.max_tokens = max_tokens
        self.url = url
        timeout = httpx.Timeout(timeout_sec) if timeout_sec and timeout_sec > 0 else httpx.Timeout(None)
        self._client = httpx.AsyncClient(timeout=timeout, transport=transport)

    @classmethod
    def from_config(cls, config: Config, **kwargs) -> "OpenRouterClient":
        """Build a client from config, loading the context bundle from kisah_path."""
        return cls(
            api_key=config.openrouter_api_key,
            model=config.openrouter_model,
            context=load_context(config.kisah_path or None),
            temperature=config.temperature,
            max_tokens=config.max_tokens,
            timeout_sec=config.request_timeout_sec,
            **kwargs,
        )

    def build_request(self, messages: list[ChatMessage]) -> CompletionRequest:
        """Context bundle first, then the caller's turns."""
        return CompletionRequest(
            model=self.model,
            messages=self.context + tuple(messages),
            temperature=self.temperature,
            max_tokens=self.max_tokens,
        )

    async def get_chat_completion(self, messages: list[ChatMessage]) -> CompletionResponse:
        """
        Send one completion request.

        Args:
            messages: Caller turns, appended after the context bundle.

        Returns:
            The parsed response. It may contain zero choices.

        Raises:
            CompletionError: on network failure, non-2xx status, or an
                unparseable body.
        """
        request_body = self.build_request(messages).to_dict()
        headers = {
            "Authorization": f"Bearer {self.api_key}",
            "HTTP-Referer": APP_REFERER,
            "X-Title": APP_TITLE,
        }

        try:
            response = await self._client.post(self.url, headers=headers, json=request_body)
        except httpx.HTTPError as e:
            raise CompletionError(f"Failed to send request to OpenRouter: {e}") from e

        if not response.is_success:
            text = response.text
            message = (
                f"OpenRouter API returned an error: Status: {response.status_code}, Response: {text}"
            )
            log.error(message)
            raise CompletionError(message, status_code=response.status_code, body=text)

        try:
            return CompletionResponse.from_dict(response.json())
        except (AttributeError, KeyError, TypeError, ValueError) as e:
            raise CompletionError(
                f"Failed to parse OpenRouter response: {e}",
                status_code=response.status_code,
                body=response.text,
            ) from e

    async def aclose(self) -> None:
        await self._client.aclose()
