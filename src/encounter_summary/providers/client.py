"""Async LLM client routed through LiteLLM.

``openai/<model>`` speaks the chat-completions wire format (bearer auth,
system + user messages); ``anthropic/<model>`` speaks the messages format
(``x-api-key`` plus ``anthropic-version`` headers, user message only).
LiteLLM normalises both responses to ``choices[0].message.content``.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any

from encounter_summary.core.config import LLMConfig, ProviderKind
from encounter_summary.exceptions import (
    ProviderAuthError,
    ProviderError,
    ProviderRequestError,
    ProviderUnavailableError,
)

log = logging.getLogger(__name__)

_AUTH_STATUS_CODES = frozenset({401, 403})


class LLMClient:
    """Single-shot completion client; no retries, bounded by ``config.timeout``."""

    def __init__(self, config: LLMConfig, provider: ProviderKind | None = None) -> None:
        self._config = config
        self._provider = provider if provider is not None else config.resolve_provider()

    @property
    def provider(self) -> ProviderKind:
        return self._provider

    @property
    def model(self) -> str:
        if self._provider is ProviderKind.ANTHROPIC:
            return f"anthropic/{self._config.anthropic_model}"
        if self._provider is ProviderKind.OPENAI:
            return f"openai/{self._config.openai_model}"
        raise ProviderUnavailableError("No summarization provider configured")

    @staticmethod
    def _is_auth_error(exc: Exception) -> bool:
        """401/403 from either provider means the credential was rejected."""
        from litellm.exceptions import AuthenticationError, PermissionDeniedError

        if isinstance(exc, (AuthenticationError, PermissionDeniedError)):
            return True
        return getattr(exc, "status_code", None) in _AUTH_STATUS_CODES

    def _request_kwargs(self, prompt: str, system_prompt: str | None) -> dict[str, Any]:
        kwargs: dict[str, Any] = {
            "model": self.model,
            "max_tokens": self._config.max_tokens,
            "api_key": self._config.api_key,
            "timeout": self._config.timeout,
        }
        if self._provider is ProviderKind.OPENAI:
            messages: list[dict[str, Any]] = []
            if system_prompt:
                messages.append({"role": "system", "content": system_prompt})
            messages.append({"role": "user", "content": prompt})
            kwargs["messages"] = messages
            kwargs["temperature"] = self._config.temperature
            if self._config.openai_base_url:
                kwargs["api_base"] = self._config.openai_base_url
        else:
            kwargs["messages"] = [{"role": "user", "content": prompt}]
            kwargs["extra_headers"] = {"anthropic-version": self._config.anthropic_version}
            if self._config.anthropic_base_url:
                kwargs["api_base"] = self._config.anthropic_base_url
        return kwargs

    async def complete(self, prompt: str, *, system_prompt: str | None = None) -> str:
        """Send one request and return the response text ('' when empty).

        ``system_prompt`` is only sent to OpenAI-style providers.

        Raises:
            ProviderUnavailableError: No provider resolved.
            ProviderAuthError: The provider rejected the credential.
            ProviderRequestError: Any other failure, including the timeout.
        """
        from litellm import acompletion

        kwargs = self._request_kwargs(prompt, system_prompt)
        try:
            response = await asyncio.wait_for(acompletion(**kwargs), timeout=self._config.timeout)
        except asyncio.TimeoutError as exc:
            raise ProviderRequestError(
                f"{self._provider.value} request timed out after {self._config.timeout}s"
            ) from exc
        except ProviderError:
            raise
        except Exception as exc:
            if self._is_auth_error(exc):
                raise ProviderAuthError(f"{self._provider.value} rejected the API key: {exc}") from exc
            raise ProviderRequestError(f"{self._provider.value} request failed: {exc}") from exc

        try:
            content = response.choices[0].message.content
        except (AttributeError, IndexError, KeyError, TypeError) as exc:
            raise ProviderRequestError(f"Unexpected {self._provider.value} response shape: {exc}") from exc
        return content or ""
