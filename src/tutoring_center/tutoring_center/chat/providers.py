from __future__ import annotations

import logging
from typing import Optional, Protocol

import requests

from ..core.exceptions import ExternalServiceError

logger = logging.getLogger(__name__)


class ChatProvider(Protocol):
    name: str

    def complete(self, message: str) -> str:
        raise NotImplementedError


class _HTTPProvider:
    name = "provider"

    def __init__(self, *, api_key: str, timeout_seconds: float, session: Optional[requests.Session] = None):
        self._api_key = api_key
        self._timeout = float(timeout_seconds)
        self._session = session or requests.Session()

    def _post(self, url: str, *, json: dict, headers: Optional[dict] = None, params: Optional[dict] = None) -> dict:
        if not self._api_key:
            raise ExternalServiceError(f"{self.name} API key is not configured")
        try:
            response = self._session.post(url, json=json, headers=headers, params=params, timeout=self._timeout)
        except requests.RequestException as e:
            raise ExternalServiceError(f"{self.name} request failed: {e}")

        if response.status_code >= 400:
            try:
                detail = response.json().get("error", {})
                detail = detail.get("message") if isinstance(detail, dict) else detail
            except ValueError:
                detail = response.text[:200]
            logger.error("%s API error %s: %s", self.name, response.status_code, detail)
            raise ExternalServiceError(f"{self.name} API request failed with status {response.status_code}: {detail}")

        try:
            return response.json()
        except ValueError:
            raise ExternalServiceError(f"{self.name} returned a non-JSON response")


class GeminiProvider(_HTTPProvider):
    name = "gemini"
    BASE_URL = "https://generativelanguage.googleapis.com/v1beta/models"

    def __init__(self, *, api_key: str, model: str = "gemini-pro", timeout_seconds: float = 30, session=None):
        super().__init__(api_key=api_key, timeout_seconds=timeout_seconds, session=session)
        self._model = model

    def complete(self, message: str) -> str:
        data = self._post(
            f"{self.BASE_URL}/{self._model}:generateContent",
            params={"key": self._api_key},
            json={"contents": [{"parts": [{"text": message}]}]},
        )
        try:
            parts = data["candidates"][0]["content"]["parts"]
            return "".join(p.get("text", "") for p in parts)
        except (KeyError, IndexError, TypeError):
            raise ExternalServiceError("gemini returned an unexpected payload")


class OpenRouterProvider(_HTTPProvider):
    """DeepSeek (and other models) through OpenRouter's chat completions API."""

    name = "deepseek"
    URL = "https://openrouter.ai/api/v1/chat/completions"

    def __init__(
        self, *, api_key: str, model: str = "deepseek/deepseek-r1:free", timeout_seconds: float = 30, session=None
    ):
        super().__init__(api_key=api_key, timeout_seconds=timeout_seconds, session=session)
        self._model = model

    def complete(self, message: str) -> str:
        data = self._post(
            self.URL,
            headers={"Authorization": f"Bearer {self._api_key}"},
            json={"model": self._model, "messages": [{"role": "user", "content": message}]},
        )
        try:
            return data["choices"][0]["message"]["content"]
        except (KeyError, IndexError, TypeError):
            raise ExternalServiceError("deepseek returned an unexpected payload")
