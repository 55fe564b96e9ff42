"""Gemini inference adapter.

Calls the Gemini ``generateContent`` REST endpoint and returns the
generated text. Google API keys (``AIza...``) are sent as the ``key``
query parameter, anything else as a Bearer token.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

import requests

from ...config import InferenceConfig, get_config
from ...domain.errors import ConfigurationError, InferenceError


def extract_text(data: Any) -> Optional[str]:
    """Pull the generated text out of a generateContent response body."""
    if not isinstance(data, dict):
        return None

    candidates = data.get("candidates") or []
    if candidates and isinstance(candidates[0], dict):
        content = candidates[0].get("content") or {}
        parts = content.get("parts") or []
        texts = [p.get("text", "") for p in parts if isinstance(p, dict)]
        joined = "".join(texts).strip()
        if joined:
            return joined
        if isinstance(content.get("text"), str) and content["text"].strip():
            return content["text"].strip()

    text = data.get("text")
    if isinstance(text, str) and text.strip():
        return text.strip()
    return None


@dataclass
class GeminiInferenceAdapter:
    """Gemini REST client implementing InferenceBackendPort.

    Attributes:
        config: Inference configuration (model, key, timeout)
        session: HTTP session, injectable for tests
    """

    config: InferenceConfig = field(default_factory=lambda: get_config().inference)
    session: requests.Session = field(default_factory=requests.Session, repr=False)
    _logger: logging.Logger = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._logger = logging.getLogger(__name__)

    @property
    def name(self) -> str:
        return f"gemini:{self.config.model}"

    def _auth(self) -> tuple[Dict[str, str], Dict[str, str]]:
        key = self.config.api_key
        if not key:
            raise ConfigurationError(
                "Inference API key is not set",
                setting_name="NAV_INFERENCE_API_KEY",
            )
        headers = {"Content-Type": "application/json"}
        params: Dict[str, str] = {}
        if key.startswith("AIza"):
            params["key"] = key
        else:
            headers["Authorization"] = f"Bearer {key}"
        return headers, params

    def send_prompt(self, prompt: str) -> str:
        """Send a prompt to Gemini and return the generated text.

        Raises:
            ConfigurationError: If no API key is configured.
            InferenceError: On transport errors, HTTP errors or empty output.
        """
        headers, params = self._auth()
        body = {
            "contents": [{"role": "user", "parts": [{"text": prompt}]}],
            "generationConfig": {
                "temperature": 0,
                "maxOutputTokens": self.config.max_output_tokens,
            },
        }

        self._logger.debug(
            "Calling inference backend",
            extra={"backend": self.name, "prompt_length": len(prompt)},
        )

        try:
            response = self.session.post(
                self.config.endpoint,
                headers=headers,
                params=params,
                json=body,
                timeout=self.config.timeout_seconds,
            )
        except requests.RequestException as e:
            raise InferenceError(
                "Inference request failed", backend=self.name, cause=e
            )

        if response.status_code >= 400:
            raise InferenceError(
                f"Inference backend returned HTTP {response.status_code}: "
                f"{response.text[:200]}",
                backend=self.name,
                status_code=response.status_code,
            )

        try:
            data = response.json()
        except ValueError as e:
            raise InferenceError(
                "Inference backend returned a non-JSON body",
                backend=self.name,
                status_code=response.status_code,
                cause=e,
            )

        text = extract_text(data)
        if text is None:
            raise InferenceError(
                "Inference backend returned no text",
                backend=self.name,
                status_code=response.status_code,
            )

        self._logger.debug(
            "Inference response received",
            extra={"backend": self.name, "response_length": len(text)},
        )
        return text
