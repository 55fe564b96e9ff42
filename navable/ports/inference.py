"""Inference port - Abstraction for the text-generation backend.

The extractor only needs to send a prompt and read back free-form
text. Endpoint selection, authentication and response decoding belong
to the adapter.
"""

from __future__ import annotations

from typing import Protocol


class InferenceBackendPort(Protocol):
    """Port for LLM inference.

    Implementation: adapters/inference/gemini_adapter.py
    """

    @property
    def name(self) -> str:
        """Short backend identifier used in logs."""
        ...

    def send_prompt(self, prompt: str) -> str:
        """Send a prompt and return the generated text.

        Args:
            prompt: The full prompt text.

        Returns:
            The raw text produced by the model.

        Raises:
            InferenceError: If the call fails or yields no text.
        """
        ...
