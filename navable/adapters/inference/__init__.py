"""Inference adapters - Implementations of InferenceBackendPort.

Available implementations:
- GeminiInferenceAdapter: Gemini generateContent REST API
"""

from .gemini_adapter import GeminiInferenceAdapter

__all__ = ["GeminiInferenceAdapter"]
