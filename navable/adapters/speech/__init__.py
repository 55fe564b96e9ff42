"""Speech adapters - Implementations of SpeechToTextPort and TextToSpeechPort.

Available implementations:
- ElevenLabsSpeechAdapter: ElevenLabs speech-to-text and text-to-speech
"""

from .elevenlabs_adapter import ElevenLabsSpeechAdapter

__all__ = ["ElevenLabsSpeechAdapter"]
