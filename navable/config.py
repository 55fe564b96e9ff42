"""NavAble settings, read from NAV_* environment variables.

One pydantic-settings model per external concern (campus data, Gemini,
ElevenLabs, Geoapify, Nominatim, logging), aggregated by AppConfig.

Configuration can be overridden via environment variables or a ``.env``
file in the working directory:
- NAV_GAZETTEER_DATA_DIR=/path/to/data
- NAV_INFERENCE_API_KEY=...
- NAV_INFERENCE_TIMEOUT_SECONDS=20
- NAV_SPEECH_API_KEY=...
- NAV_ROUTING_API_KEY=...
- NAV_LOG_LEVEL=DEBUG
- etc.
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

_ENV_FILE = ".env"


class GazetteerConfig(BaseSettings):
    """Gazetteer data configuration.

    Environment variables prefixed with NAV_GAZETTEER_.
    """

    model_config = SettingsConfigDict(
        env_prefix="NAV_GAZETTEER_", env_file=_ENV_FILE, extra="ignore"
    )

    data_dir: Path = Field(
        default_factory=lambda: Path(__file__).resolve().parent.parent / "data"
    )
    file_pattern: str = "*.txt"
    encoding: str = "utf-8"


class InferenceConfig(BaseSettings):
    """Inference backend (Gemini) configuration.

    Environment variables prefixed with NAV_INFERENCE_.
    """

    model_config = SettingsConfigDict(
        env_prefix="NAV_INFERENCE_", env_file=_ENV_FILE, extra="ignore"
    )

    enabled: bool = True
    api_key: str = ""
    base_url: str = "https://generativelanguage.googleapis.com/v1beta"
    model: str = "gemini-2.5-flash"
    timeout_seconds: float = 15.0
    max_output_tokens: int = 256
    campus_name: str = "the University of Washington, Seattle campus"

    @property
    def endpoint(self) -> str:
        """Full generateContent URL for the configured model."""
        return f"{self.base_url.rstrip('/')}/models/{self.model}:generateContent"


class SpeechConfig(BaseSettings):
    """Speech-to-text / text-to-speech (ElevenLabs) configuration.

    Environment variables prefixed with NAV_SPEECH_.
    """

    model_config = SettingsConfigDict(
        env_prefix="NAV_SPEECH_", env_file=_ENV_FILE, extra="ignore"
    )

    api_key: str = ""
    stt_url: str = "https://api.elevenlabs.io/v1/speech-to-text"
    stt_model: str = "scribe_v1"
    language: Optional[str] = None
    tts_url: str = "https://api.elevenlabs.io/v1/text-to-speech"
    tts_voice_id: str = "7p1Ofvcwsv7UBPoFNcpI"
    tts_model: str = "eleven_monolingual_v1"
    timeout_seconds: float = 60.0


class RoutingConfig(BaseSettings):
    """Walking-route (Geoapify) configuration.

    Environment variables prefixed with NAV_ROUTING_.
    """

    model_config = SettingsConfigDict(
        env_prefix="NAV_ROUTING_", env_file=_ENV_FILE, extra="ignore"
    )

    api_key: str = ""
    base_url: str = "https://api.geoapify.com/v1"
    mode: str = "walk"
    timeout_seconds: float = 20.0


class GeocodingConfig(BaseSettings):
    """Free-text geocoding configuration.

    Geoapify is queried with the routing API key; Nominatim is the
    fallback when Geoapify rejects the key.

    Environment variables prefixed with NAV_GEO_.
    """

    model_config = SettingsConfigDict(
        env_prefix="NAV_GEO_", env_file=_ENV_FILE, extra="ignore"
    )

    limit: int = 3
    user_agent: str = "NavAble/1.0"
    timeout_seconds: int = 10
    rate_limit_delay: float = 1.0
    max_retries: int = 2
    error_wait_seconds: float = 2.0
    cache_ttl_seconds: float = 3600.0
    # Gazetteer matches scoring under this are looked up by the geocoder
    fallback_below_score: float = 0.5
    query_context: str = "University of Washington, Seattle"
    fallback_enabled: bool = True


class ObservabilityConfig(BaseSettings):
    """Log level, format and JSON switch (NAV_LOG_*)."""

    model_config = SettingsConfigDict(
        env_prefix="NAV_LOG_", env_file=_ENV_FILE, extra="ignore"
    )

    level: str = "INFO"
    format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    structured: bool = False  # json-log-formatter output


class AppConfig(BaseSettings):
    """Top-level settings object.

    Each external service has its own section:

        config = get_config()
        print(config.inference.model)
        print(config.gazetteer.data_dir)

    Environment variables prefixed with NAV_.
    """

    model_config = SettingsConfigDict(
        env_prefix="NAV_", env_file=_ENV_FILE, extra="ignore"
    )

    gazetteer: GazetteerConfig = Field(default_factory=GazetteerConfig)
    inference: InferenceConfig = Field(default_factory=InferenceConfig)
    speech: SpeechConfig = Field(default_factory=SpeechConfig)
    routing: RoutingConfig = Field(default_factory=RoutingConfig)
    geocoding: GeocodingConfig = Field(default_factory=GeocodingConfig)
    observability: ObservabilityConfig = Field(default_factory=ObservabilityConfig)

    output_dir: Path = Field(default_factory=Path.cwd)

    @property
    def project_root(self) -> Path:
        """Directory holding the navable package and data/."""
        return Path(__file__).resolve().parent.parent


@lru_cache(maxsize=1)
def get_config() -> AppConfig:
    """Return the process-wide settings, read from the environment once."""
    return AppConfig()


def reset_config() -> None:
    """Force the next get_config() to re-read the environment."""
    get_config.cache_clear()
