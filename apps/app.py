# -*- coding: utf-8 -*-
"""Gradio demo: speak or type a campus request, get a walking route."""

import html
import logging
import tempfile
from pathlib import Path
from typing import Optional, Tuple

import gradio as gr

from navable.container import get_container
from navable.domain.models import NavigationResult
from navable.logging_config import setup_logging
from navable.pipeline import resolution_to_dict
from navable.ports.speech import TextToSpeechPort
from navable.services import NavigationService, PlaceResolutionService

MAP_DIR = Path(tempfile.gettempdir()) / "navable-maps"
EMPTY_MAP = "<p></p>"

logger = logging.getLogger(__name__)


def _map_iframe_from_html(document_html: str, *, height_px: int = 520) -> str:
    escaped = html.escape(document_html, quote=True)
    return (
        f'<iframe srcdoc="{escaped}" '
        f'style="width: 100%; height: {height_px}px; border: 0;" '
        f'loading="lazy"></iframe>'
    )


def _map_html(result: NavigationResult) -> str:
    if not result.map_path:
        return EMPTY_MAP
    return _map_iframe_from_html(Path(result.map_path).read_text(encoding="utf-8"))


def _speak(text: str) -> Optional[str]:
    """Synthesize spoken feedback, or None when no speech service is bound."""
    tts = get_container().resolve_optional(TextToSpeechPort)
    if tts is None:
        return None
    try:
        audio = tts.synthesize(text)
    except Exception as e:
        logger.warning("Spoken feedback failed", extra={"error": str(e)})
        return None
    with tempfile.NamedTemporaryFile(suffix=".mp3", delete=False) as out:
        out.write(audio)
    return out.name


def _answer(
    result: Optional[NavigationResult], error: Optional[str]
) -> Tuple[str, str, Optional[str]]:
    if result is None:
        message = error or "Sorry, something went wrong."
        return f"❌ {message}", EMPTY_MAP, _speak(message)

    navigation: NavigationService = get_container().resolve(NavigationService)
    text = navigation.format_result(result)
    if result.transcript:
        text = f"🎙️ {result.transcript}\n\n{text}"

    start, end = navigation.require_endpoints(result.resolution)
    spoken = f"Walking from {start.place.name} to {end.place.name}."
    return text, _map_html(result), _speak(spoken)


def _map_path() -> Path:
    MAP_DIR.mkdir(parents=True, exist_ok=True)
    with tempfile.NamedTemporaryFile(suffix=".html", dir=MAP_DIR, delete=False) as out:
        return Path(out.name)


async def navigate_from_text(text: str) -> Tuple[str, str, Optional[str]]:
    if not text or not text.strip():
        return "❌ Empty request", EMPTY_MAP, None

    navigation: NavigationService = get_container().resolve(NavigationService)
    result, error = await navigation.navigate_safe(
        text.strip(), render_map=True, map_output_path=_map_path()
    )
    return _answer(result, error)


async def navigate_from_audio(audio_path: str) -> Tuple[str, str, Optional[str]]:
    if not audio_path:
        return "❌ No audio recorded", EMPTY_MAP, None

    navigation: NavigationService = get_container().resolve(NavigationService)
    try:
        result = await navigation.transcribe_and_navigate(
            Path(audio_path), render_map=True, map_output_path=_map_path()
        )
    except Exception as e:
        logger.warning("Audio navigation failed", extra={"error": str(e)})
        message = getattr(e, "message", str(e))
        return f"❌ {message}", EMPTY_MAP, None
    return _answer(result, None)


async def resolve_only(text: str) -> dict:
    resolver: PlaceResolutionService = get_container().resolve(PlaceResolutionService)
    return resolution_to_dict(await resolver.resolve(text or ""))


def build_app() -> gr.Blocks:
    with gr.Blocks(title="NavAble • campus walking directions") as app:
        gr.Markdown(
            """
# 🧭 NavAble
Say or type where you want to go, e.g. *"from Mary Gates Hall to Odegaard"*.
"""
        )

        with gr.Row():
            audio_in = gr.Audio(
                sources=["microphone", "upload"], type="filepath", label="🎙️ Request"
            )
            text_in = gr.Textbox(
                label="📝 Text", lines=2, placeholder="From Kane Hall to the HUB"
            )

        with gr.Row():
            btn_audio = gr.Button("🎙️ Navigate from audio")
            btn_text = gr.Button("📝 Navigate from text")
            btn_resolve = gr.Button("🔎 Resolve places only")

        with gr.Row():
            output = gr.Textbox(label="🧭 Directions", lines=14)
            map_view = gr.HTML(value=EMPTY_MAP)

        spoken = gr.Audio(label="🔊 Spoken feedback", autoplay=True)
        resolved = gr.JSON(label="Resolution")

        btn_audio.click(
            navigate_from_audio, inputs=audio_in, outputs=[output, map_view, spoken]
        )
        btn_text.click(
            navigate_from_text, inputs=text_in, outputs=[output, map_view, spoken]
        )
        btn_resolve.click(resolve_only, inputs=text_in, outputs=resolved)

    return app


if __name__ == "__main__":
    setup_logging()
    build_app().launch()
