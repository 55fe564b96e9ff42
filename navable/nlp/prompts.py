"""Prompt templates for place-name extraction."""

from __future__ import annotations

from textwrap import dedent

EXTRACTION_PROMPT = dedent(
    """
    From the following user text, extract up to two location names (a start and an end) that the user mentions.
    The locations are buildings or places on {campus}.
    For each location return only its name, not coordinates. If a location is not mentioned, use null.
    Return only valid JSON exactly like: {{"start": {{"name": "Suzzallo Library"}}, "end": {{"name": "Kane Hall"}}}}.
    Do not include commentary.
    User text: {utterance}
    """
).strip()


def build_extraction_prompt(utterance: str, campus: str) -> str:
    return EXTRACTION_PROMPT.format(campus=campus, utterance=utterance.strip())
