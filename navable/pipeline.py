"""Command-line entry point for the NavAble pipeline.

Resolves one utterance (or one recording) against the campus gazetteer
and prints the result as JSON:

    python -m navable "from Mary Gates Hall to Odegaard"
    python -m navable --route --map route.html "Kane Hall to the HUB"
    python -m navable --audio request.mp3 --route

Without ``--route`` (or ``--map``) only the place resolution runs, so no routing key is
needed. Resolution works without any API key through the heuristic
extractor.
"""

from __future__ import annotations

import argparse
import asyncio
import json
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

from .container import get_container
from .domain.errors import NavAbleError
from .domain.models import MatchResult, NavigationResult, ResolutionResult, WalkingRoute
from .logging_config import setup_logging
from .services import UNRESOLVED_MESSAGE, NavigationService, PlaceResolutionService


def _match_to_dict(match: Optional[MatchResult]) -> Optional[Dict[str, Any]]:
    if match is None:
        return None
    return {
        "name": match.place.name,
        "lat": match.place.latitude,
        "lon": match.place.longitude,
        "score": round(match.score, 4),
        "source": match.place.source,
    }


def resolution_to_dict(resolution: ResolutionResult) -> Dict[str, Any]:
    """JSON-ready view of a resolution result.

    When neither side resolved, ``message`` carries the user-facing
    explanation shown by the navigation flow.
    """
    parsed = resolution.parsed
    data: Dict[str, Any] = {
        "parsed": {
            "start": parsed.start_name,
            "end": parsed.end_name,
            "method": parsed.method.name.lower(),
            "degraded": parsed.degraded,
            "degraded_reason": parsed.degraded_reason,
        },
        "start": _match_to_dict(resolution.start),
        "end": _match_to_dict(resolution.end),
    }
    if resolution.is_empty:
        data["message"] = UNRESOLVED_MESSAGE
    return data


def route_to_dict(route: WalkingRoute) -> Dict[str, Any]:
    return {
        "mode": route.mode,
        "distance_m": route.distance_m,
        "duration_s": route.duration_s,
        "steps": [step.instruction for step in route.steps],
        "points": len(route.coordinates),
    }


def navigation_to_dict(result: NavigationResult) -> Dict[str, Any]:
    data = resolution_to_dict(result.resolution)
    data["route"] = route_to_dict(result.route) if result.route else None
    data["map_path"] = result.map_path
    if result.transcript is not None:
        data["transcript"] = result.transcript
    return data


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="navable",
        description="Resolve a campus navigation request to start/end places.",
    )
    parser.add_argument("utterance", nargs="?", help="request text")
    parser.add_argument("--audio", type=Path, help="transcribe this recording first")
    parser.add_argument(
        "--route", action="store_true", help="also request a walking route"
    )
    parser.add_argument(
        "--map", type=Path, dest="map_path", help="write a route map (implies --route)"
    )
    parser.add_argument("--log-level", help="override NAV_LOG_LEVEL")
    return parser


async def _run(args: argparse.Namespace) -> Dict[str, Any]:
    container = get_container()

    wants_route = args.route or args.map_path is not None
    if args.audio is None and not wants_route:
        resolver: PlaceResolutionService = container.resolve(PlaceResolutionService)
        return resolution_to_dict(await resolver.resolve(args.utterance))

    navigation: NavigationService = container.resolve(NavigationService)
    render_map = args.map_path is not None
    if args.audio is not None:
        result = await navigation.transcribe_and_navigate(
            args.audio, render_map=render_map, map_output_path=args.map_path
        )
    else:
        result = await navigation.navigate(
            args.utterance, render_map=render_map, map_output_path=args.map_path
        )
    return navigation_to_dict(result)


def run_pipeline(argv: Optional[List[str]] = None) -> int:
    """Parse arguments, run the request and print the JSON answer.

    Returns:
        Process exit code (0 on success, 1 on a NavAble error).
    """
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.utterance is None and args.audio is None:
        parser.error("an utterance or --audio is required")

    observability = get_container().config.observability
    if args.log_level:
        observability = observability.model_copy(update={"level": args.log_level})
    setup_logging(observability, stream=sys.stderr)

    try:
        output = asyncio.run(_run(args))
    except NavAbleError as e:
        print(json.dumps({"error": e.message}), file=sys.stderr)
        return 1

    print(json.dumps(output, indent=2, ensure_ascii=False))
    return 0


if __name__ == "__main__":
    sys.exit(run_pipeline())
