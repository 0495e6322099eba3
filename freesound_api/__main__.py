"""
Freesound API - Command line entry point

Usage:
    python -m freesound_api check
    python -m freesound_api search "wind chimes" --sort rating_desc --page-size 5
    python -m freesound_api sound 1234 --descriptors lowlevel.mfcc,rhythm.bpm
    python -m freesound_api --config ~/.freesound.json check

Or via the installed command:
    freesound search piano
"""

from __future__ import annotations

import argparse
import asyncio
import json
import sys
from dataclasses import asdict
from typing import List, Optional

from freesound_api.client import FreesoundError
from freesound_api.config import FreesoundConfigError, FreesoundSettings
from freesound_api.logging_config import setup_logging
from freesound_api.models import SearchResponse, Sound
from freesound_api.query import SearchQueryBuilder, SortOption

EXIT_OK = 0
EXIT_API_ERROR = 1
EXIT_CONFIG_ERROR = 2


def _csv(value: str) -> List[str]:
    return [item.strip() for item in value.split(",") if item.strip()]


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="freesound", description="Query the Freesound.org API")
    parser.add_argument("--api-key", help="API key (default: $FREESOUND_API_KEY)")
    parser.add_argument("--base-url", help="API root (default: $FREESOUND_BASE_URL or the public API)")
    parser.add_argument("--env-file", help="Path of a .env file to load")
    parser.add_argument("--config", help="Path of a JSON settings file, used instead of the environment")
    parser.add_argument("--log-level", help="Logging level, e.g. DEBUG")

    sub = parser.add_subparsers(dest="command", required=True)

    sub.add_parser("check", help="Verify that the API key is accepted")

    search = sub.add_parser("search", help="Text search")
    search.add_argument("query", help="Search terms")
    search.add_argument("--filter", help='Filter expression, e.g. "tag:guitar duration:[0 TO 5]"')
    search.add_argument("--sort", choices=[option.value for option in SortOption])
    search.add_argument("--page", type=int)
    search.add_argument("--page-size", type=int)
    search.add_argument("--fields", type=_csv, help="Comma separated sound fields")
    search.add_argument("--group-by-pack", action="store_true")
    search.add_argument("--json", action="store_true", help="Print the parsed response as JSON")

    sound = sub.add_parser("sound", help="Sound details")
    sound.add_argument("sound_id", type=int)
    sound.add_argument("--descriptors", type=_csv, help="Comma separated descriptor names")
    sound.add_argument("--normalized", action="store_true")
    sound.add_argument("--json", action="store_true", help="Print the parsed sound as JSON")

    return parser


def load_settings(args: argparse.Namespace) -> FreesoundSettings:
    """Settings from --config or the environment, with command line overrides applied."""
    if args.config:
        settings = FreesoundSettings.load(args.config)
    else:
        settings = FreesoundSettings.from_env(args.env_file, validate=False)
    if args.api_key:
        settings.api_key = args.api_key
    if args.base_url:
        settings.base_url = args.base_url
    if args.log_level:
        settings.log_level = args.log_level.upper()
    settings.validate()
    return settings


def build_search_query(args: argparse.Namespace) -> SearchQueryBuilder:
    builder = SearchQueryBuilder().query(args.query)
    if args.filter:
        builder.filter(args.filter)
    if args.sort:
        builder.sort(args.sort)
    if args.group_by_pack:
        builder.group_by_pack(True)
    if args.page is not None:
        builder.page(args.page)
    if args.page_size is not None:
        builder.page_size(args.page_size)
    if args.fields:
        builder.fields(args.fields)
    return builder


def format_search(response: SearchResponse) -> str:
    lines = [f"Found {response.count} sounds"]
    for sound in response.results:
        lines.append(f"{sound.id}\t{sound.name}\t{sound.username}")
    if response.next:
        lines.append(f"Next page: {response.next}")
    return "\n".join(lines)


def format_sound(sound: Sound) -> str:
    lines = [
        f"{sound.id}: {sound.name}",
        f"  by {sound.username}, {sound.license}",
        f"  {sound.sound_type} {sound.duration_formatted} {sound.channels}ch {sound.samplerate:g}Hz",
    ]
    if sound.tags:
        lines.append(f"  tags: {', '.join(sound.tags)}")
    if sound.previews is not None and sound.previews.best_preview:
        lines.append(f"  preview: {sound.previews.best_preview}")
    if sound.analysis is not None:
        lines.append(f"  analysis: {json.dumps(sound.analysis)}")
    return "\n".join(lines)


async def run(args: argparse.Namespace, settings: FreesoundSettings) -> int:
    async with settings.create_client() as client:
        if args.command == "check":
            await client.test_api_key()
            print("API key is valid")
        elif args.command == "search":
            response = await client.search(build_search_query(args))
            print(json.dumps(asdict(response), indent=2) if args.json else format_search(response))
        elif args.command == "sound":
            sound = await client.get_sound(
                args.sound_id,
                descriptors=args.descriptors,
                normalized=True if args.normalized else None,
            )
            print(json.dumps(asdict(sound), indent=2) if args.json else format_sound(sound))
    return EXIT_OK


def main(argv: Optional[List[str]] = None) -> int:
    """
    Main entry point for the freesound command.

    Returns:
        int: Exit code (0 success, 1 API error, 2 configuration error).
    """
    args = build_parser().parse_args(argv)

    try:
        settings = load_settings(args)
        setup_logging(settings.log_level)
    except (FreesoundConfigError, ValueError) as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        return EXIT_CONFIG_ERROR

    try:
        return asyncio.run(run(args, settings))
    except FreesoundError as e:
        print(f"Request failed: {e}", file=sys.stderr)
        return EXIT_API_ERROR


if __name__ == "__main__":
    raise SystemExit(main())
