"""Command-line entry point for the Inkwell renderer core."""

from __future__ import annotations

import argparse
import json
import logging
import os
import sys
from pathlib import Path
from typing import Any, Iterable, Iterator, Mapping, Sequence, TextIO

from .services.settings import RendererSettings
from .services.settings import load_settings as _load_settings
from .ui.bootstrap import create_renderer
from .ui.infrastructure.host_channel import OutboundRequest, RecordingHostChannel
from .utils import logging as logging_utils

_TRUE_VALUES = {"1", "true", "yes", "on", "debug"}
_LOGGER = logging.getLogger(__name__)


def configure_logging(debug: bool = False, *, force: bool = False) -> None:
    """Configure structured logging for the command-line tools."""

    level = logging.DEBUG if debug else logging.INFO
    logging_utils.setup_logging(level, force=force)
    _LOGGER.debug("Logging configured (level=%s)", logging.getLevelName(level))


def load_settings(env: Mapping[str, str] | None = None) -> RendererSettings:
    """Load startup settings, falling back to defaults on bad input."""

    try:
        return _load_settings(env)
    except Exception as exc:  # pragma: no cover - defensive path
        _LOGGER.warning("Failed to load settings from the environment: %s", exc)
        return RendererSettings()


def main(argv: Sequence[str] | None = None) -> None:
    """Entry point invoked by the `inkwell` console script."""

    args = _parse_cli_args(argv)

    debug = _env_flag("INKWELL_DEBUG", default=False)
    configure_logging(debug)
    settings = load_settings()

    if args.command == "settings":
        json.dump(settings.as_dict(), sys.stdout, indent=2, sort_keys=True)
        sys.stdout.write("\n")
        return

    path = Path(args.file).expanduser()
    try:
        with path.open("r", encoding="utf-8") as handle:
            replay(handle, sys.stdout, settings=settings, run_init=not args.no_init)
    except OSError as exc:
        print(f"Cannot read {path}: {exc}", file=sys.stderr)
        raise SystemExit(2) from exc


def replay(
    source: Iterable[str],
    output: TextIO,
    *,
    settings: RendererSettings | None = None,
    run_init: bool = True,
) -> list[OutboundRequest]:
    """Feed recorded host messages through a headless renderer.

    Each line of ``source`` is a JSON object ``{"command": ..., "content": ...}``.
    Every outbound request the renderer makes is written to ``output`` as
    one JSON line, in emission order, and also returned.
    """

    channel = RecordingHostChannel()
    renderer = create_renderer(channel, settings=settings)
    written = 0

    def _flush() -> None:
        nonlocal written
        for request in channel.requests[written:]:
            output.write(json.dumps({"command": request.command, "content": request.content}, default=str))
            output.write("\n")
        written = len(channel.requests)

    if run_init:
        renderer.init()
        _flush()

    for line_number, command, content in _read_messages(source):
        _LOGGER.debug("replay line %d: %s", line_number, command)
        renderer.handle_message(command, content)
        _flush()

    return list(channel.requests)


def _read_messages(source: Iterable[str]) -> Iterator[tuple[int, str, Any]]:
    for line_number, raw in enumerate(source, start=1):
        line = raw.strip()
        if not line or line.startswith("#"):
            continue
        try:
            message = json.loads(line)
        except json.JSONDecodeError as exc:
            _LOGGER.warning("Skipping line %d: invalid JSON (%s)", line_number, exc)
            continue
        if not isinstance(message, dict) or not isinstance(message.get("command"), str):
            _LOGGER.warning("Skipping line %d: expected an object with a 'command' string", line_number)
            continue
        yield line_number, message["command"], message.get("content")


def _env_flag(name: str, *, default: bool = False) -> bool:
    value = os.environ.get(name)
    if value is None:
        return default
    return value.strip().lower() in _TRUE_VALUES


def _parse_cli_args(argv: Sequence[str] | None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="inkwell",
        add_help=True,
        description="Drive the Inkwell renderer core without a UI.",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    replay_parser = subparsers.add_parser(
        "replay",
        help="Replay recorded host messages and print the renderer's requests.",
    )
    replay_parser.add_argument(
        "file",
        metavar="FILE",
        help='JSON-lines file of {"command": ..., "content": ...} messages.',
    )
    replay_parser.add_argument(
        "--no-init",
        action="store_true",
        help="Skip the startup handshake requests.",
    )

    subparsers.add_parser(
        "settings",
        help="Print the effective startup settings (after INKWELL_* overrides) and exit.",
    )
    return parser.parse_args(argv)


if __name__ == "__main__":  # pragma: no cover - manual invocation
    main()
