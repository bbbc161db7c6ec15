from __future__ import annotations

from pathlib import Path
from typing import Any, Callable, Dict, List, Tuple
import argparse
import logging
import sys

from omni_chain.chain.errors import ConfigurationError
from omni_chain.chain.frontend import ChainFrontend
from omni_chain.sequencer.session import SequencerContext

from .editor import Editor


def builtin_commands(editor: Editor) -> Dict[str, Callable[..., Any]]:
    return {
        "newline": lambda: editor.insert_text("\n"),
    }


def parse_press(token: str) -> Tuple[str, int]:
    """Split ``KEY@N`` into the key and its numeric prefix (default 1)."""

    key, sep, prefix = token.rpartition("@")
    if not (sep and key):
        return token, 1
    try:
        return key, int(prefix)
    except ValueError:
        return token, 1


def replay_config(
    config_path: str | Path,
    presses: List[str],
    *,
    initial: str = "",
) -> List[str]:
    """Press keys against a fresh editor loaded from a TOML config.

    Returns the rendered buffer after every press.
    """

    editor = Editor(initial)
    frontend = ChainFrontend(commands=builtin_commands(editor))
    specs = frontend.parse_config(frontend.load_toml(config_path))
    editor.load_chains(specs, context=SequencerContext())

    frames: List[str] = []
    for token in presses:
        key, prefix = parse_press(token)
        editor.press(key, prefix=prefix)
        frames.append(editor.buffer.render())
    return frames


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        description="Replay key presses against command chains from a config toml."
    )
    parser.add_argument("config", help="Chain config toml path (e.g. chains.toml)")
    parser.add_argument("keys", nargs="*", help="Keys to press; KEY@N presses with prefix N")
    parser.add_argument("--initial", default="", help="Initial buffer text (cursor at end)")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")

    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="[%(levelname)s] %(name)s: %(message)s",
    )

    try:
        frames = replay_config(args.config, args.keys, initial=args.initial)
    except (ConfigurationError, LookupError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2

    for token, frame in zip(args.keys, frames):
        print(f"{token}\t{frame!r}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
