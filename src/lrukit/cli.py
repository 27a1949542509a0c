from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

from lrukit import __version__
from lrukit.cache import LRUCache
from lrukit.config import CacheConfig
from lrukit.diagnostics import format_error_with_hint, format_stats_line
from lrukit.errors import ConfigurationError, ReplayError

EXIT_OK = 0
EXIT_CONFIG_ERROR = 2
EXIT_SCRIPT_ERROR = 3


def _add_config_flags(p: argparse.ArgumentParser) -> None:
    p.add_argument(
        "--capacity",
        type=int,
        default=None,
        help="Cache capacity (overrides lrukit.toml).",
    )
    p.add_argument(
        "--root",
        type=str,
        default=None,
        help="Project root (defaults to searching upward from cwd for lrukit.toml).",
    )
    p.add_argument(
        "--config",
        type=str,
        default=None,
        help="Path to lrukit.toml (defaults to <root>/lrukit.toml).",
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="lrukit")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")

    subparsers = parser.add_subparsers(dest="command", required=True)

    replay_p = subparsers.add_parser("replay", help="Replay an operation script against a cache.")
    replay_p.add_argument("script", type=str, help="Operation script path ('-' for stdin).")
    _add_config_flags(replay_p)
    replay_p.add_argument(
        "--json",
        action="store_true",
        dest="json_output",
        help="Emit one JSON object per result.",
    )
    replay_p.add_argument("--stats", action="store_true", help="Print hit/miss/eviction totals.")
    replay_p.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging.")

    return parser


def parse_args(argv: list[str]) -> argparse.Namespace:
    return _build_parser().parse_args(argv)


def _configure_logging(verbose: bool) -> None:
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            stream=sys.stderr,
            format="%(levelname)s %(name)s: %(message)s",
        )


def _eprint(msg: str) -> None:
    print(msg, file=sys.stderr)


def _resolve_config(args: argparse.Namespace) -> CacheConfig:
    if args.capacity is not None:
        return CacheConfig(capacity=args.capacity)

    from lrukit.config import load_config

    root = Path(args.root).resolve() if args.root else None
    config_path = Path(args.config).resolve() if args.config else None
    return load_config(root=root, config_path=config_path)


def _read_script(path: str) -> str:
    if path == "-":
        return sys.stdin.read()
    return Path(path).read_text(encoding="utf-8")


def cmd_replay(args: argparse.Namespace) -> int:
    from lrukit.replay import parse_script, replay

    try:
        cache = LRUCache.from_config(_resolve_config(args))
    except ConfigurationError as e:
        _eprint(format_error_with_hint(e))
        return EXIT_CONFIG_ERROR

    try:
        ops = parse_script(_read_script(args.script))
    except (ReplayError, OSError, UnicodeDecodeError) as e:
        _eprint(format_error_with_hint(e))
        return EXIT_SCRIPT_ERROR

    results = replay(cache, ops)
    stats = cache.stats

    if args.json_output:
        for res in results:
            print(json.dumps(res.to_json()))
        if args.stats:
            print(
                json.dumps(
                    {
                        "op": "stats",
                        "hits": stats.hits,
                        "misses": stats.misses,
                        "evictions": stats.evictions,
                    }
                )
            )
    else:
        for res in results:
            print(res.to_text())
        if args.stats:
            print(format_stats_line(stats.hits, stats.misses, stats.evictions))

    return EXIT_OK


def main(argv: list[str] | None = None) -> int:
    try:
        args = parse_args(list(sys.argv[1:] if argv is None else argv))
    except SystemExit as e:
        # argparse uses SystemExit for --help/--version and parse errors.
        code = e.code
        return int(code) if isinstance(code, int) else EXIT_CONFIG_ERROR

    _configure_logging(bool(getattr(args, "verbose", False)))

    if args.command == "replay":
        return cmd_replay(args)

    return EXIT_CONFIG_ERROR
