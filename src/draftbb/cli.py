from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any

from draftbb import __version__
from draftbb.config import CONFIG_FILENAME, DraftBBConfig, load_config
from draftbb.convert import convert
from draftbb.errors import DraftBBConfigError, DraftBBInputError, DraftBBListError
from draftbb.sections import HashtagConfig

EXIT_OK = 0
EXIT_CONFIG_OR_INPUT = 2
EXIT_IO_ERROR = 3

_DEFAULT_CONFIG = """\
version = 1

[hashtag]
enabled = false
trigger = "#"
separator = " "

[render]
directional = false
"""


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="draftbb")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")

    subparsers = parser.add_subparsers(dest="command", required=True)

    convert_p = subparsers.add_parser("convert", help="Convert Draft raw JSON to BBCode.")
    convert_p.add_argument(
        "input",
        nargs="?",
        default="-",
        help="Path to a Draft raw content JSON file ('-' reads stdin).",
    )
    convert_p.add_argument(
        "-o",
        "--output",
        type=str,
        default=None,
        help="Write BBCode to this file instead of stdout.",
    )
    convert_p.add_argument(
        "--config",
        type=str,
        default=None,
        help=f"Path to {CONFIG_FILENAME} (defaults to searching upward from cwd).",
    )
    convert_p.add_argument(
        "--hashtags",
        action="store_true",
        help="Enable hashtag detection even if the config disables it.",
    )
    convert_p.add_argument("--trigger", type=str, default=None, help="Hashtag trigger.")
    convert_p.add_argument("--separator", type=str, default=None, help="Hashtag separator.")
    convert_p.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Log debug details to stderr.",
    )

    init_p = subparsers.add_parser("init", help=f"Write a default {CONFIG_FILENAME}.")
    init_p.add_argument("--force", action="store_true", help="Overwrite an existing file.")

    return parser


def parse_args(argv: list[str]) -> argparse.Namespace:
    return _build_parser().parse_args(argv)


def _eprint(msg: str) -> None:
    print(msg, file=sys.stderr)


def _print_error(e: BaseException) -> None:
    msg = (str(e) or repr(e)).strip()
    _eprint(f"error: {msg}")


def _configure_logging(verbose: bool) -> None:
    if not verbose:
        return
    logging.basicConfig(
        level=logging.DEBUG,
        stream=sys.stderr,
        format="%(levelname)s %(name)s: %(message)s",
    )


def _load_config(args: argparse.Namespace) -> DraftBBConfig:
    if args.config:
        return load_config(config_path=Path(args.config).resolve())
    return load_config(root=Path.cwd())


def _resolve_hashtags(args: argparse.Namespace, cfg: DraftBBConfig) -> HashtagConfig | None:
    base = cfg.hashtag_config()
    overridden = bool(args.hashtags or args.trigger or args.separator)
    if base is None and not overridden:
        return None
    base = base or HashtagConfig(trigger=cfg.hashtag.trigger, separator=cfg.hashtag.separator)
    return HashtagConfig(
        trigger=args.trigger or base.trigger,
        separator=args.separator or base.separator,
    )


def _read_document(source: str) -> Any:
    if source == "-":
        text = sys.stdin.read()
        name = "<stdin>"
    else:
        text = Path(source).read_text(encoding="utf-8")
        name = source
    try:
        return json.loads(text)
    except json.JSONDecodeError as e:
        raise DraftBBInputError(f"Invalid JSON in {name}: {e}") from e


def cmd_convert(args: argparse.Namespace) -> int:
    _configure_logging(bool(args.verbose))
    try:
        cfg = _load_config(args)
        raw = _read_document(args.input)
        result = convert(
            raw,
            hashtag_config=_resolve_hashtags(args, cfg),
            directional=cfg.render.directional,
        )
    except (DraftBBConfigError, DraftBBInputError, DraftBBListError) as e:
        _print_error(e)
        return EXIT_CONFIG_OR_INPUT
    except OSError as e:
        _print_error(e)
        return EXIT_IO_ERROR

    try:
        if args.output:
            Path(args.output).write_text(result, encoding="utf-8")
        else:
            sys.stdout.write(result)
    except OSError as e:
        _print_error(e)
        return EXIT_IO_ERROR
    return EXIT_OK


def cmd_init(args: argparse.Namespace) -> int:
    path = Path.cwd() / CONFIG_FILENAME
    if path.exists() and not bool(args.force):
        _eprint(f"error: {CONFIG_FILENAME} already exists (use --force to overwrite).")
        return EXIT_CONFIG_OR_INPUT
    try:
        path.write_text(_DEFAULT_CONFIG, encoding="utf-8")
    except OSError as e:
        _print_error(e)
        return EXIT_IO_ERROR
    return EXIT_OK


def main(argv: list[str] | None = None) -> int:
    try:
        args = parse_args(list(sys.argv[1:] if argv is None else argv))
    except SystemExit as e:
        # argparse uses SystemExit for --help/--version and parse errors.
        code = e.code
        return int(code) if isinstance(code, int) else EXIT_CONFIG_OR_INPUT

    if args.command == "convert":
        return cmd_convert(args)
    if args.command == "init":
        return cmd_init(args)

    return EXIT_CONFIG_OR_INPUT


if __name__ == "__main__":
    raise SystemExit(main(sys.argv[1:]))
