"""CLI entrypoints for jsonshape commands."""

from __future__ import annotations

import argparse
import sys
from dataclasses import replace
from pathlib import Path

from .clipboard import SystemClipboard
from .config import JsonShapeConfig, load_config
from .console import colorize
from .core import describe_stats
from .errors import JsonShapeError
from .logging import configure_logging, get_logger
from .models import Policy
from .orchestrator import Orchestrator
from .parsing import read_input
from .stores import (
    DisplayOptions,
    HistoryStore,
    KeyValueStore,
    OptionsStore,
    ThemeStore,
    default_store_path,
)
from .stores.options import OUTPUT_FORMATS, THEMES


def _add_verbose_option(
    parser: argparse.ArgumentParser, *, suppress_default: bool = False
) -> None:
    kwargs: dict[str, object] = {
        "action": "store_true",
        "help": "Increase log verbosity for troubleshooting.",
    }
    if suppress_default:
        kwargs["default"] = argparse.SUPPRESS
    else:
        kwargs["default"] = False
    parser.add_argument(
        "-v",
        "--verbose",
        **kwargs,
    )


def _add_source_argument(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "source",
        nargs="?",
        default="-",
        help="JSON file to read (defaults to standard input).",
    )


def _add_policy_options(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--length",
        dest="show_length",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Show array lengths as array[N].",
    )
    parser.add_argument(
        "--sample",
        dest="show_sample",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Show an example value next to each leaf type.",
    )
    parser.add_argument(
        "--keys-only",
        dest="keys_only",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Only show keys and nesting, without value types.",
    )
    parser.add_argument(
        "--compact",
        dest="compact",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Render on a single line.",
    )
    parser.add_argument(
        "--max-depth",
        dest="max_depth",
        type=int,
        default=None,
        help="Stop descending after N levels (0 means unlimited).",
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="jsonshape",
        description="Infer the structure of JSON data, generate type declarations and diff shapes.",
    )
    _add_verbose_option(parser)
    parser.add_argument(
        "--log-file",
        type=Path,
        default=None,
        help="Also write log records to this file.",
    )
    parser.add_argument(
        "--config",
        default=".",
        help="Directory or .jsonshape.yml file to load settings from.",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    extract_parser = subparsers.add_parser(
        "extract",
        help="Print the structure (or type declaration) of a JSON document.",
    )
    _add_verbose_option(extract_parser, suppress_default=True)
    _add_source_argument(extract_parser)
    _add_policy_options(extract_parser)
    extract_parser.add_argument(
        "--paste",
        action="store_true",
        help="Read the JSON document from the clipboard.",
    )
    extract_parser.add_argument(
        "--copy",
        action="store_true",
        help="Copy the result to the clipboard.",
    )
    extract_parser.add_argument(
        "--format",
        dest="output_format",
        choices=OUTPUT_FORMATS,
        default=None,
        help="Output a structure outline or a TypeScript declaration.",
    )
    extract_parser.add_argument(
        "--name",
        dest="interface_name",
        default=None,
        help="Name of the generated interface (typescript format).",
    )
    extract_parser.add_argument(
        "--color",
        action="store_true",
        help="Highlight the output with ANSI colours.",
    )
    extract_parser.add_argument(
        "--save-options",
        action="store_true",
        help="Remember the given display options for later runs.",
    )

    diff_parser = subparsers.add_parser(
        "diff",
        help="Compare the structure of two JSON documents.",
    )
    _add_verbose_option(diff_parser, suppress_default=True)
    diff_parser.add_argument("left", help="Original JSON file ('-' for standard input).")
    diff_parser.add_argument("right", help="New JSON file.")
    diff_parser.add_argument(
        "--color",
        action="store_true",
        help="Highlight the report with ANSI colours.",
    )

    format_parser = subparsers.add_parser("format", help="Pretty-print a JSON document.")
    _add_verbose_option(format_parser, suppress_default=True)
    _add_source_argument(format_parser)

    stats_parser = subparsers.add_parser(
        "stats", help="Print the key count and nesting depth of a JSON document."
    )
    _add_verbose_option(stats_parser, suppress_default=True)
    _add_source_argument(stats_parser)

    history_parser = subparsers.add_parser("history", help="Inspect recently extracted inputs.")
    _add_verbose_option(history_parser, suppress_default=True)
    history_actions = history_parser.add_subparsers(dest="history_action", required=True)
    history_actions.add_parser("list", help="List saved inputs, newest first.")
    show_parser = history_actions.add_parser("show", help="Print one saved input.")
    show_parser.add_argument("entry_id", type=int, help="Identifier shown by `history list`.")
    history_actions.add_parser("clear", help="Delete all saved inputs.")

    theme_parser = subparsers.add_parser("theme", help="Show or change the colour theme.")
    _add_verbose_option(theme_parser, suppress_default=True)
    theme_parser.add_argument(
        "theme",
        nargs="?",
        choices=THEMES + ("toggle",),
        help="Theme to switch to, or 'toggle'.",
    )

    serve_parser = subparsers.add_parser("serve", help="Run the HTTP service.")
    _add_verbose_option(serve_parser, suppress_default=True)
    serve_parser.add_argument("--host", default="127.0.0.1", help="Interface to bind.")
    serve_parser.add_argument("--port", type=int, default=8000, help="Port to listen on.")

    return parser


def resolve_options(
    args: argparse.Namespace, config: JsonShapeConfig, options_store: OptionsStore
) -> DisplayOptions:
    """Layer command-line flags over persisted options over the config file."""
    options = options_store.load(config.display_options())
    overrides = {
        name: getattr(args, name, None)
        for name in ("show_length", "show_sample", "keys_only", "compact", "max_depth")
    }
    policy = Policy.from_mapping(overrides, base=options.policy)
    output_format = getattr(args, "output_format", None) or options.output_format
    return replace(options, policy=policy, output_format=output_format)


def main(argv: list[str] | None = None) -> None:
    """CLI entrypoint for jsonshape commands."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    configure_logging(verbose=bool(args.verbose), log_file=args.log_file)
    logger = get_logger("cli")

    try:
        config = load_config(Path(args.config))
    except JsonShapeError as exc:
        parser.exit(1, f"{exc}\n")

    store = KeyValueStore(config.storage.path or default_store_path())
    logger.debug("Using store %s", store.path)
    history = HistoryStore(store) if config.storage.history_enabled else None
    options_store = OptionsStore(store)
    theme_store = ThemeStore(store)
    orchestrator = Orchestrator(history=history, clipboard=SystemClipboard())

    try:
        if args.command == "extract":
            options = resolve_options(args, config, options_store)
            if args.save_options:
                options_store.save(options)
                logger.info("Saved display options")
            text = orchestrator.paste() if args.paste else read_input(args.source)
            outcome = orchestrator.extract(
                text,
                options,
                interface_name=args.interface_name or config.output.interface_name,
            )
            print(describe_stats(outcome.stats), file=sys.stderr)
            if args.color:
                print(colorize(outcome.spans, theme_store.get()))
            else:
                print(outcome.text)
            if args.copy:
                orchestrator.copy(outcome.text)
        elif args.command == "diff":
            compared = orchestrator.compare(read_input(args.left), read_input(args.right))
            if args.color:
                print(colorize(compared.spans, theme_store.get()))
            else:
                print(compared.report)
        elif args.command == "format":
            print(orchestrator.format(read_input(args.source)))
        elif args.command == "stats":
            stats = orchestrator.stats(read_input(args.source))
            print(describe_stats(stats))
        elif args.command == "history":
            _run_history(parser, args, orchestrator)
        elif args.command == "theme":
            if args.theme == "toggle":
                print(theme_store.toggle())
            elif args.theme:
                print(theme_store.set(args.theme))
            else:
                print(theme_store.get())
        elif args.command == "serve":
            from .service import run_service

            run_service(host=args.host, port=args.port)
        else:  # pragma: no cover - argparse enforces choices
            parser.exit(1, "Unknown command\n")
    except JsonShapeError as exc:
        parser.exit(1, f"{exc}\n")
    except OSError as exc:
        parser.exit(1, f"jsonshape {args.command} failed: {exc}\n")


def _run_history(
    parser: argparse.ArgumentParser, args: argparse.Namespace, orchestrator: Orchestrator
) -> None:
    history = orchestrator.history
    if history is None:
        parser.exit(1, "History is disabled in the configuration.\n")
    if args.history_action == "list":
        entries = history.entries()
        if not entries:
            print("No history yet")
        for entry in entries:
            marker = " (truncated)" if entry.truncated else ""
            print(f"{entry.id}  {entry.time}  {entry.preview}{marker}")
    elif args.history_action == "show":
        text = orchestrator.history_input(args.entry_id)
        if text is None:
            parser.exit(1, f"No history entry with id {args.entry_id}\n")
        print(text)
    elif args.history_action == "clear":
        history.clear()
        print("History cleared")


if __name__ == "__main__":
    main(sys.argv[1:])
