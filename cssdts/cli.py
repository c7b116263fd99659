"""CLI entrypoints for cssdts commands."""

from __future__ import annotations

import argparse
import asyncio
import sys
from pathlib import Path
from typing import Optional, Set

from .config import CONFIG_FILENAME, DEFAULT_PATTERN, ConfigError, FileConfig, load_config
from .logging import configure_logging, get_logger
from .orchestrator import BatchItem, DtsCreator
from .scanner import find_sources
from .watcher import PollingWatcher

logger = get_logger("cli")


def _add_verbose_option(
    parser: argparse.ArgumentParser, *, suppress_default: bool = False
) -> None:
    kwargs: dict[str, object] = {
        "action": "store_true",
        "help": "Verbose mode: report skipped and quoted class names.",
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


def _add_config_option(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--config",
        default=None,
        help=f"Path to a {CONFIG_FILENAME} file (defaults to the current directory).",
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="cssdts",
        description="Create .d.ts declarations from CSS modules *.css files.",
    )
    _add_verbose_option(parser)
    parser.add_argument(
        "-q", "--quiet", action="store_true", help="Only report errors on the console."
    )
    parser.add_argument("--log-file", type=Path, default=None, help="Also write logs to this file.")
    subparsers = parser.add_subparsers(dest="command", required=True)

    generate_parser = subparsers.add_parser(
        "generate",
        help="Write a declaration file for every matching style sheet.",
        epilog=(
            "examples: cssdts generate src/styles | cssdts generate src -o dist | "
            "cssdts generate -p 'styles/**/*.icss' -w"
        ),
    )
    _add_verbose_option(generate_parser, suppress_default=True)
    _add_config_option(generate_parser)
    generate_parser.add_argument(
        "search_dir",
        nargs="?",
        default=None,
        help="Input directory searched for style sheets.",
    )
    generate_parser.add_argument(
        "-p",
        "--pattern",
        default=None,
        help=f"Glob pattern, relative to the input directory (default: {DEFAULT_PATTERN}).",
    )
    generate_parser.add_argument("-o", "--out-dir", default=None, help="Output directory.")
    generate_parser.add_argument(
        "-c",
        "--camel-case",
        nargs="?",
        const="true",
        default=None,
        choices=("true", "dashes"),
        help="Convert class names to camelCase; 'dashes' only converts dashes.",
    )
    generate_parser.add_argument(
        "-d",
        "--drop-extension",
        action="store_true",
        default=None,
        help="Drop the input file's extension from the output name.",
    )
    generate_parser.add_argument(
        "-s",
        "--use-spaces",
        action="store_true",
        default=None,
        help="Indent with spaces rather than tabs.",
    )
    generate_parser.add_argument(
        "-n",
        "--no-semicolons",
        action="store_true",
        default=None,
        help="Don't add semicolons to generated lines.",
    )
    generate_parser.add_argument(
        "-w",
        "--watch",
        action="store_true",
        help="Watch the input directory's style sheets and regenerate on change.",
    )
    generate_parser.add_argument(
        "--interval",
        type=float,
        default=0.5,
        help="Polling interval in seconds for --watch.",
    )

    serve_parser = subparsers.add_parser(
        "serve",
        help="Serve declaration generation over HTTP for editor and bundler plugins.",
    )
    _add_verbose_option(serve_parser, suppress_default=True)
    _add_config_option(serve_parser)
    serve_parser.add_argument("--host", default="127.0.0.1")
    serve_parser.add_argument("--port", type=int, default=8000)
    serve_parser.add_argument("search_dir", nargs="?", default=None)

    return parser


def main(argv: list[str] | None = None) -> None:
    """CLI entrypoint for cssdts commands."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    configure_logging(verbose=bool(args.verbose), quiet=args.quiet, log_file=args.log_file)

    try:
        file_config = _load_file_config(args.config)
    except ConfigError as exc:
        parser.exit(1, f"{exc}\n")

    if args.command == "generate":
        search_dir = args.search_dir or file_config.search_dir
        pattern = args.pattern or file_config.pattern
        if search_dir is None:
            if pattern is None:
                parser.parse_args(["generate", "--help"])
                return
            search_dir = "./"
        try:
            config = file_config.to_run_configuration(
                root_dir=Path.cwd(),
                search_dir=search_dir,
                out_dir=args.out_dir,
                camel_case=args.camel_case,
                drop_extension=args.drop_extension,
                use_spaces=args.use_spaces,
                no_semicolons=args.no_semicolons,
            )
        except ConfigError as exc:
            parser.exit(1, f"{exc}\n")
        creator = DtsCreator(config)
        pattern = pattern or DEFAULT_PATTERN
        verbose = bool(args.verbose)
        if args.watch:
            try:
                asyncio.run(_watch(creator, pattern, interval=args.interval, verbose=verbose))
            except KeyboardInterrupt:
                pass
            return
        try:
            failures = asyncio.run(_generate(creator, pattern, verbose=verbose))
        except (FileNotFoundError, NotADirectoryError) as exc:
            parser.exit(1, f"{exc}\n")
        if failures:
            parser.exit(1, f"{failures} file(s) failed.\n")
    elif args.command == "serve":
        from .service import run_service

        try:
            config = file_config.to_run_configuration(
                root_dir=Path.cwd(), search_dir=args.search_dir
            )
        except ConfigError as exc:
            parser.exit(1, f"{exc}\n")
        run_service(lambda: DtsCreator(config), host=args.host, port=args.port)
    else:  # pragma: no cover - argparse enforces choices
        parser.exit(1, "Unknown command\n")


def _load_file_config(config_arg: Optional[str]) -> FileConfig:
    config_path = Path(config_arg) if config_arg else Path.cwd()
    return load_config(config_path)


async def _generate(creator: DtsCreator, pattern: str, *, verbose: bool = False) -> int:
    sources = find_sources(creator.input_directory, pattern)
    if not sources:
        logger.info("No files matched %s", pattern)
        return 0
    items = await creator.create_many(sources)
    for item in items:
        _report(item, verbose=verbose)
    return sum(1 for item in items if not item.ok)


async def _watch(
    creator: DtsCreator,
    pattern: str,
    *,
    interval: float,
    verbose: bool = False,
    watcher: Optional[PollingWatcher] = None,
) -> None:
    watcher = watcher or PollingWatcher(creator.input_directory, pattern, interval=interval)
    logger.info("Watch %s...", Path(creator.input_directory, pattern))
    pending: Set[asyncio.Task[BatchItem]] = set()

    def _done(task: asyncio.Task[BatchItem]) -> None:
        pending.discard(task)
        if not task.cancelled():
            _report(task.result(), verbose=verbose)

    async for event in watcher.events():
        task = asyncio.create_task(creator.create_and_persist(event.path, clear_cache=True))
        pending.add(task)
        task.add_done_callback(_done)
    if pending:
        await asyncio.wait(pending)


def _report(item: BatchItem, *, verbose: bool = False) -> None:
    if item.error is not None:
        logger.error("%s: %s", _relativize(item.source), item.error)
        return
    if item.persisted is not None:
        verb = "Wrote" if item.persisted.written else "Up to date"
        logger.info("%s %s", verb, _relativize(item.persisted.path))
    if verbose and item.result is not None:
        for message in item.result.warnings:
            logger.warning(message)


def _relativize(path: Path) -> str:
    try:
        return str(path.relative_to(Path.cwd()))
    except ValueError:
        return str(path)


if __name__ == "__main__":
    main(sys.argv[1:])
