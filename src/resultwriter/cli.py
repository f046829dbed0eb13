"""CLI entry point for the ResultWriter server."""

from __future__ import annotations

import argparse
import logging
import os
import sys
from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from resultwriter.config.settings import Settings


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="resultwriter",
        description="ResultWriter — Search service with template-driven response writers",
    )
    parser.add_argument(
        "--config",
        "-c",
        type=str,
        default=None,
        help="Path to YAML configuration file",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        choices=["debug", "info", "warning", "error"],
        default=None,
        help="Log level (overrides config)",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"ResultWriter {_get_version()}",
    )
    subparsers = parser.add_subparsers(dest="command")

    serve = subparsers.add_parser("serve", help="Run the HTTP server (default)")
    serve.add_argument("--host", type=str, default=None, help="Server bind address (overrides config)")
    serve.add_argument("--port", "-p", type=int, default=None, help="Server port (overrides config)")
    serve.add_argument("--workers", "-w", type=int, default=None, help="Number of worker processes")
    serve.add_argument("--reload", action="store_true", help="Enable auto-reload for development")

    render = subparsers.add_parser("render", help="Run one query and print the writer output")
    render.add_argument("q", nargs="?", default=None, help="Query string (default: match all)")
    render.add_argument(
        "--param",
        "-P",
        action="append",
        default=[],
        metavar="NAME=VALUE",
        help="Extra request parameter, e.g. -P template=results -P wrap=cb",
    )
    return parser


def main(argv: list[str] | None = None) -> None:
    """Main CLI entry point for ResultWriter."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    log_level = (args.log_level or "info").upper()
    logging.basicConfig(
        level=getattr(logging, log_level),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        stream=sys.stderr,
    )

    from resultwriter.config.settings import Settings

    if args.config:
        config_path = Path(args.config)
        if not config_path.exists():
            print(f"Error: Config file not found: {config_path}", file=sys.stderr)
            sys.exit(1)
        settings = Settings.from_yaml(config_path)
    else:
        settings = Settings()

    if args.log_level:
        settings.observability.log_level = args.log_level

    if args.command == "render":
        sys.exit(_render(settings, args.q, args.param))
    _serve(settings, args, log_level)


def _parse_params(pairs: list[str]) -> dict[str, str]:
    params: dict[str, str] = {}
    for pair in pairs:
        name, sep, value = pair.partition("=")
        if not sep or not name:
            raise ValueError(f"Expected NAME=VALUE, got {pair!r}")
        params[name] = value
    return params


def _render(settings: Settings, q: str | None, pairs: list[str]) -> int:
    """Render one query to stdout; returns the process exit code."""
    from resultwriter.core.engine import ResultWriterEngine
    from resultwriter.store.exceptions import StoreError
    from resultwriter.writers.base.exceptions import WriterError
    from resultwriter.writers.base.registry import WriterNotFoundError

    try:
        params = _parse_params(pairs)
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2
    if q is not None:
        params["q"] = q

    engine = ResultWriterEngine(settings)
    try:
        engine.initialize()
        output = engine.respond(params)
    except (WriterError, WriterNotFoundError, StoreError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    finally:
        engine.shutdown()

    print(f"Content-Type: {output.content_type}", file=sys.stderr)
    sys.stdout.write(output.body)
    return 0


def _serve(settings: Settings, args: argparse.Namespace, log_level: str) -> None:
    import uvicorn

    from resultwriter.api.app import CONFIG_FILE_ENV, LOG_LEVEL_ENV

    # the app factory runs in the server process and rebuilds Settings from these
    if args.config:
        os.environ[CONFIG_FILE_ENV] = str(Path(args.config).resolve())
    if args.log_level:
        os.environ[LOG_LEVEL_ENV] = args.log_level

    server = settings.server
    if getattr(args, "host", None):
        server.host = args.host
    if getattr(args, "port", None):
        server.port = args.port
    if getattr(args, "workers", None):
        server.workers = args.workers
    reload = bool(getattr(args, "reload", False))

    uvicorn.run(
        "resultwriter.api.app:create_app",
        factory=True,
        host=server.host,
        port=server.port,
        workers=server.workers if not reload else 1,
        reload=reload,
        log_level=log_level.lower(),
    )


def _get_version() -> str:
    """Get the package version."""
    try:
        from resultwriter import __version__

        return __version__
    except ImportError:
        return "unknown"


if __name__ == "__main__":
    main()
