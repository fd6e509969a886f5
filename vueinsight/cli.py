"""CLI entrypoints for vueinsight commands."""

from __future__ import annotations

import argparse
import asyncio
import json
import sys
from pathlib import Path

from .config import ConfigError, load_config
from .logging import configure_logging
from .orchestrator import Orchestrator
from .parser.component import parse_component_file
from .report import render_markdown


def _add_logging_options(
    parser: argparse.ArgumentParser, *, suppress_default: bool = False
) -> None:
    """Accept the logging flags both before and after the subcommand."""
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        default=argparse.SUPPRESS if suppress_default else False,
        help="Show per-file debug output on the console.",
    )
    parser.add_argument(
        "--log-file",
        type=Path,
        default=argparse.SUPPRESS if suppress_default else None,
        help="Also write a full debug log to this file.",
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="vueinsight",
        description="Report which props, events and slots of Vue components their parents use.",
    )
    _add_logging_options(parser)
    subparsers = parser.add_subparsers(dest="command", required=True)

    scan_parser = subparsers.add_parser(
        "scan",
        help="Analyze component usage across a project.",
    )
    _add_logging_options(scan_parser, suppress_default=True)
    scan_parser.add_argument(
        "path",
        nargs="?",
        default=".",
        help="Path to the project root (defaults to current directory).",
    )
    scan_parser.add_argument(
        "--format",
        choices=("json", "markdown"),
        default=None,
        help="Report format (defaults to the project config, then json).",
    )
    scan_parser.add_argument(
        "--output",
        "-o",
        default=None,
        help="Write the report to this file instead of stdout.",
    )
    scan_parser.add_argument(
        "--no-cache",
        action="store_true",
        help="Ignore and do not update the parsed component cache.",
    )

    inspect_parser = subparsers.add_parser(
        "inspect",
        help="Print the props, events and slots a single component declares.",
    )
    _add_logging_options(inspect_parser, suppress_default=True)
    inspect_parser.add_argument("file", help="Path to a .vue file.")

    serve_parser = subparsers.add_parser(
        "serve",
        help="Run the HTTP service.",
    )
    _add_logging_options(serve_parser, suppress_default=True)
    serve_parser.add_argument("--host", default="127.0.0.1", help="Interface to bind.")
    serve_parser.add_argument("--port", type=int, default=8000, help="Port to listen on.")

    return parser


def main(argv: list[str] | None = None) -> None:
    """CLI entrypoint for vueinsight commands."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    configure_logging(verbose=bool(args.verbose), log_file=args.log_file)

    if args.command == "scan":
        orchestrator = Orchestrator(use_cache=not args.no_cache)
        try:
            report = orchestrator.run_analysis(args.path)
            report_format = args.format or load_config(Path(args.path)).report.format
        except (FileNotFoundError, NotADirectoryError) as exc:
            parser.exit(1, f"{exc}\n")
        except ConfigError as exc:
            parser.exit(1, f"Invalid configuration: {exc}\n")
        except Exception as exc:  # pragma: no cover
            parser.exit(1, f"vueinsight scan failed: {exc}\nRun with --verbose for more details.\n")

        if report_format == "markdown":
            rendered = render_markdown(report)
        else:
            rendered = json.dumps(report.to_dict(), indent=2)

        if args.output:
            output = Path(args.output)
            output.write_text(rendered + "\n", encoding="utf-8")
            print(f"Report written to {_relativize(output.resolve())}")
        else:
            print(rendered)
    elif args.command == "inspect":
        target = Path(args.file)
        if not target.is_file():
            parser.exit(1, f"Component file not found: {args.file}\n")
        component = asyncio.run(parse_component_file(target))
        if component is None:
            parser.exit(1, f"Could not parse {args.file}\n")
        print(json.dumps(component.to_dict(), indent=2))
    elif args.command == "serve":  # pragma: no cover - integration path
        from .service import run_service

        run_service(host=args.host, port=args.port)
    else:  # pragma: no cover - argparse enforces choices
        parser.exit(1, "Unknown command\n")


def _relativize(path: Path) -> str:
    try:
        return str(path.relative_to(Path.cwd()))
    except ValueError:
        return str(path)


if __name__ == "__main__":
    main(sys.argv[1:])
