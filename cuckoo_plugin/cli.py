"""CLI entrypoints for cuckoo-plugin commands."""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import List

from .config import ConfigError
from .graph import DEFAULT_GRAPH_FILE, GraphError
from .logging import configure_logging
from .models import CommandPlan
from .orchestrator import Orchestrator
from .runner import CommandRunner, GeneratorRunError
from .tools import ToolResolutionError, parse_tool_overrides
from .validators import MissingInputFilesError


def _add_logging_options(
    parser: argparse.ArgumentParser, *, suppress_default: bool = False
) -> None:
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        default=argparse.SUPPRESS if suppress_default else False,
        help="Increase log verbosity for troubleshooting.",
    )
    parser.add_argument(
        "--log-file",
        type=Path,
        default=argparse.SUPPRESS if suppress_default else None,
        help="Also write detailed logs to this file.",
    )


def _add_target_options(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "path",
        nargs="?",
        default=".",
        help="Path to the package root (defaults to current directory).",
    )
    parser.add_argument(
        "--target",
        required=True,
        help="Name of the build target to generate mocks for.",
    )
    parser.add_argument(
        "--graph",
        default=None,
        help=f"Build graph document (defaults to <path>/{DEFAULT_GRAPH_FILE}).",
    )
    parser.add_argument(
        "--work-dir",
        default=None,
        help="Directory that receives the generated output.",
    )
    parser.add_argument(
        "--tool",
        action="append",
        default=[],
        metavar="NAME=PATH",
        help="Override the location of a tool. May be repeated.",
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="cuckoo-plugin",
        description="Plan and run Cuckoo mock generation for a build target.",
    )
    _add_logging_options(parser)
    subparsers = parser.add_subparsers(dest="command", required=True)

    plan_parser = subparsers.add_parser(
        "plan",
        help="Print the generator command for a target as JSON.",
    )
    _add_logging_options(plan_parser, suppress_default=True)
    _add_target_options(plan_parser)

    run_parser = subparsers.add_parser(
        "run",
        help="Run the generator for a target when its output is stale.",
    )
    _add_logging_options(run_parser, suppress_default=True)
    _add_target_options(run_parser)
    run_parser.add_argument(
        "--force",
        action="store_true",
        help="Run the generator even when the output is up to date.",
    )

    serve_parser = subparsers.add_parser(
        "serve",
        help="Expose planning over HTTP.",
    )
    _add_logging_options(serve_parser, suppress_default=True)
    serve_parser.add_argument("--host", default="127.0.0.1")
    serve_parser.add_argument("--port", type=int, default=8000)

    return parser


def main(argv: list[str] | None = None) -> None:
    """CLI entrypoint for cuckoo-plugin commands."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    configure_logging(verbose=bool(args.verbose), log_file=args.log_file)

    if args.command == "serve":
        from .service import run_service

        run_service(host=args.host, port=args.port)
        return

    try:
        tools = parse_tool_overrides(args.tool)
    except ValueError as exc:
        parser.error(str(exc))

    orchestrator = Orchestrator()
    try:
        plans = orchestrator.plan_target(
            args.path,
            args.target,
            graph_path=Path(args.graph).resolve() if args.graph else None,
            work_dir=Path(args.work_dir).resolve() if args.work_dir else None,
            tools=tools,
        )
    except MissingInputFilesError as exc:
        parser.exit(1, f"{exc}\n")
    except (ConfigError, GraphError, ToolResolutionError) as exc:
        parser.exit(1, f"cuckoo-plugin {args.command} failed: {exc}\n")

    if args.command == "plan":
        print(_render_plans(plans))
    elif args.command == "run":
        runner = CommandRunner()
        try:
            for plan in plans:
                ran = runner.run(plan, force=bool(args.force))
                if not ran:
                    print(f"{plan.display_name}: up to date")
        except GeneratorRunError as exc:
            parser.exit(1, f"cuckoo-plugin run failed: {exc}\nRun with --verbose for more details.\n")
    else:  # pragma: no cover - argparse enforces choices
        parser.exit(1, "Unknown command\n")


def _render_plans(plans: List[CommandPlan]) -> str:
    return json.dumps([plan.to_dict() for plan in plans], indent=2)


if __name__ == "__main__":
    main(sys.argv[1:])
