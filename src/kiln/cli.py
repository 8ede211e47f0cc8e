"""Command line interface for kiln."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Iterable, Sequence

from .config import ScaffoldConfig
from .editions import available_editions, get_edition
from .errors import KilnError
from .manifest import load_manifest
from .report import MaterializationReport, Outcome
from .scaffold import Scaffolder
from .template import TemplateRenderer
from .vcs import GitInvoker

EXIT_OK = 0
EXIT_PARTIAL = 1
EXIT_ERROR = 2

_MARKERS = {
    Outcome.CREATED: "+",
    Outcome.OVERWRITTEN: "~",
    Outcome.SKIPPED: "=",
    Outcome.FAILED: "!",
}


def _parse_key_value_pairs(pairs: Iterable[str]) -> dict[str, str]:
    context: dict[str, str] = {}
    for pair in pairs:
        if "=" not in pair:
            raise argparse.ArgumentTypeError(
                f"invalid key/value pair '{pair}'. Expected KEY=VALUE syntax."
            )
        key, value = pair.split("=", 1)
        key = key.strip()
        if not key:
            raise argparse.ArgumentTypeError("keys must not be empty")
        context[key] = value
    return context


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Scaffold AI assistant project conventions")
    parser.add_argument(
        "-v",
        "--verbose",
        action="count",
        default=0,
        help="Increase log verbosity (repeat for debug output)",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    init_parser = subparsers.add_parser("init", help="materialise an edition into a project directory")
    init_parser.add_argument("name", help="Display name for the project")
    init_parser.add_argument("--description", default="", help="One line project description")
    init_parser.add_argument(
        "-d",
        "--directory",
        type=Path,
        help="Target directory (defaults to ./<project-slug>)",
    )
    source = init_parser.add_mutually_exclusive_group()
    source.add_argument(
        "-e",
        "--edition",
        default="standard",
        choices=available_editions(),
        help="Bundled edition to materialise",
    )
    source.add_argument("-m", "--manifest", type=Path, help="Materialise an edition manifest (JSON)")
    init_parser.add_argument("--date", help="ISO date stamped into documents (defaults to today)")
    init_parser.add_argument(
        "-c",
        "--context",
        metavar="KEY=VALUE",
        action="append",
        default=[],
        help="Additional placeholder bindings",
    )
    init_parser.add_argument(
        "--git",
        action="store_true",
        help="Initialise a git repository and commit the scaffold",
    )
    init_parser.add_argument("--json", action="store_true", help="Print the report as JSON")

    render_parser = subparsers.add_parser("render", help="resolve a single template file")
    render_parser.add_argument("template", type=Path, help="Path to the template file")
    render_parser.add_argument(
        "-c",
        "--context",
        metavar="KEY=VALUE",
        action="append",
        default=[],
        help="Placeholder bindings",
    )
    render_parser.add_argument(
        "-o",
        "--output",
        type=Path,
        help="Write the rendered template to this path instead of stdout",
    )

    subparsers.add_parser("editions", help="list bundled editions and their entries")

    return parser


def _configure_logging(verbosity: int) -> None:
    level = logging.WARNING
    if verbosity == 1:
        level = logging.INFO
    elif verbosity > 1:
        level = logging.DEBUG
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")


def _print_report(report: MaterializationReport) -> None:
    print(f"Edition '{report.edition}' -> {report.root}")
    for result in report.results:
        line = f"  {_MARKERS[result.outcome]} {result.outcome.value:<11} {result.path}"
        if result.failure is not None:
            line = f"{line}  ({result.failure})"
        print(line)
    for warning in report.warnings:
        print(f"  warning: {warning}")

    counts = report.counts()
    summary = ", ".join(f"{counts[outcome]} {outcome.value}" for outcome in Outcome)
    if report.interrupted:
        print(f"Interrupted: {summary}. Re-run to finish scaffolding.")
    elif report.failed:
        print(f"Partially complete: {summary}.", file=sys.stderr)
    else:
        print(f"Done: {summary}.")


def _handle_init(args: argparse.Namespace) -> int:
    config = ScaffoldConfig.from_inputs(args.name, args.description, date=args.date)
    if args.manifest is not None:
        _, registry = load_manifest(args.manifest)
    else:
        registry = get_edition(args.edition)
    target = args.directory if args.directory is not None else Path.cwd() / config.slug

    scaffolder = Scaffolder()
    report = scaffolder.create(
        config,
        target,
        edition=registry,
        extra_bindings=_parse_key_value_pairs(args.context),
    )

    if args.json:
        print(report.model_dump_json(indent=2))
    else:
        _print_report(report)

    if args.git:
        if report.ok:
            message = f"chore: Initialize {config.name} with kiln edition {registry.name}"
            result = GitInvoker().init_and_commit(report.root, message)
            stream = sys.stdout if result.ok else sys.stderr
            print(f"git: {result.detail}", file=stream)
        else:
            print("git: skipped because the scaffold is incomplete", file=sys.stderr)

    return EXIT_OK if report.ok else EXIT_PARTIAL


def _handle_render(args: argparse.Namespace) -> int:
    renderer = TemplateRenderer()
    context = _parse_key_value_pairs(args.context)
    rendered = renderer.render_file(args.template, context)
    if args.output:
        args.output.parent.mkdir(parents=True, exist_ok=True)
        args.output.write_text(rendered, encoding="utf-8")
    else:
        sys.stdout.write(rendered)
        if not rendered.endswith("\n"):
            sys.stdout.write("\n")
    return EXIT_OK


def _handle_editions(args: argparse.Namespace) -> int:
    for name in available_editions():
        registry = get_edition(name)
        print(f"{name}: {registry.description}")
        for entry in registry.all():
            print(f"  {entry.display_path} [{entry.kind.value}, {entry.policy.value}]")
    return EXIT_OK


def main(argv: Sequence[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    _configure_logging(args.verbose)
    try:
        if args.command == "init":
            return _handle_init(args)
        if args.command == "render":
            return _handle_render(args)
        if args.command == "editions":
            return _handle_editions(args)
    except (KilnError, ValueError, argparse.ArgumentTypeError, FileNotFoundError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return EXIT_ERROR
    parser.error("no command provided")
    return EXIT_ERROR


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
