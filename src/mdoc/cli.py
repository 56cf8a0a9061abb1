"""
Command-line interface for mdoc
"""
from __future__ import annotations

import argparse
import logging
import platform
import sys
from pathlib import Path
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape as rich_escape
from rich.table import Table

from mdoc.config import Settings
from mdoc.constants import EXIT_FAILURE, EXIT_SUCCESS
from mdoc.errors import MdocError, MissingDependencyError, UsageError
from mdoc.formatter import display_root, format_results
from mdoc.git import GitCommandError, is_git_available, locate_repo_root
from mdoc.operations import (
    default_resolver,
    list_children,
    list_orphans,
    list_parents,
    resolve_scope,
)
from mdoc.resolver import IncludeResolver

PROG = "mdoc"

# Results go to stdout; warnings, errors and log records to stderr
console = Console(highlight=False, soft_wrap=True, emoji=False)
err_console = Console(stderr=True, highlight=False, soft_wrap=True, emoji=False)


class ArgumentParser(argparse.ArgumentParser):
    """Argument parser that reports errors as UsageError instead of exiting."""

    def error(self, message):
        raise UsageError(message)


def program_name() -> str:
    """Name the program was invoked as, for messages and usage."""
    name = Path(sys.argv[0]).name if sys.argv and sys.argv[0] else ""
    if name in ("", "-c", "__main__.py"):
        return PROG
    return name


def _positive_int(value: str) -> int:
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid int value: {value!r}")
    if number < 1:
        raise argparse.ArgumentTypeError(f"must be at least 1: {value!r}")
    return number


def build_parser(prog: str = PROG) -> ArgumentParser:
    parser = ArgumentParser(
        prog=prog,
        description="Display important information about modular documentation files",
        add_help=False,
    )
    parser.add_argument(
        "-h", "--help",
        action="store_true",
        help="display this help and exit"
    )
    parser.add_argument(
        "-V", "--version",
        action="store_true",
        help="display version and exit"
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="log debugging information to standard error"
    )
    parser.add_argument(
        "-j", "--jobs",
        type=_positive_int,
        metavar="N",
        help="maximum number of concurrent Asciidoctor processes"
    )

    subparsers = parser.add_subparsers(dest="command", metavar="COMMAND")

    children = subparsers.add_parser(
        "children", add_help=False, help="list files included by FILE"
    )
    children.add_argument("file", help="AsciiDoc file to inspect")

    parents = subparsers.add_parser(
        "parents", add_help=False, help="list master and assembly files that include FILE"
    )
    parents.add_argument("file", help="AsciiDoc file to inspect")

    subparsers.add_parser(
        "orphans", add_help=False, help="list files not included by any master or assembly"
    )
    subparsers.add_parser("help", add_help=False, help="display this help and exit")
    subparsers.add_parser("version", add_help=False, help="display version and exit")
    subparsers.add_parser("debug", add_help=False, help="display diagnostic information and exit")

    return parser


def configure_logging(verbose: bool) -> None:
    """Send package log records to standard error through Rich."""
    logger = logging.getLogger("mdoc")
    logger.setLevel(logging.DEBUG if verbose else logging.WARNING)
    if not any(isinstance(h, RichHandler) for h in logger.handlers):
        logger.addHandler(RichHandler(console=err_console, show_time=False, show_path=False))


def warn(settings: Settings, message: str) -> None:
    """Print a warning to standard error."""
    err_console.print(f"[yellow]{rich_escape(settings.name)}:[/] {rich_escape(message)}")


def report_error(name: str, message: str) -> None:
    """Print a fatal error to standard error."""
    err_console.print(f"[bold red]{rich_escape(name)}:[/] {rich_escape(message)}")


def print_results(text: str) -> None:
    console.print(text, markup=False)


def require_dependencies(resolver: IncludeResolver) -> None:
    """
    Fail early when an external tool the queries rely on is missing.

    Raises:
        MissingDependencyError: If git or Asciidoctor is unavailable
    """
    if not is_git_available():
        raise MissingDependencyError("Missing dependency: git")

    is_available = getattr(resolver, "is_available", None)
    if is_available is not None and not is_available():
        raise MissingDependencyError("Missing dependency: asciidoctor")


def print_debug_report(settings: Settings, resolver: IncludeResolver) -> None:
    """Print version, environment and dependency status."""
    git_ok = is_git_available()
    repo_root = None
    if git_ok:
        try:
            repo_root = locate_repo_root(settings.cwd)
        except GitCommandError as e:
            logging.getLogger(__name__).debug("Repository lookup failed: %s", e)

    is_available = getattr(resolver, "is_available", None)
    asciidoctor_ok = is_available() if is_available is not None else True

    table = Table(title=f"{settings.name} {settings.version}", show_header=True, header_style="bold magenta")
    table.add_column("Setting", style="cyan")
    table.add_column("Value")

    table.add_row("Python", platform.python_version())
    table.add_row("Working directory", rich_escape(str(settings.cwd)))
    table.add_row("Repository", rich_escape(str(repo_root)) if repo_root else "[dim]none[/]")
    table.add_row("Jobs", str(settings.jobs))
    table.add_row("Timeout", f"{settings.timeout}s" if settings.timeout else "[dim]none[/]")
    table.add_row("Resolver", rich_escape(repr(resolver)))
    table.add_row("git", "[green]available[/]" if git_ok else "[red]missing[/]")
    table.add_row("asciidoctor", "[green]available[/]" if asciidoctor_ok else "[red]missing[/]")

    console.print(table)


def run_command(
    args: argparse.Namespace,
    parser: ArgumentParser,
    settings: Settings,
    resolver: IncludeResolver,
) -> int:
    """Dispatch a parsed command line. Returns exit code."""
    command = args.command

    if args.help or command == "help":
        print_results(parser.format_help().rstrip())
        return EXIT_SUCCESS

    if args.version or command == "version":
        print_results(f"{settings.name} {settings.version}")
        return EXIT_SUCCESS

    if command is None:
        raise UsageError("Missing command")

    if command == "debug":
        print_debug_report(settings, resolver)
        return EXIT_SUCCESS

    require_dependencies(resolver)

    if command == "children":
        results = list_children(args.file, settings, resolver)
        scope = display_root(settings.cwd / args.file, settings.cwd)
        print_results(format_results(args.file, results, scope=scope))

    elif command == "parents":
        results = list_parents(args.file, settings, resolver)
        scope = display_root(settings.cwd / args.file, settings.cwd)
        print_results(format_results(args.file, results, scope=scope))

    elif command == "orphans":
        scope, in_repository = resolve_scope(settings)
        if not in_repository:
            warn(settings, "Not in a Git repository, using the current directory.")
        results = list_orphans(settings, resolver, scope=scope)
        print_results(format_results(scope, results, scope=scope))

    return EXIT_SUCCESS


def main(
    argv: Optional[list[str]] = None,
    resolver: Optional[IncludeResolver] = None,
    cwd: Optional[Path] = None,
) -> int:
    prog = program_name()
    parser = build_parser(prog)

    try:
        args = parser.parse_args(argv)
        configure_logging(args.verbose)

        settings = Settings.from_env(name=prog, jobs=args.jobs, cwd=cwd)
        if resolver is None:
            resolver = default_resolver(settings)

        return run_command(args, parser, settings, resolver)

    except MdocError as e:
        report_error(prog, e.message)
        return e.exit_status
    except GitCommandError as e:
        report_error(prog, str(e))
        return EXIT_FAILURE


if __name__ == "__main__":
    exit(main())
