# CLI interface for promptonomicon
import argparse
import logging
import os
import sys
from pathlib import Path

from promptonomicon import __version__
from promptonomicon.config import MARKER_DIR, load_settings
from promptonomicon.doctor import run_doctor
from promptonomicon.errors import (
    AlreadyInitializedError,
    ConfirmationRequiredError,
    PromptonomiconError,
)
from promptonomicon.mcp import select_servers
from promptonomicon.models import DiagnosticFinding, DoctorReport, ScaffoldReport
from promptonomicon.prompt import prompt_for_servers
from promptonomicon.scaffold import initialize, is_initialized, reset
from promptonomicon.templates import TemplateSource

# ABOUTME: Exit codes: 0 = success, 1 = failure (including doctor errors)
EXIT_SUCCESS = 0
EXIT_FAILURE = 1

DESCRIPTION = (
    "Transform how you build software with AI through structured, "
    "documentation-driven development"
)

# ABOUTME: Claude Desktop keeps its config outside the project, so it is never written
CLAUDE_DESKTOP_NOTE = (
    "Claude Desktop (copy the servers from .mcp.json into "
    "claude_desktop_config.json for manual setup)"
)

# ABOUTME: Terminal codes, blanked when stdout is not a terminal or NO_COLOR is set
_USE_COLOR = sys.stdout.isatty() and "NO_COLOR" not in os.environ
BOLD = "\033[1m" if _USE_COLOR else ""
RESET = "\033[0m" if _USE_COLOR else ""
GREEN = "\033[92m" if _USE_COLOR else ""
YELLOW = "\033[93m" if _USE_COLOR else ""
RED = "\033[91m" if _USE_COLOR else ""
CYAN = "\033[96m" if _USE_COLOR else ""
GRAY = "\033[90m" if _USE_COLOR else ""

OK = f"{GREEN}✓{RESET}"
WARN = f"{YELLOW}⚠{RESET}"
FAIL = f"{RED}✗{RESET}"


def _relative(path: Path, root: Path) -> str:
    try:
        return path.relative_to(root).as_posix()
    except ValueError:
        return str(path)


def _print_scaffold(report: ScaffoldReport, project_dir: Path, verb: str) -> None:
    """Print what init/reset wrote, section by section."""
    if verb == "init":
        print()
        print(f"{OK} Created directories:")
        for path in report.directories:
            print(f"  - {GRAY}{_relative(path, project_dir)}{RESET}")

    print()
    print(f"{OK} {'Fetched' if verb == 'init' else 'Reset'} templates:")
    for path in report.templates:
        print(f"  - {GRAY}{_relative(path, project_dir)}{RESET}")

    print()
    heading = "AI assistant integration:" if verb == "init" else "Reset AI assistant integration:"
    print(f"{OK} {heading}")
    for label, _path in report.integrations:
        print(f"  - {GRAY}{label}{RESET}")

    if report.mcp_targets:
        print()
        print(f"{OK} MCP server configurations:")
        for label, _path in report.mcp_targets:
            print(f"  - {GRAY}{label}{RESET}")
        print(f"  - {GRAY}{CLAUDE_DESKTOP_NOTE}{RESET}")


def _build_source() -> TemplateSource:
    return TemplateSource(load_settings())


def cmd_init(args: argparse.Namespace) -> int:
    """Execute init command.

    ABOUTME: Resolves the MCP server selection before touching disk
    ABOUTME: Returns exit code based on results
    """
    project_dir = Path.cwd()
    print(f"promptonomicon init v{__version__}")

    try:
        # Checked here too so an interactive prompt never runs for nothing
        if not args.force and is_initialized(project_dir):
            raise AlreadyInitializedError(project_dir / MARKER_DIR)
        source = _build_source()
        servers = select_servers(args.with_mcp_servers, args.yes, prompt_for_servers)
        report = initialize(project_dir, source, force=args.force, servers=servers)
    except (PromptonomiconError, ValueError, OSError) as e:
        print(f"{FAIL} Initialization failed: {e}")
        return EXIT_FAILURE
    except KeyboardInterrupt:
        print()
        print("Operation cancelled.")
        return EXIT_FAILURE

    print(f"{OK} Promptonomicon initialized successfully!")
    _print_scaffold(report, project_dir, "init")

    print()
    print(f"{CYAN}Next steps:{RESET}")
    print(f"  1. Customize the templates in {MARKER_DIR}/ for your project")
    print(
        '  2. Tell your AI assistant: "Follow the Promptonomicon process in '
        f'{MARKER_DIR}/PROMPTONOMICON.md"'
    )
    return EXIT_SUCCESS


def cmd_reset(args: argparse.Namespace) -> int:
    """Execute reset command.

    ABOUTME: Refuses without --yes, leaving every file untouched
    """
    project_dir = Path.cwd()

    try:
        source = _build_source()
        # Unconfirmed resets must not prompt for anything
        servers = (
            select_servers(args.with_mcp_servers, args.yes, prompt_for_servers)
            if args.yes else None
        )
        report = reset(project_dir, source, confirmed=args.yes, servers=servers)
    except ConfirmationRequiredError:
        print(f"{WARN}  Warning: This will overwrite all customizations in {MARKER_DIR}/")
        print("Are you sure you want to continue? (Use --yes to skip this prompt)")
        return EXIT_FAILURE
    except (PromptonomiconError, ValueError, OSError) as e:
        print(f"{FAIL} Reset failed: {e}")
        return EXIT_FAILURE
    except KeyboardInterrupt:
        print()
        print("Operation cancelled.")
        return EXIT_FAILURE

    print(f"{OK} Templates reset to latest version!")
    _print_scaffold(report, project_dir, "reset")
    return EXIT_SUCCESS


def _marker(finding: DiagnosticFinding) -> str:
    if finding.severity == "error":
        return FAIL
    if finding.severity == "warning":
        return WARN + " "
    if finding.kind in ("integration_absent", "config_absent"):
        return "-"
    return OK


def print_doctor_report(report: DoctorReport) -> None:
    """Render findings grouped by section, then the summary."""
    section = None
    for finding in report.findings:
        if finding.section != section:
            section = finding.section
            print()
            print(f"{BOLD}{section}{RESET}")
        print(f"{_marker(finding)} {finding.message}")
        if finding.hint:
            print(f"  {GRAY}{finding.hint}{RESET}")

    errors = report.errors
    warnings = report.warnings

    print()
    print(f"{BOLD}Summary:{RESET}")
    if errors:
        noun = "issue" if len(errors) == 1 else "issues"
        print(f"{FAIL} Issues found: {len(errors)} {noun}")
        for finding in errors:
            print(f"  - {finding.message}")
    if warnings:
        print(f"{YELLOW}Warnings:{RESET}")
        for finding in warnings:
            print(f"  {WARN}  Warning: {finding.message}")

    if report.status == "failed":
        print('Run "promptonomicon init" to fix.')
    elif report.status == "warnings":
        print(f"{OK} Promptonomicon is functional but could be improved")
    else:
        print(f"{OK} Everything looks good!")


def cmd_doctor(args: argparse.Namespace) -> int:
    """Execute doctor command.

    ABOUTME: Exit 1 only for error findings; warnings still exit 0
    """
    print(f"{CYAN}Running Promptonomicon diagnostics...{RESET}")

    try:
        source = _build_source()
    except ValueError as e:
        print(f"{FAIL} {e}")
        return EXIT_FAILURE

    report = run_doctor(Path.cwd(), source)
    print_doctor_report(report)
    return report.exit_code


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="promptonomicon", description=DESCRIPTION)

    parser.add_argument(
        "--version", "-V",
        action="version",
        version=__version__
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Log debug details to stderr"
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    mcp_help = (
        "Configure MCP servers (comma-separated: "
        "versionator,context7); without a list, prompt or use the default with --yes"
    )

    # init command
    init_parser = subparsers.add_parser(
        "init",
        help="Initialize Promptonomicon in the current directory"
    )
    init_parser.add_argument(
        "-f", "--force",
        action="store_true",
        help="Overwrite existing files"
    )
    init_parser.add_argument(
        "--with-mcp-servers",
        nargs="?",
        const=True,
        default=None,
        metavar="LIST",
        help=mcp_help
    )
    init_parser.add_argument(
        "-y", "--yes",
        action="store_true",
        help="Skip prompts and use defaults"
    )

    # reset command
    reset_parser = subparsers.add_parser(
        "reset",
        help="Reset all Promptonomicon templates to latest version (destructive)"
    )
    reset_parser.add_argument(
        "-y", "--yes",
        action="store_true",
        help="Confirm overwriting customized templates"
    )
    reset_parser.add_argument(
        "--with-mcp-servers",
        nargs="?",
        const=True,
        default=None,
        metavar="LIST",
        help=mcp_help
    )

    # doctor command
    subparsers.add_parser(
        "doctor",
        help="Check if your Promptonomicon setup is healthy"
    )

    return parser


def configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


def main(argv: list[str] | None = None) -> int:
    """Main CLI entry point.

    ABOUTME: Parses args and dispatches to appropriate command
    ABOUTME: Returns exit code for sys.exit()
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    configure_logging(args.verbose)

    if args.command == "init":
        return cmd_init(args)
    elif args.command == "reset":
        return cmd_reset(args)
    elif args.command == "doctor":
        return cmd_doctor(args)
    else:
        parser.print_help()
        return EXIT_SUCCESS


if __name__ == "__main__":
    sys.exit(main())
