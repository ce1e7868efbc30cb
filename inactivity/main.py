"""Main entry point for the repository inactivity analyzer."""

import argparse
import logging
import sys
from pathlib import Path

from pydantic import ValidationError
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.panel import Panel
from rich.prompt import IntPrompt

from .analyzers.pipeline import InactivityAnalyzer
from .analyzers.repo_names import InvalidRepositoryName, normalize_repository_name, read_repository_list
from .config import AnalysisConfig, ConfigError, OutputFormat, load_config
from .crawler.base import DataSourceError
from .crawler.github_client import GitHubCLIClient
from .store.output import OutputError, ReportRenderer

console = Console()
err_console = Console(stderr=True)

FORMAT_CHOICES = [f.value for f in OutputFormat]

# Long options also accepted with a single dash (``-days 90``)
LONG_OPTIONS = {"org", "days", "threshold", "format", "output", "silent", "config"}

EXAMPLES = """\
examples:
  inactivity org --org mycompany
  inactivity repo mycompany/myrepo --days 90
  inactivity file repos.txt --format csv --output results.csv
  inactivity org --org mycompany --format json --output results.json
  inactivity org csv --output results.csv
"""

BANNERS = {
    "org": ("ORGANIZATION HEALTH MONITOR", "Analyzing repositories across an entire organization"),
    "repo": ("REPOSITORY PULSE CHECK", "Analyzing a single repository for inactivity metrics"),
    "file": ("BATCH REPOSITORY ANALYZER", "Processing repositories from file"),
}


class UsageArgumentParser(argparse.ArgumentParser):
    """Argument parser that exits with status 1 on usage errors."""

    def error(self, message):
        self.print_usage(sys.stderr)
        err_console.print(f"[red]Error:[/red] {escape(message)}")
        raise SystemExit(1)


def fail(message: str) -> None:
    """Report a fatal error and exit."""
    console.print(f"[red]✗ Error:[/red] {escape(message)}")
    raise SystemExit(1)


def normalize_flags(argv: list[str]) -> list[str]:
    """Rewrite single-dash long options (``-days``) to their ``--`` form."""
    normalized = []
    for arg in argv:
        name, sep, value = arg[1:].partition("=")
        if arg.startswith("-") and not arg.startswith("--") and name in LONG_OPTIONS:
            arg = f"--{name}{sep}{value}"
        elif arg in ("-flag-archived", "-no-flag-archived"):
            arg = f"-{arg}"
        normalized.append(arg)
    return normalized


def build_parser() -> argparse.ArgumentParser:
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument("--days", type=int, help="Maximum age of last commit in days (default: 180)")
    common.add_argument(
        "--threshold",
        type=float,
        help="Threshold of inactive contributors, 0.0-1.0 (default: 0.5)",
    )
    common.add_argument("--format", choices=FORMAT_CHOICES, help="Output format (default: console)")
    common.add_argument("--output", help="Output file path (optional)")
    common.add_argument(
        "--silent",
        action="store_true",
        default=None,
        help="Suppress banner, progress and warning output",
    )
    common.add_argument("--config", "-c", help="YAML file with default settings")
    common.add_argument(
        "--flag-archived",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Always flag archived repositories (default: on for org, off for repo and file)",
    )

    parser = UsageArgumentParser(
        prog="inactivity",
        description="Repository Inactivity Analyzer - find inactive repositories in GitHub organizations",
        epilog=EXAMPLES,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    subparsers = parser.add_subparsers(dest="command")

    org_cmd = subparsers.add_parser("org", parents=[common], help="Analyze all repositories in an organization")
    org_cmd.add_argument("--org", help="GitHub organization to analyze")
    org_cmd.add_argument("positional_format", nargs="?", choices=FORMAT_CHOICES, metavar="format")

    repo_cmd = subparsers.add_parser("repo", parents=[common], help="Analyze a single repository")
    repo_cmd.add_argument("repository", help="Repository as org/repo or a GitHub URL")
    repo_cmd.add_argument("positional_format", nargs="?", choices=FORMAT_CHOICES, metavar="format")

    file_cmd = subparsers.add_parser("file", parents=[common], help="Analyze repositories listed in a file")
    file_cmd.add_argument("path", help="File with one repository per line")
    file_cmd.add_argument("positional_format", nargs="?", choices=FORMAT_CHOICES, metavar="format")

    subparsers.add_parser("help", help="Show this help message")

    return parser


def build_config(args: argparse.Namespace) -> AnalysisConfig:
    """Merge YAML defaults and command-line flags into the run configuration."""
    values: dict = {}
    if args.config:
        values.update(load_config(Path(args.config)))

    overrides = {
        "organization": getattr(args, "org", None),
        "max_commit_age_days": args.days,
        "inactive_threshold": args.threshold,
        "output_format": args.positional_format or args.format,
        "output_file": args.output,
        "silent": args.silent,
        "archived_always_flagged": args.flag_archived,
    }
    values.update({k: v for k, v in overrides.items() if v is not None})

    if args.command == "file":
        values.setdefault("output_format", OutputFormat.CSV)
    values.setdefault("archived_always_flagged", args.command == "org")

    return AnalysisConfig(**values)


def setup_logging(silent: bool) -> None:
    """Route log records through the shared rich console."""
    logging.basicConfig(
        level=logging.ERROR if silent else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False, show_time=False)],
        force=True,
    )


def display_banner(mode: str) -> None:
    title, subtitle = BANNERS[mode]
    console.print()
    console.print(Panel.fit(f"[bold]⚡ {title} ⚡[/bold]\n[cyan]{subtitle}[/cyan]", border_style="blue"))
    console.print("[yellow]✦ Repository Inactivity Analyzer ✦[/yellow]\n")


def select_organization(client: GitHubCLIClient) -> str:
    """Let the user pick one of their organizations."""
    orgs = client.get_user_organizations()
    if not orgs:
        fail("No organizations available for the authenticated user")

    console.print("[bold cyan]📋 Available organizations:[/bold cyan]")
    for i, org in enumerate(orgs, start=1):
        console.print(f"[yellow]➡️ {i}.[/yellow] [green]{org}[/green]")

    choice = IntPrompt.ask(
        "\n[magenta]👉 Select an organization (enter the number)[/magenta]",
        console=console,
        choices=[str(i) for i in range(1, len(orgs) + 1)],
        show_choices=False,
    )
    return orgs[choice - 1]


def run_org(config: AnalysisConfig, client: GitHubCLIClient) -> None:
    """Analyze all repositories of an organization."""
    if config.organization is None:
        if config.silent:
            fail("Organization must be provided in silent mode")
        config = config.model_copy(update={"organization": select_organization(client)})

    if not config.silent:
        console.print(f"\n[blue]🔬 Analyzing repositories in {config.organization}...[/blue]")

    analyzer = InactivityAnalyzer(client, config, console=console)
    records = analyzer.analyze_organization(config.organization)
    ReportRenderer(config, console=console, title=config.organization).render(records)


def run_repo(config: AnalysisConfig, client: GitHubCLIClient, repository: str) -> None:
    """Analyze one repository; any failure is fatal."""
    identifier = normalize_repository_name(repository)
    if not config.silent:
        console.print(f"[blue]🔍 Analyzing repository: {identifier}[/blue]")

    analyzer = InactivityAnalyzer(client, config, console=console)
    record = analyzer.analyze_repository(identifier)
    ReportRenderer(config, console=console, title=identifier).render_single(record)


def run_file(config: AnalysisConfig, client: GitHubCLIClient, path: str) -> None:
    """Analyze every repository listed in a file."""
    list_path = Path(path)
    try:
        entries = read_repository_list(list_path)
    except (OSError, UnicodeDecodeError) as e:
        fail(f"Failed to read repository list file: {e}")

    if not config.silent:
        console.print(f"\n[blue]🔍 Starting analysis of {len(entries)} repositories from {list_path}[/blue]\n")

    analyzer = InactivityAnalyzer(client, config, console=console)
    records = analyzer.analyze_repositories(entries)
    ReportRenderer(config, console=console, title=str(list_path)).render(records)


def main(argv: list[str] | None = None) -> None:
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(normalize_flags(sys.argv[1:] if argv is None else argv))

    if args.command is None:
        parser.print_help()
        raise SystemExit(1)
    if args.command == "help":
        parser.print_help()
        return

    try:
        config = build_config(args)
    except ConfigError as e:
        fail(str(e))
    except ValidationError as e:
        fail(f"Invalid options:\n{e}")

    setup_logging(config.silent)
    if not config.silent:
        display_banner(args.command)

    client = GitHubCLIClient(console=console, verbose=not config.silent)
    try:
        client.validate()

        if args.command == "org":
            run_org(config, client)
        elif args.command == "repo":
            run_repo(config, client, args.repository)
        else:
            run_file(config, client, args.path)
    except InvalidRepositoryName as e:
        fail(str(e))
    except DataSourceError as e:
        fail(str(e))
    except OutputError as e:
        fail(f"Failed to output results: {e}")


if __name__ == "__main__":
    main()
