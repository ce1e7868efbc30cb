"""Report output in console, JSON and CSV formats."""

import csv
import io
import json
from datetime import datetime
from pathlib import Path

from rich.console import Console
from rich.markup import escape

from ..config import AnalysisConfig, OutputFormat
from ..crawler.models import RepositoryRecord

CSV_HEADER = [
    "Repository Name",
    "Last Commit Date",
    "Days Since Last Commit",
    "Total Contributors",
    "Inactive Contributors",
    "Inactive Percentage",
    "Archived",
    "Flagged",
]


class OutputError(Exception):
    """A report file could not be written."""


class ReportRenderer:
    """Render classified repositories in the configured output format."""

    def __init__(
        self,
        config: AnalysisConfig,
        console: Console | None = None,
        title: str | None = None,
    ):
        self.config = config
        self.console = console or Console()
        self.title = title

    def render(self, records: list[RepositoryRecord]) -> None:
        """Render a set of repositories. Raises OutputError if the file write fails."""
        fmt = self.config.output_format

        if fmt == OutputFormat.JSON:
            self._emit(json.dumps([r.to_dict() for r in records], indent=2))
        elif fmt == OutputFormat.CSV:
            self._emit(self._to_csv(records))
            self._print_summary(records)
        else:
            self._print_console(records)
            if self.config.output_file:
                self._write(self.config.output_file, self._text_report(records))

    def render_single(self, record: RepositoryRecord) -> None:
        """Render one repository, without the flagged-count summary."""
        fmt = self.config.output_format

        if fmt == OutputFormat.JSON:
            self._emit(json.dumps(record.to_dict(), indent=2))
        elif fmt == OutputFormat.CSV:
            self._emit(self._to_csv([record]))
        else:
            self._print_single(record)
            if self.config.output_file:
                self._write(self.config.output_file, self._text_single(record))

    # -- shared helpers ------------------------------------------------------

    def _emit(self, content: str) -> None:
        """Write machine-readable content to the output file, or stdout."""
        if self.config.output_file:
            self._write(self.config.output_file, content)
        else:
            self.console.out(content, highlight=False)

    def _write(self, path: Path, content: str) -> None:
        try:
            Path(path).write_text(content, encoding="utf-8")
        except OSError as e:
            raise OutputError(f"Failed to write output file {path}: {e}") from e
        self.console.print(f"💾 Results saved to {escape(str(path))}")

    def _heading(self) -> str:
        if self.title:
            return f"Analysis Results for {self.title}"
        return "Analysis Results"

    @staticmethod
    def _contributor_line(record: RepositoryRecord) -> str:
        return (
            f"Contributors: {record.total_contributors} total, "
            f"{record.inactive_contributors} inactive ({record.inactive_percentage:.1f}%)"
        )

    @staticmethod
    def _commit_line(record: RepositoryRecord) -> str:
        return f"Last commit: {record.last_commit_day} ({record.days_since_last_commit} days ago)"

    # -- CSV -----------------------------------------------------------------

    def _to_csv(self, records: list[RepositoryRecord]) -> str:
        buffer = io.StringIO()
        writer = csv.writer(buffer, lineterminator="\n")
        writer.writerow(CSV_HEADER)
        for record in records:
            writer.writerow([
                record.identifier,
                record.last_commit_day,
                record.days_since_last_commit,
                record.total_contributors,
                record.inactive_contributors,
                f"{record.inactive_percentage:.2f}",
                str(record.archived).lower(),
                str(record.flagged).lower(),
            ])
        return buffer.getvalue()

    def _print_summary(self, records: list[RepositoryRecord]) -> None:
        flagged = sum(1 for r in records if r.flagged)
        self.console.print(f"\n📊 {escape(self._heading())}")
        self.console.print(f"Total repositories analyzed: {len(records)}")
        self.console.print(f"🚩 Flagged repositories: {flagged}")

    # -- console / text report -----------------------------------------------

    def _print_console(self, records: list[RepositoryRecord]) -> None:
        flagged = [r for r in records if r.flagged]

        self._print_summary(records)
        self.console.print()

        if not flagged:
            return

        self.console.print("[bold red]🚩 Flagged Repositories:[/bold red]")
        self.console.print("---------------------")
        for record in flagged:
            status = "Archived" if record.archived else "Not Archived"
            self.console.print(f"- [bold]{escape(record.identifier)}[/bold]")
            self.console.print(f"  {self._commit_line(record)}")
            self.console.print(f"  {self._contributor_line(record)}")
            self.console.print(f"  📦 Repository Status: {status}\n")

    def _text_report(self, records: list[RepositoryRecord]) -> str:
        flagged = [r for r in records if r.flagged]
        lines = [
            self._heading(),
            f"Date: {datetime.now().strftime('%Y-%m-%d')}",
            f"Total repositories analyzed: {len(records)}",
            f"Flagged repositories: {len(flagged)}",
            "",
        ]

        if flagged:
            lines.append("Flagged Repositories:")
            lines.append("---------------------")
            for record in flagged:
                status = "Archived" if record.archived else "Not Archived"
                lines.append(f"- {record.identifier}")
                lines.append(f"  {self._commit_line(record)}")
                lines.append(f"  {self._contributor_line(record)}")
                lines.append(f"  Repository Status: {status}")
                lines.append("")

        return "\n".join(lines) + "\n"

    def _print_single(self, record: RepositoryRecord) -> None:
        self.console.print(f"\n📊 Analysis Results for [bold]{escape(record.identifier)}[/bold]")
        self.console.print(self._commit_line(record))
        self.console.print(self._contributor_line(record))

        if record.archived:
            self.console.print("📦 Repository Status: Archived")
        else:
            self.console.print("📦 Repository Status: Active (Not Archived)")

        if record.flagged:
            self.console.print("[red]🚩 Status: Flagged as inactive[/red]")
        else:
            self.console.print("[green]✅ Status: Active[/green]")

    def _text_single(self, record: RepositoryRecord) -> str:
        lines = [
            f"Analysis Results for {record.identifier}",
            f"Date: {datetime.now().strftime('%Y-%m-%d')}",
            self._commit_line(record),
            self._contributor_line(record),
            f"Repository Status: {'Archived' if record.archived else 'Not Archived'}",
            f"Status: {'Flagged as inactive' if record.flagged else 'Active'}",
        ]
        return "\n".join(lines) + "\n"
