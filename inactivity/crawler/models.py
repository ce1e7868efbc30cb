"""Shared data models for repository inactivity analysis."""

from dataclasses import dataclass
from datetime import datetime


@dataclass
class RepositoryRecord:
    """One analyzed repository.

    Records start empty and are filled in as each metric is fetched.
    ``inactive_fraction`` is always derived from the two contributor counts.
    """
    identifier: str
    last_commit_at: datetime | None = None
    days_since_last_commit: int = 0
    total_contributors: int = 0
    inactive_contributors: int = 0
    archived: bool = False
    flagged: bool = False

    @property
    def inactive_fraction(self) -> float:
        if self.total_contributors == 0:
            return 0.0
        return self.inactive_contributors / self.total_contributors

    @property
    def inactive_percentage(self) -> float:
        return self.inactive_fraction * 100

    @property
    def last_commit_day(self) -> str:
        if self.last_commit_at is None:
            return ""
        return self.last_commit_at.strftime("%Y-%m-%d")

    def to_dict(self) -> dict:
        """Convert the record to a JSON-ready dictionary."""
        return {
            "identifier": self.identifier,
            "lastCommitAt": self.last_commit_at.isoformat() if self.last_commit_at else None,
            "daysSinceLastCommit": self.days_since_last_commit,
            "totalContributors": self.total_contributors,
            "inactiveContributors": self.inactive_contributors,
            "inactiveFraction": self.inactive_fraction,
            "archived": self.archived,
            "flagged": self.flagged,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "RepositoryRecord":
        """Rebuild a record from ``to_dict`` output.

        ``inactiveFraction`` is ignored; it is recomputed from the counts.
        """
        last_commit = data.get("lastCommitAt")
        return cls(
            identifier=data["identifier"],
            last_commit_at=datetime.fromisoformat(last_commit) if last_commit else None,
            days_since_last_commit=data.get("daysSinceLastCommit", 0),
            total_contributors=data.get("totalContributors", 0),
            inactive_contributors=data.get("inactiveContributors", 0),
            archived=data.get("archived", False),
            flagged=data.get("flagged", False),
        )
