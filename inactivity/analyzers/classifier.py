"""Inactivity rule for a single repository."""

from datetime import datetime

from ..config import AnalysisConfig
from ..crawler.models import RepositoryRecord


def days_between(last_commit_at: datetime, now: datetime) -> int:
    """Whole days elapsed since the last commit, never negative."""
    return max((now - last_commit_at).days, 0)


def is_stale(record: RepositoryRecord, config: AnalysisConfig) -> bool:
    return record.days_since_last_commit > config.max_commit_age_days


def classify(record: RepositoryRecord, config: AnalysisConfig) -> bool:
    """Decide whether a repository is flagged as inactive.

    Archived repositories are flagged outright when
    ``config.archived_always_flagged`` is set. Otherwise a repository must be
    stale, and then it is flagged if it has no contributors at all or if the
    share of contributors who left the organization reaches the threshold.
    """
    if config.archived_always_flagged and record.archived:
        return True

    if not is_stale(record, config):
        return False

    if record.total_contributors == 0:
        return True

    return record.inactive_fraction >= config.inactive_threshold
