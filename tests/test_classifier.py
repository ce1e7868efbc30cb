"""Tests for the inactivity rule."""

from datetime import datetime, timedelta, timezone

import pytest

from inactivity.analyzers.classifier import classify, days_between
from inactivity.config import AnalysisConfig
from inactivity.crawler.models import RepositoryRecord


def make_record(days, total=10, inactive=0, archived=False):
    return RepositoryRecord(
        identifier="acme/repo",
        days_since_last_commit=days,
        total_contributors=total,
        inactive_contributors=inactive,
        archived=archived,
    )


def test_stale_at_threshold_fraction_is_flagged(config):
    record = make_record(200, total=10, inactive=5)
    assert record.inactive_fraction == 0.5
    assert classify(record, config) is True


def test_stale_below_threshold_fraction_is_not_flagged(config):
    record = make_record(200, total=10, inactive=4)
    assert record.inactive_fraction == 0.4
    assert classify(record, config) is False


def test_stale_without_contributors_is_flagged(config):
    assert classify(make_record(200, total=0), config) is True


def test_fresh_repository_with_all_contributors_gone_is_not_flagged(config):
    assert classify(make_record(50, total=10, inactive=10), config) is False


def test_age_equal_to_limit_is_not_stale(config):
    assert classify(make_record(180, total=0), config) is False
    assert classify(make_record(179, total=0), config) is False
    assert classify(make_record(181, total=0), config) is True


def test_archived_flagged_when_rule_enabled(config):
    record = make_record(1, total=10, inactive=0, archived=True)
    assert classify(record, config) is True


def test_archived_uses_activity_rule_when_disabled():
    config = AnalysisConfig(archived_always_flagged=False)
    assert classify(make_record(1, total=10, inactive=0, archived=True), config) is False
    assert classify(make_record(300, total=10, inactive=9, archived=True), config) is True


@pytest.mark.parametrize("total,inactive", [(0, 0), (4, 1), (10, 5), (3, 3)])
def test_flag_never_cleared_by_growing_age(config, total, inactive):
    verdicts = [
        classify(make_record(days, total=total, inactive=inactive), config)
        for days in range(170, 400, 10)
    ]
    first_flagged = verdicts.index(True) if True in verdicts else len(verdicts)
    assert all(verdicts[first_flagged:])
    assert not any(verdicts[:first_flagged])


def test_custom_limits():
    config = AnalysisConfig(max_commit_age_days=30, inactive_threshold=0.25)
    assert classify(make_record(31, total=4, inactive=1), config) is True
    assert classify(make_record(30, total=4, inactive=4), config) is False


def test_days_between_floors_partial_days():
    now = datetime(2025, 6, 1, 12, 0, tzinfo=timezone.utc)
    assert days_between(now - timedelta(days=3, hours=23), now) == 3
    assert days_between(now - timedelta(days=180), now) == 180


def test_days_between_future_commit_is_zero():
    now = datetime(2025, 6, 1, tzinfo=timezone.utc)
    assert days_between(now + timedelta(hours=5), now) == 0
