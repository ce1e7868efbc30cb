"""Parsing of repository identifiers from the command line and list files."""

from pathlib import Path


class InvalidRepositoryName(ValueError):
    """The value is not an ``org/repo`` name or a GitHub repository URL."""


def normalize_repository_name(value: str) -> str:
    """Turn ``org/repo`` or ``https://github.com/org/repo(.git)`` into ``org/repo``."""
    name = value.strip()

    if name.startswith("http"):
        parts = name.split("github.com/")
        if len(parts) != 2:
            raise InvalidRepositoryName(f"Invalid GitHub URL format: {value}")
        name = parts[1].lstrip("/")
        name = name.removesuffix("/")
        name = name.removesuffix(".git")

    parts = name.split("/")
    if len(parts) != 2 or not all(parts):
        raise InvalidRepositoryName(
            f"Invalid repository name format. Expected 'org/repo', got: {name}"
        )
    return name


def read_repository_list(path: Path) -> list[str]:
    """Read repository entries from a file, one per line.

    Blank lines and ``#`` comments are skipped. Entries are returned as
    written; normalization happens per entry so a bad line only skips itself.
    """
    entries = []
    for line in path.read_text(encoding="utf-8").splitlines():
        line = line.strip()
        if not line or line.startswith("#"):
            continue
        entries.append(line)
    return entries
