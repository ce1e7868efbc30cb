"""Repository classification and the analysis pipeline."""

from .classifier import classify
from .pipeline import InactivityAnalyzer
from .repo_names import InvalidRepositoryName, normalize_repository_name, read_repository_list

__all__ = [
    "classify",
    "InactivityAnalyzer",
    "InvalidRepositoryName",
    "normalize_repository_name",
    "read_repository_list",
]
