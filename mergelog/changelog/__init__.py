"""Changelog generation module."""

from .classifier import Classifier, classify_issue
from .generator import (
    get_changelog,
    fetch_issues,
    merged_pr_numbers,
    group_entries,
    format_entry,
    render_changelog,
)
from .models import Changelog, ClassifiedEntry, Issue, MISC_GROUP

__all__ = [
    "Classifier",
    "classify_issue",
    "get_changelog",
    "fetch_issues",
    "merged_pr_numbers",
    "group_entries",
    "format_entry",
    "render_changelog",
    "Changelog",
    "ClassifiedEntry",
    "Issue",
    "MISC_GROUP",
]
