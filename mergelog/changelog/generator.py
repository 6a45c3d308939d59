"""Changelog generation logic."""

import re
import logging
from typing import Dict, Iterable, List
from concurrent.futures import ThreadPoolExecutor

from ..config import Taxonomy
from .classifier import Classifier
from .models import Changelog, ClassifiedEntry, Issue, Section


DEFAULT_WORKER_COUNT = 4

QUESTIONABLE_MARKER = "??? "

# GitHub's merge button message, optionally reverted
MERGE_MESSAGE_RE = re.compile(r'^(Revert ")?Merge pull request #(\d*)')


def merged_pr_numbers(messages: Iterable[str]) -> List[int]:
    """Replay commit messages and return the pull requests still merged.

    Args:
        messages: Commit messages in chronological order

    Returns:
        Sorted pull request numbers; empty when nothing was merged
    """
    merged = set()

    for message in messages:
        match = MERGE_MESSAGE_RE.match(message or '')
        if not match or not match.group(2):
            continue

        number = int(match.group(2))
        if match.group(1):
            merged.discard(number)
        else:
            merged.add(number)

    return sorted(merged)


def group_entries(entries: Iterable[ClassifiedEntry], taxonomy: Taxonomy) -> List[Section]:
    """Group entries into sections in declared group order, Misc last.

    Within a section, entries carrying prefixes come first, then by
    pull request number.
    """
    titles = taxonomy.group_titles
    groups: Dict[str, List[ClassifiedEntry]] = {}

    for entry in entries:
        groups.setdefault(entry.section, []).append(entry)

    def group_order(title):
        return titles.index(title) if title in titles else len(titles)

    sections = []
    for title in sorted(groups, key=group_order):
        ordered = sorted(groups[title], key=lambda e: (not e.prefixes, e.number))
        sections.append((title, ordered))
    return sections


def format_entry(entry: ClassifiedEntry) -> str:
    """Format a single changelog line."""
    if entry.prefixes:
        line = f"#{entry.number} {entry.prefix_text} {entry.title}"
    else:
        line = f"#{entry.number} {entry.title}"

    if entry.questionable:
        line = QUESTIONABLE_MARKER + line
    return line


def render_changelog(sections: Iterable[Section]) -> str:
    """Render grouped entries as text.

    Args:
        sections: Output of group_entries

    Returns:
        One "### <group>" block per section
    """
    lines = []
    for title, entries in sections:
        lines.append(f"### {title}")
        lines.append("")
        lines.extend(format_entry(entry) for entry in entries)
        lines.append("")
        lines.append("")
    return "\n".join(lines)


def fetch_issues(client, org: str, repo: str, numbers: List[int],
                 workers: int = DEFAULT_WORKER_COUNT) -> List[Issue]:
    """Fetch pull requests concurrently and convert them to issues.

    Args:
        client: GitHub client instance
        org: Repository owner
        repo: Repository name
        numbers: Pull request numbers
        workers: Maximum number of concurrent requests

    Returns:
        Issues in the order of numbers
    """
    logger = logging.getLogger(__name__)

    if not numbers:
        return []

    def fetch(number):
        logger.info(f"Reading #{number}")
        return Issue.from_pull_request(client.get_pull_request(org, repo, number))

    max_workers = max(1, min(workers, len(numbers)))
    with ThreadPoolExecutor(max_workers=max_workers) as executor:
        # map re-raises the first failure
        return list(executor.map(fetch, numbers))


def get_changelog(client, org: str, repo: str, base: str, head: str,
                  taxonomy: Taxonomy, workers: int = DEFAULT_WORKER_COUNT) -> Changelog:
    """Build the changelog for the merged pull requests between two points.

    Args:
        client: GitHub client instance
        org: Repository owner
        repo: Repository name
        base: Commitish of the previous release
        head: Commitish of the new release
        taxonomy: Classification rules
        workers: Maximum number of concurrent pull request fetches

    Returns:
        Changelog; is_empty is set when nothing was merged in the range
    """
    logger = logging.getLogger(__name__)

    commits = client.compare_commits(org, repo, base, head)
    numbers = merged_pr_numbers(commit.get('message', '') for commit in commits)
    logger.info(f"Found {len(numbers)} merged PRs in {len(commits)} commits between {base} and {head}")

    if not numbers:
        return Changelog(base=base, head=head)

    classifier = Classifier(taxonomy)
    entries = []
    for issue in fetch_issues(client, org, repo, numbers, workers):
        entry = classifier.classify(issue)
        if entry is None:
            logger.debug(f"Skipping #{issue.number}: ignored label")
            continue
        entries.append(entry)

    return Changelog(
        base=base,
        head=head,
        merged_numbers=numbers,
        sections=group_entries(entries, taxonomy),
    )
