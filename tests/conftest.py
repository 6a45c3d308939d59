"""
Shared fixtures for mergelog tests.
"""

from unittest.mock import Mock

import pytest

from mergelog.config import LabelRule, Taxonomy


@pytest.fixture
def taxonomy():
    """Default rule tables."""
    return Taxonomy()


@pytest.fixture
def small_taxonomy():
    """Synthetic rule tables with two groups and overlapping prefixes."""
    return Taxonomy(
        group_rules=[
            LabelRule(label="feature", title="Features"),
            LabelRule(label="bug", title="Fixes"),
            LabelRule(label="fix", title="Fixes"),
        ],
        prefix_rules=[
            LabelRule(label="breaking", title="Breaking"),
            LabelRule(label="os-linux", title="Linux"),
            LabelRule(label="os-windows", title="Windows"),
            LabelRule(label="linux", title="Linux"),
        ],
        ignore_labels=["skip-changelog"],
        backport_label="backported",
    )


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Keep MERGELOG_* variables from the developer's shell out of tests."""
    for name in ("GITHUB_API_URL", "GITHUB_TOKEN", "ORG", "REPO", "WORKERS", "TAXONOMY"):
        monkeypatch.delenv(f"MERGELOG_{name}", raising=False)


@pytest.fixture
def make_pr():
    """Pull request data as returned by GitHubClient.get_pull_request."""

    def build(number, title="Some change", labels=()):
        return {
            'number': number,
            'title': title,
            'labels': list(labels),
            'html_url': f"https://github.com/o/r/pull/{number}",
            'merged_at': "2024-01-01T00:00:00Z",
        }

    return build


@pytest.fixture
def fake_client():
    """Client double serving a fixed comparison and pull requests."""

    def build(messages, prs):
        client = Mock()
        client.get_repository.return_value = {
            'full_name': "o/r", 'html_url': "https://github.com/o/r", 'default_branch': "main",
        }
        client.compare_commits.return_value = [
            {'sha': f"{i:040x}", 'message': message}
            for i, message in enumerate(messages)
        ]
        client.get_pull_request.side_effect = lambda org, repo, number: prs[number]
        return client

    return build
