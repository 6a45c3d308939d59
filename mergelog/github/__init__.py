"""GitHub API access."""

from .client import GitHubClient, GitHubError

__all__ = ["GitHubClient", "GitHubError"]
