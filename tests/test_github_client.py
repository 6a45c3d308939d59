"""
Tests for the GitHub REST client.

No live network: the HTTP session is a mock.
"""

from unittest.mock import Mock

import pytest
import requests

from mergelog.config import Config
from mergelog.github import GitHubClient, GitHubError


# ============================================================================
# Fixtures
# ============================================================================

def response(status_code=200, payload=None, headers=None, text=""):
    resp = Mock()
    resp.status_code = status_code
    resp.json.return_value = payload if payload is not None else {}
    resp.headers = headers or {}
    resp.text = text
    return resp


def commit(sha, message):
    return {'sha': sha, 'commit': {'message': message}}


@pytest.fixture
def session():
    s = Mock()
    s.headers = {}
    return s


@pytest.fixture
def client(session):
    return GitHubClient(Config(github_token="secret"), session=session)


# ============================================================================
# Session setup
# ============================================================================

class TestHeaders:
    def test_token_sent_as_bearer(self, client, session):
        assert session.headers['Authorization'] == "Bearer secret"
        assert session.headers['Accept'] == "application/vnd.github+json"

    def test_anonymous_without_token(self, session):
        GitHubClient(Config(), session=session)
        assert 'Authorization' not in session.headers


# ============================================================================
# Requests
# ============================================================================

class TestCompareCommits:
    def test_single_page(self, client, session):
        session.get.return_value = response(payload={
            'total_commits': 2,
            'commits': [commit('a', "Merge pull request #1 from x"), commit('b', "Fix")],
        })

        commits = client.compare_commits("AvaloniaUI", "Avalonia", "0.10.0", "0.10.1")

        assert commits == [
            {'sha': 'a', 'message': "Merge pull request #1 from x"},
            {'sha': 'b', 'message': "Fix"},
        ]
        url = session.get.call_args[0][0]
        assert url == "https://api.github.com/repos/AvaloniaUI/Avalonia/compare/0.10.0...0.10.1"
        assert session.get.call_args[1]['params'] == {'per_page': 100, 'page': 1}

    def test_paginates_until_total(self, client, session):
        first = [commit(f"a{i}", "m") for i in range(100)]
        second = [commit("b0", "last")]
        session.get.side_effect = [
            response(payload={'total_commits': 101, 'commits': first}),
            response(payload={'total_commits': 101, 'commits': second}),
        ]

        commits = client.compare_commits("o", "r", "v1", "v2")

        assert len(commits) == 101
        assert session.get.call_count == 2
        assert session.get.call_args[1]['params']['page'] == 2

    def test_stops_on_empty_page(self, client, session):
        session.get.side_effect = [
            response(payload={'total_commits': 500, 'commits': [commit('a', 'm')]}),
            response(payload={'total_commits': 500, 'commits': []}),
        ]

        assert len(client.compare_commits("o", "r", "v1", "v2")) == 1

    def test_refs_are_quoted(self, client, session):
        session.get.return_value = response(payload={'total_commits': 0, 'commits': []})
        client.compare_commits("o", "r", "release/1.0", "main")
        assert session.get.call_args[0][0].endswith("/compare/release%2F1.0...main")


class TestGetPullRequest:
    def test_reduces_payload(self, client, session):
        session.get.return_value = response(payload={
            'number': 12,
            'title': "Fix crash",
            'labels': [{'name': 'bug'}, {'name': 'os-linux'}],
            'html_url': "https://github.com/o/r/pull/12",
            'merged_at': "2024-01-01T00:00:00Z",
            'body': "ignored",
        })

        pr = client.get_pull_request("o", "r", 12)

        assert pr == {
            'number': 12,
            'title': "Fix crash",
            'labels': ['bug', 'os-linux'],
            'html_url': "https://github.com/o/r/pull/12",
            'merged_at': "2024-01-01T00:00:00Z",
        }
        assert session.get.call_args[0][0].endswith("/repos/o/r/pulls/12")

    def test_repository(self, client, session):
        session.get.return_value = response(payload={
            'full_name': "o/r", 'html_url': "https://github.com/o/r", 'default_branch': "main",
        })
        assert client.get_repository("o", "r")['full_name'] == "o/r"


# ============================================================================
# Error mapping
# ============================================================================

class TestErrors:
    def test_unauthorized(self, client, session):
        session.get.return_value = response(401)
        with pytest.raises(GitHubError, match="authentication") as exc:
            client.get_pull_request("o", "r", 1)
        assert exc.value.status == 401

    def test_not_found(self, client, session):
        session.get.return_value = response(404)
        with pytest.raises(GitHubError, match="Not found"):
            client.get_repository("o", "missing")

    def test_rate_limited(self, client, session):
        session.get.return_value = response(403, headers={'X-RateLimit-Remaining': '0'})
        with pytest.raises(GitHubError, match="rate limit"):
            client.compare_commits("o", "r", "a", "b")

    def test_other_status_includes_message(self, client, session):
        session.get.return_value = response(422, payload={'message': "No common ancestor"})
        with pytest.raises(GitHubError, match="No common ancestor"):
            client.compare_commits("o", "r", "a", "b")

    def test_transport_error(self, client, session):
        session.get.side_effect = requests.ConnectionError("refused")
        with pytest.raises(GitHubError, match="refused"):
            client.get_pull_request("o", "r", 1)
        assert session.get.call_count == 1
