"""GitHub REST client wrapper using the requests library."""

import logging
from typing import Any, Dict, List, Optional
from urllib.parse import quote

import requests

from ..config import Config


USER_AGENT = "mergelog"
PER_PAGE = 100
HTTP_ERROR_STATUS = 400


class GitHubError(RuntimeError):
    """Raised when the GitHub API cannot be reached or returns an error."""

    def __init__(self, message: str, status: Optional[int] = None):
        super().__init__(message)
        self.status = status


class GitHubClient:
    """Wrapper for the parts of the GitHub REST API mergelog needs."""

    def __init__(self, config: Config, logger: Optional[logging.Logger] = None,
                 session: Optional[requests.Session] = None):
        """Initialize GitHub client.

        Args:
            config: Configuration object containing GitHub settings
            logger: Logger instance
            session: Optional pre-built HTTP session
        """
        self.config = config
        self.logger = logger or logging.getLogger(__name__)
        self.base_url = config.github_api_url

        self.session = session or requests.Session()
        self.session.headers.update({
            'Accept': 'application/vnd.github+json',
            'User-Agent': USER_AGENT,
        })
        # Anonymous access works for public repositories
        if config.github_token:
            self.session.headers['Authorization'] = f"Bearer {config.github_token}"

    def _get(self, path: str, params: Optional[Dict[str, Any]] = None) -> Any:
        url = f"{self.base_url}/{path.lstrip('/')}"
        self.logger.debug(f"GET {url} {params or ''}")

        try:
            response = self.session.get(url, params=params, timeout=60)
        except requests.RequestException as e:
            raise GitHubError(f"Error requesting {url}: {e}")

        if response.status_code >= HTTP_ERROR_STATUS:
            raise GitHubError(_describe_failure(response, url), status=response.status_code)

        return response.json()

    def _repo_path(self, org: str, repo: str) -> str:
        return f"repos/{quote(org, safe='')}/{quote(repo, safe='')}"

    def get_repository(self, org: str, repo: str) -> Dict[str, Any]:
        """Get repository information.

        Args:
            org: Owner (user or organisation)
            repo: Repository name

        Returns:
            Repository data
        """
        data = self._get(self._repo_path(org, repo))
        return {
            'full_name': data['full_name'],
            'html_url': data.get('html_url', ''),
            'default_branch': data.get('default_branch', ''),
        }

    def compare_commits(self, org: str, repo: str, base: str, head: str) -> List[Dict[str, Any]]:
        """List the commits between two commitish points, oldest first.

        Args:
            org: Owner (user or organisation)
            repo: Repository name
            base: Commitish of the previous release
            head: Commitish of the new release

        Returns:
            List of commit data
        """
        path = f"{self._repo_path(org, repo)}/compare/{quote(base, safe='')}...{quote(head, safe='')}"

        result = []
        page = 1
        while True:
            data = self._get(path, params={'per_page': PER_PAGE, 'page': page})
            commits = data.get('commits') or []
            for commit in commits:
                result.append({
                    'sha': commit['sha'],
                    'message': commit['commit']['message'],
                })

            total = data.get('total_commits', len(result))
            if not commits or len(result) >= total:
                break
            page += 1

        self.logger.debug(f"Compared {base}...{head}: {len(result)} commits")
        return result

    def get_pull_request(self, org: str, repo: str, number: int) -> Dict[str, Any]:
        """Get pull request by number.

        Args:
            org: Owner (user or organisation)
            repo: Repository name
            number: Pull request number

        Returns:
            Pull request data
        """
        data = self._get(f"{self._repo_path(org, repo)}/pulls/{int(number)}")
        return {
            'number': data['number'],
            'title': data.get('title') or '',
            'labels': [label['name'] for label in data.get('labels') or []],
            'html_url': data.get('html_url', ''),
            'merged_at': data.get('merged_at'),
        }


def _describe_failure(response: requests.Response, url: str) -> str:
    status = response.status_code
    if status == 401:
        return "GitHub authentication failed, check the token"
    if status == 403 and response.headers.get('X-RateLimit-Remaining') == '0':
        return "GitHub API rate limit exceeded"
    if status == 404:
        return f"Not found: {url}"

    try:
        detail = response.json().get('message', '')
    except ValueError:
        detail = response.text
    return f"GitHub API request {url} failed with {status}: {detail}"
