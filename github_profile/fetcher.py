"""
Network client for the GitHub REST API.

Fetches a user's profile and public repositories and turns failures into a
small set of exceptions the web layer can map to HTTP responses.
"""

import logging
from typing import List, Optional, Tuple

import requests
from requests.adapters import HTTPAdapter, Retry

import config
from .models import RepositorySummary, UserProfile

logger = logging.getLogger(__name__)


class GitHubError(Exception):
    """Base class for failures talking to GitHub."""


class UserNotFoundError(GitHubError):
    """Raised when GitHub answers 404 for a username."""

    def __init__(self, username: str):
        super().__init__(f"GitHub user {username!r} not found")
        self.username = username


class UpstreamError(GitHubError):
    """Raised for any other failed or unreadable GitHub response."""


def _quote(username: str) -> str:
    """Percent-encode a username as a single URL path segment."""
    return requests.utils.quote(username, safe="")


def get_session() -> requests.Session:
    """Configure a session with GitHub headers and retries on server errors."""
    session = requests.Session()
    session.headers.update({
        "Accept": config.GITHUB_ACCEPT_HEADER,
        "User-Agent": config.GITHUB_USER_AGENT,
    })
    retries = Retry(
        total=config.RETRY_TOTAL,
        backoff_factor=config.RETRY_BACKOFF_FACTOR,
        status_forcelist=config.RETRY_STATUS_FORCELIST,
    )
    adapter = HTTPAdapter(max_retries=retries)
    session.mount("https://", adapter)
    session.mount("http://", adapter)
    return session


def fetch_user(username: str, session: requests.Session) -> UserProfile:
    """Fetch /users/{username}; raise UserNotFoundError or UpstreamError."""
    url = f"{config.GITHUB_API_URL}/users/{_quote(username)}"
    logger.debug(f"Fetching GitHub user {username}")
    try:
        response = session.get(url, timeout=config.GITHUB_TIMEOUT_SECONDS)
    except requests.RequestException as e:
        logger.error(f"Error fetching GitHub user {username}: {e}")
        raise UpstreamError(f"request for user {username} failed") from e

    if response.status_code == 404:
        logger.info(f"GitHub user {username} not found")
        raise UserNotFoundError(username)
    if not response.ok:
        logger.warning(f"GitHub returned {response.status_code} for user {username}")
        raise UpstreamError(f"user {username}: HTTP {response.status_code}")

    try:
        data = response.json()
    except ValueError as e:
        raise UpstreamError(f"unreadable profile for {username}") from e
    if not isinstance(data, dict):
        logger.warning(f"Unexpected profile payload for {username}: {type(data).__name__}")
        raise UpstreamError(f"unexpected profile payload for {username}")
    return UserProfile.from_github_api(data)


def fetch_repos(username: str, session: requests.Session) -> List[RepositorySummary]:
    """
    Fetch the first page of a user's public repositories, most recently updated first.

    A failed repository request is not fatal: the roast still works from the
    profile alone, so this returns an empty list instead of raising.
    """
    url = f"{config.GITHUB_API_URL}/users/{_quote(username)}/repos"
    params = {"per_page": config.GITHUB_REPOS_PER_PAGE, "sort": "updated"}
    logger.debug(f"Fetching repositories for {username}")
    try:
        response = session.get(url, params=params, timeout=config.GITHUB_TIMEOUT_SECONDS)
        response.raise_for_status()
        data = response.json()
    except (requests.RequestException, ValueError) as e:
        logger.warning(f"Error fetching repositories for {username}: {e}")
        return []

    if not isinstance(data, list):
        logger.warning(f"Unexpected repository payload for {username}: {type(data).__name__}")
        return []
    return [RepositorySummary.from_github_api(item) for item in data if isinstance(item, dict)]


def fetch_profile(
    username: str,
    session: Optional[requests.Session] = None,
) -> Tuple[UserProfile, List[RepositorySummary]]:
    """Fetch the profile and repositories for one request."""
    if session is None:
        with get_session() as own_session:
            return fetch_profile(username, own_session)
    user = fetch_user(username, session)
    repos = fetch_repos(username, session)
    logger.info(f"Fetched {username}: {len(repos)} repositories")
    return user, repos
