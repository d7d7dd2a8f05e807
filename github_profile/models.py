"""
GitHub profile data models for the Git Roast web app.

Both models are frozen snapshots of a single API response. They are built fresh
for every request and never mutated, so the roast rules can read them freely.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, Optional


def parse_timestamp(value: Optional[str]) -> Optional[datetime]:
    """Parse an ISO 8601 GitHub timestamp ('2011-01-25T18:44:36Z')."""
    if not value:
        return None
    try:
        return datetime.fromisoformat(value.replace("Z", "+00:00"))
    except (ValueError, AttributeError):
        return None


@dataclass(frozen=True)
class UserProfile:
    """The slice of a GitHub user that the roast rules look at."""
    login: str
    avatar_url: str
    name: Optional[str]
    bio: Optional[str]
    public_repos: int
    followers: int
    following: int
    created_at: Optional[datetime]
    hireable: Optional[bool]

    @classmethod
    def from_github_api(cls, data: Dict[str, Any]) -> "UserProfile":
        return cls(
            login=data.get("login") or "",
            avatar_url=data.get("avatar_url") or "",
            name=data.get("name"),
            bio=data.get("bio"),
            public_repos=data.get("public_repos") or 0,
            followers=data.get("followers") or 0,
            following=data.get("following") or 0,
            created_at=parse_timestamp(data.get("created_at")),
            hireable=data.get("hireable"),
        )


@dataclass(frozen=True)
class RepositorySummary:
    """One public repository as listed by /users/{login}/repos."""
    name: str
    language: Optional[str]
    stargazers_count: int
    fork: bool
    description: Optional[str]
    created_at: Optional[datetime]
    pushed_at: Optional[datetime]

    @classmethod
    def from_github_api(cls, data: Dict[str, Any]) -> "RepositorySummary":
        return cls(
            name=data.get("name") or "",
            language=data.get("language"),
            stargazers_count=data.get("stargazers_count") or 0,
            fork=bool(data.get("fork", False)),
            description=data.get("description"),
            created_at=parse_timestamp(data.get("created_at")),
            pushed_at=parse_timestamp(data.get("pushed_at")),
        )
