"""Shared fixtures for Git Roast tests."""

import random
import sys
from datetime import datetime, timedelta, timezone
from pathlib import Path

import pytest

# Add the repository root to the path so tests can import the root modules
sys.path.insert(0, str(Path(__file__).parent.parent))

from github_profile.models import RepositorySummary, UserProfile  # noqa: E402

NOW = datetime(2024, 6, 15, 12, 0, tzinfo=timezone.utc)


def make_profile(**overrides) -> UserProfile:
    """A profile that trips no rule unless overridden."""
    fields = dict(
        login="octocat",
        avatar_url="https://avatars.githubusercontent.com/u/583231",
        name="The Octocat",
        bio="Writes code, drinks coffee.",
        public_repos=10,
        followers=20,
        following=20,
        created_at=datetime(2020, 3, 1, tzinfo=timezone.utc),
        hireable=None,
    )
    fields.update(overrides)
    return UserProfile(**fields)


def make_repo(name="project", **overrides) -> RepositorySummary:
    fields = dict(
        name=name,
        language="C",
        stargazers_count=3,
        fork=False,
        description=None,
        created_at=datetime(2021, 1, 1, tzinfo=timezone.utc),
        pushed_at=NOW - timedelta(days=7),
    )
    fields.update(overrides)
    return RepositorySummary(**fields)


@pytest.fixture
def now() -> datetime:
    return NOW


@pytest.fixture
def rng() -> random.Random:
    return random.Random(1234)


@pytest.fixture
def neutral_profile() -> UserProfile:
    return make_profile()


@pytest.fixture
def neutral_repos() -> list:
    return [make_repo(f"project-{i}") for i in range(10)]
