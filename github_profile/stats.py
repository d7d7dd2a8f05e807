"""
Aggregate facts derived from a user's repository list.

These numbers feed both the roast rules and the stats block of the API
response. They depend on the current time (account age, recent pushes), so
"now" is always passed in and nothing here is cached between calls.
"""

from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Dict, List, Optional, Sequence

from .models import RepositorySummary, UserProfile

RECENT_WINDOW = timedelta(days=90)
TOP_LANGUAGE_COUNT = 3


@dataclass(frozen=True)
class DerivedStats:
    current_year: int
    account_age: int
    language_counts: Dict[str, int]
    top_languages: List[str]
    total_stars: int
    repo_count: int
    fork_count: int
    recent_count: int

    @property
    def fork_ratio(self) -> Optional[float]:
        """Share of repositories that are forks, or None with no repositories."""
        if self.repo_count == 0:
            return None
        return self.fork_count / self.repo_count


def account_age_years(created_at: Optional[datetime], now: datetime) -> int:
    """Whole calendar years between account creation and now (year granularity)."""
    if created_at is None:
        return 0
    return now.year - created_at.year


def format_account_age(age: int) -> str:
    if age == 0:
        return "New this year"
    return f"{age} year{'s' if age != 1 else ''} old"


def language_histogram(repos: Sequence[RepositorySummary]) -> Dict[str, int]:
    """Count primary languages of non-fork repositories, in first-seen order."""
    counts: Dict[str, int] = {}
    for repo in repos:
        if repo.language and not repo.fork:
            counts[repo.language] = counts.get(repo.language, 0) + 1
    return counts


def top_languages(counts: Dict[str, int], limit: int = TOP_LANGUAGE_COUNT) -> List[str]:
    # sorted() is stable, so equal counts keep first-seen order
    ranked = sorted(counts.items(), key=lambda item: item[1], reverse=True)
    return [lang for lang, _ in ranked[:limit]]


def is_recent(repo: RepositorySummary, now: datetime) -> bool:
    if repo.pushed_at is None:
        return False
    return now - repo.pushed_at < RECENT_WINDOW


def compute_stats(
    profile: UserProfile,
    repos: Sequence[RepositorySummary],
    now: datetime,
) -> DerivedStats:
    """Build the DerivedStats for one profile and its repositories."""
    counts = language_histogram(repos)
    return DerivedStats(
        current_year=now.year,
        account_age=account_age_years(profile.created_at, now),
        language_counts=counts,
        top_languages=top_languages(counts),
        total_stars=sum(repo.stargazers_count for repo in repos),
        repo_count=len(repos),
        fork_count=sum(1 for repo in repos if repo.fork),
        recent_count=sum(1 for repo in repos if is_recent(repo, now)),
    )
