"""
Roast Engine for the Git Roast web app.

This module defines a RoastEngine class that generates friendly, snarky comments
about a GitHub user based on their profile and public repositories. Each rule is
a pure function that looks at the profile, the repositories and the derived
stats and returns at most one roast line (or None). The engine runs every rule,
collects whatever fired, shuffles the lot and keeps the first few.

Randomness and the current time are injected so tests can pin both.
"""

import logging
import math
import random
from datetime import datetime, timezone
from typing import Callable, Dict, List, Optional, Sequence, Tuple

from github_profile.models import RepositorySummary, UserProfile
from github_profile.stats import DerivedStats, compute_stats

logger = logging.getLogger(__name__)

MAX_ROASTS = 5

FALLBACK_ROAST = (
    "You know what? I looked through your profile and I got nothing. Either you're "
    "perfect or so average that even the roast generator couldn't find anything "
    "interesting. That's almost impressive."
)

# Roast templates, keyed by the branch that emits them. Parameters are filled
# with str.format by the rule functions below.
ROASTS: Dict[str, str] = {
    "age_veteran": (
        "Been on GitHub for {age} years and still haven't figured out how to get more "
        "than {followers} followers? That's commitment to mediocrity."
    ),
    "age_fresh": (
        "Fresh account, huh? Give it a few months before your \"I'll commit every day\" "
        "resolution dies like all the others."
    ),
    "repos_none": (
        "Zero public repos? Are you using GitHub as a social network or what? Even my "
        "grandma has pushed more code."
    ),
    "repos_hoarder": "{repos} repos?! Quality over quantity is just a myth to you, isn't it?",
    "repos_slacker": (
        "Only {repos} repos after {age} years? I've seen more productivity from a broken "
        "CI pipeline."
    ),
    "follow_senpai": (
        "Following {following} people but only {followers} follow back? That's giving "
        "\"please notice me senpai\" energy."
    ),
    "follow_aloof": (
        "{followers} followers but you only follow {following} people? Very \"I'm too "
        "important to follow back\" of you."
    ),
    "bio_full_stack": (
        "\"Full stack developer\" in your bio? So you're mediocre at twice as many things. "
        "Impressive."
    ),
    "bio_buzzword": (
        "Did you really put \"{term}\" in your bio? It's giving 2015 LinkedIn recruiter bait."
    ),
    "bio_entrepreneur": (
        "\"Entrepreneur\" - so you have 47 unfinished side projects and a podcast idea "
        "you'll never start?"
    ),
    "bio_open_source": (
        "Claims to love open source but we both know you've never actually read the "
        "LICENSE file."
    ),
    "bio_long": (
        "Your bio is {length} characters? This isn't a resume, it's a profile. Some of us "
        "have scrolling fatigue."
    ),
    "bio_missing": (
        "No bio? Too mysterious to tell us anything about yourself, or just couldn't think "
        "of a single interesting thing to say?"
    ),
    "lang_js_and_ts": (
        "Using both JavaScript and TypeScript? Pick a side. The type safety fence isn't "
        "comfortable to sit on."
    ),
    "lang_plain_js": (
        "Still writing plain JavaScript in {year}? Living dangerously with those "
        "\"undefined is not a function\" errors, I see."
    ),
    "lang_php": "PHP developer? Bold of you to admit that publicly. Respect for the confidence, I guess.",
    "lang_java": "Java? How's the AbstractFactoryBeanProviderStrategyImpl working out for ya?",
    "lang_rust": (
        "Rust developer? Tell me you spend more time fighting the borrow checker than "
        "writing actual features without telling me."
    ),
    "lang_go": "Go developer? How's it feel writing \"if err != nil\" 47 times per function?",
    "lang_python": (
        "Python main? So you basically write fancy bash scripts and call yourself a "
        "developer. Relatable, honestly."
    ),
    "repo_todo": "You made a todo app? Groundbreaking. Revolutionary. Never been done before.",
    "repo_portfolio": (
        "Got a portfolio repo that was last updated {years} years ago? We all have "
        "abandoned dreams."
    ),
    "repo_dotfiles": (
        "Dotfiles repo? Spending 4 hours customizing your terminal to save 4 seconds is "
        "peak developer behavior."
    ),
    "repo_awesome": (
        "An \"awesome-\" list? A curated collection of links you saved and forgot about. "
        "Classic."
    ),
    "stars_none": (
        "Not a single star across all your repos? Your code is so exclusive even you "
        "don't star it."
    ),
    "stars_few": (
        "{repos} repos and only {stars} total stars? The GitHub algorithm said \"nah\" "
        "and moved on."
    ),
    "forks": "{percent}% of your repos are forks? You're basically a human git clone.",
    "inactive": (
        "No commits in the last 3 months? Your green squares are looking pretty barren. "
        "GitHub thinks you might be a bot that gave up."
    ),
    "hireable": (
        "Marked as \"hireable\" - nothing says desperation like a boolean flag. Just "
        "kidding, we've all been there. Good luck out there! \U0001F4AA"
    ),
}

BIO_BUZZWORDS = ("10x", "ninja", "rockstar")

# Languages with a dedicated jab when they show up in the top three.
LANGUAGE_ROASTS: Dict[str, str] = {
    "PHP": "lang_php",
    "Java": "lang_java",
    "Rust": "lang_rust",
    "Go": "lang_go",
    "Python": "lang_python",
}

Repos = Sequence[RepositorySummary]
Rule = Callable[[UserProfile, Repos, DerivedStats, random.Random], Optional[str]]


# ---------- RULES ----------

def rule_account_age(profile: UserProfile, repos: Repos, stats: DerivedStats, rng: random.Random) -> Optional[str]:
    if stats.account_age > 10:
        return ROASTS["age_veteran"].format(age=stats.account_age, followers=profile.followers)
    if stats.account_age < 1:
        return ROASTS["age_fresh"]
    return None


def rule_repo_count(profile: UserProfile, repos: Repos, stats: DerivedStats, rng: random.Random) -> Optional[str]:
    if profile.public_repos == 0:
        return ROASTS["repos_none"]
    if profile.public_repos > 100:
        return ROASTS["repos_hoarder"].format(repos=profile.public_repos)
    if profile.public_repos < 5 and stats.account_age > 2:
        return ROASTS["repos_slacker"].format(repos=profile.public_repos, age=stats.account_age)
    return None


def rule_follow_ratio(profile: UserProfile, repos: Repos, stats: DerivedStats, rng: random.Random) -> Optional[str]:
    if profile.following > profile.followers * 3 and profile.following > 50:
        return ROASTS["follow_senpai"].format(following=profile.following, followers=profile.followers)
    if profile.followers > 1000 and profile.following < 10:
        return ROASTS["follow_aloof"].format(followers=profile.followers, following=profile.following)
    return None


def _bio(profile: UserProfile) -> str:
    return (profile.bio or "").lower()


def rule_bio_full_stack(profile: UserProfile, repos: Repos, stats: DerivedStats, rng: random.Random) -> Optional[str]:
    return ROASTS["bio_full_stack"] if "full stack" in _bio(profile) else None


def rule_bio_buzzword(profile: UserProfile, repos: Repos, stats: DerivedStats, rng: random.Random) -> Optional[str]:
    bio = _bio(profile)
    for term in BIO_BUZZWORDS:
        if term in bio:
            return ROASTS["bio_buzzword"].format(term=term)
    return None


def rule_bio_entrepreneur(profile: UserProfile, repos: Repos, stats: DerivedStats, rng: random.Random) -> Optional[str]:
    return ROASTS["bio_entrepreneur"] if "entrepreneur" in _bio(profile) else None


def rule_bio_open_source(profile: UserProfile, repos: Repos, stats: DerivedStats, rng: random.Random) -> Optional[str]:
    return ROASTS["bio_open_source"] if "open source" in _bio(profile) else None


def rule_bio_length(profile: UserProfile, repos: Repos, stats: DerivedStats, rng: random.Random) -> Optional[str]:
    length = len(_bio(profile))
    return ROASTS["bio_long"].format(length=length) if length > 150 else None


def rule_bio_missing(profile: UserProfile, repos: Repos, stats: DerivedStats, rng: random.Random) -> Optional[str]:
    return None if profile.bio else ROASTS["bio_missing"]


def rule_javascript(profile: UserProfile, repos: Repos, stats: DerivedStats, rng: random.Random) -> Optional[str]:
    top = stats.top_languages
    if "JavaScript" not in top:
        return None
    if "TypeScript" in top:
        return ROASTS["lang_js_and_ts"]
    return ROASTS["lang_plain_js"].format(year=stats.current_year)


def _language_rule(language: str) -> Rule:
    key = LANGUAGE_ROASTS[language]

    def rule(profile: UserProfile, repos: Repos, stats: DerivedStats, rng: random.Random) -> Optional[str]:
        return ROASTS[key] if language in stats.top_languages else None

    rule.__name__ = f"rule_language_{language.lower()}"
    return rule


def _own_repo_names(repos: Repos) -> List[str]:
    return [repo.name.lower() for repo in repos if not repo.fork]


def _any_name_contains(repos: Repos, *needles: str) -> bool:
    return any(needle in name for name in _own_repo_names(repos) for needle in needles)


def rule_repo_todo(profile: UserProfile, repos: Repos, stats: DerivedStats, rng: random.Random) -> Optional[str]:
    return ROASTS["repo_todo"] if _any_name_contains(repos, "todo", "task") else None


def rule_repo_portfolio(profile: UserProfile, repos: Repos, stats: DerivedStats, rng: random.Random) -> Optional[str]:
    if not _any_name_contains(repos, "portfolio", "personal-site"):
        return None
    # staleness is a random 1-3, not read from pushed_at
    return ROASTS["repo_portfolio"].format(years=rng.randint(1, 3))


def rule_repo_dotfiles(profile: UserProfile, repos: Repos, stats: DerivedStats, rng: random.Random) -> Optional[str]:
    return ROASTS["repo_dotfiles"] if _any_name_contains(repos, "dotfiles") else None


def rule_repo_awesome(profile: UserProfile, repos: Repos, stats: DerivedStats, rng: random.Random) -> Optional[str]:
    return ROASTS["repo_awesome"] if _any_name_contains(repos, "awesome") else None


def rule_stars(profile: UserProfile, repos: Repos, stats: DerivedStats, rng: random.Random) -> Optional[str]:
    if stats.total_stars == 0 and stats.repo_count > 0:
        return ROASTS["stars_none"]
    if stats.total_stars < 10 and stats.repo_count > 20:
        return ROASTS["stars_few"].format(repos=stats.repo_count, stars=stats.total_stars)
    return None


def rule_forks(profile: UserProfile, repos: Repos, stats: DerivedStats, rng: random.Random) -> Optional[str]:
    if stats.repo_count > 5 and stats.fork_count > stats.repo_count * 0.7:
        # round half up, not to even
        return ROASTS["forks"].format(percent=math.floor(stats.fork_ratio * 100 + 0.5))
    return None


def rule_activity(profile: UserProfile, repos: Repos, stats: DerivedStats, rng: random.Random) -> Optional[str]:
    if stats.recent_count == 0 and stats.repo_count > 0:
        return ROASTS["inactive"]
    return None


def rule_hireable(profile: UserProfile, repos: Repos, stats: DerivedStats, rng: random.Random) -> Optional[str]:
    return ROASTS["hireable"] if profile.hireable is True else None


class RoastEngine:
    """Generate GitHub-profile roasts from a user profile and repositories."""

    # Ordered (tag, rule) pairs. Every rule runs on every evaluation.
    RULES: List[Tuple[str, Rule]] = [
        ("account_age", rule_account_age),
        ("repo_count", rule_repo_count),
        ("follow_ratio", rule_follow_ratio),
        ("bio_full_stack", rule_bio_full_stack),
        ("bio_buzzword", rule_bio_buzzword),
        ("bio_entrepreneur", rule_bio_entrepreneur),
        ("bio_open_source", rule_bio_open_source),
        ("bio_length", rule_bio_length),
        ("bio_missing", rule_bio_missing),
        ("lang_javascript", rule_javascript),
    ] + [
        (key, _language_rule(language)) for language, key in LANGUAGE_ROASTS.items()
    ] + [
        ("repo_todo", rule_repo_todo),
        ("repo_portfolio", rule_repo_portfolio),
        ("repo_dotfiles", rule_repo_dotfiles),
        ("repo_awesome", rule_repo_awesome),
        ("stars", rule_stars),
        ("forks", rule_forks),
        ("activity", rule_activity),
        ("hireable", rule_hireable),
    ]

    def __init__(
        self,
        rng: Optional[random.Random] = None,
        clock: Optional[Callable[[], datetime]] = None,
        limit: int = MAX_ROASTS,
    ):
        self.rng = rng if rng is not None else random.Random()
        self.clock = clock or (lambda: datetime.now(timezone.utc))
        self.limit = limit

    def now(self) -> datetime:
        return self.clock()

    def fired_rules(
        self,
        profile: UserProfile,
        repos: Repos,
        stats: Optional[DerivedStats] = None,
        now: Optional[datetime] = None,
    ) -> List[Tuple[str, str]]:
        """Return (tag, roast) for every rule that fires, in rule order."""
        now = now or self.now()
        if stats is None:
            stats = compute_stats(profile, repos, now)
        fired: List[Tuple[str, str]] = []
        for tag, rule in self.RULES:
            text = rule(profile, repos, stats, self.rng)
            if text is not None:
                fired.append((tag, text))
        return fired

    def candidate_roasts(
        self,
        profile: UserProfile,
        repos: Repos,
        stats: Optional[DerivedStats] = None,
        now: Optional[datetime] = None,
    ) -> List[str]:
        """Evaluate every rule and return the unsampled candidate list."""
        candidates = [text for _, text in self.fired_rules(profile, repos, stats, now)]
        logger.debug(f"{profile.login}: {len(candidates)} candidate roasts")
        return candidates

    def sample(self, candidates: Sequence[str], limit: Optional[int] = None) -> List[str]:
        """Shuffle a copy of the candidates and keep at most `limit` of them."""
        limit = self.limit if limit is None else limit
        shuffled = list(candidates)
        self.rng.shuffle(shuffled)
        return shuffled[:min(limit, len(shuffled))]

    def generate_roasts(
        self,
        profile: UserProfile,
        repos: Repos,
        stats: Optional[DerivedStats] = None,
        now: Optional[datetime] = None,
    ) -> List[str]:
        """Candidates plus sampling; may be empty."""
        return self.sample(self.candidate_roasts(profile, repos, stats, now))

    def roast(
        self,
        profile: UserProfile,
        repos: Repos,
        stats: Optional[DerivedStats] = None,
        now: Optional[datetime] = None,
    ) -> List[str]:
        """Like generate_roasts, but never empty: falls back to FALLBACK_ROAST."""
        roasts = self.generate_roasts(profile, repos, stats, now)
        if not roasts:
            roasts = [FALLBACK_ROAST]
        return roasts
