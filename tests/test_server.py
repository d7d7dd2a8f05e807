"""Tests for the Flask routes."""

from datetime import datetime, timedelta, timezone
from unittest.mock import MagicMock, patch

import pytest
import requests

import server
from github_profile import fetcher
from roast_engine import FALLBACK_ROAST, ROASTS

from conftest import make_profile, make_repo


@pytest.fixture
def client():
    server.app.config["TESTING"] = True
    with server.app.test_client() as client:
        yield client


def quiet_account():
    """A profile and repositories that trip no rule at the real current time."""
    now = datetime.now(timezone.utc)
    profile = make_profile(created_at=datetime(now.year - 4, 1, 1, tzinfo=timezone.utc))
    repos = [make_repo(f"project-{i}", pushed_at=now - timedelta(days=3)) for i in range(10)]
    return profile, repos


def test_index(client):
    response = client.get("/")
    assert response.status_code == 200
    assert b"Git Roast" in response.data


@pytest.mark.parametrize("query", ["", "?username=", "?username=%20%20"])
def test_username_required(client, query):
    response = client.get(f"/api/roast{query}")
    assert response.status_code == 400
    assert response.get_json() == {"error": server.USERNAME_REQUIRED}


@patch("github_profile.fetcher.fetch_profile")
def test_user_not_found(mock_fetch, client):
    mock_fetch.side_effect = fetcher.UserNotFoundError("nobody")
    response = client.get("/api/roast?username=nobody")
    assert response.status_code == 404
    assert response.get_json() == {"error": server.USER_NOT_FOUND}


@patch("github_profile.fetcher.fetch_profile")
def test_upstream_failure_hides_details(mock_fetch, client):
    mock_fetch.side_effect = fetcher.UpstreamError("user octocat: HTTP 403 secret detail")
    response = client.get("/api/roast?username=octocat")
    assert response.status_code == 500
    assert response.get_json() == {"error": server.ROAST_FAILED}
    assert b"secret detail" not in response.data


@patch("github_profile.fetcher.get_session")
def test_path_like_username_gets_json_error(mock_get_session, client):
    session = MagicMock(spec=requests.Session)
    session.__enter__.return_value = session
    response = MagicMock(status_code=200, ok=True)
    response.json.return_value = [{"name": "Hello-World"}]
    session.get.return_value = response
    mock_get_session.return_value = session

    result = client.get("/api/roast?username=octocat/repos")
    assert result.status_code == 500
    assert result.is_json
    assert result.get_json() == {"error": server.ROAST_FAILED}
    assert session.get.call_args[0][0].endswith("/users/octocat%2Frepos")


@patch("github_profile.fetcher.fetch_profile")
def test_roast_response(mock_fetch, client):
    profile = make_profile(public_repos=0, bio=None, created_at=datetime.now(timezone.utc))
    mock_fetch.return_value = (profile, [])

    response = client.get("/api/roast?username=%20octocat%20")
    assert response.status_code == 200
    mock_fetch.assert_called_once_with("octocat")

    data = response.get_json()
    assert data["username"] == "octocat"
    assert data["avatar"] == profile.avatar_url
    assert sorted(data["roasts"]) == sorted([
        ROASTS["age_fresh"], ROASTS["repos_none"], ROASTS["bio_missing"],
    ])
    assert data["stats"] == {
        "repos": 0,
        "followers": 20,
        "following": 20,
        "topLanguages": [],
        "accountAge": "New this year",
        "bio": None,
    }


@patch("github_profile.fetcher.fetch_profile")
def test_roast_stats(mock_fetch, client):
    profile, repos = quiet_account()
    repos += [make_repo("web", language="Go"), make_repo("cli", language="Go")]
    mock_fetch.return_value = (profile, repos)

    data = client.get("/api/roast?username=octocat").get_json()
    assert data["stats"]["topLanguages"] == ["C", "Go"]
    assert data["stats"]["accountAge"] == "4 years old"
    assert data["stats"]["bio"] == profile.bio
    assert 1 <= len(data["roasts"]) <= 5


@patch("github_profile.fetcher.fetch_profile")
def test_fallback_roast(mock_fetch, client):
    mock_fetch.return_value = quiet_account()
    data = client.get("/api/roast?username=octocat").get_json()
    assert data["roasts"] == [FALLBACK_ROAST]
