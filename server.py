import logging
from datetime import datetime, timezone

from flask import Flask, request, jsonify

import config
from roast_engine import RoastEngine
from github_profile import fetcher
from github_profile.stats import compute_stats, format_account_age

logging.basicConfig(
    level=config.LOG_LEVEL,
    format="%(asctime)s - %(levelname)s - %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)
logger = logging.getLogger(__name__)

app = Flask(__name__, static_folder="static", static_url_path="")

USERNAME_REQUIRED = "Username is required"
USER_NOT_FOUND = "User not found. Did they delete their account in shame?"
ROAST_FAILED = "Failed to roast. The GitHub API might be rate-limiting us, or the user broke something."

# ---------- ROUTES ----------


@app.route("/")
def index():
    return app.send_static_file("index.html")

# Browser sends a username; we fetch GitHub + roast


@app.route("/api/roast", methods=["GET"])
def roast_user():
    username = (request.args.get("username") or "").strip()
    if not username:
        return jsonify({"error": USERNAME_REQUIRED}), 400

    try:
        profile, repos = fetcher.fetch_profile(username)
    except fetcher.UserNotFoundError:
        return jsonify({"error": USER_NOT_FOUND}), 404
    except fetcher.GitHubError as e:
        # upstream detail stays in the log
        logger.error(f"Roast error for {username}: {e}")
        return jsonify({"error": ROAST_FAILED}), 500

    now = datetime.now(timezone.utc)
    stats = compute_stats(profile, repos, now)
    roasts = RoastEngine().roast(profile, repos, stats, now=now)
    logger.info(f"Roasted {profile.login} with {len(roasts)} lines")
    return jsonify(build_response(profile, stats, roasts))

# ---------- HELPERS ----------


def build_response(profile, stats, roasts):
    return {
        "username": profile.login,
        "avatar": profile.avatar_url,
        "roasts": roasts,
        "stats": {
            "repos": profile.public_repos,
            "followers": profile.followers,
            "following": profile.following,
            "topLanguages": stats.top_languages,
            "accountAge": format_account_age(stats.account_age),
            "bio": profile.bio,
        },
    }


if __name__ == "__main__":
    app.run(host=config.HOST, port=config.PORT)
