"""
Runtime settings for the Git Roast web app.

Values come from the environment (or a local .env file) and fall back to the
defaults below.
"""

import os

from dotenv import load_dotenv

load_dotenv()

# GitHub API
GITHUB_API_URL = os.getenv("GITHUB_API_URL", "https://api.github.com").rstrip("/")
GITHUB_USER_AGENT = os.getenv("GITHUB_USER_AGENT", "git-roast")
GITHUB_ACCEPT_HEADER = "application/vnd.github.v3+json"
GITHUB_TIMEOUT_SECONDS = float(os.getenv("GITHUB_TIMEOUT_SECONDS", "10"))
GITHUB_REPOS_PER_PAGE = 100

# Retries for transient upstream failures
RETRY_TOTAL = 3
RETRY_BACKOFF_FACTOR = 0.5
RETRY_STATUS_FORCELIST = [500, 502, 503, 504]

# Dev server
HOST = os.getenv("ROAST_HOST", "0.0.0.0")
PORT = int(os.getenv("ROAST_PORT", "6969"))

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
