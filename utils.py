#!/usr/bin/env python3
"""Utility functions for github-chores."""

import time
from typing import List
from urllib.parse import urlparse

from logging_utils import Logger


class RateLimiter:
    """Rate limiter to prevent abuse and respect API limits."""

    def __init__(self, max_requests_per_minute: int = 60):
        self.max_requests = max_requests_per_minute
        self.requests: List[float] = []

    def wait_if_needed(self, operation_type: str = "API") -> None:
        """Wait if necessary to respect rate limits."""
        current_time = time.time()

        self._clean_old_requests(current_time)
        if len(self.requests) >= self.max_requests:
            wait_time = 60 - (current_time - self.requests[0])
            if wait_time > 0:
                Logger.security_event(
                    "RATE_LIMIT_HIT",
                    f"rate limit reached for {operation_type}, "
                    f"waiting {wait_time:.2f}s",
                )
                time.sleep(wait_time)
                self._clean_old_requests(time.time())
        self.requests.append(current_time)

    def _clean_old_requests(self, current_time: float) -> None:
        """Remove requests older than 1 minute."""
        cutoff_time = current_time - 60
        self.requests = [
            req_time for req_time in self.requests if req_time > cutoff_time
        ]


def repo_dir_name(clone_url: str) -> str:
    """Return the local directory name for a clone URL.

    Works for both HTTPS and scp-style SSH URLs:
    'https://github.com/octocat/Hello-World.git' -> 'Hello-World'
    'git@github.com:octocat/Hello-World.git' -> 'Hello-World'
    """
    path = urlparse(clone_url).path if "://" in clone_url else clone_url
    base = path.rstrip("/").rsplit("/", 1)[-1].rsplit(":", 1)[-1]
    if base.endswith(".git"):
        base = base[: -len(".git")]
    return base


def git_base_url(api_url: str) -> str:
    """Return base URL for Git operations derived from API endpoint."""
    parsed = urlparse(api_url)
    if parsed.netloc == "api.github.com":
        return "https://github.com"

    base_path = parsed.path.rstrip("/")
    if base_path.endswith("/api/v3"):
        base_path = base_path[: -len("/api/v3")]
    base = f"{parsed.scheme}://{parsed.netloc}"
    if base_path:
        base += base_path
    return base


def git_hostname(api_url: str) -> str:
    """Return hostname for SSH Git operations."""
    parsed = urlparse(api_url)
    if parsed.netloc == "api.github.com":
        return "github.com"
    return parsed.netloc
