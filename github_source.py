#!/usr/bin/env python3
"""GitHub REST wrapper for listing the repositories owned by an account."""

from __future__ import annotations

import sys
from typing import Any, Dict, List, NoReturn, Optional

import requests

from config import MAX_PAGES, PAGE_SIZE, REQUEST_TIMEOUT_S, RepoRecord
from logging_utils import Logger
from utils import RateLimiter, repo_dir_name

# Exit codes
EXIT_AUTH_ERROR = 40
EXIT_GITHUB_ERROR = 31


class GitHubSource:
    """Paginated listing of an account's public repositories.

    Pages are requested one at a time until an empty or short page is seen,
    or until ``max_pages`` pages have been fetched. Any failure aborts the
    whole listing; a partial result is never returned.
    """

    def __init__(
        self,
        api_url: str,
        token: Optional[str] = None,
        *,
        page_size: int = PAGE_SIZE,
        max_pages: int = MAX_PAGES,
    ) -> None:
        self.api_url = api_url.rstrip("/")
        self.token = token
        self.page_size = page_size
        self.max_pages = max_pages
        # Unauthenticated callers get 60 requests/hour, keep bursts small
        self.rate_limiter = RateLimiter(
            max_requests_per_minute=50 if token else 10
        )

    def _get_api_headers(self) -> Dict[str, str]:
        headers = {
            "Accept": "application/vnd.github+json",
            "X-GitHub-Api-Version": "2022-11-28",
        }
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"
        return headers

    def list_repositories(self, account: str) -> List[RepoRecord]:
        """Return every repository of ``account`` in API order."""
        Logger.info(f"fetching repository list for: {account}")
        repos: List[RepoRecord] = []

        for page in range(1, self.max_pages + 1):
            Logger.info(f"fetching page {page}...")
            records = self._fetch_page(account, page)
            if not records:
                Logger.info("no more repositories found (end of pagination)")
                break

            repos.extend(records)
            if len(records) < self.page_size:
                Logger.info(
                    f"last page reached (only {len(records)} repositories on this page)"
                )
                break
        else:
            Logger.warn(
                f"stopped after {self.max_pages} pages ({len(repos)} repositories); "
                "any further repositories were not listed"
            )

        Logger.info(f"found {len(repos)} repositories for: {account}")
        return repos

    def _fetch_page(self, account: str, page: int) -> List[RepoRecord]:
        url = f"{self.api_url}/users/{account}/repos"
        params = {"per_page": self.page_size, "page": page}
        try:
            self.rate_limiter.wait_if_needed("GitHub API")
            response = requests.get(
                url,
                headers=self._get_api_headers(),
                params=params,
                timeout=REQUEST_TIMEOUT_S,
            )
        except requests.RequestException as e:
            Logger.error(f"failed to contact github api (page {page}): {e}")
            sys.exit(EXIT_GITHUB_ERROR)

        try:
            payload = response.json()
        except ValueError:
            payload = None

        if isinstance(payload, dict) and "message" in payload:
            self._handle_api_error(response.status_code, payload["message"], account)
        if not response.ok:
            self._handle_api_error(response.status_code, response.reason, account)
        if payload is None:
            Logger.error(
                f"malformed response from github api (page {page}): body is not valid JSON"
            )
            sys.exit(EXIT_GITHUB_ERROR)
        if not isinstance(payload, list):
            Logger.error(
                f"unexpected response from github api (page {page}): "
                f"expected a list, got {type(payload).__name__}"
            )
            sys.exit(EXIT_GITHUB_ERROR)

        return [self._parse_record(item, page) for item in payload]

    @staticmethod
    def _parse_record(item: Any, page: int) -> RepoRecord:
        if not isinstance(item, dict) or not item.get("clone_url"):
            Logger.error(
                f"malformed repository record on page {page}: missing clone_url"
            )
            sys.exit(EXIT_GITHUB_ERROR)
        clone_url = item["clone_url"]
        return RepoRecord(
            name=item.get("name") or repo_dir_name(clone_url),
            clone_url=clone_url,
            ssh_url=item.get("ssh_url"),
        )

    def _handle_api_error(
        self, status_code: int, message: str, account: str
    ) -> NoReturn:
        """Log a listing error and abort."""
        if status_code == 401:
            Logger.error(f"unauthorized (401): token invalid or expired: {message}")
            sys.exit(EXIT_AUTH_ERROR)
        if status_code == 403:
            Logger.error(f"forbidden (403): {message}")
            if not self.token:
                Logger.warn(
                    "unauthenticated API limits may be exhausted; set GITHUB_TOKEN "
                    "for higher rate limits"
                )
            sys.exit(EXIT_GITHUB_ERROR)
        if status_code == 404:
            Logger.error(f"not found (404): account '{account}' does not exist")
            sys.exit(EXIT_GITHUB_ERROR)
        Logger.error(f"github api error ({status_code}): {message}")
        sys.exit(EXIT_GITHUB_ERROR)
