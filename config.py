#!/usr/bin/env python3
"""Configuration dataclasses and constants for github-chores."""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from typing import Optional

DEFAULT_API_URL = "https://api.github.com"
DEFAULT_TARGET_DIR = "~/Downloads/GIT"

# Listing pagination
PAGE_SIZE = 100
MAX_PAGES = 10

REQUEST_TIMEOUT_S = 30

# GitHub user/org names: alphanumerics and hyphens, no leading/trailing hyphen
ACCOUNT_PATTERN = re.compile(r"^[A-Za-z0-9](?:[A-Za-z0-9-]*[A-Za-z0-9])?$")

ENV_TOKEN = "GITHUB_TOKEN"
ENV_API_URL = "GITHUB_API"


class CloneMethod(Enum):
    """Enumeration for git clone/push methods."""
    HTTPS = "https"
    SSH = "ssh"


class Visibility(Enum):
    """Enumeration for repository visibility levels."""
    PRIVATE = "private"
    PUBLIC = "public"


class CloneOutcome(Enum):
    """Result of processing a single repository in a bulk clone."""
    CLONED = "cloned"
    SKIPPED = "skipped"
    FAILED = "failed"


@dataclass(frozen=True)
class RepoRecord:
    """A repository entry from the listing endpoint."""
    name: str
    clone_url: str
    ssh_url: Optional[str] = None


@dataclass
class CloneSummary:
    """Per-run clone counters."""
    cloned: int = 0
    skipped: int = 0
    failed: int = 0

    @property
    def total(self) -> int:
        return self.cloned + self.skipped + self.failed

    def record(self, outcome: CloneOutcome) -> None:
        if outcome == CloneOutcome.CLONED:
            self.cloned += 1
        elif outcome == CloneOutcome.SKIPPED:
            self.skipped += 1
        else:
            self.failed += 1


@dataclass
class GitHubConfig:
    """GitHub API access configuration."""
    api_url: str
    token: Optional[str]


@dataclass
class CloneAllConfig:
    """Configuration for bulk-cloning an account's repositories."""
    github: GitHubConfig
    account: str
    target_dir: str
    clone_method: CloneMethod = CloneMethod.HTTPS
    dry_run: bool = False


@dataclass
class PublishConfig:
    """Configuration for creating a repository and pushing a local project."""
    github: GitHubConfig
    project_dir: str
    repo_name: str
    org: Optional[str]
    visibility: Visibility
    description: str
    branch: str
    commit_message: str
    push_method: CloneMethod = CloneMethod.HTTPS
    use_existing: bool = False
    dry_run: bool = False
