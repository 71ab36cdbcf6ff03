#!/usr/bin/env python3
"""Input validation and log sanitization utilities for github-chores."""

import os
import re
from typing import List, Optional

from config import ACCOUNT_PATTERN


class SecurityValidator:
    """Security validation utilities for input sanitization and validation."""

    # GitHub limits account names to 39 characters
    MAX_ACCOUNT_LENGTH = 39
    MAX_REPO_NAME_LENGTH = 100
    MAX_URL_LENGTH = 2048
    MAX_PATH_LENGTH = 4096
    MAX_BRANCH_LENGTH = 255

    SAFE_REPO_NAME_PATTERN = re.compile(r"^[A-Za-z0-9._-]+$")
    SAFE_BRANCH_PATTERN = re.compile(r"^[A-Za-z0-9._/-]+$")

    @staticmethod
    def _has_control_chars(value: str) -> bool:
        return "\x00" in value or any(ord(c) < 32 for c in value)

    @classmethod
    def validate_account(cls, account: str) -> str:
        """Validate a GitHub user or organization name."""
        if not account or not isinstance(account, str):
            raise ValueError("account name must be a non-empty string")

        if len(account) > cls.MAX_ACCOUNT_LENGTH:
            raise ValueError(
                f"account name exceeds maximum length of {cls.MAX_ACCOUNT_LENGTH}"
            )

        if not ACCOUNT_PATTERN.match(account):
            raise ValueError(f"invalid GitHub account name format: {account}")

        return account

    @classmethod
    def validate_repo_name(cls, name: str) -> str:
        """Validate a repository name; it is also used as a directory name."""
        if not name or not isinstance(name, str):
            raise ValueError("repository name must be a non-empty string")

        if len(name) > cls.MAX_REPO_NAME_LENGTH:
            raise ValueError(
                f"repository name exceeds maximum length of {cls.MAX_REPO_NAME_LENGTH}"
            )

        # Path traversal
        if name in (".", "..") or "/" in name or "\\" in name:
            raise ValueError("repository name contains invalid path characters")

        if cls._has_control_chars(name):
            raise ValueError(
                "repository name contains null bytes or control characters"
            )

        if not cls.SAFE_REPO_NAME_PATTERN.match(name):
            raise ValueError(f"repository name contains invalid characters: {name}")

        return name

    @classmethod
    def validate_branch(cls, branch: str) -> str:
        """Validate a git branch name."""
        if not branch or not isinstance(branch, str):
            raise ValueError("branch name must be a non-empty string")

        if len(branch) > cls.MAX_BRANCH_LENGTH:
            raise ValueError(
                f"branch name exceeds maximum length of {cls.MAX_BRANCH_LENGTH}"
            )

        if (
            not cls.SAFE_BRANCH_PATTERN.match(branch)
            or branch.startswith(("-", "/"))
            or branch.endswith(("/", ".lock"))
            or ".." in branch
        ):
            raise ValueError(f"invalid branch name: {branch}")

        return branch

    @classmethod
    def validate_url(cls, url: str, allowed_schemes: Optional[List[str]] = None) -> str:
        """Validate URL for security."""
        if not url or not isinstance(url, str):
            raise ValueError("URL must be a non-empty string")

        if len(url) > cls.MAX_URL_LENGTH:
            raise ValueError(f"URL exceeds maximum length of {cls.MAX_URL_LENGTH}")

        if cls._has_control_chars(url):
            raise ValueError("URL contains null bytes or control characters")

        # Basic URL format validation (allow SSH URLs too)
        if not (url.startswith(("http://", "https://")) or url.startswith("git@")):
            raise ValueError("URL must use http, https, or SSH (git@) scheme")

        if allowed_schemes:
            if url.startswith("git@"):
                scheme = "ssh"
            else:
                scheme = url.split("://")[0].lower()
            if scheme not in allowed_schemes:
                raise ValueError(
                    f"URL scheme '{scheme}' not in allowed schemes: {allowed_schemes}"
                )

        return url

    @classmethod
    def validate_directory(cls, path: str) -> str:
        """Expand '~' and return a normalized absolute directory path."""
        if not path or not isinstance(path, str):
            raise ValueError("directory path must be a non-empty string")

        if len(path) > cls.MAX_PATH_LENGTH:
            raise ValueError(
                f"directory path exceeds maximum length of {cls.MAX_PATH_LENGTH}"
            )

        if "\x00" in path:
            raise ValueError("directory path contains null bytes")

        return os.path.abspath(os.path.expanduser(path))

    @classmethod
    def sanitize_for_logging(cls, message: str) -> str:
        """Sanitize message for safe logging by removing potential credentials."""
        if not message:
            return message

        # Patterns to redact
        patterns = [
            (r"https://[^:/@\s]+:[^@\s]+@", "https://[REDACTED]@"),  # URLs with credentials
            (r"token\s*[=:]\s*[^\s]+", "token=[REDACTED]"),  # Token assignments
            (r"bearer\s+[^\s]+", "Bearer [REDACTED]"),  # Authorization headers
            (r"password\s*[=:]\s*[^\s]+", "password=[REDACTED]"),  # Password assignments
            (r"gh[pousr]_[A-Za-z0-9_]+", "[GITHUB_TOKEN_REDACTED]"),  # Classic tokens
            (r"github_pat_[A-Za-z0-9_]+", "[GITHUB_TOKEN_REDACTED]"),  # Fine-grained tokens
        ]

        sanitized = message
        for pattern, replacement in patterns:
            sanitized = re.sub(pattern, replacement, sanitized, flags=re.IGNORECASE)

        return sanitized
