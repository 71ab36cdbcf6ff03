#!/usr/bin/env python3
"""Local git working copy preparation before publishing."""

from __future__ import annotations

import os
import subprocess
from typing import List, Optional

from logging_utils import Logger


class LocalProject:
    """Git operations on the project directory being published."""

    def __init__(self, path: str) -> None:
        self.path = path

    def _git(
        self, args: List[str], check: bool = True
    ) -> subprocess.CompletedProcess:
        return subprocess.run(
            ["git", *args],
            cwd=self.path,
            check=check,
            capture_output=True,
            text=True,
        )

    def is_repository(self) -> bool:
        return os.path.exists(os.path.join(self.path, ".git"))

    def init(self) -> None:
        Logger.info(f"initializing git repository in: {self.path}")
        self._git(["init"])

    def current_branch(self) -> Optional[str]:
        result = self._git(["symbolic-ref", "--short", "HEAD"], check=False)
        if result.returncode != 0:
            return None
        return result.stdout.strip()

    def has_commits(self) -> bool:
        result = self._git(["rev-parse", "--verify", "--quiet", "HEAD"], check=False)
        return result.returncode == 0

    def has_changes(self) -> bool:
        return bool(self._git(["status", "--porcelain"]).stdout.strip())

    def ensure_branch(self, branch: str) -> None:
        """Check out ``branch``, creating it from HEAD when missing."""
        if self.current_branch() == branch:
            return
        exists = self._git(
            ["rev-parse", "--verify", "--quiet", f"refs/heads/{branch}"], check=False
        )
        if exists.returncode == 0:
            Logger.info(f"switching to branch: {branch}")
            self._git(["checkout", branch])
        else:
            Logger.info(f"creating branch: {branch}")
            self._git(["checkout", "-b", branch])

    def commit_all(self, message: str) -> bool:
        """Stage and commit everything; return False if there was nothing to do."""
        if self.has_changes():
            self._git(["add", "-A"])
            self._git(["commit", "-m", message])
        elif not self.has_commits():
            # Empty project: push needs at least one commit
            self._git(["commit", "--allow-empty", "-m", message])
        else:
            Logger.debug("working tree clean, nothing to commit")
            return False
        Logger.info(f"committed: {message}")
        return True

    def ensure_remote(self, name: str, url: str) -> None:
        """Ensure a git remote exists with the correct URL."""
        result = self._git(["remote", "get-url", name], check=False)
        current = result.stdout.strip() if result.returncode == 0 else None
        if current is None:
            Logger.info(f"adding remote {name} -> {url}")
            self._git(["remote", "add", name, url])
        elif current != url:
            Logger.info(f"updating remote {name} url to {url}")
            self._git(["remote", "set-url", name, url])
        else:
            Logger.debug(f"remote {name} already configured correctly")

    def prepare(self, branch: str, message: str) -> None:
        if not self.is_repository():
            self.init()
        self.ensure_branch(branch)
        self.commit_all(message)
