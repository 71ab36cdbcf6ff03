#!/usr/bin/env python3
"""Sequential, idempotent cloning of a repository listing."""

from __future__ import annotations

import os
import subprocess
from typing import List

from config import CloneMethod, CloneOutcome, CloneSummary, RepoRecord
from logging_utils import Logger
from security import SecurityValidator
from utils import repo_dir_name


class CloneExecutor:
    """Clone each repository into ``target_dir`` unless it is already there.

    Existing directories are left untouched (no fetch or update), and a failed
    clone never stops the batch.
    """

    def __init__(
        self, target_dir: str, clone_method: CloneMethod = CloneMethod.HTTPS
    ) -> None:
        self.target_dir = target_dir
        self.clone_method = clone_method

    def prepare_target_dir(self) -> None:
        if not os.path.isdir(self.target_dir):
            Logger.info(f"creating target directory: {self.target_dir}")
            os.makedirs(self.target_dir, exist_ok=True)

    def run(self, repos: List[RepoRecord]) -> CloneSummary:
        self.prepare_target_dir()
        summary = CloneSummary()
        total = len(repos)
        for idx, repo in enumerate(repos, start=1):
            summary.record(self.process(repo, idx, total))
        return summary

    def clone_url(self, repo: RepoRecord) -> str:
        if self.clone_method == CloneMethod.SSH and repo.ssh_url:
            return repo.ssh_url
        return repo.clone_url

    def destination(self, repo: RepoRecord) -> str:
        return os.path.join(self.target_dir, repo_dir_name(self.clone_url(repo)))

    def exists_locally(self, repo: RepoRecord) -> bool:
        return os.path.isdir(self.destination(repo))

    def process(self, repo: RepoRecord, idx: int, total: int) -> CloneOutcome:
        url = self.clone_url(repo)
        name = repo_dir_name(url)
        Logger.info(f"[{idx}/{total}] processing: {name}")

        try:
            SecurityValidator.validate_repo_name(name)
        except ValueError as e:
            Logger.error(f"  failed to clone '{name}': {e}")
            return CloneOutcome.FAILED

        destination = self.destination(repo)
        if self.exists_locally(repo):
            Logger.warn(f"  repository already exists, skipping: {name}")
            return CloneOutcome.SKIPPED

        Logger.info(f"  cloning: {url}")
        try:
            self._git_clone(url, destination)
        except subprocess.CalledProcessError as e:
            detail = (e.stderr or "").strip().splitlines()
            Logger.error(f"  failed to clone: {name}")
            if detail:
                Logger.debug(f"  git: {detail[-1]}")
            return CloneOutcome.FAILED
        except OSError as e:
            Logger.error(f"  failed to run git for '{name}': {e}")
            return CloneOutcome.FAILED

        Logger.success(f"  successfully cloned: {name}")
        return CloneOutcome.CLONED

    @staticmethod
    def _git_clone(url: str, destination: str) -> None:
        env = os.environ.copy()
        # Never block on a credential prompt for missing/private repos
        env["GIT_TERMINAL_PROMPT"] = "0"
        subprocess.run(
            ["git", "clone", url, destination],
            check=True,
            capture_output=True,
            text=True,
            errors="replace",
            env=env,
        )
