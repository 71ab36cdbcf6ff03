#!/usr/bin/env python3
"""Orchestrator for creating a GitHub repository and pushing a local project."""

from __future__ import annotations

import subprocess
import sys

from config import PublishConfig, Visibility
from github_target import EXIT_GITHUB_ERROR, GitHubTarget
from local_project import LocalProject
from logging_utils import Logger
from security import SecurityValidator

# Exit codes
EXIT_SUCCESS = 0
EXIT_EXECUTION_ERROR = 1
EXIT_GIT_ERROR = 32


class PublishOrchestrator:
    def __init__(self, cfg: PublishConfig) -> None:
        self.cfg = cfg
        self.gh = GitHubTarget(cfg.github, cfg.org, cfg.push_method)
        self.project = LocalProject(cfg.project_dir)

    def run(self) -> int:
        try:
            self._log_banner()

            if self.cfg.dry_run:
                self._log_plan()
                Logger.info("dry-run completed")
                return EXIT_SUCCESS

            # Local failures must not leave an empty repository behind
            self._git_step(
                self.project.prepare, self.cfg.branch, self.cfg.commit_message
            )

            self.gh.connect()
            self._ensure_remote_repo()

            remote_url = self.gh.remote_url(self.cfg.repo_name)
            self._git_step(self.project.ensure_remote, "origin", remote_url)
            self._git_step(
                self.gh.push_project, self.cfg.project_dir, self.cfg.branch
            )

            Logger.success(
                f"published {self.cfg.project_dir} -> "
                f"{self.gh.owner_login}/{self.cfg.repo_name} ({self.cfg.branch})"
            )
            return EXIT_SUCCESS
        except SystemExit as e:
            return int(e.code) if isinstance(e.code, int) else EXIT_EXECUTION_ERROR
        except Exception as e:
            Logger.error(f"unexpected error: {e}")
            return EXIT_EXECUTION_ERROR

    def _ensure_remote_repo(self) -> None:
        name = self.cfg.repo_name
        if self.gh.repo_exists(name):
            if not self.cfg.use_existing:
                Logger.error(
                    f"repository '{self.gh.owner_login}/{name}' already exists "
                    "(use --use-existing to push to it)"
                )
                sys.exit(EXIT_GITHUB_ERROR)
            Logger.warn(f"pushing to existing repo: {self.gh.owner_login}/{name}")
            return

        self.gh.create_repo(
            name,
            private=self.cfg.visibility == Visibility.PRIVATE,
            description=self.cfg.description,
        )

    @staticmethod
    def _git_step(step, *args) -> None:
        """Run a local git step, exiting with EXIT_GIT_ERROR on failure."""
        try:
            step(*args)
        except subprocess.CalledProcessError as e:
            detail = SecurityValidator.sanitize_for_logging(
                (e.stderr or e.stdout or "").strip()
            )
            Logger.error(f"git command failed ({e.returncode}): {' '.join(e.cmd)}")
            if detail:
                Logger.error(detail)
            sys.exit(EXIT_GIT_ERROR)
        except OSError as e:
            Logger.error(f"failed to run git: {e}")
            sys.exit(EXIT_GIT_ERROR)

    def _log_banner(self) -> None:
        Logger.header("GitHub Repository Publish")
        Logger.info(f"project directory: {self.cfg.project_dir}")
        Logger.info(f"repository name: {self.cfg.repo_name}")
        Logger.info(f"owner: {self.cfg.org or 'authenticated user'}")
        Logger.info(f"visibility: {self.cfg.visibility.value}")
        Logger.info(f"push method: {self.cfg.push_method.value}")

    def _log_plan(self) -> None:
        owner = self.cfg.org or "<authenticated user>"
        Logger.info(
            f"would create repo {owner}/{self.cfg.repo_name} "
            f"({self.cfg.visibility.value})"
            + (" or reuse it if present" if self.cfg.use_existing else "")
        )
        if not self.project.is_repository():
            Logger.info(f"would run git init in {self.cfg.project_dir}")
        Logger.info(f"would commit pending changes on branch {self.cfg.branch}")
        Logger.info(f"would push {self.cfg.branch} to origin via {self.cfg.push_method.value}")
