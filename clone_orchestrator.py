#!/usr/bin/env python3
"""Orchestrator for bulk-cloning every repository of a GitHub account."""

from __future__ import annotations

from typing import Optional

from config import CloneAllConfig, CloneSummary
from clone_executor import CloneExecutor
from github_source import GitHubSource
from logging_utils import Logger

# Exit codes
EXIT_SUCCESS = 0
EXIT_EXECUTION_ERROR = 1


class CloneOrchestrator:
    def __init__(self, cfg: CloneAllConfig) -> None:
        self.cfg = cfg
        self.source = GitHubSource(cfg.github.api_url, cfg.github.token)
        self.executor = CloneExecutor(cfg.target_dir, cfg.clone_method)
        self.summary: Optional[CloneSummary] = None

    def run(self) -> int:
        try:
            self._log_banner()

            # The full listing is fetched before any clone is attempted
            repos = self.source.list_repositories(self.cfg.account)
            if not repos:
                Logger.warn(
                    f"no public repositories found for: {self.cfg.account}"
                )
                self.summary = CloneSummary()
                self._log_summary(self.summary)
                return EXIT_SUCCESS

            Logger.success(
                f"found {len(repos)} repositories for: {self.cfg.account}"
            )

            if self.cfg.dry_run:
                total = len(repos)
                for idx, repo in enumerate(repos, start=1):
                    if self.executor.exists_locally(repo):
                        Logger.warn(
                            f"[{idx}/{total}] would skip (already exists): "
                            f"{self.executor.destination(repo)}"
                        )
                        continue
                    Logger.info(
                        f"[{idx}/{total}] would clone: "
                        f"{self.executor.clone_url(repo)}"
                    )
                Logger.info("dry-run completed")
                return EXIT_SUCCESS

            self.summary = self.executor.run(repos)
            self._log_summary(self.summary)
            return EXIT_SUCCESS
        except SystemExit as e:
            return int(e.code) if isinstance(e.code, int) else EXIT_EXECUTION_ERROR
        except Exception as e:
            Logger.error(f"unexpected error: {e}")
            return EXIT_EXECUTION_ERROR

    def _log_banner(self) -> None:
        Logger.header("GitHub Repository Bulk Clone")
        Logger.info(f"target user/organization: {self.cfg.account}")
        Logger.info(f"target directory: {self.cfg.target_dir}")
        Logger.info(f"github API: {self.cfg.github.api_url}")
        if self.cfg.github.token:
            Logger.info("using authenticated API requests (increased rate limits)")
        else:
            Logger.info("no GitHub token provided (using public API limits)")
            Logger.warn("set GITHUB_TOKEN for higher rate limits")

    def _log_summary(self, summary: CloneSummary) -> None:
        Logger.header("CLONE SUMMARY")
        Logger.info(f"total repositories found: {summary.total}")
        Logger.info(f"successfully cloned: {summary.cloned}")
        Logger.info(f"already existed (skipped): {summary.skipped}")
        Logger.info(f"failed to clone: {summary.failed}")

        if summary.failed == 0:
            Logger.success("all operations completed successfully")
        else:
            Logger.warn(
                "some repositories failed to clone; check the output above for details"
            )
        Logger.info(f"repositories are saved in: {self.cfg.target_dir}")
