#!/usr/bin/env python3
"""GitHub API wrapper for creating repositories and pushing local projects."""

from __future__ import annotations

import os
import subprocess
import sys
import tempfile
from typing import TYPE_CHECKING, Optional, Union

import github

if TYPE_CHECKING:
    from github.AuthenticatedUser import AuthenticatedUser
    from github.Organization import Organization
    from github.Repository import Repository

from config import DEFAULT_API_URL, CloneMethod, GitHubConfig
from logging_utils import Logger
from security import SecurityValidator
from utils import RateLimiter, git_base_url, git_hostname

# Exit codes
EXIT_AUTH_ERROR = 40
EXIT_GITHUB_ERROR = 31

# Environment variable the askpass helper reads the token from
ASKPASS_TOKEN_ENV = "GITHUB_CHORES_ASKPASS_TOKEN"


class GitHubTarget:
    """Wrapper around the GitHub API for a user or organization owner."""

    def __init__(
        self,
        config: GitHubConfig,
        org_name: Optional[str] = None,
        push_method: CloneMethod = CloneMethod.HTTPS,
    ) -> None:
        self.config = config
        self.org_name = org_name
        self.push_method = push_method
        self.api: Optional[github.Github] = None
        self.owner: Optional[Union["AuthenticatedUser", "Organization"]] = None
        self.rate_limiter = RateLimiter(
            max_requests_per_minute=50
        )  # GitHub's standard rate limit

    @property
    def owner_login(self) -> str:
        if self.owner is not None:
            return self.owner.login
        return self.org_name or ""

    def connect(self) -> None:
        Logger.info(f"init github API: {self.config.api_url}")
        if not self.config.token:
            Logger.error("github token not provided (use --token or GITHUB_TOKEN)")
            sys.exit(EXIT_AUTH_ERROR)
        try:
            auth = github.Auth.Token(self.config.token)
            if self.config.api_url.rstrip("/") != DEFAULT_API_URL:
                self.api = github.Github(base_url=self.config.api_url, auth=auth)
            else:
                self.api = github.Github(auth=auth)
            self.rate_limiter.wait_if_needed("GitHub API")
            if self.org_name:
                self.owner = self.api.get_organization(self.org_name)
            else:
                self.owner = self.api.get_user()
            Logger.debug(f"github owner: {self.owner.login}")
        except github.BadCredentialsException:
            Logger.error("authentication failed (github): invalid token")
            sys.exit(EXIT_AUTH_ERROR)
        except github.UnknownObjectException:
            Logger.error(
                f"not found (404): organization '{self.org_name}' does not "
                "exist or is not visible to this token"
            )
            sys.exit(EXIT_GITHUB_ERROR)
        except github.GithubException as e:
            Logger.error(f"github error: {e}")
            sys.exit(EXIT_GITHUB_ERROR)
        except Exception as e:
            Logger.error(f"failed to initialize github API: {e}")
            sys.exit(EXIT_GITHUB_ERROR)

    def _require_owner(self) -> Union["AuthenticatedUser", "Organization"]:
        if self.api is None or self.owner is None:
            Logger.error("github API not initialized")
            sys.exit(EXIT_GITHUB_ERROR)
        return self.owner

    def get_repo(self, name: str) -> Optional["Repository"]:
        """Return the owner's repository, or None if it does not exist."""
        owner = self._require_owner()
        try:
            self.rate_limiter.wait_if_needed("GitHub API")
            return owner.get_repo(name)
        except github.GithubException as e:
            if e.status == 404:
                return None
            Logger.error(f"failed to look up repo '{name}': {e}")
            sys.exit(EXIT_GITHUB_ERROR)

    def repo_exists(self, name: str) -> bool:
        return self.get_repo(name) is not None

    def create_repo(
        self, name: str, private: bool, description: Optional[str]
    ) -> "Repository":
        owner = self._require_owner()
        try:
            self.rate_limiter.wait_if_needed("GitHub API")
            repo = owner.create_repo(
                name=name,
                description=description or "",
                private=private,
                has_issues=True,
                has_projects=False,
                has_wiki=False,
                auto_init=False,
            )
            Logger.success(f"created repo: {self.owner_login}/{name}")
            return repo
        except github.GithubException as e:
            Logger.error(f"failed to create repo '{name}': {e}")
            sys.exit(EXIT_GITHUB_ERROR)

    def remote_url(self, name: str) -> str:
        """Get GitHub remote URL based on push method."""
        if self.push_method == CloneMethod.SSH:
            hostname = git_hostname(self.config.api_url)
            return f"git@{hostname}:{self.owner_login}/{name}.git"
        base_url = git_base_url(self.config.api_url).rstrip("/")
        return f"{base_url}/{self.owner_login}/{name}.git"

    @staticmethod
    def _create_askpass_script(username: str) -> str:
        """Create a temporary askpass script that reads the token from env."""
        fd, path = tempfile.mkstemp(prefix="ghc_askpass_", text=True)
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as script:
                script.write("#!/bin/sh\n")
                script.write("case \"$1\" in\n")
                script.write(f"  *Username*) echo '{username}' ;;\n")
                script.write(f"  *Password*) printf '%s\\n' \"${ASKPASS_TOKEN_ENV}\" ;;\n")
                script.write("  *) exit 1 ;;\n")
                script.write("esac\n")
            os.chmod(path, 0o700)
        except Exception:
            os.unlink(path)
            raise
        return path

    @staticmethod
    def _cleanup_askpass_script(path: Optional[str]) -> None:
        """Remove temporary askpass script if it exists."""
        if not path:
            return
        try:
            if os.path.exists(path):
                os.remove(path)
        except OSError as error:
            Logger.warn(
                f"failed to clean up temporary credential helper: {error}"
            )

    def push_project(self, project_dir: str, branch: str, remote: str = "origin") -> None:
        """Push ``branch`` to ``remote`` and set it as upstream."""
        Logger.info(f"pushing '{branch}' to GitHub: {self.owner_login}")
        env = os.environ.copy()
        env["GIT_TERMINAL_PROMPT"] = "0"
        askpass_script: Optional[str] = None
        try:
            if self.push_method == CloneMethod.HTTPS and self.config.token:
                askpass_script = self._create_askpass_script("x-access-token")
                env.update(
                    {
                        "GIT_ASKPASS": askpass_script,
                        ASKPASS_TOKEN_ENV: self.config.token,
                    }
                )
            subprocess.run(
                ["git", "push", "-u", remote, branch],
                cwd=project_dir,
                check=True,
                capture_output=True,
                text=True,
                env=env,
            )
            Logger.security_event(
                "GIT_PUSH_SUCCESS", f"successfully pushed branch {branch}"
            )
        except subprocess.CalledProcessError as e:
            Logger.security_event("GIT_PUSH_FAILED", f"git push failed for {branch}")
            safe_stderr = SecurityValidator.sanitize_for_logging(e.stderr or "")
            safe_stdout = SecurityValidator.sanitize_for_logging(e.stdout or "")
            raise subprocess.CalledProcessError(
                e.returncode, e.cmd, safe_stdout, safe_stderr
            )
        finally:
            self._cleanup_askpass_script(askpass_script)
