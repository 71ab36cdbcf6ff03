#!/usr/bin/env python3
"""Command line argument parsing and configuration building."""

from __future__ import annotations

import argparse
import os
import sys
from typing import NoReturn, Optional, Sequence

from config import (DEFAULT_API_URL, DEFAULT_TARGET_DIR, ENV_API_URL,
                    ENV_TOKEN, CloneAllConfig, CloneMethod, GitHubConfig,
                    PublishConfig, Visibility)
from logging_utils import Logger
from security import SecurityValidator

# Exit codes
EXIT_AUTH_ERROR = 40
EXIT_INVALID_ARGUMENTS = 2


def _add_github_arguments(parser: argparse.ArgumentParser) -> None:
    """Add GitHub API access arguments to parser."""
    parser.add_argument(
        "--api-url",
        dest="api_url",
        default=os.getenv(ENV_API_URL) or DEFAULT_API_URL,
        help=f"Base URL of the GitHub API (or set {ENV_API_URL} env var; "
        f"default: {DEFAULT_API_URL})",
    )
    parser.add_argument(
        "--token",
        dest="token",
        help=f"GitHub API token (or set {ENV_TOKEN} env var)",
    )


def _create_clone_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Clone all public repositories of a GitHub user or organization",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=f"""
Examples:
  %(prog)s octocat
  %(prog)s microsoft ~/my_repos
  %(prog)s octocat --clone-method ssh --dry-run

Environment variables:
  {ENV_TOKEN}   GitHub token for increased API rate limits (optional)
  {ENV_API_URL}     Custom GitHub API URL for Enterprise (optional)

Repositories that already exist in the target directory are skipped,
so re-running resumes an interrupted clone.
        """,
    )
    parser.add_argument(
        "account",
        help="GitHub username or organization name",
    )
    parser.add_argument(
        "target_dir",
        nargs="?",
        default=DEFAULT_TARGET_DIR,
        help=f"Target directory (default: {DEFAULT_TARGET_DIR})",
    )
    _add_github_arguments(parser)
    parser.add_argument(
        "--clone-method",
        dest="clone_method",
        choices=[method.value for method in CloneMethod],
        default=CloneMethod.HTTPS.value,
        help="Clone over https or ssh (default: https)",
    )
    parser.add_argument(
        "-d",
        "--dry-run",
        action="store_true",
        dest="dry_run",
        help="List repositories that would be cloned without cloning",
    )
    return parser


def _create_publish_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Create a GitHub repository and push a local project to it",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=f"""
Examples:
  %(prog)s
  %(prog)s ~/projects/demo --visibility public --description "Demo app"
  %(prog)s . --name demo --org my-org --push-method ssh

A token is required ({ENV_TOKEN} or --token). With --push-method https the
token is handed to git through a temporary askpass helper.
        """,
    )
    parser.add_argument(
        "project_dir",
        nargs="?",
        default=".",
        help="Local project directory (default: current directory)",
    )
    parser.add_argument(
        "--name",
        dest="repo_name",
        help="Repository name (default: project directory name)",
    )
    parser.add_argument(
        "--org",
        dest="org",
        help="Create the repository in this organization instead of your account",
    )
    parser.add_argument(
        "--visibility",
        dest="visibility",
        choices=[visibility.value for visibility in Visibility],
        default=Visibility.PRIVATE.value,
        help="Visibility of the created repository (default: private)",
    )
    parser.add_argument(
        "--description",
        dest="description",
        default="",
        help="Repository description",
    )
    parser.add_argument(
        "--branch",
        dest="branch",
        default="main",
        help="Branch to push (default: main)",
    )
    parser.add_argument(
        "-m",
        "--message",
        dest="commit_message",
        default="Initial commit",
        help="Commit message for pending changes (default: 'Initial commit')",
    )
    parser.add_argument(
        "--push-method",
        dest="push_method",
        choices=[method.value for method in CloneMethod],
        default=CloneMethod.HTTPS.value,
        help="Push over https (token) or ssh (key) (default: https)",
    )
    parser.add_argument(
        "--use-existing",
        action="store_true",
        dest="use_existing",
        help="Push to the repository if it already exists instead of failing",
    )
    parser.add_argument(
        "-d",
        "--dry-run",
        action="store_true",
        dest="dry_run",
        help="Show what would be done without doing it",
    )
    _add_github_arguments(parser)
    return parser


def _fail_validation(error: ValueError) -> NoReturn:
    Logger.security_event(
        "CONFIG_VALIDATION_FAILED", f"configuration validation failed: {error}"
    )
    Logger.error(f"configuration validation error: {error}")
    sys.exit(EXIT_INVALID_ARGUMENTS)


def _get_token(args) -> Optional[str]:
    return args.token or os.getenv(ENV_TOKEN) or None


def _validate_api_url(api_url: str) -> str:
    # Enterprise installations may be served over plain http
    return SecurityValidator.validate_url(api_url, ["https", "http"]).rstrip("/")


def parse_clone_arguments(argv: Optional[Sequence[str]] = None) -> CloneAllConfig:
    """Parse clone-all-repos arguments and return configuration object."""
    parser = _create_clone_parser()
    args = parser.parse_args(argv)

    try:
        account = SecurityValidator.validate_account(args.account)
        target_dir = SecurityValidator.validate_directory(args.target_dir)
        api_url = _validate_api_url(args.api_url)
    except ValueError as e:
        _fail_validation(e)

    return CloneAllConfig(
        github=GitHubConfig(api_url=api_url, token=_get_token(args)),
        account=account,
        target_dir=target_dir,
        clone_method=CloneMethod(args.clone_method),
        dry_run=args.dry_run,
    )


def parse_publish_arguments(argv: Optional[Sequence[str]] = None) -> PublishConfig:
    """Parse publish-repo arguments and return configuration object."""
    parser = _create_publish_parser()
    args = parser.parse_args(argv)

    try:
        project_dir = SecurityValidator.validate_directory(args.project_dir)
        if not os.path.isdir(project_dir):
            raise ValueError(f"project directory does not exist: {project_dir}")
        repo_name = SecurityValidator.validate_repo_name(
            args.repo_name or os.path.basename(project_dir)
        )
        org = SecurityValidator.validate_account(args.org) if args.org else None
        branch = SecurityValidator.validate_branch(args.branch)
        api_url = _validate_api_url(args.api_url)
        if not args.commit_message.strip():
            raise ValueError("commit message must not be empty")
        if len(args.description) > 350:
            raise ValueError("description too long (max 350 characters)")
    except ValueError as e:
        _fail_validation(e)

    token = _get_token(args)
    if not token and not args.dry_run:
        Logger.error(f"error: github token not provided (use --token or {ENV_TOKEN})")
        sys.exit(EXIT_AUTH_ERROR)

    return PublishConfig(
        github=GitHubConfig(api_url=api_url, token=token),
        project_dir=project_dir,
        repo_name=repo_name,
        org=org,
        visibility=Visibility(args.visibility),
        description=args.description,
        branch=branch,
        commit_message=args.commit_message,
        push_method=CloneMethod(args.push_method),
        use_existing=args.use_existing,
        dry_run=args.dry_run,
    )
