"""Tests for PublishOrchestrator with GitHub and git mocked."""

from __future__ import annotations

import subprocess
from pathlib import Path
from unittest.mock import MagicMock

from config import CloneMethod, GitHubConfig, PublishConfig, Visibility
from github_target import EXIT_GITHUB_ERROR
from publish_orchestrator import EXIT_GIT_ERROR, EXIT_SUCCESS, PublishOrchestrator


def _make_orchestrator(tmp_path: Path, **overrides) -> PublishOrchestrator:
    values = dict(
        github=GitHubConfig(api_url='https://api.github.com', token='ghp_token'),
        project_dir=str(tmp_path),
        repo_name='demo',
        org=None,
        visibility=Visibility.PRIVATE,
        description='Demo app',
        branch='main',
        commit_message='Initial commit',
        push_method=CloneMethod.HTTPS,
    )
    values.update(overrides)
    orchestrator = PublishOrchestrator(PublishConfig(**values))
    orchestrator.gh = MagicMock()
    orchestrator.gh.owner_login = 'octocat'
    orchestrator.gh.remote_url.return_value = 'https://github.com/octocat/demo.git'
    orchestrator.project = MagicMock()
    return orchestrator


def test_creates_repo_then_pushes(tmp_path: Path) -> None:
    orchestrator = _make_orchestrator(tmp_path)
    orchestrator.gh.repo_exists.return_value = False

    assert orchestrator.run() == EXIT_SUCCESS

    orchestrator.gh.connect.assert_called_once()
    orchestrator.gh.create_repo.assert_called_once_with(
        'demo', private=True, description='Demo app'
    )
    orchestrator.project.prepare.assert_called_once_with('main', 'Initial commit')
    orchestrator.project.ensure_remote.assert_called_once_with(
        'origin', 'https://github.com/octocat/demo.git'
    )
    orchestrator.gh.push_project.assert_called_once_with(str(tmp_path), 'main')


def test_existing_repo_fails_without_flag(tmp_path: Path) -> None:
    orchestrator = _make_orchestrator(tmp_path)
    orchestrator.gh.repo_exists.return_value = True

    assert orchestrator.run() == EXIT_GITHUB_ERROR

    orchestrator.gh.create_repo.assert_not_called()
    orchestrator.gh.push_project.assert_not_called()


def test_existing_repo_reused_with_flag(tmp_path: Path) -> None:
    orchestrator = _make_orchestrator(tmp_path, use_existing=True)
    orchestrator.gh.repo_exists.return_value = True

    assert orchestrator.run() == EXIT_SUCCESS

    orchestrator.gh.create_repo.assert_not_called()
    orchestrator.gh.push_project.assert_called_once()


def test_public_visibility(tmp_path: Path) -> None:
    orchestrator = _make_orchestrator(tmp_path, visibility=Visibility.PUBLIC)
    orchestrator.gh.repo_exists.return_value = False

    orchestrator.run()

    assert orchestrator.gh.create_repo.call_args.kwargs['private'] is False


def test_git_failure_maps_to_git_exit_code(tmp_path: Path) -> None:
    orchestrator = _make_orchestrator(tmp_path)
    orchestrator.gh.repo_exists.return_value = False
    orchestrator.gh.push_project.side_effect = subprocess.CalledProcessError(
        1, ['git', 'push', '-u', 'origin', 'main'], '', 'rejected'
    )

    assert orchestrator.run() == EXIT_GIT_ERROR


def test_dry_run_touches_nothing(tmp_path: Path) -> None:
    orchestrator = _make_orchestrator(tmp_path, dry_run=True)
    orchestrator.project.is_repository.return_value = False

    assert orchestrator.run() == EXIT_SUCCESS

    orchestrator.gh.connect.assert_not_called()
    orchestrator.project.prepare.assert_not_called()
    orchestrator.gh.push_project.assert_not_called()


def test_local_failure_leaves_no_remote_repo(tmp_path: Path) -> None:
    """A failing commit must stop the run before anything is created on GitHub."""
    orchestrator = _make_orchestrator(tmp_path)
    orchestrator.gh.repo_exists.return_value = False
    orchestrator.project.prepare.side_effect = subprocess.CalledProcessError(
        128, ['git', 'commit', '-m', 'Initial commit'], '', 'Author identity unknown'
    )

    assert orchestrator.run() == EXIT_GIT_ERROR

    orchestrator.gh.connect.assert_not_called()
    orchestrator.gh.create_repo.assert_not_called()
    orchestrator.gh.push_project.assert_not_called()


def test_project_prepared_before_repo_created(tmp_path: Path) -> None:
    orchestrator = _make_orchestrator(tmp_path)
    orchestrator.gh.repo_exists.return_value = False
    order = []
    orchestrator.project.prepare.side_effect = lambda *_a: order.append('prepare')
    orchestrator.gh.create_repo.side_effect = lambda *_a, **_kw: order.append('create')
    orchestrator.gh.push_project.side_effect = lambda *_a: order.append('push')

    assert orchestrator.run() == EXIT_SUCCESS

    assert order == ['prepare', 'create', 'push']
