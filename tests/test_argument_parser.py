"""Tests for command line parsing and validation."""

from __future__ import annotations

import os
from pathlib import Path

import pytest

from argument_parser import (EXIT_AUTH_ERROR, EXIT_INVALID_ARGUMENTS,
                             parse_clone_arguments, parse_publish_arguments)
from config import DEFAULT_API_URL, CloneMethod, Visibility


@pytest.fixture(autouse=True)
def clean_env(monkeypatch, tmp_path: Path):
    monkeypatch.delenv('GITHUB_TOKEN', raising=False)
    monkeypatch.delenv('GITHUB_API', raising=False)
    monkeypatch.setenv('HOME', str(tmp_path))


def test_missing_account_is_usage_error() -> None:
    with pytest.raises(SystemExit) as exc_info:
        parse_clone_arguments([])
    assert exc_info.value.code == 2


def test_help_exits_cleanly(capsys) -> None:
    with pytest.raises(SystemExit) as exc_info:
        parse_clone_arguments(['--help'])
    assert exc_info.value.code == 0
    assert 'GITHUB_TOKEN' in capsys.readouterr().out


@pytest.mark.parametrize('account', ['bad-', 'has_underscore', 'dot.name', 'a' * 40])
def test_invalid_account_is_rejected(account: str) -> None:
    with pytest.raises(SystemExit) as exc_info:
        parse_clone_arguments([account])
    assert exc_info.value.code == EXIT_INVALID_ARGUMENTS


def test_defaults(tmp_path: Path) -> None:
    cfg = parse_clone_arguments(['octocat'])

    assert cfg.account == 'octocat'
    assert cfg.target_dir == os.path.join(str(tmp_path), 'Downloads', 'GIT')
    assert cfg.github.api_url == DEFAULT_API_URL
    assert cfg.github.token is None
    assert cfg.clone_method == CloneMethod.HTTPS
    assert cfg.dry_run is False


def test_tilde_in_target_dir_is_expanded(tmp_path: Path) -> None:
    cfg = parse_clone_arguments(['microsoft', '~/my_repos'])
    assert cfg.target_dir == os.path.join(str(tmp_path), 'my_repos')


def test_environment_overrides(monkeypatch) -> None:
    monkeypatch.setenv('GITHUB_TOKEN', 'ghp_fromenv')
    monkeypatch.setenv('GITHUB_API', 'https://github.acme.com/api/v3/')

    cfg = parse_clone_arguments(['team', '--clone-method', 'ssh'])

    assert cfg.github.token == 'ghp_fromenv'
    assert cfg.github.api_url == 'https://github.acme.com/api/v3'
    assert cfg.clone_method == CloneMethod.SSH


def test_invalid_api_url_is_rejected() -> None:
    with pytest.raises(SystemExit) as exc_info:
        parse_clone_arguments(['octocat', '--api-url', 'ftp://example.com'])
    assert exc_info.value.code == EXIT_INVALID_ARGUMENTS


def test_publish_defaults_to_directory_name(monkeypatch, tmp_path: Path) -> None:
    project = tmp_path / 'my-project'
    project.mkdir()
    monkeypatch.setenv('GITHUB_TOKEN', 'ghp_token')

    cfg = parse_publish_arguments([str(project)])

    assert cfg.repo_name == 'my-project'
    assert cfg.project_dir == str(project)
    assert cfg.org is None
    assert cfg.visibility == Visibility.PRIVATE
    assert cfg.branch == 'main'
    assert cfg.push_method == CloneMethod.HTTPS


def test_publish_requires_token(tmp_path: Path) -> None:
    with pytest.raises(SystemExit) as exc_info:
        parse_publish_arguments([str(tmp_path)])
    assert exc_info.value.code == EXIT_AUTH_ERROR


def test_publish_dry_run_without_token(tmp_path: Path) -> None:
    cfg = parse_publish_arguments([str(tmp_path), '--name', 'demo', '--dry-run'])
    assert cfg.github.token is None
    assert cfg.dry_run is True


@pytest.mark.parametrize(
    'extra',
    [
        ['--name', '../escape'],
        ['--branch', 'bad..branch'],
        ['--org', 'org-'],
        ['--message', '   '],
    ],
)
def test_publish_rejects_invalid_inputs(tmp_path: Path, extra) -> None:
    project = tmp_path / 'demo'
    project.mkdir()
    with pytest.raises(SystemExit) as exc_info:
        parse_publish_arguments([str(project), '--token', 'ghp_x', *extra])
    assert exc_info.value.code == EXIT_INVALID_ARGUMENTS


def test_publish_missing_directory(tmp_path: Path) -> None:
    with pytest.raises(SystemExit) as exc_info:
        parse_publish_arguments([str(tmp_path / 'missing'), '--token', 'ghp_x'])
    assert exc_info.value.code == EXIT_INVALID_ARGUMENTS
