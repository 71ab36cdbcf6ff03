"""Tests for LocalProject git preparation."""

from __future__ import annotations

import subprocess
from pathlib import Path
from unittest.mock import patch

from local_project import LocalProject


class FakeGit:
    """Scripted stand-in for ``git`` keyed on the subcommand arguments."""

    def __init__(self, responses=None):
        self.responses = responses or {}
        self.calls = []

    def __call__(self, cmd, **kwargs):
        args = tuple(cmd[1:])
        self.calls.append(args)
        returncode, stdout = self.responses.get(args, (0, ''))
        if kwargs.get('check') and returncode != 0:
            raise subprocess.CalledProcessError(returncode, cmd, stdout, '')
        return subprocess.CompletedProcess(cmd, returncode, stdout, '')


def test_prepare_fresh_directory(tmp_path: Path) -> None:
    fake = FakeGit(
        {
            ('symbolic-ref', '--short', 'HEAD'): (0, 'master\n'),
            ('rev-parse', '--verify', '--quiet', 'refs/heads/main'): (1, ''),
            ('status', '--porcelain'): (0, '?? README.md\n'),
        }
    )
    with patch('local_project.subprocess.run', side_effect=fake):
        LocalProject(str(tmp_path)).prepare('main', 'Initial commit')

    assert fake.calls[0] == ('init',)
    assert ('checkout', '-b', 'main') in fake.calls
    assert ('add', '-A') in fake.calls
    assert ('commit', '-m', 'Initial commit') in fake.calls


def test_prepare_existing_clean_repository(tmp_path: Path) -> None:
    (tmp_path / '.git').mkdir()
    fake = FakeGit({('symbolic-ref', '--short', 'HEAD'): (0, 'main\n')})
    with patch('local_project.subprocess.run', side_effect=fake):
        LocalProject(str(tmp_path)).prepare('main', 'Initial commit')

    assert ('init',) not in fake.calls
    assert not any(call[0] in ('checkout', 'add', 'commit') for call in fake.calls)


def test_empty_project_gets_empty_commit(tmp_path: Path) -> None:
    (tmp_path / '.git').mkdir()
    fake = FakeGit(
        {
            ('symbolic-ref', '--short', 'HEAD'): (0, 'main\n'),
            ('rev-parse', '--verify', '--quiet', 'HEAD'): (1, ''),
        }
    )
    with patch('local_project.subprocess.run', side_effect=fake):
        LocalProject(str(tmp_path)).prepare('main', 'Initial commit')

    assert ('commit', '--allow-empty', '-m', 'Initial commit') in fake.calls


def test_existing_branch_is_checked_out(tmp_path: Path) -> None:
    fake = FakeGit({('symbolic-ref', '--short', 'HEAD'): (0, 'dev\n')})
    with patch('local_project.subprocess.run', side_effect=fake):
        LocalProject(str(tmp_path)).ensure_branch('main')

    assert ('checkout', 'main') in fake.calls


def test_ensure_remote_adds_updates_or_keeps(tmp_path: Path) -> None:
    url = 'https://github.com/octocat/demo.git'
    project = LocalProject(str(tmp_path))

    missing = FakeGit({('remote', 'get-url', 'origin'): (2, '')})
    with patch('local_project.subprocess.run', side_effect=missing):
        project.ensure_remote('origin', url)
    assert ('remote', 'add', 'origin', url) in missing.calls

    stale = FakeGit({('remote', 'get-url', 'origin'): (0, 'git@github.com:old/demo.git\n')})
    with patch('local_project.subprocess.run', side_effect=stale):
        project.ensure_remote('origin', url)
    assert ('remote', 'set-url', 'origin', url) in stale.calls

    current = FakeGit({('remote', 'get-url', 'origin'): (0, url + '\n')})
    with patch('local_project.subprocess.run', side_effect=current):
        project.ensure_remote('origin', url)
    assert current.calls == [('remote', 'get-url', 'origin')]
