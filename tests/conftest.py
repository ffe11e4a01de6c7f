"""
Shared pytest fixtures for gitbackup tests.

:author: Christopher O'Brien <obriencj@preoccupied.net>
:license: GNU General Public License v3
"""

import os
import tempfile

import pytest

from preoccupied.gitbackup.config import BackupConfig
from preoccupied.gitbackup.github import Repository


@pytest.fixture
def temp_dir():
    """
    Create a temporary directory for tests.
    """

    with tempfile.TemporaryDirectory() as tmpdir:
        yield tmpdir


@pytest.fixture
def backup_config(temp_dir):
    """
    A configuration storing mirrors under temp_dir, with notifications on.
    """

    return BackupConfig(
        path=os.path.join(temp_dir, 'repos'),
        github_user='octocat',
        slack_url='https://hooks.example/x',
        http_timeout=5.0
    )


@pytest.fixture
def quiet_config(temp_dir):
    """
    A configuration with no notification endpoint.
    """

    return BackupConfig(
        path=os.path.join(temp_dir, 'repos'),
        github_user='octocat',
        slack_url=''
    )


@pytest.fixture
def repos():
    """
    Two repository descriptors, A and B.
    """

    return [
        Repository(name='A', clone_url='https://github.com/octocat/A.git'),
        Repository(name='B', clone_url='https://github.com/octocat/B.git'),
    ]


@pytest.fixture
def mock_env_vars(monkeypatch, temp_dir):
    """
    Clear GITBACKUP_* environment variables and point CONFIG_PATH at a
    file that does not exist.
    """

    env_vars_to_clear = [
        'GITBACKUP_PATH',
        'GITBACKUP_GITHUB_USER',
        'GITBACKUP_SLACK_URL',
        'GITBACKUP_GITHUB_API_URL',
        'GITBACKUP_HTTP_TIMEOUT',
    ]

    for var in env_vars_to_clear:
        monkeypatch.delenv(var, raising=False)

    monkeypatch.setenv('CONFIG_PATH', os.path.join(temp_dir, 'missing.yaml'))

    return monkeypatch


# The end.
