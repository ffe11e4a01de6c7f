"""
Per-repository synchronization for the gitbackup service.

:author: Christopher O'Brien <obriencj@preoccupied.net>
:license: GNU General Public License v3
"""

import logging
import subprocess
from enum import Enum
from typing import Iterable, List, Optional

from pydantic import BaseModel

from .config import BackupConfig
from .git import clone, pull
from .github import Repository
from .notify import slack
from .store import mirror_exists, mirror_path


logger = logging.getLogger(__name__)


class Outcome(str, Enum):
    """
    How a repository fared in one cycle
    """

    CLONED = 'cloned'
    UPDATED = 'updated'
    ALREADY_UP_TO_DATE = 'already-up-to-date'
    FAILED = 'failed'


class SyncResult(BaseModel):
    """
    What happened to one repository during a cycle
    """

    name: str
    path: str
    outcome: Outcome
    reason: Optional[str] = None


    @property
    def ok(self) -> bool:
        return self.outcome is not Outcome.FAILED


async def sync_repo(repo: Repository, config: BackupConfig) -> SyncResult:
    """
    Clone repo if there is nothing at its mirror path yet, otherwise pull
    the existing mirror. Failures are reported to the configured webhook
    and returned as a FAILED result rather than raised.
    """

    logger.info(f'{repo.name}: {repo.clone_url}')
    repo_dir = mirror_path(config.path, repo.name)

    if mirror_exists(repo_dir):
        action = 'updating'
        try:
            changed = await pull(repo_dir)
        except (subprocess.CalledProcessError, OSError) as e:
            error = e
        else:
            outcome = Outcome.UPDATED if changed else Outcome.ALREADY_UP_TO_DATE
            logger.info(f"Repository '{repo.name}' {outcome.value}")
            return SyncResult(name=repo.name, path=str(repo_dir), outcome=outcome)

    else:
        action = 'cloning'
        try:
            await clone(repo_dir, repo.clone_url)
        except (subprocess.CalledProcessError, OSError) as e:
            error = e
        else:
            logger.info(f"Repository '{repo.name}' cloned")
            return SyncResult(name=repo.name, path=str(repo_dir), outcome=Outcome.CLONED)

    msg = f'Error {action} repo {repo.name}: {error}'
    logger.error(msg)
    await slack(msg, config.slack_url, timeout=config.http_timeout)

    return SyncResult(name=repo.name, path=str(repo_dir),
                      outcome=Outcome.FAILED, reason=str(error))


async def sync_repos(repos: Iterable[Repository], config: BackupConfig) -> List[SyncResult]:
    """
    Sync each repository in turn, in the given order.
    """

    return [await sync_repo(repo, config) for repo in repos]


# The end.
