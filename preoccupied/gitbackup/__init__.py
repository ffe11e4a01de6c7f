"""
Periodic mirroring of a GitHub user's repositories with Slack failure
reports.

:author: Christopher O'Brien <obriencj@preoccupied.net>
:license: GNU General Public License v3
"""

from preoccupied.gitbackup.config import BackupConfig, load_config
from preoccupied.gitbackup.scheduler import SYNC_INTERVAL, run_cycle, run_forever
from preoccupied.gitbackup.sync import Outcome, SyncResult, sync_repo, sync_repos


__all__ = [
    'BackupConfig', 'load_config',
    'SYNC_INTERVAL', 'run_cycle', 'run_forever',
    'Outcome', 'SyncResult', 'sync_repo', 'sync_repos',
]


# The end.
