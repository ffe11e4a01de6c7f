"""
The periodic mirroring loop for the gitbackup service.

:author: Christopher O'Brien <obriencj@preoccupied.net>
:license: GNU General Public License v3
"""

import asyncio
import logging
from collections import Counter
from typing import List

from .config import BackupConfig
from .github import ListingFailed, github_repos
from .notify import slack
from .sync import SyncResult, sync_repos


logger = logging.getLogger(__name__)


SYNC_INTERVAL = 24 * 60 * 60  # one day


async def run_cycle(config: BackupConfig) -> List[SyncResult]:
    """
    List the account's repositories and sync every one of them. A listing
    failure is reported to the webhook and re-raised; nothing is synced.
    """

    try:
        repos = await github_repos(
            config.github_user,
            api_url=config.github_api_url,
            timeout=config.http_timeout)
    except ListingFailed as e:
        msg = f'Error getting repos for {config.github_user}: {e}'
        logger.error(msg)
        await slack(msg, config.slack_url, timeout=config.http_timeout)
        raise

    results = await sync_repos(repos, config)

    counts = Counter(result.outcome.value for result in results)
    summary = ', '.join(f'{count} {outcome}' for outcome, count in sorted(counts.items()))
    failed = [result.name for result in results if not result.ok]

    logger.info(f'Cycle finished for {len(results)} repositories ({summary or "none"})')
    if failed:
        logger.warning(f'Failed to sync: {", ".join(failed)}')

    return results


async def run_forever(
        config: BackupConfig,
        interval: float = SYNC_INTERVAL,
        once: bool = False) -> None:
    """
    Run a cycle, sleep for interval seconds, and repeat. Returns after the
    first cycle if once is set. ListingFailed ends the loop.
    """

    while True:
        await run_cycle(config)

        if once:
            return

        logger.info(f'Sleeping {interval} seconds until the next cycle')
        await asyncio.sleep(interval)


# The end.
