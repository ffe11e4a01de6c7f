"""
Slack webhook notifications for the gitbackup service.

:author: Christopher O'Brien <obriencj@preoccupied.net>
:license: GNU General Public License v3
"""

import logging
from typing import Optional

import httpx


logger = logging.getLogger(__name__)


SLACK_USERNAME = 'GITBACKUP'


async def slack(message: str, url: str, timeout: Optional[float] = 30.0) -> None:
    """
    Post message to the Slack-compatible incoming webhook at url.

    Does nothing when url is empty. Delivery is best-effort: any failure
    is logged and never raised to the caller.
    """

    if not url:
        return

    payload = {
        'username': SLACK_USERNAME,
        'text': message,
    }

    try:
        async with httpx.AsyncClient(timeout=timeout) as client:
            r = await client.post(url, json=payload)
    except (httpx.HTTPError, httpx.InvalidURL, ValueError) as e:
        logger.error(f'Error sending slack notification: {e}')
        return

    if r.is_error:
        logger.warning(f'Slack webhook responded with {r.status_code}')


# The end.
