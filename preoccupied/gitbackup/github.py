"""
GitHub repository listing for the gitbackup service.

:author: Christopher O'Brien <obriencj@preoccupied.net>
:license: GNU General Public License v3
"""

import logging
from typing import List, Optional

import httpx
from pydantic import BaseModel, Field


logger = logging.getLogger(__name__)


GITHUB_API_URL = 'https://api.github.com'

PER_PAGE = 100


class ListingFailed(Exception):
    """
    The repositories of an account could not be listed.
    """

    def __init__(self, user: str, cause: Exception):
        super().__init__(user, cause)
        self.user = user
        self.cause = cause


    def __str__(self):
        # some httpx errors, timeouts especially, carry no message
        return str(self.cause) or type(self.cause).__name__


class Repository(BaseModel):
    """
    A repository as reported by the listing service
    """

    model_config = {'frozen': True}

    name: str = Field(min_length=1)
    clone_url: str


async def github_repos(
        user: str,
        api_url: str = GITHUB_API_URL,
        timeout: Optional[float] = 30.0) -> List[Repository]:
    """
    List the public repositories owned by user, in the order GitHub
    returns them, following pagination to the last page.

    Raises ListingFailed for any transport, HTTP status, or payload error.
    """

    url = f'{api_url.rstrip("/")}/users/{user}/repos'
    params = {'per_page': PER_PAGE}
    headers = {'Accept': 'application/vnd.github+json'}

    repos = []

    try:
        async with httpx.AsyncClient(timeout=timeout, headers=headers) as client:
            while url:
                r = await client.get(url, params=params)
                r.raise_for_status()

                payload = r.json()
                if not isinstance(payload, list):
                    raise ValueError(f'Unexpected listing payload: {type(payload).__name__}')
                repos.extend(Repository.model_validate(item) for item in payload)

                # the next link already carries the query
                url = r.links.get('next', {}).get('url')
                params = None

    except (httpx.HTTPError, httpx.InvalidURL, ValueError) as e:
        raise ListingFailed(user, e) from e

    logger.debug(f'Listed {len(repos)} repositories for {user!r}')
    return repos


# The end.
