"""
git command wrappers for the gitbackup service.

:author: Christopher O'Brien <obriencj@preoccupied.net>
:license: GNU General Public License v3
"""

import asyncio
import logging
import os
import subprocess
import sys
from pathlib import Path
from typing import Dict, Optional, Union


logger = logging.getLogger(__name__)


class GitError(subprocess.CalledProcessError):
    """
    A git command exited with a non-zero status. The message carries the
    final error git wrote to stderr, rejoined when git wrapped it over
    several lines.
    """

    def __str__(self):
        msg = super().__str__()

        detail = self.stderr or b''
        if isinstance(detail, bytes):
            detail = detail.decode(errors='replace')

        lines = [line.strip() for line in detail.replace('\r', '\n').splitlines()]
        lines = [line for line in lines if line]
        if not lines:
            return msg

        start = len(lines) - 1
        for index, line in enumerate(lines):
            if line.startswith(('fatal:', 'error:')):
                start = index

        return f'{msg} {" ".join(lines[start:])}'


def _git_env(extra: Optional[Dict[str, str]] = None) -> Dict[str, str]:
    env = dict(os.environ)
    # never block waiting on a credential prompt
    env['GIT_TERMINAL_PROMPT'] = '0'
    if extra:
        env.update(extra)
    return env


async def _echo(stream: asyncio.StreamReader) -> bytes:
    captured = bytearray()
    while True:
        chunk = await stream.read(4096)
        if not chunk:
            break
        captured.extend(chunk)
        sys.stdout.write(chunk.decode(errors='replace'))
        sys.stdout.flush()
    return bytes(captured)


async def run(
        *args: str,
        cwd: str = None,
        env: Optional[Dict[str, str]] = None,
        progress: bool = False) -> str:
    """
    Run a command and return its stripped stdout. When progress is set,
    stderr is copied to our stdout as it arrives.
    """

    logger.debug(f'Running {args} in {cwd}')
    process = await asyncio.create_subprocess_exec(
        *args,
        cwd=cwd,
        env=_git_env(env),
        stdout=asyncio.subprocess.PIPE,
        stderr=asyncio.subprocess.PIPE
    )

    if progress:
        stdout, stderr = await asyncio.gather(process.stdout.read(), _echo(process.stderr))
    else:
        stdout, stderr = await process.communicate()

    returncode = await process.wait()
    if returncode != 0:
        raise GitError(returncode, args, output=stdout, stderr=stderr)

    return stdout.decode(errors='replace').strip()


async def open_worktree(repo_dir: Union[str, Path]) -> str:
    """
    Locate the working tree of the existing mirror at repo_dir. A plain
    directory nested inside some other checkout is not accepted.
    """

    repo_dir = os.path.abspath(repo_dir)
    return await run(
        'git', 'rev-parse', '--show-toplevel',
        cwd=repo_dir,
        env={'GIT_CEILING_DIRECTORIES': os.path.dirname(repo_dir)}
    )


async def head(worktree: str) -> Optional[str]:
    """
    The commit checked out in worktree, or None if the branch is unborn.
    """

    try:
        return await run('git', 'rev-parse', '--verify', '--quiet', 'HEAD', cwd=worktree)
    except GitError:
        return None


async def remote_heads(worktree: str) -> str:
    """
    The branches advertised by origin, empty when it has none.
    """

    return await run('git', 'ls-remote', '--heads', 'origin', cwd=worktree)


async def clone(repo_dir: Union[str, Path], git_url: str) -> None:
    """
    Make a full, non-bare clone of git_url at repo_dir.
    """

    logger.info(f'Cloning {git_url} to {repo_dir}')
    await run('git', 'clone', '--progress', git_url, str(repo_dir), progress=True)


async def pull(repo_dir: Union[str, Path]) -> bool:
    """
    Fast-forward the mirror at repo_dir to its upstream. Returns False if
    it was already up to date.
    """

    worktree = await open_worktree(repo_dir)
    logger.info(f'Pulling {worktree}')

    before = await head(worktree)
    if before is None and not await remote_heads(worktree):
        # upstream is still empty, nothing to fetch
        return False

    await run('git', 'pull', '--ff-only', cwd=worktree)
    after = await head(worktree)

    return before != after


# The end.
