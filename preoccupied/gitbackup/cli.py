"""
Command line entry point for the gitbackup service.

:author: Christopher O'Brien <obriencj@preoccupied.net>
:license: GNU General Public License v3
"""

import asyncio
import logging
import sys
from argparse import ArgumentParser
from typing import List, Optional

import yaml
from pydantic import ValidationError

from .config import load_config
from .github import ListingFailed
from .scheduler import run_forever


logger = logging.getLogger(__name__)


def create_parser() -> ArgumentParser:
    parser = ArgumentParser(
        prog='gitbackup',
        description='Mirror every repository of a GitHub user to local disk, once a day')

    parser.add_argument('--config', metavar='FILE', default=None,
                        help='YAML configuration file')
    parser.add_argument('--path', metavar='DIR', default=None,
                        help='path to store repos (default: repos)')
    parser.add_argument('--github-user', metavar='USER', default=None,
                        help='github user to download repos (default: current user)')
    parser.add_argument('--slack-url', metavar='URL', default=None,
                        help='Slack webhook URL for failure reports')
    parser.add_argument('--once', action='store_true', default=False,
                        help='run a single cycle and exit')
    parser.add_argument('--verbose', '-v', action='store_true', default=False,
                        help='enable debug logging')

    return parser


def main(args: Optional[List[str]] = None) -> int:
    options = create_parser().parse_args(args)

    logging.basicConfig(level=logging.DEBUG if options.verbose else logging.INFO)

    try:
        config = load_config(
            options.config,
            path=options.path,
            github_user=options.github_user,
            slack_url=options.slack_url)
    except (ValidationError, ValueError, OSError, yaml.YAMLError) as e:
        logger.error(f'Invalid configuration: {e}')
        return 2

    try:
        asyncio.run(run_forever(config, once=options.once))
    except ListingFailed:
        return 1

    return 0


if __name__ == '__main__':
    sys.exit(main())


# The end.
