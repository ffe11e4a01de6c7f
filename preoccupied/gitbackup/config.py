"""
Configuration model and loading for the gitbackup service.

Settings are layered: built-in defaults, then the YAML config file, then
GITBACKUP_* environment variables, then explicit overrides (normally the
command line). The result is frozen and never changes while running.

:author: Christopher O'Brien <obriencj@preoccupied.net>
:license: GNU General Public License v3
"""

import getpass
import logging
import os
from typing import Any, Dict, Optional

import yaml
from pydantic import BaseModel, Field, field_validator

from .github import GITHUB_API_URL


logger = logging.getLogger(__name__)


DEFAULT_CONFIG_PATH = '/config/config.yaml'


def current_user() -> str:
    """
    Name of the user running this process, or an empty string if that
    cannot be determined.
    """

    try:
        return getpass.getuser()
    except (KeyError, OSError, ImportError):
        return ''


class BackupConfig(BaseModel):
    """
    Process-wide settings
    """

    model_config = {'frozen': True}

    path: str = 'repos'
    github_user: str = Field(default_factory=current_user)
    slack_url: str = ''
    github_api_url: str = GITHUB_API_URL
    http_timeout: Optional[float] = 30.0


    @field_validator('github_user', 'slack_url', mode='before')
    def none_as_empty(cls, v: Any) -> Any:
        """
        A null value in the config file means the empty string.
        """

        return '' if v is None else v


def _config_from_env() -> Dict[str, Any]:
    """
    Build configuration dictionary from GITBACKUP_* environment variables.
    """

    pairs = (
        ('GITBACKUP_PATH', 'path'),
        ('GITBACKUP_GITHUB_USER', 'github_user'),
        ('GITBACKUP_SLACK_URL', 'slack_url'),
        ('GITBACKUP_GITHUB_API_URL', 'github_api_url'),
        ('GITBACKUP_HTTP_TIMEOUT', 'http_timeout'))

    result = {}
    for env_var, config_key in pairs:
        value = os.environ.get(env_var)
        if value is not None:
            result[config_key] = value
    return result


def _config_from_file(config_path: str) -> Dict[str, Any]:
    """
    Load the YAML mapping at config_path. An empty file is an empty
    mapping.
    """

    with open(config_path, 'r') as f:
        config_data = yaml.safe_load(f)

    if config_data is None:
        return {}

    if not isinstance(config_data, dict):
        raise ValueError(f'Config file {config_path} must contain a mapping')

    return config_data


def load_config(config_path: Optional[str] = None, **overrides: Any) -> BackupConfig:
    """
    Assemble the configuration. Overrides whose value is None are ignored,
    so unset command line options fall through to lower layers.
    """

    if config_path is None:
        config_path = os.environ.get('CONFIG_PATH', DEFAULT_CONFIG_PATH)

    if os.path.exists(config_path):
        config_data = _config_from_file(config_path)
        logger.debug(f'Read configuration from {config_path}')
    else:
        config_data = {}

    config_data.update(_config_from_env())
    config_data.update((k, v) for k, v in overrides.items() if v is not None)

    config = BackupConfig.model_validate(config_data)
    logger.info(f'Mirroring repositories of {config.github_user!r} into {config.path}')

    return config


# The end.
