"""
Local mirror layout for the gitbackup service.

:author: Christopher O'Brien <obriencj@preoccupied.net>
:license: GNU General Public License v3
"""

import os
from pathlib import Path
from typing import Union


def mirror_path(base_path: Union[str, Path], name: str) -> Path:
    """
    The directory holding the mirror of the repository called name.
    """

    return Path(base_path) / name


def mirror_exists(path: Union[str, Path]) -> bool:
    """
    True if anything at all is present at path. The entry is not checked
    for being a git working copy.
    """

    try:
        os.stat(path)
    except FileNotFoundError:
        return False
    except OSError:
        # present, but unreadable
        return True
    return True


# The end.
