"""
Helper functions for file and directory paths used in SecondHalf.
"""

import os
from pathlib import Path
from typing import Mapping, Union

from secondhalf.config import (
    DATA_DIR,
    ENV_HISTORY_PATH,
    LOCAL_STORAGE_FILENAME,
)


PathLike = Union[str, Path]


def get_local_storage_path(
    filename: str | None = None,
    environ: Mapping[str, str] | None = None,
) -> Path:
    """
    Return the path of the local storage file holding the prediction history.

    Parameters
    ----------
    filename : str | None
        Specific filename inside the data directory. If None, the
        ``SECONDHALF_HISTORY_PATH`` variable is honoured, then the default
        filename from config.
    environ : Mapping[str, str] | None
        Source of variables. Defaults to ``os.environ``.

    Returns
    -------
    Path
        Full path to the storage file.
    """
    if filename is not None:
        return DATA_DIR / filename

    env = os.environ if environ is None else environ
    override = env.get(ENV_HISTORY_PATH, "").strip()
    if override:
        return Path(override).expanduser()
    return DATA_DIR / LOCAL_STORAGE_FILENAME
