"""
Whole-file JSON reads and writes for the data directory.
"""

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Any

from .error_handler import StorageReadError, StorageWriteError


logger = logging.getLogger(__name__)


def read_json(path: Path) -> Any:
    """
    Read and decode a JSON file.

    Raises:
        FileNotFoundError: If the file does not exist
        StorageReadError: If the file cannot be read or decoded
    """
    try:
        with open(path, 'r', encoding='utf-8') as jsonfile:
            return json.load(jsonfile)
    except FileNotFoundError:
        raise
    except (OSError, ValueError) as e:
        raise StorageReadError(f"Failed to read {path}: {e}", cause=e)


def write_json(path: Path, data: Any) -> None:
    """
    Write data as indented JSON, replacing the file in one step.

    The content goes to a temporary file in the same directory which is then
    moved over the target, so readers see either the old or the new file.

    Raises:
        StorageWriteError: If the file cannot be written
    """
    path = Path(path)
    tmp_name = None
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(
            prefix=f".{path.name}.", suffix='.tmp', dir=path.parent
        )
        with os.fdopen(fd, 'w', encoding='utf-8') as jsonfile:
            json.dump(data, jsonfile, indent=2, ensure_ascii=False)
        os.replace(tmp_name, path)
        tmp_name = None
    except (OSError, TypeError, ValueError) as e:
        logger.error(f"Failed to write {path}: {e}")
        raise StorageWriteError(f"Failed to write {path}: {e}", cause=e)
    finally:
        if tmp_name and os.path.exists(tmp_name):
            os.unlink(tmp_name)
