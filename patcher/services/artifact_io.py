# coding=utf-8
# SPDX-License-Identifier: Apache-2.0
"""
Reading and writing the target artifact.
"""

import logging
import os
import tempfile
from pathlib import Path
from typing import Union

from ..errors import ArtifactUnreadable, ArtifactUnwritable

logger = logging.getLogger(__name__)

ENCODING = "utf-8"

PathLike = Union[str, Path]


def load_artifact(path: PathLike) -> str:
    """Read the artifact exactly as stored (no newline translation)."""
    path = Path(path)
    try:
        with open(path, "r", encoding=ENCODING, newline="") as f:
            data = f.read()
    except (OSError, UnicodeDecodeError) as e:
        raise ArtifactUnreadable(path, str(e)) from e
    logger.debug(f"Loaded {path} ({len(data)} chars)")
    return data


def save_artifact(path: PathLike, buffer: str) -> None:
    """
    Replace the artifact with ``buffer``.

    The new content is written to a temporary file in the same directory and
    moved over the target, so the target is never left half-written.
    """
    path = Path(path)
    tmp_name = None
    try:
        fd, tmp_name = tempfile.mkstemp(prefix=f".{path.name}.", dir=path.parent)
        with os.fdopen(fd, "w", encoding=ENCODING, newline="") as f:
            f.write(buffer)
        if path.exists():
            os.chmod(tmp_name, path.stat().st_mode & 0o7777)
        os.replace(tmp_name, path)
    except OSError as e:
        if tmp_name is not None and os.path.exists(tmp_name):
            os.unlink(tmp_name)
        raise ArtifactUnwritable(path, str(e)) from e
    logger.info(f"Wrote {path}")


def write_if_changed(path: PathLike, original: str, patched: str) -> bool:
    """Save ``patched`` only if it differs from ``original``. Returns True if written."""
    if patched == original:
        logger.debug(f"{path} unchanged; not writing")
        return False
    save_artifact(path, patched)
    return True
