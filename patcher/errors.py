# coding=utf-8
# SPDX-License-Identifier: Apache-2.0
"""
Exceptions raised by the patcher.
"""

from pathlib import Path
from typing import Union


class PatcherError(Exception):
    """Base class for all patcher errors."""


class PatchFailed(PatcherError):
    """A descriptor could not be applied; the run was aborted."""

    def __init__(self, name: str, message: str):
        super().__init__(message)
        self.name = name
        self.message = message


class PatchNotFound(PatchFailed):
    """Neither the search text nor the replacement text is in the buffer."""


class PatchCountMismatch(PatchFailed):
    """The search text occurs a different number of times than declared."""


class PatchMultiplyMatched(PatchFailed):
    """The search text occurs more than once (fatal only in strict mode)."""


class DuplicatePatchName(PatcherError, ValueError):
    """Two descriptors in one list share a name."""

    def __init__(self, name: str):
        super().__init__(f"Duplicate patch name: {name!r}")
        self.name = name


class ArtifactError(PatcherError):
    """The target artifact could not be read or written."""

    def __init__(self, path: Union[str, Path], reason: str):
        super().__init__(f"{path}: {reason}")
        self.path = Path(path)
        self.reason = reason


class ArtifactUnreadable(ArtifactError):
    pass


class ArtifactUnwritable(ArtifactError):
    pass
