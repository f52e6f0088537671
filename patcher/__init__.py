# coding=utf-8
# SPDX-License-Identifier: Apache-2.0
"""
Post-build patcher for the Azeron Software main-process bundle.
"""

from .platforms import EffectivePlatform, resolve_platform
from .services.engine import apply_patches
from .structures.schemas import OutcomeStatus, PatchDescriptor, PatchOutcome, PatchRun

__version__ = "0.1.0"

__all__ = [
    "EffectivePlatform",
    "OutcomeStatus",
    "PatchDescriptor",
    "PatchOutcome",
    "PatchRun",
    "apply_patches",
    "resolve_platform",
]
