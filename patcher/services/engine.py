# coding=utf-8
# SPDX-License-Identifier: Apache-2.0
"""
Patch engine.

Applies an ordered list of descriptors to an in-memory buffer. Each descriptor
sees the buffer as left by the ones before it. The first descriptor whose text
cannot be found aborts the run and the buffer is discarded, so callers never
write a partially patched artifact.
"""

import logging
from typing import Iterable, List, Sequence

from ..config import PREVIEW_CHARS
from ..errors import DuplicatePatchName
from ..platforms import EffectivePlatform
from ..structures.schemas import (
    FailureReason,
    OutcomeStatus,
    PatchDescriptor,
    PatchOutcome,
    PatchRun,
)

logger = logging.getLogger(__name__)


def check_unique_names(descriptors: Iterable[PatchDescriptor]) -> None:
    """Raise DuplicatePatchName if two descriptors share a name."""
    seen = set()
    for descriptor in descriptors:
        if descriptor.name in seen:
            raise DuplicatePatchName(descriptor.name)
        seen.add(descriptor.name)


def preview(text: str, limit: int = PREVIEW_CHARS) -> str:
    if len(text) <= limit:
        return text
    return text[:limit] + "..."


def _substitute(buffer: str, search: str, replace: str) -> str:
    """
    Replace every pending occurrence of ``search``.

    When ``replace`` itself contains ``search`` (e.g. a guard prepended to a
    call), occurrences already inside a previous replacement are left alone.
    """
    if search not in replace:
        return buffer.replace(search, replace)
    return replace.join(piece.replace(search, replace) for piece in buffer.split(replace))


def _pending_count(buffer: str, search: str, replace: str) -> int:
    if search not in replace:
        return buffer.count(search)
    return sum(piece.count(search) for piece in buffer.split(replace))


def apply_patches(
    buffer: str,
    descriptors: Sequence[PatchDescriptor],
    platform: EffectivePlatform,
    *,
    strict_multiplicity: bool = False,
) -> PatchRun:
    """
    Apply descriptors to ``buffer`` in declared order.

    Args:
        buffer: Full text of the artifact
        descriptors: Ordered descriptors; names must be unique
        platform: Resolved platform for applicability checks
        strict_multiplicity: Fail on multiple occurrences instead of warning

    Returns:
        PatchRun with the final buffer and one outcome per evaluated
        descriptor. On failure the buffer equals the input.
    """
    check_unique_names(descriptors)

    original = buffer
    outcomes: List[PatchOutcome] = []

    def fail(descriptor: PatchDescriptor, reason: FailureReason, message: str) -> PatchRun:
        logger.debug(message)
        outcomes.append(
            PatchOutcome(
                name=descriptor.name,
                status=OutcomeStatus.FAILED,
                reason=reason,
                message=message,
            )
        )
        return PatchRun(original=original, buffer=original, platform=platform, outcomes=outcomes)

    for descriptor in descriptors:
        name = descriptor.name

        if not platform.matches(descriptor.platforms):
            logger.info(f"Skipping {name!r}: not for platform {platform}")
            outcomes.append(PatchOutcome(name=name, status=OutcomeStatus.SKIPPED_PLATFORM))
            continue

        count = _pending_count(buffer, descriptor.search, descriptor.replace)

        if count == 0:
            if descriptor.replace in buffer:
                logger.info(f"Patch {name!r} already applied")
                outcomes.append(PatchOutcome(name=name, status=OutcomeStatus.ALREADY_APPLIED))
                continue
            return fail(
                descriptor,
                FailureReason.NOT_FOUND,
                f'PATCH FAILED: "{name}" - search string not found\n'
                f"  Looking for: {preview(descriptor.search)}",
            )

        if descriptor.expected_count is not None and count != descriptor.expected_count:
            return fail(
                descriptor,
                FailureReason.COUNT_MISMATCH,
                f'PATCH FAILED: "{name}" - expected {descriptor.expected_count} '
                f"occurrence(s), found {count}\n"
                f"  Looking for: {preview(descriptor.search)}",
            )

        if count > 1 and descriptor.expected_count is None:
            if strict_multiplicity:
                return fail(
                    descriptor,
                    FailureReason.MULTIPLY_MATCHED,
                    f'PATCH FAILED: "{name}" - search string found {count} times\n'
                    f"  Looking for: {preview(descriptor.search)}",
                )
            logger.warning(f'PATCH WARNING: "{name}" - search string found {count} times, replacing all')

        buffer = _substitute(buffer, descriptor.search, descriptor.replace)
        logger.debug(f"Applied {name!r} ({count} occurrence(s))")
        outcomes.append(PatchOutcome(name=name, status=OutcomeStatus.APPLIED, occurrences=count))

    return PatchRun(original=original, buffer=buffer, platform=platform, outcomes=outcomes)
