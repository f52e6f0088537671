# coding=utf-8
# SPDX-License-Identifier: Apache-2.0
"""
Pydantic models for patch descriptors and the results of a patch run.
"""

from enum import Enum
from typing import FrozenSet, Iterable, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ..errors import PatchCountMismatch, PatchFailed, PatchMultiplyMatched, PatchNotFound
from ..platforms import EffectivePlatform, normalize_platform


class PatchDescriptor(BaseModel):
    """
    One named, exact-text substitution.

    Matching is literal substring matching; every occurrence of ``search`` is
    replaced with ``replace``. Descriptors are evaluated in list order.
    """

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., min_length=1, description="Unique, human-readable patch name")
    search: str = Field(..., min_length=1, description="Exact text to look for")
    replace: str = Field(..., description="Exact text substituted for every occurrence of search")
    platforms: Optional[FrozenSet[str]] = Field(
        None,
        description="Platforms this patch applies to; None means all platforms",
    )
    expected_count: Optional[int] = Field(
        None,
        ge=1,
        description="If set, the exact number of occurrences the search text must have",
    )

    @field_validator("platforms", mode="before")
    @classmethod
    def _normalize_platforms(cls, value: Union[None, str, Iterable[str]]):
        if value is None:
            return None
        if isinstance(value, str):
            value = [value]
        tokens = frozenset(normalize_platform(v) for v in value if v and v.strip())
        return tokens or None

    @property
    def restricted(self) -> bool:
        return bool(self.platforms) and "all" not in self.platforms


class OutcomeStatus(str, Enum):
    APPLIED = "applied"
    SKIPPED_PLATFORM = "skipped_platform"
    ALREADY_APPLIED = "already_applied"
    FAILED = "failed"


class FailureReason(str, Enum):
    NOT_FOUND = "not_found"
    COUNT_MISMATCH = "count_mismatch"
    MULTIPLY_MATCHED = "multiply_matched"


_FAILURE_ERRORS = {
    FailureReason.NOT_FOUND: PatchNotFound,
    FailureReason.COUNT_MISMATCH: PatchCountMismatch,
    FailureReason.MULTIPLY_MATCHED: PatchMultiplyMatched,
}


class PatchOutcome(BaseModel):
    """What happened to a single descriptor during a run."""

    model_config = ConfigDict(frozen=True)

    name: str
    status: OutcomeStatus
    occurrences: int = Field(0, description="Number of occurrences replaced")
    reason: Optional[FailureReason] = None
    message: Optional[str] = None

    @property
    def multiply_matched(self) -> bool:
        return self.status == OutcomeStatus.APPLIED and self.occurrences > 1

    def to_error(self) -> PatchFailed:
        error_cls = _FAILURE_ERRORS.get(self.reason, PatchFailed)
        return error_cls(self.name, self.message or f"Patch {self.name!r} failed")


class PatchRun(BaseModel):
    """Final buffer and ordered outcomes of one engine run."""

    original: str
    buffer: str
    platform: EffectivePlatform
    outcomes: List[PatchOutcome] = Field(default_factory=list)

    @property
    def failed(self) -> Optional[PatchOutcome]:
        for outcome in self.outcomes:
            if outcome.status == OutcomeStatus.FAILED:
                return outcome
        return None

    @property
    def changed(self) -> bool:
        return self.failed is None and self.buffer != self.original

    def names(self, status: OutcomeStatus) -> List[str]:
        return [o.name for o in self.outcomes if o.status == status]

    @property
    def applied(self) -> List[str]:
        return self.names(OutcomeStatus.APPLIED)

    @property
    def skipped(self) -> List[str]:
        return self.names(OutcomeStatus.SKIPPED_PLATFORM)

    @property
    def already_applied(self) -> List[str]:
        return self.names(OutcomeStatus.ALREADY_APPLIED)

    def raise_for_failure(self) -> None:
        """Raise the matching ``PatchFailed`` subclass if any descriptor failed."""
        failed = self.failed
        if failed is not None:
            raise failed.to_error()
