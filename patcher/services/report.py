# coding=utf-8
# SPDX-License-Identifier: Apache-2.0
"""
Human-readable account of a patch run.
"""

from typing import Iterable, List

from ..structures.schemas import OutcomeStatus, PatchOutcome, PatchRun

EXIT_OK = 0
EXIT_PATCH_FAILED = 1
EXIT_ERROR = 2


def _plural(count: int, noun: str = "patch") -> str:
    return f"{count} {noun}" if count == 1 else f"{count} {noun}es"


def format_report(run: PatchRun, *, check: bool = False) -> List[str]:
    """
    Render the success summary of a run, in descriptor order.

    Args:
        run: Completed (non-failed) run
        check: Word the summary as a dry run

    Returns:
        Lines without trailing newlines
    """
    lines: List[str] = []
    applied = [o for o in run.outcomes if o.status == OutcomeStatus.APPLIED]

    if not run.changed:
        lines.append("No changes made (patches may have already been applied)")
    elif check:
        lines.append(f"Would apply {_plural(len(applied))}:")
    else:
        lines.append(f"Successfully applied {_plural(len(applied))}:")

    for outcome in applied:
        line = f"  DONE  {outcome.name}"
        if outcome.multiply_matched:
            line += f" (found {outcome.occurrences} times, replaced all)"
        lines.append(line)

    skipped = run.skipped
    if skipped:
        lines.append(f"Skipped {_plural(len(skipped))} not applicable to platform '{run.platform}':")
        lines.extend(f"  SKIP  {name}" for name in skipped)

    already = run.already_applied
    if already:
        lines.append(f"Already applied {_plural(len(already))}:")
        lines.extend(f"  OK    {name}" for name in already)

    return lines


def format_failure(outcome: PatchOutcome) -> List[str]:
    """Render a failed outcome as an error block."""
    message = outcome.message or f'PATCH FAILED: "{outcome.name}"'
    return [f"  FAIL  {outcome.name}"] + message.splitlines()


def exit_code(outcomes: Iterable[PatchOutcome]) -> int:
    """Process exit status: non-zero iff any descriptor failed."""
    if any(o.status == OutcomeStatus.FAILED for o in outcomes):
        return EXIT_PATCH_FAILED
    return EXIT_OK
