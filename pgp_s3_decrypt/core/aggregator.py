"""Summarize per-object results."""

from typing import Sequence

from ..types import InvocationSummary, ProcessingResult, ProcessingStatus

NOTHING_TO_DO_MESSAGE = "No files found to decrypt"


def aggregate(results: Sequence[ProcessingResult]) -> InvocationSummary:
    """Count successes and failures. No I/O."""
    success_count = sum(1 for r in results if r.status is ProcessingStatus.SUCCESS)
    failure_count = len(results) - success_count

    if results:
        message = (
            f"Processed {len(results)} files. "
            f"Success: {success_count}, Failures: {failure_count}"
        )
    else:
        message = NOTHING_TO_DO_MESSAGE

    return InvocationSummary(
        total_count=len(results),
        success_count=success_count,
        failure_count=failure_count,
        message=message,
        results=list(results),
    )
