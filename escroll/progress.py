"""Remaining-time estimates for a scroll session."""

from .models import ProgressSnapshot


def split_duration(ms: int) -> tuple[int, int, int]:
    """Hours, minutes and seconds in ``ms``, truncated."""
    hours = ms // 1000 // 60 // 60
    minutes = (ms // 1000 // 60) % 60
    seconds = (ms // 1000) % 60
    return hours, minutes, seconds


def format_duration(ms: int) -> str:
    hours, minutes, seconds = split_duration(ms)
    return f"{hours}h:{minutes}m:{seconds}s"


def estimate_progress(elapsed_ms: int, completed: int, total: int) -> ProgressSnapshot:
    """Extrapolate the remaining time from the average time per page so far.

    Once more pages than expected have been fetched the estimate is 0.
    """
    if completed <= 0:
        raise ValueError("completed must be positive")
    remaining = int((elapsed_ms / completed) * (total - completed))
    return ProgressSnapshot(
        completed=completed,
        total=total,
        elapsed_ms=elapsed_ms,
        remaining_ms=max(remaining, 0),
    )
