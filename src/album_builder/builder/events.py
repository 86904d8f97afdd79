"""
Module: builder.events

Purpose:
    Status events and cancellation for the export pipeline. The pipeline
    never touches UI state; it reports phase changes to a callback and the
    caller decides how to render them (disable buttons, print progress).

Key Functions:
    - format_progress(): "<percent>% (<done>/<total> pages)" text
    - progress_percent(): Rounded completion percentage

Key Classes:
    - Phase: Lifecycle phase of a generation run
    - StatusEvent: One reported status change
    - CancelToken: Cooperative cancellation flag

Dependencies:
    - threading (std): Event backing the cancel token

Used By:
    - builder.controller: Emits events, checks the token
    - builder.output.compositor: Checks the token between tiles
    - album_builder.cli: Prints progress
"""

from __future__ import annotations

import math
import threading
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Optional

from .errors import GenerationCancelled


class Phase(str, Enum):
    """Lifecycle phase of a generation run."""
    STARTED = "started"              # Controls must be disabled
    PAGE_COMPLETE = "page_complete"  # One page composed and captured
    COMPLETE = "complete"            # Artifact ready; controls re-enabled
    ABORTED = "aborted"              # Run failed; controls re-enabled

    def __str__(self) -> str:
        return self.value

    @property
    def is_terminal(self) -> bool:
        """True for phases after which the run is over."""
        return self in (Phase.COMPLETE, Phase.ABORTED)


@dataclass(frozen=True)
class StatusEvent:
    """
    One status change reported by the export pipeline.

    Attributes:
        phase: Lifecycle phase
        page_index: 0-based index of the page just completed (PAGE_COMPLETE only)
        page_count: Number of planned pages
        error: The exception that ended the run (ABORTED only)
    """
    phase: Phase
    page_index: Optional[int] = None
    page_count: int = 0
    error: Optional[BaseException] = None

    @property
    def pages_done(self) -> int:
        """Number of pages completed when this event was emitted."""
        if self.page_index is None:
            return self.page_count if self.phase is Phase.COMPLETE else 0
        return self.page_index + 1

    @property
    def percent(self) -> int:
        """Rounded completion percentage."""
        return progress_percent(self.pages_done, self.page_count)


EventCallback = Callable[[StatusEvent], None]


def progress_percent(done: int, total: int) -> int:
    """
    Completion percentage rounded half-up.

    Example:
        >>> progress_percent(1, 8)
        13
    """
    if total <= 0:
        return 0
    return math.floor(100 * done / total + 0.5)


def format_progress(event: StatusEvent) -> str:
    """
    Render an event as the progress text shown to users.

    Example:
        >>> format_progress(StatusEvent(Phase.PAGE_COMPLETE, page_index=1, page_count=4))
        '50% (2/4 pages)'
    """
    if event.phase is Phase.COMPLETE:
        return "done"
    if event.phase is Phase.ABORTED:
        return f"aborted: {event.error}"
    return f"{event.percent}% ({event.pages_done}/{event.page_count} pages)"


class CancelToken:
    """
    Cooperative cancellation flag checked between pages and tiles.

    Example:
        >>> token = CancelToken()
        >>> token.cancel()
        >>> token.cancelled
        True
    """

    def __init__(self) -> None:
        self._event = threading.Event()

    def cancel(self) -> None:
        """Request cancellation; the run stops at its next check."""
        self._event.set()

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()

    def raise_if_cancelled(self) -> None:
        """Raise GenerationCancelled if cancellation was requested."""
        if self._event.is_set():
            raise GenerationCancelled("Album generation was cancelled")
