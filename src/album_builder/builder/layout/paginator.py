"""
Module: builder.layout.paginator

Purpose:
    Partition the input image sequence into pages.
    Pure function: slices are disjoint, ordered and together cover every
    input exactly once (batch mode) or the first page only (single mode).

Key Functions:
    - plan_pages(): Main pagination function

Dependencies:
    - builder.layout.models: PageSlice

Used By:
    - builder.controller: Export pipeline
"""

from __future__ import annotations

import logging
import math
from typing import Tuple

from .models import PageSlice

logger = logging.getLogger(__name__)


def plan_pages(
    total: int,
    max_per_page: int,
    single_page_only: bool = False,
) -> Tuple[PageSlice, ...]:
    """
    Plan which images go on which page.

    Rules:
    1. max_per_page == 0: nothing fits, no pages at all.
    2. Single-page mode: one page with the first min(total, max_per_page)
       images (an empty input still gets its numbered blank page).
    3. Batch mode: ceil(total / max_per_page) pages of max_per_page
       images, the last page holding the remainder.

    Args:
        total: Number of input images
        max_per_page: Tiles per page from the tile geometry
        single_page_only: Plan only the first page

    Returns:
        Tuple of PageSlices in page order

    Example:
        >>> [(p.start, p.stop) for p in plan_pages(13, 6)]
        [(0, 6), (6, 12), (12, 13)]
    """
    if max_per_page <= 0:
        return ()

    total = max(total, 0)
    if single_page_only:
        pages: Tuple[PageSlice, ...] = (PageSlice(0, 0, min(total, max_per_page)),)
    else:
        page_count = math.ceil(total / max_per_page)
        pages = tuple(
            PageSlice(
                index=i,
                start=i * max_per_page,
                stop=min((i + 1) * max_per_page, total),
            )
            for i in range(page_count)
        )

    logger.info(f"Paginated {total} images onto {len(pages)} pages")
    return pages
