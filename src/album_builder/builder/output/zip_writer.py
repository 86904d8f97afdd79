"""
Module: builder.output.zip_writer

Purpose:
    Bundle composed pages into an in-memory ZIP archive.
    Entries are named page_<n>.png and stored in page order with a fixed
    timestamp, so identical pages always produce identical archive bytes.

Key Classes:
    - AlbumArchive: Incremental in-memory archive builder

Dependencies:
    - zipfile (std)
    - builder.output.compositor: RenderedPage

Used By:
    - builder.controller: Batch mode export
"""

from __future__ import annotations

import logging
import zipfile
from io import BytesIO
from typing import List

from .compositor import RenderedPage

logger = logging.getLogger(__name__)

ALBUM_ARCHIVE_NAME = "album.zip"

# Earliest timestamp ZIP can store; keeps output independent of wall time
_FIXED_DATE_TIME = (1980, 1, 1, 0, 0, 0)


class AlbumArchive:
    """
    In-memory archive of rendered pages.

    Pages are added one at a time as they are composed; nothing is
    finalized until finalize() is called. If the run aborts, discard()
    drops everything written so far.

    Example:
        >>> with AlbumArchive() as archive:
        ...     archive.add_page(page)
        ...     data = archive.finalize()
    """

    def __init__(self) -> None:
        self._buffer = BytesIO()
        self._zip = zipfile.ZipFile(self._buffer, "w", zipfile.ZIP_DEFLATED)
        self._names: List[str] = []
        self._finalized = False

    @property
    def names(self) -> List[str]:
        """Entry names written so far, in order."""
        return list(self._names)

    def add_page(self, page: RenderedPage) -> None:
        """
        Add one rendered page under its page_<n>.png name.

        Raises:
            ValueError: If the archive was already finalized or the name repeats
        """
        if self._finalized:
            raise ValueError("Cannot add pages to a finalized archive")
        if page.filename in self._names:
            raise ValueError(f"Duplicate archive entry: {page.filename}")

        info = zipfile.ZipInfo(page.filename, date_time=_FIXED_DATE_TIME)
        info.compress_type = zipfile.ZIP_DEFLATED
        info.external_attr = 0o644 << 16
        self._zip.writestr(info, page.data)
        self._names.append(page.filename)

    def finalize(self) -> bytes:
        """Close the archive and return its bytes."""
        if not self._finalized:
            self._zip.close()
            self._finalized = True
            logger.info(f"Finalized archive with {len(self._names)} pages")
        return self._buffer.getvalue()

    def discard(self) -> None:
        """Drop all written pages without producing an archive."""
        if not self._finalized:
            self._zip.close()
            self._finalized = True
        self._buffer = BytesIO()
        self._names.clear()

    def __enter__(self) -> AlbumArchive:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        if exc_type is not None:
            self.discard()
