"""Single-file JSON document store.

Layout::

    {
      "roadmaps": [ {...}, ... ],
      "roadmapNotes": [ {...}, ... ]
    }

Every write reads the whole document, replaces one collection and writes
the document back atomically (see :func:`safe_write_text`).  There is no
locking: two writers racing on the same file lose one of the updates.
"""

from __future__ import annotations

import asyncio
import json
import logging
from pathlib import Path
from typing import Any

from roadmap_planning.core.errors import DocumentStoreError
from roadmap_planning.core.file_io import read_text_if_exists, safe_write_text

logger = logging.getLogger(__name__)

ROADMAPS_COLLECTION = "roadmaps"
NOTES_COLLECTION = "roadmapNotes"


class JsonDocumentStore:
    """Reads and writes named collections of raw JSON records.

    Missing files and missing collections read as empty.  A file that is
    not UTF-8 JSON, or not shaped as an object of lists, raises
    :class:`DocumentStoreError`.  ``OSError`` propagates unchanged.
    """

    def __init__(self, path: str | Path) -> None:
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    async def read_document(self) -> dict[str, Any]:
        try:
            text = await asyncio.to_thread(read_text_if_exists, self._path)
        except UnicodeDecodeError as exc:
            raise DocumentStoreError(
                f"Document {self._path} is not valid UTF-8: {exc}"
            ) from exc
        if text is None or not text.strip():
            return {}
        try:
            document = json.loads(text)
        except json.JSONDecodeError as exc:
            raise DocumentStoreError(
                f"Cannot parse document {self._path}: {exc}"
            ) from exc
        if not isinstance(document, dict):
            raise DocumentStoreError(
                f"Document {self._path} must be a JSON object, "
                f"got {type(document).__name__}"
            )
        return document

    async def read_collection(self, name: str) -> list[dict[str, Any]]:
        document = await self.read_document()
        records = document.get(name) or []
        if not isinstance(records, list):
            raise DocumentStoreError(
                f"Collection {name!r} in {self._path} must be a list"
            )
        return records

    async def write_collection(
        self, name: str, records: list[dict[str, Any]]
    ) -> None:
        """Replace collection *name*, keeping every other collection."""
        document = await self.read_document()
        document[name] = records
        await asyncio.to_thread(
            safe_write_text, self._path, json.dumps(document, indent=2)
        )
        logger.debug(
            "Wrote %d record(s) to collection %s in %s",
            len(records),
            name,
            self._path,
        )
