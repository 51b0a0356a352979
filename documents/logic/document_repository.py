"""
===============================================================================
Document Repository – kit files and unit reports
-------------------------------------------------------------------------------
Purpose:
    Read/replace access to the ``files`` collection for KitService and
    ReportService. No permission logic here.
===============================================================================
"""
from __future__ import annotations

import logging
from typing import List, Optional

from core.common.entity_store import FILES, EntityStore
from core.exceptions.errors import RecordNotFoundError, ScoutsError
from documents.enum.file_category import FileCategory
from documents.models.document import PedagogicalFile

log = logging.getLogger(__name__)


class DocumentRepository:
    """Repository for PedagogicalFile records."""

    def __init__(self, store: EntityStore) -> None:
        self._store = store

    def list_all(self, category: Optional[FileCategory] = None) -> List[PedagogicalFile]:
        files: List[PedagogicalFile] = []
        for record in self._store.get(FILES):
            try:
                doc = PedagogicalFile.from_record(record)
            except (ScoutsError, KeyError) as ex:
                log.warning("Skipping malformed file record %r: %s", record.get("id"), ex)
                continue
            if category is None or doc.category is category:
                files.append(doc)
        return files

    def get_by_id(self, file_id: str) -> Optional[PedagogicalFile]:
        return next((f for f in self.list_all() if f.id == file_id), None)

    def require(self, file_id: str) -> PedagogicalFile:
        doc = self.get_by_id(file_id)
        if doc is None:
            raise RecordNotFoundError("file", file_id)
        return doc

    def add(self, doc: PedagogicalFile) -> None:
        records = self._store.get(FILES)
        records.append(doc.to_record())
        self._store.set(FILES, records)

    def replace(self, doc: PedagogicalFile) -> None:
        records = self._store.get(FILES)
        for index, record in enumerate(records):
            if str(record.get("id")) == doc.id:
                records[index] = doc.to_record()
                self._store.set(FILES, records)
                return
        raise RecordNotFoundError("file", doc.id)

    def delete(self, file_id: str) -> bool:
        records = self._store.get(FILES)
        kept = [r for r in records if str(r.get("id")) != file_id]
        if len(kept) == len(records):
            return False
        self._store.set(FILES, kept)
        return True

    def count(self) -> int:
        return len(self._store.get(FILES))
