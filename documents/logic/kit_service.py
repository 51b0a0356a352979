"""
kit_service.py

Legal and technical documents of the kit. Uploads are simulated: a record
with a placeholder url is stored. Unit reports go through ReportService.
"""
from __future__ import annotations

from dataclasses import replace
from typing import List, Optional
from uuid import uuid4

from core.exceptions.errors import UnauthorizedError, ValidationFailedError
from core.logging.logic.logger import Logger, logger as default_logger
from core.models.user import ALL_SECTIONS, Scope, User, parse_scope
from core.policy.permission_policy import PermissionPolicy
from documents.enum.file_category import KIT_CATEGORIES, FileCategory
from documents.logic.document_repository import DocumentRepository
from documents.models.document import PedagogicalFile


class KitService:
    def __init__(
        self,
        documents: DocumentRepository,
        *,
        policy: Optional[PermissionPolicy] = None,
        audit: Optional[Logger] = None,
    ) -> None:
        self._repo = documents
        self._policy = policy or PermissionPolicy()
        self._audit = audit or default_logger

    @staticmethod
    def _require_kit_category(category: FileCategory) -> None:
        if category not in KIT_CATEGORIES:
            raise ValidationFailedError("Unit reports are handled by the report workflow")

    def list_files(
        self, actor: User, category: FileCategory, section_filter: Optional[Scope] = ALL_SECTIONS
    ) -> List[PedagogicalFile]:
        self._require_kit_category(category)
        return self._policy.visible_files(actor, self._repo.list_all(category), category, section_filter)

    def upload(
        self, actor: User, title: str, category: FileCategory, scope: Optional[Scope] = ALL_SECTIONS
    ) -> PedagogicalFile:
        self._require_kit_category(category)
        if not self._policy.can_upload_to_category(actor, category):
            raise UnauthorizedError()

        doc = PedagogicalFile(
            id=uuid4().hex,
            title=(title or "").strip(),
            category=category,
            scope=self._policy.upload_scope(actor, parse_scope(scope)),
            uploader_id=actor.id,
            uploader_name=actor.display_name,
        )
        self._repo.add(doc)
        self._audit.log(feature="Kit", event="FileUploaded", user_id=actor.id,
                        username=actor.username, reference_id=doc.id,
                        message=f"{category.name}: {doc.title}")
        return doc

    def update(self, actor: User, file_id: str, title: str, scope: Optional[Scope] = None) -> PedagogicalFile:
        """
        Rename a document and, for supervisors, move it to another scope.
        Without a scope the current one is kept.
        """
        doc = self._repo.require(file_id)
        self._require_kit_category(doc.category)
        if not self._policy.can_modify_file(actor, doc):
            raise UnauthorizedError()

        new_scope = doc.scope
        if self._policy.can_filter_by_section(actor) and scope is not None:
            new_scope = parse_scope(scope)
        elif actor.id == doc.uploader_id:
            new_scope = self._policy.upload_scope(actor, doc.scope)

        updated = replace(doc, title=(title or "").strip(), scope=new_scope)
        self._repo.replace(updated)
        self._audit.log(feature="Kit", event="FileUpdated", user_id=actor.id,
                        username=actor.username, reference_id=doc.id, message=updated.title)
        return updated

    def delete(self, actor: User, file_id: str) -> None:
        doc = self._repo.require(file_id)
        self._require_kit_category(doc.category)
        if not self._policy.can_modify_file(actor, doc):
            raise UnauthorizedError()
        self._repo.delete(file_id)
        self._audit.log(feature="Kit", event="FileDeleted", user_id=actor.id,
                        username=actor.username, reference_id=file_id, message=doc.title)
