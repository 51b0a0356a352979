"""
report_service.py

Unit report workflow: submission by unit leaders, single-approver approval by
the commissioner of the report's section, role-dependent visibility and
deletion eligibility.

    leader submits  -> PENDING (scoped to the leader's section)
    commissioner    -> APPROVED (once; a second approval is refused)
    delete          -> author/commissioner while PENDING, admin always
"""
from __future__ import annotations

from dataclasses import replace
from typing import List, Optional
from uuid import uuid4

from core.exceptions.errors import (
    ReportAlreadyApprovedError,
    UnauthorizedError,
    ValidationFailedError,
)
from core.logging.logic.logger import Logger, logger as default_logger
from core.models.user import ALL_SECTIONS, Scope, User, UserRole
from core.policy.permission_policy import PermissionPolicy, is_supervisor, normalize_filter
from documents.enum.file_category import FileCategory
from documents.enum.report_action import ReportAction
from documents.enum.report_state import ReportState
from documents.logic.document_repository import DocumentRepository
from documents.models.document import PedagogicalFile
from documents.services.policy.workflow_policy import WorkflowPolicy


class ReportService:
    def __init__(
        self,
        documents: DocumentRepository,
        *,
        workflow: Optional[WorkflowPolicy] = None,
        policy: Optional[PermissionPolicy] = None,
        audit: Optional[Logger] = None,
    ) -> None:
        self._repo = documents
        self._workflow = workflow or WorkflowPolicy()
        self._policy = policy or PermissionPolicy()
        self._audit = audit or default_logger

    # ------------------------------------------------------------------ #
    # Decisions                                                          #
    # ------------------------------------------------------------------ #
    def can_approve(self, actor: User, report: PedagogicalFile) -> bool:
        return (
            actor.role is UserRole.COMMISSIONER
            and report.scope == actor.section
            and self._workflow.can_transition(report.report_state, ReportAction.APPROVE.value)
        )

    def can_delete(self, actor: User, report: PedagogicalFile) -> bool:
        if actor.role is UserRole.ADMIN:
            return True
        if report.is_approved:
            return False
        if actor.role is UserRole.UNIT_LEADER:
            return report.uploader_id == actor.id
        if actor.role is UserRole.COMMISSIONER:
            return report.scope == actor.section
        return False

    def visible_reports(self, actor: User, section_filter: Optional[Scope] = ALL_SECTIONS) -> List[PedagogicalFile]:
        """
        Leader: own reports, any state.
        Commissioner: reports of own section, any state.
        Admin/ProgramHead: approved reports only, optionally one section.
        """
        wanted = normalize_filter(section_filter)
        result: List[PedagogicalFile] = []
        for report in self._repo.list_all(FileCategory.UNIT_REPORT):
            if actor.role is UserRole.UNIT_LEADER:
                if report.uploader_id == actor.id:
                    result.append(report)
            elif actor.role is UserRole.COMMISSIONER:
                if report.scope == actor.section:
                    result.append(report)
            elif is_supervisor(actor) and report.is_approved:
                if wanted != ALL_SECTIONS and report.scope != wanted:
                    continue
                result.append(report)
        return result

    def pending_count(self, actor: User) -> int:
        return sum(1 for report in self.visible_reports(actor) if report.is_pending)

    # ------------------------------------------------------------------ #
    # Transitions                                                        #
    # ------------------------------------------------------------------ #
    def submit(self, actor: User, title: str) -> PedagogicalFile:
        if not self._policy.can_upload_to_category(actor, FileCategory.UNIT_REPORT):
            raise UnauthorizedError()
        if not (title or "").strip():
            raise ValidationFailedError("عنوان التقرير إجباري")

        state = self._workflow.next_state(ReportState.DRAFT, ReportAction.SUBMIT.value)
        report = PedagogicalFile(
            id=uuid4().hex,
            title=title.strip(),
            category=FileCategory.UNIT_REPORT,
            scope=self._policy.upload_scope(actor),
            uploader_id=actor.id,
            uploader_name=actor.unit_display_name,
            report_state=state,
        )
        self._repo.add(report)
        self._audit.log(feature="Reports", event="ReportSubmitted", user_id=actor.id,
                        username=actor.username, reference_id=report.id, message=report.title)
        return report

    def approve(self, actor: User, report_id: str) -> PedagogicalFile:
        report = self._require_report(report_id)
        if actor.role is not UserRole.COMMISSIONER or report.scope != actor.section:
            self._audit.log(feature="Reports", event="ApproveDenied", user_id=actor.id,
                            username=actor.username, reference_id=report_id, level="WARNING",
                            message=f"{actor.role.name} may not approve this report")
            raise UnauthorizedError()
        if report.is_approved:
            self._audit.log(feature="Reports", event="ApproveRejected", user_id=actor.id,
                            username=actor.username, reference_id=report_id, level="WARNING",
                            message="Report already approved")
            raise ReportAlreadyApprovedError(report_id)

        state = self._workflow.next_state(report.report_state, ReportAction.APPROVE.value)
        approved = replace(report, report_state=state)
        self._repo.replace(approved)
        self._audit.log(feature="Reports", event="ReportApproved", user_id=actor.id,
                        username=actor.username, reference_id=report_id, message=report.title)
        return approved

    def delete(self, actor: User, report_id: str) -> None:
        report = self._require_report(report_id)
        if not self.can_delete(actor, report):
            raise UnauthorizedError()
        self._repo.delete(report_id)
        self._audit.log(feature="Reports", event="ReportDeleted", user_id=actor.id,
                        username=actor.username, reference_id=report_id, message=report.title)

    def _require_report(self, report_id: str) -> PedagogicalFile:
        report = self._repo.require(report_id)
        if not report.is_report:
            raise ValidationFailedError("Not a unit report")
        return report
