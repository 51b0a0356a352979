from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from core.exceptions.errors import ValidationFailedError
from core.helpers.date_time_helper import utc_now_iso
from core.models.user import ALL_SECTIONS, Scope, ScoutSection, parse_scope, scope_to_raw
from documents.enum.file_category import FileCategory
from documents.enum.report_state import ReportState


@dataclass(frozen=True, slots=True)
class PedagogicalFile:
    """
    A document of the kit or a unit report.

    Notes:
    - 'scope'         one ScoutSection or ALL_SECTIONS
    - 'report_state'  only for UNIT_REPORT documents, always None otherwise
    - 'url'           placeholder, uploads are simulated
    """

    id: str
    title: str
    category: FileCategory
    scope: Scope
    uploader_id: str
    uploader_name: str
    upload_date: str = field(default_factory=utc_now_iso)
    url: str = "#"
    report_state: Optional[ReportState] = None

    def __post_init__(self) -> None:
        if not self.title.strip():
            raise ValidationFailedError("عنوان الملف إجباري")
        if self.category.is_report and self.report_state is None:
            raise ValidationFailedError("Unit reports require a workflow state")
        if not self.category.is_report and self.report_state is not None:
            raise ValidationFailedError("Only unit reports carry a workflow state")
        if self.category.is_report and not isinstance(self.scope, ScoutSection):
            raise ValidationFailedError("Unit reports are scoped to one section")

    # Convenience flags ------------------------------------------------------
    @property
    def is_report(self) -> bool:
        return self.category.is_report

    @property
    def is_approved(self) -> bool:
        return self.report_state is ReportState.APPROVED

    @property
    def is_pending(self) -> bool:
        return self.report_state is ReportState.PENDING

    @property
    def is_global(self) -> bool:
        return self.scope == ALL_SECTIONS

    # Record mapping ---------------------------------------------------------
    def to_record(self) -> Dict[str, Any]:
        record: Dict[str, Any] = {
            "id": self.id,
            "title": self.title,
            "category": self.category.name,
            "section": scope_to_raw(self.scope),
            "uploaderId": self.uploader_id,
            "uploaderName": self.uploader_name,
            "uploadDate": self.upload_date,
            "url": self.url,
        }
        if self.report_state is not None:
            record["reportState"] = self.report_state.name
            record["isApproved"] = self.is_approved
        return record

    @classmethod
    def from_record(cls, record: Dict[str, Any]) -> "PedagogicalFile":
        category = FileCategory.parse(record.get("category"))
        state: Optional[ReportState] = None
        if category.is_report:
            raw_state = record.get("reportState")
            if raw_state:
                state = ReportState[str(raw_state).upper()]
            else:
                # records written with only the approval flag
                state = ReportState.APPROVED if record.get("isApproved") else ReportState.PENDING
        return cls(
            id=str(record["id"]),
            title=str(record.get("title") or ""),
            category=category,
            scope=parse_scope(record.get("section")),
            uploader_id=str(record.get("uploaderId") or ""),
            uploader_name=str(record.get("uploaderName") or ""),
            upload_date=str(record.get("uploadDate") or utc_now_iso()),
            url=str(record.get("url") or "#"),
            report_state=state,
        )
