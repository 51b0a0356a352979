"""Legal and technical kit documents."""
from __future__ import annotations

import pytest

from core.common.entity_store import InMemoryEntityStore
from core.exceptions.errors import RecordNotFoundError, UnauthorizedError, ValidationFailedError
from core.models.user import ALL_SECTIONS, ScoutSection, User, UserRole
from documents.enum.file_category import FileCategory
from documents.logic.document_repository import DocumentRepository
from documents.logic.kit_service import KitService

HEAD = User(id="h1", username="head", first_name="H", last_name="Head", role=UserRole.PROGRAM_HEAD)
COMM = User(id="c1", username="comm", first_name="C", last_name="Comm",
            role=UserRole.COMMISSIONER, section=ScoutSection.KACHAFA)
LEADER = User(id="l1", username="leader", first_name="L", last_name="Leader",
              role=UserRole.UNIT_LEADER, section=ScoutSection.KACHAFA)
ASHBAL_LEADER = User(id="l2", username="leader2", first_name="M", last_name="Leader",
                     role=UserRole.UNIT_LEADER, section=ScoutSection.ASHBAL)


@pytest.fixture
def kit() -> KitService:
    return KitService(DocumentRepository(InMemoryEntityStore()))


def test_commissioner_upload_is_pinned_to_own_section(kit: KitService) -> None:
    doc = kit.upload(COMM, "Camp rules", FileCategory.LEGAL, ScoutSection.ASHBAL)
    assert doc.scope is ScoutSection.KACHAFA
    assert doc.url == "#"
    assert doc.report_state is None
    assert [d.id for d in kit.list_files(LEADER, FileCategory.LEGAL)] == [doc.id]
    assert kit.list_files(ASHBAL_LEADER, FileCategory.LEGAL) == []


def test_supervisor_upload_defaults_to_all_sections(kit: KitService) -> None:
    doc = kit.upload(HEAD, "Statutes", FileCategory.TECHNICAL)
    assert doc.scope == ALL_SECTIONS
    assert kit.list_files(ASHBAL_LEADER, FileCategory.TECHNICAL) == [doc]
    assert kit.list_files(ASHBAL_LEADER, FileCategory.LEGAL) == []


def test_leader_cannot_upload(kit: KitService) -> None:
    with pytest.raises(UnauthorizedError):
        kit.upload(LEADER, "Notes", FileCategory.LEGAL)


def test_reports_are_rejected(kit: KitService) -> None:
    with pytest.raises(ValidationFailedError):
        kit.upload(HEAD, "Report", FileCategory.UNIT_REPORT)
    with pytest.raises(ValidationFailedError):
        kit.list_files(HEAD, FileCategory.UNIT_REPORT)


def test_title_required(kit: KitService) -> None:
    with pytest.raises(ValidationFailedError):
        kit.upload(HEAD, "  ", FileCategory.LEGAL)


def test_update_scope_only_for_supervisors(kit: KitService) -> None:
    own = kit.upload(COMM, "Camp rules", FileCategory.LEGAL)
    renamed = kit.update(COMM, own.id, "Camp rules 2025", ALL_SECTIONS)
    assert renamed.title == "Camp rules 2025"
    assert renamed.scope is ScoutSection.KACHAFA

    moved = kit.update(HEAD, own.id, "Camp rules 2025", ScoutSection.JAWALA)
    assert moved.scope is ScoutSection.JAWALA

    kept = kit.update(HEAD, own.id, "Camp rules 2026")
    assert kept.scope is ScoutSection.JAWALA


def test_modify_foreign_file_denied(kit: KitService) -> None:
    doc = kit.upload(HEAD, "Statutes", FileCategory.LEGAL)
    with pytest.raises(UnauthorizedError):
        kit.update(COMM, doc.id, "Mine now")
    with pytest.raises(UnauthorizedError):
        kit.delete(COMM, doc.id)


def test_delete(kit: KitService) -> None:
    doc = kit.upload(COMM, "Camp rules", FileCategory.LEGAL)
    kit.delete(COMM, doc.id)
    assert kit.list_files(HEAD, FileCategory.LEGAL) == []
    with pytest.raises(RecordNotFoundError):
        kit.delete(COMM, doc.id)


def test_section_filter_accepts_label(kit: KitService) -> None:
    ashbal = kit.upload(HEAD, "Ashbal guide", FileCategory.LEGAL, "أشبال")
    kit.upload(HEAD, "Kachafa guide", FileCategory.LEGAL, "كشافة")

    by_member = kit.list_files(HEAD, FileCategory.LEGAL, ScoutSection.ASHBAL)
    by_label = kit.list_files(HEAD, FileCategory.LEGAL, "أشبال")
    by_name = kit.list_files(HEAD, FileCategory.LEGAL, "ASHBAL")
    assert [d.id for d in by_label] == [ashbal.id]
    assert by_label == by_member == by_name


def test_unknown_section_filter_rejected(kit: KitService) -> None:
    with pytest.raises(ValidationFailedError):
        kit.list_files(HEAD, FileCategory.LEGAL, "no such section")
