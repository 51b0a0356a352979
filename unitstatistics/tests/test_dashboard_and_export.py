"""Dashboard totals and the statistics PDF export."""
from __future__ import annotations

import io

import pytest

from core.common.entity_store import InMemoryEntityStore
from core.models.user import ScoutSection, User, UserRole
from documents.enum.file_category import FileCategory
from documents.logic.document_repository import DocumentRepository
from documents.models.document import PedagogicalFile
from unitstatistics.logic.dashboard_service import DashboardService
from unitstatistics.logic.stats_report_pdf import export_stats_pdf
from unitstatistics.logic.stats_repository import StatsRepository
from unitstatistics.models.unit_stats import LeaderDetail, UnitStatistics

HEAD = User(id="h1", username="head", first_name="H", last_name="H", role=UserRole.PROGRAM_HEAD)
COMM = User(id="c1", username="comm", first_name="C", last_name="C",
            role=UserRole.COMMISSIONER, section=ScoutSection.ASHBAL)

ROWS = [
    UnitStatistics(id="s1", leader_id="l1", section=ScoutSection.ASHBAL, unit_name="Unit 1",
                   member_count=20, leaders=(LeaderDetail("Ali"), LeaderDetail("Sara"))),
    UnitStatistics(id="s2", leader_id="l2", section=ScoutSection.ASHBAL, unit_name="Unit 2",
                   member_count=15, leaders=(LeaderDetail("Omar"),)),
    UnitStatistics(id="s3", leader_id="l3", section=ScoutSection.JAWALA, unit_name="Unit 3",
                   member_count=8, leaders=()),
]


@pytest.fixture
def dashboard() -> DashboardService:
    store = InMemoryEntityStore()
    stats = StatsRepository(store)
    for row in ROWS:
        stats.upsert(row)
    documents = DocumentRepository(store)
    documents.add(PedagogicalFile(id="f1", title="Statutes", category=FileCategory.LEGAL,
                                  scope="ALL", uploader_id="h1", uploader_name="H H"))
    return DashboardService(stats, documents)


def test_supervisor_summary_covers_everything(dashboard: DashboardService) -> None:
    summary = dashboard.summary(HEAD)
    assert (summary.total_members, summary.total_leaders, summary.total_files) == (43, 3, 1)


def test_commissioner_summary_restricted_to_section(dashboard: DashboardService) -> None:
    summary = dashboard.summary(COMM)
    assert (summary.total_members, summary.total_leaders) == (35, 3)


def test_members_per_section_is_zero_filled(dashboard: DashboardService) -> None:
    totals = dashboard.members_per_section()
    assert list(totals) == list(ScoutSection)
    assert totals[ScoutSection.ASHBAL] == 35
    assert totals[ScoutSection.JAWALA] == 8
    assert totals[ScoutSection.DALILAT] == 0


def test_pdf_export_to_buffer() -> None:
    buf = io.BytesIO()
    export_stats_pdf(ROWS, buf, title="Ashbal statistics")
    assert buf.getvalue().startswith(b"%PDF")


def test_pdf_export_to_path(tmp_path) -> None:
    target = tmp_path / "stats.pdf"
    export_stats_pdf(ROWS * 30, target)
    assert target.read_bytes()[:4] == b"%PDF"
