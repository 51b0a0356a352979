"""
===============================================================================
Statistics PDF export – one table of unit statistics
-------------------------------------------------------------------------------
Implementation
    - Uses reportlab (BSD) canvas drawing, no platypus layout.
    - Sections are printed by member name; the standard Type1 fonts carry no
      Arabic glyphs.
===============================================================================
"""
from __future__ import annotations

from pathlib import Path
from typing import BinaryIO, Iterable, Union

from reportlab.lib.pagesizes import A4  # type: ignore
from reportlab.lib.units import cm  # type: ignore
from reportlab.pdfgen import canvas  # type: ignore

from core.helpers.date_time_helper import utc_now_iso, utc_to_local_str
from unitstatistics.models.unit_stats import UnitStatistics

COLUMNS = (("Unit", 1.5), ("Section", 8.5), ("Members", 13.0), ("Leaders", 16.5))
ROW_HEIGHT = 0.7 * cm


def export_stats_pdf(
    rows: Iterable[UnitStatistics],
    path_or_buffer: Union[str, Path, BinaryIO],
    title: str = "Unit statistics",
) -> None:
    """Render ``rows`` as a table with a totals line; continues on new pages."""
    target = str(path_or_buffer) if isinstance(path_or_buffer, (str, Path)) else path_or_buffer
    width, height = A4
    c = canvas.Canvas(target, pagesize=A4)
    c.setTitle(title)

    def header(y: float) -> float:
        c.setFont("Helvetica-Bold", 16)
        c.drawString(1.5 * cm, y, title)
        y -= 0.6 * cm
        c.setFont("Helvetica", 9)
        c.drawString(1.5 * cm, y, f"Generated {utc_to_local_str(utc_now_iso())}")
        y -= 1.0 * cm
        c.setFont("Helvetica-Bold", 11)
        for label, x in COLUMNS:
            c.drawString(x * cm, y, label)
        c.line(1.5 * cm, y - 0.2 * cm, width - 1.5 * cm, y - 0.2 * cm)
        c.setFont("Helvetica", 10)
        return y - ROW_HEIGHT

    y = header(height - 2 * cm)
    members = leaders = 0
    for row in rows:
        if y < 2 * cm:
            c.showPage()
            y = header(height - 2 * cm)
        values = (row.unit_name, row.section.name, str(row.member_count), str(row.leader_count))
        for (_, x), value in zip(COLUMNS, values):
            c.drawString(x * cm, y, value)
        members += row.member_count
        leaders += row.leader_count
        y -= ROW_HEIGHT

    c.setFont("Helvetica-Bold", 10)
    c.drawString(COLUMNS[0][1] * cm, y, "Total")
    c.drawString(COLUMNS[2][1] * cm, y, str(members))
    c.drawString(COLUMNS[3][1] * cm, y, str(leaders))
    c.showPage()
    c.save()
