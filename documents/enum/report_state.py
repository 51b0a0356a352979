"""Unit report lifecycle states."""
from __future__ import annotations

from enum import Enum


class ReportState(Enum):
    """DRAFT -> PENDING -> APPROVED. APPROVED is terminal."""

    DRAFT = "DRAFT"
    PENDING = "PENDING"
    APPROVED = "APPROVED"
