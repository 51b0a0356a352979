"""documents/enum/report_action.py
================================

Canonical action identifiers of the unit report workflow.
"""
from __future__ import annotations

from enum import Enum


class ReportAction(str, Enum):
    """Supported report actions."""

    SUBMIT = "submit"
    APPROVE = "approve"
