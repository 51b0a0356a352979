"""Document categories of the kit and of unit reports."""
from __future__ import annotations

from enum import Enum
from typing import Any

from core.exceptions.errors import ValidationFailedError


class FileCategory(Enum):
    """Category tabs. Only UNIT_REPORT documents run through the approval workflow."""

    LEGAL = "الحقيبة القانونية"
    TECHNICAL = "الحقيبة الفنية"
    UNIT_REPORT = "تقارير الوحدة"

    @property
    def is_report(self) -> bool:
        return self is FileCategory.UNIT_REPORT

    @classmethod
    def parse(cls, raw: Any) -> "FileCategory":
        if isinstance(raw, cls):
            return raw
        text = str(raw or "").strip()
        for category in cls:
            if category.value == text:
                return category
        if text.upper() in cls.__members__:
            return cls[text.upper()]
        raise ValidationFailedError(f"Unknown file category '{raw}'")


KIT_CATEGORIES = (FileCategory.LEGAL, FileCategory.TECHNICAL)
