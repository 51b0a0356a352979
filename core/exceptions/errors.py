"""Domain exceptions shared by every feature.

All errors are raised synchronously to the immediate caller, which shows
``str(error)`` to the user. Nothing is written to the store before they are
raised.
"""
from __future__ import annotations


class ScoutsError(Exception):
    """Base exception for the scouts administration core."""

    default_message = "حدث خطأ"

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.default_message)


class DuplicateUsernameError(ScoutsError):
    """Raised when a username is already taken."""

    default_message = "اسم المستخدم موجود بالفعل"

    def __init__(self, username: str) -> None:
        self.username = username
        super().__init__()


class DuplicateCommissionerForSectionError(ScoutsError):
    """Raised when a section already has its commissioner."""

    def __init__(self, section: object) -> None:
        self.section = section
        label = getattr(section, "value", section)
        super().__init__(f"يوجد بالفعل مفوض لقسم {label}")


class RecordNotFoundError(ScoutsError):
    """Raised when an update/delete targets a record that does not exist."""

    def __init__(self, kind: str, record_id: str) -> None:
        self.kind = kind
        self.record_id = record_id
        messages = {
            "user": "المستخدم غير موجود",
            "file": "الملف غير موجود",
            "stats": "لا توجد بيانات لهذه الوحدة",
        }
        super().__init__(messages.get(kind, f"{kind} '{record_id}' not found"))


class ValidationFailedError(ScoutsError):
    """Raised when required fields are missing or a value is malformed."""

    default_message = "الرجاء ملء جميع الحقول الإجبارية"


class InvalidTransitionError(ValidationFailedError):
    """Raised when a report workflow transition is not allowed from its state."""

    def __init__(self, state: object, action: str) -> None:
        self.state = state
        self.action = action
        super().__init__(f"Transition '{action}' not allowed from state {getattr(state, 'name', state)}")


class ReportAlreadyApprovedError(InvalidTransitionError):
    """Raised when an approved report is approved again."""

    def __init__(self, report_id: str) -> None:
        self.report_id = report_id
        self.state = "APPROVED"
        self.action = "approve"
        ValidationFailedError.__init__(self, "تم اعتماد هذا التقرير مسبقاً")


class UnauthorizedError(ScoutsError):
    """Raised when an actor attempts an operation outside their permissions."""

    default_message = "ليست لديك صلاحية للقيام بهذه العملية"
