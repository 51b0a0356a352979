"""Structure contract tests for the documents feature."""
from __future__ import annotations

from pathlib import Path


def test_structure_contract() -> None:
    """Fail if required scaffold files are missing."""
    root = Path(__file__).resolve().parents[1]
    required = [
        root / "enum" / "file_category.py",
        root / "enum" / "report_state.py",
        root / "enum" / "report_action.py",
        root / "models" / "document.py",
        root / "logic" / "document_repository.py",
        root / "logic" / "kit_service.py",
        root / "logic" / "report_service.py",
        root / "services" / "policy" / "workflow_policy.py",
        root / "tests" / "test_structure_contract.py",
        root / "tests" / "test_workflow_policy.py",
        root / "tests" / "test_report_service.py",
        root / "tests" / "test_kit_service.py",
    ]
    missing = [path for path in required if not path.exists()]
    assert not missing, f"Missing required files: {missing}"
