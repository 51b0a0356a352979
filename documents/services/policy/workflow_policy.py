"""Report workflow policy (no IO).

Transition table of the unit report state machine:

    DRAFT --submit--> PENDING --approve--> APPROVED

APPROVED is terminal. The table may be overridden from
``report_workflow_transitions.json`` but the terminal rule always applies.
"""

from __future__ import annotations
from typing import List, Dict, Optional, Any
from pathlib import Path
import json
import logging

from core.exceptions.errors import InvalidTransitionError
from documents.enum.report_action import ReportAction
from documents.enum.report_state import ReportState

logger = logging.getLogger(__name__)

DEFAULT_TRANSITIONS: List[Dict[str, str]] = [
    {"from": "DRAFT", "action": ReportAction.SUBMIT.value, "to": "PENDING"},
    {"from": "PENDING", "action": ReportAction.APPROVE.value, "to": "APPROVED"},
]
DEFAULT_FORBIDDEN: List[str] = ["APPROVED->*"]


class WorkflowPolicy:
    """Policy evaluation for report state transitions."""

    def __init__(
        self,
        *,
        transitions: Optional[List[Dict[str, Any]]] = None,
        forbidden_transitions: Optional[List[str]] = None,
    ):
        """
        Args:
            transitions: List of {"from", "action", "to"} rules
            forbidden_transitions: Patterns such as "APPROVED->*"
        """
        self._transitions = transitions if transitions is not None else list(DEFAULT_TRANSITIONS)
        forbidden = list(forbidden_transitions or [])
        if "APPROVED->*" not in forbidden:
            forbidden.append("APPROVED->*")
        self._forbidden = self._parse_forbidden(forbidden)

    @classmethod
    def load_from_directory(cls, directory: str | Path) -> "WorkflowPolicy":
        """Load rules from report_workflow_transitions.json, defaults if absent or broken."""
        policy_file = Path(directory) / "report_workflow_transitions.json"

        data: Dict[str, Any] = {}
        if policy_file.exists():
            try:
                with policy_file.open("r", encoding="utf-8") as f:
                    data = json.load(f)
            except (OSError, json.JSONDecodeError) as ex:
                logger.error("Failed to load report workflow policy: %s", ex)
                data = {}

        return cls(
            transitions=data.get("workflow_transitions") or None,
            forbidden_transitions=data.get("forbidden_transitions", DEFAULT_FORBIDDEN),
        )

    def allowed_actions(self, state: ReportState) -> List[str]:
        """Action identifiers available from ``state``."""
        actions: List[str] = []
        for rule in self._transitions:
            from_state = self._parse_state(rule.get("from"))
            if from_state is not state:
                continue
            if self._is_forbidden(from_state, self._parse_state(rule.get("to"))):
                continue
            action = str(rule.get("action", "")).strip().lower()
            if action:
                actions.append(action)
        return actions

    def can_transition(self, state: ReportState, action: str) -> bool:
        return str(action).strip().lower() in self.allowed_actions(state)

    def next_state(self, state: ReportState, action: str) -> ReportState:
        """Resolve the target state or raise InvalidTransitionError."""
        wanted = str(getattr(action, "value", action)).strip().lower()
        for rule in self._transitions:
            from_state = self._parse_state(rule.get("from"))
            if from_state is not state or str(rule.get("action", "")).strip().lower() != wanted:
                continue
            to_state = self._parse_state(rule.get("to"))
            if self._is_forbidden(from_state, to_state):
                break
            return to_state
        raise InvalidTransitionError(state, wanted)

    def _is_forbidden(self, from_state: ReportState, to_state: ReportState) -> bool:
        for forbidden_from, forbidden_to in self._forbidden:
            if forbidden_from is from_state and (forbidden_to is None or forbidden_to is to_state):
                return True
        return False

    @staticmethod
    def _parse_state(value: Any) -> ReportState:
        if isinstance(value, ReportState):
            return value
        raw = str(value or "").strip().upper()
        try:
            return ReportState[raw]
        except KeyError:
            return ReportState.DRAFT

    @staticmethod
    def _parse_forbidden(items: List[str]) -> List[tuple[ReportState, Optional[ReportState]]]:
        """
        Examples:
        - "PENDING->DRAFT" → (PENDING, DRAFT)
        - "APPROVED->*"    → (APPROVED, None)
        """
        result: List[tuple[ReportState, Optional[ReportState]]] = []
        for item in items:
            raw = str(item).strip()
            if "->" not in raw:
                continue
            left, right = (part.strip() for part in raw.split("->", 1))
            from_state = WorkflowPolicy._parse_state(left)
            if right in ("*", ""):
                result.append((from_state, None))
            else:
                result.append((from_state, WorkflowPolicy._parse_state(right)))
        return result
