"""Policy services for documents module.

Report state transitions, no I/O.
"""

from documents.services.policy.workflow_policy import WorkflowPolicy

__all__ = ["WorkflowPolicy"]
