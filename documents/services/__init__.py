"""Services layer for documents module.

Policy evaluation without I/O.
"""

from documents.services.policy.workflow_policy import WorkflowPolicy

__all__ = ["WorkflowPolicy"]
