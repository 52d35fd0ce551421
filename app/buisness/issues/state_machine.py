"""
State machine for the asset issue lifecycle

Encodes the closed status set and the forward path through it.
Keeps "what is allowed" separate from "how persistence occurs": the
dedicated assign/resolve operations follow this table, while a direct
update may still write any valid status.
"""

from typing import Dict, Set
from app.buisness.core.errors import ValidationError


class IssueStateMachine:
    """
    State machine for AssetIssue.status.

    Forward path: OPEN -> ASSIGNED -> IN_PROGRESS -> RESOLVED -> CLOSED.
    CANCELLED is reachable from every other state and is terminal.
    """

    OPEN = 'OPEN'
    ASSIGNED = 'ASSIGNED'
    IN_PROGRESS = 'IN_PROGRESS'
    RESOLVED = 'RESOLVED'
    CLOSED = 'CLOSED'
    CANCELLED = 'CANCELLED'

    # Order matters: used in validation messages
    STATUSES = (OPEN, ASSIGNED, IN_PROGRESS, RESOLVED, CLOSED, CANCELLED)

    TERMINAL_STATES = {CANCELLED}

    TRANSITIONS: Dict[str, Set[str]] = {
        OPEN: {ASSIGNED, CANCELLED},
        ASSIGNED: {IN_PROGRESS, CANCELLED},
        IN_PROGRESS: {RESOLVED, CANCELLED},
        RESOLVED: {CLOSED, CANCELLED},
        CLOSED: {CANCELLED},
        # CANCELLED is terminal
    }

    # Statuses counted as "still open" by history and stale-issue reports
    PENDING_STATES = (OPEN, ASSIGNED)

    @classmethod
    def validate_status(cls, status, field_name: str = "Status") -> str:
        """
        Check that status belongs to the closed status set.

        Raises:
            ValidationError: If status is blank or unknown
        """
        if not isinstance(status, str) or not status.strip():
            raise ValidationError(f"{field_name} cannot be empty")
        if status not in cls.STATUSES:
            raise ValidationError(f"{field_name} must be one of: {', '.join(cls.STATUSES)}")
        return status

    @classmethod
    def get_allowed_transitions(cls, from_status: str) -> Set[str]:
        """Get set of allowed target statuses from current status"""
        if from_status in cls.TERMINAL_STATES:
            return set()
        return set(cls.TRANSITIONS.get(from_status, set()))


ISSUE_TYPES = (
    'HARDWARE_FAILURE', 'SOFTWARE_ISSUE', 'NETWORK_PROBLEM',
    'PERFORMANCE_ISSUE', 'SECURITY_INCIDENT', 'MAINTENANCE_REQUIRED',
    'USER_ERROR', 'CONFIGURATION_ISSUE', 'OTHER',
)

SEVERITIES = ('LOW', 'MEDIUM', 'HIGH', 'CRITICAL')
