"""
Asset issues
Closed-status issue workflow (state machine, lifecycle operations, reporting).
"""

from app.buisness.issues.state_machine import IssueStateMachine, ISSUE_TYPES, SEVERITIES
from app.buisness.issues.issue_struct import (
    CreateIssueRequest,
    UpdateIssueRequest,
    BulkIssueTemplate,
    IssueView,
    AssetIssueHistory,
    IssueStats,
    UserIssueStats,
)
from app.buisness.issues.issue_lifecycle import IssueLifecycle

__all__ = [
    'IssueStateMachine',
    'ISSUE_TYPES',
    'SEVERITIES',
    'CreateIssueRequest',
    'UpdateIssueRequest',
    'BulkIssueTemplate',
    'IssueView',
    'AssetIssueHistory',
    'IssueStats',
    'UserIssueStats',
    'IssueLifecycle',
]
