"""
Asset issue structs
Request payloads, read views and statistics returned by IssueLifecycle.
"""

from dataclasses import dataclass, asdict, field
from datetime import datetime
from typing import Dict, List, Optional

from app.buisness.issues.state_machine import IssueStateMachine


def _iso(value: Optional[datetime]) -> Optional[str]:
    return value.isoformat() if value else None


@dataclass
class CreateIssueRequest:
    asset_id: int
    reported_by: int
    issue_type: str
    severity: str
    issue_description: str
    assigned_to: Optional[int] = None
    resolution_notes: Optional[str] = None
    status: str = IssueStateMachine.OPEN


@dataclass
class UpdateIssueRequest:
    """Full replace of an issue's mutable fields"""
    asset_id: int
    reported_by: int
    issue_type: str
    severity: str
    issue_description: str
    assigned_to: Optional[int] = None
    resolution_notes: Optional[str] = None
    status: str = IssueStateMachine.OPEN


@dataclass
class BulkIssueTemplate:
    """Fields shared by every issue of a bulk creation"""
    reported_by: int
    issue_type: str
    severity: str
    issue_description: str
    assigned_to: Optional[int] = None
    resolution_notes: Optional[str] = None
    status: str = IssueStateMachine.OPEN

    def for_asset(self, asset_id: int) -> CreateIssueRequest:
        return CreateIssueRequest(asset_id=asset_id, **asdict(self))


@dataclass
class IssueView:
    id: int
    asset_id: int
    reported_by: int
    assigned_to: Optional[int]
    issue_type: str
    severity: str
    issue_description: str
    resolution_notes: Optional[str]
    status: str
    reported_at: Optional[datetime]
    resolved_at: Optional[datetime]
    closed_at: Optional[datetime]
    asset_name: Optional[str] = None
    asset_serial_number: Optional[str] = None
    reported_by_name: Optional[str] = None
    reported_by_email: Optional[str] = None
    assigned_to_name: Optional[str] = None
    assigned_to_email: Optional[str] = None
    allowed_transitions: List[str] = field(default_factory=list)

    @classmethod
    def from_model(cls, issue) -> 'IssueView':
        asset, reporter, assignee = issue.asset, issue.reported_by, issue.assigned_to
        return cls(
            id=issue.id,
            asset_id=issue.asset_id,
            reported_by=issue.reported_by_id,
            assigned_to=issue.assigned_to_id,
            issue_type=issue.issue_type,
            severity=issue.severity,
            issue_description=issue.issue_description,
            resolution_notes=issue.resolution_notes,
            status=issue.status,
            reported_at=issue.reported_at,
            resolved_at=issue.resolved_at,
            closed_at=issue.closed_at,
            asset_name=asset.name if asset else None,
            asset_serial_number=asset.serial_number if asset else None,
            reported_by_name=(reporter.display_name or None) if reporter else None,
            reported_by_email=reporter.email if reporter else None,
            assigned_to_name=(assignee.display_name or None) if assignee else None,
            assigned_to_email=assignee.email if assignee else None,
            allowed_transitions=sorted(IssueStateMachine.get_allowed_transitions(issue.status)),
        )

    def to_dict(self) -> dict:
        data = asdict(self)
        for key in ('reported_at', 'resolved_at', 'closed_at'):
            data[key] = _iso(data[key])
        return data


@dataclass
class AssetIssueHistory:
    asset_id: int
    asset_name: str
    asset_serial_number: Optional[str]
    total_issues: int
    open_issues: int
    resolved_issues: int
    closed_issues: int
    last_issue_date: Optional[datetime]
    issues: List[IssueView]

    def to_dict(self) -> dict:
        data = asdict(self)
        data['last_issue_date'] = _iso(self.last_issue_date)
        data['issues'] = [issue.to_dict() for issue in self.issues]
        return data


@dataclass
class IssueStats:
    total_issues: int
    issues_by_status: Dict[str, int]
    issues_by_severity: Dict[str, int]
    issues_by_type: Dict[str, int]
    issues_by_month: Dict[str, int]
    open_issues_older_than_30_days: int
    average_resolution_time_hours: Optional[float] = None

    def to_dict(self) -> dict:
        data = asdict(self)
        if self.average_resolution_time_hours is None:
            del data['average_resolution_time_hours']
        return data


@dataclass
class UserIssueStats:
    user_id: int
    user_name: str
    reported_issues: int
    assigned_issues: int
    resolved_issues: int
    pending_issues: int

    def to_dict(self) -> dict:
        return asdict(self)
