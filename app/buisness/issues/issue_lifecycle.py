"""
Issue Lifecycle
Creation, assignment, resolution and reporting for asset issues.

Status side effects are written with single conditional UPDATE statements so
that the check on the current row and the write happen in one statement:
- assign(): status becomes ASSIGNED only where it is currently OPEN
- update() to CLOSED: resolved_at is backfilled only where it is still NULL
"""

from collections import Counter
from datetime import datetime, timedelta
from typing import List, Optional

from flask import current_app
from sqlalchemy import case, func, or_, update

from app import db
from app.data.issues.asset_issue import AssetIssue
from app.buisness.core.clock import Clock
from app.buisness.core.errors import NotFoundError, ValidationError
from app.buisness.core.unit_of_work import unit_of_work
from app.buisness.core.validators import parse_datetime, validate_choice, validate_id, validate_text
from app.buisness.issues.issue_struct import (
    AssetIssueHistory,
    BulkIssueTemplate,
    CreateIssueRequest,
    IssueStats,
    IssueView,
    UpdateIssueRequest,
    UserIssueStats,
)
from app.buisness.issues.state_machine import ISSUE_TYPES, SEVERITIES, IssueStateMachine
from app.services.core.stores import Stores
from app.logger import get_logger

logger = get_logger("asset_lifecycle.domain.issues")

MAX_DESCRIPTION_LENGTH = 5000
MAX_ISSUE_TYPE_LENGTH = 50
STALE_ISSUE_AGE_DAYS = 30


def hours_between(start: datetime, end: datetime) -> int:
    """Whole hours from start to end, truncated toward zero"""
    return int((end - start).total_seconds() / 3600)


class IssueLifecycle:
    """
    Asset issue workflow.

    Args:
        stores: Entity stores used for existence checks
        clock: Source of "now" for reported/resolved/closed timestamps
        stale_after_days: Age past which an OPEN/ASSIGNED issue counts as stale
            (defaults to the STALE_ISSUE_AGE_DAYS app setting)
    """

    def __init__(self, stores: Optional[Stores] = None, clock: Optional[Clock] = None,
                 stale_after_days: Optional[int] = None):
        self.stores = stores or Stores()
        self.clock = clock or Clock()
        self.stale_after_days = stale_after_days

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    def create(self, request: CreateIssueRequest) -> IssueView:
        """
        Report a new issue.

        Raises:
            ValidationError: On malformed input
            NotFoundError: If the asset, reporter or assignee does not exist
        """
        fields = self._validate_request(request)
        self._check_references(fields)

        with unit_of_work("create asset issue"):
            issue = AssetIssue.create_from_dict(fields, commit=False)
            logger.info(f"Created asset issue {issue.id} ({issue.issue_type}/{issue.severity}) for asset {issue.asset_id}")

        return IssueView.from_model(issue)

    def bulk_create(self, template: BulkIssueTemplate, asset_ids: List[int]) -> List[IssueView]:
        """
        Create one issue per asset from a shared template.

        Every asset id is validated and checked before anything is written;
        the first bad id aborts the whole batch.
        """
        if not asset_ids:
            raise ValidationError("Asset IDs list cannot be empty")

        requests = [template.for_asset(asset_id) for asset_id in asset_ids]
        rows = []
        for request in requests:
            fields = self._validate_request(request)
            rows.append(fields)
        self.stores.users.get(template.reported_by)
        if template.assigned_to is not None:
            self.stores.users.get(template.assigned_to)
        for fields in rows:
            self.stores.assets.get(fields['asset_id'])

        with unit_of_work(f"bulk create {len(rows)} asset issues"):
            issues = AssetIssue.bulk_create_from_dicts(rows, commit=False)
            logger.info(f"Bulk created {len(issues)} asset issues ({template.issue_type}/{template.severity})")

        return [IssueView.from_model(issue) for issue in issues]

    def update(self, issue_id: int, request: UpdateIssueRequest) -> IssueView:
        """
        Replace every mutable field of an issue.

        Writing RESOLVED stamps resolved_at (overwriting any earlier value).
        Writing CLOSED stamps closed_at and backfills resolved_at if it was never set.
        """
        validate_id(issue_id, "Asset Issue ID")
        fields = self._validate_request(request)
        del fields['reported_at']
        self._check_references(fields)

        now = self.clock.now()
        values = dict(fields)
        if request.status == IssueStateMachine.RESOLVED:
            values['resolved_at'] = now
        elif request.status == IssueStateMachine.CLOSED:
            values['closed_at'] = now
            values['resolved_at'] = func.coalesce(AssetIssue.resolved_at, now)

        with unit_of_work(f"update asset issue {issue_id}"):
            result = db.session.execute(
                update(AssetIssue)
                .where(AssetIssue.id == issue_id)
                .values(**values)
                .execution_options(synchronize_session=False)
            )
            if result.rowcount == 0:
                raise NotFoundError("Asset issue not found")
            logger.info(f"Updated asset issue {issue_id} (status {request.status})")

        return IssueView.from_model(self._load(issue_id))

    def assign(self, issue_id: int, user_id: int) -> IssueView:
        """
        Assign an issue to a user.

        An OPEN issue moves to ASSIGNED; any other status is left as it is.
        """
        validate_id(issue_id, "Asset Issue ID")
        validate_id(user_id, "Assigned To")
        self.stores.users.get(user_id)

        with unit_of_work(f"assign asset issue {issue_id}"):
            result = db.session.execute(
                update(AssetIssue)
                .where(AssetIssue.id == issue_id)
                .values(
                    assigned_to_id=user_id,
                    status=case(
                        (AssetIssue.status == IssueStateMachine.OPEN, IssueStateMachine.ASSIGNED),
                        else_=AssetIssue.status,
                    ),
                )
                .execution_options(synchronize_session=False)
            )
            if result.rowcount == 0:
                raise NotFoundError("Asset issue not found")
            logger.info(f"Assigned asset issue {issue_id} to user {user_id}")

        return IssueView.from_model(self._load(issue_id))

    def resolve(self, issue_id: int, resolution_notes: str, status: str = IssueStateMachine.RESOLVED) -> IssueView:
        """
        Resolve (or close) an issue with resolution notes.

        resolved_at is always set to now; closed_at too when status is CLOSED.
        """
        validate_id(issue_id, "Asset Issue ID")
        IssueStateMachine.validate_status(status)
        validate_text(resolution_notes, "Resolution notes", MAX_DESCRIPTION_LENGTH)

        now = self.clock.now()
        values = {'resolution_notes': resolution_notes, 'status': status, 'resolved_at': now}
        if status == IssueStateMachine.CLOSED:
            values['closed_at'] = now

        with unit_of_work(f"resolve asset issue {issue_id}"):
            result = db.session.execute(
                update(AssetIssue)
                .where(AssetIssue.id == issue_id)
                .values(**values)
                .execution_options(synchronize_session=False)
            )
            if result.rowcount == 0:
                raise NotFoundError("Asset issue not found")
            logger.info(f"Resolved asset issue {issue_id} as {status}")

        return IssueView.from_model(self._load(issue_id))

    def delete(self, issue_id: int) -> None:
        validate_id(issue_id, "Asset Issue ID")
        issue = self._load(issue_id)

        with unit_of_work(f"delete asset issue {issue_id}"):
            db.session.delete(issue)
            logger.info(f"Deleted asset issue {issue_id}")

    def delete_by_asset(self, asset_id: int) -> int:
        """Delete every issue of an asset; returns how many were removed"""
        validate_id(asset_id, "Asset ID")
        self.stores.assets.get(asset_id)

        with unit_of_work(f"delete asset issues for asset {asset_id}"):
            deleted = AssetIssue.query.filter(AssetIssue.asset_id == asset_id).delete(synchronize_session=False)
            logger.info(f"Deleted {deleted} asset issues for asset {asset_id}")

        return deleted

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def get(self, issue_id: int) -> IssueView:
        validate_id(issue_id, "Asset Issue ID")
        return IssueView.from_model(self._load(issue_id))

    def list_all(self) -> List[IssueView]:
        return self._views(self._query())

    def by_asset(self, asset_id: int) -> List[IssueView]:
        validate_id(asset_id, "Asset ID")
        self.stores.assets.get(asset_id)
        return self._views(self._query().filter(AssetIssue.asset_id == asset_id))

    def by_reporter(self, user_id: int) -> List[IssueView]:
        validate_id(user_id, "Reported By")
        self.stores.users.get(user_id)
        return self._views(self._query().filter(AssetIssue.reported_by_id == user_id))

    def by_assignee(self, user_id: int) -> List[IssueView]:
        validate_id(user_id, "Assigned To")
        self.stores.users.get(user_id)
        return self._views(self._query().filter(AssetIssue.assigned_to_id == user_id))

    def by_type(self, issue_type: str) -> List[IssueView]:
        self._validate_issue_type(issue_type)
        return self._views(self._query().filter(AssetIssue.issue_type == issue_type))

    def by_severity(self, severity: str) -> List[IssueView]:
        validate_choice(severity, SEVERITIES, "Severity")
        return self._views(self._query().filter(AssetIssue.severity == severity))

    def by_status(self, status: str) -> List[IssueView]:
        IssueStateMachine.validate_status(status)
        return self._views(self._query().filter(AssetIssue.status == status))

    def by_date_range(self, start, end) -> List[IssueView]:
        """Issues reported between start and end (ISO date-times, both inclusive)"""
        start_at = parse_datetime(start, "Start Date")
        end_at = parse_datetime(end, "End Date")
        if start_at > end_at:
            raise ValidationError("Start date cannot be after end date")
        return self._views(self._query().filter(
            AssetIssue.reported_at >= start_at,
            AssetIssue.reported_at <= end_at,
        ))

    def history_for_asset(self, asset_id: int) -> AssetIssueHistory:
        """
        Every issue of an asset with open/resolved/closed counts.

        Raises:
            NotFoundError: If the asset does not exist or has no issues
        """
        validate_id(asset_id, "Asset ID")
        asset = self.stores.assets.get(asset_id)
        issues = self._views(self._query().filter(AssetIssue.asset_id == asset_id))
        if not issues:
            raise NotFoundError("No issue history found for this asset")

        return AssetIssueHistory(
            asset_id=asset_id,
            asset_name=asset.name,
            asset_serial_number=asset.serial_number,
            total_issues=len(issues),
            open_issues=sum(1 for i in issues if i.status in IssueStateMachine.PENDING_STATES),
            resolved_issues=sum(1 for i in issues if i.status == IssueStateMachine.RESOLVED),
            closed_issues=sum(1 for i in issues if i.status == IssueStateMachine.CLOSED),
            last_issue_date=issues[0].reported_at,
            issues=issues,
        )

    def user_stats(self, user_id: int) -> UserIssueStats:
        validate_id(user_id, "User ID")
        user = self.stores.users.get(user_id)

        assigned = AssetIssue.query.filter(AssetIssue.assigned_to_id == user_id)
        return UserIssueStats(
            user_id=user_id,
            user_name=user.display_name,
            reported_issues=AssetIssue.query.filter(AssetIssue.reported_by_id == user_id).count(),
            assigned_issues=assigned.count(),
            resolved_issues=assigned.filter(or_(
                AssetIssue.status == IssueStateMachine.RESOLVED,
                AssetIssue.status == IssueStateMachine.CLOSED,
            )).count(),
            pending_issues=assigned.filter(AssetIssue.status.in_(IssueStateMachine.PENDING_STATES)).count(),
        )

    def issue_stats(self) -> IssueStats:
        """Global issue counts, average resolution time and stale open issues"""
        issues = AssetIssue.query.all()
        now = self.clock.now()
        stale_before = now - timedelta(days=self._stale_after_days())

        resolution_hours = [hours_between(i.reported_at, i.resolved_at) for i in issues if i.resolved_at is not None]
        average = sum(resolution_hours) / len(resolution_hours) if resolution_hours else None

        return IssueStats(
            total_issues=len(issues),
            issues_by_status=dict(Counter(i.status for i in issues)),
            issues_by_severity=dict(Counter(i.severity for i in issues)),
            issues_by_type=dict(Counter(i.issue_type for i in issues)),
            issues_by_month=dict(Counter(i.reported_at.strftime('%Y-%m') for i in issues)),
            open_issues_older_than_30_days=sum(
                1 for i in issues
                if i.status in IssueStateMachine.PENDING_STATES and i.reported_at < stale_before
            ),
            average_resolution_time_hours=average,
        )

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _validate_request(self, request) -> dict:
        validate_id(request.asset_id, "Asset ID")
        validate_id(request.reported_by, "Reported By")
        self._validate_issue_type(request.issue_type)
        validate_choice(request.severity, SEVERITIES, "Severity")
        IssueStateMachine.validate_status(request.status)
        if request.assigned_to is not None:
            validate_id(request.assigned_to, "Assigned To")
        validate_text(request.issue_description, "Issue description", MAX_DESCRIPTION_LENGTH)

        return {
            'asset_id': request.asset_id,
            'reported_by_id': request.reported_by,
            'assigned_to_id': request.assigned_to,
            'issue_type': request.issue_type,
            'severity': request.severity,
            'issue_description': request.issue_description,
            'resolution_notes': request.resolution_notes,
            'status': request.status,
            'reported_at': self.clock.now(),
        }

    def _validate_issue_type(self, issue_type) -> None:
        validate_text(issue_type, "Issue type", MAX_ISSUE_TYPE_LENGTH)
        validate_choice(issue_type, ISSUE_TYPES, "Issue type")

    def _check_references(self, fields: dict) -> None:
        self.stores.assets.get(fields['asset_id'])
        self.stores.users.get(fields['reported_by_id'])
        if fields['assigned_to_id'] is not None:
            self.stores.users.get(fields['assigned_to_id'])

    def _stale_after_days(self) -> int:
        if self.stale_after_days is not None:
            return self.stale_after_days
        return current_app.config.get('STALE_ISSUE_AGE_DAYS', STALE_ISSUE_AGE_DAYS)

    def _load(self, issue_id: int) -> AssetIssue:
        issue = db.session.get(AssetIssue, issue_id)
        if issue is None:
            raise NotFoundError("Asset issue not found")
        return issue

    def _query(self):
        return AssetIssue.query.order_by(AssetIssue.reported_at.desc(), AssetIssue.id.desc())

    def _views(self, query) -> List[IssueView]:
        issues = query.all()
        logger.debug(f"Loaded {len(issues)} asset issues")
        return [IssueView.from_model(i) for i in issues]
