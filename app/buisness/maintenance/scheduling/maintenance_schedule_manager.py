"""
Maintenance Schedule Manager
Create, query and complete recurring maintenance schedules.

Every mutating operation validates first, then runs as one unit of work.
Reads return ScheduleView objects with is_overdue / days_until_due computed
against the manager's clock.
"""

from datetime import timedelta
from typing import List, Optional

from sqlalchemy import update

from app import db
from app.data.maintenance.maintenance_schedule import MaintenanceSchedule
from app.buisness.core.clock import Clock
from app.buisness.core.errors import NotFoundError, ValidationError
from app.buisness.core.unit_of_work import unit_of_work
from app.buisness.core.validators import (
    parse_date,
    parse_optional_date,
    parse_optional_money,
    validate_choice,
    validate_id,
    validate_text,
)
from app.buisness.maintenance.scheduling.recurrence import DUE_THIS_WEEK_DAYS, RecurrenceCalculator
from app.buisness.maintenance.scheduling.schedule_struct import (
    CreateScheduleRequest,
    ScheduleSummary,
    ScheduleView,
    UpdateScheduleRequest,
)
from app.services.core.stores import Stores
from app.logger import get_logger

logger = get_logger("asset_lifecycle.domain.maintenance.scheduling")

PRIORITIES = ('LOW', 'MEDIUM', 'HIGH', 'CRITICAL')
MIN_FREQUENCY_DAYS = 1
MAX_FREQUENCY_DAYS = 3650


class MaintenanceScheduleManager:
    """
    Lifecycle of recurring maintenance schedules.

    Args:
        stores: Entity stores used for existence checks (defaults to the ORM-backed stores)
        clock: Source of "today" (defaults to the system clock)
    """

    def __init__(self, stores: Optional[Stores] = None, clock: Optional[Clock] = None):
        self.stores = stores or Stores()
        self.clock = clock or Clock()

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    def create(self, request: CreateScheduleRequest, user_id: Optional[int] = None) -> ScheduleView:
        """
        Create a schedule.

        Raises:
            ValidationError: On malformed input
            NotFoundError: If the asset, maintenance type or assignee does not exist
        """
        validate_id(request.asset_id, "Asset ID")
        fields = self._validate_fields(request)
        self.stores.assets.get(request.asset_id)
        self._check_references(fields)

        with unit_of_work("create maintenance schedule"):
            schedule = MaintenanceSchedule(asset_id=request.asset_id, created_by_id=user_id, **fields)
            db.session.add(schedule)
            db.session.flush()
            logger.info(f"Created maintenance schedule {schedule.id} for asset {schedule.asset_id}, next due {schedule.next_due}")

        return self._view(schedule)

    def update(self, schedule_id: int, request: UpdateScheduleRequest) -> ScheduleView:
        """Replace every mutable field of a schedule; the asset is never changed"""
        validate_id(schedule_id, "Schedule ID")
        fields = self._validate_fields(request)
        schedule = self._load(schedule_id)
        self._check_references(fields)

        with unit_of_work(f"update maintenance schedule {schedule_id}"):
            for key, value in fields.items():
                setattr(schedule, key, value)
            logger.info(f"Updated maintenance schedule {schedule_id}")

        return self._view(schedule)

    def complete(self, schedule_id: int, completed_date) -> ScheduleView:
        """
        Record that the scheduled work was done on completed_date.

        The next due date is re-anchored on completed_date, whatever the
        previous due date was. is_active is left alone.
        """
        validate_id(schedule_id, "Schedule ID")
        completed = parse_date(completed_date, "Completed date")
        schedule = self._load(schedule_id)
        next_due = RecurrenceCalculator.advance(completed, schedule.frequency_days)

        with unit_of_work(f"complete maintenance schedule {schedule_id}"):
            db.session.execute(
                update(MaintenanceSchedule)
                .where(MaintenanceSchedule.id == schedule_id)
                .values(last_performed=completed, next_due=next_due)
            )
            logger.info(f"Completed maintenance schedule {schedule_id} on {completed}, next due {next_due}")

        db.session.refresh(schedule)
        return self._view(schedule)

    def deactivate(self, schedule_id: int) -> ScheduleView:
        validate_id(schedule_id, "Schedule ID")
        schedule = self._load(schedule_id)

        with unit_of_work(f"deactivate maintenance schedule {schedule_id}"):
            schedule.is_active = False
            logger.info(f"Deactivated maintenance schedule {schedule_id}")

        return self._view(schedule)

    def delete(self, schedule_id: int) -> None:
        """Hard delete; maintenance records that point at the schedule are left as they are"""
        validate_id(schedule_id, "Schedule ID")
        schedule = self._load(schedule_id)

        with unit_of_work(f"delete maintenance schedule {schedule_id}"):
            db.session.delete(schedule)
            logger.info(f"Deleted maintenance schedule {schedule_id}")

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def get(self, schedule_id: int) -> ScheduleView:
        validate_id(schedule_id, "Schedule ID")
        return self._view(self._load(schedule_id))

    def list_all(self) -> List[ScheduleView]:
        return self._views(self._query())

    def by_asset(self, asset_id: int) -> List[ScheduleView]:
        validate_id(asset_id, "Asset ID")
        self.stores.assets.get(asset_id)
        return self._views(self._query().filter(MaintenanceSchedule.asset_id == asset_id))

    def by_assigned_user(self, user_id: int) -> List[ScheduleView]:
        validate_id(user_id, "User ID")
        self.stores.users.get(user_id)
        return self._views(self._query().filter(MaintenanceSchedule.assigned_to_id == user_id))

    def by_priority(self, priority: str) -> List[ScheduleView]:
        priority = validate_choice(priority, PRIORITIES, "Priority", case_insensitive=True)
        return self._views(self._query().filter(MaintenanceSchedule.priority == priority))

    def active(self) -> List[ScheduleView]:
        return self._views(self._active_query())

    def overdue(self) -> List[ScheduleView]:
        today = self.clock.today()
        return self._views(self._active_query().filter(MaintenanceSchedule.next_due < today))

    def due_today(self) -> List[ScheduleView]:
        today = self.clock.today()
        return self._views(self._active_query().filter(MaintenanceSchedule.next_due == today))

    def due_this_week(self) -> List[ScheduleView]:
        today = self.clock.today()
        return self._views(self._active_query().filter(
            MaintenanceSchedule.next_due >= today,
            MaintenanceSchedule.next_due <= today + timedelta(days=DUE_THIS_WEEK_DAYS),
        ))

    def due_in_range(self, start, end) -> List[ScheduleView]:
        """Active schedules due between start and end, both inclusive"""
        start_date = parse_date(start, "Start date")
        end_date = parse_date(end, "End date")
        if start_date > end_date:
            raise ValidationError("Start date cannot be after end date")
        return self._views(self._active_query().filter(
            MaintenanceSchedule.next_due >= start_date,
            MaintenanceSchedule.next_due <= end_date,
        ))

    def summary(self) -> ScheduleSummary:
        """Counts over all schedules plus the estimated cost of the active ones"""
        today = self.clock.today()
        total = MaintenanceSchedule.query.count()
        active = self._active_query().all()

        costs = [s.estimated_cost for s in active if s.estimated_cost is not None]
        return ScheduleSummary(
            total_schedules=total,
            active_schedules=len(active),
            overdue_schedules=sum(1 for s in active if RecurrenceCalculator.is_overdue(s.next_due, today)),
            due_today_schedules=sum(1 for s in active if RecurrenceCalculator.is_due_today(s.next_due, today)),
            due_this_week_schedules=sum(1 for s in active if RecurrenceCalculator.is_due_this_week(s.next_due, today)),
            total_estimated_cost=sum(costs) if costs else None,
        )

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _validate_fields(self, request) -> dict:
        frequency_days = request.frequency_days
        if isinstance(frequency_days, bool) or not isinstance(frequency_days, int):
            raise ValidationError("Frequency days must be an integer")
        if frequency_days < MIN_FREQUENCY_DAYS:
            raise ValidationError("Frequency days must be positive")
        if frequency_days > MAX_FREQUENCY_DAYS:
            raise ValidationError("Frequency days cannot exceed 10 years")

        next_due = parse_date(request.next_due, "Next due date")
        last_performed = parse_optional_date(request.last_performed, "Last performed date")

        priority = None
        if request.priority is not None:
            priority = validate_choice(request.priority, PRIORITIES, "Priority", case_insensitive=True)

        estimated_cost = parse_optional_money(request.estimated_cost, "Estimated cost")

        if request.maintenance_type_id is not None:
            validate_id(request.maintenance_type_id, "Maintenance type ID")
            if request.maintenance_type is None or not request.maintenance_type.strip():
                raise ValidationError("Maintenance type name is required when maintenance type ID is provided")
        validate_text(request.maintenance_type, "Maintenance type", 100, required=False)

        if request.assigned_to is not None:
            validate_id(request.assigned_to, "Assigned to")

        return {
            'maintenance_type_id': request.maintenance_type_id,
            'maintenance_type': request.maintenance_type,
            'frequency_days': frequency_days,
            'last_performed': last_performed,
            'next_due': next_due,
            'assigned_to_id': request.assigned_to,
            'priority': priority,
            'estimated_cost': estimated_cost,
            'notes': request.notes,
            'is_active': bool(request.is_active),
        }

    def _check_references(self, fields: dict) -> None:
        if fields['maintenance_type_id'] is not None:
            self.stores.maintenance_types.get(fields['maintenance_type_id'])
        if fields['assigned_to_id'] is not None:
            self.stores.users.get(fields['assigned_to_id'])

    def _load(self, schedule_id: int) -> MaintenanceSchedule:
        schedule = db.session.get(MaintenanceSchedule, schedule_id)
        if schedule is None:
            raise NotFoundError("Maintenance schedule not found")
        return schedule

    def _query(self):
        return MaintenanceSchedule.query.order_by(MaintenanceSchedule.next_due.asc(), MaintenanceSchedule.id.asc())

    def _active_query(self):
        return self._query().filter(MaintenanceSchedule.is_active.is_(True))

    def _view(self, schedule: MaintenanceSchedule) -> ScheduleView:
        return ScheduleView.from_model(schedule, self.clock.today())

    def _views(self, query) -> List[ScheduleView]:
        schedules = query.all()
        logger.debug(f"Loaded {len(schedules)} maintenance schedules")
        today = self.clock.today()
        return [ScheduleView.from_model(s, today) for s in schedules]
