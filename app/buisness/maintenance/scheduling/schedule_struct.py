"""
Maintenance schedule structs
Request payloads and read views for MaintenanceScheduleManager - NO business logic.
"""

from dataclasses import dataclass, asdict
from datetime import date
from decimal import Decimal
from typing import Optional, Union

from app.buisness.maintenance.scheduling.recurrence import RecurrenceCalculator


@dataclass
class CreateScheduleRequest:
    asset_id: int
    frequency_days: int
    next_due: Union[str, date]
    maintenance_type_id: Optional[int] = None
    maintenance_type: Optional[str] = None
    last_performed: Optional[Union[str, date]] = None
    assigned_to: Optional[int] = None
    priority: Optional[str] = None
    estimated_cost: Optional[Union[str, Decimal]] = None
    notes: Optional[str] = None
    is_active: bool = True


@dataclass
class UpdateScheduleRequest:
    """Full replace of the mutable fields; the asset cannot change"""
    frequency_days: int
    next_due: Union[str, date]
    maintenance_type_id: Optional[int] = None
    maintenance_type: Optional[str] = None
    last_performed: Optional[Union[str, date]] = None
    assigned_to: Optional[int] = None
    priority: Optional[str] = None
    estimated_cost: Optional[Union[str, Decimal]] = None
    notes: Optional[str] = None
    is_active: bool = True


@dataclass
class ScheduleView:
    id: int
    asset_id: int
    asset_name: Optional[str]
    maintenance_type_id: Optional[int]
    maintenance_type: Optional[str]
    maintenance_type_name: Optional[str]
    frequency_days: int
    last_performed: Optional[date]
    next_due: date
    assigned_to: Optional[int]
    assigned_to_name: Optional[str]
    priority: Optional[str]
    estimated_cost: Optional[Decimal]
    notes: Optional[str]
    is_active: bool
    created_at: Optional[str]
    is_overdue: bool
    days_until_due: Optional[int]

    @classmethod
    def from_model(cls, schedule, today: date) -> 'ScheduleView':
        assigned_to_name = schedule.assigned_to.display_name if schedule.assigned_to else None
        return cls(
            id=schedule.id,
            asset_id=schedule.asset_id,
            asset_name=schedule.asset.name if schedule.asset else None,
            maintenance_type_id=schedule.maintenance_type_id,
            maintenance_type=schedule.maintenance_type,
            maintenance_type_name=schedule.maintenance_type_ref.name if schedule.maintenance_type_ref else None,
            frequency_days=schedule.frequency_days,
            last_performed=schedule.last_performed,
            next_due=schedule.next_due,
            assigned_to=schedule.assigned_to_id,
            assigned_to_name=assigned_to_name or None,
            priority=schedule.priority,
            estimated_cost=schedule.estimated_cost,
            notes=schedule.notes,
            is_active=schedule.is_active,
            created_at=schedule.created_at.isoformat() if schedule.created_at else None,
            is_overdue=RecurrenceCalculator.is_overdue(schedule.next_due, today),
            days_until_due=RecurrenceCalculator.days_until_due(schedule.next_due, today),
        )

    def to_dict(self) -> dict:
        data = asdict(self)
        data['last_performed'] = self.last_performed.isoformat() if self.last_performed else None
        data['next_due'] = self.next_due.isoformat()
        data['estimated_cost'] = str(self.estimated_cost) if self.estimated_cost is not None else None
        if self.days_until_due is None:
            # Overdue schedules omit the field entirely
            del data['days_until_due']
        return data


@dataclass
class ScheduleSummary:
    total_schedules: int
    active_schedules: int
    overdue_schedules: int
    due_today_schedules: int
    due_this_week_schedules: int
    total_estimated_cost: Optional[Decimal] = None

    def to_dict(self) -> dict:
        data = asdict(self)
        data['total_estimated_cost'] = str(self.total_estimated_cost) if self.total_estimated_cost is not None else None
        return data
