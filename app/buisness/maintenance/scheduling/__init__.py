"""
Maintenance scheduling
Recurrence rules and the lifecycle of recurring maintenance schedules.
"""

from app.buisness.maintenance.scheduling.recurrence import RecurrenceCalculator
from app.buisness.maintenance.scheduling.schedule_struct import (
    CreateScheduleRequest,
    UpdateScheduleRequest,
    ScheduleView,
    ScheduleSummary,
)
from app.buisness.maintenance.scheduling.maintenance_schedule_manager import MaintenanceScheduleManager

__all__ = [
    'RecurrenceCalculator',
    'CreateScheduleRequest',
    'UpdateScheduleRequest',
    'ScheduleView',
    'ScheduleSummary',
    'MaintenanceScheduleManager',
]
