"""
Maintenance Business Layer
Recurring maintenance schedules and the log of work actually performed.

Organization:
- scheduling/ : RecurrenceCalculator, schedule structs, MaintenanceScheduleManager
- records/ : MaintenanceRecordLog (append-only history feeding the dashboard)
"""

from app.buisness.maintenance.scheduling import (
    RecurrenceCalculator,
    MaintenanceScheduleManager,
    CreateScheduleRequest,
    UpdateScheduleRequest,
    ScheduleView,
    ScheduleSummary,
)
from app.buisness.maintenance.records import (
    MaintenanceRecordLog,
    RecordMaintenanceRequest,
    MaintenanceRecordView,
)

__all__ = [
    # Scheduling
    'RecurrenceCalculator',
    'MaintenanceScheduleManager',
    'CreateScheduleRequest',
    'UpdateScheduleRequest',
    'ScheduleView',
    'ScheduleSummary',
    # Records
    'MaintenanceRecordLog',
    'RecordMaintenanceRequest',
    'MaintenanceRecordView',
]
