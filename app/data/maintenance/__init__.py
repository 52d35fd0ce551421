from .maintenance_type import MaintenanceType
from .maintenance_schedule import MaintenanceSchedule
from .maintenance_record import MaintenanceRecord

__all__ = [
    'MaintenanceType',
    'MaintenanceSchedule',
    'MaintenanceRecord',
]
