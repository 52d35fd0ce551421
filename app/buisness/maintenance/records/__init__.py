"""
Maintenance records
Append-only history of maintenance work actually performed.
"""

from app.buisness.maintenance.records.record_struct import RecordMaintenanceRequest, MaintenanceRecordView
from app.buisness.maintenance.records.maintenance_record_log import MaintenanceRecordLog

__all__ = [
    'RecordMaintenanceRequest',
    'MaintenanceRecordView',
    'MaintenanceRecordLog',
]
