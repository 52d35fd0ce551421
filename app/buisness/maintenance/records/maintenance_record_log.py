"""
Maintenance Record Log
Records maintenance work as it is performed.

Recording work does not move the linked schedule forward; callers complete
the schedule explicitly through MaintenanceScheduleManager.complete().
"""

from typing import List, Optional

from app import db
from app.data.maintenance.maintenance_record import MaintenanceRecord
from app.data.maintenance.maintenance_schedule import MaintenanceSchedule
from app.buisness.core.errors import NotFoundError
from app.buisness.core.unit_of_work import unit_of_work
from app.buisness.core.validators import (
    parse_date,
    parse_optional_money,
    validate_choice,
    validate_id,
    validate_text,
)
from app.buisness.maintenance.records.record_struct import MaintenanceRecordView, RecordMaintenanceRequest
from app.services.core.stores import Stores
from app.logger import get_logger

logger = get_logger("asset_lifecycle.domain.maintenance.records")

RECORD_STATUSES = ('COMPLETED', 'IN_PROGRESS', 'CANCELLED', 'SCHEDULED')


class MaintenanceRecordLog:
    """Append-only maintenance history per asset and per schedule"""

    def __init__(self, stores: Optional[Stores] = None):
        self.stores = stores or Stores()

    def record(self, request: RecordMaintenanceRequest, user_id: Optional[int] = None) -> MaintenanceRecordView:
        """
        Append a record of performed work.

        Raises:
            ValidationError: On malformed input
            NotFoundError: If the asset, performer or referenced schedule does not exist
        """
        validate_id(request.asset_id, "Asset ID")
        validate_id(request.performed_by, "Performed By")
        performed_date = parse_date(request.performed_date, "Performed Date")
        validate_text(request.maintenance_type, "Maintenance type", 100)
        status = validate_choice(request.status, RECORD_STATUSES, "Status")
        if request.schedule_id is not None:
            validate_id(request.schedule_id, "Schedule ID")
        duration_hours = parse_optional_money(request.duration_hours, "Duration Hours")
        cost = parse_optional_money(request.cost, "Cost")

        self.stores.assets.get(request.asset_id)
        self.stores.users.get(request.performed_by)
        if request.schedule_id is not None and db.session.get(MaintenanceSchedule, request.schedule_id) is None:
            raise NotFoundError("Maintenance schedule not found")

        with unit_of_work("record maintenance"):
            record = MaintenanceRecord(
                asset_id=request.asset_id,
                schedule_id=request.schedule_id,
                performed_by_id=request.performed_by,
                maintenance_type=request.maintenance_type,
                performed_date=performed_date,
                duration_hours=duration_hours,
                cost=cost,
                description=request.description,
                parts_replaced=request.parts_replaced,
                status=status,
                created_by_id=user_id,
            )
            db.session.add(record)
            db.session.flush()
            logger.info(f"Recorded {record.maintenance_type} on asset {record.asset_id} performed {performed_date}")

        return MaintenanceRecordView.from_model(record)

    def for_asset(self, asset_id: int) -> List[MaintenanceRecordView]:
        validate_id(asset_id, "Asset ID")
        self.stores.assets.get(asset_id)
        return self._views(MaintenanceRecord.query.filter(MaintenanceRecord.asset_id == asset_id))

    def for_schedule(self, schedule_id: int) -> List[MaintenanceRecordView]:
        """Records pointing at schedule_id, including ones left behind by a deleted schedule"""
        validate_id(schedule_id, "Schedule ID")
        return self._views(MaintenanceRecord.query.filter(MaintenanceRecord.schedule_id == schedule_id))

    def _views(self, query) -> List[MaintenanceRecordView]:
        records = query.order_by(MaintenanceRecord.performed_date.desc(), MaintenanceRecord.id.desc()).all()
        return [MaintenanceRecordView.from_model(r) for r in records]
