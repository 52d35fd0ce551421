"""
Maintenance record structs
"""

from dataclasses import dataclass, asdict
from datetime import date
from decimal import Decimal
from typing import Optional, Union


@dataclass
class RecordMaintenanceRequest:
    asset_id: int
    performed_by: int
    maintenance_type: str
    performed_date: Union[str, date]
    schedule_id: Optional[int] = None
    duration_hours: Optional[Union[str, Decimal]] = None
    cost: Optional[Union[str, Decimal]] = None
    description: Optional[str] = None
    parts_replaced: Optional[str] = None
    status: str = 'COMPLETED'


@dataclass
class MaintenanceRecordView:
    id: int
    asset_id: int
    asset_name: Optional[str]
    schedule_id: Optional[int]
    performed_by: int
    performed_by_name: Optional[str]
    maintenance_type: str
    performed_date: date
    duration_hours: Optional[Decimal]
    cost: Optional[Decimal]
    description: Optional[str]
    parts_replaced: Optional[str]
    status: str

    @classmethod
    def from_model(cls, record) -> 'MaintenanceRecordView':
        performed_by_name = record.performed_by.display_name if record.performed_by else None
        return cls(
            id=record.id,
            asset_id=record.asset_id,
            asset_name=record.asset.name if record.asset else None,
            schedule_id=record.schedule_id,
            performed_by=record.performed_by_id,
            performed_by_name=performed_by_name or None,
            maintenance_type=record.maintenance_type,
            performed_date=record.performed_date,
            duration_hours=record.duration_hours,
            cost=record.cost,
            description=record.description,
            parts_replaced=record.parts_replaced,
            status=record.status,
        )

    def to_dict(self) -> dict:
        data = asdict(self)
        data['performed_date'] = self.performed_date.isoformat()
        for key in ('duration_hours', 'cost'):
            if data[key] is not None:
                data[key] = str(data[key])
        return data
