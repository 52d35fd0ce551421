"""
Tests for MaintenanceRecordLog
"""

from datetime import date
from decimal import Decimal

import pytest

from app.buisness.core.errors import NotFoundError, ValidationError
from app.buisness.maintenance import MaintenanceRecordLog, RecordMaintenanceRequest
from app.data.maintenance.maintenance_record import MaintenanceRecord


@pytest.fixture
def log(session):
    return MaintenanceRecordLog()


@pytest.fixture
def asset(factory):
    return factory.asset(name='Printer')


@pytest.fixture
def tech(factory):
    return factory.user(first_name='Jordan', last_name='Tech')


def test_record_work(log, asset, tech):
    view = log.record(RecordMaintenanceRequest(
        asset_id=asset.id,
        performed_by=tech.id,
        maintenance_type='Cleaning',
        performed_date='2024-01-12',
        duration_hours='1.50',
        cost='35.00',
    ))

    assert view.asset_name == 'Printer'
    assert view.performed_by_name == 'Jordan Tech'
    assert view.performed_date == date(2024, 1, 12)
    assert view.cost == Decimal('35.00')
    assert view.status == 'COMPLETED'
    assert view.to_dict()['cost'] == '35.00'


def test_recording_does_not_advance_schedule(log, asset, tech, factory):
    schedule = factory.schedule(asset, next_due=date(2024, 1, 10))

    log.record(RecordMaintenanceRequest(
        asset_id=asset.id, performed_by=tech.id, maintenance_type='Inspection',
        performed_date='2024-01-12', schedule_id=schedule.id,
    ))

    assert schedule.next_due == date(2024, 1, 10)
    assert schedule.last_performed is None


def test_validation(log, asset, tech):
    base = dict(asset_id=asset.id, performed_by=tech.id, maintenance_type='Inspection', performed_date='2024-01-12')

    with pytest.raises(ValidationError):
        log.record(RecordMaintenanceRequest(**{**base, 'maintenance_type': '  '}))
    with pytest.raises(ValidationError):
        log.record(RecordMaintenanceRequest(**{**base, 'maintenance_type': 'x' * 101}))
    with pytest.raises(ValidationError):
        log.record(RecordMaintenanceRequest(**{**base, 'performed_date': 'yesterday'}))
    with pytest.raises(ValidationError):
        log.record(RecordMaintenanceRequest(**{**base, 'status': 'DONE'}))
    with pytest.raises(ValidationError):
        log.record(RecordMaintenanceRequest(**{**base, 'cost': '-3'}))
    assert MaintenanceRecord.query.count() == 0


def test_missing_references(log, asset, tech):
    with pytest.raises(NotFoundError):
        log.record(RecordMaintenanceRequest(asset_id=asset.id + 9, performed_by=tech.id,
                                            maintenance_type='Inspection', performed_date='2024-01-12'))
    with pytest.raises(NotFoundError):
        log.record(RecordMaintenanceRequest(asset_id=asset.id, performed_by=tech.id + 9,
                                            maintenance_type='Inspection', performed_date='2024-01-12'))
    with pytest.raises(NotFoundError, match="Maintenance schedule not found"):
        log.record(RecordMaintenanceRequest(asset_id=asset.id, performed_by=tech.id, schedule_id=77,
                                            maintenance_type='Inspection', performed_date='2024-01-12'))


def test_history_newest_first(log, asset, tech, factory):
    schedule = factory.schedule(asset)
    for performed in ('2024-01-02', '2024-01-09', '2024-01-05'):
        log.record(RecordMaintenanceRequest(asset_id=asset.id, performed_by=tech.id, schedule_id=schedule.id,
                                            maintenance_type='Inspection', performed_date=performed))

    expected = [date(2024, 1, 9), date(2024, 1, 5), date(2024, 1, 2)]
    assert [r.performed_date for r in log.for_asset(asset.id)] == expected
    assert [r.performed_date for r in log.for_schedule(schedule.id)] == expected
