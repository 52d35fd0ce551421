"""
Tests for MaintenanceScheduleManager
"""

from dataclasses import replace
from datetime import date
from decimal import Decimal

import pytest

from app.buisness.core.errors import NotFoundError, ValidationError
from app.buisness.maintenance.scheduling import (
    CreateScheduleRequest,
    MaintenanceScheduleManager,
    UpdateScheduleRequest,
)
from app.data.maintenance.maintenance_record import MaintenanceRecord
from app.data.maintenance.maintenance_schedule import MaintenanceSchedule


@pytest.fixture
def manager(session, clock):
    return MaintenanceScheduleManager(clock=clock)


@pytest.fixture
def asset(factory):
    return factory.asset(name='File Server')


def _request(asset, **overrides):
    fields = dict(asset_id=asset.id, frequency_days=30, next_due='2024-01-10')
    fields.update(overrides)
    return CreateScheduleRequest(**fields)


def test_complete_reanchors_on_completion_date(manager, asset):
    """Schedule due 2024-01-10, completed late on 2024-01-15, is next due 2024-02-14"""
    created = manager.create(_request(asset))
    assert created.is_overdue

    completed = manager.complete(created.id, '2024-01-15')

    assert completed.next_due == date(2024, 2, 14)
    assert completed.last_performed == date(2024, 1, 15)
    assert completed.is_active
    assert not completed.is_overdue
    assert completed.days_until_due == 30


def test_complete_ignores_previous_due_date(manager, asset):
    created = manager.create(_request(asset, next_due='2030-06-01', frequency_days=7))
    completed = manager.complete(created.id, date(2024, 1, 1))
    assert completed.next_due == date(2024, 1, 8)


def test_complete_leaves_inactive_schedule_inactive(manager, asset):
    created = manager.create(_request(asset, is_active=False))
    completed = manager.complete(created.id, '2024-01-15')
    assert completed.is_active is False


def test_complete_missing_schedule(manager, session):
    with pytest.raises(NotFoundError):
        manager.complete(999, '2024-01-15')


@pytest.mark.parametrize('frequency', [0, -5, 3651])
def test_frequency_out_of_bounds_rejected(manager, asset, frequency):
    with pytest.raises(ValidationError):
        manager.create(_request(asset, frequency_days=frequency))
    assert MaintenanceSchedule.query.count() == 0


@pytest.mark.parametrize('frequency', [1, 3650])
def test_frequency_bounds_accepted(manager, asset, frequency):
    assert manager.create(_request(asset, frequency_days=frequency)).frequency_days == frequency


def test_frequency_error_messages(manager, asset):
    with pytest.raises(ValidationError, match="must be positive"):
        manager.create(_request(asset, frequency_days=0))
    with pytest.raises(ValidationError, match="cannot exceed 10 years"):
        manager.create(_request(asset, frequency_days=4000))


def test_dates_must_parse(manager, asset):
    with pytest.raises(ValidationError):
        manager.create(_request(asset, next_due='10/01/2024'))
    with pytest.raises(ValidationError):
        manager.create(_request(asset, last_performed='2024-13-01'))


def test_priority_is_validated_and_normalised(manager, asset):
    with pytest.raises(ValidationError):
        manager.create(_request(asset, priority='URGENT'))

    created = manager.create(_request(asset, priority='high'))
    assert created.priority == 'HIGH'


@pytest.mark.parametrize('cost', ['-1.00', '10.123', '100000000.00', 'abc'])
def test_invalid_estimated_cost_rejected(manager, asset, cost):
    with pytest.raises(ValidationError):
        manager.create(_request(asset, estimated_cost=cost))


def test_estimated_cost_stored_as_decimal(manager, asset):
    created = manager.create(_request(asset, estimated_cost='99999999.99'))
    assert created.estimated_cost == Decimal('99999999.99')
    assert created.to_dict()['estimated_cost'] == '99999999.99'


def test_maintenance_type_label_required_with_id(manager, asset, factory):
    mtype = factory.maintenance_type('Inspection')

    with pytest.raises(ValidationError, match="Maintenance type name is required"):
        manager.create(_request(asset, maintenance_type_id=mtype.id))

    created = manager.create(_request(asset, maintenance_type_id=mtype.id, maintenance_type='Inspection'))
    assert created.maintenance_type_name == 'Inspection'


def test_missing_references_are_not_found(manager, asset):
    with pytest.raises(NotFoundError, match="Asset not found"):
        manager.create(_request(asset, asset_id=asset.id + 100))
    with pytest.raises(NotFoundError, match="Maintenance type not found"):
        manager.create(_request(asset, maintenance_type_id=42, maintenance_type='Inspection'))
    with pytest.raises(NotFoundError, match="User not found"):
        manager.create(_request(asset, assigned_to=42))


def test_non_positive_asset_id_is_validation_error(manager, session):
    with pytest.raises(ValidationError):
        manager.create(CreateScheduleRequest(asset_id=0, frequency_days=30, next_due='2024-01-10'))


def test_view_includes_display_names(manager, asset, factory):
    user = factory.user(first_name='Jordan', last_name='Tech')
    created = manager.create(_request(asset, assigned_to=user.id))

    assert created.asset_name == 'File Server'
    assert created.assigned_to == user.id
    assert created.assigned_to_name == 'Jordan Tech'


def test_overdue_view_omits_days_until_due(manager, asset):
    overdue = manager.create(_request(asset, next_due='2024-01-10'))
    upcoming = manager.create(_request(asset, next_due='2024-01-20'))

    assert 'days_until_due' not in overdue.to_dict()
    assert overdue.to_dict()['is_overdue'] is True
    assert upcoming.to_dict()['days_until_due'] == 5


def test_update_replaces_fields_but_not_asset(manager, asset, factory):
    created = manager.create(_request(asset, priority='LOW', notes='first'))

    updated = manager.update(created.id, UpdateScheduleRequest(
        frequency_days=60, next_due='2024-03-01', priority='CRITICAL',
    ))

    assert updated.asset_id == asset.id
    assert updated.frequency_days == 60
    assert updated.next_due == date(2024, 3, 1)
    assert updated.priority == 'CRITICAL'
    assert updated.notes is None


def test_update_validates_like_create(manager, asset):
    created = manager.create(_request(asset))
    with pytest.raises(ValidationError):
        manager.update(created.id, UpdateScheduleRequest(frequency_days=0, next_due='2024-03-01'))
    with pytest.raises(NotFoundError):
        manager.update(created.id + 1, UpdateScheduleRequest(frequency_days=10, next_due='2024-03-01'))
    assert manager.get(created.id).frequency_days == 30


def test_deactivate_keeps_schedule(manager, asset):
    created = manager.create(_request(asset))
    deactivated = manager.deactivate(created.id)

    assert deactivated.is_active is False
    assert manager.get(created.id).is_active is False
    assert manager.active() == []


def test_delete_leaves_records_orphaned(manager, asset, factory):
    created = manager.create(_request(asset))
    tech = factory.user()
    factory.record(asset, tech, schedule_id=created.id)

    manager.delete(created.id)

    with pytest.raises(NotFoundError):
        manager.get(created.id)
    record = MaintenanceRecord.query.one()
    assert record.schedule_id == created.id


def test_window_queries(manager, asset, factory):
    other = factory.asset()
    overdue = manager.create(_request(asset, next_due='2024-01-01'))
    today = manager.create(_request(asset, next_due='2024-01-15'))
    this_week = manager.create(_request(other, next_due='2024-01-22'))
    later = manager.create(_request(other, next_due='2024-02-20'))
    manager.create(_request(other, next_due='2024-01-16', is_active=False))

    assert [s.id for s in manager.overdue()] == [overdue.id]
    assert [s.id for s in manager.due_today()] == [today.id]
    assert [s.id for s in manager.due_this_week()] == [today.id, this_week.id]
    assert [s.id for s in manager.due_in_range('2024-01-10', '2024-02-20')] == [today.id, this_week.id, later.id]
    assert [s.id for s in manager.active()] == [overdue.id, today.id, this_week.id, later.id]


def test_due_in_range_rejects_inverted_range(manager, session):
    with pytest.raises(ValidationError):
        manager.due_in_range('2024-02-01', '2024-01-01')


def test_lists_are_ordered_by_next_due(manager, asset):
    manager.create(_request(asset, next_due='2024-03-01'))
    manager.create(_request(asset, next_due='2024-01-01'))
    manager.create(_request(asset, next_due='2024-02-01'))

    assert [s.next_due for s in manager.list_all()] == [date(2024, 1, 1), date(2024, 2, 1), date(2024, 3, 1)]
    assert [s.next_due for s in manager.by_asset(asset.id)] == [date(2024, 1, 1), date(2024, 2, 1), date(2024, 3, 1)]


def test_filtered_queries_check_references(manager, asset, factory):
    user = factory.user()
    assigned = manager.create(_request(asset, assigned_to=user.id, priority='HIGH'))
    manager.create(_request(asset, priority='LOW'))

    assert [s.id for s in manager.by_assigned_user(user.id)] == [assigned.id]
    assert [s.id for s in manager.by_priority('high')] == [assigned.id]

    with pytest.raises(NotFoundError):
        manager.by_asset(asset.id + 50)
    with pytest.raises(NotFoundError):
        manager.by_assigned_user(user.id + 50)
    with pytest.raises(ValidationError):
        manager.by_priority('SOMEDAY')


def test_summary(manager, asset):
    base = _request(asset)
    manager.create(replace(base, next_due='2024-01-01', estimated_cost='100.00'))
    manager.create(replace(base, next_due='2024-01-15', estimated_cost='50.50'))
    manager.create(replace(base, next_due='2024-01-20'))
    manager.create(replace(base, next_due='2024-01-01', estimated_cost='999.00', is_active=False))

    summary = manager.summary()

    assert summary.total_schedules == 4
    assert summary.active_schedules == 3
    assert summary.overdue_schedules == 1
    assert summary.due_today_schedules == 1
    assert summary.due_this_week_schedules == 2
    assert summary.total_estimated_cost == Decimal('150.50')


def test_summary_cost_absent_without_costs(manager, asset):
    manager.create(_request(asset))
    assert manager.summary().total_estimated_cost is None
    assert manager.summary().to_dict()['total_estimated_cost'] is None
