"""
Pytest configuration and fixtures for the lifecycle engine tests
"""
import os

# Keep test runs off the log files
os.environ.setdefault('LOG_TO_FILE', 'false')
os.environ.setdefault('LOG_LEVEL', 'WARNING')

from datetime import date, datetime
from decimal import Decimal

import pytest
from app import create_app
from app import db as _db
from app.buisness.core.clock import FixedClock
from app.data.core.user import User
from app.data.core.location import Location
from app.data.core.asset_category import AssetCategory
from app.data.core.vendor import Vendor
from app.data.core.asset import Asset
from app.data.licensing.software_license import SoftwareLicense
from app.data.licensing.subscription import Subscription
from app.data.maintenance.maintenance_type import MaintenanceType
from app.data.maintenance.maintenance_schedule import MaintenanceSchedule
from app.data.maintenance.maintenance_record import MaintenanceRecord
from app.data.issues.asset_issue import AssetIssue

# Every date-sensitive test runs on this instant unless it moves the clock
TODAY = date(2024, 1, 15)
NOW = datetime(2024, 1, 15, 9, 0, 0)


@pytest.fixture(scope='session')
def app():
    """Create Flask application backed by an in-memory database"""
    app = create_app({
        'TESTING': True,
        'SQLALCHEMY_DATABASE_URI': 'sqlite://',
    })

    with app.app_context():
        yield app


@pytest.fixture(scope='function')
def session(app):
    """Fresh schema per test"""
    _db.create_all()
    yield _db.session
    _db.session.remove()
    _db.drop_all()


@pytest.fixture(scope='function')
def clock():
    return FixedClock(NOW)


@pytest.fixture(scope='function')
def factory(session):
    return ModelFactory(session)


class ModelFactory:
    """Inserts rows directly, bypassing the managers under test"""

    def __init__(self, session):
        self.session = session
        self._serial = 0

    def _save(self, instance):
        self.session.add(instance)
        self.session.commit()
        return instance

    def user(self, **fields):
        self._serial += 1
        fields.setdefault('username', f'user{self._serial}')
        fields.setdefault('email', f'user{self._serial}@example.com')
        fields.setdefault('first_name', 'Test')
        fields.setdefault('last_name', f'User{self._serial}')
        return self._save(User(**fields))

    def location(self, name='Head Office', **fields):
        return self._save(Location(name=name, **fields))

    def category(self, name='Laptops', **fields):
        return self._save(AssetCategory(name=name, **fields))

    def vendor(self, name='Northwind', **fields):
        return self._save(Vendor(name=name, **fields))

    def asset(self, **fields):
        self._serial += 1
        fields.setdefault('name', f'Asset {self._serial}')
        fields.setdefault('serial_number', f'SN-{self._serial:04d}')
        fields.setdefault('status', 'IN_USE')
        return self._save(Asset(**fields))

    def license(self, **fields):
        fields.setdefault('name', 'Office Suite')
        return self._save(SoftwareLicense(**fields))

    def subscription(self, **fields):
        fields.setdefault('name', 'Cloud Storage')
        return self._save(Subscription(**fields))

    def maintenance_type(self, name='Inspection', **fields):
        return self._save(MaintenanceType(name=name, **fields))

    def schedule(self, asset, **fields):
        fields.setdefault('frequency_days', 30)
        fields.setdefault('next_due', TODAY)
        fields.setdefault('is_active', True)
        return self._save(MaintenanceSchedule(asset_id=asset.id, **fields))

    def record(self, asset, performed_by, **fields):
        fields.setdefault('maintenance_type', 'Inspection')
        fields.setdefault('performed_date', TODAY)
        if 'cost' in fields and fields['cost'] is not None:
            fields['cost'] = Decimal(fields['cost'])
        return self._save(MaintenanceRecord(asset_id=asset.id, performed_by_id=performed_by.id, **fields))

    def issue(self, asset, reported_by, **fields):
        fields.setdefault('issue_type', 'HARDWARE_FAILURE')
        fields.setdefault('severity', 'MEDIUM')
        fields.setdefault('issue_description', 'Does not power on')
        fields.setdefault('status', 'OPEN')
        fields.setdefault('reported_at', NOW)
        return self._save(AssetIssue(asset_id=asset.id, reported_by_id=reported_by.id, **fields))
