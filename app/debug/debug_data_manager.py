#!/usr/bin/env python3
"""
Debug Data Manager
Central controller for demo data insertion

Handles:
- Loading debug data JSON files
- Checking if data is already present
- Resolving relative dates (<column>_offset_days) against today
- Following build order: core → licensing → maintenance → issues
- Fail-fast error handling
"""

from datetime import date, datetime, timedelta
from decimal import Decimal
from pathlib import Path
import json

from sqlalchemy import inspect

from app import db
from app.logger import get_logger

logger = get_logger("asset_lifecycle.debug_data_manager")

OFFSET_SUFFIX = '_offset_days'

# Build order and the model behind each section of a module file
MODULES = {
    'core': [
        ('Users', 'app.data.core.user', 'User'),
        ('Locations', 'app.data.core.location', 'Location'),
        ('Categories', 'app.data.core.asset_category', 'AssetCategory'),
        ('Vendors', 'app.data.core.vendor', 'Vendor'),
        ('Assets', 'app.data.core.asset', 'Asset'),
    ],
    'licensing': [
        ('Licenses', 'app.data.licensing.software_license', 'SoftwareLicense'),
        ('Subscriptions', 'app.data.licensing.subscription', 'Subscription'),
    ],
    'maintenance': [
        ('Types', 'app.data.maintenance.maintenance_type', 'MaintenanceType'),
        ('Schedules', 'app.data.maintenance.maintenance_schedule', 'MaintenanceSchedule'),
        ('Records', 'app.data.maintenance.maintenance_record', 'MaintenanceRecord'),
    ],
    'issues': [
        ('Issues', 'app.data.issues.asset_issue', 'AssetIssue'),
    ],
}


def insert_debug_data(enabled=True, today=None):
    """
    Insert demo data for every module

    Args:
        enabled (bool): Whether to insert debug data (default: True)
        today (date, optional): Anchor for relative dates (default: today)

    Returns:
        dict: Summary of inserted data

    Raises:
        Exception: If any debug data insertion fails (fail-fast)
    """
    if not enabled:
        logger.info("Debug data insertion is disabled")
        return {}

    today = today or date.today()
    summary = {}

    for module_name, sections in MODULES.items():
        try:
            debug_data = _load_debug_data_file(module_name)
            if not debug_data:
                logger.info(f"No debug data file found for {module_name}, skipping")
                summary[module_name] = {'status': 'skipped', 'reason': 'file_not_found'}
                continue

            if _check_debug_data_present(sections, debug_data):
                logger.info(f"Debug data for {module_name} already present, skipping")
                summary[module_name] = {'status': 'skipped', 'reason': 'data_present'}
                continue

            logger.info(f"Inserting debug data for {module_name}...")
            counts = _insert_module_debug_data(sections, debug_data, today)
            db.session.commit()
            summary[module_name] = {'status': 'inserted', 'counts': counts}
            logger.info(f"Successfully inserted debug data for {module_name}")

        except Exception as e:
            logger.error(f"Failed to insert debug data for {module_name}: {e}")
            db.session.rollback()
            raise

    logger.info("Debug data insertion completed successfully")
    return summary


def _model(module_path, class_name):
    module = __import__(module_path, fromlist=[class_name])
    return getattr(module, class_name)


def _load_debug_data_file(module_name):
    """
    Load debug data JSON file for a module

    Returns:
        dict: Debug data or None if file doesn't exist
    """
    debug_file = Path(__file__).parent / 'data' / f'{module_name}.json'

    if not debug_file.exists():
        return None

    try:
        with open(debug_file, 'r') as f:
            data = json.load(f)
        logger.debug(f"Loaded debug data file: {debug_file}")
        return data
    except json.JSONDecodeError as e:
        logger.error(f"Invalid JSON in {debug_file}: {e}")
        raise


def _check_debug_data_present(sections, debug_data):
    """Data counts as present when the first row of the first section already exists by id"""
    for section, module_path, class_name in sections:
        rows = debug_data.get(section) or []
        if rows and 'id' in rows[0]:
            model = _model(module_path, class_name)
            return db.session.get(model, rows[0]['id']) is not None
    return False


def _insert_module_debug_data(sections, debug_data, today):
    counts = {}
    for section, module_path, class_name in sections:
        rows = debug_data.get(section) or []
        if not rows:
            continue
        model = _model(module_path, class_name)
        resolved = [resolve_row(model, row, today) for row in rows]
        model.bulk_create_from_dicts(resolved, commit=False)
        counts[section] = len(resolved)
    return counts


def resolve_row(model, row, today):
    """
    Convert a JSON row into column values

    - "<column>_offset_days": N becomes today + N days (a datetime at 09:00 for DateTime columns)
    - Numeric columns are parsed as Decimal
    """
    columns = {c.key: c for c in inspect(model).columns}
    resolved = {}
    for key, value in row.items():
        if key.endswith(OFFSET_SUFFIX):
            column_name = key[:-len(OFFSET_SUFFIX)]
            day = today + timedelta(days=value)
            if isinstance(columns[column_name].type, db.DateTime):
                resolved[column_name] = datetime.combine(day, datetime.min.time()).replace(hour=9)
            else:
                resolved[column_name] = day
        elif key in columns and value is not None and isinstance(columns[key].type, db.Numeric):
            resolved[key] = Decimal(str(value))
        else:
            resolved[key] = value
    return resolved
