from flask import Flask
from flask_sqlalchemy import SQLAlchemy
import os
from app.logger import get_logger

# Initialize extensions
db = SQLAlchemy()


def create_app(config=None):
    from pathlib import Path

    app = Flask(__name__)

    # Get singleton logger
    logger = get_logger("asset_lifecycle")
    logger.info("Initializing Flask application")

    # Prefer an explicit DATABASE_URL env var; if not provided, store the
    # SQLite database inside the project's `instance/` directory.
    db_env = os.environ.get('DATABASE_URL')
    if db_env:
        app.config['SQLALCHEMY_DATABASE_URI'] = db_env
    else:
        base_dir = Path(__file__).parent.parent
        instance_dir = base_dir / 'instance'
        instance_dir.mkdir(parents=True, exist_ok=True)
        default_db_path = instance_dir / 'asset_lifecycle.db'
        app.config['SQLALCHEMY_DATABASE_URI'] = f"sqlite:///{str(default_db_path.resolve())}"

    app.config['SQLALCHEMY_TRACK_MODIFICATIONS'] = False

    # Horizons used by the dashboard and issue statistics (days)
    app.config['UPCOMING_EVENTS_HORIZON_DAYS'] = int(os.environ.get('UPCOMING_EVENTS_HORIZON_DAYS', '30'))
    app.config['STALE_ISSUE_AGE_DAYS'] = int(os.environ.get('STALE_ISSUE_AGE_DAYS', '30'))

    if config:
        app.config.update(config)

    logger.debug(f"Database configured: {app.config['SQLALCHEMY_DATABASE_URI'].split(':')[0]}")

    # Initialize extensions with app
    db.init_app(app)

    logger.debug("Extensions initialized")

    # Import models to ensure they're registered with SQLAlchemy
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

    logger.debug("Models imported and registered")

    logger.info("Flask application initialization complete")

    return app
