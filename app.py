#!/usr/bin/env python3
"""
Run script for the Asset Lifecycle engine
"""

from app import create_app
from app.build import build_database
from app.logger import get_logger
import argparse
import json
import sys
from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

logger = get_logger("asset_lifecycle.run")


def parse_arguments(argv=None):
    """Parse command line arguments"""
    parser = argparse.ArgumentParser(description='Asset Lifecycle & Aggregation Engine')
    parser.add_argument('--build-only', action='store_true',
                        help='Create database tables and exit')
    parser.add_argument('--seed-demo', action='store_true',
                        help='Insert the demo data set after creating tables')
    parser.add_argument('--overview', action='store_true',
                        help='Print the dashboard overview as JSON')
    parser.add_argument('--summary', action='store_true',
                        help='Print the maintenance schedule summary as JSON')
    parser.add_argument('--location-id', type=int, default=None,
                        help='Narrow the overview to one location')
    parser.add_argument('--category-id', type=int, default=None,
                        help='Narrow the overview to one asset category')
    return parser.parse_args(argv)


def main(argv=None):
    args = parse_arguments(argv)

    app = create_app()
    logger.debug("Starting Asset Lifecycle engine...")

    build_database(seed_demo_data=args.seed_demo, app=app)

    if args.build_only:
        logger.debug("Build completed. Exiting.")
        return 0

    with app.app_context():
        if args.overview:
            from app.services.dashboard import DashboardFilters, MetricsAggregator
            filters = DashboardFilters(location_id=args.location_id, category_id=args.category_id)
            print(json.dumps(MetricsAggregator().overview(filters).to_dict(), indent=2))

        if args.summary:
            from app.buisness.maintenance import MaintenanceScheduleManager
            print(json.dumps(MaintenanceScheduleManager().summary().to_dict(), indent=2))

    return 0


if __name__ == '__main__':
    sys.exit(main())
