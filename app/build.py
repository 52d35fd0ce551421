#!/usr/bin/env python3
"""
Build orchestrator for the Asset Lifecycle engine
Creates the schema and optionally loads the demo data set
"""

from app import create_app, db
from app.logger import get_logger

logger = get_logger("asset_lifecycle.build")


def build_models():
    """Create every table registered on the db metadata"""
    logger.info("Creating database tables...")
    db.create_all()
    logger.info(f"Tables ready: {', '.join(sorted(db.metadata.tables))}")


def build_database(seed_demo_data=False, app=None):
    """
    Build the database

    Args:
        seed_demo_data (bool): Whether to insert the demo data set (default: False)
        app (Flask, optional): Application to build against (default: a new create_app())
    """
    app = app or create_app()

    with app.app_context():
        logger.info(f"Starting database build (seed_demo_data={seed_demo_data})")
        build_models()

        if seed_demo_data:
            from app.debug.debug_data_manager import insert_debug_data
            logger.info("Inserting demo data...")
            try:
                insert_debug_data(enabled=True)
            except Exception as e:
                logger.error(f"Demo data insertion failed: {e}")
                raise

        logger.info("Database build completed successfully")

    return app
