"""
Generic data insertion mixin for SQLAlchemy models
Provides from_dict and the create helpers used for inserts and seeding

Used by every persisted model through UserCreatedBase (and directly by User).
"""

from app import db
from sqlalchemy import inspect
from app.logger import get_logger

logger = get_logger("asset_lifecycle.domain.core.data_insertion")


class DataInsertionMixin:
    """
    Mixin that provides generic data insertion capabilities for SQLAlchemy models

    This mixin adds:
    - from_dict(): Create model instance from dictionary
    - create_from_dict(): Create and save model instance from dictionary
    - bulk_create_from_dicts(): Create multiple instances from list of dictionaries
    """

    @classmethod
    def from_dict(cls, data_dict, user_id=None, skip_fields=None):
        """
        Create a model instance from a dictionary

        Args:
            data_dict (dict): Dictionary containing model data
            user_id (int, optional): User ID for audit fields
            skip_fields (list, optional): Fields to skip during creation

        Returns:
            Model instance (not saved to database)
        """
        if skip_fields is None:
            skip_fields = []

        mapper = inspect(cls)
        columns = {c.key for c in mapper.columns}

        # Filter data to only include valid columns
        filtered_data = {}
        for key, value in data_dict.items():
            if key not in columns or key in skip_fields:
                continue
            if key in ['created_at', 'updated_at'] and value is None:
                # Let column defaults fill timestamps
                continue
            filtered_data[key] = value

        instance = cls(**filtered_data)

        if user_id is not None and hasattr(instance, 'created_by_id') and not instance.created_by_id:
            instance.created_by_id = user_id

        return instance

    @classmethod
    def create_from_dict(cls, data_dict, user_id=None, skip_fields=None, commit=True):
        """
        Create and save a model instance from dictionary

        Args:
            data_dict (dict): Dictionary containing model data
            user_id (int, optional): User ID for audit fields
            skip_fields (list, optional): Fields to skip during creation
            commit (bool): Whether to commit the transaction

        Returns:
            Model instance (saved to database)
        """
        instance = cls.from_dict(data_dict, user_id, skip_fields)

        try:
            db.session.add(instance)
            if commit:
                db.session.commit()
                logger.debug(f"Created {cls.__name__}: {instance}")
            else:
                db.session.flush()
            return instance
        except Exception as e:
            db.session.rollback()
            logger.error(f"Error creating {cls.__name__}: {e}")
            raise

    @classmethod
    def bulk_create_from_dicts(cls, data_list, user_id=None, skip_fields=None, commit=True):
        """
        Create multiple model instances from list of dictionaries

        Args:
            data_list (list): List of dictionaries containing model data
            user_id (int, optional): User ID for audit fields
            skip_fields (list, optional): Fields to skip during creation
            commit (bool): Whether to commit the transaction

        Returns:
            list: List of created model instances
        """
        instances = []

        for data_dict in data_list:
            instance = cls.from_dict(data_dict, user_id, skip_fields)
            instances.append(instance)
            db.session.add(instance)

        try:
            if commit:
                db.session.commit()
                logger.info(f"Created {len(instances)} {cls.__name__} instances")
            else:
                db.session.flush()
            return instances
        except Exception as e:
            db.session.rollback()
            logger.error(f"Error bulk creating {cls.__name__}: {e}")
            raise
