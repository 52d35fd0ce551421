"""
Core models package for the asset lifecycle engine
"""

from .user import User
from .location import Location
from .asset_category import AssetCategory
from .vendor import Vendor
from .asset import Asset

__all__ = [
    'User',
    'Location',
    'AssetCategory',
    'Vendor',
    'Asset',
]
