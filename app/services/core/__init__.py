"""
Core Services
Read-only stores for the core entities consumed by the lifecycle engine
(assets, users, locations, categories, vendors, licenses, subscriptions,
maintenance types).
"""

from .stores import (
    EntityStore,
    AssetStore,
    UserStore,
    LocationStore,
    AssetCategoryStore,
    VendorStore,
    LicenseStore,
    SubscriptionStore,
    MaintenanceTypeStore,
    Stores,
)

__all__ = [
    'EntityStore',
    'AssetStore',
    'UserStore',
    'LocationStore',
    'AssetCategoryStore',
    'VendorStore',
    'LicenseStore',
    'SubscriptionStore',
    'MaintenanceTypeStore',
    'Stores',
]
