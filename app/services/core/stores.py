"""
Entity Stores
Read-only collaborators consumed by the lifecycle engine.

Each store exposes the same minimal contract:
- get(id): the row, or NotFoundError
- find(id): the row or None
- list(**filters): rows matching equality filters, ordered by id
- exists(id): bool
"""

from typing import List, Optional
from app import db
from app.data.core.asset import Asset
from app.data.core.asset_category import AssetCategory
from app.data.core.location import Location
from app.data.core.user import User
from app.data.core.vendor import Vendor
from app.data.licensing.software_license import SoftwareLicense
from app.data.licensing.subscription import Subscription
from app.data.maintenance.maintenance_type import MaintenanceType
from app.buisness.core.errors import NotFoundError


class EntityStore:
    """Generic read-only store over one model"""

    model = None
    label = 'Record'

    def find(self, entity_id: int):
        if entity_id is None:
            return None
        return db.session.get(self.model, entity_id)

    def get(self, entity_id: int):
        """
        Get a row by id.

        Raises:
            NotFoundError: If no row has this id
        """
        row = self.find(entity_id)
        if row is None:
            raise NotFoundError(f"{self.label} not found")
        return row

    def exists(self, entity_id: int) -> bool:
        return self.find(entity_id) is not None

    def list(self, **filters) -> List:
        """List rows, applying equality filters whose value is not None"""
        query = self.model.query
        active_filters = {key: value for key, value in filters.items() if value is not None}
        if active_filters:
            query = query.filter_by(**active_filters)
        return query.order_by(self.model.id).all()


class AssetStore(EntityStore):
    model = Asset
    label = 'Asset'


class UserStore(EntityStore):
    model = User
    label = 'User'


class LocationStore(EntityStore):
    model = Location
    label = 'Location'


class AssetCategoryStore(EntityStore):
    model = AssetCategory
    label = 'Asset category'


class VendorStore(EntityStore):
    model = Vendor
    label = 'Vendor'


class LicenseStore(EntityStore):
    model = SoftwareLicense
    label = 'Software license'


class SubscriptionStore(EntityStore):
    model = Subscription
    label = 'Subscription'


class MaintenanceTypeStore(EntityStore):
    model = MaintenanceType
    label = 'Maintenance type'


class Stores:
    """Bundle of every store, passed to the managers and the aggregator"""

    def __init__(
        self,
        assets: Optional[AssetStore] = None,
        users: Optional[UserStore] = None,
        locations: Optional[LocationStore] = None,
        categories: Optional[AssetCategoryStore] = None,
        vendors: Optional[VendorStore] = None,
        licenses: Optional[LicenseStore] = None,
        subscriptions: Optional[SubscriptionStore] = None,
        maintenance_types: Optional[MaintenanceTypeStore] = None,
    ):
        self.assets = assets or AssetStore()
        self.users = users or UserStore()
        self.locations = locations or LocationStore()
        self.categories = categories or AssetCategoryStore()
        self.vendors = vendors or VendorStore()
        self.licenses = licenses or LicenseStore()
        self.subscriptions = subscriptions or SubscriptionStore()
        self.maintenance_types = maintenance_types or MaintenanceTypeStore()
