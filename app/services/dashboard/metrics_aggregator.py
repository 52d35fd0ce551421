"""
Metrics Aggregator
Read-only dashboard summaries over assets, maintenance, licences,
subscriptions and issues.

Every call re-reads the full collection it summarises; nothing is cached
between calls. overview() composes the individual reads without a shared
snapshot, so its sections may reflect slightly different points in time
under concurrent writes.
"""

from collections import Counter, OrderedDict
from datetime import date, timedelta
from decimal import Decimal, ROUND_HALF_EVEN, ROUND_HALF_UP
from typing import Iterable, List, Optional

from flask import current_app

from app.data.issues.asset_issue import AssetIssue
from app.data.maintenance.maintenance_record import MaintenanceRecord
from app.data.maintenance.maintenance_schedule import MaintenanceSchedule
from app.buisness.core.clock import Clock
from app.buisness.issues.issue_lifecycle import hours_between
from app.buisness.issues.state_machine import IssueStateMachine
from app.buisness.maintenance.scheduling.recurrence import RecurrenceCalculator
from app.services.core.stores import Stores
from app.services.dashboard.filters import DashboardFilters
from app.services.dashboard.metrics_structs import (
    AssetMaintenanceSummary,
    AssetMetrics,
    DashboardOverview,
    ExpiringLicense,
    ExpiringSubscription,
    ExpiringWarranty,
    FinancialSummary,
    IssueMetrics,
    MaintenanceMetrics,
    SoftwareLicenseMetrics,
    SubscriptionMetrics,
    UpcomingEvents,
    UpcomingMaintenance,
)
from app.logger import get_logger

logger = get_logger("asset_lifecycle.services.dashboard")

UNKNOWN = "Unknown"
DEFAULT_PRIORITY = "MEDIUM"
UPCOMING_EVENTS_HORIZON_DAYS = 30
TOP_MAINTENANCE_ASSETS = 5
DAYS_PER_YEAR = Decimal('365.25')
CENT = Decimal('0.01')
TENTH = Decimal('0.1')


def money(value: Decimal) -> Optional[str]:
    """Render a monetary total, or None when it is not positive"""
    return str(value) if value > 0 else None


def one_decimal(value: Decimal) -> str:
    """Format to one decimal place, halves rounded away from zero"""
    return str(value.quantize(TENTH, rounding=ROUND_HALF_UP))


def names_by_id(store) -> dict:
    return {row.id: row.name for row in store.list()}


def total(values: Iterable[Optional[Decimal]]) -> Decimal:
    return sum((v for v in values if v is not None), Decimal('0'))


def count_by(items, key) -> dict:
    return dict(Counter(key(item) for item in items))


class MetricsAggregator:
    """
    Dashboard metrics.

    Args:
        stores: Entity stores the asset, licence and subscription collections and
            the location, category and vendor names are read from
        clock: Source of "today"
        horizon_days: Look-ahead for expiring/upcoming items
            (defaults to the UPCOMING_EVENTS_HORIZON_DAYS app setting)
    """

    def __init__(self, stores: Optional[Stores] = None, clock: Optional[Clock] = None,
                 horizon_days: Optional[int] = None):
        self.stores = stores or Stores()
        self.clock = clock or Clock()
        self.horizon_days = horizon_days

    def asset_metrics(self, filters: Optional[DashboardFilters] = None) -> AssetMetrics:
        """
        Asset counts and value.

        total_assets always counts every asset; the location/category filters
        only narrow matching_assets and the breakdowns.
        """
        filters = filters or DashboardFilters()
        today = self.clock.today()

        all_assets = self.stores.assets.list()
        assets = [a for a in all_assets if filters.matches_asset(a)]
        categories = names_by_id(self.stores.categories)
        locations = names_by_id(self.stores.locations)

        ages = [(today - a.purchase_date).days for a in assets if a.purchase_date is not None]
        avg_age = None
        if ages:
            avg_age = f"{one_decimal(Decimal(sum(ages)) / len(ages) / DAYS_PER_YEAR)} years"

        return AssetMetrics(
            total_assets=len(all_assets),
            matching_assets=len(assets),
            assets_by_status=count_by(assets, lambda a: a.status or UNKNOWN),
            assets_by_category=count_by(assets, lambda a: categories.get(a.category_id, UNKNOWN)),
            assets_by_location=count_by(assets, lambda a: locations.get(a.location_id, UNKNOWN)),
            assets_near_warranty_expiry=sum(1 for a in assets if self._near_expiry(a.warranty_expiry, today)),
            unassigned_assets=sum(1 for a in assets if a.assigned_to_id is None),
            total_value=money(total(a.current_value for a in assets)),
            avg_asset_age=avg_age,
        )

    def maintenance_metrics(self, filters: Optional[DashboardFilters] = None) -> MaintenanceMetrics:
        """
        Maintenance record counts and costs plus schedule backlog.

        Location/category filters narrow records and schedules to matching
        assets; the date range narrows records by performed date.
        """
        filters = filters or DashboardFilters()
        today = self.clock.today()
        month_start = today.replace(day=1)

        records = [
            r for r in MaintenanceRecord.query.order_by(MaintenanceRecord.id).all()
            if filters.matches_asset(r.asset) and filters.matches_date(r.performed_date)
        ]
        this_month = [r for r in records if r.performed_date >= month_start]

        schedules = [
            s for s in MaintenanceSchedule.query.filter(MaintenanceSchedule.is_active.is_(True)).all()
            if filters.matches_asset(s.asset)
        ]

        costs = [r.cost for r in records if r.cost is not None]
        avg_cost = None
        if costs:
            avg_cost = str((total(costs) / len(costs)).quantize(CENT, rounding=ROUND_HALF_EVEN))

        return MaintenanceMetrics(
            total_maintenance_records=len(records),
            maintenance_this_month=len(this_month),
            pending_maintenance=sum(1 for s in schedules if s.next_due > today),
            overdue_maintenance=sum(1 for s in schedules if RecurrenceCalculator.is_overdue(s.next_due, today)),
            maintenance_by_type=count_by(records, lambda r: r.maintenance_type),
            maintenance_by_status=count_by(records, lambda r: r.status),
            top_maintenance_assets=self._top_maintenance_assets(records),
            maintenance_cost_this_month=money(total(r.cost for r in this_month)),
            avg_maintenance_cost=avg_cost,
        )

    def license_metrics(self) -> SoftwareLicenseMetrics:
        today = self.clock.today()
        licenses = self.stores.licenses.list()
        vendors = names_by_id(self.stores.vendors)

        total_seats = sum(lic.number_of_seats or 0 for lic in licenses)
        used_seats = sum(lic.seats_used or 0 for lic in licenses)
        utilization = f"{one_decimal(Decimal(used_seats) * 100 / total_seats)}%" if total_seats > 0 else "0%"

        return SoftwareLicenseMetrics(
            total_licenses=len(licenses),
            active_licenses=sum(1 for lic in licenses if lic.expiry_date is None or lic.expiry_date > today),
            expired_licenses=sum(1 for lic in licenses if lic.expiry_date is not None and lic.expiry_date < today),
            expiring_licenses=sum(1 for lic in licenses if self._near_expiry(lic.expiry_date, today)),
            license_utilization=utilization,
            total_seats=total_seats,
            used_seats=used_seats,
            licenses_by_vendor=count_by(licenses, lambda lic: vendors.get(lic.vendor_id, UNKNOWN)),
        )

    def subscription_metrics(self) -> SubscriptionMetrics:
        today = self.clock.today()
        subscriptions = self.stores.subscriptions.list()
        vendors = names_by_id(self.stores.vendors)

        return SubscriptionMetrics(
            total_subscriptions=len(subscriptions),
            active_subscriptions=sum(1 for s in subscriptions if s.expiry_date is None or s.expiry_date > today),
            expired_subscriptions=sum(1 for s in subscriptions if s.expiry_date is not None and s.expiry_date < today),
            expiring_subscriptions=sum(1 for s in subscriptions if self._near_expiry(s.expiry_date, today)),
            subscriptions_by_vendor=count_by(subscriptions, lambda s: vendors.get(s.vendor_id, UNKNOWN)),
            monthly_cost=money(total(s.cost for s in subscriptions if s.billing_cycle == 'monthly')),
            annual_cost=money(total(s.cost for s in subscriptions if s.billing_cycle == 'yearly')),
        )

    def issue_metrics(self) -> IssueMetrics:
        month_start = self.clock.today().replace(day=1)
        issues = AssetIssue.query.all()

        open_states = (IssueStateMachine.OPEN, IssueStateMachine.IN_PROGRESS)
        hours = [hours_between(i.reported_at, i.resolved_at) for i in issues if i.resolved_at is not None]
        avg_resolution = f"{one_decimal(Decimal(sum(hours)) / len(hours))} hours" if hours else None

        return IssueMetrics(
            total_issues=len(issues),
            open_issues=sum(1 for i in issues if i.status in open_states),
            resolved_issues=sum(1 for i in issues if i.status == IssueStateMachine.RESOLVED),
            critical_issues=sum(1 for i in issues if i.severity == 'CRITICAL'),
            issues_by_type=count_by(issues, lambda i: i.issue_type or UNKNOWN),
            issues_by_severity=count_by(issues, lambda i: i.severity or UNKNOWN),
            issues_this_month=sum(1 for i in issues if i.reported_at.date() >= month_start),
            avg_resolution_time=avg_resolution,
        )

    def upcoming_events(self) -> UpcomingEvents:
        """
        Items falling due within the horizon.

        Maintenance includes overdue active schedules (flagged is_overdue);
        licences, subscriptions and warranties must expire between today and
        the horizon end, inclusive.
        """
        today = self.clock.today()
        horizon_end = today + timedelta(days=self._horizon_days())

        schedules = (MaintenanceSchedule.query
                     .filter(MaintenanceSchedule.is_active.is_(True), MaintenanceSchedule.next_due <= horizon_end)
                     .order_by(MaintenanceSchedule.next_due, MaintenanceSchedule.id)
                     .all())
        maintenance_due = [
            UpcomingMaintenance(
                schedule_id=s.id,
                asset_id=s.asset_id,
                asset_name=s.asset.name if s.asset else None,
                maintenance_type=s.maintenance_type or UNKNOWN,
                due_date=s.next_due,
                priority=s.priority or DEFAULT_PRIORITY,
                days_until_due=(s.next_due - today).days,
                is_overdue=RecurrenceCalculator.is_overdue(s.next_due, today),
            )
            for s in schedules
        ]

        licenses = self._expiring(self.stores.licenses.list(), lambda lic: lic.expiry_date, today, horizon_end)
        subscriptions = self._expiring(self.stores.subscriptions.list(), lambda s: s.expiry_date, today, horizon_end)
        assets = self._expiring(self.stores.assets.list(), lambda a: a.warranty_expiry, today, horizon_end)
        vendors = names_by_id(self.stores.vendors)

        return UpcomingEvents(
            maintenance_due=maintenance_due,
            license_expiring=[
                ExpiringLicense(
                    license_id=lic.id,
                    name=lic.name,
                    vendor_name=vendors.get(lic.vendor_id),
                    expiry_date=lic.expiry_date,
                    days_until_expiry=(lic.expiry_date - today).days,
                    seats_used=lic.seats_used or 0,
                    total_seats=lic.number_of_seats or 0,
                )
                for lic in licenses
            ],
            subscription_expiring=[
                ExpiringSubscription(
                    subscription_id=s.id,
                    name=s.name,
                    vendor_name=vendors.get(s.vendor_id),
                    expiry_date=s.expiry_date,
                    days_until_expiry=(s.expiry_date - today).days,
                    auto_renewal=bool(s.auto_renewal),
                    cost=str(s.cost) if s.cost is not None else None,
                )
                for s in subscriptions
            ],
            warranty_expiring=[
                ExpiringWarranty(
                    asset_id=a.id,
                    asset_name=a.name,
                    serial_number=a.serial_number,
                    warranty_expiry_date=a.warranty_expiry,
                    days_until_expiry=(a.warranty_expiry - today).days,
                    vendor=vendors.get(a.vendor_id),
                )
                for a in assets
            ],
        )

    def financial_summary(self) -> FinancialSummary:
        month_start = self.clock.today().replace(day=1)

        asset_value = total(a.current_value for a in self.stores.assets.list())
        maintenance_cost = total(
            r.cost for r in MaintenanceRecord.query.filter(MaintenanceRecord.performed_date >= month_start).all()
        )
        subscription_cost = total(s.cost for s in self.stores.subscriptions.list() if s.billing_cycle == 'monthly')
        monthly = maintenance_cost + subscription_cost

        by_category = OrderedDict([
            ("Asset Value", asset_value),
            ("Maintenance (This Month)", maintenance_cost),
            ("Subscriptions (Monthly)", subscription_cost),
        ])

        return FinancialSummary(
            cost_by_category={name: str(value) for name, value in by_category.items() if value != 0},
            total_asset_value=money(asset_value),
            maintenance_cost_this_month=money(maintenance_cost),
            subscription_cost_this_month=money(subscription_cost),
            total_monthly_costs=money(monthly),
            projected_annual_costs=money(monthly * 12),
        )

    def overview(self, filters: Optional[DashboardFilters] = None) -> DashboardOverview:
        logger.debug(f"Building dashboard overview (filters={filters})")
        return DashboardOverview(
            asset_metrics=self.asset_metrics(filters),
            maintenance_metrics=self.maintenance_metrics(filters),
            software_license_metrics=self.license_metrics(),
            subscription_metrics=self.subscription_metrics(),
            issue_metrics=self.issue_metrics(),
            upcoming_events=self.upcoming_events(),
            financial_summary=self.financial_summary(),
            last_updated=self.clock.now().isoformat(),
        )

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _horizon_days(self) -> int:
        if self.horizon_days is not None:
            return self.horizon_days
        return current_app.config.get('UPCOMING_EVENTS_HORIZON_DAYS', UPCOMING_EVENTS_HORIZON_DAYS)

    def _near_expiry(self, expiry: Optional[date], today: date) -> bool:
        """Expires after today and no later than the horizon end"""
        if expiry is None:
            return False
        return today < expiry <= today + timedelta(days=self._horizon_days())

    @staticmethod
    def _expiring(rows, expiry_of, start: date, end: date) -> List:
        matching = [r for r in rows if expiry_of(r) is not None and start <= expiry_of(r) <= end]
        return sorted(matching, key=lambda r: (expiry_of(r), r.id))

    @staticmethod
    def _top_maintenance_assets(records) -> List[AssetMaintenanceSummary]:
        """Assets with the most records; ties keep the order groups were first seen"""
        groups = OrderedDict()
        for record in records:
            groups.setdefault(record.asset_id, []).append(record)

        summaries = [
            AssetMaintenanceSummary(
                asset_id=asset_id,
                asset_name=group[0].asset.name if group[0].asset else None,
                serial_number=group[0].asset.serial_number if group[0].asset else None,
                maintenance_count=len(group),
                total_cost=money(total(r.cost for r in group)),
                last_maintenance_date=max(r.performed_date for r in group),
            )
            for asset_id, group in groups.items()
        ]
        summaries.sort(key=lambda s: s.maintenance_count, reverse=True)
        return summaries[:TOP_MAINTENANCE_ASSETS]
