"""
Dashboard metric structs
Plain result containers returned by MetricsAggregator.

to_dict() renders camelCase keys (the dashboard payload shape); keys of the
breakdown maps are data and are left untouched.
"""

from dataclasses import dataclass, field, fields, is_dataclass
from datetime import date
from decimal import Decimal
from typing import Dict, List, Optional


def _camel(name: str) -> str:
    head, *rest = name.split('_')
    return head + ''.join(part.title() for part in rest)


def to_camel_dict(value):
    """Recursively convert dataclasses to dicts with camelCase field names"""
    if is_dataclass(value):
        return {_camel(f.name): to_camel_dict(getattr(value, f.name)) for f in fields(value)}
    if isinstance(value, list):
        return [to_camel_dict(item) for item in value]
    if isinstance(value, dict):
        return {key: to_camel_dict(item) for key, item in value.items()}
    if isinstance(value, date):
        return value.isoformat()
    if isinstance(value, Decimal):
        return str(value)
    return value


class CamelCaseStruct:
    def to_dict(self) -> dict:
        return to_camel_dict(self)


@dataclass
class AssetMetrics(CamelCaseStruct):
    total_assets: int
    matching_assets: int
    assets_by_status: Dict[str, int]
    assets_by_category: Dict[str, int]
    assets_by_location: Dict[str, int]
    assets_near_warranty_expiry: int
    unassigned_assets: int
    total_value: Optional[str] = None
    avg_asset_age: Optional[str] = None


@dataclass
class AssetMaintenanceSummary(CamelCaseStruct):
    asset_id: int
    asset_name: Optional[str]
    serial_number: Optional[str]
    maintenance_count: int
    total_cost: Optional[str] = None
    last_maintenance_date: Optional[date] = None


@dataclass
class MaintenanceMetrics(CamelCaseStruct):
    total_maintenance_records: int
    maintenance_this_month: int
    pending_maintenance: int
    overdue_maintenance: int
    maintenance_by_type: Dict[str, int]
    maintenance_by_status: Dict[str, int]
    top_maintenance_assets: List[AssetMaintenanceSummary] = field(default_factory=list)
    maintenance_cost_this_month: Optional[str] = None
    avg_maintenance_cost: Optional[str] = None


@dataclass
class SoftwareLicenseMetrics(CamelCaseStruct):
    total_licenses: int
    active_licenses: int
    expired_licenses: int
    expiring_licenses: int
    license_utilization: str
    total_seats: int
    used_seats: int
    licenses_by_vendor: Dict[str, int]


@dataclass
class SubscriptionMetrics(CamelCaseStruct):
    total_subscriptions: int
    active_subscriptions: int
    expired_subscriptions: int
    expiring_subscriptions: int
    subscriptions_by_vendor: Dict[str, int]
    monthly_cost: Optional[str] = None
    annual_cost: Optional[str] = None


@dataclass
class IssueMetrics(CamelCaseStruct):
    total_issues: int
    open_issues: int
    resolved_issues: int
    critical_issues: int
    issues_by_type: Dict[str, int]
    issues_by_severity: Dict[str, int]
    issues_this_month: int
    avg_resolution_time: Optional[str] = None


@dataclass
class UpcomingMaintenance(CamelCaseStruct):
    schedule_id: int
    asset_id: int
    asset_name: Optional[str]
    maintenance_type: str
    due_date: date
    priority: str
    days_until_due: int
    is_overdue: bool


@dataclass
class ExpiringLicense(CamelCaseStruct):
    license_id: int
    name: str
    vendor_name: Optional[str]
    expiry_date: date
    days_until_expiry: int
    seats_used: int
    total_seats: int


@dataclass
class ExpiringSubscription(CamelCaseStruct):
    subscription_id: int
    name: str
    vendor_name: Optional[str]
    expiry_date: date
    days_until_expiry: int
    auto_renewal: bool
    cost: Optional[str] = None


@dataclass
class ExpiringWarranty(CamelCaseStruct):
    asset_id: int
    asset_name: str
    serial_number: Optional[str]
    warranty_expiry_date: date
    days_until_expiry: int
    vendor: Optional[str] = None


@dataclass
class UpcomingEvents(CamelCaseStruct):
    maintenance_due: List[UpcomingMaintenance]
    license_expiring: List[ExpiringLicense]
    subscription_expiring: List[ExpiringSubscription]
    warranty_expiring: List[ExpiringWarranty]


@dataclass
class FinancialSummary(CamelCaseStruct):
    cost_by_category: Dict[str, str]
    total_asset_value: Optional[str] = None
    maintenance_cost_this_month: Optional[str] = None
    subscription_cost_this_month: Optional[str] = None
    total_monthly_costs: Optional[str] = None
    projected_annual_costs: Optional[str] = None


@dataclass
class DashboardOverview(CamelCaseStruct):
    asset_metrics: AssetMetrics
    maintenance_metrics: MaintenanceMetrics
    software_license_metrics: SoftwareLicenseMetrics
    subscription_metrics: SubscriptionMetrics
    issue_metrics: IssueMetrics
    upcoming_events: UpcomingEvents
    financial_summary: FinancialSummary
    last_updated: str
