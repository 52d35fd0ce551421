"""
Dashboard services
Read-only aggregation for the dashboard.
"""

from app.services.dashboard.filters import DashboardFilters, DateRange
from app.services.dashboard.metrics_aggregator import MetricsAggregator

__all__ = [
    'DashboardFilters',
    'DateRange',
    'MetricsAggregator',
]
