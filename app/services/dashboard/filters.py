"""
Dashboard filters
Optional narrowing applied by MetricsAggregator before aggregation.
"""

from dataclasses import dataclass
from datetime import date
from typing import Optional

from app.buisness.core.errors import ValidationError
from app.buisness.core.validators import parse_date, validate_id


@dataclass(frozen=True)
class DateRange:
    """Inclusive calendar date window"""
    start_date: date
    end_date: date

    def __post_init__(self):
        if self.start_date > self.end_date:
            raise ValidationError("Start date cannot be after end date")

    @classmethod
    def parse(cls, start, end) -> 'DateRange':
        return cls(parse_date(start, "Start date"), parse_date(end, "End date"))

    def contains(self, value: date) -> bool:
        return self.start_date <= value <= self.end_date


@dataclass(frozen=True)
class DashboardFilters:
    location_id: Optional[int] = None
    category_id: Optional[int] = None
    date_range: Optional[DateRange] = None

    def __post_init__(self):
        if self.location_id is not None:
            validate_id(self.location_id, "Location ID")
        if self.category_id is not None:
            validate_id(self.category_id, "Category ID")

    @classmethod
    def from_dict(cls, data: Optional[dict]) -> 'DashboardFilters':
        """Build filters from a {locationId, categoryId, dateRange: {startDate, endDate}} mapping"""
        if not data:
            return cls()
        date_range = None
        if data.get('dateRange'):
            date_range = DateRange.parse(data['dateRange'].get('startDate'), data['dateRange'].get('endDate'))
        return cls(
            location_id=data.get('locationId'),
            category_id=data.get('categoryId'),
            date_range=date_range,
        )

    def matches_asset(self, asset) -> bool:
        """True when the asset passes the location and category filters"""
        if asset is None:
            return self.location_id is None and self.category_id is None
        if self.location_id is not None and asset.location_id != self.location_id:
            return False
        if self.category_id is not None and asset.category_id != self.category_id:
            return False
        return True

    def matches_date(self, value: Optional[date]) -> bool:
        if self.date_range is None:
            return True
        return value is not None and self.date_range.contains(value)
