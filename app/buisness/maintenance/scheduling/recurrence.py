"""
Recurrence Calculator
Pure date arithmetic for recurring maintenance obligations.

The next due date is always anchored on the date the work was actually
completed, never on the previous due date: a late completion shifts every
future occurrence later.
"""

from datetime import date, timedelta
from typing import Optional

DUE_THIS_WEEK_DAYS = 7


class RecurrenceCalculator:
    """Stateless due-date rules for maintenance schedules"""

    @staticmethod
    def is_overdue(next_due: date, today: date) -> bool:
        return next_due < today

    @staticmethod
    def days_until_due(next_due: date, today: date) -> Optional[int]:
        """
        Whole days from today to next_due.

        Returns None when the schedule is overdue; a negative value is
        never reported.
        """
        if RecurrenceCalculator.is_overdue(next_due, today):
            return None
        return (next_due - today).days

    @staticmethod
    def advance(completed_date: date, frequency_days: int) -> date:
        """Next due date after work completed on completed_date"""
        return completed_date + timedelta(days=frequency_days)

    @staticmethod
    def is_due_today(next_due: date, today: date) -> bool:
        return next_due == today

    @staticmethod
    def is_due_this_week(next_due: date, today: date) -> bool:
        return today <= next_due <= today + timedelta(days=DUE_THIS_WEEK_DAYS)

    @staticmethod
    def is_due_within(next_due: date, start: date, end: date) -> bool:
        return start <= next_due <= end
