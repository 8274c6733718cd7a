from __future__ import annotations

from datetime import date, datetime, time, timedelta
from typing import Optional

from .base import PayrollCalculator

SECONDS_PER_HOUR = 3600


class StandardPayrollCalculator(PayrollCalculator):
    """Standard rule: (out - in), +24h when out is earlier than in, not below 0.

    An open shift (no time-out) counts as 0 hours.
    """

    def shift_hours(self, work_date: date, time_in: time, time_out: Optional[time]) -> float:
        if time_out is None:
            return 0.0

        start = datetime.combine(work_date, time_in)
        end = datetime.combine(work_date, time_out)
        elapsed = end - start
        if elapsed < timedelta(0):
            # crossed midnight
            elapsed += timedelta(days=1)

        return max(elapsed.total_seconds(), 0.0) / SECONDS_PER_HOUR
