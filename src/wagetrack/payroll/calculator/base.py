from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import date, time
from typing import Optional

from ...attendance.model import AttendanceRecord


class PayrollCalculator(ABC):
    """Calculator interface (Strategy Pattern for payroll)."""

    @abstractmethod
    def shift_hours(self, work_date: date, time_in: time, time_out: Optional[time]) -> float:
        raise NotImplementedError

    def wage(self, hours: float, hourly_rate: float) -> float:
        return hours * hourly_rate

    def shift_hours_for(self, record: AttendanceRecord) -> float:
        return self.shift_hours(record.work_date, record.time_in, record.time_out)

    def record_wage(self, record: AttendanceRecord) -> float:
        """Wage of one shift; 0 when the employee no longer resolves."""
        if record.employee is None:
            return 0.0
        return self.wage(self.shift_hours_for(record), record.employee.hourly_rate)
