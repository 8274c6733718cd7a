from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, time
from typing import Optional

from ..employees.model import Employee


@dataclass(frozen=True)
class AttendanceRecord:
    """Domain entity: one logged shift (time-in / optional time-out on a work date).

    ``employee`` is the joined roster row; it is None when the employee no
    longer resolves (deleted after the shift was logged).
    """

    attendance_id: int
    owner_id: int
    employee_id: int
    work_date: date
    time_in: time
    time_out: Optional[time] = None
    created_at: Optional[datetime] = None
    employee: Optional[Employee] = None

    @property
    def is_open(self) -> bool:
        return self.time_out is None
