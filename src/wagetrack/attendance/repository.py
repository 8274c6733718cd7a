from __future__ import annotations

from datetime import date, time
from typing import Optional, Protocol, Sequence

from .model import AttendanceRecord


class AttendanceRepository(Protocol):
    """Reads return records with the employee joined in (None when unresolved)."""

    def list_recent(self, owner_id: int, limit: int) -> Sequence[AttendanceRecord]:
        raise NotImplementedError

    def list_between(
        self,
        owner_id: int,
        *,
        start_date: date,
        end_date: Optional[date] = None,
    ) -> Sequence[AttendanceRecord]:
        """Records with start_date <= work_date (<= end_date when given), oldest first."""

        raise NotImplementedError

    def get_by_id(self, owner_id: int, attendance_id: int) -> Optional[AttendanceRecord]:
        raise NotImplementedError

    def find_by_natural_key(
        self,
        owner_id: int,
        *,
        employee_id: int,
        work_date: date,
        time_in: time,
    ) -> Optional[AttendanceRecord]:
        raise NotImplementedError

    def create_record(
        self,
        *,
        owner_id: int,
        employee_id: int,
        work_date: date,
        time_in: time,
        time_out: Optional[time] = None,
    ) -> int:
        raise NotImplementedError

    def update_record(
        self,
        *,
        owner_id: int,
        attendance_id: int,
        employee_id: int,
        work_date: date,
        time_in: time,
        time_out: Optional[time] = None,
    ) -> bool:
        raise NotImplementedError

    def delete_record(self, *, owner_id: int, attendance_id: int) -> bool:
        raise NotImplementedError
