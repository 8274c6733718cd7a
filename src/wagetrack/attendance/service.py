from __future__ import annotations

from datetime import date, time
from typing import Optional, Union

from ..common.datetime_utils import as_date, parse_iso_date, parse_time_of_day
from ..core.constants import DEFAULT_HISTORY_LIMIT, UNKNOWN_EMPLOYEE_LABEL
from ..core.exceptions import ValidationError
from ..employees.repository import EmployeeRepository
from ..payroll.calculator.base import PayrollCalculator
from ..payroll.calculator.standard_calculator import StandardPayrollCalculator
from .model import AttendanceRecord
from .repository import AttendanceRepository

DateInput = Union[date, str]
TimeInput = Union[time, str, None]


def _to_date(value: DateInput) -> date:
    if isinstance(value, date):
        return as_date(value)
    return parse_iso_date(value)


def _to_time(value: TimeInput) -> Optional[time]:
    if value is None or isinstance(value, time):
        return value
    if not value.strip():
        return None
    return parse_time_of_day(value)


class AttendanceService:
    def __init__(
        self,
        attendance: AttendanceRepository,
        employees: EmployeeRepository,
        *,
        calculator: Optional[PayrollCalculator] = None,
    ):
        self._attendance = attendance
        self._employees = employees
        self._calculator = calculator or StandardPayrollCalculator()

    def _require_employee(self, owner_id: int, employee_id) -> int:
        try:
            employee_id = int(employee_id)
        except (TypeError, ValueError):
            raise ValidationError("Select an employee") from None
        if not self._employees.get_by_id(owner_id, employee_id):
            raise ValidationError("Employee not found")
        return employee_id

    def _require_record(self, owner_id: int, attendance_id: int) -> AttendanceRecord:
        record = self._attendance.get_by_id(owner_id, int(attendance_id))
        if not record:
            raise ValidationError("Attendance record not found")
        return record

    def _ensure_not_duplicate(
        self,
        owner_id: int,
        *,
        employee_id: int,
        work_date: date,
        time_in: time,
        exclude_id: Optional[int] = None,
    ) -> None:
        existing = self._attendance.find_by_natural_key(
            owner_id, employee_id=employee_id, work_date=work_date, time_in=time_in
        )
        if existing and existing.attendance_id != exclude_id:
            raise ValidationError("A shift for this employee with the same date and time-in already exists")

    def log_shift(
        self,
        owner_id: int,
        *,
        employee_id,
        work_date: DateInput,
        time_in: TimeInput,
        time_out: TimeInput = None,
    ) -> int:
        employee_id = self._require_employee(owner_id, employee_id)
        work_date = _to_date(work_date)
        start = _to_time(time_in)
        if start is None:
            raise ValidationError("Time in is required")
        end = _to_time(time_out)

        self._ensure_not_duplicate(owner_id, employee_id=employee_id, work_date=work_date, time_in=start)
        return self._attendance.create_record(
            owner_id=owner_id,
            employee_id=employee_id,
            work_date=work_date,
            time_in=start,
            time_out=end,
        )

    def update_shift(
        self,
        owner_id: int,
        attendance_id: int,
        *,
        employee_id,
        work_date: DateInput,
        time_in: TimeInput,
        time_out: TimeInput = None,
    ) -> None:
        record = self._require_record(owner_id, attendance_id)
        employee_id = self._require_employee(owner_id, employee_id)
        work_date = _to_date(work_date)
        start = _to_time(time_in)
        if start is None:
            raise ValidationError("Time in is required")
        end = _to_time(time_out)

        self._ensure_not_duplicate(
            owner_id,
            employee_id=employee_id,
            work_date=work_date,
            time_in=start,
            exclude_id=record.attendance_id,
        )
        if not self._attendance.update_record(
            owner_id=owner_id,
            attendance_id=record.attendance_id,
            employee_id=employee_id,
            work_date=work_date,
            time_in=start,
            time_out=end,
        ):
            raise ValidationError("Updating the attendance record failed")

    def clock_out(self, owner_id: int, attendance_id: int, *, time_out: TimeInput) -> None:
        record = self._require_record(owner_id, attendance_id)
        if not record.is_open:
            raise ValidationError("This shift is already closed")
        end = _to_time(time_out)
        if end is None:
            raise ValidationError("Time out is required")

        self._attendance.update_record(
            owner_id=owner_id,
            attendance_id=record.attendance_id,
            employee_id=record.employee_id,
            work_date=record.work_date,
            time_in=record.time_in,
            time_out=end,
        )

    def delete_shift(self, owner_id: int, attendance_id: int) -> None:
        self._require_record(owner_id, attendance_id)
        if not self._attendance.delete_record(owner_id=owner_id, attendance_id=int(attendance_id)):
            raise ValidationError("Deleting the attendance record failed")

    def list_recent_ui(self, owner_id: int, *, limit: int = DEFAULT_HISTORY_LIMIT) -> list[dict]:
        rows = self._attendance.list_recent(owner_id, limit)
        return [self._to_ui(r) for r in rows]

    def _to_ui(self, r: AttendanceRecord) -> dict:
        hours = self._calculator.shift_hours_for(r)
        return {
            "attendance_id": r.attendance_id,
            "employee_id": r.employee_id,
            "employee_name": r.employee.name if r.employee else UNKNOWN_EMPLOYEE_LABEL,
            "date": r.work_date.strftime("%Y-%m-%d"),
            "time_in": r.time_in.strftime("%H:%M"),
            "time_out": r.time_out.strftime("%H:%M") if r.time_out else "-",
            "is_open": r.is_open,
            "hours": f"{hours:.1f}",
            "wage": f"{self._calculator.record_wage(r):.2f}",
        }
