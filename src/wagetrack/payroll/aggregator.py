from __future__ import annotations

from dataclasses import dataclass
from datetime import date, timedelta
from typing import Iterable, Optional, Sequence

from ..attendance.model import AttendanceRecord
from ..common.datetime_utils import DateLike, as_date
from ..core.constants import DEFAULT_TOP_EARNERS, WEEKLY_WINDOW_DAYS
from ..core.enums import ReportWindow
from ..core.exceptions import ValidationError
from .calculator.base import PayrollCalculator
from .calculator.standard_calculator import StandardPayrollCalculator


@dataclass(frozen=True)
class WindowTotals:
    hours: float = 0.0
    wages: float = 0.0


@dataclass(frozen=True)
class DashboardStats:
    daily: WindowTotals
    weekly: WindowTotals
    monthly: WindowTotals


@dataclass(frozen=True)
class EmployeeSummary:
    employee_id: int
    employee_name: str
    hourly_rate: float
    shift_count: int
    hours: float
    wages: float


@dataclass(frozen=True)
class PeriodReport:
    start: Optional[date]
    end: Optional[date]
    employees: list[EmployeeSummary]
    total_hours: float
    total_wages: float

    @property
    def total_shifts(self) -> int:
        return sum(e.shift_count for e in self.employees)


class _Accumulator:
    __slots__ = ("employee_id", "employee_name", "hourly_rate", "shift_count", "hours", "wages")

    def __init__(self, record: AttendanceRecord):
        self.employee_id = record.employee.employee_id
        self.employee_name = record.employee.name
        self.hourly_rate = record.employee.hourly_rate
        self.shift_count = 0
        self.hours = 0.0
        self.wages = 0.0

    def freeze(self) -> EmployeeSummary:
        return EmployeeSummary(
            employee_id=self.employee_id,
            employee_name=self.employee_name,
            hourly_rate=self.hourly_rate,
            shift_count=self.shift_count,
            hours=self.hours,
            wages=self.wages,
        )


class PeriodAggregator:
    """Sums hours and wages of shift records over date windows.

    Stateless: every call recomputes from the records it is given, and the
    reference day ``now`` is always passed in by the caller. Records whose
    employee no longer resolves are skipped (no hours, no wages, no shift
    count); open shifts count as shifts but add no hours or wages.
    """

    def __init__(self, calculator: Optional[PayrollCalculator] = None):
        self._calculator = calculator or StandardPayrollCalculator()

    @property
    def calculator(self) -> PayrollCalculator:
        return self._calculator

    @staticmethod
    def window_bounds(
        window: ReportWindow,
        now: DateLike,
        *,
        start: Optional[date] = None,
        end: Optional[date] = None,
    ) -> tuple[date, Optional[date]]:
        """Inclusive (first, last) work dates of a window; last is None when open-ended."""
        today = as_date(now)
        window = ReportWindow(window)

        if window == ReportWindow.DAILY:
            return today, today
        if window == ReportWindow.WEEKLY:
            return today - timedelta(days=WEEKLY_WINDOW_DAYS - 1), today
        if window == ReportWindow.MONTHLY:
            return today.replace(day=1), None

        if start is None or end is None:
            raise ValidationError("A custom range needs both a start and an end date")
        if start > end:
            raise ValidationError("Start date must not be after end date")
        return start, end

    @staticmethod
    def _in_range(record: AttendanceRecord, start: Optional[date], end: Optional[date]) -> bool:
        if start is not None and record.work_date < start:
            return False
        if end is not None and record.work_date > end:
            return False
        return True

    def window_totals(
        self,
        records: Iterable[AttendanceRecord],
        window: ReportWindow,
        now: DateLike,
        *,
        start: Optional[date] = None,
        end: Optional[date] = None,
    ) -> WindowTotals:
        first, last = self.window_bounds(window, now, start=start, end=end)
        hours = 0.0
        wages = 0.0
        for record in records:
            if record.employee is None or record.time_out is None:
                continue
            if not self._in_range(record, first, last):
                continue
            shift_hours = self._calculator.shift_hours_for(record)
            hours += shift_hours
            wages += self._calculator.wage(shift_hours, record.employee.hourly_rate)
        return WindowTotals(hours=hours, wages=wages)

    def dashboard(self, records: Sequence[AttendanceRecord], now: DateLike) -> DashboardStats:
        records = list(records)
        return DashboardStats(
            daily=self.window_totals(records, ReportWindow.DAILY, now),
            weekly=self.window_totals(records, ReportWindow.WEEKLY, now),
            monthly=self.window_totals(records, ReportWindow.MONTHLY, now),
        )

    def summarize(
        self,
        records: Iterable[AttendanceRecord],
        *,
        start: Optional[date] = None,
        end: Optional[date] = None,
    ) -> PeriodReport:
        """Per-employee totals ranked by wages, highest first.

        Groups keep first-appearance order, so employees with equal wages stay
        in the order they first show up in ``records``.
        """
        groups: dict[int, _Accumulator] = {}

        for record in records:
            if record.employee is None:
                continue
            if not self._in_range(record, start, end):
                continue

            acc = groups.get(record.employee.employee_id)
            if acc is None:
                acc = _Accumulator(record)
                groups[record.employee.employee_id] = acc

            acc.shift_count += 1
            if record.time_out is None:
                continue
            shift_hours = self._calculator.shift_hours_for(record)
            acc.hours += shift_hours
            acc.wages += self._calculator.wage(shift_hours, record.employee.hourly_rate)

        # sorted() is stable
        employees = sorted((acc.freeze() for acc in groups.values()), key=lambda e: e.wages, reverse=True)
        return PeriodReport(
            start=start,
            end=end,
            employees=employees,
            total_hours=sum(e.hours for e in employees),
            total_wages=sum(e.wages for e in employees),
        )

    def report_for_window(
        self,
        records: Iterable[AttendanceRecord],
        window: ReportWindow,
        now: DateLike,
        *,
        start: Optional[date] = None,
        end: Optional[date] = None,
    ) -> PeriodReport:
        first, last = self.window_bounds(window, now, start=start, end=end)
        return self.summarize(records, start=first, end=last)

    def top_earners(
        self,
        records: Iterable[AttendanceRecord],
        *,
        limit: int = DEFAULT_TOP_EARNERS,
        start: Optional[date] = None,
        end: Optional[date] = None,
    ) -> list[EmployeeSummary]:
        return self.summarize(records, start=start, end=end).employees[: max(int(limit), 0)]
