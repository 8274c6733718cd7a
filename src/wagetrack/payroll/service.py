from __future__ import annotations

from dataclasses import dataclass
from datetime import date, timedelta
from typing import Optional, Union

from ..attendance.repository import AttendanceRepository
from ..common.datetime_utils import DateLike, as_date, month_bounds, parse_month
from ..core.constants import DEFAULT_TOP_EARNERS, WEEKLY_WINDOW_DAYS
from ..core.exceptions import ValidationError
from ..employees.repository import EmployeeRepository
from .aggregator import DashboardStats, EmployeeSummary, PeriodAggregator, PeriodReport
from .calculator.base import PayrollCalculator

CSV_FIELDNAMES = ["employee", "hourly_rate", "shifts", "hours", "wages"]


@dataclass(frozen=True)
class DashboardData:
    today: date
    stats: DashboardStats
    total_employees: int
    top_earners: list[EmployeeSummary]


def format_money(value: float) -> str:
    return f"{value:.2f}"


def format_hours(value: float) -> str:
    return f"{value:.1f}"


class PayrollReportService:
    def __init__(
        self,
        attendance: AttendanceRepository,
        employees: EmployeeRepository,
        *,
        calculator: Optional[PayrollCalculator] = None,
    ):
        self._attendance = attendance
        self._employees = employees
        self._aggregator = PeriodAggregator(calculator)

    def dashboard(self, owner_id: int, *, now: DateLike) -> DashboardData:
        today = as_date(now)
        month_start = today.replace(day=1)
        week_start = today - timedelta(days=WEEKLY_WINDOW_DAYS - 1)

        # The trailing week can reach into the previous month.
        records = self._attendance.list_between(owner_id, start_date=min(month_start, week_start))

        return DashboardData(
            today=today,
            stats=self._aggregator.dashboard(records, today),
            total_employees=self._employees.count_for_owner(owner_id),
            top_earners=self._aggregator.top_earners(records, limit=DEFAULT_TOP_EARNERS, start=month_start),
        )

    def monthly_report(self, owner_id: int, month: Union[str, date]) -> PeriodReport:
        first_day = parse_month(month) if isinstance(month, str) else as_date(month)
        start, end = month_bounds(first_day)
        return self.range_report(owner_id, start=start, end=end)

    def range_report(self, owner_id: int, *, start: date, end: date) -> PeriodReport:
        if start > end:
            raise ValidationError("Start date must not be after end date")

        records = self._attendance.list_between(owner_id, start_date=start, end_date=end)
        return self._aggregator.summarize(records, start=start, end=end)

    @staticmethod
    def csv_rows(report: PeriodReport) -> list[dict]:
        rows = [
            {
                "employee": e.employee_name,
                "hourly_rate": format_money(e.hourly_rate),
                "shifts": e.shift_count,
                "hours": format_hours(e.hours),
                "wages": format_money(e.wages),
            }
            for e in report.employees
        ]
        rows.append(
            {
                "employee": "TOTAL",
                "hourly_rate": "",
                "shifts": report.total_shifts,
                "hours": format_hours(report.total_hours),
                "wages": format_money(report.total_wages),
            }
        )
        return rows

    @staticmethod
    def report_to_dict(report: PeriodReport) -> dict:
        return {
            "start": report.start.isoformat() if report.start else None,
            "end": report.end.isoformat() if report.end else None,
            "employees": [
                {
                    "employeeId": e.employee_id,
                    "employeeName": e.employee_name,
                    "rate": e.hourly_rate,
                    "shiftCount": e.shift_count,
                    "hours": e.hours,
                    "wages": e.wages,
                }
                for e in report.employees
            ],
            "totalHours": report.total_hours,
            "totalWages": report.total_wages,
        }

    @staticmethod
    def dashboard_to_dict(data: DashboardData) -> dict:
        def totals(t) -> dict:
            return {"hours": t.hours, "wages": t.wages}

        return {
            "today": data.today.isoformat(),
            "daily": totals(data.stats.daily),
            "weekly": totals(data.stats.weekly),
            "monthly": totals(data.stats.monthly),
            "totalEmployees": data.total_employees,
            "topEarners": [
                {"employeeName": e.employee_name, "hours": e.hours, "wages": e.wages} for e in data.top_earners
            ],
        }
