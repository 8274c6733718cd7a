from __future__ import annotations

from dataclasses import dataclass

from .accounts.mysql_account_repository import MySQLAccountRepository
from .accounts.repository import AccountRepository
from .accounts.service import AuthService
from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.repository import AttendanceRepository
from .attendance.service import AttendanceService
from .database.connection import DBConfig, DatabaseConnection
from .employees.mysql_employee_repository import MySQLEmployeeRepository
from .employees.repository import EmployeeRepository
from .employees.service import EmployeeService
from .payroll.calculator.standard_calculator import StandardPayrollCalculator
from .payroll.service import PayrollReportService


@dataclass(frozen=True)
class Container:
    accounts_repo: AccountRepository
    employees_repo: EmployeeRepository
    attendance_repo: AttendanceRepository

    auth_service: AuthService
    employee_service: EmployeeService
    attendance_service: AttendanceService
    payroll_report_service: PayrollReportService


def build_services(
    *,
    accounts_repo: AccountRepository,
    employees_repo: EmployeeRepository,
    attendance_repo: AttendanceRepository,
) -> Container:
    """Wire services over any repository implementation (MySQL or in-memory)."""

    calculator = StandardPayrollCalculator()
    return Container(
        accounts_repo=accounts_repo,
        employees_repo=employees_repo,
        attendance_repo=attendance_repo,
        auth_service=AuthService(accounts_repo),
        employee_service=EmployeeService(employees_repo),
        attendance_service=AttendanceService(attendance_repo, employees_repo, calculator=calculator),
        payroll_report_service=PayrollReportService(attendance_repo, employees_repo, calculator=calculator),
    )


def build_container(*, conn: DatabaseConnection) -> Container:
    return build_services(
        accounts_repo=MySQLAccountRepository(conn),
        employees_repo=MySQLEmployeeRepository(conn),
        attendance_repo=MySQLAttendanceRepository(conn),
    )


def connect(db_config: dict) -> DatabaseConnection:
    return DatabaseConnection.get_instance(DBConfig.from_dict(db_config))
