from __future__ import annotations

from dataclasses import replace
from datetime import date, datetime, time
from typing import Optional

import pytest

from wagetrack.accounts.model import Account
from wagetrack.attendance.model import AttendanceRecord
from wagetrack.container import build_services
from wagetrack.employees.model import Employee
from wagetrack.main import create_app


class InMemoryAccounts:
    def __init__(self):
        self._by_id: dict[int, Account] = {}
        self._id = 0

    def get_by_id(self, account_id: int) -> Optional[Account]:
        return self._by_id.get(account_id)

    def get_by_email(self, email: str) -> Optional[Account]:
        for account in self._by_id.values():
            if account.email == email:
                return account
        return None

    def create_account(self, *, email: str, password_hash: str) -> int:
        self._id += 1
        self._by_id[self._id] = Account(account_id=self._id, email=email, password_hash=password_hash)
        return self._id


class InMemoryEmployees:
    def __init__(self):
        self.by_id: dict[int, Employee] = {}
        self._id = 0
        self.on_delete = []

    def list_for_owner(self, owner_id: int):
        items = [e for e in self.by_id.values() if e.owner_id == owner_id]
        return sorted(items, key=lambda e: (e.name, e.employee_id))

    def count_for_owner(self, owner_id: int) -> int:
        return len(self.list_for_owner(owner_id))

    def get_by_id(self, owner_id: int, employee_id: int) -> Optional[Employee]:
        e = self.by_id.get(employee_id)
        return e if e and e.owner_id == owner_id else None

    def create_employee(self, *, owner_id: int, name: str, hourly_rate: float) -> int:
        self._id += 1
        self.by_id[self._id] = Employee(employee_id=self._id, owner_id=owner_id, name=name, hourly_rate=hourly_rate)
        return self._id

    def update_employee(self, *, owner_id: int, employee_id: int, name: str, hourly_rate: float) -> bool:
        e = self.get_by_id(owner_id, employee_id)
        if not e:
            return False
        self.by_id[employee_id] = replace(e, name=name, hourly_rate=hourly_rate)
        return True

    def delete_employee(self, *, owner_id: int, employee_id: int) -> bool:
        if not self.get_by_id(owner_id, employee_id):
            return False
        del self.by_id[employee_id]
        for callback in self.on_delete:
            callback(employee_id)
        return True


class InMemoryAttendance:
    """Joins employees on read and cascades employee deletes, like the MySQL schema."""

    def __init__(self, employees: InMemoryEmployees):
        self._employees = employees
        self._rows: dict[int, AttendanceRecord] = {}
        self._id = 0
        employees.on_delete.append(self._cascade)

    def _cascade(self, employee_id: int) -> None:
        for rid in [rid for rid, r in self._rows.items() if r.employee_id == employee_id]:
            del self._rows[rid]

    def _joined(self, r: AttendanceRecord) -> AttendanceRecord:
        return replace(r, employee=self._employees.get_by_id(r.owner_id, r.employee_id))

    def _owned(self, owner_id: int):
        return [self._joined(r) for r in self._rows.values() if r.owner_id == owner_id]

    def list_recent(self, owner_id: int, limit: int):
        items = sorted(self._owned(owner_id), key=lambda r: (r.work_date, r.time_in), reverse=True)
        return items[:limit]

    def list_between(self, owner_id: int, *, start_date: date, end_date: Optional[date] = None):
        items = [
            r
            for r in self._owned(owner_id)
            if r.work_date >= start_date and (end_date is None or r.work_date <= end_date)
        ]
        return sorted(items, key=lambda r: (r.work_date, r.time_in, r.attendance_id))

    def get_by_id(self, owner_id: int, attendance_id: int) -> Optional[AttendanceRecord]:
        r = self._rows.get(attendance_id)
        return self._joined(r) if r and r.owner_id == owner_id else None

    def find_by_natural_key(self, owner_id: int, *, employee_id: int, work_date: date, time_in: time):
        for r in self._owned(owner_id):
            if (r.employee_id, r.work_date, r.time_in) == (employee_id, work_date, time_in):
                return r
        return None

    def create_record(self, *, owner_id, employee_id, work_date, time_in, time_out=None) -> int:
        self._id += 1
        self._rows[self._id] = AttendanceRecord(
            attendance_id=self._id,
            owner_id=owner_id,
            employee_id=employee_id,
            work_date=work_date,
            time_in=time_in,
            time_out=time_out,
        )
        return self._id

    def update_record(self, *, owner_id, attendance_id, employee_id, work_date, time_in, time_out=None) -> bool:
        r = self._rows.get(attendance_id)
        if not r or r.owner_id != owner_id:
            return False
        self._rows[attendance_id] = replace(
            r, employee_id=employee_id, work_date=work_date, time_in=time_in, time_out=time_out
        )
        return True

    def delete_record(self, *, owner_id, attendance_id) -> bool:
        r = self._rows.get(attendance_id)
        if not r or r.owner_id != owner_id:
            return False
        del self._rows[attendance_id]
        return True


def make_record(
    attendance_id: int,
    employee: Optional[Employee],
    work_date: date,
    time_in: time,
    time_out: Optional[time],
    *,
    employee_id: Optional[int] = None,
) -> AttendanceRecord:
    return AttendanceRecord(
        attendance_id=attendance_id,
        owner_id=1,
        employee_id=employee.employee_id if employee else (employee_id or 999),
        work_date=work_date,
        time_in=time_in,
        time_out=time_out,
        employee=employee,
    )


@pytest.fixture
def fixed_now() -> datetime:
    return datetime(2024, 3, 15, 10, 30, 0)


@pytest.fixture
def sam() -> Employee:
    return Employee(employee_id=1, owner_id=1, name="Sam", hourly_rate=10.0)


@pytest.fixture
def alex() -> Employee:
    return Employee(employee_id=2, owner_id=1, name="Alex", hourly_rate=20.0)


@pytest.fixture
def accounts_repo() -> InMemoryAccounts:
    return InMemoryAccounts()


@pytest.fixture
def employees_repo() -> InMemoryEmployees:
    return InMemoryEmployees()


@pytest.fixture
def attendance_repo(employees_repo) -> InMemoryAttendance:
    return InMemoryAttendance(employees_repo)


@pytest.fixture
def container(accounts_repo, employees_repo, attendance_repo):
    return build_services(
        accounts_repo=accounts_repo,
        employees_repo=employees_repo,
        attendance_repo=attendance_repo,
    )


@pytest.fixture
def app(container):
    return create_app(container, settings_module="wagetrack.config.testing")


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def record():
    return make_record
