from __future__ import annotations

from typing import Optional, Sequence

from ..common.validators import require_hourly_rate, require_non_empty
from ..core.exceptions import ValidationError
from .model import Employee
from .repository import EmployeeRepository


class EmployeeService:
    """Use cases: manage the employer's roster."""

    def __init__(self, employees: EmployeeRepository):
        self._employees = employees

    def list_employees(self, owner_id: int, *, search: Optional[str] = None) -> Sequence[Employee]:
        employees = self._employees.list_for_owner(owner_id)
        term = (search or "").strip().lower()
        if not term:
            return list(employees)
        return [e for e in employees if term in e.name.lower()]

    def count_employees(self, owner_id: int) -> int:
        return self._employees.count_for_owner(owner_id)

    def get_employee(self, owner_id: int, employee_id: int) -> Employee:
        employee = self._employees.get_by_id(owner_id, int(employee_id))
        if not employee:
            raise ValidationError("Employee not found")
        return employee

    def create_employee(self, owner_id: int, *, name: str, hourly_rate) -> int:
        name = require_non_empty(name, "Name")
        rate = require_hourly_rate(hourly_rate)
        return self._employees.create_employee(owner_id=owner_id, name=name, hourly_rate=rate)

    def update_employee(self, owner_id: int, employee_id: int, *, name: str, hourly_rate) -> None:
        name = require_non_empty(name, "Name")
        rate = require_hourly_rate(hourly_rate)
        self.get_employee(owner_id, employee_id)

        if not self._employees.update_employee(
            owner_id=owner_id, employee_id=int(employee_id), name=name, hourly_rate=rate
        ):
            raise ValidationError("Updating the employee failed")

    def delete_employee(self, owner_id: int, employee_id: int) -> None:
        self.get_employee(owner_id, employee_id)
        if not self._employees.delete_employee(owner_id=owner_id, employee_id=int(employee_id)):
            raise ValidationError("Deleting the employee failed")
