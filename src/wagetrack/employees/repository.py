from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import Employee


class EmployeeRepository(Protocol):
    """Every call is scoped to the owning account."""

    def list_for_owner(self, owner_id: int) -> Sequence[Employee]:
        raise NotImplementedError

    def count_for_owner(self, owner_id: int) -> int:
        raise NotImplementedError

    def get_by_id(self, owner_id: int, employee_id: int) -> Optional[Employee]:
        raise NotImplementedError

    def create_employee(self, *, owner_id: int, name: str, hourly_rate: float) -> int:
        raise NotImplementedError

    def update_employee(self, *, owner_id: int, employee_id: int, name: str, hourly_rate: float) -> bool:
        raise NotImplementedError

    def delete_employee(self, *, owner_id: int, employee_id: int) -> bool:
        """Attendance records of the employee are removed by the store (cascade)."""

        raise NotImplementedError
