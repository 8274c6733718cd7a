from __future__ import annotations

from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, normalize_mysql_decimal, rows_matched
from .model import Employee
from .repository import EmployeeRepository


def _row_to_employee(row: dict) -> Employee:
    return Employee(
        employee_id=int(row["employee_id"]),
        owner_id=int(row["owner_id"]),
        name=row["name"],
        hourly_rate=normalize_mysql_decimal(row["hourly_rate"]),
        created_at=row.get("created_at"),
    )


class MySQLEmployeeRepository(EmployeeRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_for_owner(self, owner_id: int) -> Sequence[Employee]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT employee_id, owner_id, name, hourly_rate, created_at
                FROM employees
                WHERE owner_id=%s
                ORDER BY name ASC, employee_id ASC
                """,
                (owner_id,),
            )
            return [_row_to_employee(r) for r in fetchall(cur)]

    def count_for_owner(self, owner_id: int) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT COUNT(*) AS total FROM employees WHERE owner_id=%s", (owner_id,))
            row = fetchone(cur)
            return int(row["total"]) if row else 0

    def get_by_id(self, owner_id: int, employee_id: int) -> Optional[Employee]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT employee_id, owner_id, name, hourly_rate, created_at
                FROM employees
                WHERE owner_id=%s AND employee_id=%s
                """,
                (owner_id, employee_id),
            )
            row = fetchone(cur)
            return _row_to_employee(row) if row else None

    def create_employee(self, *, owner_id: int, name: str, hourly_rate: float) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO employees(owner_id, name, hourly_rate)
                VALUES(%s,%s,%s)
                """,
                (owner_id, name, hourly_rate),
            )
            return int(cur.lastrowid)

    def update_employee(self, *, owner_id: int, employee_id: int, name: str, hourly_rate: float) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE employees
                SET name=%s, hourly_rate=%s
                WHERE owner_id=%s AND employee_id=%s
                """,
                (name, hourly_rate, owner_id, employee_id),
            )
            return rows_matched(cur)

    def delete_employee(self, *, owner_id: int, employee_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "DELETE FROM employees WHERE owner_id=%s AND employee_id=%s",
                (owner_id, employee_id),
            )
            return rows_matched(cur)
