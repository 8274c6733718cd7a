from __future__ import annotations

from datetime import date, time
from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import (
    db_cursor,
    fetchall,
    fetchone,
    normalize_mysql_decimal,
    normalize_mysql_time,
    rows_matched,
)
from ..employees.model import Employee
from .model import AttendanceRecord
from .repository import AttendanceRepository

_SELECT = """
    SELECT a.attendance_id, a.owner_id, a.employee_id, a.work_date, a.time_in, a.time_out, a.created_at,
           e.employee_id AS e_id, e.owner_id AS e_owner_id, e.name AS e_name,
           e.hourly_rate AS e_hourly_rate, e.created_at AS e_created_at
    FROM attendance_records a
    LEFT JOIN employees e ON e.employee_id = a.employee_id AND e.owner_id = a.owner_id
"""


def _row_to_record(r: dict) -> AttendanceRecord:
    employee = None
    if r.get("e_id") is not None:
        employee = Employee(
            employee_id=int(r["e_id"]),
            owner_id=int(r["e_owner_id"]),
            name=r["e_name"],
            hourly_rate=normalize_mysql_decimal(r["e_hourly_rate"]),
            created_at=r.get("e_created_at"),
        )

    return AttendanceRecord(
        attendance_id=int(r["attendance_id"]),
        owner_id=int(r["owner_id"]),
        employee_id=int(r["employee_id"]),
        work_date=r["work_date"],
        time_in=normalize_mysql_time(r["time_in"]),
        time_out=normalize_mysql_time(r.get("time_out")),
        created_at=r.get("created_at"),
        employee=employee,
    )


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_recent(self, owner_id: int, limit: int) -> Sequence[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                _SELECT
                + """
                WHERE a.owner_id=%s
                ORDER BY a.work_date DESC, a.time_in DESC
                LIMIT %s
                """,
                (owner_id, int(limit)),
            )
            return [_row_to_record(r) for r in fetchall(cur)]

    def list_between(
        self,
        owner_id: int,
        *,
        start_date: date,
        end_date: Optional[date] = None,
    ) -> Sequence[AttendanceRecord]:
        sql = _SELECT + " WHERE a.owner_id=%s AND a.work_date >= %s"
        params: list = [owner_id, start_date]
        if end_date is not None:
            sql += " AND a.work_date <= %s"
            params.append(end_date)
        sql += " ORDER BY a.work_date ASC, a.time_in ASC, a.attendance_id ASC"

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(sql, tuple(params))
            return [_row_to_record(r) for r in fetchall(cur)]

    def get_by_id(self, owner_id: int, attendance_id: int) -> Optional[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_SELECT + " WHERE a.owner_id=%s AND a.attendance_id=%s", (owner_id, attendance_id))
            r = fetchone(cur)
            return _row_to_record(r) if r else None

    def find_by_natural_key(
        self,
        owner_id: int,
        *,
        employee_id: int,
        work_date: date,
        time_in: time,
    ) -> Optional[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                _SELECT
                + """
                WHERE a.owner_id=%s AND a.employee_id=%s AND a.work_date=%s AND a.time_in=%s
                LIMIT 1
                """,
                (owner_id, employee_id, work_date, time_in),
            )
            r = fetchone(cur)
            return _row_to_record(r) if r else None

    def create_record(
        self,
        *,
        owner_id: int,
        employee_id: int,
        work_date: date,
        time_in: time,
        time_out: Optional[time] = None,
    ) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO attendance_records(owner_id, employee_id, work_date, time_in, time_out)
                VALUES(%s,%s,%s,%s,%s)
                """,
                (owner_id, employee_id, work_date, time_in, time_out),
            )
            return int(cur.lastrowid)

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
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE attendance_records
                SET employee_id=%s, work_date=%s, time_in=%s, time_out=%s
                WHERE owner_id=%s AND attendance_id=%s
                """,
                (employee_id, work_date, time_in, time_out, owner_id, attendance_id),
            )
            return rows_matched(cur)

    def delete_record(self, *, owner_id: int, attendance_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "DELETE FROM attendance_records WHERE owner_id=%s AND attendance_id=%s",
                (owner_id, attendance_id),
            )
            return rows_matched(cur)
