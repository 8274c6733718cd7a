from __future__ import annotations

from datetime import time, timedelta

import mysql.connector
import pytest
from mysql.connector.constants import ClientFlag

from wagetrack.attendance.mysql_attendance_repository import MySQLAttendanceRepository
from wagetrack.database.bootstrap import SCHEMA_PATH, iter_sql_statements
from wagetrack.database.connection import DatabaseConnection, DBConfig
from wagetrack.database.mysql_base import db_cursor, normalize_mysql_time
from wagetrack.employees.mysql_employee_repository import MySQLEmployeeRepository


class FakeCursor:
    def __init__(self, rowcount: int):
        self.rowcount = rowcount
        self.executed = []
        self.closed = False

    def execute(self, sql, params=None):
        self.executed.append((sql, params))

    def close(self):
        self.closed = True


class FakeConnection:
    def __init__(self, rowcount: int):
        self.cur = FakeCursor(rowcount)
        self.committed = False
        self.rolled_back = False
        self.closed = False

    def cursor(self, dictionary=True):
        return self.cur

    def commit(self):
        self.committed = True

    def rollback(self):
        self.rolled_back = True

    def close(self):
        self.closed = True


class FakeConnFactory:
    def __init__(self, rowcount: int = 1):
        self.conn = FakeConnection(rowcount)

    def connect(self, *, with_database: bool = True):
        return self.conn


def test_connections_report_matched_rows(monkeypatch):
    seen = {}

    def fake_connect(**kwargs):
        seen.update(kwargs)
        return object()

    monkeypatch.setattr(mysql.connector, "connect", fake_connect)
    cfg = DBConfig(host="db", port=3307, user="u", password="p", database="wagetrack_test")

    DatabaseConnection(cfg).connect()

    assert seen["client_flags"] == [ClientFlag.FOUND_ROWS]
    assert seen["database"] == "wagetrack_test"


@pytest.mark.parametrize("rowcount, expected", [(0, False), (1, True)])
def test_update_result_follows_matched_rows(rowcount, expected):
    employees = MySQLEmployeeRepository(FakeConnFactory(rowcount))
    attendance = MySQLAttendanceRepository(FakeConnFactory(rowcount))

    assert employees.update_employee(owner_id=1, employee_id=3, name="Kim", hourly_rate=12.0) is expected
    assert (
        attendance.update_record(
            owner_id=1, attendance_id=9, employee_id=3, work_date=None, time_in=time(9, 0), time_out=None
        )
        is expected
    )


def test_db_cursor_rolls_back_and_closes_on_error():
    factory = FakeConnFactory()

    with pytest.raises(RuntimeError):
        with db_cursor(factory) as (_, cur):
            cur.execute("SELECT 1")
            raise RuntimeError("boom")

    assert factory.conn.rolled_back and not factory.conn.committed
    assert factory.conn.cur.closed and factory.conn.closed


def test_normalize_mysql_time_variants():
    assert normalize_mysql_time(None) is None
    assert normalize_mysql_time(time(7, 15)) == time(7, 15)
    assert normalize_mysql_time(timedelta(hours=26, minutes=5)) == time(2, 5)
    assert normalize_mysql_time("08:30:00") == time(8, 30)
    with pytest.raises(TypeError):
        normalize_mysql_time(830)


def test_shift_natural_key_is_indexed_not_unique():
    statements = list(iter_sql_statements(SCHEMA_PATH.read_text(encoding="utf-8")))
    (attendance_ddl,) = [s for s in statements if "CREATE TABLE IF NOT EXISTS attendance_records" in s]

    assert "INDEX idx_attendance_natural_key (employee_id, work_date, time_in)" in attendance_ddl
    assert "UNIQUE" not in attendance_ddl
    assert "ON DELETE CASCADE" in attendance_ddl
