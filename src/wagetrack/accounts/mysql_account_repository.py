from __future__ import annotations

from typing import Optional

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchone
from .model import Account
from .repository import AccountRepository


def _row_to_account(row: dict) -> Account:
    return Account(
        account_id=int(row["account_id"]),
        email=row["email"],
        password_hash=row["password_hash"],
        created_at=row.get("created_at"),
    )


class MySQLAccountRepository(AccountRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, account_id: int) -> Optional[Account]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT account_id, email, password_hash, created_at
                FROM accounts
                WHERE account_id=%s
                """,
                (account_id,),
            )
            row = fetchone(cur)
            return _row_to_account(row) if row else None

    def get_by_email(self, email: str) -> Optional[Account]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT account_id, email, password_hash, created_at
                FROM accounts
                WHERE email=%s
                """,
                (email,),
            )
            row = fetchone(cur)
            return _row_to_account(row) if row else None

    def create_account(self, *, email: str, password_hash: str) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO accounts(email, password_hash)
                VALUES(%s,%s)
                """,
                (email, password_hash),
            )
            return int(cur.lastrowid)
