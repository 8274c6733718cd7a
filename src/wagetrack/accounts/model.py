from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional


@dataclass(frozen=True)
class Account:
    """Domain entity: the employer account that owns employees and shifts.

    Note: plain data object (no DB access code).
    """

    account_id: int
    email: str
    password_hash: str
    created_at: Optional[datetime] = None
