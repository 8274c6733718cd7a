from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional


@dataclass(frozen=True)
class Employee:
    """Domain entity: an employee on the employer's roster."""

    employee_id: int
    owner_id: int
    name: str
    hourly_rate: float
    created_at: Optional[datetime] = None
