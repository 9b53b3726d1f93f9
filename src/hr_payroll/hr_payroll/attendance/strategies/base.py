from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import date
from typing import Sequence

from ..model import AttendanceSession


@dataclass(frozen=True)
class CreditDecision:
    credit: float
    source: str


class AttendanceCreditStrategy(ABC):
    """Strategy Pattern: encapsulate how a day's attendance credit is decided."""

    @abstractmethod
    def decide(self, *, employee_id: str, day: date, sessions: Sequence[AttendanceSession]) -> CreditDecision:
        raise NotImplementedError
