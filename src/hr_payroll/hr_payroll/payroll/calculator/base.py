from __future__ import annotations

from abc import ABC, abstractmethod

from ...employees.model import CompensationTemplate
from ..model import PayrollBreakdown


class PayrollCalculator(ABC):
    """Calculator interface (Strategy Pattern for payroll)."""

    @abstractmethod
    def compute(self, *, template: CompensationTemplate, working_days: int, paid_days: float) -> PayrollBreakdown:
        raise NotImplementedError
