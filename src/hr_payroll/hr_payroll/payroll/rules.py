from __future__ import annotations

from dataclasses import dataclass, fields
from typing import Any, Mapping, Optional

from ..core.constants import (
    ESI_GROSS_CEILING,
    FALLBACK_CONVEYANCE_PCT,
    FALLBACK_MEDICAL_PCT,
    FALLBACK_MONTHLY_GROSS,
    FULL_DAY_MINUTES,
    HALF_DAY_MINUTES,
    PAID_LEAVE_ACCRUAL_PER_MONTH,
)


@dataclass(frozen=True)
class PayrollRules:
    """Business constants of the payroll engine.

    These are illustrative company rules, not statutory law; deployments can
    override them through the ``PAYROLL_RULES`` setting.
    """

    full_day_minutes: int = FULL_DAY_MINUTES
    half_day_minutes: int = HALF_DAY_MINUTES
    fallback_monthly_gross: int = FALLBACK_MONTHLY_GROSS
    fallback_conveyance_pct: float = FALLBACK_CONVEYANCE_PCT
    fallback_medical_pct: float = FALLBACK_MEDICAL_PCT
    esi_gross_ceiling: int = ESI_GROSS_CEILING
    paid_leave_accrual_per_month: float = PAID_LEAVE_ACCRUAL_PER_MONTH

    @classmethod
    def from_settings(cls, overrides: Optional[Mapping[str, Any]] = None) -> "PayrollRules":
        if not overrides:
            return cls()
        known = {f.name: f.type for f in fields(cls)}
        unknown = set(overrides) - set(known)
        if unknown:
            raise ValueError(f"Unknown payroll rule(s): {', '.join(sorted(unknown))}")
        defaults = cls()
        values = {
            name: type(getattr(defaults, name))(overrides[name]) for name in known if name in overrides
        }
        return cls(**values)
