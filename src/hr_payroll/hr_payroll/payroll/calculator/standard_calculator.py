from __future__ import annotations

from typing import Optional

from ...common.money import round_half_up
from ...employees.model import CompensationTemplate
from ..model import Deductions, Earnings, PayrollBreakdown
from ..rules import PayrollRules
from .base import PayrollCalculator


def attendance_factor(paid_days: float, working_days: int) -> float:
    if working_days <= 0:
        return 0.0
    return min(max(paid_days / working_days, 0.0), 1.0)


class StandardPayrollCalculator(PayrollCalculator):
    """Standard rule: attendance-scaled gross split into basic, HRA and allowances.

    Every line item is rounded on its own (half-up) before it is summed.
    """

    def __init__(self, rules: Optional[PayrollRules] = None):
        self._rules = rules or PayrollRules()

    def monthly_gross(self, template: CompensationTemplate) -> int:
        ctc = float(template.ctc_annual or 0)
        if ctc > 0:
            return round_half_up(ctc / 12)
        return int(self._rules.fallback_monthly_gross)

    def compute(self, *, template: CompensationTemplate, working_days: int, paid_days: float) -> PayrollBreakdown:
        rules = self._rules
        factor = attendance_factor(paid_days, working_days)

        monthly_gross = self.monthly_gross(template)
        target_gross = round_half_up(monthly_gross * factor)

        basic = round_half_up(target_gross * (template.basic_pct / 100))
        hra = round_half_up(target_gross * (template.hra_pct / 100))

        fixed = (
            template.conveyance_fixed,
            template.medical_fixed,
            template.special_allowance_fixed,
            template.other_allowance_fixed,
        )
        if all(float(v or 0) == 0 for v in fixed):
            conveyance = round_half_up(target_gross * rules.fallback_conveyance_pct)
            medical = round_half_up(target_gross * rules.fallback_medical_pct)
            special = 0
            other = 0
        else:
            conveyance, medical, special, other = (round_half_up(float(v or 0) * factor) for v in fixed)

        gross = basic + hra + conveyance + medical + special + other
        if gross < target_gross:
            other += target_gross - gross
            gross = target_gross

        pf = round_half_up(basic * (template.pf_rate / 100)) if template.pf_number else 0
        esi = (
            round_half_up(gross * (template.esi_rate / 100))
            if template.esi_number and gross <= rules.esi_gross_ceiling
            else 0
        )
        professional_tax = round_half_up(template.professional_tax) if gross > 0 else 0
        tds = round_half_up(float(template.tds or 0) * factor)
        loan = round_half_up(float(template.loan_deduction or 0) * factor)
        total = pf + esi + professional_tax + tds + loan

        return PayrollBreakdown(
            attendance_factor=factor,
            monthly_gross=monthly_gross,
            target_gross=target_gross,
            earnings=Earnings(
                basic=basic,
                hra=hra,
                conveyance=conveyance,
                medical=medical,
                special_allowance=special,
                other_allowance=other,
                gross=gross,
            ),
            deductions=Deductions(
                pf=pf,
                esi=esi,
                professional_tax=professional_tax,
                tds=tds,
                loan_deduction=loan,
                total=total,
            ),
            net=max(gross - total, 0),
        )
