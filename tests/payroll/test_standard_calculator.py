from __future__ import annotations

import pytest

from src.hr_payroll.hr_payroll.employees.model import CompensationTemplate
from src.hr_payroll.hr_payroll.payroll.calculator.standard_calculator import StandardPayrollCalculator, attendance_factor
from src.hr_payroll.hr_payroll.payroll.rules import PayrollRules


def test_full_month_without_statutory_numbers():
    calc = StandardPayrollCalculator()
    result = calc.compute(template=CompensationTemplate(ctc_annual=600000), working_days=22, paid_days=22)

    e = result.earnings
    assert result.monthly_gross == 50000
    assert result.target_gross == 50000
    assert (e.basic, e.hra, e.conveyance, e.medical, e.special_allowance, e.other_allowance) == (
        20000,
        10000,
        5000,
        4000,
        0,
        11000,
    )
    assert e.gross == 50000
    assert result.deductions.pf == 0
    assert result.deductions.esi == 0
    assert result.deductions.professional_tax == 200
    assert result.deductions.total == 200
    assert result.net == 49800


def test_half_attendance_halves_target_gross():
    calc = StandardPayrollCalculator()
    result = calc.compute(template=CompensationTemplate(ctc_annual=600000), working_days=22, paid_days=11)

    assert result.attendance_factor == 0.5
    assert result.target_gross == 25000
    assert result.earnings.basic == 10000
    assert result.earnings.hra == 5000
    assert result.earnings.gross == 25000
    assert result.net == 24800


def test_pf_and_esi_apply_only_with_registration_numbers():
    template = CompensationTemplate(ctc_annual=120000, pf_number="PF-1", esi_number="ESI-1")
    result = StandardPayrollCalculator().compute(template=template, working_days=20, paid_days=20)

    assert result.earnings.gross == 10000
    assert result.deductions.pf == 480
    assert result.deductions.esi == 75
    assert result.deductions.total == 480 + 75 + 200
    assert result.net == 10000 - 755


def test_esi_skipped_above_gross_ceiling():
    template = CompensationTemplate(ctc_annual=300000, esi_number="ESI-1")
    result = StandardPayrollCalculator().compute(template=template, working_days=20, paid_days=20)

    assert result.earnings.gross == 25000
    assert result.deductions.esi == 0


def test_esi_ceiling_is_a_configurable_rule():
    template = CompensationTemplate(ctc_annual=300000, esi_number="ESI-1")
    calc = StandardPayrollCalculator(PayrollRules(esi_gross_ceiling=30000))
    assert calc.compute(template=template, working_days=20, paid_days=20).deductions.esi == 188


def test_fixed_allowances_scale_with_attendance():
    template = CompensationTemplate(
        ctc_annual=600000,
        conveyance_fixed=1600,
        medical_fixed=1250,
        special_allowance_fixed=3000,
        tds=1000,
        loan_deduction=500,
    )
    result = StandardPayrollCalculator().compute(template=template, working_days=20, paid_days=10)

    e = result.earnings
    assert (e.conveyance, e.medical, e.special_allowance) == (800, 625, 1500)
    # target 25000 - (10000 + 5000 + 800 + 625 + 1500) tops up other allowance
    assert e.other_allowance == 7075
    assert e.gross == 25000
    assert result.deductions.tds == 500
    assert result.deductions.loan_deduction == 250


def test_missing_ctc_uses_fallback_gross():
    result = StandardPayrollCalculator().compute(template=CompensationTemplate(), working_days=20, paid_days=20)
    assert result.monthly_gross == 6000
    assert result.earnings.gross == 6000


def test_zero_working_days_gives_zero_pay_and_no_professional_tax():
    result = StandardPayrollCalculator().compute(
        template=CompensationTemplate(ctc_annual=600000), working_days=0, paid_days=0
    )
    assert result.attendance_factor == 0
    assert result.earnings.gross == 0
    assert result.deductions.professional_tax == 0
    assert result.net == 0


def test_net_is_never_negative():
    template = CompensationTemplate(ctc_annual=12000, loan_deduction=50000)
    result = StandardPayrollCalculator().compute(template=template, working_days=20, paid_days=20)
    assert result.net == 0


@pytest.mark.parametrize("paid, working, expected", [(0, 22, 0.0), (11, 22, 0.5), (30, 22, 1.0), (5, 0, 0.0)])
def test_attendance_factor_is_bounded(paid, working, expected):
    assert attendance_factor(paid, working) == expected


def test_zero_percentages_are_honoured():
    template = CompensationTemplate(ctc_annual=600000, basic_pct=0, hra_pct=0)
    result = StandardPayrollCalculator().compute(template=template, working_days=22, paid_days=22)
    assert result.earnings.basic == 0
    assert result.earnings.hra == 0
    assert result.earnings.gross == 50000
