"""Tests for month-end statutory gating and withholding tax."""

from __future__ import annotations

from decimal import Decimal

import pytest

from haulpay.models.employee import Employee
from haulpay.models.payroll import PayrollPeriod
from haulpay.valuation.statutory import is_month_end, statutory_deductions
from haulpay.valuation.tax import calculate_withholding_tax, taxable_base


class TestIsMonthEnd:
    def test_leap_day_closes_february(self):
        assert is_month_end(PayrollPeriod.parse("2024-02-16", "2024-02-29"))

    def test_mid_month_is_not_month_end(self):
        assert not is_month_end(PayrollPeriod.parse("2024-02-01", "2024-02-15"))

    def test_non_leap_february_28(self):
        assert is_month_end(PayrollPeriod.parse("2023-02-16", "2023-02-28"))

    def test_period_spanning_two_months(self):
        assert is_month_end(PayrollPeriod.parse("2024-03-26", "2024-04-10"))


class TestStatutoryDeductions:
    def test_applied_at_month_end(self, second_half):
        emp = Employee(id="E1", sss=450, philhealth=250, pagibig=100, mp2=200)
        result = statutory_deductions(emp, second_half)
        assert result.total == Decimal("1000")
        assert result.tax_exempt == Decimal("800")

    def test_zero_mid_month(self, first_half):
        emp = Employee(id="E1", sss=450, philhealth=250, pagibig=100, mp2=200)
        assert statutory_deductions(emp, first_half).total == Decimal("0")


class TestWithholdingTax:
    @pytest.mark.parametrize(
        "taxable, expected",
        [
            (Decimal("15000"), Decimal("0")),
            (Decimal("20833"), Decimal("0")),
            (Decimal("25000"), Decimal("833.40")),
            (Decimal("33333"), Decimal("2500")),
            (Decimal("50000"), Decimal("6666.75")),
            (Decimal("100000"), Decimal("20833.20")),
            (Decimal("200000"), Decimal("51500.21")),
            (Decimal("700000"), Decimal("212500.23")),
        ],
    )
    def test_brackets(self, taxable, expected):
        assert calculate_withholding_tax(taxable) == expected

    def test_negative_income_is_untaxed(self):
        assert calculate_withholding_tax(Decimal("-10")) == Decimal("0")


class TestTaxableBase:
    def test_halves_gross_less_exempt(self):
        assert taxable_base(Decimal("50800"), Decimal("800")) == Decimal("25000")

    def test_non_positive_is_zero(self):
        assert taxable_base(Decimal("500"), Decimal("800")) == Decimal("0")
