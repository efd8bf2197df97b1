"""Progressive withholding tax."""

from __future__ import annotations

from decimal import Decimal

from haulpay.models.base import ZERO, to_decimal
from haulpay.valuation.rate_tables import TAX_BRACKETS, TAXABLE_DIVISOR


def calculate_withholding_tax(taxable_income: Decimal) -> Decimal:
    """Tax due on an amount already reduced to the half-period base."""
    income = max(to_decimal(taxable_income), ZERO)
    for upper_bound, base_tax, excess_over, rate in TAX_BRACKETS:
        if upper_bound is None or income <= upper_bound:
            return base_tax + (income - excess_over) * rate
    return ZERO  # unreachable, last bracket has no ceiling


def taxable_base(gross_income: Decimal, exempt_contributions: Decimal) -> Decimal:
    """Half of gross less tax-exempt contributions, floored at zero.

    The half-period approximation applies whatever the actual cut-off length.
    """
    taxable = to_decimal(gross_income) - to_decimal(exempt_contributions)
    if taxable <= ZERO:
        return ZERO
    return taxable / TAXABLE_DIVISOR
