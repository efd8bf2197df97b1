"""Static payroll rates. These do not vary by employee or company."""

from __future__ import annotations

from decimal import Decimal

from haulpay.models.records import HolidayType, OvertimeType

# --- WORK DAY ---
HOURS_PER_DAY = Decimal("8")
MINUTES_PER_HOUR = Decimal("60")
MINUTES_PER_DAY = HOURS_PER_DAY * MINUTES_PER_HOUR

HALF_DAY_FACTOR = Decimal("0.5")

# --- OVERTIME PREMIUMS (multiplier on the hourly rate) ---
OVERTIME_MULTIPLIERS = {
    OvertimeType.REGULAR: Decimal("1.25"),
    OvertimeType.REST_DAY_SPECIAL: Decimal("1.69"),
    OvertimeType.REGULAR_HOLIDAY: Decimal("2.30"),
}

# --- HOLIDAY PAY (multiplier on the daily rate) ---
# (unworked, worked)
HOLIDAY_MULTIPLIERS = {
    HolidayType.REGULAR: (Decimal("1.00"), Decimal("2.00")),
    HolidayType.SPECIAL_NON_WORKING: (Decimal("0.00"), Decimal("1.30")),
}

# --- FUNDS ---
IPON_PONDO_RATE = Decimal("0.05")  # forced savings, every cut-off
THIRTEENTH_MONTH_DIVISOR = Decimal("12")

# --- ALLOWANCES ---
PET_SERVICE_ALLOWANCE = Decimal("2000")  # per qualifying calendar month

# --- WITHHOLDING TAX ---
# Applied to half of the period's taxable income.
# (upper_bound, base_tax, excess_over, rate); upper_bound None = no ceiling
TAX_BRACKETS = [
    (Decimal("20833"), Decimal("0"), Decimal("0"), Decimal("0")),
    (Decimal("33333"), Decimal("0"), Decimal("20833"), Decimal("0.20")),
    (Decimal("66666"), Decimal("2500"), Decimal("33333"), Decimal("0.25")),
    (Decimal("166666"), Decimal("10833"), Decimal("66666"), Decimal("0.30")),
    (Decimal("666666"), Decimal("40833.33"), Decimal("166666"), Decimal("0.32")),
    (None, Decimal("200833.33"), Decimal("666666"), Decimal("0.35")),
]
TAXABLE_DIVISOR = Decimal("2")
