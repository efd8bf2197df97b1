"""Trip-based earnings and trip-linked cash advances."""

from __future__ import annotations

from decimal import Decimal
from typing import Iterable

from pydantic import BaseModel, Field

from haulpay.models.base import ZERO
from haulpay.models.employee import Employee
from haulpay.models.payroll import PayrollPeriod
from haulpay.models.records import Trip, TripExpense


class TripValuation(BaseModel):
    trip_count: int = 0
    gross: Decimal = ZERO
    trips: list[Trip] = Field(default_factory=list)


class CashAdvanceValuation(BaseModel):
    total: Decimal = ZERO
    items: list[TripExpense] = Field(default_factory=list)


def value_trips(employee: Employee, trips: Iterable[Trip], period: PayrollPeriod) -> TripValuation:
    """Trip count and gross trip income for a daily-rate employee.

    Salaried (Admin) staff are not trip-paid and always value to zero here.
    A trip where the employee is on record as both driver and helper pays
    the driver rate once.
    """
    if employee.is_salaried:
        return TripValuation()

    count = 0
    gross = ZERO
    period_trips: list[Trip] = []
    for trip in trips:
        if not period.contains(trip.date):
            continue
        if trip.driver_id == employee.id:
            gross += trip.driver_rate
        elif trip.helper_id == employee.id:
            gross += trip.helper_rate
        else:
            continue
        count += 1
        period_trips.append(trip)
    return TripValuation(trip_count=count, gross=gross, trips=period_trips)


def value_trip_cash_advances(
    employee: Employee, period_trips: Iterable[Trip], expenses: Iterable[TripExpense]
) -> CashAdvanceValuation:
    """Cash advances drawn against the employee's trips in the period."""
    trips_by_id = {t.id: t for t in period_trips}
    if not trips_by_id:
        return CashAdvanceValuation()

    total = ZERO
    items: list[TripExpense] = []
    for expense in expenses:
        trip = trips_by_id.get(expense.trip_id)
        if trip is None:
            continue
        total += expense.ca_driver if trip.driver_id == employee.id else expense.ca_helper
        items.append(expense)
    return CashAdvanceValuation(total=total, items=items)
