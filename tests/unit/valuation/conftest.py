"""Shared builders for valuation tests."""

from __future__ import annotations

import pytest

from haulpay.models.employee import Employee, Role
from haulpay.models.payroll import PayrollPeriod


@pytest.fixture
def first_half() -> PayrollPeriod:
    return PayrollPeriod.parse("2024-03-01", "2024-03-15")


@pytest.fixture
def second_half() -> PayrollPeriod:
    return PayrollPeriod.parse("2024-03-16", "2024-03-31")


@pytest.fixture
def driver() -> Employee:
    return Employee(id="D1", name="Ramon", role=Role.DRIVER, daily_rate=800)


@pytest.fixture
def helper() -> Employee:
    return Employee(id="H1", name="Jun", role=Role.HELPER, daily_rate=600)


@pytest.fixture
def admin() -> Employee:
    return Employee(id="A1", name="Liza", role=Role.ADMIN, rate=9000, daily_rate=750)
