"""Regenerate the stored payroll records for one cut-off period."""

from __future__ import annotations

import datetime as dt
import logging
import uuid

from pydantic import ValidationError

from haulpay.core.exceptions import HaulPayError, PayrollGenerationError
from haulpay.core.protocols import IPayrollDataSource, IPayrollStore
from haulpay.models.payroll import GenerationResult, PayrollPeriod, PayrollRecord
from haulpay.valuation.engine import value_payroll_batch

logger = logging.getLogger(__name__)


class PayrollPeriodGenerator:
    """Two-phase period regeneration.

    Phase 1 values every employee with no writes. Phase 2 hands the whole
    replacement to the store in one batch call. Nothing is rolled back if
    phase 2 fails; rerunning the same period heals it.
    """

    def __init__(self, *, source: IPayrollDataSource, store: IPayrollStore) -> None:
        self._source = source
        self._store = store

    def build_records(self, period: PayrollPeriod, generated_at: dt.datetime | None = None) -> list[PayrollRecord]:
        """Phase 1: value all employees for the period without touching storage."""
        generated_at = generated_at or dt.datetime.now(dt.timezone.utc)
        employees = self._source.list_employees()
        inputs = self._source.load_inputs(period)
        lines = value_payroll_batch(employees, inputs, period)
        return [line.to_record(uuid.uuid4().hex, generated_at) for line in lines]

    def generate(self, period: PayrollPeriod) -> GenerationResult:
        logger.info("Generating payroll for period %s", period)
        try:
            records = self.build_records(period)
        except (HaulPayError, ValidationError) as exc:
            logger.error("Loading payroll inputs for %s failed: %s", period, exc)
            raise PayrollGenerationError(period.start, period.end, str(exc), partial=False) from exc

        try:
            deleted = self._store.replace_period(period, records)
        except HaulPayError as exc:
            logger.error("Replacing payroll records for %s failed: %s", period, exc)
            raise PayrollGenerationError(period.start, period.end, str(exc)) from exc

        result = GenerationResult(period=period, deleted_count=deleted, records=records)
        logger.info(
            "Payroll for %s: replaced %d record(s) with %d, gross=%s net=%s",
            period, deleted, result.inserted_count, result.total_gross, result.total_net,
        )
        return result
