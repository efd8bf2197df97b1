"""Payroll preview, period generation and ledger endpoints."""

from __future__ import annotations

import datetime as dt
from typing import Any

from fastapi import APIRouter, Depends, HTTPException, Query
from pydantic import BaseModel, ValidationError

from haulpay.api.deps import get_store
from haulpay.core.exceptions import InvalidPeriodError, PayrollGenerationError, StorageError
from haulpay.core.types import JsonDict
from haulpay.models.payroll import PayrollLine, PayrollPeriod
from haulpay.services.ledger import PayrollLedger
from haulpay.services.period_generator import PayrollPeriodGenerator
from haulpay.services.scope import filter_by_scope, scope_from_query
from haulpay.valuation.engine import value_payroll_batch

router = APIRouter(tags=["payroll"])


class GeneratePeriodRequest(BaseModel):
    start: str
    end: str


def _period(start: str, end: str) -> PayrollPeriod:
    try:
        return PayrollPeriod.parse(start, end)
    except InvalidPeriodError as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc


@router.get("/preview", response_model=list[PayrollLine])
def preview(
    start: str,
    end: str,
    scope: str | None = None,
    names: list[str] = Query(default=[]),
    user: str = "",
    store: Any = Depends(get_store),
) -> list[PayrollLine]:
    """Live payroll lines for the period; nothing is persisted.

    Without a ``scope`` only the current user's line is returned.
    """
    period = _period(start, end)
    try:
        lines = value_payroll_batch(store.list_employees(), store.load_inputs(period), period)
    except (StorageError, ValidationError) as exc:
        raise HTTPException(status_code=502, detail=str(exc)) from exc
    return filter_by_scope(lines, scope_from_query(scope, names), user, key=lambda line: line.employee_name)


@router.post("/periods")
def generate_period(body: GeneratePeriodRequest, store: Any = Depends(get_store)) -> JsonDict:
    """Delete and rebuild every payroll record for the period."""
    period = _period(body.start, body.end)
    generator = PayrollPeriodGenerator(source=store, store=store)
    try:
        result = generator.generate(period)
    except PayrollGenerationError as exc:
        raise HTTPException(status_code=502, detail=str(exc)) from exc
    return {
        "periodStart": period.start.isoformat(),
        "periodEnd": period.end.isoformat(),
        "deletedCount": result.deleted_count,
        "insertedCount": result.inserted_count,
        "totalGross": str(result.total_gross),
        "totalNet": str(result.total_net),
        "records": [r.model_dump(mode="json", by_alias=True) for r in result.records],
    }


@router.get("/ledger/{employee_id}")
def ledger(employee_id: str, start: dt.date, end: dt.date, store: Any = Depends(get_store)) -> JsonDict:
    try:
        summary = PayrollLedger(store=store).summarize(employee_id, start, end)
    except InvalidPeriodError as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc
    except StorageError as exc:
        raise HTTPException(status_code=502, detail=str(exc)) from exc
    return {
        "employeeId": summary.employee_id,
        "start": summary.start.isoformat(),
        "end": summary.end.isoformat(),
        "records": [r.model_dump(mode="json", by_alias=True) for r in summary.records],
        "totalGross": str(summary.total_gross),
        "totalThirteenthMonth": str(summary.total_thirteenth_month),
        "totalIponPondo": str(summary.total_ipon_pondo),
        "grandTotal": str(summary.grand_total),
    }
