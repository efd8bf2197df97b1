"""Loan payment posting."""

from __future__ import annotations

import datetime as dt
from decimal import Decimal
from typing import Any

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel

from haulpay.api.deps import get_store
from haulpay.core.exceptions import (
    EmployeeNotFoundError,
    InvalidPaymentError,
    LoanNotFoundError,
    StorageError,
)
from haulpay.core.types import JsonDict
from haulpay.services.loan_payments import LoanPaymentRecorder

router = APIRouter(tags=["loans"])


class LoanPaymentRequest(BaseModel):
    amount: Decimal
    date: dt.date
    remarks: str = ""


@router.post("/{employee_id}/{loan_id}/payments")
def post_payment(employee_id: str, loan_id: str, body: LoanPaymentRequest, store: Any = Depends(get_store)) -> JsonDict:
    recorder = LoanPaymentRecorder(store=store)
    try:
        loan = recorder.record_payment(employee_id, loan_id, body.amount, body.date, body.remarks)
    except (EmployeeNotFoundError, LoanNotFoundError) as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc
    except InvalidPaymentError as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc
    except StorageError as exc:
        raise HTTPException(status_code=502, detail=str(exc)) from exc
    return loan.model_dump(mode="json", by_alias=True)
