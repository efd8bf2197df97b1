"""Attendance marking."""

from __future__ import annotations

import datetime as dt
from typing import Any

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from haulpay.api.deps import get_store
from haulpay.core.exceptions import StorageError
from haulpay.core.types import JsonDict
from haulpay.models.records import AttendanceStatus
from haulpay.services.attendance_marker import AttendanceMarker

router = APIRouter(tags=["attendance"])


class MarkAttendanceRequest(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    employee_id: str
    date: dt.date
    status: AttendanceStatus


@router.post("/attendance")
def mark_attendance(body: MarkAttendanceRequest, store: Any = Depends(get_store)) -> JsonDict:
    """Mark a day; repeating the current status clears it."""
    try:
        employee = store.get_employee(body.employee_id)
        if employee is None:
            raise HTTPException(status_code=404, detail=f"Employee {body.employee_id!r} not found")
        record = AttendanceMarker(store=store).mark(employee, body.date, body.status)
    except StorageError as exc:
        raise HTTPException(status_code=502, detail=str(exc)) from exc
    if record is None:
        return {"cleared": True, "record": None}
    return {"cleared": False, "record": record.model_dump(mode="json", by_alias=True)}
