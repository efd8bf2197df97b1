"""Type aliases used across HaulPay."""

from __future__ import annotations

from typing import Any

JsonDict = dict[str, Any]
EmployeeId = str
