"""Re-export persistence protocols from core for convenience."""

from __future__ import annotations

from haulpay.core.protocols import (
    IAttendanceStore,
    ICacheBackend,
    IEmployeeStore,
    IPayrollDataSource,
    IPayrollStore,
)

__all__ = ["IAttendanceStore", "ICacheBackend", "IEmployeeStore", "IPayrollDataSource", "IPayrollStore"]
