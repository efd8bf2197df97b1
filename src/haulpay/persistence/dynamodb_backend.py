"""DynamoDB backend implementing the HaulPay store protocols, with Redis-cached holidays.

Three tables, all keyed PK (hash) + SK (range):

    haulpay-employees        PK=EMP#<id>                      SK=PROFILE
    haulpay-operations       PK=<KIND>#<yyyy-mm>              SK=<date>#<...>#<id>
                             PK=EXPENSE#<trip id>             SK=<expense id>
                             PK=PETSERVICE#<yyyy-mm>          SK=<employee id>
                             PK=HOLIDAY#<yyyy>                SK=<date>#<id>
    haulpay-payroll-records  PK=PERIOD#<start>_<end>          SK=EMP#<employee id>#<record id>

Dated operational records are partitioned by month so a cut-off reads at
most two partitions per record kind.
"""

from __future__ import annotations

import datetime as dt
import json
import logging
from typing import Any, Iterable, TypeVar

import boto3
from boto3.dynamodb.conditions import Attr, Key
from botocore.exceptions import BotoCoreError, ClientError
from pydantic import BaseModel, ValidationError

from haulpay.core.exceptions import CacheError, StorageError
from haulpay.core.types import JsonDict
from haulpay.models.base import CollaboratorModel
from haulpay.models.employee import Employee
from haulpay.models.payroll import PayrollInputs, PayrollPeriod, PayrollRecord
from haulpay.models.records import (
    AdminAllowance,
    AttendanceRecord,
    Holiday,
    OvertimeRecord,
    PetServiceRecord,
    Trip,
    TripExpense,
    UndertimeRecord,
)

logger = logging.getLogger(__name__)

M = TypeVar("M", bound=BaseModel)

EMPLOYEES_TABLE = "haulpay-employees"
OPERATIONS_TABLE = "haulpay-operations"
PAYROLL_TABLE = "haulpay-payroll-records"
TABLE_NAMES = (EMPLOYEES_TABLE, OPERATIONS_TABLE, PAYROLL_TABLE)

_KEY_ATTRS = ("PK", "SK")


def _month_key(day: dt.date) -> str:
    return f"{day.year:04d}-{day.month:02d}"


def _strip_keys(item: JsonDict) -> JsonDict:
    return {k: v for k, v in item.items() if k not in _KEY_ATTRS}


def _item(model: CollaboratorModel, pk: str, sk: str) -> JsonDict:
    doc = model.to_document()
    doc["PK"] = pk
    doc["SK"] = sk
    return doc


def trip_key(trip: Trip) -> tuple[str, str]:
    return f"TRIP#{_month_key(trip.date)}", f"{trip.date.isoformat()}#{trip.id}"


def attendance_key(record: AttendanceRecord) -> tuple[str, str]:
    return (
        f"ATTENDANCE#{_month_key(record.date)}",
        f"{record.date.isoformat()}#{record.employee_id}#{record.id}",
    )


def overtime_key(record: OvertimeRecord) -> tuple[str, str]:
    return f"OVERTIME#{_month_key(record.date)}", f"{record.date.isoformat()}#{record.id}"


def undertime_key(record: UndertimeRecord) -> tuple[str, str]:
    return f"UNDERTIME#{_month_key(record.date)}", f"{record.date.isoformat()}#{record.id}"


def allowance_key(record: AdminAllowance) -> tuple[str, str]:
    return f"ALLOWANCE#{_month_key(record.date)}", f"{record.date.isoformat()}#{record.id}"


def expense_key(expense: TripExpense) -> tuple[str, str]:
    return f"EXPENSE#{expense.trip_id}", expense.id


def pet_service_key(record: PetServiceRecord) -> tuple[str, str]:
    return f"PETSERVICE#{record.year:04d}-{record.month:02d}", record.employee_id


def holiday_key(holiday: Holiday) -> tuple[str, str]:
    return f"HOLIDAY#{holiday.date.year:04d}", f"{holiday.date.isoformat()}#{holiday.id}"


def payroll_key(record: PayrollRecord) -> tuple[str, str]:
    return (
        f"PERIOD#{record.period_start.isoformat()}_{record.period_end.isoformat()}",
        f"EMP#{record.employee_id}#{record.id}",
    )


def _period_pk(period: PayrollPeriod) -> str:
    return f"PERIOD#{period.start.isoformat()}_{period.end.isoformat()}"


class DynamoDBHRStore:
    """Production store for employees, operational records and payroll records."""

    def __init__(self, table_suffix: str = "", region: str = "ap-southeast-1",
                 endpoint_url: str | None = None, cache: Any = None,
                 holiday_cache_ttl: int = 86400) -> None:
        self._table_suffix = table_suffix
        self._region = region
        self._endpoint_url = endpoint_url
        self._cache = cache
        self._holiday_cache_ttl = holiday_cache_ttl
        kwargs: dict = {"region_name": region}
        if endpoint_url:
            kwargs["endpoint_url"] = endpoint_url
        self._ddb = boto3.resource("dynamodb", **kwargs)

    def _table(self, base: str):
        return self._ddb.Table(f"{base}{self._table_suffix}")

    # ---- low-level helpers ----

    def _query(self, table_base: str, key_condition: Any) -> list[JsonDict]:
        """Run a paginated query and return all items."""
        tbl = self._table(table_base)
        items: list[JsonDict] = []
        kwargs: JsonDict = {"KeyConditionExpression": key_condition}
        try:
            while True:
                resp = tbl.query(**kwargs)
                items.extend(resp.get("Items", []))
                last_key = resp.get("LastEvaluatedKey")
                if not last_key:
                    return items
                kwargs["ExclusiveStartKey"] = last_key
        except (ClientError, BotoCoreError) as exc:
            raise StorageError(f"DynamoDB query on {table_base!r} failed: {exc}") from exc

    def _put(self, table_base: str, item: JsonDict) -> None:
        try:
            self._table(table_base).put_item(Item=item)
        except (ClientError, BotoCoreError) as exc:
            raise StorageError(f"DynamoDB put on {table_base!r} failed for {item.get('PK')!r}: {exc}") from exc

    def _delete(self, table_base: str, pk: str, sk: str) -> None:
        try:
            self._table(table_base).delete_item(Key={"PK": pk, "SK": sk})
        except (ClientError, BotoCoreError) as exc:
            raise StorageError(f"DynamoDB delete on {table_base!r} failed for {pk!r}/{sk!r}: {exc}") from exc

    def _query_months(self, kind: str, period: PayrollPeriod, model: type[M]) -> list[M]:
        """Records of one kind dated inside the period, across its month partitions."""
        upper = f"{period.end.isoformat()}#\uffff"
        out: list[M] = []
        for year, month in period.months():
            condition = Key("PK").eq(f"{kind}#{year:04d}-{month:02d}") & Key("SK").between(
                period.start.isoformat(), upper
            )
            out.extend(model.model_validate(_strip_keys(i)) for i in self._query(OPERATIONS_TABLE, condition))
        return out

    # ---- writers used by seeding and collaborators ----

    def put_trip(self, trip: Trip) -> None:
        self._put(OPERATIONS_TABLE, _item(trip, *trip_key(trip)))

    def put_trip_expense(self, expense: TripExpense) -> None:
        self._put(OPERATIONS_TABLE, _item(expense, *expense_key(expense)))

    def put_overtime(self, record: OvertimeRecord) -> None:
        self._put(OPERATIONS_TABLE, _item(record, *overtime_key(record)))

    def put_undertime(self, record: UndertimeRecord) -> None:
        self._put(OPERATIONS_TABLE, _item(record, *undertime_key(record)))

    def put_admin_allowance(self, record: AdminAllowance) -> None:
        self._put(OPERATIONS_TABLE, _item(record, *allowance_key(record)))

    def put_pet_service(self, record: PetServiceRecord) -> None:
        self._put(OPERATIONS_TABLE, _item(record, *pet_service_key(record)))

    def put_holiday(self, holiday: Holiday) -> None:
        self._put(OPERATIONS_TABLE, _item(holiday, *holiday_key(holiday)))
        if self._cache is not None:
            self._drop_cached(self._holiday_cache_key(holiday.date.year))

    # ---- IEmployeeStore ----

    def get_employee(self, employee_id: str) -> Employee | None:
        try:
            resp = self._table(EMPLOYEES_TABLE).get_item(Key={"PK": f"EMP#{employee_id}", "SK": "PROFILE"})
        except (ClientError, BotoCoreError) as exc:
            raise StorageError(f"DynamoDB get failed for employee {employee_id!r}: {exc}") from exc
        item = resp.get("Item")
        return Employee.model_validate(_strip_keys(item)) if item else None

    def save_employee(self, employee: Employee) -> None:
        self._put(EMPLOYEES_TABLE, _item(employee, f"EMP#{employee.id}", "PROFILE"))

    # ---- IPayrollDataSource ----

    def list_employees(self) -> list[Employee]:
        tbl = self._table(EMPLOYEES_TABLE)
        employees: list[Employee] = []
        kwargs: JsonDict = {"FilterExpression": Attr("SK").eq("PROFILE")}
        try:
            while True:
                resp = tbl.scan(**kwargs)
                employees.extend(Employee.model_validate(_strip_keys(i)) for i in resp.get("Items", []))
                last_key = resp.get("LastEvaluatedKey")
                if not last_key:
                    return employees
                kwargs["ExclusiveStartKey"] = last_key
        except (ClientError, BotoCoreError) as exc:
            raise StorageError(f"DynamoDB scan of employees failed: {exc}") from exc

    def load_inputs(self, period: PayrollPeriod) -> PayrollInputs:
        trips = self._query_months("TRIP", period, Trip)
        expenses: list[TripExpense] = []
        for trip in trips:
            items = self._query(OPERATIONS_TABLE, Key("PK").eq(f"EXPENSE#{trip.id}"))
            expenses.extend(TripExpense.model_validate(_strip_keys(i)) for i in items)

        pet_service: list[PetServiceRecord] = []
        for year, month in period.months():
            items = self._query(OPERATIONS_TABLE, Key("PK").eq(f"PETSERVICE#{year:04d}-{month:02d}"))
            pet_service.extend(PetServiceRecord.model_validate(_strip_keys(i)) for i in items)

        holidays = [
            h for year in sorted({y for y, _ in period.months()})
            for h in self.get_holidays(year)
            if period.contains(h.date)
        ]

        return PayrollInputs(
            trips=trips,
            trip_expenses=expenses,
            attendance=self._query_months("ATTENDANCE", period, AttendanceRecord),
            overtime=self._query_months("OVERTIME", period, OvertimeRecord),
            undertime=self._query_months("UNDERTIME", period, UndertimeRecord),
            admin_allowances=self._query_months("ALLOWANCE", period, AdminAllowance),
            pet_service=pet_service,
            holidays=holidays,
        )

    @staticmethod
    def _holiday_cache_key(year: int) -> str:
        return f"holidays:{year}"

    def _drop_cached(self, key: str) -> None:
        try:
            self._cache.delete(key)
        except CacheError:
            logger.warning("Could not invalidate cache key %s", key)

    def get_holidays(self, year: int) -> list[Holiday]:
        """Holiday table for one year, served from cache when available."""
        cache_key = self._holiday_cache_key(year)

        if self._cache is not None:
            try:
                cached = self._cache.get(cache_key)
            except CacheError:
                cached = None
            if cached is not None:
                try:
                    return [Holiday.model_validate(h) for h in json.loads(cached)]
                except (json.JSONDecodeError, TypeError, ValidationError) as exc:
                    logger.warning("Discarding unreadable cached holidays for %s: %s", year, exc)
                    self._drop_cached(cache_key)

        items = self._query(OPERATIONS_TABLE, Key("PK").eq(f"HOLIDAY#{year:04d}"))
        holidays = [Holiday.model_validate(_strip_keys(i)) for i in items]

        if self._cache is not None:
            payload = json.dumps([h.model_dump(mode="json", by_alias=True) for h in holidays])
            try:
                self._cache.setex(cache_key, self._holiday_cache_ttl, payload)
            except CacheError:
                logger.warning("Could not cache holidays for %s", year)

        return holidays

    # ---- IPayrollStore ----

    def find_period_records(self, period: PayrollPeriod) -> list[PayrollRecord]:
        items = self._query(PAYROLL_TABLE, Key("PK").eq(_period_pk(period)))
        return [PayrollRecord.model_validate(_strip_keys(i)) for i in items]

    def replace_period(self, period: PayrollPeriod, records: list[PayrollRecord]) -> int:
        """Delete the period's records and insert the new set in one batch.

        The batch writer groups requests but is not transactional: a failure
        part-way leaves some deletes/puts applied.
        """
        stale = self.find_period_records(period)
        try:
            with self._table(PAYROLL_TABLE).batch_writer() as batch:
                for record in stale:
                    pk, sk = payroll_key(record)
                    batch.delete_item(Key={"PK": pk, "SK": sk})
                for record in records:
                    batch.put_item(Item=_item(record, *payroll_key(record)))
        except (ClientError, BotoCoreError) as exc:
            raise StorageError(f"DynamoDB batch replace for period {period} failed: {exc}") from exc
        return len(stale)

    def list_employee_records(self, employee_id: str) -> list[PayrollRecord]:
        tbl = self._table(PAYROLL_TABLE)
        records: list[PayrollRecord] = []
        kwargs: JsonDict = {"FilterExpression": Attr("employeeId").eq(employee_id)}
        try:
            while True:
                resp = tbl.scan(**kwargs)
                records.extend(PayrollRecord.model_validate(_strip_keys(i)) for i in resp.get("Items", []))
                last_key = resp.get("LastEvaluatedKey")
                if not last_key:
                    return records
                kwargs["ExclusiveStartKey"] = last_key
        except (ClientError, BotoCoreError) as exc:
            raise StorageError(f"DynamoDB scan of payroll records failed: {exc}") from exc

    # ---- IAttendanceStore ----

    def find_attendance(self, employee_id: str, day: dt.date) -> list[AttendanceRecord]:
        condition = Key("PK").eq(f"ATTENDANCE#{_month_key(day)}") & Key("SK").begins_with(
            f"{day.isoformat()}#{employee_id}#"
        )
        return [AttendanceRecord.model_validate(_strip_keys(i)) for i in self._query(OPERATIONS_TABLE, condition)]

    def put_attendance(self, record: AttendanceRecord) -> None:
        self._put(OPERATIONS_TABLE, _item(record, *attendance_key(record)))

    def remove_attendance(self, record: AttendanceRecord) -> None:
        self._delete(OPERATIONS_TABLE, *attendance_key(record))


def put_many(store: DynamoDBHRStore, records: Iterable[CollaboratorModel]) -> int:
    """Write heterogeneous operational records through the matching put_* method."""
    writers = {
        Trip: store.put_trip,
        TripExpense: store.put_trip_expense,
        AttendanceRecord: store.put_attendance,
        OvertimeRecord: store.put_overtime,
        UndertimeRecord: store.put_undertime,
        AdminAllowance: store.put_admin_allowance,
        PetServiceRecord: store.put_pet_service,
        Holiday: store.put_holiday,
        Employee: store.save_employee,
    }
    count = 0
    for record in records:
        writers[type(record)](record)
        count += 1
    return count
