"""Shared model config and lenient numeric field types.

Collaborator records arrive as loosely-typed documents: amounts may be
missing, blank, strings or null. Money and count fields therefore coerce
anything unusable to zero instead of failing validation.
"""

from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal, InvalidOperation
from enum import StrEnum
from typing import Annotated, Any

from pydantic import BaseModel, BeforeValidator, ConfigDict
from pydantic.alias_generators import to_camel

ZERO = Decimal("0")


def to_decimal(value: Any) -> Decimal:
    """Coerce a loosely-typed number to Decimal, defaulting to 0."""
    if value is None or isinstance(value, bool):
        return ZERO
    if isinstance(value, Decimal):
        result = value
    elif isinstance(value, int):
        result = Decimal(value)
    elif isinstance(value, float):
        result = Decimal(str(value))
    elif isinstance(value, str):
        text = value.strip().replace(",", "")
        if not text:
            return ZERO
        try:
            result = Decimal(text)
        except InvalidOperation:
            return ZERO
    else:
        return ZERO
    return result if result.is_finite() else ZERO


def _to_bool(value: Any) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in {"true", "1", "yes", "y"}
    return bool(value)


MoneyField = Annotated[Decimal, BeforeValidator(to_decimal)]
QuantityField = Annotated[Decimal, BeforeValidator(to_decimal)]  # hours, minutes
FlagField = Annotated[bool, BeforeValidator(_to_bool)]


class CollaboratorModel(BaseModel):
    """Base for records owned by the storage collaborator (camelCase on the wire)."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        str_strip_whitespace=True,
        extra="ignore",
    )

    def to_document(self) -> dict[str, Any]:
        """Serialize with the collaborator's camelCase keys.

        Dates become ISO strings; money stays Decimal so document stores
        that require exact numbers (DynamoDB) accept it unchanged.
        """
        return _plain(self.model_dump(by_alias=True))


def _plain(value: Any) -> Any:
    if isinstance(value, dict):
        return {k: _plain(v) for k, v in value.items()}
    if isinstance(value, list):
        return [_plain(v) for v in value]
    if isinstance(value, (date, datetime)):
        return value.isoformat()
    if isinstance(value, StrEnum):
        return value.value
    return value
