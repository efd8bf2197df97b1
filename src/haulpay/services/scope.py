"""Visibility scope for payroll views.

A scope decides which employee names a caller may see. It is resolved by
one pure function and applied after valuation; payroll computation itself
never looks at it.
"""

from __future__ import annotations

from typing import Annotated, Callable, Iterable, Literal, TypeVar, Union

from pydantic import BaseModel, Field

T = TypeVar("T")


class AllScope(BaseModel):
    kind: Literal["All"] = "All"


class UserOnlyScope(BaseModel):
    kind: Literal["UserOnly"] = "UserOnly"


class NamedScope(BaseModel):
    kind: Literal["Named"] = "Named"
    names: list[str] = Field(default_factory=list)


Scope = Annotated[Union[AllScope, UserOnlyScope, NamedScope], Field(discriminator="kind")]


def allowed_names(scope: Scope | None, current_user_name: str) -> frozenset[str] | None:
    """Names visible under ``scope``; None means unrestricted."""
    if isinstance(scope, AllScope):
        return None
    if isinstance(scope, NamedScope) and scope.names:
        return frozenset(scope.names)
    return frozenset({current_user_name})


def filter_by_scope(
    items: Iterable[T], scope: Scope | None, current_user_name: str, key: Callable[[T], str]
) -> list[T]:
    allowed = allowed_names(scope, current_user_name)
    if allowed is None:
        return list(items)
    return [item for item in items if key(item) in allowed]


def scope_from_query(kind: str | None, names: Iterable[str] = ()) -> Scope | None:
    """Build a scope from loose query parameters; unknown kinds give None."""
    if kind == "All":
        return AllScope()
    if kind == "UserOnly":
        return UserOnlyScope()
    if kind == "Named":
        return NamedScope(names=[n for n in names if n])
    return None
