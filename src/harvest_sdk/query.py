from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from typing import Any, Dict, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field

from .errors import ConfigurationError


def format_query_value(value: Any) -> str:
    """
    Serialize one query value to its wire form.
    Example: True -> 'true', date(2023, 4, 1) -> '2023-04-01', 100 -> '100'
    """
    # bool before int: bool is an int subclass
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, Enum):
        return format_query_value(value.value)
    # datetime before date: datetime is a date subclass
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    if isinstance(value, int):
        return str(value)
    # fixed-point, never exponent notation
    if isinstance(value, float):
        return format(Decimal(repr(value)), "f")
    if isinstance(value, Decimal):
        return format(value, "f")
    if isinstance(value, str):
        return value
    if isinstance(value, (list, tuple)):
        return ",".join(format_query_value(v) for v in value)
    raise ConfigurationError(
        f"Unsupported query parameter type: {type(value).__name__}"
    )


def format_query_mapping(values: Mapping[str, Any]) -> Dict[str, str]:
    """Format every non-None value; None means 'not set' and is dropped."""
    return {k: format_query_value(v) for k, v in values.items() if v is not None}


class QueryParameters(BaseModel):
    """
    Base for typed query parameter sets.
    Field aliases are the wire names; None means the key is omitted.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="forbid")

    def to_query(self) -> Dict[str, str]:
        return format_query_mapping(self.model_dump(by_alias=True, exclude_none=True))


class PaginatedQueryParameters(QueryParameters):
    page: Optional[int] = None
    per_page: Optional[int] = None


class ActiveQueryParameters(PaginatedQueryParameters):
    """Filters shared by the clients and tasks lists."""

    is_active: Optional[bool] = None
    updated_since: Optional[datetime] = None


class ExpensesQueryParameters(PaginatedQueryParameters):
    user_id: Optional[int] = None
    client_id: Optional[int] = None
    project_id: Optional[int] = None
    is_billed: Optional[bool] = None
    updated_since: Optional[datetime] = None
    from_: Optional[date] = Field(default=None, alias="from")
    to: Optional[date] = None


class ReportsQueryParameters(PaginatedQueryParameters):
    """Harvest requires a reporting window for every report endpoint."""

    from_: date = Field(alias="from")
    to: date


class TimeReportsQueryParameters(ReportsQueryParameters):
    include_fixed_fee: Optional[bool] = None


__all__ = [
    "format_query_value",
    "format_query_mapping",
    "QueryParameters",
    "PaginatedQueryParameters",
    "ActiveQueryParameters",
    "ExpensesQueryParameters",
    "ReportsQueryParameters",
    "TimeReportsQueryParameters",
]
