from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal
from typing import Any, Generic, List, Optional, TypeVar

from pydantic import BaseModel, ConfigDict, Field, model_validator

T = TypeVar("T")


class HarvestModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")


# --- Pagination ---


class PaginationLinks(HarvestModel):
    first: Optional[str] = None
    next: Optional[str] = None
    previous: Optional[str] = None
    last: Optional[str] = None


class ResponseEnvelope(HarvestModel, Generic[T]):
    """
    Harvest list payload. The item list is keyed by resource name
    ('roles', 'clients', 'results', ...) and is exposed here as `items`.
    """

    items: List[T]
    per_page: Optional[int] = None
    total_pages: Optional[int] = None
    total_entries: Optional[int] = None
    next_page: Optional[int] = None
    previous_page: Optional[int] = None
    page: Optional[int] = None
    links: PaginationLinks = Field(default_factory=PaginationLinks)

    @model_validator(mode="before")
    @classmethod
    def _collect_items(cls, data: Any) -> Any:
        if not isinstance(data, dict) or "items" in data:
            return data
        list_keys = [k for k, v in data.items() if isinstance(v, list)]
        if len(list_keys) != 1:
            raise ValueError(
                f"Expected exactly one list of items, found keys {list_keys!r}"
            )
        return {**data, "items": data[list_keys[0]]}

    @property
    def total_count(self) -> Optional[int]:
        return self.total_entries

    @property
    def has_next_page(self) -> bool:
        return self.next_page is not None


# --- Lightweight references embedded in other resources ---


class ClientRef(HarvestModel):
    id: int
    name: str
    currency: Optional[str] = None


class ProjectRef(HarvestModel):
    id: int
    name: str
    code: Optional[str] = None


class UserRef(HarvestModel):
    id: int
    name: str


class ExpenseCategoryRef(HarvestModel):
    id: int
    name: str
    unit_price: Optional[Decimal] = None
    unit_name: Optional[str] = None


class Receipt(HarvestModel):
    url: str
    file_name: Optional[str] = None
    file_size: Optional[int] = None
    content_type: Optional[str] = None


# --- Clients ---


class Client(HarvestModel):
    id: int
    name: str
    is_active: Optional[bool] = None
    address: Optional[str] = None
    statement_key: Optional[str] = None
    currency: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class CreateClient(HarvestModel):
    name: str
    is_active: Optional[bool] = None
    address: Optional[str] = None
    currency: Optional[str] = None


class UpdateClient(HarvestModel):
    """Fields left unset are not sent, so Harvest leaves them unchanged."""

    name: Optional[str] = None
    is_active: Optional[bool] = None
    address: Optional[str] = None
    currency: Optional[str] = None


# --- Roles ---


class Role(HarvestModel):
    id: int
    name: str
    user_ids: List[int] = Field(default_factory=list)
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class CreateRole(HarvestModel):
    name: str
    user_ids: Optional[List[int]] = None


class UpdateRole(HarvestModel):
    name: Optional[str] = None
    user_ids: Optional[List[int]] = None


# --- Tasks ---


class TaskSummary(HarvestModel):
    id: int
    name: str


class TaskEntry(TaskSummary):
    billable_by_default: Optional[bool] = None
    default_hourly_rate: Optional[Decimal] = None
    is_default: Optional[bool] = None
    is_active: Optional[bool] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class CreateTask(HarvestModel):
    name: str
    billable_by_default: Optional[bool] = None
    default_hourly_rate: Optional[float] = None
    is_default: Optional[bool] = None
    is_active: Optional[bool] = None


class UpdateTask(HarvestModel):
    name: Optional[str] = None
    billable_by_default: Optional[bool] = None
    default_hourly_rate: Optional[float] = None
    is_default: Optional[bool] = None
    is_active: Optional[bool] = None


# --- User cost rates ---


class CostRate(HarvestModel):
    id: int
    amount: Optional[Decimal] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class CreateCostRate(HarvestModel):
    amount: float
    start_date: Optional[date] = None


# --- Expenses ---


class Expense(HarvestModel):
    id: int
    notes: Optional[str] = None
    total_cost: Optional[Decimal] = None
    units: Optional[Decimal] = None
    is_closed: Optional[bool] = None
    is_locked: Optional[bool] = None
    is_billed: Optional[bool] = None
    locked_reason: Optional[str] = None
    spent_date: Optional[date] = None
    billable: Optional[bool] = None
    receipt: Optional[Receipt] = None
    user: Optional[UserRef] = None
    client: Optional[ClientRef] = None
    project: Optional[ProjectRef] = None
    expense_category: Optional[ExpenseCategoryRef] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


# --- Reports ---


class ClientExpenseReport(HarvestModel):
    client_id: int
    client_name: str
    total_amount: Optional[Decimal] = None
    billable_amount: Optional[Decimal] = None
    currency: Optional[str] = None


class ProjectExpenseReport(HarvestModel):
    client_id: Optional[int] = None
    client_name: Optional[str] = None
    project_id: int
    project_name: str
    total_amount: Optional[Decimal] = None
    billable_amount: Optional[Decimal] = None
    currency: Optional[str] = None


class ExpenseCategoryReport(HarvestModel):
    expense_category_id: int
    expense_category_name: str
    total_amount: Optional[Decimal] = None
    billable_amount: Optional[Decimal] = None
    currency: Optional[str] = None


class TeamExpenseReport(HarvestModel):
    user_id: int
    user_name: str
    is_contractor: Optional[bool] = None
    total_amount: Optional[Decimal] = None
    billable_amount: Optional[Decimal] = None
    currency: Optional[str] = None


class ClientTimeReport(HarvestModel):
    client_id: int
    client_name: str
    total_hours: Optional[Decimal] = None
    billable_hours: Optional[Decimal] = None
    currency: Optional[str] = None
    billable_amount: Optional[Decimal] = None


class ProjectTimeReport(HarvestModel):
    project_id: int
    project_name: str
    client_id: Optional[int] = None
    client_name: Optional[str] = None
    total_hours: Optional[Decimal] = None
    billable_hours: Optional[Decimal] = None
    currency: Optional[str] = None
    billable_amount: Optional[Decimal] = None


class TaskTimeReport(HarvestModel):
    task_id: int
    task_name: str
    total_hours: Optional[Decimal] = None
    billable_hours: Optional[Decimal] = None
    currency: Optional[str] = None
    billable_amount: Optional[Decimal] = None


class TeamTimeReport(HarvestModel):
    user_id: int
    user_name: str
    is_contractor: Optional[bool] = None
    total_hours: Optional[Decimal] = None
    billable_hours: Optional[Decimal] = None
    currency: Optional[str] = None
    billable_amount: Optional[Decimal] = None
