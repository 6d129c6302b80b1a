from datetime import date
from decimal import Decimal

import pytest
from harvest_sdk.models import (
    CostRate,
    ExpenseCategoryReport,
    ResponseEnvelope,
    Role,
    TaskEntry,
)
from pydantic import ValidationError


def test_envelope_takes_resource_named_list_as_items():
    payload = {
        "roles": [{"id": 1, "name": "Founder", "user_ids": [1, 2]}],
        "per_page": 100,
        "total_pages": 3,
        "total_entries": 201,
        "next_page": 2,
        "previous_page": None,
        "page": 1,
        "links": {
            "first": "https://api.harvestapp.com/v2/roles?page=1&per_page=100",
            "next": "https://api.harvestapp.com/v2/roles?page=2&per_page=100",
            "previous": None,
            "last": "https://api.harvestapp.com/v2/roles?page=3&per_page=100",
        },
    }

    envelope = ResponseEnvelope[Role].model_validate(payload)

    assert envelope.items[0].user_ids == [1, 2]
    assert envelope.total_count == 201
    assert envelope.has_next_page is True
    assert envelope.links.next.endswith("page=2&per_page=100")
    assert envelope.links.previous is None


def test_envelope_without_item_list_is_rejected():
    with pytest.raises(ValidationError):
        ResponseEnvelope[Role].model_validate({"per_page": 100, "page": 1})


def test_envelope_with_ambiguous_lists_is_rejected():
    with pytest.raises(ValidationError):
        ResponseEnvelope[Role].model_validate({"roles": [], "clients": []})


def test_envelope_items_are_typed():
    with pytest.raises(ValidationError):
        ResponseEnvelope[Role].model_validate({"roles": [{"id": "x"}]})


def test_task_entry_extends_summary():
    task = TaskEntry.model_validate(
        {
            "id": 8083800,
            "name": "Business Development",
            "billable_by_default": False,
            "default_hourly_rate": 0.0,
            "is_default": False,
            "is_active": True,
            "unknown_field": "ignored",
        }
    )
    assert task.default_hourly_rate == Decimal("0")
    assert task.is_active is True


def test_cost_rate_dates():
    rate = CostRate.model_validate(
        {"id": 1, "amount": 75.5, "start_date": "2023-01-01", "end_date": None}
    )
    assert rate.start_date == date(2023, 1, 1)
    assert rate.amount == Decimal("75.5")


def test_expense_category_report():
    report = ExpenseCategoryReport.model_validate(
        {
            "expense_category_id": 4197501,
            "expense_category_name": "Lodging",
            "total_amount": 100,
            "billable_amount": 100,
            "currency": "EUR",
        }
    )
    assert report.expense_category_name == "Lodging"
