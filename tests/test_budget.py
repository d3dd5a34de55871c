from datetime import date, timedelta

import pytest
from conftest import make_user

from app.modules.budget.schemas import BudgetResponse
from app.modules.budget.service import BudgetService, compute_summary, normalize_transaction_type


def _budget(total):
    return BudgetResponse(
        id="b1",
        household_id="h1",
        name="October",
        start_date=date(2026, 10, 1),
        end_date=date(2026, 10, 31),
        total_amount=total,
    )


def test_remaining_is_total_minus_bills_plus_contributions():
    summary = compute_summary(_budget(1000), [
        {"type": "bill", "amount": 250},
        {"type": "bill", "amount": 100.5},
        {"type": "contribution", "amount": 50},
    ])
    assert summary.total_bills == 350.5
    assert summary.total_contributions == 50
    assert summary.remaining == 699.5


def test_expense_and_legacy_column_count_as_bills():
    summary = compute_summary(_budget(500), [
        {"type": "expense", "amount": 100},
        {"transaction_type": "bill", "amount": 40},
        {"transaction_type": "contribution", "amount": 10},
        {"type": "refund", "amount": 999},
    ])
    assert summary.total_bills == 140
    assert summary.total_contributions == 10
    assert summary.remaining == 370


def test_no_active_budget_means_zero_remaining():
    summary = compute_summary(None, [{"type": "bill", "amount": 20}])
    assert summary.total_bills == 20
    assert summary.remaining == 0


@pytest.mark.parametrize("row,expected", [
    ({"type": "Bill"}, "bill"),
    ({"type": "expense"}, "bill"),
    ({"transaction_type": "contribution"}, "contribution"),
    ({"type": None, "transaction_type": None}, None),
])
def test_normalize_transaction_type(row, expected):
    assert normalize_transaction_type(row) == expected


def test_active_budget_contains_today(fake):
    fake.seed("budgets", {"household_id": "h1", "name": "Past", "start_date": "2026-09-01",
                          "end_date": "2026-09-30", "total_amount": 100})
    fake.seed("budgets", {"household_id": "h1", "name": "Current", "start_date": "2026-10-01",
                          "end_date": "2026-10-31", "total_amount": 200})
    fake.seed("budgets", {"household_id": "h2", "name": "Other household", "start_date": "2026-10-01",
                          "end_date": "2026-10-31", "total_amount": 300})
    service = BudgetService(fake)
    assert service.get_active_budget("h1", date(2026, 10, 15)).name == "Current"
    assert service.get_active_budget("h1", date(2026, 10, 31)).name == "Current"
    assert service.get_active_budget("h1", date(2026, 11, 1)) is None


def test_overlapping_budgets_latest_start_wins(fake):
    fake.seed("budgets", {"household_id": "h1", "name": "Year", "start_date": "2026-01-01",
                          "end_date": "2026-12-31", "total_amount": 12000})
    fake.seed("budgets", {"household_id": "h1", "name": "October", "start_date": "2026-10-01",
                          "end_date": "2026-10-31", "total_amount": 1000})
    assert BudgetService(fake).get_active_budget("h1", date(2026, 10, 2)).name == "October"


def _current_period():
    today = date.today()
    return (today - timedelta(days=5)).isoformat(), (today + timedelta(days=5)).isoformat()


def test_owner_creates_budget_and_overview_shows_remaining(client, household):
    start, end = _current_period()
    resp = client.post(
        "/api/v1/budget/budgets",
        json={"name": "Groceries", "start_date": start, "end_date": end, "total_amount": 800},
        headers=household.owner_headers,
    )
    assert resp.status_code == 201

    client.post("/api/v1/budget/transactions", json={"type": "bill", "amount": 300},
                headers=household.member_headers)
    client.post("/api/v1/budget/transactions", json={"type": "contribution", "amount": 50},
                headers=household.member_headers)
    client.post("/api/v1/budget/transactions", json={"type": "expense", "amount": 25},
                headers=household.owner_headers)

    overview = client.get("/api/v1/budget", headers=household.member_headers).json()
    assert overview["active_budget"]["name"] == "Groceries"
    assert len(overview["transactions"]) == 3
    assert overview["transactions"][0]["type"] == "bill"  # expense stored as bill, newest first
    assert overview["summary"] == {"total_bills": 325.0, "total_contributions": 50.0, "remaining": 525.0}


def test_overview_without_budget(client, household):
    overview = client.get("/api/v1/budget", headers=household.owner_headers).json()
    assert overview["active_budget"] is None
    assert overview["summary"]["remaining"] == 0


def test_member_cannot_create_or_update_budget(client, household, fake):
    start, end = _current_period()
    resp = client.post(
        "/api/v1/budget/budgets",
        json={"name": "Sneaky", "start_date": start, "end_date": end, "total_amount": 10},
        headers=household.member_headers,
    )
    assert resp.status_code == 403
    assert fake.rows("budgets") == []

    budget = fake.seed("budgets", {"household_id": household.id, "name": "Real", "start_date": start,
                                   "end_date": end, "total_amount": 100})
    resp = client.put(f"/api/v1/budget/budgets/{budget['id']}", json={"total_amount": 1},
                      headers=household.member_headers)
    assert resp.status_code == 403
    assert fake.rows("budgets")[0]["total_amount"] == 100


def test_owner_updates_budget(client, household, fake):
    start, end = _current_period()
    budget = fake.seed("budgets", {"household_id": household.id, "name": "Real", "start_date": start,
                                   "end_date": end, "total_amount": 100})
    resp = client.put(f"/api/v1/budget/budgets/{budget['id']}", json={"total_amount": 150},
                      headers=household.owner_headers)
    assert resp.status_code == 200
    assert resp.json()["total_amount"] == 150
    assert resp.json()["name"] == "Real"


def test_update_rejects_inverted_period(client, household, fake):
    budget = fake.seed("budgets", {"household_id": household.id, "name": "Real", "start_date": "2026-10-01",
                                   "end_date": "2026-10-31", "total_amount": 100})
    resp = client.put(f"/api/v1/budget/budgets/{budget['id']}", json={"end_date": "2026-09-01"},
                      headers=household.owner_headers)
    assert resp.status_code == 400


def test_update_other_household_budget_is_not_found(client, household, fake):
    budget = fake.seed("budgets", {"household_id": "elsewhere", "name": "Theirs", "start_date": "2026-10-01",
                                   "end_date": "2026-10-31", "total_amount": 100})
    resp = client.put(f"/api/v1/budget/budgets/{budget['id']}", json={"total_amount": 1},
                      headers=household.owner_headers)
    assert resp.status_code == 404


def test_budget_validation(client, household):
    bad_period = {"name": "X", "start_date": "2026-10-10", "end_date": "2026-10-01", "total_amount": 10}
    negative = {"name": "X", "start_date": "2026-10-01", "end_date": "2026-10-10", "total_amount": -1}
    for payload in (bad_period, negative):
        resp = client.post("/api/v1/budget/budgets", json=payload, headers=household.owner_headers)
        assert resp.status_code == 422


def test_transaction_amount_must_be_positive(client, household):
    resp = client.post("/api/v1/budget/transactions", json={"type": "bill", "amount": 0},
                       headers=household.member_headers)
    assert resp.status_code == 422


def test_legacy_transaction_rows_are_normalized(client, household, fake):
    fake.seed("transactions", {"household_id": household.id, "transaction_type": "expense", "amount": 12,
                               "created_by": household.owner.id})
    rows = client.get("/api/v1/budget/transactions", headers=household.member_headers).json()
    assert rows[0]["type"] == "bill"


def test_budget_requires_household(client, fake):
    _, headers = make_user(fake, "nohome@example.com")
    resp = client.get("/api/v1/budget", headers=headers)
    assert resp.status_code == 404
