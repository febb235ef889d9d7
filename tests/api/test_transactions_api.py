"""
Tests for the transaction endpoints.

These check the HTTP layer: status codes, response shape and
error mapping. Balance rules are covered in
test_ledger_service.py.
"""

from datetime import date
from decimal import Decimal

import pytest

from finance_tracker.models.enums import TransactionType


@pytest.fixture
def account(make_account):
    return make_account(name="BCA", balance="1000000")


@pytest.fixture
def salary(make_category):
    return make_category("Salary", TransactionType.INCOME)


@pytest.fixture
def food(make_category):
    return make_category("Food", TransactionType.EXPENSE)


def account_balance(client, headers, account_id):
    accounts = client.get("/v1/accounts", headers=headers).json()
    match = next(a for a in accounts if a["id"] == account_id)
    return Decimal(match["balance"])


def post_transaction(client, headers, **body):
    return client.post("/v1/transactions", json=body, headers=headers)


class TestCreate:

    def test_create_returns_201_with_display_fields(
        self, client, auth_headers, account, food
    ):
        response = post_transaction(
            client, auth_headers,
            amount=200000, type="expense", category_id=food.id,
            account_id=account.id, title="Groceries", date="2026-10-01",
        )

        assert response.status_code == 201
        data = response.json()
        assert data["title"] == "Groceries"
        assert data["type"] == "expense"
        assert data["date"] == "2026-10-01"
        assert data["account"] == {"name": "BCA", "color": "#3b82f6"}
        assert data["category"] == {"name": "Food", "type": "expense"}

    def test_create_applies_balance(self, client, auth_headers, account, food):
        post_transaction(
            client, auth_headers,
            amount=200000, type="expense", category_id=food.id,
            account_id=account.id, title="Rent",
        )

        assert account_balance(client, auth_headers, account.id) == Decimal("800000")

    def test_description_used_as_title(self, client, auth_headers, account, salary):
        response = post_transaction(
            client, auth_headers,
            amount=10, type="income", category_id=salary.id,
            account_id=account.id, description="From script",
        )

        assert response.status_code == 201
        assert response.json()["title"] == "From script"

    def test_date_defaults_to_today(self, client, auth_headers, account, salary):
        response = post_transaction(
            client, auth_headers,
            amount=10, type="income", category_id=salary.id,
            account_id=account.id, title="Tip",
        )

        assert response.json()["date"] == date.today().isoformat()

    @pytest.mark.parametrize("missing", ["amount", "type", "category_id", "account_id", "title"])
    def test_missing_field_returns_400(self, client, auth_headers, account, salary, missing):
        body = {
            "amount": 10,
            "type": "income",
            "category_id": salary.id,
            "account_id": account.id,
            "title": "Tip",
        }
        body.pop(missing)

        response = post_transaction(client, auth_headers, **body)

        assert response.status_code == 400
        assert response.json()["detail"].startswith("Missing required fields")

    @pytest.mark.parametrize("amount", [0, -5, "abc", "NaN", True])
    def test_invalid_amount_returns_400(
        self, client, auth_headers, account, salary, amount
    ):
        response = post_transaction(
            client, auth_headers,
            amount=amount, type="income", category_id=salary.id,
            account_id=account.id, title="Nothing",
        )

        assert response.status_code == 400
        assert response.json()["detail"].startswith("Amount must be")
        assert account_balance(client, auth_headers, account.id) == Decimal("1000000")
        assert client.get("/v1/transactions", headers=auth_headers).json() == []

    def test_unknown_account_returns_404(self, client, auth_headers, salary):
        response = post_transaction(
            client, auth_headers,
            amount=10, type="income", category_id=salary.id,
            account_id=9999, title="Tip",
        )

        assert response.status_code == 404


class TestDelete:

    def test_delete_reverses_balance(self, client, auth_headers, account, food):
        created = post_transaction(
            client, auth_headers,
            amount=200000, type="expense", category_id=food.id,
            account_id=account.id, title="Rent",
        ).json()

        response = client.delete(
            f"/v1/transactions/{created['id']}", headers=auth_headers
        )

        assert response.status_code == 204
        assert account_balance(client, auth_headers, account.id) == Decimal("1000000")

    def test_second_delete_returns_404(self, client, auth_headers, account, food):
        created = post_transaction(
            client, auth_headers,
            amount=5, type="expense", category_id=food.id,
            account_id=account.id, title="Coffee",
        ).json()
        client.delete(f"/v1/transactions/{created['id']}", headers=auth_headers)

        response = client.delete(
            f"/v1/transactions/{created['id']}", headers=auth_headers
        )

        assert response.status_code == 404
        assert account_balance(client, auth_headers, account.id) == Decimal("1000000")


class TestList:

    def _seed(self, client, headers, account, salary, food):
        for amount, type, category, day in [
            (500, "income", salary, "2026-01-10"),
            (40, "expense", food, "2026-02-05"),
            (700, "income", salary, "2026-03-01"),
        ]:
            post_transaction(
                client, headers,
                amount=amount, type=type, category_id=category.id,
                account_id=account.id, title=f"{type} {day}", date=day,
            )

    def test_plain_list_newest_first(self, client, auth_headers, account, salary, food):
        self._seed(client, auth_headers, account, salary, food)

        data = client.get("/v1/transactions", headers=auth_headers).json()

        assert isinstance(data, list)
        assert [t["date"] for t in data] == ["2026-03-01", "2026-02-05", "2026-01-10"]

    def test_limit_and_offset(self, client, auth_headers, account, salary, food):
        self._seed(client, auth_headers, account, salary, food)

        data = client.get(
            "/v1/transactions", params={"limit": 1, "offset": 1}, headers=auth_headers
        ).json()

        assert [t["date"] for t in data] == ["2026-02-05"]

    def test_date_filter_adds_summary(self, client, auth_headers, account, salary, food):
        self._seed(client, auth_headers, account, salary, food)

        data = client.get(
            "/v1/transactions",
            params={"from": "2026-02-01", "to": "2026-03-31", "limit": 1},
            headers=auth_headers,
        ).json()

        # Page holds one row, the summary covers the whole range
        assert len(data["transactions"]) == 1
        summary = data["summary"]
        assert Decimal(summary["total_income"]) == Decimal("700")
        assert Decimal(summary["total_expense"]) == Decimal("40")
        assert Decimal(summary["net_change"]) == Decimal("660")
        assert summary["transaction_count"] == 2
