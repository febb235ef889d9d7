"""
Tests for account, category and summary endpoints.
"""

from decimal import Decimal

from sqlalchemy import update

from finance_tracker.models.account import Account
from finance_tracker.models.enums import TransactionType


class TestAccounts:

    def test_create_and_list(self, client, auth_headers):
        response = client.post(
            "/v1/accounts",
            json={"name": "Cash", "balance": 50000, "color": "#10b981", "icon": "banknote"},
            headers=auth_headers,
        )
        assert response.status_code == 201
        assert Decimal(response.json()["opening_balance"]) == Decimal("50000")

        accounts = client.get("/v1/accounts", headers=auth_headers).json()
        assert [a["name"] for a in accounts] == ["Cash"]

    def test_only_own_accounts_listed(self, client, auth_headers, other_owner, make_account):
        make_account(name="Theirs", scope=other_owner)

        assert client.get("/v1/accounts", headers=auth_headers).json() == []

    def test_delete_keeps_transactions(self, client, auth_headers, make_account, make_category):
        account = make_account(balance="100")
        category = make_category()
        client.post("/v1/transactions", json={
            "amount": 10, "type": "income", "category_id": category.id,
            "account_id": account.id, "title": "Tip",
        }, headers=auth_headers)

        response = client.delete(f"/v1/accounts/{account.id}", headers=auth_headers)
        assert response.status_code == 204

        transactions = client.get("/v1/transactions", headers=auth_headers).json()
        assert len(transactions) == 1
        assert transactions[0]["account_id"] is None
        assert transactions[0]["account"] is None

    def test_delete_unknown_account_returns_404(self, client, auth_headers):
        response = client.delete("/v1/accounts/42", headers=auth_headers)
        assert response.status_code == 404


class TestReconcile:

    def test_consistent_account(self, client, auth_headers, make_account):
        account = make_account(balance="100")

        response = client.get(
            f"/v1/accounts/{account.id}/reconcile", headers=auth_headers
        )

        assert response.status_code == 200
        assert response.json()["consistent"] is True

    def test_corrupted_account_returns_500_then_repair(
        self, client, auth_headers, db_session, make_account
    ):
        account = make_account(balance="100")
        account_id = account.id
        db_session.execute(
            update(Account).where(Account.id == account_id).values(balance=Decimal("5"))
        )
        db_session.commit()

        response = client.get(
            f"/v1/accounts/{account_id}/reconcile", headers=auth_headers
        )
        assert response.status_code == 500

        response = client.post(
            f"/v1/accounts/{account_id}/repair", headers=auth_headers
        )
        assert response.status_code == 200
        assert Decimal(response.json()["expected_balance"]) == Decimal("100")

        response = client.get(
            f"/v1/accounts/{account_id}/reconcile", headers=auth_headers
        )
        assert response.json()["consistent"] is True


class TestCategories:

    def test_create_and_filter(self, client, auth_headers):
        client.post("/v1/categories", json={"name": "Salary", "type": "income"}, headers=auth_headers)
        client.post("/v1/categories", json={"name": "Food", "type": "expense"}, headers=auth_headers)

        data = client.get(
            "/v1/categories", params={"type": "expense"}, headers=auth_headers
        ).json()

        assert [c["name"] for c in data] == ["Food"]

    def test_delete_used_category_returns_409(
        self, client, auth_headers, make_account, make_category
    ):
        account = make_account()
        category = make_category("Food", TransactionType.EXPENSE)
        client.post("/v1/transactions", json={
            "amount": 10, "type": "expense", "category_id": category.id,
            "account_id": account.id, "title": "Lunch",
        }, headers=auth_headers)

        response = client.delete(f"/v1/categories/{category.id}", headers=auth_headers)

        assert response.status_code == 409


class TestSummary:

    def test_summary(self, client, auth_headers, make_account, make_category):
        bank = make_account(name="Bank", balance="1000")
        make_account(name="Wallet", balance="200")
        category = make_category()
        for i in range(6):
            client.post("/v1/transactions", json={
                "amount": 100, "type": "income", "category_id": category.id,
                "account_id": bank.id, "title": f"Payment {i}",
                "date": f"2026-05-0{i + 1}",
            }, headers=auth_headers)

        data = client.get("/v1/summary", headers=auth_headers).json()

        assert Decimal(data["total_balance"]) == Decimal("1800")
        assert data["account_count"] == 2
        assert len(data["recent_transactions"]) == 5
        assert data["recent_transactions"][0]["date"] == "2026-05-06"
        assert data["recent_transactions"][0]["category"]["name"] == "Salary"
