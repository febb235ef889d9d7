"""
Tests for the StockService and the quote webhook client.

The webhook is replaced with httpx.MockTransport so no network
is used.
"""

from decimal import Decimal

import httpx
import pytest

from finance_tracker.errors import NotFound, UpstreamFailure
from finance_tracker.schemas.stock import StockCreate
from finance_tracker.services.stock_service import (
    QuoteClient,
    StockService,
    open_quote_client,
)


def quote_client(handler):
    return QuoteClient(
        client=httpx.Client(transport=httpx.MockTransport(handler)),
        url="http://quotes.test/prices",
    )


class TestHoldings:

    def test_symbol_normalized(self, db_session, owner):
        holding = StockService(db_session).add_holding(
            owner, StockCreate(symbol=" bbca ", lots=2, buy_price=Decimal("9000"))
        )

        assert holding.symbol == "BBCA"
        assert holding.shares == 200
        assert holding.cost_basis == Decimal("1800000")

    def test_delete_foreign_holding_not_found(self, db_session, owner, other_owner):
        service = StockService(db_session)
        holding = service.add_holding(
            other_owner, StockCreate(symbol="TLKM", lots=1, buy_price=Decimal("3000"))
        )
        db_session.commit()

        with pytest.raises(NotFound):
            service.delete_holding(owner, holding.id)


class TestPortfolio:

    def test_values_holdings_at_quote(self, db_session, owner):
        requested = []

        def handler(request):
            requested.append(request.url.params["symbols"])
            return httpx.Response(200, json={"BBCA": 9500, "TLKM": 2800})

        service = StockService(db_session, quote_client(handler))
        service.add_holding(owner, StockCreate(symbol="BBCA", lots=1, buy_price=Decimal("9000")))
        service.add_holding(owner, StockCreate(symbol="TLKM", lots=2, buy_price=Decimal("3000")))
        db_session.commit()

        portfolio = service.portfolio(owner)

        assert requested == ["BBCA,TLKM"]
        assert portfolio.total_cost == Decimal("1500000")
        assert portfolio.total_value == Decimal("1510000")
        assert portfolio.total_gain == Decimal("10000")
        tlkm = next(h for h in portfolio.holdings if h.symbol == "TLKM")
        assert tlkm.gain == Decimal("-40000")

    def test_unquoted_symbol_left_out_of_totals(self, db_session, owner):
        def handler(request):
            return httpx.Response(200, json={"BBCA": 9500})

        service = StockService(db_session, quote_client(handler))
        service.add_holding(owner, StockCreate(symbol="BBCA", lots=1, buy_price=Decimal("9000")))
        service.add_holding(owner, StockCreate(symbol="GOTO", lots=10, buy_price=Decimal("80")))
        db_session.commit()

        portfolio = service.portfolio(owner)

        goto = next(h for h in portfolio.holdings if h.symbol == "GOTO")
        assert goto.current_price is None
        assert goto.market_value is None
        assert portfolio.total_value == Decimal("950000")

    def test_quote_failure_is_upstream_failure(self, db_session, owner):
        def handler(request):
            return httpx.Response(503, json={"error": "down"})

        service = StockService(db_session, quote_client(handler))
        service.add_holding(owner, StockCreate(symbol="BBCA", lots=1, buy_price=Decimal("9000")))
        db_session.commit()

        with pytest.raises(UpstreamFailure) as exc_info:
            service.portfolio(owner)

        assert exc_info.value.stage == "quote"

    def test_empty_portfolio_skips_webhook(self, db_session, owner):
        def handler(request):
            raise AssertionError("webhook should not be called")

        portfolio = StockService(db_session, quote_client(handler)).portfolio(owner)

        assert portfolio.holdings == []
        assert portfolio.total_value == Decimal("0")


class TestQuoteClientLifetime:

    def test_http_client_closed_on_exit(self):
        with open_quote_client() as quotes:
            assert not quotes.client.is_closed

        assert quotes.client.is_closed

    def test_http_client_closed_when_quote_fails(self):
        with pytest.raises(UpstreamFailure):
            with open_quote_client() as quotes:
                raise UpstreamFailure("quote", "service down")

        assert quotes.client.is_closed
