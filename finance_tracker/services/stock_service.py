"""
Stock portfolio service.

Holdings are stored; prices are not. Valuation asks the quote
webhook for the latest price of every held symbol in one call.

Quote webhook contract:
    GET {QUOTE_API_URL}?symbols=BBCA,TLKM
    -> {"BBCA": 9150, "TLKM": 3400}
Symbols missing from the response are reported unpriced.
"""

from contextlib import contextmanager
from decimal import Decimal, InvalidOperation

import httpx
import structlog
from sqlalchemy import select
from sqlalchemy.orm import Session

from finance_tracker.config import get_settings
from finance_tracker.errors import NotFound, UpstreamFailure
from finance_tracker.models.stock import StockHolding
from finance_tracker.schemas.stock import (
    StockCreate,
    HoldingValuation,
    PortfolioResponse,
)
from finance_tracker.services.api_key_gate import OwnerScope

logger = structlog.get_logger(__name__)


class QuoteClient:
    """
    Thin client for the quote price webhook.

    Does not own the httpx client; open one with open_quote_client().
    """

    def __init__(self, client: httpx.Client, url: str | None = None):
        self.client = client
        self.url = url or get_settings().QUOTE_API_URL

    def get_prices(self, symbols: list[str]) -> dict[str, Decimal]:
        if not symbols:
            return {}
        try:
            response = self.client.get(
                self.url, params={"symbols": ",".join(symbols)}
            )
            response.raise_for_status()
            payload = response.json()
        except (httpx.HTTPError, ValueError) as e:
            logger.error("quote_fetch_failed", symbols=symbols, error=str(e))
            raise UpstreamFailure("quote", str(e)) from e

        if not isinstance(payload, dict):
            raise UpstreamFailure("quote", "unexpected quote payload")

        prices = {}
        for symbol in symbols:
            raw = payload.get(symbol)
            if raw is None:
                continue
            try:
                prices[symbol] = Decimal(str(raw))
            except InvalidOperation:
                logger.warning("quote_unparseable", symbol=symbol, value=raw)
        return prices


@contextmanager
def open_quote_client():
    """QuoteClient over an httpx client that is closed on exit."""
    settings = get_settings()
    with httpx.Client(timeout=settings.QUOTE_API_TIMEOUT) as client:
        yield QuoteClient(client, settings.QUOTE_API_URL)


class StockService:

    def __init__(self, db: Session, quotes: QuoteClient | None = None):
        self.db = db
        self.quotes = quotes

    def add_holding(self, scope: OwnerScope, request: StockCreate) -> StockHolding:
        holding = StockHolding(
            owner_id=scope.owner_id,
            symbol=request.symbol,
            lots=request.lots,
            buy_price=request.buy_price,
        )
        self.db.add(holding)
        self.db.flush()
        return holding

    def list_holdings(self, scope: OwnerScope) -> list[StockHolding]:
        holdings = self.db.execute(
            select(StockHolding)
            .where(StockHolding.owner_id == scope.owner_id)
            .order_by(StockHolding.symbol, StockHolding.id)
        ).scalars().all()
        return list(holdings)

    def delete_holding(self, scope: OwnerScope, holding_id: int) -> None:
        holding = self.db.get(StockHolding, holding_id)
        if not holding or holding.owner_id != scope.owner_id:
            raise NotFound(f"Stock holding {holding_id} not found")
        self.db.delete(holding)
        self.db.flush()

    def portfolio(self, scope: OwnerScope) -> PortfolioResponse:
        """
        Value every holding at the latest quote.

        Totals only include holdings that could be priced.
        """
        if self.quotes is None:
            with open_quote_client() as quotes:
                return self._value_holdings(scope, quotes)
        return self._value_holdings(scope, self.quotes)

    def _value_holdings(
        self, scope: OwnerScope, quotes: QuoteClient
    ) -> PortfolioResponse:
        holdings = self.list_holdings(scope)
        prices = quotes.get_prices(sorted({h.symbol for h in holdings}))

        valuations = []
        total_cost = Decimal("0")
        total_value = Decimal("0")
        for h in holdings:
            price = prices.get(h.symbol)
            market_value = price * h.shares if price is not None else None
            gain = market_value - h.cost_basis if market_value is not None else None
            if market_value is not None:
                total_cost += h.cost_basis
                total_value += market_value

            valuations.append(HoldingValuation(
                id=h.id,
                symbol=h.symbol,
                lots=h.lots,
                shares=h.shares,
                buy_price=h.buy_price,
                cost_basis=h.cost_basis,
                current_price=price,
                market_value=market_value,
                gain=gain,
            ))

        return PortfolioResponse(
            holdings=valuations,
            total_cost=total_cost,
            total_value=total_value,
            total_gain=total_value - total_cost,
        )
