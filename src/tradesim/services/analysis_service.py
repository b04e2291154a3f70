"""Portfolio analysis: values holdings at current market prices."""

import logging

from tradesim.core.timezone import now_eastern
from tradesim.domain.views import PortfolioView
from tradesim.services.accounting import value_holdings
from tradesim.services.ledger_service import LedgerService
from tradesim.services.market_data_service import MarketDataService

logger = logging.getLogger(__name__)


class AnalysisService:
    """Service combining ledger holdings with market prices."""

    def __init__(self, ledger: LedgerService, market_data: MarketDataService):
        self._ledger = ledger
        self._market_data = market_data

    def portfolio(self, user_id: str) -> PortfolioView:
        """
        Value every holding of a user.

        Prices come from the batch lookup, so a failing symbol uses its last
        cached price; holdings with no price at all are reported as unpriced.
        """
        account = self._ledger.get_account(user_id)
        holdings = self._ledger.get_holdings(user_id)

        prices = self._market_data.current_prices([h.symbol for h in holdings]) if holdings else {}
        valuation = value_holdings(holdings, prices)
        if valuation.unpriced_symbols:
            logger.warning(
                "Portfolio of %s has unpriced holdings: %s",
                user_id,
                ", ".join(valuation.unpriced_symbols),
            )

        return PortfolioView(
            user_id=user_id,
            cash_balance=account.cash_balance,
            valuation=valuation,
            holdings_count=len(holdings),
            as_of=now_eastern(),
        )
