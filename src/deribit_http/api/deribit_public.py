"""
Deribit Public API - no authentication required

Thin typed wrappers around DeribitSession.call().
"""

from typing import TYPE_CHECKING, Any, Dict, List, Literal, Optional

from . import endpoints
from ..models.market_types import (
    AprHistoryResponse,
    BookSummary,
    ContractSizeResponse,
    Currency,
    DeliveryPricesResponse,
    FundingChartData,
    FundingRateData,
    HelloResponse,
    IndexPriceData,
    Instrument,
    InstrumentKind,
    LastTradesResponse,
    OrderBook,
    SettlementsResponse,
    StatusResponse,
    Ticker,
    TradingViewChartData,
)
from ..models.market_types import TestResponse as ConnectionTestResponse

if TYPE_CHECKING:
    from ..services.session import DeribitSession

Sorting = Literal["asc", "desc", "default"]
SettlementType = Literal["settlement", "delivery", "bankruptcy"]


class DeribitPublicAPI:
    """Deribit public API methods"""

    def __init__(self, session: "DeribitSession"):
        self.session = session

    async def get_time(self) -> int:
        """
        Get server time in milliseconds
        GET /public/get_time
        """
        return await self.session.call(endpoints.GET_TIME, None, int)

    async def hello(self, client_name: str, client_version: str) -> HelloResponse:
        """
        Introduce the client to the server
        GET /public/hello
        """
        return await self.session.call(
            endpoints.HELLO,
            {"client_name": client_name, "client_version": client_version},
            HelloResponse
        )

    async def status(self) -> StatusResponse:
        """
        Platform lock status
        GET /public/status
        """
        return await self.session.call(endpoints.STATUS, None, StatusResponse)

    async def test(self, expected_result: Optional[str] = None) -> ConnectionTestResponse:
        """
        Connectivity test returning the API version
        GET /public/test

        Args:
            expected_result: "exception" makes the server answer with an error
        """
        return await self.session.call(
            endpoints.TEST,
            {"expected_result": expected_result},
            ConnectionTestResponse
        )

    async def get_currencies(self) -> List[Currency]:
        """
        Get available currencies
        GET /public/get_currencies
        """
        return await self.session.call(endpoints.GET_CURRENCIES, None, List[Currency])

    async def get_instruments(
        self,
        currency: str,
        kind: Optional[InstrumentKind] = None,
        expired: Optional[bool] = None
    ) -> List[Instrument]:
        """
        Get list of instruments
        GET /public/get_instruments

        Args:
            currency: BTC, ETH, USDC, ... or "any"
            kind: future, option, spot, future_combo, option_combo
            expired: List recently expired instruments instead of active ones
        """
        return await self.session.call(
            endpoints.GET_INSTRUMENTS,
            {"currency": currency, "kind": kind, "expired": expired},
            List[Instrument]
        )

    async def get_instrument(self, instrument_name: str) -> Instrument:
        """
        Get single instrument details
        GET /public/get_instrument
        """
        return await self.session.call(
            endpoints.GET_INSTRUMENT,
            {"instrument_name": instrument_name},
            Instrument
        )

    async def get_order_book(self, instrument_name: str, depth: Optional[int] = None) -> OrderBook:
        """
        Get order book
        GET /public/get_order_book

        Args:
            instrument_name: Instrument name
            depth: Number of levels per side
        """
        return await self.session.call(
            endpoints.GET_ORDER_BOOK,
            {"instrument_name": instrument_name, "depth": depth},
            OrderBook
        )

    async def ticker(self, instrument_name: str) -> Ticker:
        """
        Get ticker information
        GET /public/ticker
        """
        return await self.session.call(
            endpoints.TICKER,
            {"instrument_name": instrument_name},
            Ticker
        )

    async def get_index_price(self, index_name: str) -> IndexPriceData:
        """
        Get index price
        GET /public/get_index_price

        Args:
            index_name: btc_usd, eth_usd, ...
        """
        return await self.session.call(
            endpoints.GET_INDEX_PRICE,
            {"index_name": index_name},
            IndexPriceData
        )

    async def get_index_price_names(self) -> List[str]:
        """
        Get supported index names
        GET /public/get_index_price_names
        """
        return await self.session.call(endpoints.GET_INDEX_PRICE_NAMES, None, List[str])

    async def get_book_summary_by_currency(
        self,
        currency: str,
        kind: Optional[InstrumentKind] = None
    ) -> List[BookSummary]:
        """
        Get book summaries for every instrument of a currency
        GET /public/get_book_summary_by_currency
        """
        return await self.session.call(
            endpoints.GET_BOOK_SUMMARY_BY_CURRENCY,
            {"currency": currency, "kind": kind},
            List[BookSummary]
        )

    async def get_book_summary_by_instrument(self, instrument_name: str) -> List[BookSummary]:
        """
        Get book summary of one instrument
        GET /public/get_book_summary_by_instrument
        """
        return await self.session.call(
            endpoints.GET_BOOK_SUMMARY_BY_INSTRUMENT,
            {"instrument_name": instrument_name},
            List[BookSummary]
        )

    async def get_last_trades_by_instrument(
        self,
        instrument_name: str,
        start_seq: Optional[int] = None,
        end_seq: Optional[int] = None,
        count: Optional[int] = None,
        include_old: Optional[bool] = None,
        sorting: Optional[Sorting] = None
    ) -> LastTradesResponse:
        """
        Get latest trades
        GET /public/get_last_trades_by_instrument

        Args:
            instrument_name: Instrument name
            start_seq: First trade sequence number
            end_seq: Last trade sequence number
            count: Number of trades, default 10
            include_old: Include trades older than 7 days
            sorting: asc, desc or default
        """
        return await self.session.call(
            endpoints.GET_LAST_TRADES_BY_INSTRUMENT,
            {
                "instrument_name": instrument_name,
                "start_seq": start_seq,
                "end_seq": end_seq,
                "count": count,
                "include_old": include_old,
                "sorting": sorting
            },
            LastTradesResponse
        )

    async def get_last_trades_by_currency(
        self,
        currency: str,
        kind: Optional[InstrumentKind] = None,
        count: Optional[int] = None,
        sorting: Optional[Sorting] = None
    ) -> LastTradesResponse:
        """
        Get latest trades of a currency
        GET /public/get_last_trades_by_currency
        """
        return await self.session.call(
            endpoints.GET_LAST_TRADES_BY_CURRENCY,
            {"currency": currency, "kind": kind, "count": count, "sorting": sorting},
            LastTradesResponse
        )

    async def get_last_trades_by_instrument_and_time(
        self,
        instrument_name: str,
        start_timestamp: int,
        end_timestamp: int,
        count: Optional[int] = None,
        sorting: Optional[Sorting] = None
    ) -> LastTradesResponse:
        """
        Get trades of an instrument inside a time range
        GET /public/get_last_trades_by_instrument_and_time
        """
        return await self.session.call(
            endpoints.GET_LAST_TRADES_BY_INSTRUMENT_AND_TIME,
            {
                "instrument_name": instrument_name,
                "start_timestamp": start_timestamp,
                "end_timestamp": end_timestamp,
                "count": count,
                "sorting": sorting
            },
            LastTradesResponse
        )

    async def get_funding_rate_value(
        self,
        instrument_name: str,
        start_timestamp: int,
        end_timestamp: int
    ) -> float:
        """
        Get the funding rate accrued over a period
        GET /public/get_funding_rate_value
        """
        return await self.session.call(
            endpoints.GET_FUNDING_RATE_VALUE,
            {
                "instrument_name": instrument_name,
                "start_timestamp": start_timestamp,
                "end_timestamp": end_timestamp
            },
            float
        )

    async def get_funding_rate_history(
        self,
        instrument_name: str,
        start_timestamp: int,
        end_timestamp: int
    ) -> List[FundingRateData]:
        """
        Get hourly funding rate history
        GET /public/get_funding_rate_history
        """
        return await self.session.call(
            endpoints.GET_FUNDING_RATE_HISTORY,
            {
                "instrument_name": instrument_name,
                "start_timestamp": start_timestamp,
                "end_timestamp": end_timestamp
            },
            List[FundingRateData]
        )

    async def get_funding_chart_data(self, instrument_name: str, length: Literal["8h", "24h", "1m"]) -> FundingChartData:
        """
        Get funding chart data of a perpetual
        GET /public/get_funding_chart_data
        """
        return await self.session.call(
            endpoints.GET_FUNDING_CHART_DATA,
            {"instrument_name": instrument_name, "length": length},
            FundingChartData
        )

    async def get_delivery_prices(
        self,
        index_name: str,
        offset: Optional[int] = None,
        count: Optional[int] = None
    ) -> DeliveryPricesResponse:
        """
        Get delivery prices of an index
        GET /public/get_delivery_prices
        """
        return await self.session.call(
            endpoints.GET_DELIVERY_PRICES,
            {"index_name": index_name, "offset": offset, "count": count},
            DeliveryPricesResponse
        )

    async def get_expirations(
        self,
        currency: str,
        kind: str,
        currency_pair: Optional[str] = None
    ) -> Dict[str, Any]:
        """
        Get expirations grouped by currency and kind
        GET /public/get_expirations

        Args:
            currency: BTC, ETH, ... or "any"/"grouped"
            kind: future, option or any
            currency_pair: Restrict to one currency pair, e.g. btc_usd
        """
        return await self.session.call(
            endpoints.GET_EXPIRATIONS,
            {"currency": currency, "kind": kind, "currency_pair": currency_pair},
            Dict[str, Any]
        )

    async def get_contract_size(self, instrument_name: str) -> ContractSizeResponse:
        """
        Get contract size of an instrument
        GET /public/get_contract_size
        """
        return await self.session.call(
            endpoints.GET_CONTRACT_SIZE,
            {"instrument_name": instrument_name},
            ContractSizeResponse
        )

    async def get_apr_history(
        self,
        currency: str,
        limit: Optional[int] = None,
        before: Optional[int] = None
    ) -> AprHistoryResponse:
        """
        Get APR history of a yield-bearing currency
        GET /public/get_apr_history

        Args:
            currency: steth or usde
            limit: Number of days
            before: Only days before this day number
        """
        return await self.session.call(
            endpoints.GET_APR_HISTORY,
            {"currency": currency, "limit": limit, "before": before},
            AprHistoryResponse
        )

    async def get_tradingview_chart_data(
        self,
        instrument_name: str,
        start_timestamp: int,
        end_timestamp: int,
        resolution: str
    ) -> TradingViewChartData:
        """
        Get OHLCV candles
        GET /public/get_tradingview_chart_data

        Args:
            resolution: Minutes (1, 3, 5, 10, 15, 30, 60, 120, 180, 360, 720) or "1D"
        """
        return await self.session.call(
            endpoints.GET_TRADINGVIEW_CHART_DATA,
            {
                "instrument_name": instrument_name,
                "start_timestamp": start_timestamp,
                "end_timestamp": end_timestamp,
                "resolution": resolution
            },
            TradingViewChartData
        )

    async def get_historical_volatility(self, currency: str) -> List[List[float]]:
        """
        Get historical volatility as [timestamp, value] pairs
        GET /public/get_historical_volatility
        """
        return await self.session.call(
            endpoints.GET_HISTORICAL_VOLATILITY,
            {"currency": currency},
            List[List[float]]
        )

    async def get_last_settlements_by_currency(
        self,
        currency: str,
        type: Optional[SettlementType] = None,
        count: Optional[int] = None,
        continuation: Optional[str] = None,
        search_start_timestamp: Optional[int] = None
    ) -> SettlementsResponse:
        """
        Get settlement, delivery and bankruptcy events of a currency
        GET /public/get_last_settlements_by_currency
        """
        return await self.session.call(
            endpoints.GET_LAST_SETTLEMENTS_BY_CURRENCY,
            {
                "currency": currency,
                "type": type,
                "count": count,
                "continuation": continuation,
                "search_start_timestamp": search_start_timestamp
            },
            SettlementsResponse
        )

    async def get_last_settlements_by_instrument(
        self,
        instrument_name: str,
        type: Optional[SettlementType] = None,
        count: Optional[int] = None,
        continuation: Optional[str] = None
    ) -> SettlementsResponse:
        """
        Get settlement events of an instrument
        GET /public/get_last_settlements_by_instrument
        """
        return await self.session.call(
            endpoints.GET_LAST_SETTLEMENTS_BY_INSTRUMENT,
            {
                "instrument_name": instrument_name,
                "type": type,
                "count": count,
                "continuation": continuation
            },
            SettlementsResponse
        )
