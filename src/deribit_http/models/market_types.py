"""
Public market-data type definitions

Result models for the public/* endpoints. Unknown fields returned by the
server are kept on the model so newer API versions still decode.
"""

from typing import List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field


InstrumentKind = Literal["future", "option", "spot", "future_combo", "option_combo"]


class DeribitModel(BaseModel):
    """Base for server result models"""
    model_config = ConfigDict(extra="allow", populate_by_name=True)


class WithdrawalPriority(DeribitModel):
    name: str = Field(..., description="Priority name")
    value: float = Field(..., description="Priority fee multiplier")


class Currency(DeribitModel):
    """Currency description from public/get_currencies"""
    currency: str = Field(..., description="Currency symbol")
    currency_long: Optional[str] = Field(default=None, description="Full currency name")
    coin_type: Optional[str] = Field(default=None, description="Coin type")
    fee_precision: Optional[int] = Field(default=None, description="Fee precision")
    min_confirmations: Optional[int] = Field(default=None, description="Minimum deposit confirmations")
    min_withdrawal_fee: Optional[float] = Field(default=None, description="Minimum withdrawal fee")
    withdrawal_fee: Optional[float] = Field(default=None, description="Withdrawal fee")
    withdrawal_priorities: List[WithdrawalPriority] = Field(default_factory=list, description="Withdrawal priorities")
    apr: Optional[float] = Field(default=None, description="Yield APR for yield-bearing currencies")
    in_cross_collateral_pool: Optional[bool] = Field(default=None, description="Part of the cross collateral pool")


class Instrument(DeribitModel):
    """Instrument description"""
    instrument_name: str = Field(..., description="Instrument name")
    kind: Optional[InstrumentKind] = Field(default=None, description="Instrument kind")
    currency: Optional[str] = Field(default=None, description="Currency")
    base_currency: Optional[str] = Field(default=None, description="Base currency")
    quote_currency: Optional[str] = Field(default=None, description="Quote currency")
    counter_currency: Optional[str] = Field(default=None, description="Counter currency")
    settlement_currency: Optional[str] = Field(default=None, description="Settlement currency")
    price_index: Optional[str] = Field(default=None, description="Price index name")
    is_active: Optional[bool] = Field(default=None, description="Whether instrument is active")
    expiration_timestamp: Optional[int] = Field(default=None, description="Expiration timestamp (ms)")
    creation_timestamp: Optional[int] = Field(default=None, description="Creation timestamp (ms)")
    strike: Optional[float] = Field(default=None, description="Strike price (options)")
    option_type: Optional[Literal["call", "put"]] = Field(default=None, description="Option type")
    tick_size: Optional[float] = Field(default=None, description="Tick size")
    min_trade_amount: Optional[float] = Field(default=None, description="Minimum trade amount")
    contract_size: Optional[float] = Field(default=None, description="Contract size")
    settlement_period: Optional[str] = Field(default=None, description="Settlement period")
    instrument_type: Optional[str] = Field(default=None, description="Linear or reversed")
    max_leverage: Optional[float] = Field(default=None, description="Maximum leverage")
    maker_commission: Optional[float] = Field(default=None, description="Maker commission")
    taker_commission: Optional[float] = Field(default=None, description="Taker commission")
    instrument_id: Optional[int] = Field(default=None, description="Instrument ID")


class Greeks(DeribitModel):
    delta: Optional[float] = Field(default=None, description="Delta")
    gamma: Optional[float] = Field(default=None, description="Gamma")
    theta: Optional[float] = Field(default=None, description="Theta")
    vega: Optional[float] = Field(default=None, description="Vega")
    rho: Optional[float] = Field(default=None, description="Rho")


class TickerStats(DeribitModel):
    volume: Optional[float] = Field(default=None, description="24h volume")
    volume_usd: Optional[float] = Field(default=None, description="24h volume in USD")
    price_change: Optional[float] = Field(default=None, description="24h price change (%)")
    high: Optional[float] = Field(default=None, description="24h high")
    low: Optional[float] = Field(default=None, description="24h low")


class Ticker(DeribitModel):
    """Ticker from public/ticker"""
    instrument_name: str = Field(..., description="Instrument name")
    timestamp: int = Field(..., description="Timestamp (ms)")
    state: Optional[str] = Field(default=None, description="Book state")
    last_price: Optional[float] = Field(default=None, description="Last trade price")
    mark_price: Optional[float] = Field(default=None, description="Mark price")
    index_price: Optional[float] = Field(default=None, description="Index price")
    best_bid_price: Optional[float] = Field(default=None, description="Best bid price")
    best_bid_amount: Optional[float] = Field(default=None, description="Best bid amount")
    best_ask_price: Optional[float] = Field(default=None, description="Best ask price")
    best_ask_amount: Optional[float] = Field(default=None, description="Best ask amount")
    open_interest: Optional[float] = Field(default=None, description="Open interest")
    settlement_price: Optional[float] = Field(default=None, description="Settlement price")
    min_price: Optional[float] = Field(default=None, description="Minimum allowed price")
    max_price: Optional[float] = Field(default=None, description="Maximum allowed price")
    current_funding: Optional[float] = Field(default=None, description="Current funding (perpetuals)")
    funding_8h: Optional[float] = Field(default=None, description="8h funding (perpetuals)")
    estimated_delivery_price: Optional[float] = Field(default=None, description="Estimated delivery price")
    interest_rate: Optional[float] = Field(default=None, description="Interest rate (options)")
    underlying_price: Optional[float] = Field(default=None, description="Underlying price (options)")
    underlying_index: Optional[str] = Field(default=None, description="Underlying index (options)")
    bid_iv: Optional[float] = Field(default=None, description="Bid implied volatility")
    ask_iv: Optional[float] = Field(default=None, description="Ask implied volatility")
    mark_iv: Optional[float] = Field(default=None, description="Mark implied volatility")
    greeks: Optional[Greeks] = Field(default=None, description="Option greeks")
    stats: Optional[TickerStats] = Field(default=None, description="24h statistics")


class OrderBook(DeribitModel):
    """Order book from public/get_order_book; levels are [price, amount]"""
    instrument_name: str = Field(..., description="Instrument name")
    timestamp: int = Field(..., description="Timestamp (ms)")
    bids: List[List[float]] = Field(default_factory=list, description="Bid levels")
    asks: List[List[float]] = Field(default_factory=list, description="Ask levels")
    change_id: Optional[int] = Field(default=None, description="Change ID")
    state: Optional[str] = Field(default=None, description="Book state")
    best_bid_price: Optional[float] = Field(default=None, description="Best bid price")
    best_ask_price: Optional[float] = Field(default=None, description="Best ask price")
    mark_price: Optional[float] = Field(default=None, description="Mark price")
    index_price: Optional[float] = Field(default=None, description="Index price")
    stats: Optional[TickerStats] = Field(default=None, description="24h statistics")


class BookSummary(DeribitModel):
    """Book summary from public/get_book_summary_by_*"""
    instrument_name: str = Field(..., description="Instrument name")
    base_currency: Optional[str] = Field(default=None, description="Base currency")
    quote_currency: Optional[str] = Field(default=None, description="Quote currency")
    volume: Optional[float] = Field(default=None, description="24h volume")
    volume_usd: Optional[float] = Field(default=None, description="24h volume in USD")
    open_interest: Optional[float] = Field(default=None, description="Open interest")
    price_change: Optional[float] = Field(default=None, description="24h price change (%)")
    mark_price: Optional[float] = Field(default=None, description="Mark price")
    mark_iv: Optional[float] = Field(default=None, description="Mark implied volatility")
    bid_price: Optional[float] = Field(default=None, description="Best bid")
    ask_price: Optional[float] = Field(default=None, description="Best ask")
    mid_price: Optional[float] = Field(default=None, description="Mid price")
    last: Optional[float] = Field(default=None, description="Last trade price")
    high: Optional[float] = Field(default=None, description="24h high")
    low: Optional[float] = Field(default=None, description="24h low")
    estimated_delivery_price: Optional[float] = Field(default=None, description="Estimated delivery price")
    current_funding: Optional[float] = Field(default=None, description="Current funding")
    creation_timestamp: Optional[int] = Field(default=None, description="Timestamp (ms)")
    underlying_index: Optional[str] = Field(default=None, description="Underlying index")
    underlying_price: Optional[float] = Field(default=None, description="Underlying price")
    interest_rate: Optional[float] = Field(default=None, description="Interest rate")


class IndexPriceData(DeribitModel):
    index_price: float = Field(..., description="Index price")
    estimated_delivery_price: Optional[float] = Field(default=None, description="Estimated delivery price")


class LastTrade(DeribitModel):
    """Public trade"""
    trade_id: str = Field(..., description="Trade ID")
    trade_seq: Optional[int] = Field(default=None, description="Trade sequence number")
    instrument_name: str = Field(..., description="Instrument name")
    direction: Literal["buy", "sell"] = Field(..., description="Taker direction")
    amount: float = Field(..., description="Trade amount")
    price: float = Field(..., description="Trade price")
    timestamp: int = Field(..., description="Timestamp (ms)")
    index_price: Optional[float] = Field(default=None, description="Index price at trade time")
    mark_price: Optional[float] = Field(default=None, description="Mark price at trade time")
    iv: Optional[float] = Field(default=None, description="Implied volatility (options)")
    tick_direction: Optional[int] = Field(default=None, description="Tick direction")
    liquidation: Optional[str] = Field(default=None, description="Liquidation side marker")
    block_trade_id: Optional[str] = Field(default=None, description="Block trade ID")


class LastTradesResponse(DeribitModel):
    has_more: bool = Field(default=False, description="More trades available")
    trades: List[LastTrade] = Field(default_factory=list, description="Trades")


class Settlement(DeribitModel):
    type: str = Field(..., description="settlement, delivery or bankruptcy")
    timestamp: int = Field(..., description="Timestamp (ms)")
    instrument_name: Optional[str] = Field(default=None, description="Instrument name")
    index_price: Optional[float] = Field(default=None, description="Index price")
    mark_price: Optional[float] = Field(default=None, description="Mark price")
    position: Optional[float] = Field(default=None, description="Position size")
    profit_loss: Optional[float] = Field(default=None, description="Profit/loss")
    session_profit_loss: Optional[float] = Field(default=None, description="Session profit/loss")
    funding: Optional[float] = Field(default=None, description="Funding")
    funded: Optional[float] = Field(default=None, description="Funded amount (bankruptcy)")
    socialized: Optional[float] = Field(default=None, description="Socialized losses")


class SettlementsResponse(DeribitModel):
    continuation: Optional[str] = Field(default=None, description="Continuation token")
    settlements: List[Settlement] = Field(default_factory=list, description="Settlements")


class FundingRateData(DeribitModel):
    """Funding rate history entry"""
    timestamp: int = Field(..., description="Timestamp (ms)")
    index_price: Optional[float] = Field(default=None, description="Index price")
    prev_index_price: Optional[float] = Field(default=None, description="Previous index price")
    interest_8h: Optional[float] = Field(default=None, description="8h interest")
    interest_1h: Optional[float] = Field(default=None, description="1h interest")


class FundingChartData(DeribitModel):
    current_interest: Optional[float] = Field(default=None, description="Current interest")
    interest_8h: Optional[float] = Field(default=None, description="8h interest")
    data: List[dict] = Field(default_factory=list, description="Chart points")


class DeliveryPrice(DeribitModel):
    date: str = Field(..., description="Delivery date (YYYY-MM-DD)")
    delivery_price: float = Field(..., description="Delivery price")


class DeliveryPricesResponse(DeribitModel):
    data: List[DeliveryPrice] = Field(default_factory=list, description="Delivery prices")
    records_total: int = Field(default=0, description="Total number of records")


class ContractSizeResponse(DeribitModel):
    contract_size: float = Field(..., description="Contract size")


class AprDataPoint(DeribitModel):
    apr: float = Field(..., description="APR")
    timestamp: Optional[int] = Field(default=None, description="Timestamp (ms)")
    day: int = Field(..., description="Day number")


class AprHistoryResponse(DeribitModel):
    data: List[AprDataPoint] = Field(default_factory=list, description="APR history")
    continuation: Optional[str] = Field(default=None, description="Continuation token")


class TradingViewChartData(DeribitModel):
    """OHLCV series from public/get_tradingview_chart_data"""
    status: str = Field(..., description="ok or no_data")
    ticks: List[int] = Field(default_factory=list, description="Timestamps (ms)")
    open: List[float] = Field(default_factory=list, description="Open prices")
    high: List[float] = Field(default_factory=list, description="High prices")
    low: List[float] = Field(default_factory=list, description="Low prices")
    close: List[float] = Field(default_factory=list, description="Close prices")
    volume: List[float] = Field(default_factory=list, description="Volume")
    cost: List[float] = Field(default_factory=list, description="Cost")


class HelloResponse(DeribitModel):
    version: str = Field(..., description="API version")


class TestResponse(DeribitModel):
    version: str = Field(..., description="API version")


class StatusResponse(DeribitModel):
    locked: Optional[Union[bool, str]] = Field(default=None, description="true, partial or false")
    message: Optional[str] = Field(default=None, description="Platform status message")
    locked_indices: List[str] = Field(default_factory=list, description="Locked currency indices")
