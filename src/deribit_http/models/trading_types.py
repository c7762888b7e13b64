"""
Trading type definitions

Request parameter models for order placement and the order/trade result
models returned by the private trading endpoints.
"""

from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator

from .market_types import DeribitModel


OrderDirection = Literal["buy", "sell"]
OrderType = Literal["limit", "market", "stop_limit", "stop_market", "take_limit", "take_market", "market_limit", "trailing_stop"]
TimeInForce = Literal["good_til_cancelled", "good_til_day", "fill_or_kill", "immediate_or_cancel"]
TriggerType = Literal["index_price", "mark_price", "last_price"]
AdvancedOrderType = Literal["usd", "implv"]


class OrderRequest(BaseModel):
    """Parameters for private/buy and private/sell"""
    model_config = ConfigDict(populate_by_name=True)

    instrument_name: str = Field(..., description="Instrument name")
    amount: Optional[float] = Field(default=None, description="Amount in currency units")
    contracts: Optional[float] = Field(default=None, description="Amount in contracts")
    order_type: Optional[OrderType] = Field(default=None, alias="type", description="Order type")
    label: Optional[str] = Field(default=None, max_length=64, description="User defined label")
    price: Optional[float] = Field(default=None, description="Limit price")
    time_in_force: Optional[TimeInForce] = Field(default=None, description="Time in force")
    display_amount: Optional[float] = Field(default=None, description="Iceberg visible amount")
    post_only: Optional[bool] = Field(default=None, description="Post only flag")
    reject_post_only: Optional[bool] = Field(default=None, description="Reject instead of reprice post only")
    reduce_only: Optional[bool] = Field(default=None, description="Reduce only flag")
    trigger_price: Optional[float] = Field(default=None, description="Trigger price (stop/take orders)")
    trigger_offset: Optional[float] = Field(default=None, description="Trailing stop offset")
    trigger: Optional[TriggerType] = Field(default=None, description="Trigger price source")
    advanced: Optional[AdvancedOrderType] = Field(default=None, description="Advanced option order type")
    mmp: Optional[bool] = Field(default=None, description="Market maker protection")
    valid_until: Optional[int] = Field(default=None, description="Server-side validity deadline (ms)")

    @model_validator(mode='after')
    def validate_amount(self):
        """Either amount or contracts is required"""
        if self.amount is None and self.contracts is None:
            raise ValueError("Either amount or contracts must be provided")
        if self.order_type in ("limit", "stop_limit", "take_limit") and self.price is None:
            raise ValueError(f"price is required for {self.order_type} orders")
        return self


class EditOrderRequest(BaseModel):
    """Parameters for private/edit"""
    order_id: str = Field(..., description="Order ID")
    amount: Optional[float] = Field(default=None, description="New amount")
    contracts: Optional[float] = Field(default=None, description="New amount in contracts")
    price: Optional[float] = Field(default=None, description="New price")
    post_only: Optional[bool] = Field(default=None, description="Post only flag")
    reduce_only: Optional[bool] = Field(default=None, description="Reduce only flag")
    reject_post_only: Optional[bool] = Field(default=None, description="Reject instead of reprice post only")
    advanced: Optional[AdvancedOrderType] = Field(default=None, description="Advanced option order type")
    trigger_price: Optional[float] = Field(default=None, description="Trigger price")
    mmp: Optional[bool] = Field(default=None, description="Market maker protection")
    valid_until: Optional[int] = Field(default=None, description="Server-side validity deadline (ms)")

    @model_validator(mode='after')
    def validate_amount(self):
        if self.amount is None and self.contracts is None:
            raise ValueError("Either amount or contracts must be provided")
        return self


class QuoteSide(BaseModel):
    price: float = Field(..., description="Quote price")
    amount: float = Field(..., description="Quote amount")
    post_only: Optional[bool] = Field(default=None, description="Post only flag")
    reject_post_only: Optional[bool] = Field(default=None, description="Reject instead of reprice post only")


class QuoteEntry(BaseModel):
    instrument_name: str = Field(..., description="Instrument name")
    bid: Optional[QuoteSide] = Field(default=None, description="Bid side")
    ask: Optional[QuoteSide] = Field(default=None, description="Ask side")

    @model_validator(mode='after')
    def validate_sides(self):
        if self.bid is None and self.ask is None:
            raise ValueError(f"Quote for {self.instrument_name} needs a bid or an ask")
        return self


class MassQuoteRequest(BaseModel):
    """Parameters for private/mass_quote"""
    quote_id: str = Field(..., description="Identifier of this quote batch")
    mmp_group: Optional[str] = Field(default=None, description="MMP group")
    quotes: List[QuoteEntry] = Field(..., min_length=1, description="Quotes")
    detailed: Optional[bool] = Field(default=None, description="Return detailed per-quote errors")
    valid_until: Optional[int] = Field(default=None, description="Server-side validity deadline (ms)")
    wait_for_response: Optional[bool] = Field(default=None, description="Wait for the matching engine")


class OrderInfo(DeribitModel):
    """Order state"""
    order_id: str = Field(..., description="Order ID")
    instrument_name: str = Field(..., description="Contract name")
    direction: OrderDirection = Field(..., description="Order direction")
    amount: Optional[float] = Field(default=None, description="Order amount")
    contracts: Optional[float] = Field(default=None, description="Order amount in contracts")
    price: Optional[float] = Field(default=None, description="Order price, or 'market_price'")
    order_type: str = Field(..., description="Order type")
    order_state: str = Field(..., description="open, filled, rejected, cancelled or untriggered")
    filled_amount: Optional[float] = Field(default=None, description="Filled amount")
    average_price: Optional[float] = Field(default=None, description="Average fill price")
    creation_timestamp: int = Field(..., description="Creation timestamp")
    last_update_timestamp: int = Field(..., description="Last update timestamp")
    label: Optional[str] = Field(default=None, description="Order label")
    time_in_force: Optional[str] = Field(default=None, description="Time in force")
    post_only: Optional[bool] = Field(default=None, description="Post only flag")
    reduce_only: Optional[bool] = Field(default=None, description="Reduce only flag")
    replaced: Optional[bool] = Field(default=None, description="Order was edited")
    is_liquidation: Optional[bool] = Field(default=None, description="Liquidation order")
    trigger_price: Optional[float] = Field(default=None, description="Trigger price")
    trigger: Optional[str] = Field(default=None, description="Trigger source")
    triggered: Optional[bool] = Field(default=None, description="Whether stop order was triggered")
    profit_loss: Optional[float] = Field(default=None, description="Profit/Loss")
    usd: Optional[float] = Field(default=None, description="USD value")
    api: Optional[bool] = Field(default=None, description="Created via API")
    web: Optional[bool] = Field(default=None, description="Created via web")
    mmp: Optional[bool] = Field(default=None, description="Market maker protection")

    @model_validator(mode='before')
    @classmethod
    def market_price_marker(cls, data):
        # market orders report price as the string "market_price"
        if isinstance(data, dict) and data.get("price") == "market_price":
            data = {**data, "price": None}
        return data


class UserTrade(DeribitModel):
    """Private trade execution"""
    trade_id: str = Field(..., description="Trade ID")
    trade_seq: Optional[int] = Field(default=None, description="Trade sequence number")
    order_id: str = Field(..., description="Order ID")
    instrument_name: str = Field(..., description="Instrument name")
    direction: OrderDirection = Field(..., description="Trade direction")
    amount: float = Field(..., description="Trade amount")
    price: float = Field(..., description="Trade price")
    timestamp: int = Field(..., description="Timestamp (ms)")
    fee: Optional[float] = Field(default=None, description="Fee")
    fee_currency: Optional[str] = Field(default=None, description="Fee currency")
    liquidity: Optional[Literal["M", "T"]] = Field(default=None, description="Maker or taker")
    order_type: Optional[str] = Field(default=None, description="Order type")
    state: Optional[str] = Field(default=None, description="Order state after the trade")
    index_price: Optional[float] = Field(default=None, description="Index price")
    mark_price: Optional[float] = Field(default=None, description="Mark price")
    iv: Optional[float] = Field(default=None, description="Implied volatility")
    label: Optional[str] = Field(default=None, description="Order label")
    profit_loss: Optional[float] = Field(default=None, description="Profit/loss")
    self_trade: Optional[bool] = Field(default=None, description="Self trade")
    tick_direction: Optional[int] = Field(default=None, description="Tick direction")


class UserTradesResponse(DeribitModel):
    has_more: bool = Field(default=False, description="More trades available")
    trades: List[UserTrade] = Field(default_factory=list, description="Trades")


class OrderResponse(DeribitModel):
    """Result of private/buy, private/sell and private/edit"""
    order: OrderInfo = Field(..., description="Order")
    trades: List[UserTrade] = Field(default_factory=list, description="Immediate executions")


class CancelledOrders(DeribitModel):
    """Detailed cancel_all result"""
    currency: Optional[str] = Field(default=None, description="Currency")
    type: Optional[str] = Field(default=None, description="Cancel scope")
    instrument_name: Optional[str] = Field(default=None, description="Instrument name")
    result: List[OrderInfo] = Field(default_factory=list, description="Cancelled orders")


class MassQuoteError(DeribitModel):
    instrument_name: Optional[str] = Field(default=None, description="Instrument name")
    side: Optional[str] = Field(default=None, description="bid or ask")
    error: Optional[dict] = Field(default=None, description="Error object")


class MassQuoteResult(DeribitModel):
    """Result of private/mass_quote"""
    orders: List[OrderInfo] = Field(default_factory=list, description="Resulting quote orders")
    trades: List[UserTrade] = Field(default_factory=list, description="Immediate executions")
    errors: List[MassQuoteError] = Field(default_factory=list, description="Rejected quotes")
    pending_requests: List[dict] = Field(default_factory=list, description="Requests still in flight")
