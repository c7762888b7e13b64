"""
Account and wallet type definitions
"""

from typing import Dict, List, Literal, Optional

from pydantic import Field

from .market_types import DeribitModel


class AccountSummary(DeribitModel):
    """Result of private/get_account_summary"""
    currency: str = Field(..., description="Currency")
    balance: float = Field(..., description="Balance")
    equity: Optional[float] = Field(default=None, description="Equity")
    available_funds: Optional[float] = Field(default=None, description="Available funds")
    available_withdrawal_funds: Optional[float] = Field(default=None, description="Withdrawable funds")
    margin_balance: Optional[float] = Field(default=None, description="Margin balance")
    initial_margin: Optional[float] = Field(default=None, description="Initial margin")
    maintenance_margin: Optional[float] = Field(default=None, description="Maintenance margin")
    delta_total: Optional[float] = Field(default=None, description="Total delta")
    session_rpl: Optional[float] = Field(default=None, description="Session realized profit/loss")
    session_upl: Optional[float] = Field(default=None, description="Session unrealized profit/loss")
    total_pl: Optional[float] = Field(default=None, description="Total profit/loss")
    options_value: Optional[float] = Field(default=None, description="Options value")
    futures_pl: Optional[float] = Field(default=None, description="Futures profit/loss")
    options_pl: Optional[float] = Field(default=None, description="Options profit/loss")
    portfolio_margining_enabled: Optional[bool] = Field(default=None, description="Portfolio margining")
    cross_collateral_enabled: Optional[bool] = Field(default=None, description="Cross collateral")
    margin_model: Optional[str] = Field(default=None, description="Margin model")
    id: Optional[int] = Field(default=None, description="Account ID (extended summary)")
    username: Optional[str] = Field(default=None, description="Username (extended summary)")
    email: Optional[str] = Field(default=None, description="Email (extended summary)")
    type: Optional[str] = Field(default=None, description="main or subaccount (extended summary)")


class Position(DeribitModel):
    """Position from private/get_position(s)"""
    instrument_name: str = Field(..., description="Instrument name")
    size: float = Field(..., description="Position size (positive for long, negative for short)")
    direction: Literal["buy", "sell", "zero"] = Field(..., description="Position direction")
    kind: Optional[str] = Field(default=None, description="Instrument kind")
    size_currency: Optional[float] = Field(default=None, description="Position size in currency")
    average_price: Optional[float] = Field(default=None, description="Average opening price")
    average_price_usd: Optional[float] = Field(default=None, description="Average opening price in USD")
    mark_price: Optional[float] = Field(default=None, description="Mark price")
    index_price: Optional[float] = Field(default=None, description="Index price")
    settlement_price: Optional[float] = Field(default=None, description="Settlement price")
    estimated_liquidation_price: Optional[float] = Field(default=None, description="Estimated liquidation price")
    initial_margin: Optional[float] = Field(default=None, description="Initial margin")
    maintenance_margin: Optional[float] = Field(default=None, description="Maintenance margin")
    open_orders_margin: Optional[float] = Field(default=None, description="Open orders margin")
    leverage: Optional[int] = Field(default=None, description="Leverage")
    floating_profit_loss: Optional[float] = Field(default=None, description="Floating profit/loss")
    floating_profit_loss_usd: Optional[float] = Field(default=None, description="Floating profit/loss in USD")
    realized_profit_loss: Optional[float] = Field(default=None, description="Realized profit/loss")
    total_profit_loss: Optional[float] = Field(default=None, description="Total profit/loss")
    realized_funding: Optional[float] = Field(default=None, description="Realized funding")
    interest_value: Optional[float] = Field(default=None, description="Interest value")
    delta: Optional[float] = Field(default=None, description="Delta")
    gamma: Optional[float] = Field(default=None, description="Gamma (options)")
    theta: Optional[float] = Field(default=None, description="Theta (options)")
    vega: Optional[float] = Field(default=None, description="Vega (options)")


class PortfolioInfo(DeribitModel):
    currency: Optional[str] = Field(default=None, description="Currency")
    balance: Optional[float] = Field(default=None, description="Balance")
    equity: Optional[float] = Field(default=None, description="Equity")
    available_funds: Optional[float] = Field(default=None, description="Available funds")
    available_withdrawal_funds: Optional[float] = Field(default=None, description="Withdrawable funds")
    initial_margin: Optional[float] = Field(default=None, description="Initial margin")
    maintenance_margin: Optional[float] = Field(default=None, description="Maintenance margin")
    margin_balance: Optional[float] = Field(default=None, description="Margin balance")


class Subaccount(DeribitModel):
    """Entry of private/get_subaccounts"""
    id: int = Field(..., description="Account ID")
    username: str = Field(..., description="Username")
    email: Optional[str] = Field(default=None, description="Email")
    type: Optional[str] = Field(default=None, description="main or subaccount")
    system_name: Optional[str] = Field(default=None, description="System name")
    login_enabled: Optional[bool] = Field(default=None, description="Login enabled")
    receive_notifications: Optional[bool] = Field(default=None, description="Receives notifications")
    portfolio: Optional[Dict[str, PortfolioInfo]] = Field(default=None, description="Per-currency portfolio, keyed by lowercase currency")


class TransactionLogEntry(DeribitModel):
    id: int = Field(..., description="Log entry ID")
    timestamp: int = Field(..., description="Timestamp (ms)")
    type: str = Field(..., description="Transaction type")
    currency: Optional[str] = Field(default=None, description="Currency")
    amount: Optional[float] = Field(default=None, description="Amount")
    balance: Optional[float] = Field(default=None, description="Balance after transaction")
    cashflow: Optional[float] = Field(default=None, description="Cash flow")
    change: Optional[float] = Field(default=None, description="Change")
    instrument_name: Optional[str] = Field(default=None, description="Instrument name")
    side: Optional[str] = Field(default=None, description="Side")
    price: Optional[float] = Field(default=None, description="Price")
    position: Optional[float] = Field(default=None, description="Position after transaction")
    username: Optional[str] = Field(default=None, description="Username")
    user_id: Optional[int] = Field(default=None, description="User ID")
    info: Optional[dict] = Field(default=None, description="Additional information")


class TransactionLog(DeribitModel):
    continuation: Optional[int] = Field(default=None, description="Continuation token")
    logs: List[TransactionLogEntry] = Field(default_factory=list, description="Log entries")


class Deposit(DeribitModel):
    address: str = Field(..., description="Deposit address")
    amount: float = Field(..., description="Amount")
    currency: str = Field(..., description="Currency")
    state: str = Field(..., description="pending, completed, rejected or replaced")
    transaction_id: Optional[str] = Field(default=None, description="Blockchain transaction ID")
    received_timestamp: Optional[int] = Field(default=None, description="Received timestamp (ms)")
    updated_timestamp: Optional[int] = Field(default=None, description="Updated timestamp (ms)")
    note: Optional[str] = Field(default=None, description="Note")


class DepositsResponse(DeribitModel):
    count: int = Field(default=0, description="Total number of deposits")
    data: List[Deposit] = Field(default_factory=list, description="Deposits")


class Withdrawal(DeribitModel):
    id: Optional[int] = Field(default=None, description="Withdrawal ID")
    address: str = Field(..., description="Destination address")
    amount: float = Field(..., description="Amount")
    currency: str = Field(..., description="Currency")
    state: str = Field(..., description="unconfirmed, confirmed, cancelled, completed, interrupted or rejected")
    fee: Optional[float] = Field(default=None, description="Fee")
    priority: Optional[float] = Field(default=None, description="Priority multiplier")
    transaction_id: Optional[str] = Field(default=None, description="Blockchain transaction ID")
    created_timestamp: Optional[int] = Field(default=None, description="Created timestamp (ms)")
    confirmed_timestamp: Optional[int] = Field(default=None, description="Confirmed timestamp (ms)")
    updated_timestamp: Optional[int] = Field(default=None, description="Updated timestamp (ms)")
    note: Optional[str] = Field(default=None, description="Note")


class WithdrawalsResponse(DeribitModel):
    count: int = Field(default=0, description="Total number of withdrawals")
    data: List[Withdrawal] = Field(default_factory=list, description="Withdrawals")


class TransferResult(DeribitModel):
    """Result of private/submit_transfer_to_*"""
    id: int = Field(..., description="Transfer ID")
    amount: float = Field(..., description="Amount")
    currency: str = Field(..., description="Currency")
    direction: Optional[str] = Field(default=None, description="payment or income")
    state: str = Field(..., description="Transfer state")
    type: Optional[str] = Field(default=None, description="user or subaccount")
    other_side: Optional[str] = Field(default=None, description="Counterparty")
    created_timestamp: Optional[int] = Field(default=None, description="Created timestamp (ms)")
    updated_timestamp: Optional[int] = Field(default=None, description="Updated timestamp (ms)")
