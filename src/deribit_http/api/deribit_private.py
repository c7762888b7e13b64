"""
Deribit Private API - requires authentication

Every method goes through the session's bearer-token path; the token is
obtained or refreshed on demand.
"""

from typing import TYPE_CHECKING, List, Literal, Optional, Union

from . import endpoints
from ..models.account_types import (
    AccountSummary,
    DepositsResponse,
    Position,
    Subaccount,
    TransactionLog,
    TransferResult,
    Withdrawal,
    WithdrawalsResponse,
)
from ..models.market_types import InstrumentKind
from ..models.trading_types import (
    CancelledOrders,
    EditOrderRequest,
    MassQuoteRequest,
    MassQuoteResult,
    OrderInfo,
    OrderRequest,
    OrderResponse,
    UserTrade,
    UserTradesResponse,
)

if TYPE_CHECKING:
    from ..services.session import DeribitSession

Sorting = Literal["asc", "desc", "default"]
OrderKind = Literal["future", "option", "spot", "future_combo", "option_combo", "combo", "any"]


class DeribitPrivateAPI:
    """Deribit private API methods"""

    def __init__(self, session: "DeribitSession"):
        self.session = session

    # Account

    async def get_account_summary(self, currency: str, extended: Optional[bool] = None) -> AccountSummary:
        """
        Get account summary
        GET /private/get_account_summary

        Args:
            currency: BTC, ETH, etc.
            extended: Include account id, username and email
        """
        return await self.session.call(
            endpoints.GET_ACCOUNT_SUMMARY,
            {"currency": currency, "extended": extended},
            AccountSummary
        )

    async def get_positions(
        self,
        currency: Optional[str] = None,
        kind: Optional[InstrumentKind] = None,
        subaccount_id: Optional[int] = None
    ) -> List[Position]:
        """
        Get positions
        GET /private/get_positions

        Args:
            currency: BTC, ETH, ... or "any"
            kind: Restrict to one instrument kind
            subaccount_id: Positions of a subaccount
        """
        return await self.session.call(
            endpoints.GET_POSITIONS,
            {"currency": currency, "kind": kind, "subaccount_id": subaccount_id},
            List[Position]
        )

    async def get_position(self, instrument_name: str) -> Position:
        """
        Get position of one instrument
        GET /private/get_position
        """
        return await self.session.call(
            endpoints.GET_POSITION,
            {"instrument_name": instrument_name},
            Position
        )

    async def get_subaccounts(self, with_portfolio: Optional[bool] = None) -> List[Subaccount]:
        """
        Get subaccounts
        GET /private/get_subaccounts
        """
        return await self.session.call(
            endpoints.GET_SUBACCOUNTS,
            {"with_portfolio": with_portfolio},
            List[Subaccount]
        )

    async def get_transaction_log(
        self,
        currency: str,
        start_timestamp: int,
        end_timestamp: int,
        query: Optional[str] = None,
        count: Optional[int] = None,
        continuation: Optional[int] = None
    ) -> TransactionLog:
        """
        Get transaction log
        GET /private/get_transaction_log

        Args:
            query: trade, maker, taker, deposit, withdrawal, ...
            continuation: Token from the previous page
        """
        return await self.session.call(
            endpoints.GET_TRANSACTION_LOG,
            {
                "currency": currency,
                "start_timestamp": start_timestamp,
                "end_timestamp": end_timestamp,
                "query": query,
                "count": count,
                "continuation": continuation
            },
            TransactionLog
        )

    # Orders

    async def buy(self, order: OrderRequest, *, idempotent: Optional[bool] = None) -> OrderResponse:
        """
        Place a buy order
        POST /private/buy

        Args:
            order: Order parameters
            idempotent: Allow replay after a transport failure; only safe
                when the order carries a unique label the caller reconciles
        """
        return await self.session.call(endpoints.BUY, order, OrderResponse, idempotent=idempotent)

    async def sell(self, order: OrderRequest, *, idempotent: Optional[bool] = None) -> OrderResponse:
        """
        Place a sell order
        POST /private/sell
        """
        return await self.session.call(endpoints.SELL, order, OrderResponse, idempotent=idempotent)

    async def edit(self, edit: EditOrderRequest) -> OrderResponse:
        """
        Change price or amount of an open order
        POST /private/edit
        """
        return await self.session.call(endpoints.EDIT, edit, OrderResponse)

    async def cancel(self, order_id: str) -> OrderInfo:
        """
        Cancel an order
        POST /private/cancel
        """
        return await self.session.call(endpoints.CANCEL, {"order_id": order_id}, OrderInfo)

    async def cancel_all(
        self,
        detailed: Optional[bool] = None,
        freeze_quotes: Optional[bool] = None
    ) -> Union[int, List[CancelledOrders]]:
        """
        Cancel all orders
        POST /private/cancel_all

        Returns:
            Number of cancelled orders, or per-scope details when detailed
        """
        return await self.session.call(
            endpoints.CANCEL_ALL,
            {"detailed": detailed, "freeze_quotes": freeze_quotes},
            Union[int, List[CancelledOrders]]
        )

    async def cancel_all_by_instrument(
        self,
        instrument_name: str,
        type: Optional[str] = None,
        detailed: Optional[bool] = None
    ) -> Union[int, List[CancelledOrders]]:
        """
        Cancel all orders of an instrument
        POST /private/cancel_all_by_instrument
        """
        return await self.session.call(
            endpoints.CANCEL_ALL_BY_INSTRUMENT,
            {"instrument_name": instrument_name, "type": type, "detailed": detailed},
            Union[int, List[CancelledOrders]]
        )

    async def cancel_all_by_currency(
        self,
        currency: str,
        kind: Optional[OrderKind] = None,
        type: Optional[str] = None,
        detailed: Optional[bool] = None
    ) -> Union[int, List[CancelledOrders]]:
        """
        Cancel all orders of a currency
        POST /private/cancel_all_by_currency
        """
        return await self.session.call(
            endpoints.CANCEL_ALL_BY_CURRENCY,
            {"currency": currency, "kind": kind, "type": type, "detailed": detailed},
            Union[int, List[CancelledOrders]]
        )

    async def mass_quote(self, request: MassQuoteRequest) -> MassQuoteResult:
        """
        Place or replace a batch of two-sided quotes
        POST /private/mass_quote
        """
        return await self.session.call(endpoints.MASS_QUOTE, request, MassQuoteResult)

    async def get_open_orders(
        self,
        kind: Optional[OrderKind] = None,
        type: Optional[str] = None
    ) -> List[OrderInfo]:
        """
        Get open orders
        GET /private/get_open_orders
        """
        return await self.session.call(
            endpoints.GET_OPEN_ORDERS,
            {"kind": kind, "type": type},
            List[OrderInfo]
        )

    async def get_open_orders_by_instrument(self, instrument_name: str, type: Optional[str] = None) -> List[OrderInfo]:
        """
        Get open orders of an instrument
        GET /private/get_open_orders_by_instrument
        """
        return await self.session.call(
            endpoints.GET_OPEN_ORDERS_BY_INSTRUMENT,
            {"instrument_name": instrument_name, "type": type},
            List[OrderInfo]
        )

    async def get_order_state(self, order_id: str) -> OrderInfo:
        """
        Get order state
        GET /private/get_order_state
        """
        return await self.session.call(endpoints.GET_ORDER_STATE, {"order_id": order_id}, OrderInfo)

    async def get_order_history_by_currency(
        self,
        currency: str,
        kind: Optional[OrderKind] = None,
        count: Optional[int] = None,
        offset: Optional[int] = None
    ) -> List[OrderInfo]:
        """
        Get closed orders of a currency
        GET /private/get_order_history_by_currency
        """
        return await self.session.call(
            endpoints.GET_ORDER_HISTORY_BY_CURRENCY,
            {"currency": currency, "kind": kind, "count": count, "offset": offset},
            List[OrderInfo]
        )

    async def get_order_history_by_instrument(
        self,
        instrument_name: str,
        count: Optional[int] = None,
        offset: Optional[int] = None
    ) -> List[OrderInfo]:
        """
        Get closed orders of an instrument
        GET /private/get_order_history_by_instrument
        """
        return await self.session.call(
            endpoints.GET_ORDER_HISTORY_BY_INSTRUMENT,
            {"instrument_name": instrument_name, "count": count, "offset": offset},
            List[OrderInfo]
        )

    # User trades

    async def get_user_trades_by_instrument(
        self,
        instrument_name: str,
        start_seq: Optional[int] = None,
        end_seq: Optional[int] = None,
        count: Optional[int] = None,
        sorting: Optional[Sorting] = None
    ) -> UserTradesResponse:
        """
        Get own trades of an instrument
        GET /private/get_user_trades_by_instrument
        """
        return await self.session.call(
            endpoints.GET_USER_TRADES_BY_INSTRUMENT,
            {
                "instrument_name": instrument_name,
                "start_seq": start_seq,
                "end_seq": end_seq,
                "count": count,
                "sorting": sorting
            },
            UserTradesResponse
        )

    async def get_user_trades_by_currency(
        self,
        currency: str,
        kind: Optional[OrderKind] = None,
        count: Optional[int] = None,
        sorting: Optional[Sorting] = None
    ) -> UserTradesResponse:
        """
        Get own trades of a currency
        GET /private/get_user_trades_by_currency
        """
        return await self.session.call(
            endpoints.GET_USER_TRADES_BY_CURRENCY,
            {"currency": currency, "kind": kind, "count": count, "sorting": sorting},
            UserTradesResponse
        )

    async def get_user_trades_by_order(self, order_id: str, sorting: Optional[Sorting] = None) -> List[UserTrade]:
        """
        Get trades of an order
        GET /private/get_user_trades_by_order
        """
        return await self.session.call(
            endpoints.GET_USER_TRADES_BY_ORDER,
            {"order_id": order_id, "sorting": sorting},
            List[UserTrade]
        )

    async def get_user_trades_by_instrument_and_time(
        self,
        instrument_name: str,
        start_timestamp: int,
        end_timestamp: int,
        count: Optional[int] = None,
        sorting: Optional[Sorting] = None
    ) -> UserTradesResponse:
        """
        Get own trades of an instrument inside a time range
        GET /private/get_user_trades_by_instrument_and_time
        """
        return await self.session.call(
            endpoints.GET_USER_TRADES_BY_INSTRUMENT_AND_TIME,
            {
                "instrument_name": instrument_name,
                "start_timestamp": start_timestamp,
                "end_timestamp": end_timestamp,
                "count": count,
                "sorting": sorting
            },
            UserTradesResponse
        )

    async def get_user_trades_by_currency_and_time(
        self,
        currency: str,
        start_timestamp: int,
        end_timestamp: int,
        kind: Optional[OrderKind] = None,
        count: Optional[int] = None,
        sorting: Optional[Sorting] = None
    ) -> UserTradesResponse:
        """
        Get own trades of a currency inside a time range
        GET /private/get_user_trades_by_currency_and_time
        """
        return await self.session.call(
            endpoints.GET_USER_TRADES_BY_CURRENCY_AND_TIME,
            {
                "currency": currency,
                "start_timestamp": start_timestamp,
                "end_timestamp": end_timestamp,
                "kind": kind,
                "count": count,
                "sorting": sorting
            },
            UserTradesResponse
        )

    # Wallet

    async def get_deposits(self, currency: str, count: Optional[int] = None, offset: Optional[int] = None) -> DepositsResponse:
        """
        Get deposits
        GET /private/get_deposits
        """
        return await self.session.call(
            endpoints.GET_DEPOSITS,
            {"currency": currency, "count": count, "offset": offset},
            DepositsResponse
        )

    async def get_withdrawals(self, currency: str, count: Optional[int] = None, offset: Optional[int] = None) -> WithdrawalsResponse:
        """
        Get withdrawals
        GET /private/get_withdrawals
        """
        return await self.session.call(
            endpoints.GET_WITHDRAWALS,
            {"currency": currency, "count": count, "offset": offset},
            WithdrawalsResponse
        )

    async def withdraw(
        self,
        currency: str,
        address: str,
        amount: float,
        priority: Optional[str] = None
    ) -> Withdrawal:
        """
        Withdraw to an address from the address book
        POST /private/withdraw
        """
        return await self.session.call(
            endpoints.WITHDRAW,
            {"currency": currency, "address": address, "amount": amount, "priority": priority},
            Withdrawal
        )

    async def submit_transfer_to_subaccount(self, currency: str, amount: float, destination: int) -> TransferResult:
        """
        Transfer funds to a subaccount
        POST /private/submit_transfer_to_subaccount

        Args:
            destination: Subaccount ID
        """
        return await self.session.call(
            endpoints.SUBMIT_TRANSFER_TO_SUBACCOUNT,
            {"currency": currency, "amount": amount, "destination": destination},
            TransferResult
        )

    async def submit_transfer_to_user(self, currency: str, amount: float, destination: str) -> TransferResult:
        """
        Transfer funds to another user
        POST /private/submit_transfer_to_user

        Args:
            destination: Destination wallet address from the address book
        """
        return await self.session.call(
            endpoints.SUBMIT_TRANSFER_TO_USER,
            {"currency": currency, "amount": amount, "destination": destination},
            TransferResult
        )

    async def logout(self) -> None:
        """Clear the session token (revoking it when configured)"""
        await self.session.logout()
