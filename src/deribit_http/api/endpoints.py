"""
Endpoint descriptor catalog

One immutable descriptor per Deribit method. Reads travel as GET query
parameters; state-changing private calls and public/auth use the POST
JSON-RPC body and are never replayed after a transport failure.
"""

from typing import Dict

from ..models.rpc_types import AuthMode, EndpointDescriptor, HttpVerb


def public(method: str) -> EndpointDescriptor:
    return EndpointDescriptor(method_name=f"public/{method}")


def private(method: str) -> EndpointDescriptor:
    return EndpointDescriptor(method_name=f"private/{method}", auth=AuthMode.BEARER)


def private_mutation(method: str) -> EndpointDescriptor:
    return EndpointDescriptor(
        method_name=f"private/{method}",
        http_verb=HttpVerb.POST,
        auth=AuthMode.BEARER,
        idempotent=False
    )


# Authentication
PUBLIC_AUTH = EndpointDescriptor(method_name="public/auth", http_verb=HttpVerb.POST, idempotent=False)
PRIVATE_LOGOUT = private_mutation("logout")

# Public market data
GET_TIME = public("get_time")
HELLO = public("hello")
STATUS = public("status")
TEST = public("test")
GET_CURRENCIES = public("get_currencies")
GET_INSTRUMENTS = public("get_instruments")
GET_INSTRUMENT = public("get_instrument")
GET_ORDER_BOOK = public("get_order_book")
TICKER = public("ticker")
GET_INDEX_PRICE = public("get_index_price")
GET_INDEX_PRICE_NAMES = public("get_index_price_names")
GET_BOOK_SUMMARY_BY_CURRENCY = public("get_book_summary_by_currency")
GET_BOOK_SUMMARY_BY_INSTRUMENT = public("get_book_summary_by_instrument")
GET_LAST_TRADES_BY_INSTRUMENT = public("get_last_trades_by_instrument")
GET_LAST_TRADES_BY_CURRENCY = public("get_last_trades_by_currency")
GET_LAST_TRADES_BY_INSTRUMENT_AND_TIME = public("get_last_trades_by_instrument_and_time")
GET_FUNDING_RATE_VALUE = public("get_funding_rate_value")
GET_FUNDING_RATE_HISTORY = public("get_funding_rate_history")
GET_FUNDING_CHART_DATA = public("get_funding_chart_data")
GET_DELIVERY_PRICES = public("get_delivery_prices")
GET_EXPIRATIONS = public("get_expirations")
GET_CONTRACT_SIZE = public("get_contract_size")
GET_APR_HISTORY = public("get_apr_history")
GET_TRADINGVIEW_CHART_DATA = public("get_tradingview_chart_data")
GET_HISTORICAL_VOLATILITY = public("get_historical_volatility")
GET_LAST_SETTLEMENTS_BY_CURRENCY = public("get_last_settlements_by_currency")
GET_LAST_SETTLEMENTS_BY_INSTRUMENT = public("get_last_settlements_by_instrument")

# Private account reads
GET_ACCOUNT_SUMMARY = private("get_account_summary")
GET_POSITIONS = private("get_positions")
GET_POSITION = private("get_position")
GET_SUBACCOUNTS = private("get_subaccounts")
GET_TRANSACTION_LOG = private("get_transaction_log")
GET_DEPOSITS = private("get_deposits")
GET_WITHDRAWALS = private("get_withdrawals")

# Private order and trade reads
GET_OPEN_ORDERS = private("get_open_orders")
GET_OPEN_ORDERS_BY_INSTRUMENT = private("get_open_orders_by_instrument")
GET_ORDER_STATE = private("get_order_state")
GET_ORDER_HISTORY_BY_CURRENCY = private("get_order_history_by_currency")
GET_ORDER_HISTORY_BY_INSTRUMENT = private("get_order_history_by_instrument")
GET_USER_TRADES_BY_INSTRUMENT = private("get_user_trades_by_instrument")
GET_USER_TRADES_BY_CURRENCY = private("get_user_trades_by_currency")
GET_USER_TRADES_BY_ORDER = private("get_user_trades_by_order")
GET_USER_TRADES_BY_INSTRUMENT_AND_TIME = private("get_user_trades_by_instrument_and_time")
GET_USER_TRADES_BY_CURRENCY_AND_TIME = private("get_user_trades_by_currency_and_time")

# Private trading
BUY = private_mutation("buy")
SELL = private_mutation("sell")
EDIT = private_mutation("edit")
CANCEL = private_mutation("cancel")
CANCEL_ALL = private_mutation("cancel_all")
CANCEL_ALL_BY_INSTRUMENT = private_mutation("cancel_all_by_instrument")
CANCEL_ALL_BY_CURRENCY = private_mutation("cancel_all_by_currency")
MASS_QUOTE = private_mutation("mass_quote")

# Private wallet
WITHDRAW = private_mutation("withdraw")
SUBMIT_TRANSFER_TO_SUBACCOUNT = private_mutation("submit_transfer_to_subaccount")
SUBMIT_TRANSFER_TO_USER = private_mutation("submit_transfer_to_user")


ENDPOINTS: Dict[str, EndpointDescriptor] = {
    descriptor.method_name: descriptor
    for descriptor in globals().copy().values()
    if isinstance(descriptor, EndpointDescriptor)
}


def endpoint_for(method_name: str) -> EndpointDescriptor:
    """Look up a descriptor by JSON-RPC method name"""
    try:
        return ENDPOINTS[method_name]
    except KeyError:
        raise KeyError(f"Unknown Deribit method: {method_name}") from None
