"""
Type definitions for the Deribit HTTP client

Pydantic models for the JSON-RPC layer, authentication, configuration and
the endpoint parameter and result payloads.
"""

from .rpc_types import (
    HttpVerb,
    AuthMode,
    Placement,
    EndpointDescriptor,
    DeribitRequest,
    HttpResponse,
    RpcErrorDetail,
    RpcEnvelope,
    RpcResult,
    ServerTiming,
)
from .auth_types import (
    ApiKeyCredentials,
    BearerCredentials,
    Credentials,
    DeribitAuthResult,
    AuthToken,
    AuthStatus,
    AuthState,
    DeribitGrantType,
)
from .config_types import ApiKeyConfig, DeribitAccountsConfig
from .market_types import (
    Currency,
    Instrument,
    Ticker,
    OrderBook,
    BookSummary,
    IndexPriceData,
    LastTrade,
    LastTradesResponse,
    Settlement,
    SettlementsResponse,
    FundingRateData,
    FundingChartData,
    DeliveryPricesResponse,
    ContractSizeResponse,
    AprHistoryResponse,
    TradingViewChartData,
    HelloResponse,
    StatusResponse,
)
from .trading_types import (
    OrderRequest,
    EditOrderRequest,
    MassQuoteRequest,
    QuoteEntry,
    QuoteSide,
    OrderInfo,
    OrderResponse,
    UserTrade,
    UserTradesResponse,
    CancelledOrders,
    MassQuoteResult,
)
from .account_types import (
    AccountSummary,
    Position,
    Subaccount,
    TransactionLog,
    DepositsResponse,
    WithdrawalsResponse,
    TransferResult,
)

__all__ = [
    # RPC types
    "HttpVerb",
    "AuthMode",
    "Placement",
    "EndpointDescriptor",
    "DeribitRequest",
    "HttpResponse",
    "RpcErrorDetail",
    "RpcEnvelope",
    "RpcResult",
    "ServerTiming",

    # Auth types
    "ApiKeyCredentials",
    "BearerCredentials",
    "Credentials",
    "DeribitAuthResult",
    "AuthToken",
    "AuthStatus",
    "AuthState",
    "DeribitGrantType",

    # Config types
    "ApiKeyConfig",
    "DeribitAccountsConfig",

    # Market data types
    "Currency",
    "Instrument",
    "Ticker",
    "OrderBook",
    "BookSummary",
    "IndexPriceData",
    "LastTrade",
    "LastTradesResponse",
    "Settlement",
    "SettlementsResponse",
    "FundingRateData",
    "FundingChartData",
    "DeliveryPricesResponse",
    "ContractSizeResponse",
    "AprHistoryResponse",
    "TradingViewChartData",
    "HelloResponse",
    "StatusResponse",

    # Trading types
    "OrderRequest",
    "EditOrderRequest",
    "MassQuoteRequest",
    "QuoteEntry",
    "QuoteSide",
    "OrderInfo",
    "OrderResponse",
    "UserTrade",
    "UserTradesResponse",
    "CancelledOrders",
    "MassQuoteResult",

    # Account types
    "AccountSummary",
    "Position",
    "Subaccount",
    "TransactionLog",
    "DepositsResponse",
    "WithdrawalsResponse",
    "TransferResult",
]
