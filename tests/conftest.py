"""
Test configuration and fixtures for the Deribit HTTP client.
"""

import os
import random
import tempfile
from pathlib import Path
from typing import AsyncGenerator, Callable, Generator

import pytest
import pytest_asyncio

import sys

PROJECT_ROOT = Path(__file__).resolve().parents[1]
SRC_PATH = PROJECT_ROOT / 'src'
if str(SRC_PATH) not in sys.path:
    sys.path.insert(0, str(SRC_PATH))

from deribit_http.config.config_loader import ConfigLoader
from deribit_http.config.settings import DeribitSettings
from deribit_http.services.session import DeribitSession
from deribit_http.services.stub_transport import StubTransport
from deribit_http.utils.clock import ManualClock

FIXED_NONCE = "abcdefgh"


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for test files."""
    with tempfile.TemporaryDirectory() as temp_dir:
        yield Path(temp_dir)


@pytest.fixture
def test_config_file(temp_dir: Path) -> Path:
    """Create a test account file."""
    config_content = """
accounts:
  - name: test_account
    description: "Test account"
    clientId: "test_client_id"
    clientSecret: "test_client_secret"
    enabled: true
    scope: ""
    testnet: true

  - name: trading_account
    description: "Account with a restricted scope"
    client_id: "trading_client_id"
    client_secret: "trading_client_secret"
    enabled: true
    scope: "trade:read_write"

  - name: disabled_account
    description: "Disabled test account"
    clientId: "disabled_client_id"
    clientSecret: "disabled_client_secret"
    enabled: false
"""
    config_file = temp_dir / "test_apikeys.yml"
    config_file.write_text(config_content.strip())
    return config_file


@pytest.fixture
def clean_env(monkeypatch) -> None:
    """Remove DERIBIT_* variables so settings only see explicit values."""
    for key in list(os.environ):
        if key.upper().startswith("DERIBIT_"):
            monkeypatch.delenv(key, raising=False)


@pytest.fixture
def test_env_vars(monkeypatch, clean_env, test_config_file: Path) -> None:
    """Set up test environment variables."""
    monkeypatch.setenv("DERIBIT_TESTNET", "true")
    monkeypatch.setenv("DERIBIT_API_KEY_FILE", str(test_config_file))
    monkeypatch.setenv("DERIBIT_LOG_LEVEL", "DEBUG")


@pytest.fixture
def config_loader(test_config_file: Path) -> Generator[ConfigLoader, None, None]:
    """Create a test configuration loader."""
    ConfigLoader.reset_instance()
    yield ConfigLoader(test_config_file)
    ConfigLoader.reset_instance()


@pytest.fixture
def clock() -> ManualClock:
    return ManualClock()


@pytest.fixture
def stub(clock: ManualClock) -> StubTransport:
    return StubTransport(clock=clock)


@pytest.fixture
def public_settings(clean_env) -> DeribitSettings:
    """Settings without credentials."""
    return DeribitSettings(_env_file=None, testnet=True)


@pytest.fixture
def api_key_settings(clean_env) -> DeribitSettings:
    """Settings with an API key pair."""
    return DeribitSettings(_env_file=None, testnet=True, client_id="X", client_secret="Y")


@pytest.fixture
def make_session(stub: StubTransport, clock: ManualClock) -> Callable[..., DeribitSession]:
    """Build sessions wired to the stub transport and the manual clock."""
    def factory(settings: DeribitSettings, **kwargs) -> DeribitSession:
        return DeribitSession(
            settings,
            transport=stub,
            clock=clock,
            rng=random.Random(7),
            nonce_factory=lambda: FIXED_NONCE,
            **kwargs
        )
    return factory


@pytest_asyncio.fixture
async def public_session(public_settings, make_session) -> AsyncGenerator[DeribitSession, None]:
    """Session with no credentials."""
    session = make_session(public_settings)
    yield session
    await session.aclose()


@pytest_asyncio.fixture
async def private_session(api_key_settings, make_session) -> AsyncGenerator[DeribitSession, None]:
    """Session holding client_id=X, client_secret=Y."""
    session = make_session(api_key_settings)
    yield session
    await session.aclose()


@pytest.fixture
def mock_auth_result() -> dict:
    """Create mock public/auth result."""
    return {
        "access_token": "T",
        "expires_in": 900,
        "refresh_token": "R",
        "scope": "account:read trade:read_write",
        "token_type": "bearer"
    }


@pytest.fixture
def mock_account_summary() -> dict:
    return {
        "currency": "BTC",
        "balance": 1.5,
        "equity": 1.52,
        "available_funds": 1.4,
        "margin_balance": 1.52,
        "initial_margin": 0.1,
        "maintenance_margin": 0.05,
        "delta_total": 0.3,
        "session_upl": 0.02,
        "total_pl": 0.1
    }


@pytest.fixture
def mock_position_data() -> list:
    """Create mock position data."""
    return [
        {
            "instrument_name": "BTC-25DEC21-50000-C",
            "size": 1.0,
            "mark_price": 0.05,
            "delta": 0.5,
            "gamma": 0.001,
            "theta": -0.01,
            "vega": 0.1,
            "average_price": 0.048,
            "floating_profit_loss": 20.0,
            "realized_profit_loss": 0.0,
            "total_profit_loss": 20.0,
            "index_price": 50000.0,
            "settlement_price": 0.049,
            "direction": "buy",
            "kind": "option"
        }
    ]


@pytest.fixture
def mock_instruments_data() -> list:
    """Create mock options data."""
    return [
        {
            "instrument_name": "BTC-25DEC21-50000-C",
            "kind": "option",
            "option_type": "call",
            "strike": 50000,
            "expiration_timestamp": 1640419200000,
            "base_currency": "BTC",
            "quote_currency": "BTC",
            "is_active": True,
            "settlement_period": "day",
            "creation_timestamp": 1640332800000,
            "tick_size": 0.0005,
            "min_trade_amount": 0.1,
            "contract_size": 1.0
        },
        {
            "instrument_name": "BTC-25DEC21-45000-P",
            "kind": "option",
            "option_type": "put",
            "strike": 45000,
            "expiration_timestamp": 1640419200000,
            "base_currency": "BTC",
            "quote_currency": "BTC",
            "is_active": True,
            "settlement_period": "day",
            "creation_timestamp": 1640332800000,
            "tick_size": 0.0005,
            "min_trade_amount": 0.1,
            "contract_size": 1.0
        }
    ]


@pytest.fixture
def mock_order_response() -> dict:
    """Create mock order response."""
    return {
        "order": {
            "order_id": "test_order_12345",
            "instrument_name": "BTC-25DEC21-50000-C",
            "direction": "buy",
            "amount": 1.0,
            "price": "market_price",
            "order_type": "market",
            "order_state": "filled",
            "filled_amount": 1.0,
            "average_price": 0.05,
            "creation_timestamp": 1640332800000,
            "last_update_timestamp": 1640332805000
        },
        "trades": [
            {
                "trade_id": "test_trade_12345",
                "instrument_name": "BTC-25DEC21-50000-C",
                "order_id": "test_order_12345",
                "direction": "buy",
                "amount": 1.0,
                "price": 0.05,
                "timestamp": 1640332805000,
                "fee": 0.0005,
                "fee_currency": "BTC"
            }
        ]
    }


def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "unit: mark test as a unit test")
    config.addinivalue_line("markers", "slow: mark test as slow running")


def pytest_collection_modifyitems(config, items):
    """Modify test collection to add markers based on test location."""
    for item in items:
        if "unit" in str(item.fspath):
            item.add_marker(pytest.mark.unit)
