"""Tests for the zap preview API."""

import pytest
from fastapi.testclient import TestClient

from tests.helpers import USDC, WETH, WETH_USDC_PAIR
from zapper import __version__
from zapper.api.endpoints import get_config
from zapper.api.main import app
from zapper.api.schemas import ErrorResponse
from zapper.config import ZapperConfig
from zapper.constants import UNISWAP_V2_FACTORY


@pytest.fixture
def client():
    """Create a test client for the API."""
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def default_config():
    app.dependency_overrides[get_config] = lambda: ZapperConfig()


class TestHealth:
    def test_health(self, client):
        response = client.get("/health")
        assert response.status_code == 200
        assert response.json() == {"status": "ok", "version": __version__}


class TestOptimalSwapEndpoint:
    """Tests for POST /optimal-swap."""

    def test_sizes_swap(self, client):
        response = client.post("/optimal-swap", json={"amountIn": "10000", "reserveIn": "1000000"})

        assert response.status_code == 200
        assert response.json() == {"toSwap": "4995", "naiveSwap": "5000"}

    def test_accepts_integers_and_round_up(self, client):
        response = client.post("/optimal-swap", json={"amountIn": 10000, "reserveIn": 1000000, "roundUp": True})

        assert response.status_code == 200
        assert response.json()["toSwap"] == "4996"

    def test_zero_amount_is_rejected(self, client):
        response = client.post("/optimal-swap", json={"amountIn": "0", "reserveIn": "1000000"})

        assert response.status_code == 400
        assert response.json()["error"] == "ZeroAmount"

    def test_zero_reserve_is_rejected(self, client):
        response = client.post("/optimal-swap", json={"amountIn": "10", "reserveIn": "0"})

        assert response.status_code == 400
        assert response.json()["error"] == "InvalidInput"

    @pytest.mark.parametrize("amount", ["-1", "abc", str(2**256), 1.5])
    def test_invalid_amount_is_unprocessable(self, client, amount):
        response = client.post("/optimal-swap", json={"amountIn": amount, "reserveIn": "1000000"})
        assert response.status_code == 422


class TestZapInQuoteEndpoint:
    """Tests for POST /quote/zap-in."""

    BODY = {
        "amountIn": "10000",
        "reserveIn": "1000000",
        "reserveOut": "1000000",
        "totalSupply": "1000000",
    }

    def test_quote_with_naive_comparison(self, client, default_config):
        response = client.post("/quote/zap-in", json=self.BODY)

        assert response.status_code == 200
        data = response.json()
        assert data["toSwap"] == "4995"
        assert data["swapAmountOut"] == "4955"
        assert data["depositIn"] == "5005"
        assert data["depositOther"] == "4955"
        assert data["liquidity"] == "4979"
        assert data["minLiquidity"] == "4954"
        assert data["naiveLiquidity"] == "4974"

    def test_round_up_from_config(self, client):
        app.dependency_overrides[get_config] = lambda: ZapperConfig(round_up_optimal_swap=True)

        response = client.post("/quote/zap-in", json=self.BODY)

        assert response.status_code == 200
        assert response.json()["toSwap"] == "4996"

    def test_invalid_slippage(self, client, default_config):
        response = client.post("/quote/zap-in", json={**self.BODY, "maxSlippageBps": 10_001})

        assert response.status_code == 400
        assert response.json()["error"] == "InvalidSlippage"

    def test_empty_pool(self, client, default_config):
        response = client.post("/quote/zap-in", json={**self.BODY, "reserveIn": "0"})

        assert response.status_code == 400
        assert response.json()["error"] == "SwapBoundsViolated"


class TestZapOutQuoteEndpoint:
    """Tests for POST /quote/zap-out."""

    def test_quote(self, client):
        body = {
            "liquidity": "497",
            "reserveOut": "1000998",
            "reserveOther": "1000000",
            "totalSupply": "1000497",
        }
        response = client.post("/quote/zap-out", json=body)

        assert response.status_code == 200
        assert response.json() == {
            "withdrawnOut": "497",
            "withdrawnOther": "496",
            "converted": "494",
            "amountOut": "991",
            "minAmountOut": "986",
        }

    def test_zero_liquidity(self, client):
        body = {"liquidity": "0", "reserveOut": "1", "reserveOther": "1", "totalSupply": "1"}
        response = client.post("/quote/zap-out", json=body)

        assert response.status_code == 400
        assert response.json()["error"] == "ZeroAmount"


class TestPairAddressEndpoint:
    """Tests for POST /pair-address."""

    def test_mainnet_pair(self, client, default_config):
        response = client.post("/pair-address", json={"tokenA": WETH, "tokenB": USDC})

        assert response.status_code == 200
        assert response.json() == {
            "pair": WETH_USDC_PAIR,
            "token0": USDC,
            "token1": WETH,
            "factory": UNISWAP_V2_FACTORY,
        }

    def test_identical_tokens(self, client, default_config):
        response = client.post("/pair-address", json={"tokenA": WETH, "tokenB": WETH})

        assert response.status_code == 400
        assert response.json()["error"] == "InvalidInput"

    def test_malformed_address(self, client, default_config):
        response = client.post("/pair-address", json={"tokenA": "0x1234", "tokenB": USDC})
        assert response.status_code == 422


class TestErrorResponses:
    """Tests for the shared error body."""

    def test_zap_error_body_matches_model(self, client):
        response = client.post("/optimal-swap", json={"amountIn": "0", "reserveIn": "1000000"})

        assert response.status_code == 400
        body = ErrorResponse.model_validate(response.json())
        assert body.error == "ZeroAmount"
        assert body.message

    def test_invalid_input_body_matches_model(self, client):
        response = client.post("/optimal-swap", json={"amountIn": "10", "reserveIn": "0"})

        assert response.status_code == 400
        assert ErrorResponse.model_validate(response.json()).error == "InvalidInput"

    def test_openapi_documents_error_body(self, client):
        schema = client.get("/openapi.json").json()

        assert "ErrorResponse" in schema["components"]["schemas"]
        error = schema["paths"]["/optimal-swap"]["post"]["responses"]["400"]
        assert error["content"]["application/json"]["schema"]["$ref"].endswith("/ErrorResponse")
