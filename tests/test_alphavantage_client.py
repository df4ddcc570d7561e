"""
Alpha Vantage 客户端测试

上游请求在 aiohttp 会话边界处模拟，不访问真实网络；
超时用本地 aiohttp 服务验证。

用法:
    pytest tests/test_alphavantage_client.py -v
"""

import asyncio
import json

import aiohttp
import pytest
from aiohttp import web
from aiohttp.test_utils import TestServer

from stockdash.data.errors import APIError, APIErrorCode
from stockdash.data.models import StockSearchResult
from stockdash.data.providers.alphavantage import AlphaVantageClient


# ---------- 辅助工具 ----------


class FakeResponse:
    """模拟 aiohttp 响应"""

    def __init__(self, status=200, payload=None, json_error=None):
        self.status = status
        self.payload = payload if payload is not None else {}
        self.json_error = json_error

    async def json(self, content_type="application/json"):
        if self.json_error is not None:
            raise self.json_error
        return self.payload

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc, tb):
        return False


class FakeSession:
    """模拟 aiohttp 会话，记录每次请求参数"""

    def __init__(self, response=None, error=None):
        self.response = response or FakeResponse()
        self.error = error
        self.calls = []
        self.closed = False

    def get(self, url, params=None, timeout=None):
        self.calls.append({"url": url, "params": params, "timeout": timeout})
        if self.error is not None:
            raise self.error
        return self.response

    async def close(self):
        self.closed = True


def make_client(response=None, error=None, **kwargs):
    session = FakeSession(response=response, error=error)
    return AlphaVantageClient(api_key="test-key", session=session, **kwargs), session


SEARCH_MATCHES = [
    {
        "1. symbol": "AAPL",
        "2. name": "Apple Inc",
        "3. type": "Equity",
        "4. region": "United States",
        "5. marketOpen": "09:30",
        "6. marketClose": "16:00",
        "7. timezone": "UTC-04",
        "8. currency": "USD",
        "9. matchScore": "1.0000",
    },
    {
        "1. symbol": "AAPL.TRT",
        "2. name": "Apple CDR (CAD Hedged)",
        "3. type": "Equity",
        "4. region": "Toronto",
        "5. marketOpen": "09:30",
        "6. marketClose": "16:00",
        "7. timezone": "UTC-05",
        "8. currency": "CAD",
        "9. matchScore": "0.6667",
    },
]


# ---------- 初始化 ----------


class TestClientInit:
    """API key 解析"""

    def test_explicit_api_key(self):
        client = AlphaVantageClient(api_key="explicit")
        assert client.api_key == "explicit"

    def test_api_key_from_env(self, api_key_env):
        assert AlphaVantageClient().api_key == api_key_env

    def test_explicit_key_overrides_env(self):
        assert AlphaVantageClient(api_key="explicit").api_key == "explicit"

    def test_legacy_env_name(self, no_api_key, monkeypatch):
        monkeypatch.setenv("ALPHA_VANTAGE_API_KEY", "legacy")
        assert AlphaVantageClient().api_key == "legacy"

    def test_missing_api_key_fails_immediately(self, no_api_key):
        with pytest.raises(APIError) as exc_info:
            AlphaVantageClient()
        assert exc_info.value.code is APIErrorCode.INVALID_API_KEY
        assert exc_info.value.message == "Alpha Vantage API key is required"

    def test_default_timeout(self):
        client = AlphaVantageClient(api_key="k")
        assert client.timeout.total == 10

    def test_repr_hides_key(self):
        assert "secret-value" not in repr(AlphaVantageClient(api_key="secret-value"))


# ---------- fetch_quote ----------


class TestFetchQuote:
    """GLOBAL_QUOTE 请求与错误转换"""

    @pytest.mark.asyncio
    async def test_success_returns_raw_payload(self, global_quote):
        payload = global_quote()
        client, session = make_client(FakeResponse(payload=payload))

        data = await client.fetch_quote("AAPL")

        assert data == payload
        call = session.calls[0]
        assert call["url"] == AlphaVantageClient.BASE_URL
        assert call["params"] == {"function": "GLOBAL_QUOTE", "symbol": "AAPL", "apikey": "test-key"}
        assert call["timeout"].total == 10

    @pytest.mark.asyncio
    async def test_symbol_uppercased(self, global_quote):
        client, session = make_client(FakeResponse(payload=global_quote()))
        await client.fetch_quote("aapl")
        assert session.calls[0]["params"]["symbol"] == "AAPL"

    @pytest.mark.asyncio
    @pytest.mark.parametrize("symbol", ["AAPL!", "BRK.B", "", " AAPL", "AAPL\n"])
    async def test_invalid_symbol_no_request(self, symbol):
        client, session = make_client()

        with pytest.raises(APIError) as exc_info:
            await client.fetch_quote(symbol)

        assert exc_info.value.code is APIErrorCode.INVALID_SYMBOL
        assert exc_info.value.message == "Symbol must contain only alphanumeric characters"
        assert session.calls == []

    @pytest.mark.asyncio
    async def test_http_error_status(self):
        client, _ = make_client(FakeResponse(status=500))

        with pytest.raises(APIError) as exc_info:
            await client.fetch_quote("AAPL")

        assert exc_info.value.code is APIErrorCode.NETWORK_ERROR
        assert exc_info.value.message == "HTTP error! status: 500"

    @pytest.mark.asyncio
    async def test_error_message_field(self):
        message = "Invalid API call. Please retry or visit the documentation."
        client, _ = make_client(FakeResponse(payload={"Error Message": message}))

        with pytest.raises(APIError) as exc_info:
            await client.fetch_quote("INVALID")

        assert exc_info.value == APIError(APIErrorCode.INVALID_SYMBOL, message)

    @pytest.mark.asyncio
    @pytest.mark.parametrize("key", ["Note", "Information"])
    async def test_rate_limit_notice(self, key):
        note = "Thank you for using Alpha Vantage! Our standard API call frequency is 5 calls per minute."
        client, _ = make_client(FakeResponse(payload={key: note}))

        with pytest.raises(APIError) as exc_info:
            await client.fetch_quote("AAPL")

        assert exc_info.value == APIError(
            APIErrorCode.API_LIMIT_EXCEEDED,
            "API call frequency limit exceeded",
            details={"note": note},
        )

    @pytest.mark.asyncio
    @pytest.mark.parametrize("payload", [{"Global Quote": {}}, {}])
    async def test_empty_or_missing_global_quote(self, payload):
        client, _ = make_client(FakeResponse(payload=payload))

        with pytest.raises(APIError) as exc_info:
            await client.fetch_quote("AAPL")

        assert exc_info.value == APIError(APIErrorCode.INVALID_SYMBOL, "No data found for symbol: AAPL")

    @pytest.mark.asyncio
    async def test_network_error_wrapped(self):
        original = aiohttp.ClientConnectionError("Network connection failed")
        client, _ = make_client(error=original)

        with pytest.raises(APIError) as exc_info:
            await client.fetch_quote("AAPL")

        error = exc_info.value
        assert error.code is APIErrorCode.NETWORK_ERROR
        assert error.message == "Network connection failed"
        assert error.details["original_error"] is original
        assert error.__cause__ is original

    @pytest.mark.asyncio
    async def test_json_parse_error_wrapped(self):
        original = json.JSONDecodeError("Expecting value", "<html>", 0)
        client, _ = make_client(FakeResponse(json_error=original))

        with pytest.raises(APIError) as exc_info:
            await client.fetch_quote("AAPL")

        assert exc_info.value.code is APIErrorCode.NETWORK_ERROR
        assert exc_info.value.details["original_error"] is original

    @pytest.mark.asyncio
    async def test_timeout_wrapped(self):
        client, _ = make_client(error=asyncio.TimeoutError())

        with pytest.raises(APIError) as exc_info:
            await client.fetch_quote("AAPL")

        assert exc_info.value.code is APIErrorCode.NETWORK_ERROR
        assert exc_info.value.message == "Request timed out after 10s"

    @pytest.mark.asyncio
    async def test_existing_api_error_not_rewrapped(self):
        existing = APIError(APIErrorCode.API_LIMIT_EXCEEDED, "Rate limit exceeded")
        client, _ = make_client(error=existing)

        with pytest.raises(APIError) as exc_info:
            await client.fetch_quote("AAPL")

        assert exc_info.value is existing

    @pytest.mark.asyncio
    async def test_non_object_payload(self):
        client, _ = make_client(FakeResponse(payload=["not", "an", "object"]))

        with pytest.raises(APIError) as exc_info:
            await client.fetch_quote("AAPL")

        assert exc_info.value.code is APIErrorCode.NETWORK_ERROR


# ---------- search_symbol ----------


class TestSearchSymbol:
    """SYMBOL_SEARCH"""

    @pytest.mark.asyncio
    async def test_results_translated(self):
        client, session = make_client(FakeResponse(payload={"bestMatches": SEARCH_MATCHES}))

        results = await client.search_symbol("Apple Technology")

        assert session.calls[0]["params"] == {
            "function": "SYMBOL_SEARCH",
            "keywords": "Apple Technology",
            "apikey": "test-key",
        }
        assert [r.symbol for r in results] == ["AAPL", "AAPL.TRT"]
        assert results[0] == StockSearchResult(
            symbol="AAPL",
            name="Apple Inc",
            type="Equity",
            region="United States",
            market_open="09:30",
            market_close="16:00",
            timezone="UTC-04",
            currency="USD",
            match_score=1.0,
        )

    @pytest.mark.asyncio
    @pytest.mark.parametrize("payload", [{"bestMatches": []}, {}])
    async def test_empty_results(self, payload):
        client, _ = make_client(FakeResponse(payload=payload))
        assert await client.search_symbol("NONEXISTENT") == []

    @pytest.mark.asyncio
    async def test_http_error_status(self):
        client, _ = make_client(FakeResponse(status=404))

        with pytest.raises(APIError) as exc_info:
            await client.search_symbol("AAPL")

        assert exc_info.value.message == "HTTP error! status: 404"
        assert exc_info.value.code is APIErrorCode.NETWORK_ERROR

    @pytest.mark.asyncio
    async def test_network_error_wrapped(self):
        client, _ = make_client(error=aiohttp.ClientError("Connection timeout"))

        with pytest.raises(APIError) as exc_info:
            await client.search_symbol("AAPL")

        assert exc_info.value.code is APIErrorCode.NETWORK_ERROR
        assert exc_info.value.message == "Connection timeout"

    @pytest.mark.asyncio
    async def test_rate_limit_notice(self):
        client, _ = make_client(FakeResponse(payload={"Note": "slow down"}))

        with pytest.raises(APIError) as exc_info:
            await client.search_symbol("AAPL")

        assert exc_info.value.code is APIErrorCode.API_LIMIT_EXCEEDED


# ---------- 会话生命周期 ----------


class TestSessionLifecycle:
    """外部传入的会话不由客户端关闭"""

    @pytest.mark.asyncio
    async def test_injected_session_left_open(self):
        client, session = make_client()
        async with client:
            pass
        assert session.closed is False

    @pytest.mark.asyncio
    async def test_own_session_closed(self):
        client = AlphaVantageClient(api_key="k")
        async with client:
            session = await client._get_session()
            assert not session.closed
        assert session.closed


# ---------- 本地 HTTP 服务 ----------


class TestAgainstLocalServer:
    """使用本地 aiohttp 服务验证真实请求与超时"""

    @pytest.mark.asyncio
    async def test_quote_round_trip(self, global_quote):
        received = {}

        async def handler(request):
            received.update(request.query)
            return web.json_response(global_quote())

        app = web.Application()
        app.router.add_get("/query", handler)

        async with TestServer(app) as server:
            async with AlphaVantageClient(api_key="local", base_url=str(server.make_url("/query"))) as client:
                data = await client.fetch_quote("msft")

        assert data["Global Quote"]["05. price"] == "151.50"
        assert received == {"function": "GLOBAL_QUOTE", "symbol": "MSFT", "apikey": "local"}

    @pytest.mark.asyncio
    async def test_timeout_cancels_request(self):
        async def slow_handler(request):
            await asyncio.sleep(2)
            return web.json_response({})

        app = web.Application()
        app.router.add_get("/query", slow_handler)

        async with TestServer(app) as server:
            async with AlphaVantageClient(
                api_key="local",
                base_url=str(server.make_url("/query")),
                timeout=0.2,
            ) as client:
                with pytest.raises(APIError) as exc_info:
                    await client.fetch_quote("AAPL")

        assert exc_info.value.code is APIErrorCode.NETWORK_ERROR
        assert exc_info.value.message == "Request timed out after 0.2s"
