import httpx
import pytest

from ffcenter.net import FetchError, RateLimitExceeded, RateLimiter, fetch_json


def _client(handler) -> httpx.Client:
    return httpx.Client(transport=httpx.MockTransport(handler), base_url="https://provider.test")


def _responder(statuses: list[int], calls: list[httpx.Request]):
    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(request)
        status = statuses[min(len(calls), len(statuses)) - 1]
        if status == 200:
            return httpx.Response(200, json={"players": [{"id": 1}]})
        return httpx.Response(status)

    return handler


def test_fetch_json_success():
    calls: list[httpx.Request] = []
    sleeps: list[float] = []
    with _client(_responder([200], calls)) as client:
        payload = fetch_json(client, "/players", sleep=sleeps.append)

    assert payload == {"players": [{"id": 1}]}
    assert len(calls) == 1
    assert sleeps == []


def test_fetch_json_retries_server_errors_with_backoff():
    calls: list[httpx.Request] = []
    sleeps: list[float] = []
    with _client(_responder([503, 503, 200], calls)) as client:
        payload = fetch_json(client, "/players", sleep=sleeps.append)

    assert payload["players"][0]["id"] == 1
    assert len(calls) == 3
    assert sleeps == [1.0, 2.0]


def test_fetch_json_client_error_is_not_retried():
    calls: list[httpx.Request] = []
    sleeps: list[float] = []
    with _client(_responder([404], calls)) as client:
        with pytest.raises(FetchError) as excinfo:
            fetch_json(client, "/missing", sleep=sleeps.append)

    assert excinfo.value.status == 404
    assert str(excinfo.value) == "HTTP 404: Not Found"
    assert excinfo.value.url == "/missing"
    assert len(calls) == 1
    assert sleeps == []


def test_fetch_json_gives_up_after_retries():
    calls: list[httpx.Request] = []
    sleeps: list[float] = []
    with _client(_responder([500], calls)) as client:
        with pytest.raises(FetchError) as excinfo:
            fetch_json(client, "/players", retries=2, sleep=sleeps.append)

    assert excinfo.value.status == 500
    assert len(calls) == 3
    assert sleeps == [1.0, 2.0]


def test_fetch_json_transport_error():
    calls: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(request)
        raise httpx.ConnectError("connection refused", request=request)

    with _client(handler) as client:
        with pytest.raises(FetchError, match="Request failed") as excinfo:
            fetch_json(client, "/players", retries=1, retry_delay=0.5, sleep=lambda _: None)

    assert excinfo.value.status is None
    assert len(calls) == 2


def test_fetch_json_rejects_negative_retries():
    with _client(_responder([200], [])) as client:
        with pytest.raises(ValueError):
            fetch_json(client, "/players", retries=-1)


def test_fetch_json_consumes_limiter_once_per_call():
    calls: list[httpx.Request] = []
    limiter = RateLimiter(1, 60, name="FantasyPros")
    with _client(_responder([503, 200], calls)) as client:
        fetch_json(client, "/players", limiter=limiter, sleep=lambda _: None)
        with pytest.raises(RateLimitExceeded):
            fetch_json(client, "/players", limiter=limiter, sleep=lambda _: None)

    assert len(calls) == 2


def test_fetch_json_sends_headers_and_params():
    calls: list[httpx.Request] = []
    with _client(_responder([200], calls)) as client:
        fetch_json(
            client,
            "/projections",
            params={"week": 3, "position": "WR"},
            headers={"x-api-key": "secret"},
        )

    request = calls[0]
    assert request.headers["accept"] == "application/json"
    assert request.headers["x-api-key"] == "secret"
    assert request.url.params["week"] == "3"
    assert request.url.params["position"] == "WR"
