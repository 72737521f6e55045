import httpx
import pytest

from kraken_client.base_models import ExchangeError
from kraken_client.client.result import Result


def _result(status_code=200, **kwargs):
    return Result.from_response(httpx.Response(status_code, **kwargs))


def test_successful_payload_exposes_result_member():
    result = _result(json={"error": [], "result": {"unixtime": 1700000000, "rfc1123": "Tue, 14 Nov 23"}})

    assert result.is_success
    assert result.has_errors is False
    assert result.result["unixtime"] == 1700000000
    assert result.raise_for_error() == result.result


def test_exchange_error_inside_http_200_is_passed_through():
    result = _result(json={"error": ["EAPI:Invalid nonce"]})

    assert result.is_success
    assert result.errors == ["EAPI:Invalid nonce"]
    assert result.result is None


def test_raise_for_error_on_exchange_error():
    result = _result(json={"error": ["EGeneral:Invalid arguments"]})

    with pytest.raises(ExchangeError) as excinfo:
        result.raise_for_error()

    assert excinfo.value.status_code == 200
    assert excinfo.value.errors == ["EGeneral:Invalid arguments"]
    assert "EGeneral:Invalid arguments" in str(excinfo.value)


def test_raise_for_error_on_http_error_status():
    result = _result(502, text="<html>Bad Gateway</html>")

    assert result.payload is None
    assert result.errors == []
    with pytest.raises(ExchangeError) as excinfo:
        result.raise_for_error()
    assert excinfo.value.status_code == 502


def test_non_json_body_is_kept_raw():
    result = _result(200, content=b"not json")

    assert result.body == b"not json"
    assert result.text == "not json"
    assert result.payload is None


def test_empty_body():
    result = _result(204)

    assert result.payload is None
    assert result.result is None


def test_headers_are_copied():
    result = _result(json={"error": []}, headers={"X-Request-Id": "abc"})

    assert result.headers["x-request-id"] == "abc"
    assert result.url is None
