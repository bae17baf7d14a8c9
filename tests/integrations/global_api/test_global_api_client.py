from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import pytest
import requests

from schnose_common.errors import UpstreamApiError
from schnose_common.integrations.global_api.client import HttpGlobalApiClient
from schnose_common.models.enums import Mode

_NOT_JSON = object()


class _FakeResponse:
    def __init__(self, *, status_code: int = 200, payload: Any = None, text: str = "") -> None:
        self.status_code = status_code
        self._payload = payload
        self.text = text

    def json(self) -> Any:
        if self._payload is _NOT_JSON:
            raise ValueError("Expecting value: line 1 column 1 (char 0)")
        return self._payload


class _FakeSession:
    def __init__(self, response: _FakeResponse | None = None, *, error: Exception | None = None) -> None:
        self._response = response
        self._error = error
        self.calls: list[dict[str, Any]] = []

    def get(self, url: str, *, params=None, headers=None, timeout=None):  # noqa: ANN001
        self.calls.append({"url": url, "params": dict(params or {}), "headers": headers, "timeout": timeout})
        if self._error is not None:
            raise self._error
        return self._response


def _fixture(name: str) -> Any:
    repo_root = Path(__file__).resolve().parents[3]
    return json.loads((repo_root / "tests" / "fixtures" / "global_api" / name).read_text(encoding="utf-8"))


def test_get_record_filters_sends_params_and_parses(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("GLOBAL_API_BASE_URL", raising=False)
    session = _FakeSession(_FakeResponse(payload=_fixture("record_filters_sample.json")))
    client = HttpGlobalApiClient(session=session, timeout_seconds=5.0)

    filters = client.get_record_filters(stages=0, tickrates=128, limit=99999)

    assert len(session.calls) == 1
    call = session.calls[0]
    assert call["url"] == "https://kztimerglobal.com/api/v2/record_filters"
    assert call["params"] == {"stages": 0, "tickrates": 128, "limit": 99999}
    assert call["timeout"] == 5.0

    assert len(filters) == 7
    first = filters[0]
    assert first.map_id == 992
    assert first.mode is Mode.KZ_TIMER
    assert first.stage == 0
    assert first.tickrate == 128
    assert first.has_teleports is True


def test_get_maps_validated_only_sets_filter(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("GLOBAL_API_BASE_URL", raising=False)
    session = _FakeSession(_FakeResponse(payload=_fixture("maps_sample.json")))
    client = HttpGlobalApiClient(session=session)

    maps = client.get_maps(validated_only=True)

    assert session.calls[0]["url"] == "https://kztimerglobal.com/api/v2/maps"
    assert session.calls[0]["params"] == {"limit": 9999, "is_validated": "true"}
    assert [m.name for m in maps] == ["kz_lionharder", "kz_ladderall", "kz_bladder"]
    assert maps[0].workshop_url == ""
    assert maps[1].workshop_url == "https://steamcommunity.com/sharedfiles/filedetails/?id=1253950000"


def test_get_maps_all_omits_validated_filter() -> None:
    session = _FakeSession(_FakeResponse(payload=[]))
    client = HttpGlobalApiClient(session=session, base_url="http://localhost:8080/api/v2")

    assert client.get_maps(validated_only=False) == []
    assert session.calls[0]["params"] == {"limit": 9999}


def test_base_url_from_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("GLOBAL_API_BASE_URL", "http://localhost:9000/api/v2/")
    session = _FakeSession(_FakeResponse(payload=[]))
    client = HttpGlobalApiClient(session=session)

    client.get_record_filters()

    assert session.calls[0]["url"] == "http://localhost:9000/api/v2/record_filters"
    assert session.calls[0]["params"] == {}


def test_http_error_is_raised_without_retry() -> None:
    session = _FakeSession(_FakeResponse(status_code=503, payload=None, text="upstream down"))
    client = HttpGlobalApiClient(session=session)

    with pytest.raises(UpstreamApiError) as excinfo:
        client.get_maps(validated_only=True)

    assert len(session.calls) == 1
    assert excinfo.value.status_code == 503
    assert excinfo.value.body_snippet == "upstream down"
    assert "HTTP 503" in excinfo.value.message


def test_transport_error_is_wrapped() -> None:
    error = requests.ConnectionError("connection refused")
    session = _FakeSession(error=error)
    client = HttpGlobalApiClient(session=session)

    with pytest.raises(UpstreamApiError) as excinfo:
        client.get_record_filters(stages=0)

    assert excinfo.value.error is error
    assert excinfo.value.__cause__ is error
    assert excinfo.value.status_code is None


def test_non_json_body_is_rejected() -> None:
    session = _FakeSession(_FakeResponse(payload=_NOT_JSON, text="<html>"))
    client = HttpGlobalApiClient(session=session)

    with pytest.raises(UpstreamApiError) as excinfo:
        client.get_maps(validated_only=False)

    assert excinfo.value.body_snippet == "<html>"


def test_unexpected_shape_is_rejected() -> None:
    session = _FakeSession(_FakeResponse(payload={"error": "nope"}))
    client = HttpGlobalApiClient(session=session)

    with pytest.raises(UpstreamApiError):
        client.get_record_filters()


def test_malformed_record_filter_is_rejected() -> None:
    session = _FakeSession(_FakeResponse(payload=[{"id": 1, "map_id": "abc", "stage": 0, "mode_id": 200}]))
    client = HttpGlobalApiClient(session=session)

    with pytest.raises(UpstreamApiError):
        client.get_record_filters()


def test_timeout_from_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("SCHNOSE_HTTP_TIMEOUT_SECONDS", "7.5")
    session = _FakeSession(_FakeResponse(payload=[]))

    HttpGlobalApiClient(session=session).get_maps(validated_only=True)

    assert session.calls[0]["timeout"] == 7.5


def test_non_object_item_fails_the_whole_listing() -> None:
    valid = _fixture("record_filters_sample.json")[0]
    session = _FakeSession(_FakeResponse(payload=[valid, None, "x"]))
    client = HttpGlobalApiClient(session=session)

    with pytest.raises(UpstreamApiError) as excinfo:
        client.get_record_filters()

    assert "item 1" in excinfo.value.message


def test_close_leaves_injected_session_open() -> None:
    closed: list[bool] = []
    session = _FakeSession(_FakeResponse(payload=[]))
    session.close = lambda: closed.append(True)  # type: ignore[attr-defined]

    HttpGlobalApiClient(session=session).close()

    assert closed == []


def test_close_closes_own_session(monkeypatch: pytest.MonkeyPatch) -> None:
    closed: list[bool] = []
    monkeypatch.setattr(requests.Session, "close", lambda self: closed.append(True))

    HttpGlobalApiClient().close()

    assert closed == [True]
