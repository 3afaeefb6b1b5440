# SPDX-License-Identifier: Apache-2.0
import json
import logging

import pytest
import requests

from treatyglobe.connectors import CountryLookup, StaticLookup
from treatyglobe.connectors.backends import api as api_backend
from treatyglobe.geometry import GeoCoordinate


def _fake_backend(monkeypatch, responses):
    calls: list[str] = []

    def fake_request_with_retries(method, url, **kwargs):  # noqa: ARG001
        calls.append(url)
        result = responses(url)
        if isinstance(result, Exception):
            raise result
        return result

    monkeypatch.setattr(api_backend, "request_with_retries", fake_request_with_retries)
    return calls


def test_lookup_reads_first_latlng(monkeypatch):
    body = json.dumps([{"latlng": [37.0, 127.5]}, {"latlng": [0, 0]}]).encode()
    calls = _fake_backend(monkeypatch, lambda url: (200, {}, body))

    lookup = CountryLookup("https://countries.example/v3.1/name")
    coord = lookup.lookup("South Korea")

    assert coord == GeoCoordinate(37.0, 127.5)
    assert calls == ["https://countries.example/v3.1/name/South%20Korea"]


def test_lookup_caches_hits_and_misses(monkeypatch):
    def respond(url):
        if url.endswith("France"):
            return 200, {}, b'[{"latlng": [46, 2]}]'
        return 404, {}, b'{"status": 404}'

    calls = _fake_backend(monkeypatch, respond)
    lookup = CountryLookup()
    assert lookup.lookup("France") == GeoCoordinate(46, 2)
    assert lookup.lookup(" France ") == GeoCoordinate(46, 2)
    assert lookup.lookup("Atlantis") is None
    assert lookup.lookup("Atlantis") is None
    assert len(calls) == 2


def test_lookup_not_found_logs_warning(monkeypatch, caplog):
    _fake_backend(monkeypatch, lambda url: (404, {}, b""))
    with caplog.at_level(logging.WARNING):
        assert CountryLookup().lookup("Atlantis") is None
    assert "No coordinates found for Atlantis" in caplog.text


@pytest.mark.parametrize(
    "response",
    [
        requests.ConnectionError("boom"),
        (500, {}, b""),
        (200, {}, b"not json"),
        (200, {}, b"[]"),
        (200, {}, b'[{"name": "no latlng"}]'),
        (200, {}, b'[{"latlng": [123, 0]}]'),
    ],
)
def test_lookup_failures_return_none(monkeypatch, response):
    _fake_backend(monkeypatch, lambda url: response)
    assert CountryLookup().lookup("Somewhere") is None


def test_blank_name_skips_request(monkeypatch):
    calls = _fake_backend(monkeypatch, lambda url: (200, {}, b"[]"))
    assert CountryLookup().lookup("  ") is None
    assert calls == []


def test_static_lookup_from_file(tmp_path):
    path = tmp_path / "coords.json"
    path.write_text(
        json.dumps({"France": [46, 2], "Nowhere": [95, 0], "Bad": "x"}), encoding="utf-8"
    )
    lookup = StaticLookup.from_file(path)
    assert lookup.lookup("France") == GeoCoordinate(46, 2)
    assert lookup.lookup("Nowhere") is None
    assert lookup.lookup("Bad") is None
    assert lookup.lookup("Japan") is None


def test_static_lookup_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        StaticLookup.from_file(tmp_path / "nope.json")
