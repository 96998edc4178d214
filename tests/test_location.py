"""Tests for location parsing and geocoding."""

import asyncio

import httpx
import pytest

from nightspark_service.location import (
  CITY_COORDINATES,
  geocode_location,
  parse_location,
  resolve_location,
)


def geocoder(payload: dict, status_code: int = 200, calls: list = None) -> httpx.MockTransport:
  def handler(request: httpx.Request) -> httpx.Response:
    if calls is not None:
      calls.append(request)
    return httpx.Response(status_code, json=payload)

  return httpx.MockTransport(handler)


class TestParseLocation:
  @pytest.mark.parametrize(
    "text,expected",
    [
      ("San Francisco, CA", ("San Francisco", "CA")),
      ("  Austin ,  TX ", ("Austin", "TX")),
      ("Boise", ("Boise", "")),
      ("", ("", "")),
    ],
  )
  def test_parse(self, text, expected):
    assert parse_location(text) == expected


class TestGeocode:
  def test_known_city_without_key(self):
    coords = asyncio.run(geocode_location("San Francisco, CA"))
    assert coords == CITY_COORDINATES["san francisco"]

  def test_unknown_city_without_key(self):
    assert asyncio.run(geocode_location("Atlantis")) is None

  def test_blank_location(self):
    assert asyncio.run(geocode_location("   ", api_key="k")) is None

  def test_google_result_used(self):
    calls = []
    payload = {"status": "OK", "results": [{"geometry": {"location": {"lat": 43.615, "lng": -116.2023}}}]}
    coords = asyncio.run(geocode_location("Boise, ID", api_key="k", transport=geocoder(payload, calls=calls)))
    assert coords == (43.615, -116.2023)
    assert calls[0].url.params["address"] == "Boise, ID"
    assert calls[0].url.params["key"] == "k"

  def test_zero_results_falls_back_to_table(self):
    transport = geocoder({"status": "ZERO_RESULTS", "results": []})
    coords = asyncio.run(geocode_location("Chicago, IL", api_key="k", transport=transport))
    assert coords == CITY_COORDINATES["chicago"]

  def test_server_error_and_unknown_city(self):
    transport = geocoder({}, status_code=500)
    assert asyncio.run(geocode_location("Atlantis", api_key="k", transport=transport)) is None

  def test_results_cached(self):
    calls = []
    payload = {"status": "OK", "results": [{"geometry": {"location": {"lat": 1.0, "lng": 2.0}}}]}
    transport = geocoder(payload, calls=calls)

    async def twice():
      first = await geocode_location("Somewhere", api_key="k", transport=transport)
      second = await geocode_location("somewhere ", api_key="k", transport=transport)
      return first, second

    assert asyncio.run(twice()) == ((1.0, 2.0), (1.0, 2.0))
    assert len(calls) == 1


class TestResolveLocation:
  def test_resolved(self):
    location = asyncio.run(resolve_location("San Francisco, CA"))
    assert location.city == "San Francisco"
    assert location.state == "CA"
    assert location.has_coordinates

  def test_unresolved(self):
    location = asyncio.run(resolve_location("Atlantis"))
    assert location.city == "Atlantis"
    assert not location.has_coordinates
