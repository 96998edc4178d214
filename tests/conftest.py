"""
Shared pytest fixtures for the NightSpark service test suite.

Provides raw source payload factories, a canonical Event factory and an API
client backed by a fresh in-memory store.
"""

from typing import List, Optional

import pytest
from fastapi.testclient import TestClient

from nightspark_service.location import clear_geocode_cache, make_location
from nightspark_service.models import Event


@pytest.fixture(autouse=True)
def no_source_keys(monkeypatch):
  """Every test starts with no source credentials and an empty geocode cache."""
  for key in ("GOOGLE_API_KEY", "TICKETMASTER_API_KEY", "EVENTBRITE_API_KEY"):
    monkeypatch.delenv(key, raising=False)
  clear_geocode_cache()
  yield
  clear_geocode_cache()


@pytest.fixture
def sf_location():
  return make_location("San Francisco, CA", 37.7749, -122.4194)


@pytest.fixture
def make_event():
  """
  Return a function that creates Event objects with sensible defaults.

  Example:
      event = make_event("e1", "20:00", categories=["music"])
  """

  def _make_event(event_id: str = "e1", start_time: str = "20:00", **kwargs) -> Event:
    defaults = {
      "id": event_id,
      "name": f"Event {event_id}",
      "venue": "Test Venue",
      "city": "San Francisco",
      "state": "CA",
      "startTime": start_time,
    }
    defaults.update(kwargs)
    return Event(**defaults)

  return _make_event


@pytest.fixture
def ticketmaster_event():
  """Factory for a Discovery API event record; keyword overrides replace top-level keys."""

  def _make(**overrides) -> dict:
    raw = {
      "id": "G5vYZ9",
      "name": "Summer Tour 2024",
      "url": "https://www.ticketmaster.com/event/G5vYZ9",
      "dates": {"start": {"localDate": "2024-06-15", "localTime": "20:30:00"}},
      "classifications": [{"segment": {"name": "Music"}, "genre": {"name": "Rock"}}],
      "priceRanges": [{"type": "standard", "currency": "USD", "min": 45.5, "max": 120.0}],
      "images": [
        {"url": "https://img.example.com/small.jpg", "width": 100, "height": 56},
        {"url": "https://img.example.com/large.jpg", "width": 1024, "height": 576},
      ],
      "_embedded": {
        "venues": [
          {
            "name": "The Fillmore",
            "address": {"line1": "1805 Geary Blvd"},
            "city": {"name": "San Francisco"},
            "state": {"stateCode": "CA"},
          }
        ],
        "attractions": [{"name": "The Headliners"}],
      },
    }
    raw.update(overrides)
    return raw

  return _make


@pytest.fixture
def eventbrite_event():
  """Factory for an Eventbrite search result with venue and category expanded."""

  def _make(**overrides) -> dict:
    raw = {
      "id": "778",
      "name": {"text": "Rooftop Salsa Social"},
      "url": "https://www.eventbrite.com/e/778",
      "start": {"local": "2024-06-15T21:00:00"},
      "end": {"local": "2024-06-16T01:00:00"},
      "venue": {
        "name": "Skyline Terrace",
        "address": {"address_1": "1 Market St", "city": "San Francisco", "region": "CA"},
      },
      "category": {"name": "Music", "short_name": "Music"},
      "subcategory": {"name": "Latin"},
      "ticket_availability": {"minimum_ticket_price": {"currency": "USD", "value": 1500}},
      "description": {"text": "Dance under the stars."},
      "logo": {"url": "https://img.evbuc.com/logo.jpg"},
      "capacity": 120,
    }
    raw.update(overrides)
    return raw

  return _make


@pytest.fixture
def place():
  """Factory for a Places API (New) nearby-search result."""

  def _make(
    place_id: str = "ChIJbar1",
    name: str = "The Tipsy Owl",
    types: Optional[List[str]] = None,
    **overrides,
  ) -> dict:
    raw = {
      "id": place_id,
      "displayName": {"text": name},
      "types": types if types is not None else ["bar", "point_of_interest"],
      "formattedAddress": "12 Valencia St, San Francisco, CA",
      "rating": 4.4,
      "businessStatus": "OPERATIONAL",
    }
    raw.update(overrides)
    return raw

  return _make


@pytest.fixture
def client():
  """API client over a freshly seeded store."""
  from nightspark_service.main import app
  from nightspark_service.storage import MemStorage

  app.state.storage = MemStorage()
  with TestClient(app) as test_client:
    yield test_client
