"""Tests for concurrent source fan-out and the discovery cascade."""

import asyncio
from typing import List, Optional

import pytest

from nightspark_service.aggregator import EventAggregator, discover_events, sort_by_start_time


class StubSource:
  """Stands in for an EventSource; records how often it was searched."""

  def __init__(self, name: str, events=None, tier: str = "ticketing", error: Optional[Exception] = None, delay: float = 0):
    self.name = name
    self.tier = tier
    self.events = list(events or [])
    self.error = error
    self.delay = delay
    self.calls: List[tuple] = []

  async def search_events(self, location_text, latitude=None, longitude=None):
    self.calls.append((location_text, latitude, longitude))
    if self.delay:
      await asyncio.sleep(self.delay)
    if self.error is not None:
      raise self.error
    return list(self.events)


class TestSortByStartTime:
  def test_sorts_clock_strings(self, make_event):
    events = [make_event("a", "20:00"), make_event("b", "19:00"), make_event("c", "00:30")]
    assert [event.startTime for event in sort_by_start_time(events)] == ["00:30", "19:00", "20:00"]


class TestEventAggregator:
  def test_merges_and_sorts(self, make_event):
    source = StubSource("one", [make_event("late", "20:00"), make_event("early", "19:00")])
    events = asyncio.run(EventAggregator([source]).search_all_events("San Francisco, CA", 1.0, 2.0))
    assert [event.startTime for event in events] == ["19:00", "20:00"]
    assert source.calls == [("San Francisco, CA", 1.0, 2.0)]

  def test_failing_source_is_isolated(self, make_event):
    sources = [
      StubSource("a", [make_event("a1", "21:00")]),
      StubSource("broken", error=RuntimeError("upstream exploded")),
      StubSource("c", [make_event("c1", "18:00")]),
    ]
    events = asyncio.run(EventAggregator(sources).search_all_events("Austin, TX"))
    assert [event.id for event in events] == ["c1", "a1"]

  def test_slow_source_times_out(self, make_event):
    sources = [
      StubSource("slow", [make_event("s1", "18:00")], delay=1.0),
      StubSource("fast", [make_event("f1", "22:00")]),
    ]
    events = asyncio.run(EventAggregator(sources, timeout=0.05).search_all_events("Austin, TX"))
    assert [event.id for event in events] == ["f1"]

  def test_equal_start_times_keep_registration_order(self, make_event):
    first = StubSource("first", [make_event("x", "20:00")])
    second = StubSource("second", [make_event("y", "20:00")])
    aggregator = EventAggregator()
    aggregator.add_provider(first)
    aggregator.add_provider(second)
    events = asyncio.run(aggregator.search_all_events("Austin, TX"))
    assert [event.id for event in events] == ["x", "y"]

  def test_no_sources(self):
    assert asyncio.run(EventAggregator().search_all_events("Austin, TX")) == []

  def test_no_cross_source_dedupe(self, make_event):
    sources = [StubSource("a", [make_event("same", "20:00")]), StubSource("b", [make_event("same", "20:00")])]
    events = asyncio.run(EventAggregator(sources).search_all_events("Austin, TX"))
    assert len(events) == 2


class TestDiscoverEvents:
  """Ticketing, then venues, then generated venues."""

  def test_ticketing_results_win(self, make_event):
    ticketing = StubSource("tm", [make_event("t1", "21:00")])
    venues = StubSource("places", [make_event("v1", "19:00")], tier="venues")
    events = asyncio.run(discover_events("San Francisco, CA", [ticketing, venues]))
    assert [event.id for event in events] == ["t1"]
    assert venues.calls == []
    assert ticketing.calls[0][1:] == (37.7749, -122.4194)

  def test_falls_back_to_venues(self, make_event):
    ticketing = StubSource("tm", [])
    venues = StubSource("places", [make_event("v1", "19:00")], tier="venues")
    events = asyncio.run(discover_events("San Francisco, CA", [ticketing, venues]))
    assert [event.id for event in events] == ["v1"]
    assert len(ticketing.calls) == 1

  def test_failed_ticketing_counts_as_empty(self, make_event):
    ticketing = StubSource("tm", error=RuntimeError("down"))
    venues = StubSource("places", [make_event("v1", "19:00")], tier="venues")
    events = asyncio.run(discover_events("San Francisco, CA", [ticketing, venues]))
    assert [event.id for event in events] == ["v1"]

  def test_falls_back_to_generated(self):
    ticketing = StubSource("tm", [])
    venues = StubSource("places", [], tier="venues")
    events = asyncio.run(discover_events("San Francisco, CA", [ticketing, venues]))
    assert events
    assert all(event.source == "generated" for event in events)
    assert [event.startTime for event in events] == sorted(event.startTime for event in events)

  def test_ungeocodable_location_skips_sources(self, make_event):
    ticketing = StubSource("tm", [make_event("t1", "21:00")])
    events = asyncio.run(discover_events("Atlantis", [ticketing]))
    assert ticketing.calls == []
    assert events
    assert all(event.city == "Atlantis" for event in events)

  def test_no_credentials_still_returns_events(self):
    events = asyncio.run(discover_events("San Francisco, CA"))
    assert events
    for event in events:
      assert event.city == "San Francisco"
      assert event.price >= 0
      assert event.categories

  @pytest.mark.parametrize("location", ["New York, NY", "Orlando, FL"])
  def test_known_cities_use_real_venue_names(self, location):
    events = asyncio.run(discover_events(location, []))
    assert any(event.venue in ("Madison Square Garden", "Amway Center") for event in events)
