"""Tests for the canonical Event model and its validation rules."""

import pytest
from pydantic import ValidationError

from nightspark_service.models import CATEGORY_VOCABULARY, Event, EventCreate, ResolvedLocation


class TestEventValidation:
  """Field level constraints on Event."""

  def test_minimal_event_gets_defaults(self, make_event):
    event = make_event()
    assert event.price == 0
    assert event.ageRequirement == "all"
    assert event.kind == "scheduled_event"
    assert event.ticketLinks == {}
    assert event.imageUrl.startswith("https://")

  def test_negative_price_rejected(self, make_event):
    with pytest.raises(ValidationError):
      make_event(price=-1)

  def test_unknown_category_rejected(self, make_event):
    with pytest.raises(ValidationError):
      make_event(categories=["karaoke"])

  @pytest.mark.parametrize("start_time", ["7pm", "24:00", "9:30", "19:60", ""])
  def test_start_time_must_be_24h_clock(self, make_event, start_time):
    with pytest.raises(ValidationError):
      make_event(start_time=start_time)

  def test_midnight_and_late_evening_are_valid(self, make_event):
    assert make_event(start_time="00:00").startTime == "00:00"
    assert make_event(start_time="23:59").startTime == "23:59"

  def test_age_requirement_is_closed_set(self, make_event):
    with pytest.raises(ValidationError):
      make_event(ageRequirement="16")

  def test_events_are_immutable(self, make_event):
    event = make_event()
    with pytest.raises(ValidationError):
      event.price = 500

  def test_vocabulary_has_nine_tags(self):
    assert CATEGORY_VOCABULARY == {
      "music", "food", "fastfood", "restaurant", "drinks",
      "dancing", "entertainment", "sports", "art",
    }


class TestVenueListing:
  """A venue listing is an always-open venue rather than a scheduled happening."""

  def test_valid_listing(self, make_event):
    event = make_event(
      name="The Tipsy Owl",
      venue="The Tipsy Owl",
      kind="venue_listing",
      categories=["drinks", "music"],
    )
    assert event.is_venue_listing

  def test_listing_name_must_match_venue(self, make_event):
    with pytest.raises(ValidationError):
      make_event(name="Friday Night Party", venue="The Tipsy Owl", kind="venue_listing", categories=["drinks"])

  def test_listing_needs_a_venue_category(self, make_event):
    with pytest.raises(ValidationError):
      make_event(name="SFMOMA", venue="SFMOMA", kind="venue_listing", categories=["art"])

  def test_listing_cannot_carry_marketplace_links(self, make_event):
    with pytest.raises(ValidationError):
      make_event(
        name="Nopa",
        venue="Nopa",
        kind="venue_listing",
        categories=["restaurant"],
        ticketLinks={"ticketmaster": "https://ticketmaster.com/venue/nopa"},
      )

  def test_listing_may_link_its_website(self, make_event):
    event = make_event(
      name="Nopa",
      venue="Nopa",
      kind="venue_listing",
      categories=["restaurant", "drinks"],
      ticketLinks={"website": "https://www.nopa.com"},
    )
    assert event.ticketLinks == {"website": "https://www.nopa.com"}

  def test_scheduled_event_named_after_venue_is_not_a_listing(self, make_event):
    event = make_event(name="Test Venue", venue="Test Venue", categories=["art"])
    assert not event.is_venue_listing


class TestPayloads:
  def test_create_requires_host_and_place(self):
    with pytest.raises(ValidationError):
      EventCreate(name="Open Mic", venue="Cafe", startTime="20:00")

  def test_resolved_location_coordinates(self):
    assert ResolvedLocation(text="Boise", city="Boise").has_coordinates is False
    assert ResolvedLocation(text="Boise", city="Boise", lat=43.6, lng=-116.2).has_coordinates is True
