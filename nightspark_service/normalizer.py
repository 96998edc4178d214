"""Turn source-shaped records into canonical Event objects.

Each ``normalize_*`` function takes one raw record and the search location and
returns an Event, or None when the record lacks a usable start time or venue.
Anything random is drawn from a generator seeded by the record's own id, so
normalizing the same record twice gives the same event apart from
``currentAttendees``.
"""

import random
from datetime import datetime
from typing import List, Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from nightspark_service import heuristics
from nightspark_service.models import Event, ResolvedLocation
from nightspark_service.ticket_links import event_resale_links, synthesize_ticket_links

DESCRIPTION_LIMIT = 150
EVENTBRITE_DESCRIPTION_LIMIT = 200
PLACES_MEDIA_URL = "https://places.googleapis.com/v1/{photo}/media?maxHeightPx=400&maxWidthPx=400&key={key}"


def _parse_iso(value: Optional[str]) -> Optional[datetime]:
  if not value or not isinstance(value, str):
    return None
  try:
    return datetime.fromisoformat(value.replace("Z", "+00:00"))
  except ValueError:
    return None


def clock(dt: datetime) -> str:
  return dt.strftime("%H:%M")


def to_local(dt: datetime, tz_name: Optional[str]) -> datetime:
  """Shift an aware datetime into the named zone; naive or unknown-zone values pass through."""
  if dt.tzinfo is None or not tz_name:
    return dt
  try:
    return dt.astimezone(ZoneInfo(tz_name))
  except (ZoneInfoNotFoundError, ValueError):
    return dt


def scheduled_title(name: Optional[str], venue_name: str) -> str:
  # A title equal to the venue name is reserved for venue listings.
  name = (name or "").strip()
  if not name or name == venue_name:
    return f"Event at {venue_name}"
  return name


def to_cents(amount) -> int:
  """Dollar amount to non-negative integer cents; unparseable amounts count as free."""
  try:
    cents = round(float(amount) * 100)
  except (TypeError, ValueError, OverflowError):
    return 0
  return max(0, int(cents))


def truncate(text: str, limit: int = DESCRIPTION_LIMIT) -> str:
  text = (text or "").strip()
  if len(text) <= limit:
    return text
  return text[:limit] + "..."


def _dollars(amount) -> str:
  return f"{float(amount):g}"


def _attendees() -> int:
  # No source reports real attendance; this is display filler.
  return random.randint(50, 250)


def _largest_image(images) -> Optional[str]:
  sized = [img for img in images or [] if img.get("url") and img.get("width") and img.get("height")]
  if not sized:
    return None
  return max(sized, key=lambda img: img["width"] * img["height"])["url"]


# ----------------------------------------------------------------------------
# Ticketmaster Discovery API
# ----------------------------------------------------------------------------

def _ticketmaster_start(dates: dict, venue: dict) -> Optional[datetime]:
  start = dates.get("start") or {}
  local_date = start.get("localDate")
  if local_date:
    local_time = start.get("localTime") or "19:00:00"
    return _parse_iso(f"{local_date}T{local_time}")
  start_utc = _parse_iso(start.get("dateTime"))
  if start_utc is None:
    return None
  return to_local(start_utc, dates.get("timezone") or venue.get("timezone"))


def ticketmaster_age(raw: dict, segment: str, genre: str) -> str:
  restrictions = raw.get("ageRestrictions") or {}
  if restrictions.get("legalAgeEnforced"):
    return "18"
  if restrictions.get("alcoholAgeEnforced"):
    return "21"
  return heuristics.infer_age(segment, genre)


def ticketmaster_image(raw: dict, segment: str) -> str:
  embedded = raw.get("_embedded") or {}
  attractions = embedded.get("attractions") or [{}]
  venues = embedded.get("venues") or [{}]
  for images in (raw.get("images"), attractions[0].get("images"), venues[0].get("images")):
    url = _largest_image(images)
    if url:
      return url
  return heuristics.segment_image(segment)


def ticketmaster_description(raw: dict, venue_name: str, segment: str, genre: str) -> str:
  description = segment or "Event"
  if genre:
    description += f" - {genre}"
  description += f" at {venue_name}"

  note = raw.get("info") or raw.get("pleaseNote")
  if note:
    description += f". {truncate(note)}"

  price_range = (raw.get("priceRanges") or [{}])[0]
  low = price_range.get("min")
  high = price_range.get("max")
  if low is not None and high is not None:
    description += f" Tickets from ${_dollars(low)} - ${_dollars(high)}."
  elif low is not None:
    description += f" Tickets from ${_dollars(low)}."
  return description


def normalize_ticketmaster_event(raw: dict, location: ResolvedLocation) -> Optional[Event]:
  embedded = raw.get("_embedded") or {}
  venue = (embedded.get("venues") or [{}])[0]
  venue_name = (venue.get("name") or "").strip()
  if not venue_name:
    return None
  start = _ticketmaster_start(raw.get("dates") or {}, venue)
  if start is None:
    return None

  classification = (raw.get("classifications") or [{}])[0]
  segment = (classification.get("segment") or {}).get("name") or ""
  genre = (classification.get("genre") or {}).get("name") or ""

  name = raw.get("name")
  attraction = (embedded.get("attractions") or [{}])[0]
  if attraction.get("name") and segment.lower() == "music":
    name = attraction["name"]
  name = scheduled_title(name, venue_name)

  price_range = (raw.get("priceRanges") or [{}])[0]
  event_id = str(raw["id"])
  return Event(
    id=f"tm-{event_id}",
    name=name,
    description=ticketmaster_description(raw, venue_name, segment, genre),
    venue=venue_name,
    address=(venue.get("address") or {}).get("line1") or "",
    city=(venue.get("city") or {}).get("name") or location.city,
    state=(venue.get("state") or {}).get("stateCode") or location.state,
    startTime=clock(start),
    price=to_cents(price_range.get("min")),
    ageRequirement=ticketmaster_age(raw, segment, genre),
    categories=heuristics.segment_categories(segment, genre),
    hostId="ticketmaster",
    source="ticketmaster",
    ticketLinks=event_resale_links(name, raw.get("url"), random.Random(f"tm:{event_id}")),
    imageUrl=ticketmaster_image(raw, segment),
    currentAttendees=_attendees(),
  )


# ----------------------------------------------------------------------------
# Eventbrite API
# ----------------------------------------------------------------------------

def _eventbrite_price(raw: dict) -> int:
  if raw.get("is_free"):
    return 0
  minimum = ((raw.get("ticket_availability") or {}).get("minimum_ticket_price")) or {}
  try:
    # Eventbrite already reports minor units in ``value``.
    return max(0, int(minimum.get("value") or 0))
  except (TypeError, ValueError, OverflowError):
    return 0


def normalize_eventbrite_event(raw: dict, location: ResolvedLocation) -> Optional[Event]:
  venue = raw.get("venue") or {}
  venue_name = (venue.get("name") or "").strip()
  if not venue_name:
    return None
  start = _parse_iso((raw.get("start") or {}).get("local"))
  if start is None:
    return None
  end = _parse_iso((raw.get("end") or {}).get("local"))

  category = raw.get("category") or {}
  subcategory = raw.get("subcategory") or {}
  category_names = [category.get("name"), category.get("short_name"), subcategory.get("name")]
  categories = heuristics.eventbrite_categories(category_names)

  text = (raw.get("description") or {}).get("text") or raw.get("summary")
  description = truncate(text, EVENTBRITE_DESCRIPTION_LIMIT) if text else f"Event at {venue_name}"
  address = venue.get("address") or {}
  capacity = raw.get("capacity")
  return Event(
    id=f"eb-{raw['id']}",
    name=scheduled_title((raw.get("name") or {}).get("text"), venue_name),
    description=description,
    venue=venue_name,
    address=address.get("address_1") or address.get("localized_address_display") or "",
    city=address.get("city") or location.city,
    state=address.get("region") or location.state,
    startTime=clock(start),
    endTime=clock(end) if end else None,
    price=_eventbrite_price(raw),
    ageRequirement=heuristics.infer_age(category.get("name") or "", subcategory.get("name") or ""),
    categories=categories,
    hostId="eventbrite",
    source="eventbrite",
    ticketLinks={"eventbrite": raw["url"]} if raw.get("url") else {},
    imageUrl=(raw.get("logo") or {}).get("url") or heuristics.segment_image(categories[0]),
    currentAttendees=_attendees(),
    maxCapacity=capacity if isinstance(capacity, int) and capacity >= 0 else None,
  )


# ----------------------------------------------------------------------------
# Google Places (New)
# ----------------------------------------------------------------------------

def place_image(raw: dict, profile: str, venue_name: str, api_key: Optional[str]) -> str:
  photos = raw.get("photos") or []
  if photos and photos[0].get("name") and api_key:
    return PLACES_MEDIA_URL.format(photo=photos[0]["name"], key=api_key)
  return heuristics.PROFILE_IMAGES.get(profile, heuristics.venue_image(venue_name))


def normalize_place(raw: dict, location: ResolvedLocation, api_key: Optional[str] = None) -> Optional[Event]:
  """Venue from a nearby search, listed as a walk-in venue or as tonight's happening there."""
  venue_name = ((raw.get("displayName") or {}).get("text") or "").strip()
  if not venue_name:
    return None
  place_id = str(raw["id"])
  profile = heuristics.resolve_place_profile(raw.get("types") or [])
  settings = heuristics.PLACE_PROFILES[profile]
  categories = heuristics.place_categories(profile, venue_name)
  kind = "venue_listing" if settings.get("listing") else "scheduled_event"
  name = venue_name if kind == "venue_listing" else settings["title"].format(venue=venue_name)

  rng = random.Random(f"place:{place_id}")
  start_time = heuristics.evening_start_time(rng)
  price = heuristics.infer_venue_price(profile, heuristics.place_price_level(raw.get("priceLevel")), rng)
  address = raw.get("formattedAddress") or raw.get("shortFormattedAddress") or ""
  return Event(
    id=place_id,
    name=name,
    description=f"Join us for an amazing {', '.join(categories)} experience at {venue_name}. {address}".strip(),
    venue=venue_name,
    address=address,
    city=location.city,
    state=location.state,
    startTime=start_time,
    price=price,
    ageRequirement=settings["age"],
    categories=categories,
    kind=kind,
    hostId="google_places",
    source="google_places",
    ticketLinks=synthesize_ticket_links(venue_name, categories, kind),
    imageUrl=place_image(raw, profile, venue_name, api_key),
    currentAttendees=_attendees(),
    maxCapacity=rng.randint(50, 250),
    rating=raw.get("rating"),
  )


# ----------------------------------------------------------------------------
# Generated venues
# ----------------------------------------------------------------------------

def generated_name(event_type: str, rng: random.Random) -> str:
  base = rng.choice(heuristics.GENERATED_EVENT_TYPES.get(event_type, ["Special Event"]))
  if event_type == "concert":
    return f"{rng.choice(heuristics.GENERATED_PERFORMERS)} - {base}"
  return base


def normalize_generated(raw: dict, location: ResolvedLocation) -> Optional[Event]:
  venue = raw["venue"]
  event_type = raw["eventType"]
  rng = random.Random(raw["seed"])
  categories: List[str] = list(heuristics.GENERATED_CATEGORIES.get(event_type, ["entertainment"]))
  description = heuristics.GENERATED_DESCRIPTIONS.get(
    event_type, "Join us for an amazing experience at {venue} in {location}."
  ).format(venue=venue, location=location.text)
  return Event(
    id=raw["id"],
    name=generated_name(event_type, rng),
    description=description,
    venue=venue,
    address=f"{rng.randint(1, 9999)} {rng.choice(heuristics.STREET_NAMES)}",
    city=location.city,
    state=location.state,
    startTime=heuristics.evening_start_time(rng),
    price=heuristics.generated_price(event_type, venue, rng),
    ageRequirement=heuristics.GENERATED_AGES.get(event_type, "all"),
    categories=categories,
    hostId="generated",
    source="generated",
    ticketLinks=synthesize_ticket_links(venue, kind="scheduled_event", event_type=event_type),
    imageUrl=heuristics.venue_image(venue),
    currentAttendees=rng.randint(20, 220),
    maxCapacity=heuristics.venue_capacity(venue, rng),
    rating=round(3.5 + rng.random() * 1.5, 1),
  )
