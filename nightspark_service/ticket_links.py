"""Fabricated marketplace links for venues that have no real ticketing URL."""

import random
import re
from typing import Dict, Optional, Sequence

MAJOR_VENUE_WORDS = ("Garden", "Arena", "Center", "Bowl", "Theater", "Theatre", "Stadium")
CONCERT_VENUES = ("House of Blues", "Blue Note", "Whisky", "Troubadour", "Webster Hall")
THEATER_VENUES = ("Lincoln Center", "Broadway", "Playhouse", "Dr. Phillips")

SEATGEEK_CHANCE_MAJOR = 0.5
STUBHUB_CHANCE_CONCERT = 0.3
STUBHUB_CHANCE_EVENT = 0.3
SEATGEEK_CHANCE_EVENT = 0.2


def slugify(name: str) -> str:
  """Lowercase, spaces to hyphens, everything else non-alphanumeric dropped."""
  slug = re.sub(r"\s+", "-", (name or "").strip().lower())
  slug = re.sub(r"[^a-z0-9-]", "", slug)
  return re.sub(r"-{2,}", "-", slug).strip("-")


def _venue_rng(venue: str) -> random.Random:
  return random.Random(f"links:{venue}")


def venue_tier(venue: str, categories: Sequence[str] = (), event_type: Optional[str] = None) -> Optional[str]:
  """Which kind of ticketed venue this looks like: "major", "concert", "theater" or None.

  Generated events pass their ``event_type`` and no categories; sourced
  venues are judged by their categories.
  """
  if any(word in venue for word in MAJOR_VENUE_WORDS):
    return "major"
  if any(name in venue for name in CONCERT_VENUES) or "music" in categories or event_type == "concert":
    return "concert"
  if any(name in venue for name in THEATER_VENUES) or "art" in categories or event_type == "theater":
    return "theater"
  return None


def synthesize_ticket_links(
  venue: str,
  categories: Sequence[str] = (),
  kind: str = "scheduled_event",
  rng: Optional[random.Random] = None,
  event_type: Optional[str] = None,
) -> Dict[str, str]:
  slug = slugify(venue)
  if not slug:
    return {}
  if kind == "venue_listing":
    # Walk-in venues never sell tickets; restaurants just point at their site.
    if "restaurant" in categories or "fastfood" in categories:
      return {"website": f"https://www.{slug}.com"}
    return {}

  rng = rng or _venue_rng(venue)
  tier = venue_tier(venue, categories, event_type)
  links: Dict[str, str] = {}
  if tier == "major":
    links["ticketmaster"] = f"https://ticketmaster.com/venue/{slug}"
    links["stubhub"] = f"https://stubhub.com/venue/{slug}"
    if rng.random() < SEATGEEK_CHANCE_MAJOR:
      links["seatgeek"] = f"https://seatgeek.com/venues/{slug}"
  elif tier == "concert":
    links["ticketmaster"] = f"https://ticketmaster.com/venue/{slug}"
    if rng.random() < STUBHUB_CHANCE_CONCERT:
      links["stubhub"] = f"https://stubhub.com/venue/{slug}"
  elif tier == "theater":
    links["ticketmaster"] = f"https://ticketmaster.com/venue/{slug}"
  return links


def event_resale_links(event_name: str, url: Optional[str], rng: random.Random) -> Dict[str, str]:
  """Ticketmaster's own link plus occasional resale marketplaces for the same event."""
  links: Dict[str, str] = {}
  if url:
    links["ticketmaster"] = url
  slug = slugify(event_name)
  if not slug:
    return links
  if rng.random() < STUBHUB_CHANCE_EVENT:
    links["stubhub"] = f"https://stubhub.com/event/{slug}-tickets"
  if rng.random() < SEATGEEK_CHANCE_EVENT:
    links["seatgeek"] = f"https://seatgeek.com/event/{slug}-tickets"
  return links
