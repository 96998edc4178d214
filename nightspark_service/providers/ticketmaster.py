import logging
from typing import List, Optional, Sequence

import httpx

from nightspark_service.models import Event, ResolvedLocation
from nightspark_service.normalizer import normalize_ticketmaster_event
from nightspark_service.providers.base import EventSource

logger = logging.getLogger("nightspark_service")

DEFAULT_CLASSIFICATIONS = ["music", "sports", "arts", "theater", "film", "miscellaneous"]

# Our category -> Ticketmaster classification names.
CATEGORY_CLASSIFICATIONS = {
  "music": ["Music"],
  "dancing": ["Music"],
  "sports": ["Sports"],
  "art": ["Arts & Theatre"],
  "entertainment": ["Film", "Miscellaneous"],
  "drinks": ["Miscellaneous"],
  "restaurant": ["Miscellaneous"],
  "fastfood": ["Miscellaneous"],
  "food": ["Miscellaneous"],
}


def classifications_for(categories: Sequence[str]) -> List[str]:
  names: List[str] = []
  for category in categories:
    for name in CATEGORY_CLASSIFICATIONS.get(category.lower(), []):
      if name not in names:
        names.append(name)
  return names


class TicketmasterSource(EventSource):
  """Ticketmaster Discovery API v2, searched by coordinates."""

  name = "ticketmaster"
  tier = "ticketing"

  def __init__(
    self,
    api_key: str,
    categories: Sequence[str] = (),
    price_min: Optional[float] = None,
    price_max: Optional[float] = None,
    radius: int = 25,
    size: int = 50,
    transport: Optional[httpx.AsyncBaseTransport] = None,
  ) -> None:
    super().__init__(transport)
    self.api_key = api_key
    self.categories = list(categories)
    self.price_min = price_min
    self.price_max = price_max
    self.radius = radius
    self.size = size
    self.base_url = "https://app.ticketmaster.com/discovery/v2/events.json"

  def build_params(self, location: ResolvedLocation) -> dict:
    params = {
      "apikey": self.api_key,
      "latlong": f"{location.lat},{location.lng}",
      "radius": self.radius,
      "unit": "miles",
      "size": self.size,
      "sort": "date,asc",
      "classificationName": ",".join(classifications_for(self.categories) or DEFAULT_CLASSIFICATIONS),
    }
    if self.price_min is not None:
      params["priceMin"] = self.price_min
    if self.price_max is not None:
      params["priceMax"] = self.price_max
    return params

  async def fetch_raw(self, location: ResolvedLocation) -> List[dict]:
    if not location.has_coordinates:
      logger.info("Ticketmaster skipped: no coordinates for %s", location.text)
      return []
    async with self._client() as client:
      data = await self._request(client, "GET", self.base_url, params=self.build_params(location))
    if not data:
      return []
    events = (data.get("_embedded") or {}).get("events") or []
    if not events:
      logger.info("No events found in Ticketmaster response for %s", location.text)
    return events

  def normalize(self, raw: dict, location: ResolvedLocation) -> Optional[Event]:
    return normalize_ticketmaster_event(raw, location)
