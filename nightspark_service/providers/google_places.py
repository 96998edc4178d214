import logging
from typing import List, Optional

import httpx

from nightspark_service.models import Event, ResolvedLocation
from nightspark_service.normalizer import normalize_place
from nightspark_service.providers.base import EventSource

logger = logging.getLogger("nightspark_service")

VENUE_TYPES = [
  "night_club",
  "bar",
  "restaurant",
  "meal_takeaway",
  "movie_theater",
  "bowling_alley",
  "amusement_park",
  "museum",
  "art_gallery",
  "performing_arts_theater",
  "stadium",
]
FIELD_MASK = ",".join(
  [
    "places.id",
    "places.displayName",
    "places.formattedAddress",
    "places.location",
    "places.rating",
    "places.priceLevel",
    "places.photos",
    "places.types",
    "places.businessStatus",
  ]
)
MAX_VENUES = 15


class GooglePlacesSource(EventSource):
  """Nearby nightlife venues from the Places API (New), listed as tonight's options."""

  name = "google_places"
  tier = "venues"

  def __init__(
    self,
    api_key: str,
    radius: float = 10000.0,
    transport: Optional[httpx.AsyncBaseTransport] = None,
  ) -> None:
    super().__init__(transport)
    self.api_key = api_key
    self.radius = radius
    self.base_url = "https://places.googleapis.com/v1/places:searchNearby"

  def build_body(self, location: ResolvedLocation) -> dict:
    return {
      "includedTypes": VENUE_TYPES,
      "maxResultCount": 20,
      "locationRestriction": {
        "circle": {
          "center": {"latitude": location.lat, "longitude": location.lng},
          "radius": self.radius,
        }
      },
    }

  async def fetch_raw(self, location: ResolvedLocation) -> List[dict]:
    if not location.has_coordinates:
      logger.info("Google Places skipped: no coordinates for %s", location.text)
      return []
    headers = {
      "Content-Type": "application/json",
      "X-Goog-Api-Key": self.api_key,
      "X-Goog-FieldMask": FIELD_MASK,
    }
    async with self._client(headers=headers) as client:
      data = await self._request(client, "POST", self.base_url, json=self.build_body(location))
    if not data:
      return []
    places = [place for place in data.get("places") or [] if place.get("businessStatus", "OPERATIONAL") == "OPERATIONAL"]
    return places[:MAX_VENUES]

  def normalize(self, raw: dict, location: ResolvedLocation) -> Optional[Event]:
    return normalize_place(raw, location, self.api_key)
