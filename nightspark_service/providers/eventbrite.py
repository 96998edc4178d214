import logging
from typing import List, Optional

import httpx

from nightspark_service.models import Event, ResolvedLocation
from nightspark_service.normalizer import normalize_eventbrite_event
from nightspark_service.providers.base import EventSource

logger = logging.getLogger("nightspark_service")


class EventbriteSource(EventSource):
  name = "eventbrite"
  tier = "ticketing"

  def __init__(
    self,
    api_key: str,
    within: str = "25mi",
    transport: Optional[httpx.AsyncBaseTransport] = None,
  ) -> None:
    super().__init__(transport)
    self.api_key = api_key
    self.within = within
    self.base_url = "https://www.eventbriteapi.com/v3/events/search/"

  async def fetch_raw(self, location: ResolvedLocation) -> List[dict]:
    if not location.has_coordinates:
      logger.info("Eventbrite skipped: no coordinates for %s", location.text)
      return []
    params = {
      "location.latitude": location.lat,
      "location.longitude": location.lng,
      "location.within": self.within,
      "expand": "venue,category,subcategory,ticket_availability",
      "sort_by": "date",
    }
    headers = {"Authorization": f"Bearer {self.api_key}"}
    async with self._client(headers=headers) as client:
      data = await self._request(client, "GET", self.base_url, params=params)
    if not data:
      return []
    return data.get("events") or []

  def normalize(self, raw: dict, location: ResolvedLocation) -> Optional[Event]:
    return normalize_eventbrite_event(raw, location)
