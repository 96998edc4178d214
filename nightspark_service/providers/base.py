import asyncio
import logging
from abc import ABC, abstractmethod
from typing import List, Optional

import httpx

from nightspark_service.location import make_location
from nightspark_service.models import Event, ResolvedLocation

logger = logging.getLogger("nightspark_service")

# Statuses that will not improve on a retry.
HARD_FAILURES = (400, 401, 403, 404)


class EventSource(ABC):
  """Adapter for one external event/venue source.

  Subclasses fetch raw records in the source's own shape and normalize them one
  at a time. ``search_events`` never raises: a failing source contributes no
  events and a malformed record is dropped.
  """

  #: Short identifier used in logs and as ``Event.source``.
  name: str = ""

  #: "ticketing" sources are tried before "venues" sources in the discovery cascade.
  tier: str = "ticketing"

  timeout: float = 12.0

  def __init__(self, transport: Optional[httpx.AsyncBaseTransport] = None) -> None:
    self.transport = transport

  def _client(self, **kwargs) -> httpx.AsyncClient:
    return httpx.AsyncClient(timeout=self.timeout, transport=self.transport, **kwargs)

  async def _request(self, client: httpx.AsyncClient, method: str, url: str, **kwargs) -> Optional[dict]:
    """Send a request with one retry on transport errors; None on a non-200 reply."""
    for attempt in range(2):
      try:
        resp = await client.request(method, url, **kwargs)
      except httpx.RequestError:
        if attempt == 1:
          raise
        await asyncio.sleep(0.25)
        continue
      if resp.status_code != 200:
        logger.warning(
          "%s request failed (status=%s, attempt=%s, body=%s)",
          self.name,
          resp.status_code,
          attempt + 1,
          resp.text[:200],
        )
        if resp.status_code in HARD_FAILURES:
          return None
        continue
      return resp.json()
    return None

  @abstractmethod
  async def fetch_raw(self, location: ResolvedLocation) -> List[dict]:
    """Return the source's raw records for a location."""
    raise NotImplementedError

  @abstractmethod
  def normalize(self, raw: dict, location: ResolvedLocation) -> Optional[Event]:
    raise NotImplementedError

  async def search_events(
    self,
    location_text: str,
    latitude: Optional[float] = None,
    longitude: Optional[float] = None,
  ) -> List[Event]:
    location = make_location(location_text, latitude, longitude)
    try:
      records = await self.fetch_raw(location)
    except Exception as exc:
      logger.warning("%s search failed for %s: %s", self.name, location_text, exc)
      return []

    events: List[Event] = []
    for raw in records:
      try:
        event = self.normalize(raw, location)
      except Exception as exc:
        logger.debug("Dropping malformed %s record: %s", self.name, exc)
        continue
      if event is not None:
        events.append(event)
    logger.info("%s returned %s events for %s", self.name, len(events), location_text)
    return events
