import asyncio
import logging
import os
from typing import Iterable, List, Optional, Sequence

from nightspark_service.location import resolve_location
from nightspark_service.models import Event
from nightspark_service.providers import EnhancedVenueGenerator, EventSource, build_providers

logger = logging.getLogger("nightspark_service")

DEFAULT_TIMEOUT = 15.0
CASCADE_TIERS = ("ticketing", "venues")


def sort_by_start_time(events: Iterable[Event]) -> List[Event]:
  # "HH:MM" is zero padded, so string order is time order.
  return sorted(events, key=lambda event: event.startTime)


class EventAggregator:
  """Runs a set of sources together and merges what they return.

  Sources run concurrently, each bounded by ``timeout``. A source that raises
  or times out is logged and contributes nothing. Results are concatenated in
  registration order and sorted by start time; no cross-source de-duplication.
  """

  def __init__(self, providers: Sequence[EventSource] = (), timeout: float = DEFAULT_TIMEOUT) -> None:
    self.providers: List[EventSource] = list(providers)
    self.timeout = timeout

  def add_provider(self, provider: EventSource) -> None:
    self.providers.append(provider)

  async def search_all_events(
    self,
    location_text: str,
    latitude: Optional[float] = None,
    longitude: Optional[float] = None,
  ) -> List[Event]:
    if not self.providers:
      return []
    tasks = [
      asyncio.wait_for(provider.search_events(location_text, latitude, longitude), timeout=self.timeout)
      for provider in self.providers
    ]
    gathered = await asyncio.gather(*tasks, return_exceptions=True)

    results: List[Event] = []
    for provider, outcome in zip(self.providers, gathered):
      if isinstance(outcome, asyncio.TimeoutError):
        logger.warning("Source %s timed out after %ss", _provider_name(provider), self.timeout)
        continue
      if isinstance(outcome, Exception):
        logger.warning("Source %s failed: %s", _provider_name(provider), outcome)
        continue
      results.extend(outcome)
    return sort_by_start_time(results)


def _provider_name(provider) -> str:
  return getattr(provider, "name", "") or provider.__class__.__name__


async def discover_events(
  location_text: str,
  providers: Optional[Sequence[EventSource]] = None,
  google_api_key: Optional[str] = None,
  timeout: float = DEFAULT_TIMEOUT,
) -> List[Event]:
  """Events for a location through the fallback cascade.

  Ticketing sources are tried first, then venue sources, then generated
  venues. Each step runs only when every earlier step came back empty, and an
  ungeocodable location goes straight to generated venues.
  """
  if providers is None:
    providers = build_providers()
  if google_api_key is None:
    google_api_key = os.getenv("GOOGLE_API_KEY")

  generator = EnhancedVenueGenerator()
  location = await resolve_location(location_text, google_api_key)
  if not location.has_coordinates:
    logger.info("Could not geocode %r; using generated venues", location_text)
    return sort_by_start_time(await generator.search_events(location_text))

  for tier in CASCADE_TIERS:
    tier_providers = [provider for provider in providers if getattr(provider, "tier", None) == tier]
    if not tier_providers:
      continue
    aggregator = EventAggregator(tier_providers, timeout=timeout)
    events = await aggregator.search_all_events(location_text, location.lat, location.lng)
    if events:
      return events
    logger.info("No %s events for %s; falling back", tier, location_text)

  return sort_by_start_time(await generator.search_events(location_text, location.lat, location.lng))
