import logging
import os
from typing import List, Optional, Sequence

from nightspark_service.providers.base import EventSource
from nightspark_service.providers.eventbrite import EventbriteSource
from nightspark_service.providers.google_places import GooglePlacesSource
from nightspark_service.providers.synthetic import EnhancedVenueGenerator
from nightspark_service.providers.ticketmaster import TicketmasterSource

logger = logging.getLogger("nightspark_service")


def build_providers(
  categories: Sequence[str] = (),
  price_min: Optional[float] = None,
  price_max: Optional[float] = None,
) -> List[EventSource]:
  """Create the credentialed sources available in this environment.

  A source whose key is missing is left out entirely. The generated-venue
  fallback needs no key and is not part of this list.
  """
  providers: List[EventSource] = []
  ticketmaster_key = os.getenv("TICKETMASTER_API_KEY")
  eventbrite_key = os.getenv("EVENTBRITE_API_KEY")
  google_key = os.getenv("GOOGLE_API_KEY")

  if ticketmaster_key:
    providers.append(TicketmasterSource(ticketmaster_key, categories, price_min, price_max))
  else:
    logger.info("TICKETMASTER_API_KEY not set; Ticketmaster source disabled.")
  if eventbrite_key:
    providers.append(EventbriteSource(eventbrite_key))
  else:
    logger.info("EVENTBRITE_API_KEY not set; Eventbrite source disabled.")
  if google_key:
    providers.append(GooglePlacesSource(google_key))
  else:
    logger.info("GOOGLE_API_KEY not set; Google Places source disabled.")

  logger.info("Sources enabled: %s", [provider.name for provider in providers])
  return providers


__all__ = [
  "EventSource",
  "TicketmasterSource",
  "EventbriteSource",
  "GooglePlacesSource",
  "EnhancedVenueGenerator",
  "build_providers",
]
