import random
from typing import List, Optional

from nightspark_service import heuristics
from nightspark_service.models import Event, ResolvedLocation
from nightspark_service.normalizer import normalize_generated
from nightspark_service.providers.base import EventSource

MAX_GENERATED = 15


class EnhancedVenueGenerator(EventSource):
  """Offline source that invents tonight's events at well-known venues.

  Recognised cities use real venue names, anything else gets templated ones, so
  the result is never empty. Output is seeded by city and position and therefore
  stable for a given location.
  """

  name = "generated"
  tier = "fallback"

  async def fetch_raw(self, location: ResolvedLocation) -> List[dict]:
    city_key = location.city.strip().lower()
    id_prefix = "".join(city_key.split()) or "nearby"
    event_types = list(heuristics.GENERATED_EVENT_TYPES)
    records: List[dict] = []
    for index, venue in enumerate(heuristics.city_venues(location.city)[:MAX_GENERATED]):
      seed = f"{city_key}:{index}"
      records.append(
        {
          "id": f"{id_prefix}-real-{index}",
          "venue": venue,
          "eventType": random.Random(seed).choice(event_types),
          "seed": f"{seed}:details",
        }
      )
    return records

  def normalize(self, raw: dict, location: ResolvedLocation) -> Optional[Event]:
    return normalize_generated(raw, location)
