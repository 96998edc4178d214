import json
from typing import Iterable, List, Sequence, Tuple

from nightspark_service.heuristics import dedupe
from nightspark_service.models import Event, EventFilters


def filter_events(events: Iterable[Event], filters: EventFilters) -> List[Event]:
  """Apply facet filters. Price bounds are in dollars, event prices in cents."""
  city = (filters.city or "").lower()
  state = (filters.state or "").lower()
  wanted = {category.lower() for category in filters.categories}
  results: List[Event] = []
  for event in events:
    if city and city not in event.city.lower():
      continue
    if state and event.state.lower() != state:
      continue
    if wanted and not wanted.intersection(event.categories):
      continue
    if filters.ageRequirement and event.ageRequirement != filters.ageRequirement:
      continue
    if filters.maxPrice is not None and event.price > filters.maxPrice * 100:
      continue
    if filters.minPrice is not None and event.price < filters.minPrice * 100:
      continue
    if filters.eventType and event.eventType != filters.eventType:
      continue
    results.append(event)
  return results


def parse_interests(values: Sequence[str]) -> List[str]:
  """Accept a JSON array string, comma separated text or repeated values."""
  interests: List[str] = []
  for value in values:
    value = (value or "").strip()
    if not value:
      continue
    if value.startswith("["):
      try:
        decoded = json.loads(value)
      except ValueError:
        decoded = None
      if isinstance(decoded, list):
        interests.extend(str(item).strip().lower() for item in decoded)
        continue
    interests.extend(part.strip().lower() for part in value.split(","))
  return dedupe(interests)


def rank_featured(events: Iterable[Event], interests: Sequence[str]) -> List[Event]:
  """Events matching the most interests first, then by start time; non-matching events dropped."""
  wanted = set(interests)
  scored = []
  for event in events:
    overlap = len(wanted.intersection(event.categories))
    if overlap:
      scored.append((overlap, event))
  scored.sort(key=lambda item: (-item[0], item[1].startTime))
  return [event for _, event in scored]


def paginate(events: Sequence[Event], page: int, limit: int) -> Tuple[List[Event], bool]:
  start = (page - 1) * limit
  chunk = list(events[start:start + limit])
  return chunk, start + limit < len(events)
