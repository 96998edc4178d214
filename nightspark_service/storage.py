import uuid
from typing import Dict, List, Optional

from nightspark_service.aggregator import sort_by_start_time
from nightspark_service.filters import filter_events
from nightspark_service.heuristics import unsplash
from nightspark_service.models import (
  DEFAULT_IMAGE_URL,
  Event,
  EventCreate,
  EventFilters,
  EventUpdate,
  NightPlan,
  NightPlanCreate,
  NightPlanUpdate,
)

SEED_EVENTS: List[dict] = [
  {
    "id": "1",
    "name": "Rooftop Jazz Night",
    "description": "Join us for an enchanting evening of smooth jazz under the stars with breathtaking city views.",
    "venue": "The Skyline Lounge",
    "address": "123 Downtown Street",
    "startTime": "19:00",
    "endTime": "23:00",
    "price": 2500,
    "ageRequirement": "21",
    "dressCode": "Smart casual",
    "categories": ["music", "drinks"],
    "maxCapacity": 150,
    "currentAttendees": 45,
    "imageUrl": unsplash("1566417713940-fe7c737a9ef2"),
    "ticketLinks": {
      "ticketmaster": "https://ticketmaster.com/event/1",
      "stubhub": "https://stubhub.com/event/1",
      "seatgeek": "https://seatgeek.com/event/1",
    },
  },
  {
    "id": "2",
    "name": "80s Dance Night",
    "description": "Dance the night away to the best hits from the 1980s with free entry!",
    "venue": "Electric Avenue",
    "address": "456 Club Row",
    "startTime": "21:00",
    "endTime": "02:00",
    "price": 0,
    "ageRequirement": "18",
    "categories": ["dancing", "music"],
    "maxCapacity": 300,
    "currentAttendees": 120,
    "imageUrl": unsplash("1571019613454-1cb2f99b2d8b"),
  },
  {
    "id": "3",
    "name": "Comedy Open Mic",
    "description": "Laugh until your sides hurt at our weekly comedy open mic night.",
    "venue": "Laugh Track Lounge",
    "address": "789 Comedy Lane",
    "startTime": "20:00",
    "endTime": "23:30",
    "price": 1500,
    "ageRequirement": "all",
    "categories": ["entertainment", "food"],
    "maxCapacity": 100,
    "currentAttendees": 35,
    "imageUrl": unsplash("1590012314607-cda9d9b699ae"),
  },
  {
    "id": "4",
    "name": "Indie Rock Showcase",
    "description": "Discover the next big indie rock acts at our intimate venue.",
    "venue": "The Underground",
    "address": "321 Music Street",
    "startTime": "22:00",
    "endTime": "01:00",
    "price": 3500,
    "ageRequirement": "21",
    "categories": ["music"],
    "maxCapacity": 200,
    "currentAttendees": 180,
    "imageUrl": unsplash("1493225457124-a3eb161ffa5f"),
    "ticketLinks": {
      "ticketmaster": "https://ticketmaster.com/event/4",
      "stubhub": "https://stubhub.com/event/4",
    },
  },
  {
    "id": "5",
    "name": "Wine Tasting Night",
    "description": "Sample exquisite wines paired with artisanal cheeses and charcuterie.",
    "venue": "Vintage Cellar",
    "address": "555 Wine Way",
    "startTime": "18:30",
    "endTime": "21:30",
    "price": 4500,
    "ageRequirement": "21",
    "categories": ["food", "drinks"],
    "maxCapacity": 50,
    "currentAttendees": 42,
    "imageUrl": unsplash("1517248135467-4c7edcad34c4"),
  },
  {
    "id": "6",
    "name": "Weekly Trivia Night",
    "description": "Test your knowledge and win prizes at our fun trivia competition.",
    "venue": "The Scholar's Pub",
    "address": "888 Brain Street",
    "startTime": "19:30",
    "endTime": "22:00",
    "price": 0,
    "ageRequirement": "all",
    "categories": ["entertainment", "sports"],
    "maxCapacity": 80,
    "currentAttendees": 25,
    "imageUrl": unsplash("1541888946425-d81bb19240f5"),
  },
]


class MemStorage:
  """Process-memory store for hand-seeded events and users' night plans.

  Handlers receive an instance explicitly (``app.state.storage``) rather than
  importing a module-level singleton.
  """

  def __init__(self, seed: bool = True) -> None:
    self.events: Dict[str, Event] = {}
    self.night_plans: Dict[str, NightPlan] = {}
    if seed:
      self.seed_data()

  def seed_data(self) -> None:
    for index, data in enumerate(SEED_EVENTS, start=1):
      event = Event(
        city="San Francisco",
        state="CA",
        hostId=f"venue{index}",
        source="storage",
        **data,
      )
      self.events[event.id] = event

  # ------------------------------------------------------------------
  # Events
  # ------------------------------------------------------------------

  def get_event(self, event_id: str) -> Optional[Event]:
    return self.events.get(event_id)

  def get_events(self, filters: Optional[EventFilters] = None) -> List[Event]:
    events = list(self.events.values())
    if filters is not None:
      events = filter_events(events, filters)
    return sort_by_start_time(events)

  def create_event(self, payload: EventCreate) -> Event:
    data = payload.model_dump()
    data["imageUrl"] = data.get("imageUrl") or DEFAULT_IMAGE_URL
    event = Event(id=str(uuid.uuid4()), currentAttendees=0, source="storage", **data)
    self.events[event.id] = event
    return event

  def update_event(self, event_id: str, payload: EventUpdate) -> Optional[Event]:
    event = self.events.get(event_id)
    if event is None:
      return None
    # Rebuild rather than copy so the merged record is validated again.
    updated = Event(**{**event.model_dump(), **payload.model_dump(exclude_unset=True, exclude_none=True)})
    self.events[event_id] = updated
    return updated

  def delete_event(self, event_id: str) -> bool:
    return self.events.pop(event_id, None) is not None

  # ------------------------------------------------------------------
  # Night plans
  # ------------------------------------------------------------------

  def get_night_plan(self, user_id: str) -> Optional[NightPlan]:
    for plan in self.night_plans.values():
      if plan.userId == user_id:
        return plan
    return None

  def create_night_plan(self, payload: NightPlanCreate) -> NightPlan:
    plan = NightPlan(id=str(uuid.uuid4()), **payload.model_dump())
    self.night_plans[plan.id] = plan
    return plan

  def update_night_plan(self, user_id: str, payload: NightPlanUpdate) -> Optional[NightPlan]:
    existing = self.get_night_plan(user_id)
    if existing is None:
      return None
    updated = NightPlan(**{**existing.model_dump(), **payload.model_dump(exclude_unset=True, exclude_none=True)})
    self.night_plans[existing.id] = updated
    return updated
