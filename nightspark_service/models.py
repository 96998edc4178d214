from typing import Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator

Category = Literal[
  "music",
  "food",
  "fastfood",
  "restaurant",
  "drinks",
  "dancing",
  "entertainment",
  "sports",
  "art",
]
AgeRequirement = Literal["all", "18", "21"]
EventKind = Literal["scheduled_event", "venue_listing"]

CATEGORY_VOCABULARY = frozenset(Category.__args__)
# A venue listing must carry at least one of these.
VENUE_LISTING_CATEGORIES = frozenset({"food", "fastfood", "restaurant", "drinks", "dancing"})
MARKETPLACES = ("ticketmaster", "stubhub", "seatgeek")

CLOCK_PATTERN = r"^([01]\d|2[0-3]):[0-5]\d$"
DEFAULT_IMAGE_URL = (
  "https://images.unsplash.com/photo-1493225457124-a3eb161ffa5f"
  "?ixlib=rb-4.0.3&auto=format&fit=crop&w=400&h=240"
)


class Event(BaseModel):
  """Canonical event record shared by every source, the storage layer and the client.

  ``kind`` tells a real scheduled happening apart from an always-open venue
  (bar, restaurant) listed so the night can be planned around it.
  """

  model_config = ConfigDict(frozen=True)

  id: str
  name: str = Field(..., min_length=1)
  description: Optional[str] = None
  venue: str = Field(..., min_length=1)
  address: str = ""
  city: str
  state: str = ""
  startTime: str = Field(..., pattern=CLOCK_PATTERN)
  endTime: Optional[str] = Field(None, pattern=CLOCK_PATTERN)
  price: int = Field(0, ge=0)
  ageRequirement: AgeRequirement = "all"
  dressCode: Optional[str] = None
  categories: List[Category] = []
  kind: EventKind = "scheduled_event"
  eventType: Literal["venue", "personal"] = "venue"
  privacy: Literal["public", "friends", "invite"] = "public"
  hostId: Optional[str] = None
  source: Optional[str] = None
  ticketLinks: Dict[str, str] = {}
  imageUrl: str = DEFAULT_IMAGE_URL
  currentAttendees: Optional[int] = Field(None, ge=0)
  maxCapacity: Optional[int] = Field(None, ge=0)
  rating: Optional[float] = None

  @model_validator(mode="after")
  def _check_venue_listing(self) -> "Event":
    if self.kind != "venue_listing":
      return self
    if self.name != self.venue:
      raise ValueError("a venue listing must be named after its venue")
    if not VENUE_LISTING_CATEGORIES.intersection(self.categories):
      raise ValueError("a venue listing needs a food, drinks or dancing category")
    marketplaces = [key for key in self.ticketLinks if key in MARKETPLACES]
    if marketplaces:
      raise ValueError(f"a venue listing cannot carry marketplace links: {marketplaces}")
    return self

  @property
  def is_venue_listing(self) -> bool:
    return self.kind == "venue_listing"


class EventCreate(BaseModel):
  """Payload accepted by POST /api/events."""

  name: str = Field(..., min_length=1)
  description: Optional[str] = None
  venue: str = Field(..., min_length=1)
  address: str = ""
  city: str = Field(..., min_length=1)
  state: str = Field(..., min_length=1)
  startTime: str = Field(..., pattern=CLOCK_PATTERN)
  endTime: Optional[str] = Field(None, pattern=CLOCK_PATTERN)
  price: int = Field(0, ge=0)
  ageRequirement: AgeRequirement = "all"
  dressCode: Optional[str] = None
  categories: List[Category] = []
  eventType: Literal["venue", "personal"] = "venue"
  privacy: Literal["public", "friends", "invite"] = "public"
  hostId: str = Field(..., min_length=1)
  maxCapacity: Optional[int] = Field(None, ge=0)
  imageUrl: Optional[str] = None
  ticketLinks: Dict[str, str] = {}


class EventUpdate(BaseModel):
  """Partial payload accepted by PUT /api/events/{id}."""

  name: Optional[str] = Field(None, min_length=1)
  description: Optional[str] = None
  venue: Optional[str] = Field(None, min_length=1)
  address: Optional[str] = None
  city: Optional[str] = None
  state: Optional[str] = None
  startTime: Optional[str] = Field(None, pattern=CLOCK_PATTERN)
  endTime: Optional[str] = Field(None, pattern=CLOCK_PATTERN)
  price: Optional[int] = Field(None, ge=0)
  ageRequirement: Optional[AgeRequirement] = None
  dressCode: Optional[str] = None
  categories: Optional[List[Category]] = None
  eventType: Optional[Literal["venue", "personal"]] = None
  privacy: Optional[Literal["public", "friends", "invite"]] = None
  maxCapacity: Optional[int] = Field(None, ge=0)
  imageUrl: Optional[str] = None
  ticketLinks: Optional[Dict[str, str]] = None


class EventFilters(BaseModel):
  """Facets applied after aggregation or at the storage layer. Prices are in dollars."""

  city: Optional[str] = None
  state: Optional[str] = None
  categories: List[str] = []
  ageRequirement: Optional[AgeRequirement] = None
  maxPrice: Optional[float] = None
  minPrice: Optional[float] = None
  eventType: Optional[str] = None


class FeaturedEventsResponse(BaseModel):
  events: List[Event] = []
  hasMore: bool = False


class ResolvedLocation(BaseModel):
  """Search location split into its parts, with coordinates when geocoding worked."""

  text: str
  city: str
  state: str = ""
  lat: Optional[float] = None
  lng: Optional[float] = None

  @property
  def has_coordinates(self) -> bool:
    return self.lat is not None and self.lng is not None


class NightPlan(BaseModel):
  id: str
  userId: str
  eventIds: List[str] = []
  totalBudget: int = Field(0, ge=0)
  optimizedRoute: List[str] = []


class NightPlanCreate(BaseModel):
  userId: str = Field(..., min_length=1)
  eventIds: List[str] = []
  totalBudget: int = Field(0, ge=0)
  optimizedRoute: List[str] = []


class NightPlanUpdate(BaseModel):
  eventIds: Optional[List[str]] = None
  totalBudget: Optional[int] = Field(None, ge=0)
  optimizedRoute: Optional[List[str]] = None
