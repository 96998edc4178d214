import logging
import os
from typing import List, Literal, Optional

from fastapi import Depends, FastAPI, Query, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, Response
from pydantic import ValidationError

from nightspark_service.aggregator import discover_events, sort_by_start_time
from nightspark_service.filters import filter_events, paginate, parse_interests, rank_featured
from nightspark_service.location import parse_location
from nightspark_service.models import (
  Event,
  EventCreate,
  EventFilters,
  EventUpdate,
  FeaturedEventsResponse,
  NightPlan,
  NightPlanCreate,
  NightPlanUpdate,
)
from nightspark_service.providers import build_providers
from nightspark_service.storage import MemStorage
from dotenv import load_dotenv

# Load .env file when running locally so source keys are picked up.
load_dotenv()

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger("nightspark_service")

app = FastAPI(
  title="NightSpark Event Service",
  version="0.1.0",
  description="Aggregates nightlife events and venues for building a night plan.",
)
app.state.storage = MemStorage()

app.add_middleware(
  CORSMiddleware,
  allow_origins=["*"],
  allow_credentials=True,
  allow_methods=["*"],
  allow_headers=["*"],
)


def get_storage(request: Request) -> MemStorage:
  return request.app.state.storage


def _message(status_code: int, message: str, **extra) -> JSONResponse:
  return JSONResponse(status_code=status_code, content={"message": message, **extra})


def _invalid_message(request: Request) -> str:
  if request.url.path.startswith("/api/night-plans"):
    return "Invalid night plan data"
  return "Invalid event data"


@app.exception_handler(RequestValidationError)
async def request_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
  return _message(400, _invalid_message(request), errors=jsonable_encoder(exc.errors()))


@app.exception_handler(ValidationError)
async def model_validation_error(request: Request, exc: ValidationError) -> JSONResponse:
  return _message(400, _invalid_message(request), errors=jsonable_encoder(exc.errors()))


@app.exception_handler(Exception)
async def unexpected_error(request: Request, exc: Exception) -> JSONResponse:
  logger.exception("Unhandled error on %s %s", request.method, request.url.path)
  return _message(500, "Internal server error")


async def _events_for(location: Optional[str], filters: EventFilters, storage: MemStorage) -> List[Event]:
  """Discovery cascade for a location, the seeded store otherwise."""
  if location and location.strip():
    providers = build_providers(filters.categories, filters.minPrice, filters.maxPrice)
    events = await discover_events(location, providers)
    return sort_by_start_time(filter_events(events, filters))
  return storage.get_events(filters)


@app.get("/health")
async def health() -> dict:
  return {"ok": True}


@app.get("/api/events", response_model=List[Event])
async def list_events(
  location: Optional[str] = None,
  city: Optional[str] = None,
  state: Optional[str] = None,
  categories: List[str] = Query(default=[]),
  ageRequirement: Optional[Literal["all", "18", "21"]] = None,
  maxPrice: Optional[float] = Query(None, ge=0),
  minPrice: Optional[float] = Query(None, ge=0),
  eventType: Optional[str] = None,
  storage: MemStorage = Depends(get_storage),
) -> List[Event]:
  filters = EventFilters(
    city=city,
    state=state,
    categories=categories,
    ageRequirement=ageRequirement,
    maxPrice=maxPrice,
    minPrice=minPrice,
    eventType=eventType,
  )
  return await _events_for(location, filters, storage)


@app.get("/api/events/featured", response_model=FeaturedEventsResponse)
async def featured_events(
  location: Optional[str] = None,
  interests: List[str] = Query(default=[]),
  page: int = Query(1, ge=1),
  limit: int = Query(6, ge=1, le=50),
  storage: MemStorage = Depends(get_storage),
) -> FeaturedEventsResponse:
  events = await _events_for(location, EventFilters(), storage)
  wanted = parse_interests(interests)
  if wanted:
    events = rank_featured(events, wanted)
  chunk, has_more = paginate(events, page, limit)
  return FeaturedEventsResponse(events=chunk, hasMore=has_more)


@app.get("/api/events/{event_id}", response_model=Event)
async def get_event(event_id: str, storage: MemStorage = Depends(get_storage)):
  event = storage.get_event(event_id)
  if event is None:
    return _message(404, "Event not found")
  return event


@app.post("/api/events", response_model=Event, status_code=201)
async def create_event(payload: EventCreate, storage: MemStorage = Depends(get_storage)) -> Event:
  return storage.create_event(payload)


@app.put("/api/events/{event_id}", response_model=Event)
async def update_event(event_id: str, payload: EventUpdate, storage: MemStorage = Depends(get_storage)):
  event = storage.update_event(event_id, payload)
  if event is None:
    return _message(404, "Event not found")
  return event


@app.delete("/api/events/{event_id}", status_code=204)
async def delete_event(event_id: str, storage: MemStorage = Depends(get_storage)):
  if not storage.delete_event(event_id):
    return _message(404, "Event not found")
  return Response(status_code=204)


@app.get("/api/night-plans/{user_id}", response_model=NightPlan)
async def get_night_plan(user_id: str, storage: MemStorage = Depends(get_storage)):
  plan = storage.get_night_plan(user_id)
  if plan is None:
    return _message(404, "Night plan not found")
  return plan


@app.post("/api/night-plans", response_model=NightPlan, status_code=201)
async def create_night_plan(payload: NightPlanCreate, storage: MemStorage = Depends(get_storage)) -> NightPlan:
  return storage.create_night_plan(payload)


@app.put("/api/night-plans/{user_id}", response_model=NightPlan)
async def update_night_plan(user_id: str, payload: NightPlanUpdate, storage: MemStorage = Depends(get_storage)):
  plan = storage.update_night_plan(user_id, payload)
  if plan is None:
    return _message(404, "Night plan not found")
  return plan


@app.get("/api/search", response_model=List[Event])
async def search(q: Optional[str] = None, storage: MemStorage = Depends(get_storage)):
  if not q or not q.strip():
    return _message(400, "Search query is required")
  city, state = parse_location(q)
  return storage.get_events(EventFilters(city=city, state=state or None))


if __name__ == "__main__":
  import uvicorn

  host = os.getenv("HOST", "0.0.0.0")
  port = int(os.getenv("PORT", "8000"))
  uvicorn.run("nightspark_service.main:app", host=host, port=port, reload=True)
