import logging
from typing import Dict, Optional, Tuple

import httpx

from nightspark_service.models import ResolvedLocation

logger = logging.getLogger("nightspark_service")

GEOCODE_URL = "https://maps.googleapis.com/maps/api/geocode/json"

_GEOCODE_CACHE: Dict[str, Tuple[float, float]] = {}

# Used when no geocoding key is configured or the geocoder finds nothing.
CITY_COORDINATES: Dict[str, Tuple[float, float]] = {
  "los angeles": (34.0522, -118.2437),
  "new york": (40.7128, -74.0060),
  "chicago": (41.8781, -87.6298),
  "houston": (29.7604, -95.3698),
  "phoenix": (33.4484, -112.0740),
  "philadelphia": (39.9526, -75.1652),
  "san antonio": (29.4241, -98.4936),
  "san diego": (32.7157, -117.1611),
  "dallas": (32.7767, -96.7970),
  "san jose": (37.3382, -121.8863),
  "austin": (30.2672, -97.7431),
  "jacksonville": (30.3322, -81.6557),
  "fort worth": (32.7555, -97.3308),
  "columbus": (39.9612, -82.9988),
  "charlotte": (35.2271, -80.8431),
  "san francisco": (37.7749, -122.4194),
  "indianapolis": (39.7684, -86.1581),
  "seattle": (47.6062, -122.3321),
  "denver": (39.7392, -104.9903),
  "washington": (38.9072, -77.0369),
  "boston": (42.3601, -71.0589),
  "el paso": (31.7619, -106.4850),
  "detroit": (42.3314, -83.0458),
  "nashville": (36.1627, -86.7816),
  "portland": (45.5152, -122.6784),
  "memphis": (35.1495, -90.0490),
  "oklahoma city": (35.4676, -97.5164),
  "las vegas": (36.1699, -115.1398),
  "louisville": (38.2527, -85.7585),
  "baltimore": (39.2904, -76.6122),
  "milwaukee": (43.0389, -87.9065),
  "albuquerque": (35.0844, -106.6504),
  "tucson": (32.2226, -110.9747),
  "fresno": (36.7378, -119.7871),
  "sacramento": (38.5816, -121.4944),
  "kansas city": (39.0997, -94.5786),
  "atlanta": (33.7490, -84.3880),
  "long beach": (33.7701, -118.1937),
  "colorado springs": (38.8339, -104.8214),
  "raleigh": (35.7796, -78.6382),
  "miami": (25.7617, -80.1918),
  "virginia beach": (36.8529, -75.9780),
  "omaha": (41.2565, -95.9345),
  "oakland": (37.8044, -122.2711),
  "minneapolis": (44.9778, -93.2650),
  "tulsa": (36.1540, -95.9928),
  "tampa": (27.9506, -82.4572),
  "new orleans": (29.9511, -90.0715),
  "cleveland": (41.4993, -81.6944),
  "anaheim": (33.8366, -117.9143),
  "honolulu": (21.3099, -157.8581),
  "st. louis": (38.6270, -90.1994),
  "cincinnati": (39.1031, -84.5120),
  "pittsburgh": (40.4406, -79.9959),
  "anchorage": (61.2181, -149.9003),
  "orlando": (28.5383, -81.3792),
}


def parse_location(location_text: str) -> Tuple[str, str]:
  """Split "City, ST" into its city and state parts; state may be empty."""
  parts = [part.strip() for part in (location_text or "").split(",")]
  city = parts[0] if parts else ""
  state = parts[1] if len(parts) > 1 else ""
  return city, state


def make_location(location_text: str, lat: Optional[float] = None, lng: Optional[float] = None) -> ResolvedLocation:
  city, state = parse_location(location_text)
  return ResolvedLocation(text=location_text or "", city=city, state=state, lat=lat, lng=lng)


async def _google_geocode(
  location_text: str,
  api_key: str,
  transport: Optional[httpx.AsyncBaseTransport] = None,
) -> Optional[Tuple[float, float]]:
  params = {"address": location_text, "key": api_key}
  try:
    async with httpx.AsyncClient(timeout=8.0, transport=transport) as client:
      resp = await client.get(GEOCODE_URL, params=params)
      if resp.status_code != 200:
        logger.warning("Geocoding failed (status=%s, location=%s)", resp.status_code, location_text)
        return None
      data = resp.json()
  except (httpx.HTTPError, ValueError) as exc:
    logger.warning("Geocoding error for %s: %s", location_text, exc)
    return None

  if data.get("status") != "OK" or not data.get("results"):
    logger.info("Geocoder returned %s for %s", data.get("status"), location_text)
    return None
  loc = (data["results"][0].get("geometry") or {}).get("location") or {}
  lat = loc.get("lat")
  lng = loc.get("lng")
  if lat is None or lng is None:
    return None
  return (float(lat), float(lng))


async def geocode_location(
  location_text: str,
  api_key: Optional[str] = None,
  transport: Optional[httpx.AsyncBaseTransport] = None,
) -> Optional[Tuple[float, float]]:
  """Approximate lat/lng for a free-text location, or None when it cannot be resolved."""
  if not location_text or not location_text.strip():
    return None
  cache_key = location_text.strip().lower()
  if cache_key in _GEOCODE_CACHE:
    return _GEOCODE_CACHE[cache_key]

  coords = None
  if api_key:
    coords = await _google_geocode(location_text, api_key, transport)
  if coords is None:
    city, _ = parse_location(location_text)
    coords = CITY_COORDINATES.get(city.lower())
  if coords is not None:
    _GEOCODE_CACHE[cache_key] = coords
  return coords


async def resolve_location(
  location_text: str,
  api_key: Optional[str] = None,
  transport: Optional[httpx.AsyncBaseTransport] = None,
) -> ResolvedLocation:
  coords = await geocode_location(location_text, api_key, transport)
  if coords is None:
    return make_location(location_text)
  return make_location(location_text, coords[0], coords[1])


def clear_geocode_cache() -> None:
  _GEOCODE_CACHE.clear()
