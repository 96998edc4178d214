"""Static lookup tables used by the normalizer, and the small functions that read them.

Every table maps a keyword or a type onto an outcome so the normalizer itself
stays free of inline keyword lists.
"""

import random
import re
from typing import Dict, Iterable, List, Optional, Sequence, Tuple


def unsplash(photo_id: str) -> str:
  return f"https://images.unsplash.com/photo-{photo_id}?ixlib=rb-4.0.3&auto=format&fit=crop&w=400&h=240"


def dedupe(items: Iterable[str]) -> List[str]:
  seen = set()
  out: List[str] = []
  for item in items:
    if item and item not in seen:
      seen.add(item)
      out.append(item)
  return out


def contains_token(text: str, token: str) -> bool:
  """Return True when token appears as a whole word/phrase within text."""
  text_lower = (text or "").lower()
  token_lower = token.lower()
  if not text_lower or not token_lower:
    return False
  if " " in token_lower or not token_lower.isalnum():
    return token_lower in text_lower
  return re.search(rf"\b{re.escape(token_lower)}", text_lower) is not None


def match_keywords(text: str, table: Sequence[Tuple[str, List[str]]]) -> List[str]:
  """Collect the outcomes of every keyword in ``table`` found in ``text``."""
  matched: List[str] = []
  for keyword, outcome in table:
    if contains_token(text, keyword):
      matched.extend(outcome)
  return dedupe(matched)


# ----------------------------------------------------------------------------
# Ticketmaster classifications
# ----------------------------------------------------------------------------

SEGMENT_CATEGORIES: Dict[str, List[str]] = {
  "music": ["music"],
  "sports": ["sports"],
  "arts & theatre": ["art", "entertainment"],
  "theatre": ["art", "entertainment"],
  "film": ["entertainment"],
}

DANCE_GENRES = ("electronic", "dance", "house")
LOUD_GENRES = ("rock", "metal")
NIGHTLIFE_WORDS = ("nightlife", "night club", "nightclub", "club night")

SEGMENT_IMAGES: Dict[str, str] = {
  "music": unsplash("1493225457124-a3fdf6b4b5f7"),
  "sports": unsplash("1461896836934-ffe607ba8211"),
  "arts & theatre": unsplash("1540575467063-178a50c2df87"),
  "film": unsplash("1489599136344-9d1b4ac2ebb4"),
}


def segment_categories(segment: str, genre: str) -> List[str]:
  segment_lower = (segment or "").strip().lower()
  genre_lower = (genre or "").lower()
  categories = list(SEGMENT_CATEGORIES.get(segment_lower, ["entertainment"]))
  if segment_lower == "music" and any(word in genre_lower for word in DANCE_GENRES):
    categories.append("dancing")
  return categories


def infer_age(segment: str, genre: str) -> str:
  """Age requirement for sources without explicit age flags."""
  segment_lower = (segment or "").lower()
  genre_lower = (genre or "").lower()
  if any(word in genre_lower for word in DANCE_GENRES):
    return "21"
  if "music" in segment_lower and any(word in genre_lower for word in LOUD_GENRES):
    return "18"
  if any(word in f"{segment_lower} {genre_lower}" for word in NIGHTLIFE_WORDS):
    return "21"
  return "all"


def segment_image(segment: str) -> str:
  return SEGMENT_IMAGES.get((segment or "").lower(), SEGMENT_IMAGES["music"])


# ----------------------------------------------------------------------------
# Eventbrite categories
# ----------------------------------------------------------------------------

EVENTBRITE_CATEGORY_KEYWORDS: List[Tuple[str, List[str]]] = [
  ("music", ["music"]),
  ("concert", ["music"]),
  ("food", ["food", "drinks"]),
  ("drink", ["drinks"]),
  ("wine", ["drinks"]),
  ("beer", ["drinks"]),
  ("nightlife", ["drinks", "dancing"]),
  ("dance", ["dancing"]),
  ("edm", ["music", "dancing"]),
  ("sport", ["sports"]),
  ("fitness", ["sports"]),
  ("performing", ["art", "entertainment"]),
  ("visual art", ["art"]),
  ("arts", ["art"]),
  ("theatre", ["art", "entertainment"]),
  ("film", ["entertainment"]),
  ("comedy", ["entertainment"]),
]


def eventbrite_categories(names: Sequence[Optional[str]]) -> List[str]:
  text = " ".join(name for name in names if name)
  return match_keywords(text, EVENTBRITE_CATEGORY_KEYWORDS) or ["entertainment"]


# ----------------------------------------------------------------------------
# Google Places venue types
# ----------------------------------------------------------------------------

FAST_FOOD_BRANDS = [
  "mcdonald",
  "burger king",
  "wendy's",
  "taco bell",
  "kfc",
  "subway",
  "chick-fil-a",
  "popeyes",
  "jack in the box",
  "in-n-out",
  "five guys",
  "sonic drive",
  "arby's",
  "carl's jr",
  "del taco",
  "domino's",
  "pizza hut",
  "little caesars",
  "chipotle",
  "panda express",
  "whataburger",
  "white castle",
  "dairy queen",
  "shake shack",
  "wingstop",
  "jollibee",
]

# First matching rule wins, so nightlife outranks restaurant for bar-restaurants.
PLACE_TYPE_RULES: List[Tuple[frozenset, str]] = [
  (frozenset({"night_club", "bar"}), "nightlife"),
  (frozenset({"restaurant", "meal_takeaway", "fast_food_restaurant"}), "dining"),
  (frozenset({"museum", "art_gallery"}), "museum"),
  (frozenset({"movie_theater"}), "movie_theater"),
  (frozenset({"performing_arts_theater"}), "theater"),
  (frozenset({"bowling_alley", "amusement_park"}), "amusement"),
  (frozenset({"stadium"}), "stadium"),
]

PLACE_PROFILES: Dict[str, dict] = {
  "nightlife": {"categories": ["drinks", "music", "dancing"], "listing": True, "age": "21"},
  "dining": {"categories": ["restaurant", "drinks"], "listing": True, "age": "all"},
  "museum": {"categories": ["art"], "title": "Evening Exhibition at {venue}", "age": "all"},
  "movie_theater": {"categories": ["entertainment"], "title": "Movie Night at {venue}", "age": "all"},
  "theater": {"categories": ["entertainment", "art"], "title": "Live Performance at {venue}", "age": "all"},
  "amusement": {"categories": ["entertainment"], "title": "Night Out at {venue}", "age": "all"},
  "stadium": {"categories": ["sports"], "title": "Game Night at {venue}", "age": "all"},
  "other": {"categories": ["entertainment"], "title": "Event at {venue}", "age": "all"},
}

PLACE_PRICE_LEVELS = {
  "PRICE_LEVEL_FREE": 0,
  "PRICE_LEVEL_INEXPENSIVE": 1,
  "PRICE_LEVEL_MODERATE": 2,
  "PRICE_LEVEL_EXPENSIVE": 3,
  "PRICE_LEVEL_VERY_EXPENSIVE": 4,
}

# Cents, inclusive.
PRICE_LEVEL_RANGES = {
  1: (500, 2500),
  2: (1500, 4500),
  3: (2500, 6500),
  4: (4000, 10000),
}
PROFILE_PRICE_RANGES = {
  "museum": (1000, 3000),
  "movie_theater": (1200, 2700),
  "theater": (2500, 9000),
  "amusement": (1000, 4000),
  "stadium": (2000, 8000),
  "other": (0, 2000),
}
UNPRICED_NIGHTLIFE_RANGE = (500, 2500)
NIGHTLIFE_FREE_CHANCE = 0.3

PROFILE_IMAGES = {
  "nightlife": unsplash("1571019613454-1cb2f99b2d8b"),
  "dining": unsplash("1517248135467-4c7edcad34c4"),
  "museum": unsplash("1541888946425-d81bb19240f5"),
  "movie_theater": unsplash("1489599136344-9d1b4ac2ebb4"),
  "theater": unsplash("1540575467063-178a50c2df87"),
  "stadium": unsplash("1461896836934-ffe607ba8211"),
}


def resolve_place_profile(types: Iterable[str]) -> str:
  type_set = set(types or [])
  for rule_types, profile in PLACE_TYPE_RULES:
    if type_set & rule_types:
      return profile
  return "other"


def is_fast_food(venue_name: str) -> bool:
  name = (venue_name or "").lower()
  return any(brand in name for brand in FAST_FOOD_BRANDS)


def place_categories(profile: str, venue_name: str) -> List[str]:
  if profile == "dining" and is_fast_food(venue_name):
    return ["fastfood", "drinks"]
  return list(PLACE_PROFILES[profile]["categories"])


def place_price_level(value) -> Optional[int]:
  """Places API (New) reports enum strings; the legacy API reported 0-4."""
  if isinstance(value, int):
    return value
  if isinstance(value, str):
    return PLACE_PRICE_LEVELS.get(value)
  return None


def infer_venue_price(profile: str, price_level: Optional[int], rng: random.Random) -> int:
  """Cover price in cents for a venue without ticket data."""
  if profile == "dining":
    return 0
  if profile == "nightlife":
    if price_level in PRICE_LEVEL_RANGES:
      return rng.randint(*PRICE_LEVEL_RANGES[price_level])
    if rng.random() < NIGHTLIFE_FREE_CHANCE:
      return 0
    return rng.randint(*UNPRICED_NIGHTLIFE_RANGE)
  return rng.randint(*PROFILE_PRICE_RANGES.get(profile, PROFILE_PRICE_RANGES["other"]))


def evening_start_time(rng: random.Random) -> str:
  """Pseudo-random start between 18:00 and 23:59."""
  return f"{18 + rng.randrange(6):02d}:{rng.randrange(60):02d}"


# ----------------------------------------------------------------------------
# Generated venues
# ----------------------------------------------------------------------------

CITY_VENUES: Dict[str, List[str]] = {
  "orlando": [
    "Amway Center", "House of Blues Orlando", "The Social", "Venue 578", "Will's Pub",
    "Howl at the Moon", "CityWalk's Rising Star", "Hard Rock Live", "Dr. Phillips Center",
    "Orlando Museum of Art", "The Abbey", "Tin Roof", "Cowboys Orlando", "Icebar Orlando",
  ],
  "new york": [
    "Madison Square Garden", "Lincoln Center", "Brooklyn Bowl", "Webster Hall", "Terminal 5",
    "Irving Plaza", "Music Hall of Williamsburg", "Le Poisson Rouge", "The Bowery Ballroom",
    "Blue Note", "Jazz Standard", "Smalls Jazz Club", "The Apollo Theater", "Barclays Center",
  ],
  "los angeles": [
    "Hollywood Bowl", "The Greek Theatre", "The Troubadour", "Whisky a Go Go", "The Viper Room",
    "El Rey Theatre", "The Fonda Theatre", "The Wiltern", "Microsoft Theater", "Staples Center",
    "The Echo", "Echoplex", "The Mint", "Largo at the Coronet", "The Comedy Store",
  ],
  "miami": [
    "American Airlines Arena", "Adrienne Arsht Center", "Fillmore Miami Beach", "The Fontainebleau",
    "LIV Miami", "Story Nightclub", "E11EVEN MIAMI", "Club Space", "Gramps", "Ball & Chain",
    "The Anderson", "Wynwood Walls", "Revolution Live", "Hard Rock Live Hollywood",
  ],
  "chicago": [
    "United Center", "Chicago Theatre", "Metro", "Empty Bottle", "Green Mill Cocktail Lounge",
    "House of Blues Chicago", "Riviera Theatre", "Aragon Ballroom", "Lincoln Hall",
    "Schubas Tavern", "Kingston Mines", "Second City", "Steppenwolf Theatre", "Goodman Theatre",
  ],
}

GENERIC_VENUE_TEMPLATES = [
  "{city} Arena",
  "{city} Theater",
  "{city} Music Hall",
  "{city} Comedy Club",
  "The {city} Venue",
  "{city} Cultural Center",
  "{city} Auditorium",
  "{city} Playhouse",
]

GENERATED_EVENT_TYPES: Dict[str, List[str]] = {
  "concert": ["Live Music Performance", "Album Release Party", "Acoustic Set", "DJ Set", "Music Festival"],
  "comedy": ["Stand-up Comedy Show", "Comedy Open Mic", "Improv Night", "Comedy Special Taping"],
  "theater": ["Broadway Show", "Play Performance", "Musical Theater", "Dance Performance"],
  "nightlife": ["Night Club Event", "Rooftop Party", "Happy Hour", "Cocktail Class", "Wine Tasting"],
  "food": ["Restaurant Week", "Chef's Table", "Food Festival", "Cooking Class", "Pop-up Dining"],
  "art": ["Art Gallery Opening", "Museum Exhibition", "Art Workshop", "Artist Talk", "Gallery Walk"],
}

GENERATED_PERFORMERS = [
  "The Midnight", "Local Artist Showcase", "Rising Stars", "Featured Artist",
  "Special Guest", "Headline Act", "Live Performance", "Evening Show",
]

GENERATED_PRICE_RANGES = {
  "concert": (2500, 12000),
  "comedy": (1500, 5000),
  "theater": (3000, 15000),
  "nightlife": (0, 3000),
  "food": (2000, 8000),
  "art": (0, 2500),
}
PREMIUM_VENUES = ("Madison Square Garden", "Hollywood Bowl", "Lincoln Center")
PREMIUM_MULTIPLIER = 1.5

GENERATED_CATEGORIES: Dict[str, List[str]] = {
  "concert": ["music"],
  "comedy": ["entertainment"],
  "theater": ["entertainment"],
  "nightlife": ["drinks", "dancing", "music"],
  "food": ["food", "drinks"],
  "art": ["entertainment"],
}

GENERATED_AGES = {"nightlife": "21", "comedy": "18"}

GENERATED_DESCRIPTIONS = {
  "concert": "Experience an unforgettable live music performance at {venue}. Join us for an evening of incredible sounds and energy in the heart of {location}.",
  "comedy": "Get ready to laugh until your sides hurt at {venue}'s comedy night. Featuring talented comedians and special guests.",
  "theater": "Immerse yourself in a captivating theatrical experience at {venue}. A must-see performance that will leave you spellbound.",
  "nightlife": "Dance the night away at {venue}. Premium drinks, great music, and an atmosphere you won't forget.",
  "food": "Indulge in a culinary journey at {venue}. Experience exceptional flavors and innovative cuisine.",
  "art": "Discover stunning artistic expressions at {venue}. An inspiring collection that celebrates creativity and culture.",
}

LARGE_VENUE_WORDS = ("Arena", "Stadium", "Center", "Garden")
STREET_NAMES = ["Main St", "Broadway", "Park Ave", "Center St", "First Ave", "Second St"]

# Checked in order; the first keyword found in the venue name picks the photo.
VENUE_IMAGE_KEYWORDS: List[Tuple[str, str]] = [
  ("center", "1493225457124-a3eb161ffa5f"),
  ("arena", "1493225457124-a3eb161ffa5f"),
  ("theater", "1540575467063-178a50c2df87"),
  ("theatre", "1540575467063-178a50c2df87"),
  ("club", "1571019613454-1cb2f99b2d8b"),
  ("pub", "1571019613454-1cb2f99b2d8b"),
  ("bar", "1571019613454-1cb2f99b2d8b"),
  ("restaurant", "1517248135467-4c7edcad34c4"),
  ("museum", "1541888946425-d81bb19240f5"),
  ("gallery", "1541888946425-d81bb19240f5"),
  ("hall", "1566417713940-fe7c737a9ef2"),
  ("house", "1566417713940-fe7c737a9ef2"),
  ("blues", "1566417713940-fe7c737a9ef2"),
  ("rock", "1566417713940-fe7c737a9ef2"),
  ("social", "1571019613454-1cb2f99b2d8b"),
  ("abbey", "1517248135467-4c7edcad34c4"),
  ("roof", "1571019613454-1cb2f99b2d8b"),
  ("ice", "1571019613454-1cb2f99b2d8b"),
]


def city_venues(city: str) -> List[str]:
  """Known venues for recognised cities, templated names for anything else."""
  key = (city or "").strip().lower()
  if key in CITY_VENUES:
    return list(CITY_VENUES[key])
  label = (city or "").strip() or "Downtown"
  return [template.format(city=label) for template in GENERIC_VENUE_TEMPLATES]


def generated_price(event_type: str, venue: str, rng: random.Random) -> int:
  low, high = GENERATED_PRICE_RANGES.get(event_type, (1000, 5000))
  multiplier = PREMIUM_MULTIPLIER if any(name in venue for name in PREMIUM_VENUES) else 1
  return int((rng.random() * (high - low) + low) * multiplier)


def venue_capacity(venue: str, rng: random.Random) -> int:
  if any(word in venue for word in LARGE_VENUE_WORDS):
    return rng.randint(5000, 20000)
  return rng.randint(100, 600)


def venue_image(venue: str) -> str:
  venue_lower = venue.lower()
  for keyword, photo_id in VENUE_IMAGE_KEYWORDS:
    if keyword in venue_lower:
      return unsplash(photo_id)
  return unsplash("1501281668745-f7f57925c3b4")
